"""Well-known filesystem locations."""

from __future__ import annotations

from pathlib import Path


def hermes_home() -> Path:
    """Return the agent's home directory, ``~/.hermes``."""
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / ".hermes"


def config_path() -> Path:
    """Return the path of the main configuration file."""
    return hermes_home() / "config.yaml"


def data_path() -> Path:
    """Return the data directory."""
    return hermes_home() / "data"


def sessions_path() -> Path:
    """Return the directory holding session data."""
    return data_path() / "sessions"