"""Grouping of agent tools into named toolsets for the gateway API."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from hermes.paths import hermes_home


@dataclass(frozen=True)
class ToolsetDef:
    """Static definition of a toolset."""

    name: str
    label: str
    description: str
    tools: tuple[str, ...]
    required_env: str = ""


@dataclass
class ToolsetInfo:
    """A toolset as reported to clients."""

    name: str
    label: str
    description: str
    enabled: bool
    configured: bool
    tools: list[str] = field(default_factory=list)


TOOLSETS: tuple[ToolsetDef, ...] = (
    ToolsetDef(
        "core",
        "Core",
        "Terminal execution, file I/O, directory listing, patching, and search",
        ("terminal", "file_read", "file_write", "list_directory", "patch", "search_files"),
    ),
    ToolsetDef("web", "Web", "Web search and page extraction", ("web_search", "web_extract")),
    ToolsetDef(
        "browser",
        "Browser",
        "Browser automation — navigate, back, snapshot",
        ("browser_navigate", "browser_back", "browser_snapshot"),
    ),
    ToolsetDef(
        "memory",
        "Memory",
        "Persistent memory stores for agent notes and user profile",
        ("memory",),
    ),
    ToolsetDef(
        "skills",
        "Skills",
        "Create, list, view, and delete reusable skills",
        ("skill_create", "skill_list", "skill_view"),
    ),
    ToolsetDef(
        "code",
        "Code Execution",
        "Sandboxed code execution in multiple languages",
        ("execute_code",),
    ),
    ToolsetDef(
        "process",
        "Process Management",
        "Spawn, track, and manage background processes",
        ("process_spawn", "process_status", "process_list", "process_output", "process_kill"),
    ),
    ToolsetDef(
        "cron",
        "Cron / Scheduler",
        "Scheduled recurring tasks",
        ("cron_add", "cron_list", "cron_remove"),
    ),
    ToolsetDef(
        "session",
        "Session Search",
        "Full-text search across past conversation sessions",
        ("session_search",),
    ),
    ToolsetDef("vision", "Vision", "Image analysis using vision AI", ("image_analyze",)),
    ToolsetDef(
        "mcp",
        "MCP",
        "Model Context Protocol server integration",
        ("mcp_list_servers", "mcp_discover_tools", "mcp_call_tool"),
    ),
    ToolsetDef(
        "meta",
        "Meta / Utility",
        "Approval checks and task management",
        ("approval_check", "todo"),
    ),
)


def get_toolsets_state_path() -> Path:
    """Return the file that stores which toolsets are enabled."""
    return hermes_home() / "toolsets_state.json"


def load_toolsets_state(path: Optional[Path] = None) -> dict[str, bool]:
    """Read the enabled map; a missing or malformed file gives an empty map."""
    state_path = Path(path) if path is not None else get_toolsets_state_path()
    try:
        data = json.loads(state_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict) or not all(isinstance(v, bool) for v in data.values()):
        return {}
    return data


def _is_configured(definition: ToolsetDef) -> bool:
    if not definition.required_env:
        return True
    return bool(os.environ.get(definition.required_env))


def list_toolsets(
    known_tools: Iterable[str], enabled_map: Optional[dict[str, bool]] = None
) -> list[ToolsetInfo]:
    """Describe every toolset, keeping only tools in ``known_tools``.

    Known tools that belong to no toolset are gathered in a trailing "other" set.
    ``enabled_map`` defaults to the stored state; toolsets absent from it are enabled.
    """
    known = set(known_tools)
    enabled = enabled_map if enabled_map is not None else load_toolsets_state()
    result = [
        ToolsetInfo(
            name=d.name,
            label=d.label,
            description=d.description,
            enabled=enabled.get(d.name, True),
            configured=_is_configured(d),
            tools=[t for t in d.tools if t in known],
        )
        for d in TOOLSETS
    ]
    assigned = {t for d in TOOLSETS for t in d.tools}
    unassigned = sorted(known - assigned)
    if unassigned:
        result.append(
            ToolsetInfo(
                name="other",
                label="Other",
                description="Tools not assigned to a specific toolset",
                enabled=True,
                configured=True,
                tools=unassigned,
            )
        )
    return result