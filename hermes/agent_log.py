"""Process-wide bridge that forwards agent log entries to a listener."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

LogSender = Callable[["LogEntry"], None]

_lock = threading.Lock()
_sender: Optional[LogSender] = None


@dataclass
class LogEntry:
    """A single log record passed over the bridge."""

    timestamp: str
    level: str
    target: str
    message: str
    model: Optional[str] = None
    session_id: Optional[str] = None

    @classmethod
    def now(
        cls,
        level: str,
        target: str,
        message: str,
        model: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> "LogEntry":
        """Build an entry stamped with the current time as ``HH:MM:SS``."""
        secs = max(int(time.time()), 0)
        hours, rest = divmod(secs, 3600)
        minutes, seconds = divmod(rest, 60)
        return cls(
            timestamp=f"{hours:02}:{minutes:02}:{seconds:02}",
            level=level,
            target=target,
            message=message,
            model=model,
            session_id=session_id,
        )


def init_log_sender(sender: LogSender) -> None:
    """Install the callable that receives log entries."""
    global _sender
    with _lock:
        _sender = sender


def drop_log_sender() -> None:
    """Remove the installed sender."""
    global _sender
    with _lock:
        _sender = None


def send_log(entry: LogEntry) -> None:
    """Forward an entry to the installed sender; does nothing if none is set."""
    with _lock:
        sender = _sender
    if sender is not None:
        sender(entry)