"""In-memory log buffer with JSON-lines persistence and rotation."""

from __future__ import annotations

import json
import sys
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from hermes.paths import hermes_home

MAX_FILE_SIZE = 10 * 1024 * 1024
MAX_ROTATED = 5

_OPTIONAL_FIELDS = ("model", "session_id", "metadata")


@dataclass
class LogEntry:
    """A structured log record."""

    timestamp: str
    level: str
    target: str
    message: str
    model: Optional[str] = None
    session_id: Optional[str] = None
    metadata: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return a dict, leaving out optional fields that are unset."""
        data: dict[str, Any] = {
            "timestamp": self.timestamp,
            "level": self.level,
            "target": self.target,
            "message": self.message,
        }
        for name in _OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        return cls(
            timestamp=data["timestamp"],
            level=data["level"],
            target=data["target"],
            message=data["message"],
            model=data.get("model"),
            session_id=data.get("session_id"),
            metadata=data.get("metadata"),
        )


def _default_log_path() -> Path:
    return hermes_home() / "logs" / "agent.jsonl"


def _rotated(path: Path, index: int) -> Path:
    return path.with_name(f"{path.stem}.jsonl.{index}")


class LogBuffer:
    """Bounded buffer of recent log entries; the oldest are dropped first."""

    def __init__(self, max_entries: int, file_path: Optional[Path] = None) -> None:
        self.max_entries = max_entries
        self.file_path = Path(file_path) if file_path is not None else _default_log_path()
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def entries(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    def push(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def query(
        self,
        level: Optional[str] = None,
        target: Optional[str] = None,
        limit: Optional[int] = None,
        since: Optional[str] = None,
    ) -> list[LogEntry]:
        """Return matching entries, oldest first; ``limit`` keeps the newest."""
        with self._lock:
            results = [
                e
                for e in self._entries
                if (level is None or e.level == level)
                and (target is None or e.target == target)
                and (since is None or e.timestamp >= since)
            ]
        if limit is not None:
            results = results[max(len(results) - limit, 0):]
        return results

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def write_to_file(self) -> None:
        """Append every buffered entry to the log file as JSON lines."""
        lines = [entry.to_json() + "\n" for entry in self.entries]
        with self.file_path.open("a", encoding="utf-8") as fh:
            fh.writelines(lines)

    def rotate_if_needed(self) -> None:
        """Shift the log file to numbered backups once it reaches the size limit."""
        path = self.file_path
        try:
            size = path.stat().st_size
        except OSError:
            return
        if size < MAX_FILE_SIZE:
            return
        for index in range(MAX_ROTATED - 1, 0, -1):
            old = _rotated(path, index)
            if old.exists():
                try:
                    old.replace(_rotated(path, index + 1))
                except OSError:
                    pass
        try:
            path.replace(_rotated(path, 1))
        except OSError:
            pass


def log_agent(
    buffer: LogBuffer,
    level: str,
    target: str,
    message: str,
    model: Optional[str] = None,
    session_id: Optional[str] = None,
) -> LogEntry:
    """Record an entry in ``buffer`` and echo it to stderr."""
    entry = LogEntry(
        timestamp=datetime.now(timezone.utc).isoformat(),
        level=level,
        target=target,
        message=message,
        model=model,
        session_id=session_id,
    )
    buffer.push(entry)
    print(f"[{level}] [{target}] {message}", file=sys.stderr)
    return entry