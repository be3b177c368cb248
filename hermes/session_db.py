"""SQLite-backed storage of chat sessions, messages and full-text search."""

from __future__ import annotations

import re
import sqlite3
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

_SCHEMA = """
PRAGMA journal_mode = WAL;
CREATE TABLE IF NOT EXISTS sessions (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    model TEXT,
    messages TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id TEXT NOT NULL,
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE VIRTUAL TABLE IF NOT EXISTS sessions_fts USING fts5(
    session_id UNINDEXED,
    content,
    tokenize='porter unicode61'
);
"""

_SEARCH_SQL = (
    "SELECT s.id, s.created_at, s.updated_at, s.model, "
    "snippet(sessions_fts, 1, '<mark>', '</mark>', '...', 64) AS snippet "
    "FROM sessions_fts "
    "JOIN sessions s ON s.id = sessions_fts.session_id "
    "WHERE sessions_fts MATCH ? "
    "ORDER BY rank "
    "LIMIT ?"
)

_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def _rfc3339_seconds(text: str) -> Optional[int]:
    """Return Unix seconds for an RFC 3339 timestamp, or None if it is not one."""
    match = _RFC3339.match(text)
    if match is None:
        return None
    date, clock, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    micro = f".{(fraction + '000000')[:6]}" if fraction else ""
    try:
        parsed = datetime.fromisoformat(f"{date}T{clock}{micro}{offset}")
    except ValueError:
        return None
    return int(parsed.timestamp())


@dataclass
class Session:
    """A stored session."""

    id: str
    created_at: str
    updated_at: str
    model: Optional[str] = None


@dataclass
class SessionInfo:
    """Summary of a session as listed."""

    id: str
    created_at: str
    updated_at: str
    model: Optional[str] = None


@dataclass
class SessionMessage:
    """One message of a session."""

    role: str
    content: str
    timestamp: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp
        return data


@dataclass
class SessionSearchResult:
    """A full-text search hit."""

    session_id: str
    created_at: str
    updated_at: str
    model: Optional[str]
    snippet: str


class SessionDb:
    """Thread-safe handle on the session database."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
        self._lock = threading.Lock()
        try:
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error:
            self._conn.close()
            raise

    def __enter__(self) -> "SessionDb":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._conn.close()

    def save_message(self, session_id: str, role: str, content: str) -> None:
        """Append a message to a session and index it for search."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO messages (session_id, role, content, created_at) "
                "VALUES (?, ?, ?, datetime('now'))",
                (session_id, role, content),
            )
            self._conn.execute(
                "INSERT OR REPLACE INTO sessions_fts (rowid, session_id, content) "
                "VALUES ((SELECT MAX(rowid) FROM messages WHERE session_id = ?1), ?1, ?2)",
                (session_id, content),
            )

    def get_session(self, session_id: str) -> Optional[Session]:
        with self._lock:
            row = self._conn.execute(
                "SELECT id, created_at, updated_at, model FROM sessions WHERE id = ?",
                (session_id,),
            ).fetchone()
        return Session(*row) if row is not None else None

    def list_sessions(self) -> list[SessionInfo]:
        """Return all sessions, most recently updated first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, created_at, updated_at, model FROM sessions "
                "ORDER BY updated_at DESC"
            ).fetchall()
        return [SessionInfo(*row) for row in rows]

    def create_session(self, model: Optional[str] = None) -> SessionInfo:
        """Create an empty session with a fresh id."""
        session_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc).isoformat()
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO sessions (id, created_at, updated_at, model, messages) "
                "VALUES (?, ?, ?, ?, ?)",
                (session_id, now, now, model, "[]"),
            )
        return SessionInfo(id=session_id, created_at=now, updated_at=now, model=model)

    def count_messages(self, session_id: str) -> int:
        """Return the number of messages in a session; 0 if it cannot be counted."""
        with self._lock:
            try:
                row = self._conn.execute(
                    "SELECT COUNT(*) FROM messages WHERE session_id = ?",
                    (session_id,),
                ).fetchone()
            except sqlite3.Error:
                return 0
        return int(row[0]) if row else 0

    def get_messages(self, session_id: str) -> list[SessionMessage]:
        """Return a session's messages in the order they were saved."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT role, content, created_at FROM messages "
                "WHERE session_id = ? ORDER BY id ASC",
                (session_id,),
            ).fetchall()
        return [
            SessionMessage(role=role, content=content, timestamp=_rfc3339_seconds(created))
            for role, content, created in rows
        ]

    def delete_session(self, session_id: str) -> None:
        """Remove a session, its messages and its search index entries."""
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM messages WHERE session_id = ?", (session_id,))
            self._conn.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            self._conn.execute("DELETE FROM sessions_fts WHERE session_id = ?", (session_id,))

    def search_sessions(self, query: str, limit: int) -> list[SessionSearchResult]:
        """Run an FTS5 query over message content; raises sqlite3.Error on bad syntax."""
        with self._lock:
            rows = self._conn.execute(_SEARCH_SQL, (query, int(limit))).fetchall()
        return [SessionSearchResult(*row) for row in rows]