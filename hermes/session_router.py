"""Maps chat sources on messaging platforms to agent session ids."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from hermes.paths import hermes_home


def get_store_path() -> Path:
    """Return the default file where routes are stored."""
    return hermes_home() / "session_routes.json"


@dataclass
class SessionSource:
    """Where a conversation comes from."""

    platform: str
    chat_id: str
    chat_type: str
    user_id: str
    thread_id: Optional[str] = None

    def key(self) -> str:
        thread = self.thread_id if self.thread_id is not None else "none"
        return (
            f"agent:main:{self.platform}:{self.chat_type}:"
            f"{self.chat_id}:{thread}:{self.user_id}"
        )

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SessionSource":
        return cls(
            platform=data["platform"],
            chat_id=data["chat_id"],
            chat_type=data["chat_type"],
            user_id=data["user_id"],
            thread_id=data.get("thread_id"),
        )


@dataclass
class _SessionMapping:
    source_key: str
    session_id: str
    source: SessionSource
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_key": self.source_key,
            "session_id": self.session_id,
            "source": asdict(self.source),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "_SessionMapping":
        return cls(
            source_key=data["source_key"],
            session_id=data["session_id"],
            source=SessionSource._from_dict(data["source"]),
            created_at=data["created_at"],
        )


def _load_mappings(path: Path) -> dict[str, _SessionMapping]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return {key: _SessionMapping.from_dict(value) for key, value in raw.items()}
    except (OSError, ValueError, KeyError, TypeError, AttributeError):
        return {}


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class SessionRouter:
    """Persistent table from source keys to session ids."""

    def __init__(self, store_path: Optional[Path] = None) -> None:
        self.store_path = Path(store_path) if store_path is not None else get_store_path()
        self._mappings = _load_mappings(self.store_path)

    def _save(self) -> None:
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(
            {key: m.to_dict() for key, m in self._mappings.items()},
            indent=2,
            ensure_ascii=False,
        )
        self.store_path.write_text(content, encoding="utf-8")

    @staticmethod
    def resolve_key(source: SessionSource) -> str:
        return source.key()

    def resolve_session(self, source: SessionSource) -> Optional[str]:
        return self.get_session(source)

    def add_mapping(self, source: SessionSource, session_id: str) -> None:
        """Bind ``source`` to ``session_id`` and persist; raises OSError on write failure."""
        key = source.key()
        self._mappings[key] = _SessionMapping(
            source_key=key,
            session_id=session_id,
            source=source,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._save()

    def get_session(self, source: SessionSource) -> Optional[str]:
        mapping = self._mappings.get(source.key())
        return mapping.session_id if mapping is not None else None

    def list_sessions(self, platform: str) -> str:
        """Return a JSON summary of the mappings for one platform."""
        sessions = [m.to_dict() for m in self._mappings.values() if m.source.platform == platform]
        return _dumps({"count": len(sessions), "platform": platform, "sessions": sessions})

    def remove_session(self, source: SessionSource) -> bool:
        """Drop the mapping for ``source``; return whether one existed."""
        if self._mappings.pop(source.key(), None) is None:
            return False
        try:
            self._save()
        except OSError:
            pass
        return True

    def list_all(self) -> str:
        """Return a JSON summary of every mapping."""
        entries = [m.to_dict() for m in self._mappings.values()]
        return _dumps({"mappings": entries, "total": len(entries)})