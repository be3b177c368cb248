"""Minimal gateway-side session handle."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SESSION_ID = "session_id"


@dataclass
class GatewayMessage:
    """A message exchanged through the gateway."""

    role: str
    content: str


class GatewaySession:
    """Session store used by the gateway; every user shares one session id."""

    def __init__(self) -> None:
        self._messages: dict[str, list[GatewayMessage]] = {}
        self._users: dict[str, str] = {}

    def create(self, user_id: str) -> str:
        """Register a session for a user and return its id."""
        self._users[user_id] = DEFAULT_SESSION_ID
        self._messages.setdefault(DEFAULT_SESSION_ID, [])
        return self._users[user_id]

    def get_messages(self, session_id: str) -> list[GatewayMessage]:
        """Return a copy of the messages recorded for a session."""
        return list(self._messages.get(session_id, ()))