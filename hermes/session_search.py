"""Search front end over the session database."""

from __future__ import annotations

from hermes.session_db import SessionDb, SessionSearchResult


class SessionSearch:
    """Full-text search across stored sessions."""

    def __init__(self, db: SessionDb) -> None:
        self.db = db

    def search(self, query: str, limit: int) -> list[SessionSearchResult]:
        """Return up to ``limit`` sessions whose messages match ``query``."""
        return self.db.search_sessions(query, limit)