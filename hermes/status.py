"""Status, usage analytics and session search reports for the gateway API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from hermes.session_db import SessionInfo, SessionSearchResult

VERSION = "0.5.0"
RELEASE_DATE = "2025-04-14"
CONFIG_VERSION = 5
SEARCH_LIMIT = 50


class _SessionStore(Protocol):
    def list_sessions(self) -> list[SessionInfo]: ...

    def search_sessions(self, query: str, limit: int) -> list[SessionSearchResult]: ...


@dataclass
class PlatformStatus:
    connected: bool
    state: str


@dataclass
class StatusResponse:
    version: str
    hermes_home: str
    config_path: str
    env_path: str
    active_sessions: int
    gateway_running: bool
    gateway_pid: Optional[int]
    gateway_state: Optional[str]
    gateway_platforms: dict[str, PlatformStatus]
    config_version: int
    latest_config_version: int
    release_date: str
    gateway_exit_reason: Optional[str] = None
    gateway_updated_at: Optional[str] = None


@dataclass
class DailyUsage:
    day: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    reasoning_tokens: int = 0
    estimated_cost: float = 0.0
    actual_cost: float = 0.0
    sessions: int = 0


@dataclass
class ModelUsage:
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    estimated_cost: float = 0.0
    sessions: int = 0


@dataclass
class Totals:
    total_input: int
    total_output: int
    total_cache_read: int
    total_reasoning: int
    total_estimated_cost: float
    total_actual_cost: float
    total_sessions: int


@dataclass
class AnalyticsResponse:
    daily: list[DailyUsage]
    by_model: list[ModelUsage]
    totals: Totals


@dataclass
class SearchResult:
    session_id: str
    created_at: str
    updated_at: str
    model: Optional[str]
    snippet: str


@dataclass
class SearchResponse:
    results: list[SearchResult] = field(default_factory=list)
    total: int = 0


def hermes_home() -> Path:
    """Return ``$HERMES_HOME`` or ``~/.hermes``."""
    env = os.environ.get("HERMES_HOME")
    if env is not None:
        return Path(env)
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / ".hermes"


def config_path() -> Path:
    """Return ``$HERMES_CONFIG`` or the config file in the home directory."""
    env = os.environ.get("HERMES_CONFIG")
    if env is not None:
        return Path(env)
    return hermes_home() / "config.yaml"


def env_path() -> Path:
    return hermes_home() / ".env"


def get_status(db: _SessionStore, uptime_secs: float) -> StatusResponse:
    """Report the gateway's state; ``uptime_secs`` is how long it has run."""
    sessions = db.list_sessions()
    return StatusResponse(
        version=VERSION,
        hermes_home=str(hermes_home()),
        config_path=str(config_path()),
        env_path=str(env_path()),
        active_sessions=len(sessions),
        gateway_running=True,
        gateway_pid=os.getpid(),
        gateway_state="starting" if uptime_secs < 60 else "running",
        gateway_platforms={},
        config_version=CONFIG_VERSION,
        latest_config_version=CONFIG_VERSION,
        release_date=RELEASE_DATE,
    )


def get_analytics(db: _SessionStore, days: Optional[int] = None) -> AnalyticsResponse:
    """Aggregate session counts per day and per model.

    ``days`` is accepted for the API's sake (default 30) but does not filter.
    """
    _ = days if days is not None else 30
    daily_map: dict[str, DailyUsage] = {}
    model_map: dict[str, ModelUsage] = {}
    for session in db.list_sessions():
        day_key = session.created_at[:10]
        model = session.model or ""
        daily_map.setdefault(day_key, DailyUsage(day=day_key)).sessions += 1
        model_map.setdefault(model, ModelUsage(model=model)).sessions += 1

    daily = sorted(daily_map.values(), key=lambda d: d.day, reverse=True)
    by_model = sorted(model_map.values(), key=lambda m: m.sessions, reverse=True)
    totals = Totals(
        total_input=sum(d.input_tokens for d in daily),
        total_output=sum(d.output_tokens for d in daily),
        total_cache_read=sum(d.cache_read_tokens for d in daily),
        total_reasoning=sum(d.reasoning_tokens for d in daily),
        total_estimated_cost=sum(d.estimated_cost for d in daily),
        total_actual_cost=sum(d.actual_cost for d in daily),
        total_sessions=sum(d.sessions for d in daily),
    )
    return AnalyticsResponse(daily=daily, by_model=by_model, totals=totals)


def search_sessions(db: _SessionStore, query: Optional[str]) -> SearchResponse:
    """Search session content; a blank query returns no results."""
    q = query or ""
    if not q.strip():
        return SearchResponse()
    hits = db.search_sessions(q, SEARCH_LIMIT)
    results = [
        SearchResult(
            session_id=h.session_id,
            created_at=h.created_at,
            updated_at=h.updated_at,
            model=h.model,
            snippet=h.snippet,
        )
        for h in hits
    ]
    return SearchResponse(results=results, total=len(results))