import os
from pathlib import Path

import pytest

from hermes import status
from hermes.session_db import SessionDb, SessionInfo


class _FakeDb:
    def __init__(self, sessions):
        self._sessions = sessions
        self.queries = []

    def list_sessions(self):
        return list(self._sessions)

    def search_sessions(self, query, limit):
        self.queries.append((query, limit))
        return []


def _info(sid, created_at, model):
    return SessionInfo(id=sid, created_at=created_at, updated_at=created_at, model=model)


@pytest.fixture
def db(tmp_path):
    handle = SessionDb(tmp_path / "status.db")
    yield handle
    handle.close()


def test_paths_follow_env(monkeypatch, tmp_path):
    monkeypatch.setenv("HERMES_HOME", str(tmp_path))
    monkeypatch.delenv("HERMES_CONFIG", raising=False)
    assert status.hermes_home() == tmp_path
    assert status.config_path() == tmp_path / "config.yaml"
    assert status.env_path() == tmp_path / ".env"
    monkeypatch.setenv("HERMES_CONFIG", str(tmp_path / "other.yaml"))
    assert status.config_path() == tmp_path / "other.yaml"


def test_hermes_home_default(monkeypatch):
    monkeypatch.delenv("HERMES_HOME", raising=False)
    assert status.hermes_home() == Path.home() / ".hermes"


def test_get_status_counts_sessions(db):
    db.create_session(None)
    db.create_session("m")
    report = status.get_status(db, 0)
    assert report.active_sessions == len(db.list_sessions())
    assert report.version == "0.5.0"
    assert report.release_date == "2025-04-14"
    assert report.gateway_pid == os.getpid()
    assert report.gateway_running is True
    assert report.gateway_platforms == {}
    assert report.config_version == report.latest_config_version


def test_get_status_state_by_uptime(db):
    assert status.get_status(db, 59).gateway_state == "starting"
    assert status.get_status(db, 60).gateway_state == "running"


def test_get_analytics_groups_by_day_and_model():
    sessions = [
        _info("a", "2025-01-01T10:00:00+00:00", "alpha"),
        _info("b", "2025-01-03T10:00:00+00:00", "beta"),
        _info("c", "2025-01-03T11:00:00+00:00", "alpha"),
        _info("d", "2025-01-02T11:00:00+00:00", None),
    ]
    report = status.get_analytics(_FakeDb(sessions), 7)
    days = [d.day for d in report.daily]
    assert days == sorted(days, reverse=True)
    assert set(days) == {s.created_at[:10] for s in sessions}
    counts = [m.sessions for m in report.by_model]
    assert counts == sorted(counts, reverse=True)
    assert report.by_model[0].model == "alpha"
    assert {m.model for m in report.by_model} == {"alpha", "beta", ""}
    assert report.totals.total_sessions == len(sessions)
    assert report.totals.total_input == 0


def test_get_analytics_empty():
    report = status.get_analytics(_FakeDb([]))
    assert report.daily == []
    assert report.by_model == []
    assert report.totals.total_sessions == 0


def test_search_sessions_blank_query_skips_db():
    fake = _FakeDb([])
    for query in (None, "", "   "):
        assert status.search_sessions(fake, query).total == 0
    assert fake.queries == []


def test_search_sessions_uses_limit():
    fake = _FakeDb([])
    status.search_sessions(fake, "term")
    assert fake.queries == [("term", status.SEARCH_LIMIT)]


def test_search_sessions_real_db(db):
    session = db.create_session("m")
    db.save_message(session.id, "user", "zebra crossing")
    report = status.search_sessions(db, "zebra")
    assert report.total == len(report.results)
    assert report.results[0].session_id == session.id
    assert report.results[0].model == "m"