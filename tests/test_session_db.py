import sqlite3

import pytest

from hermes.session_db import SessionDb, SessionMessage


@pytest.fixture
def db(tmp_path):
    handle = SessionDb(tmp_path / "sessions.db")
    yield handle
    handle.close()


def test_session_db_new(tmp_path):
    path = tmp_path / "new.db"
    with SessionDb(path) as handle:
        assert handle.list_sessions() == []
    assert path.exists()


def test_create_and_get_session(db):
    created = db.create_session("gpt-4")
    fetched = db.get_session(created.id)
    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.model == "gpt-4"
    assert fetched.created_at == created.created_at


def test_list_sessions(db):
    db.create_session(None)
    db.create_session(None)
    assert len(db.list_sessions()) == 2


def test_save_and_get_messages(db):
    session = db.create_session(None)
    db.save_message(session.id, "user", "hello")
    db.save_message(session.id, "assistant", "hi there")
    messages = db.get_messages(session.id)
    assert len(messages) == 2
    assert messages[0].role == "user"
    assert messages[0].content == "hello"
    assert messages[1].role == "assistant"
    assert messages[1].content == "hi there"


def test_message_timestamp_absent_for_sqlite_datetime(db):
    session = db.create_session(None)
    db.save_message(session.id, "user", "hello")
    message = db.get_messages(session.id)[0]
    assert message.timestamp is None
    assert message.to_dict() == {"role": "user", "content": "hello"}


def test_message_to_dict_includes_timestamp():
    message = SessionMessage(role="user", content="x", timestamp=5)
    assert message.to_dict() == {"role": "user", "content": "x", "timestamp": 5}


def test_delete_session(db):
    session = db.create_session(None)
    db.save_message(session.id, "user", "hello")
    db.delete_session(session.id)
    assert db.get_session(session.id) is None
    assert db.get_messages(session.id) == []
    assert db.search_sessions("hello", 10) == []


def test_get_nonexistent_session(db):
    assert db.get_session("nonexistent") is None


def test_count_messages(db):
    session = db.create_session(None)
    other = db.create_session(None)
    for text in ("a", "b", "c"):
        db.save_message(session.id, "user", text)
    db.save_message(other.id, "user", "d")
    assert db.count_messages(session.id) == 3
    assert db.count_messages("missing") == 0


def test_search_sessions_finds_message(db):
    session = db.create_session("model-x")
    db.save_message(session.id, "user", "hello world")
    results = db.search_sessions("hello", 10)
    assert len(results) == 1
    assert results[0].session_id == session.id
    assert results[0].model == "model-x"
    assert "<mark>hello</mark>" in results[0].snippet


def test_search_sessions_respects_limit(db):
    for _ in range(3):
        session = db.create_session(None)
        db.save_message(session.id, "user", "banana split")
    assert len(db.search_sessions("banana", 2)) == 2


def test_search_sessions_bad_query_raises(db):
    with pytest.raises(sqlite3.Error):
        db.search_sessions('"unterminated', 10)