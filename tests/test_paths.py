import pytest

from hermes import paths


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_hermes_home_under_user_home(fake_home):
    assert paths.hermes_home() == fake_home / ".hermes"


def test_config_path(fake_home):
    assert paths.config_path() == paths.hermes_home() / "config.yaml"


def test_data_path(fake_home):
    assert paths.data_path() == paths.hermes_home() / "data"


def test_sessions_path_nested_in_data(fake_home):
    result = paths.sessions_path()
    assert result.parent == paths.data_path()
    assert result.name == "sessions"