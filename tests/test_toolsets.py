import json

from hermes.toolsets import (
    TOOLSETS,
    get_toolsets_state_path,
    list_toolsets,
    load_toolsets_state,
)

ALL_TOOLS = [t for d in TOOLSETS for t in d.tools]


def test_all_known_tools_no_other_set():
    infos = list_toolsets(ALL_TOOLS, {})
    assert [i.name for i in infos] == [d.name for d in TOOLSETS]
    for info, definition in zip(infos, TOOLSETS):
        assert info.tools == list(definition.tools)
        assert info.label == definition.label
        assert info.enabled is True
        assert info.configured is True


def test_unassigned_tools_are_sorted_into_other():
    infos = list_toolsets(ALL_TOOLS + ["zeta_tool", "alpha_tool"], {})
    assert len(infos) == len(TOOLSETS) + 1
    other = infos[-1]
    assert other.name == "other"
    assert other.label == "Other"
    assert other.description == "Tools not assigned to a specific toolset"
    assert other.tools == ["alpha_tool", "zeta_tool"]
    assert other.enabled is True and other.configured is True


def test_tools_filtered_to_known_and_order_kept():
    infos = {i.name: i for i in list_toolsets(["web_extract", "web_search"], {})}
    assert infos["web"].tools == ["web_search", "web_extract"]
    assert infos["core"].tools == []


def test_enabled_map_disables_named_toolsets():
    infos = {i.name: i for i in list_toolsets(ALL_TOOLS, {"web": False, "core": True})}
    assert infos["web"].enabled is False
    assert infos["core"].enabled is True
    assert infos["memory"].enabled is True


def test_load_state_missing_file(tmp_path):
    assert load_toolsets_state(tmp_path / "missing.json") == {}


def test_load_state_valid_and_invalid(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"web": False, "cron": True}), encoding="utf-8")
    assert load_toolsets_state(path) == {"web": False, "cron": True}
    path.write_text("{not json", encoding="utf-8")
    assert load_toolsets_state(path) == {}
    path.write_text(json.dumps({"web": "no"}), encoding="utf-8")
    assert load_toolsets_state(path) == {}
    path.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert load_toolsets_state(path) == {}


def test_state_path_location(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    path = get_toolsets_state_path()
    assert path.name == "toolsets_state.json"
    assert path.parent == tmp_path / ".hermes"


def test_list_toolsets_reads_stored_state_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    state_dir = tmp_path / ".hermes"
    state_dir.mkdir()
    (state_dir / "toolsets_state.json").write_text(
        json.dumps({"vision": False}), encoding="utf-8"
    )
    infos = {i.name: i for i in list_toolsets(ALL_TOOLS)}
    assert infos["vision"].enabled is False
    assert infos["web"].enabled is True