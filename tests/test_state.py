import json

import pytest

from obstasks.note import finalize_section, merge_note
from obstasks.state import TaskState, load_state, mark_seen, save_state


def test_missing_state_is_empty(tmp_path):
    assert load_state(tmp_path / "none.json").seen == {}


def test_save_and_load(tmp_path):
    path = tmp_path / "sub" / "state.json"
    state = TaskState()
    mark_seen(state, "abcd1234", "2024-01-01T00:00:00.000Z")
    save_state(path, state)
    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert json.loads(text) == {"seen": {"abcd1234": "2024-01-01T00:00:00.000Z"}}
    assert load_state(path).seen == state.seen


def test_invalid_state_raises(tmp_path):
    path = tmp_path / "state.json"
    path.write_text('{"other": 1}', encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse state file"):
        load_state(path)
    path.write_text("{broken", encoding="utf-8")
    with pytest.raises(ValueError):
        load_state(path)


def test_merge_note():
    section = finalize_section(["## H", "", "• a", "x:1  [hash:1]", "", ""])
    assert section == "## H\n\n• a\nx:1  [hash:1]\n"
    assert merge_note("", section) == section
    assert merge_note("# Inbox\n\n\n", section) == "# Inbox\n\n" + section
