import json
import tempfile

import pytest

from obstasks.external_patterns import load_pattern_file


def test_yaml_list(tmp_path):
    p = tmp_path / "kw.yaml"
    p.write_text("- TODO\n- HACK\n", encoding="utf-8")
    assert load_pattern_file(str(p)) == ["TODO", "HACK"]


def test_json_mapping():
    with tempfile.NamedTemporaryFile("w", suffix=".json", encoding="utf-8", delete=False) as f:
        json.dump({"patterns": ["XXX", " "]}, f)
        path = f.name
    assert load_pattern_file(path) == ["XXX"]


def test_invalid_shape(tmp_path):
    p = tmp_path / "kw.yml"
    p.write_text("patterns: 3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_pattern_file(str(p))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pattern_file(str(tmp_path / "nope.yaml"))
