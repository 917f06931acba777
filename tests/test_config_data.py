from __future__ import annotations

import re
from pathlib import Path

import pytest

from frprep.configuration import ConfigData, ConfigurationError

FEATURES = {
    "name": "string",
    "ratio": "float",
    "count": "integer",
    "enabled": "bool",
    "paths": "list",
}


def _write(tmp_path: Path, text: str, name: str = "exp.conf") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_typed_values(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "# a comment\n"
        "\n"
        "name = some experiment\n"
        "ratio = 0.25\n"
        "count = 12\n"
        "enabled = true\n"
        "paths = a b c\n"
        "paths = d\n"
        "paths = a b c\n",
    )
    data = ConfigData(path, FEATURES)
    assert data.get("name") == "some experiment"
    assert data.get("ratio") == 0.25
    assert data.get("count") == 12
    assert data.get("enabled") is True
    assert data.get("paths") == [["a", "b", "c"], ["d"]]
    assert data.get_type("paths") == "list"
    assert data.get_type("unknown") is None


def test_unset_features(tmp_path: Path) -> None:
    data = ConfigData(_write(tmp_path, "enabled = false\n"), FEATURES)
    assert data.get("name") is None
    assert data.get("paths") == []
    assert data.is_defined("enabled")
    assert not data.is_defined("name")
    assert not data.is_defined("paths")


def test_unknown_feature_lookup(tmp_path: Path) -> None:
    data = ConfigData(_write(tmp_path, ""), FEATURES)
    with pytest.raises(ConfigurationError, match="Unknown feature nope"):
        data.get("nope")


def test_unknown_parameter_in_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigData(_write(tmp_path, "colour = red\n"), FEATURES)
    message = str(excinfo.value)
    assert "Unknown parameter colour" in message
    assert "name, ratio, count, enabled, paths" in message


def test_bool_must_be_true_or_false(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="either 'true' or 'false'"):
        ConfigData(_write(tmp_path, "enabled = yes\n"), FEATURES)


def test_bad_integer(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Invalid int value for count"):
        ConfigData(_write(tmp_path, "count = many\n"), FEATURES)


def test_malformed_line(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Could not analyze"):
        ConfigData(_write(tmp_path, "just some words\n"), FEATURES)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigData(tmp_path / "absent.conf", FEATURES)
    assert "Could not open the experiment file" in str(excinfo.value)
    assert isinstance(excinfo.value.nested, OSError)


def test_file_not_in_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.conf"
    path.write_bytes("name = /daten/müller\n".encode("latin-1"))
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigData(path, FEATURES)
    assert "Could not read the experiment file" in str(excinfo.value)
    assert isinstance(excinfo.value.nested, UnicodeDecodeError)


def test_unknown_feature_type(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Unknown feature type"):
        ConfigData(_write(tmp_path, ""), {"fmt": "pattern"})


def test_empty_list_value_is_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    data = ConfigData(_write(tmp_path, ""), FEATURES)
    with caplog.at_level("WARNING", logger="frprep.configuration"):
        data.set_entry("paths", "   ")
    assert data.get("paths") == []
    assert "Empty value for list feature paths" in caplog.text


def test_unset_list_entry(tmp_path: Path) -> None:
    data = ConfigData(_write(tmp_path, "paths = a b\npaths = c d\npaths = a x\n"), FEATURES)
    data.unset_list_entry("paths", "a b")
    assert data.get("paths") == [["c", "d"], ["a", "x"]]
    data.unset_list_entry("paths", re.compile(r"^a"))
    assert data.get("paths") == [["c", "d"]]
    with pytest.raises(ConfigurationError, match="not of type list"):
        data.unset_list_entry("name", "a")


def test_adjoin_keeps_own_features(tmp_path: Path) -> None:
    mine = ConfigData(_write(tmp_path, "name = mine\n", "a.conf"), FEATURES)
    other = ConfigData(
        _write(tmp_path, "name = theirs\nextra = 3\n", "b.conf"),
        {"name": "string", "extra": "integer"},
    )
    mine.adjoin(other)
    assert mine.get("name") == "mine"
    assert mine.get("extra") == 3
    assert mine.get_type("extra") == "integer"
    with pytest.raises(TypeError):
        mine.adjoin({"name": "x"})  # type: ignore[arg-type]


def test_adjoined_lists_are_independent(tmp_path: Path) -> None:
    mine = ConfigData(_write(tmp_path, "name = mine\n", "a.conf"), {"name": "string"})
    other = ConfigData(_write(tmp_path, "paths = x\n", "b.conf"), {"paths": "list"})
    mine.adjoin(other)

    mine.set_entry("paths", "y")
    assert mine.get("paths") == [["x"], ["y"]]
    assert other.get("paths") == [["x"]]

    other.unset_list_entry("paths", "x")
    assert other.get("paths") == []
    assert mine.get("paths") == [["x"], ["y"]]


def test_configuration_error_with_nested() -> None:
    nested = ValueError("boom")
    error = ConfigurationError("while reading", nested)
    assert str(error) == "ValueError: boom\nwhile reading"
    assert error.nested is nested
    assert str(ConfigurationError()) == ""
