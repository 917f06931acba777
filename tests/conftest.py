"""Ensure project root is on sys.path for test imports."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep runtime settings from the developer machine out of the tests."""

    from frprep.settings import get_settings

    monkeypatch.delenv("FRPREP_SETTINGS", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def exp_file() -> Path:
    return DATA_DIR / "prp_test.salsa"


@pytest.fixture
def write_exp_file(tmp_path: Path, exp_file: Path) -> Callable[..., Path]:
    """Write a copy of the sample experiment file with features replaced or dropped."""

    def _write(name: str = "exp.salsa", drop: tuple = (), **features: str) -> Path:
        lines = []
        for line in exp_file.read_text(encoding="utf-8").splitlines():
            key = line.split("=", 1)[0].strip()
            if key in drop or key in features:
                continue
            lines.append(line)
        lines.extend(f"{key} = {value}" for key, value in features.items())
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
