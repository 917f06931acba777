"""Runtime settings and logging setup for the FrPrep launcher.

Settings cover ambient behaviour only (logging). Command-line option
values are never read from here.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

__all__ = [
    "FrprepSettings",
    "get_settings",
    "reload_settings",
    "setup_logging",
]

_SETTINGS_ENV = "FRPREP_SETTINGS"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _default_settings_locations() -> List[Path]:
    locations = [
        Path("config/frprep.local.json"),
        Path("config/frprep.json"),
    ]
    xdg = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    locations.append(xdg.expanduser() / "frprep" / "frprep.json")
    return locations


@dataclass(slots=True)
class FrprepSettings:
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrprepSettings":
        logging_data = data.get("logging") if isinstance(data, dict) else None
        if not isinstance(logging_data, dict):
            logging_data = {}
        level = str(logging_data.get("level") or DEFAULT_LOG_LEVEL).strip().upper()
        fmt = str(logging_data.get("format") or DEFAULT_LOG_FORMAT)
        return cls(log_level=level, log_format=fmt)


def _candidate_paths(explicit: Optional[Path]) -> Iterable[Path]:
    if explicit is not None:
        yield explicit
    env_path = os.getenv(_SETTINGS_ENV)
    if env_path:
        yield Path(env_path).expanduser()
    yield from _default_settings_locations()


def _load_settings(path: Optional[Path] = None) -> FrprepSettings:
    for candidate in _candidate_paths(path):
        try:
            if candidate.exists():
                data = json.loads(candidate.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return FrprepSettings.from_dict(data)
        except (OSError, ValueError):
            continue
    return FrprepSettings()


@lru_cache(maxsize=1)
def get_settings() -> FrprepSettings:
    """Return the cached runtime settings."""

    return _load_settings(None)


def reload_settings(path: Optional[Path] = None) -> FrprepSettings:
    """Reload settings from disk, bypassing the cache."""

    get_settings.cache_clear()
    return get_settings() if path is None else _load_settings(path)


def setup_logging(settings: Optional[FrprepSettings] = None) -> None:
    """Send ``frprep`` log records to stderr at the configured level."""

    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level, format=settings.log_format)
    logging.getLogger("frprep").setLevel(level)
