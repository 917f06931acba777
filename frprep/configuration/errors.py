"""Exceptions raised while reading experiment files."""

from __future__ import annotations

from typing import Optional


class ConfigurationError(Exception):
    """An experiment file could not be read or failed validation."""

    def __init__(self, msg: Optional[str] = None, nested: Optional[BaseException] = None) -> None:
        if nested is not None:
            detail = f"{type(nested).__name__}: {nested}"
            msg = f"{detail}\n{msg}" if msg else detail
        if msg is None:
            super().__init__()
        else:
            super().__init__(msg)
        self.nested = nested


__all__ = ["ConfigurationError"]
