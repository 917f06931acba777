"""Typed reader for ``feature = value`` experiment files.

An experiment file holds one feature per line::

    # comment
    prep_experiment_ID = demo
    do_parse = false

Each feature is declared up front with one of the types ``bool``,
``float``, ``integer``, ``string`` or ``list``. Values are converted on
read; ``list`` features may appear several times and collect the
whitespace-split right-hand sides.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Pattern, Union

from .errors import ConfigurationError

FEATURE_TYPES = ("bool", "float", "integer", "string", "list")

_DEF_RE = re.compile(r"^\s*(\w+)\s*=\s*(\S.*)$")

_LOGGER = logging.getLogger("frprep.configuration")


class ConfigData:
    """Experiment file contents matched against declared feature types.

    Subclasses pass their feature declarations to ``__init__`` and
    override :meth:`validate` for semantic checks.
    """

    def __init__(
        self,
        filename: Union[str, Path],
        feature_types: Mapping[str, str],
    ) -> None:
        self.filename = Path(filename)
        self._feature_types: Dict[str, str] = dict(feature_types)
        for name, kind in self._feature_types.items():
            if kind not in FEATURE_TYPES:
                raise ConfigurationError(f"Unknown feature type for feature {name}: {kind}")
        self._features: Dict[str, Any] = {
            name: [] for name, kind in self._feature_types.items() if kind == "list"
        }
        self._read()

    def _read(self) -> None:
        try:
            handle = self.filename.open("r", encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Could not open the experiment file {self.filename}.", exc
            ) from exc
        with handle:
            try:
                for line in handle:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    name, rhs = self._extract_def(line)
                    self.set_entry(name, rhs)
            except UnicodeDecodeError as exc:
                raise ConfigurationError(
                    f"Could not read the experiment file {self.filename}.", exc
                ) from exc
        _LOGGER.debug("Read %d features from %s", len(self._features), self.filename)

    def _extract_def(self, line: str) -> tuple[str, str]:
        match = _DEF_RE.match(line)
        if match is None:
            raise ConfigurationError(
                f"Could not analyze the following line in {self.filename}: {line}"
            )
        return match.group(1), match.group(2).strip()

    def set_entry(self, name: str, rhs: str) -> None:
        """Set ``name`` from its textual value, converting by declared type."""
        kind = self._feature_types.get(name)
        if kind is None:
            expected = ", ".join(self._feature_types)
            raise ConfigurationError(
                f"Unknown parameter {name} in {self.filename}. "
                f"Expected features for this type of experiment file: {expected}"
            )

        if kind == "list":
            words = rhs.split()
            if not words:
                _LOGGER.warning("Empty value for list feature %s ignored.", name)
                return
            if words not in self._features[name]:
                self._features[name].append(words)
        elif kind == "bool":
            if rhs not in ("true", "false"):
                raise ConfigurationError(
                    f"Value for {name} must be either 'true' or 'false'. I got: {rhs}"
                )
            self._features[name] = rhs == "true"
        elif kind == "float":
            self._features[name] = self._convert(name, rhs, float)
        elif kind == "integer":
            self._features[name] = self._convert(name, rhs, int)
        else:
            self._features[name] = rhs

    @staticmethod
    def _convert(name: str, rhs: str, kind: type) -> Any:
        try:
            return kind(rhs)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid {kind.__name__} value for {name}: {rhs}", exc) from exc

    def unset_list_entry(self, name: str, rhs: Union[str, Pattern[str]]) -> None:
        """Remove entries of list feature ``name`` matching ``rhs``.

        A string removes exact matches, a compiled pattern removes every
        entry it finds a match in.
        """
        if self._feature_types.get(name) != "list":
            raise ConfigurationError(f"Feature {name} unknown or not of type list.")
        kept = []
        for entry in self._features[name]:
            text = " ".join(entry)
            if isinstance(rhs, str):
                hit = text == rhs
            else:
                hit = rhs.search(text) is not None
            if not hit:
                kept.append(entry)
        self._features[name] = kept

    def adjoin(self, other: "ConfigData") -> None:
        """Add the features of ``other``; names already declared here are kept."""
        if not isinstance(other, ConfigData):
            raise TypeError("Can only adjoin another ConfigData object")
        for name, kind in other._feature_types.items():
            if name in self._feature_types:
                continue
            self._feature_types[name] = kind
            if name in other._features:
                value = other._features[name]
                if isinstance(value, list):
                    value = [list(entry) for entry in value]
                self._features[name] = value

    def get(self, name: str) -> Any:
        """Return the typed value of ``name`` or ``None`` when unset."""
        if name not in self._feature_types:
            raise ConfigurationError(f"Unknown feature {name}")
        return self._features.get(name)

    def get_type(self, name: str) -> Optional[str]:
        return self._feature_types.get(name)

    def is_defined(self, name: str) -> bool:
        return self._features.get(name) not in (None, [])

    def validate(self) -> None:
        """Semantic checks; subclasses raise :class:`ConfigurationError`."""


__all__ = ["ConfigData", "FEATURE_TYPES"]
