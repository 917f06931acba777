"""Experiment file readers used by the FrPrep launcher."""

from __future__ import annotations

from .config_data import FEATURE_TYPES, ConfigData
from .errors import ConfigurationError
from .prep_config_data import CONFIG_DEFS, ENCODINGS, PrepConfigData

__all__ = [
    "CONFIG_DEFS",
    "ConfigData",
    "ConfigurationError",
    "ENCODINGS",
    "FEATURE_TYPES",
    "PrepConfigData",
]
