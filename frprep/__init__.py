"""Option parsing and experiment configuration for the FrPrep launcher."""

from __future__ import annotations

from typing import List, Optional

from .configuration import ConfigData, ConfigurationError, PrepConfigData
from .opt_parser import OptParser, OptParserError, build_parser, parse_args
from .results import (
    FailureKind,
    HelpRequested,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    VersionRequested,
)
from .version import __version__

__all__ = [
    "ConfigData",
    "ConfigurationError",
    "FailureKind",
    "HelpRequested",
    "OptParser",
    "OptParserError",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "PrepConfigData",
    "VersionRequested",
    "__version__",
    "build_parser",
    "cli_main",
    "parse_args",
]


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Run the FrPrep CLI programmatically."""

    from .cli import main as _main

    return _main(argv)
