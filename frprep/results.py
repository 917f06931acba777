"""Tagged outcomes returned by the FrPrep option parser.

The parser never terminates the process itself. It hands one of these
values back and the caller decides what to print and which exit code to
use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

EXIT_OK = 0
EXIT_FAILURE = 1


class FailureKind(str, Enum):
    INVALID_OPTION = "invalid_option"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class ParseSuccess:
    config: Any
    options: Dict[str, Any] = field(default_factory=dict)

    exit_code = EXIT_OK


@dataclass(frozen=True)
class HelpRequested:
    text: str

    exit_code = EXIT_OK


@dataclass(frozen=True)
class VersionRequested:
    text: str

    exit_code = EXIT_OK


@dataclass(frozen=True)
class ParseFailure:
    kind: FailureKind
    message: str

    exit_code = EXIT_FAILURE


ParseResult = Union[ParseSuccess, HelpRequested, VersionRequested, ParseFailure]


__all__ = [
    "EXIT_FAILURE",
    "EXIT_OK",
    "FailureKind",
    "HelpRequested",
    "ParseFailure",
    "ParseResult",
    "ParseSuccess",
    "VersionRequested",
]
