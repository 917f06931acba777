"""Command-line option parsing for the FrPrep launcher.

:func:`parse_args` turns an argument list into a tagged result (see
:mod:`frprep.results`) without touching the process: no printing, no
exiting. :class:`OptParser` keeps the classic launcher contract on top of
it and prints, then exits, on help, version and invalid input.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, NoReturn, Optional, Sequence, TextIO

from .configuration import ENCODINGS, ConfigurationError, PrepConfigData
from .results import (
    FailureKind,
    HelpRequested,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    VersionRequested,
)
from .version import __version__

PROGRAM_NAME = "frprep"

LANGUAGES = ("de", "en")
PARSERS = ("BerkeleyParser", "StanfordParser", "CollinsParser")

# Options that replace the experiment file feature of the same name.
OVERRIDE_FEATURES = ("encoding", "language", "parser")

DESCRIPTION = (
    "Fred Preprocessor <FrPrep>. Preprocessing stage before Fred and Rosy\n"
    "for further frame/word sense assignment and semantic role assignment."
)

ConfigFactory = Callable[[Path, Mapping[str, str]], Any]

_LOGGER = logging.getLogger("frprep.opt_parser")

_INFO_DEST = "info"


class OptParserError(Exception):
    """Parsing failed for a reason other than a bad option name or value."""


class _StopParsing(Exception):
    """Carries a final result out of an argparse action."""

    def __init__(self, result: ParseResult) -> None:
        super().__init__(result)
        self.result = result


def _consult(prog: str) -> str:
    return f"Please consult <{prog} --help>."


def invalid_option_message(token: str, prog: str = PROGRAM_NAME) -> str:
    return f"You have provided an invalid option: {token}. {_consult(prog)}"


def unsupported_argument_message(value: str, prog: str = PROGRAM_NAME) -> str:
    return f"The provided argument {value} is currently not supported. {_consult(prog)}"


def _unsupported(parser: argparse.ArgumentParser, value: str) -> _StopParsing:
    return _StopParsing(
        ParseFailure(FailureKind.INVALID_ARGUMENT, unsupported_argument_message(value, parser.prog))
    )


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise OptParserError(message)


class _InfoAction(argparse.Action):
    """Remember the first of ``--help``/``--version`` seen on the command line."""

    def __init__(self, option_strings, dest, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=argparse.SUPPRESS, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, _INFO_DEST, None) is None:
            setattr(namespace, _INFO_DEST, self.dest)


def _add_info_flags(container) -> None:
    container.add_argument("-h", "--help", dest="help", action=_InfoAction, help="Show this help message.")
    container.add_argument(
        "-v", "--version", dest="version", action=_InfoAction, help="Show the program version."
    )


def _requested_info(argv: Sequence[str]) -> Optional[str]:
    """Return ``"help"`` or ``"version"`` if either flag appears anywhere in ``argv``."""
    scanner = _ArgumentParser(add_help=False)
    _add_info_flags(scanner)
    namespace, _ = scanner.parse_known_args(argv)
    return getattr(namespace, _INFO_DEST, None)


class _ChoiceAction(argparse.Action):
    """Store a value only when it belongs to ``allowed``."""

    def __init__(self, option_strings, dest, allowed: Sequence[str] = (), **kwargs):
        self.allowed = tuple(allowed)
        kwargs.setdefault("metavar", "{" + ",".join(self.allowed) + "}")
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if values not in self.allowed:
            raise _unsupported(parser, values)
        setattr(namespace, self.dest, values)


class _ExpFileAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if not values.strip():
            raise _unsupported(parser, repr(values))
        setattr(namespace, self.dest, Path(os.path.abspath(os.path.expanduser(values))))


def build_parser(prog: str = PROGRAM_NAME) -> argparse.ArgumentParser:
    """Construct the FrPrep argument parser."""
    parser = _ArgumentParser(
        prog=prog,
        usage=f"{prog} -h|-e FILENAME [options]",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    specific = parser.add_argument_group("program specific options")
    specific.add_argument(
        "-e",
        "--expfile",
        dest="exp_file",
        metavar="FILENAME",
        action=_ExpFileAction,
        help=(
            "Provide the path to an experiment file. FrPrep will preprocess data "
            "according to the specifications given in your experiment file. "
            "This option is required!"
        ),
    )
    specific.add_argument(
        "--encoding",
        dest="encoding",
        action=_ChoiceAction,
        allowed=ENCODINGS,
        help="Encoding of the input files, overrides <encoding> of the experiment file.",
    )
    specific.add_argument(
        "-l",
        "--language",
        dest="language",
        action=_ChoiceAction,
        allowed=LANGUAGES,
        help="Language to be processed, overrides <language> of the experiment file.",
    )
    specific.add_argument(
        "-p",
        "--parser",
        dest="parser",
        action=_ChoiceAction,
        allowed=PARSERS,
        help="Syntactic parser to use, overrides <parser> of the experiment file.",
    )

    _add_info_flags(parser.add_argument_group("common options"))
    return parser


def parse_args(
    args: Sequence[str],
    *,
    prog: str = PROGRAM_NAME,
    config_factory: Optional[ConfigFactory] = None,
) -> ParseResult:
    """Parse ``args`` into a :mod:`frprep.results` value.

    An empty argument list is treated as ``--help``. ``--help`` and
    ``--version`` win wherever they appear, even next to invalid input.
    Otherwise unknown options and unsupported values come back as
    :class:`ParseFailure`; anything else argparse rejects raises
    :class:`OptParserError`. On success the experiment file is read
    through ``config_factory`` (defaults to :class:`PrepConfigData`),
    which may raise :class:`ConfigurationError`.
    """
    argv = list(args)
    if not argv:
        _LOGGER.debug("No options given, showing help")
        argv = ["--help"]

    parser = build_parser(prog)
    info = _requested_info(argv)
    if info == "help":
        return HelpRequested(parser.format_help())
    if info == "version":
        return VersionRequested(__version__)

    try:
        namespace, extras = parser.parse_known_args(argv)
    except _StopParsing as stop:
        _LOGGER.debug("Parsing stopped with %s", type(stop.result).__name__)
        return stop.result

    if extras:
        token = next((item for item in extras if item.startswith("-")), extras[0])
        _LOGGER.debug("Rejecting unknown token %r", token)
        return ParseFailure(FailureKind.INVALID_OPTION, invalid_option_message(token, prog))

    options: Dict[str, Any] = {
        name: value for name, value in vars(namespace).items() if value is not None
    }
    exp_file = options.get("exp_file")
    if exp_file is None:
        raise ConfigurationError(f"No experiment file given. {_consult(prog)}")

    overrides = {name: options[name] for name in OVERRIDE_FEATURES if name in options}
    factory = config_factory or PrepConfigData
    config = factory(exp_file, overrides)
    _LOGGER.debug("Loaded experiment file %s", exp_file)
    return ParseSuccess(config=config, options=options)


def write_result(
    result: ParseResult,
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """Print help, version or failure text to the matching stream."""
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    if isinstance(result, HelpRequested):
        print(result.text, end="" if result.text.endswith("\n") else "\n", file=out)
    elif isinstance(result, VersionRequested):
        print(result.text, file=out)
    elif isinstance(result, ParseFailure):
        print(result.message, file=err)


class OptParser:
    """Classic launcher contract: returns a configuration or exits."""

    @staticmethod
    def parse(
        args: Sequence[str],
        *,
        prog: str = PROGRAM_NAME,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        config_factory: Optional[ConfigFactory] = None,
    ) -> Any:
        result = parse_args(args, prog=prog, config_factory=config_factory)
        if isinstance(result, ParseSuccess):
            return result.config
        write_result(result, stdout=stdout, stderr=stderr)
        raise SystemExit(result.exit_code)


__all__ = [
    "DESCRIPTION",
    "LANGUAGES",
    "OVERRIDE_FEATURES",
    "OptParser",
    "OptParserError",
    "PARSERS",
    "PROGRAM_NAME",
    "build_parser",
    "invalid_option_message",
    "parse_args",
    "unsupported_argument_message",
    "write_result",
]
