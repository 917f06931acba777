"""Command-line entrypoint for the FrPrep launcher."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from .configuration import ConfigurationError
from .opt_parser import parse_args, write_result
from .results import EXIT_FAILURE, ParseSuccess
from .settings import setup_logging

_LOGGER = logging.getLogger("frprep.cli")


def main(
    argv: Optional[List[str]] = None,
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Run the FrPrep CLI and return the process exit code."""
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    setup_logging()

    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        result = parse_args(args)
    except ConfigurationError as exc:
        _LOGGER.debug("Experiment file rejected", exc_info=True)
        print(f"Error in experiment file: {exc}", file=err)
        return EXIT_FAILURE

    if isinstance(result, ParseSuccess):
        config = result.config
        print(
            f"Experiment {config.get('prep_experiment_ID')} loaded from {config.filename}.",
            file=out,
        )
        return result.exit_code

    write_result(result, stdout=out, stderr=err)
    return result.exit_code


def run() -> None:
    """Console-script target."""
    raise SystemExit(main())


__all__ = ["main", "run"]
