#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/cli/__init__.py
"""Command-line interface for the dapper formatter.

Examples
--------
Format every Markdown and YAML file below the current directory::

    $ dapper

Check formatting without writing, failing if anything would change::

    $ dapper docs/ --output none --set-exit-if-changed

Print a formatted file::

    $ dapper README.md --output show --prose-wrap always

Exit codes are 0 on success, 1 when formatting failed for some file or when
files changed under ``--set-exit-if-changed``, and 2 for usage and
configuration errors.

"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import TextIO

from dapper.cli.builder import create_parser
from dapper.cli.config import load_options
from dapper.cli.output import SummaryRenderer, should_use_rich_output
from dapper.cli.processors import ProcessResult, process_paths
from dapper.constants import EXIT_CHANGED, EXIT_ERROR, EXIT_SUCCESS, EXIT_USAGE_ERROR
from dapper.exceptions import ConfigError
from dapper.logging_utils import configure_logging, resolve_log_level
from dapper.options import FormatOptions

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser", "resolve_options"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    log_level = resolve_log_level(parsed_args.log_level, verbose=parsed_args.verbose, trace=parsed_args.trace)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def resolve_options(parsed_args: argparse.Namespace) -> FormatOptions:
    """Combine defaults, the config file and command-line flags.

    Flags win over the config file, which wins over the defaults.

    Raises
    ------
    ConfigError
        If the config file cannot be loaded or holds invalid values

    """
    if parsed_args.no_config:
        options = FormatOptions()
    else:
        options = load_options(explicit_path=parsed_args.config)

    overrides = {
        name: getattr(parsed_args, name)
        for name in FormatOptions.field_names()
        if getattr(parsed_args, name, None) is not None
    }
    if overrides:
        logger.debug("Command-line overrides: %s", overrides)
        options = options.create_updated(**overrides)
    return options


def main(args: list[str] | None = None, stdout: TextIO | None = None) -> int:
    """Run the dapper CLI.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``
    stdout : TextIO, optional
        Stream for formatted output, defaults to ``sys.stdout``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    out = stdout or sys.stdout

    _setup_logging_level(parsed_args)

    try:
        options = resolve_options(parsed_args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    start = time.perf_counter()
    summary = process_paths(parsed_args.paths, options, parsed_args.output, out, parallel=parsed_args.parallel)
    elapsed = time.perf_counter() - start

    if parsed_args.output == "write":
        renderer = SummaryRenderer(use_rich=should_use_rich_output(parsed_args.rich))
        renderer.render_run_summary(
            total=summary.total_files,
            changed=summary.changed_files,
            failed=summary.failed_files,
            elapsed=elapsed,
        )

    if summary.result is ProcessResult.ERROR:
        return EXIT_ERROR
    if parsed_args.set_exit_if_changed and summary.result is ProcessResult.CHANGED:
        return EXIT_CHANGED
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
