#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/cli/builder.py
"""Argument parser construction for the dapper CLI."""

from __future__ import annotations

import argparse

from dapper.constants import BULLET_GLYPHS, PROSE_WRAP_MODES


def positive_int(value: str) -> int:
    """Argparse type accepting integers greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def non_negative_int(value: str) -> int:
    """Argparse type accepting zero and positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def get_version() -> str:
    """Get the installed version of dapper."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("dapper")
    except PackageNotFoundError:
        from dapper import __version__

        return __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``dapper`` command.

    Formatting options default to None so that values from a config file
    are only overridden by flags that were actually given.
    """
    parser = argparse.ArgumentParser(
        prog="dapper",
        description="Idiomatically format Markdown and YAML files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dapper .                                  Format every Markdown/YAML file below .
  dapper README.md -o show                  Print the formatted file
  dapper docs --set-exit-if-changed -o none Check formatting in CI
  dapper . --prose-wrap always --print-width 100
""",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to format (default: current directory)",
    )

    parser.add_argument(
        "--output",
        "-o",
        choices=["write", "show", "json", "none"],
        default="write",
        help="Where to write formatted output: write files in place, show on stdout, "
        "print as JSON lines, or discard (default: write)",
    )
    parser.add_argument(
        "--set-exit-if-changed",
        action="store_true",
        help="Return exit code 1 if any file's formatting changed",
    )

    # Formatting options
    parser.add_argument("--print-width", type=positive_int, metavar="N", help="Maximum line width (default: 80)")
    parser.add_argument(
        "--tab-width", type=positive_int, metavar="N", help="Spaces per YAML indentation level (default: 2)"
    )
    parser.add_argument(
        "--prose-wrap",
        choices=list(PROSE_WRAP_MODES),
        help="How to wrap Markdown prose (default: preserve)",
    )
    parser.add_argument(
        "--ul-style",
        choices=list(BULLET_GLYPHS),
        help="Bullet glyph for unordered lists (default: dash)",
    )

    # Configuration file
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to a configuration file (TOML, YAML or JSON). If not specified, the nearest "
        ".dapper.* file, pyproject.toml [tool.dapper] table or analysis_options.yaml 'dapper' "
        "block above the current directory is used.",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Disable loading of configuration files",
    )

    parser.add_argument(
        "--parallel",
        "-p",
        type=non_negative_int,
        nargs="?",
        const=0,
        default=1,
        metavar="N",
        help="Format files in N worker processes (default: 1; without N or with 0, one per CPU)",
    )
    parser.add_argument("--rich", action="store_true", help="Render the run summary as a rich table")

    # Logging and verbosity options
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and per-stage timing information",
    )

    parser.add_argument("--version", "-V", action="version", version=f"dapper {get_version()}")

    return parser


__all__ = ["create_parser", "get_version", "non_negative_int", "positive_int"]
