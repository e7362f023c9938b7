#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/logging_utils.py
"""Logging setup for the dapper command-line interface.

The library itself only creates module loggers; handlers are installed by
the CLI through :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: str = "WARNING", verbose: bool = False, trace: bool = False) -> int:
    """Resolve the effective level from the CLI's logging flags.

    ``--trace`` wins over ``--verbose``, which wins over the default
    ``--log-level``. An explicit non-default ``--log-level`` wins over
    ``--verbose``.

    Parameters
    ----------
    log_level : str, default "WARNING"
        Level name given with ``--log-level``
    verbose : bool, default False
        Whether ``--verbose`` was given
    trace : bool, default False
        Whether ``--trace`` was given

    Returns
    -------
    int
        A ``logging`` level constant

    Examples
    --------
        >>> resolve_log_level("WARNING", verbose=True)
        10
        >>> resolve_log_level("ERROR", verbose=True)
        40

    """
    if trace:
        return logging.DEBUG
    if verbose and log_level.upper() == "WARNING":
        return logging.DEBUG
    return getattr(logging, log_level.upper(), logging.WARNING)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO")
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Include timestamps and logger names in every record

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt=TRACE_DATE_FORMAT if trace_mode else None,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file and len(handlers) > 1:
        root_logger.info("Logging to file: %s", log_file)

    return root_logger


__all__ = ["configure_logging", "resolve_log_level"]
