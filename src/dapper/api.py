#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/api.py
"""Public formatting API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dapper.exceptions import FileError
from dapper.formatters import detect_kind, format_markdown, format_yaml, get_formatter
from dapper.options import FormatOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Outcome of formatting one file.

    Parameters
    ----------
    path : Path
        The formatted file
    original : str
        File content as read from disk
    formatted : str
        Formatted content
    changed : bool
        Whether ``formatted`` differs from ``original``

    """

    path: Path
    original: str
    formatted: str
    changed: bool


def format_text(
    source: str,
    path_or_kind: Union[str, Path],
    options: Optional[FormatOptions] = None,
) -> str:
    """Format ``source`` as Markdown or YAML.

    Parameters
    ----------
    source : str
        Document text
    path_or_kind : str or Path
        File name used to pick the formatter by extension, or an explicit
        kind (``"markdown"`` or ``"yaml"``)
    options : FormatOptions, optional
        Formatting options; defaults are used when None

    Returns
    -------
    str
        Formatted text

    Raises
    ------
    UnsupportedFormatError
        If the kind cannot be determined

    Examples
    --------
        >>> format_text("name:   myapp", "pubspec.yaml")
        'name: myapp\\n'

    """
    kind = detect_kind(path_or_kind)
    logger.debug("Formatting as %s", kind)
    return get_formatter(kind)(source, options)


def format_file(path: Union[str, Path], options: Optional[FormatOptions] = None) -> FormatResult:
    """Read and format a file without writing it back.

    Parameters
    ----------
    path : str or Path
        Markdown or YAML file
    options : FormatOptions, optional
        Formatting options

    Returns
    -------
    FormatResult
        Original and formatted content of the file

    Raises
    ------
    FileError
        If the file cannot be read or is not UTF-8
    UnsupportedFormatError
        If the file extension is not a Markdown or YAML extension

    """
    file_path = Path(path)
    kind = detect_kind(file_path)
    try:
        with open(file_path, encoding="utf-8", newline="") as handle:
            original = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileError(f"Could not read {file_path}: {exc}", file_path=str(file_path), original_error=exc) from exc

    formatted = get_formatter(kind)(original, options)
    return FormatResult(path=file_path, original=original, formatted=formatted, changed=formatted != original)


__all__ = ["FormatResult", "format_file", "format_markdown", "format_text", "format_yaml"]
