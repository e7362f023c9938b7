#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/formatters/__init__.py
"""Formatter pipelines and lookup by document kind.

Each formatter is a plain function ``(source, options) -> str``. The
:data:`FORMATTERS` table maps a document kind to its function and
:func:`detect_kind` maps a file name or explicit kind to a document kind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

from dapper.constants import MARKDOWN_EXTENSIONS, YAML_EXTENSIONS, DocumentKind
from dapper.exceptions import UnsupportedFormatError
from dapper.formatters.markdown import MarkdownFormatter, format_markdown
from dapper.formatters.yaml import YamlFormatter, format_yaml
from dapper.options import FormatOptions

FormatterFunc = Callable[[str, Optional[FormatOptions]], str]

FORMATTERS: dict[DocumentKind, FormatterFunc] = {
    "markdown": format_markdown,
    "yaml": format_yaml,
}

_KIND_ALIASES: dict[str, DocumentKind] = {
    "markdown": "markdown",
    "md": "markdown",
    "yaml": "yaml",
    "yml": "yaml",
}


def detect_kind(path_or_kind: Union[str, Path]) -> DocumentKind:
    """Determine the document kind from a file path or an explicit kind.

    Parameters
    ----------
    path_or_kind : str or Path
        A file path whose extension is ``.md``, ``.markdown``, ``.yaml`` or
        ``.yml``, or one of the kind names ``"markdown"`` and ``"yaml"``

    Returns
    -------
    str
        ``"markdown"`` or ``"yaml"``

    Raises
    ------
    UnsupportedFormatError
        If neither the extension nor the name is recognized

    Examples
    --------
        >>> detect_kind("docs/README.md")
        'markdown'
        >>> detect_kind("yaml")
        'yaml'

    """
    if isinstance(path_or_kind, str):
        alias = _KIND_ALIASES.get(path_or_kind.strip().lower())
        if alias is not None:
            return alias

    suffix = Path(path_or_kind).suffix.lower()
    if suffix in MARKDOWN_EXTENSIONS:
        return "markdown"
    if suffix in YAML_EXTENSIONS:
        return "yaml"

    raise UnsupportedFormatError(
        f"Cannot determine document kind for {str(path_or_kind)!r}", format_name=suffix or None
    )


def get_formatter(kind: DocumentKind) -> FormatterFunc:
    """Return the formatter function registered for ``kind``."""
    try:
        return FORMATTERS[kind]
    except KeyError:
        raise UnsupportedFormatError(f"No formatter registered for {kind!r}", format_name=kind) from None


__all__ = [
    "FORMATTERS",
    "FormatterFunc",
    "MarkdownFormatter",
    "YamlFormatter",
    "detect_kind",
    "format_markdown",
    "format_yaml",
    "get_formatter",
]
