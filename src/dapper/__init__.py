"""dapper - a deterministic formatter for Markdown and YAML.

dapper parses a document into a tree and prints it back as canonical text.
Formatting is idempotent: formatting already formatted text returns it
unchanged. Content the parsers do not model is carried through verbatim:
Markdown front matter and definition lists, YAML comments, blank lines and
block scalars.

Style is controlled by a small, immutable :class:`FormatOptions` value:

- ``print_width``: line width for wrapped prose (default 80)
- ``tab_width``: YAML indentation step (default 2)
- ``prose_wrap``: ``"always"``, ``"never"`` or ``"preserve"`` (default)
- ``ul_style``: ``"dash"`` (default), ``"asterisk"`` or ``"plus"``

Requirements
------------
- Python 3.10+
- mistune 3 for Markdown, PyYAML 6 for YAML

Examples
--------
    >>> from dapper import format_markdown, format_yaml
    >>> format_markdown("*hello*")
    '_hello_\\n'
    >>> format_yaml("name:   myapp\\nversion: 1.0.0")
    'name: myapp\\nversion: 1.0.0\\n'

Formatting a file on disk without writing it back:

    >>> from dapper import FormatOptions, format_file
    >>> result = format_file("README.md", FormatOptions(prose_wrap="always"))
    >>> result.changed
    True

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "dapper requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dapper import ast  # noqa: F401

from dapper.api import FormatResult, format_file, format_markdown, format_text, format_yaml
from dapper.exceptions import (
    ConfigError,
    DapperError,
    DependencyError,
    FileError,
    ParsingError,
    UnsupportedFormatError,
    UnsupportedSyntaxError,
)
from dapper.options import FormatOptions

_lazy_modules = {
    "ast": "dapper.ast",
}

__all__ = [
    "__version__",
    "format_markdown",
    "format_yaml",
    "format_text",
    "format_file",
    "FormatResult",
    "FormatOptions",
    # Exceptions
    "DapperError",
    "ConfigError",
    "DependencyError",
    "FileError",
    "ParsingError",
    "UnsupportedFormatError",
    "UnsupportedSyntaxError",
    # AST module (for advanced users)
    "ast",
]


def __getattr__(name: str) -> Any:
    """Import the AST module on first access.

    Parameters
    ----------
    name : str
        The name of the attribute being accessed

    Returns
    -------
    Any
        The requested module

    Raises
    ------
    AttributeError
        If ``name`` is not a lazily loaded module

    """
    import importlib

    if name in _lazy_modules:
        module = importlib.import_module(_lazy_modules[name])
        globals()[name] = module
        return module

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
