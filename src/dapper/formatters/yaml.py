#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/formatters/yaml.py
"""YAML formatting pipeline.

YAML that cannot be parsed, or that uses constructs the printer cannot
reproduce, is returned unchanged rather than raising.
"""

from __future__ import annotations

import logging

from dapper.constants import DEPS_YAML
from dapper.exceptions import UnsupportedSyntaxError
from dapper.options import FormatOptions, resolve_format_options
from dapper.parsers.yaml import compose_documents
from dapper.renderers.yaml import YamlRenderer
from dapper.utils.decorators import debug_timer, requires_dependencies
from dapper.utils.text import normalize_line_endings

logger = logging.getLogger(__name__)


class YamlFormatter:
    """Format YAML documents.

    Parameters
    ----------
    options : FormatOptions or None, default = None
        Formatting options; only ``tab_width`` applies

    """

    def __init__(self, options: FormatOptions | None = None):
        """Initialize the formatter with options."""
        self.options = resolve_format_options(options, "YamlFormatter")

    @requires_dependencies("yaml", DEPS_YAML)
    def format(self, source: str) -> str:
        """Format a YAML stream.

        Parameters
        ----------
        source : str
            YAML text, with any line-ending convention

        Returns
        -------
        str
            Canonical YAML ending in exactly one newline, ``""`` for
            whitespace-only input, or ``source`` unchanged when it is invalid
            or unsupported

        """
        import yaml

        normalized = normalize_line_endings(source)
        if not normalized.strip():
            return ""

        try:
            with debug_timer(logger, "Parsing (yaml)"):
                documents = compose_documents(normalized)
            with debug_timer(logger, "Rendering (yaml)"):
                return YamlRenderer(self.options).render(normalized, documents)
        except yaml.YAMLError as exc:
            logger.debug("Leaving invalid YAML unchanged: %s", exc)
            return source
        except UnsupportedSyntaxError as exc:
            logger.info("Leaving YAML unchanged: %s", exc)
            return source


def format_yaml(source: str, options: FormatOptions | None = None) -> str:
    """Format YAML text.

    Parameters
    ----------
    source : str
        YAML text
    options : FormatOptions or None, default = None
        Formatting options

    Returns
    -------
    str
        Formatted YAML, or ``source`` unchanged when it cannot be formatted

    Examples
    --------
        >>> format_yaml("key: :unsafe")
        'key: ":unsafe"\\n'

    """
    return YamlFormatter(options).format(source)


__all__ = ["YamlFormatter", "format_yaml"]
