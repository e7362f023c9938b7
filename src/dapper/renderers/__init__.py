#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/renderers/__init__.py
"""Printers that re-emit parsed documents in canonical form."""

from dapper.renderers.markdown import MarkdownRenderer
from dapper.renderers.yaml import YamlRenderer, needs_quoting

__all__ = ["MarkdownRenderer", "YamlRenderer", "needs_quoting"]
