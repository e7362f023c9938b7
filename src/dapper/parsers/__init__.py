#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/parsers/__init__.py
"""Parsers that turn source text into the structures the printers consume.

- ``front_matter`` and ``definition_list`` split Markdown documents into
  pieces that bypass the Markdown parser
- ``markdown`` converts mistune tokens into the dapper AST
- ``yaml`` composes PyYAML node trees that keep source offsets
"""
