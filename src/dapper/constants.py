#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/constants.py
"""Constants and default values for dapper.

This module centralizes the default formatting options, the mapping between
bullet styles and glyphs, the dependency requirements of the two formatters
and the file-system conventions used by the command-line interface.
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type aliases
# =============================================================================

ProseWrap = Literal["always", "never", "preserve"]
UnorderedListBulletStyle = Literal["dash", "asterisk", "plus"]
DocumentKind = Literal["markdown", "yaml"]
OutputMode = Literal["write", "show", "json", "none"]

# =============================================================================
# Formatting defaults
# =============================================================================

DEFAULT_PRINT_WIDTH = 80
DEFAULT_TAB_WIDTH = 2
DEFAULT_PROSE_WRAP: ProseWrap = "preserve"
DEFAULT_UL_STYLE: UnorderedListBulletStyle = "dash"

PROSE_WRAP_MODES: tuple[str, ...] = ("always", "never", "preserve")

BULLET_GLYPHS: dict[str, str] = {
    "dash": "-",
    "asterisk": "*",
    "plus": "+",
}

# Glyph used for a list that directly follows a sibling list, so the two
# do not merge into one list when the output is parsed again.
ALTERNATE_BULLET_GLYPHS: dict[str, str] = {
    "-": "*",
    "*": "-",
    "+": "-",
}

BULLET_STYLE_ALIASES: dict[str, UnorderedListBulletStyle] = {
    "dash": "dash",
    "-": "dash",
    "asterisk": "asterisk",
    "star": "asterisk",
    "*": "asterisk",
    "plus": "plus",
    "+": "plus",
}

# Markdown table separator cells never get narrower than this.
MIN_TABLE_COLUMN_WIDTH = 3

# =============================================================================
# Dependencies
# =============================================================================

# (install_name, import_name, version_spec)
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_YAML = [("pyyaml", "yaml", ">=6.0")]

MISTUNE_PLUGINS = ["strikethrough", "table", "task_lists", "def_list"]

# =============================================================================
# File handling
# =============================================================================

MARKDOWN_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")
YAML_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml")
FORMATTABLE_EXTENSIONS: tuple[str, ...] = MARKDOWN_EXTENSIONS + YAML_EXTENSIONS

IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {".git", ".dart_tool", ".idea", ".vscode", ".fvm", ".venv", "node_modules", "__pycache__"}
)

IGNORE_FILENAMES: tuple[str, ...] = (".gitignore", ".dapperignore")
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = ("*-lock.yaml",)

CONFIG_FILENAMES: tuple[str, ...] = (
    ".dapper.toml",
    ".dapper.yaml",
    ".dapper.yml",
    "dapper.yaml",
    ".dapper.json",
)

# =============================================================================
# Exit codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_CHANGED = 1
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2
