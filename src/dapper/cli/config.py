#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/cli/config.py
"""Configuration file discovery and loading for the dapper CLI.

Options can be stored in a dedicated config file (``.dapper.toml``,
``.dapper.yaml``, ``.dapper.yml``, ``dapper.yaml`` or ``.dapper.json``), in
the ``[tool.dapper]`` table of ``pyproject.toml`` or under the ``dapper:``
key of ``analysis_options.yaml``. The nearest file found walking up from the
working directory wins.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from dapper.constants import CONFIG_FILENAMES
from dapper.exceptions import ConfigError
from dapper.options import FormatOptions, parse_bullet_style, parse_prose_wrap

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"
ANALYSIS_OPTIONS_FILENAME = "analysis_options.yaml"

# Accepted spellings of each option key
_KEY_ALIASES: dict[str, str] = {
    "print_width": "print_width",
    "printWidth": "print_width",
    "page_width": "print_width",
    "pageWidth": "print_width",
    "tab_width": "tab_width",
    "tabWidth": "tab_width",
    "prose_wrap": "prose_wrap",
    "proseWrap": "prose_wrap",
    "ul_style": "ul_style",
    "ulStyle": "ul_style",
    "unordered_list_bullet_style": "ul_style",
    "unorderedListBulletStyle": "ul_style",
}


def _read_toml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}", config_path=str(config_path), original_error=e) from e


def _read_yaml(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}", config_path=str(config_path), original_error=e) from e


def _read_json(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}", config_path=str(config_path), original_error=e) from e


def _require_mapping(value: Any, config_path: Path, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(
            f"{where} in {config_path} must be a mapping, got {type(value).__name__}",
            config_path=str(config_path),
        )
    return value


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.dapper]`` table of a pyproject.toml, or ``{}``."""
    data = _read_toml(pyproject_path)
    section = data.get("tool", {}).get("dapper")
    return _require_mapping(section, pyproject_path, "[tool.dapper]")


def _load_analysis_options_section(path: Path) -> Dict[str, Any]:
    """Return the ``dapper:`` block of an analysis_options.yaml, or ``{}``."""
    data = _require_mapping(_read_yaml(path), path, "Top level")
    return _require_mapping(data.get("dapper"), path, "'dapper' block")


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension:

    - ``pyproject.toml``: the ``[tool.dapper]`` table
    - ``analysis_options.yaml``: the ``dapper:`` block
    - ``.toml``, ``.yaml``/``.yml`` and ``.json``: the whole document

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Raw configuration mapping

    Raises
    ------
    ConfigError
        If the file is missing, cannot be parsed or is not a mapping

    Examples
    --------
    >>> config = load_config_file(".dapper.toml")
    >>> config.get("print_width")
    100

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == PYPROJECT_FILENAME:
        return _load_pyproject_section(config_path)
    if filename == ANALYSIS_OPTIONS_FILENAME:
        return _load_analysis_options_section(config_path)
    if ext == ".toml":
        return _require_mapping(_read_toml(config_path), config_path, "Top level")
    if ext in (".yaml", ".yml"):
        return _require_mapping(_read_yaml(config_path), config_path, "Top level")
    if ext == ".json":
        return _require_mapping(_read_json(config_path), config_path, "Top level")

    raise ConfigError(
        f"Unsupported config file format: {ext or filename}. Use .toml, .yaml or .json",
        config_path=str(config_path),
    )


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file at or above ``start_dir``.

    Each directory is checked for the dedicated config files in
    :data:`~dapper.constants.CONFIG_FILENAMES` order, then for a
    ``pyproject.toml`` with a ``[tool.dapper]`` table, then for an
    ``analysis_options.yaml`` with a ``dapper:`` block.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        Path to the first config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        for filename, loader in (
            (PYPROJECT_FILENAME, _load_pyproject_section),
            (ANALYSIS_OPTIONS_FILENAME, _load_analysis_options_section),
        ):
            candidate = current / filename
            if not candidate.is_file():
                continue
            try:
                if loader(candidate):
                    return candidate
            except ConfigError as e:
                logger.debug("Skipping unreadable %s: %s", candidate, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def options_from_config(config: Dict[str, Any], base: Optional[FormatOptions] = None) -> FormatOptions:
    """Build FormatOptions from a raw configuration mapping.

    Parameters
    ----------
    config : dict
        Mapping loaded by :func:`load_config_file`. Keys may be snake_case
        or camelCase; unknown keys are logged and ignored.
    base : FormatOptions, optional
        Options that keys missing from ``config`` keep

    Returns
    -------
    FormatOptions
        The merged options

    Raises
    ------
    ConfigError
        If a value is invalid

    Examples
    --------
    >>> options_from_config({"printWidth": 100, "ul_style": "*"}).ul_style
    'asterisk'

    """
    updates: Dict[str, Any] = {}
    for key, value in config.items():
        name = _KEY_ALIASES.get(key)
        if name is None:
            logger.warning("Ignoring unknown configuration key: %s", key)
            continue
        try:
            if name == "prose_wrap":
                value = parse_prose_wrap(value)
            elif name == "ul_style":
                value = parse_bullet_style(value)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {key}: {e}") from e
        updates[name] = value

    try:
        return (base or FormatOptions()).create_updated(**updates)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_options(
    explicit_path: Optional[str] = None,
    search_from: Optional[Path] = None,
    base: Optional[FormatOptions] = None,
) -> FormatOptions:
    """Load options from an explicit config file or the nearest discovered one.

    Parameters
    ----------
    explicit_path : str, optional
        Path given with ``--config``
    search_from : Path, optional
        Directory to start discovery from, defaults to the working directory
    base : FormatOptions, optional
        Options to start from

    Returns
    -------
    FormatOptions
        ``base`` (or defaults) updated with the config file's values

    Raises
    ------
    ConfigError
        If a config file cannot be loaded or holds invalid values

    """
    if explicit_path:
        config_path: Optional[Path] = Path(explicit_path)
    else:
        config_path = find_config_in_parents(search_from)

    if config_path is None:
        logger.debug("No configuration file found")
        return base or FormatOptions()

    logger.debug("Loading configuration from %s", config_path)
    config = load_config_file(config_path)
    try:
        return options_from_config(config, base)
    except ConfigError as e:
        raise ConfigError(str(e), config_path=str(config_path), original_error=e.original_error) from e


__all__ = ["find_config_in_parents", "load_config_file", "load_options", "options_from_config"]
