#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/utils/packages.py
"""Installed-distribution checks behind ``requires_dependencies``.

dapper's parsers declare what they need as ``(install_name, import_name,
version_spec)`` tuples, ``DEPS_MARKDOWN`` for mistune and ``DEPS_YAML`` for
PyYAML. The install name is the distribution on the package index (``pyyaml``)
and is what version metadata is looked up by; the import name (``yaml``) is
what gets imported.
"""

from __future__ import annotations

import importlib
from importlib import metadata
from typing import List, Optional, Sequence, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet

Requirement = Tuple[str, str, str]


def get_package_version(install_name: str) -> Optional[str]:
    """Return the installed version of ``install_name``, or None if it is absent.

    Examples
    --------
        >>> get_package_version("dapper-not-installed") is None
        True

    """
    try:
        return metadata.version(install_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(install_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check an installed distribution against a specifier such as ``">=6.0"``.

    Parameters
    ----------
    install_name : str
        Distribution name, e.g. ``"mistune"`` or ``"pyyaml"``
    version_spec : str
        PEP 440 specifier set

    Returns
    -------
    tuple of (bool, str or None)
        Whether the requirement is met, and the installed version

    Raises
    ------
    ValueError
        If ``version_spec`` cannot be parsed

    """
    installed = get_package_version(install_name)
    if not installed:
        return False, None

    try:
        spec = SpecifierSet(version_spec)
    except InvalidSpecifier as e:
        raise ValueError(f"Invalid version specifier for {install_name}: {version_spec!r}") from e

    return version.parse(installed) in spec, installed


def find_unmet_requirements(
    packages: Sequence[Requirement],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str, str]], Optional[ImportError]]:
    """Import each required module and check its version.

    Parameters
    ----------
    packages : sequence of (install_name, import_name, version_spec)
        Requirements as declared in ``dapper.constants``; an empty
        ``version_spec`` accepts any installed version

    Returns
    -------
    tuple
        ``(missing, version_mismatches, first_import_error)`` where
        ``missing`` holds ``(install_name, version_spec)`` for modules that
        failed to import and ``version_mismatches`` holds
        ``(install_name, version_spec, installed_version)``

    """
    missing: List[Tuple[str, str]] = []
    mismatches: List[Tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            if first_error is None:
                first_error = e
            continue

        if version_spec:
            meets, installed = check_version_requirement(install_name, version_spec)
            if not meets:
                # importable but without metadata, e.g. a source checkout on sys.path
                mismatches.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatches, first_error


__all__ = ["Requirement", "get_package_version", "check_version_requirement", "find_unmet_requirements"]
