#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/parsers/yaml.py
"""YAML composition with source spans.

The YAML printer needs a node tree whose nodes carry character offsets into
the original source, so it can read the comments and blank lines between
them back from the text. PyYAML's composer provides exactly that: every
node has ``start_mark`` and ``end_mark`` with an ``index`` into the source.

Scalars are resolved with the YAML 1.2 core schema rather than PyYAML's
YAML 1.1 defaults, so ``yes``/``no``/``on``/``off`` are strings and only
``true``/``false`` are booleans.

Constructs the printer cannot reproduce (anchors, aliases and explicit
tags) are detected up front from the event stream.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Any, Literal

from dapper.constants import DEPS_YAML
from dapper.exceptions import UnsupportedSyntaxError
from dapper.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

ScalarKind = Literal["null", "bool", "int", "float", "str"]

NULL_TAG = "tag:yaml.org,2002:null"
BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"

_TAG_KINDS: dict[str, ScalarKind] = {
    NULL_TAG: "null",
    BOOL_TAG: "bool",
    INT_TAG: "int",
    FLOAT_TAG: "float",
}

# (tag, pattern, first characters) for the YAML 1.2 core schema
_CORE_SCHEMA_RESOLVERS = [
    (NULL_TAG, re.compile(r"^(?:~|null|Null|NULL|)$"), ["~", "n", "N", ""]),
    (BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")),
    (INT_TAG, re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"), list("-+0123456789")),
    (
        FLOAT_TAG,
        re.compile(
            r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
            r"|[-+]?\.(?:inf|Inf|INF)"
            r"|\.(?:nan|NaN|NAN))$"
        ),
        list("-+0123456789."),
    ),
]


@functools.lru_cache(maxsize=None)
def core_schema_loader() -> Any:
    """Return a SafeLoader subclass that resolves scalars with the core schema.

    The class is built on first use so importing this module does not
    require PyYAML.
    """
    import yaml

    class DapperLoader(yaml.SafeLoader):
        """SafeLoader with YAML 1.2 core schema implicit resolvers."""

        yaml_implicit_resolvers: dict = {}

    for tag, pattern, first in _CORE_SCHEMA_RESOLVERS:
        DapperLoader.add_implicit_resolver(tag, pattern, first)

    return DapperLoader


def scalar_kind(node: Any) -> ScalarKind:
    """Classify a composed scalar node by its resolved tag.

    Quoted and block scalars always resolve to strings; plain scalars
    resolve through the core schema.
    """
    return _TAG_KINDS.get(node.tag, "str")


def is_implicit_null(node: Any) -> bool:
    """Return True for an empty plain scalar (``key:`` with no value)."""
    import yaml

    return (
        isinstance(node, yaml.ScalarNode)
        and node.style is None
        and node.value == ""
        and node.start_mark.index == node.end_mark.index
    )


@requires_dependencies("yaml", DEPS_YAML)
def check_supported(source: str) -> None:
    """Reject YAML that uses constructs the printer would lose.

    Parameters
    ----------
    source : str
        YAML source

    Raises
    ------
    UnsupportedSyntaxError
        If the source uses an anchor, an alias or an explicit tag
    yaml.YAMLError
        If the source is not well-formed YAML

    """
    import yaml

    for event in yaml.parse(source, Loader=core_schema_loader()):
        if isinstance(event, yaml.AliasEvent):
            raise UnsupportedSyntaxError(f"Alias *{event.anchor} cannot be reformatted", construct="alias")
        if isinstance(event, yaml.NodeEvent) and event.anchor is not None:
            raise UnsupportedSyntaxError(f"Anchor &{event.anchor} cannot be reformatted", construct="anchor")
        if isinstance(event, (yaml.ScalarEvent, yaml.CollectionStartEvent)) and event.tag is not None:
            raise UnsupportedSyntaxError(f"Explicit tag {event.tag} cannot be reformatted", construct="tag")


@requires_dependencies("yaml", DEPS_YAML)
def compose_documents(source: str) -> list[Any]:
    """Compose every document in ``source`` into a PyYAML node tree.

    Parameters
    ----------
    source : str
        YAML source with ``\\n`` line endings

    Returns
    -------
    list of yaml.Node
        Root node of each document, in order. Empty when the source holds
        only comments or whitespace.

    Raises
    ------
    UnsupportedSyntaxError
        If the source uses anchors, aliases or explicit tags
    yaml.YAMLError
        If the source is not well-formed YAML

    """
    import yaml

    check_supported(source)
    documents = list(yaml.compose_all(source, Loader=core_schema_loader()))
    logger.debug("Composed %d YAML document(s)", len(documents))
    return documents


__all__ = [
    "ScalarKind",
    "check_supported",
    "compose_documents",
    "core_schema_loader",
    "is_implicit_null",
    "scalar_kind",
]
