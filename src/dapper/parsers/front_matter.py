#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/parsers/front_matter.py
"""Front matter extraction for Markdown documents.

Front matter is a block delimited by ``---`` lines at the very top of a
document. It is passed through the formatter verbatim: only the body that
follows it is parsed and re-emitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


@dataclass(frozen=True)
class FrontMatterResult:
    """Result of splitting a document into front matter and content.

    Parameters
    ----------
    front_matter : str or None
        Raw text between the delimiters, or None when the document has no
        front matter
    content : str
        The rest of the document

    """

    front_matter: Optional[str]
    content: str

    @property
    def has_front_matter(self) -> bool:
        """Return True when a delimited block was found."""
        return self.front_matter is not None


def extract_front_matter(text: str) -> FrontMatterResult:
    """Split leading front matter from a document.

    Front matter is recognized only when the first line is ``---`` and a
    later line is also ``---`` (surrounding whitespace ignored). Without a
    closing delimiter the input is returned unchanged as content.

    Parameters
    ----------
    text : str
        Full document text with ``\\n`` line endings

    Returns
    -------
    FrontMatterResult
        The front matter (without delimiters) and the remaining content.
        One blank line directly after the closing delimiter is dropped.

    Examples
    --------
        >>> result = extract_front_matter("---\\ntitle: T\\n---\\n\\n# H")
        >>> result.front_matter
        'title: T'
        >>> result.content
        '# H'

    """
    lines = text.split("\n")
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return FrontMatterResult(front_matter=None, content=text)

    closing = None
    for index in range(1, len(lines)):
        if lines[index].strip() == FRONT_MATTER_DELIMITER:
            closing = index
            break

    if closing is None:
        logger.debug("Opening front matter delimiter has no closing delimiter; treating as content")
        return FrontMatterResult(front_matter=None, content=text)

    front_matter = "\n".join(lines[1:closing])
    rest = lines[closing + 1 :]
    if rest and not rest[0].strip():
        rest = rest[1:]

    return FrontMatterResult(front_matter=front_matter, content="\n".join(rest))


def with_front_matter(front_matter: Optional[str], content: str) -> str:
    """Reattach front matter to formatted content.

    Parameters
    ----------
    front_matter : str or None
        Raw front matter text without delimiters
    content : str
        Formatted document body

    Returns
    -------
    str
        ``---\\n<front matter>\\n---\\n\\n<content>``, or ``content`` unchanged
        when the front matter is None or empty

    """
    if not front_matter:
        return content
    block = f"{FRONT_MATTER_DELIMITER}\n{front_matter}\n{FRONT_MATTER_DELIMITER}\n"
    return f"{block}\n{content}" if content else block


__all__ = ["FrontMatterResult", "extract_front_matter", "with_front_matter"]
