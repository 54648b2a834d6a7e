#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/ast/numbering.py
"""Headline numbering and low-level flags.

Numbering paths and low-level flags are inputs to the renderer, never
computed by it. The parser calls :func:`assign_headline_numbers` once the
tree is built; trees assembled by hand can call it too.
"""

from __future__ import annotations

import logging

from org2gmi.ast.nodes import Document, Headline, Node
from org2gmi.constants import MAX_HEADING_LEVEL

logger = logging.getLogger(__name__)


def compute_headline_level(depth: int) -> int:
    """Return the output level of a headline; the document title holds level 1."""
    return depth + 1


def renders_as_list_item(depth: int, low_level: bool = False) -> bool:
    """Return True when a headline degrades to a list item instead of a heading line."""
    return low_level or compute_headline_level(depth) > MAX_HEADING_LEVEL


def is_unnumbered(headline: Headline) -> bool:
    """Return True when the headline carries a non-nil ``UNNUMBERED`` property."""
    properties = headline.metadata.get("properties") or {}
    value = properties.get("UNNUMBERED")
    if value is None:
        return False
    return str(value).strip().lower() != "nil"


def _numbering_limit(section_numbers: bool | int) -> int | None:
    if section_numbers is True:
        return None
    if section_numbers is False:
        return 0
    return int(section_numbers)


def assign_headline_numbers(
    doc: Document,
    section_numbers: bool | int = True,
    headline_levels: int = 5,
) -> Document:
    """Assign numbering paths and low-level flags to every headline.

    Parameters
    ----------
    doc : Document
        Document whose headlines are updated in place
    section_numbers : bool or int, default True
        ``False`` leaves every headline unnumbered; an integer numbers only
        headlines whose depth is at most that value
    headline_levels : int, default 5
        Headlines deeper than this are flagged ``low_level``

    Returns
    -------
    Document
        The same document, for chaining

    Notes
    -----
    Siblings are counted only among numbered headlines, so an
    ``UNNUMBERED`` headline neither receives a number nor consumes one, and
    its whole subtree stays unnumbered.

    """
    limit = _numbering_limit(section_numbers)

    def _assign(children: list[Node], parent_path: tuple[int, ...], numbered_context: bool) -> None:
        counter = 0
        for child in children:
            if not isinstance(child, Headline):
                continue
            child.low_level = child.depth > headline_levels
            numbered = numbered_context and not is_unnumbered(child) and (limit is None or child.depth <= limit)
            if numbered:
                counter += 1
                child.numbering = parent_path + (counter,)
                _assign(child.children, child.numbering, True)
            else:
                child.numbering = None
                _assign(child.children, parent_path, numbered_context and not is_unnumbered(child))

    _assign(doc.children, (), True)
    logger.debug("Assigned headline numbers (section_numbers=%r, headline_levels=%d)", section_numbers, headline_levels)
    return doc
