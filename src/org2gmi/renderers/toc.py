#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/renderers/toc.py
"""Table of contents builder.

The listing uses the same numbering paths and low-level flags as the
headline renderer, so a headline that degrades to a list item never shows
up in the table of contents.
"""

from __future__ import annotations

from typing import Callable

from org2gmi.ast.nodes import Document, Headline, Node
from org2gmi.ast.numbering import renders_as_list_item
from org2gmi.ast.utils import collect_headlines
from org2gmi.constants import TAG_SEPARATOR


def format_toc_prefix(headline: Headline) -> str:
    """Return ``"1.2. "`` for numbered headlines and an empty string otherwise."""
    if not headline.numbering:
        return ""
    return ".".join(str(component) for component in headline.numbering) + ". "


def iter_toc_headlines(doc: Document, depth: int | None) -> list[Headline]:
    """Return the headlines listed in the table of contents.

    Parameters
    ----------
    doc : Document
        Document to scan
    depth : int or None
        Deepest headline depth listed; None lists every depth

    """
    return [
        headline
        for headline in collect_headlines(doc)
        if not renders_as_list_item(headline.depth, headline.low_level) and (depth is None or headline.depth <= depth)
    ]


def build_toc(
    doc: Document,
    render_title: Callable[[list[Node]], str],
    depth: int | None = None,
    with_tags: bool = True,
) -> str:
    """Build the table of contents listing.

    Parameters
    ----------
    doc : Document
        Document whose headlines are listed
    render_title : callable
        Renders inline title content to text
    depth : int or None, default = None
        Deepest headline depth listed; None lists every depth
    with_tags : bool, default True
        Append the headline's tags to its entry

    Returns
    -------
    str
        One line per headline joined with newlines, or an empty string when
        nothing would be listed

    """
    lines = []
    for headline in iter_toc_headlines(doc, depth):
        title = render_title(headline.alt_title or headline.title).strip()
        line = format_toc_prefix(headline) + title
        if with_tags and headline.tags:
            line += TAG_SEPARATOR + headline.tags_string
        lines.append(line)
    toc = "\n".join(lines)
    return toc if toc.strip() else ""


__all__ = ["build_toc", "format_toc_prefix", "iter_toc_headlines"]
