#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/org2gmi/renderers/__init__.py
"""Renderers turning the document tree into text.

Available renderers:
- GeminiRenderer: Render to gemtext, with per-section link lists, footnotes
  and a table of contents
- PlainTextRenderer: Render to plain text; also renders the node kinds
  gemtext cannot express on behalf of GeminiRenderer

Examples
--------
    >>> from org2gmi.ast import Document, Headline, PlainText
    >>> from org2gmi.renderers import GeminiRenderer
    >>> doc = Document(children=[Headline(title=[PlainText(content="Intro")], numbering=(1,))])
    >>> gemtext = GeminiRenderer().render_to_string(doc)

"""

from org2gmi.renderers.base import BaseRenderer, InlineContentMixin
from org2gmi.renderers.gemini import GeminiRenderer
from org2gmi.renderers.links import LinkEntry, LinkRegistry
from org2gmi.renderers.plaintext import PlainTextRenderer
from org2gmi.renderers.toc import build_toc

__all__ = [
    "BaseRenderer",
    "GeminiRenderer",
    "InlineContentMixin",
    "LinkEntry",
    "LinkRegistry",
    "PlainTextRenderer",
    "build_toc",
]
