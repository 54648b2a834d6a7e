#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/ast/__init__.py
"""Document tree consumed by the Gemini renderer.

The module consists of several components:

- nodes: node classes representing an exported Org document
- visitors: visitor base class with one ``visit_*`` method per node kind
- numbering: headline numbering paths and low-level flags
- utils: traversal and text extraction helpers

Examples
--------
    >>> from org2gmi.ast import Document, Headline, Paragraph, PlainText, Section
    >>> from org2gmi.ast.numbering import assign_headline_numbers
    >>> from org2gmi.renderers.gemini import GeminiRenderer
    >>>
    >>> doc = Document(
    ...     title=[PlainText(content="T")],
    ...     children=[
    ...         Headline(
    ...             title=[PlainText(content="H")],
    ...             children=[Section(children=[Paragraph(content=[PlainText(content="Hello")])])],
    ...         )
    ...     ],
    ... )
    >>> gemtext = GeminiRenderer().render_to_string(assign_headline_numbers(doc))

"""

from org2gmi.ast.nodes import (
    CenterBlock,
    Document,
    DocumentSettings,
    Entity,
    ExportBlock,
    FootnoteDefinition,
    FootnoteReference,
    Headline,
    HorizontalRule,
    InlineTask,
    Item,
    Keyword,
    LineBreak,
    Link,
    Markup,
    Node,
    Paragraph,
    PlainList,
    PlainText,
    PreformattedBlock,
    QuoteBlock,
    Section,
    SourceLocation,
    SpecialBlock,
    Table,
    TableCell,
    TableRow,
)
from org2gmi.ast.visitors import NodeVisitor

__all__ = [
    # Nodes
    "Node",
    "SourceLocation",
    "Document",
    "DocumentSettings",
    "Headline",
    "Section",
    "Paragraph",
    "PlainText",
    "PlainList",
    "Item",
    "QuoteBlock",
    "CenterBlock",
    "PreformattedBlock",
    "ExportBlock",
    "Keyword",
    "Link",
    "FootnoteReference",
    "FootnoteDefinition",
    "LineBreak",
    # Fallback-rendered nodes
    "Table",
    "TableRow",
    "TableCell",
    "Entity",
    "InlineTask",
    "SpecialBlock",
    "Markup",
    "HorizontalRule",
    # Visitor
    "NodeVisitor",
]
