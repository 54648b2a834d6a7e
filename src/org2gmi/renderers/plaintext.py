#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/renderers/plaintext.py
"""Plain text rendering from AST.

This module provides the PlainTextRenderer class, a complete renderer for
unformatted text. The Gemini renderer composes one and hands it every node
kind gemtext has no rule for: tables, entities, inline tasks, special
blocks, inline markup, horizontal rules and centered text.

When called through :meth:`PlainTextRenderer.render_node` with a delegate,
children that the delegate renders natively (paragraphs, links, footnote
references...) are handed back to it, so a link inside a table cell is
still numbered in the enclosing section's link list.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from org2gmi.ast.nodes import (
    CenterBlock,
    Document,
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
    SpecialBlock,
    Table,
    TableCell,
    TableRow,
)
from org2gmi.ast.visitors import NodeVisitor
from org2gmi.constants import CHECKBOX_MARKERS, FALLBACK_EXPORT_TYPES
from org2gmi.options.plaintext import PlainTextOptions
from org2gmi.renderers.base import BaseRenderer, InlineContentMixin
from org2gmi.utils.text import dedent_block

logger = logging.getLogger(__name__)

FALLBACK_NODE_TYPES: tuple[type[Node], ...] = (
    Table,
    TableRow,
    TableCell,
    Entity,
    InlineTask,
    SpecialBlock,
    Markup,
    HorizontalRule,
    CenterBlock,
)
"""Node kinds rendered by this renderer even when a delegate is set."""

BLOCK_FALLBACK_TYPES: tuple[type[Node], ...] = (Table, InlineTask, SpecialBlock, HorizontalRule, CenterBlock)
"""Fallback node kinds that form blocks of their own."""


class PlainTextRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to plain, unformatted text.

    Parameters
    ----------
    options : PlainTextOptions or None, default = None
        Plain text rendering options

    Examples
    --------
        >>> from org2gmi.ast import Document, Paragraph, PlainText
        >>> doc = Document(children=[Paragraph(content=[PlainText(content="Hello")])])
        >>> PlainTextRenderer().render_to_string(doc)
        'Hello'

    """

    def __init__(self, options: PlainTextOptions | None = None):
        """Initialize the plain text renderer with options."""
        BaseRenderer._validate_options_type(options, PlainTextOptions, "plaintext")
        options = options or PlainTextOptions()
        BaseRenderer.__init__(self, options)
        self.options: PlainTextOptions = options
        self._output: list[str] = []
        self._delegate: Optional[Any] = None

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to plain text string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            Plain text output

        """
        self._output = []
        self._delegate = None
        doc.accept(self)
        return "".join(self._output).strip("\n")

    def render_node(self, node: Node, delegate: Optional[Any] = None) -> str:
        """Render a single node, handing natively supported children to ``delegate``.

        Parameters
        ----------
        node : Node
            Node to render
        delegate : object or None, default = None
            Renderer exposing ``render_fragment(node) -> str``. Children that
            are not fallback kinds are rendered by it.

        Returns
        -------
        str
            Rendered text without surrounding newlines

        """
        saved_delegate = self._delegate
        saved_output = self._output
        self._delegate = delegate
        self._output = []
        try:
            node.accept(self)
            return "".join(self._output).strip("\n")
        finally:
            self._delegate = saved_delegate
            self._output = saved_output

    def _render_inline_content(self, content: list[Node]) -> str:
        if self._delegate is None:
            return super()._render_inline_content(content)
        parts: list[str] = []
        for node in content:
            if isinstance(node, FALLBACK_NODE_TYPES):
                parts.append(super()._render_inline_content([node]))
            else:
                parts.append(self._delegate.render_fragment(node))
        return "".join(parts)

    def _render_blocks(self, children: list[Node]) -> str:
        """Render block children separated by the paragraph separator."""
        blocks = []
        for child in children:
            text = self._render_inline_content([child]).strip("\n")
            if text:
                blocks.append(text)
        return self.options.paragraph_separator.join(blocks)

    @staticmethod
    def _indent(text: str, prefix: str = "  ") -> str:
        return "\n".join((prefix + line).rstrip() for line in text.split("\n"))

    def visit_document(self, node: Document) -> None:
        """Render a Document node: title, then every child block."""
        parts = []
        if node.title:
            parts.append(self._render_inline_content(node.title).strip())
        body = self._render_blocks(node.children)
        if body:
            parts.append(body)
        self._output.append(self.options.paragraph_separator.join(parts))

    def visit_headline(self, node: Headline) -> None:
        """Render a Headline node as its title line followed by its children."""
        title = self._render_inline_content(node.title).strip()
        if node.todo:
            title = f"{node.todo} {title}"
        body = self._render_blocks(node.children)
        self._output.append(f"{title}{self.options.paragraph_separator}{body}" if body else title)

    def visit_section(self, node: Section) -> None:
        """Render a Section node."""
        self._output.append(self._render_blocks(node.children))

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_content(node.content).strip())

    def visit_plain_text(self, node: PlainText) -> None:
        """Render a PlainText node."""
        self._output.append(node.content)

    def visit_plain_list(self, node: PlainList) -> None:
        """Render a PlainList node, one item per line."""
        lines = []
        for index, item in enumerate(node.items, start=1):
            bullet = f"{item.ordinal or index}." if node.ordered else "-"
            lines.append(self._render_item(item, bullet))
        self._output.append("\n".join(lines))

    def _render_item(self, item: Item, bullet: str) -> str:
        checkbox = CHECKBOX_MARKERS.get(item.checkbox, "")
        tag = f"{self._render_inline_content(item.tag).strip()}: " if item.tag else ""
        body = "\n".join(
            text for text in (self._render_inline_content([child]).strip("\n") for child in item.children) if text
        )
        first, _, rest = body.partition("\n")
        text = f"{bullet} {checkbox}{tag}{first.strip()}"
        if rest:
            text += "\n" + self._indent(rest, " " * (len(bullet) + 1))
        return text

    def visit_item(self, node: Item) -> None:
        """Render an Item node outside of a list."""
        self._output.append(self._render_item(node, "-"))

    def visit_quote_block(self, node: QuoteBlock) -> None:
        """Render a QuoteBlock node indented by two spaces."""
        self._output.append(self._indent(self._render_blocks(node.children)))

    def visit_center_block(self, node: CenterBlock) -> None:
        """Render a CenterBlock node centered to ``text_width``."""
        text = self._render_blocks(node.children)
        width = self.options.text_width
        self._output.append("\n".join(line.strip().center(width).rstrip() for line in text.split("\n")))

    def visit_preformatted_block(self, node: PreformattedBlock) -> None:
        """Render a PreformattedBlock node as its de-indented content."""
        self._output.append(dedent_block(node.content))

    def visit_export_block(self, node: ExportBlock) -> None:
        """Render an ExportBlock node when it targets plain text."""
        if node.block_type.lower() in FALLBACK_EXPORT_TYPES:
            self._output.append(dedent_block(node.value))

    def visit_keyword(self, node: Keyword) -> None:
        """Render a Keyword node when it targets plain text."""
        if node.key.lower() in FALLBACK_EXPORT_TYPES:
            self._output.append(node.value)

    def visit_link(self, node: Link) -> None:
        """Render a Link node as its description, or its target."""
        content = self._render_inline_content(node.content)
        self._output.append(content or node.target)

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference node as ``[label]``."""
        self._output.append(f"[{node.label}]")

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a FootnoteDefinition node as ``[label] text``."""
        self._output.append(f"[{node.label}] {self._render_blocks(node.content)}")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._output.append("\n")

    def visit_table(self, node: Table) -> None:
        """Render a Table node with separated cells, one row per line."""
        rows_output = []
        if node.header and self.options.include_table_headers:
            header = self._render_table_row_to_string(node.header)
            rows_output.append(header)
            rows_output.append(self.options.horizontal_rule_char * len(header))
        for row in node.rows:
            rows_output.append(self._render_table_row_to_string(row))
        if node.caption:
            rows_output.append(node.caption)
        self._output.append("\n".join(rows_output))

    def _render_table_row_to_string(self, row: TableRow) -> str:
        cells_text = []
        for cell in row.cells:
            content = self._render_inline_content(cell.content)
            cells_text.append(content.replace("\n", " ").strip())
        return self.options.table_cell_separator.join(cells_text)

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node outside of a table."""
        self._output.append(self._render_table_row_to_string(node))

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node outside of a table."""
        self._output.append(self._render_inline_content(node.content))

    def visit_entity(self, node: Entity) -> None:
        """Render an Entity node as its UTF-8 replacement."""
        self._output.append(node.utf8)

    def visit_inline_task(self, node: InlineTask) -> None:
        """Render an InlineTask node as a title line with its body indented below."""
        title = self._render_inline_content(node.title).strip()
        line = title
        if node.priority:
            line = f"[#{node.priority}] {line}"
        if node.todo:
            line = f"{node.todo} {line}"
        if node.tags:
            line += "  :" + ":".join(node.tags) + ":"
        body = self._render_blocks(node.children)
        self._output.append(f"{line}\n{self._indent(body)}" if body else line)

    def visit_special_block(self, node: SpecialBlock) -> None:
        """Render a SpecialBlock node as its content."""
        self._output.append(self._render_blocks(node.children))

    def visit_markup(self, node: Markup) -> None:
        """Render a Markup node; code and verbatim keep backquotes."""
        content = self._render_inline_content(node.content)
        if node.kind in ("code", "verbatim"):
            content = f"`{content}`"
        self._output.append(content)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Render a HorizontalRule node across ``text_width``."""
        self._output.append(self.options.horizontal_rule_char * self.options.text_width)

    def generic_visit(self, node: Node) -> None:
        """Render unknown node kinds by rendering their children."""
        logger.debug("No plain-text rule for %s; rendering children only", type(node).__name__)
        self._output.append(self._render_inline_content(list(node.iter_children())))
