#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class used by every renderer. Each
node kind with a native Gemini rule has an abstract ``visit_*`` method, so a
renderer missing one of them cannot be instantiated. Node kinds without a
native rule route to ``generic_visit``, which is the explicit fallback arm.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for every node kind with a
    dedicated rule and override ``generic_visit`` to handle the rest.

    Examples
    --------
    Visitor that collects plain text, ignoring everything else:

        >>> class TextCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.parts = []
        ...
        ...     def visit_plain_text(self, node):
        ...         self.parts.append(node.content)
        ...
        ...     def generic_visit(self, node):
        ...         for child in node.iter_children():
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_headline(self, node: Headline) -> Any:
        """Visit a Headline node."""
        pass

    @abstractmethod
    def visit_section(self, node: Section) -> Any:
        """Visit a Section node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_plain_text(self, node: PlainText) -> Any:
        """Visit a PlainText node."""
        pass

    @abstractmethod
    def visit_plain_list(self, node: PlainList) -> Any:
        """Visit a PlainList node."""
        pass

    @abstractmethod
    def visit_item(self, node: Item) -> Any:
        """Visit an Item node."""
        pass

    @abstractmethod
    def visit_quote_block(self, node: QuoteBlock) -> Any:
        """Visit a QuoteBlock node."""
        pass

    @abstractmethod
    def visit_center_block(self, node: CenterBlock) -> Any:
        """Visit a CenterBlock node."""
        pass

    @abstractmethod
    def visit_preformatted_block(self, node: PreformattedBlock) -> Any:
        """Visit a PreformattedBlock node."""
        pass

    @abstractmethod
    def visit_export_block(self, node: ExportBlock) -> Any:
        """Visit an ExportBlock node."""
        pass

    @abstractmethod
    def visit_keyword(self, node: Keyword) -> Any:
        """Visit a Keyword node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
        pass

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    # Node kinds below have no rule of their own in every visitor.

    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        return self.generic_visit(node)

    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        return self.generic_visit(node)

    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        return self.generic_visit(node)

    def visit_entity(self, node: Entity) -> Any:
        """Visit an Entity node."""
        return self.generic_visit(node)

    def visit_inline_task(self, node: InlineTask) -> Any:
        """Visit an InlineTask node."""
        return self.generic_visit(node)

    def visit_special_block(self, node: SpecialBlock) -> Any:
        """Visit a SpecialBlock node."""
        return self.generic_visit(node)

    def visit_markup(self, node: Markup) -> Any:
        """Visit a Markup node."""
        return self.generic_visit(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""
        return self.generic_visit(node)

    def generic_visit(self, node: Node) -> Any:
        """Handle a node kind without a dedicated ``visit_*`` rule.

        The default implementation visits the node's children and returns
        nothing for the node itself.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        for child in node.iter_children():
            child.accept(self)
        return None
