#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/ast/nodes.py
"""AST node classes for document representation.

This module defines the node hierarchy the Gemini renderer consumes. The tree
mirrors the structure of an exported Org document: a document holds an
optional leading section followed by headlines, and every headline holds its
own section followed by its sub-headlines.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Structural nodes:
    - Document, Headline, Section

Block-level nodes:
    - Paragraph, PlainList, Item, QuoteBlock, CenterBlock
    - PreformattedBlock (example, fixed-width and source blocks)
    - ExportBlock, Keyword, FootnoteDefinition

Inline nodes:
    - PlainText, Link, FootnoteReference, LineBreak

Nodes without a native Gemini rule (rendered by the plain-text fallback):
    - Table, TableRow, TableCell, Entity, InlineTask, SpecialBlock,
      Markup, HorizontalRule

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, Optional

from org2gmi.constants import CheckboxState, MarkupKind, PreformattedKind, TagsMode


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Parameters
    ----------
    format : str, default "org"
        Source format
    line : int or None, default = None
        1-based line number in the source document
    column : int or None, default = None
        0-based column of the node's first character
    span : str or None, default = None
        Raw source text of the node itself
    line_text : str or None, default = None
        The complete source line the node starts on
    metadata : dict, default = empty dict
        Additional format-specific location information

    """

    format: str = "org"
    line: Optional[int] = None
    column: Optional[int] = None
    span: Optional[str] = None
    line_text: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class Node(ABC):
    """Base class for all AST nodes.

    Subclasses list the attributes holding child nodes in ``_child_fields``,
    in document order, so that generic traversals (footnote numbering,
    headline collection) can walk any tree without knowing every node kind.

    """

    metadata: dict[str, Any]
    source_location: Optional[SourceLocation]

    _child_fields: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass

    def iter_children(self) -> Iterator[Node]:
        """Yield direct child nodes in document order."""
        for name in self._child_fields:
            value = getattr(self, name, None)
            if value is None:
                continue
            if isinstance(value, Node):
                yield value
            else:
                yield from value


@dataclass
class DocumentSettings:
    """Export settings declared inside the document (``#+OPTIONS:``).

    ``None`` means the document leaves the renderer's option untouched.
    """

    with_toc: Optional[bool | int] = None
    with_tags: Optional[bool | TagsMode] = None
    with_todo_keywords: Optional[bool] = None
    with_priority: Optional[bool] = None

    def as_overrides(self) -> dict[str, Any]:
        """Return the declared settings as keyword overrides for renderer options."""
        return {
            "with_toc": self.with_toc,
            "with_tags": self.with_tags,
            "with_todo_keywords": self.with_todo_keywords,
            "with_priority": self.with_priority,
        }


# ============================================================================
# Structural Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node.

    Parameters
    ----------
    children : list of Node, default = empty list
        An optional leading Section followed by top-level Headlines
    title : list of Node or None, default = None
        Inline content of the document title
    settings : DocumentSettings
        Export settings declared by the document itself
    metadata : dict, default = empty dict
        Document-level metadata (author, date, raw keywords...)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    children: list[Node] = field(default_factory=list)
    title: Optional[list[Node]] = None
    settings: DocumentSettings = field(default_factory=DocumentSettings)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("title", "children")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Headline(Node):
    """Headline node owning its section and sub-headlines.

    Parameters
    ----------
    title : list of Node
        Inline content of the headline
    depth : int, default 1
        Relative depth, 1 for top-level headlines
    numbering : tuple of int or None, default = None
        Numbering path (one component per ancestor level), or None when the
        headline is not numbered
    alt_title : list of Node or None, default = None
        Short title used by the table of contents (``ALT_TITLE`` property)
    todo : str or None, default = None
        TODO keyword
    priority : str or None, default = None
        Priority character (``"A"`` for ``[#A]``)
    tags : list of str, default = empty list
        Tags carried by the headline itself
    low_level : bool, default False
        True when the headline is too deep to be exported as a heading
    children : list of Node, default = empty list
        The headline's Section (if any) followed by sub-Headlines

    """

    title: list[Node] = field(default_factory=list)
    depth: int = 1
    numbering: Optional[tuple[int, ...]] = None
    alt_title: Optional[list[Node]] = None
    todo: Optional[str] = None
    priority: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    low_level: bool = False
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("title", "children")

    def __post_init__(self) -> None:
        """Validate the headline depth."""
        if self.depth < 1:
            raise ValueError(f"Headline depth must be at least 1, got {self.depth}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_headline``."""
        return visitor.visit_headline(self)

    @property
    def tags_string(self) -> str:
        """Tags in Org notation (``:a:b:``), or an empty string."""
        if not self.tags:
            return ""
        return ":" + ":".join(self.tags) + ":"

    @property
    def section(self) -> Optional[Section]:
        """The headline's own section, if it has one."""
        for child in self.children:
            if isinstance(child, Section):
                return child
        return None

    @property
    def subheadlines(self) -> list[Headline]:
        """Direct sub-headlines in document order."""
        return [child for child in self.children if isinstance(child, Headline)]


@dataclass
class Section(Node):
    """Content directly following a headline, up to the next headline.

    A section owns the link registry that numbers the links rendered inline
    within it.

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("children",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_section``."""
        return visitor.visit_section(self)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("content",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class PlainList(Node):
    """List node (ordered, unordered or descriptive).

    Parameters
    ----------
    items : list of Item
        List items
    ordered : bool, default False
        Whether items are numbered
    descriptive : bool, default False
        Whether items carry ``tag :: body`` descriptions

    """

    items: list[Item] = field(default_factory=list)
    ordered: bool = False
    descriptive: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("items",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_plain_list``."""
        return visitor.visit_plain_list(self)


@dataclass
class Item(Node):
    """List item node.

    Parameters
    ----------
    children : list of Node
        Block content of the item (paragraphs, nested lists...)
    ordinal : int or None, default = None
        Position of the item within an ordered list
    checkbox : {"on", "off", "trans"} or None, default = None
        Checkbox state
    tag : list of Node or None, default = None
        Descriptive tag of the item (``tag :: body``)

    """

    children: list[Node] = field(default_factory=list)
    ordinal: Optional[int] = None
    checkbox: Optional[CheckboxState] = None
    tag: Optional[list[Node]] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("tag", "children")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_item``."""
        return visitor.visit_item(self)


@dataclass
class QuoteBlock(Node):
    """Quote block (``#+BEGIN_QUOTE``)."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("children",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_quote_block``."""
        return visitor.visit_quote_block(self)


@dataclass
class CenterBlock(Node):
    """Center block (``#+BEGIN_CENTER``)."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("children",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_center_block``."""
        return visitor.visit_center_block(self)


@dataclass
class PreformattedBlock(Node):
    """Literal block: example block, fixed-width area or source block.

    Parameters
    ----------
    content : str
        Literal content, possibly indented
    kind : {"example", "fixed-width", "source"}, default "example"
        Which Org construct produced the block
    language : str or None, default = None
        Source language (source blocks only)
    caption : str or None, default = None
        Caption from a preceding ``#+CAPTION:`` keyword

    """

    content: str = ""
    kind: PreformattedKind = "example"
    language: Optional[str] = None
    caption: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_preformatted_block``."""
        return visitor.visit_preformatted_block(self)


@dataclass
class ExportBlock(Node):
    """Raw export block (``#+BEGIN_EXPORT <type>``)."""

    block_type: str = ""
    value: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_export_block``."""
        return visitor.visit_export_block(self)


@dataclass
class Keyword(Node):
    """Keyword line (``#+KEY: value``) kept in the body."""

    key: str = ""
    value: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_keyword``."""
        return visitor.visit_keyword(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote definition (``[fn:label] text``).

    Definitions are never rendered in place; the renderer collects the
    referenced ones into the footnote section at the end of the document.

    """

    label: str = ""
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("content",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_footnote_definition``."""
        return visitor.visit_footnote_definition(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class PlainText(Node):
    """Plain text node."""

    content: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_plain_text``."""
        return visitor.visit_plain_text(self)


@dataclass
class Link(Node):
    """Hyperlink node.

    Parameters
    ----------
    target : str
        Raw link target, e.g. ``https://example.com`` or ``file:notes.org``
    content : list of Node, default = empty list
        Description; empty when the link has none
    source_location : SourceLocation or None, default = None
        Location carrying the raw ``span`` of the link and the ``line_text``
        it sits on, used to detect links that occupy a whole line

    """

    target: str = ""
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("content",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_link``."""
        return visitor.visit_link(self)

    def is_alone_on_line(self) -> bool:
        """Return True when the link's raw span is its entire (trimmed) source line."""
        location = self.source_location
        if location is None or not location.span or location.line_text is None:
            return False
        return location.span.strip() == location.line_text.strip()


@dataclass
class FootnoteReference(Node):
    """Footnote reference (``[fn:label]``, ``[fn::inline text]``).

    Parameters
    ----------
    label : str
        Footnote label; generated for anonymous inline footnotes
    definition : list of Node or None, default = None
        Inline definition carried by the reference itself

    """

    label: str = ""
    definition: Optional[list[Node]] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("definition",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_footnote_reference``."""
        return visitor.visit_footnote_reference(self)


@dataclass
class LineBreak(Node):
    """Explicit line break (``\\\\`` at the end of a line)."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_line_break``."""
        return visitor.visit_line_break(self)


# ============================================================================
# Nodes rendered by the fallback renderer
# ============================================================================


@dataclass
class Markup(Node):
    """Inline emphasis-style markup.

    Parameters
    ----------
    kind : {"bold", "italic", "underline", "strike-through", "code", "verbatim"}
        Markup type
    content : list of Node
        Marked-up content

    """

    kind: MarkupKind = "bold"
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("content",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_markup``."""
        return visitor.visit_markup(self)


@dataclass
class Entity(Node):
    r"""Org entity such as ``\alpha`` or ``\mdash``."""

    name: str = ""
    utf8: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_entity``."""
        return visitor.visit_entity(self)


@dataclass
class Table(Node):
    """Table node.

    Parameters
    ----------
    rows : list of TableRow
        Body rows
    header : TableRow or None, default = None
        Header row (rows above the first rule line)
    caption : str or None, default = None
        Caption from a preceding ``#+CAPTION:`` keyword

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    caption: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("header", "rows")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node."""

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("cells",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_row``."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("content",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_cell``."""
        return visitor.visit_table_cell(self)


@dataclass
class InlineTask(Node):
    """Inline task: a deep headline embedded in a section's body."""

    title: list[Node] = field(default_factory=list)
    todo: Optional[str] = None
    priority: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("title", "children")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_inline_task``."""
        return visitor.visit_inline_task(self)


@dataclass
class SpecialBlock(Node):
    """Any ``#+BEGIN_<NAME>`` block without a dedicated node kind."""

    block_type: str = ""
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    _child_fields: ClassVar[tuple[str, ...]] = ("children",)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_special_block``."""
        return visitor.visit_special_block(self)


@dataclass
class HorizontalRule(Node):
    """Horizontal rule (five or more dashes)."""

    metadata: dict[str, Any] = field(default_factory=dict)
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_horizontal_rule``."""
        return visitor.visit_horizontal_rule(self)
