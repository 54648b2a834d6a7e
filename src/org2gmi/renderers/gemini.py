#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/renderers/gemini.py
"""Gemini (gemtext) rendering from AST.

This module provides the GeminiRenderer class which converts an Org
document tree into gemtext: ``#`` headings, ``*`` list items, ``>`` quotes,
fenced preformatted blocks and ``=> target label`` link lines.

Two pieces of state cross node boundaries while a document renders:

- every Section owns a :class:`~org2gmi.renderers.links.LinkRegistry`
  that numbers the links rendered inline within it; the registry's entries
  are listed at the end of the section and the registry is then discarded
- footnote ids are assigned once per document in first-reference order by
  :class:`~org2gmi.utils.footnotes.FootnoteNumberer`

Node kinds without a gemtext rule are handed to a composed
:class:`~org2gmi.renderers.plaintext.PlainTextRenderer`.

"""

from __future__ import annotations

import logging
from typing import Optional, Union

from org2gmi.ast.nodes import (
    CenterBlock,
    Document,
    ExportBlock,
    FootnoteDefinition,
    FootnoteReference,
    Headline,
    Item,
    Keyword,
    LineBreak,
    Link,
    Node,
    Paragraph,
    PlainList,
    PlainText,
    PreformattedBlock,
    QuoteBlock,
    Section,
)
from org2gmi.ast.numbering import compute_headline_level, renders_as_list_item
from org2gmi.ast.visitors import NodeVisitor
from org2gmi.constants import (
    CHECKBOX_MARKERS,
    CODE_FENCE,
    FALLBACK_EXPORT_TYPES,
    HEADLINE_BULLET_WIDTH,
    LINK_LINE_PREFIX,
    QUOTE_PREFIX,
    TAG_SEPARATOR,
)
from org2gmi.exceptions import RenderingError
from org2gmi.options.gemini import GeminiRendererOptions
from org2gmi.renderers.base import BaseRenderer, InlineContentMixin
from org2gmi.renderers.links import LinkRegistry, compute_link_label, resolve_link_target
from org2gmi.renderers.plaintext import BLOCK_FALLBACK_TYPES, FALLBACK_NODE_TYPES, PlainTextRenderer
from org2gmi.renderers.toc import build_toc
from org2gmi.utils.footnotes import FootnoteNumberer
from org2gmi.utils.text import collapse_lines, dedent_block, format_paragraph, to_superscript

logger = logging.getLogger(__name__)


def format_headline_bullet(numbering: Optional[tuple[int, ...]]) -> str:
    """Return the padded bullet of a headline rendered as a list item.

    ``*`` for unnumbered headlines, ``"<n>."`` with the last numbering
    component otherwise, padded to four columns.

    Examples
    --------
        >>> format_headline_bullet(None)
        '*   '
        >>> format_headline_bullet((1, 2, 3))
        '3.  '

    """
    bullet = f"{numbering[-1]}." if numbering else "*"
    return bullet.ljust(HEADLINE_BULLET_WIDTH)


def format_fence_caption(language: Optional[str], caption: Optional[str]) -> str:
    """Return the text following the opening fence of a preformatted block."""
    if language and caption:
        return f"{language} - {caption}"
    return language or caption or ""


class GeminiRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to gemtext.

    Parameters
    ----------
    options : GeminiRendererOptions or None, default = None
        Gemini rendering options
    fallback : PlainTextRenderer, bool or None, default = None
        Renderer for node kinds gemtext has no rule for. None or True builds
        one from ``options.fallback_options``; False disables the fallback,
        in which case such nodes are omitted (or raise when
        ``options.strict`` is set).

    Examples
    --------
    Basic usage:

        >>> from org2gmi.ast import Document, Headline, Paragraph, PlainText, Section
        >>> doc = Document(
        ...     title=[PlainText(content="T")],
        ...     children=[
        ...         Headline(
        ...             title=[PlainText(content="H")],
        ...             numbering=(1,),
        ...             children=[Section(children=[Paragraph(content=[PlainText(content="Hi")])])],
        ...         )
        ...     ],
        ... )
        >>> print(GeminiRenderer().render_to_string(doc))
        # T
        <BLANKLINE>
        ## Table of Contents
        1. H
        <BLANKLINE>
        <BLANKLINE>
        ## H
        <BLANKLINE>
        Hi
        <BLANKLINE>

    """

    def __init__(
        self,
        options: GeminiRendererOptions | None = None,
        fallback: Union[PlainTextRenderer, bool, None] = None,
    ):
        """Initialize the Gemini renderer with options."""
        BaseRenderer._validate_options_type(options, GeminiRendererOptions, "gemini")
        options = options or GeminiRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: GeminiRendererOptions = options
        self._base_options = options

        if fallback is None or fallback is True:
            self._fallback: Optional[PlainTextRenderer] = PlainTextRenderer(options.fallback_options)
        elif fallback is False:
            self._fallback = None
        else:
            self._fallback = fallback

        self._output: list[str] = []
        self._registries: list[LinkRegistry] = []
        self._list_context: list[bool] = []
        self._footnotes = FootnoteNumberer()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to gemtext.

        Settings declared by the document (``doc.settings``) override the
        renderer's options for this call only.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            Gemtext ending with a single newline

        """
        self._reset(doc)
        self.options = self._base_options.create_updated(**doc.settings.as_overrides())
        try:
            doc.accept(self)
            return "".join(self._output)
        finally:
            self.options = self._base_options

    def render_subtree(self, node: Node) -> str:
        """Render one node and its descendants with fresh state.

        Parameters
        ----------
        node : Node
            Root of the subtree

        Returns
        -------
        str
            Rendered text without trailing newlines

        """
        self._reset(node)
        return self._render_inline_content([node]).strip("\n")

    def render_fragment(self, node: Node) -> str:
        """Render one node within the current rendering state.

        Used by the fallback renderer to hand back children it delegates,
        so that links inside fallback-rendered nodes still register in the
        enclosing section.
        """
        return self._render_inline_content([node])

    def render_section(self, section: Section, registry: Optional[LinkRegistry] = None) -> str:
        """Render a section followed by the link lines of its registry.

        Parameters
        ----------
        section : Section
            Section to render
        registry : LinkRegistry or None, default = None
            Registry collecting the section's inline links; a new one is
            created when omitted. Passing one lets callers inspect it after
            the call.

        Returns
        -------
        str
            Rendered section

        """
        registry = registry if registry is not None else LinkRegistry()
        self._registries.append(registry)
        try:
            body = self._render_inline_content(section.children)
        finally:
            self._registries.pop()
        if registry:
            body += registry.render_lines() + "\n\n"
        return body

    def _reset(self, root: Node) -> None:
        self._output = []
        self._registries = []
        self._list_context = []
        self._footnotes = FootnoteNumberer()
        self._footnotes.collect(root)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def current_registry(self) -> Optional[LinkRegistry]:
        """Registry of the innermost section being rendered, if any."""
        return self._registries[-1] if self._registries else None

    def _footnote_marker(self, footnote_id: int) -> str:
        if self.options.footnote_style == "superscript":
            return to_superscript(footnote_id)
        return f"[{footnote_id}]"

    def _scheme_suffix_applies(self, standalone: bool) -> bool:
        mode = self.options.scheme_suffix
        if mode == "always":
            return True
        if mode == "never":
            return False
        return standalone

    def _heading_text(self, node: Headline) -> str:
        text = self._render_inline_content(node.title).strip()
        if self.options.with_priority and node.priority:
            text = f"[#{node.priority}] {text}"
        if self.options.with_todo_keywords and node.todo:
            text = f"{node.todo} {text}"
        return text

    def _render_toc_title(self, title: list[Node]) -> str:
        self._registries.append(LinkRegistry())
        try:
            return collapse_lines(self._render_inline_content(title))
        finally:
            self._registries.pop()

    def _render_footnote_section(self) -> str:
        registry = LinkRegistry()
        entries = []
        self._registries.append(registry)
        try:
            for footnote_id, _label, content in self._footnotes.iter_definitions():
                text = collapse_lines(self._render_inline_content(content))
                entries.append(f"{self._footnote_marker(footnote_id)} {text}")
        finally:
            self._registries.pop()
        if not entries:
            return ""
        section = f"## {self.options.footnotes_title}\n\n" + "\n\n".join(entries) + "\n\n"
        if registry:
            section += registry.render_lines() + "\n"
        return section

    def _render_with_fallback(self, node: Node) -> Optional[str]:
        if self._fallback is None:
            self._unresolved(node)
            return None
        return self._fallback.render_node(node, delegate=self)

    def _unresolved(self, node: Node) -> None:
        if self.options.strict:
            raise RenderingError(f"No rendering rule for {type(node).__name__}", rendering_stage="dispatch")
        logger.debug("No rendering rule for %s; omitting it", type(node).__name__)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Assemble title, table of contents, body and footnote section."""
        output = ""
        title = collapse_lines(self._render_inline_content(node.title)) if node.title else ""
        if title:
            output += f"# {title}\n\n"

        depth = self.options.toc_depth
        if depth != 0:
            toc = build_toc(node, self._render_toc_title, depth=depth, with_tags=self.options.tags_in_toc)
            if toc:
                output += f"## {self.options.toc_title}\n{toc}\n\n\n"

        output += self._render_inline_content(node.children)

        footnotes = self._render_footnote_section()
        if footnotes:
            output = output.rstrip("\n") + "\n\n" + footnotes

        self._output.append(output.rstrip("\n") + "\n")

    def visit_headline(self, node: Headline) -> None:
        """Render a headline as a ``#`` heading, or as a list item when too deep.

        Links in the title are numbered in the registry of the section
        directly below the headline and listed at its end.
        """
        registry = LinkRegistry()
        self._registries.append(registry)
        try:
            heading = self._heading_text(node)
        finally:
            self._registries.pop()
        if self.options.tags_in_headlines and node.tags:
            heading += TAG_SEPARATOR + node.tags_string
        children = self._render_headline_children(node.children, registry)

        if renders_as_list_item(node.depth, node.low_level):
            line = format_headline_bullet(node.numbering) + heading
        else:
            line = "#" * compute_headline_level(node.depth) + " " + heading
        self._output.append(f"{line}\n\n{children}")

    def _render_headline_children(self, children: list[Node], registry: LinkRegistry) -> str:
        if children and isinstance(children[0], Section):
            return self.render_section(children[0], registry) + self._render_inline_content(children[1:])
        links = registry.render_lines() + "\n\n" if registry else ""
        return links + self._render_inline_content(children)

    def visit_section(self, node: Section) -> None:
        """Render a section with its own link registry."""
        self._output.append(self.render_section(node))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph with soft line breaks joined."""
        text = format_paragraph(self._render_inline_content(node.content), trim_mode=self.options.paragraph_trim)
        if text:
            self._output.append(text + "\n\n")

    def visit_plain_list(self, node: PlainList) -> None:
        """Render a list, one item per line."""
        self._list_context.append(node.ordered)
        try:
            items = [self._render_item(item, index) for index, item in enumerate(node.items, start=1)]
        finally:
            self._list_context.pop()
        if items:
            self._output.append("\n".join(items) + "\n\n")

    def visit_item(self, node: Item) -> None:
        """Render a list item."""
        self._output.append(self._render_item(node, None))

    def _render_item(self, node: Item, index: Optional[int]) -> str:
        ordered = self._list_context[-1] if self._list_context else False
        bullet = f"{node.ordinal or index or 1}." if ordered else "*"
        checkbox = CHECKBOX_MARKERS.get(node.checkbox, "")
        tag = f"{collapse_lines(self._render_inline_content(node.tag))}: " if node.tag else ""
        blocks = (self._render_inline_content([child]).strip("\n") for child in node.children)
        body = "\n".join(block for block in blocks if block).strip()
        return f"{bullet} {checkbox}{tag}{body}"

    def visit_quote_block(self, node: QuoteBlock) -> None:
        """Render a quote with every line prefixed by ``> ``."""
        contents = self._render_inline_content(node.children)
        text = format_paragraph(contents, prefix=QUOTE_PREFIX, trim_mode=self.options.paragraph_trim)
        if text:
            self._output.append(text + "\n\n")

    def visit_center_block(self, node: CenterBlock) -> None:
        """Render a center block through the fallback renderer inside a fence."""
        text = self._render_with_fallback(node)
        if text:
            self._output.append(f"{CODE_FENCE}\n{text}\n{CODE_FENCE}\n\n")

    def visit_preformatted_block(self, node: PreformattedBlock) -> None:
        """Render example, fixed-width and source blocks as a fenced block."""
        caption = format_fence_caption(node.language, node.caption)
        content = dedent_block(node.content)
        self._output.append(f"{CODE_FENCE}{caption}\n{content}\n{CODE_FENCE}\n\n")

    def visit_export_block(self, node: ExportBlock) -> None:
        """Emit gemtext export blocks verbatim; other types are dropped or delegated."""
        if self.options.is_passthrough_type(node.block_type):
            value = dedent_block(node.value)
            if value:
                self._output.append(value + "\n\n")
            return
        text = self._render_foreign_export(node, node.block_type)
        if text:
            self._output.append(text + "\n\n")

    def visit_keyword(self, node: Keyword) -> None:
        """Emit gemtext keywords verbatim; other keywords are dropped or delegated."""
        if self.options.is_passthrough_type(node.key):
            self._output.append(node.value + "\n")
            return
        text = self._render_foreign_export(node, node.key)
        if text:
            self._output.append(text + "\n")

    def _render_foreign_export(self, node: Node, export_type: str) -> Optional[str]:
        if not self.options.delegate_foreign_exports or export_type.lower() not in FALLBACK_EXPORT_TYPES:
            logger.debug("Dropping %s of type %r", type(node).__name__, export_type)
            return None
        return self._render_with_fallback(node)

    # ------------------------------------------------------------------
    # Inline
    # ------------------------------------------------------------------

    def visit_plain_text(self, node: PlainText) -> None:
        """Render plain text unchanged, minus the newline already closing a preceding link line."""
        content = node.content
        if content.startswith("\n") and self._follows_link_line():
            content = content[1:]
        self._output.append(content)

    def _follows_link_line(self) -> bool:
        if not self._output:
            return False
        previous = self._output[-1]
        return previous.startswith(LINK_LINE_PREFIX) and previous.endswith("\n")

    def visit_link(self, node: Link) -> None:
        """Render a link as a ``=>`` line or as ``label[n]`` registered in the section."""
        target = resolve_link_target(node.target)
        description = self._render_inline_content(node.content) if node.content else ""
        standalone = node.is_alone_on_line()
        label = compute_link_label(node.target, target, description, self._scheme_suffix_applies(standalone))

        if standalone:
            self._output.append(f"{LINK_LINE_PREFIX}{target} {label}\n")
            return

        registry = self.current_registry
        if registry is None:
            logger.debug("Link to %r outside of any section; rendering its label only", target)
            self._output.append(label)
            return

        number = registry.register(target, label)
        entry = registry.get(target)
        self._output.append(f"{entry.label if entry else label}[{number}]")

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a footnote reference as its document-wide id."""
        footnote_id = self._footnotes.number_for(node.label)
        if footnote_id is None:
            logger.debug("Footnote %r has no id; rendering its label", node.label)
            self._output.append(f"[{node.label}]")
            return
        self._output.append(self._footnote_marker(footnote_id))

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Skip definitions in place; they are listed in the footnote section."""
        pass

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a line break as a single space."""
        self._output.append(" ")

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------

    def generic_visit(self, node: Node) -> None:
        """Hand node kinds without a gemtext rule to the fallback renderer."""
        if not isinstance(node, FALLBACK_NODE_TYPES):
            self._unresolved(node)
            return
        text = self._render_with_fallback(node)
        if not text:
            return
        if isinstance(node, BLOCK_FALLBACK_TYPES):
            text += "\n\n"
        self._output.append(text)


__all__ = [
    "GeminiRenderer",
    "compute_headline_level",
    "format_fence_caption",
    "format_headline_bullet",
    "renders_as_list_item",
]
