#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/parsers/org.py
"""Org-Mode to AST converter.

This module builds the document tree consumed by the Gemini renderer using
the orgparse parser. orgparse splits the file into headlines and provides
their TODO keyword, priority, tags and properties; the body of every
headline is then scanned here into blocks and inline nodes.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Any, Optional, Union

from org2gmi.ast import (
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
from org2gmi.ast.numbering import assign_headline_numbers
from org2gmi.constants import DEPS_ORG, ORG_ENTITIES
from org2gmi.exceptions import ParsingError
from org2gmi.options.org import OrgParserOptions
from org2gmi.parsers.base import BaseParser
from org2gmi.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# Keywords describing the file itself; they never appear in the body.
FILE_KEYWORDS = frozenset(
    {
        "TITLE",
        "AUTHOR",
        "DATE",
        "EMAIL",
        "OPTIONS",
        "TODO",
        "SEQ_TODO",
        "TYP_TODO",
        "STARTUP",
        "LANGUAGE",
        "FILETAGS",
        "SETUPFILE",
        "INCLUDE",
        "PROPERTY",
        "DESCRIPTION",
        "KEYWORDS",
        "CREATOR",
        "EXPORT_FILE_NAME",
        "SELECT_TAGS",
        "EXCLUDE_TAGS",
        "TBLFM",
        "NAME",
        "ATTR_HTML",
        "ATTR_LATEX",
        "RESULTS",
    }
)

EXCLUDE_TAGS = frozenset({"noexport"})
FOOTNOTE_SECTION_TITLE = "Footnotes"

_BLOCK_BEGIN = re.compile(r"^#\+begin_(?P<name>\S+)(?:[ \t]+(?P<params>.*))?$", re.IGNORECASE)
_KEYWORD = re.compile(r"^#\+(?P<key>[^:\s]+):[ \t]*(?P<value>.*)$")
_DRAWER_BEGIN = re.compile(r"^:(?P<name>[\w-]+):$")
_DRAWER_END = re.compile(r"^:END:$", re.IGNORECASE)
_HORIZONTAL_RULE = re.compile(r"^-{5,}$")
_FOOTNOTE_DEFINITION = re.compile(r"^\[fn:(?P<label>[^\]\s:]+)\][ \t]*(?P<body>.*)$")
_LIST_ITEM = re.compile(r"^(?P<indent>[ \t]*)(?P<bullet>[-+]|\d+[.)]|(?<=[ \t])\*)(?:[ \t]+(?P<body>.*))?$")
_CHECKBOX = re.compile(r"^\[(?P<state>[ Xx-])\][ \t]+")
_COUNTER = re.compile(r"^\[@(?P<start>\d+)\][ \t]+")
_DESCRIPTIVE = re.compile(r"^(?P<tag>.*?)[ \t]+::(?:[ \t]+(?P<body>.*)|$)")
_TABLE_RULE = re.compile(r"^\|[-+]")
_ESCAPED_LINE = re.compile(r"^(\s*),(\*|#\+)", re.MULTILINE)
_PRIORITY_COOKIE = re.compile(r"^\[#(?P<priority>[A-Za-z0-9])\][ \t]*")
_TODO_SPEC = re.compile(r"^#\+(?:SEQ_|TYP_)?TODO:[ \t]*(?P<spec>.*)$", re.IGNORECASE | re.MULTILINE)
_OPTIONS = re.compile(r"^#\+OPTIONS:[ \t]*(?P<options>.*)$", re.IGNORECASE | re.MULTILINE)
_TODO_SHORTCUT = re.compile(r"\(.*\)$")

_INLINE = re.compile(
    r"(?P<linebreak>\\\\[ \t]*$)"
    r"|(?P<link>\[\[(?P<target>(?:[^\]\\]|\\.)+?)\](?:\[(?P<description>.+?)\])?\])"
    r"|(?P<fn_inline>\[fn:(?P<fn_inline_label>[\w-]*):(?P<fn_inline_text>(?:[^\[\]]|\[[^\[\]]*\])+)\])"
    r"|(?P<fn_ref>\[fn:(?P<fn_label>[\w-]+)\])"
    r"|(?P<url>\b(?:https?|ftp|gemini|gopher|mailto|news):[^\s\[\]<>()\"']*[^\s\[\]<>()\"'.,;:!?])"
    r"|(?P<entity>\\(?P<entity_name>[A-Za-z]+)(?:\{\})?)"
    r"|(?P<markup>(?<![^\s\-('\"{])(?P<marker>[*/_+=~])(?P<marked>\S|\S.*?\S)(?P=marker)(?=[\s\-.,;:!?'\")}\[]|$))",
    re.MULTILINE | re.DOTALL,
)

_MARKUP_KINDS = {
    "*": "bold",
    "/": "italic",
    "_": "underline",
    "+": "strike-through",
    "=": "verbatim",
    "~": "code",
}


def _indentation(line: str) -> int:
    return len(line.expandtabs(8)) - len(line.expandtabs(8).lstrip())


def _parse_bool_or_int(value: str) -> bool | int | None:
    lowered = value.lower()
    if lowered == "t":
        return True
    if lowered == "nil":
        return False
    if lowered.isdigit():
        return int(lowered)
    return None


def parse_export_options(text: str) -> tuple[DocumentSettings, dict[str, Any]]:
    """Parse every ``#+OPTIONS:`` line of an Org file.

    Parameters
    ----------
    text : str
        Org source

    Returns
    -------
    tuple of (DocumentSettings, dict)
        Renderer settings (``toc``, ``tags``, ``todo``, ``pri``) and parser
        settings (``section_numbers`` from ``num``, ``headline_levels`` from
        ``H``). Unknown or malformed items are ignored.

    Examples
    --------
        >>> settings, parser_settings = parse_export_options("#+OPTIONS: toc:2 tags:not-in-toc H:3")
        >>> settings.with_toc, settings.with_tags, parser_settings["headline_levels"]
        (2, 'exclude-from-toc', 3)

    """
    settings = DocumentSettings()
    parser_settings: dict[str, Any] = {}
    for match in _OPTIONS.finditer(text):
        for item in match.group("options").split():
            key, sep, value = item.partition(":")
            if not sep:
                continue
            if key == "toc":
                settings.with_toc = _parse_bool_or_int(value)
            elif key == "tags":
                settings.with_tags = "exclude-from-toc" if value == "not-in-toc" else _parse_bool_or_int(value)
            elif key == "todo":
                settings.with_todo_keywords = _parse_bool_or_int(value)
            elif key == "pri":
                settings.with_priority = _parse_bool_or_int(value)
            elif key == "num":
                parsed = _parse_bool_or_int(value)
                if parsed is not None:
                    parser_settings["section_numbers"] = parsed
            elif key == "H":
                parsed = _parse_bool_or_int(value)
                if isinstance(parsed, int) and not isinstance(parsed, bool) and parsed > 0:
                    parser_settings["headline_levels"] = parsed
    if isinstance(settings.with_todo_keywords, int) and not isinstance(settings.with_todo_keywords, bool):
        settings.with_todo_keywords = None
    if isinstance(settings.with_priority, int) and not isinstance(settings.with_priority, bool):
        settings.with_priority = None
    if isinstance(settings.with_tags, int) and not isinstance(settings.with_tags, bool):
        settings.with_tags = None
    return settings, parser_settings


def parse_todo_keywords(text: str) -> tuple[list[str], list[str]]:
    """Return the TODO and DONE keywords declared by ``#+TODO:`` lines.

    ``#+TODO: TODO NEXT | DONE`` declares ``TODO`` and ``NEXT`` as open and
    ``DONE`` as closed; without ``|`` the last keyword is the closed one.
    Fast-access keys such as ``(t)`` are dropped.
    """
    todos: list[str] = []
    dones: list[str] = []
    for match in _TODO_SPEC.finditer(text):
        words = [_TODO_SHORTCUT.sub("", word) for word in match.group("spec").split()]
        if "|" in words:
            split = words.index("|")
            todos.extend(words[:split])
            dones.extend(words[split + 1 :])
        elif words:
            todos.extend(words[:-1])
            dones.append(words[-1])
    return todos, dones


class OrgParser(BaseParser):
    r"""Convert Org-Mode to the document tree.

    Parameters
    ----------
    options : OrgParserOptions or None, default = None
        Parser configuration options

    Notes
    -----
    Headlines tagged ``noexport`` or starting with ``COMMENT`` are left out,
    as are drawers, comment lines and ``#+BEGIN_COMMENT`` blocks. A
    top-level ``Footnotes`` headline holding only footnote definitions is
    dropped and its definitions are kept.

    Examples
    --------
        >>> parser = OrgParser()
        >>> doc = parser.parse("#+TITLE: T\n* Heading\nSome [[https://x/][text]].")
        >>> doc.children[0].numbering
        (1,)

    """

    def __init__(self, options: OrgParserOptions | None = None):
        """Initialize the Org parser with options."""
        BaseParser._validate_options_type(options, OrgParserOptions, "org")
        options = options or OrgParserOptions()
        super().__init__(options)
        self.options: OrgParserOptions = options
        self._anonymous_footnotes = 0
        self._inline_task_level = options.inlinetask_min_level

    @requires_dependencies("org", DEPS_ORG)
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse Org-Mode input into a Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            Org-Mode input to parse. A ``str`` naming an existing file is
            read from disk; any other ``str`` is the Org text itself.

        Returns
        -------
        Document
            Document with headline numbering and low-level flags assigned

        Raises
        ------
        DependencyError
            If orgparse is not installed
        ParsingError
            If orgparse rejects the input

        """
        import orgparse
        from orgparse.node import OrgEnv

        org_content = self._load_text_content(input_data)
        source_path = self._source_path(input_data)
        self._anonymous_footnotes = 0

        todos, dones = parse_todo_keywords(org_content)
        filename = str(source_path) if source_path else "<string>"
        env = OrgEnv(
            todos=list(dict.fromkeys([*self.options.todo_keywords, *todos])),
            dones=list(dict.fromkeys([*self.options.done_keywords, *dones])),
            filename=filename,
        )
        try:
            root = orgparse.loads(org_content, filename=filename, env=env)
        except Exception as e:
            raise ParsingError(f"Failed to parse Org-Mode: {e}", parsing_stage="orgparse", original_error=e) from e

        settings, parser_settings = parse_export_options(org_content)
        metadata = self.extract_metadata(root) if self.options.extract_metadata else {}
        title_text = metadata.get("title") or (source_path.stem if source_path else None)

        children: list[Node] = []
        leading_blocks = self._parse_body(self._body_of(root))
        orphan_definitions: list[Node] = []
        min_level = min((child.level for child in root.children), default=1)
        for child in root.children:
            if child.level >= self._inline_task_level:
                leading_blocks.extend(self._process_inline_task(child))
                continue
            if self._is_footnote_section(child):
                orphan_definitions.extend(self._parse_body(self._body_of(child)))
                continue
            headline = self._process_node(child, min_level)
            if headline is not None:
                children.append(headline)

        leading_blocks.extend(orphan_definitions)
        if leading_blocks:
            children.insert(0, Section(children=leading_blocks))

        doc = Document(
            children=children,
            title=self._parse_inline(title_text) if title_text else None,
            settings=settings,
            metadata=metadata,
            source_location=SourceLocation(format="org", line=1),
        )
        assign_headline_numbers(
            doc,
            section_numbers=parser_settings.get("section_numbers", self.options.section_numbers),
            headline_levels=parser_settings.get("headline_levels", self.options.headline_levels),
        )
        return doc

    @staticmethod
    def _source_path(input_data: Any) -> Optional[Path]:
        if isinstance(input_data, Path):
            return input_data
        if isinstance(input_data, str) and len(input_data) <= 260 and "\n" not in input_data:
            try:
                path = Path(input_data)
                if path.is_file():
                    return path
            except OSError:
                return None
        name = getattr(input_data, "name", None)
        if isinstance(name, str) and name and not name.startswith("<"):
            return Path(name)
        return None

    @staticmethod
    def _body_of(node: Any) -> str:
        if hasattr(node, "get_body"):
            return node.get_body(format="raw") or ""
        return node.body or ""

    def _is_footnote_section(self, node: Any) -> bool:
        if (node.heading or "").strip() != FOOTNOTE_SECTION_TITLE or node.children:
            return False
        blocks = self._parse_body(self._body_of(node))
        return all(isinstance(block, FootnoteDefinition) for block in blocks)

    @staticmethod
    def _is_excluded(node: Any) -> bool:
        heading = node.heading or ""
        if heading == "COMMENT" or heading.startswith("COMMENT "):
            return True
        return bool(EXCLUDE_TAGS & set(getattr(node, "shallow_tags", ()) or ()))

    # ------------------------------------------------------------------
    # Headlines
    # ------------------------------------------------------------------

    def _process_node(self, node: Any, min_level: int) -> Headline | None:
        """Convert an orgparse node and its subtree into a Headline."""
        if self._is_excluded(node):
            logger.debug("Skipping excluded headline %r", node.heading)
            return None

        headline = self._process_headline(node, min_level)
        section_blocks = self._parse_body(self._body_of(node))
        subheadlines: list[Node] = []
        for child in node.children:
            if child.level >= self._inline_task_level:
                section_blocks.extend(self._process_inline_task(child))
                continue
            sub = self._process_node(child, min_level)
            if sub is not None:
                subheadlines.append(sub)

        if section_blocks:
            headline.children.append(Section(children=section_blocks))
        headline.children.extend(subheadlines)
        return headline

    def _process_headline(self, node: Any, min_level: int) -> Headline:
        heading_text = node.get_heading(format="raw") or ""
        priority = getattr(node, "priority", None)
        cookie = _PRIORITY_COOKIE.match(heading_text)
        if cookie:
            priority = priority or cookie.group("priority")
            heading_text = heading_text[cookie.end() :]

        properties = dict(node.properties) if getattr(node, "properties", None) else {}
        alt_title = properties.get("ALT_TITLE")
        tags = sorted(getattr(node, "shallow_tags", ()) or ()) if self.options.parse_tags else []

        line_text = "*" * node.level + " " + heading_text
        return Headline(
            title=self._parse_inline(heading_text, [line_text]),
            depth=max(node.level - min_level + 1, 1),
            alt_title=self._parse_inline(str(alt_title)) if alt_title else None,
            todo=node.todo or None,
            priority=priority,
            tags=tags,
            metadata={"properties": properties} if properties else {},
            source_location=SourceLocation(format="org", line=getattr(node, "linenumber", None), line_text=line_text),
        )

    def _process_inline_task(self, node: Any) -> list[Node]:
        """Convert an inline task; the closing ``END`` line yields the text that follows it."""
        heading = (node.heading or "").strip()
        if heading == "END":
            return self._parse_body(self._body_of(node))
        task = InlineTask(
            title=self._parse_inline(heading),
            todo=node.todo or None,
            priority=getattr(node, "priority", None),
            tags=sorted(getattr(node, "shallow_tags", ()) or ()),
            children=self._parse_body(self._body_of(node)),
        )
        return [task]

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_body(self, body_text: str) -> list[Node]:
        if not body_text.strip():
            return []
        lines = body_text.split("\n")
        return self._parse_blocks(lines, lines)

    def _parse_blocks(self, lines: list[str], source_lines: list[str]) -> list[Node]:  # noqa: C901
        """Scan lines into block nodes.

        ``source_lines`` holds, for every entry of ``lines``, the complete
        source line it came from; links use it to tell whether they occupy a
        whole line.
        """
        result: list[Node] = []
        caption: Optional[str] = None
        i = 0
        n = len(lines)

        while i < n:
            line = lines[i]
            stripped = line.strip()

            if not stripped:
                i += 1
                continue

            begin = _BLOCK_BEGIN.match(stripped)
            if begin:
                end = self._find_block_end(lines, i, begin.group("name"))
                if end is not None:
                    node = self._build_block(
                        begin.group("name").lower(),
                        begin.group("params") or "",
                        lines[i + 1 : end],
                        source_lines[i + 1 : end],
                        caption,
                    )
                    if node is not None:
                        result.append(node)
                    caption = None
                    i = end + 1
                    continue

            keyword = _KEYWORD.match(stripped)
            if keyword:
                key = keyword.group("key").upper()
                value = keyword.group("value").strip()
                if key == "CAPTION":
                    caption = value
                elif key not in FILE_KEYWORDS:
                    result.append(Keyword(key=key, value=value))
                i += 1
                continue

            if stripped == "#" or stripped.startswith("# "):
                i += 1
                continue

            drawer = _DRAWER_BEGIN.match(stripped)
            if drawer and not _DRAWER_END.match(stripped):
                i = self._skip_drawer(lines, i)
                continue

            if stripped == ":" or stripped.startswith(": "):
                content = []
                while i < n and (lines[i].strip() == ":" or lines[i].strip().startswith(": ")):
                    content.append(lines[i].strip()[2:])
                    i += 1
                result.append(PreformattedBlock(content="\n".join(content), kind="fixed-width", caption=caption))
                caption = None
                continue

            if stripped.startswith("|"):
                start = i
                while i < n and lines[i].strip().startswith("|"):
                    i += 1
                result.append(self._parse_table(lines[start:i], caption))
                caption = None
                continue

            if _HORIZONTAL_RULE.match(stripped):
                result.append(HorizontalRule())
                i += 1
                continue

            footnote = _FOOTNOTE_DEFINITION.match(line)
            if footnote:
                definition, i = self._parse_footnote_definition(lines, source_lines, i, footnote)
                result.append(definition)
                continue

            if _LIST_ITEM.match(line):
                plain_list, i = self._parse_list(lines, source_lines, i)
                result.append(plain_list)
                continue

            start = i
            i += 1
            while i < n and lines[i].strip() and not self._starts_element(lines[i]):
                i += 1
            paragraph_lines = [entry.strip() for entry in lines[start:i]]
            result.append(
                Paragraph(content=self._parse_inline("\n".join(paragraph_lines), source_lines[start:i]))
            )

        return result

    @staticmethod
    def _starts_element(line: str) -> bool:
        stripped = line.strip()
        return bool(
            _BLOCK_BEGIN.match(stripped)
            or _KEYWORD.match(stripped)
            or stripped.startswith("|")
            or stripped == ":"
            or stripped.startswith(": ")
            or _HORIZONTAL_RULE.match(stripped)
            or _FOOTNOTE_DEFINITION.match(line)
            or _LIST_ITEM.match(line)
        )

    @staticmethod
    def _find_block_end(lines: list[str], start: int, name: str) -> Optional[int]:
        end_marker = f"#+end_{name}".lower()
        for index in range(start + 1, len(lines)):
            if lines[index].strip().lower() == end_marker:
                return index
        logger.debug("Unterminated #+BEGIN_%s block; treating it as text", name)
        return None

    @staticmethod
    def _skip_drawer(lines: list[str], start: int) -> int:
        for index in range(start + 1, len(lines)):
            if _DRAWER_END.match(lines[index].strip()):
                return index + 1
        return start + 1

    def _build_block(
        self,
        name: str,
        params: str,
        content_lines: list[str],
        source_lines: list[str],
        caption: Optional[str],
    ) -> Node | None:
        raw = _ESCAPED_LINE.sub(r"\1\2", "\n".join(content_lines))
        if name == "src":
            language = params.split()[0] if params.split() else None
            return PreformattedBlock(content=raw, kind="source", language=language, caption=caption)
        if name == "example":
            return PreformattedBlock(content=raw, kind="example", caption=caption)
        if name == "export":
            block_type = params.split()[0] if params.split() else ""
            return ExportBlock(block_type=block_type, value=raw)
        if name == "comment":
            return None
        children = self._parse_blocks(content_lines, source_lines)
        if name == "quote":
            return QuoteBlock(children=children)
        if name == "center":
            return CenterBlock(children=children)
        return SpecialBlock(block_type=name, children=children)

    def _parse_table(self, lines: list[str], caption: Optional[str]) -> Table:
        rows: list[TableRow] = []
        header: Optional[TableRow] = None
        for line in lines:
            stripped = line.strip()
            if _TABLE_RULE.match(stripped):
                if rows and header is None:
                    header = TableRow(cells=rows[-1].cells, is_header=True)
                    rows = []
                continue
            cells_text = stripped.split("|")[1:]
            if stripped.endswith("|"):
                cells_text = cells_text[:-1]
            cells = [TableCell(content=self._parse_inline(cell.strip())) for cell in cells_text]
            rows.append(TableRow(cells=cells))
        if header is not None and not rows:
            rows, header = [header], None
        return Table(rows=rows, header=header, caption=caption)

    def _parse_footnote_definition(
        self, lines: list[str], source_lines: list[str], start: int, match: re.Match
    ) -> tuple[FootnoteDefinition, int]:
        """Collect a footnote definition up to the next definition or two blank lines."""
        body_lines = [match.group("body")]
        body_sources = [source_lines[start]]
        i = start + 1
        while i < len(lines):
            line = lines[i]
            if _FOOTNOTE_DEFINITION.match(line):
                break
            if not line.strip() and (i + 1 >= len(lines) or not lines[i + 1].strip()):
                break
            body_lines.append(line)
            body_sources.append(source_lines[i])
            i += 1
        content = self._parse_blocks(body_lines, body_sources)
        return FootnoteDefinition(label=match.group("label"), content=content), i

    def _parse_list(self, lines: list[str], source_lines: list[str], start: int) -> tuple[PlainList, int]:
        """Parse a plain list starting at ``start`` and return it with the next line index."""
        first = _LIST_ITEM.match(lines[start])
        assert first is not None
        indent = _indentation(first.group("indent"))
        ordered = first.group("bullet")[0].isdigit()
        items: list[Item] = []
        counter = 0
        i = start
        n = len(lines)

        while i < n:
            match = _LIST_ITEM.match(lines[i])
            if not match or _indentation(match.group("indent")) != indent:
                break
            item_lines = [match.group("body") or ""]
            item_sources = [source_lines[i]]
            j = i + 1
            while j < n:
                line = lines[j]
                if not line.strip():
                    if j + 1 < n and lines[j + 1].strip() and _indentation(lines[j + 1]) > indent:
                        item_lines.append("")
                        item_sources.append(source_lines[j])
                        j += 1
                        continue
                    break
                if _indentation(line) <= indent:
                    break
                item_lines.append(line)
                item_sources.append(source_lines[j])
                j += 1

            counter += 1
            counter_match = _COUNTER.match(item_lines[0])
            if counter_match:
                counter = int(counter_match.group("start"))
                item_lines[0] = item_lines[0][counter_match.end() :]
            items.append(self._build_item(item_lines, item_sources, counter if ordered else None, ordered))

            i = j
            if (
                i + 1 < n
                and not lines[i].strip()
                and (sibling := _LIST_ITEM.match(lines[i + 1])) is not None
                and _indentation(sibling.group("indent")) == indent
            ):
                i += 1

        descriptive = any(item.tag is not None for item in items)
        return PlainList(items=items, ordered=ordered, descriptive=descriptive), i

    def _build_item(
        self, item_lines: list[str], item_sources: list[str], ordinal: Optional[int], ordered: bool
    ) -> Item:
        first = item_lines[0]
        checkbox = None
        checkbox_match = _CHECKBOX.match(first)
        if checkbox_match:
            checkbox = {" ": "off", "X": "on", "x": "on", "-": "trans"}[checkbox_match.group("state")]
            first = first[checkbox_match.end() :]

        tag = None
        if not ordered:
            descriptive = _DESCRIPTIVE.match(first)
            if descriptive:
                tag = self._parse_inline(descriptive.group("tag"))
                first = descriptive.group("body") or ""

        children = self._parse_blocks([first, *item_lines[1:]], item_sources)
        return Item(children=children, ordinal=ordinal, checkbox=checkbox, tag=tag)

    # ------------------------------------------------------------------
    # Inline
    # ------------------------------------------------------------------

    def _parse_inline(self, text: str, source_lines: Optional[list[str]] = None) -> list[Node]:
        r"""Parse inline Org syntax.

        Handles ``[[target][description]]`` and ``[[target]]`` links, bare
        URLs, ``[fn:label]`` references and ``[fn:label:text]`` /
        ``[fn::text]`` inline footnotes, ``\name`` entities, ``\\`` line
        breaks and the six emphasis markers.

        Parameters
        ----------
        text : str
            Text with inline markup
        source_lines : list of str or None, default = None
            Complete source line for each line of ``text``

        Returns
        -------
        list[Node]
            Inline nodes

        """
        result: list[Node] = []
        pos = 0

        for match in _INLINE.finditer(text):
            if match.start() > pos:
                result.append(PlainText(content=text[pos : match.start()]))
            result.append(self._inline_node(match, text, source_lines))
            pos = match.end()

        if pos < len(text):
            result.append(PlainText(content=text[pos:]))
        return result

    def _inline_node(self, match: re.Match, text: str, source_lines: Optional[list[str]]) -> Node:
        if match.group("linebreak"):
            return LineBreak()

        if match.group("link") or match.group("url"):
            span = match.group(0)
            location = SourceLocation(format="org", span=span, line_text=self._line_of(match, text, source_lines))
            if match.group("url"):
                return Link(target=span, source_location=location)
            description = match.group("description")
            return Link(
                target=match.group("target").replace("\\]", "]").replace("\\[", "["),
                content=self._parse_inline(description) if description else [],
                source_location=location,
            )

        if match.group("fn_inline"):
            label = match.group("fn_inline_label")
            if not label:
                self._anonymous_footnotes += 1
                label = f"anonymous-{self._anonymous_footnotes}"
            definition = [Paragraph(content=self._parse_inline(match.group("fn_inline_text").strip()))]
            return FootnoteReference(label=label, definition=definition)

        if match.group("fn_ref"):
            return FootnoteReference(label=match.group("fn_label"))

        if match.group("entity"):
            name = match.group("entity_name")
            if name in ORG_ENTITIES:
                return Entity(name=name, utf8=ORG_ENTITIES[name])
            return PlainText(content=match.group(0))

        kind = _MARKUP_KINDS[match.group("marker")]
        marked = match.group("marked")
        if kind in ("code", "verbatim"):
            content: list[Node] = [PlainText(content=marked)]
        else:
            content = self._parse_inline(marked)
        return Markup(kind=kind, content=content)  # type: ignore[arg-type]

    @staticmethod
    def _line_of(match: re.Match, text: str, source_lines: Optional[list[str]]) -> str:
        """Return the complete source line a match starts on."""
        line_index = text.count("\n", 0, match.start())
        if source_lines is not None and line_index < len(source_lines):
            return source_lines[line_index]
        line_start = text.rfind("\n", 0, match.start()) + 1
        line_end = text.find("\n", match.start())
        return text[line_start : line_end if line_end != -1 else len(text)]

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def extract_metadata(self, document: Any) -> dict[str, Any]:
        """Extract ``#+TITLE:``, ``#+AUTHOR:`` and ``#+DATE:`` from the orgparse root.

        Parameters
        ----------
        document : orgparse.node.OrgRootNode
            Parsed orgparse document

        Returns
        -------
        dict
            Metadata with ``title``, ``author`` and ``date`` keys when present

        """
        metadata: dict[str, Any] = {}
        if not hasattr(document, "get_file_property"):
            return metadata
        for key in ("TITLE", "AUTHOR", "DATE", "EMAIL", "DESCRIPTION"):
            value = document.get_file_property(key)
            if value:
                metadata[key.lower()] = value
        return metadata
