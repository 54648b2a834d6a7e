#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_org_parser.py
"""Unit tests for Org-Mode parser.

Tests cover:
- Headlines with TODO states, priorities, tags and properties
- Paragraphs, links, bare URLs and standalone link detection
- Footnote references, definitions and inline footnotes
- Lists, tables, blocks, keywords and drawers
- ``#+OPTIONS:`` and ``#+TODO:`` handling
- Title extraction, inline tasks and excluded subtrees

"""

import io

import pytest

from org2gmi.ast import (
    CenterBlock,
    Entity,
    ExportBlock,
    FootnoteDefinition,
    FootnoteReference,
    Headline,
    HorizontalRule,
    InlineTask,
    Keyword,
    LineBreak,
    Link,
    Markup,
    Paragraph,
    PlainList,
    PlainText,
    PreformattedBlock,
    QuoteBlock,
    Section,
    SpecialBlock,
    Table,
)
from org2gmi.ast.utils import extract_text, walk
from org2gmi.exceptions import InvalidOptionsError
from org2gmi.options import GeminiRendererOptions, OrgParserOptions
from org2gmi.parsers.org import OrgParser, parse_export_options, parse_todo_keywords


def _parse(text: str, **options):
    return OrgParser(OrgParserOptions(**options) if options else None).parse(text)


def _headlines(doc) -> list:
    return [node for node in walk(doc) if isinstance(node, Headline)]


def _body(doc) -> list:
    """Blocks of the first headline's section."""
    headline = doc.children[0] if isinstance(doc.children[0], Headline) else doc.children[1]
    assert isinstance(headline.children[0], Section)
    return headline.children[0].children


def _find(doc, node_type) -> list:
    return [node for node in walk(doc) if isinstance(node, node_type)]


@pytest.mark.unit
class TestHeadlines:
    """Tests for headline parsing."""

    def test_simple_heading(self) -> None:
        """Test parsing a simple heading."""
        doc = _parse("* Title")

        assert len(doc.children) == 1
        headline = doc.children[0]
        assert isinstance(headline, Headline)
        assert headline.depth == 1
        assert headline.numbering == (1,)
        assert extract_text(headline.title) == "Title"

    def test_todo_priority_and_tags(self) -> None:
        """Test TODO keyword, priority cookie and tags."""
        headline = _parse("* TODO [#A] Write tests :work:urgent:").children[0]

        assert headline.todo == "TODO"
        assert headline.priority == "A"
        assert headline.tags == ["urgent", "work"]
        assert extract_text(headline.title).strip() == "Write tests"

    def test_done_keyword(self) -> None:
        """Test DONE is recognized."""
        assert _parse("* DONE Finished").children[0].todo == "DONE"

    def test_keywords_declared_in_file(self) -> None:
        """Test ``#+TODO:`` lines extend the recognized keywords."""
        doc = _parse("#+TODO: NEXT | FINISHED\n* NEXT Do it\n* FINISHED Done it")
        assert [h.todo for h in doc.children] == ["NEXT", "FINISHED"]

    def test_keywords_from_options(self) -> None:
        """Test TODO keywords given as options."""
        doc = _parse("* WAITING On hold", todo_keywords=("TODO", "WAITING"))
        assert doc.children[0].todo == "WAITING"

    def test_tags_disabled(self) -> None:
        """Test tags can be ignored."""
        assert _parse("* Heading :a:", parse_tags=False).children[0].tags == []

    def test_nesting_and_numbering(self) -> None:
        """Test subheadlines nest and are numbered by path."""
        doc = _parse("* A\n** A1\n** A2\n*** A2a\n* B")

        a, b = doc.children
        assert a.numbering == (1,)
        assert b.numbering == (2,)
        assert [h.numbering for h in a.subheadlines] == [(1, 1), (1, 2)]
        assert a.subheadlines[1].subheadlines[0].numbering == (1, 2, 1)
        assert a.subheadlines[1].subheadlines[0].depth == 3

    def test_depth_relative_to_shallowest(self) -> None:
        """Test a file starting at level two still starts at depth one."""
        doc = _parse("** A\n*** B")
        assert doc.children[0].depth == 1
        assert doc.children[0].subheadlines[0].depth == 2

    def test_headline_levels_flag_low_level(self) -> None:
        """Test headlines deeper than headline_levels are low-level."""
        doc = _parse("* A\n** B\n*** C", headline_levels=2)
        depths = {extract_text(h.title): h.low_level for h in _headlines(doc)}
        assert depths == {"A": False, "B": False, "C": True}

    def test_section_numbers_disabled(self) -> None:
        """Test numbering can be switched off."""
        doc = _parse("* A\n** B", section_numbers=False)
        assert all(h.numbering is None for h in _headlines(doc))

    def test_unnumbered_property(self) -> None:
        """Test UNNUMBERED headlines neither get nor consume a number."""
        doc = _parse("* A\n:PROPERTIES:\n:UNNUMBERED: t\n:END:\n* B")
        assert doc.children[0].numbering is None
        assert doc.children[1].numbering == (1,)

    def test_alt_title_property(self) -> None:
        """Test ALT_TITLE becomes the alternative title."""
        headline = _parse("* A long title\n:PROPERTIES:\n:ALT_TITLE: Short\n:END:\nText").children[0]
        assert extract_text(headline.alt_title) == "Short"
        assert headline.metadata["properties"]["ALT_TITLE"] == "Short"

    def test_properties_not_in_body(self) -> None:
        """Test the property drawer does not leak into the section."""
        doc = _parse("* A\n:PROPERTIES:\n:CUSTOM_ID: a\n:END:\nBody")
        assert extract_text(_body(doc)) == "Body"

    def test_noexport_and_comment_excluded(self) -> None:
        """Test noexport subtrees and COMMENT headlines are left out."""
        doc = _parse("* Keep\n* Drop :noexport:\n** Child\n* COMMENT Hidden\n* Also kept")

        titles = [extract_text(h.title).strip() for h in _headlines(doc)]
        assert titles == ["Keep", "Also kept"]
        assert doc.children[1].numbering == (2,)

    def test_heading_with_link(self) -> None:
        """Test links in headings are parsed."""
        headline = _parse("* See [[https://x/][X]]").children[0]
        links = [node for node in headline.title if isinstance(node, Link)]
        assert links[0].target == "https://x/"
        assert not links[0].is_alone_on_line()

    def test_heading_link_with_todo_and_tags(self) -> None:
        """Test heading links survive next to TODO keywords and tags."""
        headline = _parse("* TODO Read [[https://x/][the docs]] :ref:").children[0]
        links = [node for node in headline.title if isinstance(node, Link)]

        assert headline.todo == "TODO"
        assert headline.tags == ["ref"]
        assert links[0].target == "https://x/"
        assert extract_text(links[0].content) == "the docs"


@pytest.mark.unit
class TestParagraphsAndInline:
    """Tests for paragraphs and inline syntax."""

    def test_paragraph_lines_kept(self) -> None:
        """Test soft line breaks stay in the paragraph text."""
        blocks = _body(_parse("* H\nline one\nline two\n\nsecond"))

        assert len(blocks) == 2
        assert all(isinstance(block, Paragraph) for block in blocks)
        assert extract_text(blocks[0]) == "line one\nline two"

    def test_link_with_description(self) -> None:
        """Test described links."""
        paragraph = _body(_parse("* H\nSee [[https://x/][the site]] now."))[0]
        link = paragraph.content[1]

        assert isinstance(link, Link)
        assert link.target == "https://x/"
        assert extract_text(link.content) == "the site"
        assert not link.is_alone_on_line()

    def test_standalone_link(self) -> None:
        """Test a link on a line of its own is standalone."""
        paragraph = _body(_parse("* H\nIntro text\n  [[https://y/]]"))[0]
        link = [node for node in paragraph.content if isinstance(node, Link)][0]

        assert link.content == []
        assert link.is_alone_on_line()

    def test_bare_url(self) -> None:
        """Test bare URLs become links without the trailing period."""
        paragraph = _body(_parse("* H\nVisit https://example.com/page."))[0]
        links = [node for node in paragraph.content if isinstance(node, Link)]
        assert [link.target for link in links] == ["https://example.com/page"]

    def test_local_file_link(self) -> None:
        """Test file links keep their raw target."""
        paragraph = _body(_parse("* H\nRead [[file:other.org][the other page]]."))[0]
        assert paragraph.content[1].target == "file:other.org"

    def test_markup(self) -> None:
        """Test emphasis markers."""
        paragraph = _body(_parse("* H\nSome *bold* and /italic/ and ~x = 1~ text"))[0]
        markups = [node for node in paragraph.content if isinstance(node, Markup)]

        assert [m.kind for m in markups] == ["bold", "italic", "code"]
        assert extract_text(markups[2]) == "x = 1"

    def test_verbatim_is_literal(self) -> None:
        """Test verbatim content is not parsed further."""
        paragraph = _body(_parse("* H\nUse =*not bold*= here"))[0]
        markup = paragraph.content[1]
        assert markup.kind == "verbatim"
        assert markup.content == [PlainText(content="*not bold*")]

    def test_entities(self) -> None:
        """Test known entities are replaced and unknown ones kept."""
        paragraph = _body(_parse("* H\n\\alpha and \\unknownthing"))[0]

        entities = [node for node in paragraph.content if isinstance(node, Entity)]
        assert [e.utf8 for e in entities] == ["α"]
        assert "\\unknownthing" in extract_text(paragraph)

    def test_line_break(self) -> None:
        """Test ``\\\\`` at end of line is a forced break."""
        paragraph = _body(_parse("* H\nfirst\\\\\nsecond"))[0]
        assert any(isinstance(node, LineBreak) for node in paragraph.content)


@pytest.mark.unit
class TestFootnotes:
    """Tests for footnote parsing."""

    def test_reference_and_definition(self) -> None:
        """Test labelled references and definitions."""
        doc = _parse("* H\nText[fn:1].\n\n[fn:1] The note.")

        references = _find(doc, FootnoteReference)
        definitions = _find(doc, FootnoteDefinition)
        assert [r.label for r in references] == ["1"]
        assert [d.label for d in definitions] == ["1"]
        assert extract_text(definitions[0].content) == "The note."

    def test_inline_footnotes(self) -> None:
        """Test named and anonymous inline footnotes carry their definition."""
        doc = _parse("* H\nA[fn:named:first note] and B[fn::second note].")
        references = _find(doc, FootnoteReference)

        assert [r.label for r in references] == ["named", "anonymous-1"]
        assert extract_text(references[1].definition) == "second note"

    def test_anonymous_counter_resets(self) -> None:
        """Test anonymous labels restart for every parse."""
        parser = OrgParser()
        parser.parse("x[fn::one]")
        doc = parser.parse("y[fn::two]")
        assert _find(doc, FootnoteReference)[0].label == "anonymous-1"

    def test_footnote_section_dropped(self) -> None:
        """Test a Footnotes headline with only definitions is removed."""
        doc = _parse("* H\nText[fn:a]\n* Footnotes\n[fn:a] Note")

        assert [extract_text(h.title) for h in _headlines(doc)] == ["H"]
        assert isinstance(doc.children[0], Section)
        assert [d.label for d in _find(doc, FootnoteDefinition)] == ["a"]

    def test_definition_ends_at_next_definition(self) -> None:
        """Test consecutive definitions are split."""
        doc = _parse("[fn:a] First\ncontinued\n[fn:b] Second")
        definitions = _find(doc, FootnoteDefinition)
        assert [extract_text(d.content) for d in definitions] == ["First\ncontinued", "Second"]


@pytest.mark.unit
class TestLists:
    """Tests for plain lists."""

    def test_unordered_with_checkboxes(self) -> None:
        """Test bullets and checkbox states."""
        plain_list = _body(_parse("* H\n- one\n- [X] two\n- [ ] three\n- [-] four"))[0]

        assert isinstance(plain_list, PlainList)
        assert not plain_list.ordered
        assert [item.checkbox for item in plain_list.items] == [None, "on", "off", "trans"]
        assert extract_text(plain_list.items[1].children) == "two"

    def test_ordered_with_counter(self) -> None:
        """Test ordinals follow positions and ``[@N]`` counters."""
        plain_list = _body(_parse("* H\n1. a\n2. [@5] b\n3. c"))[0]

        assert plain_list.ordered
        assert [item.ordinal for item in plain_list.items] == [1, 5, 6]

    def test_descriptive(self) -> None:
        """Test ``term :: description`` items."""
        plain_list = _body(_parse("* H\n- term :: meaning"))[0]

        assert plain_list.descriptive
        assert extract_text(plain_list.items[0].tag) == "term"
        assert extract_text(plain_list.items[0].children) == "meaning"

    def test_nested(self) -> None:
        """Test indented items form a nested list."""
        plain_list = _body(_parse("* H\n- outer\n  - inner\n- next"))[0]

        assert len(plain_list.items) == 2
        first = plain_list.items[0]
        assert isinstance(first.children[0], Paragraph)
        assert isinstance(first.children[1], PlainList)

    def test_list_ends_paragraph(self) -> None:
        """Test a list right after text starts a new block."""
        blocks = _body(_parse("* H\nIntro:\n- item"))
        assert [type(block) for block in blocks] == [Paragraph, PlainList]


@pytest.mark.unit
class TestBlocks:
    """Tests for tables, blocks, keywords and drawers."""

    def test_table_with_header(self) -> None:
        """Test rows above the first rule form the header."""
        table = _body(_parse("* H\n| a | b |\n|---+---|\n| 1 | 2 |"))[0]

        assert isinstance(table, Table)
        assert [extract_text(cell.content) for cell in table.header.cells] == ["a", "b"]
        assert len(table.rows) == 1

    def test_table_without_rule(self) -> None:
        """Test tables without a rule have no header."""
        table = _body(_parse("* H\n| a | b |\n| 1 | 2 |"))[0]
        assert table.header is None
        assert len(table.rows) == 2

    def test_source_block_with_caption(self) -> None:
        """Test source blocks keep language and caption."""
        block = _body(_parse("* H\n#+CAPTION: Setup\n#+BEGIN_SRC python\nx = 1\n#+END_SRC"))[0]

        assert isinstance(block, PreformattedBlock)
        assert block.kind == "source"
        assert block.language == "python"
        assert block.caption == "Setup"
        assert block.content == "x = 1"

    def test_escaped_lines_in_block(self) -> None:
        """Test comma-escaped lines are unescaped."""
        block = _body(_parse("* H\n#+begin_example\n,* not a headline\n#+end_example"))[0]
        assert block.kind == "example"
        assert block.content == "* not a headline"

    def test_quote_center_and_special(self) -> None:
        """Test container blocks."""
        blocks = _body(
            _parse(
                "* H\n#+BEGIN_QUOTE\nquoted\n#+END_QUOTE\n#+BEGIN_CENTER\ncentered\n#+END_CENTER\n"
                "#+BEGIN_NOTE\nnoted\n#+END_NOTE"
            )
        )

        assert [type(block) for block in blocks] == [QuoteBlock, CenterBlock, SpecialBlock]
        assert blocks[2].block_type == "note"
        assert extract_text(blocks[0]) == "quoted"

    def test_export_block(self) -> None:
        """Test export blocks keep their type and raw value."""
        block = _body(_parse("* H\n#+BEGIN_EXPORT gemini\n=> gemini://raw/ Raw\n#+END_EXPORT"))[0]

        assert isinstance(block, ExportBlock)
        assert block.block_type == "gemini"
        assert block.value == "=> gemini://raw/ Raw"

    def test_comment_block_dropped(self) -> None:
        """Test comment blocks and comment lines disappear."""
        blocks = _body(_parse("* H\n#+BEGIN_COMMENT\nhidden\n#+END_COMMENT\n# a comment\nvisible"))
        assert extract_text(blocks) == "visible"

    def test_unterminated_block_is_text(self) -> None:
        """Test a block without an end line is read as text."""
        blocks = _body(_parse("* H\n#+BEGIN_QUOTE\nno end"))
        assert all(not isinstance(block, QuoteBlock) for block in blocks)

    def test_keywords(self) -> None:
        """Test body keywords are kept and file keywords skipped."""
        doc = _parse("#+TITLE: T\n#+GEMINI: => gemini://x/ X\n* H")
        keywords = _find(doc, Keyword)
        assert [(k.key, k.value) for k in keywords] == [("GEMINI", "=> gemini://x/ X")]

    def test_drawer_skipped(self) -> None:
        """Test drawers are dropped."""
        blocks = _body(_parse("* H\n:LOGBOOK:\n- State \"DONE\"\n:END:\nText"))
        assert extract_text(blocks) == "Text"

    def test_horizontal_rule_and_fixed_width(self) -> None:
        """Test rules and ``:`` fixed-width lines."""
        blocks = _body(_parse("* H\n-----\n: fixed\n: width"))

        assert isinstance(blocks[0], HorizontalRule)
        assert isinstance(blocks[1], PreformattedBlock)
        assert blocks[1].kind == "fixed-width"
        assert blocks[1].content == "fixed\nwidth"


@pytest.mark.unit
class TestDocumentLevel:
    """Tests for document-level settings and structure."""

    def test_title_and_metadata(self) -> None:
        """Test ``#+TITLE:`` and ``#+AUTHOR:``."""
        doc = _parse("#+TITLE: My Notes\n#+AUTHOR: Someone\n* H")

        assert extract_text(doc.title) == "My Notes"
        assert doc.metadata["title"] == "My Notes"
        assert doc.metadata["author"] == "Someone"

    def test_no_title_from_string(self) -> None:
        """Test text input without a title has none."""
        assert _parse("* H").title is None

    def test_title_falls_back_to_file_stem(self, tmp_path) -> None:
        """Test files without a title use their name."""
        path = tmp_path / "journal.org"
        path.write_text("* Entry\n", encoding="utf-8")

        doc = OrgParser().parse(path)
        assert extract_text(doc.title) == "journal"

    def test_file_with_title_and_headlines(self, tmp_path) -> None:
        """Test files are parsed with their own title and headlines."""
        path = tmp_path / "page.org"
        path.write_text("#+TITLE: T\n* H\nhello\n", encoding="utf-8")

        doc = OrgParser().parse(path)
        assert extract_text(doc.title) == "T"
        assert extract_text(_headlines(doc)[0].title) == "H"

    def test_metadata_disabled(self) -> None:
        """Test metadata extraction can be switched off."""
        doc = _parse("#+TITLE: T\n* H", extract_metadata=False)
        assert doc.title is None
        assert doc.metadata == {}

    def test_leading_text_section(self) -> None:
        """Test text before the first headline becomes the first section."""
        doc = _parse("#+TITLE: T\nIntro text.\n* H")

        assert isinstance(doc.children[0], Section)
        assert extract_text(doc.children[0]) == "Intro text."

    def test_export_options(self) -> None:
        """Test ``#+OPTIONS:`` feeds settings and numbering."""
        doc = _parse("#+OPTIONS: toc:nil num:nil H:2 pri:t\n* A\n** B\n*** C")

        assert doc.settings.with_toc is False
        assert doc.settings.with_priority is True
        assert all(h.numbering is None for h in _headlines(doc))
        assert [h.low_level for h in _headlines(doc)] == [False, False, True]

    def test_inline_tasks(self) -> None:
        """Test inline tasks stay in the section between surrounding text."""
        doc = _parse("* H\nbefore\n**** TODO Task\ninside\n**** END\nafter", inlinetask_min_level=4)
        blocks = _body(doc)

        assert [type(block) for block in blocks] == [Paragraph, InlineTask, Paragraph]
        assert blocks[1].todo == "TODO"
        assert extract_text(blocks[1].title).strip() == "Task"
        assert extract_text(blocks[2]) == "after"
        assert len(_headlines(doc)) == 1

    def test_bytes_and_stream_input(self) -> None:
        """Test bytes and binary streams."""
        parser = OrgParser()
        assert isinstance(parser.parse(b"* Bytes").children[0], Headline)
        assert isinstance(parser.parse(io.BytesIO("* Stream é".encode("utf-8"))).children[0], Headline)

    def test_wrong_options_type(self) -> None:
        """Test renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            OrgParser(GeminiRendererOptions())  # type: ignore[arg-type]

    def test_invalid_options(self) -> None:
        """Test option validation."""
        with pytest.raises(ValueError):
            OrgParserOptions(headline_levels=0)


@pytest.mark.unit
class TestParseExportOptions:
    """Tests for parse_export_options."""

    def test_empty(self) -> None:
        """Test text without ``#+OPTIONS:`` leaves everything unset."""
        settings, parser_settings = parse_export_options("* H")
        assert settings.as_overrides() == {
            "with_toc": None,
            "with_tags": None,
            "with_todo_keywords": None,
            "with_priority": None,
        }
        assert parser_settings == {}

    def test_values(self) -> None:
        """Test each recognized item."""
        settings, parser_settings = parse_export_options(
            "#+OPTIONS: toc:2 tags:not-in-toc todo:nil pri:t\n#+options: num:1 H:4"
        )

        assert settings.with_toc == 2
        assert settings.with_tags == "exclude-from-toc"
        assert settings.with_todo_keywords is False
        assert settings.with_priority is True
        assert parser_settings == {"section_numbers": 1, "headline_levels": 4}

    def test_ignores_unknown_and_malformed(self) -> None:
        """Test unknown keys and nonsense values are ignored."""
        settings, parser_settings = parse_export_options("#+OPTIONS: author:nil toc:maybe H:0 todo:3 ^:{}")
        assert settings.with_toc is None
        assert settings.with_todo_keywords is None
        assert parser_settings == {}


@pytest.mark.unit
class TestParseTodoKeywords:
    """Tests for parse_todo_keywords."""

    def test_with_separator(self) -> None:
        """Test ``|`` separates open and closed states."""
        assert parse_todo_keywords("#+TODO: TODO(t) NEXT(n) | DONE(d) CANCELLED") == (
            ["TODO", "NEXT"],
            ["DONE", "CANCELLED"],
        )

    def test_without_separator(self) -> None:
        """Test the last keyword is closed without ``|``."""
        assert parse_todo_keywords("#+SEQ_TODO: OPEN CLOSED") == (["OPEN"], ["CLOSED"])

    def test_none(self) -> None:
        """Test files without declarations."""
        assert parse_todo_keywords("* TODO x") == ([], [])
