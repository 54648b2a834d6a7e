#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the public conversion functions."""

from io import BytesIO, StringIO

import pytest

from org2gmi import convert_file, render_document, render_subtree, to_ast, to_gemini
from org2gmi.ast import Document, Headline, Paragraph, PlainText, Section
from org2gmi.exceptions import InvalidOptionsError, SourceNotFoundError
from org2gmi.options import GeminiRendererOptions, OrgParserOptions

EXPECTED_SAMPLE = """# Field Notes

## Table of Contents
1. Getting started
1.1. Install
2. Reference     :docs:


Intro paragraph with a link[1].

=> https://example.com/ [1] link

## Getting started

Read the guide[1] first. It explains everything.[1]

=> gemini://capsule.example/ gemini://capsule.example/

=> guide.gmi [1] guide

### Install

* download
* unpack

## Reference     :docs:

```python
print("hi")
```

## Footnotes

[1] See the appendix.
"""


@pytest.mark.unit
class TestToGemini:
    """Tests for to_gemini."""

    def test_sample_document(self, sample_org) -> None:
        """Test the complete output for a representative document."""
        assert to_gemini(sample_org) == EXPECTED_SAMPLE

    def test_keyword_overrides(self, sample_org) -> None:
        """Test keyword arguments reach parser and renderer options."""
        result = to_gemini(sample_org, with_toc=False, headline_levels=1)

        assert "Table of Contents" not in result
        assert "1.  Install" in result
        assert "### Install" not in result

    def test_keywords_override_option_objects(self) -> None:
        """Test keyword arguments win over option objects."""
        result = to_gemini(
            "* H\nText[fn:a]\n\n[fn:a] Note",
            renderer_options=GeminiRendererOptions(with_toc=False),
            footnote_style="superscript",
        )
        assert result == "## H\n\nText¹\n\n## Footnotes\n\n¹ Note\n"

    def test_parser_options_object(self) -> None:
        """Test parser options are honoured."""
        result = to_gemini("* A\n** B", parser_options=OrgParserOptions(section_numbers=False))
        assert result.startswith("## Table of Contents\nA\nB\n\n\n")

    def test_document_options_line(self) -> None:
        """Test ``#+OPTIONS:`` in the source overrides defaults."""
        assert to_gemini("#+OPTIONS: toc:nil\n* A") == "## A\n"

    def test_unknown_option(self) -> None:
        """Test unknown keywords are rejected."""
        with pytest.raises(InvalidOptionsError):
            to_gemini("* A", no_such_option=True)

    def test_bytes_and_stream(self) -> None:
        """Test bytes and binary streams are accepted."""
        assert to_gemini(b"* A", with_toc=False) == "## A\n"
        assert to_gemini(BytesIO(b"* A"), with_toc=False) == "## A\n"


@pytest.mark.unit
class TestToAst:
    """Tests for to_ast."""

    def test_returns_numbered_document(self) -> None:
        """Test the parsed tree carries numbering."""
        doc = to_ast("* A\n** B", headline_levels=1)

        assert isinstance(doc, Document)
        assert doc.children[0].numbering == (1,)
        assert doc.children[0].subheadlines[0].low_level

    def test_renderer_keywords_ignored(self) -> None:
        """Test renderer keywords do not break parsing."""
        assert isinstance(to_ast("* A", with_toc=False), Document)


@pytest.mark.unit
class TestRenderFunctions:
    """Tests for render_document and render_subtree."""

    def test_render_document(self) -> None:
        """Test rendering a hand-built tree."""
        doc = Document(children=[Headline(title=[PlainText(content="A")], numbering=(1,))])
        assert render_document(doc) == "## Table of Contents\n1. A\n\n\n## A\n"

    def test_render_subtree(self) -> None:
        """Test rendering a section on its own."""
        section = Section(children=[Paragraph(content=[PlainText(content="hello\nworld")])])
        assert render_subtree(section, GeminiRendererOptions()) == "hello world"


@pytest.mark.unit
class TestConvertFile:
    """Tests for convert_file."""

    def test_writes_next_to_source(self, sample_org_file) -> None:
        """Test notes.org becomes notes.gmi."""
        target = convert_file(sample_org_file)

        assert target == sample_org_file.with_suffix(".gmi")
        assert target.read_text(encoding="utf-8") == EXPECTED_SAMPLE

    def test_output_dir(self, sample_org_file, tmp_path) -> None:
        """Test output into another directory."""
        target = convert_file(sample_org_file, output_dir=tmp_path / "capsule")
        assert target == tmp_path / "capsule" / "notes.gmi"
        assert target.is_file()

    def test_explicit_output(self, sample_org_file, tmp_path) -> None:
        """Test an explicit output path."""
        target = convert_file(str(sample_org_file), tmp_path / "out" / "index.gmi", with_toc=False)
        assert target == tmp_path / "out" / "index.gmi"
        assert "Table of Contents" not in target.read_text(encoding="utf-8")

    def test_stream_output(self, sample_org_file) -> None:
        """Test writing to a text stream."""
        buffer = StringIO()
        assert convert_file(sample_org_file, buffer) is None
        assert buffer.getvalue() == EXPECTED_SAMPLE

    def test_title_from_file_name(self, tmp_path) -> None:
        """Test a file without a title is titled after its name."""
        source = tmp_path / "journal.org"
        source.write_text("Just text.\n", encoding="utf-8")

        target = convert_file(source)
        assert target.read_text(encoding="utf-8") == "# journal\n\nJust text.\n"

    def test_titled_file_with_heading_link(self, tmp_path) -> None:
        """Test a titled file converts and keeps the link target of its heading."""
        source = tmp_path / "page.org"
        source.write_text("#+TITLE: T\n* See [[https://x/][X]]\nhello\n", encoding="utf-8")

        target = convert_file(source, with_toc=False)
        assert target.read_text(encoding="utf-8") == "# T\n\n## See X[1]\n\nhello\n\n=> https://x/ [1] X\n"

    def test_missing_source(self, tmp_path) -> None:
        """Test a missing file raises SourceNotFoundError."""
        with pytest.raises(SourceNotFoundError):
            convert_file(tmp_path / "missing.org")
