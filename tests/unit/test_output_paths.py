#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_output_paths.py
"""Unit tests for output naming and writing."""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from org2gmi.exceptions import OutputWriteError
from org2gmi.utils.io_utils import output_path_for, write_content


@pytest.mark.unit
class TestOutputPathFor:
    """Tests for output_path_for."""

    def test_org_extension_replaced(self):
        """Test .org becomes .gmi."""
        assert output_path_for("notes/page.org") == Path("notes/page.gmi")

    def test_uppercase_extension(self):
        """Test the extension check ignores case."""
        assert output_path_for("PAGE.ORG") == Path("PAGE.gmi")

    def test_other_extension_appended(self):
        """Test other files get .gmi appended."""
        assert output_path_for("notes.txt") == Path("notes.txt.gmi")

    def test_output_dir(self):
        """Test the directory is replaced."""
        assert output_path_for("a/b/page.org", "out") == Path("out/page.gmi")


@pytest.mark.unit
class TestWriteContent:
    """Tests for write_content."""

    def test_path_creates_parents(self, tmp_path):
        """Test parent directories are created."""
        target = tmp_path / "deep" / "dir" / "page.gmi"
        write_content("# Hi\n", target)
        assert target.read_text(encoding="utf-8") == "# Hi\n"

    def test_text_stream(self):
        """Test writing to a text stream."""
        buffer = StringIO()
        write_content("héllo", buffer)
        assert buffer.getvalue() == "héllo"

    def test_binary_stream(self):
        """Test writing UTF-8 to a binary stream."""
        buffer = BytesIO()
        write_content("héllo", buffer)
        assert buffer.getvalue() == "héllo".encode("utf-8")

    def test_none_returns_stringio(self):
        """Test None returns the content as a stream."""
        assert write_content("x", None).getvalue() == "x"

    def test_unwritable_path(self, tmp_path):
        """Test failures become OutputWriteError."""
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OutputWriteError):
            write_content("x", blocker / "child.gmi")

    def test_unsupported_type(self):
        """Test unsupported outputs raise TypeError."""
        with pytest.raises(TypeError):
            write_content("x", 42)  # type: ignore[arg-type]
