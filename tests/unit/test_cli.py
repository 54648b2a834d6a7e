#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the org2gmi command line.

Tests cover argument parsing, option mapping, environment variable
defaults, exit codes and the optional rich summary.
"""

import argparse
import io
import sys

import pytest

from org2gmi.cli import collect_argument_problems, main
from org2gmi.cli.actions import env_key_for
from org2gmi.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_parser_options,
    build_renderer_options,
    create_parser,
    non_negative_int,
    positive_int,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove ORG2GMI_ variables inherited from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("ORG2GMI_"):
            monkeypatch.delenv(key)


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentTypes:
    """Tests for argument type converters."""

    def test_non_negative_int(self):
        """Test zero and positive values pass."""
        assert non_negative_int("0") == 0
        assert non_negative_int("3") == 3

    @pytest.mark.parametrize("value", ["-1", "two", "1.5"])
    def test_non_negative_int_invalid(self, value):
        """Test invalid values raise ArgumentTypeError."""
        with pytest.raises(argparse.ArgumentTypeError):
            non_negative_int(value)

    def test_positive_int_rejects_zero(self):
        """Test zero is not positive."""
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("0")


@pytest.mark.unit
@pytest.mark.cli
class TestOptionMapping:
    """Tests for mapping parsed arguments to options."""

    def test_defaults(self):
        """Test no flags leaves default options."""
        args = create_parser().parse_args(["notes.org"])
        options = build_renderer_options(args)

        assert options.with_toc is True
        assert options.with_tags is True
        assert options.footnote_style == "brackets"
        assert build_parser_options(args).headline_levels == 5

    def test_renderer_flags(self):
        """Test each rendering flag."""
        args = create_parser().parse_args(
            [
                "notes.org",
                "--toc",
                "2",
                "--tags-not-in-toc",
                "--no-todo",
                "--priority",
                "--superscript-footnotes",
                "--single-space-trim",
                "--scheme-suffix",
                "never",
                "--passthrough",
                "gemini",
                "--passthrough",
                "gmi",
                "--strict",
            ]
        )
        options = build_renderer_options(args)

        assert options.with_toc == 2
        assert options.with_tags == "exclude-from-toc"
        assert options.with_todo_keywords is False
        assert options.with_priority is True
        assert options.footnote_style == "superscript"
        assert options.paragraph_trim == "single-space"
        assert options.scheme_suffix == "never"
        assert options.passthrough_types == ("gemini", "gmi")
        assert options.strict is True

    def test_toc_zero_disables(self):
        """Test --toc 0 turns the table of contents off."""
        args = create_parser().parse_args(["notes.org", "--toc", "0"])
        assert build_renderer_options(args).with_toc is False

    def test_parser_flags(self):
        """Test parsing flags."""
        args = create_parser().parse_args(
            ["notes.org", "--headline-levels", "3", "--no-section-numbers", "--todo-keywords", "NEXT"]
        )
        options = build_parser_options(args)

        assert options.headline_levels == 3
        assert options.section_numbers is False
        assert options.todo_keywords == ("TODO", "NEXT")

    def test_headline_levels_must_be_positive(self):
        """Test argparse rejects a zero headline level."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["notes.org", "--headline-levels", "0"])


@pytest.mark.unit
@pytest.mark.cli
class TestEnvironmentDefaults:
    """Tests for ORG2GMI_ environment variables."""

    def test_env_key(self):
        """Test the variable name for a destination."""
        assert env_key_for("output_dir") == "ORG2GMI_OUTPUT_DIR"

    def test_boolean_from_environment(self, monkeypatch):
        """Test boolean flags read truthy values."""
        monkeypatch.setenv("ORG2GMI_NO_TOC", "true")
        assert create_parser().parse_args(["notes.org"]).no_toc is True

    def test_typed_value_from_environment(self, monkeypatch):
        """Test typed options convert environment values."""
        monkeypatch.setenv("ORG2GMI_TOC", "2")
        assert create_parser().parse_args(["notes.org"]).toc == 2

    def test_append_from_environment(self, monkeypatch):
        """Test repeatable options split on commas."""
        monkeypatch.setenv("ORG2GMI_PASSTHROUGH", "gemini, gmi")
        assert create_parser().parse_args(["notes.org"]).passthrough == ["gemini", "gmi"]

    def test_command_line_wins(self, monkeypatch):
        """Test explicit arguments override the environment."""
        monkeypatch.setenv("ORG2GMI_SCHEME_SUFFIX", "always")
        args = create_parser().parse_args(["notes.org", "--scheme-suffix", "never"])
        assert args.scheme_suffix == "never"

    def test_output_dir_from_environment(self, monkeypatch, sample_org_file, tmp_path):
        """Test files land in the directory named by the environment."""
        monkeypatch.setenv("ORG2GMI_OUTPUT_DIR", str(tmp_path / "capsule"))
        assert main([str(sample_org_file)]) == EXIT_SUCCESS
        assert (tmp_path / "capsule" / "notes.gmi").is_file()


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentProblems:
    """Tests for argument combination checks."""

    def _problems(self, argv):
        return collect_argument_problems(create_parser().parse_args(argv))

    def test_valid(self):
        """Test a plain invocation has no problems."""
        assert self._problems(["a.org"]) == []

    def test_missing_input(self):
        """Test an input is required."""
        assert self._problems([]) == ["Input file is required"]

    @pytest.mark.parametrize(
        "argv",
        [
            ["a.org", "b.org", "--out", "x.gmi"],
            ["a.org", "--out", "x.gmi", "--output-dir", "dir"],
            ["a.org", "--toc", "2", "--no-toc"],
            ["a.org", "--no-tags", "--tags-not-in-toc"],
        ],
    )
    def test_conflicts(self, argv):
        """Test conflicting combinations are reported."""
        assert len(self._problems(argv)) == 1


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for main()."""

    def test_no_input(self, capsys):
        """Test a missing input is a validation error."""
        assert main([]) == EXIT_VALIDATION_ERROR
        assert "Input file is required" in capsys.readouterr().err

    def test_convert_file(self, sample_org_file):
        """Test the default conversion writes a .gmi file."""
        assert main([str(sample_org_file)]) == EXIT_SUCCESS
        output = sample_org_file.with_suffix(".gmi").read_text(encoding="utf-8")
        assert output.startswith("# Field Notes\n")

    def test_out_option(self, sample_org_file, tmp_path):
        """Test --out names the output file."""
        target = tmp_path / "site" / "index.gmi"
        assert main([str(sample_org_file), "--out", str(target), "--no-toc"]) == EXIT_SUCCESS
        assert "Table of Contents" not in target.read_text(encoding="utf-8")

    def test_stdout(self, sample_org_file, capsys):
        """Test --stdout prints instead of writing."""
        assert main([str(sample_org_file), "--stdout"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert out.startswith("# Field Notes\n")
        assert not sample_org_file.with_suffix(".gmi").exists()

    def test_stdin(self, monkeypatch, capsys):
        """Test - reads Org text from standard input."""
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"* From stdin\nHello")))

        assert main(["-", "--no-toc"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "## From stdin\n\nHello\n"

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing input is a file error."""
        assert main([str(tmp_path / "missing.org")]) == EXIT_FILE_ERROR
        assert "missing.org" in capsys.readouterr().err

    def test_missing_file_with_stdout(self, tmp_path):
        """Test a missing input is a file error when printing too."""
        assert main([str(tmp_path / "missing.org"), "--stdout"]) == EXIT_FILE_ERROR

    def test_partial_failure(self, sample_org_file, tmp_path):
        """Test one failing input does not stop the others."""
        code = main([str(tmp_path / "missing.org"), str(sample_org_file)])

        assert code == EXIT_FILE_ERROR
        assert sample_org_file.with_suffix(".gmi").is_file()

    def test_version(self, capsys):
        """Test --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "org2gmi" in capsys.readouterr().out

    def test_rich_summary(self, sample_org_file, capsys):
        """Test --rich prints a summary table."""
        pytest.importorskip("rich")

        assert main([str(sample_org_file), "--rich"]) == EXIT_SUCCESS
        assert "Conversion Summary" in capsys.readouterr().err

    def test_rich_missing(self, sample_org_file, monkeypatch, capsys):
        """Test --rich without rich installed is a dependency error."""
        monkeypatch.setitem(sys.modules, "rich.console", None)

        assert main([str(sample_org_file), "--rich"]) == EXIT_DEPENDENCY_ERROR
        assert "pip install org2gmi[rich]" in capsys.readouterr().err
