"""Command-line interface for the org2gmi converter.

Environment Variable Support
----------------------------
All CLI options support environment variable defaults using the pattern
ORG2GMI_<OPTION_NAME> where option names are converted to uppercase with
hyphens replaced by underscores. CLI arguments always override
environment variables.

Examples
--------
Convert a file next to itself (``notes.org`` -> ``notes.gmi``)::

    $ org2gmi notes.org

Convert several files into a capsule directory::

    $ org2gmi *.org --output-dir ./capsule

Limit the table of contents and print to the terminal::

    $ org2gmi notes.org --toc 2 --stdout

Use environment variables for defaults::

    $ export ORG2GMI_OUTPUT_DIR=./capsule
    $ export ORG2GMI_SUPERSCRIPT_FOOTNOTES=true
    $ org2gmi *.org

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from org2gmi.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_parser_options,
    build_renderer_options,
    create_parser,
)
from org2gmi.exceptions import (
    DependencyError,
    FileError,
    Org2GmiError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from org2gmi.logging_utils import configure_logging
from org2gmi.options.gemini import GeminiRendererOptions
from org2gmi.options.org import OrgParserOptions

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


@dataclass
class ConversionResult:
    """Outcome of converting one input."""

    source: str
    output: Optional[str]
    exit_code: int
    error: Optional[str] = None


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def collect_argument_problems(parsed_args: argparse.Namespace) -> list[str]:
    """Return human-readable problems with the parsed arguments."""
    problems = []
    if not parsed_args.input:
        problems.append("Input file is required")
    if parsed_args.out and len(parsed_args.input) > 1:
        problems.append("--out can only be used with a single input file")
    if parsed_args.out and parsed_args.output_dir:
        problems.append("--out and --output-dir cannot be combined")
    if parsed_args.no_toc and parsed_args.toc is not None:
        problems.append("--toc and --no-toc cannot be combined")
    if parsed_args.no_tags and parsed_args.tags_not_in_toc:
        problems.append("--no-tags and --tags-not-in-toc cannot be combined")
    return problems


def _exit_code_for(error: Org2GmiError) -> int:
    if isinstance(error, (FileError, OutputWriteError)):
        return EXIT_FILE_ERROR
    if isinstance(error, DependencyError):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(error, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(error, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(error, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def convert_one(
    item: str,
    parsed_args: argparse.Namespace,
    parser_options: OrgParserOptions,
    renderer_options: GeminiRendererOptions,
) -> ConversionResult:
    """Convert a single input, reporting failures instead of raising them."""
    from org2gmi.api import convert_file, to_gemini

    try:
        if item == STDIN_MARKER:
            content = to_gemini(sys.stdin.buffer, parser_options=parser_options, renderer_options=renderer_options)
            if parsed_args.out and not parsed_args.stdout:
                Path(parsed_args.out).parent.mkdir(parents=True, exist_ok=True)
                Path(parsed_args.out).write_text(content, encoding="utf-8")
                return ConversionResult(item, parsed_args.out, EXIT_SUCCESS)
            sys.stdout.write(content)
            return ConversionResult(item, None, EXIT_SUCCESS)

        if parsed_args.stdout:
            source = Path(item)
            if not source.is_file():
                return ConversionResult(item, None, EXIT_FILE_ERROR, f"File not found: {item}")
            sys.stdout.write(to_gemini(source, parser_options=parser_options, renderer_options=renderer_options))
            return ConversionResult(item, None, EXIT_SUCCESS)

        target = convert_file(
            item,
            parsed_args.out,
            output_dir=parsed_args.output_dir,
            parser_options=parser_options,
            renderer_options=renderer_options,
        )
        return ConversionResult(item, str(target) if target else None, EXIT_SUCCESS)
    except Org2GmiError as e:
        logger.debug("Conversion of %s failed", item, exc_info=True)
        return ConversionResult(item, None, _exit_code_for(e), str(e))
    except OSError as e:
        logger.debug("Conversion of %s failed", item, exc_info=True)
        return ConversionResult(item, None, EXIT_FILE_ERROR, str(e))


def print_summary(results: list[ConversionResult]) -> None:
    """Print a summary table of conversions using rich.

    Raises
    ------
    DependencyError
        If rich is not installed

    """
    try:
        from rich.console import Console
        from rich.table import Table
    except ImportError as e:
        raise DependencyError(
            component_name="rich-output",
            missing_packages=[("rich", "")],
            message="Rich output requires the optional 'rich' dependency. Install with: pip install org2gmi[rich]",
            original_import_error=e,
        ) from e

    console = Console(stderr=True)
    table = Table(title="Conversion Summary")
    table.add_column("Input", style="cyan", no_wrap=False)
    table.add_column("Output", style="green", no_wrap=False)
    table.add_column("Status", style="white")

    for result in results:
        if result.exit_code == EXIT_SUCCESS:
            status = "[green][OK] Converted[/green]"
        else:
            status = f"[red][X] {result.error or 'Failed'}[/red]"
        table.add_row(result.source, result.output or "(stdout)", status)

    console.print(table)


def main(args: list[str] | None = None) -> int:
    """Execute the org2gmi command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    problems = collect_argument_problems(parsed_args)
    if problems:
        for problem in problems:
            print(f"Error: {problem}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        renderer_options = build_renderer_options(parsed_args)
        parser_options = build_parser_options(parsed_args)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    results = [convert_one(item, parsed_args, parser_options, renderer_options) for item in parsed_args.input]

    for result in results:
        if result.exit_code != EXIT_SUCCESS:
            print(f"Error: {result.source}: {result.error}", file=sys.stderr)

    if parsed_args.rich:
        try:
            print_summary(results)
        except DependencyError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_DEPENDENCY_ERROR

    failures = [result.exit_code for result in results if result.exit_code != EXIT_SUCCESS]
    return failures[0] if failures else EXIT_SUCCESS


__all__ = ["ConversionResult", "collect_argument_problems", "convert_one", "main", "print_summary"]
