"""Argument parser construction and option mapping for the org2gmi CLI."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
from typing import Any

from org2gmi.cli.actions import EnvironmentAwareAction, EnvironmentAwareAppendAction, EnvironmentAwareBooleanAction
from org2gmi.options.gemini import GeminiRendererOptions
from org2gmi.options.org import OrgParserOptions

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def non_negative_int(value: str) -> int:
    """Parse a non-negative integer argument."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"{value!r} is not a valid integer") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value!r} is not a non-negative integer")
    return number


def positive_int(value: str) -> int:
    """Parse a positive integer argument."""
    number = non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError(f"{value!r} is not a positive integer")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    from org2gmi import __version__

    parser = argparse.ArgumentParser(
        prog="org2gmi",
        description="Convert Org-Mode files to Gemini gemtext.",
        epilog="Every option also reads a default from ORG2GMI_<OPTION>, e.g. ORG2GMI_OUTPUT_DIR.",
    )
    parser.add_argument("input", nargs="*", help="Org files to convert; use - to read standard input")
    parser.add_argument("--version", action="version", version=f"org2gmi {__version__}")

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--out", "-o", action=EnvironmentAwareAction, type=str, metavar="PATH", help="Output file (single input only)"
    )
    output_group.add_argument(
        "--output-dir", action=EnvironmentAwareAction, type=str, metavar="DIR", help="Directory to save converted files"
    )
    output_group.add_argument(
        "--stdout", action=EnvironmentAwareBooleanAction, help="Print gemtext to standard output instead of writing files"
    )
    output_group.add_argument(
        "--rich", action=EnvironmentAwareBooleanAction, help="Print a conversion summary table (requires rich)"
    )

    gemini_group = parser.add_argument_group("gemtext rendering")
    gemini_group.add_argument(
        "--toc",
        action=EnvironmentAwareAction,
        type=non_negative_int,
        metavar="N",
        help="List headlines down to depth N in the table of contents (0 disables it)",
    )
    gemini_group.add_argument("--no-toc", action=EnvironmentAwareBooleanAction, help="Omit the table of contents")
    gemini_group.add_argument("--no-tags", action=EnvironmentAwareBooleanAction, help="Omit headline tags")
    gemini_group.add_argument(
        "--tags-not-in-toc",
        action=EnvironmentAwareBooleanAction,
        help="Show tags on headlines but not in the table of contents",
    )
    gemini_group.add_argument("--no-todo", action=EnvironmentAwareBooleanAction, help="Omit TODO keywords")
    gemini_group.add_argument("--priority", action=EnvironmentAwareBooleanAction, help="Show [#A] priority cookies")
    gemini_group.add_argument(
        "--superscript-footnotes",
        action=EnvironmentAwareBooleanAction,
        help="Mark footnote references with superscript digits instead of [n]",
    )
    gemini_group.add_argument(
        "--single-space-trim",
        action=EnvironmentAwareBooleanAction,
        help="Trim only one leading space from paragraphs",
    )
    gemini_group.add_argument(
        "--scheme-suffix",
        action=EnvironmentAwareAction,
        choices=["standalone", "always", "never"],
        help="Where link labels get a (SCHEME) suffix (default: standalone)",
    )
    gemini_group.add_argument(
        "--passthrough",
        action=EnvironmentAwareAppendAction,
        metavar="TYPE",
        help="Export block/keyword type emitted verbatim (repeatable; default: gemini)",
    )
    gemini_group.add_argument(
        "--strict", action=EnvironmentAwareBooleanAction, help="Fail on node kinds that cannot be rendered"
    )

    org_group = parser.add_argument_group("org parsing")
    org_group.add_argument(
        "--headline-levels",
        action=EnvironmentAwareAction,
        type=positive_int,
        metavar="N",
        help="Deepest headline depth rendered as a heading (default: 5)",
    )
    org_group.add_argument(
        "--no-section-numbers", action=EnvironmentAwareBooleanAction, help="Do not number headlines"
    )
    org_group.add_argument(
        "--todo-keywords",
        action=EnvironmentAwareAppendAction,
        metavar="KEYWORD",
        help="Additional TODO keyword (repeatable)",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        action=EnvironmentAwareAction,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    logging_group.add_argument(
        "--log-file",
        action=EnvironmentAwareAction,
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    logging_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and logger names",
    )

    return parser


def build_renderer_options(parsed_args: argparse.Namespace) -> GeminiRendererOptions:
    """Map parsed arguments onto GeminiRendererOptions.

    Raises
    ------
    ValueError
        If the resulting options are invalid

    """
    overrides: dict[str, Any] = {}
    if parsed_args.no_toc:
        overrides["with_toc"] = False
    elif parsed_args.toc is not None:
        overrides["with_toc"] = parsed_args.toc if parsed_args.toc > 0 else False
    if parsed_args.no_tags:
        overrides["with_tags"] = False
    elif parsed_args.tags_not_in_toc:
        overrides["with_tags"] = "exclude-from-toc"
    if parsed_args.no_todo:
        overrides["with_todo_keywords"] = False
    if parsed_args.priority:
        overrides["with_priority"] = True
    if parsed_args.superscript_footnotes:
        overrides["footnote_style"] = "superscript"
    if parsed_args.single_space_trim:
        overrides["paragraph_trim"] = "single-space"
    if parsed_args.scheme_suffix:
        overrides["scheme_suffix"] = parsed_args.scheme_suffix
    if parsed_args.passthrough:
        overrides["passthrough_types"] = tuple(parsed_args.passthrough)
    if parsed_args.strict:
        overrides["strict"] = True
    return GeminiRendererOptions().create_updated(**overrides)


def build_parser_options(parsed_args: argparse.Namespace) -> OrgParserOptions:
    """Map parsed arguments onto OrgParserOptions."""
    overrides: dict[str, Any] = {"headline_levels": parsed_args.headline_levels}
    if parsed_args.no_section_numbers:
        overrides["section_numbers"] = False
    if parsed_args.todo_keywords:
        overrides["todo_keywords"] = tuple(dict.fromkeys([*OrgParserOptions().todo_keywords, *parsed_args.todo_keywords]))
    return OrgParserOptions().create_updated(**overrides)
