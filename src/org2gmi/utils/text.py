#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/utils/text.py
"""Paragraph and inline text formatting helpers.

Functions
---------
format_paragraph : Reflow a paragraph (join soft breaks, trim, prefix lines)
collapse_lines : Flatten a fragment onto a single line
to_superscript : Render an integer with superscript digits
dedent_block : Remove the common indentation of a literal block

Examples
--------
    >>> format_paragraph("line one\\nline two")
    'line one line two'
    >>> format_paragraph("first\\n\\nsecond", prefix="> ")
    '> first\\n>\\n> second'
    >>> to_superscript(12)
    '¹²'

"""

from __future__ import annotations

import re
import textwrap

from org2gmi.constants import CODE_FENCE, SUPERSCRIPT_DIGITS, ParagraphTrimMode

_LINE_BREAK_RUN = re.compile(r"[ \t]*\n\s*")
_STRUCTURAL_LINE = re.compile(r"(=> |\* |\d+\. |```)")


def _is_structural(line: str) -> bool:
    return _STRUCTURAL_LINE.match(line) is not None


def join_soft_breaks(text: str) -> str:
    """Replace each soft line break with a single space.

    A newline is a soft break when the line before it is not empty and the
    line after it starts with a non-blank character. Blank-line paragraph
    breaks and indented continuation lines are kept. Lines that already
    carry gemtext structure (``=>`` links, ``*`` or ``N.`` bullets, fences)
    are never merged with their neighbours, and fenced content is left
    untouched.

    Parameters
    ----------
    text : str
        Text to reflow

    Returns
    -------
    str
        Text with soft breaks joined

    """
    merged: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if line.startswith(CODE_FENCE):
            in_fence = not in_fence
            merged.append(line)
            continue
        if (
            not in_fence
            and merged
            and merged[-1] != ""
            and line[:1] != ""
            and not line[:1].isspace()
            and not _is_structural(merged[-1])
            and not _is_structural(line)
        ):
            merged[-1] = f"{merged[-1]} {line}"
        else:
            merged.append(line)
    return "\n".join(merged)


def trim_paragraph(text: str, trim_mode: ParagraphTrimMode = "whitespace") -> str:
    """Trim a reflowed paragraph.

    ``"whitespace"`` removes any surrounding whitespace; ``"single-space"``
    removes at most one leading space and any trailing whitespace.
    """
    if trim_mode == "single-space":
        if text.startswith(" "):
            text = text[1:]
        return text.rstrip()
    return text.strip()


def format_paragraph(
    text: str,
    prefix: str | None = None,
    trim_mode: ParagraphTrimMode = "whitespace",
) -> str:
    """Reflow paragraph text for output.

    Parameters
    ----------
    text : str
        Rendered inline content of the paragraph
    prefix : str or None, default = None
        String prepended to every resulting line (``"> "`` for quotes).
        Prefixed lines are right-trimmed, so blank lines become the bare
        prefix marker.
    trim_mode : {"whitespace", "single-space"}, default "whitespace"
        How surrounding whitespace is removed

    Returns
    -------
    str
        Formatted paragraph

    """
    formatted = trim_paragraph(join_soft_breaks(text), trim_mode)
    if prefix:
        formatted = "\n".join((prefix + line).rstrip() for line in formatted.split("\n"))
    return formatted


def collapse_lines(text: str) -> str:
    """Flatten internal line breaks to single spaces and trim the result."""
    return _LINE_BREAK_RUN.sub(" ", text).strip()


def to_superscript(number: int) -> str:
    """Render ``number`` with Unicode superscript digits."""
    return str(number).translate(SUPERSCRIPT_DIGITS)


def dedent_block(text: str) -> str:
    """Remove common indentation and surrounding blank lines from a literal block."""
    lines = textwrap.dedent(text.expandtabs(8)).split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(line.rstrip() for line in lines)


__all__ = [
    "collapse_lines",
    "dedent_block",
    "format_paragraph",
    "join_soft_breaks",
    "to_superscript",
    "trim_paragraph",
]
