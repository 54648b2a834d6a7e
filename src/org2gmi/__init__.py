"""org2gmi - Convert Org-Mode documents to Gemini gemtext.

The conversion runs in two stages: ``OrgParser`` builds a document tree
from Org text with orgparse, and ``GeminiRenderer`` turns the tree into
gemtext. Gemtext has no inline links, so every link becomes a numbered
reference and each section ends with its own ``=>`` link list. Footnotes
are numbered in order of first reference and collected at the end, and a
table of contents lists the numbered headlines.

Examples
--------
Convert a file next to itself:

    >>> from org2gmi import convert_file
    >>> convert_file("notes.org")
    PosixPath('notes.gmi')

Convert text directly:

    >>> from org2gmi import to_gemini
    >>> gemtext = to_gemini("#+TITLE: Notes\\n* Intro\\nHello.")

Render a tree built elsewhere:

    >>> from org2gmi import render_document
    >>> from org2gmi.options import GeminiRendererOptions
    >>> text = render_document(doc, GeminiRendererOptions(with_toc=False))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "org2gmi requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from org2gmi.api import convert_file, render_document, render_subtree, to_ast, to_gemini
from org2gmi.exceptions import DependencyError, Org2GmiError, ParsingError, RenderingError
from org2gmi.options import GeminiRendererOptions, OrgParserOptions, PlainTextOptions

__all__ = [
    "__version__",
    "convert_file",
    "render_document",
    "render_subtree",
    "to_ast",
    "to_gemini",
    "DependencyError",
    "GeminiRendererOptions",
    "Org2GmiError",
    "OrgParserOptions",
    "ParsingError",
    "PlainTextOptions",
    "RenderingError",
]
