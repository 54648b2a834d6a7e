#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/utils/__init__.py
"""Helper utilities shared by the org2gmi parser, renderers and CLI."""

from org2gmi.utils.footnotes import FootnoteNumberer
from org2gmi.utils.text import collapse_lines, format_paragraph, to_superscript

__all__ = ["FootnoteNumberer", "collapse_lines", "format_paragraph", "to_superscript"]
