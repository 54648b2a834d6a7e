#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/org2gmi/parsers/__init__.py
"""Parsers building the org2gmi document tree.

OrgParser reads Org-Mode text with orgparse and produces a Document with
headline numbering already assigned.

Examples
--------
    >>> from org2gmi.parsers import OrgParser
    >>> doc = OrgParser().parse("* Heading\\nBody text.")

"""

from org2gmi.parsers.base import BaseParser
from org2gmi.parsers.org import OrgParser, parse_export_options, parse_todo_keywords

__all__ = ["BaseParser", "OrgParser", "parse_export_options", "parse_todo_keywords"]
