#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/constants.py
"""Constants and default values for org2gmi.

This module centralizes the literal types, default option values and lookup
tables shared by the parser, the Gemini renderer and the plain-text fallback.

"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type aliases
# =============================================================================

FootnoteStyle = Literal["brackets", "superscript"]
ParagraphTrimMode = Literal["whitespace", "single-space"]
SchemeSuffixMode = Literal["standalone", "always", "never"]
TagsMode = Literal["exclude-from-toc"]
CheckboxState = Literal["on", "off", "trans"]
PreformattedKind = Literal["example", "fixed-width", "source"]
MarkupKind = Literal["bold", "italic", "underline", "strike-through", "code", "verbatim"]

# =============================================================================
# File extensions
# =============================================================================

ORG_EXTENSION = ".org"
GEMINI_EXTENSION = ".gmi"

# =============================================================================
# Gemini output grammar
# =============================================================================

MAX_HEADING_LEVEL = 6
"""Deepest ``#`` heading the output dialect supports."""

HEADLINE_BULLET_WIDTH = 4
LINK_LINE_PREFIX = "=> "
QUOTE_PREFIX = "> "
CODE_FENCE = "```"
TAG_SEPARATOR = "     "

SELF_DESCRIBING_SCHEMES = frozenset({"gemini", "file"})
"""Link schemes that never get an ``(SCHEME)`` suffix in their label."""

LOCAL_PATH_PREFIXES = ("/", "./", "../", "~/")

DEFAULT_PASSTHROUGH_TYPES = ("gemini",)
DEFAULT_TOC_TITLE = "Table of Contents"
DEFAULT_FOOTNOTES_TITLE = "Footnotes"

SUPERSCRIPT_DIGITS = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

CHECKBOX_MARKERS: dict[str | None, str] = {
    "on": "[X] ",
    "trans": "[-] ",
    "off": "[ ] ",
    None: "",
}

# =============================================================================
# Renderer defaults
# =============================================================================

DEFAULT_WITH_TOC: bool | int = True
DEFAULT_WITH_TAGS: bool | TagsMode = True
DEFAULT_WITH_TODO_KEYWORDS = True
DEFAULT_WITH_PRIORITY = False
DEFAULT_FOOTNOTE_STYLE: FootnoteStyle = "brackets"
DEFAULT_PARAGRAPH_TRIM: ParagraphTrimMode = "whitespace"
DEFAULT_SCHEME_SUFFIX: SchemeSuffixMode = "standalone"
DEFAULT_DELEGATE_FOREIGN_EXPORTS = False

# Plain-text fallback
DEFAULT_TEXT_WIDTH = 72
DEFAULT_TABLE_CELL_SEPARATOR = " | "
DEFAULT_HORIZONTAL_RULE_CHAR = "-"
FALLBACK_EXPORT_TYPES = frozenset({"ascii", "text", "txt"})

# =============================================================================
# Parser defaults
# =============================================================================

DEFAULT_ORG_TODO_KEYWORDS = ("TODO",)
DEFAULT_ORG_DONE_KEYWORDS = ("DONE",)
DEFAULT_HEADLINE_LEVELS = 5
DEFAULT_SECTION_NUMBERS: bool | int = True
DEFAULT_INLINETASK_MIN_LEVEL = 15
DEFAULT_ORG_PARSE_TAGS = True

DEPS_ORG = [("orgparse", "orgparse", "")]

# Org entities rendered by the fallback (name -> UTF-8 replacement)
ORG_ENTITIES: dict[str, str] = {
    "alpha": "α",
    "beta": "β",
    "gamma": "γ",
    "delta": "δ",
    "epsilon": "ε",
    "lambda": "λ",
    "mu": "μ",
    "pi": "π",
    "sigma": "σ",
    "tau": "τ",
    "phi": "φ",
    "omega": "ω",
    "Delta": "Δ",
    "Sigma": "Σ",
    "Omega": "Ω",
    "nbsp": " ",
    "mdash": "—",
    "ndash": "–",
    "hellip": "…",
    "dots": "…",
    "laquo": "«",
    "raquo": "»",
    "lsquo": "‘",
    "rsquo": "’",
    "ldquo": "“",
    "rdquo": "”",
    "rarr": "→",
    "larr": "←",
    "to": "→",
    "uarr": "↑",
    "darr": "↓",
    "times": "×",
    "div": "÷",
    "pm": "±",
    "deg": "°",
    "copy": "©",
    "reg": "®",
    "trade": "™",
    "euro": "€",
    "pound": "£",
    "yen": "¥",
    "cent": "¢",
    "sect": "§",
    "para": "¶",
    "infin": "∞",
    "le": "≤",
    "ge": "≥",
    "ne": "≠",
    "check": "✓",
}
