#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options dataclasses for org2gmi parsers and renderers."""

from org2gmi.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from org2gmi.options.gemini import GeminiRendererOptions
from org2gmi.options.org import OrgParserOptions
from org2gmi.options.plaintext import PlainTextOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "GeminiRendererOptions",
    "OrgParserOptions",
    "PlainTextOptions",
]
