#  Copyright (c) 2025 Tom Villani, Ph.D.
# org2gmi/options/org.py
"""Configuration options for Org-Mode parsing.

This module defines the options used when building the document tree from
Org text with orgparse.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from org2gmi.constants import (
    DEFAULT_HEADLINE_LEVELS,
    DEFAULT_INLINETASK_MIN_LEVEL,
    DEFAULT_ORG_DONE_KEYWORDS,
    DEFAULT_ORG_PARSE_TAGS,
    DEFAULT_ORG_TODO_KEYWORDS,
    DEFAULT_SECTION_NUMBERS,
)
from org2gmi.options.base import BaseParserOptions


@dataclass(frozen=True)
class OrgParserOptions(BaseParserOptions):
    """Configuration options for Org-Mode-to-AST parsing.

    Parameters
    ----------
    todo_keywords : tuple[str, ...], default ("TODO",)
        Keywords recognized as open TODO states.
    done_keywords : tuple[str, ...], default ("DONE",)
        Keywords recognized as closed TODO states.
    parse_tags : bool, default True
        Whether to keep headline tags (e.g., ``:work:urgent:``).
    section_numbers : bool or int, default True
        Headline numbering: ``False`` disables it, an integer stops numbering
        below that depth. A ``num:`` entry in ``#+OPTIONS:`` overrides it.
    headline_levels : int, default 5
        Deepest headline depth exported as a heading; deeper headlines are
        flagged low-level. An ``H:`` entry in ``#+OPTIONS:`` overrides it.
    inlinetask_min_level : int, default 15
        Headlines with at least this many stars are inline tasks.

    Examples
    --------
        >>> options = OrgParserOptions(todo_keywords=("TODO", "NEXT"), headline_levels=3)

    """

    todo_keywords: tuple[str, ...] = field(
        default=DEFAULT_ORG_TODO_KEYWORDS,
        metadata={"help": "TODO keywords to recognize", "cli_name": "todo-keywords", "importance": "core"},
    )
    done_keywords: tuple[str, ...] = field(
        default=DEFAULT_ORG_DONE_KEYWORDS,
        metadata={"help": "DONE keywords to recognize", "cli_name": "done-keywords", "importance": "core"},
    )
    parse_tags: bool = field(
        default=DEFAULT_ORG_PARSE_TAGS,
        metadata={"help": "Parse heading tags (e.g., :work:urgent:)", "cli_name": "no-parse-tags", "importance": "core"},
    )
    section_numbers: bool | int = field(
        default=DEFAULT_SECTION_NUMBERS,
        metadata={"help": "Number headlines: true, false or a maximum depth", "importance": "core"},
    )
    headline_levels: int = field(
        default=DEFAULT_HEADLINE_LEVELS,
        metadata={"help": "Deepest headline exported as a heading", "type": int, "importance": "core"},
    )
    inlinetask_min_level: int = field(
        default=DEFAULT_INLINETASK_MIN_LEVEL,
        metadata={"help": "Minimum stars for an inline task", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges."""
        super().__post_init__()
        if self.headline_levels < 1:
            raise ValueError(f"headline_levels must be at least 1, got {self.headline_levels}")
        if self.inlinetask_min_level < 2:
            raise ValueError(f"inlinetask_min_level must be at least 2, got {self.inlinetask_min_level}")
        if not isinstance(self.section_numbers, bool) and self.section_numbers < 0:
            raise ValueError(f"section_numbers depth must be non-negative, got {self.section_numbers}")
