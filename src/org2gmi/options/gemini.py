#  Copyright (c) 2025 Tom Villani, Ph.D.
# org2gmi/options/gemini.py
"""Configuration options for Gemini (gemtext) rendering.

This module defines the options that control how the document tree is
transcoded into gemtext: the table of contents, headline decorations,
footnote marker style, paragraph trimming and raw passthrough.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from org2gmi.constants import (
    DEFAULT_DELEGATE_FOREIGN_EXPORTS,
    DEFAULT_FOOTNOTE_STYLE,
    DEFAULT_FOOTNOTES_TITLE,
    DEFAULT_PARAGRAPH_TRIM,
    DEFAULT_PASSTHROUGH_TYPES,
    DEFAULT_SCHEME_SUFFIX,
    DEFAULT_TOC_TITLE,
    DEFAULT_WITH_PRIORITY,
    DEFAULT_WITH_TAGS,
    DEFAULT_WITH_TOC,
    DEFAULT_WITH_TODO_KEYWORDS,
    FootnoteStyle,
    ParagraphTrimMode,
    SchemeSuffixMode,
    TagsMode,
)
from org2gmi.exceptions import ValidationError
from org2gmi.options.base import BaseRendererOptions
from org2gmi.options.plaintext import PlainTextOptions


@dataclass(frozen=True)
class GeminiRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Gemini rendering.

    Parameters
    ----------
    with_toc : bool or int, default True
        Table of contents request. ``False`` disables it, ``True`` lists every
        enumerable headline, an integer limits the listing to that depth.
    with_tags : bool or "exclude-from-toc", default True
        Show headline tags. ``"exclude-from-toc"`` shows them on headlines but
        not in the table of contents.
    with_todo_keywords : bool, default True
        Prefix headlines with their TODO keyword.
    with_priority : bool, default False
        Prefix headlines with their ``[#X]`` priority cookie.
    footnote_style : {"brackets", "superscript"}, default "brackets"
        Render footnote markers as ``[1]`` or as superscript digits.
    paragraph_trim : {"whitespace", "single-space"}, default "whitespace"
        Trim any leading/trailing whitespace from paragraphs, or only a
        single leading space.
    scheme_suffix : {"standalone", "always", "never"}, default "standalone"
        Where link labels receive the ``(SCHEME)`` suffix: only on standalone
        ``=>`` lines, on every link, or never.
    passthrough_types : tuple of str, default ("gemini",)
        Export block / keyword types whose raw value is emitted verbatim.
    delegate_foreign_exports : bool, default False
        Hand export blocks and keywords of other types to the fallback
        renderer instead of dropping them.
    toc_title : str, default "Table of Contents"
        Heading of the table of contents block.
    footnotes_title : str, default "Footnotes"
        Heading of the footnote section.
    fallback_options : PlainTextOptions
        Options for the plain-text renderer used for delegated node kinds.

    Examples
    --------
        >>> options = GeminiRendererOptions(with_toc=2, footnote_style="superscript")
        >>> options.create_updated(with_priority=True).with_priority
        True

    """

    with_toc: bool | int = field(
        default=DEFAULT_WITH_TOC,
        metadata={"help": "Table of contents: true, false or a maximum depth", "importance": "core"},
    )
    with_tags: bool | TagsMode = field(
        default=DEFAULT_WITH_TAGS,
        metadata={
            "help": "Show headline tags: true, false or exclude-from-toc",
            "choices": [True, False, "exclude-from-toc"],
            "importance": "core",
        },
    )
    with_todo_keywords: bool = field(
        default=DEFAULT_WITH_TODO_KEYWORDS,
        metadata={"help": "Show TODO keywords in headlines", "cli_name": "no-todo", "importance": "core"},
    )
    with_priority: bool = field(
        default=DEFAULT_WITH_PRIORITY,
        metadata={"help": "Show [#X] priority cookies in headlines", "importance": "core"},
    )
    footnote_style: FootnoteStyle = field(
        default=DEFAULT_FOOTNOTE_STYLE,
        metadata={
            "help": "Footnote marker style",
            "choices": ["brackets", "superscript"],
            "importance": "core",
        },
    )
    paragraph_trim: ParagraphTrimMode = field(
        default=DEFAULT_PARAGRAPH_TRIM,
        metadata={
            "help": "Paragraph trimming: any surrounding whitespace or a single leading space",
            "choices": ["whitespace", "single-space"],
            "importance": "advanced",
        },
    )
    scheme_suffix: SchemeSuffixMode = field(
        default=DEFAULT_SCHEME_SUFFIX,
        metadata={
            "help": "Where link labels get an (SCHEME) suffix",
            "choices": ["standalone", "always", "never"],
            "importance": "advanced",
        },
    )
    passthrough_types: tuple[str, ...] = field(
        default=DEFAULT_PASSTHROUGH_TYPES,
        metadata={"help": "Export block and keyword types emitted verbatim", "importance": "advanced"},
    )
    delegate_foreign_exports: bool = field(
        default=DEFAULT_DELEGATE_FOREIGN_EXPORTS,
        metadata={"help": "Let the plain-text renderer handle foreign export blocks", "importance": "advanced"},
    )
    toc_title: str = field(
        default=DEFAULT_TOC_TITLE,
        metadata={"help": "Heading of the table of contents", "type": str, "importance": "advanced"},
    )
    footnotes_title: str = field(
        default=DEFAULT_FOOTNOTES_TITLE,
        metadata={"help": "Heading of the footnote section", "type": str, "importance": "advanced"},
    )
    fallback_options: PlainTextOptions = field(
        default_factory=PlainTextOptions,
        metadata={"help": "Options for the plain-text fallback renderer", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If a value is outside its accepted set.

        """
        if not isinstance(self.with_toc, bool) and (not isinstance(self.with_toc, int) or self.with_toc < 0):
            raise ValidationError(
                f"with_toc must be a boolean or a non-negative depth, got {self.with_toc!r}",
                parameter_name="with_toc",
                parameter_value=self.with_toc,
            )
        if self.with_tags not in (True, False, "exclude-from-toc"):
            raise ValidationError(
                f"with_tags must be true, false or 'exclude-from-toc', got {self.with_tags!r}",
                parameter_name="with_tags",
                parameter_value=self.with_tags,
            )
        if self.footnote_style not in ("brackets", "superscript"):
            raise ValidationError(
                f"Unknown footnote_style: {self.footnote_style!r}",
                parameter_name="footnote_style",
                parameter_value=self.footnote_style,
            )
        if self.paragraph_trim not in ("whitespace", "single-space"):
            raise ValidationError(
                f"Unknown paragraph_trim: {self.paragraph_trim!r}",
                parameter_name="paragraph_trim",
                parameter_value=self.paragraph_trim,
            )
        if self.scheme_suffix not in ("standalone", "always", "never"):
            raise ValidationError(
                f"Unknown scheme_suffix: {self.scheme_suffix!r}",
                parameter_name="scheme_suffix",
                parameter_value=self.scheme_suffix,
            )

    @property
    def toc_depth(self) -> int | None:
        """Maximum headline depth listed in the table of contents.

        ``None`` means no depth limit; ``0`` means no table of contents.
        """
        if self.with_toc is True:
            return None
        if self.with_toc is False:
            return 0
        return int(self.with_toc)

    @property
    def tags_in_headlines(self) -> bool:
        """Whether headline lines carry tags."""
        return self.with_tags is True or self.with_tags == "exclude-from-toc"

    @property
    def tags_in_toc(self) -> bool:
        """Whether table of contents entries carry tags."""
        return self.with_tags is True

    def is_passthrough_type(self, block_type: str | None) -> bool:
        """Return True when ``block_type`` names one of the dialect's own export tags."""
        if not block_type:
            return False
        return block_type.lower() in {t.lower() for t in self.passthrough_types}
