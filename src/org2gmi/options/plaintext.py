#  Copyright (c) 2025 Tom Villani, Ph.D.
# org2gmi/options/plaintext.py
"""Configuration options for the plain-text fallback renderer.

The plain-text renderer handles every node kind the Gemini dialect has no
native rule for (tables, entities, inline tasks, special blocks, inline
markup, horizontal rules and centered text).
"""

from dataclasses import dataclass, field

from org2gmi.constants import (
    DEFAULT_HORIZONTAL_RULE_CHAR,
    DEFAULT_TABLE_CELL_SEPARATOR,
    DEFAULT_TEXT_WIDTH,
)
from org2gmi.options.base import BaseRendererOptions


@dataclass(frozen=True)
class PlainTextOptions(BaseRendererOptions):
    r"""Configuration options for plain text rendering.

    Parameters
    ----------
    text_width : int, default 72
        Width used to center text in center blocks and to size horizontal
        rules.
    table_cell_separator : str, default " | "
        Separator string to use between table cells.
    include_table_headers : bool, default True
        Whether to include table header rows in the output.
    horizontal_rule_char : str, default "-"
        Character repeated across ``text_width`` for horizontal rules.
    paragraph_separator : str, default "\n\n"
        Separator between block elements.

    Examples
    --------
        >>> from org2gmi.ast import Document, Paragraph, PlainText
        >>> from org2gmi.renderers.plaintext import PlainTextRenderer
        >>> doc = Document(children=[Paragraph(content=[PlainText(content="Hello")])])
        >>> PlainTextRenderer(PlainTextOptions(text_width=40)).render_to_string(doc)
        'Hello'

    """

    text_width: int = field(
        default=DEFAULT_TEXT_WIDTH,
        metadata={"help": "Width for centered text and horizontal rules", "type": int, "importance": "core"},
    )
    table_cell_separator: str = field(
        default=DEFAULT_TABLE_CELL_SEPARATOR,
        metadata={"help": "Separator between table cells", "type": str, "importance": "advanced"},
    )
    include_table_headers: bool = field(
        default=True,
        metadata={
            "help": "Include table headers in output",
            "cli_name": "no-include-table-headers",
            "importance": "core",
        },
    )
    horizontal_rule_char: str = field(
        default=DEFAULT_HORIZONTAL_RULE_CHAR,
        metadata={"help": "Character used to draw horizontal rules", "type": str, "importance": "advanced"},
    )
    paragraph_separator: str = field(
        default="\n\n", metadata={"help": "Separator between paragraphs", "type": str, "importance": "advanced"}
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``text_width`` is not positive or the rule character is not a
            single character.

        """
        if self.text_width <= 0:
            raise ValueError(f"text_width must be positive, got {self.text_width}")
        if len(self.horizontal_rule_char) != 1:
            raise ValueError(f"horizontal_rule_char must be a single character, got {self.horizontal_rule_char!r}")
