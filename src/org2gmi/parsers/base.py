#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/parsers/base.py
"""Base class for document tree providers.

A parser turns source text into the :class:`~org2gmi.ast.Document` tree the
renderers consume.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from org2gmi.ast import Document
from org2gmi.exceptions import InvalidOptionsError, SourceNotFoundError
from org2gmi.options.base import BaseParserOptions
from org2gmi.utils.encoding import read_text_with_encoding_detection


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options or BaseParserOptions()

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> Document:
        """Parse input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            Input to parse

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If parsing fails

        """
        pass

    @staticmethod
    def _load_text_content(input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> str:
        """Load text from a path, raw bytes, a stream or an Org string.

        A ``str`` is treated as a path only when it names an existing file;
        otherwise it is the content itself.
        """
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        if isinstance(input_data, Path):
            if not input_data.is_file():
                raise SourceNotFoundError(file_path=str(input_data))
            return read_text_with_encoding_detection(input_data.read_bytes())
        if isinstance(input_data, str):
            if len(input_data) <= 260 and "\n" not in input_data:
                try:
                    path = Path(input_data)
                    if path.is_file():
                        return read_text_with_encoding_detection(path.read_bytes())
                except OSError:
                    pass
            return input_data
        data = input_data.read()
        if isinstance(data, bytes):
            return read_text_with_encoding_detection(data)
        return data
