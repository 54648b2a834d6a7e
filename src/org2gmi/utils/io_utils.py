#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/utils/io_utils.py
"""I/O utilities for naming and writing gemtext output."""

from __future__ import annotations

import io
import logging
from io import StringIO
from pathlib import Path
from typing import IO, Union, cast

from org2gmi.constants import GEMINI_EXTENSION, ORG_EXTENSION
from org2gmi.exceptions import OutputWriteError

logger = logging.getLogger(__name__)


def output_path_for(source: Union[str, Path], output_dir: Union[str, Path, None] = None) -> Path:
    """Return the gemtext path for ``source``.

    The ``.org`` extension is replaced by ``.gmi``; any other extension gets
    ``.gmi`` appended. With ``output_dir`` the file name is kept and the
    directory replaced.

    Examples
    --------
        >>> output_path_for("notes/page.org")
        PosixPath('notes/page.gmi')

    """
    path = Path(source)
    if path.suffix.lower() == ORG_EXTENSION:
        target = path.with_suffix(GEMINI_EXTENSION)
    else:
        target = path.with_name(path.name + GEMINI_EXTENSION)
    if output_dir is not None:
        target = Path(output_dir) / target.name
    return target


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str], None]) -> Union[StringIO, None]:
    """Write content to output destination or return as file-like object.

    Parameters
    ----------
    content : str
        Rendered text
    output : str, Path, IO[bytes], IO[str], or None
        Output destination. Can be:
        - None: Returns content as StringIO
        - str or Path: Writes UTF-8 content to file at that path
        - IO[bytes]: Writes UTF-8 encoded content to binary file-like object
        - IO[str]: Writes content to text file-like object

    Returns
    -------
    StringIO or None
        StringIO when output is None, otherwise None after writing

    Raises
    ------
    OutputWriteError
        If writing to a path fails
    TypeError
        If output type is not supported

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(file_path=str(output_path), original_error=e) from e
        logger.debug("Wrote %d characters to %s", len(content), output_path)
        return None

    if hasattr(output, "write"):
        if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["output_path_for", "write_content"]
