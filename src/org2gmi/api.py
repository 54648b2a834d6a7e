"""The exported API functions for Org to gemtext conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/org2gmi/api.py
import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, TypeVar, Union

from org2gmi.ast.nodes import Document, Node
from org2gmi.exceptions import InvalidOptionsError, SourceNotFoundError
from org2gmi.options.base import BaseParserOptions, BaseRendererOptions
from org2gmi.options.gemini import GeminiRendererOptions
from org2gmi.options.org import OrgParserOptions
from org2gmi.parsers.org import OrgParser
from org2gmi.renderers.gemini import GeminiRenderer
from org2gmi.utils.decorators import debug_timer
from org2gmi.utils.io_utils import output_path_for, write_content

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _field_names(options_class: type) -> set[str]:
    return {f.name for f in fields(options_class)}


def _merge_options(options: Optional[OptionsT], options_class: type[OptionsT], overrides: dict[str, Any]) -> OptionsT:
    """Apply keyword overrides to an options instance, creating a default one when needed."""
    base = options if options is not None else options_class()
    if not overrides:
        return base
    return base.create_updated(**overrides)


def _split_kwargs(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Route keyword arguments to parser or renderer options by field name.

    Raises
    ------
    InvalidOptionsError
        If a keyword matches no option field

    """
    parser_fields = _field_names(OrgParserOptions)
    renderer_fields = _field_names(GeminiRendererOptions)
    parser_kwargs: dict[str, Any] = {}
    renderer_kwargs: dict[str, Any] = {}
    for key, value in kwargs.items():
        if key in renderer_fields:
            renderer_kwargs[key] = value
        elif key in parser_fields:
            parser_kwargs[key] = value
        else:
            raise InvalidOptionsError(
                component_name="org2gmi",
                expected_type=GeminiRendererOptions,
                received_type=type(value),
                message=f"Unknown option: {key!r}",
            )
    return parser_kwargs, renderer_kwargs


def render_document(doc: Document, options: GeminiRendererOptions | None = None) -> str:
    """Render a document tree to gemtext.

    Parameters
    ----------
    doc : Document
        Document tree with headline numbering already assigned
    options : GeminiRendererOptions or None, default = None
        Renderer options; ``#+OPTIONS:`` settings carried by ``doc`` take
        precedence for the duration of the call

    Returns
    -------
    str
        Complete gemtext document ending with a single newline

    Examples
    --------
        >>> from org2gmi.ast import Document, Headline, PlainText
        >>> render_document(Document(children=[Headline(title=[PlainText(content="A")], numbering=(1,))]))
        '## Table of Contents\\n1. A\\n\\n\\n## A\\n'

    """
    renderer = GeminiRenderer(options)
    with debug_timer(logger, "Rendering (gemini)"):
        return renderer.render_to_string(doc)


def render_subtree(node: Node, options: GeminiRendererOptions | None = None) -> str:
    """Render a single node and its descendants to gemtext.

    Links and footnotes are numbered from 1 and no document header is
    emitted; surrounding newlines are removed.
    """
    return GeminiRenderer(options).render_subtree(node)


def to_ast(
    source: Union[str, Path, IO[bytes], IO[str], bytes],
    *,
    parser_options: OrgParserOptions | None = None,
    **kwargs: Any,
) -> Document:
    """Parse Org-Mode input into a document tree.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str] or bytes
        Path to an Org file, an open stream, raw bytes or Org text
    parser_options : OrgParserOptions or None, default = None
        Parser options
    **kwargs
        Individual parser option overrides (e.g. ``headline_levels=3``)

    Returns
    -------
    Document
        Parsed document

    """
    parser_kwargs, renderer_kwargs = _split_kwargs(kwargs)
    if renderer_kwargs:
        logger.debug("Ignoring renderer options while parsing: %s", sorted(renderer_kwargs))
    parser = OrgParser(_merge_options(parser_options, OrgParserOptions, parser_kwargs))
    with debug_timer(logger, "Parsing (org)"):
        return parser.parse(source)


def to_gemini(
    source: Union[str, Path, IO[bytes], IO[str], bytes],
    *,
    parser_options: OrgParserOptions | None = None,
    renderer_options: GeminiRendererOptions | None = None,
    **kwargs: Any,
) -> str:
    """Convert Org-Mode input to gemtext without writing anything.

    Parameters
    ----------
    source : str, Path, IO[bytes], IO[str] or bytes
        Path to an Org file, an open stream, raw bytes or Org text
    parser_options : OrgParserOptions or None, default = None
        Parser options
    renderer_options : GeminiRendererOptions or None, default = None
        Renderer options
    **kwargs
        Individual option overrides, routed to the parser or renderer
        options by name (e.g. ``with_toc=False``, ``headline_levels=3``)

    Returns
    -------
    str
        Gemtext document

    Raises
    ------
    InvalidOptionsError
        If a keyword names no known option
    ParsingError
        If the Org input cannot be parsed

    Examples
    --------
        >>> print(to_gemini("* Intro\\nSee [[https://example.com][the site]].", with_toc=False))
        ## Intro
        <BLANKLINE>
        See the site[1].
        <BLANKLINE>
        => https://example.com [1] the site

    """
    parser_kwargs, renderer_kwargs = _split_kwargs(kwargs)
    doc = to_ast(source, parser_options=_merge_options(parser_options, OrgParserOptions, parser_kwargs))
    return render_document(doc, _merge_options(renderer_options, GeminiRendererOptions, renderer_kwargs))


def convert_file(
    source: Union[str, Path],
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    *,
    output_dir: Union[str, Path, None] = None,
    parser_options: OrgParserOptions | None = None,
    renderer_options: GeminiRendererOptions | None = None,
    **kwargs: Any,
) -> Optional[Path]:
    """Convert an Org file and write the gemtext result.

    Parameters
    ----------
    source : str or Path
        Org file to convert
    output : str, Path, IO[bytes], IO[str] or None, default = None
        Destination. When omitted the result is written next to the source
        with ``.org`` replaced by ``.gmi`` (or into ``output_dir``).
    output_dir : str, Path or None, default = None
        Directory receiving the output when ``output`` is omitted
    parser_options : OrgParserOptions or None, default = None
        Parser options
    renderer_options : GeminiRendererOptions or None, default = None
        Renderer options
    **kwargs
        Individual option overrides, as for :func:`to_gemini`

    Returns
    -------
    Path or None
        Path of the written file, or None when ``output`` is a stream

    Raises
    ------
    SourceNotFoundError
        If ``source`` does not exist
    OutputWriteError
        If the output file cannot be written

    """
    source_path = Path(source)
    if not source_path.is_file():
        raise SourceNotFoundError(file_path=str(source_path))

    content = to_gemini(source_path, parser_options=parser_options, renderer_options=renderer_options, **kwargs)

    if output is not None and not isinstance(output, (str, Path)):
        write_content(content, output)
        return None

    target = Path(output) if output is not None else output_path_for(source_path, output_dir)
    write_content(content, target)
    logger.info("Converted %s -> %s", source_path, target)
    return target


__all__ = ["convert_file", "render_document", "render_subtree", "to_ast", "to_gemini"]
