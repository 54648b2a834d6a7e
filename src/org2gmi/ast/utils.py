#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
walk : Yield every node of a tree in document order
extract_text : Extract plain text from a node or list of nodes
collect_headlines : List every headline of a document in document order

Examples
--------
    >>> from org2gmi.ast import Headline, PlainText
    >>> from org2gmi.ast.utils import extract_text
    >>> extract_text(Headline(title=[PlainText(content="Hello")]).title)
    'Hello'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Union

from org2gmi.ast.nodes import Entity, Headline, PlainText

if TYPE_CHECKING:
    from org2gmi.ast.nodes import Document, Node


def walk(node_or_nodes: Union[Node, list[Node]]) -> Iterator[Node]:
    """Yield nodes depth-first, parents before children, in document order.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        Root node or list of root nodes

    Yields
    ------
    Node
        Each node of the tree

    """
    stack: list[Node] = list(reversed(node_or_nodes)) if isinstance(node_or_nodes, list) else [node_or_nodes]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.iter_children())))


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used to join the text parts

    Returns
    -------
    str
        Concatenated content of all PlainText nodes (entities contribute
        their UTF-8 replacement)

    """
    parts: list[str] = []
    for node in walk(node_or_nodes):
        if isinstance(node, PlainText):
            parts.append(node.content)
        elif isinstance(node, Entity):
            parts.append(node.utf8)
    return joiner.join(parts)


def collect_headlines(doc: Document) -> list[Headline]:
    """Return every headline of ``doc`` in document order."""
    headlines: list[Headline] = []

    def _collect(children: list[Node]) -> None:
        for child in children:
            if isinstance(child, Headline):
                headlines.append(child)
                _collect(child.children)

    _collect(doc.children)
    return headlines
