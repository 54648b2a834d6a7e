#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/utils/footnotes.py
"""Document-wide footnote numbering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from org2gmi.ast import Document, FootnoteDefinition, FootnoteReference, Node
from org2gmi.ast.utils import walk

logger = logging.getLogger(__name__)


@dataclass
class FootnoteNumberer:
    """Assign sequential footnote ids in first-reference order.

    Ids follow the order in which references appear in the document body,
    not the order definitions are declared. References found inside a
    footnote's definition are numbered right after that footnote. Labels
    that are referenced but never defined still get an id; definitions that
    are never referenced get none and are left out of the footnote section.

    Examples
    --------
        >>> numberer = FootnoteNumberer.from_document(doc)
        >>> numberer.number_for("a")
        1
        >>> [(fid, label) for fid, label, _ in numberer.iter_definitions()]
        [(1, 'a'), (2, 'b')]

    """

    start: int = 1
    _ids: Dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _definitions: Dict[str, List[Node]] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_document(cls, doc: Document, start: int = 1) -> FootnoteNumberer:
        """Build a numberer by scanning ``doc``."""
        numberer = cls(start=start)
        numberer.collect(doc)
        return numberer

    def collect(self, root: Node) -> None:
        """Record every definition under ``root``, then number its references."""
        for node in walk(root):
            if isinstance(node, FootnoteDefinition) and node.label not in self._definitions:
                self._definitions[node.label] = node.content
        self._scan([root])
        logger.debug("Numbered %d footnote(s)", len(self._ids))

    def _scan(self, nodes: List[Node]) -> None:
        for node in nodes:
            if isinstance(node, FootnoteDefinition):
                continue
            if isinstance(node, FootnoteReference):
                self._register(node)
                continue
            self._scan(list(node.iter_children()))

    def _register(self, reference: FootnoteReference) -> None:
        if reference.definition and reference.label not in self._definitions:
            self._definitions[reference.label] = reference.definition
        if reference.label in self._ids:
            return
        self._ids[reference.label] = self.start + len(self._ids)
        definition = self._definitions.get(reference.label)
        if definition is None:
            logger.debug("Footnote %r is referenced but never defined", reference.label)
            return
        self._scan(definition)

    def number_for(self, label: str) -> Optional[int]:
        """Return the id assigned to ``label``, or None if it was never referenced."""
        return self._ids.get(label)

    def iter_definitions(self) -> Iterator[Tuple[int, str, List[Node]]]:
        """Yield ``(id, label, content)`` for each referenced definition in id order."""
        for label, footnote_id in sorted(self._ids.items(), key=lambda item: item[1]):
            content = self._definitions.get(label)
            if content is None:
                continue
            yield footnote_id, label, content

    def __len__(self) -> int:
        return len(self._ids)


__all__ = ["FootnoteNumberer"]
