#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/renderers/links.py
"""Link target resolution, labels and the per-section link registry.

Inline links are replaced by ``label[n]`` and listed as ``=> href [n] label``
lines at the end of the section they appear in. The :class:`LinkRegistry`
holds those entries for one section; reference numbers start at 1 in every
section.

Examples
--------
    >>> registry = LinkRegistry()
    >>> registry.register("https://x/", "X")
    1
    >>> registry.register("https://y/", "Y")
    2
    >>> registry.register("https://x/", "Other label")
    1
    >>> registry.render_lines()
    '=> https://x/ [1] X\\n=> https://y/ [2] Y'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from org2gmi.constants import (
    GEMINI_EXTENSION,
    LINK_LINE_PREFIX,
    LOCAL_PATH_PREFIXES,
    ORG_EXTENSION,
    SELF_DESCRIBING_SCHEMES,
)
from org2gmi.utils.text import collapse_lines

logger = logging.getLogger(__name__)

_FILE_PREFIX = "file:"
_SEARCH_OPTION_SEPARATOR = "::"


@dataclass(frozen=True)
class LinkEntry:
    """One registered link: its target, reference number and display label."""

    href: str
    number: int
    label: str

    def to_line(self) -> str:
        """Render the entry as a gemtext link line (without trailing newline)."""
        return f"{LINK_LINE_PREFIX}{self.href} [{self.number}] {self.label}"


@dataclass
class LinkRegistry:
    """Per-section registry assigning reference numbers to inline links.

    At most one entry exists per distinct href. The first label registered
    for an href is kept.
    """

    _entries: dict[str, LinkEntry] = field(default_factory=dict)

    def register(self, href: str, label: str) -> int:
        """Return the reference number of ``href``, registering it if new.

        Parameters
        ----------
        href : str
            Resolved link target
        label : str
            Display label, used only on first registration

        Returns
        -------
        int
            Reference number (1-based, sequential within the registry)

        """
        entry = self._entries.get(href)
        if entry is None:
            entry = LinkEntry(href=href, number=len(self._entries) + 1, label=label)
            self._entries[href] = entry
        return entry.number

    def get(self, href: str) -> LinkEntry | None:
        """Return the entry registered for ``href``, if any."""
        return self._entries.get(href)

    @property
    def entries(self) -> list[LinkEntry]:
        """Entries in reference-number order."""
        return list(self._entries.values())

    def render_lines(self) -> str:
        """Render every entry as a link line, joined with newlines."""
        return "\n".join(entry.to_line() for entry in self._entries.values())

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LinkEntry]:
        return iter(self._entries.values())

    def __bool__(self) -> bool:
        return bool(self._entries)


def link_scheme(target: str) -> str:
    """Return the text before the first ``:`` of ``target``, or the whole target."""
    scheme, _, _ = target.partition(":")
    return scheme


def _local_path(target: str) -> str | None:
    if target.startswith(_FILE_PREFIX):
        return target[len(_FILE_PREFIX) :]
    if target.startswith(LOCAL_PATH_PREFIXES):
        return target
    if ":" not in target and target.lower().endswith(ORG_EXTENSION):
        return target
    return None


def resolve_link_target(target: str) -> str:
    """Rewrite local Org file links to their gemtext counterpart.

    A local file reference (``file:`` prefix, an absolute or relative path,
    or a bare ``name.org``) ending in ``.org`` loses its ``file:`` prefix and
    any ``::search`` option, and gets the ``.gmi`` extension. Anything else
    is returned unchanged.

    Examples
    --------
        >>> resolve_link_target("file:notes/page.org")
        'notes/page.gmi'
        >>> resolve_link_target("https://example.com/page.org")
        'https://example.com/page.org'

    """
    path = _local_path(target)
    if path is None:
        return target
    path = path.split(_SEARCH_OPTION_SEPARATOR, 1)[0]
    if not path.lower().endswith(ORG_EXTENSION):
        return target
    resolved = path[: -len(ORG_EXTENSION)] + GEMINI_EXTENSION
    logger.debug("Rewrote local link %r to %r", target, resolved)
    return resolved


def compute_link_label(raw_target: str, resolved_target: str, description: str | None, with_scheme: bool) -> str:
    """Compute the display label of a link.

    Parameters
    ----------
    raw_target : str
        Link target as written in the source
    resolved_target : str
        Target after :func:`resolve_link_target`
    description : str or None
        Rendered description; empty or None when the link has none
    with_scheme : bool
        Whether the ``(SCHEME)`` suffix may be appended

    Returns
    -------
    str
        Description collapsed onto one line, or the resolved target, followed
        by ``" (SCHEME)"`` when the description differs from the raw target
        and the scheme is neither bare nor self-describing

    """
    label = collapse_lines(description) if description else ""
    if not label:
        label = resolved_target
    if not with_scheme:
        return label
    scheme = link_scheme(resolved_target)
    if label != raw_target and scheme != resolved_target and scheme.lower() not in SELF_DESCRIBING_SCHEMES:
        label = f"{label} ({scheme.upper()})"
    return label


__all__ = ["LinkEntry", "LinkRegistry", "compute_link_label", "link_scheme", "resolve_link_target"]
