#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser and renderer options.

Options are frozen dataclasses. Each field carries ``metadata["help"]`` text
that the command line reuses, and modified copies are produced with
``create_updated`` rather than by mutation.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values. ``None`` values are ignored so
            that partially-specified overrides (for example document-level
            ``#+OPTIONS:`` settings) can be applied directly.

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        updates = {key: value for key, value in kwargs.items() if value is not None}
        return replace(self, **updates)

    @classmethod
    def field_help(cls) -> dict[str, str]:
        """Map each field name to its help text."""
        return {f.name: f.metadata.get("help", "") for f in fields(cls)}  # type: ignore[arg-type]


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    strict : bool, default False
        Raise ``RenderingError`` when a node kind has neither a dedicated rule
        nor a fallback renderer, instead of omitting it.

    """

    strict: bool = field(
        default=False,
        metadata={
            "help": "Raise on node kinds that have no rendering rule instead of omitting them",
            "importance": "advanced",
        },
    )


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    extract_metadata : bool, default True
        Whether to read file-level keywords (``#+TITLE:``, ``#+OPTIONS:``...)
        into the document.

    """

    extract_metadata: bool = field(
        default=True,
        metadata={"help": "Read file-level keywords such as #+TITLE and #+OPTIONS", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Hook for subclasses; the base options need no validation."""
        pass
