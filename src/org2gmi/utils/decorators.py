#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/org2gmi/utils/decorators.py
"""Utility decorators and context managers for org2gmi parsers and the API."""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from org2gmi.exceptions import DependencyError


def requires_dependencies(component_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check that required packages import before running the decorated method.

    Parameters
    ----------
    component_name : str
        Name of the component, used in the error message
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` tuples

    Returns
    -------
    Callable
        Decorated method

    Raises
    ------
    DependencyError
        If any package cannot be imported

    Examples
    --------
        >>> @requires_dependencies("org", [("orgparse", "orgparse", "")])
        ... def parse(self, input_data):
        ...     import orgparse

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            original_error = None
            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e

            if missing:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log the duration of the wrapped block at DEBUG level.

    Nothing is measured when the logger is not enabled for DEBUG.

    Examples
    --------
        >>> with debug_timer(logger, "Rendering (gemini)"):
        ...     text = renderer.render_to_string(doc)

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug("%s completed in %.2fs", operation, elapsed)
    else:
        yield
