#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/autoclose/__init__.py
"""Auto-closure of incomplete markdown for streaming renderers.

When markdown is rendered while it is still being generated, the end of the
buffer is usually incomplete. The functions here append the minimal suffix
that makes it well formed again, so every intermediate render is valid:

- :func:`close_markup`: inline markers, then property blocks and component
  fences (the full pipeline)
- :func:`close_table`: the trailing pipe table
- :func:`detect_unclosed`: read-only report of what would be closed

Each call is independent. Nothing is remembered between calls, and text that
is already closed comes back unchanged.

Examples
--------
    >>> from incmark.autoclose import close_markup, close_table
    >>> buffer = ""
    >>> for chunk in ["Some **bo", "ld** and ", "`co", "de`"]:
    ...     buffer += chunk
    ...     print(close_markup(buffer))
    Some **bo**
    Some **bold** and
    Some **bold** and `co`
    Some **bold** and `code`

"""

from incmark.autoclose.components import (
    UnclosedComponent,
    classify_fence,
    close_components,
    find_props_closer,
    scan_fence_stack,
)
from incmark.autoclose.detect import UnclosedReport, detect_unclosed
from incmark.autoclose.inline import close_inline, find_inline_closer, scan_runs
from incmark.autoclose.pipeline import close_markup
from incmark.autoclose.table import close_table

__all__ = [
    "close_markup",
    "close_inline",
    "close_components",
    "close_table",
    "detect_unclosed",
    "UnclosedReport",
    "UnclosedComponent",
    "classify_fence",
    "scan_fence_stack",
    "find_props_closer",
    "find_inline_closer",
    "scan_runs",
]
