#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/autoclose/pipeline.py
"""The full auto-closure pipeline."""

from __future__ import annotations

import logging
from typing import Optional

from incmark.autoclose.components import close_components
from incmark.autoclose.inline import close_inline
from incmark.autoclose.table import close_table
from incmark.constants import MAX_CLOSE_PASSES
from incmark.options.autoclose import AutoCloseOptions

logger = logging.getLogger(__name__)


def _close_once(markdown: str, options: AutoCloseOptions) -> str:
    """Run each enabled stage once: inline, components, tables."""
    lines = markdown.split("\n")
    result = markdown

    if options.close_inline:
        result = close_inline(markdown, lines[-1])

    if (options.close_components or options.close_props) and options.fence_marker in result:
        updated_lines = lines if result == markdown else result.split("\n")
        result = close_components(result, updated_lines, options)

    if options.close_tables:
        result = close_table(result)

    return result


def _settle(markdown: str, options: AutoCloseOptions) -> Optional[str]:
    """Repeat single passes until the buffer stops changing.

    Returns
    -------
    str or None
        The settled buffer, or None if it still changes after
        ``MAX_CLOSE_PASSES`` passes

    """
    result = markdown
    for _ in range(MAX_CLOSE_PASSES):
        repaired = _close_once(result, options)
        if repaired == result:
            return result
        result = repaired
    return None


def close_markup(markdown: str, options: Optional[AutoCloseOptions] = None) -> str:
    """Repair the incomplete tail of a markdown buffer.

    Inline markers on the last line are closed first. If the result still
    contains a component fence, open property blocks and open components are
    closed next. The table closer runs last, and only when
    ``options.close_tables`` is set.

    One pass closes at most one inline marker, so passes are repeated until
    the buffer no longer changes (``"**a `b"`` needs two). The result is
    therefore stable: ``close_markup(close_markup(s)) == close_markup(s)``.
    A buffer that keeps changing is retried without inline repair, and left
    untouched if that does not settle either.

    The function never raises on string input; empty and whitespace-only
    buffers are returned unchanged.

    Parameters
    ----------
    markdown : str
        The full (possibly partial) buffer
    options : AutoCloseOptions, optional
        Which repairs to run and the fence settings

    Returns
    -------
    str
        The repaired buffer

    Examples
    --------
    >>> close_markup("**bold text")
    '**bold text**'
    >>> close_markup("::component\\ncontent")
    '::component\\ncontent\\n::'
    >>> close_markup(":::parent\\n::child")
    ':::parent\\n::child\\n::\\n:::'

    """
    if not markdown or not markdown.strip():
        return markdown

    options = options or AutoCloseOptions()

    result = _settle(markdown, options)
    if result is None and options.close_inline:
        logger.debug("Inline repair does not settle, retrying without it")
        result = _settle(markdown, options.create_updated(close_inline=False))
        if result is not None and _close_once(result, options) != result:
            result = None

    if result is None:
        logger.debug("Auto-closure did not settle after %d passes; buffer left unchanged", MAX_CLOSE_PASSES)
        return markdown

    if result != markdown:
        logger.debug("Auto-closed buffer (%d -> %d chars)", len(markdown), len(result))
    return result


__all__ = ["close_markup"]
