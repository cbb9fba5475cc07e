#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/autoclose/detect.py
"""Read-only reporting of unclosed syntax.

:func:`detect_unclosed` answers "would the closer change this buffer, and
roughly why?" without modifying anything. Whether anything is unclosed is
decided by running the real pipeline; the *labels* come from simpler
single-pattern checks of the last line, so they can disagree with the
closer's own choice in edge cases (for instance both bold and code can be
reported even though the closer only appends one of them).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from incmark.autoclose.components import UnclosedComponent, scan_fence_stack
from incmark.autoclose.pipeline import close_markup
from incmark.constants import (
    UNCLOSED_BOLD_LABEL,
    UNCLOSED_CODE_LABEL,
    UNCLOSED_ITALIC_LABEL,
    UNCLOSED_STRIKETHROUGH_LABEL,
)
from incmark.options.autoclose import AutoCloseOptions

_BOLD_TAIL = re.compile(r"\*\*[^*\n]+$")
_ITALIC_TAIL = re.compile(r"\*[^*\n]+$")
_CODE_TAIL = re.compile(r"`[^`\n]+$")
_STRIKETHROUGH_TAIL = re.compile(r"~~[^~\n]+$")


@dataclass
class UnclosedReport:
    """Result of :func:`detect_unclosed`.

    Parameters
    ----------
    has_unclosed : bool
        True if the closure pipeline would change the buffer
    unclosed_inline : list of str
        Labels of inline markers that look open on the last line
        (``"**bold**"``, ``"*italic*"``, ``"`code`"``, ``"~~strikethrough~~"``)
    unclosed_components : list of UnclosedComponent
        Components left open, outermost first

    """

    has_unclosed: bool = False
    unclosed_inline: list[str] = field(default_factory=list)
    unclosed_components: list[UnclosedComponent] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return the report as plain JSON-friendly data."""
        return {
            "has_unclosed": self.has_unclosed,
            "unclosed_inline": list(self.unclosed_inline),
            "unclosed_components": [
                {"depth": component.depth, "name": component.name} for component in self.unclosed_components
            ],
        }


def _inline_labels(last_line: str) -> list[str]:
    labels: list[str] = []
    if _BOLD_TAIL.search(last_line):
        labels.append(UNCLOSED_BOLD_LABEL)
    if _ITALIC_TAIL.search(last_line) and UNCLOSED_BOLD_LABEL not in labels:
        labels.append(UNCLOSED_ITALIC_LABEL)
    if _CODE_TAIL.search(last_line):
        labels.append(UNCLOSED_CODE_LABEL)
    if _STRIKETHROUGH_TAIL.search(last_line):
        labels.append(UNCLOSED_STRIKETHROUGH_LABEL)
    return labels


def detect_unclosed(markdown: str, options: Optional[AutoCloseOptions] = None) -> UnclosedReport:
    """Report what, if anything, is left open in ``markdown``.

    Parameters
    ----------
    markdown : str
        The buffer to inspect; it is not modified
    options : AutoCloseOptions, optional
        Options forwarded to :func:`close_markup`

    Returns
    -------
    UnclosedReport
        ``has_unclosed`` is False (and both lists empty) when the closer
        would leave the buffer unchanged

    Examples
    --------
    >>> report = detect_unclosed("**bold")
    >>> report.has_unclosed, report.unclosed_inline
    (True, ['**bold**'])

    """
    options = options or AutoCloseOptions()
    if close_markup(markdown, options) == markdown:
        return UnclosedReport()

    lines = markdown.split("\n")
    return UnclosedReport(
        has_unclosed=True,
        unclosed_inline=_inline_labels(lines[-1]),
        unclosed_components=scan_fence_stack(lines, options.fence_char, options.min_fence_length),
    )


__all__ = ["UnclosedReport", "detect_unclosed"]
