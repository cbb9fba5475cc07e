#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/autoclose/inline.py
"""Closing of unbalanced inline markers on the last line of a buffer.

When markdown is streamed, the line being written is usually mid-span:
``"Some **bold te"``. :func:`close_inline` appends the shortest suffix that
balances the line so a renderer can show ``<strong>bold te</strong>`` instead
of literal asterisks.

Only one line is examined (by default the last line of the buffer); lines
before it are assumed to have been closed already.

Markers are tried in a fixed priority order, longest first, because shorter
markers are substrings of longer ones::

    ***   bold + italic
    **    bold
    ~~    strikethrough
    `     inline code
    *     italic

The first marker that needs a closer wins; the others are not considered.

Asterisk markers
----------------
The line is scanned into maximal runs of ``*``. Runs of equal length pair up
left to right. For a marker of length ``L``, a pair of runs whose length is
not ``L`` is an independent, already-closed span (``**a**`` when looking at
``*``) and is left out of the count. With ``count`` the number of remaining
asterisks and ``r = count % (2 * L)``:

- ``r == 0``: balanced.
- only asterisks and whitespace follow the first unpaired run: nothing is
  open yet (``x **``), so no closer is added.
- ``r == L``: one opener is dangling and the marker is appended, unless the
  line starts with an unpaired run longer than ``L`` (it belongs to a longer
  marker) or the line already holds a complete ``L``-pair and does not end
  with ``*`` (independent adjacent spans such as ``*a* *b``).
- the line ends with ``*`` and ``L < r < 2L``: a closer is partially typed,
  and ``2L - r`` more asterisks complete it.

Examples
--------
    >>> close_inline("**bold")
    '**bold**'
    >>> close_inline("***both**")
    '***both***'
    >>> close_inline("**a** and *b")
    '**a** and *b*'
    >>> close_inline("`keep spaces ")
    '`keep spaces `'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from incmark.constants import ASTERISK, BACKTICK, INLINE_MARKER_PRIORITY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerRun:
    """A maximal run of one marker character inside a line.

    Parameters
    ----------
    start : int
        Index of the first character of the run
    length : int
        Number of consecutive marker characters
    partner : int or None
        Index (in the run list) of the run this one is paired with

    """

    start: int
    length: int
    partner: Optional[int] = None

    @property
    def paired(self) -> bool:
        return self.partner is not None


def scan_runs(line: str, char: str = ASTERISK) -> list[MarkerRun]:
    """Split ``line`` into maximal runs of ``char`` and pair equal-length runs.

    Pairing is greedy from left to right: a run closes the most recent
    unpaired run of the same length, otherwise it stays open.

    Parameters
    ----------
    line : str
        Line to scan
    char : str, default "*"
        Marker character

    Returns
    -------
    list of MarkerRun
        Runs in line order with their partner indices filled in

    """
    spans: list[tuple[int, int]] = []
    run_start = -1
    for index, ch in enumerate(line):
        if ch == char:
            if run_start < 0:
                run_start = index
        elif run_start >= 0:
            spans.append((run_start, index - run_start))
            run_start = -1
    if run_start >= 0:
        spans.append((run_start, len(line) - run_start))

    partners: list[Optional[int]] = [None] * len(spans)
    open_by_length: dict[int, int] = {}
    for index, (_, length) in enumerate(spans):
        opener = open_by_length.pop(length, None)
        if opener is None:
            open_by_length[length] = index
        else:
            partners[opener] = index
            partners[index] = opener

    return [MarkerRun(start, length, partners[i]) for i, (start, length) in enumerate(spans)]


def _has_structural_match(line: str, marker: str) -> bool:
    """Return True if ``marker`` could be open on ``line`` at all."""
    if marker == ASTERISK:
        # A lone "*" followed by whitespace is a list bullet or a literal.
        last = line.rfind(ASTERISK)
        return last >= 0 and not line[last + 1 : last + 2].isspace()
    return marker in line


def _opener_has_content(line: str, runs: list[MarkerRun]) -> bool:
    """Return True if something other than asterisks follows the first unpaired run."""
    opener = next((run for run in runs if not run.paired), None)
    if opener is None:
        return False
    tail = line[opener.start + opener.length :]
    return any(not ch.isspace() and ch != ASTERISK for ch in tail)


def _asterisk_closer(line: str, trimmed: str, marker_len: int) -> Optional[str]:
    """Return the suffix that closes an asterisk marker of ``marker_len``, if any."""
    runs = scan_runs(line, ASTERISK)
    count = sum(run.length for run in runs if run.length == marker_len or not run.paired)
    remainder = count % (marker_len * 2)

    if remainder == 0:
        return None

    # "x **" has nothing to wrap yet
    if not _opener_has_content(line, runs):
        return None

    ends_with_run = trimmed.endswith(ASTERISK)

    if remainder == marker_len:
        first = runs[0]
        if first.start == 0 and first.length > marker_len and not first.paired:
            return None
        has_complete_pair = any(run.paired and run.length == marker_len for run in runs)
        if has_complete_pair and not ends_with_run:
            return None
        return ASTERISK * marker_len

    if ends_with_run and marker_len < remainder < marker_len * 2:
        return ASTERISK * (marker_len * 2 - remainder)

    return None


def find_inline_closer(line: str) -> tuple[str, bool]:
    """Work out which closer ``line`` needs.

    Parameters
    ----------
    line : str
        The line to examine

    Returns
    -------
    tuple of (str, bool)
        The closing suffix (empty if the line is balanced) and whether
        trailing whitespace must be trimmed before appending it

    """
    trimmed = line.rstrip()
    has_trailing_whitespace = trimmed != line

    for marker, kind in INLINE_MARKER_PRIORITY:
        if not _has_structural_match(line, marker):
            continue

        if marker[0] == ASTERISK:
            closer = _asterisk_closer(line, trimmed, len(marker))
            if closer:
                logger.debug("Closing %s marker with %r", kind, closer)
                return closer, has_trailing_whitespace
            continue

        if line.count(marker) % 2 == 1:
            logger.debug("Closing %s marker with %r", kind, marker)
            # Spaces inside a code span are content.
            return marker, has_trailing_whitespace and marker != BACKTICK

    return "", False


def close_inline(markdown: str, last_line: Optional[str] = None) -> str:
    """Append the closer needed by the last line of ``markdown``.

    Parameters
    ----------
    markdown : str
        The full (possibly partial) buffer
    last_line : str, optional
        The line to examine. Defaults to the text after the final newline
        of ``markdown``; callers that have already split the buffer can pass
        it to avoid splitting again.

    Returns
    -------
    str
        ``markdown`` with at most one closer appended. When a non-code
        closer is added, trailing whitespace is removed first.

    """
    if not markdown:
        return markdown

    if last_line is None:
        last_line = markdown.rsplit("\n", 1)[-1]

    closer, trim_trailing = find_inline_closer(last_line)
    if not closer:
        return markdown
    if trim_trailing:
        return markdown.rstrip() + closer
    return markdown + closer


__all__ = [
    "MarkerRun",
    "scan_runs",
    "find_inline_closer",
    "close_inline",
]
