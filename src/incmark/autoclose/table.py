#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/autoclose/table.py
"""Completion of a markdown pipe table that is still being written.

Only the last block of consecutive lines starting with ``|`` is touched;
earlier tables in the buffer are assumed complete. The repairs are:

1. the header row gets a trailing pipe if it lacks one;
2. a partially typed separator row (``| --- | :-``) is completed cell by
   cell, keeping alignment colons, and padded to the header's column count;
3. an unterminated data row is closed, filled with empty cells up to the
   header's column count, and padded to the widths of a reference row (the
   first complete body row, or the header);
4. a default ``| --- | --- |`` separator is inserted after the header when
   the second row does not start with a pipe and contain a dash or colon.

Pipes preceded by a backslash are cell content, not delimiters. A header
with no cells at all (``|``) leaves the buffer unchanged.

Examples
--------
    >>> close_table("| a | b")
    '| a | b |\\n| --- | --- |'
    >>> close_table("| a | b |\\n| :- | -")
    '| a | b |\\n| :- | --- |'

"""

from __future__ import annotations

import logging
from typing import Optional

from incmark.constants import TABLE_DEFAULT_SEPARATOR_CELL, TABLE_MIN_SEPARATOR_DASHES, TABLE_PIPE

logger = logging.getLogger(__name__)

_SEPARATOR_CHARS = frozenset("|-: \t")


def _split_raw_cells(row: str) -> tuple[list[str], Optional[str]]:
    """Split a row at unescaped pipes.

    Returns
    -------
    tuple
        The raw text of every cell terminated by a pipe, and the raw text
        after the last pipe (None if the row contains no pipe at all)

    """
    cells: list[str] = []
    current: list[str] = []
    in_cell = False
    previous = ""

    for ch in row:
        if ch == TABLE_PIPE and previous != "\\":
            if in_cell:
                cells.append("".join(current))
                current = []
            in_cell = True
        elif in_cell:
            current.append(ch)
        previous = ch

    return cells, ("".join(current) if in_cell else None)


def split_cells(row: str) -> list[str]:
    """Return the stripped cell texts of ``row``.

    Empty cells between two pipes are kept; a trailing segment after the last
    pipe is kept only if it has content.
    """
    cells, trailing = _split_raw_cells(row)
    result = [cell.strip() for cell in cells]
    if trailing and trailing.strip():
        result.append(trailing.strip())
    return result


def cell_widths(row: str) -> list[int]:
    """Return the raw width (including padding spaces) of each non-empty cell of ``row``."""
    cells, trailing = _split_raw_cells(row)
    widths = [len(cell) for cell in cells if cell]
    if trailing:
        widths.append(len(trailing))
    return widths


def is_separator_row(row: str) -> bool:
    """Return True if ``row`` looks like a (possibly partial) separator row.

    The row must start with a pipe, contain at least one dash or colon, and
    consist only of pipes, dashes, colons and whitespace.
    """
    stripped = row.strip()
    if not stripped.startswith(TABLE_PIPE):
        return False
    if "-" not in stripped and ":" not in stripped:
        return False
    return all(ch in _SEPARATOR_CHARS for ch in stripped)


def has_separator_marker(row: str) -> bool:
    """Return True if ``row`` starts with a pipe and contains a dash or colon.

    This is the test for whether a table already has its separator line.
    It is looser than :func:`is_separator_row`, which decides whether a row
    may be rewritten as a separator.
    """
    stripped = row.strip()
    return stripped.startswith(TABLE_PIPE) and ("-" in stripped or ":" in stripped)


def complete_separator_cell(cell: str) -> str:
    """Complete one separator cell, keeping its alignment colons.

    Unaligned cells get at least three dashes; aligned cells need only one.
    """
    left = cell.startswith(":")
    right = cell.endswith(":") and len(cell) > 1

    dashes = cell[1:] if left else cell
    if right:
        dashes = dashes[:-1]

    if left or right:
        dashes = dashes or "-"
        return (":" if left else "") + dashes + (":" if right else "")

    return dashes.ljust(TABLE_MIN_SEPARATOR_DASHES, "-")


def _join_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def default_separator(column_count: int) -> str:
    """Return a separator row of ``column_count`` unaligned cells."""
    return _join_row([TABLE_DEFAULT_SEPARATOR_CELL] * column_count)


def _find_last_table_block(lines: list[str]) -> Optional[tuple[int, int]]:
    """Return the (start, end) indices of the last run of pipe-led lines."""
    end = None
    for index in range(len(lines) - 1, -1, -1):
        if lines[index].strip().startswith(TABLE_PIPE):
            if end is None:
                end = index
        elif end is not None:
            return index + 1, end
    if end is None:
        return None
    return 0, end


def _complete_last_table(markdown: str) -> str:
    lines = markdown.split("\n")
    block = _find_last_table_block(lines)
    if block is None:
        return markdown
    start, end = block

    if not lines[start].strip().endswith(TABLE_PIPE):
        lines[start] += " " + TABLE_PIPE

    header = lines[start].strip()
    column_count = len(split_cells(header))
    if column_count == 0:
        return markdown

    has_separator = end > start and has_separator_marker(lines[start + 1])

    last = lines[end].strip()
    if is_separator_row(last):
        completed = [complete_separator_cell(cell) for cell in split_cells(last)]
        while len(completed) < column_count:
            completed.append(TABLE_DEFAULT_SEPARATOR_CELL)
        lines[end] = _join_row(completed)
        logger.debug("Completed table separator row: %s", lines[end])

    elif not last.endswith(TABLE_PIPE):
        reference = header
        for index in range(start + (2 if has_separator else 1), end):
            row = lines[index].strip()
            if row.startswith(TABLE_PIPE) and row.endswith(TABLE_PIPE) and "-" not in row:
                reference = row
                break

        widths = cell_widths(reference)
        cells = split_cells(last)
        cells.extend([""] * (column_count - len(cells)))
        padded = []
        for index, cell in enumerate(cells):
            target = widths[index] if index < len(widths) else len(cell) + 2
            padded.append(cell + " " * max(0, target - len(cell) - 2))
        lines[end] = _join_row(padded)
        logger.debug("Completed table data row: %s", lines[end])

    if not has_separator:
        lines.insert(start + 1, default_separator(column_count))
        logger.debug("Inserted default separator for %d column(s)", column_count)

    return "\n".join(lines)


def close_table(markdown: str) -> str:
    """Complete the last table in ``markdown``.

    A completed table is left as it is by a second call, so
    ``close_table(close_table(s)) == close_table(s)``. A repair that would
    itself be repaired again is not applied.

    Parameters
    ----------
    markdown : str
        The full (possibly partial) buffer

    Returns
    -------
    str
        The buffer with its last table completed; unchanged if there is no
        table or its header has no cells

    """
    result = _complete_last_table(markdown)
    if result != markdown and _complete_last_table(result) != result:
        logger.debug("Table repair does not settle; buffer left unchanged")
        return markdown
    return result


__all__ = [
    "split_cells",
    "cell_widths",
    "is_separator_row",
    "has_separator_marker",
    "complete_separator_cell",
    "default_separator",
    "close_table",
]
