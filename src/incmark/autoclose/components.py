#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/autoclose/components.py
"""Closing of block components and inline property blocks.

Block components are fenced with runs of a marker character (``:`` by
default). Nesting is expressed by fence length, the outer component using the
longer fence::

    :::card{title="Hello"}
    ::alert
    Body
    ::
    :::

Two independent repairs are applied:

- a property block ``{...`` left open on the last line gets its dangling
  quote(s) and the closing brace;
- components whose closing fence has not arrived yet get closing fences
  appended, innermost first.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from incmark.constants import DEFAULT_FENCE_CHAR, DEFAULT_MIN_FENCE_LENGTH
from incmark.options.autoclose import AutoCloseOptions

logger = logging.getLogger(__name__)

COMPONENT_NAME_PATTERN = re.compile(r"[A-Za-z$][$\w.-]*", re.ASCII)


@dataclass(frozen=True)
class UnclosedComponent:
    """A component fence still open at the end of the buffer.

    Parameters
    ----------
    depth : int
        Length of the opening fence run
    name : str
        Component name following the fence

    """

    depth: int
    name: str


@dataclass(frozen=True)
class FenceLine:
    """Classification of one line with respect to component fences.

    Parameters
    ----------
    depth : int
        Length of the leading fence run
    name : str or None
        Component name for an opening fence, None for a closing fence

    """

    depth: int
    name: Optional[str]

    @property
    def is_closing(self) -> bool:
        return self.name is None


def classify_fence(
    line: str,
    fence_char: str = DEFAULT_FENCE_CHAR,
    min_length: int = DEFAULT_MIN_FENCE_LENGTH,
) -> Optional[FenceLine]:
    """Classify ``line`` as an opening fence, a closing fence, or neither.

    An opening fence is a (stripped) line starting with at least
    ``min_length`` fence characters directly followed by a component name.
    A closing fence is a line made of the fence run and nothing else.

    Parameters
    ----------
    line : str
        Line to classify
    fence_char : str, default ":"
        Fence marker character
    min_length : int, default 2
        Shortest run that counts as a fence

    Returns
    -------
    FenceLine or None
        The classification, or None for ordinary lines

    """
    stripped = line.strip()
    depth = len(stripped) - len(stripped.lstrip(fence_char))
    if depth < min_length:
        return None

    rest = stripped[depth:]
    if not rest:
        return FenceLine(depth=depth, name=None)

    match = COMPONENT_NAME_PATTERN.match(rest)
    if match is None:
        return None
    return FenceLine(depth=depth, name=match.group(0))


def scan_fence_stack(
    lines: Sequence[str],
    fence_char: str = DEFAULT_FENCE_CHAR,
    min_length: int = DEFAULT_MIN_FENCE_LENGTH,
) -> list[UnclosedComponent]:
    """Return the components still open after reading ``lines``.

    Every opening fence is pushed. A closing fence pops the innermost open
    component only when its length equals that component's fence length;
    the component name is not compared.

    Returns
    -------
    list of UnclosedComponent
        Open components, outermost first

    """
    stack: list[UnclosedComponent] = []
    for line in lines:
        fence = classify_fence(line, fence_char, min_length)
        if fence is None:
            continue
        if not fence.is_closing:
            stack.append(UnclosedComponent(depth=fence.depth, name=fence.name or ""))
        elif stack and stack[-1].depth == fence.depth:
            stack.pop()
    return stack


def find_props_closer(line: str) -> str:
    """Return the suffix that closes a property block left open on ``line``.

    The open block is the text after the first ``{`` that is not followed by
    any ``}``. An odd number of double quotes in it gets a ``"``, an odd
    number of single quotes gets a ``'``, and the brace is always closed.

    Returns
    -------
    str
        The closing suffix, or an empty string if no block is open

    """
    last_close = line.rfind("}")
    open_index = line.find("{", last_close + 1)
    if open_index < 0:
        return ""

    props = line[open_index + 1 :]
    closing = ""
    if props.count('"') % 2 == 1:
        closing += '"'
    if props.count("'") % 2 == 1:
        closing += "'"
    return closing + "}"


def close_components(
    markdown: str,
    lines: Optional[list[str]] = None,
    options: Optional[AutoCloseOptions] = None,
) -> str:
    """Close an open property block and any open component fences.

    Parameters
    ----------
    markdown : str
        The full (possibly partial) buffer
    lines : list of str, optional
        ``markdown`` already split on newlines. The list is not modified.
    options : AutoCloseOptions, optional
        Fence character, minimum fence length and which repairs to run

    Returns
    -------
    str
        ``markdown`` with the closers appended. Closing fences are added on
        new lines, innermost component first.

    """
    options = options or AutoCloseOptions()
    lines = list(lines) if lines is not None else markdown.split("\n")
    result = markdown

    if options.close_props and lines:
        closing = find_props_closer(lines[-1])
        if closing:
            logger.debug("Closing property block with %r", closing)
            result += closing
            lines[-1] += closing

    if options.close_components:
        stack = scan_fence_stack(lines, options.fence_char, options.min_fence_length)
        if stack:
            closers = [options.fence_char * component.depth for component in reversed(stack)]
            logger.debug("Closing %d open component(s): %s", len(stack), ", ".join(c.name for c in stack))
            result += "\n" + "\n".join(closers)

    return result


__all__ = [
    "COMPONENT_NAME_PATTERN",
    "UnclosedComponent",
    "FenceLine",
    "classify_fence",
    "scan_fence_stack",
    "find_props_closer",
    "close_components",
]
