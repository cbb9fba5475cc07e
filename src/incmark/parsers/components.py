#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/parsers/components.py
"""Splitting of markdown into plain segments and fenced block components.

The fence grammar is the one the component closer uses, so anything the
closer repairs parses back into a balanced tree::

    ::alert{type="warning" dismissible}
    Be **careful**.
    ::

Lines inside fenced code blocks (```` ``` ```` or ``~~~``) are never treated
as component fences.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Union

from incmark.ast.utils import is_valid_attribute_name
from incmark.autoclose.components import COMPONENT_NAME_PATTERN, classify_fence

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")

_PROP_TOKEN = re.compile(
    r"""
    (?P<key>[^\s={}"']+)
    (?:
        =
        (?:
            "(?P<double>[^"]*)"
          | '(?P<single>[^']*)'
          | (?P<bare>[^\s{}"']+)
        )
    )?
    """,
    re.VERBOSE,
)


@dataclass
class ComponentBlock:
    """A component found while splitting.

    Parameters
    ----------
    name : str
        Component name (becomes the element tag)
    props : dict
        Parsed property block
    body : list of str
        Lines between the opening and the matching closing fence

    """

    name: str
    props: dict[str, Any] = field(default_factory=dict)
    body: list[str] = field(default_factory=list)


Segment = Union[str, ComponentBlock]


def parse_props(text: str) -> dict[str, Any]:
    """Parse the inside of a ``{...}`` property block.

    ``key="value"``, ``key='value'`` and ``key=value`` give string values, a
    bare ``key`` gives True. ``#name`` sets ``id`` and ``.name`` is added to
    the space-separated ``class`` value.

    Examples
    --------
        >>> parse_props('title="Hi there" open .wide #intro')
        {'title': 'Hi there', 'open': True, 'class': 'wide', 'id': 'intro'}

    """
    props: dict[str, Any] = {}
    for match in _PROP_TOKEN.finditer(text):
        key = match.group("key")
        if match.group("double") is not None:
            value: Any = match.group("double")
        elif match.group("single") is not None:
            value = match.group("single")
        elif match.group("bare") is not None:
            value = match.group("bare")
        elif key.startswith("#") and len(key) > 1:
            props["id"] = key[1:]
            continue
        elif key.startswith(".") and len(key) > 1:
            existing = props.get("class")
            props["class"] = f"{existing} {key[1:]}" if existing else key[1:]
            continue
        else:
            value = True
        if not is_valid_attribute_name(key):
            logger.debug("Dropping property with invalid name: %r", key)
            continue
        props[key] = value
    return props


def _opening_props(line: str, depth: int) -> dict[str, Any]:
    rest = line.strip()[depth:]
    match = COMPONENT_NAME_PATTERN.match(rest)
    if match is None:
        return {}
    rest = rest[match.end() :]
    if not rest.startswith("{"):
        return {}
    end = rest.rfind("}")
    if end < 0:
        return parse_props(rest[1:])
    return parse_props(rest[1:end])


def _find_closing_line(lines: list[str], start: int, depth: int, fence_char: str, min_length: int) -> int:
    """Return the index of the fence closing the component opened at ``start - 1``, or -1."""
    open_depths = [depth]
    in_code = None
    for index in range(start, len(lines)):
        line = lines[index]
        code_match = _CODE_FENCE.match(line)
        if code_match:
            marker = code_match.group(1)[0]
            if in_code is None:
                in_code = marker
            elif in_code == marker:
                in_code = None
            continue
        if in_code is not None:
            continue

        fence = classify_fence(line, fence_char, min_length)
        if fence is None:
            continue
        if not fence.is_closing:
            open_depths.append(fence.depth)
        elif open_depths[-1] == fence.depth:
            open_depths.pop()
            if not open_depths:
                return index
    return -1


def split_components(lines: list[str], fence_char: str = ":", min_length: int = 2) -> list[Segment]:
    """Split ``lines`` into markdown text segments and component blocks.

    A component without a closing fence extends to the end of the input.
    Stray closing fences are dropped.

    Parameters
    ----------
    lines : list of str
        Markdown lines
    fence_char : str, default ":"
        Fence marker character
    min_length : int, default 2
        Shortest fence run

    Returns
    -------
    list of str or ComponentBlock
        Plain markdown (joined with newlines) and components, in order

    """
    segments: list[Segment] = []
    buffer: list[str] = []
    in_code = None
    index = 0

    while index < len(lines):
        line = lines[index]

        code_match = _CODE_FENCE.match(line)
        if code_match:
            marker = code_match.group(1)[0]
            if in_code is None:
                in_code = marker
            elif in_code == marker:
                in_code = None
            buffer.append(line)
            index += 1
            continue

        fence = None if in_code is not None else classify_fence(line, fence_char, min_length)
        if fence is None:
            buffer.append(line)
            index += 1
            continue

        if fence.is_closing:
            logger.debug("Dropping stray closing fence at line %d", index + 1)
            index += 1
            continue

        if buffer:
            segments.append("\n".join(buffer))
            buffer = []

        close_index = _find_closing_line(lines, index + 1, fence.depth, fence_char, min_length)
        end = close_index if close_index >= 0 else len(lines)
        segments.append(
            ComponentBlock(
                name=fence.name or "",
                props=_opening_props(line, fence.depth),
                body=lines[index + 1 : end],
            )
        )
        index = end + 1

    if buffer:
        segments.append("\n".join(buffer))
    return segments


__all__ = ["ComponentBlock", "Segment", "parse_props", "split_components"]
