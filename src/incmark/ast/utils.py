#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/ast/utils.py
"""Utility functions for working with tree nodes.

Functions
---------
text_content : Concatenate the text leaves under a node
is_valid_attribute_name : Check an attribute name against the HTML name grammar

Examples
--------
    >>> from incmark.ast import Element, Text
    >>> from incmark.ast.utils import text_content
    >>>
    >>> heading = Element("h1", {}, [Text("Fish &amp; "), Element("em", {}, [Text("chips")])])
    >>> text_content(heading)
    'Fish &amp; chips'
    >>> text_content(heading, decode_entities=True)
    'Fish & chips'

"""

from __future__ import annotations

import html
import re
from typing import Union

from incmark.ast.nodes import Document, Node, Text, get_node_children
from incmark.constants import ATTRIBUTE_NAME_PATTERN

_ATTRIBUTE_NAME = re.compile(ATTRIBUTE_NAME_PATTERN, re.ASCII)


def is_valid_attribute_name(name: object) -> bool:
    """Return True if ``name`` can be written as an HTML attribute name.

    Names must start with a letter, ``_``, ``:`` or ``@`` and continue with
    word characters, ``:``, ``.``, ``@`` or ``-``. Anything else (``<``,
    ``>``, ``/``, quotes, whitespace, ``=``) could break out of the tag.

    Examples
    --------
        >>> is_valid_attribute_name("data-id"), is_valid_attribute_name("x><script")
        (True, False)

    """
    return isinstance(name, str) and _ATTRIBUTE_NAME.fullmatch(name) is not None


def text_content(node: Union[Node, Document, list[Node]], decode_entities: bool = False) -> str:
    """Concatenate all descendant Text leaves of a node.

    Text is joined with no separator, exactly as it appears in the tree.
    Only Text leaves are collected: a Comment contributes nothing, so
    ``text_content(Comment("x")) == ""`` and slugs built from heading text
    never pick up comment text.

    Parameters
    ----------
    node : Node, Document or list of Node
        Where to collect text from
    decode_entities : bool, default = False
        Decode named and numeric character references (``&amp;``,
        ``&#169;``, ``&#x1F600;``) in each text leaf

    Returns
    -------
    str
        The concatenated text

    """
    if isinstance(node, list):
        return "".join(text_content(child, decode_entities=decode_entities) for child in node)

    if isinstance(node, Text):
        return html.unescape(node.content) if decode_entities else node.content

    return "".join(text_content(child, decode_entities=decode_entities) for child in get_node_children(node))


__all__ = [
    "text_content",
    "is_valid_attribute_name",
]
