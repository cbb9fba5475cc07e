#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/ast/serialization.py
"""Compact list serialization for incmark trees.

The compact form is the wire format used to ship trees to renderers running
elsewhere (e.g. a browser rendering a live-generating answer):

- ``Text("hi")``                 -> ``"hi"``
- ``Comment("note")``            -> ``[None, {}, "note"]``
- ``Element("p", {}, [...])``    -> ``["p", {}, ...children]``
- ``Document(nodes, fm, meta)``  -> ``{"nodes": [...], "frontmatter": fm, "meta": meta}``

Examples
--------
    >>> from incmark.ast import Document, Element, Text
    >>> from incmark.ast.serialization import ast_to_json, json_to_ast
    >>>
    >>> doc = Document(nodes=[Element("h1", {}, [Text("Title")])])
    >>> ast_to_json(doc)
    '{"nodes": [["h1", {}, "Title"]], "frontmatter": {}, "meta": {}}'
    >>> json_to_ast(ast_to_json(doc)) == doc
    True

"""

from __future__ import annotations

import json
from typing import Any, Union

from incmark.ast.nodes import Comment, Document, Element, Node, Text
from incmark.exceptions import InvariantViolationError, ValidationError

CompactNode = Union[str, list[Any]]


def node_to_compact(node: Node) -> CompactNode:
    """Convert a single node to its compact form.

    Raises
    ------
    InvariantViolationError
        If ``node`` is not one of the three node variants

    """
    if isinstance(node, Text):
        return node.content
    if isinstance(node, Comment):
        return [None, {}, node.content]
    if isinstance(node, Element):
        return [node.tag, dict(node.attributes), *(node_to_compact(child) for child in node.children)]
    raise InvariantViolationError(f"Cannot serialize {type(node).__name__}", node=node)


def compact_to_node(value: Any) -> Node:
    """Convert a compact value back into a node.

    Raises
    ------
    ValidationError
        If ``value`` is not a valid compact node

    """
    if isinstance(value, str):
        return Text(value)

    if not isinstance(value, (list, tuple)) or len(value) < 2:
        raise ValidationError(f"Invalid compact node: {value!r}", parameter_value=value)

    tag, attributes, *children = value
    if not isinstance(attributes, dict):
        raise ValidationError(
            f"Compact node attributes must be an object, got {type(attributes).__name__}", parameter_value=value
        )

    if tag is None:
        if len(children) != 1 or not isinstance(children[0], str):
            raise ValidationError(f"Compact comment must hold exactly one string: {value!r}", parameter_value=value)
        return Comment(children[0])

    if not isinstance(tag, str) or not tag:
        raise ValidationError(f"Compact element tag must be a non-empty string: {value!r}", parameter_value=value)

    return Element(tag, dict(attributes), [compact_to_node(child) for child in children])


def _meta_to_compact(value: Any) -> Any:
    if isinstance(value, Node):
        return node_to_compact(value)
    if isinstance(value, dict):
        return {key: _meta_to_compact(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_meta_to_compact(item) for item in value]
    return value


def ast_to_compact(document: Document) -> dict[str, Any]:
    """Convert a Document to its compact dictionary form.

    Nodes stored in ``meta`` (such as ``meta["summary"]``) are converted to
    compact values too; they come back as plain lists from
    :func:`compact_to_ast`.
    """
    return {
        "nodes": [node_to_compact(node) for node in document.nodes],
        "frontmatter": dict(document.frontmatter),
        "meta": _meta_to_compact(document.meta),
    }


def compact_to_ast(data: Any) -> Document:
    """Build a Document from its compact dictionary form.

    Raises
    ------
    ValidationError
        If ``data`` is not a mapping with a ``nodes`` list

    """
    if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
        raise ValidationError("Compact document must be an object with a 'nodes' list", parameter_value=data)

    frontmatter = data.get("frontmatter") or {}
    meta = data.get("meta") or {}
    if not isinstance(frontmatter, dict) or not isinstance(meta, dict):
        raise ValidationError("Compact document 'frontmatter' and 'meta' must be objects", parameter_value=data)

    return Document(
        nodes=[compact_to_node(node) for node in data["nodes"]],
        frontmatter=dict(frontmatter),
        meta=dict(meta),
    )


def ast_to_json(document: Document, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string in compact form."""
    return json.dumps(ast_to_compact(document), indent=indent, ensure_ascii=False, default=str)


def json_to_ast(json_str: str) -> Document:
    """Deserialize a Document from a compact-form JSON string.

    Raises
    ------
    ValidationError
        If the string is not valid JSON or not a valid compact document

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}", original_error=e) from e
    return compact_to_ast(data)


__all__ = [
    "CompactNode",
    "node_to_compact",
    "compact_to_node",
    "ast_to_compact",
    "compact_to_ast",
    "ast_to_json",
    "json_to_ast",
]
