#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/ast/__init__.py
"""Document tree module.

The tree is what the markdown parser produces and what renderers and
transforms consume:

- nodes: the three node variants (Text, Comment, Element) and Document
- visitors: in-place preorder rewriting (``visit``) and ``NodeVisitor``
- utils: text extraction
- serialization: the compact list wire format and JSON helpers

Examples
--------
    >>> from incmark.ast import REMOVE, Document, Element, Text, is_element, visit
    >>>
    >>> doc = Document(nodes=[
    ...     Element("p", {}, [Text("keep")]),
    ...     Element("script", {}, [Text("alert(1)")]),
    ... ])
    >>> visit(doc, lambda n: is_element(n, "script"), lambda n: REMOVE)
    >>> len(doc.nodes)
    1

"""

from __future__ import annotations

from incmark.ast.nodes import Comment, Document, Element, Node, Text, get_node_children, is_element
from incmark.ast.serialization import (
    ast_to_compact,
    ast_to_json,
    compact_to_ast,
    compact_to_node,
    json_to_ast,
    node_to_compact,
)
from incmark.ast.utils import is_valid_attribute_name, text_content
from incmark.ast.visitors import KEEP, REMOVE, NodeVisitor, Replace, extract_nodes, iter_nodes, visit

__all__ = [
    # Nodes
    "Node",
    "Text",
    "Comment",
    "Element",
    "Document",
    "is_element",
    "get_node_children",
    # Traversal
    "KEEP",
    "REMOVE",
    "Replace",
    "NodeVisitor",
    "visit",
    "iter_nodes",
    "extract_nodes",
    # Utilities
    "text_content",
    "is_valid_attribute_name",
    # Serialization
    "node_to_compact",
    "compact_to_node",
    "ast_to_compact",
    "compact_to_ast",
    "ast_to_json",
    "json_to_ast",
]
