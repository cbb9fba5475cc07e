#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/ast/nodes.py
"""Node classes for the incmark document tree.

The tree is deliberately small. A node is one of three variants:

    - Text: raw inline character content (leaf)
    - Comment: a markup comment, rendered as ``<!--...-->`` (leaf)
    - Element: a tag with ordered attributes and ordered children

A Document holds the top-level sibling list together with the frontmatter
and free-form meta mappings produced by the parser and by transforms.

The structure is a pure tree. Every child list is owned by exactly one
Element (or by the Document), there are no parent pointers and no node is
shared between two lists. Only Element has children; the helpers in this
module enforce that when walking a tree.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from incmark.exceptions import InvariantViolationError


class Node(ABC):
    """Base class for all tree nodes.

    All nodes support the visitor pattern through :meth:`accept`.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Text(Node):
    """Raw inline text.

    Parameters
    ----------
    content : str
        The text, unescaped

    """

    content: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Comment(Node):
    """A markup comment.

    Parameters
    ----------
    content : str
        Comment body without the ``<!--`` / ``-->`` delimiters

    """

    content: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment``."""
        return visitor.visit_comment(self)


@dataclass
class Element(Node):
    """A tagged node with attributes and children.

    Attribute order is insertion order, which keeps serialization stable.

    Parameters
    ----------
    tag : str
        Tag or component name (e.g. ``"p"``, ``"alert"``)
    attributes : dict, default = empty dict
        Attribute values keyed by name
    children : list of Node, default = empty list
        Child nodes, in document order

    Examples
    --------
    >>> Element("p", {}, [Text("Hello "), Element("strong", {}, [Text("world")])])

    """

    tag: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_element``."""
        return visitor.visit_element(self)

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of attribute ``name`` or ``default``."""
        return self.attributes.get(name, default)

    def append(self, *nodes: Node) -> Element:
        """Append child nodes and return self for chaining."""
        self.children.extend(nodes)
        return self


@dataclass
class Document(Node):
    """Root container for a parsed document.

    Parameters
    ----------
    nodes : list of Node, default = empty list
        Top-level siblings
    frontmatter : dict, default = empty dict
        Values from the document's frontmatter block
    meta : dict, default = empty dict
        Free-form data attached by the parser and by transforms
        (e.g. ``"toc"``, ``"summary"``)

    """

    nodes: list[Node] = field(default_factory=list)
    frontmatter: dict[str, Any] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


def is_element(node: Any, tag: Optional[str] = None) -> bool:
    """Return True if ``node`` is an Element, optionally with the given tag.

    Parameters
    ----------
    node : Any
        Value to test
    tag : str, optional
        Required tag name

    Returns
    -------
    bool
        Whether the node is a matching element

    """
    if not isinstance(node, Element):
        return False
    return tag is None or node.tag == tag


def get_node_children(node: Node) -> list[Node]:
    """Return the live child list of a node.

    The returned list is the node's own list, not a copy, so callers that
    splice it mutate the tree. Leaves return a fresh empty list.

    Parameters
    ----------
    node : Node
        Node whose children are requested

    Returns
    -------
    list of Node
        ``Element.children`` / ``Document.nodes``, or an empty list for leaves

    Raises
    ------
    InvariantViolationError
        If ``node`` is not a Node, or a leaf has been given children

    """
    if isinstance(node, Element):
        return node.children
    if isinstance(node, Document):
        return node.nodes
    if isinstance(node, (Text, Comment)):
        if getattr(node, "children", None):
            raise InvariantViolationError(
                f"{type(node).__name__} node must not have children",
                node=node,
            )
        return []
    raise InvariantViolationError(f"Expected a Node, got {type(node).__name__}: {node!r}", node=node)


__all__ = [
    "Node",
    "Text",
    "Comment",
    "Element",
    "Document",
    "is_element",
    "get_node_children",
]
