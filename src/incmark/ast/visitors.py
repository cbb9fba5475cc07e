#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/ast/visitors.py
"""Traversal and in-place rewriting of incmark trees.

Two traversal styles are provided:

- :func:`visit` walks a Document in preorder and lets a transform keep,
  replace or remove each matching node *in place*. This is what transforms
  such as sanitization and TOC generation are built on.
- :class:`NodeVisitor` is a classic double-dispatch visitor (``node.accept``)
  for read-only algorithms such as rendering.

Examples
--------
Remove every ``script`` element:

    >>> from incmark.ast import REMOVE, is_element, visit
    >>> visit(doc, lambda n: is_element(n, "script"), lambda n: REMOVE)

Rename headings:

    >>> visit(doc, lambda n: is_element(n, "h1"), lambda n: Replace(Element("h2", n.attributes, n.children)))

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Union

from incmark.ast.nodes import Comment, Document, Element, Node, Text, get_node_children
from incmark.exceptions import VisitorContractError

logger = logging.getLogger(__name__)


class _Outcome:
    """Sentinel outcome returned by a visit() transform."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


KEEP = _Outcome("KEEP")
REMOVE = _Outcome("REMOVE")


@dataclass(frozen=True)
class Replace:
    """Outcome that overwrites the visited node's slot with ``node``.

    Parameters
    ----------
    node : Node
        Replacement node. It is not matched again, but its children are.

    """

    node: Node


Outcome = Union[None, _Outcome, Replace, Node, bool]
Matcher = Callable[[Node], bool]
Transform = Callable[[Node], Outcome]


def _resolve_outcome(outcome: Any) -> Union[_Outcome, Replace]:
    """Normalize the shorthands a transform may return.

    ``None`` and ``KEEP`` keep the node, ``REMOVE`` and ``False`` remove it,
    a bare node or ``Replace(node)`` replaces it.

    Raises
    ------
    VisitorContractError
        For any other value, including a Document used as a replacement

    """
    if outcome is None or outcome is KEEP:
        return KEEP
    if outcome is REMOVE or outcome is False:
        return REMOVE
    if isinstance(outcome, Replace):
        replacement = outcome.node
    elif isinstance(outcome, Node):
        replacement = outcome
    else:
        raise VisitorContractError(outcome)

    if not isinstance(replacement, Node) or isinstance(replacement, Document):
        raise VisitorContractError(outcome)
    return Replace(replacement)


def _walk_children(children: list[Node], matches: Matcher, transform: Transform) -> None:
    # Each frame is a sibling list and the slot to visit next in it. A slot
    # only advances once its node is finished; after a removal the next
    # sibling occupies the same slot.
    stack: list[tuple[list[Node], int]] = [(children, 0)]
    while stack:
        siblings, index = stack.pop()
        if index >= len(siblings):
            continue

        node = siblings[index]
        child_list = get_node_children(node)

        if matches(node):
            outcome = _resolve_outcome(transform(node))
            if outcome is REMOVE:
                del siblings[index]
                stack.append((siblings, index))
                continue
            if isinstance(outcome, Replace):
                siblings[index] = node = outcome.node
            child_list = get_node_children(node)

        stack.append((siblings, index + 1))
        if child_list:
            stack.append((child_list, 0))


def visit(document: Document, matches: Matcher, transform: Transform) -> None:
    """Walk ``document`` in preorder, rewriting matching nodes in place.

    For every node reached, ``matches(node)`` is evaluated first. When it
    returns true, ``transform(node)`` decides the node's fate:

    - ``None`` / ``KEEP``: leave the node; its children are still visited.
    - ``Replace(new)`` or a bare Node: overwrite the slot with ``new`` and
      continue into ``new``'s children. ``new`` itself is not re-matched.
    - ``REMOVE`` / ``False``: splice the node out. Its children are skipped
      and the sibling that moves into the vacated slot is visited next.

    Every node present in the tree when traversal reaches its position is
    visited exactly once, no matter how many earlier siblings were removed
    or replaced.

    Parameters
    ----------
    document : Document
        Tree to walk; mutated in place
    matches : callable
        Predicate selecting the nodes passed to ``transform``
    transform : callable
        Function returning the outcome for a matched node

    Raises
    ------
    VisitorContractError
        If ``transform`` returns an unrecognized outcome
    InvariantViolationError
        If the tree contains a non-node value or a leaf with children

    """
    _walk_children(document.nodes, matches, transform)


def iter_nodes(root: Union[Document, Node, list[Node]]) -> Iterator[Node]:
    """Yield every node under ``root`` in preorder.

    The Document itself is not yielded. The tree must not be mutated while
    the iterator is being consumed; use :func:`visit` for rewriting.
    """
    if isinstance(root, list):
        stack = list(reversed(root))
    elif isinstance(root, Document):
        stack = list(reversed(root.nodes))
    else:
        stack = [root]

    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(get_node_children(node)))


def extract_nodes(root: Union[Document, Node, list[Node]], predicate: Matcher) -> list[Node]:
    """Return all nodes under ``root`` for which ``predicate`` is true, in preorder.

    Parameters
    ----------
    root : Document, Node or list of Node
        Where to start
    predicate : callable
        Selection function

    Returns
    -------
    list of Node
        Matching nodes (the live objects, not copies)

    """
    return [node for node in iter_nodes(root) if predicate(node)]


class NodeVisitor:
    """Double-dispatch visitor over the three node variants.

    Subclasses override the ``visit_*`` methods they care about. The default
    behaviour visits every child, so a subclass overriding only
    ``visit_text`` still sees all the text in a tree.

    Examples
    --------
    Count text nodes:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_text(self, node):
        ...         self.count += 1
        >>>
        >>> counter = TextCounter()
        >>> doc.accept(counter)

    """

    def visit_document(self, node: Document) -> Any:
        """Visit each top-level node."""
        for child in node.nodes:
            child.accept(self)

    def visit_element(self, node: Element) -> Any:
        """Visit an Element; defaults to visiting its children."""
        return self.generic_visit(node)

    def visit_text(self, node: Text) -> Any:
        """Visit a Text leaf."""
        return None

    def visit_comment(self, node: Comment) -> Any:
        """Visit a Comment leaf."""
        return None

    def generic_visit(self, node: Node) -> Any:
        """Visit all children of ``node``."""
        for child in get_node_children(node):
            child.accept(self)


__all__ = [
    "KEEP",
    "REMOVE",
    "Replace",
    "Outcome",
    "NodeVisitor",
    "visit",
    "iter_nodes",
    "extract_nodes",
]
