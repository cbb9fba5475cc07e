#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/transforms/sanitize.py
"""Removal of unsafe elements and attributes.

Markdown coming from a model or a user can carry component names and props
that map straight onto HTML. :class:`SanitizeTransform` removes dangerous
elements with their whole subtree, drops ``on*`` event handler attributes
and clears URL attributes using a script-capable scheme.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from incmark.ast.nodes import Document, Element, Node
from incmark.ast.utils import is_valid_attribute_name
from incmark.ast.visitors import KEEP, REMOVE, Outcome, visit
from incmark.constants import DANGEROUS_SCHEMES, DEFAULT_BLOCKED_TAGS, URL_ATTRIBUTES
from incmark.transforms.base import DocumentTransform

logger = logging.getLogger(__name__)


def is_dangerous_url(value: object) -> bool:
    """Return True if ``value`` is a URL with a script-capable scheme.

    Whitespace and control characters are ignored when checking the scheme,
    so ``" java\\tscript:alert(1)"`` is caught.
    """
    if not isinstance(value, str):
        return False
    compact = "".join(ch for ch in value if ch.isprintable() and not ch.isspace()).lower()
    return compact.startswith(DANGEROUS_SCHEMES)


class SanitizeTransform(DocumentTransform):
    """Strip unsafe elements and attributes from a document.

    Parameters
    ----------
    allowed_tags : iterable of str, optional
        If given, every element whose tag is not listed is removed
    blocked_tags : iterable of str, default = DEFAULT_BLOCKED_TAGS
        Tags that are always removed (``script``, ``style``, ``iframe``...)

    Examples
    --------
        >>> from incmark.parsers import parse
        >>> doc = SanitizeTransform().transform(parse("::script\\nalert(1)\\n::\\n\\n[x](javascript:alert(1))"))
        >>> [node.tag for node in doc.nodes]
        ['p']
        >>> doc.nodes[0].children[0].attributes["href"]
        ''

    """

    def __init__(
        self,
        allowed_tags: Optional[Iterable[str]] = None,
        blocked_tags: Iterable[str] = DEFAULT_BLOCKED_TAGS,
    ):
        """Initialize with the tag policy."""
        self.allowed_tags = frozenset(tag.lower() for tag in allowed_tags) if allowed_tags is not None else None
        self.blocked_tags = frozenset(tag.lower() for tag in blocked_tags)
        self.removed_count = 0

    def _is_blocked(self, tag: str) -> bool:
        tag = tag.lower()
        if tag in self.blocked_tags:
            return True
        return self.allowed_tags is not None and tag not in self.allowed_tags

    def _sanitize(self, node: Node) -> Outcome:
        if not isinstance(node, Element):
            return KEEP
        if self._is_blocked(node.tag):
            logger.debug("Removing blocked element <%s>", node.tag)
            self.removed_count += 1
            return REMOVE

        for name in list(node.attributes):
            if not is_valid_attribute_name(name):
                logger.debug("Dropping attribute with invalid name %r on <%s>", name, node.tag)
                del node.attributes[name]
                continue
            lowered = name.lower()
            if lowered.startswith("on"):
                del node.attributes[name]
            elif lowered in URL_ATTRIBUTES and is_dangerous_url(node.attributes[name]):
                logger.debug("Clearing dangerous %s on <%s>", name, node.tag)
                node.attributes[name] = ""
        return KEEP

    def transform(self, document: Document) -> Document:
        """Sanitize ``document`` in place."""
        self.removed_count = 0
        visit(document, lambda node: isinstance(node, Element), self._sanitize)
        return document


__all__ = ["SanitizeTransform", "is_dangerous_url"]
