#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/transforms/toc.py
"""Heading ids and table of contents.

:class:`TocTransform` gives every heading an ``id`` (unless it already has
one) and stores a nested table of contents in ``document.meta["toc"]``::

    {
        "title": "Guide",
        "depth": 3,
        "links": [
            {"id": "install", "depth": 2, "text": "Install", "children": [...]},
        ],
    }

The TOC title comes from the frontmatter ``title`` or, failing that, the
first ``h1``.
"""

from __future__ import annotations

import logging
from typing import Any

from incmark.ast.nodes import Document, Element, Node
from incmark.ast.utils import text_content
from incmark.ast.visitors import KEEP, Outcome, visit
from incmark.constants import DEFAULT_TOC_MAX_DEPTH, HEADING_TAGS
from incmark.exceptions import ValidationError
from incmark.transforms.base import DocumentTransform
from incmark.utils.text import make_unique_slug, slugify

logger = logging.getLogger(__name__)


def _heading_level(node: Node) -> int:
    if isinstance(node, Element) and node.tag in HEADING_TAGS:
        return int(node.tag[1])
    return 0


class TocTransform(DocumentTransform):
    """Assign heading ids and build ``document.meta["toc"]``.

    Parameters
    ----------
    max_depth : int, default = 3
        Deepest heading level listed in the TOC (1-6). Ids are assigned to
        every heading regardless.
    separator : str, default = "-"
        Separator used in generated ids

    """

    def __init__(self, max_depth: int = DEFAULT_TOC_MAX_DEPTH, separator: str = "-"):
        """Initialize with TOC options.

        Raises
        ------
        ValidationError
            If max_depth is not between 1 and 6

        """
        if not 1 <= max_depth <= 6:
            raise ValidationError(
                f"max_depth must be 1-6, got {max_depth}", parameter_name="max_depth", parameter_value=max_depth
            )
        self.max_depth = max_depth
        self.separator = separator
        self._seen: dict[str, int] = {}
        self._headings: list[tuple[int, str, str]] = []

    def _assign_id(self, node: Node) -> Outcome:
        if not isinstance(node, Element):
            return KEEP
        text = text_content(node, decode_entities=True).strip()
        heading_id = node.get("id")
        if heading_id:
            self._seen.setdefault(str(heading_id), 1)
        else:
            heading_id = make_unique_slug(slugify(text, separator=self.separator), self._seen, self.separator)
            node.attributes["id"] = heading_id
        self._headings.append((_heading_level(node), str(heading_id), text))
        return KEEP

    def _build_links(self) -> list[dict[str, Any]]:
        """Nest the collected headings by level."""
        links: list[dict[str, Any]] = []
        # (level, children list) of the open ancestors
        stack: list[tuple[int, list[dict[str, Any]]]] = []

        for level, heading_id, text in self._headings:
            if level > self.max_depth:
                continue
            entry: dict[str, Any] = {"id": heading_id, "depth": level, "text": text, "children": []}
            while stack and stack[-1][0] >= level:
                stack.pop()
            (stack[-1][1] if stack else links).append(entry)
            stack.append((level, entry["children"]))
        return links

    def transform(self, document: Document) -> Document:
        """Assign ids and store the TOC in ``document.meta["toc"]``."""
        self._seen = {}
        self._headings = []
        visit(document, lambda node: _heading_level(node) > 0, self._assign_id)

        title = document.frontmatter.get("title")
        if not title:
            title = next((text for level, _, text in self._headings if level == 1), "")

        document.meta["toc"] = {"title": title, "depth": self.max_depth, "links": self._build_links()}
        logger.debug("Built table of contents from %d heading(s)", len(self._headings))
        return document


__all__ = ["TocTransform"]
