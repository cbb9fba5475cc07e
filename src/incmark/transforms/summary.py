#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/transforms/summary.py
"""Excerpt extraction at a ``<!-- more -->`` marker."""

from __future__ import annotations

import copy
import logging

from incmark.ast.nodes import Comment, Document
from incmark.constants import DEFAULT_SUMMARY_DELIMITER
from incmark.transforms.base import DocumentTransform

logger = logging.getLogger(__name__)


def _delimiter_text(delimiter: str) -> str:
    stripped = delimiter.strip()
    if stripped.startswith("<!--") and stripped.endswith("-->"):
        stripped = stripped[4:-3]
    return stripped.strip()


class SummaryTransform(DocumentTransform):
    """Copy the top-level nodes before the delimiter comment into ``meta["summary"]``.

    Only top-level comments are considered. Documents without the delimiter
    get no ``summary`` entry. The summary nodes are deep copies, so later
    transforms on the document do not change them.

    Parameters
    ----------
    delimiter : str, default = "<!-- more -->"
        The marker comment, with or without the ``<!--``/``-->`` wrapper

    """

    def __init__(self, delimiter: str = DEFAULT_SUMMARY_DELIMITER):
        """Initialize with the delimiter."""
        self.delimiter = _delimiter_text(delimiter)

    def transform(self, document: Document) -> Document:
        """Store the summary, if any, in ``document.meta["summary"]``."""
        for index, node in enumerate(document.nodes):
            if isinstance(node, Comment) and node.content.strip() == self.delimiter:
                document.meta["summary"] = copy.deepcopy(document.nodes[:index])
                logger.debug("Summary holds %d node(s)", index)
                break
        return document


__all__ = ["SummaryTransform"]
