#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/transforms/base.py
"""Base class for document transforms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from incmark.ast.nodes import Document


class DocumentTransform(ABC):
    """A step that rewrites a Document in place.

    Subclasses implement :meth:`transform`, usually on top of
    :func:`incmark.ast.visit`, and return the document they were given.
    """

    @property
    def name(self) -> str:
        """Name used in logs and errors."""
        return type(self).__name__

    @abstractmethod
    def transform(self, document: Document) -> Document:
        """Apply the transform to ``document`` and return it."""

    def __call__(self, document: Document) -> Document:
        return self.transform(document)


__all__ = ["DocumentTransform"]
