#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/transforms/__init__.py
"""Document transforms built on :func:`incmark.ast.visit`.

Available Transforms
--------------------
- SanitizeTransform: remove unsafe elements and attributes
- TocTransform: heading ids and ``meta["toc"]``
- SummaryTransform: nodes before ``<!-- more -->`` in ``meta["summary"]``

Examples
--------
    >>> from incmark.parsers import parse
    >>> from incmark.transforms import apply_transforms, essentials
    >>> doc = apply_transforms(parse("# Title\\n\\nIntro\\n\\n<!-- more -->\\n\\nRest"), essentials())
    >>> doc.meta["toc"]["title"]
    'Title'

"""

from __future__ import annotations

import logging
from typing import Iterable

from incmark.ast.nodes import Document
from incmark.exceptions import IncmarkError, TransformError
from incmark.transforms.base import DocumentTransform
from incmark.transforms.sanitize import SanitizeTransform, is_dangerous_url
from incmark.transforms.summary import SummaryTransform
from incmark.transforms.toc import TocTransform

logger = logging.getLogger(__name__)


def essentials() -> list[DocumentTransform]:
    """Return the default transform list: TOC then summary."""
    return [TocTransform(), SummaryTransform()]


def apply_transforms(document: Document, transforms: Iterable[DocumentTransform]) -> Document:
    """Run ``transforms`` on ``document`` in order.

    Parameters
    ----------
    document : Document
        Document to transform
    transforms : iterable of DocumentTransform
        Transforms to apply

    Returns
    -------
    Document
        The transformed document

    Raises
    ------
    TransformError
        If a transform fails or does not return a Document

    """
    result = document
    for transform in transforms:
        name = getattr(transform, "name", type(transform).__name__)
        logger.debug("Applying transform: %s", name)
        try:
            transformed = transform(result)
        except IncmarkError:
            raise
        except Exception as e:
            logger.error("Transform %s failed: %s", name, e)
            raise TransformError(f"Transform {name} failed: {e}", transform_name=name, original_error=e) from e

        if not isinstance(transformed, Document):
            raise TransformError(
                f"Transform {name} must return Document, got {type(transformed).__name__}", transform_name=name
            )
        result = transformed
    return result


__all__ = [
    "DocumentTransform",
    "SanitizeTransform",
    "SummaryTransform",
    "TocTransform",
    "apply_transforms",
    "essentials",
    "is_dangerous_url",
]
