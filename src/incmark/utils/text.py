#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/utils/text.py
"""Text processing utilities for tree transforms.

Functions
---------
slugify : Convert heading text to a URL-safe slug
make_unique_slug : Make a slug unique within a document

Examples
--------
    >>> from incmark.utils.text import make_unique_slug, slugify
    >>> slugify("Getting Started!")
    'getting-started'
    >>> seen = {}
    >>> make_unique_slug("intro", seen), make_unique_slug("intro", seen)
    ('intro', 'intro-2')

"""

from __future__ import annotations

import re
import unicodedata

DEFAULT_SLUG = "section"


def make_unique_slug(slug: str, seen_slugs: dict[str, int], separator: str = "-") -> str:
    """Return ``slug``, or ``slug`` with a numeric suffix if it was seen before.

    Parameters
    ----------
    slug : str
        Base slug
    seen_slugs : dict[str, int]
        Occurrence counts per base slug, updated in place
    separator : str, default = "-"
        Separator placed before the suffix

    Returns
    -------
    str
        The first occurrence is returned as is; later ones get ``-2``, ``-3``,
        skipping any suffixed form that is itself already in ``seen_slugs``.
        The returned slug is registered too, so a later heading whose own
        slug is ``intro-2`` does not collide with a suffixed ``intro``.

    """
    if slug not in seen_slugs:
        seen_slugs[slug] = 1
        return slug

    count = seen_slugs[slug]
    while True:
        count += 1
        candidate = f"{slug}{separator}{count}"
        if candidate not in seen_slugs:
            break
    seen_slugs[slug] = count
    seen_slugs[candidate] = 1
    return candidate


def slugify(text: str, *, max_length: int = 100, separator: str = "-") -> str:
    """Create a URL-safe slug from ``text``.

    Accents are stripped after NFD normalization, the text is lowercased,
    whitespace and underscores become ``separator`` and everything that is
    not ``[a-z0-9]`` or a separator is dropped.

    Parameters
    ----------
    text : str
        Text to slugify, usually a heading's text content
    max_length : int, default = 100
        Slugs are truncated to this length
    separator : str, default = "-"
        Word separator

    Returns
    -------
    str
        The slug, or ``"section"`` when nothing usable is left

    Examples
    --------
        >>> slugify("Café résumé")
        'cafe-resume'
        >>> slugify("API Reference (v2.0)")
        'api-reference-v20'

    """
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    escaped_separator = re.escape(separator)
    slug = re.sub(r"[\s_]+", separator, normalized.lower())
    slug = re.sub(rf"[^a-z0-9\-{escaped_separator}]", "", slug)
    slug = re.sub(rf"(?:{escaped_separator})+", separator, slug)
    slug = slug.strip(separator)

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip(separator)

    return slug or DEFAULT_SLUG


__all__ = [
    "slugify",
    "make_unique_slug",
]
