#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared helpers for incmark transforms."""

from incmark.utils.text import make_unique_slug, slugify

__all__ = ["make_unique_slug", "slugify"]
