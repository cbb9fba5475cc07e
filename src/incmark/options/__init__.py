#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options dataclasses for the closers, the parser and the HTML renderer."""

from incmark.options.autoclose import AutoCloseOptions
from incmark.options.base import CloneFrozenMixin
from incmark.options.html import HtmlRendererOptions
from incmark.options.markdown import MarkdownParserOptions

__all__ = [
    "AutoCloseOptions",
    "CloneFrozenMixin",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
]
