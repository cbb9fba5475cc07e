#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning incmark trees into output formats."""

from incmark.renderers.html import HtmlRenderer, render_html

__all__ = ["HtmlRenderer", "render_html"]
