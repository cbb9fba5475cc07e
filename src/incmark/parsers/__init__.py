#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing incmark trees."""

from incmark.parsers.components import ComponentBlock, parse_props, split_components
from incmark.parsers.markdown import MarkdownParser, parse

__all__ = ["ComponentBlock", "MarkdownParser", "parse", "parse_props", "split_components"]
