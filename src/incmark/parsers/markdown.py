#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/parsers/markdown.py
"""Markdown to tree parser.

Markdown is parsed with mistune and its tokens are mapped onto the generic
``Element`` tree, using HTML tag names (``p``, ``h2``, ``strong``, ...).
Before mistune sees the text, three incmark-specific steps run:

1. the buffer is auto-closed so a partial, still-streaming document still
   produces a well-formed tree;
2. a leading YAML frontmatter block is extracted;
3. fenced block components are split out and parsed recursively.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

import mistune
import yaml

from incmark.ast.nodes import Comment, Document, Element, Node, Text
from incmark.autoclose.pipeline import close_markup
from incmark.constants import FRONTMATTER_DELIMITER
from incmark.exceptions import ParsingError, ValidationError
from incmark.options.markdown import MarkdownParserOptions
from incmark.parsers.components import ComponentBlock, split_components

logger = logging.getLogger(__name__)


def _is_html_comment(content: str) -> bool:
    stripped = content.strip()
    return stripped.startswith("<!--") and stripped.endswith("-->")


def _comment_text(content: str) -> str:
    return content.strip()[4:-3].strip()


def _merge_text(nodes: list[Node]) -> list[Node]:
    """Join adjacent Text nodes, which mistune emits around unmatched delimiters."""
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].content + node.content)
        else:
            merged.append(node)
    return merged


class MarkdownParser:
    r"""Parse (possibly incomplete) markdown into a :class:`Document`.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Hello\n\nThis is **bo")
        >>> doc.meta["auto_closed"]
        True

    """

    def __init__(self, options: Optional[MarkdownParserOptions] = None):
        """Initialize the parser and build the mistune instance."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise ValidationError(
                f"Expected MarkdownParserOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        self._markdown = mistune.create_markdown(plugins=plugins, renderer=None)

    def parse(self, text: str) -> Document:
        """Parse markdown text into a Document.

        Parameters
        ----------
        text : str
            Markdown source, complete or partial

        Returns
        -------
        Document
            The parsed tree. ``meta["auto_closed"]`` tells whether the input
            had to be repaired first.

        Raises
        ------
        ParsingError
            If the frontmatter is not valid YAML or mistune fails

        """
        if not isinstance(text, str):
            raise ValidationError(
                f"Markdown input must be a str, got {type(text).__name__}",
                parameter_name="text",
                parameter_value=text,
            )

        auto_closed = False
        if self.options.auto_close:
            closed = close_markup(text, self.options.autoclose)
            auto_closed = closed != text
            text = closed

        text, frontmatter = self._extract_frontmatter(text)
        nodes = self._parse_blocks(text.split("\n"))

        return Document(nodes=nodes, frontmatter=frontmatter, meta={"auto_closed": auto_closed})

    def _extract_frontmatter(self, content: str) -> tuple[str, dict[str, Any]]:
        """Split a leading ``---`` YAML block off ``content``.

        Returns
        -------
        tuple of (str, dict)
            Remaining content and the frontmatter mapping (empty when there
            is no frontmatter or it is not a mapping)

        """
        if not self.options.parse_frontmatter:
            return content, {}

        lines = content.split("\n")
        if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
            return content, {}

        end_index = -1
        for index in range(1, len(lines)):
            if lines[index].strip() == FRONTMATTER_DELIMITER:
                end_index = index
                break
        if end_index < 0:
            return content, {}

        try:
            data = yaml.safe_load("\n".join(lines[1:end_index]))
        except yaml.YAMLError as e:
            raise ParsingError(f"Invalid YAML frontmatter: {e}", stage="frontmatter", original_error=e) from e

        remaining = "\n".join(lines[end_index + 1 :])
        if not isinstance(data, dict):
            logger.debug("Ignoring frontmatter that is not a mapping: %r", type(data).__name__)
            return remaining, {}
        return remaining, data

    def _parse_blocks(self, lines: list[str]) -> list[Node]:
        if not self.options.parse_components:
            return self._parse_markdown("\n".join(lines))

        autoclose = self.options.autoclose
        nodes: list[Node] = []
        for segment in split_components(lines, autoclose.fence_char, autoclose.min_fence_length):
            if isinstance(segment, ComponentBlock):
                nodes.append(Element(segment.name, dict(segment.props), self._parse_blocks(segment.body)))
            else:
                nodes.extend(self._parse_markdown(segment))
        return nodes

    def _parse_markdown(self, content: str) -> list[Node]:
        if not content.strip():
            return []
        try:
            tokens, _state = self._markdown.parse(content)
        except Exception as e:
            raise ParsingError(f"Failed to parse markdown: {e}", stage="markdown", original_error=e) from e

        if not isinstance(tokens, list):
            return []
        return self._process_tokens(tokens)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Map one block-level mistune token."""
        token_type = token.get("type", "")
        children = token.get("children") or []

        if token_type == "heading":
            level = token.get("attrs", {}).get("level", 1)
            if not isinstance(level, int) or not 1 <= level <= 6:
                level = 1
            return Element(f"h{level}", {}, self._process_inline_tokens(children))
        if token_type == "paragraph":
            return Element("p", {}, self._process_inline_tokens(children))
        if token_type == "block_text":
            # Tight list items hold inline content directly
            return self._process_inline_tokens(children)
        if token_type == "block_code":
            return self._process_code_block(token)
        if token_type == "block_quote":
            return Element("blockquote", {}, self._process_tokens(children))
        if token_type == "list":
            return self._process_list(token)
        if token_type == "list_item":
            return Element("li", {}, self._process_tokens(children))
        if token_type == "table":
            return self._process_table(token)
        if token_type == "thematic_break":
            return Element("hr")
        if token_type == "block_html":
            raw = token.get("raw", "")
            if _is_html_comment(raw):
                return Comment(_comment_text(raw))
            return Text(raw)
        return None

    def _process_code_block(self, token: dict[str, Any]) -> Element:
        info = (token.get("attrs") or {}).get("info") or ""
        parts = info.strip().split(maxsplit=1)
        attributes = {"class": f"language-{parts[0]}"} if parts else {}
        return Element("pre", {}, [Element("code", attributes, [Text(token.get("raw", ""))])])

    def _process_list(self, token: dict[str, Any]) -> Element:
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        attributes: dict[str, Any] = {}
        start = attrs.get("start", 1)
        if ordered and isinstance(start, int) and start != 1:
            attributes["start"] = start
        items = [self._process_token(child) for child in token.get("children") or [] if isinstance(child, dict)]
        return Element("ol" if ordered else "ul", attributes, [item for item in items if isinstance(item, Node)])

    def _process_table(self, token: dict[str, Any]) -> Element:
        sections: list[Node] = []
        for section in token.get("children") or []:
            section_type = section.get("type", "")
            if section_type == "table_head":
                row = Element("tr", {}, [self._process_table_cell(cell, "th") for cell in section.get("children", [])])
                sections.append(Element("thead", {}, [row]))
            elif section_type == "table_body":
                rows: list[Node] = [
                    Element("tr", {}, [self._process_table_cell(cell, "td") for cell in row_token.get("children", [])])
                    for row_token in section.get("children", [])
                ]
                sections.append(Element("tbody", {}, rows))
        return Element("table", {}, sections)

    def _process_table_cell(self, token: dict[str, Any], tag: str) -> Element:
        align = (token.get("attrs") or {}).get("align")
        attributes = {"align": align} if align else {}
        return Element(tag, attributes, self._process_inline_tokens(token.get("children") or []))

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)
        return _merge_text(nodes)

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        token_type = token.get("type", "")
        children = token.get("children") or []
        attrs = token.get("attrs") or {}

        if token_type == "text":
            return Text(token.get("raw", ""))
        if token_type == "strong":
            return Element("strong", {}, self._process_inline_tokens(children))
        if token_type == "emphasis":
            return Element("em", {}, self._process_inline_tokens(children))
        if token_type == "strikethrough":
            return Element("del", {}, self._process_inline_tokens(children))
        if token_type == "codespan":
            return Element("code", {}, [Text(token.get("raw", ""))])
        if token_type == "link":
            attributes: dict[str, Any] = {"href": attrs.get("url", "")}
            if attrs.get("title"):
                attributes["title"] = attrs["title"]
            return Element("a", attributes, self._process_inline_tokens(children))
        if token_type == "image":
            alt = "".join(child.get("raw", "") for child in children if isinstance(child, dict))
            attributes = {"src": attrs.get("url", ""), "alt": alt}
            if attrs.get("title"):
                attributes["title"] = attrs["title"]
            return Element("img", attributes)
        if token_type == "linebreak":
            return Element("br")
        if token_type == "softbreak":
            return Text("\n")
        if token_type == "inline_html":
            raw = token.get("raw", "")
            if _is_html_comment(raw):
                return Comment(_comment_text(raw))
            return Text(raw)
        return None


def parse(text: str, options: Optional[MarkdownParserOptions] = None) -> Document:
    """Parse markdown into a Document in one step.

    Parameters
    ----------
    text : str
        Markdown source, complete or partial
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        The parsed tree

    Examples
    --------
    >>> from incmark.parsers import parse
    >>> doc = parse("::alert\nHello")
    >>> doc.nodes[0].tag
    'alert'

    """
    return MarkdownParser(options).parse(text)


__all__ = ["MarkdownParser", "parse"]
