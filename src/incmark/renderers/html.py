#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/incmark/renderers/html.py
"""HTML rendering of incmark trees.

Elements are written as tags named after ``Element.tag``, so block
components come out as custom elements (``<alert type="info">...</alert>``)
that a front end can hydrate. Text is escaped, comments are written as
``<!--...-->`` unless disabled.

"""

from __future__ import annotations

import html
import logging
from typing import Any, Optional

from incmark.ast.nodes import Comment, Document, Element, Text
from incmark.ast.utils import is_valid_attribute_name
from incmark.ast.visitors import NodeVisitor
from incmark.constants import HTML_VOID_ELEMENTS
from incmark.exceptions import ValidationError
from incmark.options.html import HtmlRendererOptions

logger = logging.getLogger(__name__)


def _render_attributes(attributes: dict[str, Any]) -> str:
    """Serialize attributes in insertion order.

    True gives a bare attribute, False and None are omitted, lists are
    space-joined and every other value is stringified and escaped. Names
    that are not valid attribute names are skipped.
    """
    parts = []
    for name, value in attributes.items():
        if not is_valid_attribute_name(name):
            logger.debug("Skipping attribute with invalid name: %r", name)
            continue
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
            continue
        if isinstance(value, (list, tuple)):
            value = " ".join(str(item) for item in value)
        parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
    return "".join(parts)


class HtmlRenderer(NodeVisitor):
    """Render a Document (or a single node) to an HTML fragment.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        Rendering options

    Examples
    --------
        >>> from incmark.ast import Document, Element, Text
        >>> doc = Document(nodes=[Element("p", {}, [Text("a < b")])])
        >>> HtmlRenderer().render_to_string(doc)
        '<p>a &lt; b</p>'

    """

    def __init__(self, options: Optional[HtmlRendererOptions] = None):
        """Initialize the renderer with options."""
        if options is not None and not isinstance(options, HtmlRendererOptions):
            raise ValidationError(
                f"Expected HtmlRendererOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options: HtmlRendererOptions = options or HtmlRendererOptions()
        self._output: list[str] = []

    def render_to_string(self, document: Document) -> str:
        """Render a document (or node) to an HTML string.

        Parameters
        ----------
        document : Document
            The tree to render

        Returns
        -------
        str
            HTML text

        """
        self._output = []
        document.accept(self)
        return "".join(self._output)

    def visit_document(self, node: Document) -> None:
        """Render top-level nodes, one per line in pretty mode."""
        for child in node.nodes:
            child.accept(self)
            if self.options.pretty:
                self._output.append("\n")

    def visit_element(self, node: Element) -> None:
        """Render an Element and its children."""
        attributes = _render_attributes(node.attributes)
        if node.tag in HTML_VOID_ELEMENTS:
            if node.children:
                logger.debug("Dropping %d child node(s) of void element <%s>", len(node.children), node.tag)
            self._output.append(f"<{node.tag}{attributes}>")
            return

        self._output.append(f"<{node.tag}{attributes}>")
        self.generic_visit(node)
        self._output.append(f"</{node.tag}>")

    def visit_text(self, node: Text) -> None:
        """Render escaped text."""
        self._output.append(html.escape(node.content, quote=False))

    def visit_comment(self, node: Comment) -> None:
        """Render a comment, unless comments are disabled."""
        if not self.options.render_comments:
            return
        # "--" would end the comment early
        self._output.append(f"<!--{node.content.replace('--', '- -')}-->")


def render_html(document: Document, options: Optional[HtmlRendererOptions] = None) -> str:
    """Render ``document`` to HTML with a fresh :class:`HtmlRenderer`."""
    return HtmlRenderer(options).render_to_string(document)


__all__ = ["HtmlRenderer", "render_html"]
