#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_nodes.py
"""Tests for the node model."""

import pytest

from incmark.ast import Comment, Document, Element, Text, get_node_children, is_element
from incmark.ast.visitors import NodeVisitor
from incmark.exceptions import InvariantViolationError


@pytest.mark.unit
class TestNodeConstruction:
    """Tests for creating nodes."""

    def test_text_defaults(self):
        assert Text().content == ""
        assert Text("hi").content == "hi"

    def test_element_defaults_are_not_shared(self):
        first = Element("p")
        second = Element("p")
        first.children.append(Text("x"))
        first.attributes["id"] = "a"
        assert second.children == []
        assert second.attributes == {}

    def test_element_attribute_order_preserved(self):
        element = Element("a", {"href": "/", "title": "Home", "class": "nav"})
        assert list(element.attributes) == ["href", "title", "class"]

    def test_element_get(self):
        element = Element("a", {"href": "/x"})
        assert element.get("href") == "/x"
        assert element.get("title") is None
        assert element.get("title", "none") == "none"

    def test_element_append_chains(self):
        element = Element("p").append(Text("a"), Text("b"))
        assert element.children == [Text("a"), Text("b")]

    def test_equality_is_structural(self):
        assert Element("p", {}, [Text("x")]) == Element("p", {}, [Text("x")])
        assert Text("x") != Comment("x")

    def test_document_defaults(self):
        doc = Document()
        assert doc.nodes == []
        assert doc.frontmatter == {}
        assert doc.meta == {}


@pytest.mark.unit
class TestIsElement:
    """Tests for is_element."""

    def test_any_element(self):
        assert is_element(Element("div"))

    def test_tag_filter(self):
        assert is_element(Element("div"), "div")
        assert not is_element(Element("div"), "span")

    def test_non_elements(self):
        assert not is_element(Text("div"))
        assert not is_element(Comment("div"), "div")
        assert not is_element("div")


@pytest.mark.unit
class TestGetNodeChildren:
    """Tests for get_node_children."""

    def test_element_returns_live_list(self):
        element = Element("p", {}, [Text("a")])
        children = get_node_children(element)
        children.append(Text("b"))
        assert element.children == [Text("a"), Text("b")]

    def test_document_returns_nodes(self, sample_document):
        assert get_node_children(sample_document) is sample_document.nodes

    def test_leaves_have_no_children(self):
        assert get_node_children(Text("x")) == []
        assert get_node_children(Comment("x")) == []

    def test_leaf_with_children_raises(self):
        leaf = Text("x")
        leaf.children = [Text("y")]  # type: ignore[attr-defined]
        with pytest.raises(InvariantViolationError) as exc_info:
            get_node_children(leaf)
        assert exc_info.value.node is leaf

    def test_non_node_raises(self):
        with pytest.raises(InvariantViolationError):
            get_node_children("not a node")  # type: ignore[arg-type]


@pytest.mark.unit
class TestAccept:
    """Tests for double dispatch through accept()."""

    def test_dispatch_by_variant(self, sample_document):
        class Recorder(NodeVisitor):
            def __init__(self):
                self.seen = []

            def visit_element(self, node):
                self.seen.append(("element", node.tag))
                return self.generic_visit(node)

            def visit_text(self, node):
                self.seen.append(("text", node.content))

            def visit_comment(self, node):
                self.seen.append(("comment", node.content))

        recorder = Recorder()
        sample_document.accept(recorder)

        assert recorder.seen == [
            ("element", "h1"),
            ("text", "Title"),
            ("element", "p"),
            ("text", "Hello "),
            ("element", "strong"),
            ("text", "world"),
            ("comment", "more"),
            ("element", "alert"),
            ("element", "p"),
            ("text", "Body"),
        ]
