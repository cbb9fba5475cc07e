#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_serialization.py
"""Tests for the compact list serialization."""

import json

import pytest

from incmark.ast import (
    Comment,
    Document,
    Element,
    Text,
    ast_to_compact,
    ast_to_json,
    compact_to_ast,
    compact_to_node,
    json_to_ast,
    node_to_compact,
)
from incmark.exceptions import ValidationError


@pytest.mark.unit
class TestNodeToCompact:
    """Tests for single-node conversion."""

    def test_text(self):
        assert node_to_compact(Text("hi")) == "hi"

    def test_comment(self):
        assert node_to_compact(Comment("note")) == [None, {}, "note"]

    def test_nested_element(self):
        node = Element("p", {"class": "x"}, [Text("a "), Element("strong", {}, [Text("b")])])
        assert node_to_compact(node) == ["p", {"class": "x"}, "a ", ["strong", {}, "b"]]

    def test_attributes_are_copied(self):
        node = Element("p", {"id": "a"})
        compact = node_to_compact(node)
        compact[1]["id"] = "b"
        assert node.attributes == {"id": "a"}


@pytest.mark.unit
class TestCompactToNode:
    """Tests for parsing compact values."""

    def test_string_is_text(self):
        assert compact_to_node("x") == Text("x")

    def test_comment(self):
        assert compact_to_node([None, {}, "c"]) == Comment("c")

    def test_element(self):
        assert compact_to_node(["ul", {}, ["li", {}, "one"]]) == Element(
            "ul", {}, [Element("li", {}, [Text("one")])]
        )

    @pytest.mark.parametrize(
        "value",
        [
            42,
            None,
            [],
            ["p"],
            ["p", "not-a-dict"],
            [None, {}],
            [None, {}, 1],
            ["", {}],
            [1, {}],
        ],
    )
    def test_invalid_values(self, value):
        with pytest.raises(ValidationError):
            compact_to_node(value)


@pytest.mark.unit
class TestDocumentSerialization:
    """Tests for whole-document conversion."""

    def test_ast_to_compact(self, sample_document):
        compact = ast_to_compact(sample_document)
        assert compact["frontmatter"] == {"title": "Sample"}
        assert compact["meta"] == {}
        assert compact["nodes"][0] == ["h1", {}, "Title"]
        assert compact["nodes"][2] == [None, {}, "more"]

    def test_json_round_trip(self, sample_document):
        assert json_to_ast(ast_to_json(sample_document)) == sample_document

    def test_json_is_plain_compact_form(self):
        doc = Document(nodes=[Element("h1", {}, [Text("Title")])])
        assert json.loads(ast_to_json(doc)) == {"nodes": [["h1", {}, "Title"]], "frontmatter": {}, "meta": {}}

    def test_missing_frontmatter_and_meta_default_to_empty(self):
        doc = compact_to_ast({"nodes": ["x"]})
        assert doc == Document(nodes=[Text("x")])

    @pytest.mark.parametrize("data", [[], {"nodes": "x"}, {"frontmatter": {}}, {"nodes": [], "meta": ["x"]}])
    def test_invalid_documents(self, data):
        with pytest.raises(ValidationError):
            compact_to_ast(data)

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            json_to_ast("{not json")
        assert exc_info.value.original_error is not None

    def test_nodes_in_meta_are_compacted(self):
        doc = Document(nodes=[], meta={"summary": [Element("p", {}, [Text("a")])], "toc": {"title": "T"}})
        assert ast_to_compact(doc)["meta"] == {"summary": [["p", {}, "a"]], "toc": {"title": "T"}}
        assert json.loads(ast_to_json(doc))["meta"]["summary"] == [["p", {}, "a"]]
