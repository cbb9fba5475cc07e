#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_text_content.py
"""Tests for text_content."""

import pytest

from incmark.ast import Comment, Document, Element, Text, text_content


@pytest.mark.unit
class TestTextContent:
    """Tests for concatenating text leaves."""

    def test_single_text(self):
        assert text_content(Text("Hello")) == "Hello"

    def test_nested_elements_joined_without_separator(self):
        node = Element("p", {}, [Text("Hello "), Element("strong", {}, [Text("big")]), Text(" world")])
        assert text_content(node) == "Hello big world"

    def test_comments_are_ignored(self):
        node = Element("p", {}, [Text("a"), Comment("hidden"), Text("b")])
        assert text_content(node) == "ab"
        assert text_content(Comment("only")) == ""

    def test_list_of_nodes(self):
        assert text_content([Text("a"), Element("em", {}, [Text("b")])]) == "ab"

    def test_document(self, sample_document):
        assert text_content(sample_document) == "TitleHello worldBody"

    def test_empty_element(self):
        assert text_content(Element("br")) == ""

    def test_entities_kept_by_default(self):
        assert text_content(Text("Fish &amp; chips")) == "Fish &amp; chips"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Fish &amp; chips", "Fish & chips"),
            ("&lt;tag&gt;", "<tag>"),
            ("&#169; 2025", "© 2025"),
            ("&#x1F600;", "\U0001F600"),
            ("&quot;quoted&quot;", '"quoted"'),
            ("no entities", "no entities"),
        ],
    )
    def test_entities_decoded(self, raw, expected):
        assert text_content(Element("p", {}, [Text(raw)]), decode_entities=True) == expected

    def test_empty_document(self):
        assert text_content(Document()) == ""
