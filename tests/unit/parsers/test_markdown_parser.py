#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_markdown_parser.py
"""Tests for the markdown to tree parser."""

import pytest

from incmark.ast import Comment, Element, Text, text_content
from incmark.exceptions import ParsingError, ValidationError
from incmark.options import MarkdownParserOptions
from incmark.parsers import MarkdownParser, parse

NO_AUTOCLOSE = MarkdownParserOptions(auto_close=False)


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level token mapping."""

    def test_heading_and_paragraph(self):
        doc = parse("# Title\n\nHello **world**")
        assert doc.nodes == [
            Element("h1", {}, [Text("Title")]),
            Element("p", {}, [Text("Hello "), Element("strong", {}, [Text("world")])]),
        ]

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        doc = parse("#" * level + " H")
        assert doc.nodes[0].tag == f"h{level}"

    def test_fenced_code(self):
        doc = parse("```python\nprint(1)\n```", NO_AUTOCLOSE)
        assert doc.nodes == [
            Element("pre", {}, [Element("code", {"class": "language-python"}, [Text("print(1)\n")])])
        ]

    def test_code_without_language(self):
        doc = parse("```\nx\n```", NO_AUTOCLOSE)
        assert doc.nodes[0].children[0].attributes == {}

    def test_blockquote(self):
        doc = parse("> quoted")
        assert doc.nodes == [Element("blockquote", {}, [Element("p", {}, [Text("quoted")])])]

    def test_unordered_list(self):
        doc = parse("- a\n- b")
        assert doc.nodes == [Element("ul", {}, [Element("li", {}, [Text("a")]), Element("li", {}, [Text("b")])])]

    def test_ordered_list_start(self):
        doc = parse("3. x\n4. y")
        assert doc.nodes[0].tag == "ol"
        assert doc.nodes[0].attributes == {"start": 3}

    def test_ordered_list_default_start(self):
        assert parse("1. x").nodes[0].attributes == {}

    def test_thematic_break(self):
        doc = parse("a\n\n***\n\nb")
        assert [node.tag for node in doc.nodes] == ["p", "hr", "p"]

    def test_table(self):
        doc = parse("| a | b |\n| :- | -: |\n| 1 | 2 |")
        table = doc.nodes[0]
        assert table.tag == "table"
        thead, tbody = table.children
        assert thead.children[0].children == [
            Element("th", {"align": "left"}, [Text("a")]),
            Element("th", {"align": "right"}, [Text("b")]),
        ]
        assert text_content(tbody) == "12"

    def test_partial_table_is_completed(self):
        doc = parse("| a | b")
        assert doc.meta["auto_closed"] is True
        table = doc.nodes[0]
        assert table.tag == "table"
        assert text_content(table.children[0]) == "ab"

    def test_tables_disabled(self):
        options = MarkdownParserOptions(parse_tables=False)
        doc = parse("| a |\n| --- |", options)
        assert doc.nodes[0].tag == "p"


@pytest.mark.unit
class TestInline:
    """Tests for inline token mapping."""

    def test_emphasis_and_strikethrough(self):
        doc = parse("*a* ~~b~~ `c`")
        assert doc.nodes[0].children == [
            Element("em", {}, [Text("a")]),
            Text(" "),
            Element("del", {}, [Text("b")]),
            Text(" "),
            Element("code", {}, [Text("c")]),
        ]

    def test_strikethrough_disabled(self):
        doc = parse("~~b~~", MarkdownParserOptions(parse_strikethrough=False))
        assert doc.nodes[0].children == [Text("~~b~~")]

    def test_link_with_title(self):
        doc = parse('[site](https://example.org "Example")')
        assert doc.nodes[0].children == [
            Element("a", {"href": "https://example.org", "title": "Example"}, [Text("site")])
        ]

    def test_image(self):
        doc = parse("![alt text](/img.png)")
        assert doc.nodes[0].children == [Element("img", {"src": "/img.png", "alt": "alt text"})]

    def test_softbreak_kept_as_newline(self):
        doc = parse("one\ntwo")
        assert doc.nodes[0].children == [Text("one\ntwo")]

    def test_hard_break(self):
        doc = parse("one  \ntwo")
        assert Element("br") in doc.nodes[0].children
        assert doc.nodes[0].children[-1] == Text("two")


@pytest.mark.unit
class TestHtml:
    """Tests for raw HTML handling."""

    def test_block_comment(self):
        doc = parse("Intro\n\n<!-- more -->\n\nRest")
        assert doc.nodes[1] == Comment("more")
        assert [type(node).__name__ for node in doc.nodes] == ["Element", "Comment", "Element"]

    def test_inline_comment(self):
        doc = parse("a <!-- note --> b")
        assert Comment("note") in doc.nodes[0].children

    def test_raw_html_becomes_text(self):
        doc = parse("<div>x</div>")
        assert isinstance(doc.nodes[0], Text)
        assert "<div>x</div>" in doc.nodes[0].content


@pytest.mark.unit
class TestComponents:
    """Tests for block component parsing."""

    def test_component_with_props(self):
        doc = parse('::alert{type="info"}\nHi')
        assert doc.nodes == [Element("alert", {"type": "info"}, [Element("p", {}, [Text("Hi")])])]
        assert doc.meta["auto_closed"] is True

    def test_nested_components(self):
        doc = parse(":::card\n::body\ntext\n::\n:::")
        assert doc.nodes == [Element("card", {}, [Element("body", {}, [Element("p", {}, [Text("text")])])])]
        assert doc.meta["auto_closed"] is False

    def test_streaming_component(self):
        doc = parse(":::card{title='Hel")
        assert doc.nodes == [Element("card", {"title": "Hel"}, [])]

    def test_markdown_around_components(self):
        doc = parse("# T\n\n::note\n**x**\n::\n\nafter")
        assert [node.tag for node in doc.nodes] == ["h1", "note", "p"]
        assert doc.nodes[1].children == [Element("p", {}, [Element("strong", {}, [Text("x")])])]

    def test_stray_closing_fence_dropped(self):
        doc = parse("text\n::\nmore")
        assert text_content(doc) == "text\nmore"

    def test_fence_in_code_block_is_code(self):
        doc = parse("```\n::note\n```", NO_AUTOCLOSE)
        assert doc.nodes[0].tag == "pre"
        assert text_content(doc) == "::note\n"

    def test_components_disabled(self):
        options = MarkdownParserOptions(auto_close=False, parse_components=False)
        doc = parse("::note\nx", options)
        assert doc.nodes == [Element("p", {}, [Text("::note\nx")])]

    def test_custom_fence_from_autoclose_options(self):
        from incmark.options import AutoCloseOptions

        options = MarkdownParserOptions(autoclose=AutoCloseOptions(fence_char="+", min_fence_length=3))
        doc = parse("+++box\nhi", options)
        assert doc.nodes == [Element("box", {}, [Element("p", {}, [Text("hi")])])]


@pytest.mark.unit
class TestFrontmatter:
    """Tests for YAML frontmatter extraction."""

    def test_frontmatter_extracted(self):
        doc = parse("---\ntitle: Doc\ntags: [a, b]\n---\n# H")
        assert doc.frontmatter == {"title": "Doc", "tags": ["a", "b"]}
        assert doc.nodes == [Element("h1", {}, [Text("H")])]

    def test_invalid_yaml(self):
        with pytest.raises(ParsingError) as exc_info:
            parse("---\ntitle: [unclosed\n---\nBody")
        assert exc_info.value.stage == "frontmatter"
        assert exc_info.value.original_error is not None

    def test_non_mapping_ignored(self):
        doc = parse("---\n- a\n- b\n---\nText")
        assert doc.frontmatter == {}
        assert doc.nodes == [Element("p", {}, [Text("Text")])]

    def test_disabled(self):
        doc = parse("---\ntitle: x\n---\nBody", MarkdownParserOptions(parse_frontmatter=False))
        assert doc.frontmatter == {}
        assert "Body" in text_content(doc)

    def test_must_start_on_first_line(self):
        doc = parse("Intro\n\n---\ntitle: x\n---")
        assert doc.frontmatter == {}


@pytest.mark.unit
class TestParserApi:
    """Tests for the parser entry points."""

    def test_auto_closed_flag(self):
        assert parse("This is **bo").meta == {"auto_closed": True}
        assert parse("This is **bold**").meta == {"auto_closed": False}

    def test_auto_closed_content(self):
        doc = parse("This is **bo")
        assert doc.nodes[0].children == [Text("This is "), Element("strong", {}, [Text("bo")])]

    def test_auto_close_disabled(self):
        doc = parse("**bo", NO_AUTOCLOSE)
        assert doc.meta["auto_closed"] is False
        assert text_content(doc) == "**bo"

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank_input(self, text):
        doc = parse(text)
        assert doc.nodes == []
        assert doc.meta["auto_closed"] is False

    def test_non_string_input(self):
        with pytest.raises(ValidationError):
            parse(b"# bytes")

    def test_wrong_options_type(self):
        with pytest.raises(ValidationError):
            MarkdownParser(options={"auto_close": False})

    def test_parser_reusable(self):
        parser = MarkdownParser()
        first = parser.parse("# A")
        second = parser.parse("# B")
        assert text_content(first) == "A"
        assert text_content(second) == "B"
