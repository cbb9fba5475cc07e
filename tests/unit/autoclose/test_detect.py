#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/autoclose/test_detect.py
"""Tests for detect_unclosed."""

import pytest

from incmark.autoclose import UnclosedComponent, UnclosedReport, detect_unclosed
from incmark.options import AutoCloseOptions


@pytest.mark.unit
class TestDetectUnclosed:
    """Tests for the read-only unclosed syntax report."""

    @pytest.mark.parametrize(
        "markdown,label",
        [
            ("**bold", "**bold**"),
            ("*it", "*italic*"),
            ("`code", "`code`"),
            ("~~gone", "~~strikethrough~~"),
        ],
    )
    def test_inline_labels(self, markdown, label):
        report = detect_unclosed(markdown)
        assert report.has_unclosed
        assert report.unclosed_inline == [label]
        assert report.unclosed_components == []

    def test_nested_components(self):
        report = detect_unclosed(":::parent\n::child\ntext")
        assert report.has_unclosed
        assert report.unclosed_inline == []
        assert report.unclosed_components == [UnclosedComponent(3, "parent"), UnclosedComponent(2, "child")]

    @pytest.mark.parametrize("markdown", ["", "   ", "Hello **world**", "::a\nx\n::", "*a* *b"])
    def test_nothing_unclosed(self, markdown):
        assert detect_unclosed(markdown) == UnclosedReport()

    def test_input_is_not_modified(self):
        markdown = "::card\n**bold"
        detect_unclosed(markdown)
        assert markdown == "::card\n**bold"

    def test_tables_follow_options(self):
        assert not detect_unclosed("| a | b").has_unclosed

        report = detect_unclosed("| a | b", AutoCloseOptions(close_tables=True))
        assert report.has_unclosed
        assert report.unclosed_inline == []
        assert report.unclosed_components == []

    def test_custom_fence(self):
        options = AutoCloseOptions(fence_char="+", min_fence_length=3)
        report = detect_unclosed("+++box\ntext", options)
        assert report.unclosed_components == [UnclosedComponent(3, "box")]

    def test_to_dict(self):
        report = detect_unclosed("::note\n**x")
        assert report.to_dict() == {
            "has_unclosed": True,
            "unclosed_inline": ["**bold**"],
            "unclosed_components": [{"depth": 2, "name": "note"}],
        }
