#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/fuzzing/test_autoclose_fuzzing.py
"""Property-based tests for the closers and the detector."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from incmark.autoclose import close_markup, close_table, detect_unclosed
from incmark.options import AutoCloseOptions

# Alphabet biased towards characters that carry markdown meaning
markdown_text = st.text(
    alphabet=st.sampled_from(list("ab *`~:|{}\"'=#-\n\t.") + ["::", ":::", "**", "| "]),
    max_size=80,
)


@pytest.mark.fuzzing
class TestCloseMarkupProperties:
    """Properties that hold for every input."""

    @given(markdown_text)
    def test_never_raises_and_returns_str(self, text):
        assert isinstance(close_markup(text), str)

    @given(markdown_text)
    def test_only_appends_after_trimming(self, text):
        result = close_markup(text)
        assert result == text or result.startswith(text.rstrip())

    @given(markdown_text)
    def test_lines_before_last_untouched(self, text):
        head = text.split("\n")[:-1]
        assert close_markup(text).split("\n")[: len(head)] == head

    @given(st.text(max_size=60))
    def test_arbitrary_unicode(self, text):
        close_markup(text, AutoCloseOptions(close_tables=True))

    @given(markdown_text)
    def test_no_change_without_any_stage(self, text):
        options = AutoCloseOptions(close_inline=False, close_components=False, close_props=False)
        assert close_markup(text, options) == text

    @given(markdown_text)
    def test_idempotent(self, text):
        once = close_markup(text)
        assert close_markup(once) == once

    @given(markdown_text)
    def test_idempotent_with_tables(self, text):
        options = AutoCloseOptions(close_tables=True)
        once = close_markup(text, options)
        assert close_markup(once, options) == once


@pytest.mark.fuzzing
class TestCloseTableProperties:
    """Properties of the table closer."""

    @given(markdown_text)
    def test_never_raises(self, text):
        assert isinstance(close_table(text), str)

    @given(st.text(alphabet=st.sampled_from(list("ab -:|\n")), max_size=60))
    def test_text_without_pipes_unchanged(self, text):
        if "|" not in text:
            assert close_table(text) == text

    @given(markdown_text)
    def test_idempotent(self, text):
        once = close_table(text)
        assert close_table(once) == once

    @given(st.text(alphabet=st.sampled_from(list("ab -:|\\\n") + ["| ", " |", "---"]), max_size=60))
    def test_idempotent_on_table_like_text(self, text):
        once = close_table(text)
        assert close_table(once) == once


@pytest.mark.fuzzing
class TestDetectProperties:
    """Properties of detect_unclosed."""

    @given(markdown_text)
    def test_agrees_with_closer(self, text):
        report = detect_unclosed(text)
        assert report.has_unclosed == (close_markup(text) != text)
        if not report.has_unclosed:
            assert report.unclosed_inline == []
            assert report.unclosed_components == []
