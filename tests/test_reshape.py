"""Tests for styledtext.reshape -- style-preserving word wrap."""

from __future__ import annotations

import pytest

from styledtext.ansi import RESET, remove_ansi
from styledtext.markup import MarkupError, remove_markup
from styledtext.measure import textlen, textwidth
from styledtext.reshape import reshape_text
from styledtext.theme import Theme


def _widths(text: str) -> list[int]:
    return [textwidth(line) for line in text.split("\n")]


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


class TestPlainWrap:
    """Greedy word wrap of unstyled text."""

    def test_lorem_four_lines(self, lorem: str) -> None:
        reshaped = reshape_text(lorem, 33)
        assert reshaped == (
            "Lorem ipsum dolor sit amet,\x1b[0m\n"
            "consectetur adipiscing elit, sed\x1b[0m\n"
            "do eiusmod tempor incididunt ut\x1b[0m\n"
            "labore et dolore magna aliqua."
        )

    def test_lorem_lines_end_with_reset(self, lorem: str) -> None:
        lines = reshape_text(lorem, 33).split("\n")
        assert len(lines) == 4
        assert all(line.endswith(RESET) for line in lines[:3])
        assert all(w <= 33 for w in _widths(reshape_text(lorem, 33)))

    def test_short_text_untouched(self) -> None:
        assert reshape_text("hello world", 80) == "hello world"

    def test_empty(self) -> None:
        assert reshape_text("", 10) == ""

    def test_leading_spaces_preserved(self) -> None:
        assert reshape_text("  ab", 10) == "  ab"

    def test_overflowing_leading_spaces_are_dropped(self) -> None:
        reshaped = reshape_text(" " * 40 + "word", 33)
        assert reshaped == "word"
        assert all(w <= 33 for w in _widths(reshaped))

    def test_overflowing_indent_after_newline_is_dropped(self) -> None:
        assert reshape_text("ab\n" + " " * 12 + "cd", 10) == "ab\ncd"

    def test_leading_spaces_kept_when_word_still_fits(self) -> None:
        assert reshape_text("   ab", 5) == "   ab"

    def test_overflowing_leading_spaces_before_dense_run(self) -> None:
        reshaped = reshape_text(" " * 6 + "." * 6, 4)
        assert reshaped.split("\n") == ["....\x1b[0m", ".."]

    def test_trailing_spaces_kept_while_they_fit(self) -> None:
        assert reshape_text("ab  ", 3) == "ab "

    def test_embedded_newlines_without_styles(self) -> None:
        assert reshape_text("ab\ncd", 10) == "ab\ncd"

    def test_doubled_braces_preserved(self) -> None:
        assert reshape_text("a {{b}} c", 80) == "a {{b}} c"


# ---------------------------------------------------------------------------
# Styled text
# ---------------------------------------------------------------------------


class TestStyledWrap:
    """Styles are closed at every break and re-opened on the next line."""

    def test_dropped_indent_keeps_its_styles(self) -> None:
        assert reshape_text("{red}" + " " * 5 + "ab{/red}", 4) == "\x1b[31mab\x1b[39m"

    def test_markup_across_breaks(self) -> None:
        text = (
            "Lorem {red}ipsum dolor sit {underline}amet, consectetur{/underline} "
            "adipiscing elit, {/red}{blue}sed do eiusmod tempor incididunt{/blue} "
            "ut labore et dolore magna aliqua."
        )
        assert reshape_text(text, 33).split("\n") == [
            "Lorem \x1b[31mipsum dolor sit \x1b[4mamet,\x1b[39m\x1b[24m\x1b[0m",
            "\x1b[31m\x1b[4mconsectetur\x1b[24m adipiscing elit, \x1b[39m\x1b[34msed\x1b[39m\x1b[0m",
            "\x1b[34mdo eiusmod tempor incididunt\x1b[39m ut\x1b[0m",
            "labore et dolore magna aliqua.",
        ]

    def test_style_reopened_after_break(self) -> None:
        assert reshape_text("{bold}aaa bbb{/bold}", 3) == (
            "\x1b[1maaa\x1b[22m\x1b[0m\n\x1b[1mbbb\x1b[22m"
        )

    def test_raw_ansi_across_breaks(self) -> None:
        assert reshape_text("\x1b[31maaa bbb\x1b[39m", 3) == (
            "\x1b[31maaa\x1b[39m\x1b[0m\n\x1b[31mbbb\x1b[39m"
        )

    def test_embedded_newline_with_active_style(self) -> None:
        assert reshape_text("{red}a\nb{/red}", 10) == (
            "\x1b[31ma\x1b[39m\x1b[0m\n\x1b[31mb\x1b[39m"
        )

    def test_unclosed_style_is_flushed_at_end(self) -> None:
        assert reshape_text("{bold}abc", 10) == "\x1b[1mabc\x1b[22m\x1b[0m"

    def test_unmatched_close_is_ignored(self) -> None:
        assert reshape_text("abc{/bold} def", 10) == "abc def"

    def test_style_between_spaces_keeps_position(self) -> None:
        assert reshape_text("a {red} b{/red}", 80) == "a \x1b[31m b\x1b[39m"

    def test_theme_roles(self) -> None:
        theme = Theme(emphasis="red")
        assert reshape_text("{emphasis}hi{/emphasis}", 10, theme=theme) == "\x1b[31mhi\x1b[39m"

    def test_wrap_invariant_on_paragraphs(self, styled_paragraphs: str) -> None:
        for width in (33, 40, 60, 99):
            reshaped = reshape_text(styled_paragraphs, width)
            assert all(textlen(line) <= width for line in reshaped.split("\n"))

    def test_paragraph_text_is_preserved(self, styled_paragraphs: str) -> None:
        reshaped = reshape_text(styled_paragraphs, 40)
        assert remove_ansi(reshaped).split() == remove_markup(styled_paragraphs).split()

    def test_no_markup_left_in_output(self, styled_paragraphs: str) -> None:
        reshaped = reshape_text(styled_paragraphs, 60)
        assert "{" not in reshaped
        assert "}" not in reshaped


# ---------------------------------------------------------------------------
# Dense runs and degenerate widths
# ---------------------------------------------------------------------------


class TestDenseRuns:
    """Runs wider than the threshold break between any two glyphs."""

    def test_long_run_fills_lines(self) -> None:
        assert reshape_text("." * 100, 33) == "\n".join(
            ["." * 33 + RESET] * 3 + ["."]
        )

    def test_wide_glyphs(self) -> None:
        lines = reshape_text("世" * 20, 9).split("\n")
        assert lines == ["世世世世" + RESET] * 4 + ["世世世世"]

    def test_combining_marks_stay_attached(self) -> None:
        lines = remove_ansi(reshape_text("é" * 10, 3)).split("\n")
        assert lines == ["é" * 3] * 3 + ["é"]

    def test_styles_inside_dense_run(self) -> None:
        reshaped = reshape_text("...{red}....{/red}..", 4)
        assert reshaped.split("\n") == [
            "...\x1b[31m.\x1b[39m\x1b[0m",
            "\x1b[31m...\x1b[39m.\x1b[0m",
            ".",
        ]

    def test_spaced_wide_text_wraps_at_spaces(self) -> None:
        reshaped = reshape_text("가나 다라 마바", 9)
        assert remove_ansi(reshaped).split("\n") == ["가나 다라", "마바"]

    def test_oversized_word_gets_its_own_line(self) -> None:
        assert reshape_text("a verylongword b", 5, dense_threshold=100) == (
            "a\x1b[0m\nverylongword\x1b[0m\nb"
        )

    def test_zero_width_places_one_glyph_per_line(self) -> None:
        assert reshape_text("ab cd", 0) == "a\x1b[0m\nb\x1b[0m\nc\x1b[0m\nd"


class TestErrors:
    def test_unknown_style(self) -> None:
        with pytest.raises(MarkupError):
            reshape_text("{nope}x{/nope}", 10)

    def test_unterminated_tag(self) -> None:
        with pytest.raises(MarkupError):
            reshape_text("some {bold text", 10)
