"""Style-preserving word wrap.

:func:`reshape_text` reflows text containing markup and/or SGR sequences to
a column width.  Every line introduced by a wrap ends with the close codes of
the styles active at the break followed by a full reset, and the next line
re-opens those styles, so each physical line renders correctly on its own.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from styledtext.ansi import RESET
from styledtext.measure import char_width, graphemes
from styledtext.style import ActiveStyleStack
from styledtext.theme import Theme
from styledtext.tokens import Literal, StyleToken, tokenize

logger = logging.getLogger(__name__)

_CHUNK_RE = re.compile(r"\n|[^\S\n]+|\S+")


# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------


@dataclass
class _Word:
    """Run of non-whitespace text, possibly spanning style tokens."""

    parts: list[str | StyleToken] = field(default_factory=list)
    width: int = 0

    def add_text(self, text: str) -> None:
        self.parts.append(text)
        self.width += sum(char_width(ch) for ch in text)

    @property
    def has_text(self) -> bool:
        return any(isinstance(p, str) for p in self.parts)


@dataclass
class _Space:
    text: str
    width: int


class _Newline:
    pass


_Unit = _Word | _Space | _Newline


def _segment(tokens: list) -> list[_Unit]:
    """Group tokens into words, whitespace runs and newlines.

    Style tokens that follow a word with no whitespace in between stay with
    that word.  Style tokens that follow whitespace travel with the next word.
    """
    units: list[_Unit] = []
    word = _Word()

    def flush() -> None:
        nonlocal word
        if word.parts:
            units.append(word)
            word = _Word()

    for token in tokens:
        if not isinstance(token, Literal):
            word.parts.append(token)
            continue
        for m in _CHUNK_RE.finditer(token.text):
            chunk = m.group(0)
            if chunk == "\n":
                flush()
                units.append(_Newline())
            elif chunk.isspace():
                flush()
                units.append(_Space(chunk, sum(char_width(ch) for ch in chunk)))
            else:
                word.add_text(chunk)
    flush()
    return units


# ---------------------------------------------------------------------------
# Line building
# ---------------------------------------------------------------------------


class _LineBuilder:
    def __init__(self, width: int, dense_threshold: int, stack: ActiveStyleStack) -> None:
        self.width = width
        self.dense_threshold = dense_threshold
        self.stack = stack
        self.lines: list[str] = []
        self.buf: list[str] = []
        self.w = 0
        # Whitespace and style tokens seen since the last word on this line.
        self.pending: list[str | StyleToken] = []
        self.pending_w = 0

    def _fits(self, extra: int) -> bool:
        return self.w + extra <= self.width

    def _emit_style(self, token: StyleToken) -> None:
        self.buf.append(self.stack.apply(token))

    def _emit_text(self, text: str, width: int) -> None:
        self.buf.append(text)
        self.w += width

    def _commit_pending(self) -> None:
        for part in self.pending:
            if isinstance(part, str):
                self._emit_text(part, sum(char_width(ch) for ch in part))
            else:
                self._emit_style(part)
        self.pending = []
        self.pending_w = 0

    def _finish_line(self, force_reset: bool) -> None:
        if force_reset or self.stack:
            self.buf.append(self.stack.reset_sequence() + RESET)
        self.lines.append("".join(self.buf))
        self.buf = self.stack.snapshot()
        self.w = 0

    def _drop_pending_space(self) -> None:
        for part in self.pending:
            if not isinstance(part, str):
                self._emit_style(part)
        self.pending = []
        self.pending_w = 0

    def break_line(self) -> None:
        """Wrap: drop pending separators, reset styles, re-open them below."""
        self._drop_pending_space()
        self._finish_line(force_reset=True)

    def _place_separator(self, next_width: int) -> None:
        """Commit pending separators or break before a word of *next_width*."""
        if self._fits(self.pending_w + next_width):
            self._commit_pending()
        elif self.w > 0:
            self.break_line()
        else:
            # Leading whitespace that leaves no room for the word is dropped.
            self._drop_pending_space()

    def _flush_trailing(self) -> None:
        # Trailing whitespace is kept only as far as it fits.
        for part in self.pending:
            if not isinstance(part, str):
                self._emit_style(part)
                continue
            kept = []
            for ch in part:
                cw = char_width(ch)
                if not self._fits(cw):
                    break
                kept.append(ch)
                self.w += cw
            self.buf.append("".join(kept))
        self.pending = []
        self.pending_w = 0

    def end_physical_line(self) -> None:
        self._flush_trailing()
        self._finish_line(force_reset=False)

    def finish(self) -> list[str]:
        self._flush_trailing()
        if self.stack:
            self.buf.append(self.stack.reset_sequence() + RESET)
        self.lines.append("".join(self.buf))
        return self.lines

    def add_space(self, space: _Space) -> None:
        self.pending.append(space.text)
        self.pending_w += space.width

    def add_word(self, word: _Word) -> None:
        if not word.has_text:
            # Style-only: keep its position relative to surrounding spaces.
            self.pending.extend(word.parts)
            return

        if word.width > self.dense_threshold:
            self._add_dense(word)
            return

        self._place_separator(word.width)

        for part in word.parts:
            if isinstance(part, str):
                self._emit_text(part, sum(char_width(ch) for ch in part))
            else:
                self._emit_style(part)

    def _add_dense(self, word: _Word) -> None:
        """Place a word glyph by glyph so it may break anywhere."""
        first = next(p for p in word.parts if isinstance(p, str) and p)
        first_w = sum(char_width(ch) for ch in graphemes(first)[0])
        self._place_separator(first_w)

        for part in word.parts:
            if not isinstance(part, str):
                self._emit_style(part)
                continue
            for g in graphemes(part):
                gw = sum(char_width(ch) for ch in g)
                if self.w > 0 and not self._fits(gw):
                    self.break_line()
                self._emit_text(g, gw)


def reshape_text(
    text: str,
    width: int,
    *,
    theme: Theme | None = None,
    dense_threshold: int | None = None,
) -> str:
    """Wrap *text* to *width* visible columns, preserving styles.

    Markup is compiled to SGR sequences on the way.  Words wider than
    *dense_threshold* columns (default: *width*) are broken between any two
    grapheme clusters, which handles scripts written without spaces; other
    words are never split, and a word wider than *width* gets a line of its
    own.

    Raises:
        MarkupError: On unterminated tags or unknown style words.  No partial
            output is produced.
    """
    tokens = tokenize(text)
    stack = ActiveStyleStack(theme)
    threshold = width if dense_threshold is None else dense_threshold
    builder = _LineBuilder(width, threshold, stack)

    for unit in _segment(tokens):
        if isinstance(unit, _Newline):
            builder.end_physical_line()
        elif isinstance(unit, _Space):
            builder.add_space(unit)
        else:
            builder.add_word(unit)

    lines = builder.finish()
    logger.debug("Reshaped %d chars to %d lines at width %d", len(text), len(lines), width)
    return "\n".join(lines)
