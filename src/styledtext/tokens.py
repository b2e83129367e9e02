"""Combined markup + ANSI tokenizer.

A single left-to-right scan splits text into literal runs and style tokens.
Markup tags and SGR sequences may be freely interleaved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from styledtext.ansi import is_open_code, parse_sgr
from styledtext.markup import TAG_PATTERN, check_markup, split_style_words

# Group 1: SGR sequence; groups 2-3: markup tag.
_TOKEN_RE = re.compile(rf"(\x1b\[[0-9;]*m)|{TAG_PATTERN}")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class MarkupOpen:
    tag: str
    words: tuple[str, ...]


@dataclass(frozen=True)
class MarkupClose:
    tag: str
    words: tuple[str, ...]


@dataclass(frozen=True)
class AnsiOpen:
    code: str
    close_code: str


@dataclass(frozen=True)
class AnsiClose:
    code: str


Token = Literal | MarkupOpen | MarkupClose | AnsiOpen | AnsiClose
StyleToken = MarkupOpen | MarkupClose | AnsiOpen | AnsiClose


def _ansi_token(code: str) -> AnsiOpen | AnsiClose:
    if is_open_code(code):
        closes = [e.close_code for e in parse_sgr(code) if e.kind == "open"]
        return AnsiOpen(code, "".join(closes))
    return AnsiClose(code)


def tokenize(text: str) -> list[Token]:
    """Split *text* into literal and style tokens.

    Raises:
        MarkupError: If *text* contains an unterminated tag.
    """
    check_markup(text)

    tokens: list[Token] = []
    pos = 0
    for m in _TOKEN_RE.finditer(text):
        if m.start() > pos:
            tokens.append(Literal(text[pos : m.start()]))
        if m.group(1) is not None:
            tokens.append(_ansi_token(m.group(1)))
        else:
            body = m.group(3)
            words = tuple(split_style_words(body))
            if m.group(2):
                tokens.append(MarkupClose(m.group(0), words))
            else:
                tokens.append(MarkupOpen(m.group(0), words))
        pos = m.end()

    if pos < len(text):
        tokens.append(Literal(text[pos:]))
    return tokens
