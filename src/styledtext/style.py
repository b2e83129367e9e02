"""Style resolution and active style tracking.

Maps markup style words to SGR open/close pairs and keeps the set of styles
that are active at a given point of a left-to-right scan, so that they can be
closed and re-opened around line breaks.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator

from styledtext.ansi import RESET, parse_sgr, sgr
from styledtext.colors import is_background, is_color, resolve_color
from styledtext.markup import MarkupError
from styledtext.theme import DEFAULT_THEME, Theme
from styledtext.tokens import (
    AnsiClose,
    AnsiOpen,
    Literal,
    MarkupClose,
    MarkupOpen,
    StyleToken,
    tokenize,
)

logger = logging.getLogger(__name__)

# Attribute word -> (open, close)
ATTRIBUTES: dict[str, tuple[str, str]] = {
    "bold": (sgr(1), sgr(22)),
    "dim": (sgr(2), sgr(22)),
    "italic": (sgr(3), sgr(23)),
    "underline": (sgr(4), sgr(24)),
    "blink": (sgr(5), sgr(25)),
    "inverse": (sgr(7), sgr(27)),
    "reverse": (sgr(7), sgr(27)),
    "hidden": (sgr(8), sgr(28)),
    "striked": (sgr(9), sgr(29)),
    "strikethrough": (sgr(9), sgr(29)),
}


class Origin(enum.Enum):
    MARKUP = "markup"
    ANSI = "ansi"


@dataclass(frozen=True)
class StyleEntry:
    """One active style dimension.

    Entries opened by the same word of the same tag share a ``group`` so
    that a close removes all of them together.
    """

    name: str
    open_code: str
    close_code: str
    origin: Origin
    group: int = 0


def _resolve_plain(word: str, tag: str) -> list[tuple[str, str]]:
    if word in ATTRIBUTES:
        return [ATTRIBUTES[word]]
    try:
        if is_background(word):
            return [resolve_color(word, background=True)]
        if is_color(word):
            return [resolve_color(word)]
    except ValueError as e:
        raise MarkupError(f"Invalid color {word!r} in tag {tag!r}: {e}", tag=tag) from e
    raise MarkupError(f"Unknown style {word!r} in tag {tag!r}", tag=tag)


def resolve(word: str, theme: Theme | None = None, tag: str = "") -> list[tuple[str, str]]:
    """Resolve a style word to one or more ``(open, close)`` SGR pairs.

    Theme role names expand to the role's style words (one level deep).

    Raises:
        MarkupError: If *word* is not an attribute, a theme role or a color.
    """
    theme = theme or DEFAULT_THEME
    tag = tag or f"{{{word}}}"
    role_style = theme.style_for(word)
    if role_style is not None:
        pairs: list[tuple[str, str]] = []
        for role_word in role_style.split():
            pairs.extend(_resolve_plain(role_word, tag))
        return pairs
    return _resolve_plain(word, tag)


class ActiveStyleStack:
    """Ordered collection of the currently open styles.

    Order is the order in which styles were opened.  Closing does not need to
    be LIFO: a close removes the matching entries wherever they are, and a
    close with no matching entry is ignored.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        self._theme = theme or DEFAULT_THEME
        self._entries: list[StyleEntry] = []
        self._next_group = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[StyleEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> list[StyleEntry]:
        return list(self._entries)

    # -- mutation ----------------------------------------------------------

    def push(self, entry: StyleEntry) -> None:
        self._entries.append(entry)

    def _take_group(self) -> int:
        self._next_group += 1
        return self._next_group

    def close(self, name: str) -> list[StyleEntry]:
        """Remove the most recently opened markup entries named *name*."""
        for entry in reversed(self._entries):
            if entry.origin is Origin.MARKUP and entry.name == name:
                group = entry.group
                break
        else:
            logger.debug("Ignoring unmatched close for %r", name)
            return []

        removed = [e for e in self._entries if e.name == name and e.group == group]
        self._entries = [e for e in self._entries if e not in removed]
        return removed

    def _remove_matching(self, close_code: str) -> list[StyleEntry]:
        removed = [e for e in self._entries if e.close_code == close_code]
        self._entries = [e for e in self._entries if e.close_code != close_code]
        return removed

    def clear(self) -> None:
        self._entries = []

    # -- token application -------------------------------------------------

    def apply(self, token: StyleToken) -> str:
        """Update the stack from a style token and return the codes to emit.

        Raises:
            MarkupError: If an open tag holds an unknown style word.
            TypeError: If *token* is a literal.
        """
        if isinstance(token, MarkupOpen):
            return self._open_markup(token)
        if isinstance(token, MarkupClose):
            return self._close_markup(token)
        if isinstance(token, (AnsiOpen, AnsiClose)):
            self._apply_ansi(token.code)
            return token.code
        raise TypeError(f"Cannot apply {type(token).__name__} to a style stack")

    def _open_markup(self, token: MarkupOpen) -> str:
        resolved = [(word, resolve(word, self._theme, token.tag)) for word in token.words]
        codes: list[str] = []
        for word, pairs in resolved:
            group = self._take_group()
            for open_code, close_code in pairs:
                self.push(StyleEntry(word, open_code, close_code, Origin.MARKUP, group))
                codes.append(open_code)
        return "".join(codes)

    def _close_markup(self, token: MarkupClose) -> str:
        before = list(self._entries)
        removed: list[StyleEntry] = []
        for word in token.words:
            removed.extend(self.close(word))
        if not removed:
            return ""

        # Close codes in stack order, then restore outer styles whose
        # dimension was switched off by those closes.
        closed = [e for e in before if e in removed]
        closed_codes = {e.close_code for e in closed}
        restore = [e.open_code for e in self._entries if e.close_code in closed_codes]
        return "".join(e.close_code for e in closed) + "".join(restore)

    def _apply_ansi(self, code: str) -> None:
        for effect in parse_sgr(code):
            if effect.kind == "reset":
                self.clear()
            elif effect.kind == "close":
                self._remove_matching(effect.close_code)
            else:
                # A newer raw code for the same dimension supersedes the old one.
                self._entries = [
                    e
                    for e in self._entries
                    if not (e.origin is Origin.ANSI and e.name == effect.dimension)
                ]
                self.push(
                    StyleEntry(effect.dimension, effect.open_code, effect.close_code, Origin.ANSI)
                )

    # -- line break support -------------------------------------------------

    def snapshot(self) -> list[str]:
        """Return the open codes of every active entry, in stack order."""
        return [e.open_code for e in self._entries]

    def reset_sequence(self) -> str:
        """Return the close codes of every active entry without removing them."""
        return "".join(e.close_code for e in self._entries)


def apply_style(text: str, theme: Theme | None = None) -> str:
    """Compile markup in *text* into SGR sequences, without wrapping.

    Styles still open at the end of *text* are closed.

    Raises:
        MarkupError: On unterminated tags or unknown style words.
    """
    stack = ActiveStyleStack(theme)
    out: list[str] = []
    for token in tokenize(text):
        if isinstance(token, Literal):
            out.append(token.text)
        else:
            out.append(stack.apply(token))
    if stack:
        out.append(stack.reset_sequence() + RESET)
    return "".join(out)
