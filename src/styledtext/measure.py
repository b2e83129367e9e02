"""Visible width measurement.

Markup tags and SGR sequences are invisible and count zero columns.  Every
remaining code point counts 0 (control, combining, zero-width), 2 (wide East
Asian) or 1 column.
"""

from __future__ import annotations

import grapheme
import wcwidth as _wcwidth

from styledtext.ansi import remove_ansi
from styledtext.markup import remove_markup, strip_tags


def char_width(ch: str) -> int:
    """Return the column width of the single code point *ch*."""
    cp = ord(ch)
    # Control characters
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    return max(_wcwidth.wcwidth(ch), 0)


def textwidth(text: str) -> int:
    """Sum of :func:`char_width` over *text* once markup and ANSI are removed."""
    if not text:
        return 0
    stripped = remove_ansi(strip_tags(text))
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(char_width(ch) for ch in stripped)


# Alias kept for callers measuring text they already cleaned.
textlen = textwidth


def graphemes(text: str) -> list[str]:
    """Split *text* into grapheme clusters."""
    return list(grapheme.graphemes(text))


def cleantext(text: str) -> str:
    """Remove markup and ANSI sequences from *text*."""
    return remove_ansi(remove_markup(text))


def fillin(text: str, width: int | None = None) -> str:
    """Right-pad every line of *text* with spaces to a common visible width.

    The target is *width* or, when omitted, the widest line.  Lines already
    wider than the target are left unchanged.
    """
    lines = text.split("\n")
    target = width if width is not None else max(textwidth(line) for line in lines)
    return "\n".join(line + " " * max(target - textwidth(line), 0) for line in lines)
