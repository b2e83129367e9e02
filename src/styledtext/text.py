"""Small string helpers: range replacement, whitespace normalization, lines."""

from __future__ import annotations

import re

_SPACED_COMMA_RE = re.compile(r"\s*,\s*")
_SPACED_PARENS_RE = re.compile(r"\(\s+|\s+\)")


def replace_text(text: str, start: int, stop: int, replacement: str) -> str:
    """Replace the half-open index range ``[start, stop)`` of *text*.

    A single-character *replacement* is repeated to fill the range exactly::

        >>> replace_text("abcdefg", 0, 3, ",")
        ',,,defg'
        >>> replace_text("abcdefg", 0, 3, "xy")
        'xydefg'
    """
    if len(replacement) == 1:
        replacement = replacement * (stop - start)
    return text[:start] + replacement + text[stop:]


def nospaces(text: str) -> str:
    """Remove every space from *text*."""
    return text.replace(" ", "")


def unspace_commas(text: str) -> str:
    """Remove whitespace around commas: ``"a, 2, 3"`` -> ``"a,2,3"``."""
    return _SPACED_COMMA_RE.sub(",", text)


def unspace_parens(text: str) -> str:
    """Remove whitespace just inside parentheses: ``"( 1,2 )"`` -> ``"(1,2)"``."""
    return _SPACED_PARENS_RE.sub(lambda m: m.group(0).strip(), text)


def remove_brackets(text: str) -> str:
    """Remove round brackets, keeping their content."""
    return text.replace("(", "").replace(")", "")


def chars(text: str) -> list[str]:
    return list(text)


def split_lines(text: str) -> list[str]:
    return text.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)
