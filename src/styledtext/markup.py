"""Bracket markup tokenizer.

Tags look like ``{bold red}`` (open) and ``{/bold red}`` (close).  A tag
body holds one or more whitespace separated style words.  Literal braces are
written doubled (``{{`` / ``}}``) and are never treated as tags; they are
left exactly as written by :func:`remove_markup`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from styledtext.text import unspace_commas, unspace_parens

_TAG_START = r"[a-zA-Z0-9_.,()#]"
_TAG_CHARS = r"[a-zA-Z0-9_ .,()#]"

# A single, non-doubled brace followed by an optional "/" and a tag body.
TAG_PATTERN = rf"(?<!\{{)\{{(/?)({_TAG_START}{_TAG_CHARS}*)\}}"
_TAG_RE = re.compile(TAG_PATTERN)

# A tag that starts but reaches another brace or the end of text unclosed.
_UNTERMINATED_RE = re.compile(rf"(?<!\{{)\{{/?{_TAG_START}{_TAG_CHARS}*(?=\{{|$)")


class MarkupError(ValueError):
    """Malformed markup: an unterminated tag or an unknown style word."""

    def __init__(self, message: str, tag: str = "") -> None:
        super().__init__(message)
        self.tag = tag


@dataclass(frozen=True)
class TagMatch:
    """A well-formed tag found in a string."""

    start: int
    end: int
    body: str
    is_close: bool

    @property
    def text(self) -> str:
        return ("{/" if self.is_close else "{") + self.body + "}"


def find_tags(text: str) -> list[TagMatch]:
    """Return every well-formed open and close tag in *text*, in order."""
    return [
        TagMatch(m.start(), m.end(), m.group(2), m.group(1) == "/")
        for m in _TAG_RE.finditer(text)
    ]


def check_markup(text: str) -> None:
    """Raise :class:`MarkupError` if *text* contains an unterminated tag."""
    m = _UNTERMINATED_RE.search(text)
    if m is not None:
        raise MarkupError(f"Unterminated markup tag {m.group(0)!r}", tag=m.group(0))


def has_markup(text: str) -> bool:
    """Return ``True`` if *text* holds an open tag closed by a later close tag."""
    opened: set[str] = set()
    for tag in find_tags(text):
        words = split_style_words(tag.body)
        if not tag.is_close:
            opened.update(words)
        elif opened.intersection(words):
            return True
    return False


def remove_markup(text: str) -> str:
    """Strip every well-formed tag, keeping literal text and doubled braces.

    Raises:
        MarkupError: If *text* contains an unterminated tag.
    """
    check_markup(text)
    stripped = strip_tags(text)
    # Stripping can expose a tag start that an inner tag had split.
    check_markup(stripped)
    return stripped


def strip_tags(text: str) -> str:
    """Strip well-formed tags without checking for unterminated ones.

    Repeats until nothing changes, since removing a tag can join the text
    around it into a new one.
    """
    while True:
        stripped = _TAG_RE.sub("", text)
        if stripped == text:
            return stripped
        text = stripped


def split_style_words(body: str) -> list[str]:
    """Split a tag body into style words.

    Whitespace around commas and inside parentheses is removed first so that
    color tuples such as ``(.2, .5, .6)`` stay a single word.
    """
    return unspace_parens(unspace_commas(body.strip())).split()


def escape_brackets(text: str) -> str:
    """Double every brace so *text* is rendered literally."""
    return text.replace("{", "{{").replace("}", "}}")


def unescape_brackets(text: str) -> str:
    """Collapse doubled braces back to single ones."""
    return text.replace("{{", "{").replace("}}", "}")
