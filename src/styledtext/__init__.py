"""styledtext: markup-to-ANSI compiler and style-preserving text reflow."""

# ANSI tokenizer
from styledtext.ansi import (
    RESET,
    get_ansi_codes,
    get_last_ansi_code,
    has_ansi,
    remove_ansi,
    replace_ansi,
)

# Color resolver
from styledtext.colors import BitColor, Color, NamedColor, RGBColor, get_color, resolve_color

# Bracket markup tokenizer
from styledtext.markup import (
    MarkupError,
    escape_brackets,
    has_markup,
    remove_markup,
    unescape_brackets,
)

# Width measurement
from styledtext.measure import cleantext, fillin, textlen, textwidth

# Reshape engine
from styledtext.reshape import reshape_text

# Style resolution
from styledtext.style import ActiveStyleStack, StyleEntry, apply_style

# Small text helpers
from styledtext.text import (
    chars,
    join_lines,
    nospaces,
    remove_brackets,
    replace_text,
    split_lines,
    unspace_commas,
)

# Theme
from styledtext.theme import DEFAULT_THEME, Theme, load_theme

__all__ = [
    # ANSI
    "RESET",
    "get_ansi_codes",
    "get_last_ansi_code",
    "has_ansi",
    "remove_ansi",
    "replace_ansi",
    # Colors
    "BitColor",
    "Color",
    "NamedColor",
    "RGBColor",
    "get_color",
    "resolve_color",
    # Markup
    "MarkupError",
    "escape_brackets",
    "has_markup",
    "remove_markup",
    "unescape_brackets",
    # Measure
    "cleantext",
    "fillin",
    "textlen",
    "textwidth",
    # Reshape
    "reshape_text",
    # Style
    "ActiveStyleStack",
    "StyleEntry",
    "apply_style",
    # Text
    "chars",
    "join_lines",
    "nospaces",
    "remove_brackets",
    "replace_text",
    "split_lines",
    "unspace_commas",
    # Theme
    "DEFAULT_THEME",
    "Theme",
    "load_theme",
]
