"""Color resolver: color spec strings -> SGR open/close pairs.

Three color representations form a tagged union:

* :class:`NamedColor` -- the 8 basic terminal colors plus ``default``
  (``ESC[3Nm`` / ``ESC[4Nm``)
* :class:`BitColor` -- an xterm-256 palette entry, by name or index
  (``ESC[38;5;Nm`` / ``ESC[48;5;Nm``)
* :class:`RGBColor` -- 24-bit truecolor (``ESC[38;2;R;G;Bm``)

Accepted specs: basic and xterm-256 names (``red``, ``green4``,
``bright_blue``), palette indices (``"123"``), hex (``#rgb`` / ``#rrggbb``)
and tuples of ints 0-255 or floats 0-1 (``(.2,.5,.6)``).  A leading ``on_``
selects the background.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from styledtext.ansi import sgr
from styledtext.text import nospaces

# Basic 16-color codes: foreground is 30 + n, background 40 + n.
NAMED_COLORS: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}

# xterm-256 palette names.
XTERM_COLORS: dict[str, int] = {
    "bright_black": 8,
    "bright_red": 9,
    "bright_green": 10,
    "bright_yellow": 11,
    "bright_blue": 12,
    "bright_magenta": 13,
    "bright_cyan": 14,
    "bright_white": 15,
    "grey0": 16,
    "navy_blue": 17,
    "dark_blue": 18,
    "blue3": 20,
    "blue1": 21,
    "dark_green": 22,
    "deep_sky_blue4": 25,
    "dodger_blue3": 26,
    "dodger_blue2": 27,
    "green4": 28,
    "spring_green4": 29,
    "turquoise4": 30,
    "deep_sky_blue3": 32,
    "dodger_blue1": 33,
    "dark_cyan": 36,
    "light_sea_green": 37,
    "deep_sky_blue2": 38,
    "deep_sky_blue1": 39,
    "green3": 40,
    "spring_green3": 41,
    "cyan3": 43,
    "dark_turquoise": 44,
    "turquoise2": 45,
    "green1": 46,
    "spring_green2": 47,
    "spring_green1": 48,
    "medium_spring_green": 49,
    "cyan2": 50,
    "cyan1": 51,
    "purple4": 55,
    "purple3": 56,
    "blue_violet": 57,
    "grey37": 59,
    "medium_purple4": 60,
    "slate_blue3": 62,
    "royal_blue1": 63,
    "chartreuse4": 64,
    "pale_turquoise4": 66,
    "steel_blue": 67,
    "steel_blue3": 68,
    "cornflower_blue": 69,
    "dark_sea_green4": 71,
    "cadet_blue": 73,
    "sky_blue3": 74,
    "chartreuse3": 76,
    "sea_green3": 78,
    "aquamarine3": 79,
    "medium_turquoise": 80,
    "steel_blue1": 81,
    "sea_green2": 83,
    "sea_green1": 85,
    "dark_slate_gray2": 87,
    "dark_red": 88,
    "dark_magenta": 91,
    "orange4": 94,
    "light_pink4": 95,
    "plum4": 96,
    "medium_purple3": 98,
    "slate_blue1": 99,
    "wheat4": 101,
    "grey53": 102,
    "light_slate_grey": 103,
    "medium_purple": 104,
    "light_slate_blue": 105,
    "yellow4": 106,
    "dark_sea_green": 108,
    "light_sky_blue3": 110,
    "sky_blue2": 111,
    "chartreuse2": 112,
    "pale_green3": 114,
    "dark_slate_gray3": 116,
    "sky_blue1": 117,
    "chartreuse1": 118,
    "light_green": 120,
    "aquamarine1": 122,
    "dark_slate_gray1": 123,
    "deep_pink4": 125,
    "medium_violet_red": 126,
    "dark_violet": 128,
    "purple": 129,
    "medium_orchid3": 133,
    "medium_orchid": 134,
    "dark_goldenrod": 136,
    "rosy_brown": 138,
    "grey63": 139,
    "medium_purple2": 140,
    "medium_purple1": 141,
    "dark_khaki": 143,
    "navajo_white3": 144,
    "grey69": 145,
    "light_steel_blue3": 146,
    "light_steel_blue": 147,
    "dark_olive_green3": 149,
    "dark_sea_green3": 150,
    "light_cyan3": 152,
    "light_sky_blue1": 153,
    "green_yellow": 154,
    "dark_olive_green2": 155,
    "pale_green1": 156,
    "dark_sea_green2": 157,
    "pale_turquoise1": 159,
    "red3": 160,
    "deep_pink3": 162,
    "magenta3": 164,
    "dark_orange3": 166,
    "indian_red": 167,
    "hot_pink3": 168,
    "hot_pink2": 169,
    "orchid": 170,
    "orange3": 172,
    "light_salmon3": 173,
    "light_pink3": 174,
    "pink3": 175,
    "plum3": 176,
    "violet": 177,
    "gold3": 178,
    "light_goldenrod3": 179,
    "tan": 180,
    "misty_rose3": 181,
    "thistle3": 182,
    "plum2": 183,
    "yellow3": 184,
    "khaki3": 185,
    "light_yellow3": 187,
    "grey84": 188,
    "light_steel_blue1": 189,
    "yellow2": 190,
    "dark_olive_green1": 192,
    "dark_sea_green1": 193,
    "honeydew2": 194,
    "light_cyan1": 195,
    "red1": 196,
    "deep_pink2": 197,
    "deep_pink1": 199,
    "magenta2": 200,
    "magenta1": 201,
    "orange_red1": 202,
    "indian_red1": 204,
    "hot_pink": 206,
    "medium_orchid1": 207,
    "dark_orange": 208,
    "salmon1": 209,
    "light_coral": 210,
    "pale_violet_red1": 211,
    "orchid2": 212,
    "orchid1": 213,
    "orange1": 214,
    "sandy_brown": 215,
    "light_salmon1": 216,
    "light_pink1": 217,
    "pink1": 218,
    "plum1": 219,
    "gold1": 220,
    "light_goldenrod2": 222,
    "navajo_white1": 223,
    "misty_rose1": 224,
    "thistle1": 225,
    "yellow1": 226,
    "light_goldenrod1": 227,
    "khaki1": 228,
    "wheat1": 229,
    "cornsilk1": 230,
    "grey100": 231,
    "grey3": 232,
    "grey7": 233,
    "grey11": 234,
    "grey15": 235,
    "grey19": 236,
    "grey23": 237,
    "grey27": 238,
    "grey30": 239,
    "grey35": 240,
    "grey39": 241,
    "grey42": 242,
    "grey46": 243,
    "grey50": 244,
    "grey54": 245,
    "grey58": 246,
    "grey62": 247,
    "grey66": 248,
    "grey70": 249,
    "grey74": 250,
    "grey78": 251,
    "grey82": 252,
    "grey85": 253,
    "grey89": 254,
    "grey93": 255,
}

# American spellings of the grey scale.
XTERM_COLORS.update(
    {name.replace("grey", "gray"): n for name, n in list(XTERM_COLORS.items()) if "grey" in name}
)

_RGB_RE = re.compile(r"^\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*\)$")
_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")

FG_CLOSE = sgr(39)
BG_CLOSE = sgr(49)


# ---------------------------------------------------------------------------
# Color variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamedColor:
    name: str


@dataclass(frozen=True)
class BitColor:
    index: int


@dataclass(frozen=True)
class RGBColor:
    r: int
    g: int
    b: int


Color = NamedColor | BitColor | RGBColor


def color_codes(color: Color, bg: bool = False) -> tuple[str, str]:
    """Return the ``(open, close)`` SGR pair for *color*."""
    if isinstance(color, NamedColor):
        base = 40 if bg else 30
        return (sgr(base + NAMED_COLORS[color.name]), BG_CLOSE if bg else FG_CLOSE)
    if isinstance(color, BitColor):
        return (sgr(48 if bg else 38, 5, color.index), BG_CLOSE if bg else FG_CLOSE)
    return (
        sgr(48 if bg else 38, 2, color.r, color.g, color.b),
        BG_CLOSE if bg else FG_CLOSE,
    )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _is_index(spec: str) -> bool:
    return spec.isdigit() and 0 <= int(spec) <= 255


def is_named_color(spec: str) -> bool:
    return spec in NAMED_COLORS or spec in XTERM_COLORS


def is_rgb_color(spec: str) -> bool:
    return _RGB_RE.match(spec) is not None


def is_hex_color(spec: str) -> bool:
    return _HEX_RE.match(spec) is not None


def is_color(spec: str) -> bool:
    """Return ``True`` if *spec* is a foreground color of any kind."""
    return (
        is_named_color(spec) or _is_index(spec) or is_rgb_color(spec) or is_hex_color(spec)
    )


def is_background(spec: str) -> bool:
    """Return ``True`` if *spec* is an ``on_`` prefixed color."""
    stripped = nospaces(spec)
    return stripped.startswith("on_") and is_color(stripped[3:])


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _rgb_from_tuple(spec: str) -> RGBColor:
    m = _RGB_RE.match(spec)
    if m is None:
        raise ValueError(f"Invalid RGB color: {spec!r}")
    parts = m.groups()
    try:
        if any("." in p for p in parts):
            values = [round(float(p) * 255) for p in parts]
        else:
            values = [int(p) for p in parts]
    except ValueError:
        raise ValueError(f"Invalid RGB color: {spec!r}") from None
    if any(v < 0 or v > 255 for v in values):
        raise ValueError(f"RGB components out of range in {spec!r}")
    return RGBColor(*values)


def _rgb_from_hex(spec: str) -> RGBColor:
    digits = spec[1:]
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)
    value = int(digits, 16)
    return RGBColor((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def get_color(spec: str, bg: bool = False) -> Color:
    """Parse a color *spec* into a :data:`Color`.

    With *bg*, *spec* must carry the ``on_`` prefix, which is removed.

    Raises:
        ValueError: If *spec* is not a recognised color.
    """
    spec = nospaces(spec)
    if bg:
        if not spec.startswith("on_"):
            raise ValueError(f"Background color must start with 'on_': {spec!r}")
        spec = spec[3:]

    if spec in NAMED_COLORS:
        return NamedColor(spec)
    if spec in XTERM_COLORS:
        return BitColor(XTERM_COLORS[spec])
    if _is_index(spec):
        return BitColor(int(spec))
    if is_rgb_color(spec):
        return _rgb_from_tuple(spec)
    if is_hex_color(spec):
        return _rgb_from_hex(spec)
    raise ValueError(f"Unknown color: {spec!r}")


def resolve_color(spec: str, background: bool = False) -> tuple[str, str]:
    """Resolve a color *spec* straight to its ``(open, close)`` SGR pair."""
    return color_codes(get_color(spec, bg=background), bg=background)
