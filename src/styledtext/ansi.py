"""ANSI SGR tokenizer: detection, stripping and classification of escape codes.

Only CSI SGR sequences (``ESC[`` digits/semicolons ``m``) are understood.
Compound parameter lists such as ``\\x1b[38;2;51;128;153m`` are always kept
together as a single code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

RESET = "\x1b[0m"

# CSI SGR sequences: ESC[ <params> m
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


# ---------------------------------------------------------------------------
# Detection / stripping
# ---------------------------------------------------------------------------


def has_ansi(text: str) -> bool:
    """Return ``True`` if *text* contains at least one SGR sequence."""
    return _ANSI_RE.search(text) is not None


def remove_ansi(text: str) -> str:
    """Remove every SGR sequence from *text*, leaving all other bytes.

    A sequence split in two by an inner one is removed as well.
    """
    while True:
        stripped = _ANSI_RE.sub("", text)
        if stripped == text:
            return stripped
        text = stripped


def get_ansi_codes(text: str) -> list[str]:
    """Return every SGR sequence in *text*, in source order."""
    return _ANSI_RE.findall(text)


def get_last_ansi_code(text: str) -> str:
    """Return the final SGR sequence in *text*, or ``""`` if there is none."""
    codes = get_ansi_codes(text)
    return codes[-1] if codes else ""


def replace_ansi(text: str, filler: str = "¦") -> str:
    """Replace each SGR sequence with *filler* repeated to the sequence length.

    Keeps string offsets stable, which makes escape positions visible when
    debugging reshaped output.
    """
    return _ANSI_RE.sub(lambda m: filler * len(m.group(0)), text)


# ---------------------------------------------------------------------------
# SGR classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SgrEffect:
    """One effect of an SGR parameter group.

    ``kind`` is ``"open"`` (a style dimension switched on), ``"close"`` (a
    dimension switched off) or ``"reset"`` (everything off).  For opens,
    ``close_code`` is the sequence that switches the dimension back off.
    """

    kind: str
    dimension: str
    open_code: str = ""
    close_code: str = ""


_ATTRIBUTE_OPENS: dict[int, tuple[str, int]] = {
    1: ("bold", 22),
    2: ("dim", 22),
    3: ("italic", 23),
    4: ("underline", 24),
    5: ("blink", 25),
    7: ("inverse", 27),
    8: ("hidden", 28),
    9: ("strike", 29),
}

_CLOSES: dict[int, str] = {
    22: "intensity",
    23: "italic",
    24: "underline",
    25: "blink",
    27: "inverse",
    28: "hidden",
    29: "strike",
    39: "fg",
    49: "bg",
}


def sgr(*params: int | str) -> str:
    """Build an SGR sequence from *params*, e.g. ``sgr(38, 5, 28)``."""
    return f"\x1b[{';'.join(str(p) for p in params)}m"


def parse_sgr(code: str) -> list[SgrEffect]:
    """Classify the parameters of an SGR sequence like ``\\x1b[1;31m``.

    Extended colors (``38;5;N``, ``38;2;R;G;B`` and their ``48`` background
    forms) are consumed as one group.  Parameters that do not set or unset a
    tracked style (e.g. ``53`` overline) produce no effect.
    """
    if not code.startswith("\x1b[") or not code.endswith("m"):
        return []

    params_str = code[2:-1]
    if not params_str:
        # ESC[m is equivalent to reset
        return [SgrEffect("reset", "all", close_code=RESET)]

    params = params_str.split(";")
    effects: list[SgrEffect] = []
    i = 0
    while i < len(params):
        p = params[i]
        val = int(p) if p else 0

        if val == 0:
            effects.append(SgrEffect("reset", "all", close_code=RESET))
        elif val in _ATTRIBUTE_OPENS:
            dimension, close = _ATTRIBUTE_OPENS[val]
            effects.append(SgrEffect("open", dimension, sgr(val), sgr(close)))
        elif val in _CLOSES:
            effects.append(SgrEffect("close", _CLOSES[val], close_code=sgr(val)))
        elif 30 <= val <= 37 or 90 <= val <= 97:
            effects.append(SgrEffect("open", "fg", sgr(val), sgr(39)))
        elif 40 <= val <= 47 or 100 <= val <= 107:
            effects.append(SgrEffect("open", "bg", sgr(val), sgr(49)))
        elif val in (38, 48):
            dimension = "fg" if val == 38 else "bg"
            close = sgr(val + 1)
            mode = int(params[i + 1]) if i + 1 < len(params) and params[i + 1] else 0
            if mode == 5 and i + 2 < len(params):
                # 256-color: 38;5;N
                effects.append(
                    SgrEffect("open", dimension, sgr(val, 5, params[i + 2]), close)
                )
                i += 2
            elif mode == 2 and i + 4 < len(params):
                # RGB: 38;2;R;G;B
                rgb = params[i + 2 : i + 5]
                effects.append(SgrEffect("open", dimension, sgr(val, 2, *rgb), close))
                i += 4
            else:
                i += 1

        i += 1

    return effects


def is_open_code(code: str) -> bool:
    """Return ``True`` if *code* switches on at least one style dimension."""
    return any(effect.kind == "open" for effect in parse_sgr(code))
