"""Theme configuration: thematic roles -> markup style strings.

A theme is an explicit value.  Callers build one at startup (usually with
:func:`load_theme`) and pass it to :func:`styledtext.style.apply_style` or
:func:`styledtext.reshape.reshape_text`; role names can then be used as tag
words, e.g. ``{emphasis}note{/emphasis}``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

THEME_ENV_VAR = "STYLEDTEXT_THEME"


@dataclass(frozen=True)
class Theme:
    """Styles for thematic roles, each a space separated list of style words."""

    text: str = "default"
    emphasis: str = "blue bold"
    emphasis_light: str = "yellow"
    code: str = "cornflower_blue italic"
    string: str = "#64b565"
    number: str = "#90CAF9"
    info: str = "#7cb0cf"
    warning: str = "#d8d877"
    error: str = "bold #d73a3a"
    debug: str = "#197fcf"
    link: str = "underline light_sky_blue3"

    @classmethod
    def roles(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Theme:
        """Build a theme from *data*, starting from the defaults.

        Raises:
            ValueError: If *data* names an unknown role or a non-string style.
        """
        known = set(cls.roles())
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown theme roles: {', '.join(unknown)}")
        for role, style in data.items():
            if not isinstance(style, str):
                raise ValueError(f"Style for role {role!r} must be a string")
        return replace(cls(), **data)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def style_for(self, role: str) -> str | None:
        """Return the style string for *role*, or ``None`` if it is not a role."""
        if role not in self.roles():
            return None
        return getattr(self, role)


DEFAULT_THEME = Theme()


def load_theme(path: str | Path | None = None) -> Theme:
    """Load a theme from a JSON file.

    Without *path*, ``$STYLEDTEXT_THEME`` is consulted; if neither is set the
    default theme is returned.

    Raises:
        ValueError: If the file is not a JSON object of role -> style.
        OSError: If the file cannot be read.
    """
    if path is None:
        env_path = os.environ.get(THEME_ENV_VAR)
        if not env_path:
            return DEFAULT_THEME
        path = env_path

    theme_path = Path(path)
    try:
        data = json.loads(theme_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid theme file {theme_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Theme file {theme_path} must contain a JSON object")

    logger.debug("Loaded theme from %s (%d roles)", theme_path, len(data))
    return Theme.from_dict(data)
