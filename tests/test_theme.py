"""Tests for styledtext.theme -- theme configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from styledtext.theme import DEFAULT_THEME, THEME_ENV_VAR, Theme, load_theme


class TestTheme:
    def test_roles(self) -> None:
        roles = Theme.roles()
        assert "emphasis" in roles
        assert "error" in roles

    def test_style_for_role(self) -> None:
        assert Theme(error="red").style_for("error") == "red"

    def test_style_for_non_role(self) -> None:
        assert DEFAULT_THEME.style_for("bold") is None

    def test_from_dict_overrides_defaults(self) -> None:
        theme = Theme.from_dict({"emphasis": "green"})
        assert theme.emphasis == "green"
        assert theme.error == DEFAULT_THEME.error

    def test_from_dict_unknown_role(self) -> None:
        with pytest.raises(ValueError, match="Unknown theme roles"):
            Theme.from_dict({"shiny": "red"})

    def test_from_dict_non_string_style(self) -> None:
        with pytest.raises(ValueError):
            Theme.from_dict({"error": 3})

    def test_to_dict_round_trip(self) -> None:
        assert Theme.from_dict(DEFAULT_THEME.to_dict()) == DEFAULT_THEME

    def test_theme_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_THEME.error = "red"  # type: ignore[misc]


class TestLoadTheme:
    def test_default_without_path_or_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(THEME_ENV_VAR, raising=False)
        assert load_theme() is DEFAULT_THEME

    def test_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.json"
        path.write_text(json.dumps({"info": "cyan"}))
        assert load_theme(path).info == "cyan"

    def test_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "theme.json"
        path.write_text(json.dumps({"warning": "yellow"}))
        monkeypatch.setenv(THEME_ENV_VAR, str(path))
        assert load_theme().warning == "yellow"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            load_theme(path)

    def test_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_theme(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_theme(tmp_path / "missing.json")
