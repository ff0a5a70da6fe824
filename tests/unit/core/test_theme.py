"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
import vltsync.core.theme as theme_module
from rich.theme import Theme
from vltsync.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
    reload_theme,
)


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.header == "#69B9A1"
        assert colors.mode_fs2jcr == "#0e8ac8"

    def test_valid_short_hex(self) -> None:
        """ThemeColors accepts #RGB codes."""
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(written="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(skipped="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nwritten = "#aabbcc"\n')

        assert _load_toml_colors(theme_file) == {"text": "#000000", "written": "#aabbcc"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) is None

    def test_ignores_non_string_values(self, tmp_path: Path) -> None:
        """Non-string color values are dropped."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = 1\nmuted = "#111111"\n')

        assert _load_toml_colors(theme_file) == {"muted": "#111111"}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_loads_bundled_theme(self) -> None:
        """Loads theme from bundled data file."""
        colors = load_theme()

        assert colors.header == "#69B9A1"
        assert colors.mode_jcr2fs == "#d44ebc"

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides bundled theme values."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nmode_fs2jcr = "#ff0000"\n')

        with patch("vltsync.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.mode_fs2jcr == "#ff0000"
        assert colors.mode_jcr2fs == "#d44ebc"

    def test_invalid_user_color_falls_back_to_defaults(self, tmp_path: Path) -> None:
        """An invalid override falls back to the built-in defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        with patch("vltsync.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_includes_styles(self) -> None:
        """Theme includes the base and domain styles."""
        theme = get_rich_theme(ThemeColors())

        for style in ("text", "error", "written", "skipped", "mode.fs2jcr", "bold_header"):
            assert style in theme.styles


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns cached instance on subsequent calls."""
        theme_module._cached_theme = None

        assert get_theme() is get_theme()

    def test_reload_creates_new_theme(self) -> None:
        """reload_theme replaces the cached instance."""
        theme_module._cached_theme = None

        original = get_theme()
        reloaded = reload_theme()

        assert isinstance(reloaded, Theme)
        assert reloaded is not original
        assert get_theme() is reloaded
