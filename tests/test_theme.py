"""Unit tests for the theme module."""
import pytest
from conftest import ReadOnlyStore
from hypothesis import given
from hypothesis import strategies as st

from thinkmate.config import THEME_KEY
from thinkmate.theme import (
    THEME_PRESETS,
    DocumentRoot,
    FontFamily,
    FontSize,
    ThemeColor,
    ThemeManager,
    ThemePreference,
    UIStyle,
    derive_theme_style,
)
from thinkmate.theme.presets import DARK_BACKGROUND, NEON_BACKGROUND
from thinkmate.storage import InMemoryStore

preferences = st.builds(
    ThemePreference,
    is_dark_mode=st.booleans(),
    color_theme=st.sampled_from(ThemeColor),
    font_family=st.sampled_from(FontFamily),
    font_size=st.sampled_from(FontSize),
    ui_style=st.sampled_from(UIStyle),
)


class TestDeriveThemeStyle:
    """Tests for the pure style derivation."""

    def test_light_defaults(self):
        """Test the default preference derives the light blue palette."""
        style = derive_theme_style(ThemePreference())

        assert style.var("color-primary") == THEME_PRESETS[ThemeColor.BLUE].primary
        assert style.var("--color-background") == THEME_PRESETS[ThemeColor.BLUE].background
        assert style.var("font-family") == "Inter"
        assert style.classes == frozenset({"ui-standard"})
        assert style.root_font_size == "16px"
        assert not style.is_dark

    def test_dark_mode_uses_dark_surfaces(self):
        """Test dark mode overrides background and surface."""
        style = derive_theme_style(ThemePreference(is_dark_mode=True, color_theme=ThemeColor.GREEN))

        assert style.is_dark
        assert style.var("color-background") == DARK_BACKGROUND
        assert style.var("color-primary") == THEME_PRESETS[ThemeColor.GREEN].primary

    def test_neon_forces_dark(self):
        """Test the neon palette renders dark even with dark mode off."""
        style = derive_theme_style(ThemePreference(is_dark_mode=False, color_theme=ThemeColor.NEON))

        assert style.is_dark
        assert style.var("color-background") == NEON_BACKGROUND

    def test_font_size_scale(self):
        style = derive_theme_style(ThemePreference(font_size=FontSize.XLARGE))
        assert style.root_font_size == "20px"

    @given(preferences)
    def test_derive_and_apply_is_idempotent(self, preference: ThemePreference):
        """Property test: applying the same derived style twice changes nothing."""
        root = DocumentRoot(classes={"app"})
        root.apply(derive_theme_style(preference))
        first = root.snapshot()
        root.apply(derive_theme_style(preference))

        assert root.snapshot() == first
        assert "app" in root.classes

    @given(preferences, preferences)
    def test_apply_replaces_owned_classes(self, before: ThemePreference, after: ThemePreference):
        """Property test: the last applied style fully determines owned classes."""
        root = DocumentRoot()
        root.apply(derive_theme_style(before))
        root.apply(derive_theme_style(after))

        assert root.classes == set(derive_theme_style(after).classes)


class TestThemeManager:
    """Tests for ThemeManager state and persistence."""

    def test_defaults_without_stored_value(self, store):
        manager = ThemeManager(store)
        assert manager.preference == ThemePreference()
        assert "ui-standard" in manager.render.classes

    def test_setters_persist(self, store):
        """Test every change is written through the store."""
        manager = ThemeManager(store)
        manager.set_color_theme("purple")
        manager.set_font_family(FontFamily.FIRA_CODE)
        manager.set_font_size("large")
        manager.set_ui_style("glass")
        manager.toggle_dark_mode()

        stored = store.get_json(THEME_KEY)
        assert stored == {
            "is_dark_mode": True,
            "color_theme": "purple",
            "font_family": "Fira Code",
            "font_size": "large",
            "ui_style": "glass",
        }
        assert ThemeManager(store).preference == manager.preference

    def test_changes_are_applied_to_render_context(self, store):
        root = DocumentRoot()
        manager = ThemeManager(store, render=root)
        manager.set_ui_style(UIStyle.NEON)
        manager.toggle_dark_mode()

        assert {"ui-neon", "dark"} <= root.classes
        assert "ui-standard" not in root.classes

    def test_invalid_stored_value_uses_defaults(self):
        """Test a malformed preference record falls back to defaults."""
        store = InMemoryStore({THEME_KEY: '{"color_theme": "rainbow"}'})
        assert ThemeManager(store).preference == ThemePreference()

    def test_unknown_option_raises(self, store):
        with pytest.raises(ValueError):
            ThemeManager(store).set_color_theme("rainbow")

    def test_listeners_receive_new_style(self, store):
        manager = ThemeManager(store)
        seen = []
        manager.subscribe(seen.append)
        manager.set_color_theme(ThemeColor.NEON)

        assert len(seen) == 1
        assert seen[0].is_dark

    def test_reset_restores_defaults(self, store):
        manager = ThemeManager(store)
        manager.set_color_theme("orange")
        manager.reset()

        assert manager.preference == ThemePreference()
        assert store.get_json(THEME_KEY)["color_theme"] == "blue"

    def test_write_failure_still_applies_change(self):
        """Test a store that cannot be written keeps preference and style in step."""
        root = DocumentRoot()
        manager = ThemeManager(ReadOnlyStore(), render=root)
        seen = []
        manager.subscribe(seen.append)

        preference = manager.set_color_theme("neon")

        assert preference.color_theme == ThemeColor.NEON
        assert manager.preference == preference
        assert manager.style == derive_theme_style(preference)
        assert manager.style.is_dark
        assert "dark" in root.classes
        assert len(seen) == 1
