"""Derivation of style variables from a theme preference.

This module hides how a preference record becomes concrete styling:
- CSS-style variable assignments (colours, font family)
- Style-class flags (dark, ui-<style>)
- Root font size scaling

derive_theme_style() is pure. RenderContext implementations own the shared
render target that a derived style is written to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .models import FontSize, ThemeColor, ThemePreference, UIStyle
from .presets import (
    DARK_BACKGROUND,
    DARK_SURFACE,
    DARK_TEXT,
    LIGHT_TEXT,
    NEON_BACKGROUND,
    NEON_SURFACE,
    NEON_TEXT,
    THEME_PRESETS,
)

FONT_SIZE_SCALE = {
    FontSize.NORMAL: "16px",
    FontSize.LARGE: "18px",
    FontSize.XLARGE: "20px",
}

DARK_CLASS = "dark"
UI_STYLE_CLASSES = frozenset(f"ui-{style.value}" for style in UIStyle)


@dataclass(frozen=True)
class ThemeStyle:
    """Concrete styling derived from a ThemePreference."""

    variables: dict[str, str]
    classes: frozenset[str]
    root_font_size: str

    @property
    def is_dark(self) -> bool:
        return DARK_CLASS in self.classes

    def var(self, name: str) -> str:
        """Get a variable by name, with or without the leading dashes."""
        key = name if name.startswith("--") else f"--{name}"
        return self.variables[key]


def derive_theme_style(preference: ThemePreference) -> ThemeStyle:
    """Derive style variables and classes from a preference.

    The neon palette forces the dark rendering path regardless of the
    stored dark-mode flag.

    Args:
        preference: Theme preference record

    Returns:
        ThemeStyle with variables, classes and root font size
    """
    palette = THEME_PRESETS[preference.color_theme]
    variables = {
        "--color-primary": palette.primary,
        "--color-secondary": palette.secondary,
    }
    classes = set()

    if preference.color_theme == ThemeColor.NEON:
        variables["--color-background"] = NEON_BACKGROUND
        variables["--color-surface"] = NEON_SURFACE
        variables["--color-text"] = NEON_TEXT
        classes.add(DARK_CLASS)
    elif preference.is_dark_mode:
        variables["--color-background"] = DARK_BACKGROUND
        variables["--color-surface"] = DARK_SURFACE
        variables["--color-text"] = DARK_TEXT
        classes.add(DARK_CLASS)
    else:
        variables["--color-background"] = palette.background
        variables["--color-surface"] = palette.surface
        variables["--color-text"] = LIGHT_TEXT

    variables["--font-family"] = preference.font_family.value
    classes.add(f"ui-{preference.ui_style.value}")

    return ThemeStyle(
        variables=variables,
        classes=frozenset(classes),
        root_font_size=FONT_SIZE_SCALE[preference.font_size],
    )


class RenderContext(ABC):
    """Shared render target that derived styles are written to."""

    @abstractmethod
    def apply(self, style: ThemeStyle) -> None:
        """Write a derived style to the render target."""


@dataclass
class DocumentRoot(RenderContext):
    """In-process render target mirroring a document root element.

    Holds style variables, a class list and the root font size. Classes it
    owns (dark, ui-*) are replaced on every apply; other classes are kept.
    """

    variables: dict[str, str] = field(default_factory=dict)
    classes: set[str] = field(default_factory=set)
    font_size: str | None = None

    def apply(self, style: ThemeStyle) -> None:
        self.variables.update(style.variables)
        self.classes -= UI_STYLE_CLASSES | {DARK_CLASS}
        self.classes |= style.classes
        self.font_size = style.root_font_size

    def snapshot(self) -> tuple[dict[str, str], frozenset[str], str | None]:
        """Return the current state as comparable values."""
        return dict(self.variables), frozenset(self.classes), self.font_size
