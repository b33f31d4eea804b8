"""Theme preferences and style derivation."""

from .manager import ThemeManager
from .models import FontFamily, FontSize, ThemeColor, ThemePreference, UIStyle
from .presets import THEME_PRESETS, Palette
from .style import DocumentRoot, RenderContext, ThemeStyle, derive_theme_style

__all__ = [
    "DocumentRoot",
    "FontFamily",
    "FontSize",
    "Palette",
    "RenderContext",
    "THEME_PRESETS",
    "ThemeColor",
    "ThemeManager",
    "ThemePreference",
    "ThemeStyle",
    "UIStyle",
    "derive_theme_style",
]
