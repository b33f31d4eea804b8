"""Textual theme adapter.

Maps a derived ThemeStyle onto a Textual Theme so the TUI follows the
stored preference. Font family and size have no terminal equivalent and
are ignored here; the ui-<style> class is applied to the screen instead.
"""

from textual.theme import Theme

from ..theme import ThemeStyle
from ..theme.style import UI_STYLE_CLASSES

SUCCESS = "#10b981"
WARNING = "#f97316"
ERROR = "#ef4444"


def theme_name(style: ThemeStyle) -> str:
    """Stable Textual theme name for a derived style."""
    primary = style.var("color-primary").lstrip("#")
    mode = "dark" if style.is_dark else "light"
    return f"thinkmate-{primary}-{mode}"


def ui_style_class(style: ThemeStyle) -> str:
    return next(iter(style.classes & UI_STYLE_CLASSES), "ui-standard")


def to_textual_theme(style: ThemeStyle) -> Theme:
    """Build a Textual Theme from a derived style."""
    return Theme(
        name=theme_name(style),
        primary=style.var("color-primary"),
        secondary=style.var("color-secondary"),
        accent=style.var("color-secondary"),
        foreground=style.var("color-text"),
        background=style.var("color-background"),
        surface=style.var("color-surface"),
        panel=style.var("color-surface"),
        success=SUCCESS,
        warning=WARNING,
        error=ERROR,
        dark=style.is_dark,
        variables={"footer-key-foreground": style.var("color-primary")},
    )
