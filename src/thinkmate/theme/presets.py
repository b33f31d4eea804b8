"""Colour palette presets.

Each palette defines the accent colours and the light-mode background and
surface. Dark mode and the neon palette override background and surface.
"""

from dataclasses import dataclass

from .models import ThemeColor


@dataclass(frozen=True)
class Palette:
    primary: str
    secondary: str
    surface: str
    background: str


THEME_PRESETS: dict[ThemeColor, Palette] = {
    ThemeColor.BLUE: Palette(primary="#3b82f6", secondary="#60a5fa", surface="#ffffff", background="#f3f4f6"),
    ThemeColor.PURPLE: Palette(primary="#8b5cf6", secondary="#a78bfa", surface="#ffffff", background="#f5f3ff"),
    ThemeColor.GREEN: Palette(primary="#10b981", secondary="#34d399", surface="#ffffff", background="#ecfdf5"),
    ThemeColor.ORANGE: Palette(primary="#f97316", secondary="#fb923c", surface="#ffffff", background="#fff7ed"),
    ThemeColor.PINK: Palette(primary="#ec4899", secondary="#f472b6", surface="#ffffff", background="#fdf2f8"),
    ThemeColor.NEON: Palette(primary="#00ff9d", secondary="#00ccff", surface="#111827", background="#000000"),
    ThemeColor.PASTEL: Palette(primary="#fda4af", secondary="#f0abfc", surface="#fff1f2", background="#fff"),
}

# Background/surface/text for the dark rendering path
DARK_BACKGROUND = "#111827"
DARK_SURFACE = "#1f2937"
DARK_TEXT = "#f9fafb"

# The neon palette always renders dark with its own background
NEON_BACKGROUND = "#000000"
NEON_SURFACE = "#111827"
NEON_TEXT = "#e5e7eb"

LIGHT_TEXT = "#1f2937"
