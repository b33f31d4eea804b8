"""Data models for theme preferences."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ThemeColor(str, Enum):
    """Colour palette identifiers."""

    BLUE = "blue"
    PURPLE = "purple"
    GREEN = "green"
    ORANGE = "orange"
    PINK = "pink"
    NEON = "neon"
    PASTEL = "pastel"


class FontFamily(str, Enum):
    """Font families offered in settings."""

    INTER = "Inter"
    COMIC_NEUE = "Comic Neue"
    POPPINS = "Poppins"
    MERRIWEATHER = "Merriweather"
    FIRA_CODE = "Fira Code"


class FontSize(str, Enum):
    """Root font size scale."""

    NORMAL = "normal"
    LARGE = "large"
    XLARGE = "xlarge"


class UIStyle(str, Enum):
    """Overall UI treatment."""

    MINIMAL = "minimal"
    GLASS = "glass"
    NEON = "neon"
    STANDARD = "standard"


class ThemePreference(BaseModel):
    """User's stored appearance settings."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    is_dark_mode: bool = Field(default=False, description="Dark mode toggle")
    color_theme: ThemeColor = Field(default=ThemeColor.BLUE, description="Palette id")
    font_family: FontFamily = Field(default=FontFamily.INTER)
    font_size: FontSize = Field(default=FontSize.NORMAL)
    ui_style: UIStyle = Field(default=UIStyle.STANDARD)
