"""Theme state manager.

Holds the current preference, persists it through the key-value store on
every change and applies the derived style to a render context.
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from ..config import THEME_KEY
from ..errors import StorageError
from ..storage import KeyValueStore
from .models import FontFamily, FontSize, ThemeColor, ThemePreference, UIStyle
from .style import DocumentRoot, RenderContext, ThemeStyle, derive_theme_style

logger = logging.getLogger(__name__)


class ThemeManager:
    """Owns the theme preference and its side effects.

    Example:
        themes = ThemeManager(store)
        themes.set_color_theme("neon")
        themes.style.is_dark  # True
    """

    def __init__(
        self,
        store: KeyValueStore,
        render: RenderContext | None = None,
        key: str = THEME_KEY,
    ):
        self._store = store
        self._render = render if render is not None else DocumentRoot()
        self._key = key
        self._listeners: list[Callable[[ThemeStyle], None]] = []
        self._preference = self._load()
        self._style = derive_theme_style(self._preference)
        self._render.apply(self._style)

    def _load(self) -> ThemePreference:
        data = self._store.get_json(self._key)
        if data is None:
            return ThemePreference()
        try:
            return ThemePreference.model_validate(data)
        except ValidationError:
            logger.warning("Stored theme preference is invalid, using defaults")
            return ThemePreference()

    @property
    def preference(self) -> ThemePreference:
        return self._preference

    @property
    def style(self) -> ThemeStyle:
        return self._style

    @property
    def render(self) -> RenderContext:
        return self._render

    def subscribe(self, listener: Callable[[ThemeStyle], None]) -> None:
        """Register a callback invoked with the new style after each change."""
        self._listeners.append(listener)

    def _update(self, **changes) -> ThemePreference:
        preference = self._preference.model_copy(update=changes)
        self._preference = preference
        self._style = derive_theme_style(preference)
        self._render.apply(self._style)
        try:
            self._store.set_json(self._key, preference.model_dump(mode="json"))
        except StorageError as e:
            logger.error("Could not save theme preference: %s", e)
        for listener in self._listeners:
            listener(self._style)
        return preference

    def toggle_dark_mode(self) -> ThemePreference:
        return self._update(is_dark_mode=not self._preference.is_dark_mode)

    def set_color_theme(self, color: ThemeColor | str) -> ThemePreference:
        return self._update(color_theme=ThemeColor(color))

    def set_font_family(self, font: FontFamily | str) -> ThemePreference:
        return self._update(font_family=FontFamily(font))

    def set_font_size(self, size: FontSize | str) -> ThemePreference:
        return self._update(font_size=FontSize(size))

    def set_ui_style(self, style: UIStyle | str) -> ThemePreference:
        return self._update(ui_style=UIStyle(style))

    def reset(self) -> ThemePreference:
        """Restore the default preference."""
        return self._update(**ThemePreference().model_dump())
