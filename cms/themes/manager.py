"""
CMS Themes — Theme Manager
============================
Registry of every theme the installation knows about, whatever its
state. Built once at startup by the theme loader.
"""

from __future__ import annotations

from typing import Dict, Tuple

from cms.themes.theme import Theme


REQUIRED_INI_KEYS = ("name",)


class ThemeError(Exception):
    """Base error for theme registry operations."""
    pass


class DuplicateThemeError(ThemeError):
    def __init__(self, theme_id: str):
        self.theme_id = theme_id
        super().__init__(f"Theme '{theme_id}' is already registered.")


class ThemeNotRegisteredError(ThemeError):
    def __init__(self, theme_id: str):
        self.theme_id = theme_id
        super().__init__(f"Theme '{theme_id}' is not registered.")


class ThemeManager:
    def __init__(self):
        self._themes: Dict[str, Theme] = {}

    def register_theme(self, theme_id: str) -> Theme:
        if not theme_id or not isinstance(theme_id, str):
            raise ValueError("theme_id must be a non-empty string.")
        if theme_id in self._themes:
            raise DuplicateThemeError(theme_id)
        theme = Theme(theme_id)
        self._themes[theme_id] = theme
        return theme

    def is_registered(self, theme_id: str) -> bool:
        return theme_id in self._themes

    def get_theme(self, theme_id: str) -> Theme:
        theme = self._themes.get(theme_id)
        if theme is None:
            raise ThemeNotRegisteredError(theme_id)
        return theme

    def get_themes(self) -> Tuple[Theme, ...]:
        """All themes, ordered by id."""
        return tuple(self._themes[key] for key in sorted(self._themes))

    def get_themes_by_state(self, state: str) -> Tuple[Theme, ...]:
        return tuple(theme for theme in self.get_themes() if theme.state == state)

    @staticmethod
    def ini_is_valid(theme: Theme) -> bool:
        """A descriptor must declare every required key with a value."""
        for key in REQUIRED_INI_KEYS:
            value = theme.get_ini(key)
            if value is None or not str(value).strip():
                return False
        return True
