"""
CMS Themes - Public API
=======================
"""

from cms.themes.inventory import (
    DbThemeInventory,
    InMemoryThemeInventory,
    ThemeInventory,
)
from cms.themes.loader import (
    ThemeIniError,
    build_theme_manager,
    load_themes,
    read_theme_ini,
    reconcile_inventory,
    version_satisfies,
)
from cms.themes.manager import (
    DuplicateThemeError,
    ThemeError,
    ThemeManager,
    ThemeNotRegisteredError,
)
from cms.themes.theme import (
    STATE_ACTIVE,
    STATE_INVALID_INI,
    STATE_INVALID_VERSION,
    STATE_NOT_FOUND,
    Theme,
)

__all__ = [
    "Theme",
    "STATE_ACTIVE",
    "STATE_INVALID_INI",
    "STATE_INVALID_VERSION",
    "STATE_NOT_FOUND",
    "ThemeManager",
    "ThemeError",
    "DuplicateThemeError",
    "ThemeNotRegisteredError",
    "ThemeInventory",
    "InMemoryThemeInventory",
    "DbThemeInventory",
    "ThemeIniError",
    "read_theme_ini",
    "version_satisfies",
    "load_themes",
    "reconcile_inventory",
    "build_theme_manager",
]
