"""
CMS Themes — Theme Loader
===========================
One-shot startup scan reconciling themes on disk with themes in use.

Scan rules (per sub-directory of the themes directory):
1. The directory name is the theme id
2. config/theme.ini must be a readable file      → else invalid_ini
3. Descriptor keys sit under [info] or before any section;
   [config] becomes the theme's config spec
4. The descriptor must declare a name            → else invalid_ini
5. version_constraint, when present, must admit
   the application version (PEP 440 specifiers)  → else invalid_version
6. Otherwise the theme is active

Reconciliation: every theme a site uses that was not found on disk
is registered with state not_found.
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from django.conf import settings
from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from cms.themes.inventory import DbThemeInventory, ThemeInventory
from cms.themes.manager import ThemeManager
from cms.themes.theme import (
    STATE_ACTIVE,
    STATE_INVALID_INI,
    STATE_INVALID_VERSION,
    STATE_NOT_FOUND,
    Theme,
)

logger = logging.getLogger("cms.themes")

THEME_INI_PATH = Path("config") / "theme.ini"
VERSION_CONSTRAINT_KEY = "version_constraint"

_ROOT_SECTION = "__root__"
_INFO_SECTION = "info"
_CONFIG_SECTION = "config"


class ThemeIniError(Exception):
    """Descriptor file could not be read or parsed."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot read theme descriptor '{path}': {detail}")


# ══════════════════════════════════════════════════════════════
# DESCRIPTOR PARSING
# ══════════════════════════════════════════════════════════════

def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def read_theme_ini(path: Path) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Parse a theme descriptor.

    Returns:
        (ini, config_spec)

    Raises:
        ThemeIniError: unreadable file or malformed INI.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeIniError(path, str(exc)) from exc

    parser = configparser.ConfigParser(interpolation=None, default_section="")
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=str(path))
    except configparser.Error as exc:
        raise ThemeIniError(path, str(exc)) from exc

    def _section(name: str) -> Dict[str, str]:
        if not parser.has_section(name):
            return {}
        return {key: _unquote(value) for key, value in parser.items(name)}

    config_spec = _section(_CONFIG_SECTION)
    if parser.has_section(_INFO_SECTION):
        ini = _section(_INFO_SECTION)
    else:
        ini = _section(_ROOT_SECTION)
    return ini, config_spec


def version_satisfies(version: str, constraint: str) -> bool:
    """
    Whether version is admitted by a PEP 440 specifier set.

    A malformed version or constraint admits nothing.
    """
    try:
        return SpecifierSet(constraint).contains(Version(version), prereleases=True)
    except (InvalidSpecifier, InvalidVersion):
        return False


# ══════════════════════════════════════════════════════════════
# SCAN + RECONCILE
# ══════════════════════════════════════════════════════════════

def _load_theme(theme: Theme, directory: Path, app_version: str) -> None:
    ini_path = directory / THEME_INI_PATH
    if not ini_path.is_file():
        theme.set_state(STATE_INVALID_INI)
        return

    try:
        ini, config_spec = read_theme_ini(ini_path)
    except ThemeIniError as exc:
        logger.warning(str(exc))
        theme.set_state(STATE_INVALID_INI)
        return

    theme.set_ini(ini)
    theme.set_config_spec(config_spec)

    if not ThemeManager.ini_is_valid(theme):
        theme.set_state(STATE_INVALID_INI)
        return

    constraint = theme.get_ini(VERSION_CONSTRAINT_KEY)
    if constraint is not None and not version_satisfies(app_version, constraint):
        theme.set_state(STATE_INVALID_VERSION)
        return

    theme.set_state(STATE_ACTIVE)


def load_themes(
    manager: ThemeManager,
    themes_dir: Union[str, Path],
    app_version: str,
) -> ThemeManager:
    """Register every theme directory under themes_dir with its state."""
    root = Path(themes_dir)
    if not root.is_dir():
        logger.warning(f"Themes directory '{root}' does not exist")
        return manager

    for directory in sorted(root.iterdir()):
        if not directory.is_dir() or directory.name.startswith("."):
            continue
        theme = manager.register_theme(directory.name)
        _load_theme(theme, directory, app_version)
        if not theme.is_active:
            logger.warning(f"Theme '{theme.id}' is {theme.state}")

    return manager


def reconcile_inventory(manager: ThemeManager, inventory: ThemeInventory) -> ThemeManager:
    """Register themes used by sites but missing on disk as not_found."""
    for theme_id in inventory.get_used_themes():
        if manager.is_registered(theme_id):
            continue
        theme = manager.register_theme(theme_id)
        theme.set_state(STATE_NOT_FOUND)
        logger.warning(f"Theme '{theme_id}' is used by a site but not found")
    return manager


def build_theme_manager(
    themes_dir: Union[str, Path, None] = None,
    inventory: Optional[ThemeInventory] = None,
    app_version: Optional[str] = None,
) -> ThemeManager:
    """
    Scan the filesystem and reconcile with the site inventory.

    Defaults come from settings.CMS_THEMES_DIR, the database
    inventory and settings.CMS_VERSION.
    """
    if themes_dir is None:
        themes_dir = settings.CMS_THEMES_DIR
    if inventory is None:
        inventory = DbThemeInventory()
    if app_version is None:
        app_version = settings.CMS_VERSION

    manager = ThemeManager()
    load_themes(manager, themes_dir, app_version)
    reconcile_inventory(manager, inventory)

    logger.info(
        f"Themes loaded — {len(manager.get_themes_by_state(STATE_ACTIVE))} active, "
        f"{len(manager.get_themes())} total"
    )
    return manager
