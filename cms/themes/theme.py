"""
CMS Themes — Theme
====================
One presentation theme known to the installation.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


STATE_ACTIVE = "active"
STATE_INVALID_INI = "invalid_ini"
STATE_INVALID_VERSION = "invalid_version"
STATE_NOT_FOUND = "not_found"

VALID_THEME_STATES = frozenset({
    STATE_ACTIVE,
    STATE_INVALID_INI,
    STATE_INVALID_VERSION,
    STATE_NOT_FOUND,
})


class Theme:
    """
    A theme, identified by its directory name.

    Fields:
        id:          Directory name (also the value sites store).
        state:       One of VALID_THEME_STATES (None until scanned).
        ini:         Descriptor values from config/theme.ini.
        config_spec: Settings form declared in the [config] section.
    """

    def __init__(self, id: str):
        self.id = id
        self.state: Optional[str] = None
        self._ini: Dict[str, str] = {}
        self._config_spec: Dict[str, str] = {}

    def set_state(self, state: str) -> None:
        if state not in VALID_THEME_STATES:
            raise ValueError(
                f"state '{state}' not valid. "
                f"Must be one of: {sorted(VALID_THEME_STATES)}"
            )
        self.state = state

    def set_ini(self, ini: Mapping[str, str]) -> None:
        self._ini = dict(ini)

    def get_ini(self, key: Optional[str] = None) -> Any:
        """All descriptor values, or one value (None if absent)."""
        if key is None:
            return dict(self._ini)
        return self._ini.get(key)

    def set_config_spec(self, config_spec: Mapping[str, str]) -> None:
        self._config_spec = dict(config_spec)

    @property
    def config_spec(self) -> Dict[str, str]:
        return dict(self._config_spec)

    @property
    def name(self) -> str:
        return self._ini.get("name") or self.id

    @property
    def is_active(self) -> bool:
        return self.state == STATE_ACTIVE

    def __repr__(self) -> str:
        return f"Theme(id={self.id!r}, state={self.state!r})"
