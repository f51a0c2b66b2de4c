"""
CMS Themes — Theme Inventory
==============================
Which themes persisted sites are configured to use.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Tuple


class ThemeInventory(Protocol):
    def get_used_themes(self) -> Tuple[str, ...]:
        ...


class InMemoryThemeInventory:
    """Deterministic inventory used for bootstrap/tests."""

    def __init__(self, themes: Iterable[str] = ()):
        self._themes = tuple(sorted(set(themes)))

    def get_used_themes(self) -> Tuple[str, ...]:
        return self._themes


class DbThemeInventory:
    """Distinct theme names of all persisted sites."""

    def get_used_themes(self) -> Tuple[str, ...]:
        from cms.sites.models import Site

        rows = (
            Site.objects.order_by("theme")
            .values_list("theme", flat=True)
            .distinct()
        )
        return tuple(theme for theme in rows if theme)
