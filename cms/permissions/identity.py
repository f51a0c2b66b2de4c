"""
CMS Permissions - Acting Identity
=================================
The access gate asks an IdentityProvider for the role of whoever is
acting on the current call.
"""

from __future__ import annotations

from typing import Optional, Protocol


class IdentityProvider(Protocol):
    def get_role(self) -> Optional[str]:
        ...


class StaticIdentity:
    """
    Fixed identity, used for bootstrap, scripts and tests.

    role=None stands for an anonymous caller.
    """

    def __init__(self, role: Optional[str] = None):
        self._role = role

    def get_role(self) -> Optional[str]:
        return self._role

    def set_role(self, role: Optional[str]) -> None:
        self._role = role
