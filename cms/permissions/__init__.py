"""
CMS Permissions - Public API
============================
"""

from cms.permissions.acl import AccessGate, Acl, AclRule, AllowAllGate
from cms.permissions.identity import IdentityProvider, StaticIdentity

__all__ = [
    "AccessGate",
    "Acl",
    "AclRule",
    "AllowAllGate",
    "IdentityProvider",
    "StaticIdentity",
]
