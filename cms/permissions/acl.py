"""
CMS Permissions - Access Control List
=====================================
Deterministic role/resource/operation rules behind the API access gate.

Evaluation:
1. Unknown or missing role → deny
2. Any matching deny rule → deny
3. Any matching allow rule → allow
4. Otherwise → deny

A rule matches when each of its resource_id and operations is either
a wildcard (None) or contains the requested value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Protocol

from cms.api.request import VALID_OPERATIONS
from cms.permissions.identity import IdentityProvider, StaticIdentity

logger = logging.getLogger("cms.permissions")


class AccessGate(Protocol):
    def user_is_allowed(self, handler: Any, operation: str) -> bool:
        ...


@dataclass(frozen=True)
class AclRule:
    role: str
    resource_id: Optional[str] = None
    operations: Optional[frozenset] = None

    def __post_init__(self):
        if not self.role or not isinstance(self.role, str):
            raise ValueError("role must be a non-empty string.")

        if self.resource_id is not None and (
            not isinstance(self.resource_id, str) or not self.resource_id
        ):
            raise ValueError("resource_id must be None or a non-empty string.")

        if self.operations is not None:
            operations = frozenset(self.operations)
            unknown = operations - VALID_OPERATIONS
            if unknown:
                raise ValueError(
                    f"operations {sorted(unknown)} not valid. "
                    f"Must be among: {sorted(VALID_OPERATIONS)}"
                )
            object.__setattr__(self, "operations", operations)

    def matches(self, role: str, resource_id: str, operation: str) -> bool:
        if role != self.role:
            return False
        if self.resource_id is not None and self.resource_id != resource_id:
            return False
        if self.operations is not None and operation not in self.operations:
            return False
        return True


class Acl:
    """
    In-memory ACL implementing the AccessGate protocol.

    Usage:
        acl = Acl(identity=StaticIdentity("editor"))
        acl.add_role("editor")
        acl.allow("editor", "items", ["search", "read", "create"])
        acl.deny("editor", "items", ["delete"])

        acl.user_is_allowed(item_handler, "read")   # True
    """

    def __init__(self, identity: Optional[IdentityProvider] = None):
        self._identity = identity or StaticIdentity()
        self._roles: set = set()
        self._allow_rules: list = []
        self._deny_rules: list = []

    # ══════════════════════════════════════════════════════════
    # CONFIGURATION
    # ══════════════════════════════════════════════════════════

    def add_role(self, role: str) -> None:
        if not role or not isinstance(role, str):
            raise ValueError("role must be a non-empty string.")
        self._roles.add(role)

    def has_role(self, role: str) -> bool:
        return role in self._roles

    def allow(
        self,
        role: str,
        resource_id: Optional[str] = None,
        operations: Optional[Iterable[str]] = None,
    ) -> None:
        self._allow_rules.append(self._build_rule(role, resource_id, operations))

    def deny(
        self,
        role: str,
        resource_id: Optional[str] = None,
        operations: Optional[Iterable[str]] = None,
    ) -> None:
        self._deny_rules.append(self._build_rule(role, resource_id, operations))

    def _build_rule(
        self,
        role: str,
        resource_id: Optional[str],
        operations: Optional[Iterable[str]],
    ) -> AclRule:
        if role not in self._roles:
            raise ValueError(f"Role '{role}' is not registered.")
        if isinstance(operations, str):
            operations = [operations]
        return AclRule(
            role=role,
            resource_id=resource_id,
            operations=None if operations is None else frozenset(operations),
        )

    def set_identity(self, identity: IdentityProvider) -> None:
        self._identity = identity

    # ══════════════════════════════════════════════════════════
    # EVALUATION
    # ══════════════════════════════════════════════════════════

    def is_allowed(
        self, role: Optional[str], resource_id: str, operation: str
    ) -> bool:
        if role is None or role not in self._roles:
            return False

        for rule in self._deny_rules:
            if rule.matches(role, resource_id, operation):
                return False

        for rule in self._allow_rules:
            if rule.matches(role, resource_id, operation):
                return True

        return False

    def user_is_allowed(self, handler: Any, operation: str) -> bool:
        """Whether the current identity may perform operation on handler."""
        role = self._identity.get_role()
        resource_id = handler.get_resource_id()
        allowed = self.is_allowed(role, resource_id, operation)
        if not allowed:
            logger.debug(
                f"Access denied: role={role!r} resource={resource_id!r} "
                f"operation={operation!r}"
            )
        return allowed

    # ══════════════════════════════════════════════════════════
    # CONFIG LOADING
    # ══════════════════════════════════════════════════════════

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        identity: Optional[IdentityProvider] = None,
    ) -> "Acl":
        """
        Build an ACL from a settings mapping:

            {
                "roles": ["guest", "editor"],
                "allow": [["guest", None, ["search", "read"]],
                          ["editor", None, None]],
                "deny":  [["editor", "users", ["delete"]]],
            }
        """
        acl = cls(identity=identity)
        for role in config.get("roles", ()):
            acl.add_role(role)
        for role, resource_id, operations in config.get("allow", ()):
            acl.allow(role, resource_id, operations)
        for role, resource_id, operations in config.get("deny", ()):
            acl.deny(role, resource_id, operations)

        logger.info(
            f"ACL loaded — {len(acl._roles)} role(s), "
            f"{len(acl._allow_rules)} allow, {len(acl._deny_rules)} deny"
        )
        return acl


class AllowAllGate:
    """Gate that allows every operation (system/bootstrap contexts)."""

    def user_is_allowed(self, handler: Any, operation: str) -> bool:
        return True
