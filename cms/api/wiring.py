"""
CMS API Wiring
==============
Builds an ApiManager from handlers and Django settings.

Settings read:
    CMS_API_ACL   — mapping passed to Acl.from_config()
    CMS_API_ROLE  — role of the acting identity for the default gate
"""

from __future__ import annotations

from typing import Iterable, Optional

from django.conf import settings

from cms.api.handlers import ResourceHandler
from cms.api.manager import ApiManager
from cms.api.registry import HandlerRegistry
from cms.api.translation import Translator
from cms.permissions.acl import AccessGate, Acl
from cms.permissions.identity import StaticIdentity


def build_gate_from_settings() -> Acl:
    config = getattr(settings, "CMS_API_ACL", {}) or {}
    role = getattr(settings, "CMS_API_ROLE", None)
    return Acl.from_config(config, identity=StaticIdentity(role))


def build_api_manager(
    handlers: Iterable[ResourceHandler],
    *,
    gate: Optional[AccessGate] = None,
    translator: Optional[Translator] = None,
) -> ApiManager:
    """
    Register handlers, lock the registry and build the manager.

    Without an explicit gate the ACL comes from settings.
    """
    registry = HandlerRegistry()
    for handler in handlers:
        registry.register(handler)
    registry.lock()

    return ApiManager(
        registry=registry,
        gate=gate if gate is not None else build_gate_from_settings(),
        translator=translator,
    )
