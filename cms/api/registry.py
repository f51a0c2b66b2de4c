"""
CMS API — Handler Registry
============================
Maps resource names to the handler responsible for them.

Rules:
- Each resource name registers exactly once
- Handlers must satisfy the ResourceHandler protocol
- Registry locks after bootstrap (no dynamic injection)
- Thread-safe for concurrent access
- An unknown name raises HandlerNotRegisteredError, never KeyError

Lifecycle:
    1. Create registry
    2. Register handlers (during bootstrap)
    3. Lock registry
    4. Resolve handlers per request (read-only)
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Iterable, Optional

from cms.api.handlers import ResourceHandler

logger = logging.getLogger("cms.api")


# ══════════════════════════════════════════════════════════════
# REGISTRY ERRORS
# ══════════════════════════════════════════════════════════════

class HandlerRegistryError(Exception):
    """Base error for handler registry operations."""
    pass


class HandlerNotRegisteredError(HandlerRegistryError):
    """No handler registered for the resource name."""

    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        super().__init__(
            f"No handler registered for resource '{resource_name}'."
        )


class DuplicateHandlerError(HandlerRegistryError):
    """Resource name already has a handler."""

    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        super().__init__(
            f"A handler is already registered for resource '{resource_name}'."
        )


class RegistryLockedError(HandlerRegistryError):
    """Registry is locked — no modifications allowed."""

    def __init__(self):
        super().__init__(
            "Handler Registry is locked after bootstrap. "
            "No dynamic registration allowed."
        )


# ══════════════════════════════════════════════════════════════
# HANDLER REGISTRY
# ══════════════════════════════════════════════════════════════

class HandlerRegistry:
    """
    Registry of resource handlers.

    Usage:
        registry = HandlerRegistry()
        registry.register(ItemHandler())
        registry.register(MediaHandler(), name="media")
        registry.lock()

        handler = registry.get("items")
    """

    def __init__(self, handlers: Optional[Iterable[ResourceHandler]] = None):
        self._handlers: Dict[str, ResourceHandler] = {}
        self._locked = False
        self._lock = Lock()
        for handler in handlers or ():
            self.register(handler)

    # ══════════════════════════════════════════════════════════
    # REGISTRATION (bootstrap phase only)
    # ══════════════════════════════════════════════════════════

    def register(
        self, handler: ResourceHandler, name: Optional[str] = None
    ) -> None:
        """
        Register a handler under name (default: its resource name).

        Raises:
            TypeError:             Handler does not satisfy ResourceHandler.
            ValueError:            Empty resource name.
            RegistryLockedError:   Registry already locked.
            DuplicateHandlerError: Name already registered.
        """
        if not isinstance(handler, ResourceHandler):
            raise TypeError(
                f"Handler must implement ResourceHandler, "
                f"got {type(handler).__name__}."
            )

        resource_name = name if name is not None else handler.get_resource_name()
        if not resource_name or not isinstance(resource_name, str):
            raise ValueError("Resource name must be a non-empty string.")

        with self._lock:
            if self._locked:
                raise RegistryLockedError()
            if resource_name in self._handlers:
                raise DuplicateHandlerError(resource_name)
            self._handlers[resource_name] = handler

        logger.info(
            f"Handler registered: '{resource_name}' → "
            f"{type(handler).__name__}"
        )

    def lock(self) -> None:
        """Lock the registry. Idempotent."""
        with self._lock:
            if self._locked:
                return
            self._locked = True
        logger.info(
            f"Handler Registry locked — {len(self._handlers)} handler(s)"
        )

    @property
    def is_locked(self) -> bool:
        return self._locked

    # ══════════════════════════════════════════════════════════
    # RESOLUTION
    # ══════════════════════════════════════════════════════════

    def get(self, name: str) -> ResourceHandler:
        """
        Resolve a resource name.

        Raises:
            HandlerNotRegisteredError: Name unknown.
        """
        with self._lock:
            handler = self._handlers.get(name)
        if handler is None:
            raise HandlerNotRegisteredError(name)
        return handler

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._handlers

    def get_registered_names(self) -> frozenset:
        with self._lock:
            return frozenset(self._handlers.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)
