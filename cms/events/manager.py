"""
CMS Event Bus — Event Manager
===============================
Per-handler publish/subscribe channel keyed by event name.

Each resource handler owns exactly one EventManager. Managers are
never shared between handlers, so attaching a listener to one
resource cannot leak into another.

Trigger behavior:
1. Look up listeners by event name
2. Call them sequentially, in attach order
3. A listener exception propagates and stops the trigger

There is no timeout, isolation or retry around listeners. A slow
listener stalls the caller; a failing one aborts the caller.

Rules:
- Event names are non-empty strings
- Multiple listeners per event name allowed
- The same listener cannot be attached twice to one event name
- Thread-safe registration; trigger works on a snapshot
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Tuple

from cms.events.errors import (
    DuplicateListenerError,
    EventBusError,
    InvalidEventNameError,
)
from cms.events.models import Event, EventPayload

logger = logging.getLogger("cms.events")

Listener = Callable[[Event], Any]


class EventManager:
    """
    In-memory listener registry for one resource handler.

    Usage:
        events = EventManager(identifier="items")
        events.attach("create.pre", audit_listener)
        events.trigger("create.pre", handler, PreEvent(request))
    """

    def __init__(self, identifier: Optional[str] = None):
        self._identifier = identifier
        self._listeners: Dict[str, List[Listener]] = {}
        self._lock = Lock()

    @property
    def identifier(self) -> Optional[str]:
        return self._identifier

    @staticmethod
    def _validate_event_name(event_name: str) -> None:
        if not event_name or not isinstance(event_name, str):
            raise InvalidEventNameError(event_name)

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def attach(self, event_name: str, listener: Listener) -> Listener:
        """
        Attach a listener to an event name.

        Returns the listener.

        Raises:
            InvalidEventNameError:  Bad event name
            DuplicateListenerError: Listener already attached
            EventBusError:          Listener is not callable
        """
        self._validate_event_name(event_name)

        if not callable(listener):
            raise EventBusError(
                f"Listener must be callable, got {type(listener).__name__}."
            )

        listener_name = getattr(listener, "__qualname__", str(listener))

        with self._lock:
            listeners = self._listeners.setdefault(event_name, [])
            for existing in listeners:
                if existing is listener:
                    raise DuplicateListenerError(event_name, listener_name)
            listeners.append(listener)

        logger.debug(
            f"Listener attached: {listener_name} → {event_name} "
            f"(manager: {self._identifier})"
        )
        return listener

    def listen(self, event_name: str) -> Callable[[Listener], Listener]:
        """
        Decorator form of attach().

            @events.listen("create.post")
            def index_item(event): ...
        """
        def decorator(listener: Listener) -> Listener:
            return self.attach(event_name, listener)

        return decorator

    def detach(self, event_name: str, listener: Listener) -> bool:
        """Detach a listener. Returns False if it was not attached."""
        with self._lock:
            listeners = self._listeners.get(event_name, [])
            for index, existing in enumerate(listeners):
                if existing is listener:
                    del listeners[index]
                    if not listeners:
                        del self._listeners[event_name]
                    return True
        return False

    def clear_listeners(self, event_name: str) -> None:
        with self._lock:
            self._listeners.pop(event_name, None)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def get_listeners(self, event_name: str) -> Tuple[Listener, ...]:
        """Listeners for an event name in attach order (empty if none)."""
        with self._lock:
            return tuple(self._listeners.get(event_name, ()))

    def has_listeners(self, event_name: str) -> bool:
        with self._lock:
            return bool(self._listeners.get(event_name))

    def get_event_names(self) -> frozenset:
        with self._lock:
            return frozenset(self._listeners.keys())

    # ══════════════════════════════════════════════════════════
    # TRIGGER
    # ══════════════════════════════════════════════════════════

    def trigger(self, event_name: str, target: Any, payload: EventPayload) -> Event:
        """Build an Event and trigger it. Returns the event."""
        event = Event(name=event_name, target=target, payload=payload)
        self.trigger_event(event)
        return event

    def trigger_event(self, event: Event) -> int:
        """
        Call every listener for event.name, in attach order.

        Returns the number of listeners called.
        """
        self._validate_event_name(event.name)
        listeners = self.get_listeners(event.name)

        for listener in listeners:
            listener(event)

        if listeners:
            logger.debug(
                f"Triggered {event.name} → {len(listeners)} listener(s) "
                f"(manager: {self._identifier})"
            )
        return len(listeners)
