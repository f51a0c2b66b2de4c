"""
CMS Event Bus — Public API
============================
Every operation is announced before it runs and after it succeeds.
"""

from cms.events.errors import (
    DuplicateListenerError,
    EventBusError,
    InvalidEventNameError,
)
from cms.events.manager import EventManager, Listener
from cms.events.models import (
    EXECUTE_POST,
    EXECUTE_PRE,
    Event,
    EventPayload,
    PostEvent,
    PreEvent,
    post_event_name,
    pre_event_name,
)

__all__ = [
    "EventManager",
    "Listener",
    "Event",
    "EventPayload",
    "PreEvent",
    "PostEvent",
    "EXECUTE_PRE",
    "EXECUTE_POST",
    "pre_event_name",
    "post_event_name",
    "EventBusError",
    "InvalidEventNameError",
    "DuplicateListenerError",
]
