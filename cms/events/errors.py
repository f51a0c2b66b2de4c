"""
CMS Event Bus — Errors
========================
Error types for listener registration.
Listener failures during trigger are not wrapped: they propagate
unchanged to whoever triggered the event.
"""


class EventBusError(Exception):
    """Base error for Event Bus operations."""
    pass


class InvalidEventNameError(EventBusError):
    """Event name is empty or not a string."""

    def __init__(self, event_name):
        self.event_name = event_name
        super().__init__(
            f"Event name must be a non-empty string, got {event_name!r}."
        )


class DuplicateListenerError(EventBusError):
    """Same listener already attached to this event name."""

    def __init__(self, event_name: str, listener_name: str):
        self.event_name = event_name
        self.listener_name = listener_name
        super().__init__(
            f"Listener '{listener_name}' already attached "
            f"to event '{event_name}'."
        )
