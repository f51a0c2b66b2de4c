"""
CMS Event Bus — Event Models
==============================
Events published around every API operation.

Payloads form a closed set:

    PreEvent(request)             — '<operation>.pre', 'execute.pre'
    PostEvent(request, response)  — '<operation>.post', 'execute.post'

Listeners match on the payload type instead of probing for keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from cms.api.request import Request
    from cms.api.response import Response


# ══════════════════════════════════════════════════════════════
# EVENT NAMES
# ══════════════════════════════════════════════════════════════

EXECUTE_PRE = "execute.pre"
EXECUTE_POST = "execute.post"


def pre_event_name(operation: str) -> str:
    """search → 'search.pre'"""
    return f"{operation}.pre"


def post_event_name(operation: str) -> str:
    """search → 'search.post'"""
    return f"{operation}.post"


# ══════════════════════════════════════════════════════════════
# PAYLOADS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PreEvent:
    request: "Request"


@dataclass(frozen=True)
class PostEvent:
    request: "Request"
    response: "Response"


EventPayload = Union[PreEvent, PostEvent]


# ══════════════════════════════════════════════════════════════
# EVENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Event:
    """
    A named notification.

    Fields:
        name:    Event name (e.g. 'create.pre').
        target:  Object the event is about (the resource handler).
        payload: PreEvent or PostEvent.
    """

    name: str
    target: Any
    payload: EventPayload

    @property
    def request(self) -> "Request":
        return self.payload.request

    @property
    def is_pre(self) -> bool:
        return isinstance(self.payload, PreEvent)

    @property
    def is_post(self) -> bool:
        return isinstance(self.payload, PostEvent)
