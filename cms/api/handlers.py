"""
CMS API — Resource Handlers
=============================
A resource handler owns the persistence operations of one resource
type and the event manager observers attach to.

The manager depends only on the ResourceHandler protocol.
AbstractResourceHandler is a convenience base: subclasses override the
operations they support; the rest answer with
OperationNotImplementedException.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from cms.api.exceptions import OperationNotImplementedException
from cms.api.request import Request
from cms.api.response import Response
from cms.events.manager import EventManager


# ══════════════════════════════════════════════════════════════
# HANDLER PROTOCOL
# ══════════════════════════════════════════════════════════════

@runtime_checkable
class ResourceHandler(Protocol):
    """
    Capability interface of a resource handler.

    get_resource_name() is the name callers use in Request.resource.
    get_resource_id() identifies the resource to the access gate and
    appears in permission error messages.
    """

    def get_resource_name(self) -> str:
        ...

    def get_resource_id(self) -> str:
        ...

    def get_event_manager(self) -> EventManager:
        ...

    def search(self, request: Request) -> Response:
        ...

    def create(self, request: Request) -> Response:
        ...

    def batch_create(self, request: Request) -> Response:
        ...

    def read(self, request: Request) -> Response:
        ...

    def update(self, request: Request) -> Response:
        ...

    def delete(self, request: Request) -> Response:
        ...


# ══════════════════════════════════════════════════════════════
# ABSTRACT BASE
# ══════════════════════════════════════════════════════════════

class AbstractResourceHandler:
    """
    Base class for resource handlers.

    Subclasses set resource_name (and optionally resource_id) and
    override the operations they implement.

        class ItemHandler(AbstractResourceHandler):
            resource_name = "items"

            def read(self, request):
                ...
    """

    resource_name: str = ""
    resource_id: Optional[str] = None

    def __init__(self, event_manager: Optional[EventManager] = None):
        self._event_manager = event_manager

    def get_resource_name(self) -> str:
        return self.resource_name

    def get_resource_id(self) -> str:
        if self.resource_id:
            return self.resource_id
        return f"{type(self).__module__}.{type(self).__qualname__}"

    def get_event_manager(self) -> EventManager:
        if self._event_manager is None:
            self._event_manager = EventManager(identifier=self.get_resource_name())
        return self._event_manager

    def _not_implemented(self, operation: str) -> OperationNotImplementedException:
        return OperationNotImplementedException(
            f'The "{self.get_resource_name()}" handler does not implement '
            f'the "{operation}" operation.'
        )

    def search(self, request: Request) -> Response:
        raise self._not_implemented(request.operation)

    def create(self, request: Request) -> Response:
        raise self._not_implemented(request.operation)

    def batch_create(self, request: Request) -> Response:
        raise self._not_implemented(request.operation)

    def read(self, request: Request) -> Response:
        raise self._not_implemented(request.operation)

    def update(self, request: Request) -> Response:
        raise self._not_implemented(request.operation)

    def delete(self, request: Request) -> Response:
        raise self._not_implemented(request.operation)
