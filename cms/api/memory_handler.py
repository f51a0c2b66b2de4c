"""
CMS API — In-Memory Resource Handler
======================================
Dictionary-backed handler used for bootstrap, scripts and tests.

Records are plain dicts keyed by an auto-incremented integer id.
Subclasses can override validate() to fill an ErrorStore; a
non-empty store aborts the write with a ValidationException.
"""

from __future__ import annotations

import copy
import itertools
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional

from cms.api.error_store import ErrorStore
from cms.api.exceptions import ValidationException
from cms.api.handlers import AbstractResourceHandler
from cms.api.representation import ResourceRepresentation
from cms.api.request import Request
from cms.api.response import ERROR_NOT_FOUND, Response
from cms.events.manager import EventManager


class InMemoryResourceHandler(AbstractResourceHandler):
    """
    Resource handler storing records in process memory.

    Search options:
        limit:  maximum number of results (None = all)
        offset: number of matches to skip
    """

    def __init__(
        self,
        resource_name: str,
        resource_id: Optional[str] = None,
        event_manager: Optional[EventManager] = None,
    ):
        super().__init__(event_manager=event_manager)
        self.resource_name = resource_name
        self.resource_id = resource_id or resource_name
        self._records: Dict[int, Dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    # ══════════════════════════════════════════════════════════
    # HOOKS
    # ══════════════════════════════════════════════════════════

    def validate(
        self, data: Mapping[str, Any], error_store: ErrorStore, request: Request
    ) -> None:
        """Add errors for invalid data. Default accepts everything."""

    def _check(self, data: Mapping[str, Any], request: Request) -> None:
        error_store = ErrorStore()
        self.validate(data, error_store, request)
        if error_store.has_errors():
            raise ValidationException(
                f'Invalid "{self.resource_name}" data.', error_store
            )

    def _represent(self, id: int, record: Mapping[str, Any]) -> ResourceRepresentation:
        return ResourceRepresentation(self.resource_name, id, record)

    def _not_found(self, request: Request) -> Response:
        response = Response(status=ERROR_NOT_FOUND)
        response.errors.add_error(
            "id", f'"{self.resource_name}" {request.id!r} not found.'
        )
        return response

    # ══════════════════════════════════════════════════════════
    # OPERATIONS
    # ══════════════════════════════════════════════════════════

    def search(self, request: Request) -> Response:
        criteria = dict(request.content)
        with self._lock:
            matches = [
                self._represent(id, record)
                for id, record in sorted(self._records.items())
                if all(record.get(k) == v for k, v in criteria.items())
            ]

        offset = int(request.get_option("offset", 0) or 0)
        limit = request.get_option("limit")
        page = matches[offset:] if limit is None else matches[offset:offset + int(limit)]

        response = Response(page)
        response.set_total_results(len(matches))
        return response

    def create(self, request: Request) -> Response:
        data = dict(request.content)
        self._check(data, request)
        with self._lock:
            id = next(self._ids)
            self._records[id] = copy.deepcopy(data)
        return Response(self._represent(id, data))

    def batch_create(self, request: Request) -> Response:
        items: List[Dict[str, Any]] = [dict(item) for item in request.content]

        error_store = ErrorStore()
        for index, data in enumerate(items):
            item_errors = ErrorStore()
            self.validate(data, item_errors, request)
            for key, messages in item_errors.get_errors().items():
                for message in messages:
                    error_store.add_error(f"{index}.{key}", message)
        if error_store.has_errors():
            raise ValidationException(
                f'Invalid "{self.resource_name}" batch data.', error_store
            )

        representations = []
        with self._lock:
            for data in items:
                id = next(self._ids)
                self._records[id] = copy.deepcopy(data)
                representations.append(self._represent(id, data))
        return Response(representations)

    def read(self, request: Request) -> Response:
        with self._lock:
            record = self._records.get(request.id)
        if record is None:
            return self._not_found(request)
        return Response(self._represent(request.id, record))

    def update(self, request: Request) -> Response:
        with self._lock:
            existing = self._records.get(request.id)
        if existing is None:
            return self._not_found(request)

        if request.get_option("is_partial", False):
            data = dict(existing)
            data.update(request.content)
        else:
            data = dict(request.content)
        self._check(data, request)

        with self._lock:
            self._records[request.id] = copy.deepcopy(data)
        return Response(self._represent(request.id, data))

    def delete(self, request: Request) -> Response:
        with self._lock:
            record = self._records.pop(request.id, None)
        if record is None:
            return self._not_found(request)
        return Response(self._represent(request.id, record))

    def count(self) -> int:
        with self._lock:
            return len(self._records)
