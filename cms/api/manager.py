"""
CMS API — API Manager
=======================
Single entry point turning a Request into a validated Response.

Lifecycle of execute():
    1. Validate request shape (resource, operation, content)
    2. Resolve the resource handler
    3. Ask the access gate
    4. Publish pre-events          (unless metadata 'initialize' is False)
    5. Run the operation           (batch create runs its own sub-protocol)
    6. Validate the handler's response
    7. Publish post-events         (unless metadata 'finalize' is False)
    8. Attach the request to the response and return it

Any ValidationException raised in steps 1–7 becomes an
ERROR_VALIDATION response. Every other exception propagates.

The ApiManager does NOT:
- Persist anything
- Compute permissions (the gate does)
- Retry, roll back, or undo published pre-events
- Guard against slow or failing event listeners
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Optional, TYPE_CHECKING

from cms.api.exceptions import (
    BadRequestException,
    BadResponseException,
    PermissionDeniedException,
    ValidationException,
)
from cms.api.handlers import ResourceHandler
from cms.api.registry import HandlerNotRegisteredError, HandlerRegistry
from cms.api.representation import is_representation
from cms.api.request import (
    BATCH_CREATE,
    CREATE,
    DELETE,
    METADATA_FINALIZE,
    METADATA_INITIALIZE,
    READ,
    SEARCH,
    UPDATE,
    Request,
    is_valid_operation,
)
from cms.api.response import ERROR_VALIDATION, Response, is_valid_status
from cms.api.results import DispatchResult, Ok, ValidationFailed
from cms.api.translation import GettextTranslator, Translator, format_message
from cms.events.models import (
    EXECUTE_POST,
    EXECUTE_PRE,
    PostEvent,
    PreEvent,
    post_event_name,
    pre_event_name,
)

if TYPE_CHECKING:
    from cms.permissions.acl import AccessGate

logger = logging.getLogger("cms.api")


def _is_sequence(value: Any) -> bool:
    """Ordered sequence of items; strings and bytes do not count."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


class ApiManager:
    """
    API dispatcher.

    Usage:
        manager = ApiManager(registry=registry, gate=acl)

        response = manager.create("items", {"title": "A"})
        response = manager.read("items", 1)

        request = Request(SEARCH, "items")
        request.set_content({"title": "A"})
        response = manager.execute(request)
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        gate: "AccessGate",
        translator: Optional[Translator] = None,
    ):
        self._registry = registry
        self._gate = gate
        self._translator = translator or GettextTranslator()

    def _t(self, template: str, *args: object) -> str:
        return format_message(self._translator, template, *args)

    # ══════════════════════════════════════════════════════════
    # CONVENIENCE BUILDERS
    # ══════════════════════════════════════════════════════════

    def search(
        self,
        resource: str,
        data: Any = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Response:
        request = Request(SEARCH, resource)
        request.set_content({} if data is None else data)
        request.set_option(options or {})
        return self.execute(request)

    def create(
        self,
        resource: str,
        data: Any = None,
        file_data: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Response:
        request = Request(CREATE, resource)
        request.set_content({} if data is None else data)
        request.set_file_data(file_data)
        request.set_option(options or {})
        return self.execute(request)

    def batch_create(
        self,
        resource: str,
        data: Any = None,
        file_data: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Response:
        request = Request(BATCH_CREATE, resource)
        request.set_content([] if data is None else data)
        request.set_file_data(file_data)
        request.set_option(options or {})
        return self.execute(request)

    def read(
        self,
        resource: str,
        id: Any,
        data: Any = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Response:
        request = Request(READ, resource)
        request.set_id(id)
        request.set_content({} if data is None else data)
        request.set_option(options or {})
        return self.execute(request)

    def update(
        self,
        resource: str,
        id: Any,
        data: Any = None,
        file_data: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Response:
        request = Request(UPDATE, resource)
        request.set_id(id)
        request.set_content({} if data is None else data)
        request.set_file_data(file_data)
        request.set_option(options or {})
        return self.execute(request)

    def delete(
        self,
        resource: str,
        id: Any,
        data: Any = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Response:
        request = Request(DELETE, resource)
        request.set_id(id)
        request.set_content({} if data is None else data)
        request.set_option(options or {})
        return self.execute(request)

    # ══════════════════════════════════════════════════════════
    # EXECUTE
    # ══════════════════════════════════════════════════════════

    def execute(self, request: Request) -> Response:
        """
        Execute an API request.

        Returns:
            Response with request back-reference set, on success and
            on the validation error path alike.

        Raises:
            Anything that is not a ValidationException.
        """
        result = self._process(request)

        if isinstance(result, ValidationFailed):
            logger.error(result.message)
            response = Response()
            response.set_status(ERROR_VALIDATION)
            response.merge_errors(result.error_store)
        else:
            response = result.response

        response.set_request(request)
        return response

    def _process(self, request: Request) -> DispatchResult:
        try:
            return Ok(self._run(request))
        except ValidationException as exc:
            return ValidationFailed.from_exception(exc)

    def _run(self, request: Request) -> Response:
        # ── Step 1: Request shape ─────────────────────────────
        self._validate_request(request)

        # ── Step 2: Handler resolution ────────────────────────
        try:
            handler = self._registry.get(request.resource)
        except HandlerNotRegisteredError:
            raise BadRequestException(self._t(
                'The API does not support the "%s" resource.',
                request.resource,
            ))

        # ── Step 3: Access gate ───────────────────────────────
        if not self._gate.user_is_allowed(handler, request.operation):
            raise PermissionDeniedException(self._t(
                "Permission denied for the current user to %s the %s resource.",
                request.operation,
                handler.get_resource_id(),
            ))

        # ── Step 4: Pre-events ────────────────────────────────
        if request.get_metadata(METADATA_INITIALIZE, True):
            self.initialize(handler, request)

        # ── Step 5: Operation ─────────────────────────────────
        operation = request.operation
        if operation == SEARCH:
            response = handler.search(request)
        elif operation == CREATE:
            response = handler.create(request)
        elif operation == BATCH_CREATE:
            response = self._execute_batch_create(request, handler)
        elif operation == READ:
            response = handler.read(request)
        elif operation == UPDATE:
            response = handler.update(request)
        elif operation == DELETE:
            response = handler.delete(request)
        else:
            raise BadRequestException(self._t(
                'The API does not support the "%s" request operation.',
                operation,
            ))

        # ── Step 6: Response contract ─────────────────────────
        self._validate_response(request, response)

        # ── Step 7: Post-events ───────────────────────────────
        if request.get_metadata(METADATA_FINALIZE, True):
            self.finalize(handler, request, response)

        return response

    # ══════════════════════════════════════════════════════════
    # VALIDATION
    # ══════════════════════════════════════════════════════════

    def _validate_request(self, request: Request) -> None:
        resource = request.resource
        if not isinstance(resource, str) or not resource:
            raise BadRequestException(self._t(
                "The API request must include a resource. None given."
            ))

        if not is_valid_operation(request.operation):
            raise BadRequestException(self._t(
                'The API does not support the "%s" request operation.',
                request.operation,
            ))

        content = request.content
        if request.operation == BATCH_CREATE:
            if not _is_sequence(content):
                raise BadRequestException(self._t(
                    "The API batch request content must be a list of "
                    'JSON objects. "%s" given.',
                    type(content).__name__,
                ))
        elif not isinstance(content, Mapping):
            raise BadRequestException(self._t(
                'The API request content must be a JSON object. "%s" given.',
                type(content).__name__,
            ))

    def _validate_response(self, request: Request, response: Any) -> None:
        if not isinstance(response, Response):
            raise BadResponseException(self._t(
                'The "%s" operation for the "%s" handler did not return '
                "a valid response.",
                request.operation,
                request.resource,
            ))
        if not is_valid_status(response.status):
            raise BadResponseException(self._t(
                'The "%s" operation for the "%s" handler did not return '
                "a valid response status.",
                request.operation,
                request.resource,
            ))
        if not self.is_valid_response_content(response):
            raise BadResponseException(self._t(
                'The "%s" operation for the "%s" handler did not return '
                "valid response content.",
                request.operation,
                request.resource,
            ))

    @staticmethod
    def is_valid_response_content(response: Response) -> bool:
        """
        A representation, or a sequence containing only representations.

        An error response may carry no content at all.
        """
        content = response.content
        if content is None:
            return response.is_error()
        if is_representation(content):
            return True
        if _is_sequence(content):
            return all(is_representation(item) for item in content)
        return False

    # ══════════════════════════════════════════════════════════
    # EVENTS
    # ══════════════════════════════════════════════════════════

    def initialize(self, handler: ResourceHandler, request: Request) -> None:
        """Publish 'execute.pre' then '<operation>.pre'."""
        events = handler.get_event_manager()
        events.trigger(EXECUTE_PRE, handler, PreEvent(request=request))
        events.trigger(
            pre_event_name(request.operation), handler, PreEvent(request=request)
        )

    def finalize(
        self, handler: ResourceHandler, request: Request, response: Response
    ) -> None:
        """Publish '<operation>.post' then 'execute.post'."""
        events = handler.get_event_manager()
        events.trigger(
            post_event_name(request.operation),
            handler,
            PostEvent(request=request, response=response),
        )
        events.trigger(
            EXECUTE_POST, handler, PostEvent(request=request, response=response)
        )

    # ══════════════════════════════════════════════════════════
    # BATCH CREATE
    # ══════════════════════════════════════════════════════════

    def _execute_batch_create(
        self, request: Request, handler: ResourceHandler
    ) -> Response:
        """
        One handler call for the whole batch, with per-item create events.

        Every input item is announced as 'create.pre' before the call;
        every created item is announced as 'create.post' after it.
        An error response (or non-sequence content) skips the
        post-events and is returned as is.
        """
        items = request.content
        if not _is_sequence(items) or not all(
            isinstance(item, Mapping) for item in items
        ):
            raise BadRequestException(self._t(
                "Invalid batch operation request data."
            ))

        events = handler.get_event_manager()
        create_request = Request(CREATE, request.resource)

        for item in items:
            create_request.set_content(item)
            events.trigger(
                pre_event_name(CREATE), handler, PreEvent(request=create_request)
            )

        response = handler.batch_create(request)

        if not isinstance(response, Response):
            return response
        if response.is_error() or not _is_sequence(response.content):
            return response

        for representation in response.content:
            create_request.set_content(representation)
            events.trigger(
                post_event_name(CREATE),
                handler,
                PostEvent(request=create_request, response=Response(representation)),
            )

        return response
