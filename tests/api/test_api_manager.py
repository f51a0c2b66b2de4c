"""
CMS API Manager — Dispatch Tests
===================================
Tests for ApiManager.execute() and its convenience builders.

Covers:
- Request shape validation (resource, operation, content)
- Unregistered resources
- Access gate denial
- Pre/post event order and the initialize/finalize flags
- Response contract validation
- Validation error path and request back-reference
- Non-validation exceptions propagate
"""

from __future__ import annotations

from typing import Any, List, Optional

import pytest

from cms.api.error_store import ErrorStore
from cms.api.exceptions import (
    ERROR_KEY_PERMISSION,
    ERROR_KEY_REQUEST,
    ERROR_KEY_RESPONSE,
    ValidationException,
)
from cms.api.handlers import AbstractResourceHandler
from cms.api.manager import ApiManager
from cms.api.registry import HandlerRegistry
from cms.api.representation import ResourceRepresentation
from cms.api.request import CREATE, READ, SEARCH, Request
from cms.api.response import (
    ERROR_NOT_FOUND,
    ERROR_VALIDATION,
    SUCCESS,
    Response,
)
from cms.events.models import Event, PostEvent, PreEvent


# ══════════════════════════════════════════════════════════════
# TEST INFRASTRUCTURE — STUBS
# ══════════════════════════════════════════════════════════════

class StubGate:
    """Access gate with a fixed answer that records its calls."""

    def __init__(self, allowed: bool = True):
        self.allowed = allowed
        self.calls: List[tuple] = []

    def user_is_allowed(self, handler: Any, operation: str) -> bool:
        self.calls.append((handler.get_resource_id(), operation))
        return self.allowed


class EchoTranslator:
    def translate(self, message: str) -> str:
        return message


class RecordingHandler(AbstractResourceHandler):
    """Handler returning canned responses and recording every call."""

    resource_name = "items"
    resource_id = "Cms\\Items"

    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        super().__init__()
        self.calls: List[tuple] = []
        self.response = response
        self.error = error

    def _answer(self, operation: str, request: Request) -> Any:
        self.calls.append((operation, request))
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return Response(ResourceRepresentation("items", 1, dict(request.content)))

    def search(self, request):
        return self._answer("search", request)

    def create(self, request):
        return self._answer("create", request)

    def read(self, request):
        return self._answer("read", request)

    def update(self, request):
        return self._answer("update", request)

    def delete(self, request):
        return self._answer("delete", request)


class EventLog:
    """Listener recording (event name, payload type) in trigger order."""

    NAMES = (
        "execute.pre", "execute.post",
        "search.pre", "search.post",
        "create.pre", "create.post",
        "read.pre", "read.post",
        "update.pre", "update.post",
        "delete.pre", "delete.post",
    )

    def __init__(self, handler: AbstractResourceHandler):
        self.events: List[Event] = []
        for name in self.NAMES:
            handler.get_event_manager().attach(name, self)

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    @property
    def names(self) -> List[str]:
        return [event.name for event in self.events]


# ══════════════════════════════════════════════════════════════
# FIXTURES
# ══════════════════════════════════════════════════════════════

@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def gate():
    return StubGate(allowed=True)


@pytest.fixture
def manager(handler, gate):
    registry = HandlerRegistry()
    registry.register(handler)
    registry.lock()
    return ApiManager(registry=registry, gate=gate)


@pytest.fixture
def event_log(handler):
    return EventLog(handler)


# ══════════════════════════════════════════════════════════════
# HAPPY PATH
# ══════════════════════════════════════════════════════════════

class TestSuccessfulDispatch:

    def test_create_returns_representation(self, manager, handler, event_log):
        handler.response = Response(
            ResourceRepresentation("items", 1, {"title": "A"})
        )
        request = Request(CREATE, "items")
        request.set_content({"title": "A"})

        response = manager.execute(request)

        assert response.status == SUCCESS
        assert isinstance(response.content, ResourceRepresentation)
        assert response.content.id == 1
        assert response.content.value("title") == "A"
        assert event_log.names == [
            "execute.pre", "create.pre", "create.post", "execute.post",
        ]

    def test_request_back_reference_is_the_same_instance(self, manager):
        request = Request(READ, "items")
        request.set_id(1)
        response = manager.execute(request)
        assert response.request is request

    def test_pre_events_carry_request_post_events_carry_response(
        self, manager, event_log
    ):
        request = Request(CREATE, "items")
        request.set_content({"title": "A"})
        response = manager.execute(request)

        pre = [e for e in event_log.events if e.name.endswith(".pre")]
        post = [e for e in event_log.events if e.name.endswith(".post")]
        assert all(isinstance(e.payload, PreEvent) for e in pre)
        assert all(isinstance(e.payload, PostEvent) for e in post)
        assert all(e.request is request for e in event_log.events)
        assert all(e.payload.response is response for e in post)

    def test_event_target_is_handler(self, manager, handler, event_log):
        manager.read("items", 1)
        assert all(e.target is handler for e in event_log.events)

    @pytest.mark.parametrize("operation", ["search", "create", "read", "update", "delete"])
    def test_each_operation_routes_to_matching_method(
        self, manager, handler, operation
    ):
        request = Request(operation, "items")
        request.set_id(1)
        response = manager.execute(request)
        assert response.status == SUCCESS
        assert [call[0] for call in handler.calls] == [operation]

    def test_empty_list_content_is_valid(self, manager, handler):
        handler.response = Response([])
        response = manager.search("items")
        assert response.status == SUCCESS
        assert response.content == []

    def test_error_status_without_content_is_returned(self, manager, handler, event_log):
        handler.response = Response(status=ERROR_NOT_FOUND)
        response = manager.read("items", 5)
        assert response.status == ERROR_NOT_FOUND
        assert response.request is not None
        assert "read.post" in event_log.names


# ══════════════════════════════════════════════════════════════
# CONVENIENCE BUILDERS
# ══════════════════════════════════════════════════════════════

class TestBuilders:

    def test_search_builds_request(self, manager, handler):
        manager.search("items", {"title": "A"}, options={"limit": 5})
        _, request = handler.calls[0]
        assert request.operation == SEARCH
        assert request.content == {"title": "A"}
        assert request.get_option("limit") == 5

    def test_create_passes_file_data(self, manager, handler):
        manager.create("items", {"title": "A"}, file_data={"file": "upload-1"})
        _, request = handler.calls[0]
        assert request.file_data == {"file": "upload-1"}

    def test_read_sets_id_and_default_content(self, manager, handler):
        manager.read("items", 42)
        _, request = handler.calls[0]
        assert request.id == 42
        assert request.content == {}

    def test_update_and_delete_set_id(self, manager, handler):
        manager.update("items", 7, {"title": "B"})
        manager.delete("items", 8)
        assert handler.calls[0][1].id == 7
        assert handler.calls[1][1].id == 8


# ══════════════════════════════════════════════════════════════
# REQUEST VALIDATION
# ══════════════════════════════════════════════════════════════

class TestRequestValidation:

    @pytest.mark.parametrize("operation", ["list", "", None, "CREATE", 3])
    def test_invalid_operation_is_validation_error(
        self, manager, handler, event_log, operation
    ):
        request = Request(operation, "items")
        response = manager.execute(request)

        assert response.status == ERROR_VALIDATION
        assert ERROR_KEY_REQUEST in response.get_errors()
        assert handler.calls == []
        assert event_log.events == []
        assert response.request is request

    @pytest.mark.parametrize("resource", [None, ""])
    def test_missing_resource_is_validation_error(self, manager, gate, resource):
        response = manager.execute(Request(READ, resource))
        assert response.status == ERROR_VALIDATION
        assert "resource" in response.get_errors()[ERROR_KEY_REQUEST][0]
        assert gate.calls == []

    @pytest.mark.parametrize("content", [["a", "b"], "title", 5, None])
    def test_non_mapping_content_rejected_before_resolution(
        self, manager, gate, handler, content
    ):
        request = Request(CREATE, "items")
        request.set_content(content)
        response = manager.execute(request)

        assert response.status == ERROR_VALIDATION
        assert "JSON object" in response.get_errors()[ERROR_KEY_REQUEST][0]
        assert gate.calls == []
        assert handler.calls == []

    def test_operation_without_dispatch_branch_is_bad_request(
        self, manager, handler, event_log, monkeypatch
    ):
        monkeypatch.setattr(
            "cms.api.manager.is_valid_operation", lambda operation: True
        )
        request = Request("list", "items")
        response = manager.execute(request)

        assert response.status == ERROR_VALIDATION
        assert response.get_errors()[ERROR_KEY_REQUEST] == [
            'The API does not support the "list" request operation.'
        ]
        assert handler.calls == []
        assert event_log.names == ["execute.pre"]
        assert response.request is request

    def test_unregistered_resource_names_resource(self, manager, gate, event_log):
        response = manager.read("widgets", 1)

        assert response.status == ERROR_VALIDATION
        message = response.get_errors()[ERROR_KEY_REQUEST][0]
        assert '"widgets"' in message
        assert "No handler registered" not in message
        assert gate.calls == []
        assert event_log.events == []


# ══════════════════════════════════════════════════════════════
# ACCESS GATE
# ══════════════════════════════════════════════════════════════

class TestAccessGate:

    def test_gate_receives_handler_and_operation(self, manager, gate):
        manager.read("items", 1)
        assert gate.calls == [("Cms\\Items", "read")]

    def test_denied_before_any_event(self, manager, gate, handler, event_log):
        gate.allowed = False
        response = manager.create("items", {"title": "A"})

        assert response.status == ERROR_VALIDATION
        message = response.get_errors()[ERROR_KEY_PERMISSION][0]
        assert "create" in message
        assert "Cms\\Items" in message
        assert event_log.events == []
        assert handler.calls == []


# ══════════════════════════════════════════════════════════════
# METADATA FLAGS
# ══════════════════════════════════════════════════════════════

class TestMetadataFlags:

    def test_initialize_false_suppresses_pre_events(self, manager, event_log):
        request = Request(READ, "items")
        request.set_metadata("initialize", False)
        manager.execute(request)
        assert event_log.names == ["read.post", "execute.post"]

    def test_finalize_false_suppresses_post_events(self, manager, event_log):
        request = Request(READ, "items")
        request.set_metadata("finalize", False)
        manager.execute(request)
        assert event_log.names == ["execute.pre", "read.pre"]

    def test_both_false_suppresses_all_events(self, manager, handler, event_log):
        request = Request(READ, "items")
        request.set_metadata("initialize", False)
        request.set_metadata("finalize", False)
        response = manager.execute(request)
        assert event_log.events == []
        assert response.status == SUCCESS
        assert len(handler.calls) == 1


# ══════════════════════════════════════════════════════════════
# RESPONSE VALIDATION
# ══════════════════════════════════════════════════════════════

class TestResponseValidation:

    @pytest.mark.parametrize("bad_response", [0, {"id": 1}, "ok"])
    def test_non_response_is_bad_response(self, manager, handler, event_log, bad_response):
        handler.response = bad_response
        response = manager.read("items", 1)

        assert response.status == ERROR_VALIDATION
        message = response.get_errors()[ERROR_KEY_RESPONSE][0]
        assert '"read"' in message and '"items"' in message
        assert "read.post" not in event_log.names

    def test_invalid_status_is_bad_response(self, manager, handler):
        handler.response = Response(
            ResourceRepresentation("items", 1, {}), status="teapot"
        )
        response = manager.read("items", 1)
        assert response.status == ERROR_VALIDATION
        assert "status" in response.get_errors()[ERROR_KEY_RESPONSE][0]

    @pytest.mark.parametrize("content", [
        {"id": 1},
        [ResourceRepresentation("items", 1, {}), {"id": 2}],
        "raw",
        42,
    ])
    def test_invalid_content_is_bad_response(self, manager, handler, content):
        handler.response = Response(content)
        response = manager.read("items", 1)
        assert response.status == ERROR_VALIDATION
        assert "content" in response.get_errors()[ERROR_KEY_RESPONSE][0]

    def test_success_without_content_is_bad_response(self, manager, handler):
        handler.response = Response()
        response = manager.read("items", 1)
        assert response.status == ERROR_VALIDATION
        assert ERROR_KEY_RESPONSE in response.get_errors()


# ══════════════════════════════════════════════════════════════
# ERROR PATH
# ══════════════════════════════════════════════════════════════

class TestErrorPath:

    def test_handler_validation_exception_becomes_error_response(
        self, manager, handler, event_log
    ):
        handler.error = ValidationException(
            "Not found", ErrorStore({"id": ["not found"]})
        )
        request = Request(READ, "items")
        request.set_id(999)

        response = manager.execute(request)

        assert response.status == ERROR_VALIDATION
        assert response.get_errors() == {"id": ["not found"]}
        assert response.request is request
        assert response.content is None
        assert event_log.names == ["execute.pre", "read.pre"]

    def test_validation_failure_is_logged(self, manager, handler, caplog):
        handler.error = ValidationException(
            "Bad data", ErrorStore({"title": ["required"]})
        )
        with caplog.at_level("ERROR", logger="cms.api"):
            manager.create("items", {})
        assert any("Bad data" in record.getMessage() for record in caplog.records)

    def test_other_exceptions_propagate(self, manager, handler):
        handler.error = RuntimeError("database gone")
        with pytest.raises(RuntimeError, match="database gone"):
            manager.read("items", 1)

    def test_listener_failure_propagates(self, manager, handler):
        def broken(event):
            raise LookupError("listener broke")

        handler.get_event_manager().attach("read.pre", broken)
        with pytest.raises(LookupError):
            manager.read("items", 1)
        assert handler.calls == []

    def test_listener_validation_exception_becomes_error_response(
        self, manager, handler
    ):
        def veto(event):
            raise ValidationException("Vetoed", ErrorStore({"title": ["taken"]}))

        handler.get_event_manager().attach("create.pre", veto)
        response = manager.create("items", {"title": "A"})
        assert response.status == ERROR_VALIDATION
        assert response.get_errors() == {"title": ["taken"]}
        assert handler.calls == []

    def test_not_implemented_operation(self, gate):
        class ReadOnlyHandler(AbstractResourceHandler):
            resource_name = "logs"

            def read(self, request):
                return Response(ResourceRepresentation("logs", 1, {}))

        registry = HandlerRegistry([ReadOnlyHandler()])
        manager = ApiManager(registry=registry, gate=gate, translator=EchoTranslator())
        response = manager.delete("logs", 1)
        assert response.status == ERROR_VALIDATION
        assert '"delete"' in response.get_errors()[ERROR_KEY_REQUEST][0]


# ══════════════════════════════════════════════════════════════
# TRANSLATION
# ══════════════════════════════════════════════════════════════

class TestTranslation:

    def test_messages_pass_through_translator(self, handler, gate):
        class TaggingTranslator:
            def translate(self, message):
                return "[fr] " + message

        registry = HandlerRegistry([handler])
        manager = ApiManager(
            registry=registry, gate=gate, translator=TaggingTranslator()
        )
        response = manager.read("widgets", 1)
        assert response.get_errors()[ERROR_KEY_REQUEST] == [
            '[fr] The API does not support the "widgets" resource.'
        ]

    def test_translation_missing_placeholder_falls_back_to_template(
        self, handler, gate
    ):
        class LossyTranslator:
            def translate(self, message):
                return "Ressource non prise en charge."

        manager = ApiManager(
            registry=HandlerRegistry([handler]),
            gate=gate,
            translator=LossyTranslator(),
        )
        response = manager.read("widgets", 1)

        assert response.status == ERROR_VALIDATION
        assert response.get_errors()[ERROR_KEY_REQUEST] == [
            'The API does not support the "widgets" resource.'
        ]

    def test_default_translator_uses_gettext(self, manager):
        response = manager.read("widgets", 1)
        assert response.get_errors()[ERROR_KEY_REQUEST] == [
            'The API does not support the "widgets" resource.'
        ]
