"""
CMS API — Exceptions
======================
Failure kinds raised while processing an API request.

Only ValidationException (and its subclasses) is recovered inside
ApiManager.execute(): it is logged and converted into an
ERROR_VALIDATION response carrying the exception's ErrorStore.
Every other exception propagates to the caller.

The failures the manager raises itself (bad request, permission
denied, bad response) are validation exceptions. Each one files its
message in the error store under a fixed key so callers can tell
them apart:

    BadRequestException        → 'request'
    PermissionDeniedException  → 'permission'
    BadResponseException       → 'response'
"""

from __future__ import annotations

from typing import Optional

from cms.api.error_store import ErrorStore


ERROR_KEY_REQUEST = "request"
ERROR_KEY_PERMISSION = "permission"
ERROR_KEY_RESPONSE = "response"


class ApiException(Exception):
    """Base error for API request processing."""
    pass


class ValidationException(ApiException):
    """
    Request processing failed validation.

    Carries a structured ErrorStore (field → messages). When no
    store is given, an empty one is created.
    """

    def __init__(
        self,
        message: str = "",
        error_store: Optional[ErrorStore] = None,
    ):
        self.message = message
        self.error_store = error_store if error_store is not None else ErrorStore()
        super().__init__(message)

    def get_error_store(self) -> ErrorStore:
        return self.error_store

    def __str__(self) -> str:
        if self.error_store.has_errors():
            if self.message:
                return f"{self.message} [{self.error_store}]"
            return str(self.error_store)
        return self.message


class _KeyedValidationException(ValidationException):
    """Validation failure whose message is filed under a fixed key."""

    error_key = ERROR_KEY_REQUEST

    def __init__(self, message: str):
        error_store = ErrorStore()
        error_store.add_error(self.error_key, message)
        super().__init__(message, error_store)

    def __str__(self) -> str:
        return self.message


class BadRequestException(_KeyedValidationException):
    """Malformed or unsupported request."""

    error_key = ERROR_KEY_REQUEST


class OperationNotImplementedException(BadRequestException):
    """The resolved handler does not implement the requested operation."""


class PermissionDeniedException(_KeyedValidationException):
    """The access gate refused the operation."""

    error_key = ERROR_KEY_PERMISSION


class BadResponseException(_KeyedValidationException):
    """A handler returned something violating the response contract."""

    error_key = ERROR_KEY_RESPONSE
