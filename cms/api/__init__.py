"""
CMS API — Dispatch Layer
==========================
Every API call is a Request.
Every Request executed by the ApiManager produces exactly one Response.
Handlers persist; the manager validates, authorizes and announces.

Wiring helpers live in cms.api.wiring and are not re-exported here.
"""

from cms.api.error_store import ErrorStore
from cms.api.exceptions import (
    ApiException,
    BadRequestException,
    BadResponseException,
    OperationNotImplementedException,
    PermissionDeniedException,
    ValidationException,
)
from cms.api.request import (
    BATCH_CREATE,
    CREATE,
    DELETE,
    READ,
    SEARCH,
    UPDATE,
    VALID_OPERATIONS,
    Request,
    is_valid_operation,
)
from cms.api.response import (
    ERROR_BAD_REQUEST,
    ERROR_BAD_RESPONSE,
    ERROR_NOT_FOUND,
    ERROR_PERMISSION_DENIED,
    ERROR_VALIDATION,
    SUCCESS,
    VALID_STATUSES,
    Response,
    is_valid_status,
)
from cms.api.representation import (
    Representation,
    ResourceRepresentation,
    is_representation,
)
from cms.api.results import DispatchResult, Ok, ValidationFailed
from cms.api.handlers import AbstractResourceHandler, ResourceHandler
from cms.api.memory_handler import InMemoryResourceHandler
from cms.api.registry import (
    DuplicateHandlerError,
    HandlerNotRegisteredError,
    HandlerRegistry,
    HandlerRegistryError,
    RegistryLockedError,
)
from cms.api.translation import GettextTranslator, Translator
from cms.api.manager import ApiManager

__all__ = [
    # ── Errors ────────────────────────────────────────────────
    "ErrorStore",
    "ApiException",
    "ValidationException",
    "BadRequestException",
    "BadResponseException",
    "OperationNotImplementedException",
    "PermissionDeniedException",
    # ── Request ───────────────────────────────────────────────
    "Request",
    "SEARCH",
    "CREATE",
    "BATCH_CREATE",
    "READ",
    "UPDATE",
    "DELETE",
    "VALID_OPERATIONS",
    "is_valid_operation",
    # ── Response ──────────────────────────────────────────────
    "Response",
    "SUCCESS",
    "ERROR_VALIDATION",
    "ERROR_PERMISSION_DENIED",
    "ERROR_NOT_FOUND",
    "ERROR_BAD_REQUEST",
    "ERROR_BAD_RESPONSE",
    "VALID_STATUSES",
    "is_valid_status",
    # ── Representations ───────────────────────────────────────
    "Representation",
    "ResourceRepresentation",
    "is_representation",
    # ── Results ───────────────────────────────────────────────
    "DispatchResult",
    "Ok",
    "ValidationFailed",
    # ── Handlers ──────────────────────────────────────────────
    "ResourceHandler",
    "AbstractResourceHandler",
    "InMemoryResourceHandler",
    # ── Registry ──────────────────────────────────────────────
    "HandlerRegistry",
    "HandlerRegistryError",
    "HandlerNotRegisteredError",
    "DuplicateHandlerError",
    "RegistryLockedError",
    # ── Manager ───────────────────────────────────────────────
    "Translator",
    "GettextTranslator",
    "ApiManager",
]
