"""
CMS API — Response
====================
Outcome of one API call.

Handlers build a Response and set its status and content. The
manager validates it, merges errors on the validation path, and
attaches the originating Request just before returning it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from cms.api.error_store import ErrorStore

if TYPE_CHECKING:
    from cms.api.request import Request


# ══════════════════════════════════════════════════════════════
# STATUSES
# ══════════════════════════════════════════════════════════════

SUCCESS = "success"
ERROR_VALIDATION = "error_validation"
ERROR_PERMISSION_DENIED = "error_permission_denied"
ERROR_NOT_FOUND = "error_not_found"
ERROR_BAD_REQUEST = "error_bad_request"
ERROR_BAD_RESPONSE = "error_bad_response"

VALID_STATUSES = frozenset({
    SUCCESS,
    ERROR_VALIDATION,
    ERROR_PERMISSION_DENIED,
    ERROR_NOT_FOUND,
    ERROR_BAD_REQUEST,
    ERROR_BAD_RESPONSE,
})


def is_valid_status(status: Any) -> bool:
    """True iff status is one of the defined status codes."""
    return isinstance(status, str) and status in VALID_STATUSES


# ══════════════════════════════════════════════════════════════
# RESPONSE
# ══════════════════════════════════════════════════════════════

class Response:
    """
    One API call's outcome.

    Fields:
        status:        One of VALID_STATUSES (defaults to SUCCESS).
        content:       A representation or a list of representations.
        errors:        ErrorStore, filled on ERROR_VALIDATION.
        request:       Back-reference set by the manager.
        total_results: Total match count reported by search handlers.
    """

    def __init__(self, content: Any = None, status: str = SUCCESS):
        self.content = content
        self.status = status
        self.total_results: Optional[int] = None
        self._errors = ErrorStore()
        self._request: Optional["Request"] = None

    @staticmethod
    def is_valid_status(status: Any) -> bool:
        return is_valid_status(status)

    def set_status(self, status: str) -> None:
        self.status = status

    def set_content(self, content: Any) -> None:
        self.content = content

    def set_total_results(self, total_results: int) -> None:
        self.total_results = total_results

    def is_success(self) -> bool:
        return self.status == SUCCESS

    def is_error(self) -> bool:
        return self.status != SUCCESS

    # ── errors ────────────────────────────────────────────────

    @property
    def errors(self) -> ErrorStore:
        return self._errors

    def merge_errors(self, error_store: ErrorStore) -> None:
        self._errors.merge_errors(error_store)

    def get_errors(self) -> Dict[str, List[str]]:
        return self._errors.get_errors()

    # ── request back-reference ────────────────────────────────

    @property
    def request(self) -> Optional["Request"]:
        return self._request

    def set_request(self, request: "Request") -> None:
        self._request = request

    def __repr__(self) -> str:
        return f"Response(status={self.status!r}, content={self.content!r})"
