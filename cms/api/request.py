"""
CMS API — Request
===================
Transport-agnostic description of one API call's intent.

A Request is built by a caller (HTTP view, CLI command, internal
service) and handed to ApiManager.execute().

Rules:
- operation and resource are fixed at construction (read-only)
- id, content, file_data, options and metadata are set before the
  first dispatch and treated as fixed afterwards
- the manager may reuse a Request as a template by replacing only
  its content (batch create)
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


# ══════════════════════════════════════════════════════════════
# OPERATIONS
# ══════════════════════════════════════════════════════════════

SEARCH = "search"
CREATE = "create"
BATCH_CREATE = "batch_create"
READ = "read"
UPDATE = "update"
DELETE = "delete"

VALID_OPERATIONS = frozenset({
    SEARCH,
    CREATE,
    BATCH_CREATE,
    READ,
    UPDATE,
    DELETE,
})

# Metadata flags read by the manager.
METADATA_INITIALIZE = "initialize"
METADATA_FINALIZE = "finalize"


def is_valid_operation(operation: Any) -> bool:
    """True iff operation is one of the six API operations."""
    return isinstance(operation, str) and operation in VALID_OPERATIONS


# ══════════════════════════════════════════════════════════════
# REQUEST
# ══════════════════════════════════════════════════════════════

class Request:
    """
    One API call.

    Usage:
        request = Request(CREATE, "items")
        request.set_content({"title": "A"})
        request.set_option("flush", False)
        request.set_metadata("finalize", False)
    """

    def __init__(self, operation: str, resource: str):
        self._operation = operation
        self._resource = resource
        self._id: Any = None
        self._content: Any = {}
        self._file_data: Dict[str, Any] = {}
        self._options: Dict[str, Any] = {}
        self._metadata: Dict[str, Any] = {}

    # ── fixed identity ────────────────────────────────────────

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def resource(self) -> str:
        return self._resource

    @staticmethod
    def is_valid_operation(operation: Any) -> bool:
        return is_valid_operation(operation)

    # ── id ────────────────────────────────────────────────────

    @property
    def id(self) -> Any:
        return self._id

    def set_id(self, id: Any) -> None:
        self._id = id

    # ── content ───────────────────────────────────────────────

    @property
    def content(self) -> Any:
        return self._content

    def set_content(self, content: Any) -> None:
        """
        Set the request payload.

        Not validated here: execute() rejects non-mapping content,
        so a malformed payload still yields a structured response.
        """
        self._content = content

    def get_value(self, key: str, default: Any = None) -> Any:
        """Read one key from a mapping content."""
        if isinstance(self._content, Mapping):
            return self._content.get(key, default)
        return default

    # ── file data ─────────────────────────────────────────────

    @property
    def file_data(self) -> Dict[str, Any]:
        return self._file_data

    def set_file_data(self, file_data: Optional[Mapping[str, Any]]) -> None:
        self._file_data = dict(file_data or {})

    # ── options ───────────────────────────────────────────────

    @property
    def options(self) -> Dict[str, Any]:
        return self._options

    def set_option(self, key: Any, value: Any = None) -> None:
        """
        Set one option, or replace all options with a mapping.

            request.set_option("limit", 10)
            request.set_option({"limit": 10, "offset": 0})
        """
        if isinstance(key, Mapping):
            self._options = dict(key)
            return
        if key is None:
            self._options = {}
            return
        self._options[key] = value

    def get_option(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Get one option, or a copy of all options when key is None."""
        if key is None:
            return dict(self._options)
        return self._options.get(key, default)

    # ── metadata ──────────────────────────────────────────────

    @property
    def metadata(self) -> Dict[str, Any]:
        return self._metadata

    def set_metadata(self, key: str, value: Any) -> None:
        self._metadata[key] = value

    def get_metadata(self, key: Optional[str] = None, default: Any = None) -> Any:
        if key is None:
            return dict(self._metadata)
        return self._metadata.get(key, default)

    def __repr__(self) -> str:
        return (
            f"Request(operation={self._operation!r}, "
            f"resource={self._resource!r}, id={self._id!r})"
        )
