"""
CMS API — Dispatch Results
============================
Typed outcome of running a request through the manager's pipeline.

    Ok(response)                  — pipeline completed, response validated
    ValidationFailed(error_store) — pipeline stopped on a validation failure

ApiManager converts a DispatchResult into a Response only at the
execute() boundary, so recoverability is decided by the result type
rather than by inspecting exception classes further up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cms.api.error_store import ErrorStore
from cms.api.exceptions import ValidationException
from cms.api.response import Response


@dataclass(frozen=True)
class Ok:
    response: Response


@dataclass(frozen=True)
class ValidationFailed:
    error_store: ErrorStore
    message: str = ""

    @classmethod
    def from_exception(cls, exc: ValidationException) -> "ValidationFailed":
        return cls(error_store=exc.get_error_store(), message=str(exc))


DispatchResult = Union[Ok, ValidationFailed]
