"""
CMS API — Error Store
========================
Field-keyed collection of validation messages.

An ErrorStore travels with a ValidationException from the point of
failure up to ApiManager.execute(), where it is merged into the
ERROR_VALIDATION response handed back to the caller.

Keys are field names (or a fixed category such as 'request').
Each key maps to an ordered list of human-readable messages.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Union


class ErrorStore:
    """
    Ordered mapping of key → list of messages.

    Usage:
        store = ErrorStore()
        store.add_error("title", "A title is required.")
        store.has_errors()          # True
        store.get_errors()          # {"title": ["A title is required."]}
    """

    def __init__(self, errors: Optional[Mapping[str, Iterable[str]]] = None):
        self._errors: Dict[str, List[str]] = {}
        if errors:
            self.add_errors(errors)

    def add_error(self, key: str, message: Union[str, "ErrorStore"]) -> None:
        """
        Add one message under a key.

        Passing another ErrorStore files all of its messages under
        this key, flattening the nested store.
        """
        if isinstance(message, ErrorStore):
            self.merge_errors(message, key)
            return
        if not isinstance(key, str) or not key:
            raise ValueError("Error key must be a non-empty string.")
        self._errors.setdefault(key, []).append(str(message))

    def add_errors(self, errors: Mapping[str, Iterable[str]]) -> None:
        """Add many messages from a key → messages mapping."""
        for key, messages in errors.items():
            if isinstance(messages, str):
                messages = [messages]
            for message in messages:
                self.add_error(key, message)

    def merge_errors(
        self, error_store: "ErrorStore", key: Optional[str] = None
    ) -> None:
        """
        Merge another store into this one.

        When key is given, every merged message is filed under it
        instead of its original key.
        """
        if not isinstance(error_store, ErrorStore):
            raise TypeError(
                f"Expected ErrorStore, got {type(error_store).__name__}."
            )
        for original_key, messages in error_store.get_errors().items():
            for message in messages:
                self.add_error(key or original_key, message)

    def get_errors(self) -> Dict[str, List[str]]:
        """Copy of all errors."""
        return {key: list(messages) for key, messages in self._errors.items()}

    def has_errors(self) -> bool:
        return bool(self._errors)

    def clear_errors(self) -> None:
        self._errors = {}

    def __bool__(self) -> bool:
        return self.has_errors()

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._errors.values())

    def __repr__(self) -> str:
        return f"ErrorStore({self._errors!r})"

    def __str__(self) -> str:
        parts = []
        for key, messages in self._errors.items():
            parts.append(f"{key}: {'; '.join(messages)}")
        return ", ".join(parts)
