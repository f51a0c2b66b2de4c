"""
CMS API — Representations
===========================
A representation is the only kind of value a handler may place in
a successful response's content.

The manager never looks inside a representation. It only checks the
"is a representation" capability so it can validate response shape
without knowing resource-specific detail.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping


class Representation(ABC):
    """Marker base for handler-produced response items."""

    @abstractmethod
    def json_serialize(self) -> Dict[str, Any]:
        """JSON-ready form of this representation."""


def is_representation(value: Any) -> bool:
    return isinstance(value, Representation)


class ResourceRepresentation(Representation):
    """
    Generic representation of one stored resource record.

    Fields:
        resource_name: Name the resource is registered under.
        id:            Record identifier.
        data:          Record fields (copied, read through the mapping API).
    """

    def __init__(self, resource_name: str, id: Any, data: Mapping[str, Any]):
        self._resource_name = resource_name
        self._id = id
        self._data = dict(data)

    @property
    def resource_name(self) -> str:
        return self._resource_name

    @property
    def id(self) -> Any:
        return self._id

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data)

    def value(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def json_serialize(self) -> Dict[str, Any]:
        serialized = {"id": self._id}
        serialized.update(self._data)
        return serialized

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceRepresentation):
            return NotImplemented
        return (
            self._resource_name == other._resource_name
            and self._id == other._id
            and self._data == other._data
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ResourceRepresentation({self._resource_name!r}, "
            f"id={self._id!r}, data={self._data!r})"
        )
