"""AttributeStore protocol — the narrow view Cohort has of node attributes."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


class AttributeType(Enum):
    """Declared type of a node attribute."""

    STRING = "string"
    FLOATING = "floating"
    INTEGER = "integer"
    BOOLEAN = "boolean"

    @classmethod
    def of(cls, value: Any) -> AttributeType:
        """Infer the attribute type of a Python value.  Raises ``TypeError``."""
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOATING
        if isinstance(value, str):
            return cls.STRING
        msg = f"Unsupported attribute value type: {type(value).__name__}"
        raise TypeError(msg)


@runtime_checkable
class AttributeStore(Protocol):
    """Node attribute storage owned by the host.

    An attribute name has one declared type for all nodes.  The first
    ``set_attribute`` for an undeclared name declares it with the type of
    the value; later values of a different type raise
    ``AttributeTypeMismatchError``.  ``set_attributes`` writes one attribute
    for many nodes as a single all-or-nothing operation.
    """

    def get_type(self, name: str) -> AttributeType | None: ...
    def set_attribute(self, node_id: str, name: str, value: Any) -> None: ...
    def set_attributes(self, name: str, values: Mapping[str, Any]) -> None: ...
    def get_attribute(self, node_id: str, name: str) -> Any: ...
    def delete_attribute(self, name: str) -> bool: ...
    def set_description(self, name: str, description: str) -> None: ...
