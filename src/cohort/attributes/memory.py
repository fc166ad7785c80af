"""InMemoryAttributeStore — dict-backed AttributeStore."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cohort.attributes.protocol import AttributeType
from cohort.exceptions import AttributeTypeMismatchError

if TYPE_CHECKING:
    from collections.abc import Mapping


class InMemoryAttributeStore:
    """Keeps node attributes in plain dicts.

    ``writes`` counts node values written.
    """

    def __init__(self) -> None:
        self._types: dict[str, AttributeType] = {}
        self._values: dict[str, dict[str, Any]] = {}
        self._descriptions: dict[str, str] = {}
        self.writes = 0

    def get_type(self, name: str) -> AttributeType | None:
        return self._types.get(name)

    def declare(self, name: str, attr_type: AttributeType) -> None:
        """Declare *name* with *attr_type* without writing any value."""
        self._types.setdefault(name, attr_type)

    def set_attribute(self, node_id: str, name: str, value: Any) -> None:
        self.set_attributes(name, {node_id: value})

    def set_attributes(self, name: str, values: Mapping[str, Any]) -> None:
        """Write *name* for every node in *values*; nothing is written on a type error."""
        if not values:
            return
        declared = self._types.get(name)
        for value in values.values():
            value_type = AttributeType.of(value)
            if declared is None:
                declared = value_type
            elif declared is not value_type:
                msg = f"Attribute {name!r} is declared {declared.value}, got {value_type.value} value {value!r}"
                raise AttributeTypeMismatchError(msg)
        self._types[name] = declared
        self._values.setdefault(name, {}).update(values)
        self.writes += len(values)

    def get_attribute(self, node_id: str, name: str) -> Any:
        """Return the value of *name* on *node_id*, or ``None`` if unset."""
        return self._values.get(name, {}).get(node_id)

    def values(self, name: str) -> dict[str, Any]:
        """Return a copy of all ``node_id -> value`` pairs of *name*."""
        return dict(self._values.get(name, {}))

    def delete_attribute(self, name: str) -> bool:
        """Drop *name*, its declaration and its values.  Return True if it existed."""
        existed = name in self._types
        self._types.pop(name, None)
        self._values.pop(name, None)
        return existed

    def set_description(self, name: str, description: str) -> None:
        self._descriptions[name] = description

    def get_description(self, name: str) -> str | None:
        return self._descriptions.get(name)
