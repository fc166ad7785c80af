"""SQLAttributeStore — AttributeStore persisted through SQLModel."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete
from sqlmodel import Session, select

from cohort.attributes.protocol import AttributeType
from cohort.exceptions import AttributeTypeMismatchError
from cohort.models.attributes import AttributeDefinition, NodeAttribute

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


class SQLAttributeStore:
    """Node attributes stored in ``cohort_attribute_definitions`` and
    ``cohort_node_attributes`` on a synchronous SQLAlchemy engine.

    ``set_attributes`` writes all values in one transaction.  Deleting an
    attribute drops its type and values but keeps its description, so a
    re-declared attribute is still documented.
    """

    def __init__(self, engine: Engine, *, create_tables: bool = True) -> None:
        self._engine = engine
        if create_tables:
            AttributeDefinition.__table__.create(engine, checkfirst=True)  # type: ignore[attr-defined]
            NodeAttribute.__table__.create(engine, checkfirst=True)  # type: ignore[attr-defined]

    def get_type(self, name: str) -> AttributeType | None:
        with Session(self._engine) as session:
            definition = session.get(AttributeDefinition, name)
            if definition is None or definition.type is None:
                return None
            return AttributeType(definition.type)

    def set_attribute(self, node_id: str, name: str, value: Any) -> None:
        self.set_attributes(name, {node_id: value})

    def set_attributes(self, name: str, values: Mapping[str, Any]) -> None:
        """Write *name* for every node in *values*, committing once.

        A type mismatch raises before anything is flushed, and the session
        rolls back on any other failure, so either every value is stored or
        none is.
        """
        if not values:
            return
        with Session(self._engine) as session:
            definition = session.get(AttributeDefinition, name)
            if definition is None:
                definition = AttributeDefinition(name=name)
            declared = definition.type
            for value in values.values():
                value_type = AttributeType.of(value).value
                if declared is None:
                    declared = value_type
                elif declared != value_type:
                    msg = f"Attribute {name!r} is declared {declared}, got {value_type} value {value!r}"
                    raise AttributeTypeMismatchError(msg)
            definition.type = declared
            session.add(definition)

            existing = {
                row.node_id: row
                for row in session.exec(
                    select(NodeAttribute).where(
                        NodeAttribute.name == name,
                        NodeAttribute.node_id.in_(list(values)),  # type: ignore[attr-defined]
                    )
                )
            }
            now = datetime.now(UTC)
            for node_id, value in values.items():
                row = existing.get(node_id)
                if row is None:
                    row = NodeAttribute(name=name, node_id=node_id)
                row.value_json = json.dumps(value)
                row.updated_at = now
                session.add(row)
            session.commit()
        logger.debug("Wrote %d values of %r", len(values), name)

    def get_attribute(self, node_id: str, name: str) -> Any:
        """Return the value of *name* on *node_id*, or ``None`` if unset."""
        with Session(self._engine) as session:
            row = session.exec(
                select(NodeAttribute).where(
                    NodeAttribute.name == name, NodeAttribute.node_id == node_id
                )
            ).first()
            return None if row is None else json.loads(row.value_json)

    def values(self, name: str) -> dict[str, Any]:
        """Return all ``node_id -> value`` pairs of *name*."""
        with Session(self._engine) as session:
            rows = session.exec(select(NodeAttribute).where(NodeAttribute.name == name)).all()
            return {row.node_id: json.loads(row.value_json) for row in rows}

    def delete_attribute(self, name: str) -> bool:
        """Drop the type and values of *name*.  Return True if it was declared."""
        with Session(self._engine) as session:
            definition = session.get(AttributeDefinition, name)
            existed = definition is not None and definition.type is not None
            if definition is not None:
                definition.type = None
                session.add(definition)
            session.execute(delete(NodeAttribute).where(NodeAttribute.name == name))  # type: ignore[arg-type]
            session.commit()
        if existed:
            logger.debug("Deleted attribute %r", name)
        return existed

    def set_description(self, name: str, description: str) -> None:
        with Session(self._engine) as session:
            definition = session.get(AttributeDefinition, name)
            if definition is None:
                definition = AttributeDefinition(name=name)
            definition.description = description
            session.add(definition)
            session.commit()

    def get_description(self, name: str) -> str | None:
        with Session(self._engine) as session:
            definition = session.get(AttributeDefinition, name)
            return None if definition is None else definition.description
