"""Attribute models — declared node attributes and their values."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class AttributeDefinition(SQLModel, table=True):
    """A node attribute name with its declared type and description."""

    __tablename__ = "cohort_attribute_definitions"

    name: str = Field(primary_key=True)
    type: str | None = Field(default=None)
    description: str = Field(default="")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class NodeAttribute(SQLModel, table=True):
    """The value of one attribute on one node, JSON-encoded."""

    __tablename__ = "cohort_node_attributes"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(index=True)
    node_id: str = Field(index=True)
    value_json: str = Field(default="null")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
