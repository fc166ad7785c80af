"""Node attribute storage — protocol plus in-memory and SQL adapters."""

from cohort.attributes.memory import InMemoryAttributeStore
from cohort.attributes.protocol import AttributeStore, AttributeType
from cohort.attributes.sql import SQLAttributeStore

__all__ = [
    "AttributeStore",
    "AttributeType",
    "InMemoryAttributeStore",
    "SQLAttributeStore",
]
