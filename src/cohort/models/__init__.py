"""SQLModel database models for Cohort."""

from cohort.models.attributes import AttributeDefinition, NodeAttribute

__all__ = [
    "AttributeDefinition",
    "NodeAttribute",
]
