"""Custom exception hierarchy for Cohort."""


class CohortError(Exception):
    """Base exception for all Cohort errors."""


class GraphConversionError(CohortError):
    """Raised when a network cannot be converted into a weighted graph."""


class NonNumericAttributeError(GraphConversionError):
    """Raised when the weight attribute holds a non-numeric value on some edge."""

    def __init__(self, attribute: str, source: str, target: str, value: object) -> None:
        self.attribute = attribute
        self.source = source
        self.target = target
        self.value = value
        super().__init__(
            f"Edge {source!r} -- {target!r} has non-numeric {attribute!r} value: {value!r}"
        )


class InvalidWeightError(GraphConversionError):
    """Raised when an edge weight is numeric but negative or NaN."""


class EmptyGraphError(CohortError):
    """Raised when clustering is requested on a graph without edges."""


class AttributeTypeMismatchError(CohortError):
    """Raised when a value does not match an attribute's declared type."""


class AlgorithmError(CohortError):
    """Raised when the clustering algorithm fails on its worker."""


class TaskCancelledError(CohortError):
    """Raised inside a task when its monitor has been cancelled."""
