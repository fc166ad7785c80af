"""Quality functions — pluggable scoring of node sets.

A quality function maps a node set to a real-valued cohesion score.  Beyond
scoring a whole set, every implementation must answer "what would the score
be if this one node joined / left?" by looking only at the edges incident
to that node.  Clustering algorithms query these deltas constantly and the
affinity annotation queries them once per node of the graph, so they must
stay O(degree).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cohort.clustering.nodeset import NodeSet


@runtime_checkable
class QualityFunction(Protocol):
    """Scores node sets and single-node changes to them.

    Implementations are stateless apart from their construction parameters.
    None of the methods may modify the node set they are given.
    """

    name: str

    def calculate(self, node_set: NodeSet) -> float: ...
    def quality_after_addition(self, node_set: NodeSet, idx: int) -> float: ...
    def quality_after_removal(self, node_set: NodeSet, idx: int) -> float: ...
    def addition_affinity(self, node_set: NodeSet, idx: int) -> float: ...
    def removal_affinity(self, node_set: NodeSet, idx: int) -> float: ...


def nan_to_zero(value: float) -> float:
    """Map an undefined score to 0.0."""
    return 0.0 if math.isnan(value) else value


def split_incident_weight(node_set: NodeSet, idx: int) -> tuple[float, float]:
    """Split the weight incident to *idx* into ``(towards members, towards others)``.

    *idx* itself is never counted as a member here, so the split is the same
    whether or not *idx* currently belongs to *node_set*.
    """
    inward = 0.0
    outward = 0.0
    for nbr, weight in node_set.graph.neighbors(idx):
        if nbr in node_set:
            inward += weight
        else:
            outward += weight
    return inward, outward


class CohesivenessFunction:
    """Cohesiveness: ``internal / (internal + boundary + penalty)``.

    *penalty* models the weight of boundary edges that are missing from
    the (incomplete) network data.  When the denominator is zero the score
    is undefined and :meth:`calculate` returns NaN.
    """

    name = "cohesiveness"

    def __init__(self, penalty: float = 2.0) -> None:
        if penalty < 0 or math.isnan(penalty):
            msg = f"penalty must be non-negative, got {penalty!r}"
            raise ValueError(msg)
        self.penalty = float(penalty)

    def _score(self, internal: float, boundary: float) -> float:
        denominator = internal + boundary + self.penalty
        if denominator == 0:
            return math.nan
        return internal / denominator

    def calculate(self, node_set: NodeSet) -> float:
        return self._score(node_set.internal_weight, node_set.boundary_weight)

    def quality_after_addition(self, node_set: NodeSet, idx: int) -> float:
        """Score *node_set* would have with *idx* added."""
        if idx in node_set:
            msg = f"Node {idx} is already a member"
            raise ValueError(msg)
        inward, outward = split_incident_weight(node_set, idx)
        return self._score(
            node_set.internal_weight + inward,
            node_set.boundary_weight - inward + outward,
        )

    def quality_after_removal(self, node_set: NodeSet, idx: int) -> float:
        """Score *node_set* would have with *idx* removed."""
        if idx not in node_set:
            msg = f"Node {idx} is not a member"
            raise ValueError(msg)
        if len(node_set) == 1:
            return self._score(0.0, 0.0)
        inward, outward = split_incident_weight(node_set, idx)
        return self._score(
            node_set.internal_weight - inward,
            node_set.boundary_weight + inward - outward,
        )

    def addition_affinity(self, node_set: NodeSet, idx: int) -> float:
        """``calculate(node_set + idx) - calculate(node_set)``."""
        return self.quality_after_addition(node_set, idx) - self.calculate(node_set)

    def removal_affinity(self, node_set: NodeSet, idx: int) -> float:
        """``calculate(node_set) - calculate(node_set - idx)``."""
        return self.calculate(node_set) - self.quality_after_removal(node_set, idx)

    def __repr__(self) -> str:
        return f"CohesivenessFunction(penalty={self.penalty!r})"


_QUALITY_FUNCTIONS: dict[str, type[Any]] = {
    CohesivenessFunction.name: CohesivenessFunction,
}


def register_quality_function(name: str, factory: type[Any]) -> None:
    """Make *factory* available to :func:`get_quality_function` under *name*."""
    _QUALITY_FUNCTIONS[name] = factory


def available_quality_functions() -> list[str]:
    """Names accepted by :func:`get_quality_function`."""
    return sorted(_QUALITY_FUNCTIONS)


def get_quality_function(name: str, **params: Any) -> QualityFunction:
    """Instantiate the quality function registered as *name*."""
    try:
        factory = _QUALITY_FUNCTIONS[name]
    except KeyError:
        msg = f"Unknown quality function {name!r}; available: {available_quality_functions()}"
        raise ValueError(msg) from None
    return factory(**params)
