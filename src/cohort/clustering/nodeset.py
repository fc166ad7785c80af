"""Node sets over a WeightedGraph with internal/boundary weight aggregates."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cohort.clustering.quality import nan_to_zero

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from cohort.clustering.quality import QualityFunction
    from cohort.graph.weighted import WeightedGraph


def aggregate_weights(graph: WeightedGraph, members: frozenset[int] | set[int]) -> tuple[float, float]:
    """Compute ``(internal_weight, boundary_weight)`` of *members* from scratch.

    Internal edges are seen from both endpoints, hence the halving.
    """
    internal: list[float] = []
    boundary: list[float] = []
    for idx in members:
        for nbr, weight in graph.neighbors(idx):
            if nbr in members:
                internal.append(weight)
            else:
                boundary.append(weight)
    return math.fsum(internal) / 2.0, math.fsum(boundary)


class NodeSet:
    """Read-only set of node indices of one :class:`WeightedGraph`.

    Membership tests are O(1).  Iteration yields members in ascending index
    order.  The total weight of edges with both endpoints inside the set
    (``internal_weight``) and with exactly one endpoint inside
    (``boundary_weight``) are computed once on construction.
    """

    def __init__(self, graph: WeightedGraph, members: Iterable[int] = ()) -> None:
        self._graph = graph
        self._members: frozenset[int] | set[int] = frozenset(_checked(graph, members))
        self._internal, self._boundary = aggregate_weights(graph, self._members)

    @property
    def graph(self) -> WeightedGraph:
        """The graph this set belongs to."""
        return self._graph

    @property
    def internal_weight(self) -> float:
        """Total weight of edges with both endpoints in the set."""
        return self._internal

    @property
    def boundary_weight(self) -> float:
        """Total weight of edges with exactly one endpoint in the set."""
        return self._boundary

    @property
    def size(self) -> int:
        """Number of members."""
        return len(self._members)

    @property
    def density(self) -> float:
        """Internal weight divided by the number of possible internal edges."""
        n = len(self._members)
        if n < 2:
            return 0.0
        return self._internal / (n * (n - 1) / 2.0)

    @property
    def node_ids(self) -> list[str]:
        """External identifiers of the members, in iteration order."""
        return [self._graph.node_id(idx) for idx in self]

    def contains(self, idx: int) -> bool:
        """Return whether node *idx* is a member."""
        return idx in self._members

    def __contains__(self, idx: object) -> bool:
        return idx in self._members

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._members))

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeSet):
            return NotImplemented
        return self._graph is other._graph and self._members == other._members

    def __hash__(self) -> int:
        return hash((id(self._graph), frozenset(self._members)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.node_ids!r})"


class MutableNodeSet(NodeSet):
    """Node set whose aggregates are maintained incrementally.

    :meth:`add` and :meth:`remove` touch only the edges incident to the node
    being moved, so each mutation costs O(degree).  The two operations are
    exact inverses of each other.
    """

    def __init__(self, graph: WeightedGraph, members: Iterable[int] = ()) -> None:
        self._graph = graph
        self._members = set()
        self._internal = 0.0
        self._boundary = 0.0
        for idx in _checked(graph, members):
            self.add(idx)

    def add(self, idx: int) -> bool:
        """Add node *idx*.  Return False if it was already a member."""
        if idx in self._members:
            return False
        for nbr, weight in self._graph.neighbors(idx):
            if nbr in self._members:
                self._boundary -= weight
                self._internal += weight
            else:
                self._boundary += weight
        self._members.add(idx)
        return True

    def remove(self, idx: int) -> bool:
        """Remove node *idx*.  Return False if it was not a member."""
        if idx not in self._members:
            return False
        self._members.remove(idx)
        if not self._members:
            self._internal = 0.0
            self._boundary = 0.0
            return True
        for nbr, weight in self._graph.neighbors(idx):
            if nbr in self._members:
                self._internal -= weight
                self._boundary += weight
            else:
                self._boundary -= weight
        return True

    def clear(self) -> None:
        """Remove every member."""
        self._members.clear()
        self._internal = 0.0
        self._boundary = 0.0

    def recalculate(self) -> None:
        """Recompute the aggregates from scratch."""
        self._internal, self._boundary = aggregate_weights(self._graph, self._members)

    def freeze(self) -> NodeSet:
        """Return a read-only snapshot of the current membership."""
        return NodeSet(self._graph, self._members)

    __hash__ = None  # type: ignore[assignment]


class ValuedNodeSet(NodeSet):
    """A node set paired with the quality it had when it was created."""

    def __init__(self, graph: WeightedGraph, members: Iterable[int], quality: float) -> None:
        super().__init__(graph, members)
        self.quality = quality

    @classmethod
    def from_node_set(cls, node_set: NodeSet, func: QualityFunction) -> ValuedNodeSet:
        """Score *node_set* with *func*; an undefined score becomes 0.0."""
        return cls(node_set.graph, node_set, nan_to_zero(func.calculate(node_set)))

    def __repr__(self) -> str:
        return f"ValuedNodeSet({self.node_ids!r}, quality={self.quality!r})"


def _checked(graph: WeightedGraph, members: Iterable[int]) -> list[int]:
    """Return *members* as a list, raising ``IndexError`` on out-of-range indices."""
    result = list(members)
    n = graph.node_count
    for idx in result:
        if not 0 <= idx < n:
            msg = f"Node index {idx} out of range for {n} nodes"
            raise IndexError(msg)
    return result
