"""WeightedGraph — immutable undirected weighted graph with dense node indices."""

from __future__ import annotations

import logging
import math
import numbers
from typing import TYPE_CHECKING

import rustworkx

from cohort.exceptions import GraphConversionError, InvalidWeightError, NonNumericAttributeError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from cohort.graph.protocols import Network

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1.0


class WeightedGraph:
    """Immutable undirected graph over node indices ``0 .. node_count - 1``.

    Each index maps to the identifier of the external node it was built
    from, in the order the external network enumerated them.  Parallel
    edges between the same pair of nodes are merged into one edge whose
    weight is the sum of theirs; self-loops are dropped.

    Adjacency lists and node strengths are computed once at construction so
    that :meth:`neighbors` and :meth:`strength` are O(degree) and O(1).
    """

    def __init__(
        self,
        node_ids: Sequence[str],
        edges: Iterable[tuple[int, int, float]] = (),
    ) -> None:
        self._node_ids: tuple[str, ...] = tuple(node_ids)
        self._index: dict[str, int] = {}
        for idx, node_id in enumerate(self._node_ids):
            if node_id in self._index:
                msg = f"Duplicate node identifier: {node_id!r}"
                raise ValueError(msg)
            self._index[node_id] = idx

        n = len(self._node_ids)
        merged: dict[tuple[int, int], float] = {}
        for u, v, weight in edges:
            if not (0 <= u < n and 0 <= v < n):
                msg = f"Edge endpoint out of range: ({u}, {v}) for {n} nodes"
                raise ValueError(msg)
            if u == v:
                logger.debug("Dropping self-loop on node %r", self._node_ids[u])
                continue
            key = (u, v) if u < v else (v, u)
            merged[key] = merged.get(key, 0.0) + float(weight)

        self._graph: rustworkx.PyGraph = rustworkx.PyGraph(multigraph=False)
        self._graph.add_nodes_from(list(range(n)))
        self._graph.extend_from_weighted_edge_list(
            [(u, v, w) for (u, v), w in merged.items()]
        )

        self._adjacency: tuple[tuple[tuple[int, float], ...], ...] = tuple(
            tuple(self._graph.adj(idx).items()) for idx in range(n)
        )
        self._strength: tuple[float, ...] = tuple(
            math.fsum(w for _, w in nbrs) for nbrs in self._adjacency
        )

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        """Number of nodes in the graph."""
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        """Number of (merged) edges in the graph."""
        return self._graph.num_edges()

    @property
    def total_weight(self) -> float:
        """Sum of all edge weights."""
        return math.fsum(self._strength) / 2.0

    # ------------------------------------------------------------------
    # Node identity mapping
    # ------------------------------------------------------------------

    @property
    def node_mapping(self) -> tuple[str, ...]:
        """External node identifiers, indexed by internal node index."""
        return self._node_ids

    def node_id(self, idx: int) -> str:
        """Return the external identifier of node *idx*."""
        return self._node_ids[idx]

    def index_of(self, node_id: str) -> int:
        """Return the index of *node_id*.  Raises ``KeyError`` if missing."""
        try:
            return self._index[node_id]
        except KeyError:
            msg = f"Node not found: {node_id!r}"
            raise KeyError(msg) from None

    def has_node(self, node_id: str) -> bool:
        """Return whether *node_id* is in the graph."""
        return node_id in self._index

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def neighbors(self, idx: int) -> tuple[tuple[int, float], ...]:
        """Return ``(neighbor, weight)`` pairs for every edge incident to *idx*."""
        return self._adjacency[idx]

    def degree(self, idx: int) -> int:
        """Number of edges incident to *idx*."""
        return len(self._adjacency[idx])

    def strength(self, idx: int) -> float:
        """Total weight of the edges incident to *idx*."""
        return self._strength[idx]

    def weight(self, u: int, v: int) -> float | None:
        """Weight of the edge between *u* and *v*, or ``None`` if absent."""
        if self._graph.has_edge(u, v):
            return self._graph.get_edge_data(u, v)
        return None

    def edges(self) -> list[tuple[int, int, float]]:
        """Return all edges as ``(u, v, weight)`` triples with ``u < v``."""
        return sorted(
            (min(u, v), max(u, v), w) for u, v, w in self._graph.weighted_edge_list()
        )

    def __repr__(self) -> str:
        return f"WeightedGraph(nodes={self.node_count}, edges={self.edge_count})"


def _edge_weight(
    attrs: dict[str, object], weight_attr: str | None, source: str, target: str
) -> float:
    """Read and validate the weight of one edge."""
    if weight_attr is None:
        return DEFAULT_WEIGHT
    value = attrs.get(weight_attr)
    if value is None:
        return DEFAULT_WEIGHT
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise NonNumericAttributeError(weight_attr, source, target, value)
    weight = float(value)
    if math.isnan(weight) or weight < 0:
        msg = f"Edge {source!r} -- {target!r} has invalid {weight_attr!r} weight: {value!r}"
        raise InvalidWeightError(msg)
    return weight


def build_weighted_graph(network: Network, weight_attr: str | None = None) -> WeightedGraph:
    """Convert *network* into a :class:`WeightedGraph`.

    Node indices follow ``network.nodes()`` order.  Edge weights come from the
    edge attribute named *weight_attr*; edges without it weigh 1.0.  The whole
    conversion fails if any edge holds a non-numeric (or negative) weight.

    Raises:
        NonNumericAttributeError: an edge's weight attribute is not a number.
        InvalidWeightError: an edge's weight is negative or NaN.
        GraphConversionError: an edge references an unknown node.
    """
    node_ids = network.nodes()
    index = {node_id: idx for idx, node_id in enumerate(node_ids)}

    edges: list[tuple[int, int, float]] = []
    for source, target, attrs in network.edges():
        try:
            u, v = index[source], index[target]
        except KeyError as exc:
            msg = f"Edge {source!r} -- {target!r} references unknown node {exc.args[0]!r}"
            raise GraphConversionError(msg) from None
        edges.append((u, v, _edge_weight(attrs, weight_attr, source, target)))

    graph = WeightedGraph(node_ids, edges)
    logger.debug(
        "Converted %r into %r using weight attribute %r", network, graph, weight_attr
    )
    return graph
