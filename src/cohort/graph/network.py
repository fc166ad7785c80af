"""RustworkxNetwork — mutable, event-publishing network backed by rustworkx."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import rustworkx

from cohort.events import EventType, NetworkEvent

if TYPE_CHECKING:
    from cohort.events import EventBus


class RustworkxNetwork:
    """Undirected multigraph over string node identifiers.

    Wraps a ``rustworkx.PyGraph`` and publishes ``NETWORK_MODIFIED`` on
    every mutation (and ``NETWORK_DESTROYED`` from :meth:`destroy`) to the
    optional *events* bus, so that caches of derived graphs can invalidate
    themselves.  Parallel edges are allowed; each edge carries its own
    attribute dict.

    Implements the ``Network`` protocol.
    """

    def __init__(self, name: str = "", *, events: EventBus | None = None) -> None:
        self.name = name
        self._events = events
        self._graph: rustworkx.PyGraph = rustworkx.PyGraph(multigraph=True)
        self._id_to_idx: dict[str, int] = {}
        self._idx_to_id: dict[int, str] = {}
        self._destroyed = False

    # ------------------------------------------------------------------
    # Node operations
    # ------------------------------------------------------------------

    def add_node(self, node_id: str, **attrs: Any) -> None:
        """Add or update a node.  Merges *attrs* if the node already exists."""
        if node_id in self._id_to_idx:
            existing: dict[str, Any] = self._graph[self._id_to_idx[node_id]]
            existing.update(attrs)
        else:
            idx = self._graph.add_node({"id": node_id, **attrs})
            self._id_to_idx[node_id] = idx
            self._idx_to_id[idx] = node_id
        self._notify(f"node {node_id!r} added")

    def remove_node(self, node_id: str) -> None:
        """Remove a node and all incident edges.  Raises ``KeyError`` if missing."""
        idx = self._require_node(node_id)
        self._graph.remove_node(idx)
        del self._id_to_idx[node_id]
        del self._idx_to_id[idx]
        self._notify(f"node {node_id!r} removed")

    def has_node(self, node_id: str) -> bool:
        """Return whether *node_id* is in the network."""
        return node_id in self._id_to_idx

    def nodes(self) -> list[str]:
        """Return all node identifiers in insertion order."""
        return list(self._id_to_idx.keys())

    # ------------------------------------------------------------------
    # Edge operations
    # ------------------------------------------------------------------

    def add_edge(self, source: str, target: str, **attrs: Any) -> int:
        """Add an undirected edge and return its edge index.

        Auto-creates missing endpoint nodes.  A second call with the same
        endpoints adds a parallel edge rather than updating the first one.
        """
        for node_id in (source, target):
            if node_id not in self._id_to_idx:
                idx = self._graph.add_node({"id": node_id})
                self._id_to_idx[node_id] = idx
                self._idx_to_id[idx] = node_id
        edge = self._graph.add_edge(
            self._id_to_idx[source], self._id_to_idx[target], dict(attrs)
        )
        self._notify(f"edge {source!r} -- {target!r} added")
        return edge

    def remove_edge(self, edge: int) -> None:
        """Remove the edge with index *edge*.  Raises ``KeyError`` if missing."""
        self._require_edge(edge)
        self._graph.remove_edge_from_index(edge)
        self._notify(f"edge {edge} removed")

    def set_edge_attribute(self, edge: int, name: str, value: Any) -> None:
        """Set attribute *name* on edge *edge*; ``None`` unsets it."""
        data = self._require_edge(edge)
        if value is None:
            data.pop(name, None)
        else:
            data[name] = value
        self._notify(f"edge {edge} attribute {name!r} changed")

    def get_edge(self, edge: int) -> dict[str, Any]:
        """Return a copy of the attribute dict of edge *edge*."""
        return dict(self._require_edge(edge))

    def edges(self) -> list[tuple[str, str, dict[str, Any]]]:
        """Return all edges as ``(source, target, attributes)`` triples."""
        result: list[tuple[str, str, dict[str, Any]]] = []
        for src_idx, tgt_idx, data in self._graph.weighted_edge_list():
            result.append((self._idx_to_id[src_idx], self._idx_to_id[tgt_idx], dict(data)))
        return result

    # ------------------------------------------------------------------
    # Graph-level
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        """Number of nodes in the network."""
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        """Number of edges in the network (parallel edges counted separately)."""
        return self._graph.num_edges()

    @property
    def destroyed(self) -> bool:
        """Whether :meth:`destroy` has been called."""
        return self._destroyed

    def destroy(self) -> None:
        """Drop all nodes and edges and announce ``NETWORK_DESTROYED``."""
        self._graph = rustworkx.PyGraph(multigraph=True)
        self._id_to_idx.clear()
        self._idx_to_id.clear()
        self._destroyed = True
        if self._events is not None:
            self._events.emit(NetworkEvent(EventType.NETWORK_DESTROYED, self, "destroyed"))

    def __repr__(self) -> str:
        return f"RustworkxNetwork(name={self.name!r}, nodes={self.node_count}, edges={self.edge_count})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _notify(self, detail: str) -> None:
        if self._events is not None:
            self._events.emit(NetworkEvent(EventType.NETWORK_MODIFIED, self, detail))

    def _require_node(self, node_id: str) -> int:
        """Return the rustworkx index for *node_id*, or raise ``KeyError``."""
        try:
            return self._id_to_idx[node_id]
        except KeyError:
            msg = f"Node not found: {node_id!r}"
            raise KeyError(msg) from None

    def _require_edge(self, edge: int) -> dict[str, Any]:
        """Return the attribute dict of edge *edge*, or raise ``KeyError``."""
        try:
            return self._graph.get_edge_data_by_index(edge)
        except Exception:
            msg = f"Edge not found: {edge!r}"
            raise KeyError(msg) from None
