"""Network protocol — the interface Cohort expects from an external network.

The network is owned and mutated by the host.  Cohort only reads it while
building a ``WeightedGraph`` and relies on ``EventBus`` notifications to
learn that a previously converted network has changed.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Network(Protocol):
    """Read-only view of an external, mutable network.

    ``nodes()`` must enumerate node identifiers in a stable order; that
    order becomes the index order of the converted graph.  ``edges()``
    yields ``(source_id, target_id, attributes)`` triples; edges are
    treated as undirected.
    """

    def nodes(self) -> list[str]: ...
    def edges(self) -> list[tuple[str, str, dict[str, Any]]]: ...

    @property
    def node_count(self) -> int: ...
    @property
    def edge_count(self) -> int: ...
