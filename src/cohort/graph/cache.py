"""GraphCache — memoised network → WeightedGraph conversion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cohort.events import EventType
from cohort.graph.weighted import build_weighted_graph

if TYPE_CHECKING:
    from cohort.events import EventBus, NetworkEvent
    from cohort.graph.protocols import Network
    from cohort.graph.weighted import WeightedGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A converted graph and the weight attribute it was built with."""

    graph: WeightedGraph
    weight_attr: str | None


class GraphCache:
    """Session-scoped cache of converted networks.

    Entries are keyed by the network handle itself, so handles must be
    hashable (identity hashing is enough).  When constructed with an
    ``EventBus`` the cache registers for ``NETWORK_MODIFIED`` and
    ``NETWORK_DESTROYED`` and evicts the affected network's entry.

    Not safe for concurrent use; callers serialize access.
    """

    def __init__(self, events: EventBus | None = None) -> None:
        self._entries: dict[Any, CacheEntry] = {}
        self._events = events
        if events is not None:
            events.register(EventType.NETWORK_MODIFIED, self._on_network_changed)
            events.register(EventType.NETWORK_DESTROYED, self._on_network_changed)

    def convert(self, network: Network, weight_attr: str | None = None) -> WeightedGraph:
        """Return the graph for *network*, building and caching it if needed.

        A cached entry built with a different *weight_attr* is rebuilt.  If
        the build fails the error propagates and the cache is left untouched.
        """
        entry = self._entries.get(network)
        if entry is not None and entry.weight_attr == weight_attr:
            logger.debug("Graph cache hit for %r", network)
            return entry.graph

        logger.debug("Graph cache miss for %r (weight attribute %r)", network, weight_attr)
        graph = build_weighted_graph(network, weight_attr)
        self._entries[network] = CacheEntry(graph=graph, weight_attr=weight_attr)
        return graph

    def invalidate(self, network: Network) -> bool:
        """Evict the entry for *network*.  Return True if one was present."""
        removed = self._entries.pop(network, None) is not None
        if removed:
            logger.debug("Invalidated cached graph for %r", network)
        return removed

    def get(self, network: Network) -> CacheEntry | None:
        """Return the current entry for *network* without building one."""
        return self._entries.get(network)

    def reset(self) -> None:
        """Drop every cached entry."""
        self._entries.clear()

    def close(self) -> None:
        """Unsubscribe from the event bus and drop every entry."""
        if self._events is not None:
            self._events.unregister(EventType.NETWORK_MODIFIED, self._on_network_changed)
            self._events.unregister(EventType.NETWORK_DESTROYED, self._on_network_changed)
            self._events = None
        self.reset()

    def __contains__(self, network: object) -> bool:
        return network in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _on_network_changed(self, event: NetworkEvent) -> None:
        self.invalidate(event.network)
