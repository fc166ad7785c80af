"""Graph layer — external networks, immutable weighted graphs and their cache."""

from cohort.graph.cache import CacheEntry, GraphCache
from cohort.graph.network import RustworkxNetwork
from cohort.graph.protocols import Network
from cohort.graph.weighted import WeightedGraph, build_weighted_graph

__all__ = [
    "CacheEntry",
    "GraphCache",
    "Network",
    "RustworkxNetwork",
    "WeightedGraph",
    "build_weighted_graph",
]
