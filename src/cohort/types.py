"""Result types — immutable data containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cohort.clustering.nodeset import ValuedNodeSet
    from cohort.graph.weighted import WeightedGraph


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of a completed clustering run.

    ``node_mapping[i]`` is the external identifier of node index ``i`` in
    every cluster of ``clusters``.
    """

    clusters: tuple[ValuedNodeSet, ...]
    node_mapping: tuple[str, ...]
    graph: WeightedGraph

    def cluster_node_ids(self) -> list[list[str]]:
        """Clusters as lists of external node identifiers."""
        return [[self.node_mapping[idx] for idx in cluster] for cluster in self.clusters]
