"""ClusteringAlgorithm protocol — the black-box cluster grower."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cohort.clustering.nodeset import ValuedNodeSet
    from cohort.clustering.quality import QualityFunction
    from cohort.config import ClusteringConfig
    from cohort.graph.weighted import WeightedGraph
    from cohort.tasks import TaskMonitor


@runtime_checkable
class ClusteringAlgorithm(Protocol):
    """Finds clusters in a graph, scoring candidates with a quality function.

    Implementations run on a worker thread.  They should call
    ``monitor.check_cancelled()`` regularly and may report progress through
    ``monitor.set_status`` / ``monitor.set_progress``.  Growth steps are
    expected to evaluate candidates through ``MutableNodeSet`` and the quality
    function's O(degree) affinity methods.
    """

    def run(
        self,
        graph: WeightedGraph,
        quality: QualityFunction,
        config: ClusteringConfig,
        monitor: TaskMonitor,
    ) -> list[ValuedNodeSet]: ...
