"""ClusteringOrchestrator — runs a clustering algorithm on a worker task."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cohort.exceptions import AlgorithmError, EmptyGraphError, TaskCancelledError

if TYPE_CHECKING:
    from cohort.clustering.nodeset import ValuedNodeSet
    from cohort.clustering.protocols import ClusteringAlgorithm
    from cohort.clustering.quality import QualityFunction
    from cohort.config import ClusteringConfig
    from cohort.graph.weighted import WeightedGraph
    from cohort.tasks import TaskHandle, TaskMonitor, TaskRunner

logger = logging.getLogger(__name__)


class ClusteringTask:
    """A single clustering run packaged for a ``TaskRunner``."""

    title = "Clustering network"

    def __init__(
        self,
        algorithm: ClusteringAlgorithm,
        graph: WeightedGraph,
        quality: QualityFunction,
        config: ClusteringConfig,
    ) -> None:
        self.algorithm = algorithm
        self.graph = graph
        self.quality = quality
        self.config = config

    def run(self, monitor: TaskMonitor) -> list[ValuedNodeSet]:
        monitor.set_status(f"Finding clusters in {self.graph!r}")
        results = list(self.algorithm.run(self.graph, self.quality, self.config, monitor))
        monitor.set_progress(100.0)
        return results


class ClusteringOrchestrator:
    """Drives a ``ClusteringAlgorithm`` over weighted graphs.

    The caller blocks until the task completes.  Three outcomes are
    distinguished: a list of clusters (success), ``None`` (cancelled) and
    ``AlgorithmError`` (the algorithm raised).
    """

    def __init__(self, algorithm: ClusteringAlgorithm, runner: TaskRunner) -> None:
        self.algorithm = algorithm
        self.runner = runner
        self._active: TaskHandle | None = None

    def run_on_graph(
        self, graph: WeightedGraph, config: ClusteringConfig
    ) -> list[ValuedNodeSet] | None:
        """Cluster *graph* with *config*.

        Raises:
            EmptyGraphError: *graph* has no edges; nothing is submitted.
            AlgorithmError: the algorithm failed on its worker.
        """
        if graph.edge_count == 0:
            msg = "The selected network contains no edges"
            raise EmptyGraphError(msg)

        task = ClusteringTask(self.algorithm, graph, config.quality(), config)
        handle = self.runner.submit(task)
        self._active = handle
        try:
            results = handle.result()
        except TaskCancelledError:
            logger.info("Clustering of %r was cancelled", graph)
            return None
        except Exception as exc:
            msg = f"Clustering algorithm failed: {exc}"
            raise AlgorithmError(msg) from exc
        finally:
            self._active = None

        logger.info("Found %d clusters in %r", len(results), graph)
        return results

    def cancel(self) -> bool:
        """Cancel the run in progress, if any.  Return True if one was running."""
        handle = self._active
        if handle is None:
            return False
        handle.cancel()
        return True
