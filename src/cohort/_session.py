"""Main Cohort class — session lifecycle and host-facing entry points."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cohort.attributes.memory import InMemoryAttributeStore
from cohort.clustering.orchestrator import ClusteringOrchestrator
from cohort.clustering.results import ResultAnnotator
from cohort.config import ClusteringConfig
from cohort.events import EventBus
from cohort.exceptions import (
    AlgorithmError,
    EmptyGraphError,
    GraphConversionError,
    NonNumericAttributeError,
)
from cohort.graph.cache import GraphCache
from cohort.tasks import ThreadedTaskRunner
from cohort.types import RunResult
from cohort.ui import APPLICATION_NAME, LoggingUI, MessageLevel, bug_message

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cohort.attributes.protocol import AttributeStore
    from cohort.clustering.nodeset import ValuedNodeSet
    from cohort.clustering.protocols import ClusteringAlgorithm
    from cohort.clustering.quality import QualityFunction
    from cohort.graph.protocols import Network
    from cohort.graph.weighted import WeightedGraph
    from cohort.tasks import TaskRunner
    from cohort.ui import UserInterface

logger = logging.getLogger(__name__)


class Cohort:
    """Session facade wiring the graph cache, clustering and annotation.

    One instance lives for the whole host session.  The graph cache listens
    on ``events`` so hosts publish network changes there (a
    ``RustworkxNetwork`` built with ``events=cohort.events`` does so by
    itself).  Errors the user should see are reported through *ui* and turn
    into a ``None`` return; cancellation also returns ``None``.

    Usage::

        with Cohort(algorithm) as cohort:
            network = RustworkxNetwork("ppi", events=cohort.events)
            ...
            result = cohort.run(network, ClusteringConfig(), "weight")
    """

    def __init__(
        self,
        algorithm: ClusteringAlgorithm,
        *,
        store: AttributeStore | None = None,
        ui: UserInterface | None = None,
        runner: TaskRunner | None = None,
        events: EventBus | None = None,
        config: ClusteringConfig | None = None,
    ) -> None:
        self._closed = False
        self._owns_events = events is None
        self._events = events if events is not None else EventBus()
        self._cache = GraphCache(self._events)
        self._store: AttributeStore = store if store is not None else InMemoryAttributeStore()
        self._ui: UserInterface = ui if ui is not None else LoggingUI()
        self._owned_runner = ThreadedTaskRunner() if runner is None else None
        self._runner: TaskRunner = runner if runner is not None else self._owned_runner
        self._config = config if config is not None else ClusteringConfig()
        self._orchestrator = ClusteringOrchestrator(algorithm, self._runner)
        self._annotator = ResultAnnotator(self._store, self._ui)
        self._annotator.register_descriptions()

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert(self, network: Network, weight_attr: str | None = None) -> WeightedGraph | None:
        """Convert *network* through the session cache, or ``None`` on error."""
        try:
            return self._cache.convert(network, weight_attr)
        except NonNumericAttributeError as exc:
            logger.info("Conversion of %r failed: %s", network, exc)
            self._ui.notify(
                "Weight attribute values must be numeric.",
                title="Error - invalid weight attribute",
                level=MessageLevel.ERROR,
            )
        except GraphConversionError as exc:
            logger.info("Conversion of %r failed: %s", network, exc)
            self._ui.notify(str(exc), title=APPLICATION_NAME, level=MessageLevel.ERROR)
        return None

    def invalidate(self, network: Network) -> bool:
        """Forget the cached graph of *network*."""
        return self._cache.invalidate(network)

    def reset(self) -> None:
        """Forget every cached graph."""
        self._cache.reset()

    # ------------------------------------------------------------------
    # Clustering
    # ------------------------------------------------------------------

    def run(
        self,
        network: Network,
        config: ClusteringConfig | None = None,
        weight_attr: str | None = None,
        *,
        set_attributes: bool = True,
    ) -> RunResult | None:
        """Cluster the current state of *network*.

        The cached graph is always invalidated first, so the run reflects the
        network as it is now.  With *set_attributes* the status of every node
        is written to the attribute store.  Returns ``None`` when conversion
        fails, the network has no edges or the run is cancelled.
        """
        self._cache.invalidate(network)
        graph = self.convert(network, weight_attr)
        if graph is None:
            return None

        clusters = self.run_on_graph(graph, config)
        if clusters is None:
            return None

        if set_attributes:
            self._annotator.set_status_attributes(graph, clusters)
        return RunResult(clusters=tuple(clusters), node_mapping=graph.node_mapping, graph=graph)

    def run_on_graph(
        self, graph: WeightedGraph, config: ClusteringConfig | None = None
    ) -> list[ValuedNodeSet] | None:
        """Cluster an already converted graph.

        Raises ``AlgorithmError`` (after notifying the user) when the
        algorithm itself fails.
        """
        try:
            return self._orchestrator.run_on_graph(graph, config or self._config)
        except EmptyGraphError as exc:
            self._ui.notify(str(exc), title="Error - no edges in network", level=MessageLevel.ERROR)
            return None
        except AlgorithmError as exc:
            logger.error("Clustering failed on %r", graph, exc_info=True)
            self._ui.notify(
                bug_message(str(exc)),
                title=f"Possible bug in {APPLICATION_NAME}",
                level=MessageLevel.ERROR,
            )
            raise

    def cancel(self) -> bool:
        """Cancel the clustering run in progress, if any."""
        return self._orchestrator.cancel()

    # ------------------------------------------------------------------
    # Annotation
    # ------------------------------------------------------------------

    def set_status_attributes(self, graph: WeightedGraph, clusters: list[ValuedNodeSet]) -> bool:
        """Write each node's cluster status.  False if the user declined a retype."""
        return self._annotator.set_status_attributes(graph, clusters)

    def set_affinity_attributes(
        self,
        graph: WeightedGraph,
        nodes: Iterable[int],
        quality: QualityFunction | None = None,
    ) -> bool:
        """Write each node's affinity to the cluster *nodes*.

        *quality* defaults to the session configuration's quality function.
        Returns False if the user declined a retype.
        """
        return self._annotator.set_affinity_attributes(
            graph, nodes, quality if quality is not None else self._config.quality()
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Detach the cache from the event bus and release owned resources.

        A bus the session created itself is cleared as well.
        """
        if self._closed:
            return
        self._closed = True
        self._cache.close()
        if self._owns_events:
            self._events.clear()
        if self._owned_runner is not None:
            self._owned_runner.close()

    def __enter__(self) -> Cohort:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def events(self) -> EventBus:
        """The event bus network changes are published on."""
        return self._events

    @property
    def cache(self) -> GraphCache:
        """The session's graph cache."""
        return self._cache

    @property
    def store(self) -> AttributeStore:
        """The attribute store results are written to."""
        return self._store

    @property
    def ui(self) -> UserInterface:
        return self._ui

    @property
    def config(self) -> ClusteringConfig:
        """Default configuration for runs and affinity annotation."""
        return self._config
