"""Cohort: cohesive-cluster support for weighted networks.

Immutable weighted graphs derived from mutable networks, incrementally
scored node sets, clustering orchestration and node annotation.
"""

__version__ = "0.1.0"

from cohort._session import Cohort
from cohort.attributes import (
    AttributeStore,
    AttributeType,
    InMemoryAttributeStore,
    SQLAttributeStore,
)
from cohort.clustering import (
    AFFINITY_ATTRIBUTE,
    STATUS_ATTRIBUTE,
    ClusteringAlgorithm,
    ClusteringOrchestrator,
    CohesivenessFunction,
    MutableNodeSet,
    NodeSet,
    NodeStatus,
    QualityFunction,
    ResultAnnotator,
    ValuedNodeSet,
    classify_nodes,
    compute_affinities,
    get_quality_function,
)
from cohort.config import ClusteringConfig
from cohort.events import EventBus, EventType, NetworkEvent
from cohort.exceptions import (
    AlgorithmError,
    AttributeTypeMismatchError,
    CohortError,
    EmptyGraphError,
    GraphConversionError,
    InvalidWeightError,
    NonNumericAttributeError,
    TaskCancelledError,
)
from cohort.graph import GraphCache, Network, RustworkxNetwork, WeightedGraph, build_weighted_graph
from cohort.tasks import InlineTaskRunner, TaskMonitor, TaskRunner, ThreadedTaskRunner
from cohort.types import RunResult
from cohort.ui import LoggingUI, MessageLevel, UserInterface

__all__ = [
    "AFFINITY_ATTRIBUTE",
    "STATUS_ATTRIBUTE",
    "AlgorithmError",
    "AttributeStore",
    "AttributeType",
    "AttributeTypeMismatchError",
    "ClusteringAlgorithm",
    "ClusteringConfig",
    "ClusteringOrchestrator",
    "Cohort",
    "CohesivenessFunction",
    "CohortError",
    "EmptyGraphError",
    "EventBus",
    "EventType",
    "GraphCache",
    "GraphConversionError",
    "InMemoryAttributeStore",
    "InlineTaskRunner",
    "InvalidWeightError",
    "LoggingUI",
    "MessageLevel",
    "MutableNodeSet",
    "Network",
    "NetworkEvent",
    "NodeSet",
    "NodeStatus",
    "NonNumericAttributeError",
    "QualityFunction",
    "ResultAnnotator",
    "RunResult",
    "RustworkxNetwork",
    "SQLAttributeStore",
    "TaskCancelledError",
    "TaskMonitor",
    "TaskRunner",
    "ThreadedTaskRunner",
    "UserInterface",
    "ValuedNodeSet",
    "WeightedGraph",
    "__version__",
    "build_weighted_graph",
    "classify_nodes",
    "compute_affinities",
    "get_quality_function",
]
