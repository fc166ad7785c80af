"""Clustering layer — node sets, quality functions, orchestration and results."""

from cohort.clustering.nodeset import MutableNodeSet, NodeSet, ValuedNodeSet
from cohort.clustering.orchestrator import ClusteringOrchestrator, ClusteringTask
from cohort.clustering.protocols import ClusteringAlgorithm
from cohort.clustering.quality import (
    CohesivenessFunction,
    QualityFunction,
    available_quality_functions,
    get_quality_function,
    register_quality_function,
)
from cohort.clustering.results import (
    AFFINITY_ATTRIBUTE,
    STATUS_ATTRIBUTE,
    NodeStatus,
    ResultAnnotator,
    classify_nodes,
    compute_affinities,
    membership_counts,
)

__all__ = [
    "AFFINITY_ATTRIBUTE",
    "STATUS_ATTRIBUTE",
    "ClusteringAlgorithm",
    "ClusteringOrchestrator",
    "ClusteringTask",
    "CohesivenessFunction",
    "MutableNodeSet",
    "NodeSet",
    "NodeStatus",
    "QualityFunction",
    "ResultAnnotator",
    "ValuedNodeSet",
    "available_quality_functions",
    "classify_nodes",
    "compute_affinities",
    "get_quality_function",
    "membership_counts",
    "register_quality_function",
]
