"""Classification and annotation of nodes from clustering results."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from cohort.attributes.protocol import AttributeType
from cohort.clustering.nodeset import MutableNodeSet
from cohort.clustering.quality import nan_to_zero

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from cohort.attributes.protocol import AttributeStore
    from cohort.clustering.nodeset import NodeSet
    from cohort.clustering.quality import QualityFunction
    from cohort.graph.weighted import WeightedGraph
    from cohort.ui import UserInterface

logger = logging.getLogger(__name__)

STATUS_ATTRIBUTE = "cohort.Status"
AFFINITY_ATTRIBUTE = "cohort.Affinity"

STATUS_DESCRIPTION = (
    "This attribute indicates the status of a node after a clustering run. "
    "The status codes are as follows:\n\n"
    "Outlier = the node is not part of any cluster (i.e. it is an outlier)\n"
    "Cluster = the node is part of exactly one cluster\n"
    "Overlap = the node is part of multiple clusters (i.e. it is an overlap)"
)
AFFINITY_DESCRIPTION = (
    "This attribute indicates the affinity of a node to a given cluster: "
    "the change in the cluster's quality that the node accounts for. "
    "Members that hold the cluster together and outsiders that would improve "
    "it have positive affinity."
)


class NodeStatus(Enum):
    """Membership status of a node across a set of clusters."""

    OUTLIER = "Outlier"
    CLUSTER = "Cluster"
    OVERLAP = "Overlap"

    @classmethod
    def from_count(cls, count: int) -> NodeStatus:
        """Status of a node contained in *count* clusters."""
        if count <= 0:
            return cls.OUTLIER
        if count == 1:
            return cls.CLUSTER
        return cls.OVERLAP


def membership_counts(graph: WeightedGraph, results: Iterable[NodeSet]) -> list[int]:
    """Number of result sets containing each node, indexed by node index."""
    counts = [0] * graph.node_count
    for node_set in results:
        for idx in node_set:
            counts[idx] += 1
    return counts


def classify_nodes(graph: WeightedGraph, results: Iterable[NodeSet]) -> list[NodeStatus]:
    """Status of every node of *graph*, indexed by node index."""
    return [NodeStatus.from_count(count) for count in membership_counts(graph, results)]


def compute_affinities(
    graph: WeightedGraph, nodes: Iterable[int], quality: QualityFunction
) -> list[float]:
    """Affinity of every node of *graph* to the cluster formed by *nodes*.

    For members this is how much quality the cluster would lose without
    them; for non-members how much it would gain with them.  Undefined
    values are reported as 0.0.
    """
    node_set = MutableNodeSet(graph, nodes)
    current = quality.calculate(node_set)
    affinities: list[float] = []
    for idx in range(graph.node_count):
        if idx in node_set:
            # negated so that members holding the cluster together score positive
            affinity = -(quality.quality_after_removal(node_set, idx) - current)
        else:
            affinity = quality.quality_after_addition(node_set, idx) - current
        affinities.append(nan_to_zero(affinity))
    return affinities


class ResultAnnotator:
    """Writes status and affinity attributes for the nodes of a graph.

    Both writers first make sure the attribute is either undeclared or
    declared with the expected type.  If it is not, the user is asked
    whether to delete and re-declare it; declining makes the call a no-op
    that returns False.
    """

    def __init__(self, store: AttributeStore, ui: UserInterface) -> None:
        self.store = store
        self.ui = ui

    def register_descriptions(self) -> None:
        """Attach the human-readable descriptions of both attributes."""
        self.store.set_description(STATUS_ATTRIBUTE, STATUS_DESCRIPTION)
        self.store.set_description(AFFINITY_ATTRIBUTE, AFFINITY_DESCRIPTION)

    def set_status_attributes(self, graph: WeightedGraph, results: Sequence[NodeSet]) -> bool:
        """Write the status of every node.  Return False if the user declined."""
        statuses = classify_nodes(graph, results)
        if not self._ensure_type(STATUS_ATTRIBUTE, AttributeType.STRING, "a string"):
            return False
        values = {
            node_id: status.value
            for node_id, status in zip(graph.node_mapping, statuses, strict=True)
        }
        self.store.set_attributes(STATUS_ATTRIBUTE, values)
        logger.info("Wrote %s for %d nodes", STATUS_ATTRIBUTE, graph.node_count)
        return True

    def set_affinity_attributes(
        self, graph: WeightedGraph, nodes: Iterable[int], quality: QualityFunction
    ) -> bool:
        """Write every node's affinity to *nodes*.  Return False if the user declined."""
        affinities = compute_affinities(graph, nodes, quality)
        if not self._ensure_type(AFFINITY_ATTRIBUTE, AttributeType.FLOATING, "a floating point"):
            return False
        self.store.set_attributes(
            AFFINITY_ATTRIBUTE, dict(zip(graph.node_mapping, affinities, strict=True))
        )
        logger.info("Wrote %s for %d nodes", AFFINITY_ATTRIBUTE, graph.node_count)
        return True

    def _ensure_type(self, name: str, expected: AttributeType, label: str) -> bool:
        declared = self.store.get_type(name)
        if declared is None or declared is expected:
            return True
        question = (
            f"A node attribute named {name} already exists and it is not {label} "
            f"attribute.\nDo you want to remove the existing attribute and "
            f"re-register it as {label} attribute?"
        )
        if not self.ui.confirm(question, "Attribute type mismatch"):
            logger.info("Kept existing %s attribute %r; nothing written", declared.value, name)
            return False
        self.store.delete_attribute(name)
        return True
