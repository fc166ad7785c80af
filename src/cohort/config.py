"""ClusteringConfig — parameters handed to the clustering algorithm."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cohort.clustering.quality import get_quality_function

if TYPE_CHECKING:
    from cohort.clustering.quality import QualityFunction

MERGING_METHODS = ("single", "multi")
SEED_METHODS = ("nodes", "edges", "unused_nodes")


@dataclass(frozen=True)
class ClusteringConfig:
    """Parameters of a clustering run.

    Cohort only interprets ``quality_function`` and ``node_penalty``; every
    other field is passed through to the clustering algorithm unchanged.
    """

    min_size: int = 3
    """Clusters smaller than this are discarded."""

    min_density: float = 0.3
    """Clusters less dense than this are discarded."""

    overlap_threshold: float = 0.8
    """Overlap score above which two clusters are merged."""

    merging_method: str = "single"
    """``"single"`` (one merging pass) or ``"multi"`` (repeat until stable)."""

    haircut_threshold: float = 0.0
    """Members with less than this fraction of the average internal weight are trimmed."""

    node_penalty: float = 2.0
    """Expected boundary weight missing from the network, per cluster."""

    seed_method: str = "nodes"
    """How growth seeds are chosen: ``"nodes"``, ``"edges"`` or ``"unused_nodes"``."""

    quality_function: str = "cohesiveness"
    """Name of the registered quality function to score clusters with."""

    def __post_init__(self) -> None:
        if self.min_size < 1:
            msg = f"min_size must be at least 1, got {self.min_size!r}"
            raise ValueError(msg)
        for name in ("min_density", "overlap_threshold", "haircut_threshold"):
            value = getattr(self, name)
            if math.isnan(value) or not 0.0 <= value <= 1.0:
                msg = f"{name} must be between 0 and 1, got {value!r}"
                raise ValueError(msg)
        if math.isnan(self.node_penalty) or self.node_penalty < 0:
            msg = f"node_penalty must be non-negative, got {self.node_penalty!r}"
            raise ValueError(msg)
        if self.merging_method not in MERGING_METHODS:
            msg = f"merging_method must be one of {MERGING_METHODS}, got {self.merging_method!r}"
            raise ValueError(msg)
        if self.seed_method not in SEED_METHODS:
            msg = f"seed_method must be one of {SEED_METHODS}, got {self.seed_method!r}"
            raise ValueError(msg)

    def quality(self) -> QualityFunction:
        """Build the configured quality function."""
        return get_quality_function(self.quality_function, penalty=self.node_penalty)
