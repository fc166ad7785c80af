"""Tests for NodeSet, MutableNodeSet and ValuedNodeSet."""

from __future__ import annotations

import random

import pytest

from cohort.clustering import CohesivenessFunction, MutableNodeSet, NodeSet, ValuedNodeSet
from cohort.clustering.nodeset import aggregate_weights
from cohort.graph import WeightedGraph

# ======================================================================
# NodeSet
# ======================================================================


class TestNodeSet:
    def test_aggregates(self, weighted_graph: WeightedGraph) -> None:
        s = NodeSet(weighted_graph, [0, 1, 2])
        assert s.internal_weight == pytest.approx(4.5)
        assert s.boundary_weight == pytest.approx(0.25)
        assert s.size == 3
        assert len(s) == 3

    def test_empty_set(self, weighted_graph: WeightedGraph) -> None:
        s = NodeSet(weighted_graph)
        assert s.internal_weight == 0.0
        assert s.boundary_weight == 0.0
        assert list(s) == []

    def test_iteration_sorted_and_unique(self, weighted_graph: WeightedGraph) -> None:
        s = NodeSet(weighted_graph, [5, 3, 3, 4])
        assert list(s) == [3, 4, 5]
        assert list(s) == list(s)

    def test_membership(self, weighted_graph: WeightedGraph) -> None:
        s = NodeSet(weighted_graph, [1, 2])
        assert 1 in s
        assert s.contains(2)
        assert 0 not in s

    def test_node_ids(self, weighted_graph: WeightedGraph) -> None:
        assert NodeSet(weighted_graph, [4, 3]).node_ids == ["d", "e"]

    def test_density(self, weighted_graph: WeightedGraph) -> None:
        assert NodeSet(weighted_graph, [0, 1, 2]).density == pytest.approx(4.5 / 3)
        assert NodeSet(weighted_graph, [0]).density == 0.0

    def test_out_of_range_index(self, weighted_graph: WeightedGraph) -> None:
        with pytest.raises(IndexError):
            NodeSet(weighted_graph, [7])

    def test_equality(self, weighted_graph: WeightedGraph, path_graph: WeightedGraph) -> None:
        assert NodeSet(weighted_graph, [0, 1]) == NodeSet(weighted_graph, [1, 0])
        assert NodeSet(weighted_graph, [0, 1]) != NodeSet(path_graph, [0, 1])
        assert len({NodeSet(weighted_graph, [0, 1]), NodeSet(weighted_graph, [1, 0])}) == 1

    def test_repr(self, path_graph: WeightedGraph) -> None:
        assert repr(NodeSet(path_graph, [1, 0])) == "NodeSet(['A', 'B'])"


# ======================================================================
# MutableNodeSet
# ======================================================================


class TestMutableNodeSet:
    def test_add_moves_boundary_to_internal(self, path_graph: WeightedGraph) -> None:
        s = MutableNodeSet(path_graph)
        s.add(1)
        assert (s.internal_weight, s.boundary_weight) == (0.0, 2.0)
        s.add(2)
        assert (s.internal_weight, s.boundary_weight) == (1.0, 2.0)

    def test_constructor_matches_read_only_set(self, weighted_graph: WeightedGraph) -> None:
        mutable = MutableNodeSet(weighted_graph, [0, 2, 3, 5])
        frozen = NodeSet(weighted_graph, [0, 2, 3, 5])
        assert mutable.internal_weight == pytest.approx(frozen.internal_weight)
        assert mutable.boundary_weight == pytest.approx(frozen.boundary_weight)

    def test_add_existing_is_noop(self, path_graph: WeightedGraph) -> None:
        s = MutableNodeSet(path_graph, [0, 1])
        before = (s.internal_weight, s.boundary_weight)
        assert s.add(1) is False
        assert (s.internal_weight, s.boundary_weight) == before

    def test_remove_missing_is_noop(self, path_graph: WeightedGraph) -> None:
        s = MutableNodeSet(path_graph, [0, 1])
        assert s.remove(3) is False
        assert len(s) == 2

    def test_add_then_remove_restores_aggregates(self, weighted_graph: WeightedGraph) -> None:
        s = MutableNodeSet(weighted_graph, [0, 1, 2])
        before = (s.internal_weight, s.boundary_weight)
        for idx in range(weighted_graph.node_count):
            if idx in s:
                continue
            s.add(idx)
            s.remove(idx)
            assert s.internal_weight == pytest.approx(before[0], abs=1e-12)
            assert s.boundary_weight == pytest.approx(before[1], abs=1e-12)

    def test_emptying_resets_exactly(self, weighted_graph: WeightedGraph) -> None:
        s = MutableNodeSet(weighted_graph, [0, 1, 2, 3])
        for idx in [2, 0, 3, 1]:
            s.remove(idx)
        assert s.internal_weight == 0.0
        assert s.boundary_weight == 0.0

    def test_random_walk_matches_recomputation(self, weighted_graph: WeightedGraph) -> None:
        rng = random.Random(1234)
        s = MutableNodeSet(weighted_graph)
        for _ in range(2000):
            idx = rng.randrange(weighted_graph.node_count)
            if idx in s:
                s.remove(idx)
            else:
                s.add(idx)
        internal, boundary = aggregate_weights(weighted_graph, set(s))
        assert s.internal_weight == pytest.approx(internal, abs=1e-9)
        assert s.boundary_weight == pytest.approx(boundary, abs=1e-9)

    def test_recalculate(self, weighted_graph: WeightedGraph) -> None:
        s = MutableNodeSet(weighted_graph, [3, 4, 5])
        s.recalculate()
        assert s.internal_weight == pytest.approx(6.5)
        assert s.boundary_weight == pytest.approx(0.25)

    def test_clear(self, path_graph: WeightedGraph) -> None:
        s = MutableNodeSet(path_graph, [0, 1, 2])
        s.clear()
        assert len(s) == 0
        assert s.internal_weight == 0.0

    def test_freeze_is_independent(self, path_graph: WeightedGraph) -> None:
        s = MutableNodeSet(path_graph, [0, 1])
        snapshot = s.freeze()
        s.add(2)
        assert list(snapshot) == [0, 1]
        assert snapshot.internal_weight == 1.0

    def test_unhashable(self, path_graph: WeightedGraph) -> None:
        with pytest.raises(TypeError):
            hash(MutableNodeSet(path_graph))


# ======================================================================
# ValuedNodeSet
# ======================================================================


class TestValuedNodeSet:
    def test_from_node_set(self, path_graph: WeightedGraph) -> None:
        func = CohesivenessFunction(penalty=1.0)
        valued = ValuedNodeSet.from_node_set(NodeSet(path_graph, [0, 1, 2]), func)
        assert valued.quality == pytest.approx(2.0 / (2.0 + 1.0 + 1.0))
        assert list(valued) == [0, 1, 2]

    def test_quality_not_refreshed(self, path_graph: WeightedGraph) -> None:
        func = CohesivenessFunction(penalty=1.0)
        source = MutableNodeSet(path_graph, [0, 1])
        valued = ValuedNodeSet.from_node_set(source, func)
        source.add(2)
        assert valued.quality == pytest.approx(1.0 / 3.0)
        assert list(valued) == [0, 1]

    def test_undefined_quality_becomes_zero(self) -> None:
        g = WeightedGraph(["A"])
        valued = ValuedNodeSet.from_node_set(NodeSet(g, [0]), CohesivenessFunction(penalty=0.0))
        assert valued.quality == 0.0

    def test_repr(self, path_graph: WeightedGraph) -> None:
        valued = ValuedNodeSet(path_graph, [0], 0.5)
        assert repr(valued) == "ValuedNodeSet(['A'], quality=0.5)"
