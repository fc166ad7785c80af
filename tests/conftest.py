"""Shared fixtures for Cohort tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlmodel import SQLModel, create_engine

from cohort.events import EventBus
from cohort.graph import RustworkxNetwork, WeightedGraph

if TYPE_CHECKING:
    from sqlalchemy import Engine


@pytest.fixture
def engine() -> Engine:
    """In-memory SQLite engine with all tables created."""
    eng = create_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(eng)
    return eng


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def path_graph() -> WeightedGraph:
    """A - B - C - D, unit weights."""
    return WeightedGraph(["A", "B", "C", "D"], [(0, 1, 1.0), (1, 2, 1.0), (2, 3, 1.0)])


@pytest.fixture
def weighted_graph() -> WeightedGraph:
    """Two weighted triangles joined by a weak bridge.

    a-b 2.0, b-c 1.5, a-c 1.0 | c-d 0.25 | d-e 3.0, e-f 1.0, d-f 2.5, plus g isolated.
    """
    return WeightedGraph(
        ["a", "b", "c", "d", "e", "f", "g"],
        [
            (0, 1, 2.0),
            (1, 2, 1.5),
            (0, 2, 1.0),
            (2, 3, 0.25),
            (3, 4, 3.0),
            (4, 5, 1.0),
            (3, 5, 2.5),
        ],
    )


@pytest.fixture
def network(events: EventBus) -> RustworkxNetwork:
    """Event-publishing A - B - C - D network with a ``weight`` attribute."""
    net = RustworkxNetwork("path", events=events)
    for node_id in ("A", "B", "C", "D"):
        net.add_node(node_id)
    net.add_edge("A", "B", weight=1.0)
    net.add_edge("B", "C", weight=1.0)
    net.add_edge("C", "D", weight=1.0)
    return net
