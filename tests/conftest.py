"""
Shared pytest fixtures and utilities for testing
"""

import pytest

from orthoconn import RoutingGraph
from orthoconn.correction import direction_between
from tests.scenarios import SCENARIOS_BY_NAME


@pytest.fixture
def standard_scenario():
    """Two separate regions joined by a double elbow"""
    return SCENARIOS_BY_NAME["Standard graph"]


@pytest.fixture
def standard_graph(standard_scenario):
    """Routing graph of the standard scenario"""
    return RoutingGraph.build(*standard_scenario.build_args())


@pytest.fixture
def event_recorder():
    """Callback that records every event it receives"""
    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, event):
            self.events.append(event)

    return Recorder()


# Helper functions for tests

def neighbor_cells(graph, cell):
    """Ordered neighbor cells of the node at cell"""
    return [neighbor.node.cell for neighbor in graph.neighbors(graph.node(cell))]


def assert_symmetric_edges(graph):
    """Assert every edge has a reverse edge with the same cost and axis"""
    for u, v, data in graph.graph.edges(data=True):
        assert graph.graph.has_edge(v, u), f"Missing reverse edge {v} -> {u}"
        reverse = graph.graph.edges[v, u]
        assert reverse["cost"] == data["cost"]
        assert reverse["axis"] is data["axis"]


def assert_orthogonal_path(path, start, end):
    """Assert a path runs from start to end with horizontal/vertical steps only"""
    assert path, "Expected a path"
    assert path[0] == start
    assert path[-1] == end
    for prev, current in zip(path, path[1:]):
        assert prev != current, f"Zero-length step at {prev}"
        assert prev.row == current.row or prev.col == current.col, f"Diagonal step {prev} -> {current}"


def segment_directions(path):
    """Direction of each segment of a path"""
    return [direction_between(prev, current) for prev, current in zip(path, path[1:])]
