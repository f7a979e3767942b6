"""
Tests for routing graph construction
"""

import networkx as nx
import pytest

from orthoconn import Axis, Cell, Direction, NodeRole, Region, RoutingConfig, RoutingContractError, RoutingGraph
from orthoconn.graph import center_line, find_first_hop_cell, should_remove_inner_nodes
from tests.conftest import assert_symmetric_edges, neighbor_cells
from tests.scenarios import SCENARIOS, SCENARIOS_BY_NAME


def _build(scenario):
    return RoutingGraph.build(*scenario.build_args())


# Scenarios whose start and end differ
ROUTED_SCENARIOS = [s for s in SCENARIOS if s.start_cell != s.end_cell]


class TestRoutingGraphScenarios:
    """Test graph shape for the reference scenarios"""

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_num_nodes(self, scenario):
        assert len(_build(scenario)) == scenario.expected_num_nodes

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_neighbors(self, scenario):
        """Test exact neighbor order, or neighbor count, of selected nodes"""
        graph = _build(scenario)
        for cell, expected in scenario.expected_nodes.items():
            assert cell in graph, f"Missing node {cell}"
            actual = neighbor_cells(graph, cell)
            if isinstance(expected, int):
                assert len(actual) == expected, f"{cell}: {actual}"
            else:
                assert actual == expected, f"{cell}: {actual}"

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_connected(self, scenario):
        """Test every node can reach every other node"""
        graph = _build(scenario)
        assert nx.is_strongly_connected(graph.graph)

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_symmetric_edges(self, scenario):
        assert_symmetric_edges(_build(scenario))

    @pytest.mark.parametrize("scenario", ROUTED_SCENARIOS, ids=lambda s: s.name)
    def test_endpoints_have_single_neighbor(self, scenario):
        graph = _build(scenario)
        assert len(graph.neighbors(graph.start_node)) == 1
        assert len(graph.neighbors(graph.end_node)) == 1

    @pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
    def test_unique_start_and_goal(self, scenario):
        graph = _build(scenario)
        roles = [node.role for node in graph.nodes_by_cell.values()]
        assert roles.count(NodeRole.START) == 1
        assert roles.count(NodeRole.GOAL) == (0 if scenario.start_cell == scenario.end_cell else 1)


class TestRoutingGraph:
    """Test suite for RoutingGraph details"""

    def test_roles(self, standard_graph):
        assert standard_graph.node(Cell(4, 4)).role is NodeRole.START
        assert standard_graph.node(Cell(4, 6)).role is NodeRole.AFTER_START
        assert standard_graph.node(Cell(17, 15)).role is NodeRole.BEFORE_GOAL
        assert standard_graph.node(Cell(17, 17)).role is NodeRole.GOAL
        assert standard_graph.node(Cell(9, 10)).role is NodeRole.STANDARD
        assert standard_graph.start_node.cell == Cell(4, 4)
        assert standard_graph.end_node.cell == Cell(17, 17)

    def test_center_lines(self, standard_graph):
        assert standard_graph.center_row == 9
        assert standard_graph.center_col == 10

    def test_edge_cost_and_axis(self, standard_graph):
        """Test edge cost is the distance along the edge's axis"""
        neighbors = standard_graph.neighbors(standard_graph.node(Cell(0, 4)))
        assert [(n.node.cell, n.cost, n.axis) for n in neighbors] == [
            (Cell(0, 6), 2, Axis.HORIZONTAL),
            (Cell(0, 0), 4, Axis.HORIZONTAL),
        ]
        (down,) = [n for n in standard_graph.neighbors(standard_graph.node(Cell(9, 10))) if n.node.cell == Cell(12, 10)]
        assert down.cost == 3
        assert down.axis is Axis.VERTICAL

    def test_start_and_goal_not_adjacent_to_standard_nodes(self, standard_graph):
        """Test only the first hops link to start and goal"""
        start_links = [cell for cell, _ in standard_graph.graph.in_edges(Cell(4, 4))]
        goal_links = [cell for cell, _ in standard_graph.graph.in_edges(Cell(17, 17))]
        assert start_links == [Cell(4, 6)]
        assert goal_links == [Cell(17, 15)]

    def test_inner_nodes_removed(self):
        graph = _build(SCENARIOS_BY_NAME["Same horizontal plane"])
        for cell in (Cell(1, 4), Cell(5, 4), Cell(6, 4), Cell(9, 4), Cell(6, 16), Cell(7, 16)):
            assert cell not in graph
            assert graph.node(cell) is None
        # Region boundaries are kept
        assert Cell(0, 4) in graph
        assert Cell(12, 4) in graph

    def test_inner_nodes_kept_for_overlapping_regions(self):
        graph = _build(SCENARIOS_BY_NAME["Overlapping areas"])
        assert len(graph) == 49

    def test_degenerate_graph(self):
        graph = RoutingGraph.build(None, Cell(4, 4), Direction.DOWN, None, Cell(4, 4), Direction.UP)
        assert len(graph) == 1
        assert graph.start_node is graph.end_node
        assert graph.start_node.role is NodeRole.START
        assert graph.graph.number_of_edges() == 0
        assert graph.center_row is None
        assert graph.center_col is None

    def test_open_endpoint_without_neighbor(self):
        """Test an open endpoint facing off the grid is a contract violation"""
        with pytest.raises(RoutingContractError):
            RoutingGraph.build(None, Cell(0, 0), Direction.UP, None, Cell(5, 5), Direction.UP)

    def test_endpoint_facing_out_of_region(self):
        """Test an endpoint on the region edge pointing outwards never finds the boundary"""
        with pytest.raises(RoutingContractError):
            RoutingGraph.build(
                Region(Cell(0, 0), Cell(7, 6)), Cell(4, 6), Direction.RIGHT,
                None, Cell(17, 17), Direction.LEFT,
            )

    def test_first_hop_limit_from_config(self, standard_scenario):
        with pytest.raises(RoutingContractError):
            RoutingGraph.build(*standard_scenario.build_args(), config=RoutingConfig(first_hop_limit=1))
        graph = RoutingGraph.build(*standard_scenario.build_args(), config=RoutingConfig(first_hop_limit=2))
        assert len(graph) == 49


class TestCenterLine:
    """Test suite for center_line"""

    def test_separated_regions(self, standard_scenario):
        args = (standard_scenario.start_region, standard_scenario.start_cell,
                standard_scenario.end_region, standard_scenario.end_cell)
        assert center_line(*args, "row") == 9
        assert center_line(*args, "col") == 10

    def test_end_before_start(self):
        """Test the midpoint is found when the end region comes first"""
        start_region = Region(Cell(12, 15), Cell(20, 23))
        end_region = Region(Cell(0, 0), Cell(7, 6))
        assert center_line(start_region, Cell(17, 17), end_region, Cell(4, 4), "row") == 9
        assert center_line(start_region, Cell(17, 17), end_region, Cell(4, 4), "col") == 10

    def test_overlapping_extents_use_endpoints(self):
        scenario = SCENARIOS_BY_NAME["Overlapping areas"]
        args = (scenario.start_region, scenario.start_cell, scenario.end_region, scenario.end_cell)
        assert center_line(*args, "row") == 12
        assert center_line(*args, "col") == 11

    def test_open_endpoints(self):
        assert center_line(None, Cell(0, 0), None, Cell(5, 9), "row") == 2
        assert center_line(None, Cell(0, 0), None, Cell(5, 9), "col") == 4


class TestShouldRemoveInnerNodes:
    """Test suite for should_remove_inner_nodes"""

    def test_separate_regions(self):
        assert should_remove_inner_nodes(
            Region(Cell(0, 0), Cell(7, 6)), Cell(4, 4), Region(Cell(12, 15), Cell(20, 23)), Cell(17, 17)
        )

    def test_touching_regions(self):
        """Test regions sharing only an edge still drop inner nodes"""
        assert should_remove_inner_nodes(
            Region(Cell(0, 0), Cell(7, 6)), Cell(4, 4), Region(Cell(0, 6), Cell(7, 12)), Cell(4, 9)
        )

    def test_overlapping_regions(self):
        assert not should_remove_inner_nodes(
            Region(Cell(9, 0), Cell(19, 15)), Cell(17, 8), Region(Cell(0, 6), Cell(10, 21)), Cell(8, 14)
        )

    def test_open_end_inside_start_region(self):
        assert not should_remove_inner_nodes(Region(Cell(0, 0), Cell(7, 7)), Cell(5, 4), None, Cell(7, 5))

    def test_open_start_inside_end_region(self):
        assert not should_remove_inner_nodes(None, Cell(3, 3), Region(Cell(0, 0), Cell(7, 7)), Cell(5, 4))

    def test_open_endpoints(self):
        assert should_remove_inner_nodes(None, Cell(0, 0), None, Cell(5, 5))


class TestFindFirstHopCell:
    """Test suite for find_first_hop_cell"""

    @pytest.mark.parametrize("direction,expected", [
        (Direction.UP, Cell(0, 4)),
        (Direction.RIGHT, Cell(4, 6)),
        (Direction.DOWN, Cell(7, 4)),
        (Direction.LEFT, Cell(4, 0)),
    ])
    def test_boundary_in_each_direction(self, direction, expected):
        region = Region(Cell(0, 0), Cell(7, 6))
        assert find_first_hop_cell(Cell(4, 4), direction, region) == expected

    def test_no_region(self):
        assert find_first_hop_cell(Cell(4, 4), Direction.RIGHT, None) is None

    def test_facing_outwards(self):
        with pytest.raises(RoutingContractError):
            find_first_hop_cell(Cell(4, 6), Direction.RIGHT, Region(Cell(0, 0), Cell(7, 6)))

    def test_limit(self):
        region = Region(Cell(0, 0), Cell(7, 20))
        with pytest.raises(RoutingContractError):
            find_first_hop_cell(Cell(4, 0), Direction.RIGHT, region)
        assert find_first_hop_cell(Cell(4, 0), Direction.RIGHT, region, limit=20) == Cell(4, 20)
