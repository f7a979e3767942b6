"""Sparse routing graph for orthogonal connector pathfinding using NetworkX."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, NamedTuple

import networkx as nx

from .models import (
    CARDINAL_DIRECTIONS,
    Axis,
    Cell,
    Direction,
    NodeRole,
    Region,
    RoutingContractError,
)

if TYPE_CHECKING:
    from .pathfinding import RoutingConfig

logger = logging.getLogger(__name__)

# Maximum steps taken from an endpoint to reach its region boundary
FIRST_HOP_LIMIT = 10


@dataclass(eq=False)
class RouteNode:
    """A vertex of the routing graph, carrying A* scratch state."""

    cell: Cell
    role: NodeRole = NodeRole.STANDARD
    g: float = math.inf
    h: float = 0.0
    came_from: RouteNode | None = field(default=None, repr=False)
    came_from_axis: Axis | None = None

    @property
    def f(self) -> float:
        return self.g + self.h

    def __str__(self) -> str:
        return f"{self.cell} ({self.role.debug_char})"


class Neighbor(NamedTuple):
    """An outgoing edge of a RouteNode."""

    node: RouteNode
    cost: int
    axis: Axis


class RoutingGraph:
    """Routing graph built from the guide lines of two endpoints.

    Nodes sit on the intersections of a handful of horizontal and vertical
    guide lines (region edges, endpoint rows/cols and the center lines).
    Every neighbor link is stored as a directed edge so that each node keeps
    its own neighbor order.
    """

    def __init__(
        self,
        start_cell: Cell,
        end_cell: Cell,
        center_row: int | None = None,
        center_col: int | None = None,
    ):
        self.start_cell = start_cell
        self.end_cell = end_cell
        self.center_row = center_row
        self.center_col = center_col
        self.graph: nx.DiGraph = nx.DiGraph()

    @classmethod
    def build(
        cls,
        start_region: Region | None,
        start_cell: Cell,
        start_direction: Direction,
        end_region: Region | None,
        end_cell: Cell,
        end_direction: Direction,
        config: RoutingConfig | None = None,
    ) -> RoutingGraph:
        """Build the routing graph between two endpoints.

        Args:
            start_region: Region owning the start cell, if any
            start_cell: Where the path starts
            start_direction: Direction the path leaves the start cell in
            end_region: Region owning the end cell, if any
            end_cell: Where the path ends
            end_direction: Direction the path arrives at the end cell from
            config: Routing configuration

        Returns:
            Populated RoutingGraph ready for pathfinding
        """
        first_hop_limit = config.first_hop_limit if config else FIRST_HOP_LIMIT

        if start_cell == end_cell:
            graph = cls(start_cell, end_cell)
            graph.add_node(RouteNode(start_cell, NodeRole.START))
            return graph

        center_row = center_line(start_region, start_cell, end_region, end_cell, "row")
        center_col = center_line(start_region, start_cell, end_region, end_cell, "col")
        graph = cls(start_cell, end_cell, center_row, center_col)

        grid = _build_grid(
            start_region, start_cell, start_direction,
            end_region, end_cell, end_direction,
            center_row, center_col, first_hop_limit,
        )
        for grid_row in grid:
            for node in grid_row:
                if node is not None:
                    graph.add_node(node)

        assign_neighbors(graph, grid, start_direction, end_direction)

        logger.debug(
            "Built routing graph: %d nodes, %d edges, center row %s, center col %s",
            graph.graph.number_of_nodes(), graph.graph.number_of_edges(),
            center_row, center_col,
        )
        return graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, cell: Cell) -> bool:
        return cell in self.graph

    def add_node(self, node: RouteNode) -> None:
        self.graph.add_node(node.cell, node=node)

    def node(self, cell: Cell) -> RouteNode | None:
        if cell not in self.graph:
            return None
        return self.graph.nodes[cell]["node"]

    @property
    def nodes_by_cell(self) -> dict[Cell, RouteNode]:
        return {cell: data["node"] for cell, data in self.graph.nodes(data=True)}

    @property
    def start_node(self) -> RouteNode | None:
        return self.node(self.start_cell)

    @property
    def end_node(self) -> RouteNode | None:
        return self.node(self.end_cell)

    def connect(self, node: RouteNode, neighbor: RouteNode, axis: Axis) -> None:
        """Add a directed edge from node to neighbor along an axis."""
        if axis is Axis.HORIZONTAL:
            cost = abs(neighbor.cell.col - node.cell.col)
        else:
            cost = abs(neighbor.cell.row - node.cell.row)
        self.graph.add_edge(node.cell, neighbor.cell, cost=cost, axis=axis)

    def neighbors(self, node: RouteNode) -> list[Neighbor]:
        """Outgoing edges of a node, in the order they were assigned."""
        return [
            Neighbor(self.graph.nodes[cell]["node"], data["cost"], data["axis"])
            for cell, data in self.graph.adj[node.cell].items()
        ]


def center_line(
    start_region: Region | None,
    start_cell: Cell,
    end_region: Region | None,
    end_cell: Cell,
    attr: Literal["row", "col"],
) -> int:
    """Compute the row or col halfway between the two endpoints' extents.

    Each extent is the endpoint's region, or the bare cell without one. When
    the extents overlap along this axis, the midpoint of the two cells is used.
    """
    start_near = start_region.top_left if start_region else start_cell
    start_far = start_region.bottom_right if start_region else start_cell
    end_near = end_region.top_left if end_region else end_cell
    end_far = end_region.bottom_right if end_region else end_cell

    if getattr(start_far, attr) <= getattr(end_near, attr):
        return (getattr(start_far, attr) + getattr(end_near, attr)) // 2
    if getattr(end_far, attr) <= getattr(start_near, attr):
        return (getattr(end_far, attr) + getattr(start_near, attr)) // 2
    return (getattr(start_cell, attr) + getattr(end_cell, attr)) // 2


def should_remove_inner_nodes(
    start_region: Region | None,
    start_cell: Cell,
    end_region: Region | None,
    end_cell: Cell,
) -> bool:
    """Decide whether nodes inside the regions can be dropped.

    Inner nodes are normally dropped so paths go around shapes. When the
    shapes overlap, or an open endpoint sits inside the other shape, they
    are needed to keep start and goal connected.
    """
    if start_region and end_region and start_region.overlaps(end_region, inclusive=False):
        return False
    if start_region and not end_region and start_region.contains_cell(end_cell):
        return False
    if end_region and not start_region and end_region.contains_cell(start_cell):
        return False
    return True


def find_first_hop_cell(
    endpoint: Cell,
    direction: Direction,
    region: Region | None,
    limit: int = FIRST_HOP_LIMIT,
) -> Cell | None:
    """Find the cell where a path leaving endpoint crosses its region boundary.

    Returns None when the endpoint has no region.
    """
    if region is None:
        return None

    boundary = endpoint
    for _ in range(limit):
        boundary = boundary.step(direction)
        if direction is Direction.UP and boundary.row == region.top:
            return boundary
        if direction is Direction.RIGHT and boundary.col == region.right:
            return boundary
        if direction is Direction.DOWN and boundary.row == region.bottom:
            return boundary
        if direction is Direction.LEFT and boundary.col == region.left:
            return boundary

    raise RoutingContractError(
        f"Could not find boundary cell: {endpoint} {direction.value} {region}"
    )


def _build_grid(
    start_region: Region | None,
    start_cell: Cell,
    start_direction: Direction,
    end_region: Region | None,
    end_cell: Cell,
    end_direction: Direction,
    center_row: int,
    center_col: int,
    first_hop_limit: int,
) -> list[list[RouteNode | None]]:
    """Create nodes at the intersections of the guide lines.

    There are up to 7 horizontal lines: the top and bottom of both regions,
    the rows of both endpoints and the center row. Likewise for the vertical
    lines. Intersections strictly inside a region are left empty (None)
    unless they are an endpoint or a first hop.
    """
    rows = {start_cell.row, end_cell.row, center_row}
    cols = {start_cell.col, end_cell.col, center_col}
    for region in (start_region, end_region):
        if region is None:
            continue
        rows.update((region.top, region.bottom))
        cols.update((region.left, region.right))

    remove_inner = should_remove_inner_nodes(start_region, start_cell, end_region, end_cell)
    after_start = find_first_hop_cell(start_cell, start_direction, start_region, first_hop_limit)
    before_goal = find_first_hop_cell(end_cell, end_direction, end_region, first_hop_limit)

    grid: list[list[RouteNode | None]] = []
    for row in sorted(rows):
        grid_row: list[RouteNode | None] = []
        for col in sorted(cols):
            cell = Cell(row, col)
            role = NodeRole.STANDARD
            if cell == start_cell:
                role = NodeRole.START
            if cell == end_cell:
                role = NodeRole.GOAL
            if cell == after_start:
                role = NodeRole.AFTER_START
            if cell == before_goal:
                role = NodeRole.BEFORE_GOAL

            if remove_inner and role is NodeRole.STANDARD and (
                (start_region and start_region.contains_cell(cell, inclusive=False))
                or (end_region and end_region.contains_cell(cell, inclusive=False))
            ):
                grid_row.append(None)
                continue

            grid_row.append(RouteNode(cell, role))
        grid.append(grid_row)

    return grid


def assign_neighbors(
    graph: RoutingGraph,
    grid: list[list[RouteNode | None]],
    start_direction: Direction,
    end_direction: Direction,
) -> None:
    """Link each grid node to its neighbors in the routing graph.

    - Standard and first-hop nodes link to every adjacent grid node (up,
      right, down, left) that is not the start or goal.
    - Start and goal link to exactly one node, in both directions: their
      first hop if they have one, otherwise the adjacent grid node in their
      approach direction.
    - Empty grid positions break adjacency; nodes on either side of a gap
      are not neighbors.
    """
    first_hops = {
        node.role: node
        for grid_row in grid
        for node in grid_row
        if node is not None and node.role in (NodeRole.AFTER_START, NodeRole.BEFORE_GOAL)
    }

    def grid_node(row_index: int, col_index: int) -> RouteNode | None:
        if 0 <= row_index < len(grid) and 0 <= col_index < len(grid[row_index]):
            return grid[row_index][col_index]
        return None

    for row_index, grid_row in enumerate(grid):
        for col_index, node in enumerate(grid_row):
            if node is None:
                continue

            if not node.role.is_endpoint:
                for direction in CARDINAL_DIRECTIONS:
                    row_offset, col_offset = direction.offset
                    neighbor = grid_node(row_index + row_offset, col_index + col_offset)
                    if neighbor is None or neighbor.role.is_endpoint:
                        continue
                    graph.connect(node, neighbor, direction.axis)
                continue

            if node.role is NodeRole.START:
                direction = start_direction
                neighbor = first_hops.get(NodeRole.AFTER_START)
            else:
                direction = end_direction
                neighbor = first_hops.get(NodeRole.BEFORE_GOAL)

            # Open endpoints have no first hop; use the adjacent node instead
            if neighbor is None:
                row_offset, col_offset = direction.offset
                neighbor = grid_node(row_index + row_offset, col_index + col_offset)
            if neighbor is None:
                raise RoutingContractError(
                    f"No neighbor {direction.value} of {node.role.value} node at {node.cell}"
                )

            graph.connect(node, neighbor, direction.axis)
            graph.connect(neighbor, node, direction.axis)
