"""Turn-penalized A* search over a RoutingGraph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .graph import FIRST_HOP_LIMIT

if TYPE_CHECKING:
    from .graph import RouteNode, RoutingGraph
    from .models import Cell

logger = logging.getLogger(__name__)

# Cost added when the path changes axis; prevents "staircase" paths
TURN_PENALTY = 0.5


@dataclass
class RoutingConfig:
    """Configuration for connector routing."""

    turn_penalty: float = TURN_PENALTY
    # Steps allowed when searching for an endpoint's region boundary
    first_hop_limit: int = FIRST_HOP_LIMIT
    # Nudge paths onto the center line between the two endpoints
    center_line_correction: bool = True
    # Debug mode: log text renderings of the graph and routed path
    debug: bool = False


def find_path(
    graph: RoutingGraph,
    start: RouteNode | None = None,
    goal: RouteNode | None = None,
    turn_penalty: float = TURN_PENALTY,
) -> list[Cell]:
    """Find the cheapest path between two nodes using A*.

    Edge costs are the distance between the two cells. Changing axis at a
    node adds turn_penalty, so among paths of equal length the one with
    fewer bends wins. The open set is scanned linearly and ties go to the
    node that entered it first.

    Args:
        graph: Routing graph to search
        start: Start node (defaults to the graph's start node)
        goal: Goal node (defaults to the graph's end node)
        turn_penalty: Cost added for each change of axis

    Returns:
        Cells from start to goal inclusive, or an empty list if no path exists
    """
    start = start if start is not None else graph.start_node
    goal = goal if goal is not None else graph.end_node
    if start is None or goal is None:
        return []

    def heuristic(node: RouteNode) -> int:
        return node.cell.manhattan(goal.cell)

    # dicts keep insertion order, which decides ties between equal f scores
    open_set: dict[RouteNode, None] = {start: None}
    closed: set[RouteNode] = set()

    start.g = 0
    start.h = heuristic(start)

    while open_set:
        current = None
        for node in open_set:
            if current is None or node.f < current.f:
                current = node

        logger.debug("Exploring %s, g=%s, h=%s -> f=%s", current.cell, current.g, current.h, current.f)

        if current is goal:
            return _reconstruct_path(goal)

        del open_set[current]
        closed.add(current)

        for neighbor, cost, axis in graph.neighbors(current):
            if neighbor in closed:
                continue

            tentative_g = current.g + cost
            if current.came_from is not None and current.came_from_axis is not axis:
                tentative_g += turn_penalty

            if neighbor not in open_set:
                open_set[neighbor] = None
            elif tentative_g >= neighbor.g:
                continue

            neighbor.came_from = current
            neighbor.came_from_axis = axis
            neighbor.g = tentative_g
            neighbor.h = heuristic(neighbor)

    logger.warning("No path found from %s to %s", start.cell, goal.cell)
    return []


def _reconstruct_path(goal: RouteNode) -> list[Cell]:
    """Follow came_from links back from the goal."""
    path = []
    current = goal
    while current is not None:
        path.append(current.cell)
        current = current.came_from
    path.reverse()
    return path
