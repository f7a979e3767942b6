"""orthoconn - Orthogonal connector routing for grid diagrams.

Example usage:
    from orthoconn import Cell, Region, route_connector

    path = route_connector(
        Cell(4, 4), Cell(17, 17),
        start_region=Region(Cell(0, 0), Cell(7, 6)),
        end_region=Region(Cell(12, 15), Cell(20, 23)),
        start_direction="right",
        end_direction="left",
    )
    for event in path.events():
        print(event.cell, event.kind, event.direction)
"""

from .connectors import (
    elbow_connector,
    elbow_path,
    infer_directions,
)
from .correction import (
    center_line_correction,
    count_turns,
    direction_between,
)
from .debug import (
    format_routing_graph,
)
from .graph import (
    Neighbor,
    RouteNode,
    RoutingGraph,
)
from .models import (
    Axis,
    Cell,
    Direction,
    NodeRole,
    Region,
    RoutingContractError,
)
from .pathfinding import (
    TURN_PENALTY,
    RoutingConfig,
    find_path,
)
from .router import (
    RoutedPath,
    direction_from,
    orthogonal_path,
    route_connector,
)
from .traversal import (
    EventKind,
    PathEvent,
    iter_path_events,
    walk_path,
)

__version__ = "0.1.0"

__all__ = [
    # Routing
    "route_connector",
    "orthogonal_path",
    "direction_from",
    "RoutedPath",
    "RoutingConfig",
    # Models
    "Cell",
    "Region",
    "Direction",
    "Axis",
    "NodeRole",
    "RoutingContractError",
    # Graph and search
    "RoutingGraph",
    "RouteNode",
    "Neighbor",
    "find_path",
    "TURN_PENALTY",
    # Correction
    "center_line_correction",
    "count_turns",
    "direction_between",
    # Events
    "EventKind",
    "PathEvent",
    "iter_path_events",
    "walk_path",
    # Simple connectors
    "elbow_path",
    "elbow_connector",
    "infer_directions",
    # Debugging
    "format_routing_graph",
    # Version
    "__version__",
]
