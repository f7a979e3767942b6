"""Route orthogonal connectors between two endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .correction import center_line_correction, count_turns
from .debug import format_routing_graph
from .graph import RoutingGraph
from .models import Direction
from .pathfinding import RoutingConfig, find_path
from .traversal import iter_path_events

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from .models import Cell, Region
    from .traversal import PathEvent

logger = logging.getLogger(__name__)


@dataclass
class RoutedPath:
    """A computed connector between two endpoints."""

    cells: list[Cell]
    start_direction: Direction
    end_direction: Direction
    # A* output before center line correction
    raw_cells: list[Cell] = field(default_factory=list, repr=False)
    center_row: int | None = None
    center_col: int | None = None

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    @property
    def num_turns(self) -> int:
        return count_turns(self.cells)

    def events(self) -> Iterator[PathEvent]:
        """Per-cell drawing events; empty when no path was found."""
        return iter_path_events(self.cells, self.start_direction, self.end_direction)


def direction_from(from_cell: Cell, to_cell: Cell) -> Direction:
    """Pick the direction pointing from one cell towards another.

    The axis with the larger delta wins; ties go to the vertical axis.
    """
    row_delta = to_cell.row - from_cell.row
    col_delta = to_cell.col - from_cell.col
    if abs(row_delta) >= abs(col_delta):
        return Direction.DOWN if row_delta >= 0 else Direction.UP
    return Direction.RIGHT if col_delta >= 0 else Direction.LEFT


def route_connector(
    start_cell: Cell,
    end_cell: Cell,
    start_region: Region | None = None,
    end_region: Region | None = None,
    start_direction: Direction | str | None = None,
    end_direction: Direction | str | None = None,
    config: RoutingConfig | None = None,
) -> RoutedPath:
    """Build an orthogonal path between two cells.

    Each cell may be owned by a region (usually the bounding box of a shape)
    and the path avoids passing through these regions.

    Usage:
        path = route_connector(
            Cell(4, 4), Cell(17, 17),
            start_region=Region(Cell(0, 0), Cell(7, 6)),
            end_region=Region(Cell(12, 15), Cell(20, 23)),
            start_direction="right",
            end_direction="left",
        )
        for event in path.events():
            ...

    Args:
        start_cell: Where the connector starts
        end_cell: Where the connector ends
        start_region: Region owning the start cell
        end_region: Region owning the end cell
        start_direction: Direction the connector leaves the start in
            (inferred from the cell positions when omitted)
        end_direction: Direction the connector arrives at the end from
            (inferred from the cell positions when omitted)
        config: Routing configuration

    Returns:
        RoutedPath with the corrected path vertices
    """
    config = config or RoutingConfig()

    if start_direction is None:
        start_direction = direction_from(start_cell, end_cell)
    if end_direction is None:
        end_direction = direction_from(end_cell, start_cell)
    start_direction = Direction.parse(start_direction)
    end_direction = Direction.parse(end_direction)

    logger.debug(
        "Routing %s %s (%s) -> %s %s (%s)",
        start_region, start_cell, start_direction.value,
        end_region, end_cell, end_direction.value,
    )

    graph = RoutingGraph.build(
        start_region, start_cell, start_direction,
        end_region, end_cell, end_direction,
        config=config,
    )
    raw_cells = find_path(graph, turn_penalty=config.turn_penalty)

    cells = raw_cells
    if config.center_line_correction:
        cells = center_line_correction(
            raw_cells,
            graph.center_row,
            graph.center_col,
            [region for region in (start_region, end_region) if region is not None],
            [start_cell, end_cell],
        )

    if config.debug:
        logger.debug(
            "Routing graph:\n%s", format_routing_graph(graph, start_region, end_region)
        )
        logger.debug(
            "Routed path:\n%s", format_routing_graph(graph, start_region, end_region, cells)
        )

    return RoutedPath(
        cells=list(cells),
        start_direction=start_direction,
        end_direction=end_direction,
        raw_cells=list(raw_cells),
        center_row=graph.center_row,
        center_col=graph.center_col,
    )


def orthogonal_path(
    start_cell: Cell,
    end_cell: Cell,
    callback: Callable[[PathEvent], object],
    start_region: Region | None = None,
    end_region: Region | None = None,
    start_direction: Direction | str | None = None,
    end_direction: Direction | str | None = None,
    config: RoutingConfig | None = None,
) -> RoutedPath:
    """Route a connector and pass every cell's event to callback.

    See route_connector for the arguments.
    """
    routed = route_connector(
        start_cell, end_cell,
        start_region=start_region,
        end_region=end_region,
        start_direction=start_direction,
        end_direction=end_direction,
        config=config,
    )
    for event in routed.events():
        callback(event)
    return routed
