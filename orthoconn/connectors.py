"""Simple elbow connectors between two open endpoints.

These connectors do not search a graph. They are straight lines or lines
with one or two right-angle bends, chosen from the endpoint directions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import Axis, Cell, Direction, Region, RoutingContractError
from .traversal import iter_path_events

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .traversal import PathEvent


def infer_directions(start_cell: Cell, end_cell: Cell) -> tuple[Direction, Direction]:
    """Pick start/end directions along the longer axis between two cells."""
    if abs(end_cell.row - start_cell.row) >= abs(end_cell.col - start_cell.col):
        if end_cell.row >= start_cell.row:
            return Direction.DOWN, Direction.UP
        return Direction.UP, Direction.DOWN
    if end_cell.col >= start_cell.col:
        return Direction.RIGHT, Direction.LEFT
    return Direction.LEFT, Direction.RIGHT


def _validate_endpoint(direction: Direction, from_cell: Cell, to_cell: Cell) -> None:
    if (
        (direction is Direction.UP and from_cell.row < to_cell.row)
        or (direction is Direction.RIGHT and from_cell.col > to_cell.col)
        or (direction is Direction.DOWN and from_cell.row > to_cell.row)
        or (direction is Direction.LEFT and from_cell.col < to_cell.col)
    ):
        raise RoutingContractError(
            f"Cannot move {direction.value} from {from_cell} to {to_cell}"
        )


def _can_be_straight(
    start_cell: Cell,
    start_direction: Direction,
    end_cell: Cell,
    end_direction: Direction,
) -> bool:
    if start_direction is not end_direction.opposite:
        return False
    if start_direction is Direction.UP:
        return start_cell.row >= end_cell.row and start_cell.col == end_cell.col
    if start_direction is Direction.RIGHT:
        return start_cell.col <= end_cell.col and start_cell.row == end_cell.row
    if start_direction is Direction.DOWN:
        return start_cell.row <= end_cell.row and start_cell.col == end_cell.col
    return start_cell.col >= end_cell.col and start_cell.row == end_cell.row


def elbow_path(
    start_cell: Cell,
    end_cell: Cell,
    start_direction: Direction | str | None = None,
    end_direction: Direction | str | None = None,
) -> list[Cell]:
    """Compute the vertices of a simple connector.

    - Opposite directions on a shared line give a straight line.
    - Other opposite directions give a double elbow that turns halfway along
      the longer axis.
    - Perpendicular directions give a single elbow.

    Args:
        start_cell: Where the connector starts
        end_cell: Where the connector ends
        start_direction: Direction the connector leaves the start in
        end_direction: Direction the connector arrives at the end from

    Returns:
        Path vertices from start to end
    """
    inferred_start, inferred_end = infer_directions(start_cell, end_cell)
    start_direction = Direction.parse(start_direction or inferred_start)
    end_direction = Direction.parse(end_direction or inferred_end)

    if start_direction is end_direction:
        raise RoutingContractError(f"Cannot have same start/end direction: {start_direction.value}")
    _validate_endpoint(start_direction, start_cell, end_cell)
    _validate_endpoint(end_direction, end_cell, start_cell)

    if _can_be_straight(start_cell, start_direction, end_cell, end_direction):
        vertices = [start_cell, end_cell]
    elif start_direction is end_direction.opposite:
        vertices = _double_elbow(start_cell, end_cell)
    elif start_direction.axis is Axis.VERTICAL:
        vertices = [start_cell, Cell(end_cell.row, start_cell.col), end_cell]
    else:
        vertices = [start_cell, Cell(start_cell.row, end_cell.col), end_cell]

    # Collapse zero-length segments
    path = [vertices[0]]
    for cell in vertices[1:]:
        if cell != path[-1]:
            path.append(cell)
    return path


def _double_elbow(start_cell: Cell, end_cell: Cell) -> list[Cell]:
    area = Region.from_cells([start_cell, end_cell])
    if area.num_rows <= 2 and area.num_cols <= 2:
        # Not enough room for two bends; keep the directions and use one
        return [start_cell, Cell(start_cell.row, end_cell.col), end_cell]

    if abs(end_cell.row - start_cell.row) >= abs(end_cell.col - start_cell.col):
        mid_row = (start_cell.row + end_cell.row) // 2
        return [start_cell, Cell(mid_row, start_cell.col), Cell(mid_row, end_cell.col), end_cell]

    mid_col = (start_cell.col + end_cell.col) // 2
    return [start_cell, Cell(start_cell.row, mid_col), Cell(end_cell.row, mid_col), end_cell]


def elbow_connector(
    start_cell: Cell,
    end_cell: Cell,
    start_direction: Direction | str | None = None,
    end_direction: Direction | str | None = None,
) -> Iterator[PathEvent]:
    """Per-cell drawing events for a simple connector."""
    inferred_start, inferred_end = infer_directions(start_cell, end_cell)
    start_direction = Direction.parse(start_direction or inferred_start)
    end_direction = Direction.parse(end_direction or inferred_end)
    path = elbow_path(start_cell, end_cell, start_direction, end_direction)
    return iter_path_events(path, start_direction, end_direction)
