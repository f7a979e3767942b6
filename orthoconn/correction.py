"""Center line correction of routed paths.

A* finds the shortest path with the fewest turns, but that path is not
always the one people draw by hand. Hand-drawn flow charts tend to run the
connector along the "center line", the perpendicular line halfway between
the two shapes. Rewarding the center line inside A* conflicts with the turn
penalty, so instead the A* path is altered afterwards, as long as this does
not add turns or cut through a shape.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from .models import Cell, Direction, Region, RoutingContractError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def direction_between(from_cell: Cell, to_cell: Cell) -> Direction:
    """Direction of travel between two cells on a shared row or column.

    No movement reads as DOWN.
    """
    if from_cell.row != to_cell.row and from_cell.col != to_cell.col:
        raise RoutingContractError(
            f"Cells must be along a horizontal or vertical line: {from_cell} -> {to_cell}"
        )
    if from_cell.row < to_cell.row:
        return Direction.DOWN
    if from_cell.row > to_cell.row:
        return Direction.UP
    if from_cell.col < to_cell.col:
        return Direction.RIGHT
    if from_cell.col > to_cell.col:
        return Direction.LEFT
    return Direction.DOWN


def count_turns(path: Sequence[Cell]) -> int:
    """Count direction changes along a path of vertices."""
    turns = 0
    prev_dir = None
    for prev, current in zip(path, path[1:]):
        current_dir = direction_between(prev, current)
        if prev_dir is not None and current_dir is not prev_dir:
            turns += 1
        prev_dir = current_dir
    return turns


def center_line_correction(
    path: Sequence[Cell],
    center_row: int | None,
    center_col: int | None,
    blocked_regions: Sequence[Region] = (),
    blocked_cells: Sequence[Cell] = (),
) -> list[Cell]:
    """Move one segment of the path onto each center line where possible.

    The column correction is tried first, then the row correction on its
    result. Both are measured against the turn count of the given path.

    Args:
        path: Path vertices, e.g. from find_path
        center_row: Row halfway between the endpoints (None to skip)
        center_col: Column halfway between the endpoints (None to skip)
        blocked_regions: Regions the rerouted segment must not cut through
        blocked_cells: Cells the path may not be rerouted at (the endpoints)

    Returns:
        A new list of vertices; equal to the input when nothing applies
    """
    path = list(path)
    if len(path) < 3:
        return path

    num_turns = count_turns(path)

    if center_col is not None:
        corrected = _find_center_corrected_path(
            path, num_turns, "col", center_col, blocked_regions, blocked_cells
        )
        if corrected is not None:
            path = corrected

    if center_row is not None:
        corrected = _find_center_corrected_path(
            path, num_turns, "row", center_row, blocked_regions, blocked_cells
        )
        if corrected is not None:
            path = corrected

    return path


def _find_center_corrected_path(
    path: list[Cell],
    num_turns: int,
    attr: Literal["row", "col"],
    center: int,
    blocked_regions: Sequence[Region],
    blocked_cells: Sequence[Cell],
) -> list[Cell] | None:
    """Reroute the segment parallel to a center line onto that line.

    Returns None when the correction does not apply or is rejected.
    """
    # Find where the path hits the center line, where it turns to run
    # parallel to it, and where it turns back.
    hit_index = turn_index = end_index = None
    hit_dir = None
    for i in range(1, len(path)):
        current_dir = direction_between(path[i - 1], path[i])

        if hit_index is None and getattr(path[i], attr) == center:
            hit_index = i
            hit_dir = current_dir

        if hit_index is not None and turn_index is None and current_dir is not hit_dir:
            turn_index = i - 1
            if turn_index == hit_index:
                logger.debug("Turn at %s is already on center %s %d", path[i - 1], attr, center)
                return None

        if (
            hit_index is not None and turn_index is not None
            and end_index is None and current_dir is hit_dir
        ):
            end_index = i - 1

    if end_index is None:
        return None

    hit = path[hit_index]
    old_turn = path[turn_index]
    end = path[end_index]

    # New turning point is the corner of the rectangle opposite the old turn
    new_turn = Cell(center, end.col) if attr == "row" else Cell(end.row, center)
    rect = Region.from_cells([old_turn, new_turn])

    for region in blocked_regions:
        if region.overlaps(rect, inclusive=False):
            logger.debug("Center %s correction blocked by region %s", attr, region)
            return None
    for cell in blocked_cells:
        if hit == cell or end == cell:
            logger.debug("Center %s correction would reroute through endpoint %s", attr, cell)
            return None

    corrected = path[:hit_index + 1] + [new_turn] + path[end_index:]

    if count_turns(corrected) > num_turns:
        logger.debug("Center %s correction rejected: adds turns", attr)
        return None

    logger.debug("Corrected path onto center %s %d via %s", attr, center, new_turn)
    return corrected
