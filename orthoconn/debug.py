"""Text renderings of routing graphs for debugging."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import Cell, Region

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .graph import RoutingGraph

BORDER_CHAR = "#"
REGION_CHAR = "."
PATH_CHAR = "@"


def format_routing_graph(
    graph: RoutingGraph,
    start_region: Region | None = None,
    end_region: Region | None = None,
    path: Sequence[Cell] | None = None,
) -> str:
    """Render regions, graph nodes and an optional path as a text grid.

    Region cells are drawn as '.', nodes by their role character
    ('S' start, 's' after start, 'g' before goal, 'G' goal, '*' standard)
    and cells covered by the path as '@'. The origin is always included so
    the top left of the output is (0, 0) for non-negative coordinates.
    """
    regions = [region for region in (start_region, end_region) if region is not None]
    path = list(path or [])

    corners = [Cell(0, 0), graph.start_cell, graph.end_cell, *graph.nodes_by_cell, *path]
    for region in regions:
        corners.extend((region.top_left, region.bottom_right))
    total = Region.from_cells(corners)

    grid = [[" "] * total.num_cols for _ in range(total.num_rows)]

    def put(cell: Cell, char: str) -> None:
        grid[cell.row - total.top][cell.col - total.left] = char

    for region in regions:
        for cell in region.cells():
            put(cell, REGION_CHAR)
    for cell, node in graph.nodes_by_cell.items():
        put(cell, node.role.debug_char)
    for prev, current in zip(path, path[1:]):
        for cell in prev.line_to(current):
            put(cell, PATH_CHAR)

    border = BORDER_CHAR * (total.num_cols + 2)
    lines = [border]
    lines.extend(f"{BORDER_CHAR}{''.join(row)}{BORDER_CHAR}" for row in grid)
    lines.append(border)
    return "\n".join(lines)
