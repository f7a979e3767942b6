"""Examples demonstrating orthogonal connector routing."""

import logging

from orthoconn import (
    Axis,
    Cell,
    EventKind,
    Region,
    RoutingConfig,
    RoutingGraph,
    elbow_path,
    format_routing_graph,
    orthogonal_path,
    route_connector,
)


def show_route(title, start_region, start_cell, start_direction, end_region, end_cell, end_direction):
    """Route one connector and print the graph and the corrected path."""
    routed = route_connector(
        start_cell, end_cell,
        start_region=start_region,
        end_region=end_region,
        start_direction=start_direction,
        end_direction=end_direction,
    )
    graph = RoutingGraph.build(
        start_region, start_cell, routed.start_direction,
        end_region, end_cell, routed.end_direction,
    )

    print(f"--- {title} ---")
    print(f"{len(graph)} nodes, {routed.num_turns} turns")
    print(format_routing_graph(graph, start_region, end_region))
    print(format_routing_graph(graph, start_region, end_region, routed.cells))
    print(" -> ".join(str(cell) for cell in routed.cells))
    print()


def shape_to_shape():
    """Two shapes side by side; the connector drops onto the center column."""
    show_route(
        "Shape to shape",
        Region(Cell(0, 0), Cell(7, 6)), Cell(4, 4), "right",
        Region(Cell(12, 15), Cell(20, 23)), Cell(17, 17), "left",
    )


def same_plane():
    """Shapes at the same height; the connector jogs on the center column."""
    show_route(
        "Same horizontal plane",
        Region(Cell(0, 0), Cell(12, 6)), Cell(7, 4), "right",
        Region(Cell(1, 14), Cell(9, 19)), Cell(5, 16), "left",
    )


def open_ended():
    """Connector from a shape to a loose end."""
    show_route(
        "Open ended",
        Region(Cell(0, 0), Cell(7, 7)), Cell(4, 5), "right",
        None, Cell(17, 17), "left",
    )


def wrapping():
    """Loose end inside the start shape; the connector wraps around it."""
    show_route(
        "Wrapping around the shape",
        Region(Cell(0, 0), Cell(7, 7)), Cell(5, 4), "down",
        None, Cell(7, 5), "up",
    )


def overlapping_shapes():
    """Overlapping shapes keep their inner nodes so a path still exists."""
    show_route(
        "Overlapping shapes",
        Region(Cell(9, 0), Cell(19, 15)), Cell(17, 8), "down",
        Region(Cell(0, 6), Cell(10, 21)), Cell(8, 14), "down",
    )


def draw_with_callback():
    """Collect per-cell drawing events into a character canvas."""
    canvas = {}

    def draw(event):
        if event.kind in (EventKind.START, EventKind.END):
            canvas[event.cell] = "o"
        elif event.is_bend:
            canvas[event.cell] = "+"
        elif event.direction.axis is Axis.HORIZONTAL:
            canvas[event.cell] = "-"
        else:
            canvas[event.cell] = "|"

    orthogonal_path(Cell(1, 1), Cell(8, 20), draw, start_direction="right", end_direction="left")

    rows = max(cell.row for cell in canvas) + 1
    cols = max(cell.col for cell in canvas) + 1
    for row in range(rows):
        print("".join(canvas.get(Cell(row, col), " ") for col in range(cols)))
    print()


def simple_elbows():
    """Connectors that need no search."""
    print("Straight:     ", elbow_path(Cell(2, 0), Cell(2, 6), "right", "left"))
    print("Single elbow: ", elbow_path(Cell(0, 0), Cell(5, 5), "right", "up"))
    print("Double elbow: ", elbow_path(Cell(0, 0), Cell(10, 4)))
    print()


def debug_logging():
    """Let the router log its own renderings."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    logging.getLogger("orthoconn.pathfinding").setLevel(logging.INFO)

    route_connector(
        Cell(4, 4), Cell(17, 17),
        start_region=Region(Cell(0, 0), Cell(7, 6)),
        end_region=Region(Cell(12, 15), Cell(20, 23)),
        start_direction="right",
        end_direction="left",
        config=RoutingConfig(debug=True),
    )


if __name__ == "__main__":
    print("=== Connector routing examples ===\n")

    print("1. Routed connectors:")
    shape_to_shape()
    same_plane()
    open_ended()
    wrapping()
    overlapping_shapes()

    print("2. Drawing events:")
    draw_with_callback()

    print("3. Simple elbows:")
    simple_elbows()

    print("4. Debug logging:")
    debug_logging()

    print("=== Done ===")
