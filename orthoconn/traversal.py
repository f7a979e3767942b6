"""Translate routed paths into per-cell drawing events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .correction import direction_between

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from .models import Cell, Direction


class EventKind(Enum):
    """What a traversed cell is within the connector."""

    START = "start"
    END = "end"
    MIDDLE = "middle"
    CONNECTOR = "connector"


@dataclass(frozen=True)
class PathEvent:
    """A single cell of a routed connector.

    For START and END events, direction is the endpoint's approach direction.
    For MIDDLE events (path vertices) it is the incoming direction and
    exit_direction is the outgoing one. CONNECTOR cells only carry the
    direction of their segment.
    """

    cell: Cell
    kind: EventKind
    direction: Direction
    exit_direction: Direction | None = None

    @property
    def is_bend(self) -> bool:
        return self.exit_direction is not None and self.exit_direction is not self.direction


def iter_path_events(
    path: Sequence[Cell],
    start_direction: Direction,
    end_direction: Direction,
) -> Iterator[PathEvent]:
    """Yield one event per cell covered by a path of vertices.

    Args:
        path: Path vertices, consecutive vertices sharing a row or column
        start_direction: Direction the connector leaves the start cell in
        end_direction: Direction the connector arrives at the end cell from

    Yields:
        PathEvent for every cell, in order of travel
    """
    for i, cell in enumerate(path):
        if i == 0:
            yield PathEvent(cell, EventKind.START, start_direction)
            continue

        prev = path[i - 1]
        direction = direction_between(prev, cell)
        for connector in prev.line_to(cell, inclusive=False):
            yield PathEvent(connector, EventKind.CONNECTOR, direction)

        if i == len(path) - 1:
            yield PathEvent(cell, EventKind.END, end_direction)
        else:
            exit_direction = direction_between(cell, path[i + 1])
            yield PathEvent(cell, EventKind.MIDDLE, direction, exit_direction)


def walk_path(
    path: Sequence[Cell],
    start_direction: Direction,
    end_direction: Direction,
    callback: Callable[[PathEvent], object],
) -> None:
    """Invoke callback with every event of a path."""
    for event in iter_path_events(path, start_direction, end_direction):
        callback(event)
