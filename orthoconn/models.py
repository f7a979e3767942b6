"""Grid value types for orthoconn routing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class RoutingContractError(ValueError):
    """Raised when the router is called with inputs that break its contract."""


class Axis(Enum):
    """Axis of travel."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Direction(Enum):
    """Cardinal directions on the cell grid."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @classmethod
    def parse(cls, value: Direction | str) -> Direction:
        """Convert a direction name or value to a Direction."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise RoutingContractError(f"Invalid direction: {value!r}")

    @property
    def axis(self) -> Axis:
        if self in (Direction.UP, Direction.DOWN):
            return Axis.VERTICAL
        return Axis.HORIZONTAL

    @property
    def offset(self) -> tuple[int, int]:
        """(row_delta, col_delta) for a single step."""
        return _OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OFFSETS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
}

# Neighbor scan order; A* tie-breaking depends on it
CARDINAL_DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


class NodeRole(Enum):
    """Role of a node in the routing graph."""

    STANDARD = "standard"
    START = "start"
    AFTER_START = "afterStart"
    GOAL = "goal"
    BEFORE_GOAL = "beforeGoal"

    @property
    def debug_char(self) -> str:
        return _DEBUG_CHARS[self]

    @property
    def is_endpoint(self) -> bool:
        return self in (NodeRole.START, NodeRole.GOAL)


_DEBUG_CHARS = {
    NodeRole.STANDARD: "*",
    NodeRole.START: "S",
    NodeRole.AFTER_START: "s",
    NodeRole.GOAL: "G",
    NodeRole.BEFORE_GOAL: "g",
}


@dataclass(frozen=True, order=True)
class Cell:
    """A row/column position on the grid."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"

    def translate(self, row_delta: int, col_delta: int) -> Cell:
        return Cell(self.row + row_delta, self.col + col_delta)

    def step(self, direction: Direction) -> Cell:
        return self.translate(*direction.offset)

    def manhattan(self, other: Cell) -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def line_to(self, other: Cell, inclusive: bool = True) -> list[Cell]:
        """Cells on the straight run from this cell to another.

        Args:
            other: End of the run; must share a row or column with this cell
            inclusive: Whether to keep both endpoints

        Returns:
            Cells in order of travel. A non-inclusive run of one or two
            cells is empty.
        """
        if self.row != other.row and self.col != other.col:
            raise RoutingContractError(
                f"Cells must be along a horizontal or vertical line: {self} -> {other}"
            )

        row_step = (other.row > self.row) - (other.row < self.row)
        col_step = (other.col > self.col) - (other.col < self.col)
        length = self.manhattan(other)

        cells = [self.translate(row_step * i, col_step * i) for i in range(length + 1)]
        if inclusive:
            return cells
        return cells[1:-1]


@dataclass(frozen=True)
class Region:
    """An inclusive rectangle of cells between top_left and bottom_right.

    Regions are usually the bounding box of a shape that owns a connector
    endpoint.
    """

    top_left: Cell
    bottom_right: Cell

    def __post_init__(self) -> None:
        if self.bottom_right.row < self.top_left.row or self.bottom_right.col < self.top_left.col:
            raise RoutingContractError(
                f"Region has no area: {self.top_left} -> {self.bottom_right}"
            )

    def __str__(self) -> str:
        return f"[{self.top_left}-{self.bottom_right}]"

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> Region:
        """Smallest region containing all given cells."""
        cells = list(cells)
        if not cells:
            raise RoutingContractError("Cannot build a region from zero cells")
        return cls(
            Cell(min(c.row for c in cells), min(c.col for c in cells)),
            Cell(max(c.row for c in cells), max(c.col for c in cells)),
        )

    @property
    def top(self) -> int:
        return self.top_left.row

    @property
    def bottom(self) -> int:
        return self.bottom_right.row

    @property
    def left(self) -> int:
        return self.top_left.col

    @property
    def right(self) -> int:
        return self.bottom_right.col

    @property
    def num_rows(self) -> int:
        return self.bottom - self.top + 1

    @property
    def num_cols(self) -> int:
        return self.right - self.left + 1

    def contains_cell(self, cell: Cell, inclusive: bool = True) -> bool:
        """Check whether a cell is inside the region.

        With inclusive=False, cells on the boundary are not inside.
        """
        if inclusive:
            return self.top <= cell.row <= self.bottom and self.left <= cell.col <= self.right
        return self.top < cell.row < self.bottom and self.left < cell.col < self.right

    def overlaps(self, other: Region, inclusive: bool = True) -> bool:
        """Check whether two regions overlap.

        Inclusive overlap means at least one shared cell. Non-inclusive
        overlap ignores shared edges, so regions that only touch along a
        boundary row or column do not overlap.
        """
        if inclusive:
            return (
                self.top <= other.bottom and self.bottom >= other.top
                and self.left <= other.right and self.right >= other.left
            )
        return (
            self.top < other.bottom and self.bottom > other.top
            and self.left < other.right and self.right > other.left
        )

    def cells(self) -> list[Cell]:
        return [
            Cell(row, col)
            for row in range(self.top, self.bottom + 1)
            for col in range(self.left, self.right + 1)
        ]
