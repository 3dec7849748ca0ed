"""
Maze grids on rectangular and polar topologies.

Every generation algorithm and the solver talk to a grid only through the
``Grid`` interface below, so the same code carves a rectangle or a disc.
"""

from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

from grid_types import Cell, Direction, PolarCell, Position, RectCell

logger = logging.getLogger(__name__)

CellT = TypeVar("CellT", bound=Cell)

POLAR_TO_STRING_MESSAGE = "to_string is meaningless for polar grids"


class LinkError(ValueError):
    """Raised when link/unlink is called with positions that break the grid contract."""


# =============================================================================
# Grid Interface
# =============================================================================


class Grid(ABC, Generic[CellT]):
    """
    Topology-agnostic grid of cells.

    Subclasses own a dense list of cells in construction order and map a
    Position to its index in O(1).
    """

    kind = "grid"

    def __init__(self) -> None:
        self._cells: list[CellT] = []

    def cells(self) -> list[CellT]:
        """All cells in construction order."""
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CellT]:
        return iter(self._cells)

    @abstractmethod
    def contains(self, pos: Position) -> bool:
        ...

    @abstractmethod
    def _index(self, pos: Position) -> int:
        ...

    @abstractmethod
    def to_string(self, display_labels: bool = False) -> str:
        ...

    def get(self, pos: Position) -> CellT | None:
        if not self.contains(pos):
            return None
        return self._cells[self._index(pos)]

    # Python has no separate mutable borrow; kept for parity with get()
    get_mut = get

    def neighbors(self, pos: Position) -> list[Position]:
        cell = self.get(pos)
        if cell is None:
            return []
        return cell.neighbors()

    def link(self, pos: Position, other: Position) -> None:
        """Open a passage between two adjacent cells (both ends are updated)."""
        a = self.get(pos)
        b = self.get(other)
        if a is None or b is None:
            raise LinkError(self._link_error_message("link", pos, other, "position outside the grid"))
        if other not in a.neighbors():
            raise LinkError(self._link_error_message("link", pos, other, "positions are not adjacent"))
        a.link(other)
        b.link(pos)

    def unlink(self, pos: Position, other: Position) -> None:
        a = self.get(pos)
        b = self.get(other)
        if a is None or b is None:
            raise LinkError(self._link_error_message("unlink", pos, other, "position outside the grid"))
        a.unlink(other)
        b.unlink(pos)

    def _link_error_message(self, op: str, pos: Position, other: Position, reason: str) -> str:
        return (
            f"Cannot {op} cells: {reason}\n"
            f"  Grid: {self.kind} ({len(self._cells)} cells)\n"
            f"  From: {pos!r} (in grid: {self.contains(pos)})\n"
            f"  To: {other!r} (in grid: {self.contains(other)})"
        )

    def has_links(self, pos: Position) -> bool:
        cell = self.get(pos)
        return cell is not None and bool(cell.links)

    def num_links(self, pos: Position) -> int:
        cell = self.get(pos)
        return len(cell.links) if cell is not None else 0

    def random_pos(self, rng: random.Random | None = None) -> Position | None:
        """Uniformly random valid position, or None for an empty grid."""
        if not self._cells:
            return None
        rng = rng or random.Random()
        return rng.choice(self._cells).position

    def max_weight(self) -> int:
        return max((cell.weight for cell in self._cells), default=0)

    def reset_distances(self) -> None:
        for cell in self._cells:
            cell.weight = 0
            cell.in_solution = False

    def link_count(self) -> int:
        """Number of distinct passages (each link is stored on both cells)."""
        return sum(len(cell.links) for cell in self._cells) // 2


# =============================================================================
# Rectangular Grid
# =============================================================================


class RectGrid(Grid[RectCell]):
    """A width x height grid of cells in row-major order."""

    kind = "rectangular"

    def __init__(self, width: int, height: int) -> None:
        super().__init__()
        if width < 0 or height < 0:
            raise ValueError(
                f"Invalid rectangular grid size: {width}x{height}\n"
                f"  Width and height must be non-negative"
            )
        self.width = width
        self.height = height

        for row in range(height):
            for col in range(width):
                cell = RectCell(Position(row, col))
                if row > 0:
                    cell.north = Position(row - 1, col)
                if row < height - 1:
                    cell.south = Position(row + 1, col)
                if col < width - 1:
                    cell.east = Position(row, col + 1)
                if col > 0:
                    cell.west = Position(row, col - 1)
                self._cells.append(cell)

        logger.debug("RectGrid: %dx%d, %d cells", width, height, len(self._cells))

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.row < self.height and 0 <= pos.col < self.width

    def _index(self, pos: Position) -> int:
        return pos.col + pos.row * self.width

    def neighbor(self, pos: Position, direction: Direction) -> Position | None:
        cell = self.get(pos)
        return cell.neighbor(direction) if cell is not None else None

    def corners(self) -> list[Position]:
        """The four corner positions (repeats allowed for thin grids)."""
        if not self._cells:
            return []
        last_row = self.height - 1
        last_col = self.width - 1
        return [
            Position(0, 0),
            Position(0, last_col),
            Position(last_row, 0),
            Position(last_row, last_col),
        ]

    def to_string(self, display_labels: bool = False) -> str:
        """
        Draw the maze with ASCII walls.

        Example (2x3 with some passages, labels on):
            +---+---+
            | 0  13 |
            +---+---+
            | 0 | 2 |
            +   +---+
            |456  0 |
            +---+---+
        """
        lines = ["+" + "---+" * self.width]

        for row in range(self.height):
            top = "|"
            bottom = "+"
            for col in range(self.width):
                cell = self._cells[self._index(Position(row, col))]
                top += f"{cell.label:^3}" if display_labels else "   "
                top += " " if cell.east is not None and cell.is_linked(cell.east) else "|"
                bottom += "   +" if cell.south is not None and cell.is_linked(cell.south) else "---+"
            lines.append(top)
            lines.append(bottom)

        return "\n".join(lines) + "\n"


# =============================================================================
# Polar Grid
# =============================================================================


class PolarGrid(Grid[PolarCell]):
    """
    Concentric rings around a single centre cell.

    Each ring's cell count is a whole multiple of the previous ring's, so
    every outer cell has exactly one inward parent. Cells are stored ring by
    ring; ``row_offsets[r]`` is the index of the first cell of ring r and
    ``column_counts[r]`` the number of cells in it.
    """

    kind = "polar"

    def __init__(self, rows: int) -> None:
        super().__init__()
        if rows < 0:
            raise ValueError(
                f"Invalid polar grid size: {rows} rings\n"
                f"  Ring count must be non-negative"
            )
        self.rows = rows
        self.row_offsets: list[int] = []
        self.column_counts: list[int] = []

        if rows > 0:
            self._make_cells()
            self._set_neighbors()

        logger.debug("PolarGrid: %d rings, counts=%s", rows, self.column_counts)

    def _make_cells(self) -> None:
        self._cells.append(PolarCell(Position(0, 0)))
        self.row_offsets.append(0)
        self.column_counts.append(1)

        row_height = 1.0 / self.rows

        for row in range(1, self.rows):
            radius = row / self.rows
            circumference = 2.0 * math.pi * radius

            prev_cols = self.column_counts[row - 1]
            est_cell_width = circumference / prev_cols
            ratio = max(1, math.floor(est_cell_width / row_height + 0.5))
            num_cols = ratio * prev_cols

            self.row_offsets.append(self.row_offsets[row - 1] + prev_cols)
            self.column_counts.append(num_cols)

            for col in range(num_cols):
                self._cells.append(PolarCell(Position(row, col)))

    def _set_neighbors(self) -> None:
        for cell in self._cells:
            pos = cell.position
            if pos.row == 0:
                continue

            num_cols = self.column_counts[pos.row]
            ratio = num_cols // self.column_counts[pos.row - 1]
            parent_pos = Position(pos.row - 1, pos.col // ratio)

            cell.cw = Position(pos.row, (pos.col + 1) % num_cols)
            cell.ccw = Position(pos.row, (pos.col - 1) % num_cols)
            cell.inward = parent_pos

            parent = self._cells[self._index(parent_pos)]
            parent.outward.append(pos)

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.column_counts[pos.row]

    def _index(self, pos: Position) -> int:
        return pos.col + self.row_offsets[pos.row]

    def ring(self, row: int) -> list[PolarCell]:
        """Cells of one ring in index order; empty for an invalid ring."""
        if not 0 <= row < self.rows:
            return []
        start = self.row_offsets[row]
        return self._cells[start : start + self.column_counts[row]]

    def to_string(self, display_labels: bool = False) -> str:
        return POLAR_TO_STRING_MESSAGE


# =============================================================================
# Construction
# =============================================================================


def new_rectangular_grid(width: int, height: int) -> RectGrid:
    return RectGrid(width, height)


def new_polar_grid(rows: int) -> PolarGrid:
    return PolarGrid(rows)
