"""
Shared type definitions for maze grids: positions, directions and cells.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Compass direction on a rectangular grid."""

    N = "N"  # Up (decreasing row)
    S = "S"  # Down (increasing row)
    E = "E"  # Right (increasing col)
    W = "W"  # Left (decreasing col)


class PolarDirection(Enum):
    """Direction of a neighbour on a polar grid."""

    CW = "cw"  # Next index in the same ring
    CCW = "ccw"  # Previous index in the same ring
    INWARD = "inward"  # Parent cell in the previous ring
    OUTWARD = "outward"  # Child cells in the next ring


# =============================================================================
# Positions
# =============================================================================


@dataclass(frozen=True, order=True)
class Position:
    """
    Location of a cell within a grid.

    For rectangular grids this is (row, col). For polar grids ``row`` is the
    ring (0 is the centre) and ``col`` the index within that ring.
    """

    row: int
    col: int

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.col})"


# =============================================================================
# Cells
# =============================================================================


@dataclass(unsafe_hash=True)
class Cell:
    """
    A single grid location and its mutable maze state.

    Cells compare and hash by position only; links, weight and the
    solution flag are state, not identity.
    """

    position: Position
    links: set[Position] = field(default_factory=set, compare=False, repr=False)
    weight: int = field(default=0, compare=False)
    in_solution: bool = field(default=False, compare=False)

    @property
    def label(self) -> str:
        return str(self.weight)

    def link(self, other: Position) -> None:
        self.links.add(other)

    def unlink(self, other: Position) -> None:
        self.links.discard(other)

    def is_linked(self, other: Cell | Position) -> bool:
        if isinstance(other, Cell):
            other = other.position
        return other in self.links

    def neighbors(self) -> list[Position]:
        """Positions structurally adjacent to this cell, linked or not."""
        return []


@dataclass(unsafe_hash=True)
class RectCell(Cell):
    """Cell of a rectangular grid with up to four compass neighbours."""

    north: Position | None = field(default=None, compare=False, repr=False)
    south: Position | None = field(default=None, compare=False, repr=False)
    east: Position | None = field(default=None, compare=False, repr=False)
    west: Position | None = field(default=None, compare=False, repr=False)

    def neighbor(self, direction: Direction) -> Position | None:
        match direction:
            case Direction.N:
                return self.north
            case Direction.S:
                return self.south
            case Direction.E:
                return self.east
            case Direction.W:
                return self.west

    def neighbors(self) -> list[Position]:
        return [
            pos
            for pos in (self.north, self.south, self.east, self.west)
            if pos is not None
        ]


@dataclass(unsafe_hash=True)
class PolarCell(Cell):
    """
    Cell of a polar grid.

    ``cw``/``ccw`` stay in the same ring, ``inward`` points at the parent in
    the previous ring and ``outward`` lists the children in the next ring
    (an inner cell can have several because rings grow outwards).
    """

    cw: Position | None = field(default=None, compare=False, repr=False)
    ccw: Position | None = field(default=None, compare=False, repr=False)
    inward: Position | None = field(default=None, compare=False, repr=False)
    outward: list[Position] = field(default_factory=list, compare=False, repr=False)

    def neighbor(self, direction: PolarDirection) -> list[Position]:
        match direction:
            case PolarDirection.CW:
                return [self.cw] if self.cw is not None else []
            case PolarDirection.CCW:
                return [self.ccw] if self.ccw is not None else []
            case PolarDirection.INWARD:
                return [self.inward] if self.inward is not None else []
            case PolarDirection.OUTWARD:
                return list(self.outward)

    def neighbors(self) -> list[Position]:
        result: list[Position] = []
        # A two-cell ring has cw == ccw
        for pos in (self.cw, self.ccw, self.inward, *self.outward):
            if pos is not None and pos not in result:
                result.append(pos)
        return result
