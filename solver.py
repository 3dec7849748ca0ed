"""
Distance labelling and path finding over a maze's passages.

All passages have unit length, so "Dijkstra" here is a layered
breadth-first search over the link graph (not the adjacency graph).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from grid_types import Position
from mazegrid import Grid, PolarGrid, RectGrid

logger = logging.getLogger(__name__)


class NoPathReason(Enum):
    """Why solve() could not produce a path."""

    INVALID_START = "invalid_start"  # Start is outside the grid
    INVALID_TARGET = "invalid_target"  # Target is outside the grid
    UNREACHABLE = "unreachable"  # No chain of passages joins the two cells


@dataclass(frozen=True)
class NoPath:
    """Result of solve() when the target can't be reached from the start."""

    start: Position
    target: Position
    reason: NoPathReason


def dijkstra(grid: Grid, start: Position) -> dict[Position, int]:
    """
    Label every cell reachable from ``start`` with its passage distance.

    Each reached cell's ``weight`` is overwritten; unreachable cells keep
    whatever weight they had, so reset the grid first if that matters.

    Returns:
        Mapping of every reached position to its distance (empty if
        ``start`` is outside the grid)
    """
    if not grid.contains(start):
        return {}

    distances: dict[Position, int] = {}
    frontier = [start]
    dist = 0

    while frontier:
        next_frontier: list[Position] = []
        for pos in frontier:
            # Braided mazes can reach a cell twice in one layer
            if pos in distances:
                continue
            cell = grid.get(pos)
            if cell is None:
                continue
            distances[pos] = dist
            cell.weight = dist
            next_frontier.extend(link for link in sorted(cell.links) if link not in distances)
        frontier = next_frontier
        dist += 1

    logger.debug("dijkstra from %r: %d cells reached, max distance %d", start, len(distances), dist - 1)
    return distances


def solve(grid: Grid, start: Position, target: Position) -> list[Position] | NoPath:
    """
    Find the shortest path from ``start`` to ``target`` and mark it.

    Runs dijkstra from ``start`` then walks back from ``target`` along
    strictly decreasing weights, choosing the smallest position on ties.
    Every cell on the path gets ``in_solution`` set; flags from earlier
    solves are cleared first.

    Returns:
        The path from start to target inclusive, or NoPath describing why
        there isn't one (in which case nothing is marked)
    """
    for cell in grid.cells():
        cell.in_solution = False

    if not grid.contains(start):
        return NoPath(start, target, NoPathReason.INVALID_START)
    if not grid.contains(target):
        return NoPath(start, target, NoPathReason.INVALID_TARGET)

    distances = dijkstra(grid, start)
    if target not in distances:
        logger.info("solve: %r is unreachable from %r", target, start)
        return NoPath(start, target, NoPathReason.UNREACHABLE)

    cells = {cell.position: cell for cell in grid.cells()}
    path = [target]
    cells[target].in_solution = True

    while distances[path[-1]] > 0:
        here = distances[path[-1]]
        # A reached cell always has a linked cell one step closer
        closer = min(link for link in cells[path[-1]].links if distances.get(link, here) < here)
        cells[closer].in_solution = True
        path.append(closer)

    path.reverse()
    logger.info("solve: %r -> %r, %d steps", start, target, len(path) - 1)
    return path


def furthest_corners(grid: Grid) -> tuple[Position, Position] | None:
    """
    Pick the pair of corners that are furthest apart through the maze.

    Runs dijkstra from each corner and keeps the pair with the largest
    distance. This approximates the maze's diameter endpoints; it is not
    guaranteed to find them. Leaves the weights from the last corner run.
    """
    if not isinstance(grid, RectGrid):
        raise TypeError(
            f"furthest_corners only works on rectangular grids\n"
            f"  Got: {type(grid).__name__} ({grid.kind})"
        )
    corners = grid.corners()
    if not corners:
        return None

    candidates: list[tuple[Position, Position, int]] = []
    for corner in corners:
        distances = dijkstra(grid, corner)
        far = max(corners, key=lambda c: distances.get(c, -1))
        candidates.append((corner, far, distances.get(far, -1)))

    best = max(candidates, key=lambda candidate: candidate[2])
    logger.info("furthest_corners: %r -> %r (distance %d)", best[0], best[1], best[2])
    return (best[0], best[1])


def furthest_on_rim(grid: Grid, from_pos: Position) -> Position | None:
    """
    The outermost-ring cell furthest from ``from_pos`` through the maze.

    Ties go to the lowest index in the ring. Leaves the weights from the
    dijkstra run on the grid.
    """
    if not isinstance(grid, PolarGrid):
        raise TypeError(
            f"furthest_on_rim only works on polar grids\n"
            f"  Got: {type(grid).__name__} ({grid.kind})"
        )
    if grid.rows == 0:
        return None

    distances = dijkstra(grid, from_pos)
    rim = grid.ring(grid.rows - 1)
    far = max(rim, key=lambda cell: distances.get(cell.position, -1))
    logger.info("furthest_on_rim: %r -> %r", from_pos, far.position)
    return far.position
