"""
Maze generation algorithms.

Every algorithm carves passages by calling ``grid.link`` and, apart from
``binary`` and ``sidewinder``, works on any ``Grid`` through its neighbour
interface. Randomness comes from an explicit ``random.Random`` so a seeded
generator reproduces the same maze; sets are always walked in construction
or insertion order for the same reason.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Union

from grid_types import Position, RectCell
from mazegrid import Grid, RectGrid

logger = logging.getLogger(__name__)

# Insertion-ordered set of active positions (values are unused)
ActiveSet = dict[Position, None]

# Picks which active cell growing_tree extends next
SelectionFn = Callable[[ActiveSet, random.Random], Position]


class Selection(Enum):
    """Built-in growing-tree selection policies."""

    RANDOM = "random"  # Uniform over the active set (like simplified Prim's)
    LAST = "last"  # Most recently added (like the recursive backtracker)
    MIXED = "mixed"  # Coin flip between the two per step


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def _require_rect(grid: Grid, algorithm: str) -> RectGrid:
    if not isinstance(grid, RectGrid):
        raise TypeError(
            f"{algorithm} only works on rectangular grids\n"
            f"  Got: {type(grid).__name__} ({grid.kind})"
        )
    return grid


def _unvisited_neighbors(grid: Grid, pos: Position, visited: set[Position]) -> list[Position]:
    return [n for n in grid.neighbors(pos) if n not in visited]


# =============================================================================
# Rectangular-only Algorithms
# =============================================================================


def binary(grid: Grid, rng: random.Random | None = None) -> None:
    """Binary tree: link every cell to its south or east neighbour."""
    rect = _require_rect(grid, "binary")
    rng = _rng(rng)

    for cell in rect.cells():
        choices = [pos for pos in (cell.south, cell.east) if pos is not None]
        if choices:
            rect.link(cell.position, rng.choice(choices))

    logger.debug("binary: %d links over %d cells", rect.link_count(), len(rect))


def sidewinder(grid: Grid, rng: random.Random | None = None) -> None:
    """
    Sidewinder: carve east in runs, closing each run with one link south.

    A run is closed at the east boundary, or with probability 1/3 on any row
    but the last (the bottom row can't link south, so it is one long run).
    """
    rect = _require_rect(grid, "sidewinder")
    rng = _rng(rng)

    cells = rect.cells()
    for row in range(rect.height):
        run: list[RectCell] = []

        for cell in cells[row * rect.width : (row + 1) * rect.width]:
            run.append(cell)

            at_east_boundary = cell.east is None
            at_south_boundary = cell.south is None
            close_run = at_east_boundary or (not at_south_boundary and rng.randrange(3) == 0)

            if close_run:
                member = rng.choice(run)
                if member.south is not None:
                    rect.link(member.position, member.south)
                run.clear()
            elif cell.east is not None:
                rect.link(cell.position, cell.east)

    logger.debug("sidewinder: %d links over %d cells", rect.link_count(), len(rect))


# =============================================================================
# Random Walks
# =============================================================================


def aldous_broder(grid: Grid, rng: random.Random | None = None) -> None:
    """
    Aldous-Broder: random walk, linking whenever the walk enters a new cell.

    Produces a uniform spanning tree but may take a long time to finish.
    """
    rng = _rng(rng)
    pos = grid.random_pos(rng)
    if pos is None:
        return

    visited = {pos}
    unvisited = len(grid) - 1
    steps = 0

    while unvisited > 0:
        neighbors = grid.neighbors(pos)
        if not neighbors:
            break
        neighbor = rng.choice(neighbors)
        if neighbor not in visited:
            grid.link(pos, neighbor)
            visited.add(neighbor)
            unvisited -= 1
        pos = neighbor
        steps += 1

    logger.debug("aldous_broder: %d cells in %d steps", len(visited), steps)


def loop_erased_walk(
    grid: Grid,
    start: Position,
    visited: set[Position],
    rng: random.Random,
) -> list[Position]:
    """
    Random walk from ``start`` until it steps onto a visited cell.

    Whenever the walk re-enters a cell already on its path, the path is cut
    back to the first occurrence of that cell. The returned path ends with
    the visited cell that stopped the walk, and never crosses itself.
    """
    path = [start]
    index = {start: 0}

    while True:
        current = path[-1]
        choices = grid.neighbors(current)
        if not choices:
            return path

        step = rng.choice(choices)
        if step in visited:
            path.append(step)
            return path

        if step in index:
            cut = index[step]
            for erased in path[cut + 1 :]:
                del index[erased]
            del path[cut + 1 :]
        else:
            index[step] = len(path)
            path.append(step)


def wilsons(grid: Grid, rng: random.Random | None = None) -> None:
    """
    Wilson's algorithm: commit loop-erased random walks into the maze.

    Like Aldous-Broder it produces a uniform spanning tree, but converges
    much faster once the visited region is large.
    """
    rng = _rng(rng)
    first = grid.random_pos(rng)
    if first is None:
        return

    visited = {first}
    # Dict keeps construction order so the seeded choice is stable
    unvisited = dict.fromkeys(cell.position for cell in grid.cells() if cell.position != first)
    walks = 0

    while unvisited:
        start = rng.choice(list(unvisited))
        path = loop_erased_walk(grid, start, visited, rng)
        if path[-1] not in visited:
            # Isolated cell: nothing to walk to
            visited.add(start)
            unvisited.pop(start, None)
            continue

        for a, b in zip(path, path[1:]):
            grid.link(a, b)
        for pos in path:
            visited.add(pos)
            unvisited.pop(pos, None)
        walks += 1

    logger.debug("wilsons: %d walks over %d cells", walks, len(grid))


def hunt_and_kill(grid: Grid, rng: random.Random | None = None) -> None:
    """
    Hunt-and-kill: random walk into unvisited cells; when stuck, hunt.

    The hunt scans cells in construction order for the first unvisited cell
    touching the visited region, links it to a random visited neighbour and
    resumes the walk from there.
    """
    rng = _rng(rng)
    current = grid.random_pos(rng)
    if current is None:
        return

    visited = {current}
    hunts = 0

    while current is not None:
        options = _unvisited_neighbors(grid, current, visited)
        if options:
            neighbor = rng.choice(options)
            grid.link(current, neighbor)
            visited.add(neighbor)
            current = neighbor
            continue

        current = None
        if len(visited) == len(grid):
            break
        for cell in grid.cells():
            if cell.position in visited:
                continue
            visited_neighbors = [n for n in grid.neighbors(cell.position) if n in visited]
            if visited_neighbors:
                grid.link(cell.position, rng.choice(visited_neighbors))
                visited.add(cell.position)
                current = cell.position
                hunts += 1
                break

    logger.debug("hunt_and_kill: %d cells, %d hunts", len(visited), hunts)


# =============================================================================
# Backtrackers
# =============================================================================


def recursive_backtracker(grid: Grid, rng: random.Random | None = None) -> None:
    """
    Depth-first carve that backtracks on dead ends.

    The path being explored lives on an explicit stack instead of the Python
    call stack, so grid size is not limited by the recursion limit. The top
    of the stack keeps carving until it runs out of unvisited neighbours.
    """
    rng = _rng(rng)
    start = grid.random_pos(rng)
    if start is None:
        return

    visited = {start}
    stack = [start]

    while stack:
        current = stack[-1]
        options = _unvisited_neighbors(grid, current, visited)
        if not options:
            stack.pop()
            continue
        neighbor = rng.choice(options)
        grid.link(current, neighbor)
        visited.add(neighbor)
        stack.append(neighbor)

    logger.debug("recursive_backtracker: %d cells", len(visited))


def iterative_backtracker(grid: Grid, rng: random.Random | None = None) -> None:
    """Depth-first carve: pop a cell, push it back with a fresh neighbour on top."""
    rng = _rng(rng)
    start = grid.random_pos(rng)
    if start is None:
        return

    visited: set[Position] = set()
    stack = [start]

    while stack:
        current = stack.pop()
        visited.add(current)
        options = _unvisited_neighbors(grid, current, visited)
        if options:
            neighbor = rng.choice(options)
            grid.link(current, neighbor)
            visited.add(neighbor)
            stack.append(current)
            stack.append(neighbor)

    logger.debug("iterative_backtracker: %d cells", len(visited))


# =============================================================================
# Prim's Variants
# =============================================================================


def simplified_prims(grid: Grid, rng: random.Random | None = None) -> None:
    """Grow from a random cell, extending a uniformly random frontier cell each step."""
    rng = _rng(rng)
    start = grid.random_pos(rng)
    if start is None:
        return

    visited = {start}
    active: ActiveSet = {start: None}

    while active:
        pos = rng.choice(list(active))
        options = _unvisited_neighbors(grid, pos, visited)
        if options:
            neighbor = rng.choice(options)
            grid.link(pos, neighbor)
            visited.add(neighbor)
            active[neighbor] = None
        else:
            del active[pos]

    logger.debug("simplified_prims: %d cells", len(visited))


def true_prims(grid: Grid, rng: random.Random | None = None) -> None:
    """
    Prim's with a fixed random cost per cell.

    Always extends the cheapest active cell through its cheapest unvisited
    neighbour, like growing a minimum spanning tree over random weights.
    Ties go to the earliest-added active cell and the first neighbour.
    """
    rng = _rng(rng)
    start = grid.random_pos(rng)
    if start is None:
        return

    costs = {cell.position: rng.randrange(100) for cell in grid.cells()}
    visited = {start}
    active: ActiveSet = {start: None}

    while active:
        pos = min(active, key=costs.__getitem__)
        options = _unvisited_neighbors(grid, pos, visited)
        if options:
            neighbor = min(options, key=costs.__getitem__)
            grid.link(pos, neighbor)
            visited.add(neighbor)
            active[neighbor] = None
        else:
            del active[pos]

    logger.debug("true_prims: %d cells", len(visited))


# =============================================================================
# Growing Tree
# =============================================================================


def random_selection(active: ActiveSet, rng: random.Random) -> Position:
    return rng.choice(list(active))


def last_selection(active: ActiveSet, rng: random.Random) -> Position:
    return next(reversed(active))


def mixed_selection(active: ActiveSet, rng: random.Random) -> Position:
    if rng.randrange(2) == 0:
        return last_selection(active, rng)
    return random_selection(active, rng)


SELECTIONS: dict[Selection, SelectionFn] = {
    Selection.RANDOM: random_selection,
    Selection.LAST: last_selection,
    Selection.MIXED: mixed_selection,
}


def _selection_fn(selection: Union[Selection, SelectionFn, str]) -> SelectionFn:
    if isinstance(selection, str):
        try:
            selection = Selection(selection)
        except ValueError:
            valid = ", ".join(s.value for s in Selection)
            raise ValueError(
                f"Unknown selection policy: '{selection}'\n"
                f"  Valid policies: {valid}"
            ) from None
    if isinstance(selection, Selection):
        return SELECTIONS[selection]
    return selection


def growing_tree(
    grid: Grid,
    selection: Union[Selection, SelectionFn, str] = Selection.RANDOM,
    rng: random.Random | None = None,
) -> None:
    """
    Growing tree: the selection policy decides which active cell grows next.

    ``Selection.LAST`` behaves like the recursive backtracker and
    ``Selection.RANDOM`` like simplified Prim's. A cell with no unvisited
    neighbours leaves the active set for good.
    """
    select = _selection_fn(selection)
    rng = _rng(rng)
    start = grid.random_pos(rng)
    if start is None:
        return

    visited = {start}
    active: ActiveSet = {start: None}

    while active:
        pos = select(active, rng)
        options = _unvisited_neighbors(grid, pos, visited)
        if options:
            neighbor = rng.choice(options)
            grid.link(pos, neighbor)
            visited.add(neighbor)
            active[neighbor] = None
        else:
            del active[pos]

    logger.debug("growing_tree(%s): %d cells", getattr(select, "__name__", select), len(visited))


# =============================================================================
# Braiding
# =============================================================================


def deadends(grid: Grid) -> list[Position]:
    """Positions of cells with fewer than two links, in construction order."""
    return [cell.position for cell in grid.cells() if len(cell.links) < 2]


def braid(grid: Grid, probability: float = 1.0, rng: random.Random | None = None) -> None:
    """
    Remove dead ends by linking them to an extra neighbour.

    Each dead end is braided with the given probability. Neighbours that are
    dead ends themselves are preferred, so one link can fix two dead ends.
    The result is no longer a tree.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(
            f"Invalid braid probability: {probability}\n"
            f"  Must be between 0.0 and 1.0"
        )
    rng = _rng(rng)
    added = 0

    for pos in deadends(grid):
        cell = grid.get(pos)
        if cell is None:
            continue
        # An earlier braid may already have fixed this one
        if len(cell.links) >= 2:
            continue
        if rng.random() >= probability:
            continue

        options = [n for n in cell.neighbors() if n not in cell.links]
        best = [n for n in options if grid.num_links(n) == 1]
        if best:
            options = best
        if not options:
            continue

        grid.link(pos, rng.choice(options))
        added += 1

    logger.debug("braid: added %d links, %d dead ends remain", added, len(deadends(grid)))


# =============================================================================
# Registry
# =============================================================================


Generator = Callable[[Grid, random.Random], None]

# Every spanning-tree generator by name; rectangular-only ones are listed
# in RECT_ONLY
GENERATORS: dict[str, Generator] = {
    "binary": binary,
    "sidewinder": sidewinder,
    "aldous_broder": aldous_broder,
    "wilsons": wilsons,
    "hunt_and_kill": hunt_and_kill,
    "recursive_backtracker": recursive_backtracker,
    "iterative_backtracker": iterative_backtracker,
    "simplified_prims": simplified_prims,
    "true_prims": true_prims,
    "growing_tree_random": lambda grid, rng: growing_tree(grid, Selection.RANDOM, rng),
    "growing_tree_last": lambda grid, rng: growing_tree(grid, Selection.LAST, rng),
    "growing_tree_mixed": lambda grid, rng: growing_tree(grid, Selection.MIXED, rng),
}

RECT_ONLY = frozenset({"binary", "sidewinder"})
