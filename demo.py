"""
Demonstration script: one maze per generation algorithm.

Usage:
    python demo.py [width height [seed]]
"""

from __future__ import annotations

import random
import sys

from algorithms import GENERATORS, RECT_ONLY, braid, deadends, iterative_backtracker
from ascii_render import RenderStyle, render
from grid_types import Position
from mazegrid import new_polar_grid, new_rectangular_grid
from solver import NoPath, dijkstra, furthest_corners, furthest_on_rim, solve


def demo(width: int = 12, height: int = 8, seed: int | None = None) -> None:
    """Generate, solve and print a rectangular maze with every algorithm."""
    rng = random.Random(seed)
    style = RenderStyle(draw_solution=True)

    for name, generate in GENERATORS.items():
        grid = new_rectangular_grid(width, height)
        generate(grid, rng)

        print("=" * 60)
        print(f"{name} ({width}x{height}, {len(deadends(grid))} dead ends)")
        print("=" * 60)

        corners = furthest_corners(grid)
        if corners is not None:
            start, end = corners
            result = solve(grid, start, end)
            if isinstance(result, NoPath):
                print(f"✗ No path: {result.reason.value}")
            else:
                print(f"✓ Solution {start} -> {end}: {len(result) - 1} steps")
        print(render(grid, style))
        print()


def braid_demo(width: int = 12, height: int = 8, seed: int | None = None) -> None:
    """Show the same maze before and after braiding, with distance labels."""
    rng = random.Random(seed)
    grid = new_rectangular_grid(width, height)
    iterative_backtracker(grid, rng)

    print("=" * 60)
    print("Braiding")
    print("=" * 60)
    print(f"BEFORE: {len(deadends(grid))} dead ends")
    dijkstra(grid, Position(0, 0))
    print(grid.to_string(display_labels=True))

    braid(grid, 0.5, rng)
    grid.reset_distances()
    dijkstra(grid, Position(0, 0))
    print(f"AFTER braid(0.5): {len(deadends(grid))} dead ends")
    print(grid.to_string(display_labels=True))


def polar_demo(rows: int = 6, seed: int | None = None) -> None:
    """Carve a polar maze with each topology-agnostic algorithm."""
    rng = random.Random(seed)
    center = Position(0, 0)

    for name, generate in GENERATORS.items():
        if name in RECT_ONLY:
            continue
        grid = new_polar_grid(rows)
        generate(grid, rng)

        print("=" * 60)
        print(f"{name} (polar, {rows} rings: {grid.column_counts})")
        print("=" * 60)

        end = furthest_on_rim(grid, center)
        if end is not None:
            result = solve(grid, center, end)
            if not isinstance(result, NoPath):
                print(f"✓ Solution {center} -> {end}: {len(result) - 1} steps")
        print(render(grid, RenderStyle(cell_width=1)))
        print()


if __name__ == "__main__":
    args = [int(a) for a in sys.argv[1:4]]
    width, height = (args[0], args[1]) if len(args) >= 2 else (12, 8)
    seed = args[2] if len(args) >= 3 else None

    demo(width, height, seed)
    print()
    braid_demo(width, height, seed)
    print()
    polar_demo(seed=seed)
