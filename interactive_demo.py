"""
Interactive demo for maze generation.
Display a maze and regenerate, braid or solve it with keyboard commands.
"""

from __future__ import annotations

import logging
import random
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from algorithms import GENERATORS, RECT_ONLY, braid, deadends
from ascii_render import RenderStyle, render
from grid_types import Position
from mazegrid import Grid, new_polar_grid, new_rectangular_grid
from solver import NoPath, furthest_corners, furthest_on_rim, solve


class InteractiveDemo:
    """Interactive demo cycling through generation algorithms."""

    def __init__(self, width: int = 16, height: int = 10, rings: int = 6, seed: int | None = None) -> None:
        self.width = width
        self.height = height
        self.rings = rings
        self.rng = random.Random(seed)
        self.polar = False
        self.labels = False
        self.algorithm_names = list(GENERATORS)
        self.algorithm_idx = 0
        self.console = Console()
        self.status_message = "Ready"
        self.grid: Grid = self.generate()

    @property
    def algorithm(self) -> str:
        return self.algorithm_names[self.algorithm_idx]

    def generate(self) -> Grid:
        """Build a fresh grid and carve it with the current algorithm."""
        grid: Grid
        if self.polar:
            grid = new_polar_grid(self.rings)
        else:
            grid = new_rectangular_grid(self.width, self.height)
        GENERATORS[self.algorithm](grid, self.rng)
        return grid

    def generate_display(self) -> Panel:
        """Generate the current display with maze and status."""
        status = Text()
        status.append("Algorithm: ", style="bold")
        status.append(f"{self.algorithm}\n")
        status.append("Topology: ", style="bold")
        status.append("polar\n" if self.polar else f"rectangular {self.width}x{self.height}\n")
        status.append("Dead ends: ", style="bold")
        status.append(f"{len(deadends(self.grid))}\n\n")

        # Convert ANSI-coloured maze text to Rich Text
        style = RenderStyle(cell_width=1 if self.polar else 3, display_labels=self.labels)
        status.append(Text.from_ansi(render(self.grid, style)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N - Next algorithm\n")
        status.append("  G - Regenerate\n")
        status.append("  B - Braid dead ends\n")
        status.append("  S - Solve\n")
        status.append("  L - Toggle distance labels\n")
        status.append("  P - Toggle polar grid\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Maze Interactive Demo", border_style="green")

    def next_algorithm(self) -> None:
        """Advance to the next algorithm that supports the current topology."""
        while True:
            self.algorithm_idx = (self.algorithm_idx + 1) % len(self.algorithm_names)
            if not (self.polar and self.algorithm in RECT_ONLY):
                break
        self.grid = self.generate()
        self.status_message = f"Generated with {self.algorithm}"

    def toggle_polar(self) -> None:
        self.polar = not self.polar
        if self.polar and self.algorithm in RECT_ONLY:
            self.next_algorithm()
        else:
            self.grid = self.generate()
        self.status_message = "Switched to polar grid" if self.polar else "Switched to rectangular grid"

    def attempt_solve(self) -> None:
        """Solve between the two furthest points the heuristics can find."""
        start: Position | None
        end: Position | None
        if self.polar:
            start = Position(0, 0)
            end = furthest_on_rim(self.grid, start)
        else:
            corners = furthest_corners(self.grid)
            start, end = corners if corners is not None else (None, None)

        if start is None or end is None:
            self.status_message = "✗ Nothing to solve"
            return

        result = solve(self.grid, start, end)
        if isinstance(result, NoPath):
            self.status_message = f"✗ No path from {result.start} to {result.target}: {result.reason.value}"
        else:
            self.status_message = f"✓ Solved {start} -> {end} in {len(result) - 1} steps"

    def attempt_braid(self) -> None:
        before = len(deadends(self.grid))
        braid(self.grid, 0.5, self.rng)
        self.status_message = f"✓ Braided: {before} -> {len(deadends(self.grid))} dead ends"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey().lower()

                    if key == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == "n":
                        self.next_algorithm()
                    elif key == "g":
                        self.grid = self.generate()
                        self.status_message = f"Regenerated with {self.algorithm}"
                    elif key == "b":
                        self.attempt_braid()
                    elif key == "s":
                        self.attempt_solve()
                    elif key == "l":
                        self.labels = not self.labels
                        self.status_message = "Labels on" if self.labels else "Labels off"
                    elif key == "p":
                        self.toggle_polar()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "sublime":
        # Running from IDE - just render one maze
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

        print("Running from IDE - rendering initial state")
        print()

        demo = InteractiveDemo(seed=1)
        demo.attempt_solve()
        print(render(demo.grid))
        print(demo.status_message)
    else:
        InteractiveDemo().run()
