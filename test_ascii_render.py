"""Tests for ascii_render module."""

import random

import pytest

from algorithms import sidewinder, wilsons
from ascii_render import DISTANCE_PALETTE, RenderStyle, default_color_fn, no_color, render
from grid_types import Position
from mazegrid import new_polar_grid, new_rectangular_grid
from solver import dijkstra, solve


def braces(weight: int, max_weight: int):
    return lambda s: f"{{{s}}}"


PLAIN = RenderStyle(color_fn=no_color, draw_solution=False)


class TestDefaultColorFn:
    """Tests for distance shading."""

    def test_start_and_end_of_palette(self) -> None:
        """Weight 0 is the first colour, the maximum weight the last."""
        assert default_color_fn(0, 9) is DISTANCE_PALETTE[0]
        assert default_color_fn(9, 9) is DISTANCE_PALETTE[-1]

    def test_zero_max_weight(self) -> None:
        """An unsolved grid shades everything with the first colour."""
        assert default_color_fn(0, 0) is DISTANCE_PALETTE[0]

    def test_monotonic(self) -> None:
        """Further cells never get an earlier colour."""
        indices = [DISTANCE_PALETTE.index(default_color_fn(w, 40)) for w in range(41)]
        assert indices == sorted(indices)


class TestRenderRect:
    """Tests for rendering rectangular mazes."""

    def test_plain_matches_to_string(self) -> None:
        """Without colours the drawing is the same as to_string."""
        grid = new_rectangular_grid(6, 4)
        sidewinder(grid, random.Random(1))
        dijkstra(grid, Position(0, 0))

        assert render(grid, PLAIN) + "\n" == grid.to_string(False)
        labelled = RenderStyle(color_fn=no_color, draw_solution=False, display_labels=True)
        assert render(grid, labelled) + "\n" == grid.to_string(True)

    def test_links_scenario(self) -> None:
        """The 2x3 scenario renders with openings matching the links."""
        grid = new_rectangular_grid(2, 3)
        grid.link(Position(0, 0), Position(0, 1))
        grid.link(Position(1, 0), Position(2, 0))
        grid.link(Position(2, 0), Position(2, 1))

        assert render(grid, PLAIN) == "\n".join([
            "+---+---+",
            "|       |",
            "+---+---+",
            "|   |   |",
            "+   +---+",
            "|       |",
            "+---+---+",
        ])

    def test_color_fn_applied_to_cells(self) -> None:
        """The colour function wraps each cell interior, not the walls."""
        grid = new_rectangular_grid(2, 1)
        grid.link(Position(0, 0), Position(0, 1))
        style = RenderStyle(color_fn=braces, draw_solution=False, display_labels=True)

        assert render(grid, style) == "+---+---+\n|{ 0 } { 0 }|\n+---+---+"

    def test_solution_cells_are_highlighted(self) -> None:
        """Solution cells bypass the colour function when drawn."""
        grid = new_rectangular_grid(3, 1)
        grid.link(Position(0, 0), Position(0, 1))
        solve(grid, Position(0, 0), Position(0, 1))

        output = render(grid, RenderStyle(color_fn=braces, display_labels=True))

        assert output.count("{") == 1
        assert "{ 0 }" in output

    def test_cell_width(self) -> None:
        """Wider cells widen walls and interiors."""
        grid = new_rectangular_grid(1, 1)
        style = RenderStyle(cell_width=5, color_fn=no_color)
        assert render(grid, style) == "+-----+\n|     |\n+-----+"

    def test_fill_char(self) -> None:
        """Unlabelled interiors are padded with the fill character."""
        grid = new_rectangular_grid(2, 1)
        style = RenderStyle(fill_char=".", color_fn=no_color)
        assert render(grid, style) == "+---+---+\n|...|...|\n+---+---+"

    def test_invalid_cell_width(self) -> None:
        """Cell width must be positive."""
        with pytest.raises(ValueError, match="Invalid cell width"):
            render(new_rectangular_grid(1, 1), RenderStyle(cell_width=0))


class TestRenderPolar:
    """Tests for the ring listing of polar mazes."""

    def test_one_line_per_ring(self) -> None:
        """Each ring gets a line with one token per cell."""
        grid = new_polar_grid(4)
        wilsons(grid, random.Random(2))

        lines = render(grid, PLAIN).split("\n")

        assert len(lines) == 4
        assert lines[0].startswith("ring 0 (  1) |")
        assert lines[3].count("o") == 24

    def test_passage_markers(self) -> None:
        """Open passages show up as direction markers."""
        grid = new_polar_grid(2)
        grid.link(Position(0, 0), Position(1, 0))
        grid.link(Position(1, 0), Position(1, 1))

        lines = render(grid, RenderStyle(cell_width=1, color_fn=no_color)).split("\n")

        assert lines[0] == "ring 0 (  1) |  ov "
        assert lines[1].startswith("ring 1 (  6) | ^o >< o  ")
