"""
Colourised ASCII rendering for maze grids.

Provides two rendering approaches:
1. Rectangular mazes drawn with walls, cells shaded by distance
2. Polar mazes listed ring by ring with passage markers
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import PolarCell
from mazegrid import Grid, PolarGrid, RectGrid

logger = logging.getLogger(__name__)

Colorize = Callable[[str], str]

# Maps (weight, max_weight) to a colouring function
ColorFn = Callable[[int, int], Colorize]

# Near-to-far shading, start of the maze first
DISTANCE_PALETTE: list[Colorize] = [
    chalk.blueBright,
    chalk.blue,
    chalk.cyan,
    chalk.green,
    chalk.greenBright,
    chalk.yellow,
    chalk.yellowBright,
    chalk.magenta,
    chalk.redBright,
    chalk.red,
]


def default_color_fn(weight: int, max_weight: int) -> Colorize:
    """Shade from blue (close to the start) to red (furthest away)."""
    if max_weight <= 0:
        return DISTANCE_PALETTE[0]
    idx = min(weight * len(DISTANCE_PALETTE) // (max_weight + 1), len(DISTANCE_PALETTE) - 1)
    return DISTANCE_PALETTE[idx]


def no_color(weight: int, max_weight: int) -> Colorize:
    return lambda s: s


@dataclass(frozen=True)
class RenderStyle:
    """Options for render()."""

    cell_width: int = 3
    display_labels: bool = False
    draw_solution: bool = True
    fill_char: str = " "
    color_fn: ColorFn = default_color_fn


def render(grid: Grid, style: RenderStyle = RenderStyle()) -> str:
    """
    Render a maze as a string with ANSI colours.

    Args:
        grid: A rectangular or polar grid
        style: Rendering options

    Returns:
        Rendered ASCII string with ANSI color codes
    """
    if style.cell_width < 1:
        raise ValueError(f"Invalid cell width: {style.cell_width}\n  Must be at least 1")

    match grid:
        case RectGrid():
            return render_rect(grid, style)
        case PolarGrid():
            return render_polar(grid, style)
        case _:
            raise TypeError(f"Unknown grid type: {type(grid).__name__}")


def _cell_content(text: str, weight: int, max_weight: int, in_solution: bool, style: RenderStyle) -> str:
    if in_solution and style.draw_solution:
        return chalk.bgWhite.black(text)
    return style.color_fn(weight, max_weight)(text)


def render_rect(grid: RectGrid, style: RenderStyle = RenderStyle()) -> str:
    """Walls as in RectGrid.to_string, with shaded cell interiors."""
    w = style.cell_width
    max_weight = grid.max_weight()
    wall = "-" * w
    gap = " " * w

    lines = ["+" + (wall + "+") * grid.width]

    for row in range(grid.height):
        top = ["|"]
        bottom = ["+"]
        for cell in grid.cells()[row * grid.width : (row + 1) * grid.width]:
            text = cell.label if style.display_labels else style.fill_char * w
            top.append(_cell_content(f"{text:^{w}}", cell.weight, max_weight, cell.in_solution, style))
            top.append(" " if cell.east is not None and cell.is_linked(cell.east) else "|")
            bottom.append(gap if cell.south is not None and cell.is_linked(cell.south) else wall)
            bottom.append("+")
        lines.append("".join(top))
        lines.append("".join(bottom))

    logger.debug("render_rect: %dx%d, max weight %d", grid.width, grid.height, max_weight)
    return "\n".join(lines)


def _polar_token(cell: PolarCell, style: RenderStyle, max_weight: int) -> str:
    """
    One cell of a ring listing.

    ``<`` / ``>`` mark open ccw / cw passages, ``^`` an open passage inward
    and ``v`` at least one open passage outward.
    """
    text = cell.label if style.display_labels else "o"
    body = _cell_content(f"{text:^{style.cell_width}}", cell.weight, max_weight, cell.in_solution, style)
    ccw = "<" if cell.ccw is not None and cell.is_linked(cell.ccw) else " "
    cw = ">" if cell.cw is not None and cell.is_linked(cell.cw) else " "
    inward = "^" if cell.inward is not None and cell.is_linked(cell.inward) else " "
    outward = "v" if any(cell.is_linked(pos) for pos in cell.outward) else " "
    return f"{ccw}{inward}{body}{outward}{cw}"


def render_polar(grid: PolarGrid, style: RenderStyle = RenderStyle()) -> str:
    """List each ring's cells from the centre outwards."""
    max_weight = grid.max_weight()
    label_width = len(str(max(grid.rows - 1, 0)))
    lines: list[str] = []

    for row in range(grid.rows):
        tokens = [_polar_token(cell, style, max_weight) for cell in grid.ring(row)]
        lines.append(f"ring {row:>{label_width}} ({grid.column_counts[row]:>3}) |" + "".join(tokens))

    return "\n".join(lines)
