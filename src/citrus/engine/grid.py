"""Row-major N×N grid helpers. Grids are tuples of ``Cell`` and never mutated."""
from __future__ import annotations

from math import isqrt
from typing import Optional, Tuple

from citrus.components.cell import Cell

Grid = Tuple[Cell, ...]
Position = int


def grid_size(grid: Grid, expected: Optional[int] = None) -> int:
    """Return the side length of ``grid``; reject non-square or mis-sized grids."""
    total = len(grid)
    size = isqrt(total)
    if size * size != total or size == 0:
        raise ValueError(f"grid of {total} cells is not a non-empty square")
    if expected is not None and size != expected:
        raise ValueError(f"grid is {size}x{size}, expected {expected}x{expected}")
    return size


def check_position(position: Position, size: int) -> None:
    if not 0 <= position < size * size:
        raise ValueError(f"position {position} out of range for a {size}x{size} grid")


def in_bounds(row: int, col: int, size: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def index(row: int, col: int, size: int) -> Position:
    if not in_bounds(row, col, size):
        raise ValueError(f"({row}, {col}) out of range for a {size}x{size} grid")
    return row * size + col


def coordinates(position: Position, size: int) -> Tuple[int, int]:
    check_position(position, size)
    return divmod(position, size)


def are_adjacent(a: Position, b: Position, size: int) -> bool:
    """True iff the two cells share an edge (Manhattan distance of exactly one)."""
    ar, ac = coordinates(a, size)
    br, bc = coordinates(b, size)
    return abs(ar - br) + abs(ac - bc) == 1


def swap(grid: Grid, a: Position, b: Position) -> Grid:
    """Return a new grid with the cells at ``a`` and ``b`` exchanged.

    Adjacency is the caller's concern; only the range is checked.
    """
    size = grid_size(grid)
    check_position(a, size)
    check_position(b, size)
    cells = list(grid)
    cells[a], cells[b] = cells[b], cells[a]
    return tuple(cells)


def token_layout(grid: Grid) -> Tuple[Optional[str], ...]:
    """Token types in grid order, ignoring cell identity."""
    return tuple(cell.token_type for cell in grid)


def column_positions(col: int, size: int) -> range:
    return range(col, size * size, size)
