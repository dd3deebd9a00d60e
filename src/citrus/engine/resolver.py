"""Clearing, gravity/refill and the staged cascade loop."""
from __future__ import annotations

import random
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from citrus.components.cascade_stage import CascadeStage, StageKind
from citrus.components.cell import EMPTY, Cell
from citrus.engine.generator import make_cell
from citrus.engine.grid import Grid, Position, check_position, column_positions, grid_size
from citrus.engine.matches import find_matches
from citrus.engine.scoring import score_for


class CascadeResult(NamedTuple):
    grid: Grid
    points: int
    depth: int
    stages: Tuple[CascadeStage, ...]


def clear(grid: Grid, matched: Iterable[Position]) -> Grid:
    """Return a new grid where matched cells are emptied (ids kept, not new)."""
    size = grid_size(grid)
    cells = list(grid)
    for pos in matched:
        check_position(pos, size)
        cell = cells[pos]
        cells[pos] = Cell(id=cell.id, token_type=EMPTY, is_new=False)
    return tuple(cells)


def apply_gravity_and_refill(
    grid: Grid,
    token_types: Sequence[str],
    rng: random.Random | None = None,
) -> Grid:
    """Compact each column downwards, then top it up with fresh candies.

    Surviving cells keep their id and relative order and lose the ``is_new``
    flag; every refilled cell is a new cell with ``is_new=True``.
    """
    size = grid_size(grid)
    choices = list(token_types)
    if not choices:
        raise ValueError("token_types must not be empty")
    rng = rng or random.Random()
    cells: List[Cell] = list(grid)
    for col in range(size):
        positions = list(column_positions(col, size))
        survivors = [grid[pos] for pos in positions if not grid[pos].empty]
        vacated = size - len(survivors)
        for offset, pos in enumerate(positions):
            if offset < vacated:
                cells[pos] = make_cell(rng.choice(choices), is_new=True)
            else:
                cell = survivors[offset - vacated]
                cells[pos] = cell if not cell.is_new else Cell(cell.id, cell.token_type, False)
    return tuple(cells)


def iter_cascade(
    grid: Grid,
    token_types: Sequence[str],
    rng: random.Random | None = None,
    *,
    max_depth: Optional[int] = None,
) -> Iterator[CascadeStage]:
    """Yield MATCHED, CLEARED and REFILLED snapshots for every cascade pass.

    The loop ends on the first pass without matches; the last REFILLED grid
    (or the input grid when nothing matched) is stable.
    """
    size = grid_size(grid)
    limit = max_depth if max_depth is not None else size * size
    rng = rng or random.Random()
    current = grid
    depth = 0
    while True:
        matched, groups = find_matches(current, size)
        if not matched:
            return
        depth += 1
        if depth > limit:
            raise RuntimeError(f"cascade did not settle within {limit} passes")
        yield CascadeStage(StageKind.MATCHED, current, depth, matched, groups)
        cleared = clear(current, matched)
        yield CascadeStage(StageKind.CLEARED, cleared, depth, matched, groups, score_for(groups))
        current = apply_gravity_and_refill(cleared, token_types, rng)
        yield CascadeStage(StageKind.REFILLED, current, depth)


def resolve_cascade(
    grid: Grid,
    token_types: Sequence[str],
    rng: random.Random | None = None,
    *,
    max_depth: Optional[int] = None,
) -> CascadeResult:
    """Run the cascade to completion and collect every stage."""
    stages = tuple(iter_cascade(grid, token_types, rng, max_depth=max_depth))
    final = grid
    for stage in reversed(stages):
        if stage.kind is StageKind.REFILLED:
            final = stage.grid
            break
    points = sum(stage.points for stage in stages)
    depth = stages[-1].depth if stages else 0
    return CascadeResult(grid=final, points=points, depth=depth, stages=stages)
