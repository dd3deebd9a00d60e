from __future__ import annotations

from typing import FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from citrus.components.match_group import MatchGroup
from citrus.constants import MIN_RUN_LENGTH
from citrus.engine.grid import Grid, Position, grid_size, swap


class MatchResult(NamedTuple):
    matched: FrozenSet[Position]
    groups: Tuple[MatchGroup, ...]


def _scan_line(grid: Grid, line: Sequence[Position], groups: List[MatchGroup]) -> None:
    run: List[Position] = []
    last_type = None
    for pos in line:
        tval = grid[pos].token_type
        if tval is not None and tval == last_type:
            run.append(pos)
            continue
        if len(run) >= MIN_RUN_LENGTH:
            groups.append(MatchGroup(indices=tuple(run), length=len(run)))
        run = [pos] if tval is not None else []
        last_type = tval
    if len(run) >= MIN_RUN_LENGTH:
        groups.append(MatchGroup(indices=tuple(run), length=len(run)))


def find_matches(grid: Grid, size: Optional[int] = None) -> MatchResult:
    """Detect every horizontal and vertical run of three or more equal candies.

    Rows are scanned first, then columns. A cell at the crossing of a
    horizontal and a vertical run shows up in both groups but only once in
    ``matched``. Empty cells break runs.
    """
    size = grid_size(grid, size)
    groups: List[MatchGroup] = []
    for r in range(size):
        _scan_line(grid, range(r * size, (r + 1) * size), groups)
    for c in range(size):
        _scan_line(grid, range(c, size * size, size), groups)
    matched = frozenset(pos for group in groups for pos in group.indices)
    return MatchResult(matched=matched, groups=tuple(groups))


def would_swap_create_match(grid: Grid, a: Position, b: Position) -> bool:
    """Return True if swapping ``a`` and ``b`` produces any match."""
    return bool(find_matches(swap(grid, a, b)).matched)
