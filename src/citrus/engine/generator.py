from __future__ import annotations

import itertools
import random
from typing import List, Optional, Sequence

from citrus.components.cell import Cell
from citrus.constants import MIN_CANDY_TYPES
from citrus.engine.grid import Grid

_cell_ids = itertools.count(1)


def new_cell_id() -> str:
    return f"cell-{next(_cell_ids)}"


def make_cell(token_type: Optional[str], *, is_new: bool = False) -> Cell:
    return Cell(id=new_cell_id(), token_type=token_type, is_new=is_new)


def generate(size: int, token_types: Sequence[str], rng: random.Random | None = None) -> Grid:
    """Fill a size×size grid row by row without creating any run of three.

    Each draw excludes the type of the two cells to the left when they agree,
    and likewise for the two cells above. Only already placed cells are
    consulted, so the finished grid is match-free.
    """
    if size < 1:
        raise ValueError(f"size must be positive, got {size}")
    choices = list(dict.fromkeys(token_types))
    if len(choices) < MIN_CANDY_TYPES:
        raise ValueError(
            f"at least {MIN_CANDY_TYPES} distinct token types are required, got {len(choices)}"
        )
    rng = rng or random.Random()
    layout: List[List[str]] = []
    for row in range(size):
        row_values: List[str] = []
        for col in range(size):
            available = choices
            if col >= 2:
                left1 = row_values[col - 1]
                if left1 == row_values[col - 2]:
                    available = [t for t in available if t != left1]
            if row >= 2:
                up1 = layout[row - 1][col]
                if up1 == layout[row - 2][col]:
                    available = [t for t in available if t != up1]
            row_values.append(rng.choice(available))
        layout.append(row_values)
    return tuple(make_cell(token) for row_values in layout for token in row_values)
