from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from esper import World

from citrus.components.cell import EMPTY
from citrus.components.game_state import GameState
from citrus.engine.generator import make_cell
from citrus.engine.grid import Grid
from citrus.utils.world_resources import get_game_state, get_session_entity

# Single-letter shorthand for the default candy set; '.' is an empty cell.
TOKENS = {
    'A': 'orange',
    'B': 'lime',
    'C': 'berry',
    'D': 'lemon',
    'E': 'sky',
    'F': 'cherry',
}


def grid_from_rows(rows: Sequence[str]) -> Grid:
    """Build a grid from strings such as ``"AAB.C"`` (spaces are ignored)."""
    cells = []
    for row in rows:
        for ch in row.replace(" ", ""):
            cells.append(make_cell(EMPTY if ch == '.' else TOKENS[ch]))
    return tuple(cells)


def install_state(world: World, **changes) -> GameState:
    """Replace fields of the session GameState, e.g. a crafted grid or score."""
    state = replace(get_game_state(world), **changes)
    world.add_component(get_session_entity(world), state)
    return state
