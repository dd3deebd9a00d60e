"""Pure transitions over ``GameState``.

Every function takes a state (plus whatever it needs) and returns a new state;
the turn controller decides which one to apply and when.
"""
from __future__ import annotations

import random
from dataclasses import replace
from enum import Enum, auto
from typing import Tuple

from citrus.components.game_state import GameState, TurnPhase
from citrus.config import GameConfig
from citrus.engine.generator import generate
from citrus.engine.grid import Grid, are_adjacent, check_position, grid_size
from citrus.engine.scoring import target_score


class Activation(Enum):
    """How a cell activation is interpreted in the current state."""
    IGNORED_BUSY = auto()
    IGNORED_NO_MOVES = auto()
    SELECT = auto()
    DESELECT = auto()
    RESELECT = auto()
    SWAP = auto()


def target_for(level: int, config: GameConfig) -> int:
    return target_score(level, config.target_base, config.target_increment)


def new_game_state(config: GameConfig, token_types, rng: random.Random) -> GameState:
    return GameState(
        grid=generate(config.board_size, token_types, rng),
        score=0,
        level=1,
        moves_left=config.initial_moves,
        target_score=target_for(1, config),
        selection=None,
        phase=TurnPhase.IDLE_NO_SELECTION,
    )


def next_level_state(state: GameState, config: GameConfig, token_types, rng: random.Random) -> GameState:
    level = state.level + 1
    return GameState(
        grid=generate(config.board_size, token_types, rng),
        score=0,
        level=level,
        moves_left=config.initial_moves,
        target_score=target_for(level, config),
        selection=None,
        phase=TurnPhase.IDLE_NO_SELECTION,
    )


def classify_activation(state: GameState, index: int) -> Activation:
    """Decide what activating ``index`` means without changing anything."""
    check_position(index, grid_size(state.grid))
    if state.busy:
        return Activation.IGNORED_BUSY
    if state.phase is TurnPhase.GAME_OVER or not state.can_move:
        return Activation.IGNORED_NO_MOVES
    if state.selection is None:
        return Activation.SELECT
    if index == state.selection:
        return Activation.DESELECT
    if not are_adjacent(state.selection, index, grid_size(state.grid)):
        return Activation.RESELECT
    return Activation.SWAP


def select(state: GameState, index: int) -> GameState:
    return replace(state, selection=index, phase=TurnPhase.IDLE_ONE_SELECTED)


def clear_selection(state: GameState) -> GameState:
    return replace(state, selection=None, phase=TurnPhase.IDLE_NO_SELECTION)


def reduce_activation(state: GameState, index: int) -> Tuple[GameState, Activation]:
    """Apply the selection part of an activation.

    A SWAP outcome only clears the selection; the swap itself is sequenced by
    the controller.
    """
    outcome = classify_activation(state, index)
    if outcome in (Activation.SELECT, Activation.RESELECT):
        return select(state, index), outcome
    if outcome is Activation.DESELECT:
        return clear_selection(state), outcome
    if outcome is Activation.SWAP:
        return replace(state, selection=None), outcome
    return state, outcome


def with_grid(state: GameState, grid: Grid, phase: TurnPhase | None = None) -> GameState:
    return replace(state, grid=grid, phase=phase or state.phase)


def spend_move(state: GameState) -> GameState:
    return replace(state, moves_left=max(0, state.moves_left - 1))


def add_score(state: GameState, points: int) -> GameState:
    if points < 0:
        raise ValueError(f"points must be non-negative, got {points}")
    return replace(state, score=state.score + points)


def level_complete(state: GameState) -> bool:
    return state.score >= state.target_score


def settled_phase(state: GameState) -> TurnPhase:
    """Phase to rest in once a turn is fully resolved (level check comes first)."""
    if level_complete(state):
        return TurnPhase.LEVEL_TRANSITION
    if not state.can_move:
        return TurnPhase.GAME_OVER
    return TurnPhase.IDLE_NO_SELECTION
