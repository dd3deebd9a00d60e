import random
from dataclasses import replace

import pytest

from citrus.components.game_state import GameState, TurnPhase
from citrus.config import GameConfig
from citrus.engine.matches import find_matches
from citrus.state.transitions import (
    Activation,
    add_score,
    classify_activation,
    new_game_state,
    next_level_state,
    reduce_activation,
    settled_phase,
    spend_move,
)

TYPES = ['orange', 'lime', 'berry', 'lemon', 'sky', 'cherry']


@pytest.fixture
def state():
    return new_game_state(GameConfig(), TYPES, random.Random(0))


def test_new_game_state_defaults(state):
    assert state.level == 1
    assert state.score == 0
    assert state.moves_left == 20
    assert state.target_score == 400
    assert state.selection is None
    assert state.phase is TurnPhase.IDLE_NO_SELECTION
    assert not find_matches(state.grid).matched


def test_selection_reducer(state):
    selected, outcome = reduce_activation(state, 9)
    assert outcome is Activation.SELECT
    assert selected.selection == 9 and selected.phase is TurnPhase.IDLE_ONE_SELECTED
    assert state.selection is None, 'Reducer must not mutate its input'

    cleared, outcome = reduce_activation(selected, 9)
    assert outcome is Activation.DESELECT
    assert cleared.selection is None and cleared.phase is TurnPhase.IDLE_NO_SELECTION

    moved, outcome = reduce_activation(selected, 30)
    assert outcome is Activation.RESELECT
    assert moved.selection == 30

    swapping, outcome = reduce_activation(selected, 10)
    assert outcome is Activation.SWAP
    assert swapping.selection is None


def test_busy_and_exhausted_states_ignore_activation(state):
    busy = replace(state, phase=TurnPhase.RESOLVING_CASCADE)
    assert classify_activation(busy, 0) is Activation.IGNORED_BUSY
    out_of_moves = replace(state, moves_left=0)
    assert classify_activation(out_of_moves, 0) is Activation.IGNORED_NO_MOVES
    over = replace(state, phase=TurnPhase.GAME_OVER)
    after, outcome = reduce_activation(over, 0)
    assert outcome is Activation.IGNORED_NO_MOVES
    assert after.selection is None


def test_move_budget_clamps_at_zero(state):
    assert spend_move(replace(state, moves_left=1)).moves_left == 0
    assert spend_move(replace(state, moves_left=0)).moves_left == 0
    with pytest.raises(ValueError):
        replace(state, moves_left=-1)


def test_game_state_validates_fields(state):
    with pytest.raises(ValueError):
        GameState(grid=state.grid, score=-5)
    with pytest.raises(ValueError):
        GameState(grid=state.grid, level=0)
    with pytest.raises(ValueError):
        add_score(state, -1)


def test_settled_phase_prefers_level_transition(state):
    assert settled_phase(state) is TurnPhase.IDLE_NO_SELECTION
    assert settled_phase(replace(state, moves_left=0)) is TurnPhase.GAME_OVER
    assert settled_phase(replace(state, moves_left=0, score=400)) is TurnPhase.LEVEL_TRANSITION


def test_next_level_state_resets_budget_and_score(state):
    config = GameConfig()
    upcoming = next_level_state(replace(state, score=420, moves_left=3), config, TYPES, random.Random(2))
    assert upcoming.level == 2
    assert upcoming.score == 0
    assert upcoming.moves_left == 20
    assert upcoming.target_score == 650
    assert upcoming.grid != state.grid
    assert not find_matches(upcoming.grid).matched
