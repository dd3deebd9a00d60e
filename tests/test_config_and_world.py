import random

import pytest

from citrus.components.candy_types import CandyType, CandyTypes
from citrus.components.game_state import GameState
from citrus.components.settings import Settings
from citrus.config import LEVEL_UP, GameConfig
from citrus.events.bus import EventBus, EVENT_SETTINGS_CHANGED
from citrus.systems.settings_system import SettingsSystem
from citrus.utils.world_resources import get_candy_registry, get_game_state, get_or_create_settings
from citrus.world import create_world


def test_default_config_values():
    config = GameConfig()
    assert config.board_size == 8
    assert len(config.candy_types) == 6
    assert config.initial_moves == 20
    assert (config.target_base, config.target_increment) == (400, 250)
    assert config.pacing.delay_for(LEVEL_UP) == pytest.approx(0.45)
    assert config.pacing.delay_for(LEVEL_UP, reduced_motion=True) == pytest.approx(0.10)
    assert config.pacing.delay_for('unknown') == 0.0


@pytest.mark.parametrize("kwargs", [
    {"board_size": 2},
    {"initial_moves": 0},
    {"candy_types": {"a": CandyType("A", 1), "b": CandyType("B", 2)}},
    {"max_cascade_depth": 0},
])
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_config_from_env():
    config = GameConfig.from_env({
        "CITRUS_BOARD_SIZE": "6",
        "CITRUS_INITIAL_MOVES": "12",
        "CITRUS_SEED": "99",
        "CITRUS_LOG_LEVEL": "debug",
    })
    assert config.board_size == 6
    assert config.initial_moves == 12
    assert config.seed == 99
    assert config.log_level == "DEBUG"
    assert GameConfig.from_env({}) == GameConfig()
    with pytest.raises(ValueError):
        GameConfig.from_env({"CITRUS_BOARD_SIZE": "eight"})


def test_create_world_registers_resources():
    bus = EventBus()
    world = create_world(bus, GameConfig(board_size=6), rng=random.Random(0))
    registry = get_candy_registry(world)
    assert registry.spawnable_types() == ['orange', 'lime', 'berry', 'lemon', 'sky', 'cherry']
    state = get_game_state(world)
    assert isinstance(state, GameState)
    assert len(state.grid) == 36
    assert state.moves_left == 20
    assert isinstance(get_or_create_settings(world), Settings)


def test_seeded_worlds_share_a_board():
    first = get_game_state(create_world(EventBus(), GameConfig(seed=5)))
    second = get_game_state(create_world(EventBus(), GameConfig(seed=5)))
    assert [c.token_type for c in first.grid] == [c.token_type for c in second.grid]


def test_candy_registry_filters_spawnable():
    registry = CandyTypes(
        types={"a": CandyType("A", 1), "b": CandyType("B", 2), "c": CandyType("C", 3)},
        spawnable=["c", "zzz", "a", "c"],
    )
    assert registry.spawnable_types() == ["c", "a"]
    registry.set_spawnable([])
    assert registry.spawnable_types() == ["a", "b", "c"]
    assert registry.hue_for("b") == 2
    assert registry.label_for("c") == "C"


def test_settings_system_applies_changes():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(0))
    system = SettingsSystem(world, bus)
    bus.emit(EVENT_SETTINGS_CHANGED, reduced_motion=True, volume=3)
    assert system.settings.reduced_motion is True
    assert system.settings.volume == 1.0
    bus.emit(EVENT_SETTINGS_CHANGED, muted=True, volume="loud")
    assert system.settings.muted is True
    assert system.settings.volume == 1.0
    assert Settings(volume=-2).volume == 0.0
