from __future__ import annotations

from esper import World

from citrus.components.candy_types import CandyTypes
from citrus.components.game_state import GameState
from citrus.components.settings import Settings


def get_candy_registry(world: World) -> CandyTypes:
    for _, registry in world.get_component(CandyTypes):
        return registry
    raise RuntimeError("CandyTypes definitions not found")


def get_session_entity(world: World) -> int:
    for entity, _ in world.get_component(GameState):
        return entity
    raise RuntimeError("GameState resource not found")


def get_game_state(world: World) -> GameState:
    return world.component_for_entity(get_session_entity(world), GameState)


def get_or_create_settings(world: World) -> Settings:
    """Return the session Settings component, creating it if absent."""
    entity = get_session_entity(world)
    if not world.has_component(entity, Settings):
        world.add_component(entity, Settings())
    return world.component_for_entity(entity, Settings)
