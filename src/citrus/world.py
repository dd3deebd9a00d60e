import random

from esper import World

from citrus.components.candy_types import CandyTypes
from citrus.components.settings import Settings
from citrus.config import GameConfig
from citrus.events.bus import EventBus
from citrus.state.transitions import new_game_state


def create_world(
    event_bus: EventBus,
    config: GameConfig | None = None,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
) -> World:
    """Build the session world: candy registry entity plus session state entity."""
    config = config or GameConfig()
    world = World()
    if rng is None:
        rng = random.Random(config.seed)
    setattr(world, "random", rng)
    setattr(world, "config", config)

    registry = CandyTypes(types=dict(config.candy_types))
    world.create_entity(registry)

    # Single session entity; the turn controller swaps its GameState wholesale.
    world.create_entity(
        new_game_state(config, registry.spawnable_types(), rng),
        settings or Settings(),
    )
    return world
