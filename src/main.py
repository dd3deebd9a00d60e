"""Entry point for the Citrus Crush match-three game.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color, color, key
from citrus.config import GameConfig
from citrus.constants import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from citrus.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_NEW_GAME_REQUEST,
    EVENT_SETTINGS_CHANGED,
    EVENT_TICK,
)
from citrus.systems.input import InputSystem
from citrus.systems.render import RenderSystem
from citrus.systems.settings_system import SettingsSystem
from citrus.systems.turn_system import TurnSystem
from citrus.utils.log import configure_logging
from citrus.world import create_world


class CitrusCrushWindow(Window):
    def __init__(self, config: GameConfig):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.config = config
        self.board_size = config.board_size
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, config)
        self.settings_system = SettingsSystem(self.world, self.event_bus)
        self.turn_system = TurnSystem(self.world, self.event_bus, config)
        self.input_system = InputSystem(self.event_bus, self, config.board_size)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.N:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
        elif symbol == key.M:
            reduced = not self.settings_system.settings.reduced_motion
            self.event_bus.emit(EVENT_SETTINGS_CHANGED, reduced_motion=reduced)


def main():
    config = GameConfig.from_env()
    configure_logging(config.log_level)
    CitrusCrushWindow(config)
    run()


if __name__ == "__main__":
    main()
