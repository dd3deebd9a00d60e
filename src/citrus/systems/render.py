import colorsys
from typing import Dict, Tuple

from esper import World

from citrus.components.cascade_stage import StageKind
from citrus.events.bus import (
    EventBus,
    EVENT_CASCADE_STAGE,
    EVENT_INVALID_FEEDBACK,
    EVENT_TICK,
)
from citrus.ui.layout import cell_origin, compute_board_geometry
from citrus.ui.status import status_text
from citrus.utils.world_resources import get_candy_registry, get_game_state

PADDING = 4
INVALID_PULSE_SECONDS = 0.26
BOARD_BACKGROUND = (34, 30, 42)
EMPTY_CELL_COLOR = (52, 48, 62)
SELECTED_OUTLINE = (255, 255, 255)
MATCHED_OUTLINE = (255, 214, 102)
INVALID_OUTLINE = (230, 70, 70)
TEXT_COLOR = (245, 240, 230)

Color = Tuple[int, int, int]


def hue_to_rgb(hue: int, lightness: float = 0.55, saturation: float = 0.75) -> Color:
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness, saturation)
    return int(r * 255), int(g * 255), int(b * 255)


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_CASCADE_STAGE, self.on_cascade_stage)
        self.event_bus.subscribe(EVENT_INVALID_FEEDBACK, self.on_invalid_feedback)
        self.highlighted: frozenset[int] = frozenset()
        self._invalid_pulse: Dict[int, float] = {}
        self._color_cache: Dict[str, Color] = {}

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1 / 60)
        expired = []
        for index in self._invalid_pulse:
            self._invalid_pulse[index] -= dt
            if self._invalid_pulse[index] <= 0:
                expired.append(index)
        for index in expired:
            del self._invalid_pulse[index]

    def on_cascade_stage(self, sender, **kwargs):
        stage = kwargs.get('stage')
        if stage is None:
            return
        # Highlight only while the matched snapshot is on screen.
        self.highlighted = stage.matched if stage.kind is StageKind.MATCHED else frozenset()

    def on_invalid_feedback(self, sender, **kwargs):
        for index in kwargs.get('indices', ()):
            if index is not None:
                self._invalid_pulse[index] = INVALID_PULSE_SECONDS

    def color_for(self, token_type: str) -> Color:
        color = self._color_cache.get(token_type)
        if color is None:
            color = hue_to_rgb(get_candy_registry(self.world).hue_for(token_type))
            self._color_cache[token_type] = color
        return color

    def process(self):
        # Local import keeps the engine and its tests free of a window.
        import arcade

        state = get_game_state(self.world)
        size = self.window.board_size
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, size)
        board_px = tile_size * size
        arcade.draw_lrbt_rectangle_filled(start_x, start_x + board_px, start_y, start_y + board_px, BOARD_BACKGROUND)
        for index, cell in enumerate(state.grid):
            origin_x, origin_y = cell_origin(index, self.window.width, self.window.height, size)
            left = origin_x + PADDING
            bottom = origin_y + PADDING
            right = left + tile_size - 2 * PADDING
            top = bottom + tile_size - 2 * PADDING
            fill = EMPTY_CELL_COLOR if cell.empty else self.color_for(cell.token_type)
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, fill)
            if index in self._invalid_pulse:
                arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, INVALID_OUTLINE, 3)
            elif index in self.highlighted:
                arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, MATCHED_OUTLINE, 3)
            elif index == state.selection:
                arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, SELECTED_OUTLINE, 3)

        hud_y = start_y + board_px + 16
        hud = f"Level {state.level}    Score {state.score} / {state.target_score}    Moves {state.moves_left}"
        arcade.draw_text(hud, start_x, hud_y + 24, TEXT_COLOR, 16)
        arcade.draw_text(status_text(state), start_x, hud_y, TEXT_COLOR, 12)
