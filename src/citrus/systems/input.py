from citrus.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_CELL_ACTIVATE
from citrus.ui.layout import cell_at_point

MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Turns left clicks on the board into cell activations."""
    def __init__(self, event_bus: EventBus, window, board_size: int):
        self.event_bus = event_bus
        self.window = window
        self.board_size = board_size
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        index = cell_at_point(x, y, self.window.width, self.window.height, self.board_size)
        if index is None:
            return
        self.event_bus.emit(EVENT_CELL_ACTIVATE, index=index)
