from blinker import Signal
from typing import Dict

class EventBus:
    """Named blinker signals shared by the engine and the presentation shell."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else holds on to.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_CELL_ACTIVATE = "cell_activate"              # payload: index=int
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: None
EVENT_SETTINGS_CHANGED = "settings_changed"        # payload: any of muted, volume, reduced_motion


# ============================================================================
# SELECTION & SWAP
# ============================================================================
EVENT_CELL_SELECTED = "cell_selected"              # payload: index=int
EVENT_CELL_DESELECTED = "cell_deselected"          # payload: index=int, reason=str
EVENT_ACTIVATION_IGNORED = "activation_ignored"    # payload: index=int, reason=str
EVENT_INVALID_FEEDBACK = "invalid_feedback"        # payload: indices=tuple[int,...], reason=str
EVENT_SWAP_STARTED = "swap_started"                # payload: src=int, dst=int, op_token=int
EVENT_SWAP_REVERTED = "swap_reverted"              # payload: src=int, dst=int, op_token=int
EVENT_MOVE_SPENT = "move_spent"                    # payload: moves_left=int


# ============================================================================
# CASCADE & SCORE
# ============================================================================
EVENT_CASCADE_STAGE = "cascade_stage"              # payload: stage=CascadeStage, op_token=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, gained=int, op_token=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous=TurnPhase, new=TurnPhase
EVENT_LEVEL_COMPLETED = "level_completed"          # payload: level=int, next_level=int, score=int
EVENT_GAME_OVER = "game_over"                      # payload: score=int, level=int
EVENT_GAME_STARTED = "game_started"                # payload: level=int, target_score=int, moves_left=int
