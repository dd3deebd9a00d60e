from citrus.components.game_state import GameState, TurnPhase

STATUS_NO_MOVES = "No moves left. Start a new game."
STATUS_BUSY = "Resolving matches…"
STATUS_LEVEL_COMPLETE = "Level complete!"
STATUS_PROMPT = "Select a candy, then select an adjacent candy to swap."


def status_text(state: GameState) -> str:
    """One-line player hint for the current session state."""
    if state.phase is TurnPhase.GAME_OVER or not state.can_move:
        return STATUS_NO_MOVES
    if state.phase is TurnPhase.LEVEL_TRANSITION or state.score >= state.target_score:
        return STATUS_LEVEL_COMPLETE
    if state.busy:
        return STATUS_BUSY
    return STATUS_PROMPT
