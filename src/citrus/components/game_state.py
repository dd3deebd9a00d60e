"""Session state resource owned by the turn controller."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from citrus.components.cell import Cell


class TurnPhase(Enum):
    """Turn-level phases; the busy ones reject player input."""
    IDLE_NO_SELECTION = auto()
    IDLE_ONE_SELECTED = auto()
    ANIMATING_SWAP = auto()
    ANIMATING_REVERT = auto()
    RESOLVING_CASCADE = auto()
    LEVEL_TRANSITION = auto()
    GAME_OVER = auto()


BUSY_PHASES = frozenset({
    TurnPhase.ANIMATING_SWAP,
    TurnPhase.ANIMATING_REVERT,
    TurnPhase.RESOLVING_CASCADE,
    TurnPhase.LEVEL_TRANSITION,
})


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of one game session.

    The controller never mutates an instance; every transition builds a new one
    with ``dataclasses.replace`` and swaps it into the world.
    """
    grid: Tuple[Cell, ...]
    score: int = 0
    level: int = 1
    moves_left: int = 0
    target_score: int = 0
    selection: Optional[int] = None
    phase: TurnPhase = TurnPhase.IDLE_NO_SELECTION

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError(f"score must be non-negative, got {self.score}")
        if self.level < 1:
            raise ValueError(f"level must be >= 1, got {self.level}")
        if self.moves_left < 0:
            raise ValueError(f"moves_left must be non-negative, got {self.moves_left}")

    @property
    def busy(self) -> bool:
        return self.phase in BUSY_PHASES

    @property
    def can_move(self) -> bool:
        return self.moves_left > 0
