from dataclasses import dataclass
from typing import Optional

# Marker stored in ``Cell.token_type`` for a cleared cell.
EMPTY = None


@dataclass(frozen=True, slots=True)
class Cell:
    """One board slot.

    id: stable identifier used by the renderer to track a candy while it moves.
    token_type: candy type id, or EMPTY once the cell has been cleared.
    is_new: True for candies spawned by the latest refill.
    """
    id: str
    token_type: Optional[str]
    is_new: bool = False

    @property
    def empty(self) -> bool:
        return self.token_type is EMPTY
