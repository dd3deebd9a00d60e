from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple

from citrus.components.cell import Cell
from citrus.components.match_group import MatchGroup


class StageKind(Enum):
    """Observable board snapshots a presentation layer may animate."""
    SWAP = 'swap'
    REVERT = 'revert'
    MATCHED = 'matched'
    CLEARED = 'cleared'
    REFILLED = 'refilled'


@dataclass(frozen=True, slots=True)
class CascadeStage:
    kind: StageKind
    grid: Tuple[Cell, ...]
    depth: int = 0
    matched: FrozenSet[int] = frozenset()
    groups: Tuple[MatchGroup, ...] = ()
    points: int = 0  # only non-zero on CLEARED stages
