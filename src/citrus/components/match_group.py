from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class MatchGroup:
    """One maximal horizontal or vertical run of three or more equal candies."""
    indices: Tuple[int, ...]
    length: int
