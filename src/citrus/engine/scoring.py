from typing import Iterable

from citrus.components.match_group import MatchGroup
from citrus.constants import MIN_RUN_LENGTH, TARGET_SCORE_BASE, TARGET_SCORE_INCREMENT

BASE_POINTS = {3: 30, 4: 60, 5: 100}
LONG_RUN_POINTS = 150
BONUS_PER_EXTRA_CANDY = 5


def points_for_length(length: int) -> int:
    """Flat points by run length plus 5 for every candy beyond the third."""
    if length < MIN_RUN_LENGTH:
        raise ValueError(f"a match needs at least {MIN_RUN_LENGTH} candies, got {length}")
    base = BASE_POINTS.get(length, LONG_RUN_POINTS)
    return base + (length - MIN_RUN_LENGTH) * BONUS_PER_EXTRA_CANDY


def score_for(groups: Iterable[MatchGroup]) -> int:
    # Overlapping horizontal/vertical groups are scored independently.
    return sum(points_for_length(group.length) for group in groups)


def target_score(
    level: int,
    base: int = TARGET_SCORE_BASE,
    increment: int = TARGET_SCORE_INCREMENT,
) -> int:
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return base + (level - 1) * increment
