import pytest

from citrus.components.match_group import MatchGroup
from citrus.engine.scoring import points_for_length, score_for, target_score


def group(length):
    return MatchGroup(indices=tuple(range(length)), length=length)


@pytest.mark.parametrize("length,points", [(3, 30), (4, 65), (5, 110), (6, 165), (7, 170), (8, 175)])
def test_points_by_run_length(length, points):
    assert points_for_length(length) == points
    assert score_for([group(length)]) == points


def test_score_is_strictly_increasing_in_length():
    for count in (1, 2, 3):
        previous = 0
        for length in range(3, 12):
            total = score_for([group(length)] * count)
            assert total > previous
            previous = total


def test_overlapping_groups_count_independently():
    assert score_for([group(3), group(3)]) == 60
    assert score_for([]) == 0


def test_short_runs_are_rejected():
    with pytest.raises(ValueError):
        points_for_length(2)


def test_target_score_formula():
    assert target_score(1) == 400
    assert target_score(2) == 650
    assert target_score(5) == 1400
    assert target_score(3, base=100, increment=50) == 200
    with pytest.raises(ValueError):
        target_score(0)
