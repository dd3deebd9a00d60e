import random

import pytest

from citrus.components.candy_types import DEFAULT_CANDY_TYPES
from citrus.engine.generator import generate
from citrus.engine.matches import find_matches

TYPES = list(DEFAULT_CANDY_TYPES)


@pytest.mark.parametrize("size", [3, 5, 8, 12])
def test_generated_board_has_no_matches(size):
    for seed in range(25):
        grid = generate(size, TYPES, random.Random(seed))
        assert len(grid) == size * size
        matched, groups = find_matches(grid)
        assert not matched, f'Initial {size}x{size} board (seed {seed}) should not contain any matches'
        assert groups == ()


def test_three_types_are_enough():
    for seed in range(50):
        grid = generate(8, TYPES[:3], random.Random(seed))
        assert not find_matches(grid).matched


def test_generated_cells_use_the_token_set_and_unique_ids():
    grid = generate(8, TYPES, random.Random(7))
    assert all(cell.token_type in TYPES for cell in grid)
    assert not any(cell.is_new for cell in grid)
    assert len({cell.id for cell in grid}) == len(grid)


def test_generator_rejects_small_token_sets():
    with pytest.raises(ValueError):
        generate(8, TYPES[:2], random.Random(0))
    with pytest.raises(ValueError):
        generate(0, TYPES)


def test_seeded_generation_is_deterministic():
    first = generate(8, TYPES, random.Random(42))
    second = generate(8, TYPES, random.Random(42))
    assert [c.token_type for c in first] == [c.token_type for c in second]
