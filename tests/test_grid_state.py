import random

import pytest

from cactpot_advisor.core.errors import DuplicateDigit, InvalidDigit, InvalidGrid, InvalidIndex
from cactpot_advisor.core.grid.grid_state import Grid


def test_new_grid_is_empty():
    g = Grid()
    assert g.values() == (None,) * 9
    assert g.revealed_count() == 0
    assert g.used_numbers() == []
    assert g.available_numbers() == [1, 2, 3, 4, 5, 6, 7, 8, 9]


def test_set_get_and_clear():
    g = Grid()
    g.set_cell(4, 7)
    g.set_cell(0, 2)
    assert g.get_cell(4) == 7
    assert g.used_numbers() == [2, 7]
    assert g.available_numbers() == [1, 3, 4, 5, 6, 8, 9]
    assert g.revealed_count() == 2

    g.clear_cell(4)
    assert g.get_cell(4) is None
    assert g.revealed_count() == 1


def test_reset_clears_everything():
    g = Grid([1, 2, 3, 4, 5, 6, 7, 8, 9])
    g.reset()
    assert g.revealed_count() == 0
    assert all(g.get_cell(i) is None for i in range(9))


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_index(index):
    g = Grid()
    with pytest.raises(InvalidIndex) as exc:
        g.set_cell(index, 1)
    assert exc.value.code == "E_INVALID_INDEX"
    with pytest.raises(InvalidIndex):
        g.get_cell(index)


@pytest.mark.parametrize("value", [0, 10, -3, True])
def test_invalid_digit(value):
    with pytest.raises(InvalidDigit) as exc:
        Grid().set_cell(0, value)
    assert exc.value.code == "E_INVALID_DIGIT"


def test_duplicate_digit_rejected():
    g = Grid()
    g.set_cell(0, 5)
    with pytest.raises(DuplicateDigit) as exc:
        g.set_cell(8, 5)
    assert exc.value.code == "E_DUPLICATE_DIGIT"
    assert "cells[8]" in str(exc.value)
    assert g.get_cell(8) is None


def test_rewriting_same_cell_with_same_digit_is_allowed():
    g = Grid()
    g.set_cell(3, 6)
    g.set_cell(3, 6)
    assert g.used_numbers() == [6]


def test_selectable_numbers_include_current_value():
    g = Grid([5, None, None, None, 2, None, None, None, None])
    assert g.selectable_numbers(0) == [1, 3, 4, 5, 6, 7, 8, 9]
    assert g.selectable_numbers(1) == [1, 3, 4, 6, 7, 8, 9]


def test_grid_needs_nine_cells():
    with pytest.raises(InvalidGrid) as exc:
        Grid([1, 2, 3])
    assert exc.value.code == "E_GRID_SIZE"
    assert not isinstance(exc.value, InvalidIndex)


def test_available_and_used_partition_digits():
    rng = random.Random(1234)
    g = Grid()
    for _ in range(500):
        index = rng.randrange(9)
        if rng.random() < 0.3:
            g.clear_cell(index)
        else:
            choices = g.selectable_numbers(index)
            g.set_cell(index, rng.choice(choices))

        used = g.used_numbers()
        available = g.available_numbers()
        assert set(used).isdisjoint(available)
        assert sorted(used + available) == list(range(1, 10))
        assert g.revealed_count() == len(used)
