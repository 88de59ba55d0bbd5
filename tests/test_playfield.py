import numpy as np
import pytest

from retris.errors import ConfigurationError
from retris.playfield import Playfield


def test_new_playfield_is_empty():
    field = Playfield()
    assert field.grid.shape == (20, 10)
    assert not field.grid.any()


def test_rejects_dimensions_smaller_than_a_piece():
    with pytest.raises(ConfigurationError):
        Playfield(width=3, height=20)
    with pytest.raises(ConfigurationError):
        Playfield(width=10, height=2)


def test_is_free_checks_bounds_and_occupancy():
    field = Playfield()
    field.set_cell(5, 5, 3)
    assert field.is_free([(0, 0), (19, 9)])
    assert not field.is_free([(-1, 0)])
    assert not field.is_free([(0, 10)])
    assert not field.is_free([(20, 0)])
    assert not field.is_free([(4, 5), (5, 5)])


def test_cell_accessors_raise_outside_the_grid():
    field = Playfield()
    with pytest.raises(IndexError, match=r"\(20, 0\) is outside the 10x20 playfield"):
        field.get_cell(20, 0)
    with pytest.raises(IndexError):
        field.set_cell(0, -1, 1)
    assert field.get_cell(19, 9) == 0
    assert not field.is_empty(20, 0)


def test_merge_marks_cells_with_value():
    field = Playfield()
    field.merge([(19, 0), (19, 1), (18, 1)], 4)
    assert field.get_cell(19, 0) == 4
    assert field.get_cell(18, 1) == 4
    assert int(np.count_nonzero(field.grid)) == 3


def test_clear_without_full_rows_is_a_no_op():
    field = Playfield()
    field.grid[19, :9] = 1
    field.grid[10, 3] = 2
    before = field.grid.copy()
    assert field.clear_completed_rows() == 0
    assert np.array_equal(field.grid, before)
    assert field.clear_completed_rows() == 0
    assert np.array_equal(field.grid, before)


def test_clear_removes_rows_two_and_five_and_compacts():
    field = Playfield()
    field.grid[2, :] = 1
    field.grid[5, :] = 1
    # Distinct markers so each surviving row can be traced.
    field.grid[0, 0] = 2
    field.grid[1, 1] = 3
    field.grid[3, 2] = 4
    field.grid[4, 3] = 5
    field.grid[6, 4] = 6
    field.grid[19, 5] = 7
    before = field.grid.copy()

    assert field.clear_completed_rows() == 2

    assert not field.grid[0].any()
    assert not field.grid[1].any()
    # Rows above both cleared rows drop by two.
    assert np.array_equal(field.grid[2], before[0])
    assert np.array_equal(field.grid[3], before[1])
    # Rows between the cleared rows drop by one.
    assert np.array_equal(field.grid[4], before[3])
    assert np.array_equal(field.grid[5], before[4])
    # Rows below the lowest cleared row stay put.
    assert np.array_equal(field.grid[6:], before[6:])
    assert field.grid.shape == (20, 10)


def test_clear_everything_when_all_rows_full():
    field = Playfield(width=4, height=4)
    field.grid[:, :] = 1
    assert field.clear_completed_rows() == 4
    assert not field.grid.any()


def test_top_row_blocked_only_looks_at_given_cells():
    field = Playfield()
    spawn_zone = [(0, 4), (0, 5), (1, 4), (1, 5)]
    assert not field.top_row_blocked(spawn_zone)
    field.set_cell(0, 0, 1)
    assert not field.top_row_blocked(spawn_zone)
    field.set_cell(1, 5, 1)
    assert field.top_row_blocked(spawn_zone)


def test_rows_returns_immutable_copy():
    field = Playfield(width=4, height=4)
    field.set_cell(3, 0, 2)
    rows = field.rows()
    assert rows[3] == (2, 0, 0, 0)
    field.set_cell(3, 1, 5)
    assert rows[3] == (2, 0, 0, 0)


def test_reset_empties_grid():
    field = Playfield()
    field.grid[10:, :] = 1
    field.reset()
    assert not field.grid.any()
