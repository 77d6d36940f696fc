"""Tests for the sparse voxel grid and its cell classification."""

import pytest

from fieldrange.environment import EMPTY_CELL, FieldBounds, FieldGrid


def make_grid(**kwargs) -> FieldGrid:
    return FieldGrid(block_type_len=4, slope_index=8, **kwargs)


def test_unset_cells_read_as_empty():
    grid = make_grid(cells={(0, -1, 0): 4})

    assert grid.get_cell((0, -1, 0)) == 4
    assert grid.get_cell((0, 0, 0)) == EMPTY_CELL
    assert grid.is_empty((5, 5, 5))
    assert grid.base_type_len() == 4
    assert grid.slope_marker() == 8


def test_base_type_and_variant_offset():
    grid = make_grid()

    assert grid.base_type(6) == 4
    assert grid.variant_offset(6) == 2
    assert grid.base_type(8) == 8
    assert grid.variant_offset(8) == 0
    # The empty sentinel never classifies as a block, let alone a slope
    assert grid.base_type(EMPTY_CELL) == EMPTY_CELL
    assert grid.variant_offset(EMPTY_CELL) == 0


def test_highlighted_slope_is_still_a_slope():
    grid = make_grid(cells={(1, 0, 0): 9, (2, 0, 0): 4})

    assert grid.is_slope((1, 0, 0)) is True
    assert grid.is_slope((2, 0, 0)) is False
    assert grid.is_slope((3, 0, 0)) is False


def test_overlay_preserves_base_type():
    grid = make_grid(cells={(0, -1, 0): 4, (1, -1, 0): 10})

    assert grid.set_overlay_block((0, -1, 0), 3) is True
    assert grid.set_overlay_block((1, -1, 0), 1) is True
    assert grid.get_cell((0, -1, 0)) == 7
    assert grid.get_cell((1, -1, 0)) == 9

    # Empty cells are left alone
    assert grid.set_overlay_block((0, 0, 0), 1) is False
    assert grid.get_cell((0, 0, 0)) == EMPTY_CELL

    with pytest.raises(ValueError):
        grid.set_overlay_block((0, -1, 0), 4)


def test_lowest_level_tracks_stored_cells():
    grid = make_grid()
    assert grid.lowest_level() is None

    grid.set_cell((0, 2, 0), 0)
    grid.set_cell((3, -3, 1), 4)
    assert grid.lowest_level() == -3

    grid.clear_cell((3, -3, 1))
    assert grid.lowest_level() == 2

    # Writing the sentinel removes the cell
    grid.set_cell((0, 2, 0), EMPTY_CELL)
    assert grid.cells == {}


def test_constructor_normalises_cells():
    grid = make_grid(cells={(0, 0, 0): EMPTY_CELL, (1, 0, 0): 4})
    assert grid.cells == {(1, 0, 0): 4}


def test_bounds_are_inclusive():
    bounds = FieldBounds(min_corner=(0, -1, 0), max_corner=(2, 1, 2))
    grid = make_grid(bounds=bounds)

    assert grid.contains((0, -1, 0))
    assert grid.contains((2, 1, 2))
    assert not grid.contains((3, 0, 0))
    assert not grid.contains((0, -2, 0))
    assert make_grid().contains((100, 100, 100))

    with pytest.raises(ValueError):
        FieldBounds(min_corner=(2, 0, 0), max_corner=(0, 0, 0))


def test_block_type_len_must_be_positive():
    with pytest.raises(ValueError):
        FieldGrid(block_type_len=0, slope_index=0)
