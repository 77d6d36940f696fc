"""Tests for range tree construction over voxel grids."""

import pytest

from fieldrange import (
    FieldBounds,
    FieldGrid,
    FieldUnit,
    HighlightTag,
    RangeFinder,
    RangeQueryError,
    flat_floor,
    flatten_tree,
)

BLOCK_TYPE_LEN = 4
SLOPE = 8
STONE = 4


def open_floor(width: int = 5, depth: int = 5) -> FieldGrid:
    return flat_floor(width, depth, block_type_len=BLOCK_TYPE_LEN, slope_index=SLOPE, floor_item=STONE)


def manhattan_disc(center, radius):
    cx, cy, cz = center
    return {
        (cx + dx, cy, cz + dz)
        for dx in range(-radius, radius + 1)
        for dz in range(-radius, radius + 1)
        if abs(dx) + abs(dz) <= radius
    }


def test_zero_budget_is_single_leaf():
    finder = RangeFinder(open_floor())
    tree = finder.build_tree((2, 0, 2), 0)

    assert tree.value == (2, 0, 2)
    assert tree.children == []
    assert tree.node_count() == 1


def test_flat_floor_matches_manhattan_distance():
    grid = open_floor(9, 9)
    for prune in (True, False):
        finder = RangeFinder(grid, prune_revisits=prune)
        tree = finder.build_tree((4, 0, 4), 3)
        assert tree.coordinates() == manhattan_disc((4, 0, 4), 3)


def test_single_step_scenario_on_small_board():
    finder = RangeFinder(open_floor())
    tree = finder.build_tree((2, 0, 2), 1)

    # Children follow +x, -x, +z, -z
    assert [child.value for child in tree.children] == [(3, 0, 2), (1, 0, 2), (2, 0, 3), (2, 0, 1)]
    highlights = flatten_tree(tree, HighlightTag.MOVE)
    assert highlights.cells == {(1, -1, 2), (3, -1, 2), (2, -1, 1), (2, -1, 3)}


def test_slope_lifts_unit_one_level():
    grid = FieldGrid(
        block_type_len=BLOCK_TYPE_LEN,
        slope_index=SLOPE,
        cells={(0, -1, 0): STONE, (1, -1, 0): STONE, (1, 0, 0): SLOPE},
    )
    tree = RangeFinder(grid).build_tree((0, 0, 0), 1)

    assert [child.value for child in tree.children] == [(1, 1, 0)]


def test_slope_with_block_on_top_is_impassable():
    grid = FieldGrid(
        block_type_len=BLOCK_TYPE_LEN,
        slope_index=SLOPE,
        cells={(0, -1, 0): STONE, (1, 0, 0): SLOPE + 1, (1, 1, 0): STONE},
    )
    tree = RangeFinder(grid).build_tree((0, 0, 0), 1)

    assert tree.children == []


def test_unit_falls_to_first_block_below():
    grid = FieldGrid(
        block_type_len=BLOCK_TYPE_LEN,
        slope_index=SLOPE,
        cells={(0, -1, 0): STONE, (1, -2, 0): STONE},
    )
    tree = RangeFinder(grid).build_tree((0, 0, 0), 1)

    assert [child.value for child in tree.children] == [(1, -1, 0)]


def test_fall_limit_rejects_deep_drops():
    grid = FieldGrid(
        block_type_len=BLOCK_TYPE_LEN,
        slope_index=SLOPE,
        cells={(0, -1, 0): STONE, (1, -3, 0): STONE},
    )

    assert RangeFinder(grid, max_fall=1).build_tree((0, 0, 0), 1).children == []
    children = RangeFinder(grid, max_fall=2).build_tree((0, 0, 0), 1).children
    assert [child.value for child in children] == [(1, -2, 0)]


def test_walking_off_the_field_terminates():
    grid = FieldGrid(block_type_len=BLOCK_TYPE_LEN, slope_index=SLOPE, cells={(0, -1, 0): STONE})
    finder = RangeFinder(grid)

    assert finder.build_tree((0, 0, 0), 3).node_count() == 1
    assert finder.step((0, 0, 0), (1, 0, 0)) is None


def test_empty_grid_has_no_legal_steps():
    grid = FieldGrid(block_type_len=BLOCK_TYPE_LEN, slope_index=SLOPE)
    assert RangeFinder(grid).build_tree((0, 0, 0), 2).node_count() == 1


def test_walls_block_movement():
    grid = open_floor()
    grid.set_cell((3, 0, 2), STONE)
    tree = RangeFinder(grid).build_tree((2, 0, 2), 1)

    assert (3, 0, 2) not in tree.coordinates()
    assert len(tree.children) == 3


def test_bounds_clip_traversal():
    grid = open_floor(7, 7)
    grid.bounds = FieldBounds(min_corner=(0, -1, 0), max_corner=(2, 0, 2))
    tree = RangeFinder(grid).build_tree((1, 0, 1), 4)

    assert tree.coordinates() == {(x, 0, z) for x in range(3) for z in range(3)}


def test_blocked_cells_are_skipped_but_origin_is_not():
    finder = RangeFinder(open_floor())
    tree = finder.build_tree((2, 0, 2), 2, blocked={(3, 0, 2), (2, 0, 2)})

    coords = tree.coordinates()
    assert (3, 0, 2) not in coords
    # Only reachable through the blocked cell within two steps
    assert (4, 0, 2) not in coords
    assert (3, 0, 3) in coords
    assert (2, 0, 2) in coords


def test_tree_depth_never_exceeds_budget():
    finder = RangeFinder(open_floor(9, 9), prune_revisits=False)
    for budget in range(4):
        assert finder.build_tree((4, 0, 4), budget).depth() == budget


def test_pruning_keeps_flattened_set_and_shrinks_tree():
    grid = open_floor(9, 9)
    grid.set_cell((5, 0, 4), SLOPE)
    grid.set_cell((3, 0, 3), STONE)

    full = RangeFinder(grid, prune_revisits=False).build_tree((4, 0, 4), 4)
    pruned = RangeFinder(grid, prune_revisits=True).build_tree((4, 0, 4), 4)

    assert flatten_tree(full, HighlightTag.MOVE) == flatten_tree(pruned, HighlightTag.MOVE)
    assert pruned.node_count() <= full.node_count()
    assert full.node_count() < 4 ** 5


def test_unpruned_tree_revisits_origin():
    tree = RangeFinder(open_floor(), prune_revisits=False).build_tree((2, 0, 2), 2)

    # Four ways out, each with a step straight back home
    assert tree.node_count() == 1 + 4 + 16
    assert (2, -1, 2) in flatten_tree(tree, HighlightTag.MOVE)


def test_invalid_budgets_raise():
    finder = RangeFinder(open_floor(), max_range=3)

    with pytest.raises(RangeQueryError):
        finder.build_tree((2, 0, 2), -1)
    with pytest.raises(ValueError):
        finder.build_tree((2, 0, 2), 4)


def test_unit_ranges_use_combined_budgets():
    grid = open_floor(9, 9)
    unit = FieldUnit("alice", (4, 0, 4), movement_range=1, attack_range=2, heal_range=1)
    ranges = RangeFinder(grid).unit_ranges(unit, blocked={(5, 0, 4)})

    assert ranges.reachable.coordinates() == manhattan_disc((4, 0, 4), 1) - {(5, 0, 4)}
    assert ranges.attackable.coordinates() == manhattan_disc((4, 0, 4), 3)
    assert ranges.healable.coordinates() == manhattan_disc((4, 0, 4), 2)

    highlights = ranges.highlights()
    assert list(highlights) == [HighlightTag.HEAL, HighlightTag.ATTACK, HighlightTag.MOVE]
    assert highlights[HighlightTag.MOVE].tag is HighlightTag.MOVE


def test_unit_builds_trees_from_a_bare_grid():
    unit = FieldUnit("bob", (2, 0, 2), movement_range=2)
    tree = unit.get_range_tree(open_floor(), unit.movement_range)

    assert tree.value == (2, 0, 2)
    assert tree.depth() == 2
    assert unit.get_ranges(open_floor()).reachable.coordinates() == tree.coordinates()


def test_negative_unit_ranges_are_rejected():
    with pytest.raises(ValueError):
        FieldUnit("carl", (0, 0, 0), movement_range=-1)
