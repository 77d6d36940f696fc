"""Bounded flood fill over a voxel battlefield.

RangeFinder answers "where can this unit go within N steps?" by growing a
range tree outward from the unit's cell. A single step moves one cell along
x or z (never diagonally, never straight up or down), then applies the
terrain rules:

1. Stepping onto a slope block lifts the unit one level (the slope's facing
   is not checked, so ramps can be climbed from any side).
2. The unit then drops while the cell below it is empty, landing on the first
   block underneath.
3. The step is legal only if the landing cell itself is empty air, lies inside
   the grid bounds (when set) and is not blocked by another unit (when an
   occupancy set is passed).

Falling is bounded by the lowest level holding any block and, optionally,
by ``max_fall``: a column with nothing underneath is treated as a drop off
the field and the step is rejected instead of falling forever.

Usage:
    finder = RangeFinder(grid)
    tree = finder.build_tree(unit.position, unit.movement_range)
    highlights = flatten_tree(tree, HighlightTag.MOVE)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set

from .config import Config
from .environment.grid import DOWN, EMPTY_CELL, UP, Coord, FieldGrid, offset
from .environment.schemas import HighlightTag, RangeHighlights
from .tree import RangeTree, flatten_tree
from .units import FieldUnit

# +x, -x, +z, -z; y only changes through slopes and falls
DIRECTIONS: tuple[Coord, ...] = ((1, 0, 0), (-1, 0, 0), (0, 0, 1), (0, 0, -1))


class RangeQueryError(ValueError):
    """Raised when a range query asks for an invalid budget."""


@dataclass
class UnitRanges:
    """The three trees built for one unit."""

    healable: RangeTree
    attackable: RangeTree
    reachable: RangeTree

    def tree_for(self, tag: HighlightTag) -> RangeTree:
        return {
            HighlightTag.HEAL: self.healable,
            HighlightTag.ATTACK: self.attackable,
            HighlightTag.MOVE: self.reachable,
        }[tag]

    def highlights(self) -> Dict[HighlightTag, RangeHighlights]:
        """Flatten all three trees, in heal, attack, move paint order."""
        return {tag: flatten_tree(self.tree_for(tag), tag) for tag in HighlightTag}


class RangeFinder:
    """Builds range trees over a read-only FieldGrid."""

    def __init__(
        self,
        grid: FieldGrid,
        *,
        max_range: Optional[int] = None,
        max_fall: Optional[int] = None,
        prune_revisits: Optional[bool] = None,
    ):
        """Initialize range finder.

        Args:
            grid: Battlefield grid to read cells from.
            max_range: Largest budget accepted by build_tree. Defaults to
                Config.MAX_RANGE.
            max_fall: Deepest drop (in levels) a single step may include.
                Defaults to Config.MAX_FALL; None means any drop that still
                lands on a block.
            prune_revisits: Skip re-expanding a coordinate already expanded
                with at least the same remaining budget. Defaults to
                Config.PRUNE_REVISITS.
        """
        self.grid = grid
        self.max_range = Config.MAX_RANGE if max_range is None else max_range
        self.max_fall = Config.MAX_FALL if max_fall is None else max_fall
        self.prune_revisits = Config.PRUNE_REVISITS if prune_revisits is None else prune_revisits

    def build_tree(
        self,
        origin: Coord,
        budget: int,
        *,
        blocked: Iterable[Coord] = (),
    ) -> RangeTree:
        """Return the range tree rooted at ``origin`` for ``budget`` steps.

        Raises:
            RangeQueryError: If budget is negative or exceeds max_range.
        """
        if budget < 0:
            raise RangeQueryError(f"Range budget cannot be negative (got {budget})")
        if budget > self.max_range:
            raise RangeQueryError(
                f"Range budget {budget} exceeds the configured maximum of {self.max_range}"
            )

        origin = (int(origin[0]), int(origin[1]), int(origin[2]))
        blocked_cells: Set[Coord] = set(blocked)
        blocked_cells.discard(origin)
        best_remaining: Optional[Dict[Coord, int]] = {} if self.prune_revisits else None
        floor = self.grid.lowest_level()

        return self._expand(RangeTree(origin), budget, blocked_cells, best_remaining, floor)

    def unit_ranges(self, unit: FieldUnit, *, blocked: Iterable[Coord] = ()) -> UnitRanges:
        """Build the healable, attackable and reachable trees for ``unit``.

        Only the reachable tree honours ``blocked``: attacks and heals target
        the cells other units stand in.
        """
        return UnitRanges(
            healable=self.build_tree(unit.position, unit.heal_budget),
            attackable=self.build_tree(unit.position, unit.attack_budget),
            reachable=self.build_tree(unit.position, unit.movement_range, blocked=blocked),
        )

    def step(self, start: Coord, direction: Coord, *, blocked: Iterable[Coord] = ()) -> Optional[Coord]:
        """Resolve one step from ``start``; None when the step is illegal."""
        return self._step(start, direction, set(blocked), self.grid.lowest_level())

    def _expand(
        self,
        node: RangeTree,
        remaining: int,
        blocked: Set[Coord],
        best_remaining: Optional[Dict[Coord, int]],
        floor: Optional[int],
    ) -> RangeTree:
        if remaining == 0:
            return node

        if best_remaining is not None:
            # A coordinate expanded earlier with at least this budget already
            # produced every cell this subtree could reach
            if best_remaining.get(node.value, -1) >= remaining:
                return node
            best_remaining[node.value] = remaining

        for direction in DIRECTIONS:
            candidate = self._step(node.value, direction, blocked, floor)
            if candidate is None:
                continue
            child = self._expand(RangeTree(candidate), remaining - 1, blocked, best_remaining, floor)
            node.children.append(child)

        return node

    def _step(
        self,
        start: Coord,
        direction: Coord,
        blocked: Set[Coord],
        floor: Optional[int],
    ) -> Optional[Coord]:
        grid = self.grid
        candidate = offset(start, direction)

        if grid.base_type(grid.get_cell(candidate)) == grid.slope_marker():
            candidate = offset(candidate, UP)

        dropped = 0
        while grid.get_cell(offset(candidate, DOWN)) == EMPTY_CELL:
            # Nothing left underneath to land on
            if floor is None or candidate[1] - 1 <= floor:
                return None
            candidate = offset(candidate, DOWN)
            dropped += 1
            if self.max_fall is not None and dropped > self.max_fall:
                return None

        if grid.get_cell(candidate) != EMPTY_CELL:
            return None
        if not grid.contains(candidate):
            return None
        if candidate in blocked:
            return None
        return candidate
