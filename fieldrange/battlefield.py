"""Battlefield: a grid, the units standing on it, and the range overlay.

Battlefield keeps the bookkeeping a host needs around the range finder:

- Reverse index from cell to unit, so occupied cells can block movement
- Painting range highlights onto the grid as overlay variants
- Remembering which cells were painted so they can be cleared again
- A focused unit, chosen by clicking the floor block under it

Everything here is pure state. Deciding *when* to select, move or clear is left
to the host's input handling.

Usage:
    field = Battlefield(grid)
    field.add_unit(FieldUnit("alice", (2, 0, 2), movement_range=2))
    field.select_unit_at((2, -1, 2))      # focus + paint ranges
    field.move_focused_unit((3, -1, 2))   # move if reachable
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from .config import Config
from .environment.grid import UP, Coord, FieldGrid, offset
from .environment.schemas import HighlightTag, RangeHighlights
from .logging_utils import (
    TAG_QUERY,
    TAG_ERROR,
    TAG_STATE,
    TAG_SUCCESS,
    log_query,
    log_error,
    log_state,
    log_success,
)
from .range_finder import RangeFinder, RangeQueryError, UnitRanges
from .units import FieldUnit


class UnknownUnitError(KeyError):
    """Raised when a unit id is not on the battlefield."""


class Battlefield:
    """Grid plus units plus the overlay painted for the focused unit."""

    def __init__(
        self,
        grid: FieldGrid,
        *,
        finder: Optional[RangeFinder] = None,
        highlight_offsets: Optional[Dict[HighlightTag, int]] = None,
        occupancy_blocks: Optional[bool] = None,
        verbose: bool = False,
    ):
        """Initialize battlefield.

        Args:
            grid: Voxel grid the units stand on.
            finder: Range finder to use. Defaults to RangeFinder(grid).
            highlight_offsets: Overlay variant painted per range category.
                Defaults to Config.HIGHLIGHT_* values.
            occupancy_blocks: Whether other units block movement. Defaults to
                Config.OCCUPANCY_BLOCKS.
            verbose: Print a line for each query and state change.
        """
        self.grid = grid
        self.finder = finder or RangeFinder(grid)
        self.highlight_offsets: Dict[HighlightTag, int] = {
            HighlightTag.MOVE: Config.HIGHLIGHT_MOVE,
            HighlightTag.ATTACK: Config.HIGHLIGHT_ATTACK,
            HighlightTag.HEAL: Config.HIGHLIGHT_HEAL,
        }
        if highlight_offsets:
            self.highlight_offsets.update(highlight_offsets)
        for tag, highlight_offset in self.highlight_offsets.items():
            if not 0 <= highlight_offset < grid.block_type_len:
                raise ValueError(
                    f"{tag.value} highlight offset {highlight_offset} outside "
                    f"[0, {grid.block_type_len}) for this grid"
                )
        self.occupancy_blocks = Config.OCCUPANCY_BLOCKS if occupancy_blocks is None else occupancy_blocks
        self.verbose = verbose

        self.units: Dict[str, FieldUnit] = {}
        # Maps air cell -> unit_id standing in it
        self._unit_index: Dict[Coord, str] = {}
        self.focused_unit_id: Optional[str] = None
        self.highlighted_cells: List[Coord] = []

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def add_unit(self, unit: FieldUnit) -> FieldUnit:
        """Place ``unit`` on the field.

        Raises:
            ValueError: If the id is taken, the cell is occupied, or one of the
                unit's budgets exceeds the finder's max_range.
        """
        if unit.unit_id in self.units:
            raise ValueError(f"Unit '{unit.unit_id}' is already on the battlefield")
        occupant = self._unit_index.get(unit.position)
        if occupant is not None:
            raise ValueError(f"Cell {unit.position} is already occupied by '{occupant}'")
        largest = max(unit.movement_range, unit.attack_budget, unit.heal_budget)
        if largest > self.finder.max_range:
            raise RangeQueryError(
                f"Unit '{unit.unit_id}' needs a range budget of {largest}, "
                f"above the configured maximum of {self.finder.max_range}"
            )
        self.units[unit.unit_id] = unit
        self._unit_index[unit.position] = unit.unit_id
        return unit

    def add_units(self, units: Iterable[FieldUnit]) -> None:
        for unit in units:
            self.add_unit(unit)

    def get_unit(self, unit_id: str) -> FieldUnit:
        try:
            return self.units[unit_id]
        except KeyError:
            raise UnknownUnitError(f"Unit '{unit_id}' is not on the battlefield") from None

    def unit_at(self, coord: Coord) -> Optional[FieldUnit]:
        unit_id = self._unit_index.get(coord)
        return self.units.get(unit_id) if unit_id is not None else None

    def occupied_cells(self, *, exclude: Optional[str] = None) -> Set[Coord]:
        return {coord for coord, unit_id in self._unit_index.items() if unit_id != exclude}

    def reposition_unit(self, unit_id: str, new_pos: Coord) -> None:
        """Move a unit's index entry to ``new_pos``.

        Whatever unit was indexed at ``new_pos`` loses its index entry; callers
        are expected to check occupancy first.
        """
        unit = self.get_unit(unit_id)
        new_pos = (int(new_pos[0]), int(new_pos[1]), int(new_pos[2]))
        if self._unit_index.get(unit.position) == unit_id:
            del self._unit_index[unit.position]
        old_pos = unit.position
        unit.position = new_pos
        self._unit_index[new_pos] = unit_id
        if self.verbose:
            log_state(f"  {TAG_STATE} [{unit_id}] {old_pos} -> {new_pos}")

    # ------------------------------------------------------------------
    # Range queries and overlay
    # ------------------------------------------------------------------

    def compute_ranges(self, unit_id: str) -> UnitRanges:
        unit = self.get_unit(unit_id)
        blocked = self.occupied_cells(exclude=unit_id) if self.occupancy_blocks else ()
        ranges = self.finder.unit_ranges(unit, blocked=blocked)
        if self.verbose:
            log_query(
                f"  {TAG_QUERY} [{unit_id}] ranges from {unit.position}: "
                f"heal={unit.heal_budget} attack={unit.attack_budget} move={unit.movement_range}"
            )
        return ranges

    def show_unit_ranges(self, unit_id: str) -> Dict[HighlightTag, RangeHighlights]:
        """Paint heal, attack, then move highlights for ``unit_id``.

        Later categories overwrite earlier ones on shared cells, so the move
        range always shows on top.
        """
        highlights = self.compute_ranges(unit_id).highlights()
        for tag, highlight in highlights.items():
            self._paint(highlight.cells, self.highlight_offsets[tag])
        return highlights

    def clear_unit_ranges(self) -> None:
        """Reset every painted cell back to its plain variant."""
        for coord in self.highlighted_cells:
            self.grid.set_overlay_block(coord, 0)
        if self.verbose and self.highlighted_cells:
            log_state(f"  {TAG_STATE} Cleared {len(set(self.highlighted_cells))} highlighted cells")
        self.highlighted_cells.clear()

    def _paint(self, cells: Iterable[Coord], highlight_offset: int) -> None:
        for coord in cells:
            if self.grid.set_overlay_block(coord, highlight_offset):
                self.highlighted_cells.append(coord)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def focused_unit(self) -> Optional[FieldUnit]:
        if self.focused_unit_id is None:
            return None
        return self.units.get(self.focused_unit_id)

    def select_unit_at(self, floor_coord: Coord) -> Optional[FieldUnit]:
        """Focus the unit standing on ``floor_coord`` and paint its ranges.

        Does nothing while another unit is focused or when no unit stands on
        the block.
        """
        if self.focused_unit_id is not None:
            return None
        unit = self.unit_at(offset(floor_coord, UP))
        if unit is None:
            return None
        if unit.movement_range > 0 or unit.attack_range > 0 or unit.heal_range > 0:
            self.show_unit_ranges(unit.unit_id)
        # Focus only once the overlay is painted
        self.focused_unit_id = unit.unit_id
        return unit

    def deselect(self) -> None:
        self.focused_unit_id = None
        self.clear_unit_ranges()

    def move_focused_unit(self, floor_coord: Coord) -> bool:
        """Move the focused unit onto ``floor_coord`` if it lies in its move range.

        On success the overlay is cleared and the unit is unfocused. Returns
        False (leaving everything untouched) when no unit is focused or the
        block is out of reach.
        """
        unit = self.focused_unit
        if unit is None:
            return False
        target = offset(floor_coord, UP)
        reachable = self.compute_ranges(unit.unit_id).reachable
        # The unit's own cell is not a destination
        reachable_cells = {node.value for node in reachable.iter_nodes()} - {unit.position}
        if target not in reachable_cells:
            if self.verbose:
                log_error(f"  {TAG_ERROR} [{unit.unit_id}] {target} is out of move range")
            return False
        self.reposition_unit(unit.unit_id, target)
        self.deselect()
        if self.verbose:
            log_success(f"  {TAG_SUCCESS} [{unit.unit_id}] moved to {target}")
        return True

