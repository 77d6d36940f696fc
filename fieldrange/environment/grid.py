"""Sparse voxel battlefield grid.

Cells are addressed by integer ``(x, y, z)`` coordinates with ``y`` pointing up.
Each stored cell holds an integer code; unset coordinates read as
``EMPTY_CELL``. Codes are grouped in runs of ``block_type_len``: the first code
of a run is the *base type* (what the terrain is), the remainder is the
*variant offset* used by the overlay to tint a block without changing what it
is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

Coord = Tuple[int, int, int]

# Same value the Godot GridMap uses for INVALID_CELL_ITEM
EMPTY_CELL = -1

DOWN: Coord = (0, -1, 0)
UP: Coord = (0, 1, 0)


def offset(coord: Coord, delta: Coord) -> Coord:
    """Return ``coord`` shifted by ``delta``."""
    return (coord[0] + delta[0], coord[1] + delta[1], coord[2] + delta[2])


@dataclass(frozen=True)
class FieldBounds:
    """Inclusive box limiting where traversal may go."""

    min_corner: Coord
    max_corner: Coord

    def __post_init__(self) -> None:
        if any(lo > hi for lo, hi in zip(self.min_corner, self.max_corner)):
            raise ValueError(
                f"Bounds min corner {self.min_corner} exceeds max corner {self.max_corner}"
            )

    def contains(self, coord: Coord) -> bool:
        return all(lo <= c <= hi for lo, c, hi in zip(self.min_corner, coord, self.max_corner))


@dataclass
class FieldGrid:
    """Mapping from cell coordinate to cell code.

    The range finder only reads from the grid. The overlay helpers
    (``set_overlay_block``) are the only writers during play, and they never
    change a cell's base type.
    """

    block_type_len: int
    slope_index: int
    cells: Dict[Coord, int] = field(default_factory=dict)
    bounds: Optional[FieldBounds] = None

    def __post_init__(self) -> None:
        if self.block_type_len < 1:
            raise ValueError(f"block_type_len must be at least 1 (got {self.block_type_len})")
        # Normalise keys so lists from JSON or numpy ints don't leak into lookups
        self.cells = {
            (int(x), int(y), int(z)): int(value)
            for (x, y, z), value in self.cells.items()
            if int(value) != EMPTY_CELL
        }

    # -- contract consumed by the range finder ---------------------------------

    def get_cell(self, coord: Coord) -> int:
        return self.cells.get(coord, EMPTY_CELL)

    def base_type_len(self) -> int:
        return self.block_type_len

    def slope_marker(self) -> int:
        return self.slope_index

    # -- classification --------------------------------------------------------

    def base_type(self, value: int) -> int:
        """Movement-relevant category of a cell code.

        The empty sentinel has no base type and is returned unchanged, so an
        empty cell can never be mistaken for a slope.
        """
        if value == EMPTY_CELL:
            return EMPTY_CELL
        return value - value % self.block_type_len

    def variant_offset(self, value: int) -> int:
        if value == EMPTY_CELL:
            return 0
        return value % self.block_type_len

    def is_empty(self, coord: Coord) -> bool:
        return self.get_cell(coord) == EMPTY_CELL

    def is_slope(self, coord: Coord) -> bool:
        return self.base_type(self.get_cell(coord)) == self.slope_index

    def contains(self, coord: Coord) -> bool:
        """True when ``coord`` lies inside the configured bounds (or no bounds are set)."""
        if self.bounds is None:
            return True
        return self.bounds.contains(coord)

    def lowest_level(self) -> Optional[int]:
        """Lowest ``y`` holding any block, or None for an empty grid.

        Nothing can support a unit below this level, which makes it the floor
        for falling units.
        """
        if not self.cells:
            return None
        return min(y for _, y, _ in self.cells)

    # -- editing ---------------------------------------------------------------

    def set_cell(self, coord: Coord, value: int) -> None:
        if value == EMPTY_CELL:
            self.cells.pop(coord, None)
        else:
            self.cells[coord] = value

    def clear_cell(self, coord: Coord) -> None:
        self.cells.pop(coord, None)

    def fill(self, coords: Iterable[Coord], value: int) -> None:
        for coord in coords:
            self.set_cell(coord, value)

    def set_overlay_block(self, coord: Coord, highlight_offset: int) -> bool:
        """Repaint the variant offset of a block, keeping its base type.

        Returns False (and changes nothing) when the cell is empty.
        """
        if not 0 <= highlight_offset < self.block_type_len:
            raise ValueError(
                f"Highlight offset {highlight_offset} outside [0, {self.block_type_len})"
            )
        value = self.get_cell(coord)
        if value == EMPTY_CELL:
            return False
        self.cells[coord] = self.base_type(value) + highlight_offset
        return True
