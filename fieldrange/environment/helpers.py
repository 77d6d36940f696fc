"""Utilities for converting and inspecting battlefield grids."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from .grid import EMPTY_CELL, Coord, FieldBounds, FieldGrid
from .schemas import FieldBoundsState, FieldGridState, FieldUnitState, HighlightTag, RangeHighlights


def grid_from_state(state: FieldGridState) -> FieldGrid:
    """Build a runtime FieldGrid from its serializable state."""
    bounds = None
    if state.bounds is not None:
        bounds = FieldBounds(min_corner=tuple(state.bounds.min), max_corner=tuple(state.bounds.max))
    return FieldGrid(
        block_type_len=state.block_type_len,
        slope_index=state.slope_index,
        cells=dict(state.cells),
        bounds=bounds,
    )


def grid_to_state(grid: FieldGrid) -> FieldGridState:
    """Snapshot a FieldGrid into its serializable state."""
    bounds = None
    if grid.bounds is not None:
        bounds = FieldBoundsState(min=grid.bounds.min_corner, max=grid.bounds.max_corner)
    return FieldGridState(
        block_type_len=grid.block_type_len,
        slope_index=grid.slope_index,
        cells=dict(grid.cells),
        bounds=bounds,
    )


def unit_from_state(state: FieldUnitState):
    from ..units import FieldUnit

    return FieldUnit(
        unit_id=state.unit_id,
        position=tuple(state.position),
        unit_type=state.unit_type,
        movement_range=state.movement_range,
        attack_range=state.attack_range,
        heal_range=state.heal_range,
        metadata=dict(state.metadata),
    )


def unit_to_state(unit) -> FieldUnitState:
    return FieldUnitState(
        unit_id=unit.unit_id,
        position=unit.position,
        unit_type=unit.unit_type,
        movement_range=unit.movement_range,
        attack_range=unit.attack_range,
        heal_range=unit.heal_range,
        metadata=dict(unit.metadata),
    )


def flat_floor(
    width: int,
    depth: int,
    *,
    block_type_len: int,
    slope_index: int,
    floor_item: int = 0,
    floor_y: int = -1,
    bounded: bool = False,
) -> FieldGrid:
    """Grid with one solid layer of ``floor_item`` spanning ``width`` x ``depth`` cells.

    Units stand on ``floor_y + 1``. With ``bounded`` set, traversal is limited
    to the air layer directly above the floor and the floor itself.
    """
    cells = {(x, floor_y, z): floor_item for x in range(width) for z in range(depth)}
    bounds = None
    if bounded:
        bounds = FieldBounds(min_corner=(0, floor_y, 0), max_corner=(width - 1, floor_y + 1, depth - 1))
    return FieldGrid(block_type_len=block_type_len, slope_index=slope_index, cells=cells, bounds=bounds)


_DEFAULT_SYMBOLS: Dict[str, str] = {
    "empty": "  ",
    "block": "##",
    "slope": "/\\",
    "unit": "@@",
    HighlightTag.MOVE.value: "mm",
    HighlightTag.ATTACK.value: "aa",
    HighlightTag.HEAL.value: "hh",
}


def render_layer(
    grid: FieldGrid,
    y: int,
    *,
    highlights: Optional[Iterable[RangeHighlights]] = None,
    units: Optional[Iterable[Coord]] = None,
    symbols: Optional[Mapping[str, str]] = None,
) -> str:
    """Render one horizontal slice of ``grid`` as text.

    Rows run along z, columns along x, covering every stored cell of the
    layer (or the bounds, when set). Highlight sets are applied in order so
    later ones win on shared cells, matching how the overlay paints them.
    Units are given as the air cells they stand in and are drawn on the
    block beneath them.
    """
    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    marks: Dict[Coord, str] = {}
    for highlight in highlights or ():
        for cell in highlight.cells:
            marks[cell] = mapping[highlight.tag.value]
    for x, unit_y, z in units or ():
        marks[(x, unit_y - 1, z)] = mapping["unit"]

    if grid.bounds is not None:
        min_x, _, min_z = grid.bounds.min_corner
        max_x, _, max_z = grid.bounds.max_corner
    else:
        layer = [coord for coord in list(grid.cells) + list(marks) if coord[1] == y]
        if not layer:
            return ""
        min_x = min(x for x, _, _ in layer)
        max_x = max(x for x, _, _ in layer)
        min_z = min(z for _, _, z in layer)
        max_z = max(z for _, _, z in layer)

    lines: List[str] = []
    for z in range(min_z, max_z + 1):
        row: List[str] = []
        for x in range(min_x, max_x + 1):
            coord = (x, y, z)
            if coord in marks:
                row.append(marks[coord])
            elif grid.get_cell(coord) == EMPTY_CELL:
                row.append(mapping["empty"])
            elif grid.is_slope(coord):
                row.append(mapping["slope"])
            else:
                row.append(mapping["block"])
        lines.append("".join(row))

    return "\n".join(lines)
