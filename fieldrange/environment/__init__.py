"""Battlefield grid containers, schemas and helpers."""

from .grid import DOWN, EMPTY_CELL, UP, Coord, FieldBounds, FieldGrid, offset
from .schemas import (
    FieldBoundsState,
    FieldGridState,
    FieldUnitState,
    HighlightTag,
    RangeHighlights,
    UnitType,
)
from .helpers import (
    flat_floor,
    grid_from_state,
    grid_to_state,
    render_layer,
    unit_from_state,
    unit_to_state,
)

__all__ = [
    "Coord",
    "DOWN",
    "EMPTY_CELL",
    "UP",
    "offset",
    "FieldBounds",
    "FieldGrid",
    "FieldBoundsState",
    "FieldGridState",
    "FieldUnitState",
    "HighlightTag",
    "RangeHighlights",
    "UnitType",
    "flat_floor",
    "grid_from_state",
    "grid_to_state",
    "render_layer",
    "unit_from_state",
    "unit_to_state",
]
