"""
Fieldrange - movement, attack and heal ranges for voxel tactics battlefields.

Pure library: no engine, no rendering, no input handling.
Hosts feed in a grid and units, and get back range trees and highlight sets.
"""

__version__ = "0.1.0"

from .config import Config

# Grid containers and schemas
from .environment import (
    Coord,
    EMPTY_CELL,
    FieldBounds,
    FieldGrid,
    FieldBoundsState,
    FieldGridState,
    FieldUnitState,
    HighlightTag,
    RangeHighlights,
    UnitType,
    flat_floor,
    grid_from_state,
    grid_to_state,
    render_layer,
    unit_from_state,
    unit_to_state,
)

# Range computation
from .tree import RangeTree, flatten_tree
from .units import FieldUnit
from .range_finder import DIRECTIONS, RangeFinder, RangeQueryError, UnitRanges

# Field bookkeeping and level loading
from .battlefield import Battlefield, UnknownUnitError
from .level import FieldLoader, load_level

__all__ = [
    "Config",
    # Grid
    "Coord",
    "EMPTY_CELL",
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
    # Ranges
    "RangeTree",
    "flatten_tree",
    "FieldUnit",
    "DIRECTIONS",
    "RangeFinder",
    "RangeQueryError",
    "UnitRanges",
    # Field
    "Battlefield",
    "UnknownUnitError",
    "FieldLoader",
    "load_level",
]
