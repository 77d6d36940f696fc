"""Pydantic schemas for battlefield state.

These models mirror the lightweight dataclasses in ``grid.py`` and
``units.py`` but ensure level data and range query results remain
serializable. Conversion helpers live next to each model so loaders and
hosts never have to touch the runtime containers' internals.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Set, Tuple

from pydantic import BaseModel, Field, field_validator

CoordState = Tuple[int, int, int]


class HighlightTag(str, Enum):
    """Range category a highlight set belongs to."""

    HEAL = "heal"
    ATTACK = "attack"
    MOVE = "move"


class UnitType(str, Enum):
    """Side a field unit fights for."""

    PLAYER = "player"
    ALLY = "ally"
    ENEMY = "enemy"


class FieldBoundsState(BaseModel):
    """Inclusive traversal box (both corners are part of the field)."""

    min: CoordState = Field(..., description="Lowest (x, y, z) corner")
    max: CoordState = Field(..., description="Highest (x, y, z) corner")


class FieldGridState(BaseModel):
    """Sparse representation of a voxel battlefield."""

    block_type_len: int = Field(..., ge=1, description="Codes per base type (base + overlay variants)")
    slope_index: int = Field(..., description="Base type marking a climbable slope block")
    cells: Dict[CoordState, int] = Field(
        default_factory=dict,
        description="Sparse map: (x, y, z) → cell code",
    )
    bounds: Optional[FieldBoundsState] = Field(
        None, description="Optional traversal box; None lets traversal go anywhere",
    )


class FieldUnitState(BaseModel):
    """A unit standing on the battlefield and its range budgets."""

    unit_id: str
    position: CoordState = Field(..., description="Air cell the unit occupies")
    unit_type: UnitType = UnitType.ENEMY
    movement_range: int = Field(1, ge=0)
    attack_range: int = Field(1, ge=0)
    heal_range: int = Field(0, ge=0)
    metadata: Dict[str, str] = Field(default_factory=dict)


class RangeHighlights(BaseModel):
    """Floor cells to paint for one range category."""

    tag: HighlightTag
    cells: Set[CoordState] = Field(default_factory=set)

    @field_validator("cells", mode="before")
    @classmethod
    def _coerce_cells(cls, value):
        # JSON round trips hand back lists of lists
        if isinstance(value, (list, tuple, set, frozenset)):
            return {tuple(cell) for cell in value}
        return value

    def __contains__(self, coord: object) -> bool:
        return coord in self.cells

    def __len__(self) -> int:
        return len(self.cells)
