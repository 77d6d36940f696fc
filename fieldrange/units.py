"""Field units and the range queries they issue."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable

from .environment.grid import Coord, FieldGrid
from .environment.schemas import UnitType

if TYPE_CHECKING:  # pragma: no cover
    from .range_finder import RangeFinder, UnitRanges
    from .tree import RangeTree


@dataclass
class FieldUnit:
    """A unit standing in one air cell of the battlefield.

    ``position`` is the empty cell the unit occupies, one level above the
    block that supports it.
    """

    unit_id: str
    position: Coord
    unit_type: UnitType = UnitType.ENEMY
    movement_range: int = 1
    attack_range: int = 1
    heal_range: int = 0
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.position = (int(self.position[0]), int(self.position[1]), int(self.position[2]))
        for name in ("movement_range", "attack_range", "heal_range"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative for unit '{self.unit_id}'")

    @property
    def heal_budget(self) -> int:
        return self.movement_range + self.heal_range

    @property
    def attack_budget(self) -> int:
        return self.movement_range + self.attack_range

    def get_range_tree(self, finder: "RangeFinder | FieldGrid", budget: int) -> "RangeTree":
        """Range tree rooted at this unit's cell for ``budget`` steps."""
        return _as_finder(finder).build_tree(self.position, budget)

    def get_ranges(
        self,
        finder: "RangeFinder | FieldGrid",
        *,
        blocked: Iterable[Coord] = (),
    ) -> "UnitRanges":
        """Healable, attackable and reachable trees for this unit."""
        return _as_finder(finder).unit_ranges(self, blocked=blocked)


def _as_finder(finder: "RangeFinder | FieldGrid") -> "RangeFinder":
    from .range_finder import RangeFinder

    if isinstance(finder, FieldGrid):
        return RangeFinder(finder)
    return finder
