"""
Level loading for JSON-defined battlefields.

This module provides FieldLoader for converting JSON level files into a ready
Battlefield: the voxel grid, its classification constants, optional bounds,
the units standing on it and the overlay offsets used for range highlights.

Level file structure:
```json
{
  "name": "Ridge",
  "description": "...",
  "grid": {
    "block_type_len": 4,
    "slope_index": 8,
    "bounds": {"min": [0, -1, 0], "max": [4, 3, 4]},
    "cells": {"0,-1,0": 0, "1,-1,0": 0}
  },
  "units": [
    {"unit_id": "alice", "position": [2, 0, 2], "unit_type": "player",
     "movement_range": 2, "attack_range": 1}
  ],
  "highlights": {"move": 1, "attack": 2, "heal": 3}
}
```

``cells`` may also be a list of ``{"coordinate": [x, y, z], "item": code}``
entries, or of ``{"x": .., "y": .., "z": .., "item": code}`` entries.
Grid constants fall back to Config when omitted.

Usage:
    loader = FieldLoader()
    field = loader.load("ridge")
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .battlefield import Battlefield
from .config import Config
from .environment import (
    FieldBoundsState,
    FieldGridState,
    FieldUnitState,
    HighlightTag,
    grid_from_state,
    unit_from_state,
)
from .logging_utils import TAG_INFO, log_info


class FieldLoader:
    """Load and validate battlefields from JSON level files.

    Directory structure:
    - Default: Config.LEVELS_DIR ({PROJECT_ROOT}/examples/levels unless overridden)
    - Override via constructor: FieldLoader(Path("/custom/levels"))
    - Level files: {level_name}.json (e.g., "ridge.json")

    Validation:
    - Required fields: name, grid, units
    - Every cell must carry a full (x, y, z) coordinate and an integer item
    - Raises ValueError if validation fails
    """

    def __init__(self, levels_dir: Optional[Path] = None, *, verbose: bool = False):
        """Initialize level loader.

        Args:
            levels_dir: Directory containing level files.
                        Defaults to Config.LEVELS_DIR
            verbose: Print a summary line for each loaded level.
        """
        self.levels_dir = Path(levels_dir) if levels_dir is not None else Config.LEVELS_DIR
        self.verbose = verbose

    def load(self, level_name: str) -> Battlefield:
        """Load a level by name from its JSON file.

        Args:
            level_name: Name of level (without .json extension)

        Returns:
            Battlefield with grid and units populated

        Raises:
            FileNotFoundError: If level file doesn't exist in levels_dir
            ValueError: If level JSON missing required fields or malformed
            json.JSONDecodeError: If file contains invalid JSON
        """
        level_path = self.levels_dir / f"{level_name}.json"

        if not level_path.exists():
            raise FileNotFoundError(f"Level '{level_name}' not found at {level_path}")

        data = json.loads(level_path.read_text())
        field = self.build(data)

        if self.verbose:
            log_info(
                f"{TAG_INFO} Loaded level '{data['name']}': "
                f"{len(field.grid.cells)} cells, {len(field.units)} units"
            )
        return field

    def build(self, data: Dict[str, Any]) -> Battlefield:
        """Build a Battlefield from already-parsed level data."""
        self._validate_level(data)

        grid_state = self._parse_grid(data["grid"])
        units = [self._parse_unit(entry) for entry in data["units"]]
        offsets = self._parse_highlights(data.get("highlights", {}))

        field = Battlefield(
            grid_from_state(grid_state),
            highlight_offsets=offsets,
            verbose=self.verbose,
        )
        field.add_units(unit_from_state(unit) for unit in units)
        return field

    def _validate_level(self, data: Dict) -> None:
        """Validate level data has required fields.

        Raises:
            ValueError: If required fields are missing
        """
        required = ["name", "grid", "units"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Level missing required fields: {missing}")

        if not isinstance(data["grid"], dict):
            raise ValueError("Level 'grid' must be an object")

        if not isinstance(data["units"], list):
            raise ValueError("Level 'units' must be a list")

        for unit in data["units"]:
            if not isinstance(unit, dict) or "unit_id" not in unit or "position" not in unit:
                raise ValueError("Each unit entry must include 'unit_id' and 'position'")

    def _parse_coord(self, raw: Any) -> Tuple[int, int, int]:
        # Accepts "x,y,z" strings, [x, y, z] lists and {"x":..,"y":..,"z":..} dicts
        if isinstance(raw, str):
            parts = raw.split(",")
        elif isinstance(raw, (list, tuple)):
            parts = list(raw)
        elif isinstance(raw, dict) and all(axis in raw for axis in ("x", "y", "z")):
            parts = [raw["x"], raw["y"], raw["z"]]
        else:
            raise ValueError(f"Cannot parse coordinate from {raw!r}")

        if len(parts) != 3:
            raise ValueError(f"Coordinate must have 3 components, got {raw!r}")
        return int(parts[0]), int(parts[1]), int(parts[2])

    def _parse_grid(self, data: Dict[str, Any]) -> FieldGridState:
        cells: Dict[Tuple[int, int, int], int] = {}
        raw_cells = data.get("cells", {})

        if isinstance(raw_cells, dict):
            for key, item in raw_cells.items():
                cells[self._parse_coord(key)] = int(item)
        elif isinstance(raw_cells, list):
            for entry in raw_cells:
                if not isinstance(entry, dict) or "item" not in entry:
                    raise ValueError(f"Cell entry must include 'item': {entry!r}")
                raw_coord = entry["coordinate"] if "coordinate" in entry else entry
                cells[self._parse_coord(raw_coord)] = int(entry["item"])
        else:
            raise ValueError("Grid 'cells' must be an object or a list")

        bounds = None
        if data.get("bounds") is not None:
            raw_bounds = data["bounds"]
            bounds = FieldBoundsState(
                min=self._parse_coord(raw_bounds["min"]),
                max=self._parse_coord(raw_bounds["max"]),
            )

        return FieldGridState(
            block_type_len=int(data.get("block_type_len", Config.BLOCK_TYPE_LEN)),
            slope_index=int(data.get("slope_index", Config.SLOPE_INDEX)),
            cells=cells,
            bounds=bounds,
        )

    def _parse_unit(self, data: Dict[str, Any]) -> FieldUnitState:
        payload = dict(data)
        payload["position"] = self._parse_coord(data["position"])
        return FieldUnitState(**payload)

    def _parse_highlights(self, data: Dict[str, Any]) -> Dict[HighlightTag, int]:
        return {HighlightTag(key): int(value) for key, value in data.items()}

    def list_levels(self) -> List[str]:
        """List all available level files.

        Returns:
            List of level names (without .json extension)
        """
        if not self.levels_dir.exists():
            return []

        return sorted(
            f.stem for f in self.levels_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_level_info(self, level_name: str) -> Dict[str, Any]:
        """Get level metadata without building the battlefield."""
        level_path = self.levels_dir / f"{level_name}.json"
        data = json.loads(level_path.read_text())

        return {
            "name": data.get("name", level_name),
            "description": data.get("description", "No description"),
            "num_units": len(data.get("units", [])),
            "num_cells": len(data.get("grid", {}).get("cells", {})),
        }


def load_level(level_name: str) -> Battlefield:
    """Convenience function to load a level from Config.LEVELS_DIR."""
    loader = FieldLoader()
    return loader.load(level_name)
