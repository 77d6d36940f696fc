"""
Fieldrange Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Library configuration loaded from environment variables."""

    # Cell classification
    # Cell codes are grouped in runs of BLOCK_TYPE_LEN: the first code of a run is
    # the base type, the rest are its overlay variants.
    BLOCK_TYPE_LEN: int = int(os.getenv("FIELD_BLOCK_TYPE_LEN", "4"))
    SLOPE_INDEX: int = int(os.getenv("FIELD_SLOPE_INDEX", "8"))

    # Range queries
    MAX_RANGE: int = int(os.getenv("FIELD_MAX_RANGE", "12"))
    # None means a unit may fall all the way down to the lowest stored level
    MAX_FALL: Optional[int] = _env_optional_int("FIELD_MAX_FALL")
    PRUNE_REVISITS: bool = _env_flag("FIELD_PRUNE_REVISITS", "true")
    OCCUPANCY_BLOCKS: bool = _env_flag("FIELD_OCCUPANCY_BLOCKS", "true")

    # Overlay variant offsets painted for each range category
    HIGHLIGHT_MOVE: int = int(os.getenv("FIELD_HIGHLIGHT_MOVE", "1"))
    HIGHLIGHT_ATTACK: int = int(os.getenv("FIELD_HIGHLIGHT_ATTACK", "2"))
    HIGHLIGHT_HEAL: int = int(os.getenv("FIELD_HIGHLIGHT_HEAL", "3"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LEVELS_DIR: Path = Path(os.getenv("FIELD_LEVELS_DIR", str(PROJECT_ROOT / "examples" / "levels")))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are inconsistent."""
        if cls.BLOCK_TYPE_LEN < 1:
            raise ValueError(
                f"FIELD_BLOCK_TYPE_LEN must be at least 1 (got {cls.BLOCK_TYPE_LEN})"
            )

        if cls.SLOPE_INDEX % cls.BLOCK_TYPE_LEN != 0:
            raise ValueError(
                "FIELD_SLOPE_INDEX must be a base type, i.e. a multiple of "
                f"FIELD_BLOCK_TYPE_LEN ({cls.SLOPE_INDEX} % {cls.BLOCK_TYPE_LEN} != 0)"
            )

        if cls.MAX_RANGE < 0:
            raise ValueError(f"FIELD_MAX_RANGE cannot be negative (got {cls.MAX_RANGE})")

        if cls.MAX_FALL is not None and cls.MAX_FALL < 0:
            raise ValueError(f"FIELD_MAX_FALL cannot be negative (got {cls.MAX_FALL})")

        for name in ("HIGHLIGHT_MOVE", "HIGHLIGHT_ATTACK", "HIGHLIGHT_HEAL"):
            offset = getattr(cls, name)
            if not 0 <= offset < cls.BLOCK_TYPE_LEN:
                raise ValueError(
                    f"FIELD_{name} must be a variant offset in [0, {cls.BLOCK_TYPE_LEN}) (got {offset})"
                )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Fieldrange Configuration:",
            f"  Block Type Length: {cls.BLOCK_TYPE_LEN}",
            f"  Slope Index: {cls.SLOPE_INDEX}",
            f"  Max Range: {cls.MAX_RANGE}",
            f"  Max Fall: {'unlimited' if cls.MAX_FALL is None else cls.MAX_FALL}",
            f"  Prune Revisits: {cls.PRUNE_REVISITS}",
            f"  Occupancy Blocks: {cls.OCCUPANCY_BLOCKS}",
            f"  Highlights: move={cls.HIGHLIGHT_MOVE} attack={cls.HIGHLIGHT_ATTACK} heal={cls.HIGHLIGHT_HEAL}",
            f"  Levels: {cls.LEVELS_DIR}",
        ]
        return "\n".join(lines)
