"""
Skirmish: Ranges on the Ridge
=============================

WHAT THIS SHOWS:
- Loading a level from JSON (grid, bounds, units, highlight offsets)
- Selecting a unit and painting its heal / attack / move ranges
- A ramp lifting a unit onto a plateau, and falling back off the edge
- Moving the selected unit and clearing the overlay

RUN:
    python -m examples.skirmish.run
    python -m examples.skirmish.run --unit medic --layer -1
"""

import argparse
from pathlib import Path

from fieldrange import Config, FieldLoader, HighlightTag, render_layer

LEVELS_DIR = Path(__file__).resolve().parent.parent / "levels"


def main():
    parser = argparse.ArgumentParser(description="Show unit ranges on the ridge level")
    parser.add_argument("--unit", default="scout", help="Unit to select")
    parser.add_argument("--layer", type=int, default=-1, help="Grid layer (y) to draw")
    parser.add_argument("--move-to", nargs=3, type=int, metavar=("X", "Y", "Z"),
                        help="Floor block to move the unit onto after showing ranges")
    args = parser.parse_args()

    Config.validate()
    field = FieldLoader(LEVELS_DIR, verbose=True).load("ridge")
    unit = field.get_unit(args.unit)
    units = [u.position for u in field.units.values()]

    # ========================================================================
    # Select: paints heal, then attack, then move on top
    # ========================================================================
    field.select_unit_at((unit.position[0], unit.position[1] - 1, unit.position[2]))
    highlights = field.compute_ranges(unit.unit_id).highlights()

    for tag in HighlightTag:
        print(f"{tag.value:>6}: {len(highlights[tag])} cells")

    # Plateau blocks sit one layer above the floor
    for layer in sorted({args.layer, args.layer + 1}):
        print(f"\nLayer y={layer}")
        print(render_layer(field.grid, layer, highlights=highlights.values(), units=units))

    # ========================================================================
    # Move (optional): only lands if the target is inside the move range
    # ========================================================================
    if args.move_to:
        moved = field.move_focused_unit(tuple(args.move_to))
        print(f"\nMoved: {moved}; {unit.unit_id} now at {unit.position}")
    else:
        field.deselect()


if __name__ == "__main__":
    main()
