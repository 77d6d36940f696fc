"""Range trees and their flattening into highlight sets.

A range tree records every legal step sequence a range query explored: the
root is the querying unit's cell, and each child is one step further. Trees
are built fresh per query and thrown away once flattened, so they are plain
dataclasses rather than serializable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from .environment.grid import DOWN, Coord, offset
from .environment.schemas import HighlightTag, RangeHighlights


@dataclass
class RangeTree:
    """Tree of coordinates; each child is reachable from its parent in one step."""

    value: Coord
    children: List["RangeTree"] = field(default_factory=list)

    def iter_nodes(self) -> Iterator["RangeTree"]:
        """Yield every node depth-first, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            # Reversed so siblings come out in insertion order
            stack.extend(reversed(node.children))

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        """Number of steps along the longest root-to-leaf path (0 for a leaf)."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def coordinates(self) -> Set[Coord]:
        return {node.value for node in self.iter_nodes()}

    def find_path(self, coord: Coord) -> Optional[List[int]]:
        """Child-index path to the first node holding ``coord``.

        Search is depth-first in child order. Returns ``[]`` when the root
        itself holds ``coord`` and None when no node does.
        """
        if self.value == coord:
            return []
        for index, child in enumerate(self.children):
            sub_path = child.find_path(coord)
            if sub_path is not None:
                return [index] + sub_path
        return None

    def route_to(self, coord: Coord) -> Optional[List[Coord]]:
        """Coordinates visited from the root to the node found by ``find_path``."""
        path = self.find_path(coord)
        if path is None:
            return None
        node = self
        route = [node.value]
        for index in path:
            node = node.children[index]
            route.append(node.value)
        return route


def flatten_tree(
    tree: RangeTree,
    tag: HighlightTag,
    *,
    include_root: bool = False,
) -> RangeHighlights:
    """Collect the floor cells to highlight for ``tree``.

    Range trees hold the air cells a unit would stand in, so every coordinate
    is shifted one level down onto the block beneath it. The root node (the
    unit's own cell) is skipped unless ``include_root`` is set; the same
    coordinate still shows up if some path leads back to it.
    """
    cells: Set[Coord] = set()
    nodes = tree.iter_nodes()
    if not include_root:
        next(nodes)
    for node in nodes:
        cells.add(offset(node.value, DOWN))
    return RangeHighlights(tag=tag, cells=cells)
