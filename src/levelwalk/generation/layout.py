from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, FrozenSet, List, Tuple

from .walls import derive_walls
from ..geometry import Coordinate, as_coordinate

FLOOR_CHAR = "."
WALL_CHAR = "#"
START_CHAR = "@"
EMPTY_CHAR = " "


@dataclass(frozen=True)
class LevelLayout:
    """Final floor and wall cells of a generated level plus its start cell.

    This is what gets handed to renderers and spawners. Coordinates are on
    the unbounded lattice and may be negative.
    """

    floor: FrozenSet[Coordinate]
    walls: FrozenSet[Coordinate]
    start: Coordinate

    @classmethod
    def from_floor(cls, floor: AbstractSet[Tuple[int, int]], start: Tuple[int, int]) -> "LevelLayout":
        cells = frozenset(Coordinate(x, y) for x, y in floor)
        return cls(floor=cells, walls=derive_walls(cells), start=as_coordinate(start))

    def bounds(self) -> Tuple[Coordinate, Coordinate]:
        """Inclusive (min, max) corners of the box holding every floor and wall cell."""
        cells = self.floor | self.walls
        if not cells:
            return self.start, self.start
        xs = [c.x for c in cells]
        ys = [c.y for c in cells]
        return Coordinate(min(xs), min(ys)), Coordinate(max(xs), max(ys))

    @property
    def width(self) -> int:
        lo, hi = self.bounds()
        return hi.x - lo.x + 1

    @property
    def height(self) -> int:
        lo, hi = self.bounds()
        return hi.y - lo.y + 1

    def rows(self) -> List[str]:
        """ASCII rows, top row first. y grows up, so the first row is the largest y."""
        lo, hi = self.bounds()
        out: List[str] = []
        for y in range(hi.y, lo.y - 1, -1):
            chars = []
            for x in range(lo.x, hi.x + 1):
                cell = (x, y)
                if cell == self.start:
                    chars.append(START_CHAR)
                elif cell in self.floor:
                    chars.append(FLOOR_CHAR)
                elif cell in self.walls:
                    chars.append(WALL_CHAR)
                else:
                    chars.append(EMPTY_CHAR)
            out.append("".join(chars).rstrip())
        return out

    def render(self) -> str:
        return "\n".join(self.rows())

    def signature(self) -> str:
        """Deterministic signature of layout content (floor, walls, start)."""
        payload = {
            "floor": sorted(self.floor),
            "walls": sorted(self.walls),
            "start": tuple(self.start),
        }
        h = hashlib.blake2b(str(payload).encode("utf-8"), digest_size=16)
        return h.hexdigest()

    def to_dict(self) -> Dict[str, Any]:
        lo, hi = self.bounds()
        return {
            "start": [self.start.x, self.start.y],
            "bounds": {"min": [lo.x, lo.y], "max": [hi.x, hi.y]},
            "floor_tiles": len(self.floor),
            "wall_tiles": len(self.walls),
            "floor": [[c.x, c.y] for c in sorted(self.floor)],
            "walls": [[c.x, c.y] for c in sorted(self.walls)],
            "signature": self.signature(),
        }

    def __str__(self) -> str:
        return self.render()


__all__ = ["LevelLayout", "FLOOR_CHAR", "WALL_CHAR", "START_CHAR", "EMPTY_CHAR"]
