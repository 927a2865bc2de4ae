from __future__ import annotations

from typing import AbstractSet, FrozenSet, Tuple

from ..geometry import Coordinate, neighbors8


def derive_walls(floor: AbstractSet[Tuple[int, int]]) -> FrozenSet[Coordinate]:
    """Return every cell touching the floor (8-neighbourhood) that is not floor itself.

    The result closes the floor off: each floor cell's 8 neighbours are
    either floor or wall. Cells two or more steps away are left empty.
    """
    walls = set()
    for cell in floor:
        for neighbor in neighbors8(cell):
            if neighbor not in floor:
                walls.add(neighbor)
    return frozenset(walls)


def is_closed(floor: AbstractSet[Tuple[int, int]], walls: AbstractSet[Tuple[int, int]]) -> bool:
    """True if floor and walls are disjoint and no floor cell touches an unset cell."""
    if not floor.isdisjoint(walls):
        return False
    return all(n in floor or n in walls for cell in floor for n in neighbors8(cell))
