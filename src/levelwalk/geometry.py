from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, NamedTuple, Tuple


class Coordinate(NamedTuple):
    """A cell on the unbounded integer lattice.

    Coordinates are (x, y) with x growing to the right and y growing up.
    Being a tuple, a Coordinate compares and hashes equal to the plain
    ``(x, y)`` pair, so callers may test membership with either.
    """

    x: int
    y: int

    def __add__(self, other: Tuple[int, int]) -> "Coordinate":  # type: ignore[override]
        return Coordinate(self.x + other[0], self.y + other[1])

    def neighbors8(self) -> Iterator["Coordinate"]:
        return neighbors8(self)


ORIGIN = Coordinate(0, 0)

UP = Coordinate(0, 1)
DOWN = Coordinate(0, -1)
LEFT = Coordinate(-1, 0)
RIGHT = Coordinate(1, 0)

# Order matters only for reproducing a seeded walk.
CARDINAL_DIRECTIONS: Tuple[Coordinate, ...] = (UP, DOWN, LEFT, RIGHT)
DIAGONAL_DIRECTIONS: Tuple[Coordinate, ...] = (
    Coordinate(1, 1),
    Coordinate(1, -1),
    Coordinate(-1, 1),
    Coordinate(-1, -1),
)
NEIGHBOR_DIRECTIONS: Tuple[Coordinate, ...] = CARDINAL_DIRECTIONS + DIAGONAL_DIRECTIONS


def neighbors8(cell: Tuple[int, int]) -> Iterator[Coordinate]:
    """Yield the 8 cells touching ``cell`` (4 cardinal, then 4 diagonal)."""
    x, y = cell
    for dx, dy in NEIGHBOR_DIRECTIONS:
        yield Coordinate(x + dx, y + dy)


def stamp_footprint(center: Tuple[int, int], size: int) -> Iterator[Coordinate]:
    """Yield the square of side ``2*size+1`` centred on ``center``.

    size=0 yields only the centre cell.
    """
    cx, cy = center
    for dx in range(-size, size + 1):
        for dy in range(-size, size + 1):
            yield Coordinate(cx + dx, cy + dy)


def stamp_area(size: int) -> int:
    return (2 * size + 1) ** 2


def as_coordinate(value: Any) -> Coordinate:
    """Coerce a pair-like value into a Coordinate.

    Accepts a Coordinate, a 2-item sequence, a mapping with ``x``/``y`` keys
    or a ``"x,y"`` string. Components must be integers (bools are rejected).

    Raises:
        ValueError: If the value cannot be read as an integer pair.
    """
    if isinstance(value, Coordinate):
        return value
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Expected 'x,y', got {value!r}")
        try:
            return Coordinate(int(parts[0]), int(parts[1]))
        except ValueError as exc:
            raise ValueError(f"Expected integer 'x,y', got {value!r}") from exc
    if isinstance(value, Mapping):
        if "x" not in value or "y" not in value:
            raise ValueError(f"Coordinate mapping needs 'x' and 'y' keys, got {dict(value)!r}")
        pair: Iterable[Any] = (value["x"], value["y"])
    else:
        try:
            pair = tuple(value)
        except TypeError as exc:
            raise ValueError(f"Cannot interpret {value!r} as a coordinate") from exc
    items = list(pair)
    if len(items) != 2:
        raise ValueError(f"Coordinate needs exactly two components, got {value!r}")
    for item in items:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"Coordinate components must be integers, got {value!r}")
    return Coordinate(items[0], items[1])


__all__ = [
    "Coordinate",
    "ORIGIN",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "CARDINAL_DIRECTIONS",
    "DIAGONAL_DIRECTIONS",
    "NEIGHBOR_DIRECTIONS",
    "neighbors8",
    "stamp_footprint",
    "stamp_area",
    "as_coordinate",
]
