from __future__ import annotations

from typing import Callable, FrozenSet, Protocol, Union

from .geometry import Coordinate


class TileRenderer(Protocol):
    """Paints a finished level onto whatever visual grid the caller maintains.

    The generator never calls a rendering API itself; it hands the final
    cell sets to an object following this protocol, once per successful
    generation and never for a discarded attempt.
    """

    def paint(self, floor: FrozenSet[Coordinate], walls: FrozenSet[Coordinate]) -> None:
        """Draw floor and wall cells.

        Args:
            floor: Walkable cells.
            walls: Boundary cells around the floor; disjoint from ``floor``.
        """


class PlacementConsumer(Protocol):
    """Anything that needs the spatial data of a level, e.g. an enemy or collectible spawner."""

    def place(self, floor: FrozenSet[Coordinate], start: Coordinate) -> None:
        """Receive the floor cells and the player start cell."""


PlacementCallback = Callable[[FrozenSet[Coordinate], Coordinate], None]
Placement = Union[PlacementConsumer, PlacementCallback]


def get_placement_callback(consumer: object) -> PlacementCallback:
    """Adapt a consumer to a plain ``(floor, start)`` callable.

    Supports two styles:
    - An object with a ``place(floor, start)`` method
    - A bare callable taking ``(floor, start)``

    Raises:
        TypeError: If the object offers neither.
    """
    place = getattr(consumer, "place", None)
    if callable(place):
        return place  # type: ignore[return-value]
    if callable(consumer):
        return consumer  # type: ignore[return-value]
    raise TypeError(f"{consumer!r} is not a placement consumer (needs place(floor, start))")


def is_renderer(obj: object) -> bool:
    return callable(getattr(obj, "paint", None))


__all__ = [
    "TileRenderer",
    "PlacementConsumer",
    "PlacementCallback",
    "Placement",
    "get_placement_callback",
    "is_renderer",
]
