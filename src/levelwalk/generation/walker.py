from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Set

from ..config import GenerationConfig
from ..geometry import CARDINAL_DIRECTIONS, Coordinate, stamp_footprint
from ..rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkStep:
    """Snapshot taken right after a stamp, before the walker moves on."""

    index: int
    position: Coordinate
    floor_size: int


class WalkGenerator:
    """Random-walk floor carver.

    Algorithm, repeated exactly ``walk_steps`` times from ``start_position``:
    - Stamp: mark the square of side ``2*stamp_size+1`` centred on the walker as floor.
    - Step: move one cell up, down, left or right, chosen uniformly at random.

    The walk never moves diagonally and the lattice is unbounded, so no
    clipping is applied. The random source is the only state carried between
    calls.
    """

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self.rng = rng if rng is not None else RandomSource()

    def walk(self, config: GenerationConfig) -> Set[Coordinate]:
        floor: Set[Coordinate] = set()
        last: Optional[WalkStep] = None
        for last in self.iter_walk(config, floor):
            pass
        if last is not None:
            logger.debug(
                "Walk finished: %d steps from %s, last stamp at %s, %d floor tiles",
                config.walk_steps,
                tuple(config.start_position),
                tuple(last.position),
                len(floor),
            )
        return floor

    def iter_walk(
        self, config: GenerationConfig, floor: Optional[Set[Coordinate]] = None
    ) -> Iterator[WalkStep]:
        """Run the walk lazily, filling ``floor`` in place.

        Yields one WalkStep per iteration so callers can observe growth.
        """
        if floor is None:
            floor = set()
        position = config.start_position
        for index in range(config.walk_steps):
            floor.update(stamp_footprint(position, config.stamp_size))
            yield WalkStep(index, position, len(floor))
            position = position + self.rng.choice(CARDINAL_DIRECTIONS)
