from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

Seed = Union[int, str]


def derive_seed(seed: Seed) -> int:
    """Fold an int or arbitrary string into a 32-bit integer seed.

    Strings are hashed with SHA256 so that e.g. ``"level-3"`` is stable
    across runs and Python versions (``hash()`` is salted per process).
    """
    if isinstance(seed, bool):
        raise TypeError("Seed must be an int or str, not bool")
    if isinstance(seed, int):
        return seed & 0xFFFFFFFF
    if isinstance(seed, str):
        digest = hashlib.sha256(seed.encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big", signed=False) & 0xFFFFFFFF
    raise TypeError(f"Unsupported seed type: {type(seed)!r}")


@dataclass
class RandomSource:
    """Private random stream for a generation run.

    Wraps its own random.Random so the global ``random`` module is never
    touched. Tests may substitute any object with a compatible ``choice``.
    One source feeds every attempt of a run and is never reseeded between
    them.
    """

    seed: Optional[Seed] = None
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(derive_seed(self.seed))
            logger.debug("Random source seeded from %r", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Random source seeded from system entropy")

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self._rng.randrange(len(seq))]


__all__ = ["RandomSource", "Seed", "derive_seed"]
