from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional

from ..config import GenerationConfig
from ..consumers import Placement, get_placement_callback
from ..exceptions import GenerationExhausted
from ..geometry import Coordinate
from ..rng import RandomSource
from .layout import LevelLayout
from .walker import WalkGenerator

logger = logging.getLogger(__name__)


class BuilderState(Enum):
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of LevelBuilder.generate().

    ``layout`` is set only on success. An exhausted result is a normal
    outcome, not an error; call raise_for_status() to turn it into one.
    """

    state: BuilderState
    attempts: int
    config: GenerationConfig
    layout: Optional[LevelLayout] = None

    @property
    def ok(self) -> bool:
        return self.state is BuilderState.SUCCESS

    @property
    def floor(self) -> FrozenSet[Coordinate]:
        return self.layout.floor if self.layout is not None else frozenset()

    @property
    def walls(self) -> FrozenSet[Coordinate]:
        return self.layout.walls if self.layout is not None else frozenset()

    @property
    def start(self) -> Coordinate:
        return self.config.start_position

    def raise_for_status(self) -> None:
        if not self.ok:
            raise GenerationExhausted(self.attempts, self.config)


class LevelBuilder:
    """Retry orchestrator around WalkGenerator.

    Each attempt re-walks from scratch at the configured start; nothing from
    a rejected attempt is reused. The first floor with at least
    ``min_floor_tiles`` cells wins, gets its walls derived and is passed to
    the placement consumers. After ``max_generation_attempts`` rejections the
    run ends EXHAUSTED.

    The random source is shared by all attempts and never reseeded, so a
    seeded builder is reproducible run for run while attempts within a run
    still differ. Without an injected walker or rng, the source is created
    on the first ``generate`` call from that config's ``seed``.
    """

    def __init__(
        self,
        walker: Optional[WalkGenerator] = None,
        rng: Optional[RandomSource] = None,
        consumers: Iterable[Placement] = (),
    ) -> None:
        # rng only seeds the default walker
        if walker is None and rng is not None:
            walker = WalkGenerator(rng)
        self.walker: Optional[WalkGenerator] = walker
        self.consumers: List[Placement] = list(consumers)
        self.state: Optional[BuilderState] = None
        self.attempts = 0

    def generate(
        self,
        config: GenerationConfig,
        consumers: Optional[Iterable[Placement]] = None,
    ) -> GenerationResult:
        config.validate()
        callbacks = [get_placement_callback(c) for c in (self.consumers if consumers is None else consumers)]
        if self.walker is None:
            self.walker = WalkGenerator(RandomSource(config.seed))

        self.state = BuilderState.ATTEMPTING
        self.attempts = 0
        logger.debug(
            "Generating level: walk_steps=%d stamp_size=%d min_floor_tiles=%d max_attempts=%d",
            config.walk_steps,
            config.stamp_size,
            config.min_floor_tiles,
            config.max_generation_attempts,
        )

        while self.attempts < config.max_generation_attempts:
            self.attempts += 1
            floor = self.walker.walk(config)
            if len(floor) >= config.min_floor_tiles:
                layout = LevelLayout.from_floor(floor, config.start_position)
                self.state = BuilderState.SUCCESS
                logger.info(
                    "Level generated after %d attempt(s); floor tiles: %d, wall tiles: %d",
                    self.attempts,
                    len(layout.floor),
                    len(layout.walls),
                )
                for callback in callbacks:
                    callback(layout.floor, layout.start)
                return GenerationResult(self.state, self.attempts, config, layout)
            logger.debug(
                "Generated level too small (%d tiles). Retrying... (attempt %d/%d)",
                len(floor),
                self.attempts,
                config.max_generation_attempts,
            )

        self.state = BuilderState.EXHAUSTED
        logger.error(
            "Failed to generate a valid level after %d attempts; "
            "try increasing walk_steps or decreasing min_floor_tiles",
            self.attempts,
        )
        return GenerationResult(self.state, self.attempts, config)

    def generate_or_raise(
        self,
        config: GenerationConfig,
        consumers: Optional[Iterable[Placement]] = None,
    ) -> LevelLayout:
        result = self.generate(config, consumers)
        result.raise_for_status()
        assert result.layout is not None
        return result.layout


def build_level(config: GenerationConfig, consumers: Iterable[Placement] = ()) -> GenerationResult:
    """One-shot generation using a random source seeded from ``config.seed``."""
    return LevelBuilder(consumers=consumers).generate(config)
