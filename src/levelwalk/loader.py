from __future__ import annotations

import logging
from typing import Optional

from .config import GenerationConfig
from .consumers import Placement, TileRenderer, get_placement_callback, is_renderer
from .exceptions import ConfigurationError
from .generation import GenerationResult, LevelBuilder, LevelLayout, is_closed
from .rng import RandomSource

logger = logging.getLogger(__name__)


class LevelLoader:
    """Calling harness that turns a generated layout into a playable level.

    - Refuses to construct without a renderer, since nothing could be drawn.
    - Generates with retries, then clears and paints the renderer exactly once.
    - Hands (floor, start) to the enemy and collectible spawners when present;
      an absent spawner only logs a warning.

    Exhaustion surfaces as GenerationExhausted and leaves the renderer untouched.
    """

    def __init__(
        self,
        config: GenerationConfig,
        renderer: Optional[TileRenderer],
        enemy_spawner: Optional[Placement] = None,
        collectible_spawner: Optional[Placement] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if renderer is None:
            raise ConfigurationError("LevelLoader setup is incomplete: renderer is not assigned")
        if not is_renderer(renderer):
            raise ConfigurationError(f"Renderer {renderer!r} has no paint(floor, walls) method")
        config.validate()
        self.config = config
        self.renderer = renderer
        self.enemy_spawner = enemy_spawner
        self.collectible_spawner = collectible_spawner
        self.builder = LevelBuilder(rng=rng)
        self.result: Optional[GenerationResult] = None

    @property
    def layout(self) -> Optional[LevelLayout]:
        return self.result.layout if self.result is not None else None

    def load(self) -> LevelLayout:
        self.result = self.builder.generate(self.config, consumers=())
        self.result.raise_for_status()
        layout = self.result.layout
        assert layout is not None
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Loaded layout %s: %dx%d, boundary closed: %s",
                layout.signature()[:12],
                layout.width,
                layout.height,
                is_closed(layout.floor, layout.walls),
            )

        clear = getattr(self.renderer, "clear", None)
        if callable(clear):
            clear()
        self.renderer.paint(layout.floor, layout.walls)

        self._spawn(self.enemy_spawner, "Enemy spawner", "enemies", layout)
        self._spawn(self.collectible_spawner, "Collectible spawner", "collectibles", layout)
        return layout

    @staticmethod
    def _spawn(spawner: Optional[Placement], label: str, what: str, layout: LevelLayout) -> None:
        if spawner is None:
            logger.warning("%s is missing; no %s will be spawned", label, what)
            return
        get_placement_callback(spawner)(layout.floor, layout.start)
