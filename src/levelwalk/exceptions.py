from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .config import GenerationConfig


class LevelWalkError(Exception):
    """Base exception for the levelwalk package."""


class ConfigurationError(LevelWalkError, ValueError):
    """Raised for invalid generation parameters or a missing required collaborator."""


class GenerationExhausted(LevelWalkError):
    """Raised when every attempt produced a floor smaller than min_floor_tiles.

    This is an expected outcome for tight parameters, not a crash. The attempt
    count and the configuration are attached so callers can log or relax them.
    """

    def __init__(self, attempts: int, config: "GenerationConfig") -> None:
        self.attempts = attempts
        self.config = config
        super().__init__(
            f"Failed to generate a valid level after {attempts} attempt(s) "
            f"(walk_steps={config.walk_steps}, stamp_size={config.stamp_size}, "
            f"min_floor_tiles={config.min_floor_tiles}). "
            "Try increasing walk_steps or decreasing min_floor_tiles."
        )
