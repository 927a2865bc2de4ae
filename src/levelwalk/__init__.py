"""
levelwalk: random-walk grid level generation.

A walker stamps square patches of floor as it wanders the integer lattice,
walls are derived around the result, and the whole walk is retried until
the floor is large enough. Rendering and entity placement stay with the
caller, who receives the finished cell sets.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("levelwalk")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

from .config import GenerationConfig
from .exceptions import ConfigurationError, GenerationExhausted, LevelWalkError
from .generation import (
    BuilderState,
    GenerationResult,
    LevelBuilder,
    LevelLayout,
    WalkGenerator,
    build_level,
    derive_walls,
)
from .geometry import Coordinate
from .loader import LevelLoader
from .rng import RandomSource

__all__ = [
    "__version__",
    "BuilderState",
    "ConfigurationError",
    "Coordinate",
    "GenerationConfig",
    "GenerationExhausted",
    "GenerationResult",
    "LevelBuilder",
    "LevelLayout",
    "LevelLoader",
    "LevelWalkError",
    "RandomSource",
    "WalkGenerator",
    "build_level",
    "derive_walls",
]
