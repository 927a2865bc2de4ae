from .walls import derive_walls, is_closed
from .walker import WalkGenerator, WalkStep
from .layout import LevelLayout
from .builder import BuilderState, GenerationResult, LevelBuilder, build_level

__all__ = [
    "BuilderState",
    "GenerationResult",
    "LevelBuilder",
    "LevelLayout",
    "WalkGenerator",
    "WalkStep",
    "build_level",
    "derive_walls",
    "is_closed",
]
