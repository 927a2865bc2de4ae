from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml
from platformdirs import user_config_dir

from .exceptions import ConfigurationError
from .geometry import ORIGIN, Coordinate, as_coordinate
from .rng import Seed

logger = logging.getLogger(__name__)

APP_NAME = "levelwalk"
MAX_STAMP_SIZE = 3

ENV_CONFIG_FILE = "LEVELWALK_CONFIG"

# camelCase spellings accepted in config files.
_ALIASES = {
    "walkSteps": "walk_steps",
    "startPosition": "start_position",
    "minFloorTiles": "min_floor_tiles",
    "stampSize": "stamp_size",
    "maxGenerationAttempts": "max_generation_attempts",
    "max_attempts": "max_generation_attempts",
    "start": "start_position",
}


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _as_coordinate(name: str, value: Any) -> Coordinate:
    try:
        return as_coordinate(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name}: {exc}") from exc


def _as_seed(value: Any) -> Optional[Seed]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"seed must be an integer or string, got {value!r}")
    if isinstance(value, int):
        return value
    s = str(value).strip()
    if s == "":
        return None
    try:
        return int(s)
    except ValueError:
        return s


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable parameters for one generation run.

    Defaults: a 200 step walk stamping 3x3 squares from the origin,
    accepting levels of at least 100 floor tiles within 100 attempts.

    Values are validated on construction and never clamped: anything out of
    range raises ConfigurationError before a single attempt is made.
    """

    walk_steps: int = 200
    start_position: Coordinate = ORIGIN
    min_floor_tiles: int = 100
    stamp_size: int = 1
    max_generation_attempts: int = 100
    # Seed for the run's random source; None draws from system entropy.
    seed: Optional[Seed] = None

    def __post_init__(self) -> None:
        if not isinstance(self.start_position, Coordinate):
            object.__setattr__(
                self, "start_position", _as_coordinate("start_position", self.start_position)
            )
        self.validate()

    def validate(self) -> None:
        for name in ("walk_steps", "min_floor_tiles", "max_generation_attempts"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        stamp = self.stamp_size
        if isinstance(stamp, bool) or not isinstance(stamp, int):
            raise ConfigurationError(f"stamp_size must be an integer, got {stamp!r}")
        if not 0 <= stamp <= MAX_STAMP_SIZE:
            raise ConfigurationError(f"stamp_size must be in [0, {MAX_STAMP_SIZE}], got {stamp}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, (int, str))):
            raise ConfigurationError(f"seed must be an integer or string, got {self.seed!r}")

    @property
    def max_floor_tiles(self) -> int:
        """Upper bound on the floor size a single walk can produce."""
        return self.walk_steps * (2 * self.stamp_size + 1) ** 2

    def replace(self, **changes: Any) -> "GenerationConfig":
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "walk_steps": self.walk_steps,
            "start_position": [self.start_position.x, self.start_position.y],
            "min_floor_tiles": self.min_floor_tiles,
            "stamp_size": self.stamp_size,
            "max_generation_attempts": self.max_generation_attempts,
            "seed": self.seed,
        }

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        return cls(**normalize(data))

    @classmethod
    def from_file(cls, path: Path | str) -> "GenerationConfig":
        return cls(**load_config_file(path))

    @classmethod
    def from_sources(
        cls,
        *,
        file_path: Optional[Path | str] = None,
        env: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "GenerationConfig":
        """Build a config with precedence defaults < file < env < overrides.

        Overrides whose value is None are ignored, so argparse namespaces can
        be passed through directly.
        """
        env = os.environ if env is None else env
        data: Dict[str, Any] = {}
        chosen = Path(file_path).expanduser() if file_path is not None else discover_config_path(env)
        if chosen is not None:
            data.update(load_config_file(chosen))
        data.update(config_from_env(env))
        data.update(normalize({k: v for k, v in overrides.items() if v is not None}))
        return cls(**data)


def normalize(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map raw keys/values (camelCase, strings, lists) onto GenerationConfig fields."""
    allowed = {f.name for f in dataclasses.fields(GenerationConfig)}
    out: Dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _ALIASES.get(raw_key, raw_key)
        if key not in allowed:
            logger.debug("Ignoring unknown config key %r", raw_key)
            continue
        if key == "start_position":
            out[key] = _as_coordinate(key, value)
        elif key == "seed":
            out[key] = _as_seed(value)
        else:
            out[key] = _as_int(key, value)
    return out


def load_config_file(path: Path | str) -> Dict[str, Any]:
    """Read generation settings from a YAML or TOML file.

    Keys may sit at the top level or under a ``generation`` section.
    Returns normalized field values.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        elif suffix == ".toml":
            with path.open("rb") as f:
                raw = tomllib.load(f)
        else:
            raise ConfigurationError(f"Unsupported config format {suffix!r}: {path}")
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse config file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    section = raw.get("generation", raw)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'generation' section in {path} must be a mapping")
    logger.debug("Loaded generation config from %s", path)
    return normalize(section)


def config_from_env(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    env = os.environ if env is None else env
    mapping: Dict[str, tuple[str, Callable[[str, Any], Any]]] = {
        "LEVELWALK_WALK_STEPS": ("walk_steps", _as_int),
        "LEVELWALK_STAMP_SIZE": ("stamp_size", _as_int),
        "LEVELWALK_MIN_FLOOR_TILES": ("min_floor_tiles", _as_int),
        "LEVELWALK_MAX_ATTEMPTS": ("max_generation_attempts", _as_int),
        "LEVELWALK_START": ("start_position", _as_coordinate),
        "LEVELWALK_SEED": ("seed", lambda _name, v: _as_seed(v)),
    }
    out: Dict[str, Any] = {}
    for env_key, (field_name, caster) in mapping.items():
        if env.get(env_key, "") != "":
            out[field_name] = caster(env_key, env[env_key])
    return out


def discover_config_path(env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    env = os.environ if env is None else env
    env_path = env.get(ENV_CONFIG_FILE)
    if env_path:
        return Path(env_path).expanduser()
    default_path = Path(user_config_dir(APP_NAME)) / "levelwalk.yaml"
    if default_path.exists():
        return default_path
    return None


__all__ = [
    "GenerationConfig",
    "MAX_STAMP_SIZE",
    "config_from_env",
    "discover_config_path",
    "load_config_file",
    "normalize",
]
