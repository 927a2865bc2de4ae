from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import GenerationConfig
from .exceptions import ConfigurationError
from .generation import build_level

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_EXHAUSTED = 2


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="levelwalk",
        description="Generate a random-walk grid level and print it",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--steps", dest="walk_steps", type=int, default=None, help="Walk step count")
    parser.add_argument("--stamp", dest="stamp_size", type=int, default=None, help="Stamp radius (0-3)")
    parser.add_argument(
        "--min-floor", dest="min_floor_tiles", type=int, default=None, help="Minimum floor tiles for a valid level"
    )
    parser.add_argument(
        "--max-attempts", dest="max_generation_attempts", type=int, default=None, help="Attempts before giving up"
    )
    parser.add_argument(
        "--start", dest="start_position", type=int, nargs=2, metavar=("X", "Y"), default=None, help="Start cell"
    )
    parser.add_argument("--seed", default=None, help="Seed (int or any string) for reproducible output")
    parser.add_argument("--config", default=None, help="YAML or TOML file with generation settings")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of the ASCII map")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GenerationConfig:
    return GenerationConfig.from_sources(
        file_path=args.config,
        walk_steps=args.walk_steps,
        stamp_size=args.stamp_size,
        min_floor_tiles=args.min_floor_tiles,
        max_generation_attempts=args.max_generation_attempts,
        start_position=args.start_position,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"levelwalk: configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    result = build_level(config)
    if not result.ok:
        print(f"levelwalk: gave up after {result.attempts} attempt(s)", file=sys.stderr)
        return EXIT_EXHAUSTED
    assert result.layout is not None

    if args.json:
        payload = {"config": config.as_dict(), "attempts": result.attempts}
        payload.update(result.layout.to_dict())
        # Sorted keys so the output can be diffed across runs
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(result.layout.render())
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
