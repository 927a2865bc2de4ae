import logging

import pytest

from levelwalk.config import GenerationConfig
from levelwalk.exceptions import ConfigurationError, GenerationExhausted
from levelwalk.generation.builder import BuilderState, LevelBuilder, build_level
from levelwalk.generation.walker import WalkGenerator
from levelwalk.generation.walls import is_closed
from levelwalk.rng import RandomSource


class StubWalker:
    """Returns canned floor sets in order and records each call."""

    def __init__(self, floors):
        self.floors = list(floors)
        self.calls = 0

    def walk(self, config):
        floor = set(self.floors[min(self.calls, len(self.floors) - 1)])
        self.calls += 1
        return floor


def _line(n):
    return {(x, 0) for x in range(n)}


def test_seeded_default_scenario_succeeds_first_attempt():
    cfg = GenerationConfig(
        walk_steps=200, stamp_size=1, min_floor_tiles=100, max_generation_attempts=100, seed=12345
    )
    result = build_level(cfg)
    assert result.ok
    assert result.state is BuilderState.SUCCESS
    assert result.attempts == 1
    assert 100 <= len(result.floor) <= 200 * 9
    assert (0, 0) in result.floor
    assert result.floor.isdisjoint(result.walls)
    assert is_closed(result.floor, result.walls)


def test_single_cell_scenario():
    cfg = GenerationConfig(walk_steps=1, stamp_size=0, min_floor_tiles=1, max_generation_attempts=3)
    result = LevelBuilder(rng=RandomSource(seed=0)).generate(cfg)
    assert result.floor == {(0, 0)}
    assert result.walls == {(1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1)}
    assert result.start == (0, 0)


def test_unreachable_minimum_exhausts_all_attempts():
    cfg = GenerationConfig(walk_steps=10, stamp_size=1, min_floor_tiles=1_000_000, max_generation_attempts=25)
    walker = WalkGenerator(RandomSource(seed=3))
    builder = LevelBuilder(walker=walker)
    result = builder.generate(cfg)
    assert not result.ok
    assert result.state is BuilderState.EXHAUSTED
    assert builder.state is BuilderState.EXHAUSTED
    assert result.attempts == 25
    assert result.layout is None
    assert result.floor == frozenset()


def test_each_attempt_walks_from_scratch():
    walker = StubWalker([_line(3), _line(4), _line(12)])
    cfg = GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=10, max_generation_attempts=10)
    result = LevelBuilder(walker=walker).generate(cfg)
    assert result.ok
    assert result.attempts == 3
    assert walker.calls == 3
    # only the accepted floor survives, nothing merged from earlier attempts
    assert result.floor == _line(12)


def test_retry_count_is_exact_when_never_large_enough():
    walker = StubWalker([_line(2)])
    cfg = GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=3, max_generation_attempts=7)
    result = LevelBuilder(walker=walker).generate(cfg)
    assert result.attempts == 7
    assert walker.calls == 7


def test_minimum_is_inclusive():
    walker = StubWalker([_line(10)])
    cfg = GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=10, max_generation_attempts=1)
    assert LevelBuilder(walker=walker).generate(cfg).ok


def test_consumers_called_once_on_success_only():
    seen = []

    class Spawner:
        def place(self, floor, start):
            seen.append(("spawner", len(floor), start))

    walker = StubWalker([_line(1), _line(1), _line(20)])
    cfg = GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=5, max_generation_attempts=5)
    builder = LevelBuilder(walker=walker, consumers=[Spawner(), lambda f, s: seen.append(("fn", len(f), s))])
    builder.generate(cfg)
    assert seen == [("spawner", 20, (0, 0)), ("fn", 20, (0, 0))]


def test_consumers_never_called_on_exhaustion():
    seen = []
    walker = StubWalker([_line(1)])
    cfg = GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=5, max_generation_attempts=4)
    LevelBuilder(walker=walker).generate(cfg, consumers=[lambda f, s: seen.append(f)])
    assert seen == []


def test_non_consumer_rejected_before_walking():
    walker = StubWalker([_line(20)])
    with pytest.raises(TypeError):
        LevelBuilder(walker=walker).generate(GenerationConfig(min_floor_tiles=1), consumers=[42])
    assert walker.calls == 0


def test_raise_for_status_and_generate_or_raise():
    cfg = GenerationConfig(walk_steps=3, stamp_size=0, min_floor_tiles=50, max_generation_attempts=2)
    builder = LevelBuilder(rng=RandomSource(seed=1))
    result = builder.generate(cfg)
    with pytest.raises(GenerationExhausted) as excinfo:
        result.raise_for_status()
    assert excinfo.value.attempts == 2
    assert excinfo.value.config is cfg
    assert "min_floor_tiles=50" in str(excinfo.value)

    with pytest.raises(GenerationExhausted):
        builder.generate_or_raise(cfg)

    layout = builder.generate_or_raise(cfg.replace(min_floor_tiles=1))
    assert (0, 0) in layout.floor


def test_invalid_config_fails_before_any_attempt():
    cfg = GenerationConfig(min_floor_tiles=1)
    object.__setattr__(cfg, "stamp_size", 9)
    walker = StubWalker([_line(20)])
    with pytest.raises(ConfigurationError):
        LevelBuilder(walker=walker).generate(cfg)
    assert walker.calls == 0


def test_seeded_runs_are_reproducible():
    cfg = GenerationConfig(walk_steps=150, stamp_size=1, min_floor_tiles=50, seed="repro")
    a = build_level(cfg)
    b = build_level(cfg)
    assert a.layout.signature() == b.layout.signature()


def test_default_builder_seeds_from_config():
    cfg = GenerationConfig(walk_steps=150, stamp_size=1, min_floor_tiles=50, seed=42)
    a = LevelBuilder().generate(cfg)
    b = LevelBuilder().generate(cfg)
    assert a.ok and b.ok
    assert a.layout.signature() == b.layout.signature()
    assert a.layout.signature() == build_level(cfg).layout.signature()


def test_default_builder_keeps_its_source_across_runs():
    cfg = GenerationConfig(walk_steps=150, stamp_size=1, min_floor_tiles=50, seed=42)
    builder = LevelBuilder()
    first = builder.generate(cfg)
    walker = builder.walker
    second = builder.generate(cfg)
    assert builder.walker is walker
    # the second run continues the stream instead of reseeding
    assert first.layout.signature() != second.layout.signature()


def test_injected_rng_wins_over_config_seed():
    cfg = GenerationConfig(walk_steps=150, stamp_size=1, min_floor_tiles=50, seed=42)
    a = LevelBuilder(rng=RandomSource(seed=7)).generate(cfg)
    b = build_level(cfg.replace(seed=7))
    assert a.layout.signature() == b.layout.signature()


def test_logs_success_and_exhaustion(caplog):
    with caplog.at_level(logging.DEBUG, logger="levelwalk.generation.builder"):
        LevelBuilder(walker=StubWalker([_line(1), _line(9)])).generate(
            GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=5, max_generation_attempts=3)
        )
        LevelBuilder(walker=StubWalker([_line(1)])).generate(
            GenerationConfig(walk_steps=5, stamp_size=0, min_floor_tiles=5, max_generation_attempts=2)
        )
    messages = [r.getMessage() for r in caplog.records]
    assert any("too small (1 tiles)" in m and "attempt 1/3" in m for m in messages)
    assert any("after 2 attempt(s)" in m for m in messages)
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "after 2 attempts" in errors[0].getMessage()
