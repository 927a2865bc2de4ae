import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from levelwalk.geometry import CARDINAL_DIRECTIONS  # noqa: E402
from levelwalk.rng import RandomSource  # noqa: E402


class ScriptedSource:
    """Random source stand-in that replays a fixed list of directions."""

    def __init__(self, directions):
        self._directions = list(directions)
        self.calls = 0

    def choice(self, seq):
        assert tuple(seq) == CARDINAL_DIRECTIONS
        d = self._directions[self.calls % len(self._directions)]
        self.calls += 1
        return d


@pytest.fixture
def seeded_rng():
    return RandomSource(seed=12345)


@pytest.fixture
def scripted():
    return ScriptedSource


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Strip LEVELWALK_* variables and point the config lookup at an empty dir."""
    import os

    for key in list(os.environ):
        if key.startswith("LEVELWALK_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("levelwalk.config.user_config_dir", lambda _app: str(tmp_path / "cfg"))
    return monkeypatch
