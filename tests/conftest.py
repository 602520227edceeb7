import sys
from pathlib import Path
from typing import List

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.config import ENV_CONFIG_DIR, ENV_OVERRIDES  # noqa: E402
from delve.rng import RandomSource  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the developer's own generation.yaml and DELVE_* env out of tests."""
    monkeypatch.setenv(ENV_CONFIG_DIR, str(tmp_path / "config"))
    for key in ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)


class ScriptedRandom(RandomSource):
    """RandomSource replaying a fixed list of draws, for exact placement tests."""

    def __init__(self, values: List[int]) -> None:
        super().__init__(seed=0)
        self.values = list(values)

    def randrange(self, lo: int, hi: int) -> int:
        assert self.values, f"script exhausted at randrange({lo}, {hi})"
        v = self.values.pop(0)
        assert lo <= v < hi, f"scripted {v} outside [{lo}, {hi})"
        return v


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
