from __future__ import annotations

import random
from typing import Iterable

import pytest

from botbrain.domain.engine import DecisionEngine, PythonChessRules
from botbrain.infrastructure.config import EngineConfig


class ScriptedRandom(random.Random):
    """Random source that replays fixed draws and choice indices."""

    def __init__(self, draws: Iterable[float] = (), picks: Iterable[int] = ()) -> None:
        super().__init__(0)
        self._draws = list(draws)
        self._picks = list(picks)

    def random(self) -> float:
        return self._draws.pop(0) if self._draws else 0.5

    def choice(self, seq):
        index = self._picks.pop(0) if self._picks else 0
        return seq[index]


@pytest.fixture(scope="session")
def engine_config() -> EngineConfig:
    """Provide a configuration tuned for isolated tests."""
    return EngineConfig(
        log_level="WARNING",
        default_rating=1200,
        exhaustive_mate_search=False,
        think_time_min_ms=0,
        think_time_max_ms=10,
        seed=7,
        additional={},
    )


@pytest.fixture
def rules() -> PythonChessRules:
    return PythonChessRules()


@pytest.fixture
def engine(engine_config: EngineConfig) -> DecisionEngine:
    return DecisionEngine(
        rng=random.Random(engine_config.seed),
        exhaustive_mate_search=engine_config.exhaustive_mate_search,
    )


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
