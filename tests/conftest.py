"""Shared fixtures for Wave Defender tests."""

import random
from typing import Iterable

import pytest

from game.defender import DefenderGame


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed script.

    Once the script runs out the last value repeats. uniform() is built on
    random(), so it follows the script too.
    """

    def __init__(self, values: Iterable[float] = (0.5,)):
        super().__init__(0)
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def rng():
    # 0.5: basic enemies, no enemy fire, no power-up drops
    return ScriptedRandom([0.5])


@pytest.fixture
def game(rng):
    """A started 800x600 game with no randomness surprises."""
    g = DefenderGame(width=800, height=600, rng=rng)
    g.start()
    return g
