import random

import pytest


class CountingRandom:
    """Seeded stand-in for the system random source that counts draws."""

    def __init__(self, seed=0):
        self._rng = random.Random(seed)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self._rng.random()


@pytest.fixture
def rng():
    return CountingRandom(1234)


@pytest.fixture
def make_rng():
    return CountingRandom
