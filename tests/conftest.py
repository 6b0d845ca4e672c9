import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


class ScriptedRandom:
    """RandomSource replaying fixed values, cycling when exhausted."""

    def __init__(self, floats, ints=None):
        self.floats = list(floats)
        self.ints = list(ints) if ints is not None else None
        self._f = 0
        self._i = 0
        self.int_calls = []

    def uniform_float(self) -> float:
        v = self.floats[self._f % len(self.floats)]
        self._f += 1
        return v

    def uniform_int(self, low: int, high: int) -> int:
        self.int_calls.append((low, high))
        if not self.ints:
            return low
        v = self.ints[self._i % len(self.ints)]
        self._i += 1
        return max(low, min(high, v))


@pytest.fixture
def square():
    return 0., 0., 100., 100.


@pytest.fixture
def scripted():
    return ScriptedRandom
