import random
from numbers import Integral
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    def uniform_float(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def uniform_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        ...


class PyRandom:
    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def uniform_float(self) -> float:
        return self._rng.random()

    def uniform_int(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)


class NumpyRandom:
    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def uniform_float(self) -> float:
        return float(self._rng.random())

    def uniform_int(self, low: int, high: int) -> int:
        # Generator.integers excludes `high` unless told otherwise
        return int(self._rng.integers(low, high, endpoint=True))


def make_rng(rng: RandomSource | int | None = None) -> RandomSource:
    if rng is None or isinstance(rng, Integral):
        return PyRandom(None if rng is None else int(rng))
    return rng
