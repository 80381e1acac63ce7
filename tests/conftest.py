import numpy as np
import pytest


class StepClock:
    """Clock that advances a fixed step every time it is read."""

    def __init__(self, step: float = 1e-5, start: float = 0.0):
        self.step = step
        self.now = start

    def __call__(self) -> float:
        t = self.now
        self.now += self.step
        return t


@pytest.fixture
def step_clock():
    return StepClock()


@pytest.fixture
def unit_square():
    return np.array([[0, 0], [1, 0], [1, 1], [0, 1]])


@pytest.fixture
def random_coords():
    def make(n: int, seed: int = 0) -> np.ndarray:
        rng = np.random.default_rng(seed)
        return rng.integers(0, 1000, size=(n, 2))
    return make


@pytest.fixture
def clock_factory():
    return StepClock
