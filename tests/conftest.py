"""Pytest configuration and shared fixtures."""

import logging

import numpy as np
import pytest

import constants
from shading import Palette


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float):
        self.now += dt


class FakeScreen:
    """
    Stands in for TerminalScreen.

    `sizes` maps a frame number to the (cols, rows) reported from that frame
    on; `keys` maps a frame number to the key returned by poll_key.
    """

    def __init__(self, size=(80, 24), palette=None, sizes=None, keys=None):
        self.palette = palette
        self._size = size
        self.sizes = sizes or {}
        self.keys = keys or {}
        self.frame = 0
        self.frames = []
        self.clears = 0

    def size(self):
        if self.frame in self.sizes:
            self._size = self.sizes[self.frame]
        return self._size

    def poll_key(self):
        return self.keys.get(self.frame, -1)

    def clear(self):
        self.clears += 1

    def erase(self):
        self.frames.append({"size": self._size, "draws": []})

    def draw(self, command):
        self.frames[-1]["draws"].append(command)

    def refresh(self):
        self.frame += 1


class SequenceRng:
    """
    Replaces np.random.Generator.integers with a fixed sequence of values,
    cycled. Used to force the stochastic shading branches.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def integers(self, n):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value % n


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so every test sees the same sequence."""
    return np.random.default_rng(1234)


@pytest.fixture
def palette_256() -> Palette:
    return Palette(constants.BH_PAIR_BASE_256, len(constants.BH_COLORS_256))


@pytest.fixture
def palette_8() -> Palette:
    return Palette(constants.BH_PAIR_BASE_8, len(constants.BH_COLORS_8))


@pytest.fixture
def app_logger():
    """Yields the application logger and removes any handlers afterwards."""
    logger = logging.getLogger(constants.LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
