"""
Random value distributions that drive simulated measurement fields.

Every distribution holds its own random source so that a fleet built from a
seeded ``random.Random`` replays the same values. ``advance()`` moves the
distribution one step; ``get()`` returns the current value without moving it.
"""
import random
from typing import Optional


class NormalDistribution:
    """Independent samples from N(mean, stddev)."""

    def __init__(self, mean: float, stddev: float, rng: Optional[random.Random] = None):
        self.mean = mean
        self.stddev = stddev
        self.rng = rng or random.Random()
        self.value = 0.0

    def advance(self) -> None:
        self.value = self.rng.gauss(self.mean, self.stddev)

    def get(self) -> float:
        return self.value


class UniformDistribution:
    """Independent samples from U(low, high)."""

    def __init__(self, low: float, high: float, rng: Optional[random.Random] = None):
        self.low = low
        self.high = high
        self.rng = rng or random.Random()
        self.value = 0.0

    def advance(self) -> None:
        self.value = self.rng.uniform(self.low, self.high)

    def get(self) -> float:
        return self.value


class RandomWalkDistribution:
    """Accumulates samples of a step distribution onto a running state."""

    def __init__(self, step, state: float = 0.0):
        self.step = step
        self.state = state

    def advance(self) -> None:
        self.step.advance()
        self.state += self.step.get()

    def get(self) -> float:
        return self.state


class ClampedRandomWalkDistribution:
    """A random walk whose state is kept within [low, high]."""

    def __init__(self, low: float, high: float, step, state: float = 0.0):
        self.low = low
        self.high = high
        self.step = step
        self.state = min(max(state, low), high)

    def advance(self) -> None:
        self.step.advance()
        self.state = min(max(self.state + self.step.get(), self.low), self.high)

    def get(self) -> float:
        return self.state


class MonotonicRandomWalkDistribution:
    """A random walk that only moves up, for cumulative counters."""

    def __init__(self, step, state: float = 0.0):
        self.step = step
        self.state = state

    def advance(self) -> None:
        self.step.advance()
        self.state += abs(self.step.get())

    def get(self) -> float:
        return self.state


class ConstantDistribution:
    def __init__(self, state: float):
        self.state = state

    def advance(self) -> None:
        pass

    def get(self) -> float:
        return self.state
