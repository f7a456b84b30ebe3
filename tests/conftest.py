"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest


class RampField:
    """Linear field a*x + b*y + c."""

    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0):
        self.a, self.b, self.c = a, b, c

    def sample(self, x, y):
        return self.a * np.asarray(x) + self.b * np.asarray(y) + self.c


class ConstantField:
    def __init__(self, value: float = 3.0):
        self.value = value

    def sample(self, x, y):
        return self.value


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so sampled layers are reproducible."""
    return np.random.default_rng(1)


@pytest.fixture
def ramp_x() -> RampField:
    return RampField(a=1.0)


@pytest.fixture
def ramp_y() -> RampField:
    return RampField(a=0.0, b=2.0, c=-5.0)


@pytest.fixture
def constant_field() -> ConstantField:
    return ConstantField()
