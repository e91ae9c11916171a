"""
Pytest configuration - runs before test collection.

Adds src/ to sys.path so the package imports without an editable install.
Configures logging for test output.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src/ to path for local package imports
src_root = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_root))

# Default to INFO level - use pytest -s --log-cli-level=DEBUG for more verbose output
logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s - %(threadName)s - %(name)s - %(message)s',
    datefmt='%H:%M:%S',
)
logging.getLogger('swarmpso').setLevel(logging.WARNING)


class ConstantRandom:
    """np.random.Generator stand-in cycling through fixed draws."""

    def __init__(self, values):
        self._values = list(values)
        self._i = 0

    def random(self, size=None):
        value = self._values[self._i % len(self._values)]
        self._i += 1
        if size is None:
            return value
        return np.full(size, value)


def sphere_fn(x):
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, x))


@pytest.fixture
def sphere():
    return sphere_fn


@pytest.fixture
def bounds_2d():
    return [-5.0, -5.0], [5.0, 5.0]


@pytest.fixture
def seeded_rng():
    return np.random.default_rng(20240611)


@pytest.fixture
def constant_random():
    """Factory: constant_random([0.2, 0.3, 0.7]) -> deterministic random source."""
    return ConstantRandom
