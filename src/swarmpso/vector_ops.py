"""
Elementwise vector helpers used by the swarm update.

Every helper accepts any sequence of reals and returns a freshly allocated
float64 array. Missing inputs or mismatched lengths never raise: they yield
an empty array (or 0.0 for scalar results).
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

Vector = Sequence[float] | np.ndarray

_EMPTY = np.empty(0, dtype=np.float64)


def _as_array(vec: Optional[Vector]) -> Optional[np.ndarray]:
    if vec is None:
        return None
    return np.asarray(vec, dtype=np.float64).reshape(-1)


def _pair(vec1: Optional[Vector], vec2: Optional[Vector]):
    a, b = _as_array(vec1), _as_array(vec2)
    if a is None or b is None or a.size != b.size:
        return None
    return a, b


def add(vec1: Optional[Vector], vec2: Optional[Vector]) -> np.ndarray:
    pair = _pair(vec1, vec2)
    if pair is None:
        return _EMPTY.copy()
    return pair[0] + pair[1]


def subtract(vec1: Optional[Vector], vec2: Optional[Vector]) -> np.ndarray:
    pair = _pair(vec1, vec2)
    if pair is None:
        return _EMPTY.copy()
    return pair[0] - pair[1]


def scale(vec: Optional[Vector], scalar: float) -> np.ndarray:
    a = _as_array(vec)
    if a is None:
        return _EMPTY.copy()
    return a * float(scalar)


def dot(vec1: Optional[Vector], vec2: Optional[Vector]) -> float:
    pair = _pair(vec1, vec2)
    if pair is None:
        return 0.0
    return float(np.dot(pair[0], pair[1]))


def magnitude(vec: Optional[Vector]) -> float:
    a = _as_array(vec)
    if a is None:
        return 0.0
    return float(np.sqrt(np.dot(a, a)))


def copy(vec: Optional[Vector]) -> np.ndarray:
    """Value copy; never shares storage with the input."""
    a = _as_array(vec)
    if a is None:
        return _EMPTY.copy()
    return a.copy()


def frozen_copy(vec: Optional[Vector]) -> np.ndarray:
    """Value copy marked read-only, for state handed out without copying."""
    a = copy(vec)
    a.setflags(write=False)
    return a
