"""
Search-space normalization.

Turns a requested (dimensions, lower, upper) triple into the effective
box every other component works on. Malformed input never raises: it
collapses to a zero-dimensional space.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SearchSpace:
    """Effective box bounds; lower[i] <= upper[i] for every dimension."""
    dimensions: int = 0
    lower: np.ndarray = field(default_factory=lambda: np.empty(0))
    upper: np.ndarray = field(default_factory=lambda: np.empty(0))

    @property
    def span(self) -> np.ndarray:
        return np.abs(self.upper - self.lower)

    def clip(self, position: np.ndarray) -> np.ndarray:
        return np.clip(position, self.lower, self.upper)


def normalize_search_space(
    dimensions: int,
    lower: Optional[Sequence[float]],
    upper: Optional[Sequence[float]],
) -> SearchSpace:
    """Apply the degrade-to-empty policy once, at construction time."""
    dims = max(0, int(dimensions))
    if dims != dimensions:
        logger.warning("Negative dimension count %d clamped to 0", dimensions)
    if dims == 0:
        return SearchSpace()

    lo = None if lower is None else np.array(lower, dtype=np.float64).reshape(-1)
    hi = None if upper is None else np.array(upper, dtype=np.float64).reshape(-1)
    if lo is None or hi is None or lo.size != dims or hi.size != dims:
        logger.warning(
            "Bounds do not match %d dimensions (lower=%s, upper=%s); degrading to a "
            "zero-dimensional search space",
            dims,
            None if lo is None else lo.size,
            None if hi is None else hi.size,
        )
        return SearchSpace()

    # Swap inverted pairs so lower <= upper holds everywhere.
    return SearchSpace(dimensions=dims, lower=np.minimum(lo, hi), upper=np.maximum(lo, hi))
