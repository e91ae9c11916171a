"""
One candidate solution of the swarm.

A particle owns its position, velocity and personal-best record. All three
vectors always have the same length as the effective search space. Inputs
are copied on the way in; position and velocity are stored read-only and
handed out as-is, the personal best is copied on every access.
"""
from __future__ import annotations

import sys
from typing import Optional, Sequence

import numpy as np

from swarmpso import vector_ops as vo
from swarmpso.search_space import SearchSpace
from swarmpso.search_space import normalize_search_space

# "No solution yet" for minimization; finite so differences stay finite.
WORST_FITNESS = sys.float_info.max


class Particle:
    """Position, velocity and personal best of a single swarm member."""

    def __init__(
        self,
        dimensions: int,
        min_bounds: Optional[Sequence[float]],
        max_bounds: Optional[Sequence[float]],
        rng=None,
    ):
        self._initialize(normalize_search_space(dimensions, min_bounds, max_bounds), rng)

    @classmethod
    def from_space(cls, space: SearchSpace, rng=None) -> Particle:
        """Build on an already-normalized space, skipping validation."""
        particle = cls.__new__(cls)
        particle._initialize(space, rng)
        return particle

    def _initialize(self, space: SearchSpace, rng) -> None:
        if rng is None:
            rng = np.random.default_rng()
        self._dimensions = space.dimensions
        self.personal_best_value = WORST_FITNESS
        if self._dimensions == 0:
            self._position = vo.frozen_copy(())
            self._velocity = vo.frozen_copy(())
            self._personal_best_position = np.empty(0)
            return

        d = self._dimensions
        span = space.upper - space.lower
        position = space.lower + np.asarray(rng.random(d), dtype=np.float64) * span
        # Signed velocity up to a tenth of the dimension's range.
        magnitude = np.asarray(rng.random(d), dtype=np.float64) * (span / 10.0)
        sign = np.where(np.asarray(rng.random(d)) >= 0.5, 1.0, -1.0)
        self._position = vo.frozen_copy(position)
        self._velocity = vo.frozen_copy(magnitude * sign)
        self._personal_best_position = vo.copy(self._position)

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def position(self) -> np.ndarray:
        """Read-only view; replaced wholesale by `update_state`."""
        return self._position

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity

    @property
    def personal_best_position(self) -> np.ndarray:
        return vo.copy(self._personal_best_position)

    @personal_best_position.setter
    def personal_best_position(self, value: Sequence[float]) -> None:
        self._personal_best_position = vo.copy(value)

    def update_state(
        self,
        new_position: Optional[Sequence[float]],
        new_velocity: Optional[Sequence[float]],
    ) -> bool:
        """
        Replace position and velocity with copies of the inputs.

        Returns False, leaving the particle untouched, unless both inputs are
        present and have exactly `dimensions` components.
        """
        if self._dimensions == 0 or new_position is None or new_velocity is None:
            return False
        pos, vel = vo.frozen_copy(new_position), vo.frozen_copy(new_velocity)
        if pos.size != self._dimensions or vel.size != self._dimensions:
            return False
        self._position = pos
        self._velocity = vel
        return True

    def __repr__(self) -> str:
        return (f"Particle(dimensions={self._dimensions}, "
                f"personal_best_value={self.personal_best_value:.6g})")
