"""
Fixed-size collection of particles sharing one search space.

The particle list is created once and exposed as a tuple: callers may read
particles and drive their updates but cannot add, drop or replace them.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from swarmpso.particle import Particle
from swarmpso.search_space import SearchSpace
from swarmpso.search_space import normalize_search_space

logger = logging.getLogger(__name__)


class Population:

    def __init__(
        self,
        n_particles: int,
        dimensions: int,
        min_bounds: Optional[Sequence[float]],
        max_bounds: Optional[Sequence[float]],
        rng=None,
        space: Optional[SearchSpace] = None,
    ):
        """
        Args:
            n_particles: requested swarm size; negative values give an empty swarm.
            dimensions, min_bounds, max_bounds: requested search space, normalized
                once here unless an effective `space` is supplied.
            rng: random source shared by every particle's initialization
                (np.random.Generator-like); a fresh default generator when None.
            space: already-normalized space; takes precedence over the raw bounds.
        """
        if space is None:
            space = normalize_search_space(dimensions, min_bounds, max_bounds)
        if rng is None:
            rng = np.random.default_rng()

        count = max(0, int(n_particles))
        if count != n_particles:
            logger.warning("Negative particle count %d clamped to 0", n_particles)

        self._space = space
        self._particles = tuple(Particle.from_space(space, rng) for _ in range(count))
        logger.debug("Population of %d particles in %d dimensions", count, space.dimensions)

    @property
    def space(self) -> SearchSpace:
        return self._space

    @property
    def dimensions(self) -> int:
        return self._space.dimensions

    @property
    def particles(self) -> tuple[Particle, ...]:
        return self._particles

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self):
        return iter(self._particles)

    def __getitem__(self, index: int) -> Particle:
        return self._particles[index]
