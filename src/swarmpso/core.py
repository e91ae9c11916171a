from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

import numpy as np

from swarmpso import vector_ops as vo
from swarmpso.config import PSOParams
from swarmpso.particle import Particle
from swarmpso.particle import WORST_FITNESS
from swarmpso.population import Population
from swarmpso.search_space import normalize_search_space

logger = logging.getLogger(__name__)

ObjectiveFunction = Callable[[np.ndarray], float]

# Mixed into every worker seed so two processes started in the same
# nanosecond on the same thread id still draw different streams.
_PROCESS_NONCE = secrets.randbits(64)


def _worst_objective(position) -> float:
    return WORST_FITNESS


class GlobalBest:
    """
    Swarm-wide best (value, position) pair behind a single lock.

    The stored position is a read-only array replaced on every improvement,
    so a snapshot reference stays paired with its value.
    """

    def __init__(self, value: float = WORST_FITNESS, position=None):
        self._lock = threading.Lock()
        self._value = value
        self._position = vo.frozen_copy(position)

    def offer(self, value: float, position) -> bool:
        """Compare-then-swap both fields; True if `value` became the new best."""
        with self._lock:
            if value < self._value:
                self._value = value
                self._position = vo.frozen_copy(position)
                return True
            return False

    def snapshot(self) -> tuple[float, np.ndarray]:
        with self._lock:
            return self._value, self._position

    @property
    def value(self) -> float:
        with self._lock:
            return self._value

    @property
    def position(self) -> np.ndarray:
        with self._lock:
            return vo.copy(self._position)


class SwarmOptimizer:
    """
    Global-best particle swarm minimizer with a linearly decaying schedule.

    Each iteration computes the inertia weight and velocity clamp serially,
    updates every particle concurrently on a thread pool, then checks for
    stagnation once all updates have committed. Malformed configuration
    never raises; it collapses to a zero-dimensional or empty swarm whose
    `optimize` is a no-op.
    """

    def __init__(
        self,
        n_particles: int,
        dimensions: int,
        min_bounds: Optional[Sequence[float]],
        max_bounds: Optional[Sequence[float]],
        objective: Optional[ObjectiveFunction] = None,
        params: Optional[PSOParams] = None,
        *,
        n_workers: Optional[int] = None,
        rng=None,
    ):
        self.params = params if params is not None else PSOParams()

        if objective is None:
            logger.warning("No objective supplied; every position scores the worst fitness")
            objective = _worst_objective
        self._objective = objective

        if n_workers is not None and n_workers < 1:
            logger.warning("n_workers=%d is not positive; using a single worker", n_workers)
            n_workers = 1
        self._n_workers = n_workers

        self._space = normalize_search_space(dimensions, min_bounds, max_bounds)
        self.population = Population(n_particles, dimensions, min_bounds, max_bounds,
                                     rng=rng, space=self._space)
        self._worker_local = threading.local()

        self.history: list[float] = []
        self.iterations_run = 0
        self.stopped_early = False

        self._global_best = self._initialize_global_best()
        logger.debug(
            "SwarmOptimizer: %d particles, %d dimensions, initial best %.6g, params=%s",
            len(self.population), self.dimensions, self._global_best.value, self.params,
        )

    @property
    def dimensions(self) -> int:
        return self._space.dimensions

    @property
    def global_best_value(self) -> float:
        return self._global_best.value

    @property
    def global_best_position(self) -> np.ndarray:
        """A fresh copy on every access."""
        return self._global_best.position

    def _initialize_global_best(self) -> GlobalBest:
        if self.dimensions == 0 or len(self.population) == 0:
            return GlobalBest()

        best_value = WORST_FITNESS
        best_position = np.zeros(self.dimensions)
        for particle in self.population:
            fitness = float(self._objective(particle.position))
            particle.personal_best_value = fitness
            particle.personal_best_position = particle.position
            if fitness < best_value:
                best_value = fitness
                best_position = particle.position
        return GlobalBest(best_value, best_position)

    def _worker_rng(self) -> np.random.Generator:
        rng = getattr(self._worker_local, 'rng', None)
        if rng is None:
            seed = np.random.SeedSequence([time.time_ns(), threading.get_ident(), _PROCESS_NONCE])
            rng = self._worker_local.rng = np.random.default_rng(seed)
        return rng

    def _step(self, particle: Particle, inertia: float, vmax: np.ndarray) -> float:
        """Move one particle and fold its new fitness into both bests."""
        r1, r2 = self._worker_rng().random(2)
        # May already include improvements committed by siblings this iteration.
        _, global_best_position = self._global_best.snapshot()

        position = particle.position
        cognitive = vo.scale(vo.subtract(particle.personal_best_position, position),
                             self.params.cognitive * r1)
        social = vo.scale(vo.subtract(global_best_position, position),
                          self.params.social * r2)
        momentum = vo.scale(particle.velocity, inertia)

        new_velocity = vo.add(vo.add(momentum, cognitive), social)
        new_position = vo.add(position, new_velocity)
        new_velocity = np.clip(new_velocity, -vmax, vmax)
        new_position = self._space.clip(new_position)

        particle.update_state(new_position, new_velocity)
        fitness = float(self._objective(particle.position))
        if fitness < particle.personal_best_value:
            particle.personal_best_value = fitness
            particle.personal_best_position = particle.position

        self._global_best.offer(fitness, particle.position)
        return fitness

    def optimize(self, max_iters: int) -> float:
        """
        Run up to `max_iters` iterations and return the global-best value.

        Stops early once the global best has moved by less than
        `params.target_precision` for `params.stagnation_iters` consecutive
        iterations. Repeated calls resume from the current swarm; only the
        stagnation counter starts over.
        """
        self.history = []
        self.iterations_run = 0
        self.stopped_early = False

        if max_iters <= 0 or self.dimensions == 0 or len(self.population) == 0:
            return self.global_best_value

        p = self.params
        particles = self.population.particles
        span = self._space.span
        previous_best = WORST_FITNESS
        stagnant = 0
        logger.debug("Optimizing for up to %d iterations", max_iters)

        with ThreadPoolExecutor(max_workers=self._n_workers, thread_name_prefix='swarmpso') as pool:
            for t in range(max_iters):
                inertia, vmax_frac = p.schedule(t, max_iters)
                vmax = span * vmax_frac

                # Draining the iterator is the barrier; it also re-raises objective errors.
                for _ in pool.map(lambda particle: self._step(particle, inertia, vmax), particles):
                    pass

                current_best = self._global_best.value
                if abs(previous_best - current_best) < p.target_precision:
                    stagnant += 1
                else:
                    stagnant = 0
                previous_best = current_best

                self.history.append(current_best)
                self.iterations_run = t + 1

                if stagnant >= p.stagnation_iters:
                    self.stopped_early = True
                    logger.debug("Stagnated for %d iterations; stopping at iteration %d", stagnant, t + 1)
                    break

        logger.info("Optimization finished after %d/%d iterations: best=%.6g",
                    self.iterations_run, max_iters, self.global_best_value)
        return self.global_best_value


def pso_run(
    f: Optional[ObjectiveFunction],
    bounds: tuple,
    dim: int,
    n_particles: int,
    iters: int,
    params: Optional[PSOParams] = None,
    rng: np.random.Generator | None = None,
    n_workers: int | None = None,
):
    """Run one PSO trial and return best solution + convergence curve."""
    lo, hi = bounds
    lo_v = np.full(max(0, dim), lo, dtype=float) if np.ndim(lo) == 0 else lo
    hi_v = np.full(max(0, dim), hi, dtype=float) if np.ndim(hi) == 0 else hi

    opt = SwarmOptimizer(n_particles, dim, lo_v, hi_v, f, params, n_workers=n_workers, rng=rng)
    opt.optimize(iters)

    # Include the initial evaluation pass; a dimensionless swarm evaluates nothing
    n_evaluating = len(opt.population) if opt.dimensions else 0
    evals_used = n_evaluating * (1 + opt.iterations_run)

    return {
        "best_x": opt.global_best_position,
        "best_f": float(opt.global_best_value),
        "gbest_curve": np.asarray(opt.history, dtype=float),
        "evals_used": int(evals_used),
        "iters_run": int(opt.iterations_run),
        "stopped_early": bool(opt.stopped_early),
    }
