"""
swarmpso - multi-threaded particle swarm optimization over box-bounded spaces.
"""
from swarmpso.config import PSOParams
from swarmpso.core import GlobalBest
from swarmpso.core import SwarmOptimizer
from swarmpso.core import pso_run
from swarmpso.particle import WORST_FITNESS
from swarmpso.particle import Particle
from swarmpso.population import Population
from swarmpso.search_space import SearchSpace
from swarmpso.search_space import normalize_search_space

__version__ = "0.1.0"

__all__ = [
    'PSOParams',
    'GlobalBest',
    'SwarmOptimizer',
    'pso_run',
    'WORST_FITNESS',
    'Particle',
    'Population',
    'SearchSpace',
    'normalize_search_space',
]
