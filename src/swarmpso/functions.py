import numpy as np

"""
Benchmark objective functions. Each maps a position vector to a scalar
fitness (lower is better) and is safe to call from many threads at once.
"""


def sphere(x):
    x = np.asarray(x, dtype=np.float64)
    return float(np.dot(x, x))


def rosenbrock(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    return float(np.sum(100.0*(x[1:] - x[:-1]**2)**2 + (x[:-1] - 1.0)**2))


def rastrigin(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    return float(10*n + np.sum(x**2 - 10*np.cos(2*np.pi*x)))


def ackley(x):
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    if n == 0:
        return 0.0
    a, b, c = 20.0, 0.2, 2*np.pi
    mean_sq = np.dot(x, x) / n
    mean_cos = np.mean(np.cos(c * x))
    # sqrt guard against tiny negative roundoff
    return float(-a * np.exp(-b * np.sqrt(max(mean_sq, 0.0)))
                 - np.exp(mean_cos) + a + np.e)


FUNCTIONS = {
    "sphere":    {"f": sphere,     "bounds": (-10.0, 10.0),     "optimum": 0.0},
    "rosenbrock": {"f": rosenbrock, "bounds": (-2.048, 2.048),   "optimum": 1.0},
    "rastrigin": {"f": rastrigin,  "bounds": (-5.12, 5.12),     "optimum": 0.0},
    "ackley":    {"f": ackley,     "bounds": (-32.768, 32.768), "optimum": 0.0},
}

SUCCESS_THRESHOLDS = {
    "sphere": 1e-2,
    "rosenbrock": 1e-1,
    "rastrigin": 5e-1,
    "ackley": 1e-2,
}
