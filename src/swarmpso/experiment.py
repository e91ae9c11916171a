# experiment.py
from __future__ import annotations
import os, csv, json, time, zlib
import logging
from typing import Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from swarmpso.config import PSOParams
from swarmpso.functions import FUNCTIONS
from swarmpso.core import pso_run

"""
This file orchestrates benchmark runs and persists results in a reproducible way.
"""

logger = logging.getLogger(__name__)

RUN_FIELDS = ["func", "n", "run", "best_f", "best_x_json", "evals", "iters_run",
              "stopped_early", "success", "time_s"]


def run_seed(seed0: int, fname: str, n: int, run: int) -> int:
    """Stable per-(function, n, run) seed; crc32 is not salted per process like hash()."""
    key = f"{fname}:{n}:{run}".encode()
    return seed0 + (zlib.crc32(key) % (2**31 - 1))


def run_suite(
    *,
    outdir: str,
    dims: Iterable[int],
    runs: int,
    seed0: int,
    thresholds: Mapping[str, float | None],
    params: PSOParams,
    n_particles: int,
    iters: int,
    functions: Optional[Iterable[str]] = None,
    n_workers: Optional[int] = None,
):
    """
    Args:
      outdir: output directory for CSVs and curves.
      dims: iterable of dimensions to test (e.g., [2, 10, 30]).
      runs: number of independent runs per (function, n).
      seed0: base integer seed; initialization is seeded per run from it.
             Worker streams stay non-deterministic, so runs are repeatable
             in their starting swarm only.
      thresholds: dict mapping function name -> success threshold (float) or None.
                  If None, success is not computed (treated as 0 in CSV).
      params: control parameters shared by every run.
      n_particles, iters: swarm size and iteration budget per run.
      functions: subset of FUNCTIONS names to run (default: all).
      n_workers: thread-pool size per optimizer (default: executor default).
    Returns:
      (log_csv_path, summary_csv_path)
    """
    # --- Basic checks  ---
    if not isinstance(outdir, str) or not outdir:
        raise ValueError("outdir must be a non-empty string.")
    dims = list(dims)
    if not dims or not all(isinstance(n, int) and n > 0 for n in dims):
        raise ValueError("dims must be a non-empty iterable of positive ints.")
    if not isinstance(runs, int) or runs <= 0:
        raise ValueError("runs must be a positive int.")
    if not isinstance(seed0, int):
        raise ValueError("seed0 must be an int.")
    if not isinstance(thresholds, Mapping):
        raise ValueError("thresholds must be a mapping from function name to float|None.")
    names = list(FUNCTIONS.keys()) if functions is None else list(functions)
    unknown = [f for f in names if f not in FUNCTIONS]
    if unknown:
        raise ValueError(f"Unknown benchmark function(s): {unknown}")
    for fname in names:
        if fname not in thresholds:
            raise ValueError(f"Missing threshold for function '{fname}' in thresholds.")

    os.makedirs(outdir, exist_ok=True)
    curves_dir = os.path.join(outdir, "curves")
    os.makedirs(curves_dir, exist_ok=True)

    log_path = os.path.join(outdir, "runs.csv")
    with open(log_path, "w", newline="") as fh:
        w = csv.writer(fh)
        w.writerow(RUN_FIELDS)

        for fname in names:
            meta = FUNCTIONS[fname]
            thr = thresholds.get(fname)

            for n in dims:
                for r in range(runs):
                    rng = np.random.default_rng(run_seed(seed0, fname, n, r))

                    # --- Run PSO ---
                    t0 = time.time()
                    res = pso_run(
                        meta["f"],
                        meta["bounds"],
                        n,
                        n_particles,
                        iters,
                        params=params,
                        rng=rng,
                        n_workers=n_workers,
                    )
                    dt = time.time() - t0

                    # --- Persist per-iteration curve ---
                    curve_path = os.path.join(curves_dir, f"{fname}_n{n}_run{r}.npy")
                    np.save(curve_path, res["gbest_curve"])

                    best_f = float(res["best_f"])
                    success = int(best_f <= thr) if thr is not None else 0
                    w.writerow([
                        fname,
                        n,
                        r,
                        best_f,
                        json.dumps([float(v) for v in res["best_x"]]),
                        int(res["evals_used"]),
                        int(res["iters_run"]),
                        int(res["stopped_early"]),
                        success,
                        float(dt),
                    ])
                    logger.info("%s n=%d run=%d: best_f=%.3e iters=%d (%.2fs)",
                                fname, n, r, best_f, res["iters_run"], dt)

    agg_path = os.path.join(outdir, "summary.csv")
    _aggregate(log_path, agg_path)
    return log_path, agg_path


def _aggregate(log_csv: str, out_csv: str):
    df = pd.read_csv(log_csv)
    g = df.groupby(["func", "n"], as_index=False)
    summ = g["best_f"].agg(mean="mean", median="median", min="min", max="max", std="std")
    sr = g["success"].mean().rename(columns={"success": "success_rate"})
    out = pd.merge(summ, sr, on=["func", "n"])
    out.to_csv(out_csv, index=False)
