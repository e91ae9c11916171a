from __future__ import annotations
from pathlib import Path
import argparse, os
from math import isfinite

import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from swarmpso.config import PRESETS
from swarmpso.experiment import run_suite
from swarmpso.functions import FUNCTIONS, SUCCESS_THRESHOLDS
from swarmpso.logging_config import get_logger, log_separator

logger = get_logger("grid")


# ---------- Simple boxplot helper  ----------
def boxplot_from_runs(runs_csv: str, outpath: str):
    """Create a compact boxplot of final best fitness per (function, n)."""
    df = pd.read_csv(runs_csv)
    df["combo"] = df["func"] + "_n" + df["n"].astype(str)
    order = sorted(df["combo"].unique())
    data = [df.loc[df["combo"] == c, "best_f"].values for c in order]
    plt.figure()
    plt.boxplot(data, showfliers=False)
    plt.xticks(range(1, len(order) + 1), order, rotation=30, ha="right")
    plt.ylabel("Final best fitness")
    plt.title("PSO final fitness across runs")
    os.makedirs(os.path.dirname(outpath) or ".", exist_ok=True)
    plt.savefig(outpath, bbox_inches="tight")
    plt.close()


# ---------- CLI ----------
def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Threaded PSO benchmark grid runner.")

    ap.add_argument("--outdir", default=None, help="output directory (default: ./results)")
    ap.add_argument("--runs", type=int, default=10)
    ap.add_argument("--dims", type=int, nargs="+", default=[2, 10])
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--functions", nargs="+", choices=sorted(FUNCTIONS), default=None)
    ap.add_argument("--preset", choices=sorted(PRESETS), default="default",
                    help="Base control-parameter profile.")
    ap.add_argument("--swarm", type=int, default=50)
    ap.add_argument("--iters", type=int, default=500)
    ap.add_argument("--workers", type=int, default=None, help="threads per optimizer")

    # Optional manual overrides: use None so they only apply if explicitly set
    ap.add_argument("--w0", type=float, default=None, help="initial inertia weight")
    ap.add_argument("--w1", type=float, default=None, help="final inertia weight")
    ap.add_argument("--c1", type=float, default=None)
    ap.add_argument("--c2", type=float, default=None)
    ap.add_argument("--vmax0", type=float, default=None, help="initial vmax fraction of range")
    ap.add_argument("--vmax1", type=float, default=None, help="final vmax fraction of range")
    ap.add_argument("--precision", type=float, default=None)
    ap.add_argument("--stagnation", type=int, default=None)
    ap.add_argument("--no-boxplots", dest="no_boxplots", action="store_true")
    return ap.parse_args(argv)


def make_params(args):
    """Preset with every finite CLI override applied."""
    def finite(v):
        return v if v is not None and isfinite(v) else None

    return PRESETS[args.preset].with_overrides(
        initial_inertia=finite(args.w0),
        final_inertia=finite(args.w1),
        cognitive=finite(args.c1),
        social=finite(args.c2),
        initial_vmax_frac=finite(args.vmax0),
        final_vmax_frac=finite(args.vmax1),
        target_precision=finite(args.precision),
        stagnation_iters=args.stagnation,
    )


def main(argv=None):
    args = parse_args(argv)
    outdir = Path(args.outdir) if args.outdir else Path.cwd() / "results"
    outdir.mkdir(parents=True, exist_ok=True)

    params = make_params(args)
    log_separator(logger, "PSO grid")
    logger.info("Running grid with %s", params)

    runs_csv, summary_csv = run_suite(
        outdir=str(outdir),
        dims=tuple(args.dims),
        runs=args.runs,
        seed0=args.seed,
        thresholds=SUCCESS_THRESHOLDS,
        params=params,
        n_particles=args.swarm,
        iters=args.iters,
        functions=args.functions,
        n_workers=args.workers,
    )
    if not args.no_boxplots:
        boxplot_from_runs(runs_csv, str(outdir / "boxplot.png"))
    logger.info("Wrote %s and %s", runs_csv, summary_csv)


if __name__ == "__main__":
    main()
