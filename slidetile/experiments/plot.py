#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path
import numpy as np
import pandas as pd
import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from slidetile.experiments.analyze import load_many


def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1) / np.sqrt(n)


def series(df: pd.DataFrame, metric: str):
    """{(heuristic, board): (steps, means, sems)} over solved rows."""
    out = {}
    ok = df[(df["termination"] == "ok") & (df.get("solvable", 1) == 1)]
    ok = ok.assign(board=ok["rows"].astype(int).astype(str) + "x" + ok["cols"].astype(int).astype(str))
    for (heur, board), g in ok.groupby(["heuristic", "board"]):
        agg = g.groupby("steps")[metric].agg(["mean", sem]).sort_index()
        out[(heur, board)] = (agg.index.to_numpy(), agg["mean"].to_numpy(), agg["sem"].to_numpy())
    return out


def plot_metric(ax, df: pd.DataFrame, metric: str):
    for (heur, board), (xs, ys, es) in sorted(series(df, metric).items()):
        ax.errorbar(xs, ys, yerr=es, marker="o", capsize=3, label=f"{heur} | {board}")
    ax.set_xlabel("Shuffle steps")
    ax.set_ylabel(metric)
    ax.set_xscale("log")
    ax.set_title(f"{metric} vs shuffle steps (mean ± SEM)")
    ax.grid(True)
    ax.legend()


def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    df = load_many(args.csv)
    if df.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    outdir = Path(args.save)
    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem

    # Combined 3-panel figure
    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, metric in zip(axes, ["explored", "path_len", "time_sec"]):
        plot_metric(ax, df, metric)
    plt.tight_layout()
    save_fig(fig, outdir, f"{base}_combined")
    plt.close(fig)

    # Separate single-panel figures
    for metric in ["explored", "generated", "duplicates", "path_len", "time_sec"]:
        fig, ax = plt.subplots(figsize=(8, 6))
        plot_metric(ax, df, metric)
        plt.tight_layout()
        save_fig(fig, outdir, f"{base}_{metric}")
        plt.close(fig)

    if args.show:
        plt.show()


if __name__ == "__main__":
    main()
