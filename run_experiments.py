#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

PY = sys.executable


def run(desc, cmd):
    print(f"\n=== {desc} ===\n{' '.join(cmd)}")
    r = subprocess.run(cmd)
    if r.returncode != 0:
        sys.exit(r.returncode)


def main():
    Path("results").mkdir(exist_ok=True)
    for heur in ("combined", "manhattan", "linear_conflict"):
        run(f"3x3 {heur}", [PY, "-m", "slidetile.experiments.runner", "--rows", "3", "--cols", "3",
                            "--steps", "10", "50", "200", "1000", "--per_steps", "10",
                            "--heuristic", heur, "--out", f"results/p8_{heur}.csv"])
    run("2x3 unsolvable", [PY, "-m", "slidetile.experiments.runner", "--rows", "2", "--cols", "3",
                           "--steps", "20", "100", "--per_steps", "5", "--include_unsolvable",
                           "--out", "results/r2x3_unsolvable.csv"])
    run("Summary", [PY, "-m", "slidetile.experiments.analyze", "results/*.csv",
                    "--all", "--out", "results/summary/summary.csv"])
    run("Plots", [PY, "-m", "slidetile.experiments.plot",
                  "results/p8_combined.csv", "results/p8_manhattan.csv", "results/p8_linear_conflict.csv"])


if __name__ == "__main__":
    main()
