#!/usr/bin/env python3
import argparse, os
from pathlib import Path
import random
import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from slidetile.domains.board import PuzzleState
from slidetile.experiments.runner import HEURISTICS
from slidetile.search.a_star import a_star


def draw_board(state: PuzzleState, out_path: Path, title: str = ""):
    R, C = state.rows, state.cols
    plt.figure(figsize=(C, R))
    ax = plt.gca()
    ax.set_xlim(0, C); ax.set_ylim(0, R)
    ax.set_xticks([]); ax.set_yticks([]); ax.invert_yaxis()
    # grid
    for i in range(R + 1):
        ax.plot([0, C], [i, i], linewidth=1)
    for i in range(C + 1):
        ax.plot([i, i], [0, R], linewidth=1)
    # tiles
    for idx, t in enumerate(state.tiles):
        if t == 0: continue
        r, c = divmod(idx, C)
        ax.text(c + 0.5, r + 0.6, str(t), ha="center", va="center", fontsize=16)
    if title:
        ax.set_title(title, fontsize=10)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


def save_frames(states, outdir: Path, moves=None):
    paths = []
    for i, s in enumerate(states):
        title = f"step {i}" + (f" ({moves[i - 1].name})" if moves and i > 0 else "")
        path = outdir / f"step_{i:03d}.png"
        draw_board(s, path, title)
        paths.append(path)
    return paths


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve one instance and save board images along the path.")
    p.add_argument("--rows", type=int, default=3)
    p.add_argument("--cols", type=int, default=3)
    p.add_argument("--heuristic", choices=sorted(HEURISTICS), default="combined")
    p.add_argument("--steps", type=int, default=30)
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--outdir", default="results/figs/example_path")
    args = p.parse_args(argv)

    goal = PuzzleState.solved(args.rows, args.cols)
    start = goal.copy()
    start.shuffle(args.steps, rng=random.Random(args.seed))

    res = a_star(start, goal, hfun=HEURISTICS[args.heuristic])
    if not res.found:
        print("No path (frontier exhausted).")
        return

    outdir = Path(args.outdir)
    save_frames(res.states, outdir, res.moves)
    print(f"Saved {len(res.states)} frames to {outdir}")


if __name__ == "__main__":
    main()
