#!/usr/bin/env python3
"""Shuffle a board, solve it, and print the path with a replay check."""
from __future__ import annotations
import argparse, logging
import random

from slidetile.domains.board import PuzzleState
from slidetile.experiments.runner import HEURISTICS
from slidetile.search.a_star import a_star


def near_solved(rows: int, cols: int) -> PuzzleState:
    """Solved board with the blank swapped one cell left: {1..n-2, 0, n-1}."""
    n = rows * cols
    return PuzzleState(list(range(1, n - 1)) + [0, n - 1], rows, cols)


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve one shuffled sliding-tile board.")
    p.add_argument("--rows", type=int, default=4)
    p.add_argument("--cols", type=int, default=4)
    p.add_argument("--steps", type=int, default=1000, help="Shuffle attempts")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--heuristic", choices=sorted(HEURISTICS), default="combined")
    p.add_argument("--tie_break", choices=["fifo", "lifo", "h", "g"], default="fifo")
    p.add_argument("--verbose", action="store_true", help="Log every expanded state")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    try:
        src = near_solved(args.rows, args.cols)
        des = PuzzleState.solved(args.rows, args.cols)
    except ValueError as e:
        p.error(str(e))

    src.shuffle(args.steps, rng=random.Random(args.seed))
    res = a_star(src, des, hfun=HEURISTICS[args.heuristic], tie_break=args.tie_break)

    print("\nSearching finished.")
    print(f" Begin node: {src}")
    print(f"   End node: {des}")
    print(f"Time elapse: {res.time_sec * 1000:.2f} ms")
    print(f"Searched number: {res.explored}")
    if not res.found:
        print("No path found.")
        return 1
    print(f"Path length: {res.path_length}")
    print("Path of directions:")
    print(" ".join(d.symbol for d in res.moves))
    print("Path of nodes:")
    print("".join(f"->{s}" for s in res.states))
    ok = src.replay(res.moves) == des
    print(f"Path correctness check: {'pass' if ok else 'failed'}")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
