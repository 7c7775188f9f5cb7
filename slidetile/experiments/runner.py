from __future__ import annotations
import argparse, csv, logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional
import random
from time import perf_counter

from slidetile.domains.board import PuzzleState
from slidetile.heuristics.combined import estimate
from slidetile.heuristics.linear_conflict import linear_conflict
from slidetile.heuristics.manhattan import manhattan
from slidetile.search.a_star import ExpansionRecord, HeuristicFn, SearchEngine

logger = logging.getLogger(__name__)

HEURISTICS: Dict[str, HeuristicFn] = {
    "combined": estimate,
    "manhattan": manhattan,
    "linear_conflict": linear_conflict,
}

HEADER = [
    "algorithm", "heuristic", "rows", "cols", "steps", "seed",
    "explored", "generated", "duplicates", "path_len", "time_sec",
    "peak_open", "tie_break", "termination", "solvable",
]


class SearchBudgetExceeded(RuntimeError):
    def __init__(self, explored: int):
        super().__init__(f"expansion budget exceeded after {explored} states")
        self.explored = explored


@dataclass
class Instance:
    seed: int
    steps: int
    state: PuzzleState


def generate_instances(rows: int, cols: int, steps_list: List[int], per_steps: int,
                       start_seed: int = 0) -> List[Instance]:
    """Seeded shuffles of the solved board, `per_steps` instances per shuffle length."""
    out: List[Instance] = []
    seed = start_seed
    for steps in steps_list:
        for _ in range(per_steps):
            s = PuzzleState.solved(rows, cols)
            s.shuffle(steps, rng=random.Random(seed))
            out.append(Instance(seed=seed, steps=steps, state=s))
            seed += 1
    return out


def make_unsolvable_variant(s: PuzzleState) -> PuzzleState:
    """Swap the first two non-blank tiles, flipping permutation parity."""
    lst = list(s.tiles)
    i = next(k for k, v in enumerate(lst) if v != 0)
    j = next(k for k, v in enumerate(lst[i + 1:], start=i + 1) if v != 0)
    lst[i], lst[j] = lst[j], lst[i]
    return PuzzleState(lst, s.rows, s.cols)


def expansion_cap(limit: Optional[int],
                  goal: Optional[PuzzleState] = None) -> Optional[Callable[[ExpansionRecord], None]]:
    """Abort once `limit` states are explored, unless the last one is the goal."""
    if limit is None:
        return None

    def check(rec: ExpansionRecord) -> None:
        if rec.explored >= limit and rec.state != goal:
            raise SearchBudgetExceeded(rec.explored)
    return check


def solve(start: PuzzleState, goal: PuzzleState, heuristic: str = "combined",
          tie_break: str = "fifo", max_expansions: Optional[int] = None) -> Dict[str, object]:
    """Run one search and flatten it into a CSV-ready dict."""
    engine = SearchEngine(start, goal, hfun=HEURISTICS[heuristic], tie_break=tie_break,
                          on_expand=expansion_cap(max_expansions, goal))
    t0 = perf_counter()
    try:
        r = engine.run()
    except SearchBudgetExceeded as e:
        logger.info("budget hit on %s: %s", start, e)
        return {
            "algorithm": "A*",
            "heuristic": heuristic,
            "explored": e.explored,
            "generated": engine.generated,
            "duplicates": engine.duplicates,
            "time_sec": f"{perf_counter() - t0:.6f}",
            "peak_open": engine.peak_open,
            "tie_break": tie_break,
            "termination": "budget",
        }
    return {
        "algorithm": "A*",
        "heuristic": heuristic,
        "explored": r.explored,
        "generated": r.generated,
        "duplicates": r.duplicates,
        "path_len": r.path_length if r.found else "",
        "time_sec": f"{r.time_sec:.6f}",
        "peak_open": r.peak_open,
        "tie_break": r.tie_break,
        "termination": r.termination,
    }


def write_row(w, res: Dict[str, object], inst: Instance, solvable_flag: int) -> None:
    row = dict(res)
    row.update(rows=inst.state.rows, cols=inst.state.cols, steps=inst.steps,
               seed=inst.seed, solvable=solvable_flag)
    w.writerow([row.get(k, "") for k in HEADER])


def main(argv=None):
    ap = argparse.ArgumentParser(description="A* sliding-tile experiment runner")
    ap.add_argument("--rows", type=int, default=3)
    ap.add_argument("--cols", type=int, default=3)
    ap.add_argument("--heuristic", choices=sorted(HEURISTICS), default="combined")
    ap.add_argument("--steps", type=int, nargs="+", default=[10, 50, 200, 1000],
                    help="Shuffle lengths (random move attempts from the solved board)")
    ap.add_argument("--per_steps", type=int, default=10)
    ap.add_argument("--seed", type=int, default=0, help="First seed")
    ap.add_argument("--tie_break", choices=["fifo", "lifo", "h", "g"], default="fifo")
    ap.add_argument("--max_expansions", type=int, default=200000,
                    help="Per-instance cap on explored states (inclusive)")
    ap.add_argument("--include_unsolvable", action="store_true",
                    help="Also run parity-flipped variants (small boards recommended)")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        goal = PuzzleState.solved(args.rows, args.cols)
    except ValueError as e:
        ap.error(str(e))

    insts = generate_instances(args.rows, args.cols, args.steps, args.per_steps, args.seed)
    args.out.parent.mkdir(parents=True, exist_ok=True)

    with args.out.open("w", newline="") as f:
        w = csv.writer(f); w.writerow(HEADER)
        for inst in insts:
            r = solve(inst.state, goal, args.heuristic, args.tie_break, args.max_expansions)
            write_row(w, r, inst, 1)
            if args.include_unsolvable:
                u = make_unsolvable_variant(inst.state)
                r = solve(u, goal, args.heuristic, args.tie_break, args.max_expansions)
                write_row(w, r, inst, 0)

    print(f"Wrote {args.out} ({len(insts)} instances)")


if __name__ == "__main__":
    main()
