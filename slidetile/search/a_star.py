from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple
from time import perf_counter
import heapq
import itertools
import logging

from slidetile.domains.board import MOVES, Direction, PuzzleState
from slidetile.domains.errors import DimensionError
from slidetile.heuristics.combined import estimate
from slidetile.search.path import reconstruct_path

logger = logging.getLogger(__name__)

HeuristicFn = Callable[[PuzzleState, PuzzleState], int]

TIE_BREAKS = ("fifo", "lifo", "h", "g")


@dataclass
class ExpansionRecord:
    """Emitted once per accepted (non-duplicate) state."""
    state: PuzzleState
    g: int
    h: int
    f: int
    explored: int


@dataclass
class SearchResult:
    found: bool
    explored: int
    moves: List[Direction] = field(default_factory=list)
    states: List[PuzzleState] = field(default_factory=list)
    goal_state: Optional[PuzzleState] = None
    generated: int = 0
    duplicates: int = 0
    peak_open: int = 0
    time_sec: float = 0.0
    termination: str = "ok"
    tie_break: str = "fifo"

    @property
    def path_length(self) -> Optional[int]:
        return len(self.moves) if self.found else None


class ExploredSet:
    """Finalized states keyed by their permutation rank (an exact hash)."""
    def __init__(self) -> None:
        self._by_rank: Dict[int, PuzzleState] = {}

    def add(self, s: PuzzleState) -> None:
        self._by_rank[s.rank_hash()] = s

    def __contains__(self, s: PuzzleState) -> bool:
        return s.rank_hash() in self._by_rank

    def __len__(self) -> int:
        return len(self._by_rank)

    def __iter__(self) -> Iterator[PuzzleState]:
        return iter(self._by_rank.values())


class SearchEngine:
    """
    Best-first search ordered by f = g + h.

    The frontier is a binary heap that may hold several entries for the same
    configuration; stale ones are dropped when popped (lazy deletion, no
    decrease-key). Equal f values are ordered by `tie_break`:
      fifo -> older entries first (default)
      lifo -> newer entries first
      h    -> smaller h first
      g    -> larger g first
    and finally by insertion order.
    """
    def __init__(
        self,
        start: PuzzleState,
        goal: PuzzleState,
        hfun: HeuristicFn = estimate,
        tie_break: str = "fifo",
        on_expand: Optional[Callable[[ExpansionRecord], None]] = None,
    ):
        if (start.rows, start.cols) != (goal.rows, goal.cols):
            raise DimensionError(
                f"start is {start.rows}x{start.cols} but goal is {goal.rows}x{goal.cols}")
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"unknown tie_break {tie_break!r}, expected one of {TIE_BREAKS}")
        self.start = start
        self.goal = goal
        self.hfun = hfun
        self.tie_break = tie_break
        self.on_expand = on_expand
        self._reset()

    def _reset(self) -> None:
        """Fresh frontier, explored set and counters; one set per run."""
        self._open: List[Tuple[Tuple[int, int, int], PuzzleState]] = []
        self._counter = itertools.count()
        self.explored = ExploredSet()
        self.generated = 0
        self.duplicates = 0
        self.peak_open = 0

    def _priority(self, s: PuzzleState) -> Tuple[int, int, int]:
        ctr = next(self._counter)
        if self.tie_break == "h":    return (s.f, s.h, ctr)
        if self.tie_break == "g":    return (s.f, -s.g, ctr)
        if self.tie_break == "lifo": return (s.f, 0, -ctr)
        return (s.f, 0, ctr)

    def _push(self, s: PuzzleState) -> None:
        heapq.heappush(self._open, (self._priority(s), s))
        self.peak_open = max(self.peak_open, len(self._open))

    def _pop_unexplored(self) -> Optional[PuzzleState]:
        while self._open:
            _, s = heapq.heappop(self._open)
            if s in self.explored:
                self.duplicates += 1
                continue
            return s
        return None

    def _emit(self, s: PuzzleState) -> None:
        rec = ExpansionRecord(state=s, g=s.g, h=s.h, f=s.f, explored=len(self.explored))
        logger.debug("Searching: %s G:%d H:%d F:%d total: %d",
                     s, rec.g, rec.h, rec.f, rec.explored)
        if self.on_expand is not None:
            self.on_expand(rec)

    def run(self) -> SearchResult:
        self._reset()
        t0 = perf_counter()
        start = self.start
        start.g = 0
        start.h = self.hfun(start, self.goal)
        start.parent = None
        start.move = Direction.NONE
        self._push(start)

        while True:
            cur = self._pop_unexplored()
            if cur is None:
                break
            self.explored.add(cur)
            self._emit(cur)

            if cur == self.goal:
                moves, states = reconstruct_path(cur)
                result = self._result(True, t0, "ok", cur, moves, states)
                logger.info("Goal reached: %d moves, %d explored, %.2f ms",
                            len(moves), result.explored, result.time_sec * 1000)
                return result

            for d in MOVES:
                if not cur.can_move(d):
                    continue
                adj = cur.neighbor(d)
                if adj in self.explored:
                    continue
                adj.parent = cur
                adj.move = d
                adj.g = cur.g + 1
                adj.h = self.hfun(adj, self.goal)
                self.generated += 1
                self._push(adj)

        # Open exhausted without finding goal
        result = self._result(False, t0, "exhausted")
        logger.info("No path found: %d explored, %.2f ms",
                    result.explored, result.time_sec * 1000)
        return result

    def _result(
        self,
        found: bool,
        t0: float,
        termination: str,
        goal_state: Optional[PuzzleState] = None,
        moves: Optional[List[Direction]] = None,
        states: Optional[List[PuzzleState]] = None,
    ) -> SearchResult:
        return SearchResult(
            found=found,
            explored=len(self.explored),
            moves=moves or [],
            states=states or [],
            goal_state=goal_state,
            generated=self.generated,
            duplicates=self.duplicates,
            peak_open=self.peak_open,
            time_sec=perf_counter() - t0,
            termination=termination,
            tie_break=self.tie_break,
        )


def a_star(
    start: PuzzleState,
    goal: PuzzleState,
    hfun: HeuristicFn = estimate,
    tie_break: str = "fifo",
    on_expand: Optional[Callable[[ExpansionRecord], None]] = None,
) -> SearchResult:
    """Solve one instance with a fresh engine."""
    return SearchEngine(start, goal, hfun=hfun, tie_break=tie_break, on_expand=on_expand).run()
