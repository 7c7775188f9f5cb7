from __future__ import annotations
from typing import Dict, Tuple

from slidetile.domains.board import PuzzleState


def goal_positions(goal: PuzzleState) -> Dict[int, Tuple[int, int]]:
    return {t: divmod(i, goal.cols) for i, t in enumerate(goal.tiles) if t != 0}


def manhattan(s: PuzzleState, goal: PuzzleState) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    pos = goal_positions(goal)
    dist = 0
    for idx, tile in enumerate(s.tiles):
        if tile == 0:
            continue
        r, c = divmod(idx, s.cols)
        gr, gc = pos[tile]
        dist += abs(r - gr) + abs(c - gc)
    return dist
