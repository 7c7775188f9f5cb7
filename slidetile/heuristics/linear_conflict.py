from __future__ import annotations

from slidetile.domains.board import PuzzleState
from slidetile.heuristics.manhattan import goal_positions, manhattan


def linear_conflict(s: PuzzleState, goal: PuzzleState) -> int:
    """Manhattan + 2 per pair of linearly-conflicting tiles (rows & cols)."""
    pos = goal_positions(goal)
    m = manhattan(s, goal)
    R, C = s.rows, s.cols
    # Row conflicts
    for r in range(R):
        row = s.tiles[r * C:(r + 1) * C]
        tiles = [t for t in row if t != 0 and pos[t][0] == r]
        for i in range(len(tiles)):
            gi = pos[tiles[i]][1]
            for j in range(i + 1, len(tiles)):
                if gi > pos[tiles[j]][1]:
                    m += 2
    # Column conflicts
    for c in range(C):
        col = [s.tiles[c + r * C] for r in range(R)]
        tiles = [t for t in col if t != 0 and pos[t][1] == c]
        for i in range(len(tiles)):
            gi = pos[tiles[i]][0]
            for j in range(i + 1, len(tiles)):
                if gi > pos[tiles[j]][0]:
                    m += 2
    return m
