from __future__ import annotations
import math

from slidetile.domains.board import PuzzleState


def sequence_penalty(s: PuzzleState) -> int:
    """Number of cells whose right-hand neighbour (row-major) is not value+1."""
    t = s.tiles
    return sum(1 for i in range(len(t) - 1) if t[i] + 1 != t[i + 1])


def misplaced_tiles(s: PuzzleState, goal: PuzzleState) -> int:
    return sum(1 for a, b in zip(s.tiles, goal.tiles) if a != b)


def geometric_distance(s: PuzzleState) -> int:
    """
    Manhattan distance plus floor(Euclidean distance) of every tile to the cell
    its value belongs in (tile v lives at index v-1). Blank ignored.
    """
    manhattan = geometric = 0
    for idx, tile in enumerate(s.tiles):
        if tile == 0:
            continue
        dr = abs(s.row_of(idx) - s.row_of(tile - 1))
        dc = abs(s.col_of(idx) - s.col_of(tile - 1))
        manhattan += dr + dc
        geometric += math.isqrt(dr * dr + dc * dc)
    return manhattan + geometric


def estimate(s: PuzzleState, goal: PuzzleState) -> int:
    """Unweighted sum of the three signals. Not admissible."""
    return sequence_penalty(s) + misplaced_tiles(s, goal) + geometric_distance(s)
