from __future__ import annotations
from typing import List, Tuple

from slidetile.domains.board import Direction, PuzzleState


def reconstruct_path(node: PuzzleState) -> Tuple[List[Direction], List[PuzzleState]]:
    """Walk parent links back to the root; return (moves, states) start-first."""
    moves: List[Direction] = []
    states: List[PuzzleState] = []
    while node is not None:
        states.append(node)
        if node.parent is not None:
            moves.append(node.move)
        node = node.parent
    moves.reverse()
    states.reverse()
    return moves, states
