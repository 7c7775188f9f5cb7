from __future__ import annotations
from enum import IntEnum
from math import factorial
from typing import Iterable, List, Optional, Sequence
import random

from slidetile.domains.errors import (
    DimensionError,
    IllegalMoveError,
    InvalidTilesError,
    MissingBlankError,
    SizeMismatchError,
)


class Direction(IntEnum):
    """Displacement of the blank. NONE is a no-op."""
    NONE = 0
    LEFT = 1
    UP = 2
    RIGHT = 3
    DOWN = 4

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def symbol(self) -> str:
        return self.name[0] if self != Direction.NONE else ""


_OPPOSITE = {
    Direction.NONE: Direction.NONE,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

# Expansion order used by the search
MOVES = (Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN)


class PuzzleState:
    """
    One R×C sliding-tile configuration (0 is the blank) plus the bookkeeping
    the search attaches to it: g, h, the move that produced it and its parent.
    Two states are equal iff their tiles are equal.
    """
    def __init__(self, values: Iterable[int], rows: int, cols: int):
        tiles = list(values)
        if rows < 2 or cols < 2:
            raise DimensionError(f"dimension is at least 2x2, got {rows}x{cols}")
        if len(tiles) != rows * cols:
            raise SizeMismatchError(
                f"value size must equal rows*cols ({rows * cols}), got {len(tiles)}")
        if 0 not in tiles:
            raise MissingBlankError("value 0 not found")
        if sorted(tiles) != list(range(rows * cols)):
            raise InvalidTilesError(f"tiles must be a permutation of 0..{rows * cols - 1}")

        self.rows = rows
        self.cols = cols
        self.tiles: List[int] = tiles
        self.blank_index = tiles.index(0)

        self.g = 0
        self.h = 0
        self.parent: Optional[PuzzleState] = None
        self.move = Direction.NONE

    @classmethod
    def solved(cls, rows: int, cols: int) -> "PuzzleState":
        """Standard goal: 1..n-1 followed by the blank."""
        return cls(list(range(1, rows * cols)) + [0], rows, cols)

    # ---------- geometry ----------
    @property
    def size(self) -> int:
        return len(self.tiles)

    @property
    def f(self) -> int:
        return self.g + self.h

    def row_of(self, i: int) -> int:
        return i // self.cols

    def col_of(self, i: int) -> int:
        return i % self.cols

    def _displacement(self, direction: Direction) -> int:
        if direction == Direction.LEFT:  return -1
        if direction == Direction.UP:    return -self.cols
        if direction == Direction.RIGHT: return 1
        if direction == Direction.DOWN:  return self.cols
        return 0

    # ---------- transitions ----------
    def can_move(self, direction: Direction) -> bool:
        if direction == Direction.LEFT:
            return self.col_of(self.blank_index) != 0
        if direction == Direction.UP:
            return self.row_of(self.blank_index) != 0
        if direction == Direction.RIGHT:
            return self.col_of(self.blank_index) != self.cols - 1
        if direction == Direction.DOWN:
            return self.row_of(self.blank_index) != self.rows - 1
        return direction == Direction.NONE

    def apply_move(self, direction: Direction) -> None:
        """Swap the blank with the tile in the target cell."""
        if not self.can_move(direction):
            raise IllegalMoveError(
                f"cannot move {direction.name} from {self.to_display_string()}")
        z = self.blank_index
        j = z + self._displacement(direction)
        self.tiles[z], self.tiles[j] = self.tiles[j], self.tiles[z]
        self.blank_index = j

    def copy(self) -> "PuzzleState":
        """Copy of the tiles only; search bookkeeping starts fresh."""
        other = PuzzleState.__new__(PuzzleState)
        other.rows = self.rows
        other.cols = self.cols
        other.tiles = list(self.tiles)
        other.blank_index = self.blank_index
        other.g = 0
        other.h = 0
        other.parent = None
        other.move = Direction.NONE
        return other

    def neighbor(self, direction: Direction) -> "PuzzleState":
        nxt = self.copy()
        nxt.apply_move(direction)
        return nxt

    def replay(self, moves: Iterable[Direction]) -> "PuzzleState":
        out = self.copy()
        for d in moves:
            out.apply_move(d)
        return out

    # ---------- instance generation ----------
    def shuffle(self, steps: int = 1000, rng: Optional[random.Random] = None) -> None:
        """Random walk of `steps` attempts; illegal picks are skipped."""
        rng = rng or random.Random()
        for _ in range(steps):
            d = Direction(rng.randint(1, 4))
            if self.can_move(d):
                self.apply_move(d)

    # ---------- solvability ----------
    def _parity(self) -> int:
        arr = [x for x in self.tiles if x != 0]
        inv = 0
        for i in range(len(arr)):
            for j in range(i + 1, len(arr)):
                if arr[i] > arr[j]:
                    inv += 1
        if self.cols % 2 == 1:
            return inv % 2
        blank_row_from_bottom = self.rows - self.row_of(self.blank_index)  # 1-based
        return (inv + blank_row_from_bottom) % 2

    def is_solvable(self, goal: Optional["PuzzleState"] = None) -> bool:
        """
        Standard parity rule, relative to `goal` (default: the solved board):
        - width odd  -> inversion parity must match
        - width even -> parity of (inversions + blank row from bottom) must match
        """
        goal = goal or PuzzleState.solved(self.rows, self.cols)
        if (goal.rows, goal.cols) != (self.rows, self.cols):
            raise DimensionError("goal dimensions differ")
        return self._parity() == goal._parity()

    # ---------- hashing / equality ----------
    def rank_hash(self) -> int:
        """Lexicographic rank of the tile permutation (Cantor expansion)."""
        return permutation_rank(self.tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self.tiles == other.tiles

    __hash__ = None  # mutable buffer; key by rank_hash() instead

    # ---------- rendering ----------
    def to_display_string(self) -> str:
        return "{" + ",".join(str(t) for t in self.tiles) + "}"

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return f"PuzzleState({self.tiles!r}, rows={self.rows}, cols={self.cols})"


def permutation_rank(values: Sequence[int]) -> int:
    n = len(values)
    rank = 0
    for i in range(n):
        smaller = 0
        for j in range(i + 1, n):
            if values[j] < values[i]:
                smaller += 1
        rank += smaller * factorial(n - 1 - i)
    return rank
