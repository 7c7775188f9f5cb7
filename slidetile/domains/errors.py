from __future__ import annotations


class PuzzleError(ValueError):
    """Base class for every sliding-tile contract violation."""


class DimensionError(PuzzleError):
    pass


class SizeMismatchError(PuzzleError):
    pass


class MissingBlankError(PuzzleError):
    pass


class InvalidTilesError(PuzzleError):
    """Tiles are not a permutation of 0..rows*cols-1."""


class IllegalMoveError(PuzzleError):
    """A move was applied in a direction for which can_move() is False."""
