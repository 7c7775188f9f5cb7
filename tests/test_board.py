import itertools
import random

import pytest

from slidetile.domains.board import MOVES, Direction, PuzzleState, permutation_rank
from slidetile.domains.errors import (
    DimensionError,
    IllegalMoveError,
    InvalidTilesError,
    MissingBlankError,
    PuzzleError,
    SizeMismatchError,
)


def test_minimum_board_constructs() -> None:
    s = PuzzleState([0, 1, 2, 3], 2, 2)
    assert s.blank_index == 0
    assert s.tiles[s.blank_index] == 0


@pytest.mark.parametrize(
    "values, rows, cols, error",
    [
        ([0, 1], 1, 2, DimensionError),
        ([0, 1, 2], 3, 1, DimensionError),
        ([0, 1, 2], 2, 2, SizeMismatchError),
        ([1, 2, 3, 4], 2, 2, MissingBlankError),
        ([0, 1, 1, 2], 2, 2, InvalidTilesError),
    ],
)
def test_construction_errors(values, rows, cols, error) -> None:
    with pytest.raises(error):
        PuzzleState(values, rows, cols)
    assert issubclass(error, PuzzleError)
    assert issubclass(error, ValueError)


def test_can_move_respects_edges() -> None:
    s = PuzzleState([0, 1, 2, 3, 4, 5, 6, 7, 8], 3, 3)
    assert not s.can_move(Direction.LEFT)
    assert not s.can_move(Direction.UP)
    assert s.can_move(Direction.RIGHT)
    assert s.can_move(Direction.DOWN)
    assert s.can_move(Direction.NONE)

    corner = PuzzleState.solved(3, 3)
    assert corner.can_move(Direction.LEFT)
    assert corner.can_move(Direction.UP)
    assert not corner.can_move(Direction.RIGHT)
    assert not corner.can_move(Direction.DOWN)


def test_apply_move_swaps_blank() -> None:
    s = PuzzleState([0, 1, 2, 3, 4, 5], 2, 3)
    s.apply_move(Direction.RIGHT)
    assert s.tiles == [1, 0, 2, 3, 4, 5]
    assert s.blank_index == 1
    s.apply_move(Direction.DOWN)
    assert s.tiles == [1, 4, 2, 3, 0, 5]
    assert s.blank_index == 4
    s.apply_move(Direction.NONE)
    assert s.blank_index == 4


def test_illegal_move_fails_loudly() -> None:
    s = PuzzleState([0, 1, 2, 3], 2, 2)
    with pytest.raises(IllegalMoveError):
        s.apply_move(Direction.UP)
    assert s.tiles == [0, 1, 2, 3]
    assert s.blank_index == 0


def test_blank_index_tracks_random_moves() -> None:
    rng = random.Random(3)
    s = PuzzleState.solved(3, 4)
    for _ in range(200):
        d = rng.choice(MOVES)
        if s.can_move(d):
            s.apply_move(d)
        assert s.tiles[s.blank_index] == 0


def test_moves_are_reversible_and_neighbor_does_not_mutate() -> None:
    s = PuzzleState.solved(3, 4)
    s.shuffle(50, rng=random.Random(11))
    before = list(s.tiles)
    for d in MOVES:
        if not s.can_move(d):
            continue
        n = s.neighbor(d)
        assert n != s
        assert n.neighbor(d.opposite) == s
    assert s.tiles == before


def test_rank_hash_is_a_bijection() -> None:
    ranks = set()
    for perm in itertools.permutations(range(6)):
        ranks.add(PuzzleState(perm, 2, 3).rank_hash())
    assert ranks == set(range(720))


def test_rank_hash_known_values() -> None:
    assert PuzzleState([0, 1, 2, 3], 2, 2).rank_hash() == 0
    assert PuzzleState([3, 2, 1, 0], 2, 2).rank_hash() == 23
    assert PuzzleState.solved(3, 3).rank_hash() == 46233
    assert permutation_rank([1, 0, 2]) == 2


def test_equality_depends_only_on_tiles() -> None:
    a = PuzzleState.solved(3, 3)
    b = PuzzleState.solved(3, 3)
    b.g, b.h, b.parent, b.move = 7, 3, a, Direction.LEFT
    assert a == a
    assert a == b and b == a
    assert a.rank_hash() == b.rank_hash()
    assert a != a.neighbor(Direction.UP)
    assert a != list(a.tiles)


def test_states_are_not_python_hashable() -> None:
    with pytest.raises(TypeError):
        hash(PuzzleState.solved(2, 2))


def test_display_string_is_compact() -> None:
    s = PuzzleState([1, 2, 3, 0], 2, 2)
    assert s.to_display_string() == "{1,2,3,0}"
    assert str(s) == "{1,2,3,0}"
    assert PuzzleState.solved(3, 3).to_display_string() == "{1,2,3,4,5,6,7,8,0}"


def test_shuffle_is_seeded_and_stays_solvable() -> None:
    a = PuzzleState.solved(4, 4)
    b = PuzzleState.solved(4, 4)
    a.shuffle(rng=random.Random(42))
    b.shuffle(rng=random.Random(42))
    assert a == b
    assert a.tiles[a.blank_index] == 0
    assert a.is_solvable()


def test_is_solvable_detects_parity_flip() -> None:
    assert PuzzleState.solved(2, 2).is_solvable()
    assert not PuzzleState([2, 1, 3, 0], 2, 2).is_solvable()
    assert not PuzzleState([2, 1, 3, 4, 5, 6, 7, 8, 0], 3, 3).is_solvable()
    goal = PuzzleState([2, 1, 3, 0], 2, 2)
    assert PuzzleState([2, 1, 3, 0], 2, 2).is_solvable(goal)


def test_direction_helpers() -> None:
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.NONE.opposite is Direction.NONE
    assert [d.symbol for d in MOVES] == ["L", "U", "R", "D"]


def test_replay_applies_moves_on_a_copy() -> None:
    s = PuzzleState.solved(2, 2)
    out = s.replay([Direction.UP, Direction.LEFT])
    assert out.tiles == [0, 1, 3, 2]
    assert s == PuzzleState.solved(2, 2)
