import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import random

import numpy as np
import pytest
from errors import IllegalMoveError
from game_board import (
    EMPTY, MINE, THEIRS, FIRST_PLAYER, SECOND_PLAYER, ROWS, COLS,
    flatten, winning_move,
)
from game_state import GameState


def play(moves, state=None):
    state = state or GameState()
    for col in moves:
        state = state.apply_action(col)
    return state


def random_game(seed):
    """Yield every state of one uniformly random game."""
    rng = random.Random(seed)
    state = GameState()
    yield state
    while not state.is_terminal():
        state = state.apply_action(rng.choice(state.get_valid_actions()))
        yield state


def test_initial_state():
    state = GameState()
    assert state.turn_is_first_player
    assert state.column_heights.tolist() == [0] * COLS
    assert state.last_move_column is None
    assert not state.is_terminal()
    assert state.winner() is None
    assert state.get_valid_actions() == list(range(COLS))


def test_apply_places_piece_in_both_perspectives():
    state = GameState().apply_action(3)
    cell = flatten(0, 3)
    assert state.first_perspective[cell] == MINE
    assert state.second_perspective[cell] == THEIRS
    assert state.column_heights[3] == 1
    assert state.last_move_column == 3
    assert not state.turn_is_first_player

    state = state.apply_action(3)
    cell = flatten(1, 3)
    assert state.first_perspective[cell] == THEIRS
    assert state.second_perspective[cell] == MINE
    assert state.turn_is_first_player


def test_vertical_win_for_first_player():
    state = play([3, 0, 3, 0, 3, 0, 3])
    assert state.first_player_won
    assert not state.second_player_won
    assert state.is_terminal()
    assert state.winner() == FIRST_PLAYER


def test_alternating_in_one_column_is_not_a_win():
    state = play([3, 3, 3, 3])
    assert not state.first_player_won
    assert not state.second_player_won
    assert not state.is_terminal()


def test_horizontal_win_for_second_player():
    state = play([6, 0, 6, 1, 5, 2, 6, 3])
    assert state.second_player_won
    assert not state.first_player_won
    assert state.winner() == SECOND_PLAYER


def test_diagonal_win_through_apply():
    # First player builds (0,0) (1,1) (2,2) (3,3).
    state = play([0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3])
    assert state.first_player_won
    assert not state.second_player_won
    assert state.winner() == FIRST_PLAYER


def test_falling_diagonal_win_through_apply():
    # First player builds (0,3) (1,2) (2,1) (3,0).
    moves = [3, 2, 2, 1, 1, 0, 1, 0, 0, 6, 0]
    state = play(moves[:-1])
    assert not state.is_terminal()

    state = state.apply_action(moves[-1])
    assert state.first_player_won
    assert not state.second_player_won
    assert state.winner() == FIRST_PLAYER


def test_full_column_raises_and_leaves_state_unchanged():
    state = play([0] * ROWS)
    assert not state.is_legal(0)
    heights = state.column_heights.copy()
    key = state.canonical_key()

    with pytest.raises(IllegalMoveError) as excinfo:
        state.apply_action(0)

    assert excinfo.value.column == 0
    assert np.array_equal(state.column_heights, heights)
    assert state.canonical_key() == key


def test_out_of_range_columns_are_illegal():
    state = GameState()
    assert not state.is_legal(-1)
    assert not state.is_legal(COLS)
    with pytest.raises(IllegalMoveError):
        state.apply_action(COLS)


def test_no_moves_after_the_game_is_won():
    state = play([3, 0, 3, 0, 3, 0, 3])
    assert state.is_legal(1)
    assert state.get_valid_actions() == []
    with pytest.raises(IllegalMoveError):
        state.apply_action(1)


def test_parent_is_not_mutated():
    parent = play([2, 4])
    snapshot = (parent.first_perspective.copy(), parent.column_heights.copy())
    parent.apply_action(2)
    assert np.array_equal(parent.first_perspective, snapshot[0])
    assert np.array_equal(parent.column_heights, snapshot[1])


def test_arrays_are_read_only():
    state = GameState().apply_action(0)
    with pytest.raises(ValueError):
        state.first_perspective[10] = MINE
    with pytest.raises(ValueError):
        state.column_heights[1] = 3


@pytest.mark.parametrize("seed", range(5))
def test_perspectives_stay_dual(seed):
    for state in random_game(seed):
        first, second = state.first_perspective, state.second_perspective
        assert np.array_equal(first == MINE, second == THEIRS)
        assert np.array_equal(first == THEIRS, second == MINE)
        assert np.array_equal(first == EMPTY, second == EMPTY)
        assert not (state.first_player_won and state.second_player_won)


@pytest.mark.parametrize("seed", range(3))
def test_full_column_stays_illegal(seed):
    full = set()
    for state in random_game(seed):
        for col in full:
            assert not state.is_legal(col)
        full |= {c for c in range(COLS) if state.column_heights[c] == ROWS}


def test_transpositions_share_a_canonical_key():
    a = play([3, 2, 4])
    b = play([4, 2, 3])
    assert a.canonical_key() == b.canonical_key()
    assert a == b
    assert hash(a) == hash(b)
    assert a.last_move_column != b.last_move_column


def test_side_to_move_changes_the_key():
    a = play([3, 2])
    b = play([3, 2, 0])
    assert a.canonical_key() != b.canonical_key()
    assert a != b


def test_canonical_key_is_the_movers_view():
    state = play([3])
    key = state.canonical_key()
    assert isinstance(key, bytes)
    assert len(key) == 42
    # Second player to move: the first player's piece is theirs.
    assert key.decode()[3] == '-'
    assert set(key.decode()) <= {'0', '+', '-'}
    assert state.apply_action(5).canonical_key().decode()[3] == '+'


def test_full_board_without_a_line_is_a_draw():
    # Pairs of columns alternate colour each row: no four in any direction.
    first = np.empty(ROWS * COLS, dtype=np.uint8)
    for row in range(ROWS):
        for col in range(COLS):
            first[flatten(row, col)] = MINE if (col // 2 + row) % 2 == 0 else THEIRS
    second = np.where(first == MINE, THEIRS, MINE).astype(np.uint8)
    assert not winning_move(first) and not winning_move(second)

    state = GameState(True, np.full(COLS, ROWS, dtype=np.int8), first, second)
    assert state.is_terminal()
    assert state.winner() is None
    assert state.get_valid_actions() == []
