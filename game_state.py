from typing import List, Optional

import numpy as np

from errors import IllegalMoveError
from game_board import (
    COLS, ROWS, MINE, THEIRS, FIRST_PLAYER, SECOND_PLAYER,
    empty_perspective, flatten, format_board, winning_move,
)


class GameState:
    """
    An immutable snapshot of a Connect-4 position.

    The board is held twice, once from each player's point of view, so that
    the statistics gathered for a position can be shared regardless of which
    colour reaches it. Children are produced with apply_action(); a state is
    never mutated after construction.
    """

    __slots__ = (
        "turn_is_first_player",
        "column_heights",
        "first_perspective",
        "second_perspective",
        "first_player_won",
        "second_player_won",
        "last_move_column",
    )

    def __init__(self, turn_is_first_player: bool = True,
                 column_heights: Optional[np.ndarray] = None,
                 first_perspective: Optional[np.ndarray] = None,
                 second_perspective: Optional[np.ndarray] = None,
                 first_player_won: bool = False,
                 second_player_won: bool = False,
                 last_move_column: Optional[int] = None):
        """
        Initialize a game state. With no arguments this is the empty board,
        first player to move.

        Args:
            turn_is_first_player: Whether the first player moves next
            column_heights: Pieces stacked in each of the 7 columns
            first_perspective: The board as seen by the first player
            second_perspective: The board as seen by the second player
            first_player_won: Whether the first player has four in a row
            second_player_won: Whether the second player has four in a row
            last_move_column: Column of the move that produced this state
        """
        if column_heights is None:
            column_heights = np.zeros(COLS, dtype=np.int8)
        if first_perspective is None:
            first_perspective = empty_perspective()
        if second_perspective is None:
            second_perspective = empty_perspective()

        # Callers hand over ownership; freeze so children can't alias writes.
        for arr in (column_heights, first_perspective, second_perspective):
            arr.flags.writeable = False

        self.turn_is_first_player = turn_is_first_player
        self.column_heights = column_heights
        self.first_perspective = first_perspective
        self.second_perspective = second_perspective
        self.first_player_won = first_player_won
        self.second_player_won = second_player_won
        self.last_move_column = last_move_column

    def __hash__(self):
        return hash(self.canonical_key())

    def __eq__(self, other):
        """Two states are equal when the position and the side to move match."""
        if not isinstance(other, GameState):
            return False
        return (self.turn_is_first_player == other.turn_is_first_player and
                np.array_equal(self.first_perspective, other.first_perspective))

    def __repr__(self):
        return (f"GameState(turn={'first' if self.turn_is_first_player else 'second'}, "
                f"heights={self.column_heights.tolist()}, last_move={self.last_move_column})")

    def __str__(self):
        return format_board(self.first_perspective)

    def is_legal(self, column: int) -> bool:
        """
        Whether this column exists and still has room. Game end is not
        considered here; apply_action also rejects moves on a terminal state.
        """
        if column < 0 or column >= COLS:
            return False
        return int(self.column_heights[column]) < ROWS

    def get_valid_actions(self) -> List[int]:
        """Playable columns in increasing order; empty once the game is over."""
        if self.is_terminal():
            return []
        return [col for col in range(COLS) if self.is_legal(col)]

    def is_terminal(self) -> bool:
        """True once either player has won or every column is full."""
        if self.first_player_won or self.second_player_won:
            return True
        return bool((self.column_heights >= ROWS).all())

    def winner(self) -> Optional[int]:
        """FIRST_PLAYER, SECOND_PLAYER, or None for an undecided or drawn game."""
        if self.first_player_won:
            return FIRST_PLAYER
        if self.second_player_won:
            return SECOND_PLAYER
        return None

    def apply_action(self, column: int) -> 'GameState':
        """
        Drop the mover's piece in a column and return the resulting state.

        Args:
            column: Column to drop the piece in (0-6)

        Returns:
            GameState: The new state, with the turn passed to the opponent

        Raises:
            IllegalMoveError: If the column is full or out of range, or the
                game is already over
        """
        if self.is_terminal():
            raise IllegalMoveError(column, "the game is already over")
        if not self.is_legal(column):
            raise IllegalMoveError(column)

        row = int(self.column_heights[column])
        cell = flatten(row, column)

        heights = self.column_heights.copy()
        heights[column] += 1
        first = self.first_perspective.copy()
        second = self.second_perspective.copy()

        first_won = self.first_player_won
        second_won = self.second_player_won
        if self.turn_is_first_player:
            first[cell] = MINE
            second[cell] = THEIRS
            first_won = winning_move(first)
        else:
            first[cell] = THEIRS
            second[cell] = MINE
            second_won = winning_move(second)

        return GameState(not self.turn_is_first_player, heights, first, second,
                         first_won, second_won, column)

    def mover_perspective(self) -> np.ndarray:
        """The perspective array of the player about to move."""
        if self.turn_is_first_player:
            return self.first_perspective
        return self.second_perspective

    def canonical_key(self) -> bytes:
        """
        Get the turn-relative key used to index search statistics.

        The same arrangement of pieces with the same player to move always
        yields the same 42-byte key, whatever the move order that reached it.
        """
        return self.mover_perspective().tobytes()

    def piece_count(self) -> int:
        return int(self.column_heights.sum())
