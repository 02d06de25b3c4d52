"""
Grid geometry, cell encoding and win detection for the 7x6 board.

Cells are stored row-major in flat arrays of length 42 (index = row * 7 + col,
row 0 at the bottom). A board is always seen from one player's perspective:
MINE marks that player's pieces, THEIRS the opponent's.
"""

import numpy as np

ROWS = 6
COLS = 7
WIN_LENGTH = 4
NUM_CELLS = ROWS * COLS

# Byte values so a perspective array serializes to a readable key.
EMPTY = ord('0')
MINE = ord('+')
THEIRS = ord('-')

FIRST_PLAYER = 1
SECOND_PLAYER = 2

PIECE_CHARS = {EMPTY: '.', MINE: 'R', THEIRS: 'Y'}


def flatten(row, col):
    """
    Flattens a (row, column) pair into an index into a perspective array.
    :param row: The row, 0 being the bottom of the board.
    :param col: The column.
    :return: The flat index.
    """
    return row * COLS + col


def empty_perspective():
    """
    Returns a fresh perspective array with every cell empty.
    """
    return np.full(NUM_CELLS, EMPTY, dtype=np.uint8)


def _mine_grid(perspective):
    return np.asarray(perspective).reshape(ROWS, COLS) == MINE


def _scan(mine, d_row, d_col):
    """
    Checks every run of WIN_LENGTH cells in direction (d_row, d_col).

    Only starting cells whose whole run fits on the board are considered, so
    no slice reaches outside the grid.
    """
    span = WIN_LENGTH - 1
    row_lo = span if d_row < 0 else 0
    row_hi = ROWS - (span if d_row > 0 else 0)
    col_lo = span if d_col < 0 else 0
    col_hi = COLS - (span if d_col > 0 else 0)

    run = np.ones((row_hi - row_lo, col_hi - col_lo), dtype=bool)
    for i in range(WIN_LENGTH):
        r, c = i * d_row, i * d_col
        run &= mine[row_lo + r:row_hi + r, col_lo + c:col_hi + c]
    return bool(run.any())


def vertical_win(perspective):
    """
    Whether MINE holds four stacked cells in some column (start rows 0-2).
    :param perspective: A flat perspective array.
    """
    return _scan(_mine_grid(perspective), 1, 0)


def horizontal_win(perspective):
    """
    Whether MINE holds four adjacent cells in some row (start columns 0-3).
    :param perspective: A flat perspective array.
    """
    return _scan(_mine_grid(perspective), 0, 1)


def rising_diagonal_win(perspective):
    """
    Whether MINE holds four cells going up and to the right.
    :param perspective: A flat perspective array.
    """
    return _scan(_mine_grid(perspective), 1, 1)


def falling_diagonal_win(perspective):
    """
    Whether MINE holds four cells going up and to the left (start columns 3-6).
    :param perspective: A flat perspective array.
    """
    return _scan(_mine_grid(perspective), 1, -1)


def winning_move(perspective):
    """
    Checks a perspective array to see if its owner has four in a row.
    :param perspective: A flat perspective array.
    :return: Whether MINE has a four-in-a-row in any orientation.
    """
    mine = _mine_grid(perspective)
    return (
        _scan(mine, 1, 0)
        or _scan(mine, 0, 1)
        or _scan(mine, 1, 1)
        or _scan(mine, 1, -1)
    )


def format_board(first_perspective):
    """
    Renders a board top row first, with R for the first player and Y for the second.
    :param first_perspective: The first player's perspective array.
    :return: A multi-line string.
    """
    grid = np.asarray(first_perspective).reshape(ROWS, COLS)
    lines = [" ".join(PIECE_CHARS[int(cell)] for cell in grid[row])
             for row in range(ROWS - 1, -1, -1)]
    lines.append("-" * (COLS * 2 - 1))
    lines.append(" ".join(str(col + 1) for col in range(COLS)))
    return "\n".join(lines)


def print_board(first_perspective):
    """
    Prints the state of the board to the console.
    """
    print(format_board(first_perspective))
