import sys
import os
import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from utils.grid_utils import resolve_block_size, grid_size, block_origin

# frames kept free for the caller when deciding between recursion and the explicit stack
RECURSION_MARGIN = 100

def is_valid_move(board, row, col, num, block_size):
    if num in board[row, :]: return False
    if num in board[:, col]: return False
    br, bc = block_origin(row, col, block_size)
    if num in board[br:br + block_size, bc:bc + block_size]: return False
    return True

def first_empty_cell(board):
    """Row-major index of the first empty cell, or n^4 when the board is full."""
    empty = np.flatnonzero(np.asarray(board).flatten() == 0)
    if len(empty) == 0:
        return board.size
    return int(empty[0])

def backtrack(board, cursor, block_size, steps=None):
    """
    Recursive exhaustive search from linear index `cursor` (row-major).
    board: 현재 상태, modified in place
    steps: optional [int] counter of placed values

    On success the board is fully filled. On failure every value placed by this
    call (and the calls below it) has been reset, so the board is unchanged.
    """
    size = board.shape[0]
    total = size * size

    # filled cells are passed through unchanged
    while cursor < total and board[cursor // size, cursor % size] != 0:
        cursor += 1

    # Base Case: 모든 빈칸을 다 채움
    if cursor == total:
        return True

    row, col = cursor // size, cursor % size
    for num in range(1, size + 1):
        if is_valid_move(board, row, col, num, block_size):
            board[row, col] = num
            if steps is not None:
                steps[0] += 1

            if backtrack(board, cursor + 1, block_size, steps):
                return True

            board[row, col] = 0 # Backtrack

    return False

def backtrack_iterative(board, cursor, block_size, steps=None):
    """
    Same search as backtrack() with an explicit stack of [cursor, next value] frames,
    for boards whose empty cells outnumber the available recursion depth.
    """
    size = board.shape[0]
    total = size * size

    def next_empty(idx):
        while idx < total and board[idx // size, idx % size] != 0:
            idx += 1
        return idx

    stack = [[next_empty(cursor), 1]]
    while stack:
        frame = stack[-1]
        idx, start = frame
        if idx == total:
            return True

        row, col = idx // size, idx % size
        board[row, col] = 0
        placed = False
        for num in range(start, size + 1):
            if is_valid_move(board, row, col, num, block_size):
                board[row, col] = num
                if steps is not None:
                    steps[0] += 1
                frame[1] = num + 1
                stack.append([next_empty(idx + 1), 1])
                placed = True
                break

        if not placed:
            # every value failed: undo this cell and resume the previous frame
            stack.pop()

    return False

def solve_board(board, block_size=None, steps=None):
    """
    In-place backtracking solver starting at the first empty cell. Returns True if solved.
    Falls back to the explicit-stack search when recursion would run too deep.
    """
    n = resolve_block_size(board, block_size)
    empty_count = int(np.count_nonzero(board == 0))
    cursor = first_empty_cell(board)

    if empty_count + RECURSION_MARGIN < sys.getrecursionlimit():
        return backtrack(board, cursor, n, steps)
    return backtrack_iterative(board, cursor, n, steps)
