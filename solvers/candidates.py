import sys
import os
import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from utils.grid_utils import resolve_block_size, grid_size, block_origin, get_peers

class CandidateStore:
    """
    Per-cell candidate sets for a Sudoku board.

    The store keeps a reference to the board it was built from (no copy), so the
    board and the candidates always describe the same state. Candidates live in a
    boolean array: mask[r, c, v - 1] is True when v is still placeable at (r, c).

    Every deduced value has to go through assign(): it writes the board, clears the
    cell's candidates and eliminates the value from the row, column and block.
    """

    def __init__(self, board, block_size=None):
        self.board = board
        self.block_size = resolve_block_size(board, block_size)
        self.size = grid_size(self.block_size)
        self.mask = np.zeros((self.size, self.size, self.size), dtype=bool)

        n = self.block_size
        for r in range(self.size):
            for c in range(self.size):
                if board[r, c] != 0:
                    continue
                used = set(board[r, :].tolist())
                used.update(board[:, c].tolist())
                br, bc = block_origin(r, c, n)
                used.update(board[br:br + n, bc:bc + n].flatten().tolist())
                for v in range(1, self.size + 1):
                    if v not in used:
                        self.mask[r, c, v - 1] = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def count(self, row, col):
        return int(self.mask[row, col].sum())

    def has(self, row, col, value):
        return bool(self.mask[row, col, value - 1])

    def candidates(self, row, col):
        """Remaining candidates of (row, col) in ascending order."""
        return (np.flatnonzero(self.mask[row, col]) + 1).tolist()

    def empty_cells(self):
        return [(int(r), int(c)) for r, c in np.argwhere(self.board == 0)]

    def dead_cells(self):
        """Empty cells with no candidate left (the board cannot be completed)."""
        return [(r, c) for r, c in self.empty_cells() if not self.mask[r, c].any()]

    def is_consistent(self):
        """
        Check the store against the board: filled cells have no candidates and no
        remaining candidate is already fixed in one of the cell's peers.
        """
        for r in range(self.size):
            for c in range(self.size):
                if self.board[r, c] != 0:
                    if self.mask[r, c].any(): return False
                    continue
                for pr, pc in get_peers(r, c, self.block_size):
                    v = self.board[pr, pc]
                    if v != 0 and self.mask[r, c, v - 1]: return False
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def eliminate(self, row, col, value):
        # filled cells have an empty mask already, so this is a no-op for them
        self.mask[row, col, value - 1] = False

    def eliminate_from_row(self, row, value):
        self.mask[row, :, value - 1] = False

    def eliminate_from_column(self, col, value):
        self.mask[:, col, value - 1] = False

    def eliminate_from_block(self, row, col, value):
        br, bc = block_origin(row, col, self.block_size)
        n = self.block_size
        self.mask[br:br + n, bc:bc + n, value - 1] = False

    def assign(self, row, col, value):
        """
        Fix `value` at (row, col) and propagate the elimination to its peers.
        Returns False without touching anything when the cell is already filled.
        """
        if self.board[row, col] != 0:
            return False
        self.board[row, col] = value
        self.mask[row, col, :] = False
        self.eliminate_from_row(row, value)
        self.eliminate_from_column(col, value)
        self.eliminate_from_block(row, col, value)
        return True
