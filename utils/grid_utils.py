import math
import numpy as np

DEFAULT_BLOCK_SIZE = 4

def grid_size(block_size):
    """Side length N = n^2 of a grid with n x n blocks."""
    if block_size < 1:
        raise ValueError(f"Block size must be at least 1, got {block_size}")
    return block_size * block_size

def block_size_of(board):
    """
    Derive the block size n from a square N x N board.
    Raises ValueError when N is not a perfect square.
    """
    board = np.asarray(board)
    if board.ndim != 2 or board.shape[0] != board.shape[1]:
        raise ValueError(f"Board must be square, got shape {board.shape}")
    n = math.isqrt(board.shape[0])
    if n * n != board.shape[0] or n < 1:
        raise ValueError(f"Board side {board.shape[0]} is not a perfect square")
    return n

def resolve_block_size(board, block_size=None):
    """Return the block size to use for `board`, checking it matches the shape."""
    if block_size is None:
        return block_size_of(board)
    size = grid_size(block_size)
    if np.shape(board) != (size, size):
        raise ValueError(
            f"Board shape {np.shape(board)} does not match block size {block_size} ({size}x{size})")
    return block_size

def block_origin(row, col, block_size):
    """Top-left coordinates of the block containing (row, col)."""
    return row - row % block_size, col - col % block_size

def get_units(block_size):
    """
    All units of the grid as lists of (row, col): every row, then every column,
    then every block in row-major block order. 3 * N units in total.
    """
    size = grid_size(block_size)
    rows = [[(r, c) for c in range(size)] for r in range(size)]
    cols = [[(r, c) for r in range(size)] for c in range(size)]
    blocks = []
    for br in range(0, size, block_size):
        for bc in range(0, size, block_size):
            blocks.append([(br + i, bc + j)
                           for i in range(block_size) for j in range(block_size)])
    return rows + cols + blocks

def get_peers(row, col, block_size):
    """Cells sharing a row, column or block with (row, col), excluding itself."""
    size = grid_size(block_size)
    peers = set()
    for i in range(size):
        peers.add((row, i))
        peers.add((i, col))
    br, bc = block_origin(row, col, block_size)
    for i in range(br, br + block_size):
        for j in range(bc, bc + block_size):
            peers.add((i, j))
    peers.discard((row, col))
    return sorted(peers)

def board_from_string(board_str, block_size=None):
    """
    Convert a puzzle string to a board.
    '0' or '.' is an empty cell, values are base-36 digits (1-9, then a=10 ...).
    Whitespace is ignored. The block size is inferred from the length when omitted.
    """
    chars = [ch for ch in board_str if not ch.isspace()]
    if block_size is None:
        block_size = math.isqrt(math.isqrt(len(chars)))
        if block_size < 1 or block_size ** 4 != len(chars):
            raise ValueError(f"Puzzle length {len(chars)} is not n^4 for any block size")
    size = grid_size(block_size)
    if len(chars) != size * size:
        raise ValueError(f"Expected {size * size} cells for block size {block_size}, got {len(chars)}")

    values = []
    for ch in chars:
        if ch == '.':
            values.append(0)
            continue
        try:
            val = int(ch, 36)
        except ValueError:
            raise ValueError(f"Invalid cell symbol {ch!r}") from None
        if val > size:
            raise ValueError(f"Cell value {val} out of range for a {size}x{size} grid")
        values.append(val)
    return np.array(values, dtype=np.intc).reshape(size, size)

def board_to_string(board):
    """Inverse of board_from_string, using '0' for empty cells."""
    return "".join(np.base_repr(int(v), 36).lower() for v in np.asarray(board).flatten())

def is_complete_solution(board, block_size=None):
    """True when every row, column and block holds each of 1..N exactly once."""
    board = np.asarray(board)
    n = resolve_block_size(board, block_size)
    size = grid_size(n)
    expected = set(range(1, size + 1))
    for i in range(size):
        if set(board[i, :].tolist()) != expected: return False
        if set(board[:, i].tolist()) != expected: return False
    for br in range(0, size, n):
        for bc in range(0, size, n):
            if set(board[br:br + n, bc:bc + n].flatten().tolist()) != expected: return False
    return True
