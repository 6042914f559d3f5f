# tests/conftest.py
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to sys.path so "solvers", "utils", "data" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# 9x9 reference puzzle and its unique solution
PUZZLE_9 = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

SOLUTION_9 = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

PUZZLE_4 = [[1, 0, 0, 4],
            [0, 0, 1, 0],
            [0, 1, 0, 0],
            [4, 0, 0, 1]]

SOLUTION_4 = [[1, 2, 3, 4],
              [3, 4, 1, 2],
              [2, 1, 4, 3],
              [4, 3, 2, 1]]

# valid givens, but row 0 has nowhere left for a 3
UNSOLVABLE_4 = [[1, 2, 0, 0],
                [0, 0, 3, 0],
                [0, 0, 0, 0],
                [0, 0, 0, 0]]


def pattern_solution(block_size):
    """A valid complete grid for any block size."""
    n = block_size
    size = n * n
    return np.array([[(n * (r % n) + r // n + c) % size + 1 for c in range(size)]
                     for r in range(size)], dtype=np.intc)


def write_grid(path, board):
    np.asarray(board, dtype=np.intc).tofile(str(path))


@pytest.fixture
def puzzle_4():
    return np.array(PUZZLE_4, dtype=np.intc)


@pytest.fixture
def solution_4():
    return np.array(SOLUTION_4, dtype=np.intc)


@pytest.fixture
def unsolvable_4():
    return np.array(UNSOLVABLE_4, dtype=np.intc)


@pytest.fixture
def puzzle_9():
    from utils.grid_utils import board_from_string
    return board_from_string(PUZZLE_9)


@pytest.fixture
def solution_9():
    from utils.grid_utils import board_from_string
    return board_from_string(SOLUTION_9)


@pytest.fixture
def grid_dir(tmp_path, puzzle_4, solution_4):
    """A grilles/ folder holding two 4x4 grids (A: puzzle, B: complete)."""
    folder = tmp_path / "grilles"
    folder.mkdir()
    write_grid(folder / "MaxiGrilleA.sud", puzzle_4)
    write_grid(folder / "MaxiGrilleB.sud", solution_4)
    return folder
