import os
import sys
import numpy as np
import pandas as pd

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from utils.grid_utils import DEFAULT_BLOCK_SIZE, grid_size, board_from_string

GRID_DIR = "grilles"
GRID_FILE_PATTERN = "MaxiGrille{}.sud"
# cells are stored as native C ints, row-major
GRID_DTYPE = np.intc

class GridLoadError(Exception):
    """A grid file could not be loaded (missing directory or file, bad content)."""
    pass

def grid_path(selector, grid_dir=GRID_DIR):
    return os.path.join(grid_dir, GRID_FILE_PATTERN.format(selector))

def prompt_grid_selector(prompt="Choose a grid between A and D: "):
    """Ask for the grid selector on stdin and return its first character."""
    answer = input(prompt).strip()
    return answer[:1]

def load_grid(path, block_size=DEFAULT_BLOCK_SIZE):
    """
    Read an N x N grid (N = block_size^2) from a binary file of n^4 native ints.
    Bytes after the first n^4 values are ignored.
    """
    size = grid_size(block_size)
    grid_dir = os.path.dirname(path)
    if grid_dir and not os.path.isdir(grid_dir):
        raise GridLoadError(f"Grid directory not found: {grid_dir}")
    if not os.path.isfile(path):
        raise GridLoadError(f"Grid file not found: {path}")

    values = np.fromfile(path, dtype=GRID_DTYPE, count=size * size)
    if values.size != size * size:
        raise GridLoadError(
            f"{path} holds {values.size} cells, expected {size * size} for a {size}x{size} grid")

    bad = (values < 0) | (values > size)
    if np.any(bad):
        idx = int(np.flatnonzero(bad)[0])
        raise GridLoadError(
            f"{path}: value {int(values[idx])} at cell ({idx // size + 1}, {idx % size + 1}) "
            f"is outside 0..{size}")

    return values.reshape(size, size)

def load_selected_grid(selector, grid_dir=GRID_DIR, block_size=DEFAULT_BLOCK_SIZE):
    if not os.path.isdir(grid_dir):
        raise GridLoadError(f"Grid directory not found: {grid_dir}")
    return load_grid(grid_path(selector, grid_dir), block_size)

def list_grid_files(grid_dir=GRID_DIR):
    """All grid files in `grid_dir` matching the MaxiGrille pattern, sorted by name."""
    if not os.path.isdir(grid_dir):
        raise GridLoadError(f"Grid directory not found: {grid_dir}")
    prefix, suffix = GRID_FILE_PATTERN.split("{}")
    names = [f for f in os.listdir(grid_dir) if f.startswith(prefix) and f.endswith(suffix)]
    return [os.path.join(grid_dir, f) for f in sorted(names)]

class PuzzleDataset:
    """
    Puzzles stored as strings in a CSV file ('quizzes' column, optional 'solutions').
    Cells use '0' or '.' for empty and base-36 digits for values.
    """

    def __init__(self, csv_path, block_size=None):
        self.csv_path = csv_path
        self.block_size = block_size
        if csv_path and os.path.exists(csv_path):
            self.df = pd.read_csv(csv_path, dtype=str)
        else:
            raise FileNotFoundError(f"CSV file not found at {csv_path}")
        if 'quizzes' not in self.df.columns:
            raise ValueError(f"{csv_path} has no 'quizzes' column")

    @property
    def has_solutions(self):
        return 'solutions' in self.df.columns

    def __len__(self):
        return len(self.df)

    def __getitem__(self, idx):
        # 요청받은 idx의 데이터만 그때그때 변환
        row = self.df.iloc[idx]
        quiz = board_from_string(row['quizzes'], self.block_size)
        solution = None
        if self.has_solutions and isinstance(row['solutions'], str):
            solution = board_from_string(row['solutions'], self.block_size)
        return quiz, solution
