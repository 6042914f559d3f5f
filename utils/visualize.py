import sys
import os
import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from utils.grid_utils import resolve_block_size, grid_size, block_origin

# ANSI Colors
RED = '\033[91m'   # 충돌 (에러)
BLUE = '\033[94m'  # solver가 채운 값 (정상)
RESET = '\033[0m'

EMPTY_CELL = '.'

def count_digits(number):
    digits = 0
    while number != 0:
        number //= 10
        digits += 1
    return digits

def get_conflict_mask(grid, block_size=None):
    """
    그리드에서 규칙을 위반한 셀의 마스크(True=위반)를 반환
    """
    grid = np.asarray(grid)
    n = resolve_block_size(grid, block_size)
    size = grid_size(n)
    conflict_mask = np.zeros((size, size), dtype=bool)

    for r in range(size):
        for c in range(size):
            val = grid[r, c]
            if val == 0: continue

            if np.sum(grid[r, :] == val) > 1:
                conflict_mask[r, c] = True
            if np.sum(grid[:, c] == val) > 1:
                conflict_mask[r, c] = True
            br, bc = block_origin(r, c, n)
            if np.sum(grid[br:br + n, bc:bc + n] == val) > 1:
                conflict_mask[r, c] = True

    return conflict_mask

def separator_line(margin, block_size, cell_width):
    """Rule line between blocks, e.g. '   +-------+-------+' for 2x2 blocks."""
    segment = "+" + "-" * (block_size * cell_width + 1)
    return " " * margin + segment * block_size + "+"

def format_grid(grid, block_size=None, original=None, color=False):
    """
    Render a grid as text: 1-based column numbers on top, 1-based row numbers on the
    left, rule lines every `block_size` rows and '|' every `block_size` columns.
    Empty cells are shown as '.'.

    original: 초기 문제; with color=True cells filled since then are blue
    and cells breaking a row/column/block rule are red.
    """
    grid = np.asarray(grid)
    n = resolve_block_size(grid, block_size)
    size = grid_size(n)

    margin = count_digits(size) + 1
    cell_width = max(3, count_digits(size) + 1)
    conflicts = get_conflict_mask(grid, n) if color else None

    lines = [""]

    header = " " * (margin + 1)
    for j in range(size):
        if j % n == 0 and j != 0:
            header += "  "
        header += f"{j + 1:>{cell_width}}"
    lines.append(header)

    rule = separator_line(margin, n, cell_width)
    lines.append(rule)

    for i in range(size):
        if i % n == 0 and i != 0:
            lines.append(rule)

        row_str = f"{i + 1:<{margin}}|"
        for j in range(size):
            if j % n == 0 and j != 0:
                row_str += " |"

            val = int(grid[i, j])
            val_str = f"{val if val != 0 else EMPTY_CELL:>{cell_width}}"

            if color and conflicts[i, j]:
                # 틀린 건 무조건 빨간색
                row_str += f"{RED}{val_str}{RESET}"
            elif color and original is not None and original[i, j] == 0 and val != 0:
                row_str += f"{BLUE}{val_str}{RESET}"
            else:
                row_str += val_str
        row_str += " |"
        lines.append(row_str)

    lines.append(rule)
    return "\n".join(lines)

def print_sudoku(grid, block_size=None, original=None, color=False):
    print(format_grid(grid, block_size, original=original, color=color))
