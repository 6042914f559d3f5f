import sys
import os
import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from solvers.candidates import CandidateStore
from solvers.propagation import propagate_constraints
from solvers.backtracking import solve_board
from utils.grid_utils import resolve_block_size

def solve_sudoku_backtracking(board, block_size=None):
    """
    Pure backtracking from the first empty cell.
    returns: (success, result_board, stats)
    """
    n = resolve_block_size(board, block_size)
    work_board = np.array(board, copy=True)

    steps = [0]
    success = solve_board(work_board, n, steps)
    return success, work_board, {'steps': steps[0]}

def solve_sudoku_propagation(board, block_size=None, verbose=False):
    """
    Constraint propagation (naked + hidden singles) to fixpoint, then backtracking
    over whatever is left empty. The input board is not modified.
    returns: (success, result_board, stats)
    """
    n = resolve_block_size(board, block_size)
    work_board = np.array(board, copy=True)

    # 1. 논리적 전파 (Logic Phase)
    stats = {'naked_singles': 0, 'hidden_singles': 0, 'passes': 0}
    store = CandidateStore(work_board, n)
    solved, contradiction = propagate_constraints(store, stats, verbose)
    stats['contradiction'] = contradiction

    if solved:
        stats['steps'] = 0
        return True, work_board, stats

    # 2. Search over the cells deduction could not fix
    steps = [0]
    success = solve_board(work_board, n, steps)
    stats['steps'] = steps[0]
    return success, work_board, stats

SOLVERS = {
    'propagation': solve_sudoku_propagation,
    'backtracking': solve_sudoku_backtracking,
}

def solve_sudoku(board, block_size=None, method='propagation', verbose=False):
    """Dispatch to one of SOLVERS by name."""
    if method not in SOLVERS:
        raise ValueError(f"Unknown solver {method!r}, expected one of {sorted(SOLVERS)}")
    if method == 'propagation':
        return solve_sudoku_propagation(board, block_size, verbose=verbose)
    return SOLVERS[method](board, block_size)
