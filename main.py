import argparse
import sys
import time

from data.load_grid import GRID_DIR, GridLoadError, load_selected_grid, prompt_grid_selector
from solvers.sudoku_solver import SOLVERS, solve_sudoku
from utils.grid_utils import DEFAULT_BLOCK_SIZE
from utils.visualize import print_sudoku

def build_parser():
    parser = argparse.ArgumentParser(
        description="Solve an N x N Sudoku grid loaded from grilles/MaxiGrille<X>.sud")
    parser.add_argument('--grid', type=str, default=None,
                        help='Grid selector character (prompted for when omitted)')
    parser.add_argument('--grid-dir', type=str, default=GRID_DIR,
                        help=f'Directory holding the grid files (default: {GRID_DIR})')
    parser.add_argument('--block-size', type=int, default=DEFAULT_BLOCK_SIZE,
                        help=f'Block size n of an n^2 x n^2 grid (default: {DEFAULT_BLOCK_SIZE})')
    parser.add_argument('--solver', choices=sorted(SOLVERS), default='propagation',
                        help='propagation: singles then backtracking; backtracking: search only')
    parser.add_argument('--verbose', action='store_true',
                        help='Print every deduction made by the propagation solver')
    parser.add_argument('--color', action='store_true',
                        help='Highlight solved cells and conflicts with ANSI colors')
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)

    # 1. Load grid
    selector = args.grid if args.grid is not None else prompt_grid_selector()
    try:
        grid = load_selected_grid(selector, args.grid_dir, args.block_size)
    except GridLoadError as e:
        print(f"❌ Failed to load grid: {e}")
        print(f"Tip: make sure the '{args.grid_dir}/' folder sits next to the program "
              f"and holds the 'MaxiGrille_.sud' files.")
        return 1

    print("Initial grid")
    print_sudoku(grid, args.block_size)

    # 2. Solve
    start_time = time.perf_counter()
    success, result_grid, stats = solve_sudoku(
        grid, args.block_size, method=args.solver, verbose=args.verbose)
    elapsed = time.perf_counter() - start_time

    # 3. Visualization
    print("Final grid")
    print_sudoku(result_grid, args.block_size, original=grid, color=args.color)
    if args.verbose:
        print(f"Stats: {stats}")
    if success:
        print(f"Solved in {elapsed:.6f} sec")
    else:
        print("💀 No solution found")
        print(f"Failed to solve after {elapsed:.6f} sec")
    return 0

if __name__ == "__main__":
    sys.exit(main())
