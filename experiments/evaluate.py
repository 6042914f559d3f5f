import sys
import os
import time
import numpy as np
import argparse
import matplotlib.pyplot as plt
from tqdm import tqdm

# 프로젝트 루트 경로 추가
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from data.load_grid import GRID_DIR, GridLoadError, PuzzleDataset, list_grid_files, load_grid
from solvers.sudoku_solver import solve_sudoku_backtracking, solve_sudoku_propagation
from utils.grid_utils import DEFAULT_BLOCK_SIZE, is_complete_solution

SOLVER_LABELS = ['Propagation', 'Backtracking']

# -------------------------------------------------------------------------
# 1. Puzzle sources
# -------------------------------------------------------------------------
def load_puzzles(grid_dir=GRID_DIR, csv_path=None, block_size=DEFAULT_BLOCK_SIZE):
    """
    Collect (name, puzzle, solution) triples from a CSV dataset when `csv_path` is
    given, otherwise from every MaxiGrille file in `grid_dir`.
    """
    puzzles = []
    if csv_path:
        dataset = PuzzleDataset(csv_path, block_size)
        for idx in range(len(dataset)):
            quiz, solution = dataset[idx]
            puzzles.append((f"#{idx}", quiz, solution))
    else:
        for path in list_grid_files(grid_dir):
            puzzles.append((os.path.basename(path), load_grid(path, block_size), None))
    return puzzles

def is_correct(success, board, solution):
    if not success or not is_complete_solution(board):
        return False
    return solution is None or np.array_equal(board, solution)

# -------------------------------------------------------------------------
# 2. Visualization
# -------------------------------------------------------------------------
def save_performance_graph(results, save_path='benchmark_result.png'):
    """
    Left: average solve time per solver. Right: average cells placed per puzzle,
    with Propagation split into deduced cells (singles) and search placements.
    """
    fig, (ax_time, ax_work) = plt.subplots(1, 2, figsize=(12, 5))
    labels = [f"{name}\n{results[key]:.1f}% acc" for name, key in
              zip(SOLVER_LABELS, ['propagation_acc', 'backtracking_acc'])]

    times = [results['propagation_time'], results['backtracking_time']]
    bars = ax_time.bar(labels, times, color=['tab:green', 'tab:blue'], alpha=0.7)
    ax_time.set_ylabel('Avg Time (sec)')
    ax_time.set_title('Solve time')
    for bar in bars:
        height = bar.get_height()
        ax_time.text(bar.get_x() + bar.get_width()/2., height,
                     f'{height:.4f}s', ha='center', va='bottom')

    # Backtracking has no deduction phase, every cell it fills is a search step
    deduced = [results['propagation_deduced'], 0]
    searched = [results['propagation_steps'], results['backtracking_steps']]
    ax_work.bar(labels, deduced, color='tab:green', alpha=0.7, label='Deduced (singles)')
    ax_work.bar(labels, searched, bottom=deduced, color='tab:red', alpha=0.7,
                label='Search placements')
    ax_work.set_ylabel('Avg cells placed per puzzle')
    ax_work.set_title('Work done')
    ax_work.legend()
    for i, (d, s) in enumerate(zip(deduced, searched)):
        ax_work.text(i, d + s, f'{d + s:.0f}', ha='center', va='bottom')

    fig.suptitle(f"Propagation vs Backtracking ({results['samples']} puzzles)")
    fig.tight_layout()

    plt.savefig(save_path)
    plt.close(fig)
    print(f"📈 Saved chart to {save_path}")

# -------------------------------------------------------------------------
# 3. Evaluation Logic
# -------------------------------------------------------------------------
def evaluate_benchmark(puzzles, block_size=DEFAULT_BLOCK_SIZE):
    """
    Solve every puzzle with both solvers and return a summary dict with accuracy (%),
    average time (sec) and average placements per solver, and the names of puzzles
    where they disagree. Propagation placements are split into deduced cells and
    search steps.
    """
    prop_correct = 0
    prop_total_time = 0.0
    bt_correct = 0
    bt_total_time = 0.0
    prop_deduced = 0
    prop_steps = 0
    bt_steps = 0
    disagreements = []

    print(f"🔍 Benchmarking on {len(puzzles)} puzzles...")

    for name, puzzle, solution in tqdm(puzzles, desc="Running Benchmark"):
        # --- A. Propagation + Backtracking ---
        start = time.perf_counter()
        prop_success, prop_board, prop_stats = solve_sudoku_propagation(puzzle, block_size)
        prop_total_time += time.perf_counter() - start
        prop_deduced += prop_stats['naked_singles'] + prop_stats['hidden_singles']
        prop_steps += prop_stats['steps']
        if is_correct(prop_success, prop_board, solution):
            prop_correct += 1

        # --- B. Pure Backtracking ---
        start = time.perf_counter()
        bt_success, bt_board, bt_stats = solve_sudoku_backtracking(puzzle, block_size)
        bt_total_time += time.perf_counter() - start
        bt_steps += bt_stats['steps']
        if is_correct(bt_success, bt_board, solution):
            bt_correct += 1

        if prop_success != bt_success or (prop_success and not np.array_equal(prop_board, bt_board)):
            disagreements.append(name)

    count = max(len(puzzles), 1)
    return {
        'samples': len(puzzles),
        'propagation_acc': prop_correct / count * 100,
        'backtracking_acc': bt_correct / count * 100,
        'propagation_time': prop_total_time / count,
        'backtracking_time': bt_total_time / count,
        'propagation_deduced': prop_deduced / count,
        'propagation_steps': prop_steps / count,
        'backtracking_steps': bt_steps / count,
        'disagreements': disagreements,
    }

def report(results):
    print("\n" + "="*55)
    print("📊 Final Benchmark Results")
    print("="*55)
    print(f"Propagation:  {results['propagation_acc']:.2f}% Acc | {results['propagation_time']:.5f} sec")
    print(f"Backtracking: {results['backtracking_acc']:.2f}% Acc | {results['backtracking_time']:.5f} sec")
    print(f"Placements:   {results['propagation_deduced']:.1f} deduced + {results['propagation_steps']:.1f} searched "
          f"vs {results['backtracking_steps']:.1f} searched")
    print("="*55)
    if results['disagreements']:
        print(f"⚠️ Solvers disagree on: {', '.join(results['disagreements'])}")

def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--grid-dir', type=str, default=GRID_DIR)
    parser.add_argument('--csv', type=str, default=None, help="CSV with a 'quizzes' column")
    parser.add_argument('--block-size', type=int, default=DEFAULT_BLOCK_SIZE)
    parser.add_argument('--output', type=str, default='benchmark_result.png')
    args = parser.parse_args(argv)

    try:
        puzzles = load_puzzles(args.grid_dir, args.csv, args.block_size)
    except (GridLoadError, FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        return 1

    if not puzzles:
        print("❌ No puzzles found.")
        return 1

    results = evaluate_benchmark(puzzles, args.block_size)
    report(results)
    save_performance_graph(results, save_path=args.output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
