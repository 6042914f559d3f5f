import numpy as np

from solvers.candidates import CandidateStore
from solvers.propagation import (
    apply_hidden_singles,
    apply_naked_singles,
    hidden_singles_in_unit,
    propagate_constraints,
)
from utils.grid_utils import is_complete_solution
from utils.visualize import get_conflict_mask
from conftest import pattern_solution


class CheckedStore(CandidateStore):
    """Candidate store asserting the elimination invariant around every assignment."""

    def assign(self, row, col, value):
        assert self.is_consistent()
        changed = super().assign(row, col, value)
        assert self.is_consistent()
        return changed


def test_single_empty_cell_is_a_naked_single(solution_4):
    board = solution_4.copy()
    board[2, 1] = 0
    store = CandidateStore(board, 2)
    assert apply_naked_singles(store)
    assert np.array_equal(board, solution_4)
    # nothing left to do
    assert not apply_naked_singles(store)


def test_deduction_alone_completes_one_missing_cell():
    solution = pattern_solution(4)
    board = solution.copy()
    board[7, 11] = 0
    stats = {}
    solved, contradiction = propagate_constraints(CandidateStore(board, 4), stats)
    assert solved and not contradiction
    assert np.array_equal(board, solution)
    assert stats['naked_singles'] == 1
    assert stats.get('hidden_singles', 0) == 0


def test_naked_singles_cascade_in_one_scan(solution_4):
    board = solution_4.copy()
    board[0, 0] = 0
    board[0, 1] = 0
    stats = {}
    store = CandidateStore(board, 2)
    assert apply_naked_singles(store, stats)
    assert np.array_equal(board, solution_4)
    assert stats['naked_singles'] == 2


def test_reference_4x4_has_no_naked_single_but_hidden_ones(puzzle_4):
    store = CandidateStore(puzzle_4, 2)
    assert not apply_naked_singles(store)

    stats = {}
    assert apply_hidden_singles(store, stats)
    # 4 has a single home in rows 1 and 2
    assert puzzle_4[1, 1] == 4
    assert puzzle_4[2, 2] == 4
    assert stats['hidden_singles'] == 2


def test_hidden_single_in_unit_without_progress(puzzle_4):
    store = CandidateStore(puzzle_4, 2)
    row_1 = [(1, c) for c in range(4)]
    # the only home of 4 is already filled
    store.assign(1, 1, 4)
    assert not hidden_singles_in_unit(store, row_1)
    assert puzzle_4[1, 1] == 4


def empty_store_4():
    return CandidateStore(np.zeros((4, 4), dtype=np.intc), 2)


def test_hidden_single_found_by_column_only():
    store = empty_store_4()
    # 1 can only go to (2, 0) inside column 0
    for r in (0, 1, 3):
        store.mask[r, 0, 0] = False
    for r in range(4):
        assert not hidden_singles_in_unit(store, [(r, c) for c in range(4)])

    stats = {}
    assert apply_hidden_singles(store, stats)
    assert store.board[2, 0] == 1
    assert stats['hidden_singles'] >= 1


def test_hidden_single_found_by_block_only():
    store = empty_store_4()
    # top-left block: 1 only fits (0, 0), row 0 and column 0 still offer other cells
    for r, c in ((0, 1), (1, 0), (1, 1)):
        store.mask[r, c, 0] = False
    for r in range(4):
        assert not hidden_singles_in_unit(store, [(r, c) for c in range(4)])
    for c in range(4):
        assert not hidden_singles_in_unit(store, [(r, c) for r in range(4)])

    stats = {}
    assert apply_hidden_singles(store, stats)
    assert store.board[0, 0] == 1
    assert stats['hidden_singles'] >= 1


def test_two_hidden_singles_in_one_unit(capsys):
    store = empty_store_4()
    store.mask[0, 1:, 0] = False  # 1 only at (0, 0)
    store.mask[0, :3, 1] = False  # 2 only at (0, 3)

    stats = {}
    assert hidden_singles_in_unit(store, [(0, c) for c in range(4)], stats, verbose=True)
    assert store.board[0, 0] == 1
    assert store.board[0, 3] == 2
    assert stats['hidden_singles'] == 2
    assert capsys.readouterr().out.splitlines() == [
        "Hidden single (1) found in cell (1, 1)",
        "Hidden single (2) found in cell (1, 4)",
    ]


def test_verbose_trace(solution_4, capsys):
    board = solution_4.copy()
    board[3, 3] = 0
    apply_naked_singles(CandidateStore(board, 2), verbose=True)
    assert "Naked single (1) found in cell (4, 4)" in capsys.readouterr().out


def test_fixpoint_keeps_invariants(puzzle_9):
    store = CheckedStore(puzzle_9, 3)
    solved, contradiction = propagate_constraints(store)
    assert not contradiction
    assert not get_conflict_mask(puzzle_9, 3).any()
    if solved:
        assert is_complete_solution(puzzle_9, 3)


def test_fixpoint_is_idempotent(puzzle_4):
    store = CandidateStore(puzzle_4, 2)
    propagate_constraints(store)
    board_after = puzzle_4.copy()
    mask_after = store.mask.copy()

    stats = {}
    propagate_constraints(store, stats)
    assert np.array_equal(puzzle_4, board_after)
    assert np.array_equal(store.mask, mask_after)
    assert stats.get('naked_singles', 0) == 0
    assert stats.get('hidden_singles', 0) == 0


def test_stuck_grid_reports_neither_solved_nor_contradiction(puzzle_4):
    solved, contradiction = propagate_constraints(CandidateStore(puzzle_4, 2))
    assert (solved, contradiction) == (False, False)
    assert np.count_nonzero(puzzle_4 == 0) == 8


def test_contradiction_is_reported(unsolvable_4):
    solved, contradiction = propagate_constraints(CandidateStore(unsolvable_4, 2))
    assert not solved
    assert contradiction


def test_large_grid_propagation_keeps_givens():
    solution = pattern_solution(4)
    board = solution.copy()
    for r in range(16):
        board[r, (r * 5) % 16] = 0
    givens = board != 0
    store = CheckedStore(board, 4)
    solved, contradiction = propagate_constraints(store)
    assert solved and not contradiction
    assert np.array_equal(board[givens], solution[givens])
    assert is_complete_solution(board, 4)
