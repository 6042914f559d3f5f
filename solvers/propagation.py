import sys
import os
import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from utils.grid_utils import get_units

def _bump(stats, key, amount=1):
    if stats is not None:
        stats[key] = stats.get(key, 0) + amount

def apply_naked_singles(store, stats=None, verbose=False):
    """
    Naked Single: every empty cell with exactly one candidate gets that candidate.
    One call is one row-major scan over the whole grid.
    returns: True if at least one cell was filled
    """
    changed = False
    for r in range(store.size):
        for c in range(store.size):
            if store.board[r, c] == 0 and store.count(r, c) == 1:
                val = store.candidates(r, c)[0]
                if store.assign(r, c, val):
                    changed = True
                    _bump(stats, 'naked_singles')
                    if verbose:
                        print(f"Naked single ({val}) found in cell ({r+1}, {c+1})")
    return changed

def hidden_singles_in_unit(store, unit, stats=None, verbose=False):
    """
    Hidden Single inside one unit (list of (row, col)).
    Occurrence counts are taken once, before any assignment in the unit. A value
    whose only cell was filled in the meantime is skipped.
    """
    rows = [r for r, _ in unit]
    cols = [c for _, c in unit]
    counts = store.mask[rows, cols, :].sum(axis=0)

    changed = False
    for idx in np.flatnonzero(counts == 1):
        val = int(idx) + 1
        for r, c in unit:
            if store.has(r, c, val):
                if store.assign(r, c, val):
                    changed = True
                    _bump(stats, 'hidden_singles')
                    if verbose:
                        print(f"Hidden single ({val}) found in cell ({r+1}, {c+1})")
                break
    return changed

def apply_hidden_singles(store, stats=None, verbose=False):
    """
    Hidden Single over every unit: rows, then columns, then blocks.
    returns: True if at least one cell was filled
    """
    changed = False
    for unit in get_units(store.block_size):
        if hidden_singles_in_unit(store, unit, stats, verbose):
            changed = True
    return changed

def propagate_constraints(store, stats=None, verbose=False):
    """
    Run the deduction rules until neither makes progress (fixpoint).
    Naked singles are exhausted first; hidden singles only run once a naked pass
    finds nothing, and the loop goes back to naked singles after they succeed.
    The board held by `store` is updated in place.
    returns: (is_solved, is_contradiction)
    """
    while True:
        _bump(stats, 'passes')
        if apply_naked_singles(store, stats, verbose):
            while apply_naked_singles(store, stats, verbose):
                pass
            continue

        if not apply_hidden_singles(store, stats, verbose):
            break
        while apply_hidden_singles(store, stats, verbose):
            pass

    if store.dead_cells():
        return False, True # 모순: 후보가 없는 빈칸
    if np.all(store.board != 0):
        return True, False # 완료
    return False, False # Stuck (찍어야 함)
