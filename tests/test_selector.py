"""
Tests for the move selection policy
"""

import random

from minesweeper_assist.grid import GridSnapshot
from minesweeper_assist.selector import (
    REASON_FALLBACK,
    REASON_GUESS,
    REASON_SAFE,
    select_move,
    select_move_with_reason,
)
from minesweeper_assist.solver import SolveResult, solve_grid


def solved(text: str) -> SolveResult:
    return solve_grid(GridSnapshot.from_text(text))


class TestPriorityOrder:
    """Tests for safe, then guess, then fallback"""

    def test_safe_cell_first(self):
        result = solved("# # #\n1 2 1")
        assert select_move_with_reason(result) == ((0, 1), REASON_SAFE)

    def test_random_choice_among_safe_cells(self):
        result = solved("# # #\n. 0 .")
        picks = {select_move(result, rng=random.Random(seed)) for seed in range(30)}
        assert picks <= result.safe_coords
        assert len(picks) > 1

    def test_seeded_choice_is_reproducible(self):
        result = solved("# # #\n. 0 .")
        first = select_move(result, rng=random.Random(42))
        assert all(select_move(result, rng=random.Random(42)) == first for _ in range(5))

    def test_guess_when_nothing_is_safe(self):
        result = solved("# 1 #")
        assert select_move_with_reason(result) == ((0, 0), REASON_GUESS)

    def test_only_mines_found_falls_back_to_covered_cell(self):
        result = solved("1 # # # #")
        assert result.guess_coord is None
        # (0,1) is a proven mine, so it is never offered.
        assert select_move_with_reason(result) == ((0, 2), REASON_FALLBACK)

    def test_no_move_available(self):
        assert select_move(solved(". 1\n1 .")) is None
        assert select_move(solve_grid([])) is None


class TestActionablePredicate:
    """Tests for skipping coordinates the host no longer accepts"""

    def test_non_actionable_safe_cells_are_skipped(self):
        result = solved("# # #\n. 0 .")
        move = select_move(result, is_actionable=lambda coord: coord == (0, 2))
        assert move == (0, 2)

    def test_non_actionable_guess_falls_through(self):
        result = solved("# 1 #")
        selected = select_move_with_reason(result, is_actionable=lambda coord: coord != (0, 0))
        assert selected == ((0, 2), REASON_FALLBACK)

    def test_nothing_actionable(self):
        result = solved("# 1 #")
        assert select_move(result, is_actionable=lambda coord: False) is None
