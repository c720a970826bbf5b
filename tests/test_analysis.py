"""
Tests for the benchmarking helpers
"""

import random

import matplotlib.pyplot as plt
import pytest

from minesweeper_assist.analysis import (
    LEVELS,
    format_solve_result,
    run_autoplay_level_analysis,
    run_autoplay_many_tests,
    run_autoplay_single_test,
)
from minesweeper_assist.grid import GridSnapshot
from minesweeper_assist.solver import solve_grid


class TestSingleAndBatch:
    """Tests for single games and batches"""

    def test_single_game_report(self):
        out = run_autoplay_single_test(9, 9, 10, rng=random.Random(0))
        assert out["status"] in (-1, 1)
        assert out["moves_count"] == (
            out["safe_moves_count"] + out["guess_moves_count"] + out["fallback_moves_count"]
        )

    def test_show_boards_prints(self, capsys):
        run_autoplay_single_test(5, 5, 3, show_boards=True, rng=random.Random(1))
        captured = capsys.readouterr().out
        assert "Underlying board" in captured
        assert "Finished with status" in captured

    def test_batch_rates(self):
        stats = run_autoplay_many_tests(9, 9, 10, runs=5, seed=3)
        assert 0.0 <= stats["win_rate"] <= 1.0
        assert stats["win_rate"] + stats["loss_rate"] == pytest.approx(1.0)
        assert stats["avg_moves_count"] >= 1.0
        assert stats["max_solver_iterations"] >= 1

    def test_seeded_batches_repeat(self):
        assert run_autoplay_many_tests(9, 9, 10, 4, seed=11) == run_autoplay_many_tests(
            9, 9, 10, 4, seed=11
        )

    def test_single_mine_boards_are_always_won(self):
        # The opening flood fill exposes every safe cell around a lone mine.
        stats = run_autoplay_many_tests(9, 9, 1, runs=10, seed=0)
        assert stats["win_rate"] == 1.0

    def test_runs_must_be_positive(self):
        with pytest.raises(ValueError):
            run_autoplay_many_tests(9, 9, 10, runs=0)


class TestLevelAnalysis:
    """Tests for the per-level summary"""

    def test_levels(self):
        assert LEVELS["expert"] == (16, 30, 99)

    def test_level_analysis_builds_figures(self):
        plt.close("all")
        results = run_autoplay_level_analysis(1, seed=0, show=False)
        assert set(results) == set(LEVELS)
        assert len(plt.get_fignums()) == 2
        plt.close("all")


def test_format_solve_result():
    text = format_solve_result(solve_grid(GridSnapshot.from_text("# 1 #")), show_coords=False)
    assert text.splitlines() == [" G  1  #", "mines: 0  safe: 0  guess: (0, 0)  iterations: 1"]
