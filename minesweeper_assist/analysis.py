"""Analysis and benchmarking tools for autoplay with the deduction engine."""

import random
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .autoplay import AutoplayConfig, AutoPlayer
from .engine import Minesweeper
from .overlay import format_overlay
from .solver import SolveResult

# Standard difficulty levels: (rows, cols, mines).
LEVELS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (16, 30, 99),
}


def format_solve_result(result: SolveResult, *, show_coords: bool = True) -> str:
    """
    Format a solve result as the solved grid followed by a one-line summary.

    Args:
        result: Output of solve_grid().
        show_coords: If True, include coordinate labels in the grid.
    """
    summary = (
        f"mines: {len(result.mine_coords)}  safe: {len(result.safe_coords)}  "
        f"guess: {result.guess_coord if result.guess_coord is not None else '-'}  "
        f"iterations: {result.iterations}"
    )
    return format_overlay(result.grid, show_coords=show_coords) + "\n" + summary


def run_autoplay_single_test(
    rows: int,
    cols: int,
    mines_count: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    show_boards: bool = False,
    rng: Optional[random.Random] = None,
) -> Dict[str, float]:
    """
    Run one end-to-end autoplayed game on a fresh Minesweeper instance.

    Args:
        rows: Board height.
        cols: Board width.
        mines_count: Total number of mines on the board.
        mines_generation_algorithm: Mine placement rule
            ("safe_first_action_rule" or "safe_neighborhood_rule").
        show_boards: If True, print the underlying board and the last solve.
        rng: Random source shared by mine placement and move selection.

    Returns:
        The game report as a dict ("status" is -1 loss, 1 win, 0 unfinished).
    """
    rng = rng if rng is not None else random.Random()
    game = Minesweeper(rows, cols, mines_count, mines_generation_algorithm, rng=rng)
    player = AutoPlayer(game, AutoplayConfig(), rng=rng)
    report = player.play()

    if show_boards:
        print(f"Generation mode: {mines_generation_algorithm}")
        print("Underlying board (mines visible):")
        print(game.format_board(reveal_all=True))
        if player.last_result is not None:
            print()
            print("Last solve:")
            print(format_solve_result(player.last_result))
        print()
        print(f"Finished with status {report.status}.")

    return report.as_dict()


def run_autoplay_many_tests(
    rows: int,
    cols: int,
    mines_count: int,
    runs: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent autoplayed games and return averaged metrics plus win rate.

    Args:
        rows: Board height.
        cols: Board width.
        mines_count: Total number of mines on the board.
        runs: Number of independent games to run, must be > 0.
        mines_generation_algorithm: Mine placement rule.
        seed: Optional seed for reproducible batches.

    Returns:
        Averages of the per-game report (prefixed with "avg_"), plus:
        - win_rate
        - loss_rate
        - avg_guesses_total
        - guess_failure_rate: losses per guess or fallback move
        - max_solver_iterations
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    rng = random.Random(seed)
    sums: Dict[str, float] = defaultdict(float)
    wins = 0
    losses = 0
    total_guesses = 0.0
    max_iterations = 0.0

    for _ in range(runs):
        out = run_autoplay_single_test(
            rows, cols, mines_count, mines_generation_algorithm, rng=rng
        )
        status = out["status"]
        if status == 1:
            wins += 1
        elif status == -1:
            losses += 1

        for k, v in out.items():
            if k == "status":
                continue
            sums[f"avg_{k}"] += float(v)

        total_guesses += out["guess_moves_count"] + out["fallback_moves_count"]
        max_iterations = max(max_iterations, out["max_solver_iterations"])

    result: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    result["win_rate"] = wins / runs
    result["loss_rate"] = losses / runs
    result["avg_guesses_total"] = total_guesses / runs
    result["guess_failure_rate"] = (losses / total_guesses) if total_guesses > 0 else 0.0
    result["max_solver_iterations"] = max_iterations
    return result


def run_autoplay_level_analysis(
    runs: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
    show: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated autoplay tests on the standard difficulty levels and plot summaries.

    Args:
        runs: Number of independent games per level.
        mines_generation_algorithm: Mine placement rule.
        seed: Optional seed for reproducible batches.
        show: If True, display the figures; otherwise they are only built.

    Returns:
        Mapping from level name to statistics dict returned by
        run_autoplay_many_tests().
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, (r, c, m) in LEVELS.items():
        results[level] = run_autoplay_many_tests(
            r, c, m, runs, mines_generation_algorithm, seed=seed
        )

    level_names: List[str] = list(LEVELS.keys())
    x = np.arange(len(level_names))
    bar_w = 0.25

    # 1) Moves by reason
    safe_moves = [results[n]["avg_safe_moves_count"] for n in level_names]
    guess_moves = [results[n]["avg_guess_moves_count"] for n in level_names]
    fallback_moves = [results[n]["avg_fallback_moves_count"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w, safe_moves, width=bar_w, label="safe")  # type: ignore[misc]
    plt.bar(x, guess_moves, width=bar_w, label="guess")  # type: ignore[misc]
    plt.bar(x + bar_w, fallback_moves, width=bar_w, label="fallback")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average moves")  # type: ignore[misc]
    plt.title("Average moves by reason (per game)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()

    # 2) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Win rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()

    if show:
        plt.show()  # type: ignore[misc]

    return results
