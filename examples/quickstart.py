"""
Quickstart example for the Minesweeper Assistant.

This script demonstrates basic usage of the solver and the autoplay loop.
"""

import random

from minesweeper_assist import (
    AutoPlayer,
    GridSnapshot,
    Minesweeper,
    format_overlay,
    run_autoplay_many_tests,
    select_move,
    solve_grid,
)


def main():
    print("=" * 60)
    print("Minesweeper Assistant - Quickstart Example")
    print("=" * 60)

    # Example 1: Solve a board read from text
    print("\n1. Solving a 1-2-1 pattern...")
    print("-" * 60)

    grid = GridSnapshot.from_text(
        """
        # # #
        1 2 1
        """
    )
    result = solve_grid(grid)
    print(format_overlay(result.grid))
    print(f"Mines: {sorted(result.mine_coords)}")
    print(f"Safe: {sorted(result.safe_coords)}")
    print(f"Suggested move: {select_move(result)}")

    # Example 2: Autoplay a single game
    print("\n2. Autoplaying one Intermediate game (16x16, 40 mines)...")
    print("-" * 60)

    rng = random.Random(7)
    game = Minesweeper(16, 16, 40, rng=rng)
    report = AutoPlayer(game, rng=rng).play()

    result_label = "WON" if report.status == 1 else "LOST"
    print(f"Result: {result_label}")
    print(f"Moves: {len(report.moves)}")
    print(f"Safe moves: {report.count('safe')}")
    print(f"Guesses: {report.count('guess')}")
    print(game.format_board(reveal_all=True))

    # Example 3: Win rates by difficulty level
    print("\n3. Win rates by difficulty level (20 games each)...")
    print("-" * 60)

    difficulties = [
        ("Beginner", 9, 9, 10),
        ("Intermediate", 16, 16, 40),
        ("Expert", 16, 30, 99),
    ]

    for name, rows, cols, mines in difficulties:
        stats = run_autoplay_many_tests(rows, cols, mines, runs=20, seed=1)
        print(f"{name:15s} ({rows}x{cols}, {mines:2d} mines): {stats['win_rate']*100:5.1f}% win rate")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
