"""Command-line interface: solve a text board, autoplay games, or play with hints."""

import argparse
import logging
import random
import sys
from typing import List, Optional, TextIO

from .analysis import run_autoplay_many_tests
from .engine import MINES_GENERATION_ALGORITHMS, Minesweeper
from .grid import GridSnapshot, MalformedGridError
from .overlay import format_overlay
from .selector import select_move_with_reason
from .solver import solve_grid


def play_cli(game: Minesweeper, rng: Optional[random.Random] = None) -> None:
    """
    Run a simple terminal UI for playing Minesweeper with solver hints.

    Args:
        game: A Minesweeper instance to play against.
        rng: Random source for picking among several safe hints.
    """
    print("Minesweeper CLI (enter: row col). Coordinates are 0-based.")
    print("Type 'h' for a hint, 'q' to quit.\n")
    print(game.format_board(reveal_all=False))

    while True:
        s = input("\nMove (row col): ").strip()
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return

        if s.lower() in {"h", "hint"}:
            result = solve_grid(game.snapshot())
            print()
            print(format_overlay(result.grid, color=True))
            selected = select_move_with_reason(result, game.is_actionable, rng)
            if selected is None:
                print("\nNo move available.")
            else:
                (r, c), reason = selected
                print(f"\nSuggested move: {r} {c} ({reason})")
            continue

        parts = s.replace(",", " ").split()
        if len(parts) != 2:
            print("Invalid input. Example: 3 5")
            continue

        try:
            r = int(parts[0])
            c = int(parts[1])
        except ValueError:
            print("Invalid input. Coordinates must be integers.")
            continue

        try:
            status, _ = game.reveal(r, c)
        except ValueError as exc:
            print(f"Invalid input. {exc}")
            continue

        print(f"\nYou decided to reveal ({r}, {c}).\n")
        print(game.format_board(reveal_all=False))

        if status == -1:
            print("\nYou hit a mine. You lost.")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return

        if status == 1:
            print("\nYou revealed all safe cells. You won!")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return


def _cmd_solve(args: argparse.Namespace, stdout: TextIO) -> int:
    try:
        if args.file == "-":
            text = sys.stdin.read()
        else:
            with open(args.file, encoding="utf-8") as f:
                text = f.read()
        grid = GridSnapshot.from_text(text)
    except (OSError, MalformedGridError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    result = solve_grid(grid)
    print(format_overlay(result.grid, color=args.color), file=stdout)
    print(
        f"\nmines: {len(result.mine_coords)}  safe: {len(result.safe_coords)}  "
        f"iterations: {result.iterations}",
        file=stdout,
    )

    selected = select_move_with_reason(result, rng=random.Random(args.seed))
    if selected is None:
        print("no move available", file=stdout)
    else:
        (r, c), reason = selected
        print(f"move: {r} {c} ({reason})", file=stdout)
    return 0


def _cmd_autoplay(args: argparse.Namespace, stdout: TextIO) -> int:
    results = run_autoplay_many_tests(
        args.rows,
        args.cols,
        args.mines,
        args.runs,
        args.algorithm,
        seed=args.seed,
    )
    for key in sorted(results):
        print(f"{key:28s} {results[key]:.3f}", file=stdout)
    return 0


def _cmd_play(args: argparse.Namespace, stdout: TextIO) -> int:
    rng = random.Random(args.seed)
    game = Minesweeper(args.rows, args.cols, args.mines, args.algorithm, rng=rng)
    play_cli(game, rng)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minesweeper-assist",
        description="Deduce safe cells and mines on a Minesweeper-style grid.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", help="Solve a text board and suggest a move.")
    p_solve.add_argument("file", nargs="?", default="-", help="Board file ('-' for stdin).")
    p_solve.add_argument("--color", action="store_true", help="Highlight marks with ANSI colors.")
    p_solve.add_argument("--seed", type=int, default=None, help="Seed for picking among safe cells.")
    p_solve.set_defaults(func=_cmd_solve)

    for name, help_text in (
        ("autoplay", "Autoplay games on an in-memory board and print statistics."),
        ("play", "Play interactively with solver hints."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--rows", type=int, default=9)
        p.add_argument("--cols", type=int, default=9)
        p.add_argument("--mines", type=int, default=10)
        p.add_argument(
            "--algorithm",
            choices=MINES_GENERATION_ALGORITHMS,
            default="safe_neighborhood_rule",
        )
        p.add_argument("--seed", type=int, default=None)
        if name == "autoplay":
            p.add_argument("--runs", type=int, default=20)
            p.set_defaults(func=_cmd_autoplay)
        else:
            p.set_defaults(func=_cmd_play)

    return parser


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        return args.func(args, stdout if stdout is not None else sys.stdout)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
