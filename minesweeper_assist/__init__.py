"""
Minesweeper Assistant

A local constraint-propagation solver for Minesweeper-style grids:
- Single-constraint saturation around each numbered cell
- Pairwise subset elimination between neighboring numbered cells
- A heuristic guess when nothing can be proven
- A move selector that drives autonomous play
"""

from .grid import Cell, GridSnapshot, MalformedGridError
from .solver import MAX_ITERATIONS, DeductionEngine, SolveResult, solve_grid
from .selector import select_move, select_move_with_reason
from .engine import Minesweeper
from .autoplay import AutoplayConfig, AutoPlayer, GameReport, MoveRecord
from .overlay import format_overlay, render_overlay_html
from .analysis import (
    format_solve_result,
    run_autoplay_single_test,
    run_autoplay_many_tests,
    run_autoplay_level_analysis,
)

__version__ = "1.0.0"

__all__ = [
    # Data model
    "Cell",
    "GridSnapshot",
    "MalformedGridError",
    # Solver
    "MAX_ITERATIONS",
    "DeductionEngine",
    "SolveResult",
    "solve_grid",
    # Move selection and autoplay
    "select_move",
    "select_move_with_reason",
    "Minesweeper",
    "AutoplayConfig",
    "AutoPlayer",
    "GameReport",
    "MoveRecord",
    # Rendering
    "format_overlay",
    "render_overlay_html",
    # Analysis functions
    "format_solve_result",
    "run_autoplay_single_test",
    "run_autoplay_many_tests",
    "run_autoplay_level_analysis",
]
