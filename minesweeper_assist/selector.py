"""Move selection policy over a solve result."""

import logging
import random
from typing import Callable, List, Optional, Tuple

from .solver import SolveResult
from .utils import Coord

logger = logging.getLogger(__name__)

ActionablePredicate = Callable[[Coord], bool]

# Reasons reported alongside a selected move.
REASON_SAFE = "safe"
REASON_GUESS = "guess"
REASON_FALLBACK = "fallback"


def _always_actionable(coord: Coord) -> bool:
    return True


def select_move_with_reason(
    result: SolveResult,
    is_actionable: Optional[ActionablePredicate] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Tuple[Coord, str]]:
    """
    Pick one coordinate to act on, and say why.

    Priority order:
    1. A proven-safe cell that is still actionable, chosen uniformly at random
    2. The heuristic guess, if still actionable
    3. The first remaining covered cell in row-major order

    Args:
        result: Output of solve_grid().
        is_actionable: Whether the host still accepts an action on a
            coordinate. Defaults to always True.
        rng: Random source for the safe-cell draw. Defaults to the module
            level random functions.

    Returns:
        Tuple of (coord, reason) where reason is "safe", "guess" or
        "fallback", or None when no move is available.
    """
    actionable = is_actionable or _always_actionable
    chooser = rng if rng is not None else random

    # Sorted so that a seeded rng always draws the same cell.
    safe_candidates: List[Coord] = [
        coord for coord in sorted(result.safe_coords) if actionable(coord)
    ]
    if safe_candidates:
        coord = chooser.choice(safe_candidates)
        logger.debug("Selected safe cell %s out of %d", coord, len(safe_candidates))
        return coord, REASON_SAFE

    if result.guess_coord is not None and actionable(result.guess_coord):
        logger.debug("Selected heuristic guess %s", result.guess_coord)
        return result.guess_coord, REASON_GUESS

    for coord in result.grid.covered_cells():
        if actionable(coord):
            logger.debug("Selected fallback cell %s", coord)
            return coord, REASON_FALLBACK

    return None


def select_move(
    result: SolveResult,
    is_actionable: Optional[ActionablePredicate] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Coord]:
    """Pick one coordinate to act on, or None when no move is available."""
    selected = select_move_with_reason(result, is_actionable, rng)
    return selected[0] if selected is not None else None
