"""Autonomous play: repeated observe, solve, select, act cycles against a host game."""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .engine import Minesweeper
from .selector import REASON_FALLBACK, REASON_GUESS, REASON_SAFE, select_move_with_reason
from .solver import SolveResult, solve_grid
from .utils import Coord, random_delay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoplayConfig:
    """
    Pacing and limits for the autoplay loop.

    Delays are in milliseconds. The action delay is waited before each move
    and the retry delay after it, mimicking a human re-reading the board.
    Nothing is slept unless `sleep` is set.
    """

    min_action_delay_ms: int = 200
    max_action_delay_ms: int = 1000
    min_retry_delay_ms: int = 1000
    max_retry_delay_ms: int = 2000
    max_moves: Optional[int] = None
    sleep: bool = False

    def __post_init__(self) -> None:
        for low, high, name in (
            (self.min_action_delay_ms, self.max_action_delay_ms, "action"),
            (self.min_retry_delay_ms, self.max_retry_delay_ms, "retry"),
        ):
            if low < 0 or high < low:
                raise ValueError(
                    f"Invalid {name} delay range: {low}..{high} ms."
                )
        if self.max_moves is not None and self.max_moves <= 0:
            raise ValueError("max_moves must be positive.")


@dataclass(frozen=True)
class MoveRecord:
    """One action taken by the autoplay loop."""

    coord: Coord
    reason: str
    status: int
    revealed_cells_count: int = 0


@dataclass
class GameReport:
    """Summary of one autoplayed game; status is -1 loss, 1 win, 0 unfinished."""

    status: int
    moves: List[MoveRecord] = field(default_factory=list)
    solver_iterations: List[int] = field(default_factory=list)

    def count(self, reason: str) -> int:
        return sum(1 for move in self.moves if move.reason == reason)

    def as_dict(self) -> Dict[str, float]:
        return {
            "status": self.status,
            "moves_count": len(self.moves),
            "safe_moves_count": self.count(REASON_SAFE),
            "guess_moves_count": self.count(REASON_GUESS),
            "fallback_moves_count": self.count(REASON_FALLBACK),
            "max_solver_iterations": max(self.solver_iterations, default=0),
        }


class AutoPlayer:
    """Drives a host game using the deduction engine and the move selector."""

    def __init__(
        self,
        game: Minesweeper,
        config: Optional[AutoplayConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.game = game
        self.config = config if config is not None else AutoplayConfig()
        self.rng = rng if rng is not None else random.Random()
        self.last_result: Optional[SolveResult] = None
        self.report = GameReport(status=0)

    def _wait(self, min_ms: int, max_ms: int) -> None:
        delay_ms = random_delay(min_ms, max_ms, self.rng)
        if self.config.sleep:
            time.sleep(delay_ms / 1000.0)

    def step(self) -> Optional[MoveRecord]:
        """
        Run one observe, solve, select, act cycle.

        Returns:
            The move taken, or None if the game is over or no move exists.
        """
        if self.game.game_over:
            return None

        result = solve_grid(self.game.snapshot())
        self.last_result = result
        self.report.solver_iterations.append(result.iterations)

        selected = select_move_with_reason(
            result, is_actionable=self.game.is_actionable, rng=self.rng
        )
        if selected is None:
            logger.debug("No available move; board solved or in an unhandled state")
            return None

        (r, c), reason = selected
        self._wait(self.config.min_action_delay_ms, self.config.max_action_delay_ms)

        status, payload = self.game.reveal(r, c)
        revealed = payload.get("revealed_cells", [])
        record = MoveRecord(
            coord=(r, c),
            reason=reason,
            status=status,
            revealed_cells_count=len(revealed),  # type: ignore[arg-type]
        )
        self.report.moves.append(record)
        logger.debug("Revealed %s (%s) -> status %d", (r, c), reason, status)

        if status == 0:
            self._wait(self.config.min_retry_delay_ms, self.config.max_retry_delay_ms)
        return record

    def play(self) -> GameReport:
        """
        Play until the game is won or lost, no move remains, or max_moves is hit.

        Returns:
            The game report.
        """
        while True:
            if (
                self.config.max_moves is not None
                and len(self.report.moves) >= self.config.max_moves
            ):
                logger.info("Stopping after %d moves", len(self.report.moves))
                break

            record = self.step()
            if record is None:
                break
            if record.status in (-1, 1):
                self.report.status = record.status
                break

        logger.info(
            "Game finished with status %d after %d moves (%d guesses)",
            self.report.status,
            len(self.report.moves),
            self.report.count(REASON_GUESS),
        )
        return self.report
