"""Deduction engine: local constraint propagation with a heuristic fallback."""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple, Union

from .grid import Cell, CellValue, GridSnapshot, is_numbered, is_open
from .utils import Coord, get_neighborhoods

logger = logging.getLogger(__name__)

# Safety valve against non-termination. Each productive iteration grows the
# set of resolved cells, so real boards stop far below this.
MAX_ITERATIONS = 100

GridInput = Union[GridSnapshot, Sequence[Sequence[CellValue]]]


@dataclass(frozen=True)
class SolveResult:
    """
    Outcome of one solve.

    Attributes:
        grid: The solved grid, same shape as the input.
        mine_coords: Cells proven to be mines during this solve.
        safe_coords: Cells proven to be safe during this solve.
        guess_coord: The heuristic pick, set only when nothing was proven.
        iterations: Fixpoint iterations run.
        stats: Inference counters for analysis.
    """

    grid: GridSnapshot
    mine_coords: FrozenSet[Coord] = frozenset()
    safe_coords: FrozenSet[Coord] = frozenset()
    guess_coord: Optional[Coord] = None
    iterations: int = 0
    stats: Dict[str, int] = field(default_factory=dict, compare=False)

    @property
    def has_deductions(self) -> bool:
        return bool(self.mine_coords or self.safe_coords)


class DeductionEngine:
    """
    Solver over a working copy of a grid snapshot.

    The engine applies two deduction rules until neither changes the grid:
    1. Single-constraint saturation around each numbered cell
    2. Pairwise subset elimination between neighboring numbered cells
    If nothing could be proven, it marks one heuristic guess.

    Every call to solve() restarts from a fresh copy of its input, so the
    derived sets never carry facts over from a previous board.
    """

    def __init__(self, grid: GridInput) -> None:
        """
        Initialize the engine with an observed grid.

        Args:
            grid: A GridSnapshot or a row-major matrix of cell values.

        Raises:
            MalformedGridError: If the matrix is ragged or holds non-cell values.
        """
        self._snapshot: GridSnapshot = self._as_snapshot(grid)
        self._load(self._snapshot)

    @staticmethod
    def _as_snapshot(grid: GridInput) -> GridSnapshot:
        if isinstance(grid, GridSnapshot):
            return grid
        return GridSnapshot.from_rows(grid)

    def _load(self, snapshot: GridSnapshot) -> None:
        """Reset the working grid and all derived state from a snapshot."""
        self.rows: int = snapshot.rows
        self.cols: int = snapshot.cols
        self.remaining: int = snapshot.remaining

        # A previous guess is not a fact; it goes back to being covered.
        self.grid: List[List[CellValue]] = [
            [Cell.COVERED if v is Cell.GUESS else v for v in row]
            for row in snapshot.cells
        ]

        self._neighborhoods: Dict[Coord, Tuple[Coord, ...]] = get_neighborhoods(
            self.rows, self.cols
        )

        self.safe_coords: Set[Coord] = set()
        self.mine_coords: Set[Coord] = set()
        self.guess_coord: Optional[Coord] = None

        self.iterations: int = 0
        self.attempted_single_count: int = 0
        self.inferred_single_count: int = 0
        self.attempted_paired_count: int = 0
        self.inferred_paired_count: int = 0

    # -------------------------------------------------------------------------
    # Grid queries
    # -------------------------------------------------------------------------

    def neighbors(self, r: int, c: int) -> Tuple[Coord, ...]:
        """Return the clipped 8-neighborhood of (r, c) in row-major order."""
        return self._neighborhoods[(r, c)]

    def constraint(self, r: int, c: int) -> Tuple[List[Coord], int]:
        """
        Describe the constraint imposed by the numbered cell at (r, c).

        Returns:
            Tuple of (open_neighbors, required_mines) where open_neighbors are
            the COVERED/UNKNOWN neighbors and required_mines is the cell's
            number minus the neighbors already marked as mines.
        """
        value = self.grid[r][c]
        if not is_numbered(value):
            raise ValueError(f"Cell ({r}, {c}) is not numbered.")

        open_neighbors: List[Coord] = []
        marked_mines = 0
        for nr, nc in self.neighbors(r, c):
            neighbor = self.grid[nr][nc]
            if neighbor is Cell.MINE:
                marked_mines += 1
            elif is_open(neighbor):
                open_neighbors.append((nr, nc))

        return open_neighbors, int(value) - marked_mines

    def has_open_cells(self) -> bool:
        """Return True if any COVERED or UNKNOWN cell remains."""
        return any(is_open(v) for row in self.grid for v in row)

    def has_known_facts(self) -> bool:
        """Return True if any cell is marked MINE or SAFE, proven now or carried in."""
        return any(v is Cell.MINE or v is Cell.SAFE for row in self.grid for v in row)

    def get_unknown_cells(self) -> List[Coord]:
        """Return all COVERED/UNKNOWN coordinates in row-major order."""
        return [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if is_open(self.grid[r][c])
        ]

    def _numbered_cells(self) -> List[Coord]:
        return [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if is_numbered(self.grid[r][c])
        ]

    # -------------------------------------------------------------------------
    # Marking
    # -------------------------------------------------------------------------

    def _mark_mine(self, coord: Coord) -> bool:
        r, c = coord
        if not is_open(self.grid[r][c]):
            return False
        self.grid[r][c] = Cell.MINE
        self.mine_coords.add(coord)
        return True

    def _mark_safe(self, coord: Coord) -> bool:
        r, c = coord
        if not is_open(self.grid[r][c]):
            return False
        self.grid[r][c] = Cell.SAFE
        self.safe_coords.add(coord)
        return True

    # -------------------------------------------------------------------------
    # Deduction rules
    # -------------------------------------------------------------------------

    def solve_by_neighbors(self) -> bool:
        """
        Apply single-constraint saturation to every numbered cell.

        When a cell's remaining mine count equals its number of open
        neighbors, all of them are mines; when it is zero, all are safe.
        Cells whose remaining count is negative or exceeds their open
        neighbors come from an inconsistent board and are skipped.

        Returns:
            True if any cell changed state.
        """
        changed = False

        for r, c in self._numbered_cells():
            open_neighbors, required = self.constraint(r, c)
            if not open_neighbors:
                continue

            if required < 0 or required > len(open_neighbors):
                logger.debug(
                    "Skipping inconsistent cell (%d, %d): needs %d mines among %d open neighbors",
                    r, c, required, len(open_neighbors),
                )
                continue

            self.attempted_single_count += 1

            if required > 0 and required == len(open_neighbors):
                for coord in open_neighbors:
                    if self._mark_mine(coord):
                        self.inferred_single_count += 1
                        changed = True
            elif required == 0:
                for coord in open_neighbors:
                    if self._mark_safe(coord):
                        self.inferred_single_count += 1
                        changed = True

        return changed

    def solve_by_multiple(self) -> bool:
        """
        Apply subset elimination to every pair of neighboring numbered cells.

        If the open neighbors of one cell are a strict subset of the other's,
        the cells only the larger constraint sees hold exactly the difference
        of the two required mine counts. A difference equal to the number of
        those cells makes them all mines; a difference of zero makes them all
        safe. Constraints are re-read before each pair so marks made earlier
        in the pass are observed.

        Returns:
            True if any cell changed state.
        """
        changed = False

        for r, c in self._numbered_cells():
            for r2, c2 in self.neighbors(r, c):
                if not is_numbered(self.grid[r2][c2]):
                    continue

                open1, required1 = self.constraint(r, c)
                open2, required2 = self.constraint(r2, c2)
                if not (0 <= required1 <= len(open1) and 0 <= required2 <= len(open2)):
                    continue

                set1, set2 = set(open1), set(open2)
                if set1 == set2:
                    continue

                self.attempted_paired_count += 1

                for small, small_required, large, large_required in (
                    (set1, required1, set2, required2),
                    (set2, required2, set1, required1),
                ):
                    if not small < large:
                        continue

                    excess = sorted(large - small)
                    required_diff = large_required - small_required

                    if required_diff == len(excess):
                        for coord in excess:
                            if self._mark_mine(coord):
                                self.inferred_paired_count += 1
                                changed = True
                    elif required_diff == 0:
                        for coord in excess:
                            if self._mark_safe(coord):
                                self.inferred_paired_count += 1
                                changed = True

        return changed

    def solve_probabilistically(self) -> bool:
        """
        Mark the least risky open cell as the single best guess.

        Each open cell is scored by the lowest number among its numbered
        neighbors, and the lowest score wins, first in row-major order on
        ties. A cell with no numbered neighbor is only taken while no scored
        cell has been found. This is a heuristic, not a probability.

        Returns:
            True if a guess was marked.
        """
        best_guess: Optional[Coord] = None
        best_score = float("inf")

        for r, c in self.get_unknown_cells():
            numbers = [
                int(self.grid[nr][nc])  # type: ignore[arg-type]
                for nr, nc in self.neighbors(r, c)
                if is_numbered(self.grid[nr][nc])
            ]

            if numbers:
                score = min(numbers)
                if score < best_score:
                    best_score = score
                    best_guess = (r, c)
            elif best_guess is None:
                best_guess = (r, c)

        if best_guess is None:
            return False

        gr, gc = best_guess
        self.grid[gr][gc] = Cell.GUESS
        self.guess_coord = best_guess
        logger.debug("Heuristic guess at %s (lowest adjacent number %s)", best_guess, best_score)
        return True

    # -------------------------------------------------------------------------
    # Main solving loop
    # -------------------------------------------------------------------------

    def solve(self, grid: Optional[GridInput] = None) -> GridSnapshot:
        """
        Run the deduction rules to a fixpoint, then guess if nothing was proven.

        Args:
            grid: Optional new board to solve. When omitted, the board given
                at construction is solved again from scratch.

        Returns:
            The solved grid. mine_coords, safe_coords and guess_coord
            describe exactly what changed versus the input.
        """
        if grid is not None:
            self._snapshot = self._as_snapshot(grid)
        self._load(self._snapshot)

        changed = True
        while changed and self.iterations < MAX_ITERATIONS:
            self.iterations += 1

            changed_by_neighbors = self.solve_by_neighbors()
            changed_by_multiple = self.solve_by_multiple()
            changed = changed_by_neighbors or changed_by_multiple

            logger.debug(
                "Iteration %d: neighbors=%s multiple=%s mines=%d safe=%d",
                self.iterations,
                changed_by_neighbors,
                changed_by_multiple,
                len(self.mine_coords),
                len(self.safe_coords),
            )

        if changed:
            logger.warning(
                "Deduction stopped at the %d-iteration cap with changes pending",
                MAX_ITERATIONS,
            )
        elif not self.has_known_facts() and self.has_open_cells():
            self.solve_probabilistically()

        return self.snapshot()

    def snapshot(self) -> GridSnapshot:
        """Return an immutable copy of the working grid."""
        return GridSnapshot(
            cells=tuple(tuple(row) for row in self.grid), remaining=self.remaining
        )

    def stats(self) -> Dict[str, int]:
        return {
            "iterations": self.iterations,
            "attempted_single_count": self.attempted_single_count,
            "inferred_single_count": self.inferred_single_count,
            "attempted_paired_count": self.attempted_paired_count,
            "inferred_paired_count": self.inferred_paired_count,
            "mines_count": len(self.mine_coords),
            "safe_count": len(self.safe_coords),
            "guessed": int(self.guess_coord is not None),
        }

    def result(self) -> SolveResult:
        """Package the current engine state as an immutable SolveResult."""
        return SolveResult(
            grid=self.snapshot(),
            mine_coords=frozenset(self.mine_coords),
            safe_coords=frozenset(self.safe_coords),
            guess_coord=self.guess_coord,
            iterations=self.iterations,
            stats=self.stats(),
        )


def solve_grid(grid: GridInput) -> SolveResult:
    """
    Solve a board with a fresh engine.

    Args:
        grid: A GridSnapshot or a row-major matrix of cell values.

    Returns:
        The SolveResult. The input is never mutated.

    Raises:
        MalformedGridError: If the matrix is ragged or holds non-cell values.
    """
    engine = DeductionEngine(grid)
    engine.solve()
    return engine.result()
