"""In-memory Minesweeper host game with first-click safety."""

import random
from collections import deque
from typing import Deque, Dict, FrozenSet, List, Optional, Set, Tuple

from .grid import Cell, CellValue, GridSnapshot
from .utils import Coord, get_neighborhoods

MINES_GENERATION_ALGORITHMS = ("safe_first_action_rule", "safe_neighborhood_rule")


class Minesweeper:
    """Minesweeper game that produces grid snapshots and accepts reveals."""

    def __init__(
        self,
        rows: int,
        cols: int,
        mines_count: int,
        mines_generation_algorithm: str = "safe_neighborhood_rule",
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize a Minesweeper game.

        Args:
            rows: Board height, must be > 0.
            cols: Board width, must be > 0.
            mines_count: Total number of mines to place, must be >= 0.
            mines_generation_algorithm: Mine placement rule; one of
                {"safe_first_action_rule", "safe_neighborhood_rule"}.
            rng: Random source for mine placement.

        Raises:
            ValueError: If dimensions are invalid or algorithm is unrecognized.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if mines_count < 0:
            raise ValueError("mines_count must be non-negative.")
        if mines_generation_algorithm not in MINES_GENERATION_ALGORITHMS:
            raise ValueError(
                'mines_generation_algorithm must be "safe_first_action_rule" '
                'or "safe_neighborhood_rule".'
            )
        if mines_count > rows * cols - 1:
            raise ValueError("Cannot leave a safe cell for the first reveal.")

        self.rows: int = rows
        self.cols: int = cols
        self.mines_count: int = mines_count
        self.mines_generation_algorithm: str = mines_generation_algorithm
        self.rng: random.Random = rng if rng is not None else random.Random()

        # board[r][c]: "M" for a mine, "0".."8" for adjacent counts.
        self.board: List[List[str]] = [[" " for _ in range(cols)] for _ in range(rows)]
        self.board_blank: bool = True
        self.revealed: List[List[bool]] = [[False for _ in range(cols)] for _ in range(rows)]
        self.first_move: bool = True

        self.unrevealed_count: int = rows * cols - mines_count
        self.game_over: bool = False

        self._neighborhoods: Dict[Coord, Tuple[Coord, ...]] = get_neighborhoods(rows, cols)

    def neighbors(self, r: int, c: int) -> Tuple[Coord, ...]:
        """Return precomputed neighbor coordinates for a cell."""
        return self._neighborhoods[(r, c)]

    def place_mines(self, first_r: int, first_c: int) -> None:
        """
        Place mines on the board (one-time), respecting the first-move safety rule.

        Raises:
            ValueError: If the board is not blank or mines cannot be placed.
        """
        if not self.board_blank:
            raise ValueError("The board is not blank.")

        safe: Set[Coord] = {(first_r, first_c)}
        if self.mines_generation_algorithm == "safe_neighborhood_rule":
            safe |= set(self.neighbors(first_r, first_c))

        eligible: List[Coord] = [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if (r, c) not in safe
        ]
        if self.mines_count > len(eligible):
            raise ValueError(
                f"Cannot place enough safe cells to satisfy {self.mines_generation_algorithm}."
            )

        for mr, mc in self.rng.sample(eligible, self.mines_count):
            self.board[mr][mc] = "M"

        for r in range(self.rows):
            for c in range(self.cols):
                if self.board[r][c] == "M":
                    continue
                count = sum(1 for nr, nc in self.neighbors(r, c) if self.board[nr][nc] == "M")
                self.board[r][c] = str(count)

        self.board_blank = False

    def flood_fill(self, r: int, c: int) -> List[Tuple[int, int, str]]:
        """
        Reveal a connected region starting at (r, c).

        Returns:
            Newly revealed cells as (r, c, value_str).
        """
        frontier: Deque[Coord] = deque([(r, c)])
        visited: Set[Coord] = {(r, c)}
        revealed_cells: List[Tuple[int, int, str]] = []

        while frontier:
            cr, cc = frontier.popleft()
            if self.revealed[cr][cc]:
                continue

            self.revealed[cr][cc] = True
            self.unrevealed_count -= 1
            revealed_cells.append((cr, cc, self.board[cr][cc]))

            if self.board[cr][cc] == "0":
                for nr, nc in self.neighbors(cr, cc):
                    if (nr, nc) in visited or self.revealed[nr][nc]:
                        continue
                    visited.add((nr, nc))
                    frontier.append((nr, nc))

        return revealed_cells

    def reveal(self, r: int, c: int) -> Tuple[int, Dict[str, object]]:
        """
        Reveal a single cell and return a status code plus payload.

        Returns:
            Tuple of (status, payload) where status is:
                - -1: Mine hit (loss)
                - 0: Non-terminal reveal (or no-op)
                - 1: Win (all safe cells revealed)

            Payload contains:
                - For status 0 or 1: {"revealed_cells": List[(r, c, value_str)]}
                - For status -1: {"revealed_cells_count": int, "all_mines": FrozenSet}

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        if r < 0 or r >= self.rows or c < 0 or c >= self.cols:
            raise ValueError("Cell coordinates are outside the board.")

        if self.game_over or self.revealed[r][c]:
            return 0, {}

        if self.first_move:
            self.place_mines(r, c)
            self.first_move = False

        if self.board[r][c] == "M":
            self.revealed[r][c] = True
            self.game_over = True

            revealed_cells_count = (
                self.rows * self.cols - self.mines_count
            ) - self.unrevealed_count
            all_mines: FrozenSet[Coord] = frozenset(
                (mr, mc)
                for mr in range(self.rows)
                for mc in range(self.cols)
                if self.board[mr][mc] == "M"
            )
            return -1, {
                "revealed_cells_count": revealed_cells_count,
                "all_mines": all_mines,
            }

        revealed_cells = self.flood_fill(r, c)

        if self.unrevealed_count == 0:
            self.game_over = True
            return 1, {"revealed_cells": revealed_cells}

        return 0, {"revealed_cells": revealed_cells}

    def is_actionable(self, coord: Coord) -> bool:
        """Return True if the cell can still be revealed."""
        r, c = coord
        return (
            not self.game_over
            and 0 <= r < self.rows
            and 0 <= c < self.cols
            and not self.revealed[r][c]
        )

    def is_mine(self, coord: Coord) -> bool:
        r, c = coord
        return self.board[r][c] == "M"

    def snapshot(self) -> GridSnapshot:
        """
        Observe the visible board the way a scraper would.

        Unrevealed cells are COVERED, revealed zeros are BLANK, other
        revealed counts are numbered, and a detonated mine is UNKNOWN.
        """
        cells: List[Tuple[CellValue, ...]] = []
        for r in range(self.rows):
            row: List[CellValue] = []
            for c in range(self.cols):
                if not self.revealed[r][c]:
                    row.append(Cell.COVERED)
                elif self.board[r][c] == "0":
                    row.append(Cell.BLANK)
                elif self.board[r][c] == "M":
                    row.append(Cell.UNKNOWN)
                else:
                    row.append(int(self.board[r][c]))
            cells.append(tuple(row))
        return GridSnapshot(cells=tuple(cells), remaining=self.unrevealed_count)

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and all underlying values.
            color: If True, use ANSI colors for coordinates and mines.
        """
        coord = self._c if color else str
        mine = self._m if color else str

        def cell_str(r: int, c: int) -> str:
            if reveal_all or self.revealed[r][c]:
                v = self.board[r][c]
                if v == "M":
                    return mine("M")
                return v
            return "."

        header_cells = " ".join(f"{c:2d}" for c in range(self.cols))
        out = [coord("   ") + coord(header_cells)]
        out.append(coord("   " + "-" * (3 * self.cols - 1)))

        for r in range(self.rows):
            row_cells = " ".join(f" {cell_str(r, c)}" for c in range(self.cols))
            out.append(coord(f"{r:2d} ") + coord("|") + row_cells)

        return "\n".join(out)
