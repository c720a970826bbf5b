"""Grid snapshot data model: cell values, validation, and the text board format."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .utils import Coord


class MalformedGridError(ValueError):
    """Raised when a grid is ragged or holds values that are not cells."""


class Cell(Enum):
    """Non-numeric cell states. Numbered cells are plain ints."""

    COVERED = "#"
    BLANK = "."
    UNKNOWN = "?"
    MINE = "X"
    SAFE = "S"
    GUESS = "G"


CellValue = Union[Cell, int]

# Cells the deduction rules treat as still open.
OPEN_CELLS = (Cell.COVERED, Cell.UNKNOWN)

_TOKEN_ALIASES = {
    "C": Cell.COVERED,
    "B": Cell.BLANK,
}


def is_numbered(value: object) -> bool:
    """Return True if value is a Numbered cell (an int that is not a bool)."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_open(value: object) -> bool:
    """Return True for COVERED and UNKNOWN cells."""
    return value in OPEN_CELLS


def parse_cell_token(token: str) -> CellValue:
    """
    Classify one text token into a cell value.

    Digits 0-8 become Numbered cells; the known symbols (and the letter
    aliases C/B) map to their Cell; anything else is UNKNOWN, the same way an
    unreadable cell on a live board is classified.

    Args:
        token: A non-empty token from a text board.

    Returns:
        The parsed cell value.
    """
    token = token.strip()
    if token.isdigit():
        value = int(token)
        return value if value <= 8 else Cell.UNKNOWN

    upper = token.upper()
    if upper in _TOKEN_ALIASES:
        return _TOKEN_ALIASES[upper]
    for cell in Cell:
        if cell.value == upper:
            return cell
    return Cell.UNKNOWN


def cell_token(value: CellValue) -> str:
    """Return the text token for a cell value."""
    if isinstance(value, Cell):
        return value.value
    return str(value)


def _validate_value(value: object, r: int, c: int) -> CellValue:
    if isinstance(value, Cell):
        return value
    if is_numbered(value):
        if not 0 <= value <= 8:  # type: ignore[operator]
            raise MalformedGridError(
                f"Numbered cell at ({r}, {c}) must be in 0..8, got {value}."
            )
        return value  # type: ignore[return-value]
    raise MalformedGridError(
        f"Cell at ({r}, {c}) is not a cell value: {value!r}."
    )


@dataclass(frozen=True)
class GridSnapshot:
    """
    Immutable rows x cols observation of a board.

    Attributes:
        cells: Row-major tuple of row tuples.
        remaining: The host's remaining-tiles counter (0 when unknown).
    """

    cells: Tuple[Tuple[CellValue, ...], ...]
    remaining: int = 0

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[object]], remaining: int = 0
    ) -> "GridSnapshot":
        """
        Build a validated snapshot from a matrix of cell values.

        Args:
            rows: Row-major matrix. Zero rows is a valid empty grid; rows that
                are all empty are normalized to 0x0.
            remaining: Remaining-tiles counter reported by the host.

        Raises:
            MalformedGridError: If the matrix is ragged or holds non-cell values.
        """
        if rows is None:
            raise MalformedGridError("Grid is missing.")

        materialized: List[Sequence[object]] = list(rows)
        if not materialized or all(len(row) == 0 for row in materialized):
            return cls(cells=(), remaining=remaining)

        width = len(materialized[0])
        cells: List[Tuple[CellValue, ...]] = []
        for r, row in enumerate(materialized):
            if len(row) != width:
                raise MalformedGridError(
                    f"Row {r} has {len(row)} cells, expected {width}."
                )
            cells.append(tuple(_validate_value(v, r, c) for c, v in enumerate(row)))

        return cls(cells=tuple(cells), remaining=remaining)

    @classmethod
    def from_text(cls, text: str) -> "GridSnapshot":
        """
        Parse a text board.

        One row per line. Cells are separated by whitespace, or packed one
        character per cell when a line has no whitespace. Blank lines and
        lines starting with ';' are ignored; a 'remaining: N' line sets the
        remaining counter.

        Raises:
            MalformedGridError: If the rows are ragged or the counter is not
                an integer.
        """
        remaining = 0
        rows: List[List[CellValue]] = []
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith(";"):
                continue

            if stripped.lower().startswith("remaining:"):
                raw = stripped.split(":", 1)[1].strip()
                try:
                    remaining = int(raw)
                except ValueError:
                    raise MalformedGridError(
                        f"Invalid remaining counter: {raw!r}."
                    ) from None
                continue

            tokens = stripped.split() if any(ch.isspace() for ch in stripped) else list(stripped)
            rows.append([parse_cell_token(t) for t in tokens])

        return cls.from_rows(rows, remaining=remaining)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def __getitem__(self, coord: Coord) -> CellValue:
        r, c = coord
        return self.cells[r][c]

    def __iter__(self) -> Iterator[Tuple[CellValue, ...]]:
        return iter(self.cells)

    def coords(self) -> Iterator[Coord]:
        """Yield every coordinate in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def find(self, *values: CellValue) -> List[Coord]:
        """Return coordinates holding any of the given values, row-major."""
        return [coord for coord in self.coords() if self[coord] in values]

    def covered_cells(self) -> List[Coord]:
        """Return COVERED and UNKNOWN coordinates in row-major order."""
        return self.find(*OPEN_CELLS)

    def to_rows(self) -> List[List[CellValue]]:
        """Return a mutable deep copy of the cells."""
        return [list(row) for row in self.cells]

    def to_text(self, remaining: Optional[bool] = None) -> str:
        """
        Serialize to the text board format accepted by from_text().

        Args:
            remaining: Emit the 'remaining: N' line. Defaults to emitting it
                only when the counter is non-zero.
        """
        lines: List[str] = []
        if remaining or (remaining is None and self.remaining):
            lines.append(f"remaining: {self.remaining}")
        for row in self.cells:
            lines.append(" ".join(cell_token(v) for v in row))
        return "\n".join(lines)
