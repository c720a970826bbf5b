"""
Tests for the grid snapshot data model and the text board format
"""

import pytest

from minesweeper_assist.grid import (
    Cell,
    GridSnapshot,
    MalformedGridError,
    cell_token,
    is_numbered,
    is_open,
    parse_cell_token,
)
from minesweeper_assist.utils import get_neighborhoods


class TestParseCellToken:
    """Tests for classifying single tokens"""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("#", Cell.COVERED),
            ("C", Cell.COVERED),
            ("c", Cell.COVERED),
            (".", Cell.BLANK),
            ("B", Cell.BLANK),
            ("?", Cell.UNKNOWN),
            ("X", Cell.MINE),
            ("S", Cell.SAFE),
            ("G", Cell.GUESS),
            ("0", 0),
            ("3", 3),
            ("8", 8),
            ("9", Cell.UNKNOWN),
            ("@", Cell.UNKNOWN),
        ],
    )
    def test_tokens(self, token, expected):
        assert parse_cell_token(token) == expected

    def test_token_roundtrip_for_every_cell(self):
        for cell in Cell:
            assert parse_cell_token(cell_token(cell)) is cell

    def test_numbered_and_open_predicates(self):
        assert is_numbered(0)
        assert not is_numbered(True)
        assert not is_numbered(Cell.BLANK)
        assert is_open(Cell.COVERED)
        assert is_open(Cell.UNKNOWN)
        assert not is_open(Cell.GUESS)
        assert not is_open(1)


class TestFromRows:
    """Tests for building and validating snapshots"""

    def test_rectangular_grid(self):
        grid = GridSnapshot.from_rows([[Cell.COVERED, 1], [Cell.BLANK, 2]], remaining=3)
        assert grid.shape == (2, 2)
        assert grid[(1, 1)] == 2
        assert grid.remaining == 3

    def test_ragged_grid_is_rejected(self):
        with pytest.raises(MalformedGridError):
            GridSnapshot.from_rows([[Cell.COVERED, 1], [Cell.BLANK]])

    def test_malformed_grid_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            GridSnapshot.from_rows([[1], [1, 2]])

    def test_missing_grid_is_rejected(self):
        with pytest.raises(MalformedGridError):
            GridSnapshot.from_rows(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [9, -1, "C", None, 1.5])
    def test_non_cell_values_are_rejected(self, value):
        with pytest.raises(MalformedGridError):
            GridSnapshot.from_rows([[Cell.COVERED, value]])

    def test_zero_rows_is_empty_grid(self):
        grid = GridSnapshot.from_rows([])
        assert grid.shape == (0, 0)
        assert grid.covered_cells() == []

    def test_empty_rows_normalize_to_zero_by_zero(self):
        assert GridSnapshot.from_rows([[], []]).shape == (0, 0)

    def test_snapshot_is_immutable(self):
        grid = GridSnapshot.from_rows([[Cell.COVERED]])
        with pytest.raises(AttributeError):
            grid.remaining = 5  # type: ignore[misc]
        with pytest.raises(TypeError):
            grid.cells[0][0] = Cell.BLANK  # type: ignore[index]

    def test_to_rows_returns_independent_copy(self):
        grid = GridSnapshot.from_rows([[Cell.COVERED, 1]])
        rows = grid.to_rows()
        rows[0][0] = Cell.MINE
        assert grid[(0, 0)] is Cell.COVERED


class TestTextFormat:
    """Tests for the text board format"""

    def test_whitespace_separated(self):
        grid = GridSnapshot.from_text("# 1 .\n? 2 #\n")
        assert grid.cells == (
            (Cell.COVERED, 1, Cell.BLANK),
            (Cell.UNKNOWN, 2, Cell.COVERED),
        )

    def test_packed_rows(self):
        grid = GridSnapshot.from_text("#1.\n?2#")
        assert grid.shape == (2, 3)
        assert grid[(1, 0)] is Cell.UNKNOWN

    def test_comments_blank_lines_and_remaining(self):
        grid = GridSnapshot.from_text(
            """
            ; a comment
            remaining: 12

            # #
            1 1
            """
        )
        assert grid.remaining == 12
        assert grid.shape == (2, 2)

    def test_invalid_remaining(self):
        with pytest.raises(MalformedGridError):
            GridSnapshot.from_text("remaining: many\n# #")

    def test_ragged_text(self):
        with pytest.raises(MalformedGridError):
            GridSnapshot.from_text("# # #\n1 1")

    def test_to_text_parses_back(self):
        text = "remaining: 4\n# 1 .\nX S G"
        grid = GridSnapshot.from_text(text)
        assert grid.to_text() == text
        assert GridSnapshot.from_text(grid.to_text()) == grid

    def test_covered_cells_include_unknown_in_row_major_order(self):
        grid = GridSnapshot.from_text("? 1 #\n# . X")
        assert grid.covered_cells() == [(0, 0), (0, 2), (1, 0)]


class TestNeighborhoods:
    """Tests for the cached neighbor relation"""

    def test_corner_edge_and_center(self):
        nbrs = get_neighborhoods(3, 3)
        assert nbrs[(0, 0)] == ((0, 1), (1, 0), (1, 1))
        assert len(nbrs[(0, 1)]) == 5
        assert nbrs[(1, 1)] == (
            (0, 0), (0, 1), (0, 2),
            (1, 0), (1, 2),
            (2, 0), (2, 1), (2, 2),
        )

    def test_single_cell_and_empty_grids(self):
        assert get_neighborhoods(1, 1) == {(0, 0): ()}
        assert get_neighborhoods(0, 0) == {}

    def test_negative_dimensions(self):
        with pytest.raises(ValueError):
            get_neighborhoods(-1, 3)

    def test_results_are_cached(self):
        assert get_neighborhoods(4, 5) is get_neighborhoods(4, 5)
