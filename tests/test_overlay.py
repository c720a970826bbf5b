"""
Tests for the advisory overlay rendering
"""

from minesweeper_assist.grid import GridSnapshot
from minesweeper_assist.overlay import format_overlay, render_overlay_html
from minesweeper_assist.solver import solve_grid


class TestFormatOverlay:
    """Tests for the text overlay"""

    def test_plain_grid_without_coords(self):
        result = solve_grid(GridSnapshot.from_text("# # #\n1 2 1"))
        assert format_overlay(result.grid, show_coords=False) == " X  S  X\n 1  2  1"

    def test_header_and_row_labels(self):
        grid = GridSnapshot.from_text("# 1 .")
        lines = format_overlay(grid).splitlines()
        assert lines[0] == "    0  1  2"
        assert lines[1] == "   --------"
        assert lines[2] == " 0 | #  1  ."

    def test_color_highlights_marks_only(self):
        result = solve_grid(GridSnapshot.from_text("# 1 #"))
        text = format_overlay(result.grid, color=True, show_coords=False)
        assert "\033[30;103mG\033[0m" in text
        assert text.count("\033[") == 2

    def test_empty_grid(self):
        assert format_overlay(GridSnapshot.from_rows([]), show_coords=False) == ""


class TestRenderOverlayHtml:
    """Tests for the HTML overlay"""

    def test_marks_get_their_backgrounds(self):
        result = solve_grid(GridSnapshot.from_text("# # #\n1 2 1"))
        html = render_overlay_html(result.grid)
        assert html.count("background: red;") == 2
        assert html.count("background: limegreen;") == 1
        assert html.count("<tr>") == 2

    def test_guess_is_yellow_question_mark(self):
        result = solve_grid(GridSnapshot.from_text("# 1 #"))
        html = render_overlay_html(result.grid)
        assert html.count("background: yellow;") == 1
        assert ">?</td>" in html

    def test_highlight_cell_border(self):
        grid = GridSnapshot.from_text("# 1")
        html = render_overlay_html(grid, highlight_cell=(0, 1))
        assert html.count("3px solid #ff0000") == 1
