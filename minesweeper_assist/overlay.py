"""Advisory rendering of a solved grid as text, ANSI, or HTML."""

from typing import Dict, List, Optional

from .grid import Cell, CellValue, GridSnapshot, cell_token
from .utils import Coord

_ANSI_RESET = "\033[0m"
_ANSI_COORD = "\033[96m"

# Foreground/background per solver mark: go, stop, uncertain.
_ANSI_MARKS: Dict[Cell, str] = {
    Cell.SAFE: "\033[30;102m",
    Cell.MINE: "\033[97;101m",
    Cell.GUESS: "\033[30;103m",
}

HTML_BACKGROUNDS: Dict[Cell, str] = {
    Cell.SAFE: "limegreen",
    Cell.MINE: "red",
    Cell.GUESS: "yellow",
    Cell.COVERED: "#c0c0c0",
    Cell.UNKNOWN: "#c0c0c0",
    Cell.BLANK: "#f0f0f0",
}

NUMBER_COLORS: Dict[int, str] = {
    0: "#cccccc",
    1: "#0000ff",
    2: "#008000",
    3: "#ff0000",
    4: "#000080",
    5: "#800000",
    6: "#008080",
    7: "#000000",
    8: "#808080",
}


def _ansi(code: str, s: str) -> str:
    return f"{code}{s}{_ANSI_RESET}"


def format_overlay(grid: GridSnapshot, *, color: bool = False, show_coords: bool = True) -> str:
    """
    Format a solved grid as a human-readable string.

    Args:
        grid: Grid returned by the solver.
        color: If True, highlight safe (green), mine (red) and guess (yellow)
            cells with ANSI colors.
        show_coords: If True, include row/column labels and a header.

    Returns:
        A text grid using the board tokens ('#' covered, '.' blank, 'S' safe,
        'X' mine, 'G' guess, '?' unknown, digits for numbers).
    """

    def cell_str(value: CellValue) -> str:
        token = cell_token(value)
        if color and isinstance(value, Cell) and value in _ANSI_MARKS:
            return _ansi(_ANSI_MARKS[value], token)
        return token

    def label(s: str) -> str:
        return _ansi(_ANSI_COORD, s) if color else s

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{c:2d}" for c in range(grid.cols))
        lines.append(label("   " + header))
        lines.append(label("   " + "-" * max(3 * grid.cols - 1, 0)))

    for r, row in enumerate(grid.cells):
        cells = " ".join(f" {cell_str(v)}" for v in row)
        lines.append(label(f"{r:2d} |") + cells if show_coords else cells)

    return "\n".join(lines)


def render_overlay_html(
    grid: GridSnapshot,
    highlight_cell: Optional[Coord] = None,
    cell_size: int = 24,
) -> str:
    """
    Render a solved grid as an HTML table.

    Safe cells get a limegreen background, mines red, the guess yellow with a
    '?', and covered cells keep their plain covered look.

    Args:
        grid: Grid returned by the solver.
        highlight_cell: Optional (r, c) drawn with a thick red border.
        cell_size: Cell width and height in pixels.
    """
    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for r, row in enumerate(grid.cells):
        html += "<tr>"
        for c, value in enumerate(row):
            if isinstance(value, Cell):
                bg = HTML_BACKGROUNDS[value]
                text_color = "#000000"
                display = {
                    Cell.GUESS: "?",
                    Cell.UNKNOWN: "?",
                }.get(value, "&nbsp;")
            else:
                bg = "#ffffff"
                text_color = NUMBER_COLORS[value]
                display = str(value)

            border = "3px solid #ff0000" if (r, c) == highlight_cell else "1px solid #999"

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html
