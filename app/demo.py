"""
Minesweeper Assistant - Interactive Demo

Run with: streamlit run app/demo.py
"""

import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Any, Dict, List, Tuple

from minesweeper_assist import (
    AutoplayConfig,
    AutoPlayer,
    GridSnapshot,
    MalformedGridError,
    Minesweeper,
    render_overlay_html,
    select_move_with_reason,
    solve_grid,
)

SAMPLE_BOARD = """\
; '#' covered, '.' blank, digits numbered, '?' unreadable
# # # # #
# 1 2 1 #
. . . . .
"""

LEGEND_HTML = """
<div style="font-size: 12px; margin-top: 10px;">
<b>Legend:</b>
<span style="background: limegreen; padding: 2px 6px; margin: 0 4px;">&nbsp;</span> Safe
<span style="background: red; padding: 2px 6px; margin: 0 4px;">&nbsp;</span> Mine
<span style="background: yellow; padding: 2px 6px; margin: 0 4px; font-weight: bold;">?</span> Best guess
<span style="background: #c0c0c0; padding: 2px 6px; margin: 0 4px;">&nbsp;</span> Covered
</div>
"""


def advisory_tab() -> None:
    """Paste a board, see the overlay and the suggested move."""
    text = st.text_area("Board", SAMPLE_BOARD, height=200)

    try:
        grid = GridSnapshot.from_text(text)
    except MalformedGridError as exc:
        st.error(f"Malformed board: {exc}")
        return

    if grid.rows == 0:
        st.info("Nothing to solve.")
        return

    result = solve_grid(grid)
    selected = select_move_with_reason(result, rng=random.Random(0))
    highlight = selected[0] if selected else None

    st.markdown(render_overlay_html(result.grid, highlight_cell=highlight), unsafe_allow_html=True)
    st.markdown(LEGEND_HTML, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    col1.metric("Mines", len(result.mine_coords))
    col2.metric("Safe", len(result.safe_coords))
    col3.metric("Iterations", result.iterations)

    if selected is None:
        st.info("No move available.")
    else:
        (r, c), reason = selected
        st.success(f"Suggested move: ({r}, {c}) - {reason}")


def autoplay_tab() -> None:
    """Let the solver play a generated board one move at a time."""
    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Beginner (9x9, 10)", "Intermediate (16x16, 40)", "Expert (16x30, 99)"],
    )
    presets: Dict[str, Tuple[int, int, int]] = {
        "Beginner (9x9, 10)": (9, 9, 10),
        "Intermediate (16x16, 40)": (16, 16, 40),
        "Expert (16x30, 99)": (16, 30, 99),
    }
    rows, cols, mines = presets[preset]
    seed = st.sidebar.number_input("Seed", min_value=0, value=0, step=1)

    settings = (rows, cols, mines, int(seed))
    if st.session_state.get("settings") != settings or st.button("New Game", type="primary"):
        rng = random.Random(int(seed))
        game = Minesweeper(rows, cols, mines, rng=rng)
        st.session_state.settings = settings
        st.session_state.player = AutoPlayer(game, AutoplayConfig(), rng=rng)

    player: AutoPlayer = st.session_state.player

    btn_col1, btn_col2 = st.columns(2)
    with btn_col1:
        if st.button("Step"):
            record = player.step()
            if record is not None and record.status in (-1, 1):
                player.report.status = record.status
    with btn_col2:
        if st.button("Play to End"):
            player.play()

    if player.last_result is not None and not player.game.game_over:
        grid = solve_grid(player.game.snapshot()).grid
    else:
        grid = player.game.snapshot()

    last_move = player.report.moves[-1].coord if player.report.moves else None
    st.markdown(render_overlay_html(grid, highlight_cell=last_move), unsafe_allow_html=True)
    st.markdown(LEGEND_HTML, unsafe_allow_html=True)

    if player.report.status == 1:
        st.success("Solved! All safe cells revealed.")
    elif player.report.status == -1:
        st.error("Game Over! Hit a mine.")

    stats: List[Tuple[str, Any]] = [
        ("Moves", len(player.report.moves)),
        ("Safe moves", player.report.count("safe")),
        ("Guesses", player.report.count("guess")),
        ("Fallback moves", player.report.count("fallback")),
    ]
    for label, value in stats:
        st.sidebar.metric(label, value)


def main():
    st.set_page_config(
        page_title="Minesweeper Assistant",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minesweeper Assistant")
    st.markdown("""
    Deduces certain mines and safe cells with local constraint propagation,
    and picks a best guess when nothing can be proven.
    """)

    mode = st.sidebar.radio("Mode", ["Advisory", "Autoplay"])
    if mode == "Advisory":
        advisory_tab()
    else:
        autoplay_tab()


if __name__ == "__main__":
    main()
