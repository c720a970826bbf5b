"""
Tests for the command-line interface
"""

import io

import pytest

from minesweeper_assist.cli import build_parser, main


def run(argv):
    out = io.StringIO()
    code = main(argv, stdout=out)
    return code, out.getvalue()


class TestSolveCommand:
    """Tests for `solve`"""

    def test_solve_file(self, tmp_path):
        board = tmp_path / "board.txt"
        board.write_text("; one-two-one\n# # #\n1 2 1\n", encoding="utf-8")

        code, out = run(["solve", str(board)])
        assert code == 0
        assert " 0 | X  S  X" in out
        assert "mines: 2  safe: 1  iterations: 3" in out
        assert out.rstrip().endswith("move: 0 1 (safe)")

    def test_solve_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("# 1 #\n"))
        code, out = run(["solve", "-"])
        assert code == 0
        assert "move: 0 0 (guess)" in out

    def test_nothing_to_do(self, tmp_path):
        board = tmp_path / "board.txt"
        board.write_text(". 1\n1 .\n", encoding="utf-8")
        code, out = run(["solve", str(board)])
        assert code == 0
        assert "no move available" in out

    def test_malformed_board(self, tmp_path, capsys):
        board = tmp_path / "board.txt"
        board.write_text("# # #\n1 1\n", encoding="utf-8")
        code, out = run(["solve", str(board)])
        assert code == 2
        assert out == ""
        assert "error:" in capsys.readouterr().err


    def test_missing_file(self, tmp_path, capsys):
        code, _ = run(["solve", str(tmp_path / "absent.txt")])
        assert code == 2
        assert "error:" in capsys.readouterr().err


class TestAutoplayCommand:
    """Tests for `autoplay`"""

    def test_prints_statistics(self):
        code, out = run(["autoplay", "--runs", "2", "--seed", "1"])
        assert code == 0
        keys = [line.split()[0] for line in out.splitlines()]
        assert "win_rate" in keys
        assert keys == sorted(keys)

    def test_invalid_board_is_reported(self, capsys):
        code, _ = run(["autoplay", "--rows", "2", "--cols", "2", "--mines", "4"])
        assert code == 2
        assert "error:" in capsys.readouterr().err

    def test_unknown_algorithm_is_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["autoplay", "--algorithm", "anywhere"])


class TestPlayCommand:
    """Tests for `play`"""

    def test_hint_then_quit(self, monkeypatch, capsys):
        answers = iter(["h", "q"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        code, _ = run(["play", "--seed", "0"])
        assert code == 0
        printed = capsys.readouterr().out
        assert "Suggested move: 0 0 (guess)" in printed
        assert "Quit." in printed
