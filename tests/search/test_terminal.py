from __future__ import annotations

import pytest

from matecheck.engine.board import Board
from matecheck.errors import NoMoveAvailableError
from matecheck.search.service import INF, MATE_SCORE, SearchService, best_move, minimax


STALEMATE_ROWS = [".......k", ".....Q..", "......K.", "........", "........", "........", "........", "........"]
MATE_ROWS = [".......k", "......Q.", "......K.", "........", "........", "........", "........", "........"]
# Black queen g2 backed by king g3 mates the white king on h1
WHITE_MATED_ROWS = ["........", "........", "........", "........", "........", "......k.", "......q.", ".......K"]


@pytest.mark.parametrize("depth", [0, 1, 3])
def test_stalemate_scores_zero_even_at_depth_zero(depth: int) -> None:
    b = Board.from_rows(STALEMATE_ROWS)
    assert minimax(b, depth, -INF, INF, False) == 0


@pytest.mark.parametrize("depth", [0, 2])
def test_black_checkmated_scores_positive_mate(depth: int) -> None:
    b = Board.from_rows(MATE_ROWS)
    assert minimax(b, depth, -INF, INF, False) == MATE_SCORE


def test_white_checkmated_scores_negative_mate() -> None:
    b = Board.from_rows(WHITE_MATED_ROWS)
    assert minimax(b, 1, -INF, INF, True) == -MATE_SCORE


def test_depth_zero_returns_static_evaluation() -> None:
    b = Board.startpos()
    assert minimax(b, 0, -INF, INF, True) == 0


def test_best_move_signals_no_move_available() -> None:
    with pytest.raises(NoMoveAvailableError):
        best_move(Board.from_rows(MATE_ROWS), "b", 2)
    with pytest.raises(NoMoveAvailableError):
        best_move(Board.from_rows(STALEMATE_ROWS), "b", 2)


def test_service_reports_terminal_root() -> None:
    service = SearchService()
    res = service.search(Board.from_rows(MATE_ROWS), "b", 2)
    assert res.best_move is None
    assert res.score == MATE_SCORE
    assert res.status == "checkmate"

    res = service.search(Board.from_rows(STALEMATE_ROWS), "b", 2)
    assert res.best_move is None
    assert res.score == 0
    assert res.status == "stalemate"


def test_depth_must_be_positive() -> None:
    with pytest.raises(ValueError):
        best_move(Board.startpos(), "w", 0)
