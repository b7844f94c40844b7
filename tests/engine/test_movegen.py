from __future__ import annotations

from typing import List

from matecheck.engine.board import Board
from matecheck.engine.move import str_to_square
from matecheck.engine.movegen import apply, in_check, legal_moves, piece_moves


EMPTY_RANK = "........"


def _board(**ranks: str) -> Board:
    # ranks given as r8="...", r1="..." etc.
    rows = [ranks.get(f"r{8 - i}", EMPTY_RANK) for i in range(8)]
    return Board.from_rows(rows)


def _dests(board: Board, square: str) -> set[str]:
    r, f = str_to_square(square)
    return {m.to_text()[2:4] for m in piece_moves(board, r, f)}


def _texts(moves) -> List[str]:
    return [m.to_text() for m in moves]


def test_startpos_has_twenty_moves_each_side() -> None:
    b = Board.startpos()
    white = _texts(legal_moves(b, "w"))
    black = _texts(legal_moves(b, "b"))
    assert len(white) == 20
    assert len(black) == 20
    assert {"e2e3", "e2e4", "g1f3", "g1h3", "b1a3", "b1c3"}.issubset(white)
    assert {"e7e6", "e7e5", "g8f6", "b8c6"}.issubset(black)


def test_generation_order_is_deterministic_board_scan() -> None:
    b = Board.startpos()
    moves = _texts(legal_moves(b, "w"))
    # rank 2 pawns (index 6) come before rank 1 knights (index 7)
    assert moves[:4] == ["a2a3", "a2a4", "b2b3", "b2b4"]
    assert moves[-4:] == ["b1a3", "b1c3", "g1f3", "g1h3"]
    assert moves == _texts(legal_moves(b, "w"))


def test_rook_stops_before_own_piece() -> None:
    b = _board(r3="P.......", r1="R......K")
    assert _dests(b, "a1") == {"a2", "b1", "c1", "d1", "e1", "f1", "g1"}


def test_rook_captures_enemy_and_stops() -> None:
    b = _board(r3="p.......", r1="R......K")
    dests = _dests(b, "a1")
    assert "a3" in dests
    assert not dests & {"a4", "a5", "a6", "a7", "a8"}


def test_bishop_and_queen_rays() -> None:
    b = _board(r4="...Q....", r6=".b......")
    # d4 queen: diagonal towards b6 captures and stops there
    dests = _dests(b, "d4")
    assert {"c5", "b6"}.issubset(dests)
    assert "a7" not in dests
    assert {"d8", "d1", "a4", "h4", "h8", "a1", "g1"}.issubset(dests)
    assert len(dests) == 26


def test_knight_in_corner() -> None:
    b = _board(r1="N.......")
    assert _dests(b, "a1") == {"b3", "c2"}


def test_pawn_advances_and_blocks() -> None:
    assert _dests(_board(r2="....P..."), "e2") == {"e3", "e4"}
    assert _dests(_board(r3="....n...", r2="....P..."), "e2") == set()
    assert _dests(_board(r4="....n...", r2="....P..."), "e2") == {"e3"}
    # Double step only from the starting rank
    assert _dests(_board(r3="....P..."), "e3") == {"e4"}
    assert _dests(_board(r7="...p...."), "d7") == {"d6", "d5"}


def test_pawn_captures_only_enemies_diagonally() -> None:
    b = _board(r5="...p.N..", r4="....P...")
    assert _dests(b, "e4") == {"e5", "d5"}
    r, f = str_to_square("e4")
    assert [m.to_text() for m in piece_moves(b, r, f)] == ["e4e5", "e4d5"]


def test_pinned_rook_is_filtered() -> None:
    b = _board(r8="k...r...", r2="....R...", r1="....K...")
    ms = set(_texts(legal_moves(b, "w")))
    assert "e2d2" not in ms and "e2f2" not in ms
    assert {"e2e3", "e2e8"}.issubset(ms)


def test_king_cannot_step_into_attack() -> None:
    b = _board(r8="...r...k", r1="....K...")
    assert set(_texts(legal_moves(b, "w"))) == {"e1e2", "e1f2", "e1f1"}


def test_in_check_and_missing_king() -> None:
    b = _board(r8="....r..k", r1="....K...")
    assert in_check(b, "w") is True
    assert in_check(b, "b") is False
    # Missing king fails closed
    assert in_check(_board(r8="k......."), "w") is True


def test_check_must_be_answered() -> None:
    # White king e1 checked by rook e8; only king steps off the file or the block
    b = _board(r8="....r..k", r2="R.......", r1="....K...")
    ms = set(_texts(legal_moves(b, "w")))
    assert ms == {"e1d1", "e1d2", "e1f1", "e1f2", "a2e2"}


def test_applied_legal_moves_never_leave_mover_in_check() -> None:
    midgame = Board.from_rows(
        [
            "r...k..r",
            "p.ppqpb.",
            "bn..pnp.",
            "...PN...",
            ".p..P...",
            "..N..Q.p",
            "PPPBBPPP",
            "R...K..R",
        ]
    )
    for board in (Board.startpos(), midgame):
        for side in ("w", "b"):
            for m in legal_moves(board, side):
                assert not in_check(apply(board, m), side), m.to_text()
