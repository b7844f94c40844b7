from __future__ import annotations

import pytest

from matecheck.engine.board import START_ROWS
from matecheck.engine.game import Game
from matecheck.engine.move import Move, parse_move
from matecheck.errors import IllegalMoveError, InvalidBoardError


PROMO_ROWS = [
    ".......k",
    "P.......",
    "........",
    "........",
    "........",
    "........",
    "........",
    "....K...",
]


def test_apply_move_updates_board_and_turn() -> None:
    g = Game.new()
    played = g.apply_move(parse_move("e2e4"))
    assert played.to_text() == "e2e4"
    assert g.side_to_move == "b"
    assert g.to_rows()[4] == "....P..."
    assert g.to_rows()[6] == "PPPP.PPP"
    assert g.move_history_text() == ["e2e4"]


def test_illegal_move_rejected_without_side_effects() -> None:
    g = Game.new()
    with pytest.raises(IllegalMoveError):
        g.apply_move(parse_move("e2e5"))
    # Moving the opponent's piece is illegal too
    with pytest.raises(ValueError):
        g.apply_move(parse_move("e7e5"))
    assert g.to_rows() == list(START_ROWS)
    assert g.side_to_move == "w"


def test_undo_restores_previous_position() -> None:
    g = Game.new()
    g.apply_move(parse_move("g1f3"))
    g.apply_move(parse_move("d7d5"))
    g.undo_move()
    assert g.side_to_move == "b"
    assert g.move_history_text() == ["g1f3"]
    g.undo_move()
    assert g.to_rows() == list(START_ROWS)
    with pytest.raises(ValueError):
        g.undo_move()


def test_fools_mate_status() -> None:
    g = Game.new()
    for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
        g.apply_move(parse_move(text))
    assert g.in_check() is True
    assert g.checkmate() is True
    assert g.stalemate() is False
    assert g.status() == "checkmate"
    assert g.winner() == "b"
    assert g.legal_moves() == []


def test_stalemate_status() -> None:
    rows = [".......k", ".....Q..", "......K.", "........", "........", "........", "........", "........"]
    g = Game.from_rows(rows, "b")
    assert g.stalemate() is True
    assert g.status() == "stalemate"
    assert g.winner() is None


def test_promotion_choice_is_carried_onto_the_legal_move() -> None:
    g = Game.from_rows(PROMO_ROWS)
    played = g.apply_move(parse_move("a7a8n"))
    assert played.promotion == "n"
    assert g.board.piece_at(0, 0) == "N"
    assert g.move_history_text() == ["a7a8n"]


def test_unset_promotion_defaults_to_queen() -> None:
    g = Game.from_rows(PROMO_ROWS)
    played = g.apply_move(parse_move("a7a8"))
    assert played.promotion is None
    assert g.board.piece_at(0, 0) == "Q"


def test_engine_move_pins_promotion_to_queen() -> None:
    g = Game.from_rows(PROMO_ROWS)
    played = g.engine_move(Move(1, 0, 0, 0))
    assert played.to_text() == "a7a8q"


def test_promotion_letter_dropped_for_ordinary_moves() -> None:
    g = Game.new()
    played = g.apply_move(parse_move("e2e4q"))
    assert played.promotion is None


def test_invalid_side_to_move() -> None:
    with pytest.raises(InvalidBoardError):
        Game.from_rows(PROMO_ROWS, "x")
