"""Static evaluation.

Pure, deterministic, and side-effect free. Scores are in centipawns from
White's point of view.
"""

from __future__ import annotations

from typing import Dict, Final

from matecheck.engine.board import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE, Board, piece_kind, piece_side


# Material values in centipawns
P_VAL: Final = 100
N_VAL: Final = 320
B_VAL: Final = 330
R_VAL: Final = 500
Q_VAL: Final = 900
K_VAL: Final = 20000

PIECE_VALUES: Final[Dict[str, int]] = {
    PAWN: P_VAL,
    KNIGHT: N_VAL,
    BISHOP: B_VAL,
    ROOK: R_VAL,
    QUEEN: Q_VAL,
    KING: K_VAL,
}


def piece_value(piece: str) -> int:
    return PIECE_VALUES[piece_kind(piece)]


def evaluate(board: Board) -> int:
    """Return the material balance: White's piece values minus Black's."""
    score = 0
    for _, _, p in board.pieces():
        val = piece_value(p)
        if piece_side(p) == WHITE:
            score += val
        else:
            score -= val
    return score
