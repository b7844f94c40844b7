"""matecheck: chess rules and minimax search engine."""

from __future__ import annotations

from .engine.board import BLACK, WHITE, Board
from .engine.move import Move, parse_move
from .engine.movegen import apply, in_check, legal_moves
from .errors import IllegalMoveError, NoMoveAvailableError
from .eval import evaluate
from .search.service import best_move, minimax

__all__ = [
    "BLACK",
    "WHITE",
    "Board",
    "IllegalMoveError",
    "Move",
    "NoMoveAvailableError",
    "apply",
    "best_move",
    "evaluate",
    "in_check",
    "legal_moves",
    "minimax",
    "parse_move",
]

__version__ = "0.1.0"
