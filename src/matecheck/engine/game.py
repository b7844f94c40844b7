from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..errors import IllegalMoveError, InvalidBoardError
from .board import BLACK, PAWN, WHITE, Board, opponent, piece_kind
from .move import Move
from .movegen import apply, find_legal, in_check, legal_moves, promotion_rank


STATUS_ONGOING = "ongoing"
STATUS_CHECKMATE = "checkmate"
STATUS_STALEMATE = "stalemate"


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: own the authoritative board and side to move, expose
    legal moves, apply validated moves, and keep snapshots for undo.
    """

    board: Board
    side_to_move: str = WHITE
    move_stack: List[Move] = field(default_factory=list)
    _snapshots: List[Tuple[Board, str]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.side_to_move not in (WHITE, BLACK):
            raise InvalidBoardError("side to move must be 'w' or 'b'")

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_rows(cls, rows: Sequence[str], side_to_move: str = WHITE) -> "Game":
        return cls(board=Board.from_rows(rows), side_to_move=side_to_move)

    def to_rows(self) -> List[str]:
        return self.board.to_rows()

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.board, self.side_to_move)

    def is_promotion(self, move: Move) -> bool:
        piece = self.board.piece_at(move.from_rank, move.from_file)
        return (
            piece is not None
            and piece_kind(piece) == PAWN
            and move.to_rank == promotion_rank(self.side_to_move)
        )

    def apply_move(self, move: Move) -> Move:
        """Validate ``move`` against the legal moves and play it.

        The candidate is matched by origin and destination; its promotion
        choice is carried onto the matched move (queen when unset).

        Returns:
            Move: The move actually played.

        Raises:
            IllegalMoveError: If no legal move has the same squares.
        """
        legal = find_legal(self.board, self.side_to_move, move)
        if legal is None:
            raise IllegalMoveError(f"illegal move: {move.to_text()}")
        played = legal.with_promotion(move.promotion if self.is_promotion(legal) else None)
        self._push(played)
        return played

    def engine_move(self, move: Move) -> Move:
        """Play a move chosen by the engine, pinning unset promotions to a queen."""
        if self.is_promotion(move) and move.promotion is None:
            move = move.with_promotion("q")
        return self.apply_move(move)

    def _push(self, move: Move) -> None:
        self._snapshots.append((self.board, self.side_to_move))
        self.board = apply(self.board, move)
        self.side_to_move = opponent(self.side_to_move)
        self.move_stack.append(move)

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        self.board, self.side_to_move = self._snapshots.pop()
        self.move_stack.pop()

    # --- State flags for protocol ---
    def in_check(self) -> bool:
        return in_check(self.board, self.side_to_move)

    def has_legal_moves(self) -> bool:
        return bool(self.legal_moves())

    def checkmate(self) -> bool:
        return (not self.has_legal_moves()) and self.in_check()

    def stalemate(self) -> bool:
        return (not self.has_legal_moves()) and (not self.in_check())

    def status(self) -> str:
        if self.has_legal_moves():
            return STATUS_ONGOING
        return STATUS_CHECKMATE if self.in_check() else STATUS_STALEMATE

    def winner(self) -> Optional[str]:
        """Return the side that delivered checkmate, or ``None``."""
        if self.checkmate():
            return opponent(self.side_to_move)
        return None

    def move_history_text(self) -> List[str]:
        return [m.to_text() for m in self.move_stack]
