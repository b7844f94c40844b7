"""Move generation, attack detection and move application on the 8x8 grid.

Pure functions over :class:`Board` values; nothing here tracks whose turn
it is beyond the ``side`` arguments passed in.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .board import (
    BISHOP,
    KING,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE,
    Board,
    Square,
    in_bounds,
    make_piece,
    opponent,
    piece_kind,
    piece_side,
)
from .move import Move


logger = logging.getLogger(__name__)

DEFAULT_PROMOTION = QUEEN

KNIGHT_OFFSETS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_OFFSETS = tuple((dr, df) for dr in (-1, 0, 1) for df in (-1, 0, 1) if (dr, df) != (0, 0))
ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def pawn_step(side: str) -> int:
    # White sits on the high rank indices and moves towards rank 0
    return -1 if side == WHITE else 1


def start_rank(side: str) -> int:
    return 6 if side == WHITE else 1


def promotion_rank(side: str) -> int:
    return 0 if side == WHITE else 7


def resolve_promotion(promotion: Optional[str]) -> str:
    """Return the promotion kind to place, defaulting to a queen."""
    return promotion if promotion else DEFAULT_PROMOTION


# --- Piece move rules ---
def piece_moves(board: Board, rank: int, file: int) -> List[Move]:
    """Return pseudo-legal moves for the piece on ``(rank, file)``.

    Destinations are in bounds and either empty or held by the opposing
    side; whether the mover's king ends up attacked is not checked.
    Promotion is never encoded here.

    Args:
        board (Board): Position to inspect.
        rank (int): Rank index of the piece.
        file (int): File index of the piece.

    Returns:
        List[Move]: Moves in a fixed per-piece order; empty for an empty square.
    """
    piece = board.piece_at(rank, file)
    if piece is None:
        return []
    side = piece_side(piece)
    kind = piece_kind(piece)
    if kind == PAWN:
        return _pawn_moves(board, rank, file, side)
    if kind == KNIGHT:
        return _step_moves(board, rank, file, side, KNIGHT_OFFSETS)
    if kind == KING:
        return _step_moves(board, rank, file, side, KING_OFFSETS)
    moves: List[Move] = []
    if kind in (ROOK, QUEEN):
        moves.extend(_slide_moves(board, rank, file, side, ROOK_DIRS))
    if kind in (BISHOP, QUEEN):
        moves.extend(_slide_moves(board, rank, file, side, BISHOP_DIRS))
    return moves


def _is_enemy(board: Board, rank: int, file: int, side: str) -> bool:
    target = board.piece_at(rank, file)
    return target is not None and piece_side(target) != side


def _pawn_moves(board: Board, rank: int, file: int, side: str) -> List[Move]:
    moves: List[Move] = []
    step = pawn_step(side)
    r1 = rank + step
    if in_bounds(r1, file) and board.piece_at(r1, file) is None:
        moves.append(Move(rank, file, r1, file))
        r2 = rank + 2 * step
        if rank == start_rank(side) and in_bounds(r2, file) and board.piece_at(r2, file) is None:
            moves.append(Move(rank, file, r2, file))
    for df in (-1, 1):
        tf = file + df
        if in_bounds(r1, tf) and _is_enemy(board, r1, tf, side):
            moves.append(Move(rank, file, r1, tf))
    return moves


def _step_moves(board: Board, rank: int, file: int, side: str, offsets) -> List[Move]:
    moves: List[Move] = []
    for dr, df in offsets:
        tr, tf = rank + dr, file + df
        if not in_bounds(tr, tf):
            continue
        target = board.piece_at(tr, tf)
        if target is None or piece_side(target) != side:
            moves.append(Move(rank, file, tr, tf))
    return moves


def _slide_moves(board: Board, rank: int, file: int, side: str, dirs) -> List[Move]:
    moves: List[Move] = []
    for dr, df in dirs:
        tr, tf = rank + dr, file + df
        while in_bounds(tr, tf):
            target = board.piece_at(tr, tf)
            if target is None:
                moves.append(Move(rank, file, tr, tf))
            else:
                if piece_side(target) != side:
                    moves.append(Move(rank, file, tr, tf))
                break
            tr += dr
            tf += df
    return moves


def pseudo_legal_moves(board: Board, side: str) -> List[Move]:
    """Return pseudo-legal moves for every piece of ``side`` in board scan order."""
    moves: List[Move] = []
    for r, f, _ in board.pieces(side):
        moves.extend(piece_moves(board, r, f))
    return moves


# --- Attack query ---
def is_attacked(board: Board, square: Square, by_side: str) -> bool:
    """Return True if any piece of ``by_side`` has a pseudo-legal move onto ``square``."""
    for r, f, _ in board.pieces(by_side):
        for m in piece_moves(board, r, f):
            if m.destination == square:
                return True
    return False


def in_check(board: Board, side: str) -> bool:
    """Return True if ``side``'s king is attacked.

    A missing king counts as being in check so that positions without a
    king are always rejected as illegal rather than crashing the caller.
    """
    king_sq = board.find_king(side)
    if king_sq is None:
        logger.debug("no king for side %s; treating as in check", side)
        return True
    return is_attacked(board, king_sq, opponent(side))


# --- Legal move generation ---
def legal_moves(board: Board, side: str) -> List[Move]:
    """Return every legal move for ``side``.

    Each pseudo-legal move is simulated on a scratch copy (promoting to a
    queen by default) and kept only if ``side``'s king is not attacked
    afterwards. Ordering follows the board scan: rank-major, file-minor,
    then per-piece generation order.
    """
    legal: List[Move] = []
    for mv in pseudo_legal_moves(board, side):
        scratch = board.copy()
        make_move(scratch, mv.with_promotion(None))
        if not in_check(scratch, side):
            legal.append(mv)
    return legal


def find_legal(board: Board, side: str, candidate: Move) -> Optional[Move]:
    """Return the legal move with ``candidate``'s origin and destination, or ``None``."""
    for mv in legal_moves(board, side):
        if mv.same_squares(candidate):
            return mv
    return None


# --- Move execution ---
def make_move(board: Board, move: Move) -> None:
    """Apply ``move`` to ``board`` in place.

    The move is assumed legal; no validation happens here. A pawn landing
    on its far rank becomes the move's promotion piece, or a queen when no
    promotion is set.
    """
    mover = board.piece_at(move.from_rank, move.from_file)
    if mover is None:
        raise ValueError("no piece to move from origin square")
    board.set_piece(move.from_rank, move.from_file, None)
    side = piece_side(mover)
    if piece_kind(mover) == PAWN and move.to_rank == promotion_rank(side):
        mover = make_piece(resolve_promotion(move.promotion), side)
    board.set_piece(move.to_rank, move.to_file, mover)


def apply(board: Board, move: Move) -> Board:
    """Return a new Board with ``move`` applied; ``board`` is left unchanged."""
    new_board = board.copy()
    make_move(new_board, move)
    return new_board
