from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from matecheck.engine.board import BLACK, WHITE, Board
from matecheck.engine.game import STATUS_CHECKMATE, STATUS_ONGOING, STATUS_STALEMATE
from matecheck.engine.move import Move
from matecheck.engine.movegen import apply, in_check, legal_moves
from matecheck.errors import NoMoveAvailableError
from matecheck.eval import evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000
MATE_SCORE = 1_000_000


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    depth: int
    time_ms: int
    status: str = STATUS_ONGOING


def terminal_score(board: Board, side: str) -> int:
    """Score a position where ``side`` has no legal moves.

    Checkmate is signed against the mated side (``-MATE_SCORE`` when White
    is mated, ``+MATE_SCORE`` when Black is); stalemate is 0.
    """
    if in_check(board, side):
        return -MATE_SCORE if side == WHITE else MATE_SCORE
    return 0


class Searcher:
    """Depth-limited minimax with alpha-beta pruning.

    White is always the maximizing side, so the side to move at a node is
    White exactly when ``maximizing`` is true. Scores are White-oriented at
    every level. Children are explored on board copies; nothing is undone.
    """

    def __init__(self) -> None:
        self.nodes = 0

    def minimax(self, board: Board, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
        self.nodes += 1
        side = WHITE if maximizing else BLACK
        moves = legal_moves(board, side)
        # No legal moves takes priority over the depth cutoff
        if not moves:
            return terminal_score(board, side)
        if depth <= 0:
            return evaluate(board)

        if maximizing:
            best = -INF
            for mv in moves:
                score = self.minimax(apply(board, mv), depth - 1, alpha, beta, False)
                if score > best:
                    best = score
                if score > alpha:
                    alpha = score
                if beta <= alpha:
                    break
            return best

        best = INF
        for mv in moves:
            score = self.minimax(apply(board, mv), depth - 1, alpha, beta, True)
            if score < best:
                best = score
            if score < beta:
                beta = score
            if beta <= alpha:
                break
        return best

    def choose(self, board: Board, side: str, depth: int) -> tuple[Optional[Move], int]:
        """Return ``(best_move, score)`` for ``side`` searching ``depth`` plies.

        Each root move is scored with a fresh full window; the first move
        reaching the best score in generation order wins ties.
        """
        if depth < 1:
            raise ValueError("depth must be >= 1")
        moves = legal_moves(board, side)
        if not moves:
            return None, terminal_score(board, side)
        white = side == WHITE
        best_move: Optional[Move] = None
        best_score = -INF if white else INF
        for mv in moves:
            score = self.minimax(apply(board, mv), depth - 1, -INF, INF, not white)
            if best_move is None or (score > best_score if white else score < best_score):
                best_move = mv
                best_score = score
        return best_move, best_score


def minimax(board: Board, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
    """Return the White-oriented minimax value of ``board`` to ``depth`` plies.

    Args:
        board (Board): Position to search; not modified.
        depth (int): Remaining plies; 0 returns the static evaluation unless
            the side to move has no legal moves.
        alpha (int): Lower bound of the search window.
        beta (int): Upper bound of the search window.
        maximizing (bool): True when White is to move at this node.

    Returns:
        int: Best achievable score under optimal play by both sides.
    """
    return Searcher().minimax(board, depth, alpha, beta, maximizing)


def best_move(board: Board, side: str, depth: int) -> Move:
    """Select the best move for ``side`` with a ``depth``-ply search.

    Raises:
        NoMoveAvailableError: If ``side`` has no legal moves (game over).
        ValueError: If ``depth`` is less than 1.
    """
    move, _ = Searcher().choose(board, side, depth)
    if move is None:
        raise NoMoveAvailableError(f"no legal moves for side {side!r}")
    return move


class SearchService:
    """Search front-end used by the protocol adapters; adds statistics and logging."""

    def search(self, board: Board, side: str, depth: int) -> SearchResult:
        start = time.perf_counter()
        searcher = Searcher()
        move, score = searcher.choose(board, side, depth)
        time_ms = int((time.perf_counter() - start) * 1000)
        status = STATUS_ONGOING
        if move is None:
            status = STATUS_CHECKMATE if in_check(board, side) else STATUS_STALEMATE
        logger.info(
            "search complete",
            extra={
                "side": side,
                "depth": depth,
                "nodes": searcher.nodes,
                "score": score,
                "time_ms": time_ms,
            },
        )
        return SearchResult(
            best_move=move,
            score=score,
            nodes=searcher.nodes,
            depth=depth,
            time_ms=time_ms,
            status=status,
        )
