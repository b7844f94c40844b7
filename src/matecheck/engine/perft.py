from __future__ import annotations

from typing import Dict

from .board import Board, opponent
from .movegen import apply, legal_moves


def perft(board: Board, side: str, depth: int) -> int:
    """Compute perft node count for ``board`` with ``side`` to move at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are built with copy-apply, so promotions count once (as queen)
    because legal moves carry no promotion piece.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in legal_moves(board, side):
        nodes += perft(apply(board, m), opponent(side), depth - 1)
    return nodes


def divide(board: Board, side: str, depth: int) -> Dict[str, int]:
    """Return per-root-move perft counts keyed by move text."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {
        m.to_text(): perft(apply(board, m), opponent(side), depth - 1)
        for m in legal_moves(board, side)
    }
