from __future__ import annotations

import pytest

from matecheck.engine.board import Board
from matecheck.engine.perft import divide, perft


@pytest.mark.parametrize("depth,expected", [(0, 1), (1, 20), (2, 400), (3, 8902)])
def test_perft_startpos(depth: int, expected: int) -> None:
    # Castling and en passant cannot occur within three plies of the start
    assert perft(Board.startpos(), "w", depth) == expected


def test_divide_sums_to_perft() -> None:
    b = Board.startpos()
    parts = divide(b, "w", 2)
    assert len(parts) == 20
    assert all(v == 20 for v in parts.values())
    assert sum(parts.values()) == perft(b, "w", 2)


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        perft(Board.startpos(), "w", -1)
