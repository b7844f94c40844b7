from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import InvalidMoveTextError


PROMOTION_PIECES = {"q", "r", "b", "n"}


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_rank (int): Origin rank index (0 = rank 8, 7 = rank 1).
        from_file (int): Origin file index (0 = file a).
        to_rank (int): Destination rank index.
        to_file (int): Destination file index.
        promotion (Optional[str]): Lowercase promotion piece, if any. Only
            meaningful when a pawn reaches the far rank.
    """

    from_rank: int
    from_file: int
    to_rank: int
    to_file: int
    promotion: Optional[str] = None

    @property
    def origin(self) -> Tuple[int, int]:
        return (self.from_rank, self.from_file)

    @property
    def destination(self) -> Tuple[int, int]:
        return (self.to_rank, self.to_file)

    def same_squares(self, other: "Move") -> bool:
        return self.origin == other.origin and self.destination == other.destination

    def with_promotion(self, promotion: Optional[str]) -> "Move":
        return Move(self.from_rank, self.from_file, self.to_rank, self.to_file, promotion)

    def to_text(self) -> str:
        """Serialize the move into coordinate form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        return (
            square_to_str(self.from_rank, self.from_file)
            + square_to_str(self.to_rank, self.to_file)
            + (self.promotion or "")
        )


def parse_move(text: str) -> Move:
    """Parse a coordinate move typed by a player.

    Whitespace is ignored, so ``"e2e4"`` and ``"e2 e4"`` are equivalent. A
    fifth character selects the promotion piece; letters other than
    ``q r b n`` are ignored and leave the promotion unset.

    Args:
        text (str): Move text such as ``"e2e4"`` or ``"a7a8n"``.

    Returns:
        Move: Parsed move.

    Raises:
        InvalidMoveTextError: If fewer than four characters remain or a
            square is off the board.
    """
    compact = "".join(ch for ch in text if not ch.isspace())
    if len(compact) < 4:
        raise InvalidMoveTextError(f"invalid move text: {text!r}")
    from_rank, from_file = str_to_square(compact[0:2])
    to_rank, to_file = str_to_square(compact[2:4])
    promo: Optional[str] = None
    if len(compact) >= 5:
        letter = compact[4].lower()
        if letter in PROMOTION_PIECES:
            promo = letter
    return Move(from_rank, from_file, to_rank, to_file, promo)


def str_to_square(s: str) -> Tuple[int, int]:
    """Convert algebraic notation into ``(rank, file)`` indices.

    Args:
        s (str): Square name such as ``"e2"``.

    Returns:
        Tuple[int, int]: Rank index (``'1'`` -> 7 .. ``'8'`` -> 0) and file
            index (``'a'`` -> 0 .. ``'h'`` -> 7).

    Raises:
        InvalidMoveTextError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise InvalidMoveTextError(f"invalid square: {s!r}")
    file = ord(s[0]) - ord("a")
    rank = 8 - int(s[1])
    return rank, file


def square_to_str(rank: int, file: int) -> str:
    """Convert ``(rank, file)`` indices into algebraic notation.

    Raises:
        InvalidMoveTextError: If either index is outside 0..7.
    """
    if not (0 <= rank < 8 and 0 <= file < 8):
        raise InvalidMoveTextError(f"invalid square index: {(rank, file)}")
    return chr(ord("a") + file) + str(8 - rank)
