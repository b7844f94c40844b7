from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..errors import InvalidBoardError


WHITE = "w"
BLACK = "b"

PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = "p", "n", "b", "r", "q", "k"
PIECE_KINDS = (PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING)
EMPTY = "."

START_ROWS = (
    "rnbqkbnr",
    "pppppppp",
    "........",
    "........",
    "........",
    "........",
    "PPPPPPPP",
    "RNBQKBNR",
)

Square = Tuple[int, int]


def opponent(side: str) -> str:
    return BLACK if side == WHITE else WHITE


def piece_side(piece: str) -> str:
    """Return ``"w"`` for uppercase (White) piece codes, ``"b"`` otherwise."""
    return WHITE if piece.isupper() else BLACK


def piece_kind(piece: str) -> str:
    return piece.lower()


def make_piece(kind: str, side: str) -> str:
    return kind.upper() if side == WHITE else kind.lower()


def in_bounds(rank: int, file: int) -> bool:
    return 0 <= rank < 8 and 0 <= file < 8


@dataclass
class Board:
    """Fixed 8x8 grid of piece codes.

    Notes:
    - ``cells[rank][file]`` with (0, 0) = a8 and (7, 7) = h1, so White starts
      on ranks 6/7 and promotes on rank 0.
    - A cell is ``None`` (empty) or a piece code: ``PNBRQK`` for White,
      ``pnbrqk`` for Black.
    - The board stores pieces only; side to move is tracked by the caller.
    """

    cells: List[List[Optional[str]]] = field(
        default_factory=lambda: [[None] * 8 for _ in range(8)]
    )

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position."""
        return cls.from_rows(START_ROWS)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Create a board from a text diagram.

        Args:
            rows (Sequence[str]): Eight strings of eight characters, rank 8
                first, using ``.`` for empty squares and piece letters
                (uppercase White, lowercase Black) otherwise.

        Returns:
            Board: Board holding the diagram's pieces.

        Raises:
            InvalidBoardError: If the diagram does not have 8 rows of 8 cells
                or contains an unknown piece letter.
        """
        if len(rows) != 8:
            raise InvalidBoardError("board diagram must have 8 ranks")
        cells: List[List[Optional[str]]] = []
        for row in rows:
            if len(row) != 8:
                raise InvalidBoardError(f"rank {row!r} must have 8 squares")
            line: List[Optional[str]] = []
            for ch in row:
                if ch == EMPTY:
                    line.append(None)
                elif ch.lower() in PIECE_KINDS:
                    line.append(ch)
                else:
                    raise InvalidBoardError(f"invalid piece in diagram: {ch!r}")
            cells.append(line)
        return cls(cells=cells)

    def to_rows(self) -> List[str]:
        return ["".join(c if c is not None else EMPTY for c in row) for row in self.cells]

    def copy(self) -> "Board":
        return Board(cells=[list(row) for row in self.cells])

    def piece_at(self, rank: int, file: int) -> Optional[str]:
        return self.cells[rank][file]

    def set_piece(self, rank: int, file: int, piece: Optional[str]) -> None:
        self.cells[rank][file] = piece

    def pieces(self, side: Optional[str] = None) -> List[Tuple[int, int, str]]:
        """Return ``(rank, file, piece)`` triples in rank-major, file-minor scan order."""
        out: List[Tuple[int, int, str]] = []
        for r in range(8):
            for f in range(8):
                p = self.cells[r][f]
                if p is None:
                    continue
                if side is not None and piece_side(p) != side:
                    continue
                out.append((r, f, p))
        return out

    def find_king(self, side: str) -> Optional[Square]:
        """Return the square of ``side``'s king, or ``None`` when it is absent.

        If several kings of the same colour are present (possible only on
        hand-made boards) the last one in scan order wins.
        """
        king = make_piece(KING, side)
        found: Optional[Square] = None
        for r in range(8):
            for f in range(8):
                if self.cells[r][f] == king:
                    found = (r, f)
        return found
