from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional

from ...engine.board import WHITE, Board, opponent
from ...engine.game import Game
from ...engine.move import PROMOTION_PIECES, Move, parse_move
from ...errors import IllegalMoveError, InvalidMoveTextError
from ...search.service import SearchService


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]
Reader = Callable[[str], Optional[str]]

SIDE_NAMES = {"w": "White", "b": "Black"}


def render_board(board: Board) -> List[str]:
    """Return the board as text lines, rank 8 at the top, files on both edges."""
    lines = ["   a b c d e f g h"]
    for r, row in enumerate(board.to_rows()):
        rank = 8 - r
        lines.append(f"{rank}  {' '.join(row)}  {rank}")
    lines.append("   a b c d e f g h")
    return lines


class ConsoleGame:
    """Interactive human-vs-engine turn loop.

    Notes:
    - Core remains pure; all I/O goes through ``read`` and ``write``.
    - ``read(prompt)`` returns ``None`` at end of input, which ends the game.
    """

    def __init__(
        self,
        read: Reader,
        write: Writer,
        *,
        human_side: str = WHITE,
        depth: int = 3,
        game: Optional[Game] = None,
    ) -> None:
        self.read = read
        self.write = write
        self.human_side = human_side
        self.depth = depth
        self.game = game or Game.new()
        self.search = SearchService()

    def run(self) -> str:
        """Play until the game ends or the human quits; return the final status."""
        self.write(f"You play {SIDE_NAMES[self.human_side]}. Enter moves like e2e4 or e2 e4; 'quit' exits.")
        self.write("No castling and no en passant. Promotion to Q/R/B/N.")
        while True:
            for line in render_board(self.game.board):
                self.write(line)
            status = self.game.status()
            if status != "ongoing":
                self._announce(status)
                return status
            if self.game.side_to_move == self.human_side:
                if not self._human_turn():
                    self.write("Exiting...")
                    return "quit"
            else:
                self._engine_turn()

    def _announce(self, status: str) -> None:
        if status == "checkmate":
            winner = opponent(self.game.side_to_move)
            self.write(f"Checkmate! {SIDE_NAMES[winner]} wins.")
        else:
            self.write("Draw by stalemate!")

    def _human_turn(self) -> bool:
        while True:
            line = self.read(f"\nYour move ({SIDE_NAMES[self.human_side]}): ")
            if line is None or line.strip().lower().startswith("quit"):
                return False
            try:
                move = parse_move(line)
            except InvalidMoveTextError:
                self.write("Invalid input. Use e2e4.")
                continue
            if self.game.is_promotion(move) and move.promotion is None:
                promo = self._prompt_promotion()
                if promo is None:
                    return False
                move = move.with_promotion(promo)
            try:
                self.game.apply_move(move)
            except IllegalMoveError:
                self.write("Illegal move. Try again.")
                continue
            return True

    def _prompt_promotion(self) -> Optional[str]:
        while True:
            answer = self.read("Promote to (Q/R/B/N): ")
            if answer is None:
                return None
            answer = answer.strip().lower()
            if answer and answer[0] in PROMOTION_PIECES:
                return answer[0]

    def _engine_turn(self) -> Move:
        self.write(f"\nComputer ({SIDE_NAMES[self.game.side_to_move]}) thinking...")
        res = self.search.search(self.game.board, self.game.side_to_move, self.depth)
        if res.best_move is None:
            # status() was ongoing, so a legal move exists
            raise RuntimeError("search returned no move in an ongoing game")
        played = self.game.engine_move(res.best_move)
        self.write(_describe(played))
        return played


def _describe(move: Move) -> str:
    text = move.to_text()
    desc = f"{text[0:2]} -> {text[2:4]}"
    if move.promotion:
        desc += f" (promo {move.promotion.upper()})"
    return desc


def _stdin_reader(prompt: str) -> Optional[str]:
    sys.stdout.write(prompt)
    sys.stdout.flush()
    line = sys.stdin.readline()
    return line if line else None


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_console(human_side: str = WHITE, depth: int = 3) -> str:
    logger.info("console game started", extra={"human_side": human_side, "depth": depth})
    return ConsoleGame(_stdin_reader, _default_writer, human_side=human_side, depth=depth).run()
