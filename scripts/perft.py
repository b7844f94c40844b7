#!/usr/bin/env python3
from __future__ import annotations

import argparse
import time

from matecheck.engine.board import Board
from matecheck.engine.perft import divide, perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft on a board diagram and depth")
    parser.add_argument(
        "--rows",
        type=str,
        default=None,
        help="Board diagram as 8 '/'-separated ranks, rank 8 first, '.' for empty (default: startpos)",
    )
    parser.add_argument("--side", choices=("w", "b"), default="w", help="Side to move (default: w)")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument("--divide", action="store_true", help="Print per-move counts")
    args = parser.parse_args()

    board = Board.from_rows(args.rows.split("/")) if args.rows else Board.startpos()
    start = time.perf_counter()
    if args.divide:
        parts = divide(board, args.side, args.depth)
        for move, count in parts.items():
            print(f"{move}: {count}")
        nodes = sum(parts.values())
    else:
        nodes = perft(board, args.side, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
