from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from ..config import Config
from ..protocol.console.loop import run_console


def build_parser(cfg: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="matecheck", description="Minimax chess engine")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=cfg.server.host)
    serve.add_argument("--port", type=int, default=cfg.server.port)

    play = sub.add_parser("play", help="Play against the engine in the terminal")
    play.add_argument(
        "--depth", type=int, default=cfg.search.depth, help="Search depth in plies"
    )
    play.add_argument("--side", choices=("w", "b"), default="w", help="Side you play")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    cfg = Config.from_env()
    args = build_parser(cfg).parse_args(argv)
    if args.command == "serve":
        uvicorn.run(
            "matecheck.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=cfg.log_level.lower(),
        )
        return
    logging.basicConfig(level=cfg.log_level)
    if args.depth < 1:
        raise SystemExit("--depth must be >= 1")
    run_console(human_side=args.side, depth=args.depth)


if __name__ == "__main__":
    main()
