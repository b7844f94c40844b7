from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    engine_exception_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...config import Config
from ...engine.board import Board
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes
from ...errors import MatecheckError, NoMoveAvailableError
from ...eval import evaluate
from ...search.service import SearchService


logger = logging.getLogger(__name__)

Side = Literal["w", "b"]


class PositionRequest(BaseModel):
    rows: List[str] = Field(..., min_length=8, max_length=8, description="8 ranks, rank 8 first, '.' for empty")
    side_to_move: Side = "w"


class CreateGameRequest(BaseModel):
    rows: Optional[List[str]] = Field(default=None, min_length=8, max_length=8)
    side_to_move: Side = "w"


class CreateGameResponse(BaseModel):
    game_id: str
    board: List[str]
    side_to_move: str


class MoveRequest(BaseModel):
    move: str = Field(..., description="Coordinate move, e.g. e2e4 or a7a8n")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=64)


class PerftRequest(BaseModel):
    rows: Optional[List[str]] = Field(default=None, min_length=8, max_length=8)
    side_to_move: Side = "w"
    depth: int = Field(default=1, ge=0, le=4)


class GameState(BaseModel):
    game_id: str
    board: List[str]
    side_to_move: str
    legal_moves: List[str]
    in_check: bool
    checkmate: bool
    stalemate: bool
    status: str
    winner: Optional[str]
    evaluation: int
    last_move: Optional[str]
    move_history: List[str]


class SearchResponse(BaseModel):
    best_move: Optional[str]
    score: int
    nodes: int
    depth: int
    time_ms: int
    status: str


class EngineMoveResponse(BaseModel):
    move: str
    score: int
    nodes: int
    state: GameState


def create_app(config: Optional[Config] = None) -> FastAPI:
    cfg = config or Config.from_env()
    app = FastAPI(title="matecheck", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=cfg.log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(MatecheckError, engine_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    service = SearchService()
    app.state.config = cfg
    app.state.store = store

    def _depth(requested: Optional[int]) -> int:
        depth = requested or cfg.search.depth
        if depth > cfg.search.max_depth:
            raise HTTPException(
                status_code=400, detail=f"depth must be <= {cfg.search.max_depth}"
            )
        return depth

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        if req is not None and req.rows is not None:
            game = Game.from_rows(req.rows, req.side_to_move)
        else:
            game = Game.new()
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(
            game_id=game_id, board=game.to_rows(), side_to_move=game.side_to_move
        )

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: PositionRequest) -> GameState:
        _require_game(store, game_id)
        store.set(game_id, Game.from_rows(req.rows, req.side_to_move))
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        game.apply_move(parse_move(req.move))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/engine-move", response_model=EngineMoveResponse)
    async def engine_move(game_id: str, req: Optional[SearchRequest] = None) -> EngineMoveResponse:
        game = _require_game(store, game_id)
        depth = _depth(req.depth if req else None)
        res = service.search(game.board, game.side_to_move, depth)
        if res.best_move is None:
            raise NoMoveAvailableError(f"game is over: {res.status}")
        played = game.engine_move(res.best_move)
        return EngineMoveResponse(
            move=played.to_text(), score=res.score, nodes=res.nodes, state=_state(game_id, game)
        )

    @app.post("/api/games/{game_id}/search", response_model=SearchResponse)
    async def search(game_id: str, req: Optional[SearchRequest] = None) -> SearchResponse:
        game = _require_game(store, game_id)
        depth = _depth(req.depth if req else None)
        res = service.search(game.board, game.side_to_move, depth)
        return SearchResponse(
            best_move=res.best_move.to_text() if res.best_move else None,
            score=res.score,
            nodes=res.nodes,
            depth=res.depth,
            time_ms=res.time_ms,
            status=res.status,
        )

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        board = Board.from_rows(req.rows) if req.rows is not None else Board.startpos()
        return {"nodes": perft_nodes(board, req.side_to_move, req.depth)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    history = game.move_history_text()
    return GameState(
        game_id=game_id,
        board=game.to_rows(),
        side_to_move=game.side_to_move,
        legal_moves=[m.to_text() for m in game.legal_moves()],
        in_check=game.in_check(),
        checkmate=game.checkmate(),
        stalemate=game.stalemate(),
        status=game.status(),
        winner=game.winner(),
        evaluation=evaluate(game.board),
        last_move=history[-1] if history else None,
        move_history=history,
    )
