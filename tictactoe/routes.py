"""HTTP endpoints: start a game, play a move, read the current board."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Cookie, Response
from fastapi.responses import JSONResponse

from tictactoe.engine import apply_human_move, start_new_game
from tictactoe.game import GameState
from tictactoe.models import ErrorMsg, GameView, game_view
from tictactoe.session import Session, session_manager

SESSION_COOKIE = "session_id"

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tictactoe")


def _remember(response: Response, session: Session, session_id: str | None) -> None:
    if session.session_id != session_id:
        response.set_cookie(SESSION_COOKIE, session.session_id, httponly=True)


@router.get("", response_model=GameView)
async def new_game(response: Response, session_id: str | None = Cookie(default=None)):
    session = session_manager.get_or_create(session_id)
    _remember(response, session, session_id)
    async with session.lock:
        start_new_game(session.game)
        return game_view(session.game)


@router.get("/move", response_model=GameView)
async def player_move(
    row: int,
    col: int,
    session_id: str | None = Cookie(default=None),
):
    logger.info("move=(%d, %d)", row, col)
    session = session_manager.get(session_id)
    if session is None:
        # No game to play on; answer without storing a session.
        game = GameState()
        error = apply_human_move(game, row, col)
        logger.info("Ignoring move request without a session: %s", error)
        return game_view(game, error)

    async with session.lock:
        error = apply_human_move(session.game, row, col)
        if error:
            logger.info("Ignoring move request: %s", error)
        return game_view(session.game, error)


@router.get("/state", response_model=GameView, responses={404: {"model": ErrorMsg}})
async def game_state(session_id: str | None = Cookie(default=None)):
    session = session_manager.get(session_id)
    if session is None:
        return JSONResponse(status_code=404, content=ErrorMsg(message="No game for this session").model_dump())
    async with session.lock:
        return game_view(session.game)
