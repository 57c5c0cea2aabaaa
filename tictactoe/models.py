"""Pydantic models for the HTTP responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tictactoe.game import GameState


class GameView(BaseModel):
    board: list[str] = Field(description="One string of X/O/space symbols per row")
    stage: str
    turn: str
    turn_message: str
    game_message: str
    error: str | None = None


class ErrorMsg(BaseModel):
    message: str


def game_view(state: GameState, error: str | None = None) -> GameView:
    return GameView(
        board=state.board.rows(),
        stage=state.stage.value,
        turn=state.turn.value,
        turn_message=state.turn_message,
        game_message=state.game_message,
        error=error,
    )
