"""Turn handling: apply moves to a GameState and resolve wins, draws and turns."""

from __future__ import annotations

import logging
import random

from tictactoe.game import BOARD_SIZE, Cell, GameStage, GameState, InvariantViolation
from tictactoe.opponent import choose_move

logger = logging.getLogger(__name__)


def start_new_game(state: GameState) -> GameState:
    state.start_new_game()
    return state


def evaluate_board(state: GameState) -> None:
    """Finish the game on a win or draw, otherwise hand the turn to the other player."""
    board = state.board

    # Winner first: a full board can also be a won board.
    if board.is_winner(state.turn):
        state.game_message = f"{state.turn.value} wins!"
        state.stage = GameStage.FINISHED
        logger.info("Game over: %s", state.game_message)
    elif board.is_draw():
        state.game_message = "It's a draw!"
        state.stage = GameStage.FINISHED
        logger.info("Game over: draw")
    else:
        state.turn = state.opponent
        state.turn_message = f"Turn: {state.turn.value}"


def apply_computer_move(state: GameState, rng: random.Random | None = None) -> Cell:
    """Choose, place and evaluate the computer's move for the player whose turn it is."""
    if not state.is_in_progress:
        raise InvariantViolation(f"Computer asked to move in a {state.stage.value} game")
    row, col = choose_move(state, rng)
    error = state.board.move(row, col, state.turn)
    if error:
        raise InvariantViolation(f"Computer picked ({row}, {col}): {error}")
    logger.debug("Computer %s moved to (%d, %d)", state.turn.value, row, col)
    evaluate_board(state)
    return (row, col)


def apply_human_move(
    state: GameState, row: int, col: int, rng: random.Random | None = None
) -> str | None:
    """Play the human's move and the computer's reply.

    Return an error message if the move was ignored, or None if it was played.
    """
    if not state.is_in_progress:
        return "Game is not in progress"
    if row < 0 or row >= BOARD_SIZE or col < 0 or col >= BOARD_SIZE:
        return "Coordinates out of bounds"

    error = state.board.move(row, col, state.turn)
    if error:
        return error
    evaluate_board(state)

    if state.is_in_progress:
        apply_computer_move(state, rng)
    return None
