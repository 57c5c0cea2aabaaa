"""Computer opponent: pick a cell by blocking the human, else at random."""

from __future__ import annotations

import random

from tictactoe.game import BOARD_SIZE, CENTER, Cell, GameState, Marker

# Pairs of cells that, together with the center, make up a line.
CENTER_LINES: list[tuple[Cell, Cell]] = [
    ((CENTER, 0), (CENTER, BOARD_SIZE - 1)),
    ((0, CENTER), (BOARD_SIZE - 1, CENTER)),
    ((0, 0), (BOARD_SIZE - 1, BOARD_SIZE - 1)),
    ((0, BOARD_SIZE - 1), (BOARD_SIZE - 1, 0)),
]


def find_center_block(state: GameState) -> Cell | None:
    """Return the center if it is empty and the opponent threatens a line through it."""
    cells = state.board.cells
    if cells[CENTER][CENTER] is not Marker.EMPTY:
        return None
    opponent = state.opponent
    for (r1, c1), (r2, c2) in CENTER_LINES:
        if cells[r1][c1] is opponent and cells[r2][c2] is opponent:
            return (CENTER, CENTER)
    return None


def random_empty_cell(state: GameState, rng: random.Random) -> Cell:
    """Resample random cells until an empty one comes up."""
    if not state.board.empty_cells():
        raise ValueError("No empty cell left on the board")
    while True:
        row = rng.randrange(BOARD_SIZE)
        col = rng.randrange(BOARD_SIZE)
        if state.board.cells[row][col] is Marker.EMPTY:
            return (row, col)


def choose_move(state: GameState, rng: random.Random | None = None) -> Cell:
    """Pick the cell the current player should take, without placing it."""
    board = state.board
    marker = state.turn

    cell = find_center_block(state)
    if cell is None:
        cell = board.find_horizontal_block(marker)
    if cell is None:
        cell = board.find_vertical_block(marker)
    if cell is None:
        cell = board.find_diagonal_block(marker)
    if cell is None:
        cell = random_empty_cell(state, rng or random.Random())
    return cell
