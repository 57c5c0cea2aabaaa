"""Game logic: board state, move validation, and win/draw detection."""

from __future__ import annotations

from enum import Enum

BOARD_SIZE = 3
CENTER = BOARD_SIZE // 2


class Marker(str, Enum):
    EMPTY = " "
    X = "X"
    O = "O"

    @property
    def opponent(self) -> Marker:
        if self is Marker.X:
            return Marker.O
        if self is Marker.O:
            return Marker.X
        raise ValueError("Empty marker has no opponent")


class GameStage(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class InvariantViolation(RuntimeError):
    """Raised when the engine's own bookkeeping turns out to be wrong."""


Cell = tuple[int, int]

ROWS: list[list[Cell]] = [[(r, c) for c in range(BOARD_SIZE)] for r in range(BOARD_SIZE)]
COLUMNS: list[list[Cell]] = [[(r, c) for r in range(BOARD_SIZE)] for c in range(BOARD_SIZE)]
# Forward diagonal first, then the reverse one running bottom-left to top-right.
DIAGONALS: list[list[Cell]] = [
    [(i, i) for i in range(BOARD_SIZE)],
    [(BOARD_SIZE - i - 1, i) for i in range(BOARD_SIZE)],
]


class Board:
    def __init__(self):
        self.cells: list[list[Marker]] = [[Marker.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def clear(self) -> None:
        for row in self.cells:
            for col in range(BOARD_SIZE):
                row[col] = Marker.EMPTY

    def move(self, row: int, col: int, marker: Marker) -> str | None:
        """Place a marker. Return an error message if rejected, or None if placed.

        Indices outside the board are a caller bug and raise IndexError.
        """
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        if self.cells[row][col] is not Marker.EMPTY:
            return "Cell is already occupied"
        if marker is Marker.EMPTY:
            return "Cannot play an empty marker"
        self.cells[row][col] = marker
        return None

    def mark_at(self, row: int, col: int) -> str:
        return self.cells[row][col].value

    def rows(self) -> list[str]:
        return ["".join(marker.value for marker in row) for row in self.cells]

    def empty_cells(self) -> list[Cell]:
        return [
            (r, c)
            for r in range(BOARD_SIZE)
            for c in range(BOARD_SIZE)
            if self.cells[r][c] is Marker.EMPTY
        ]

    def _line_full_of(self, line: list[Cell], marker: Marker) -> bool:
        return all(self.cells[r][c] is marker for r, c in line)

    def is_winner(self, marker: Marker) -> bool:
        """Check rows, columns, then both diagonals for a complete line of marker."""
        for lines in (ROWS, COLUMNS, DIAGONALS):
            for line in lines:
                if self._line_full_of(line, marker):
                    return True
        return False

    def is_draw(self) -> bool:
        # Full board only; a full board may also be won, so check is_winner first.
        return not any(marker is Marker.EMPTY for row in self.cells for marker in row)

    def _find_block(self, lines: list[list[Cell]], marker: Marker) -> Cell | None:
        """Return the empty cell of the first line the opponent of marker is about to complete."""
        opponent = marker.opponent
        for line in lines:
            values = [self.cells[r][c] for r, c in line]
            if values.count(opponent) == BOARD_SIZE - 1 and values.count(Marker.EMPTY) == 1:
                return line[values.index(Marker.EMPTY)]
        return None

    def find_horizontal_block(self, marker: Marker) -> Cell | None:
        return self._find_block(ROWS, marker)

    def find_vertical_block(self, marker: Marker) -> Cell | None:
        return self._find_block(COLUMNS, marker)

    def find_diagonal_block(self, marker: Marker) -> Cell | None:
        return self._find_block(DIAGONALS, marker)


class GameState:
    def __init__(self):
        self.board = Board()
        self.turn: Marker = Marker.X
        self._stage: GameStage = GameStage.NOT_STARTED
        self.turn_message: str = ""
        self.game_message: str = ""

    @property
    def stage(self) -> GameStage:
        return self._stage

    @stage.setter
    def stage(self, value: GameStage | str) -> None:
        self._stage = GameStage(value)

    @property
    def opponent(self) -> Marker:
        return self.turn.opponent

    @property
    def is_in_progress(self) -> bool:
        return self._stage is GameStage.IN_PROGRESS

    def start_new_game(self) -> None:
        self.board.clear()
        self.stage = GameStage.IN_PROGRESS
        self.turn = Marker.X
        self.turn_message = f"Turn: {self.turn.value}"
        self.game_message = ""
