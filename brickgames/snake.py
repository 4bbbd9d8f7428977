"""Snake game logic and the controller that routes user input to a model."""

from __future__ import annotations

import random
from collections.abc import Iterator
from pathlib import Path

from .defines import (
    FIELD_HEIGHT,
    FIELD_WIDTH,
    PLAY_COLS,
    PLAY_ROWS,
    Cell,
    GameInfo,
    GameStatus,
    UserAction,
)

RECORD_FILE = "score.txt"
VICTORY_SCORE = 200
START_SCORE = 4
MAX_LEVEL = 10
SNAKE_MARK = -2
TURN_MARK = -1


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _tmod(a: int, b: int) -> int:
    """Remainder matching truncating division (sign follows the dividend)."""
    return a - b * _tdiv(a, b)


def _sign(value: int) -> int:
    return 1 if value > 0 else -1


def _retag(value: int, kind: Cell) -> int:
    """Change the cell kind of a code, keeping its sign and direction digits."""
    return _sign(value) * kind * 100 + _tmod(value, 100)


def _all_cells() -> Iterator[tuple[int, int]]:
    for i in range(FIELD_HEIGHT):
        for j in range(FIELD_WIDTH):
            yield i, j


def _play_cells() -> Iterator[tuple[int, int]]:
    for i in PLAY_ROWS:
        for j in PLAY_COLS:
            yield i, j


class SnakeModel:
    """State and rules of the snake game.

    Each snake cell holds ``sign * (kind * 100 + |dx| * 10 + |dy|)``; the sign
    gives the direction of the non-zero velocity component.
    """

    def __init__(self, record_path: str | Path = RECORD_FILE) -> None:
        self.record_path = Path(record_path)
        self.game = GameInfo()
        self._rng = random.Random()
        self.reset()

    def __enter__(self) -> SnakeModel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.write_record()

    # -- state -----------------------------------------------------------

    def reset(self) -> None:
        """Put the game into its initial, not yet started state."""
        game = self.game
        game.field = [[0] * FIELD_WIDTH for _ in range(FIELD_HEIGHT)]
        game.next = [[0] * 4 for _ in range(4)]
        game.next[0][0] = SNAKE_MARK
        start_y = FIELD_HEIGHT // 2
        start_x = FIELD_WIDTH // 2 - 2
        row = game.field[start_y]
        row[start_x - 1] = Cell.TAIL * 100 + 10
        row[start_x] = row[start_x + 1] = Cell.BODY * 100 + 10
        row[start_x + 2] = Cell.HEAD * 100 + 10
        game.score = START_SCORE
        game.level = 1
        game.high_score = self.read_record()
        game.pause = GameStatus.NOT_STARTED
        game.speed = 50 - game.level * 2

    def game_info(self) -> GameInfo:
        """Return a snapshot of the current state."""
        return self.game.copy()

    def cell_type(self, i: int, j: int) -> Cell:
        """Kind of the cell at row ``i``, column ``j``."""
        return Cell(abs(self.game.field[i][j]) // 100)

    def direction(self, i: int, j: int) -> tuple[int, int]:
        """Velocity ``(dx, dy)`` stored in the cell at row ``i``, column ``j``."""
        value = self.game.field[i][j]
        return _tdiv(_tmod(value, 100), 10), _tmod(value, 10)

    def find_head(self) -> tuple[int, int]:
        """Coordinates ``(x, y)`` of the head, or ``(0, 0)`` if there is none."""
        for i, j in _play_cells():
            if self.cell_type(i, j) == Cell.HEAD:
                return j, i
        return 0, 0

    # -- records ---------------------------------------------------------

    def _read_records(self) -> tuple[int, int]:
        values = [0, 0]
        try:
            text = self.record_path.read_text()
        except OSError:
            return 0, 0
        for index, token in enumerate(text.split()[:2]):
            try:
                values[index] = int(token)
            except ValueError:
                break
        return values[0], values[1]

    def read_record(self) -> int:
        """Best score of the current game kind from the record file."""
        tetris, snake = self._read_records()
        return snake if self.game.is_snake() else tetris

    def write_record(self) -> None:
        """Store the current score if it beats the known record."""
        tetris, snake = self._read_records()
        if self.game.score <= self.game.high_score:
            return
        if self.game.is_snake():
            snake = self.game.score
        else:
            tetris = self.game.score
        try:
            self.record_path.write_text(f"{tetris}\n{snake}")
        except OSError:
            pass

    # -- rules -----------------------------------------------------------

    def add_apple(self) -> None:
        """Place an apple if the game runs and none is on the field."""
        if self.game.score == VICTORY_SCORE:
            return
        if any(self.cell_type(i, j) == Cell.APPLE for i, j in _play_cells()):
            return
        if self.game.pause == GameStatus.RUNNING:
            self._place_apple()

    def _place_apple(self) -> None:
        empty = [(i, j) for i, j in _play_cells() if self.cell_type(i, j) == Cell.EMPTY]
        if not empty:
            return
        i, j = self._rng.choice(empty)
        self.game.field[i][j] = Cell.APPLE * 100

    def _hits_obstacle(self, dx: int, dy: int, i: int, j: int) -> bool:
        ni, nj = i + dy, j + dx
        kind = self.cell_type(ni, nj)
        return (
            kind not in (Cell.EMPTY, Cell.APPLE, Cell.TAIL)
            or ni in (1, FIELD_HEIGHT - 2)
            or nj in (1, FIELD_WIDTH - 2)
        )

    def _locate(self, kind: Cell) -> tuple[int, int] | None:
        return next(
            ((i, j) for i, j in _all_cells() if self.cell_type(i, j) == kind), None
        )

    def move_snake(self) -> None:
        """Advance the snake one cell, ending the game on a collision."""
        game = self.game
        field = game.field
        victory = game.score == VICTORY_SCORE
        x, y = self.find_head()
        dx, dy = self.direction(y, x)
        game_over = self._hits_obstacle(dx, dy, y, x)

        if not victory and not game_over:
            tail = self._locate(Cell.TAIL)
            if tail is not None:
                ti, tj = tail
                tdx, tdy = self.direction(ti, tj)
                ni, nj = ti + tdy, tj + tdx
                field[ni][nj] = _retag(field[ni][nj], Cell.WILL_BE_TAIL)
                field[ti][tj] = 0
                head = self._locate(Cell.HEAD)
                if head is not None:
                    hi, hj = head
                    hdx, hdy = self.direction(hi, hj)
                    value = field[hi][hj]
                    field[hi + hdy][hj + hdx] = _retag(value, Cell.WILL_BE_HEAD)
                    field[hi][hj] = _retag(value, Cell.BODY)
            for i, j in _all_cells():
                kind = self.cell_type(i, j)
                if kind == Cell.WILL_BE_HEAD:
                    field[i][j] = _retag(field[i][j], Cell.HEAD)
                elif kind == Cell.WILL_BE_TAIL:
                    field[i][j] = _retag(field[i][j], Cell.TAIL)

        if game_over:
            game.pause = GameStatus.GAME_OVER
        elif victory:
            game.pause = GameStatus.VICTORY

    def grow_snake(self) -> bool:
        """Eat an apple right in front of the head; return whether it happened."""
        field = self.game.field
        x, y = self.find_head()
        dx, dy = self.direction(y, x)
        if self.cell_type(y + dy, x + dx) != Cell.APPLE:
            return False
        value = field[y][x]
        field[y + dy][x + dx] = _retag(value, Cell.HEAD)
        field[y][x] = _retag(value, Cell.BODY)
        self.game.score += 1
        return True

    # -- input -----------------------------------------------------------

    def _turn(self, vertical: bool, step: int) -> None:
        x, y = self.find_head()
        dx, dy = self.direction(y, x)
        current = dy if vertical else dx
        if self.game.pause == GameStatus.RUNNING and current == 0:
            self.game.field[y][x] = step * (Cell.HEAD * 100 + (1 if vertical else 10))
            self.game.next[0][0] = TURN_MARK
            self.update()
        elif current == step:
            self.update()

    def up(self) -> None:
        """Turn up, or step at once if already heading up."""
        self._turn(True, -1)

    def down(self) -> None:
        """Turn down, or step at once if already heading down."""
        self._turn(True, 1)

    def left(self) -> None:
        """Turn left, or step at once if already heading left."""
        self._turn(False, -1)

    def right(self) -> None:
        """Turn right, or step at once if already heading right."""
        self._turn(False, 1)

    def start(self) -> None:
        """Begin a game, or go back to the start screen after it ended."""
        if self.game.pause == GameStatus.NOT_STARTED:
            self.reset()
            self.game.pause = GameStatus.RUNNING
        elif self.game.pause in (GameStatus.GAME_OVER, GameStatus.VICTORY):
            self.write_record()
            self.reset()

    def terminate(self) -> None:
        """End the game, saving the record."""
        if self.game.pause not in (GameStatus.GAME_OVER, GameStatus.VICTORY):
            self.write_record()
            self.game.pause = GameStatus.GAME_OVER

    def pause(self) -> None:
        """Toggle between running and paused."""
        if self.game.pause == GameStatus.RUNNING:
            self.game.pause = GameStatus.PAUSED
        elif self.game.pause == GameStatus.PAUSED:
            self.game.pause = GameStatus.RUNNING

    def action(self) -> None:
        """The action key has no effect in snake."""

    def update(self) -> None:
        """Advance the game by one tick."""
        game = self.game
        if game.pause == GameStatus.RUNNING and not self.grow_snake():
            self.move_snake()
        if game.pause == GameStatus.RUNNING:
            self.add_apple()
        elif game.pause in (GameStatus.GAME_OVER, GameStatus.VICTORY):
            self.write_record()
        elif game.pause == GameStatus.NOT_STARTED:
            self.reset()
        if game.score >= 50:
            game.level = MAX_LEVEL
        elif game.score > START_SCORE:
            game.level = game.score // 5
        game.speed = 50 - game.level * 2


class Controller:
    """Routes user input and timer ticks to a game model."""

    def __init__(self, model: SnakeModel) -> None:
        self.model = model

    def user_input(self, action: UserAction, hold: bool = False) -> None:
        """Apply a key press; held keys are ignored."""
        if hold:
            return
        handlers = {
            UserAction.UP: self.model.up,
            UserAction.DOWN: self.model.down,
            UserAction.LEFT: self.model.left,
            UserAction.RIGHT: self.model.right,
            UserAction.START: self.model.start,
            UserAction.TERMINATE: self.model.terminate,
            UserAction.PAUSE: self.model.pause,
            UserAction.ACTION: self.model.action,
        }
        handler = handlers.get(action)
        if handler is not None:
            handler()

    def update_current_state(self) -> GameInfo:
        """Advance the model one tick and return the new state."""
        self.model.update()
        return self.model.game_info()

    def game_info(self) -> GameInfo:
        """Return the current state without changing it."""
        return self.model.game_info()

    def consume_turn(self) -> bool:
        """Report whether the snake has just turned, clearing the mark."""
        if self.model.game.next[0][0] == TURN_MARK:
            self.model.game.next[0][0] = SNAKE_MARK
            return True
        return False