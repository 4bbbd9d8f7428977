"""Shared game constants, user actions and the game state record."""

from __future__ import annotations

import dataclasses
from enum import IntEnum

FIELD_HEIGHT = 24
FIELD_WIDTH = 14
NEXT_SIZE = 4

# Rows and columns of the playable area; the outer two cells on each side
# form a hidden border.
PLAY_ROWS = range(2, FIELD_HEIGHT - 2)
PLAY_COLS = range(2, FIELD_WIDTH - 2)


class Cell(IntEnum):
    """Kinds of cells on a snake field (the hundreds digit of a cell code)."""

    EMPTY = 0
    BODY = 1
    HEAD = 2
    TAIL = 3
    APPLE = 4
    WILL_BE_HEAD = 5
    WILL_BE_TAIL = 6


class UserAction(IntEnum):
    """Input a player can give to a game."""

    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ACTION = 7


class GameStatus(IntEnum):
    """Lifecycle state of a game, kept in ``GameInfo.pause``."""

    RUNNING = 0
    PAUSED = 1
    GAME_OVER = 2
    NOT_STARTED = 3
    VICTORY = 4


def _grid(height: int, width: int) -> list[list[int]]:
    return [[0] * width for _ in range(height)]


@dataclasses.dataclass
class GameInfo:
    """Complete visible state of a game."""

    field: list[list[int]] = dataclasses.field(
        default_factory=lambda: _grid(FIELD_HEIGHT, FIELD_WIDTH)
    )
    next: list[list[int]] = dataclasses.field(
        default_factory=lambda: _grid(NEXT_SIZE, NEXT_SIZE)
    )
    score: int = 0
    high_score: int = 0
    level: int = 1
    speed: int = 0
    pause: GameStatus = GameStatus.NOT_STARTED

    def copy(self) -> GameInfo:
        """Return an independent snapshot of this state."""
        return dataclasses.replace(
            self,
            field=[row[:] for row in self.field],
            next=[row[:] for row in self.next],
        )

    def is_snake(self) -> bool:
        """True when the state belongs to a snake game rather than tetris."""
        return self.next[0][0] < 0