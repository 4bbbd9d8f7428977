"""Tetris game logic built on top of the snake model's shared machinery."""

from __future__ import annotations

from pathlib import Path

from .defines import FIELD_HEIGHT, FIELD_WIDTH, PLAY_COLS, PLAY_ROWS, GameStatus
from .snake import MAX_LEVEL, RECORD_FILE, Controller, SnakeModel

# Cell codes on a tetris field.
EMPTY = 0
FIXED = 1
FALLING = 2
FRAME = 3
FRAME_ON_FIXED = 4

FIGURE_COUNT = 7
BASE_SPEED = 25
POINTS_PER_LEVEL = 600

_BOTTOM_ROW = PLAY_ROWS[-1]
_LEFT_COL = PLAY_COLS[0]
_RIGHT_COL = PLAY_COLS[-1]

_LINE_SCORES = {1: 100, 2: 300, 3: 700, 4: 1500}

_NEXT_SHAPES = (
    ((1, 0), (1, 1), (1, 2), (1, 3)),
    ((1, 1), (2, 1), (2, 2), (2, 3)),
    ((1, 3), (2, 1), (2, 2), (2, 3)),
    ((1, 1), (2, 1), (1, 2), (2, 2)),
    ((1, 1), (1, 2), (2, 0), (2, 1)),
    ((1, 1), (2, 0), (2, 1), (2, 2)),
    ((1, 1), (1, 2), (2, 2), (2, 3)),
)


def _shift_cell(src: int, dst: int, falling: bool) -> tuple[int, int] | None:
    """New ``(src, dst)`` values when the content of ``src`` moves into ``dst``."""
    if src == FALLING:
        return EMPTY, FALLING
    if src == FRAME and dst == EMPTY:
        return EMPTY, FRAME
    if src == FRAME and dst == FIXED:
        return EMPTY, FRAME_ON_FIXED
    if src == FRAME_ON_FIXED and dst == FIXED:
        return FIXED, FRAME_ON_FIXED
    if src == FRAME_ON_FIXED and (falling or dst == EMPTY):
        return FIXED, FRAME if falling else EMPTY
    return None


class TetrisModel(SnakeModel):
    """State and rules of tetris.

    Field cells hold 0 (empty), 1 (fixed block), 2 (falling block),
    3 (rotation frame around the falling figure) or 4 (frame over a fixed block).
    """

    def __init__(self, record_path: str | Path = RECORD_FILE) -> None:
        self.figure = 0
        self.next_figure = 0
        super().__init__(record_path)

    # -- helpers ---------------------------------------------------------

    def _at(self, i: int, j: int) -> int | None:
        if 0 <= i < FIELD_HEIGHT and 0 <= j < FIELD_WIDTH:
            return self.game.field[i][j]
        return None

    def _fill_in_order(self, cells, blocked: bool) -> bool:
        """Place falling blocks one by one, stopping at the first fixed block."""
        field = self.game.field
        for i, j in cells:
            if blocked:
                break
            if field[i][j] == FIXED:
                blocked = True
            else:
                field[i][j] = FALLING
        return blocked

    def _fill_all_or_none(self, cells, blocked: bool) -> bool:
        """Place all falling blocks unless one of the cells is taken."""
        field = self.game.field
        if any(field[i][j] == FIXED for i, j in cells):
            return True
        for i, j in cells:
            field[i][j] = FALLING
        return blocked

    def _mark_frame(self, cells, blocked: bool) -> None:
        if not blocked:
            for i, j in cells:
                self.game.field[i][j] = FRAME

    def _mark_frame_row(self, row: int, cols, blocked: bool) -> None:
        if blocked:
            return
        field_row = self.game.field[row]
        for j in cols:
            field_row[j] = FRAME if field_row[j] == EMPTY else FRAME_ON_FIXED

    def _game_over(self) -> bool:
        return self.game.pause == GameStatus.GAME_OVER

    # -- state -----------------------------------------------------------

    def reset(self) -> None:
        """Put the game into its initial, not yet started state."""
        game = self.game
        game.field = [[EMPTY] * FIELD_WIDTH for _ in range(FIELD_HEIGHT)]
        game.next = [[0] * 4 for _ in range(4)]
        game.level = 1
        game.high_score = self.read_record()
        game.score = 0
        game.speed = BASE_SPEED - game.level * 2
        game.pause = GameStatus.NOT_STARTED
        self.figure = self.next_figure = 0

    def generate_figure(self) -> int:
        """Pick a random figure number from 0 to 6."""
        return self._rng.randrange(FIGURE_COUNT)

    # -- spawning --------------------------------------------------------

    def add_figure(self) -> None:
        """Spawn the current figure at the top, ending the game if it cannot fit."""
        game = self.game
        blocked = self._game_over() or any(
            game.field[2][j] == FIXED for j in PLAY_COLS
        )
        if not blocked:
            spawners = (
                self.add_red,
                self.add_orange,
                self.add_yellow,
                self.add_pink,
                self.add_green,
                self.add_blue,
                self.add_violet,
            )
            if 0 <= self.figure < len(spawners):
                blocked = spawners[self.figure]()
        if blocked:
            self.write_record()
            game.pause = GameStatus.GAME_OVER

    def add_red(self) -> bool:
        """Spawn the I figure; return True if it does not fit."""
        cols = range(5, 9)
        blocked = self._fill_in_order([(2, j) for j in cols], self._game_over())
        self._mark_frame([(i, j) for i in (0, 1) for j in cols], blocked)
        self._mark_frame_row(3, cols, blocked)
        return blocked

    def add_orange(self) -> bool:
        """Spawn the J figure; return True if it does not fit."""
        field = self.game.field
        blocked = self._game_over()
        if field[2][6] == FIXED:
            blocked = True
        else:
            field[2][6] = FALLING
        blocked = self._fill_in_order([(3, j) for j in range(6, 9)], blocked)
        self._mark_frame([(2, 7), (2, 8)], blocked)
        self._mark_frame_row(4, range(6, 9), blocked)
        return blocked

    def add_yellow(self) -> bool:
        """Spawn the L figure; return True if it does not fit."""
        field = self.game.field
        blocked = self._game_over()
        if field[2][8] == FIXED:
            blocked = True
        else:
            field[2][8] = FALLING
        blocked = self._fill_in_order([(3, j) for j in range(6, 9)], blocked)
        self._mark_frame([(2, 6), (2, 7)], blocked)
        self._mark_frame_row(4, range(6, 9), blocked)
        return blocked

    def add_pink(self) -> bool:
        """Spawn the O figure; return True if it does not fit."""
        cells = [(i, j) for i in (2, 3) for j in (6, 7)]
        return self._fill_in_order(cells, self._game_over())

    def add_green(self) -> bool:
        """Spawn the S figure; return True if it does not fit."""
        blocked = self._fill_all_or_none(
            [(2, 7), (2, 8), (3, 6), (3, 7)], self._game_over()
        )
        self._mark_frame([(2, 6), (3, 8)], blocked)
        self._mark_frame_row(4, range(6, 9), blocked)
        return blocked

    def add_blue(self) -> bool:
        """Spawn the T figure; return True if it does not fit."""
        blocked = self._fill_all_or_none(
            [(2, 7), (3, 6), (3, 7), (3, 8)], self._game_over()
        )
        self._mark_frame([(2, 6), (2, 8)], blocked)
        self._mark_frame_row(4, range(6, 9), blocked)
        return blocked

    def add_violet(self) -> bool:
        """Spawn the Z figure; return True if it does not fit."""
        blocked = self._fill_all_or_none(
            [(2, 6), (2, 7), (3, 7), (3, 8)], self._game_over()
        )
        self._mark_frame([(2, 8), (3, 6)], blocked)
        self._mark_frame_row(4, range(6, 9), blocked)
        return blocked

    def fill_next_figure(self) -> None:
        """Draw the upcoming figure into the preview grid."""
        grid = [[0] * 4 for _ in range(4)]
        if 0 <= self.next_figure < len(_NEXT_SHAPES):
            for i, j in _NEXT_SHAPES[self.next_figure]:
                grid[i][j] = 1
        self.game.next = grid

    # -- falling ---------------------------------------------------------

    def figure_fall(self) -> bool:
        """Move the figure one row down; return True if it has landed instead."""
        game = self.game
        if game.pause != GameStatus.RUNNING:
            return False
        field = game.field
        landed = any(
            field[i][j] == FALLING
            and (i == _BOTTOM_ROW or field[i + 1][j] in (FIXED, FRAME_ON_FIXED))
            for i in PLAY_ROWS
            for j in PLAY_COLS
        )
        if landed:
            return True
        for i in range(FIELD_HEIGHT - 1, 0, -1):
            for j in range(FIELD_WIDTH - 1, -1, -1):
                moved = _shift_cell(field[i - 1][j], field[i][j], falling=True)
                if moved is not None:
                    field[i - 1][j], field[i][j] = moved
        return False

    def stop_field(self) -> None:
        """Fix the falling figure in place and remove its frame."""
        for row in self.game.field:
            for j, value in enumerate(row):
                if value in (FALLING, FRAME_ON_FIXED):
                    row[j] = FIXED
                elif value == FRAME:
                    row[j] = EMPTY

    def clear_lines(self) -> int:
        """Empty every full row of the play area; return how many there were."""
        cleared = 0
        for i in PLAY_ROWS:
            row = self.game.field[i]
            if all(row[j] == FIXED for j in PLAY_COLS):
                for j in PLAY_COLS:
                    row[j] = EMPTY
                cleared += 1
        return cleared

    def fall_all_field(self) -> None:
        """Let every fixed block drop as far as it can after rows were cleared."""
        field = self.game.field
        for i in range(FIELD_HEIGHT - 2, 1, -1):
            for j in PLAY_COLS:
                if field[i][j] == FIXED:
                    self.pixel_fall(i, j)

    def pixel_fall(self, i: int, j: int) -> None:
        """Drop the block at row ``i``, column ``j`` until it rests on something."""
        field = self.game.field
        for k in range(i, FIELD_HEIGHT - 2):
            if field[k][j] == FIXED and (
                field[k + 1][j] == FIXED or k == FIELD_HEIGHT - 3
            ):
                break
            field[k][j] = EMPTY
            field[k + 1][j] = FIXED

    def increase_score(self, cleared: int) -> int:
        """Points earned for clearing ``cleared`` rows at once."""
        if cleared > 4:
            return _LINE_SCORES[4] + self.increase_score(cleared - 4)
        return _LINE_SCORES.get(cleared, 0)

    def increase_level(self) -> None:
        """Recompute the level from the score."""
        level = self.game.score // POINTS_PER_LEVEL
        self.game.level = min(max(level, 1), MAX_LEVEL)

    def fall(self) -> None:
        """Drop the figure one row, handling landing, scoring and the next spawn."""
        game = self.game
        if game.pause != GameStatus.RUNNING or not self.figure_fall():
            return
        self.stop_field()
        total = 0
        cleared = self.clear_lines()
        while cleared:
            self.fall_all_field()
            total += cleared
            cleared = self.clear_lines()
        game.score += self.increase_score(total)
        if game.level < MAX_LEVEL:
            self.increase_level()
        game.speed = BASE_SPEED - game.level * 2
        self.figure = self.next_figure
        self.add_figure()
        self.next_figure = self.generate_figure()
        self.fill_next_figure()

    def update(self) -> None:
        """Advance the game by one tick."""
        status = self.game.pause
        if status == GameStatus.RUNNING:
            self.fall()
        elif status == GameStatus.GAME_OVER:
            self.write_record()
        elif status == GameStatus.NOT_STARTED:
            self.reset()

    # -- input -----------------------------------------------------------

    def left(self) -> None:
        """Shift the figure one column left if nothing is in the way."""
        field = self.game.field
        blocked = any(
            field[i][j] == FALLING
            and (j == _LEFT_COL or self._at(i, j - 1) in (FIXED, FRAME_ON_FIXED))
            for i in range(FIELD_HEIGHT)
            for j in range(FIELD_WIDTH - 1)
        )
        if blocked:
            return
        for row in field:
            for j in range(FIELD_WIDTH - 2):
                moved = _shift_cell(row[j + 1], row[j], falling=False)
                if moved is not None:
                    row[j + 1], row[j] = moved

    def right(self) -> None:
        """Shift the figure one column right if nothing is in the way."""
        field = self.game.field
        blocked = any(
            field[i][j] == FALLING
            and (j == _RIGHT_COL or self._at(i, j + 1) in (FIXED, FRAME_ON_FIXED))
            for i in range(FIELD_HEIGHT)
            for j in range(FIELD_WIDTH)
        )
        if blocked:
            return
        for row in field:
            for j in range(FIELD_WIDTH - 1, 0, -1):
                moved = _shift_cell(row[j - 1], row[j], falling=False)
                if moved is not None:
                    row[j - 1], row[j] = moved

    def up(self) -> None:
        """The up key has no effect in tetris."""

    def down(self) -> None:
        """Drop the figure one row at once."""
        self.fall()

    def action(self) -> None:
        """Rotate the figure a quarter turn if the rotated shape fits."""
        field = self.game.field
        if self.figure == 0:
            size = 4
        elif self.figure == 3:
            size = 0
        else:
            size = 3
        m, n = next(
            (
                (i, j)
                for i in range(FIELD_HEIGHT)
                for j in range(FIELD_WIDTH)
                if field[i][j] in (FALLING, FRAME, FRAME_ON_FIXED)
            ),
            (0, 0),
        )
        box = [
            [FALLING if self._at(i + m, j + n) == FALLING else FRAME for j in range(size)]
            for i in range(size)
        ]
        rotated = [list(column) for column in zip(*box)][::-1]

        for i, row in enumerate(rotated):
            for j, value in enumerate(row):
                y, x = i + m, j + n
                if value == FALLING and (
                    self._at(y, x) in (FRAME_ON_FIXED, FIXED)
                    or x <= 1
                    or x >= FIELD_WIDTH - 2
                    or y <= 1
                    or y >= FIELD_HEIGHT - 2
                ):
                    return

        for i, row in enumerate(rotated):
            for j, value in enumerate(row):
                y, x = i + m, j + n
                current = self._at(y, x)
                if current is None:
                    continue
                if value == FALLING:
                    field[y][x] = FALLING
                elif current in (EMPTY, FALLING):
                    field[y][x] = FRAME
                elif current in (FIXED, FRAME_ON_FIXED):
                    field[y][x] = FRAME_ON_FIXED

    def start(self) -> None:
        """Begin a game, or go back to the start screen after it ended."""
        game = self.game
        if game.pause == GameStatus.NOT_STARTED:
            self.reset()
            self.figure = self.generate_figure()
            self.add_figure()
            self.next_figure = self.generate_figure()
            self.fill_next_figure()
            game.pause = GameStatus.RUNNING
        elif game.pause in (GameStatus.GAME_OVER, GameStatus.VICTORY):
            self.write_record()
            self.reset()


class TetrisController(Controller):
    """Controller driving a tetris model."""

    def __init__(self, model: TetrisModel) -> None:
        super().__init__(model)