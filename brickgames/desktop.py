"""Windowed front end for the brick games, drawn on a tkinter canvas."""

from __future__ import annotations

import argparse

from .defines import PLAY_COLS, PLAY_ROWS, Cell, GameInfo, GameStatus, UserAction
from .snake import RECORD_FILE, Controller, SnakeModel
from .tetris import TetrisController, TetrisModel

CELL_SIZE = 20
WINDOW_SIZE = 500
NEXT_ORIGIN = (275, 300)
MENU_POSITION = (10 * 20 + 10, 15 * 10)
STATUS_POSITION = (10 * 20 + 10, 5 * 10)
TIMER_SCALE_MS = 10

EMPTY_COLOR = "gray"
APPLE_COLOR = "red"
HEAD_COLOR = "yellow"
BLOCK_COLOR = "green"

PROMPT = "Choose a game:\n1 - Tetris, 2 - Snake\nEnter your choice: "

_KEY_ACTIONS = {
    "Up": UserAction.UP,
    "Left": UserAction.LEFT,
    "Right": UserAction.RIGHT,
    "Down": UserAction.DOWN,
    "p": UserAction.PAUSE,
    "P": UserAction.PAUSE,
    "s": UserAction.START,
    "S": UserAction.START,
    "space": UserAction.ACTION,
    "Escape": UserAction.TERMINATE,
}

_STATUS_TEXTS = {
    GameStatus.RUNNING: "            Press 'P' for pause",
    GameStatus.PAUSED: "          Press 'P' to continue\n       or 'Esc' to end the game",
    GameStatus.GAME_OVER: (
        "                   Game over\n\n   Press 'S' to restart the "
        "game\n\n    or close the window to quit"
    ),
    GameStatus.NOT_STARTED: "    Press 'S' to start the game!",
    GameStatus.VICTORY: (
        "Congratulations, you are winner!\n\n     Press S to restart "
        "the game\n\n     or close the window to quit"
    ),
}


def _cell_color(value: int, snake: bool) -> str:
    if snake:
        kind = abs(value) // 100
    else:
        kind = Cell.EMPTY if value in (0, 3) else Cell.BODY
    if kind == Cell.EMPTY:
        return EMPTY_COLOR
    if kind == Cell.APPLE:
        return APPLE_COLOR
    if kind == Cell.HEAD:
        return HEAD_COLOR
    return BLOCK_COLOR


def cell_colors(game: GameInfo) -> list[list[str]]:
    """Colours of the visible play area, one row of names per field row."""
    snake = game.is_snake()
    return [[_cell_color(game.field[i][j], snake) for j in PLAY_COLS] for i in PLAY_ROWS]


def next_colors(game: GameInfo) -> list[list[str]] | None:
    """Colours of the next-figure preview, or None for snake, which has none."""
    if game.is_snake():
        return None
    shown = game.pause != GameStatus.NOT_STARTED
    return [
        [BLOCK_COLOR if value == 1 and shown else EMPTY_COLOR for value in row]
        for row in game.next
    ]


def menu_text(game: GameInfo) -> str:
    """Score, record and level text, with a preview caption for tetris."""
    record = max(game.high_score, game.score)
    text = (
        f"\n            Current score: {game.score}\n\n                  "
        f"Record: {record}\n\n                     Level: {game.level}\n"
    )
    if game.next[0][0] == 0:
        text += "\n                  Next figure:"
    return text


def status_text(game: GameInfo) -> str:
    """Hint telling the player which keys apply in the current state."""
    return _STATUS_TEXTS.get(game.pause, "")


class View:
    """Canvas that shows a game and feeds key presses and ticks to its controller."""

    def __init__(self, root, controller: Controller) -> None:
        import tkinter

        self.root = root
        self.controller = controller
        self.canvas = tkinter.Canvas(
            root, width=WINDOW_SIZE, height=WINDOW_SIZE, highlightthickness=0
        )
        self.canvas.pack(fill="both", expand=True)
        self.items = [
            [
                self.canvas.create_rectangle(
                    CELL_SIZE * x,
                    CELL_SIZE * y,
                    CELL_SIZE * (x + 1),
                    CELL_SIZE * (y + 1),
                )
                for x in range(len(PLAY_COLS))
            ]
            for y in range(len(PLAY_ROWS))
        ]
        nx, ny = NEXT_ORIGIN
        self.next_items = [
            [
                self.canvas.create_rectangle(
                    CELL_SIZE * x + nx,
                    CELL_SIZE * y + ny,
                    CELL_SIZE * (x + 1) + nx,
                    CELL_SIZE * (y + 1) + ny,
                )
                for x in range(4)
            ]
            for y in range(4)
        ]
        self.menu = self.canvas.create_text(*MENU_POSITION, anchor="nw", text="")
        self.res_info = self.canvas.create_text(*STATUS_POSITION, anchor="nw", text="")
        self._interval = max(1, controller.game_info().speed * TIMER_SCALE_MS)
        self._pending = None
        root.bind("<Key>", self.on_key)
        self._schedule()
        self.update_field(controller.update_current_state())

    def _schedule(self) -> None:
        self._pending = self.root.after(self._interval, self.move)

    def _restart_timer(self) -> None:
        if self._pending is not None:
            self.root.after_cancel(self._pending)
        self._interval = max(1, self.controller.game_info().speed * TIMER_SCALE_MS)
        self._schedule()

    def on_key(self, event) -> None:
        """Handle a key press from the window."""
        action = _KEY_ACTIONS.get(getattr(event, "keysym", ""))
        if action is not None:
            self.controller.user_input(action, False)
        # A turn of the snake restarts the timer so the step is not cut short.
        if self.controller.consume_turn():
            self._restart_timer()
        self.update_field(self.controller.game_info())

    def update_field(self, game: GameInfo) -> None:
        """Repaint the field, the preview and the texts from ``game``."""
        for row_items, row_colors in zip(self.items, cell_colors(game)):
            for item, color in zip(row_items, row_colors):
                self.canvas.itemconfigure(item, fill=color)
        preview = next_colors(game)
        if preview is not None:
            for row_items, row_colors in zip(self.next_items, preview):
                for item, color in zip(row_items, row_colors):
                    self.canvas.itemconfigure(item, fill=color)
        self.update_text_items(game)

    def update_text_items(self, game: GameInfo) -> None:
        """Refresh the score panel and the key hint."""
        self.canvas.itemconfigure(self.menu, text=menu_text(game))
        self.canvas.itemconfigure(self.res_info, text=status_text(game))

    def move(self) -> None:
        """Timer tick: advance the game and repaint."""
        self._schedule()
        self.update_field(self.controller.update_current_state())


def main(argv: list[str] | None = None) -> int:
    """Ask for a game and play it in a window."""
    parser = argparse.ArgumentParser(description="Play tetris or snake in a window.")
    parser.add_argument("choice", nargs="?", help="1 for tetris, 2 for snake")
    parser.add_argument("--record", default=RECORD_FILE, help="file holding best scores")
    args = parser.parse_args(argv)
    choice = args.choice if args.choice is not None else input(PROMPT)
    try:
        number = int(choice.strip())
    except ValueError:
        return 0
    if number not in (1, 2):
        return 0

    import tkinter

    if number == 2:
        model = SnakeModel(args.record)
        controller = Controller(model)
    else:
        model = TetrisModel(args.record)
        controller = TetrisController(model)
    with model:
        root = tkinter.Tk()
        root.title("Snake" if number == 2 else "Tetris")
        root.geometry(f"{WINDOW_SIZE}x{WINDOW_SIZE}")
        View(root, controller)
        root.mainloop()
    return 0