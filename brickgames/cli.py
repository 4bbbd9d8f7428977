"""Terminal front end for the brick games, drawn with curses."""

from __future__ import annotations

import argparse
import curses
import time

from .defines import FIELD_HEIGHT, FIELD_WIDTH, Cell, GameInfo, GameStatus, UserAction
from .snake import RECORD_FILE, Controller, SnakeModel
from .tetris import TetrisController, TetrisModel

WINDOW_HEIGHT = 22
WINDOW_WIDTH = 22
PANEL_COLUMN = 25
TICKS_PER_STEP = 15
FRAME_DELAY_PER_SPEED = 0.0003

PROMPT = "Choose a game:\n1 - Tetris, 2 - Snake\nEnter your choice: "

_ESCAPE = 27
_GLYPHS = {
    Cell.EMPTY: "  ",
    Cell.APPLE: "()",
    Cell.BODY: "[]",
    Cell.TAIL: "[]",
    Cell.HEAD: "{}",
}
_ESCAPE_ARROWS = {
    ord("A"): curses.KEY_UP,
    ord("B"): curses.KEY_DOWN,
    ord("C"): curses.KEY_RIGHT,
    ord("D"): curses.KEY_LEFT,
}
_KEY_ACTIONS = {
    curses.KEY_UP: UserAction.UP,
    curses.KEY_DOWN: UserAction.DOWN,
    curses.KEY_LEFT: UserAction.LEFT,
    curses.KEY_RIGHT: UserAction.RIGHT,
    ord("p"): UserAction.PAUSE,
    ord("P"): UserAction.PAUSE,
    ord("q"): UserAction.TERMINATE,
    ord("Q"): UserAction.TERMINATE,
    ord(" "): UserAction.ACTION,
}
_FINISHED = (GameStatus.GAME_OVER, GameStatus.VICTORY)


def render_field(game: GameInfo, height: int = FIELD_HEIGHT, width: int = FIELD_WIDTH) -> str:
    """Text picture of the play area of ``game``."""
    snake = game.is_snake()
    lines = [""]
    for i in range(2, height - 2):
        row = game.field[i]
        cells = []
        for j in range(2, width - 2):
            value = row[j]
            if snake:
                kind = abs(value) // 100
            else:
                kind = Cell.EMPTY if value in (0, 3) else Cell.BODY
            cells.append(_GLYPHS.get(kind, ""))
        lines.append(" " + "".join(cells))
    return "\n".join(lines) + "\n"


def _status_text(status: GameStatus) -> str:
    if status == GameStatus.PAUSED:
        return "      Pause: on\n    Press any key\n     to continue\n"
    if status == GameStatus.NOT_STARTED:
        return "\n    Press any key\n       to begin\n"
    if status == GameStatus.GAME_OVER:
        return "     Game is over\n\n  Press R to restart\n     or Q to exit"
    if status == GameStatus.VICTORY:
        return "     You win!\n\n  Press R to restart\n     or Q to exit"
    return "      Pause: off\n\n\n"


def render_panel(game: GameInfo) -> str:
    """Text of the information panel: record, score, level, status and preview."""
    record = max(game.score, game.high_score)
    parts = [
        "\n\n",
        f"     Record: {record}",
        "\n\n",
        f"    Current score:\n\n{game.score:12d}",
        "\n\n",
        f"       Level: {game.level}",
        "\n\n",
        _status_text(game.pause),
        "\n\n",
    ]
    if not game.is_snake():
        parts.append("     Next figure:\n")
        for row in game.next:
            cells = "".join("[]" if value == 1 else "  " for value in row)
            parts.append(f"       {cells}\n")
    return "".join(parts)


def key_to_action(key: int, snake: bool) -> UserAction:
    """Map a curses key code to a game action.

    Keys with no meaning map to an action the game ignores: up for tetris,
    the action key for snake.
    """
    default = UserAction.ACTION if snake else UserAction.UP
    return _KEY_ACTIONS.get(key, default)


def _read_key(screen) -> int:
    """Read one key, turning raw escape sequences for arrows into curses codes."""
    key = screen.getch()
    if key == _ESCAPE:
        screen.getch()
        return _ESCAPE_ARROWS.get(screen.getch(), _ESCAPE)
    return key


def _draw(window, text: str) -> None:
    window.erase()
    for row, line in enumerate(text.split("\n")):
        try:
            window.addstr(row, 0, line)
        except curses.error:
            break
    window.box()
    window.refresh()


def _draw_all(field, panel, game: GameInfo) -> None:
    _draw(field, render_field(game, FIELD_HEIGHT, FIELD_WIDTH))
    _draw(panel, render_panel(game))
    time.sleep(FRAME_DELAY_PER_SPEED * game.speed)


def _wait_on_pause(screen, panel, game: GameInfo) -> None:
    if game.pause in (GameStatus.PAUSED, GameStatus.NOT_STARTED):
        _draw(panel, render_panel(game))
        screen.nodelay(False)
        screen.getch()
        screen.nodelay(True)


def _end_of_game(screen, field, panel, game: GameInfo) -> bool:
    """Show the final state and ask whether to play again."""
    screen.nodelay(False)
    _draw(field, render_field(game, FIELD_HEIGHT, FIELD_WIDTH))
    _draw(panel, render_panel(game))
    while True:
        key = screen.getch()
        if key in (ord("r"), ord("R")):
            return True
        if key in (ord("q"), ord("Q")):
            return False


def run_game(screen, controller: Controller, snake: bool) -> bool:
    """Play one game on ``screen``; return True if the player wants a restart."""
    field = screen.derwin(WINDOW_HEIGHT, WINDOW_WIDTH, 0, 0)
    panel = screen.derwin(WINDOW_HEIGHT, WINDOW_WIDTH, 0, PANEL_COLUMN)
    screen.nodelay(True)
    state = controller.game_info()
    finished = False
    while not finished:
        ticks = 0
        while ticks < TICKS_PER_STEP and state.pause != GameStatus.GAME_OVER:
            controller.user_input(key_to_action(_read_key(screen), snake), False)
            state = controller.game_info()
            _draw_all(field, panel, state)
            if state.pause in (GameStatus.NOT_STARTED, GameStatus.PAUSED):
                _wait_on_pause(screen, panel, state)
                if state.pause == GameStatus.NOT_STARTED:
                    controller.user_input(UserAction.START, False)
                else:
                    controller.user_input(UserAction.PAUSE, False)
            ticks += 1
            if snake and controller.consume_turn():
                ticks = 0
            if state.pause in _FINISHED:
                finished = True
        state = controller.update_current_state()
        if state.pause in _FINISHED:
            finished = True
    return _end_of_game(screen, field, panel, state)


def _play(screen, snake: bool, record_path: str) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    restart = True
    while restart:
        if snake:
            model = SnakeModel(record_path)
            controller = Controller(model)
        else:
            model = TetrisModel(record_path)
            controller = TetrisController(model)
        with model:
            restart = run_game(screen, controller, snake)


def main(argv: list[str] | None = None) -> int:
    """Ask for a game and play it in the terminal."""
    parser = argparse.ArgumentParser(description="Play tetris or snake in the terminal.")
    parser.add_argument("choice", nargs="?", help="1 for tetris, 2 for snake")
    parser.add_argument("--record", default=RECORD_FILE, help="file holding best scores")
    args = parser.parse_args(argv)
    choice = args.choice if args.choice is not None else input(PROMPT)
    try:
        number = int(choice.strip())
    except ValueError:
        return 0
    if number in (1, 2):
        curses.wrapper(_play, number == 2, args.record)
    return 0