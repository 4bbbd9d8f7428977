import curses
from unittest import mock

import pytest

from brickgames.cli import key_to_action, main, render_field, render_panel, run_game
from brickgames.defines import GameStatus, UserAction
from brickgames.snake import Controller, SnakeModel
from brickgames.tetris import TetrisController, TetrisModel


class FakeWindow:
    def __init__(self, keys=None):
        self.keys = keys if keys is not None else []
        self.texts = []
        self.delay_off = None

    def derwin(self, height, width, y, x):
        return FakeWindow()

    def erase(self):
        self.texts.append("<erase>")

    def addstr(self, row, col, text):
        self.texts.append(text)

    def box(self):
        pass

    def refresh(self):
        pass

    def nodelay(self, flag):
        self.delay_off = flag

    def getch(self):
        return self.keys.pop(0)


class RecordingScreen(FakeWindow):
    def __init__(self, keys):
        super().__init__(keys)
        self.children = []

    def derwin(self, height, width, y, x):
        child = FakeWindow()
        self.children.append(child)
        return child

    def all_text(self):
        return "\n".join(t for child in self.children for t in child.texts)


@pytest.fixture
def record(tmp_path):
    return tmp_path / "score.txt"


def test_render_field_snake_start_position(record):
    game = SnakeModel(record).game_info()
    lines = render_field(game, 24, 14).split("\n")
    assert len(lines) == 22
    assert lines[0] == ""
    assert lines[11].startswith(" " + "    " + "[][][]{}")
    assert all(len(line) == 21 for line in lines[1:21])


def test_render_panel_record_uses_larger_value(record):
    game = SnakeModel(record).game_info()
    game.high_score = 10
    assert "Record: 10" in render_panel(game)
    game.score = 15
    assert "Record: 15" in render_panel(game)


@pytest.mark.parametrize(
    "status, text",
    [
        (GameStatus.PAUSED, "Pause: on"),
        (GameStatus.NOT_STARTED, "to begin"),
        (GameStatus.GAME_OVER, "Game is over"),
        (GameStatus.VICTORY, "You win!"),
        (GameStatus.RUNNING, "Pause: off"),
    ],
)
def test_render_panel_status(record, status, text):
    game = SnakeModel(record).game_info()
    game.pause = status
    assert text in render_panel(game)


def test_render_panel_preview_only_for_tetris(record):
    snake_game = SnakeModel(record).game_info()
    assert "Next figure" not in render_panel(snake_game)
    model = TetrisModel(record)
    model.next_figure = 0
    model.fill_next_figure()
    panel = render_panel(model.game_info())
    assert "Next figure:" in panel
    assert "       [][][][]" in panel.split("\n")


@pytest.mark.parametrize(
    "key, action",
    [
        (curses.KEY_UP, UserAction.UP),
        (curses.KEY_DOWN, UserAction.DOWN),
        (curses.KEY_LEFT, UserAction.LEFT),
        (curses.KEY_RIGHT, UserAction.RIGHT),
        (ord("p"), UserAction.PAUSE),
        (ord("P"), UserAction.PAUSE),
        (ord("q"), UserAction.TERMINATE),
        (ord("Q"), UserAction.TERMINATE),
        (ord(" "), UserAction.ACTION),
    ],
)
def test_key_to_action_known_keys(key, action):
    assert key_to_action(key, False) == action
    assert key_to_action(key, True) == action


def test_key_to_action_default_depends_on_game():
    assert key_to_action(-1, False) == UserAction.UP
    assert key_to_action(-1, True) == UserAction.ACTION
    assert key_to_action(ord("z"), True) == UserAction.ACTION


def test_run_game_snake_terminate_and_quit(record):
    model = SnakeModel(record)
    screen = RecordingScreen([-1, ord("x"), ord("q"), ord("q")])
    assert run_game(screen, Controller(model), True) is False
    assert model.game.pause == GameStatus.GAME_OVER
    assert record.read_text() == "0\n4"
    assert "     Game is over" in screen.all_text()


def test_run_game_tetris_restart(record):
    model = TetrisModel(record)
    screen = RecordingScreen([-1, ord("x"), ord("q"), ord("R")])
    assert run_game(screen, TetrisController(model), False) is True
    assert model.game.pause == GameStatus.GAME_OVER
    assert not record.exists()
    assert screen.keys == []


def test_run_game_escape_sequence_arrow(record):
    model = SnakeModel(record)
    keys = [-1, ord("x"), 27, ord("["), ord("A"), ord("q"), ord("q")]
    screen = RecordingScreen(keys)
    controller = Controller(model)
    head_before = None
    assert run_game(screen, controller, True) is False
    x, y = model.find_head()
    head_before = model.game.field[y][x]
    assert head_before == -(2 * 100 + 1)


def test_main_ignores_invalid_choice(record):
    assert main(["3", "--record", str(record)]) == 0
    assert not record.exists()


def test_main_prompts_when_no_choice(record):
    with mock.patch("builtins.input", return_value="abc") as prompt:
        assert main(["--record", str(record)]) == 0
    assert prompt.call_args[0][0].startswith("Choose a game:")