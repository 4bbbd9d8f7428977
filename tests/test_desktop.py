import pytest

from brickgames.defines import GameStatus
from brickgames.desktop import (
    APPLE_COLOR,
    BLOCK_COLOR,
    EMPTY_COLOR,
    HEAD_COLOR,
    cell_colors,
    main,
    menu_text,
    next_colors,
    status_text,
)
from brickgames.snake import SnakeModel
from brickgames.tetris import TetrisModel


@pytest.fixture
def snake_game(tmp_path):
    return SnakeModel(tmp_path / "score.txt").game_info()


@pytest.fixture
def tetris_model(tmp_path):
    return TetrisModel(tmp_path / "score.txt")


def test_cell_colors_shape(snake_game):
    colors = cell_colors(snake_game)
    assert len(colors) == 20
    assert all(len(row) == 10 for row in colors)


def test_snake_colors_initial(snake_game):
    colors = cell_colors(snake_game)
    # Head sits at field row 12, column 7; the play area starts at 2.
    assert colors[10][5] == HEAD_COLOR
    assert colors[10][2] == BLOCK_COLOR
    assert colors[10][3] == BLOCK_COLOR
    assert colors[0][0] == EMPTY_COLOR
    flat = [c for row in colors for c in row]
    assert flat.count(HEAD_COLOR) == 1
    assert flat.count(BLOCK_COLOR) == 3


def test_snake_apple_and_negative_head(snake_game):
    snake_game.field[5][5] = 400
    snake_game.field[12][7] = -201
    colors = cell_colors(snake_game)
    assert colors[3][3] == APPLE_COLOR
    assert colors[10][5] == HEAD_COLOR


def test_tetris_colors(tetris_model):
    game = tetris_model.game_info()
    game.field[2][2] = 3
    game.field[2][3] = 2
    game.field[2][4] = 4
    game.field[2][5] = 1
    colors = cell_colors(game)
    assert colors[0][:4] == [EMPTY_COLOR, BLOCK_COLOR, BLOCK_COLOR, BLOCK_COLOR]
    assert colors[1] == [EMPTY_COLOR] * 10


def test_next_colors_snake_is_none(snake_game):
    assert next_colors(snake_game) is None


def test_next_colors_hidden_before_start(tetris_model):
    tetris_model.next_figure = 0
    tetris_model.fill_next_figure()
    colors = next_colors(tetris_model.game_info())
    assert colors == [[EMPTY_COLOR] * 4 for _ in range(4)]


def test_next_colors_running(tetris_model):
    tetris_model.start()
    game = tetris_model.game_info()
    colors = next_colors(game)
    for row_values, row_colors in zip(game.next, colors):
        for value, color in zip(row_values, row_colors):
            assert color == (BLOCK_COLOR if value == 1 else EMPTY_COLOR)
    assert sum(c == BLOCK_COLOR for row in colors for c in row) == 4


def test_menu_text_tetris_has_preview_caption(tetris_model):
    game = tetris_model.game_info()
    game.score = 300
    game.high_score = 100
    text = menu_text(game)
    assert "Current score: 300" in text
    assert "Record: 300" in text
    assert "Level: 1" in text
    assert text.endswith("Next figure:")


def test_menu_text_snake_without_caption(snake_game):
    snake_game.high_score = 17
    text = menu_text(snake_game)
    assert "Next figure:" not in text
    assert "Record: 17" in text
    assert "Current score: 4" in text


@pytest.mark.parametrize(
    "status, fragment",
    [
        (GameStatus.RUNNING, "Press 'P' for pause"),
        (GameStatus.PAUSED, "Press 'P' to continue"),
        (GameStatus.GAME_OVER, "Game over"),
        (GameStatus.NOT_STARTED, "Press 'S' to start the game!"),
        (GameStatus.VICTORY, "Congratulations, you are winner!"),
    ],
)
def test_status_text(snake_game, status, fragment):
    snake_game.pause = status
    assert fragment in status_text(snake_game)


def test_status_texts_distinct(snake_game):
    texts = set()
    for status in GameStatus:
        snake_game.pause = status
        texts.add(status_text(snake_game))
    assert len(texts) == len(GameStatus)


@pytest.mark.parametrize("choice", ["3", "x"])
def test_main_ignores_unknown_choice(choice):
    assert main([choice]) == 0