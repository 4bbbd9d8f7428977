# brickgames

Two games from the classic handheld brick game: **Tetris** and **Snake**.
Both are played on a 10 × 20 field, either in a terminal or in a small
desktop window. Only the Python standard library is needed: `curses` for
the terminal and `tkinter` for the window.

## Installation

```
pip install .
```

## Playing

Both commands take the game as an optional argument, `1` for Tetris and
`2` for Snake. Without it they ask:

```
Choose a game:
1 - Tetris, 2 - Snake
Enter your choice:
```

Any other answer exits without starting a game. The `--record PATH` option
chooses the file that holds the best scores (default: `score.txt` in the
current directory).

### In the terminal

```
brickgames-cli
brickgames-cli 2 --record scores.txt
```

| Key        | Action                                                          |
|------------|-----------------------------------------------------------------|
| arrow keys | move / turn (in Snake, the current direction steps at once)     |
| space      | rotate the figure (Tetris)                                      |
| `p` / `P`  | pause                                                           |
| `q` / `Q`  | end the game                                                    |
| any key    | start the game, or continue after a pause                       |

When a game is over or won, press `R` to play again or `Q` to leave.

### In a desktop window

```
brickgames-desktop
brickgames-desktop 1
```

| Key        | Action                         |
|------------|--------------------------------|
| `S`        | start, or restart after the end |
| arrow keys | move / turn                    |
| space      | rotate the figure (Tetris)     |
| `P`        | pause and resume               |
| `Esc`      | end the game                   |

Close the window to quit.

## Rules in short

**Tetris** — the down key drops the figure one row; up does nothing.
Full lines are removed: one scores 100, two 300, three 700, four 1500.
Every 600 points raise the level (at most 10), and higher levels fall
faster.

**Snake** — the snake starts four cells long with a score of 4. Each apple
adds a cell and a point. From score 5 on the level is the score divided by
five, reaching the top level 10 at 50; higher levels move faster. Hitting
the wall or the snake's own body ends the game; a score of 200 wins it.

The best score of each game is written to the record file when a game ends
with a new best.

## Using the game logic

The models run without any user interface, for example to build another
front end:

```python
from brickgames.defines import UserAction
from brickgames.snake import Controller, SnakeModel

controller = Controller(SnakeModel("score.txt"))
controller.user_input(UserAction.START, False)
controller.user_input(UserAction.UP, False)
state = controller.update_current_state()
print(state.score, state.level, state.pause)
```

`update_current_state()` advances one tick and returns a `GameInfo`
snapshot; `game_info()` returns one without changing anything. The
`pause` member holds a `GameStatus` (`RUNNING`, `PAUSED`, `GAME_OVER`,
`NOT_STARTED`, `VICTORY`).

`brickgames.tetris` provides `TetrisModel` and `TetrisController` with the
same interface. The text and colour helpers behind the front ends,
`brickgames.cli.render_field`, `render_panel`, `key_to_action` and
`brickgames.desktop.cell_colors`, `next_colors`, `menu_text`,
`status_text`, take a `GameInfo` and can be reused as well.

## Limitations

- The terminal game needs a terminal of at least 47 columns and 22 rows,
  and a Python with `curses` (not available on plain Windows).
- The desktop game needs `tkinter`.
- There is a single record per game, kept in one plain text file; no
  player names or score tables.

## Running the tests

```
pip install .[test]
pytest
```