[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "brickgames"
version = "0.1.0"
description = "Tetris and Snake from the classic brick game, playable in a terminal or a desktop window"
requires-python = ">=3.10"
dependencies = []
keywords = ["tetris", "snake", "brick game", "curses", "tkinter", "game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
brickgames-cli = "brickgames.cli:main"
brickgames-desktop = "brickgames.desktop:main"

[tool.setuptools.packages.find]
include = ["brickgames*"]

[tool.pytest.ini_options]
addopts = "-ra"
