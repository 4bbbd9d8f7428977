"""Tetris and Snake brick games: game models plus terminal and desktop front ends."""

__version__ = "0.1.0"