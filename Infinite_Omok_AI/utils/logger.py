"""Timestamped event lines for match progress."""

import datetime

from ..engine.types import Player


def log_event(message):
    timestamp = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {message}")


def describe_move(move_index, player, pos, board):
    x, y = pos
    return (
        f"Move {move_index}: {player.name} ({x}, {y}) "
        f"score X={board.score_of(Player.X):.1f} O={board.score_of(Player.O):.1f}"
    )
