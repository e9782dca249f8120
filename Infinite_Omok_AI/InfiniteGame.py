"""Game loop and turn management for the infinite-field best-line rule set."""

import time

from .Board import Board
from .engine.types import GameResult, Player
from .utils import timer
from .utils.logger import describe_move


class InfiniteGame:
    def __init__(self, rules, move_timeout, x_player, o_player, logger=print, max_moves=200):
        self.board = Board(rules)
        self.move_timeout = move_timeout
        self.players = {Player.X: x_player, Player.O: o_player}
        self.logger = logger
        self.max_moves = max_moves
        self.move_index = 0

    def play(self):
        """Run a single game. Returns the GameResult (a disqualification counts as a win for the other side)."""
        result = GameResult.NONE
        while result == GameResult.NONE:
            side = self.board.current_player
            player = self.players[side]
            deadline = timer.deadline_after(self.move_timeout)

            try:
                move = player.next_move(self.board, deadline=deadline)
                if time.time() > deadline:
                    raise TimeoutError("Move exceeded allotted time")
                if not self.board.make_move(*move):
                    raise ValueError(f"Cell {move} is already occupied")
            except (TimeoutError, ValueError) as exc:
                self.logger(f"Disqualification: {side.name} - {exc}")
                return GameResult.win_for(side.opponent())

            self.move_index += 1
            self.logger(describe_move(self.move_index, side, move, self.board))

            result = self.board.check_winner()
            if result == GameResult.NONE and self.move_index >= self.max_moves:
                self.logger("Result: Draw (move limit reached)")
                return GameResult.DRAW

        self.logger(f"Result: {result.name}")
        return result
