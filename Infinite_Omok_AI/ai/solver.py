"""Layered heuristic move selection: win, forced block, threat block, own extension, weighted fallback."""

import logging
import time
from collections import Counter

from . import priority
from ..engine.types import NEIGHBORS_8, GameResult, Move
from ..utils import timer


LOGGER = logging.getLogger(__name__)

CANDIDATE_LIMIT = 15
EXTENSION_RADIUS = 10

WEIGHT_SCORE = 100
BLOCK_SCORE = 1000
OWN_LINE_SCORE = 100
CENTER_SCORE = 500


class Solver:
    """Stateless per call; `last_layer` / `last_elapsed` describe the most recent decision."""

    def __init__(self, candidate_limit=CANDIDATE_LIMIT, extension_radius=EXTENSION_RADIUS):
        self.candidate_limit = candidate_limit
        self.extension_radius = extension_radius
        self.last_layer = None
        self.last_elapsed = 0.0

    def find_best_move(self, board, time_budget_ms=1000):
        """Return the recommended Move for the side to move, or None if the game is over."""
        start = time.time()
        deadline = timer.deadline_after(time_budget_ms / 1000.0)
        layer, move = self._choose(board, deadline)
        self.last_layer = layer
        self.last_elapsed = time.time() - start
        LOGGER.debug("layer=%s move=%s elapsed=%.3fs", layer, move, self.last_elapsed)
        return move

    def _choose(self, board, deadline):
        if board.check_winner() != GameResult.NONE:
            return "finished", None

        moves = board.possible_moves()
        if not moves:
            return "no-moves", None

        mover = board.current_player
        opponent = mover.opponent()

        move = self._find_immediate_win(board, moves, mover)
        if move is not None:
            return "win", move

        move = self._find_forced_block(board, moves, mover, opponent)
        if move is not None:
            return "forced-block", move

        move = self._best_extension(board, board.player_lines(opponent), mover)
        if move is not None:
            return "threat-block", move

        move = self._best_extension(board, board.player_lines(mover), mover)
        if move is not None:
            return "own-extension", move

        move = self._weighted_evaluation(board, mover, opponent, deadline)
        if move is not None:
            return "weighted", move

        move = self._fallback(board)
        return "fallback", move

    def _find_immediate_win(self, board, moves, mover):
        target = GameResult.win_for(mover)
        for move in moves:
            test_board = board.clone()
            test_board.make_move(move.x, move.y, player=mover)
            if test_board.check_winner() == target:
                return move
        return None

    def _find_forced_block(self, board, moves, mover, opponent):
        opponent_wins = GameResult.win_for(opponent)
        win_cells = []
        for move in moves:
            test_board = board.clone()
            test_board.make_move(move.x, move.y, player=opponent)
            if test_board.check_winner() == opponent_wins:
                win_cells.append((move.x, move.y))

        if not win_cells:
            return None

        blocks = []
        for wx, wy in win_cells:
            if board.is_empty(wx, wy):
                blocks.append((wx, wy))
            for dx, dy in NEIGHBORS_8:
                bx, by = wx + dx, wy + dy
                if not board.is_empty(bx, by):
                    continue
                test_board = board.clone()
                test_board.make_move(bx, by, player=mover)
                test_board.make_move(wx, wy, player=opponent)
                if test_board.check_winner() != opponent_wins:
                    blocks.append((bx, by))

        candidates = [Move(x, y, mover) for x, y in dict.fromkeys(blocks)]
        if not candidates:
            return None
        return max(candidates, key=lambda m: priority.composite_priority(board, m))

    def _best_extension(self, board, lines, mover):
        """Rank empty extension cells of `lines` by how many lines they touch, then priority."""
        counts = Counter()
        for line in lines:
            if line.length < 2:
                continue
            for x, y in priority.line_extensions(line, board.rules.required_length, self.extension_radius):
                if board.is_empty(x, y):
                    counts[(x, y)] += 1

        if not counts:
            return None
        ranked = [
            (count, priority.composite_priority(board, Move(x, y, mover)), Move(x, y, mover))
            for (x, y), count in counts.items()
        ]
        return max(ranked, key=lambda item: (item[0], item[1]))[2]

    def _weighted_evaluation(self, board, mover, opponent, deadline):
        best_move = None
        best_score = None
        for move, weight in board.weighted_moves()[: self.candidate_limit]:
            if best_move is not None and timer.time_remaining(deadline) <= 0:
                LOGGER.debug("time budget spent; keeping best candidate so far")
                break
            score = weight * WEIGHT_SCORE
            score += priority.blocking_value(board, move, opponent) * BLOCK_SCORE
            score += priority.own_line_value(board, move, mover) * OWN_LINE_SCORE
            if abs(move.x) <= 1 and abs(move.y) <= 1:
                score += CENTER_SCORE
            if best_score is None or score > best_score:
                best_move = move
                best_score = score
        return best_move

    def _fallback(self, board):
        moves = board.possible_moves()
        if not moves:
            return None
        return max(moves, key=lambda m: priority.composite_priority(board, m))


def find_best_move(board, time_budget_ms=1000, candidate_limit=CANDIDATE_LIMIT, extension_radius=EXTENSION_RADIUS):
    """
    Public function to pick a move. Instantiates and uses Solver.
    """
    solver = Solver(candidate_limit=candidate_limit, extension_radius=extension_radius)
    return solver.find_best_move(board, time_budget_ms)
