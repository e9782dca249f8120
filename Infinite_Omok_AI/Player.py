"""Abstract player interface and the solver-backed AI player."""

from .ai.solver import Solver
from .utils import timer


class BasePlayer:
    def __init__(self, side):
        self.side = side

    def next_move(self, board, deadline=None):
        """Return (x, y) for next move within time limit."""
        raise NotImplementedError


class SolverPlayer(BasePlayer):
    def __init__(self, side, time_budget_ms=1000, candidate_limit=15, extension_radius=10):
        super().__init__(side)
        self.time_budget_ms = time_budget_ms
        self.solver = Solver(candidate_limit=candidate_limit, extension_radius=extension_radius)

    def next_move(self, board, deadline=None):
        if deadline is not None and timer.time_remaining(deadline) <= 0:
            raise TimeoutError("Move exceeded allotted time")
        move = self.solver.find_best_move(board, timer.budget_ms(deadline, self.time_budget_ms))
        if move is None:
            raise ValueError("Solver found no move")
        return move.x, move.y
