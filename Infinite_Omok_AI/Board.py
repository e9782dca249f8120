"""Sparse infinite board, per-player best-line tracking, and score-decided win checking."""

import logging
from dataclasses import dataclass

from .engine.line import Line
from .engine.rules import RuleConfig
from .engine.types import DIRECTIONS, NEIGHBORS_8, GameResult, Move, Player
from .engine.weight_field import WeightField


LOGGER = logging.getLogger(__name__)

PLAYED_CELL_BONUS = 3.0
UNDO_DECAY = 1.0
MOVE_PRIORITY_SCALE = 20


@dataclass(frozen=True)
class _Snapshot:
    # State needed to revert the most recent move exactly
    pos: tuple[int, int]
    current_player: Player
    lines: tuple


class Board:
    def __init__(self, rules=None):
        # Sparse map (x, y) -> Player; absent keys are empty
        self.rules = rules or RuleConfig()
        self.cells: dict[tuple[int, int], Player] = {}
        self.current_player = Player.X
        self.weights = WeightField(uniform=self.rules.uniform_weights)
        self.best_lines: dict[Player, Line | None] = {Player.X: None, Player.O: None}
        self.history: list[tuple[int, int]] = []
        self._snapshots: list[_Snapshot] = []

    @property
    def move_count(self):
        return len(self.cells)

    def in_bounds(self, x, y):
        if self.rules.field_size is None:
            return True
        # field_size cells per axis, starting at -(field_size // 2)
        low = -(self.rules.field_size // 2)
        high = low + self.rules.field_size
        return low <= x < high and low <= y < high

    def get_cell(self, x, y):
        return self.cells.get((x, y), Player.NONE)

    def is_empty(self, x, y):
        return self.in_bounds(x, y) and (x, y) not in self.cells

    def occupied_cells(self):
        return list(self.cells)

    def cells_of(self, player):
        return [pos for pos, owner in self.cells.items() if owner == player]

    def make_move(self, x, y, player=None):
        """Place a stone for `player` (default: side to move). False if the cell is taken."""
        if not self.is_empty(x, y):
            return False
        mover = self.current_player if player is None else Player(player)
        if mover == Player.NONE:
            raise ValueError("player must be X or O")

        self._snapshots.append(
            _Snapshot((x, y), self.current_player, (self.best_lines[Player.X], self.best_lines[Player.O]))
        )
        self.cells[(x, y)] = mover
        self.history.append((x, y))
        self.weights.mark_occupied(x, y)
        self.weights.increase(x, y, PLAYED_CELL_BONUS)

        self._update_best_line(x, y, mover)
        self._check_blocked_line(mover.opponent())

        self.current_player = mover.opponent()
        return True

    def play(self, move):
        return self.make_move(move.x, move.y, player=move.player)

    def undo_move(self, x, y):
        """Remove the stone at (x, y). Returns False (no-op) if the cell is empty."""
        player = self.cells.pop((x, y), None)
        if player is None:
            return False
        self.weights.mark_free(x, y)
        self.weights.decrease(x, y, UNDO_DECAY)
        self.history.remove((x, y))

        if self._snapshots and self._snapshots[-1].pos == (x, y):
            snap = self._snapshots.pop()
            self.best_lines[Player.X], self.best_lines[Player.O] = snap.lines
            self.current_player = snap.current_player
            return True

        # Out-of-order undo: older snapshots may reference this stone.
        self._snapshots.clear()
        line = self.best_lines[player]
        if line is not None and line.contains(x, y):
            line = line.without((x, y))
            if line is not None:
                line = line.with_blocked(self._is_line_fully_blocked(line))
            self.best_lines[player] = line
        self.current_player = self.current_player.opponent()
        return True

    def clone(self):
        new_board = Board(self.rules)
        new_board.cells = dict(self.cells)
        new_board.current_player = self.current_player
        new_board.weights = self.weights.copy()
        # Line values are immutable, sharing them cannot alias state
        new_board.best_lines = dict(self.best_lines)
        new_board.history = self.history[:]
        new_board._snapshots = self._snapshots[:]
        return new_board

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.current_player == other.current_player and self.cells == other.cells

    __hash__ = None

    def _update_best_line(self, x, y, player):
        current = self.best_lines[player]

        if current is None or not current.is_active:
            fresh = self._find_best_line_from_cell(x, y, player)
            if fresh is not None:
                self.best_lines[player] = self._with_blocked_status(fresh)
            return

        if (x, y) in (current.front_extension, current.back_extension):
            if self._has_enemy_between(current, x, y, player.opponent()):
                self._replace_if_better(player, self._find_best_line_from_cell(x, y, player))
                return
            extended = self._absorb_run(current.extended((x, y), self.weights.weight(x, y)), (x, y))
            if extended.is_contiguous():
                self.best_lines[player] = self._with_blocked_status(extended)
            else:
                self._replace_if_better(player, self._find_best_line_from_cell(x, y, player))
            return

        self._replace_if_better(player, self._find_potential_line_from_cell(x, y, player))

    def _replace_if_better(self, player, candidate):
        if candidate is None:
            return
        candidate = self._with_blocked_status(candidate)
        if candidate.score() > self.best_lines[player].score():
            self.best_lines[player] = candidate

    def _absorb_run(self, line, cell):
        """After extending at `cell`, pull in own stones that now touch the line."""
        dx, dy = line.direction
        if cell == line.first:
            dx, dy = -dx, -dy
        x, y = cell[0] + dx, cell[1] + dy
        while self.cells.get((x, y)) == line.player and not line.contains(x, y):
            line = line.extended((x, y), self.weights.weight(x, y))
            x, y = x + dx, y + dy
        return line

    def _with_blocked_status(self, line):
        return line.with_blocked(self._is_line_fully_blocked(line))

    def _collect_run(self, x, y, dx, dy, player):
        """Contiguous own stones through (x, y) along (dx, dy), at most required_length - 1 steps each way."""
        reach = self.rules.required_length
        run = []
        for sign in (1, -1):
            start = 0 if sign == 1 else 1
            for i in range(start, reach):
                cx, cy = x + sign * i * dx, y + sign * i * dy
                if self.cells.get((cx, cy)) != player:
                    break
                run.append(((cx, cy), self.weights.weight(cx, cy)))
        if len(run) < 2:
            return None
        return Line.from_cells(player, run, (dx, dy), self.rules.required_length)

    def _find_best_line_from_cell(self, x, y, player):
        best = None
        for dx, dy in DIRECTIONS:
            line = self._collect_run(x, y, dx, dy, player)
            if line is not None and line.is_contiguous():
                if best is None or line.total_weight > best.total_weight:
                    best = line
        return best

    def _find_potential_line_from_cell(self, x, y, player):
        """
        Heaviest contiguous run through (x, y) among the directions whose
        gapped reach is free of opponent stones. Ties keep DIRECTIONS order.
        """
        opponent = player.opponent()
        best = None
        for dx, dy in DIRECTIONS:
            gathered = [((x, y), self.weights.weight(x, y))]
            for sign in (1, -1):
                for i in range(1, self.rules.required_length):
                    cx, cy = x + sign * i * dx, y + sign * i * dy
                    owner = self.cells.get((cx, cy))
                    if owner == opponent:
                        break
                    if owner == player:
                        gathered.append(((cx, cy), self.weights.weight(cx, cy)))
            if len(gathered) < 2:
                continue
            potential = Line.from_cells(player, gathered, (dx, dy), self.rules.required_length)
            if not self._is_potential_continuous(potential):
                continue
            line = self._collect_run(x, y, dx, dy, player)
            if line is not None and (best is None or line.total_weight > best.total_weight):
                best = line
        return best

    def _is_potential_continuous(self, line):
        """Gaps are allowed as long as none of them holds an opponent stone."""
        opponent = line.player.opponent()
        dx, dy = line.direction
        for (px, py), (cx, cy) in zip(line.cells, line.cells[1:]):
            steps = max(abs(cx - px), abs(cy - py))
            for step in range(1, steps):
                if self.cells.get((px + step * dx, py + step * dy)) == opponent:
                    return False
        return True

    def _has_enemy_between(self, line, x, y, opponent):
        nearest = min((line.first, line.last), key=lambda c: abs(c[0] - x) + abs(c[1] - y))
        dx = (x > nearest[0]) - (x < nearest[0])
        dy = (y > nearest[1]) - (y < nearest[1])
        cx, cy = nearest[0] + dx, nearest[1] + dy
        while (cx, cy) != (x, y):
            if self.cells.get((cx, cy)) == opponent:
                return True
            cx += dx
            cy += dy
        return False

    def _is_line_fully_blocked(self, line):
        if not self.rules.reset_on_full_block or line.length < 2:
            return False
        if not line.is_active:
            return True
        opponent = line.player.opponent()
        dx, dy = line.direction
        front = self._end_blocked(line.last, dx, dy, opponent)
        back = self._end_blocked(line.first, -dx, -dy, opponent)
        if self.rules.require_both_ends_blocked:
            return front and back
        return front or back

    def _end_blocked(self, cell, dx, dy, opponent):
        """Opponent seen before any empty cell within the lookahead past this end."""
        x, y = cell
        for i in range(1, self.rules.block_lookahead + 1):
            owner = self.cells.get((x + i * dx, y + i * dy))
            if owner is None:
                return False
            if owner == opponent:
                return True
        return False

    def _check_blocked_line(self, player):
        line = self.best_lines[player]
        if line is None or not line.is_active:
            return
        if self.rules.reset_on_full_block and self._is_line_fully_blocked(line):
            LOGGER.debug("%s line %s fully blocked; rebuilding", player.name, line.cells)
            self.best_lines[player] = line.deactivated()
            self._rebuild_best_line(player)

    def _rebuild_best_line(self, player):
        best = None
        for x, y in self.cells_of(player):
            line = self._find_best_line_from_cell(x, y, player)
            if line is not None and (best is None or line.total_weight > best.total_weight):
                best = line
        if best is None:
            self.best_lines[player] = None
            return
        best = self._with_blocked_status(best)
        if best.is_fully_blocked:
            best = best.deactivated()
        self.best_lines[player] = best
        LOGGER.debug("%s adopted rebuilt line %s (score %.2f)", player.name, best.cells, best.score())

    def best_line(self, player):
        return self.best_lines[player]

    def player_lines(self, player):
        line = self.best_lines[player]
        return [line] if line is not None else []

    def score_of(self, player):
        if not self.rules.single_line_scoring:
            return sum(line.score() for line in self.all_lines(player, min_length=2))
        line = self.best_lines[player]
        return line.score() if line is not None else 0.0

    def has_active_line(self, player):
        line = self.best_lines[player]
        return line is not None and line.is_active and not line.is_fully_blocked

    def is_close_to_win(self, player):
        """True when the active best line is one or two stones short."""
        if not self.has_active_line(player):
            return False
        missing = self.rules.required_length - self.best_lines[player].length
        return 0 < missing <= 2

    def line_completion(self, player):
        line = self.best_lines[player]
        if line is None:
            return 0.0
        return line.length / line.required_length

    def is_cell_in_best_line(self, x, y, player):
        line = self.best_lines[player]
        return line is not None and line.contains(x, y)

    def all_lines(self, player, min_length=3):
        """Every distinct maximal contiguous run of `player` with at least `min_length` stones."""
        seen = set()
        lines = []
        for x, y in self.cells_of(player):
            for dx, dy in DIRECTIONS:
                sx, sy = x, y
                while self.cells.get((sx - dx, sy - dy)) == player:
                    sx -= dx
                    sy -= dy
                if (sx, sy, dx, dy) in seen:
                    continue
                seen.add((sx, sy, dx, dy))
                run = []
                cx, cy = sx, sy
                while self.cells.get((cx, cy)) == player:
                    run.append(((cx, cy), self.weights.weight(cx, cy)))
                    cx += dx
                    cy += dy
                if len(run) >= min_length:
                    line = Line.from_cells(player, run, (dx, dy), self.rules.required_length)
                    lines.append(self._with_blocked_status(line))
        return lines

    def move_priority(self, x, y):
        return self.weights.weight(x, y) * MOVE_PRIORITY_SCALE

    def possible_moves(self):
        """Candidate moves for the side to move, highest priority first."""
        if self.move_count < 8:
            positions = self.weights.adjacent_to_occupied()
        elif self.move_count < 20:
            positions = self.weights.free_positions_near(2)
        else:
            positions = self.weights.free_positions_near(3)

        moves = [Move(x, y, self.current_player) for x, y in positions if self.is_empty(x, y)]
        moves.sort(key=lambda m: (-self.move_priority(m.x, m.y), max(abs(m.x), abs(m.y)), m.x, m.y))
        return moves

    def weighted_moves(self):
        return [(move, self.weights.weight(move.x, move.y)) for move in self.possible_moves()]

    def count_adjacent(self, x, y, player):
        return sum(1 for dx, dy in NEIGHBORS_8 if self.get_cell(x + dx, y + dy) == player)

    def has_run(self, player, length=None):
        """Brute-force scan for `length` physically contiguous stones of `player`."""
        length = length or self.rules.required_length
        for (x, y), owner in self.cells.items():
            if owner != player:
                continue
            for dx, dy in DIRECTIONS:
                if all(self.cells.get((x + i * dx, y + i * dy)) == player for i in range(1, length)):
                    return True
        return False

    def check_winner(self):
        """A physical run ends the game; the higher best-line score decides who won."""
        x_run = self.has_run(Player.X)
        o_run = self.has_run(Player.O)

        if not x_run and not o_run:
            nearby = self.weights.free_positions_near(1)
            if self.move_count >= self.rules.draw_move_ceiling and not any(self.is_empty(x, y) for x, y in nearby):
                return GameResult.DRAW
            return GameResult.NONE

        x_score = self.score_of(Player.X)
        o_score = self.score_of(Player.O)
        if x_score > o_score:
            return GameResult.X_WINS
        if o_score > x_score:
            return GameResult.O_WINS
        return GameResult.DRAW
