"""Composite move priority and line scoring helpers (pure functions of a board snapshot)."""

import math

from ..engine.types import DIRECTIONS


WEIGHT_SCALE = 100
ADJACENT_OWN_BONUS = 50
ORIGIN_BONUS = 1000
ORTHOGONAL_BONUS = 500
DIAGONAL_BONUS = 300

# (max euclidean distance from origin, bonus) for cells outside the origin's 3x3
DISTANCE_BONUSES = ((2.0, 60), (3.0, 40), (4.0, 20), (5.0, 10))

LINE_LOOKAHEAD = 4


def position_bonus(x, y):
    """Origin > orthogonal neighbours > diagonal neighbours > decaying distance band."""
    if x == 0 and y == 0:
        return ORIGIN_BONUS
    if abs(x) + abs(y) == 1:
        return ORTHOGONAL_BONUS
    if abs(x) == 1 and abs(y) == 1:
        return DIAGONAL_BONUS
    distance = math.sqrt(x * x + y * y)
    for limit, bonus in DISTANCE_BONUSES:
        if distance <= limit:
            return bonus
    return 0


def line_potential(board, x, y, player):
    """
    Score the four axes through (x, y) for `player`: own stones and empty
    cells within LINE_LOOKAHEAD both ways, with step bonuses at 3 and 4 stones.
    """
    potential = 0
    for dx, dy in DIRECTIONS:
        count = 0
        empty = 0
        for i in range(-LINE_LOOKAHEAD, LINE_LOOKAHEAD + 1):
            if i == 0:
                continue
            owner = board.cells.get((x + i * dx, y + i * dy))
            if owner == player:
                count += 1
            elif owner is None:
                empty += 1
        if count >= 2:
            potential += count * 25 + empty * 10
        if count >= 3:
            potential += 50
        if count >= 4:
            potential += 150
    return potential


def composite_priority(board, move):
    """Weight-scaled desirability plus position, own-adjacency and line-potential bonuses."""
    mover = board.current_player
    priority = board.weights.weight(move.x, move.y) * WEIGHT_SCALE
    priority += position_bonus(move.x, move.y)
    priority += board.count_adjacent(move.x, move.y, mover) * ADJACENT_OWN_BONUS
    priority += line_potential(board, move.x, move.y, mover)
    return priority


def blocking_value(board, move, opponent):
    """Reward touching any of the opponent's tracked lines, scaled by line length."""
    value = 0
    for line in board.player_lines(opponent):
        if line.length < 2:
            continue
        for cx, cy in line.cells:
            if max(abs(cx - move.x), abs(cy - move.y)) == 1:
                value += 100 * line.length
                break
    return value


def own_line_value(board, move, player):
    """Length of the mover's tracked lines after simulating the move on a clone."""
    test_board = board.clone()
    test_board.make_move(move.x, move.y, player=player)
    value = 0
    for line in test_board.player_lines(player):
        value += line.length * 50
        if line.length >= 4:
            value += 200
        if line.length >= 3:
            value += 100
    return value


def line_extensions(line, required_length, radius=10):
    """
    Cells that would grow `line`: the two ends when it has a direction,
    a radial scan around a lone stone, or the 8-neighbourhood otherwise.
    Only cells within `radius` of the origin (Chebyshev) are returned.
    """
    cells = []
    if line.length == 1:
        x, y = line.first
        for dx, dy in DIRECTIONS:
            for i in range(1, required_length):
                cells.append((x + i * dx, y + i * dy))
                cells.append((x - i * dx, y - i * dy))
    elif line.direction != (0, 0):
        cells.append(line.back_extension)
        cells.append(line.front_extension)
    else:
        for x, y in line.cells:
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if dx or dy:
                        cells.append((x + dx, y + dy))

    unique = list(dict.fromkeys(cells))
    return [(x, y) for x, y in unique if abs(x) <= radius and abs(y) <= radius]
