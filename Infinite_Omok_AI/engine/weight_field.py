"""Sparse heuristic weight map over the unbounded grid, plus occupancy bookkeeping."""

import math

from .types import NEIGHBORS_8


MIN_WEIGHT = 0.1
OCCUPIED_FACTOR = 0.3
NEIGHBOR_BOOST = 0.5


def default_weight(x, y, uniform=False):
    """Distance decay from the origin with axis/diagonal and near-origin bonuses."""
    if uniform:
        return 1.0
    distance = math.sqrt(x * x + y * y)
    weight = max(10.0 / (1.0 + distance), 0.5)

    if x == 0 or y == 0 or abs(x) == abs(y):
        weight *= 1.2

    if x == 0 and y == 0:
        weight *= 2.0
    elif (abs(x) == 1 and y == 0) or (x == 0 and abs(y) == 1):
        weight *= 1.5

    return round(weight, 2)


class WeightField:
    def __init__(self, occupied=(), uniform=False):
        self.uniform = uniform
        self.occupied: set[tuple[int, int]] = set(occupied)
        self.weights: dict[tuple[int, int], float] = {}
        self.bounds = None  # (min_x, max_x, min_y, max_y) of occupied cells
        self._recalculate_bounds()

    def copy(self):
        clone = WeightField(self.occupied, uniform=self.uniform)
        clone.weights = dict(self.weights)
        return clone

    def weight(self, x, y):
        value = self.weights.get((x, y))
        if value is None:
            value = default_weight(x, y, self.uniform)
            self.weights[(x, y)] = value
        return value

    def set_weight(self, x, y, value):
        self.weights[(x, y)] = max(value, MIN_WEIGHT)

    def increase(self, x, y, amount=1.0):
        self.set_weight(x, y, self.weight(x, y) + amount)

    def decrease(self, x, y, amount=1.0):
        self.set_weight(x, y, self.weight(x, y) - amount)

    def is_occupied(self, x, y):
        return (x, y) in self.occupied

    def mark_occupied(self, x, y):
        if (x, y) in self.occupied:
            return
        self.occupied.add((x, y))
        self._extend_bounds(x, y)
        self.set_weight(x, y, self.weight(x, y) * OCCUPIED_FACTOR)
        for dx, dy in NEIGHBORS_8:
            self.increase(x + dx, y + dy, NEIGHBOR_BOOST)

    def mark_free(self, x, y):
        if (x, y) not in self.occupied:
            return
        self.occupied.discard((x, y))
        self._recalculate_bounds()
        self.set_weight(x, y, default_weight(x, y, self.uniform))

    def free_positions_near(self, padding=2):
        """Empty cells in the occupied bounding box grown by `padding` (7x7 at the origin when empty)."""
        if self.bounds is None:
            min_x, max_x, min_y, max_y = -3, 3, -3, 3
        else:
            min_x, max_x, min_y, max_y = self.bounds
            min_x -= padding
            max_x += padding
            min_y -= padding
            max_y += padding
        for x in range(min_x, max_x + 1):
            for y in range(min_y, max_y + 1):
                if (x, y) not in self.occupied:
                    yield (x, y)

    def adjacent_to_occupied(self):
        """Empty 8-neighborhood of every stone; the 3x3 around the origin on an empty field."""
        if not self.occupied:
            return {(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)}
        adjacent = set()
        for x, y in self.occupied:
            for dx, dy in NEIGHBORS_8:
                pos = (x + dx, y + dy)
                if pos not in self.occupied:
                    adjacent.add(pos)
        return adjacent

    def _extend_bounds(self, x, y):
        if self.bounds is None:
            self.bounds = (x, x, y, y)
            return
        min_x, max_x, min_y, max_y = self.bounds
        self.bounds = (min(min_x, x), max(max_x, x), min(min_y, y), max(max_y, y))

    def _recalculate_bounds(self):
        if not self.occupied:
            self.bounds = None
            return
        xs = [x for x, _ in self.occupied]
        ys = [y for _, y in self.occupied]
        self.bounds = (min(xs), max(xs), min(ys), max(ys))
