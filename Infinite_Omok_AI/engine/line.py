"""Immutable best-line value: a contiguous colinear run of one player's stones."""

from dataclasses import dataclass, replace

from .types import Player


@dataclass(frozen=True)
class Line:
    player: Player
    cells: tuple[tuple[int, int], ...]
    weights: tuple[float, ...]  # weight of each cell at the moment it joined
    direction: tuple[int, int]
    required_length: int
    is_active: bool = True
    is_fully_blocked: bool = False

    @classmethod
    def from_cells(cls, player, cells_with_weights, direction, required_length):
        """Build a line with cells ordered along `direction`."""
        dx, dy = direction
        ordered = sorted(cells_with_weights, key=lambda cw: cw[0][0] * dx + cw[0][1] * dy)
        return cls(
            player=player,
            cells=tuple(c for c, _ in ordered),
            weights=tuple(w for _, w in ordered),
            direction=direction,
            required_length=required_length,
        )

    @property
    def length(self):
        return len(self.cells)

    @property
    def total_weight(self):
        return sum(self.weights)

    @property
    def is_complete(self):
        return self.length >= self.required_length

    @property
    def first(self):
        return self.cells[0]

    @property
    def last(self):
        return self.cells[-1]

    @property
    def front_extension(self):
        x, y = self.last
        return (x + self.direction[0], y + self.direction[1])

    @property
    def back_extension(self):
        x, y = self.first
        return (x - self.direction[0], y - self.direction[1])

    def contains(self, x, y):
        return (x, y) in self.cells

    def score(self):
        if not self.is_active or self.is_fully_blocked:
            return 0.0
        return self.total_weight

    def is_contiguous(self):
        dx, dy = self.direction
        for (px, py), (cx, cy) in zip(self.cells, self.cells[1:]):
            if (cx - px, cy - py) != (dx, dy):
                return False
        return len(set(self.cells)) == len(self.cells)

    def extended(self, cell, weight):
        """Return a new line with `cell` appended at whichever end it extends."""
        if cell == self.front_extension:
            return replace(self, cells=self.cells + (cell,), weights=self.weights + (weight,))
        if cell == self.back_extension:
            return replace(self, cells=(cell,) + self.cells, weights=(weight,) + self.weights)
        raise ValueError(f"{cell} does not extend line {self.cells}")

    def without(self, cell):
        """Drop `cell`; None when fewer than two cells remain.

        The direction is re-derived from the remaining end cells. Removing an
        interior cell splits the run, so the longer contiguous part is kept.
        """
        if cell not in self.cells:
            return self
        idx = self.cells.index(cell)
        left = list(zip(self.cells[:idx], self.weights[:idx]))
        right = list(zip(self.cells[idx + 1:], self.weights[idx + 1:]))
        kept = right if len(right) > len(left) else left
        if len(kept) < 2:
            return None
        (fx, fy), _ = kept[0]
        (lx, ly), _ = kept[-1]
        direction = (_sign(lx - fx), _sign(ly - fy))
        return replace(
            self,
            cells=tuple(c for c, _ in kept),
            weights=tuple(w for _, w in kept),
            direction=direction,
        )

    def deactivated(self):
        return replace(self, is_active=False, is_fully_blocked=True)

    def with_blocked(self, blocked):
        return replace(self, is_fully_blocked=blocked)

    def __str__(self):
        return (
            f"{self.player.name} Line: {self.length}/{self.required_length} cells, "
            f"Weight: {self.total_weight:.1f}, Blocked: {self.is_fully_blocked}, Active: {self.is_active}"
        )


def _sign(v):
    return (v > 0) - (v < 0)
