"""Core value types shared by the board, rules, and solver."""

from dataclasses import dataclass
from enum import Enum, IntEnum


# Horizontal, vertical, diagonal up-right, diagonal down-right
DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))

NEIGHBORS_8 = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Player(IntEnum):
    # Same encoding as the cell values: -1 (X), 0 (empty), 1 (O)
    NONE = 0
    X = -1
    O = 1

    def opponent(self) -> "Player":
        return Player(-int(self))


class GameResult(Enum):
    NONE = "none"
    X_WINS = "x_wins"
    O_WINS = "o_wins"
    DRAW = "draw"

    @classmethod
    def win_for(cls, player: Player) -> "GameResult":
        if player == Player.X:
            return cls.X_WINS
        if player == Player.O:
            return cls.O_WINS
        raise ValueError("only X or O can win")


@dataclass(frozen=True)
class Move:
    x: int
    y: int
    player: Player

    @property
    def pos(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __str__(self):
        return f"({self.x}, {self.y}) - {self.player.name}"
