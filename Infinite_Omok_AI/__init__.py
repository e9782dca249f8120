"""Infinite_Omok_AI package exports."""

from .Board import Board
from .InfiniteGame import InfiniteGame
from .Player import BasePlayer, SolverPlayer
from .ai.solver import Solver, find_best_move
from .engine.line import Line
from .engine.rules import RuleConfig, load_rules
from .engine.types import GameResult, Move, Player
from .engine.weight_field import WeightField

# Subpackages for rules/types, AI move selection, and helpers
from . import ai, engine, utils

__all__ = [
    "Board",
    "InfiniteGame",
    "BasePlayer",
    "SolverPlayer",
    "Solver",
    "find_best_move",
    "Line",
    "RuleConfig",
    "load_rules",
    "GameResult",
    "Move",
    "Player",
    "WeightField",
    "ai",
    "engine",
    "utils",
]
