"""Entry point for infinite-field AI matches. Load config, wire players, start InfiniteGame."""

import logging
from dataclasses import replace

from .InfiniteGame import InfiniteGame
from .Player import SolverPlayer
from .engine.rules import RuleConfig, load_rules, load_settings
from .engine.types import Player
from .utils.cli import parse_args
from .utils.logger import log_event


def build_rules(args, settings_path):
    if args.simple_rules:
        rules = RuleConfig.simple()
        if args.required_length:
            rules = replace(rules, required_length=args.required_length)
        return rules
    return load_rules(settings_path, required_length=args.required_length)


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    settings = load_settings(args.settings)
    solver_settings = settings.get("solver") or {}
    match_settings = settings.get("match") or {}

    rules = build_rules(args, args.settings)
    move_timeout = args.timeout or match_settings.get("move_timeout_seconds", 5)
    max_moves = args.max_moves or match_settings.get("max_moves", 200)
    time_budget_ms = args.time_budget_ms or solver_settings.get("time_budget_ms", 1000)
    candidate_limit = solver_settings.get("candidate_limit", 15)
    extension_radius = solver_settings.get("extension_radius", 10)

    log_event(rules.describe())

    players = {
        side: SolverPlayer(
            side,
            time_budget_ms=time_budget_ms,
            candidate_limit=candidate_limit,
            extension_radius=extension_radius,
        )
        for side in (Player.X, Player.O)
    }

    game = InfiniteGame(
        rules=rules,
        move_timeout=move_timeout,
        x_player=players[Player.X],
        o_player=players[Player.O],
        logger=log_event,
        max_moves=max_moves,
    )
    result = game.play()
    outcome = {"X_WINS": "X wins", "O_WINS": "O wins", "DRAW": "Draw"}
    print(outcome.get(result.name, "Unknown result"))
    return result


if __name__ == "__main__":
    main()
