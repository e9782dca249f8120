"""CLI options for rules, time budget, and settings path."""


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Infinite-field tic-tac-toe AI match (best-line scoring)")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--timeout", type=float, help="Seconds per move (default from settings)")
    parser.add_argument("--time-budget-ms", type=int, help="Solver soft time budget in milliseconds")
    parser.add_argument("--required-length", type=int, help="Stones in a row that end the game")
    parser.add_argument("--max-moves", type=int, help="Stop the match as a draw after this many moves")
    parser.add_argument("--simple-rules", action="store_true", help="Flat cell weights, blocked lines keep scoring")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging of solver layers and line resets")
    return parser.parse_args(argv)
