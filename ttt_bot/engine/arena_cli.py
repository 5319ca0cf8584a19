"""CLI for running bot-vs-bot arena matches.

Usage::

    ttt-bot-arena --p1 minimax --p2 random --games 50

    # Fixed seat order, reproducible random opponent
    python -m ttt_bot.engine.arena_cli --p1 random --p2 minimax \\
        --games 20 --seed 7 --no-alternate
"""

from __future__ import annotations

import argparse
import sys

from ttt_bot.engine.arena import run_arena
from ttt_bot.engine.bot_strategy import get_strategy, list_strategies


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bot-vs-Bot Arena")
    parser.add_argument("--games", type=int, default=50)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--p1", default="minimax", help="Strategy for player 1")
    parser.add_argument("--p2", default="random", help="Strategy for player 2")
    parser.add_argument(
        "--alternate",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Swap X and O between games",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    for name in (args.p1, args.p2):
        if name not in list_strategies():
            print(
                f"Unknown strategy: {name}. Available: {', '.join(list_strategies())}",
                file=sys.stderr,
            )
            return 1

    p1_label, p2_label = args.p1, args.p2
    # Handle same-label case
    if p1_label == p2_label:
        p1_label = f"{p1_label}_1"
        p2_label = f"{p2_label}_2"

    names = {
        p1_label: get_strategy(args.p1, seed=args.seed),
        p2_label: get_strategy(args.p2, seed=args.seed + 1),
    }

    print(f"Arena: {' vs '.join(names.keys())}, {args.games} games")
    print()

    result = run_arena(
        strategies=names,
        num_games=args.games,
        alternate_seats=args.alternate,
        progress_callback=lambda done, total: print(
            f"\r  Game {done}/{total}", end="", flush=True
        ),
    )
    print()
    print()
    print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
