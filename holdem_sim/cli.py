#!/usr/bin/env python3
"""
Command line equity calculator.

Examples:
    holdem-sim --player AA --player KK --iterations 20000
    holdem-sim --player "AA,KK,AKs" --player preset:loose --board Kh7d2c
    holdem-sim --player 7h8h --player AKo,AKs --board AhKhQh2c5h --json
    holdem-sim --ranking 20
"""

import argparse
import json
import logging
import sys

from .engine.range_parser import split_range
from .engine.starting_hands import (
    TOTAL_STARTING_HANDS,
    calculate_hand_strength,
    starting_hand_ranking,
    top_percent_by_combinations,
)
from .errors import HoldemSimError
from .presets import list_presets, preset_range
from .simulator import Player, SimulationConfig, Simulator, TieCredit

logger = logging.getLogger(__name__)


def resolve_range(text: str) -> list[str]:
    """Turn a --player argument into range tokens."""
    if text.startswith("preset:"):
        return preset_range(text.split(":", 1)[1])
    if text.startswith("top:"):
        return top_percent_by_combinations(float(text.split(":", 1)[1]))
    return split_range(text)


def print_ranking(limit: int) -> None:
    ranking = starting_hand_ranking()
    print(f"{'#':>4}  {'Hand':<5} {'Score':>6}")
    print("-" * 20)
    for i, hand in enumerate(ranking[:limit], start=1):
        print(f"{i:>4}  {hand:<5} {calculate_hand_strength(hand).score:>6}")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Monte Carlo Hold'em equity calculator")
    parser.add_argument("--player", action="append", default=[], metavar="RANGE",
                        help="Player range: tokens (\"AA,AKs,7h8h\"), preset:NAME or top:PCT. Repeat per player")
    parser.add_argument("--board", default="", help="Fixed board cards, e.g. Kh7d2c")
    parser.add_argument("--iterations", type=int, default=10000, help="Number of deals to attempt")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible runs")
    parser.add_argument("--tie-credit", choices=[t.value for t in TieCredit], default=TieCredit.SPLIT.value,
                        help="split: 1/k per k-way tie; half: every tie counts half")
    parser.add_argument("--kickers", action="store_true", help="Break ties on kickers")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--ranking", type=int, nargs="?", const=TOTAL_STARTING_HANDS, metavar="N",
                        help="Print the top N starting hands and exit")
    parser.add_argument("--presets", action="store_true", help="List range presets and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.ranking is not None:
        print_ranking(args.ranking)
        return 0

    if args.presets:
        for name in list_presets():
            print(name)
        return 0

    config = SimulationConfig(
        iterations=args.iterations,
        seed=args.seed,
        tie_credit=TieCredit(args.tie_credit),
        resolve_kickers=args.kickers,
    )

    try:
        players = []
        for i, text in enumerate(args.player, start=1):
            tokens = resolve_range(text)
            players.append(Player.from_range(f"p{i}", tokens, name=f"Player {i}"))
            logger.debug("Player %d: %d tokens, %d combos", i, len(tokens), len(players[-1].hands))
        result = Simulator(config).run(players, board=args.board)
    except (HoldemSimError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
