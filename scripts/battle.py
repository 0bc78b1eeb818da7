#!/usr/bin/env python3
"""
单次战斗脚本

Usage:
    python scripts/battle.py 1M23 2P34
    python scripts/battle.py 1M23 2P34 explain
    python scripts/battle.py FP00 0P0F --seed 42
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

import numpy as np

from core.battle import BattleResult, explain_battle, battle
from core.codec import parse_card

logger = logging.getLogger(__name__)

USAGE = "Usage: battle card_1 card_2 (explain)"
HINT = "Specify two cards (e.g. 1M23 2P34). Attacker first, defender second."

RESULT_TEXT = {
    BattleResult.ATTACKER: "Attacker wins!",
    BattleResult.DEFENDER: "Defender wins!",
    BattleResult.DRAW: "Draw!",
}


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Tetra Master Battle", add_help=True)

    parser.add_argument("attacker", nargs="?", help="Attacker card code, e.g. 1M23")
    parser.add_argument("defender", nargs="?", help="Defender card code, e.g. 2P34")
    parser.add_argument("mode", nargs="?", help="'explain' to narrate the battle")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.attacker is None or args.defender is None:
        print(USAGE)
        print(HINT)
        return 1

    attacker = parse_card(args.attacker)
    if attacker is None:
        print("First card (attacker) was invalid.")
        return 1

    defender = parse_card(args.defender)
    if defender is None:
        print("Second card (defender) was invalid.")
        return 1

    rng = np.random.default_rng(args.seed)
    explain = args.mode is not None and args.mode.lower() == "explain"

    if explain:
        result, lines = explain_battle(attacker, defender, rng)
        for line in lines:
            print(line)
    else:
        if args.mode is not None:
            logger.warning("Ignoring unknown mode: %s", args.mode)
        result = battle(attacker, defender, rng)

    print(RESULT_TEXT[result])
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
    )
    sys.exit(main())
