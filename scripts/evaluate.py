#!/usr/bin/env python3
"""
评估脚本

Usage:
    python scripts/evaluate.py --odds 1M23 2P34 --trials 10000
    python scripts/evaluate.py --games 100 --agent-color red
    python scripts/evaluate.py --tournament --agents 3 --games 20
"""
import argparse
import logging
import sys
from pathlib import Path
import json

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

import numpy as np

from core.codec import decode_card
from core.config import GameConfig
from env import TetraMasterEnv, wrap_env
from evaluation import (
    Evaluator,
    RandomAgent,
    Arena,
    estimate_battle_odds,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Tetra Master Evaluation")

    # 模式
    parser.add_argument(
        "--odds", nargs=2, metavar=("ATTACKER", "DEFENDER"),
        help="Estimate battle odds for two card codes",
    )
    parser.add_argument("--tournament", action="store_true", help="Run round robin")

    # 评估参数
    parser.add_argument("--trials", type=int, default=10000, help="Battle trials")
    parser.add_argument("--games", type=int, default=100, help="Number of games")
    parser.add_argument("--agents", type=int, default=2, help="Agents in tournament")
    parser.add_argument(
        "--agent-color", type=str, default="blue", choices=["blue", "red"],
        help="Side controlled by the evaluated agent",
    )
    parser.add_argument(
        "--reward-type", type=str, default="sparse", choices=["sparse", "shaped"],
    )

    # 其他
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, help="Output file for results")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args()


def write_output(path: str, payload: dict):
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Results saved to {path}")


def evaluate_odds(args):
    """估计两张卡的战斗胜率"""
    attacker = decode_card(args.odds[0])
    defender = decode_card(args.odds[1])

    odds = estimate_battle_odds(
        attacker, defender, n_trials=args.trials, rng=np.random.default_rng(args.seed),
    )

    logger.info("=" * 50)
    logger.info(f"Battle Odds: {attacker} vs {defender}")
    logger.info("=" * 50)
    logger.info(f"Attacker: {odds.attacker_rate:.2%}")
    logger.info(f"Defender: {odds.defender_rate:.2%}")
    logger.info(f"Draw: {odds.draw_rate:.2%}")
    logger.info("=" * 50)

    if args.output:
        write_output(args.output, {
            "attacker": str(attacker),
            "defender": str(defender),
            **odds.to_dict(),
        })


def evaluate_single(args):
    """随机智能体对阵环境内置对手"""
    logger.info(f"Evaluating random agent as {args.agent_color}")

    evaluator = Evaluator(
        env_fn=lambda: wrap_env(TetraMasterEnv(
            reward_type=args.reward_type, agent_color=args.agent_color,
        )),
    )
    result = evaluator.evaluate(
        agent=RandomAgent("random", seed=args.seed),
        n_games=args.games,
        seed=args.seed,
        verbose=args.verbose,
    )

    logger.info("=" * 50)
    logger.info("Evaluation Results")
    logger.info("=" * 50)
    logger.info(f"Win Rate: {result.win_rate:.2%}")
    logger.info(f"Draw Rate: {result.draw_rate:.2%}")
    logger.info(f"Loss Rate: {result.loss_rate:.2%}")
    logger.info(f"Average Reward: {result.avg_reward:.2f}")
    logger.info(f"Average Cards: {result.avg_cards:.2f}")
    logger.info(f"Average Flips: {result.extra_stats['avg_flips']:.2f}")
    logger.info(f"Average Re-rolls: {result.extra_stats['avg_rerolls']:.2f}")
    logger.info("=" * 50)

    if args.output:
        write_output(args.output, {
            "win_rate": result.win_rate,
            "draw_rate": result.draw_rate,
            "loss_rate": result.loss_rate,
            "avg_reward": result.avg_reward,
            "avg_cards": result.avg_cards,
            "games_played": result.games_played,
        })


def run_tournament(args):
    """随机智能体循环赛"""
    agents = [
        RandomAgent(f"random_{i}", seed=None if args.seed is None else args.seed + i)
        for i in range(args.agents)
    ]
    arena = Arena(config=GameConfig(), seed=args.seed)
    result = arena.round_robin(agents, games_per_match=args.games)

    logger.info(str(result))

    if args.output:
        write_output(args.output, {
            "total_games": result.total_games,
            "standings": result.standings,
        })


def main():
    args = parse_args()

    if args.odds:
        evaluate_odds(args)
    elif args.tournament:
        run_tournament(args)
    else:
        evaluate_single(args)


if __name__ == "__main__":
    main()
