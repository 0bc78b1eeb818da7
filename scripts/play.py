#!/usr/bin/env python3
"""
对战脚本

Usage:
    python scripts/play.py --mode watch  # 观看随机对战
    python scripts/play.py --mode play   # 与随机对手对战 (玩家为蓝方)
    python scripts/play.py --mode watch --games 3 --seed 7 --delay 0
"""
import argparse
import logging
import sys
from pathlib import Path
import time
from typing import Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from core.cards import Color
from core.config import GameConfig
from core.state import GameState, Move
from env.observation import ObservationBuilder
from env.tetra_env import decode_action, encode_action
from evaluation import RandomAgent

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Tetra Master Play")

    parser.add_argument(
        "--mode",
        type=str,
        default="watch",
        choices=["watch", "play"],
        help="Mode: watch random agents or play against one",
    )
    parser.add_argument("--delay", type=float, default=1.0, help="Delay between moves")
    parser.add_argument("--games", type=int, default=1, help="Number of games")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--hand-size", type=int, default=5, help="Cards per hand")

    return parser.parse_args()


def describe_move(player: Color, state: GameState, move: Move) -> str:
    card = state.get_hand(player)[move.hand_index]
    return f"{player.value} plays {card} at ({move.row}, {move.column})"


def describe_report(report) -> str:
    """战斗报告转字符串"""
    parts = [f"{len(report.battles)} battles"]
    if report.flips:
        parts.append(f"{len(report.flips)} flips")
    if report.lost:
        parts.append("placed card lost")
    if report.draws:
        parts.append(f"{report.draws} re-rolls")
    return ", ".join(parts)


def result_text(state: GameState) -> str:
    winner = state.winner
    if winner is None:
        return "Draw"
    return f"{winner.value.capitalize()} wins"


def watch_game(args, config: GameConfig):
    """观看随机对战"""
    agents = {
        Color.BLUE: RandomAgent("Random_blue", seed=args.seed),
        Color.RED: RandomAgent("Random_red", seed=None if args.seed is None else args.seed + 1),
    }
    builder = ObservationBuilder(config)

    for game_idx in range(args.games):
        print(f"\n{'='*40}")
        print(f"Game {game_idx + 1}/{args.games}")
        print("=" * 40)

        seed = None if args.seed is None else args.seed + game_idx
        state = GameState.initial(seed=seed, config=config)

        while not state.is_finished:
            print(state.render())
            player = state.current_player
            obs = builder.build(state, player).to_dict()
            legal_actions = [encode_action(move) for move in state.get_legal_actions()]
            move = decode_action(agents[player].act(obs, legal_actions))

            print(f"\n{describe_move(player, state, move)}")
            report = state.play(move)
            print(describe_report(report))

            time.sleep(args.delay)

        print("\n" + state.render())
        print("=" * 40)
        print(f"游戏结束! {result_text(state)}")
        print(f"总步数: {state.step_count}")
        print("=" * 40)


def read_move(state: GameState) -> Optional[Move]:
    """读取玩家输入: 手牌编号 行 列，输入 q 返回 None"""
    hand = state.get_hand(state.current_player)
    print("\n手牌:")
    for i, card in enumerate(hand):
        print(f"  {i}: {card}")

    while True:
        choice = input("\n请输入 '手牌编号 行 列' (或输入 'q' 退出): ").strip()
        if choice.lower() == "q":
            return None
        try:
            hand_index, row, column = (int(x) for x in choice.split())
        except ValueError:
            print("请输入三个数字")
            continue
        move = Move(hand_index, row, column)
        if state.is_legal(move):
            return move
        print("无效选择，请重试")


def play_game(args, config: GameConfig):
    """与随机对手对战"""
    opponent = RandomAgent("AI", seed=args.seed)
    builder = ObservationBuilder(config)

    for game_idx in range(args.games):
        print(f"\n{'='*40}")
        print(f"Game {game_idx + 1}/{args.games}")
        print("你是蓝方!")
        print("=" * 40)

        seed = None if args.seed is None else args.seed + game_idx
        state = GameState.initial(seed=seed, config=config)

        while not state.is_finished:
            print(state.render())
            player = state.current_player

            if player is Color.BLUE:
                move = read_move(state)
                if move is None:
                    print("退出游戏")
                    return
            else:
                obs = builder.build(state, player).to_dict()
                legal_actions = [encode_action(m) for m in state.get_legal_actions()]
                move = decode_action(opponent.act(obs, legal_actions))
                time.sleep(args.delay)

            print(f"\n{describe_move(player, state, move)}")
            report = state.play(move)
            print(describe_report(report))

        print("\n" + state.render())
        print("=" * 40)
        if state.winner is Color.BLUE:
            print("恭喜你赢了!")
        elif state.winner is Color.RED:
            print("你输了!")
        print(result_text(state))
        print("=" * 40)


def main():
    args = parse_args()
    config = GameConfig(hand_size=args.hand_size)

    print("=" * 40)
    print("Tetra Master")
    print("=" * 40)

    if args.mode == "watch":
        watch_game(args, config)
    elif args.mode == "play":
        play_game(args, config)


if __name__ == "__main__":
    main()
