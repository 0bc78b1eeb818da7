"""
评估器

在环境中评估智能体表现
"""
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field
import logging

import numpy as np

from .metrics import RunningStats

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    """评估结果"""
    win_rate: float
    draw_rate: float
    loss_rate: float
    avg_reward: float
    avg_cards: float
    games_played: int
    extra_stats: Dict[str, float] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"EvalResult(win_rate={self.win_rate:.2%}, "
            f"draw_rate={self.draw_rate:.2%}, "
            f"avg_reward={self.avg_reward:.2f}, "
            f"games={self.games_played})"
        )


class Agent:
    """智能体基类"""

    def __init__(self, name: str = "agent"):
        self.name = name

    def act(self, obs: Dict[str, Any], legal_actions: List[int]) -> int:
        """选择动作"""
        raise NotImplementedError

    def reset(self):
        """重置状态"""
        pass


class RandomAgent(Agent):
    """随机智能体"""

    def __init__(self, name: str = "random", seed: Optional[int] = None):
        super().__init__(name)
        self.rng = np.random.default_rng(seed)

    def act(self, obs: Dict[str, Any], legal_actions: List[int]) -> int:
        if not legal_actions:
            return 0
        idx = int(self.rng.integers(len(legal_actions)))
        return legal_actions[idx]


class Evaluator:
    """
    评估器

    让智能体在环境中对阵环境内置的对手
    """

    def __init__(self, env_fn: Callable):
        self.env_fn = env_fn

    def evaluate(
        self,
        agent: Agent,
        n_games: int = 100,
        seed: Optional[int] = None,
        verbose: bool = False,
    ) -> EvalResult:
        """
        评估智能体

        Args:
            agent: 待评估智能体
            n_games: 游戏数量
            seed: 第一局的随机种子
            verbose: 是否输出详情

        Returns:
            评估结果
        """
        env = self.env_fn()

        wins = 0
        draws = 0
        losses = 0
        rewards = RunningStats()
        cards = RunningStats()
        # 仅在环境经 RecordEpisodeStatistics 包装时可用
        flips = RunningStats()
        rerolls = RunningStats()

        for game_idx in range(n_games):
            agent.reset()
            obs, info = env.reset(seed=seed if game_idx == 0 else None)
            done = False
            episode_reward = 0.0

            while not done:
                action = agent.act(obs, env.unwrapped.get_legal_actions())
                obs, reward, terminated, truncated, info = env.step(action)
                done = terminated or truncated
                episode_reward += reward

            winner = info.get("winner")
            agent_color = env.unwrapped.agent_color
            if winner == "draw":
                draws += 1
            elif winner == agent_color.value:
                wins += 1
            else:
                losses += 1

            rewards.update(episode_reward)
            cards.update(info["score"][agent_color.value])
            episode = info.get("episode")
            if episode is not None:
                flips.update(episode["flips"])
                rerolls.update(episode["rerolls"])

            if verbose and (game_idx + 1) % 10 == 0:
                logger.info(f"Game {game_idx + 1}/{n_games}, Win rate: {wins/(game_idx+1):.2%}")

        env.close()

        return EvalResult(
            win_rate=wins / n_games if n_games > 0 else 0.0,
            draw_rate=draws / n_games if n_games > 0 else 0.0,
            loss_rate=losses / n_games if n_games > 0 else 0.0,
            avg_reward=rewards.mean,
            avg_cards=cards.mean,
            games_played=n_games,
            extra_stats={
                "reward_std": rewards.std,
                "cards_std": cards.std,
                "avg_flips": flips.mean,
                "avg_rerolls": rerolls.mean,
            },
        )
