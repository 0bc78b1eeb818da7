"""
奖励函数

支持两种奖励设计:
- 终局奖励 (sparse)
- 过程奖励 (shaped): 终局奖励 + 每步棋盘归属变化
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from core.cards import Color
from core.state import GameState


class RewardType(Enum):
    """奖励类型"""
    SPARSE = "sparse"      # 仅终局奖励
    SHAPED = "shaped"      # 过程奖励


@dataclass
class RewardConfig:
    """奖励配置"""
    reward_type: RewardType = RewardType.SPARSE
    win_reward: float = 1.0
    lose_reward: float = -1.0
    draw_reward: float = 0.0
    capture_weight: float = 0.1   # 每张净增卡牌的奖励


def ownership_margin(score: Dict[Color, int], player: Color) -> int:
    """己方卡牌数减对方卡牌数"""
    return score[player] - score[player.other]


class RewardCalculator:
    """
    奖励计算器

    根据配置计算不同类型的奖励
    """

    def __init__(self, config: Optional[RewardConfig] = None):
        self.config = config or RewardConfig()

    def compute(
        self,
        state: GameState,
        player: Color,
        prev_score: Optional[Dict[Color, int]] = None,
    ) -> float:
        """
        计算奖励

        Args:
            state: 当前状态
            player: 计算奖励的玩家视角
            prev_score: 上一步的棋盘计数 (用于 shaped 奖励)

        Returns:
            奖励值
        """
        reward = 0.0

        if self.config.reward_type == RewardType.SHAPED and prev_score is not None:
            delta = ownership_margin(state.score(), player) - ownership_margin(prev_score, player)
            reward += self.config.capture_weight * delta

        if state.is_finished:
            reward += self._terminal_reward(state, player)

        return reward

    def _terminal_reward(self, state: GameState, player: Color) -> float:
        winner = state.winner
        if winner is None:
            return self.config.draw_reward
        if winner is player:
            return self.config.win_reward
        return self.config.lose_reward
