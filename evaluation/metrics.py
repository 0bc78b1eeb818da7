"""
评估指标

战斗胜率估计与在线统计
"""
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from core.battle import BattleResult, battle
from core.cards import Card


@dataclass
class BattleOdds:
    """
    战斗结果分布 (蒙特卡洛估计)

    Attributes:
        attacker_wins: 攻击方胜场
        defender_wins: 防守方胜场
        draws: 平局
        trials: 总次数
    """
    attacker_wins: int
    defender_wins: int
    draws: int
    trials: int

    @property
    def attacker_rate(self) -> float:
        return self.attacker_wins / self.trials if self.trials else 0.0

    @property
    def defender_rate(self) -> float:
        return self.defender_wins / self.trials if self.trials else 0.0

    @property
    def draw_rate(self) -> float:
        return self.draws / self.trials if self.trials else 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "trials": self.trials,
            "attacker_rate": self.attacker_rate,
            "defender_rate": self.defender_rate,
            "draw_rate": self.draw_rate,
        }

    def __repr__(self) -> str:
        return (
            f"BattleOdds(attacker={self.attacker_rate:.2%}, "
            f"defender={self.defender_rate:.2%}, "
            f"draw={self.draw_rate:.2%}, trials={self.trials})"
        )


def estimate_battle_odds(
    attacker: Card,
    defender: Card,
    n_trials: int = 10000,
    rng: Optional[np.random.Generator] = None,
) -> BattleOdds:
    """
    重复结算战斗，估计结果分布

    Args:
        attacker: 攻击方
        defender: 防守方
        n_trials: 次数
        rng: 随机源

    Returns:
        BattleOdds
    """
    rng = rng if rng is not None else np.random.default_rng()
    counts = {result: 0 for result in BattleResult}
    for _ in range(n_trials):
        counts[battle(attacker, defender, rng)] += 1
    return BattleOdds(
        attacker_wins=counts[BattleResult.ATTACKER],
        defender_wins=counts[BattleResult.DEFENDER],
        draws=counts[BattleResult.DRAW],
        trials=n_trials,
    )


class RunningStats:
    """
    运行时统计

    在线计算均值和方差
    """

    def __init__(self):
        self.n = 0
        self.mean = 0.0
        self.M2 = 0.0
        self.min_val = float('inf')
        self.max_val = float('-inf')

    def update(self, x: float):
        """更新统计"""
        self.n += 1
        delta = x - self.mean
        self.mean += delta / self.n
        delta2 = x - self.mean
        self.M2 += delta * delta2
        self.min_val = min(self.min_val, x)
        self.max_val = max(self.max_val, x)

    @property
    def variance(self) -> float:
        """方差"""
        if self.n < 2:
            return 0.0
        return self.M2 / (self.n - 1)

    @property
    def std(self) -> float:
        """标准差"""
        return float(np.sqrt(self.variance))

    def to_dict(self) -> Dict[str, float]:
        """转换为字典"""
        return {
            "count": self.n,
            "mean": self.mean,
            "std": self.std,
            "min": self.min_val,
            "max": self.max_val,
        }
