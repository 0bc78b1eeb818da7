"""测试公共工具: 可编排的随机源"""
from collections import deque
from typing import Iterable, List

import pytest

from core.battle import BattleResult
from core.cards import Card
from core.stats import stat_range


class ScriptedRng:
    """
    按预设队列依次返回取值的随机源

    接口与 np.random.Generator.integers 相同；取值越界或队列耗尽时抛出异常，
    calls 记录每次调用的闭区间
    """

    def __init__(self, values: Iterable[int] = ()):
        self._values = deque(values)
        self.calls: List[tuple] = []

    def push(self, *values: int):
        self._values.extend(values)

    @property
    def remaining(self) -> int:
        return len(self._values)

    def integers(self, low, high=None, endpoint=False):
        if high is None:
            low, high = 0, low
        upper = high if endpoint else high - 1
        self.calls.append((low, upper))
        if not self._values:
            raise AssertionError(f"ScriptedRng exhausted on integers({low}, {upper})")
        value = self._values.popleft()
        if not low <= value <= upper:
            raise AssertionError(f"Scripted value {value} outside [{low}, {upper}]")
        return value


def battle_draws(attacker: Card, defender: Card, result: BattleResult) -> List[int]:
    """生成使一次战斗得到指定结果的 4 个取值"""
    _, max_attack = stat_range(attacker.offense_level())
    _, max_defense = stat_range(attacker.defense_level(defender))
    if result is BattleResult.ATTACKER:
        return [max_attack, max_defense, 0, max_defense]
    if result is BattleResult.DEFENDER:
        return [max_attack, max_defense, max_attack, 0]
    return [max_attack, max_defense, max_attack, max_defense]


@pytest.fixture
def scripted_rng():
    """返回 ScriptedRng 工厂"""
    return ScriptedRng


@pytest.fixture
def script_battle():
    return battle_draws
