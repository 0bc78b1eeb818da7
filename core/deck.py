"""
随机发牌 (用于演示对局)

数值按 LEVEL_WEIGHTS 加权，低等级更常见
"""
from typing import List, Tuple

from .arrows import Arrows
from .cards import Card, CardClass, Color, OwnedCard


# 等级 0-15 的权重
LEVEL_WEIGHTS: Tuple[int, ...] = (15, 15, 15, 8, 8, 8, 5, 5, 5, 3, 3, 3, 2, 2, 2, 1)

# 类型分布: 在 [0, 100) 中掷骰，落在 [下限, 上限] 内即为该类型
CLASS_THRESHOLDS: Tuple[Tuple[int, int, CardClass], ...] = (
    (0, 39, CardClass.PHYSICAL),
    (40, 80, CardClass.MAGICAL),
    (81, 95, CardClass.FLEXIBLE),
    (96, 99, CardClass.ASSAULT),
)


def weighted_level(rng) -> int:
    """按 LEVEL_WEIGHTS 掷出等级"""
    remaining = int(rng.integers(0, sum(LEVEL_WEIGHTS)))
    for level, weight in enumerate(LEVEL_WEIGHTS):
        if remaining < weight:
            return level
        remaining -= weight
    raise AssertionError("unreachable")


def random_class(rng) -> CardClass:
    """按 CLASS_THRESHOLDS 掷出类型"""
    roll = int(rng.integers(0, 100))
    for low, high, card_class in CLASS_THRESHOLDS:
        if low <= roll <= high:
            return card_class
    raise AssertionError(f"Unexpected class roll {roll}")


def random_arrows(rng) -> Arrows:
    """
    随机箭头

    从 bit 0 到 bit 7 依次决定: 尚无箭头时概率 1/2，否则 1/4
    """
    flags = 0
    for bit in range(8):
        odds = 2 if flags == 0 else 4
        if int(rng.integers(0, odds)) == 0:
            flags |= 1 << bit
    return Arrows(flags)


def random_card(rng) -> Card:
    """随机生成一张卡"""
    power = weighted_level(rng)
    card_class = random_class(rng)
    physical_defense = weighted_level(rng)
    magical_defense = weighted_level(rng)
    return Card(power, card_class, physical_defense, magical_defense, random_arrows(rng))


def random_hand(rng, color: Color, size: int = 5) -> List[OwnedCard]:
    """
    随机手牌

    Args:
        rng: 随机源
        color: 手牌归属
        size: 张数

    Returns:
        OwnedCard 列表
    """
    return [OwnedCard(random_card(rng), color) for _ in range(size)]
