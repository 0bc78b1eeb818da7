"""
数值掷骰

将 0-15 的等级映射到 16 段连续的字节区间 (0-15, 16-31, ..., 240-255)，
在对应区间内均匀取值，作为本次战斗的最大分数
"""
from typing import Tuple

from .cards import MAX_LEVEL


STAT_RANGES: Tuple[Tuple[int, int], ...] = tuple(
    (level * 16, level * 16 + 15) for level in range(MAX_LEVEL + 1)
)


def stat_range(level: int) -> Tuple[int, int]:
    """
    等级对应的闭区间

    Raises:
        ValueError: 等级不在 0-15
    """
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= MAX_LEVEL:
        raise ValueError(f"Stat level must be in 0-{MAX_LEVEL}, got {level!r}")
    return STAT_RANGES[level]


def roll_stat(level: int, rng) -> int:
    """
    在等级区间内均匀掷出最大分数

    Args:
        level: 0-15
        rng: 随机源 (np.random.Generator 或同接口对象)

    Returns:
        区间内的整数
    """
    low, high = stat_range(level)
    return int(rng.integers(low, high, endpoint=True))
