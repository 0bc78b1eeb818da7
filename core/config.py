"""
规则配置

集中管理棋盘生成、发牌与战斗循环的可调参数
"""
from dataclasses import dataclass


# 棋盘固定为 4×4
BOARD_SIZE = 4


@dataclass
class GameConfig:
    """
    游戏配置

    Attributes:
        max_blocks: 棋盘生成时障碍格的上限
        block_odds: 每格成为障碍的概率为 1/block_odds
        hand_size: 每位玩家的手牌数
        max_battle_passes: 平局重掷循环的最大轮数 (终止保护)
    """
    max_blocks: int = 6
    block_odds: int = 4
    hand_size: int = 5
    max_battle_passes: int = 64

    def __post_init__(self):
        if not 0 <= self.max_blocks <= BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"max_blocks out of range: {self.max_blocks}")
        if self.block_odds < 1:
            raise ValueError(f"block_odds must be >= 1, got {self.block_odds}")
        if self.hand_size < 1:
            raise ValueError(f"hand_size must be >= 1, got {self.hand_size}")
        if self.max_battle_passes < 1:
            raise ValueError(
                f"max_battle_passes must be >= 1, got {self.max_battle_passes}"
            )

    @classmethod
    def from_dict(cls, d: dict) -> 'GameConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)
