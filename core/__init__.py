"""
Core Layer - 纯规则逻辑 (无 ML 依赖)

Modules:
    cards: 卡牌与归属
    arrows: 箭头方向与关系
    stats: 等级区间与掷骰
    battle: 战斗结算
    board: 棋盘、连锁与战斗流程
    codec: 卡牌文本编码
    deck: 随机发牌
    state: 对局状态
"""
from .config import BOARD_SIZE, GameConfig

from .cards import (
    MAX_LEVEL,
    CardClass,
    Color,
    Card,
    OwnedCard,
)

from .arrows import (
    Direction,
    ArrowRelation,
    Arrows,
    NEIGHBOR_ORDER,
)

from .stats import STAT_RANGES, stat_range, roll_stat

from .battle import (
    BattleResult,
    BattleRoll,
    resolve_battle,
    battle,
    explain_battle,
)

from .board import (
    SpaceKind,
    Space,
    PlacedCard,
    Neighbor,
    FlipCause,
    Flip,
    BattleRecord,
    BattleReport,
    Board,
)

from .codec import (
    CardDecodeError,
    decode_card,
    parse_card,
    encode_card,
)

from .deck import (
    LEVEL_WEIGHTS,
    weighted_level,
    random_arrows,
    random_card,
    random_hand,
)

from .state import (
    Phase,
    Move,
    GameState,
    PLAYERS,
)

__all__ = [
    # config
    "BOARD_SIZE",
    "GameConfig",
    # cards
    "MAX_LEVEL",
    "CardClass",
    "Color",
    "Card",
    "OwnedCard",
    # arrows
    "Direction",
    "ArrowRelation",
    "Arrows",
    "NEIGHBOR_ORDER",
    # stats
    "STAT_RANGES",
    "stat_range",
    "roll_stat",
    # battle
    "BattleResult",
    "BattleRoll",
    "resolve_battle",
    "battle",
    "explain_battle",
    # board
    "SpaceKind",
    "Space",
    "PlacedCard",
    "Neighbor",
    "FlipCause",
    "Flip",
    "BattleRecord",
    "BattleReport",
    "Board",
    # codec
    "CardDecodeError",
    "decode_card",
    "parse_card",
    "encode_card",
    # deck
    "LEVEL_WEIGHTS",
    "weighted_level",
    "random_arrows",
    "random_card",
    "random_hand",
    # state
    "Phase",
    "Move",
    "GameState",
    "PLAYERS",
]
