"""
观察空间编码

将对局状态转换为神经网络可用的特征表示
"""
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from core.arrows import NEIGHBOR_ORDER
from core.cards import Card, CardClass, Color, MAX_LEVEL
from core.config import BOARD_SIZE, GameConfig
from core.state import GameState


# 每张卡的特征维度: 3 个数值 + 4 种类型 + 8 个箭头
CARD_FEATURES = 3 + len(CardClass) + len(NEIGHBOR_ORDER)

_CLASS_INDEX = {card_class: i for i, card_class in enumerate(CardClass)}


def card_features(card: Card) -> np.ndarray:
    """
    单张卡的特征向量

    - [0:3]: power / 物理防御 / 魔法防御，归一化到 [0, 1]
    - [3:7]: 类型 one-hot
    - [7:15]: 箭头 (按邻居顺序)
    """
    features = np.zeros(CARD_FEATURES, dtype=np.float32)
    features[0] = card.power / MAX_LEVEL
    features[1] = card.physical_defense / MAX_LEVEL
    features[2] = card.magical_defense / MAX_LEVEL
    features[3 + _CLASS_INDEX[card.card_class]] = 1
    for i, direction in enumerate(NEIGHBOR_ORDER):
        if card.arrows.has(direction):
            features[3 + len(CardClass) + i] = 1
    return features


@dataclass
class Observation:
    """
    结构化观测

    Attributes:
        board_owner: 归属 (4, 4)，己方 1，对方 -1，其余 0
        blocks: 障碍格 (4, 4)
        board_cards: 棋盘卡牌特征 (4, 4, CARD_FEATURES)
        hand: 己方手牌特征 (hand_size, CARD_FEATURES)
        hand_mask: 手牌槽位是否有牌 (hand_size,)
        cards_left: 双方剩余手牌比例 (2,) [己方, 对方]
    """
    board_owner: np.ndarray
    blocks: np.ndarray
    board_cards: np.ndarray
    hand: np.ndarray
    hand_mask: np.ndarray
    cards_left: np.ndarray

    def to_dict(self) -> Dict[str, np.ndarray]:
        """转换为字典格式"""
        return {
            "board_owner": self.board_owner,
            "blocks": self.blocks,
            "board_cards": self.board_cards,
            "hand": self.hand,
            "hand_mask": self.hand_mask,
            "cards_left": self.cards_left,
        }

    def to_flat_array(self) -> np.ndarray:
        """展平为单一向量"""
        return np.concatenate([v.flatten() for v in self.to_dict().values()])


class ObservationBuilder:
    """
    观测构建器

    从指定一方的视角构建观测
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def build(self, state: GameState, perspective: Color) -> Observation:
        hand_size = self.config.hand_size

        board_owner = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
        blocks = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
        board_cards = np.zeros((BOARD_SIZE, BOARD_SIZE, CARD_FEATURES), dtype=np.float32)

        for row in range(1, BOARD_SIZE + 1):
            for column in range(1, BOARD_SIZE + 1):
                space = state.board.space(row, column)
                if space.is_block:
                    blocks[row - 1, column - 1] = 1
                elif space.is_card:
                    placed = state.board.card_at(row, column)
                    board_owner[row - 1, column - 1] = 1 if placed.color is perspective else -1
                    board_cards[row - 1, column - 1] = card_features(placed.card)

        hand = np.zeros((hand_size, CARD_FEATURES), dtype=np.float32)
        hand_mask = np.zeros(hand_size, dtype=np.float32)
        for i, owned in enumerate(state.get_hand(perspective)[:hand_size]):
            hand[i] = card_features(owned.card)
            hand_mask[i] = 1

        cards_left = np.array([
            len(state.get_hand(perspective)) / hand_size,
            len(state.get_hand(perspective.other)) / hand_size,
        ], dtype=np.float32)

        return Observation(
            board_owner=board_owner,
            blocks=blocks,
            board_cards=board_cards,
            hand=hand,
            hand_mask=hand_mask,
            cards_left=cards_left,
        )
