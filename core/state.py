"""
对局状态

蓝红双方各持一手牌，轮流将卡牌放到空格上并结算战斗；
双方手牌出完 (或棋盘无空格) 时结束，棋盘上卡牌多者获胜
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import logging

import numpy as np

from .board import Board, BattleReport
from .cards import Color, OwnedCard
from .config import GameConfig
from .deck import random_hand

logger = logging.getLogger(__name__)


class Phase(Enum):
    """游戏阶段"""
    PLAYING = "playing"
    FINISHED = "finished"


# 行动顺序
PLAYERS: Tuple[Color, ...] = (Color.BLUE, Color.RED)


@dataclass(frozen=True)
class Move:
    """
    一步行动

    Attributes:
        hand_index: 手牌下标
        row: 行 (1-4)
        column: 列 (1-4)
    """
    hand_index: int
    row: int
    column: int


@dataclass
class GameState:
    """
    对局状态

    Attributes:
        board: 棋盘
        hands: 各方手牌
        current_player: 当前行动方
        rng: 随机源 (棋盘生成、发牌、战斗共用)
        config: 规则配置
        step_count: 已行动步数
        history: 行动历史 ((行动方, 行动, 结算报告), ...)
    """
    board: Board
    hands: Dict[Color, List[OwnedCard]]
    current_player: Color
    rng: np.random.Generator = field(repr=False)
    config: GameConfig = field(default_factory=GameConfig)
    step_count: int = 0
    history: List[Tuple[Color, Move, BattleReport]] = field(default_factory=list)

    @classmethod
    def initial(
        cls,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        config: Optional[GameConfig] = None,
        board: Optional[Board] = None,
        hands: Optional[Dict[Color, List[OwnedCard]]] = None,
        first_player: Optional[Color] = None,
    ) -> 'GameState':
        """
        创建新对局

        Args:
            seed: 随机种子 (rng 为 None 时使用)
            rng: 随机源
            config: 规则配置
            board: 指定棋盘，None 表示随机生成
            hands: 指定手牌，None 表示随机发牌
            first_player: 先手，None 表示掷硬币决定

        Returns:
            初始状态
        """
        rng = rng if rng is not None else np.random.default_rng(seed)
        config = config or (board.config if board is not None else GameConfig())

        if board is None:
            board = Board.generate(rng, config)

        if hands is None:
            hands = {color: random_hand(rng, color, config.hand_size) for color in PLAYERS}
        else:
            hands = {color: list(hands.get(color, [])) for color in PLAYERS}

        if first_player is None:
            first_player = Color.BLUE if int(rng.integers(0, 2)) == 0 else Color.RED

        return cls(
            board=board,
            hands=hands,
            current_player=first_player,
            rng=rng,
            config=config,
        )

    def get_hand(self, color: Color) -> List[OwnedCard]:
        """获取手牌"""
        return self.hands[color]

    @property
    def phase(self) -> Phase:
        if not any(self.hands.values()) or not self.board.empty_spaces():
            return Phase.FINISHED
        return Phase.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    def get_legal_actions(self) -> List[Move]:
        """当前行动方的所有合法行动"""
        if self.is_finished:
            return []
        empty = self.board.empty_spaces()
        return [
            Move(hand_index, row, column)
            for hand_index in range(len(self.hands[self.current_player]))
            for row, column in empty
        ]

    def is_legal(self, move: Move) -> bool:
        if self.is_finished:
            return False
        if not 0 <= move.hand_index < len(self.hands[self.current_player]):
            return False
        if not self.board.in_bounds(move.row, move.column):
            return False
        return self.board.space(move.row, move.column).is_empty

    def play(self, move: Move) -> BattleReport:
        """
        执行行动

        Args:
            move: 行动

        Returns:
            本次放置的战斗结算报告

        Raises:
            ValueError: 对局已结束或行动不合法
        """
        if self.is_finished:
            raise ValueError("Game is finished")
        if not self.is_legal(move):
            raise ValueError(f"Illegal move for {self.current_player.value}: {move}")

        player = self.current_player
        card = self.hands[player].pop(move.hand_index)
        self.board.add_card(move.row, move.column, card)
        report = self.board.run_battles(move.row, move.column, self.rng)

        logger.debug(
            "%s plays %s at (%d, %d): %d battles, %d flips",
            player.value, card, move.row, move.column,
            len(report.battles), len(report.flips),
        )

        self.history.append((player, move, report))
        self.step_count += 1

        # 对方无牌而己方仍有牌时继续由己方行动
        if self.hands[player.other] or not self.hands[player]:
            self.current_player = player.other

        return report

    def score(self) -> Dict[Color, int]:
        """棋盘上各方卡牌数"""
        return {color: self.board.count(color) for color in PLAYERS}

    @property
    def winner(self) -> Optional[Color]:
        """结束时卡牌多者获胜，相等或未结束为 None"""
        if not self.is_finished:
            return None
        score = self.score()
        if score[Color.BLUE] == score[Color.RED]:
            return None
        return max(score, key=score.get)

    def render(self) -> str:
        """文本渲染"""
        lines = [str(self.board)]
        for color in PLAYERS:
            hand = " ".join(str(card) for card in self.hands[color]) or "-"
            marker = "*" if color is self.current_player and not self.is_finished else " "
            lines.append(f"{marker}{color.value:<5}: {hand}")
        score = self.score()
        lines.append(f"Score: blue {score[Color.BLUE]} - red {score[Color.RED]}")
        return "\n".join(lines)
