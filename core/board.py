"""
棋盘引擎

4×4 棋盘，每格为 障碍 / 空 / 卡牌 三者之一。行列从 1 开始编号，(1, 1) 为左上角。

卡牌存放在以句柄 (下标) 寻址的记录表中，格子只保存句柄；
颜色是记录中唯一可变的字段，夺取只改变颜色，卡牌永不移动。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple
import logging

from .arrows import ArrowRelation, Direction, NEIGHBOR_ORDER
from .battle import BattleResult, BattleRoll, resolve_battle
from .cards import Card, Color, OwnedCard
from .config import BOARD_SIZE, GameConfig

logger = logging.getLogger(__name__)


class SpaceKind(Enum):
    """格子类型"""
    BLOCK = "block"   # 永久不可放置
    EMPTY = "empty"   # 可放置
    CARD = "card"     # 已有卡牌


@dataclass(frozen=True)
class Space:
    """
    格子

    Attributes:
        kind: 格子类型
        handle: 卡牌句柄 (仅 CARD 类型有效)
    """
    kind: SpaceKind
    handle: Optional[int] = None

    @property
    def is_block(self) -> bool:
        return self.kind is SpaceKind.BLOCK

    @property
    def is_empty(self) -> bool:
        return self.kind is SpaceKind.EMPTY

    @property
    def is_card(self) -> bool:
        return self.kind is SpaceKind.CARD


BLOCK = Space(SpaceKind.BLOCK)
EMPTY = Space(SpaceKind.EMPTY)


@dataclass
class CardRecord:
    """记录表中的一张卡，color 是唯一会被修改的字段"""
    card: Card
    color: Color
    row: int
    column: int


@dataclass(frozen=True)
class PlacedCard:
    """
    棋盘上卡牌的视图

    不持有卡牌本身，所有字段都通过句柄从 Board 解析，
    因此 color 总是反映当前归属
    """
    handle: int
    board: 'Board' = field(repr=False, compare=False)

    @property
    def _record(self) -> CardRecord:
        return self.board._records[self.handle]

    @property
    def card(self) -> Card:
        return self._record.card

    @property
    def color(self) -> Color:
        return self._record.color

    @property
    def row(self) -> int:
        return self._record.row

    @property
    def column(self) -> int:
        return self._record.column

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.column

    def owned(self) -> OwnedCard:
        """当前状态的 OwnedCard 副本"""
        return OwnedCard(self.card, self.color)

    def __str__(self) -> str:
        return str(self.card)

    def __repr__(self) -> str:
        return (
            f"PlacedCard({self.card}, {self.color.value}, "
            f"row={self.row}, column={self.column})"
        )


@dataclass(frozen=True)
class Neighbor:
    """
    邻居格

    Attributes:
        direction: 从中心卡指向该格的方向
        on_board: 该格是否在棋盘内
        handle: 该格卡牌的句柄 (障碍/空/越界为 None)
    """
    direction: Direction
    on_board: bool
    handle: Optional[int] = None


class FlipCause(Enum):
    """变色原因"""
    BATTLE = "battle"     # 攻击方战斗获胜
    COUNTER = "counter"   # 攻击方战斗失败，被防守方夺取
    COMBO = "combo"       # 连锁
    TAKE = "take"         # 无需战斗直接夺取


@dataclass(frozen=True)
class Flip:
    """一次变色"""
    row: int
    column: int
    color: Color
    cause: FlipCause


@dataclass(frozen=True)
class BattleRecord:
    """一次战斗记录"""
    attacker: Tuple[int, int]
    defender: Tuple[int, int]
    roll: BattleRoll

    @property
    def result(self) -> BattleResult:
        return self.roll.result


@dataclass
class BattleReport:
    """
    run_battles 的结算报告

    Attributes:
        row, column: 新放置卡牌的位置
        battles: 按顺序发生的战斗
        flips: 按顺序发生的变色
        draws: 平局重掷次数
        lost: 攻击方是否战败
        exhausted: 是否因平局重掷达到上限而终止
    """
    row: int
    column: int
    battles: List[BattleRecord] = field(default_factory=list)
    flips: List[Flip] = field(default_factory=list)
    draws: int = 0
    lost: bool = False
    exhausted: bool = False


class Board:
    """
    4×4 棋盘

    坐标越界 (不在 1..4) 属于调用方错误，直接抛出 IndexError；
    add_card 不检查目标格是否为空，由调用方保证
    """

    def __init__(
        self,
        spaces: Optional[Sequence[Sequence[Space]]] = None,
        config: Optional[GameConfig] = None,
    ):
        """
        Args:
            spaces: 4×4 初始格子 (只允许 BLOCK / EMPTY)，None 表示全空
            config: 规则配置
        """
        self.config = config or GameConfig()
        self._records: List[CardRecord] = []

        if spaces is None:
            self._spaces = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        else:
            rows = [list(row) for row in spaces]
            if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
                raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
            if any(space.is_card for row in rows for space in row):
                raise ValueError("Initial spaces must be blocks or empty")
            self._spaces = rows

    # ------------------------------------------------------------------
    # 构造
    # ------------------------------------------------------------------

    @classmethod
    def generate(cls, rng, config: Optional[GameConfig] = None) -> 'Board':
        """
        随机生成棋盘

        逐行逐格: 障碍数未达上限时，以 1/block_odds 的概率成为障碍；
        达到上限后其余格子全部为空

        Args:
            rng: 随机源
            config: 规则配置

        Returns:
            新棋盘
        """
        config = config or GameConfig()
        blocks = 0
        spaces = []
        for _ in range(BOARD_SIZE):
            row = []
            for _ in range(BOARD_SIZE):
                if blocks < config.max_blocks and int(rng.integers(0, config.block_odds)) == 0:
                    blocks += 1
                    row.append(BLOCK)
                else:
                    row.append(EMPTY)
            spaces.append(row)
        logger.debug("Generated board with %d blocks", blocks)
        return cls(spaces, config)

    @classmethod
    def from_layout(cls, layout: Sequence[str], config: Optional[GameConfig] = None) -> 'Board':
        """
        由字符布局构造棋盘

        Args:
            layout: 4 行字符串，'X' 或 '#' 为障碍，'.' 为空

        Returns:
            新棋盘
        """
        spaces = []
        for line in layout:
            row = []
            for ch in line:
                if ch in "X#":
                    row.append(BLOCK)
                elif ch == ".":
                    row.append(EMPTY)
                else:
                    raise ValueError(f"Unknown layout character {ch!r}")
            spaces.append(row)
        return cls(spaces, config)

    # ------------------------------------------------------------------
    # 访问
    # ------------------------------------------------------------------

    @staticmethod
    def in_bounds(row: int, column: int) -> bool:
        return 1 <= row <= BOARD_SIZE and 1 <= column <= BOARD_SIZE

    def _check(self, row: int, column: int):
        if not self.in_bounds(row, column):
            raise IndexError(f"Board position out of range: ({row}, {column})")

    def space(self, row: int, column: int) -> Space:
        """获取格子"""
        self._check(row, column)
        return self._spaces[row - 1][column - 1]

    def card(self, handle: int) -> PlacedCard:
        """由句柄获取卡牌视图"""
        if not 0 <= handle < len(self._records):
            raise IndexError(f"Unknown card handle: {handle}")
        return PlacedCard(handle, self)

    def card_at(self, row: int, column: int) -> Optional[PlacedCard]:
        """获取格子上的卡牌，非卡牌格返回 None"""
        space = self.space(row, column)
        if not space.is_card:
            return None
        return PlacedCard(space.handle, self)

    def cards(self) -> Iterator[PlacedCard]:
        """按行优先顺序遍历棋盘上的卡牌"""
        for row in range(1, BOARD_SIZE + 1):
            for column in range(1, BOARD_SIZE + 1):
                placed = self.card_at(row, column)
                if placed is not None:
                    yield placed

    def empty_spaces(self) -> List[Tuple[int, int]]:
        """所有空格坐标 (行优先)"""
        return [
            (row, column)
            for row in range(1, BOARD_SIZE + 1)
            for column in range(1, BOARD_SIZE + 1)
            if self._spaces[row - 1][column - 1].is_empty
        ]

    @property
    def block_count(self) -> int:
        return sum(space.is_block for row in self._spaces for space in row)

    def count(self, color: Color) -> int:
        """棋盘上属于 color 的卡牌数"""
        return sum(1 for placed in self.cards() if placed.color is color)

    # ------------------------------------------------------------------
    # 修改
    # ------------------------------------------------------------------

    def add_card(self, row: int, column: int, card: OwnedCard) -> PlacedCard:
        """
        放置卡牌

        无条件覆盖目标格，调用方需先确认该格为空

        Returns:
            新卡牌的视图
        """
        self._check(row, column)
        handle = len(self._records)
        self._records.append(CardRecord(card.card, card.color, row, column))
        self._spaces[row - 1][column - 1] = Space(SpaceKind.CARD, handle)
        return PlacedCard(handle, self)

    def remove_card(self, row: int, column: int) -> Optional[OwnedCard]:
        """移除卡牌并将格子置空，非卡牌格返回 None 且同样置空"""
        self._check(row, column)
        space = self._spaces[row - 1][column - 1]
        self._spaces[row - 1][column - 1] = EMPTY
        if not space.is_card:
            return None
        record = self._records[space.handle]
        return OwnedCard(record.card, record.color)

    def set_color(self, handle: int, color: Color):
        """修改卡牌归属 (唯一的状态修改入口)"""
        self._records[handle].color = color

    def _flip(self, placed: PlacedCard, color: Color, cause: FlipCause) -> List[Flip]:
        """改变归属；已是该颜色时不产生变色记录"""
        if placed.color is color:
            return []
        self.set_color(placed.handle, color)
        logger.debug("%s at (%d, %d) -> %s (%s)",
                     placed.card, placed.row, placed.column, color.value, cause.value)
        return [Flip(placed.row, placed.column, color, cause)]

    # ------------------------------------------------------------------
    # 邻居与关系
    # ------------------------------------------------------------------

    def neighbors(self, row: int, column: int) -> List[Neighbor]:
        """
        获取卡牌的 8 个邻居

        顺序固定为: 西, 东, 北, 西北, 东北, 南, 西南, 东南
        (与 Direction 序号一致)。越界格 on_board=False；
        障碍/空格 handle=None

        Args:
            row: 行 (1-4)
            column: 列 (1-4)

        Returns:
            邻居列表；若该位置不是卡牌，返回空列表
        """
        if not self.space(row, column).is_card:
            return []

        result = []
        for direction in NEIGHBOR_ORDER:
            dr, dc = direction.offset
            r, c = row + dr, column + dc
            if not self.in_bounds(r, c):
                result.append(Neighbor(direction, on_board=False))
                continue
            space = self._spaces[r - 1][c - 1]
            result.append(Neighbor(direction, on_board=True, handle=space.handle))
        return result

    def relations(self, row: int, column: int) -> List[Tuple[Direction, PlacedCard, ArrowRelation]]:
        """
        计算卡牌对所有异色邻卡的箭头关系

        Returns:
            [(方向, 邻卡, 关系), ...]，按邻居顺序
        """
        center = self.card_at(row, column)
        if center is None:
            return []

        result = []
        for neighbor in self.neighbors(row, column):
            if neighbor.handle is None:
                continue
            other = PlacedCard(neighbor.handle, self)
            if other.color is center.color:
                continue
            relation = center.card.arrows.relation_from(neighbor.direction, other.card.arrows)
            result.append((neighbor.direction, other, relation))
        return result

    # ------------------------------------------------------------------
    # 战斗
    # ------------------------------------------------------------------

    def do_combo(self, winner: PlacedCard, loser: PlacedCard) -> List[Flip]:
        """
        连锁

        从刚被夺取的 loser 出发，凡是与 winner 异色、且 loser 对其关系
        不为 IGNORE 的邻卡，立即变为 winner 的颜色。只向外扩展一层，不掷骰

        Args:
            winner: 获胜方
            loser: 刚被夺取的卡牌

        Returns:
            变色列表
        """
        targets = []
        for neighbor in self.neighbors(loser.row, loser.column):
            if neighbor.handle is None:
                continue
            other = PlacedCard(neighbor.handle, self)
            if other.color is winner.color:
                continue
            relation = loser.card.arrows.relation_from(neighbor.direction, other.card.arrows)
            if relation is not ArrowRelation.IGNORE:
                targets.append(other)

        flips = []
        for target in targets:
            flips.extend(self._flip(target, winner.color, FlipCause.COMBO))
        return flips

    def run_battles(self, row: int, column: int, rng) -> BattleReport:
        """
        结算新放置卡牌的所有战斗

        - 每轮开始时计算一次关系，按邻居顺序与其中每个 BATTLE 邻卡战斗
          (本轮连锁夺取过的卡也照常作战)
        - 攻击方胜: 防守方变色，并从防守方触发连锁，继续下一场
        - 防守方胜: 攻击方变色，从攻击方位置触发防守方的连锁，立即结束
        - 平局: 基于当前棋盘重新计算关系，从头再来
        - 攻击方全胜 (或无战斗) 后，所有 TAKE 关系的异色邻卡直接变色

        Args:
            row: 行 (1-4)
            column: 列 (1-4)
            rng: 随机源

        Returns:
            BattleReport
        """
        report = BattleReport(row, column)
        attacker = self.card_at(row, column)
        if attacker is None:
            return report

        for _ in range(self.config.max_battle_passes):
            if not self._battle_pass(attacker, rng, report):
                return report
            report.draws += 1
            logger.debug("Draw at (%d, %d), re-rolling (%d)", row, column, report.draws)

        report.exhausted = True
        logger.warning(
            "Battle sequence at (%d, %d) ended after %d consecutive draws",
            row, column, report.draws,
        )
        return report

    def _battle_pass(self, attacker: PlacedCard, rng, report: BattleReport) -> bool:
        """
        执行一轮结算

        Returns:
            是否以平局中断 (需要重来)
        """
        relations = self.relations(attacker.row, attacker.column)

        for _, defender, relation in relations:
            # 即使本轮早先的连锁已将其夺取，仍按轮初的关系作战
            if relation is not ArrowRelation.BATTLE:
                continue

            roll = resolve_battle(attacker.card, defender.card, rng)
            report.battles.append(BattleRecord(attacker.position, defender.position, roll))

            if roll.result is BattleResult.ATTACKER:
                report.flips.extend(self._flip(defender, attacker.color, FlipCause.BATTLE))
                report.flips.extend(self.do_combo(attacker, defender))
            elif roll.result is BattleResult.DEFENDER:
                report.flips.extend(self._flip(attacker, defender.color, FlipCause.COUNTER))
                report.flips.extend(self.do_combo(defender, attacker))
                report.lost = True
                return False
            else:
                return True

        for _, target, relation in relations:
            if relation is ArrowRelation.TAKE:
                report.flips.extend(self._flip(target, attacker.color, FlipCause.TAKE))
        return False

    # ------------------------------------------------------------------
    # 显示
    # ------------------------------------------------------------------

    def space_text(self, row: int, column: int) -> str:
        """格子的 4 字符文本: 障碍 XXXX，空格 4 个空格，卡牌为其编码"""
        space = self.space(row, column)
        if space.is_block:
            return "XXXX"
        if space.is_empty:
            return "    "
        return str(self._records[space.handle].card)

    def snapshot(self) -> Tuple[Tuple[Tuple[str, Optional[str]], ...], ...]:
        """棋盘状态的可比较快照 (格子文本, 归属)"""
        rows = []
        for row in range(1, BOARD_SIZE + 1):
            cells = []
            for column in range(1, BOARD_SIZE + 1):
                placed = self.card_at(row, column)
                color = placed.color.value if placed is not None else None
                cells.append((self.space_text(row, column), color))
            rows.append(tuple(cells))
        return tuple(rows)

    def __str__(self) -> str:
        border = "+" + "+".join(["------"] * BOARD_SIZE) + "+"
        lines = [border]
        for row in range(1, BOARD_SIZE + 1):
            cells = []
            for column in range(1, BOARD_SIZE + 1):
                placed = self.card_at(row, column)
                marker = placed.color.value[0].upper() if placed is not None else " "
                cells.append(f"{self.space_text(row, column)}{marker} ")
            lines.append("|" + "|".join(cells) + "|")
            lines.append(border)
        return "\n".join(lines)
