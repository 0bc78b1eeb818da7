"""
箭头几何

每张卡最多 8 个方向箭头，用 8 位掩码表示:
    bit 7: 北    bit 6: 东北  bit 5: 东    bit 4: 东南
    bit 3: 南    bit 2: 西南  bit 1: 西    bit 0: 西北

Direction 的枚举序号与 Board.neighbors 的邻居顺序一一对应:
西, 东, 北, 西北, 东北, 南, 西南, 东南
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Tuple


class Direction(IntEnum):
    """相对方向 (序号即邻居枚举顺序)"""
    WEST = 0
    EAST = 1
    NORTH = 2
    NORTHWEST = 3
    NORTHEAST = 4
    SOUTH = 5
    SOUTHWEST = 6
    SOUTHEAST = 7

    @property
    def bit(self) -> int:
        """该方向在箭头掩码中的位"""
        return _DIRECTION_BITS[self]

    @property
    def opposite(self) -> 'Direction':
        """反方向 (北↔南, 东北↔西南, 东↔西, 东南↔西北)"""
        return _OPPOSITES[self]

    @property
    def offset(self) -> Tuple[int, int]:
        """(行偏移, 列偏移)，行向南增长，列向东增长"""
        return _OFFSETS[self]


_DIRECTION_BITS = {
    Direction.NORTH: 1 << 7,
    Direction.NORTHEAST: 1 << 6,
    Direction.EAST: 1 << 5,
    Direction.SOUTHEAST: 1 << 4,
    Direction.SOUTH: 1 << 3,
    Direction.SOUTHWEST: 1 << 2,
    Direction.WEST: 1 << 1,
    Direction.NORTHWEST: 1,
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.NORTHEAST: Direction.SOUTHWEST,
    Direction.SOUTHWEST: Direction.NORTHEAST,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.SOUTHEAST: Direction.NORTHWEST,
    Direction.NORTHWEST: Direction.SOUTHEAST,
}

_OFFSETS = {
    Direction.WEST: (0, -1),
    Direction.EAST: (0, 1),
    Direction.NORTH: (-1, 0),
    Direction.NORTHWEST: (-1, -1),
    Direction.NORTHEAST: (-1, 1),
    Direction.SOUTH: (1, 0),
    Direction.SOUTHWEST: (1, -1),
    Direction.SOUTHEAST: (1, 1),
}

# 邻居枚举顺序
NEIGHBOR_ORDER: Tuple[Direction, ...] = tuple(Direction)


class ArrowRelation(Enum):
    """两张相邻卡之间的箭头关系"""
    IGNORE = "ignore"   # 攻击方无箭头指向对方
    TAKE = "take"       # 仅攻击方有箭头，直接夺取
    BATTLE = "battle"   # 双方箭头相对，需要战斗


@dataclass(frozen=True)
class Arrows:
    """
    箭头掩码 (不可变)

    Attributes:
        flags: 8 位掩码，0-255
    """
    flags: int = 0

    def __post_init__(self):
        if not 0 <= self.flags <= 0xFF:
            raise ValueError(f"Arrow flags must fit in 8 bits, got {self.flags}")

    @classmethod
    def from_directions(cls, directions: Iterable[Direction]) -> 'Arrows':
        """由方向集合构造掩码"""
        flags = 0
        for direction in directions:
            flags |= Direction(direction).bit
        return cls(flags)

    @classmethod
    def all(cls) -> 'Arrows':
        return cls(0xFF)

    def has(self, direction: Direction) -> bool:
        """是否有指向该方向的箭头"""
        return bool(self.flags & Direction(direction).bit)

    def with_arrow(self, direction: Direction, status: bool = True) -> 'Arrows':
        """返回设置/清除某方向后的新掩码"""
        bit = Direction(direction).bit
        if status:
            return Arrows(self.flags | bit)
        return Arrows(self.flags & ~bit & 0xFF)

    @property
    def directions(self) -> Tuple[Direction, ...]:
        """已设置的方向 (按邻居枚举顺序)"""
        return tuple(d for d in NEIGHBOR_ORDER if self.has(d))

    def relation_from(self, direction: Direction, other: 'Arrows') -> ArrowRelation:
        """
        计算本卡对位于 direction 方向的邻卡的关系

        Args:
            direction: 从本卡指向邻卡的方向
            other: 邻卡的箭头

        Returns:
            BATTLE: 双方箭头相对
            TAKE: 仅本卡有箭头
            IGNORE: 本卡无箭头
        """
        direction = Direction(direction)
        attack = self.has(direction)
        defend = other.has(direction.opposite)
        if attack and defend:
            return ArrowRelation.BATTLE
        if attack:
            return ArrowRelation.TAKE
        return ArrowRelation.IGNORE

    @property
    def count(self) -> int:
        """箭头数量"""
        return bin(self.flags).count("1")
