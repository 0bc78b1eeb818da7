"""
卡牌定义

每张卡有 4 个隐藏数值 (均为 4 位，0-15):
- power: 攻击力
- physical_defense: 物理防御
- magical_defense: 魔法防御
- card_class: 攻击类型 (P/M/X/A)

以及最多 8 个方向箭头
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .arrows import Arrows


# 数值上限 (4 位)
MAX_LEVEL = 0x0F


class CardClass(Enum):
    """攻击类型"""
    PHYSICAL = "P"   # 物理: 攻击对方物理防御
    MAGICAL = "M"    # 魔法: 攻击对方魔法防御
    FLEXIBLE = "X"   # 灵活: 攻击对方较低的防御
    ASSAULT = "A"    # 突击: 用自身最高数值攻击对方最低数值

    @property
    def letter(self) -> str:
        return self.value


# 类型字母到枚举的映射 (大小写不敏感时先转小写)
LETTER_TO_CLASS: Dict[str, CardClass] = {
    "p": CardClass.PHYSICAL,
    "m": CardClass.MAGICAL,
    "x": CardClass.FLEXIBLE,
    "a": CardClass.ASSAULT,
}


class Color(Enum):
    """卡牌当前控制方"""
    BLUE = "blue"
    RED = "red"

    @property
    def other(self) -> 'Color':
        return Color.RED if self is Color.BLUE else Color.BLUE


@dataclass(frozen=True)
class Card:
    """
    不可变卡牌

    Attributes:
        power: 攻击力 (0-15)
        card_class: 攻击类型
        physical_defense: 物理防御 (0-15)
        magical_defense: 魔法防御 (0-15)
        arrows: 箭头掩码
    """
    power: int
    card_class: CardClass
    physical_defense: int
    magical_defense: int
    arrows: Arrows = field(default_factory=Arrows)

    def __post_init__(self):
        for name in ("power", "physical_defense", "magical_defense"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_LEVEL:
                raise ValueError(f"{name} must be in 0-{MAX_LEVEL}, got {value!r}")
        if not isinstance(self.card_class, CardClass):
            raise ValueError(f"Invalid card class: {self.card_class!r}")

    def offense_level(self) -> int:
        """
        进攻等级

        物理/魔法/灵活: power
        突击: max(power, physical_defense, magical_defense)
        """
        if self.card_class is CardClass.ASSAULT:
            return max(self.power, self.physical_defense, self.magical_defense)
        return self.power

    def defense_level(self, other: 'Card') -> int:
        """
        以本卡为攻击方时，防守方 other 使用的防御等级

        由攻击方 (self) 的类型决定选取 other 的哪个数值:
        - 物理: other.physical_defense
        - 魔法: other.magical_defense
        - 灵活: min(物理防御, 魔法防御)
        - 突击: min(物理防御, 魔法防御, 攻击力)

        Args:
            other: 防守方卡牌

        Returns:
            0-15 的防御等级
        """
        if self.card_class is CardClass.PHYSICAL:
            return other.physical_defense
        if self.card_class is CardClass.MAGICAL:
            return other.magical_defense
        if self.card_class is CardClass.FLEXIBLE:
            return min(other.physical_defense, other.magical_defense)
        return min(other.physical_defense, other.magical_defense, other.power)

    def __str__(self) -> str:
        return (
            f"{self.power:X}{self.card_class.letter}"
            f"{self.physical_defense:X}{self.magical_defense:X}"
        )


@dataclass
class OwnedCard:
    """
    带归属的卡牌

    color 是整个模型中唯一可变的字段，被夺取时改变
    """
    card: Card
    color: Color

    @classmethod
    def blue(cls, card: Card) -> 'OwnedCard':
        return cls(card, Color.BLUE)

    @classmethod
    def red(cls, card: Card) -> 'OwnedCard':
        return cls(card, Color.RED)

    def __str__(self) -> str:
        return str(self.card)
