"""卡牌模型测试"""
from itertools import product

import pytest

from core.arrows import Arrows
from core.cards import Card, CardClass, Color, OwnedCard


def make(power=0, card_class=CardClass.PHYSICAL, pdef=0, mdef=0):
    return Card(power, card_class, pdef, mdef)


class TestCardConstruction:
    """构造校验测试"""

    def test_valid(self):
        card = Card(1, CardClass.MAGICAL, 2, 3)
        assert card.power == 1
        assert card.arrows == Arrows()

    @pytest.mark.parametrize("stats", [(16, 0, 0), (0, -1, 0), (0, 0, 99)])
    def test_out_of_range_stats(self, stats):
        power, pdef, mdef = stats
        with pytest.raises(ValueError):
            Card(power, CardClass.PHYSICAL, pdef, mdef)

    @pytest.mark.parametrize("value", [True, False, 1.0])
    def test_non_int_stats(self, value):
        with pytest.raises(ValueError):
            Card(value, CardClass.PHYSICAL, 0, 0)

    def test_invalid_class(self):
        with pytest.raises(ValueError):
            Card(1, "P", 2, 3)

    def test_immutable(self):
        card = make()
        with pytest.raises(AttributeError):
            card.power = 5

    def test_str_uppercase(self):
        assert str(Card(10, CardClass.FLEXIBLE, 11, 15)) == "AXBF"


class TestOffenseLevel:
    """进攻等级测试"""

    @pytest.mark.parametrize("card_class", [
        CardClass.PHYSICAL, CardClass.MAGICAL, CardClass.FLEXIBLE,
    ])
    def test_uses_power(self, card_class):
        assert make(4, card_class, 9, 12).offense_level() == 4

    def test_assault_uses_highest_stat(self):
        assert make(5, CardClass.ASSAULT, 9, 2).offense_level() == 9
        assert make(5, CardClass.ASSAULT, 1, 2).offense_level() == 5
        assert make(5, CardClass.ASSAULT, 1, 14).offense_level() == 14


class TestDefenseLevel:
    """防御等级测试 (由攻击方类型选取防守方数值)"""

    DEFENDER = Card(4, CardClass.FLEXIBLE, 3, 7)

    @pytest.mark.parametrize("attacker_class,expected", [
        (CardClass.PHYSICAL, 3),
        (CardClass.MAGICAL, 7),
        (CardClass.FLEXIBLE, 3),
        (CardClass.ASSAULT, 3),
    ])
    def test_attacker_class_selects_stat(self, attacker_class, expected):
        attacker = make(8, attacker_class, 8, 8)
        assert attacker.defense_level(self.DEFENDER) == expected

    def test_defender_class_is_irrelevant(self):
        attacker = make(8, CardClass.MAGICAL, 0, 0)
        for defender_class in CardClass:
            defender = Card(1, defender_class, 6, 11)
            assert attacker.defense_level(defender) == 11

    def test_assault_against_weak_power(self):
        attacker = make(5, CardClass.ASSAULT, 9, 2)
        defender = Card(1, CardClass.MAGICAL, 3, 7)
        assert attacker.offense_level() == 9
        assert attacker.defense_level(defender) == 1

    def test_flexible_uses_lower_defense(self):
        attacker = make(8, CardClass.FLEXIBLE)
        assert attacker.defense_level(Card(0, CardClass.PHYSICAL, 12, 5)) == 5
        assert attacker.defense_level(Card(0, CardClass.PHYSICAL, 2, 5)) == 2


class TestClassPairs:
    """攻防类型 4×4 组合测试"""

    ATTACKER_STATS = (5, 9, 2)     # power, 物理防御, 魔法防御
    DEFENDER_STATS = (1, 6, 11)

    OFFENSE = {
        CardClass.PHYSICAL: 5,
        CardClass.MAGICAL: 5,
        CardClass.FLEXIBLE: 5,
        CardClass.ASSAULT: 9,
    }
    DEFENSE = {
        CardClass.PHYSICAL: 6,
        CardClass.MAGICAL: 11,
        CardClass.FLEXIBLE: 6,
        CardClass.ASSAULT: 1,
    }

    @pytest.mark.parametrize("attacker_class,defender_class", list(product(CardClass, CardClass)))
    def test_levels(self, attacker_class, defender_class):
        power, pdef, mdef = self.ATTACKER_STATS
        attacker = Card(power, attacker_class, pdef, mdef)
        power, pdef, mdef = self.DEFENDER_STATS
        defender = Card(power, defender_class, pdef, mdef)

        assert attacker.offense_level() == self.OFFENSE[attacker_class]
        assert attacker.defense_level(defender) == self.DEFENSE[attacker_class]


class TestColor:
    """归属测试"""

    def test_other(self):
        assert Color.BLUE.other is Color.RED
        assert Color.RED.other is Color.BLUE

    def test_owned_card_helpers(self):
        card = make(1)
        assert OwnedCard.blue(card).color is Color.BLUE
        assert OwnedCard.red(card).color is Color.RED
        assert str(OwnedCard.red(card)) == str(card)
