"""随机发牌测试"""
import numpy as np
import pytest

from core.arrows import Arrows
from core.cards import CardClass, Color
from core.deck import (
    LEVEL_WEIGHTS,
    random_arrows,
    random_card,
    random_class,
    random_hand,
    weighted_level,
)


class TestWeightedLevel:

    def test_weights_sum(self):
        assert sum(LEVEL_WEIGHTS) == 100
        assert len(LEVEL_WEIGHTS) == 16

    @pytest.mark.parametrize("roll,level", [(0, 0), (14, 0), (15, 1), (44, 2), (45, 3), (99, 15)])
    def test_boundaries(self, scripted_rng, roll, level):
        assert weighted_level(scripted_rng([roll])) == level


class TestRandomClass:

    @pytest.mark.parametrize("roll,card_class", [
        (0, CardClass.PHYSICAL),
        (39, CardClass.PHYSICAL),
        (40, CardClass.MAGICAL),
        (80, CardClass.MAGICAL),
        (81, CardClass.FLEXIBLE),
        (95, CardClass.FLEXIBLE),
        (96, CardClass.ASSAULT),
        (99, CardClass.ASSAULT),
    ])
    def test_thresholds(self, scripted_rng, roll, card_class):
        assert random_class(scripted_rng([roll])) is card_class


class TestRandomArrows:

    def test_all_hits(self, scripted_rng):
        assert random_arrows(scripted_rng([0] * 8)) == Arrows.all()

    def test_odds_drop_after_first_arrow(self, scripted_rng):
        rng = scripted_rng([1, 0, 1, 1, 1, 1, 1, 1])
        arrows = random_arrows(rng)
        assert arrows.flags == 0b10
        assert rng.calls[:2] == [(0, 1), (0, 1)]
        assert rng.calls[2:] == [(0, 3)] * 6

    def test_no_arrows(self, scripted_rng):
        rng = scripted_rng([1] * 8)
        assert random_arrows(rng).flags == 0
        assert rng.calls == [(0, 1)] * 8


class TestRandomHand:

    def test_hand(self):
        hand = random_hand(np.random.default_rng(3), Color.RED, size=4)
        assert len(hand) == 4
        assert all(owned.color is Color.RED for owned in hand)

    def test_seeded_cards_repeat(self):
        first = [random_card(np.random.default_rng(11)) for _ in range(3)]
        second = [random_card(np.random.default_rng(11)) for _ in range(3)]
        assert first == second
