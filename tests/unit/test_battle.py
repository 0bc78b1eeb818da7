"""战斗结算测试"""
import numpy as np
import pytest

from core.battle import BattleResult, battle, explain_battle, resolve_battle
from core.codec import parse_card


class TestResolveBattle:
    """结算流程测试"""

    def test_draw_order_and_result(self, scripted_rng):
        attacker = parse_card("1M23")
        defender = parse_card("2P34")
        # 攻击等级 1 -> [16, 31]，防御等级 (魔法防御) 4 -> [64, 79]
        rng = scripted_rng([20, 70, 5, 60])
        roll = resolve_battle(attacker, defender, rng)

        assert rng.calls == [(16, 31), (64, 79), (0, 20), (0, 70)]
        assert roll.attacker_level == 1
        assert roll.defender_level == 4
        assert roll.final_attack == 15
        assert roll.final_defense == 10
        assert roll.result is BattleResult.ATTACKER

    def test_defender_wins(self, scripted_rng):
        rng = scripted_rng([20, 70, 20, 0])
        assert battle(parse_card("1M23"), parse_card("2P34"), rng) is BattleResult.DEFENDER

    def test_equal_scores_draw(self, scripted_rng):
        rng = scripted_rng([20, 70, 10, 60])
        assert battle(parse_card("1M23"), parse_card("2P34"), rng) is BattleResult.DRAW

    def test_always_returns_result(self):
        rng = np.random.default_rng(1)
        codes = ["0P00", "FAFF", "7X3C", "1M23", "FP00", "0P0F"]
        for a in codes:
            for d in codes:
                assert battle(parse_card(a), parse_card(d), rng) in BattleResult


class TestExplainBattle:
    """讲解模式测试"""

    def test_same_outcome_as_plain(self, scripted_rng):
        attacker = parse_card("3A91")
        defender = parse_card("4X27")
        # 突击: 进攻等级 9 -> [144, 159]，防御等级 min(2, 7, 4) = 2 -> [32, 47]
        draws = [150, 40, 10, 25]

        plain = resolve_battle(attacker, defender, scripted_rng(draws))
        result, lines = explain_battle(attacker, defender, scripted_rng(draws))

        assert result is plain.result
        assert lines

    def test_narration_mentions_values(self, scripted_rng):
        result, lines = explain_battle(
            parse_card("1M23"), parse_card("2P34"), scripted_rng([20, 70, 5, 60])
        )
        text = "\n".join(lines)
        assert result is BattleResult.ATTACKER
        assert "between 16 and 31" in text
        assert "(20 - 5): 15" in text
        assert "(70 - 60): 10" in text
        assert lines[-1].endswith("so the attacker wins.")

    def test_narration_draw(self, scripted_rng):
        result, lines = explain_battle(
            parse_card("1M23"), parse_card("2P34"), scripted_rng([20, 70, 10, 60])
        )
        assert result is BattleResult.DRAW
        assert "draw" in lines[-1]


class TestStrongAttacker:
    """强弱悬殊的统计测试"""

    def test_both_outcomes_possible(self, scripted_rng):
        attacker = parse_card("FP00")
        defender = parse_card("0P0F")
        assert battle(attacker, defender, scripted_rng([240, 15, 240, 0])) is BattleResult.DEFENDER
        assert battle(attacker, defender, scripted_rng([240, 15, 0, 0])) is BattleResult.ATTACKER
