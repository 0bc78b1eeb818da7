"""
战斗结算

两阶段随机计分:
1. 按等级在 STAT_RANGES 中掷出最大分数
2. 在 [0, 最大分数] 中再掷一次，用最大分数减去该值得到最终分数

最终分数高者获胜，相等为平局
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple
import logging

from .cards import Card, CardClass
from .stats import roll_stat, stat_range

logger = logging.getLogger(__name__)


class BattleResult(Enum):
    """战斗结果"""
    ATTACKER = "attacker"
    DEFENDER = "defender"
    DRAW = "draw"


@dataclass(frozen=True)
class BattleRoll:
    """
    一次战斗的全部中间值

    Attributes:
        attacker_level: 攻击方进攻等级
        defender_level: 防守方防御等级
        max_attack: 攻击方最大分数
        max_defense: 防守方最大分数
        attack_score: 攻击方第二次掷骰
        defense_score: 防守方第二次掷骰
        result: 战斗结果
    """
    attacker_level: int
    defender_level: int
    max_attack: int
    max_defense: int
    attack_score: int
    defense_score: int
    result: BattleResult

    @property
    def final_attack(self) -> int:
        return self.max_attack - self.attack_score

    @property
    def final_defense(self) -> int:
        return self.max_defense - self.defense_score


# (类型名称, 进攻数值名称, 防御数值名称)
_CLASS_WORDING = {
    CardClass.PHYSICAL: ("physical", "power", "physical defense"),
    CardClass.MAGICAL: ("magical", "power", "magical defense"),
    CardClass.FLEXIBLE: ("flexible", "power", "lowest stat"),
    CardClass.ASSAULT: ("assault", "highest stat", "lowest stat"),
}


def _describe(card: Card) -> str:
    return (
        f"{card} (power {card.power}, class {card.card_class.name.lower()}, "
        f"physical defense {card.physical_defense}, "
        f"magical defense {card.magical_defense})"
    )


def resolve_battle(
    attacker: Card,
    defender: Card,
    rng,
    narrate: Optional[Callable[[str], None]] = None,
) -> BattleRoll:
    """
    结算一次战斗

    普通模式与讲解模式共用此函数，讲解只是附加输出，不影响任何取值

    Args:
        attacker: 攻击方
        defender: 防守方
        rng: 随机源 (np.random.Generator 或同接口对象)
        narrate: 讲解输出回调，None 表示不讲解

    Returns:
        BattleRoll
    """
    say = narrate if narrate is not None else (lambda _line: None)

    say(f"Attacker: {_describe(attacker)}")
    say(f"Defender: {_describe(defender)}")
    kind, attack_stat, defense_stat = _CLASS_WORDING[attacker.card_class]
    say(
        f"The attacker is a {kind} card, so it will use its {attack_stat} level "
        f"to attack the defender's {defense_stat}."
    )

    attacker_level = attacker.offense_level()
    low, high = stat_range(attacker_level)
    say(
        f"The attacker's level is {attacker_level}. That means it will roll between "
        f"{low} and {high} to determine its max attack score."
    )
    max_attack = roll_stat(attacker_level, rng)
    say(f"The attacker's max score is {max_attack}.")

    defender_level = attacker.defense_level(defender)
    low, high = stat_range(defender_level)
    say(
        f"The defender's level is {defender_level}. That means it will roll between "
        f"{low} and {high} to determine its max defense score."
    )
    max_defense = roll_stat(defender_level, rng)
    say(f"The defender's max score is {max_defense}.")

    attack_score = int(rng.integers(0, max_attack, endpoint=True))
    say(
        "The attacker now rolls a random number between 0 and its max attack "
        f"score: {attack_score}."
    )
    defense_score = int(rng.integers(0, max_defense, endpoint=True))
    say(
        "The defender now rolls a random number between 0 and its max defense "
        f"score: {defense_score}."
    )

    final_attack = max_attack - attack_score
    say(
        "The attacker now subtracts its score from its max score "
        f"({max_attack} - {attack_score}): {final_attack}."
    )
    final_defense = max_defense - defense_score
    say(
        "The defender now subtracts its score from its max score "
        f"({max_defense} - {defense_score}): {final_defense}."
    )

    say("The card with the highest final score wins.")
    if final_attack == final_defense:
        result = BattleResult.DRAW
        say("The scores were equal, so the battle is a draw.")
    elif final_attack > final_defense:
        result = BattleResult.ATTACKER
        say("The attacker's score was higher than the defender's score, so the attacker wins.")
    else:
        result = BattleResult.DEFENDER
        say("The defender's score was higher than the attacker's score, so the defender wins.")

    logger.debug(
        "Battle %s vs %s: levels %d/%d, max %d/%d, final %d/%d -> %s",
        attacker, defender, attacker_level, defender_level,
        max_attack, max_defense, final_attack, final_defense, result.value,
    )

    return BattleRoll(
        attacker_level=attacker_level,
        defender_level=defender_level,
        max_attack=max_attack,
        max_defense=max_defense,
        attack_score=attack_score,
        defense_score=defense_score,
        result=result,
    )


def battle(attacker: Card, defender: Card, rng) -> BattleResult:
    """结算战斗并只返回结果"""
    return resolve_battle(attacker, defender, rng).result


def explain_battle(attacker: Card, defender: Card, rng) -> Tuple[BattleResult, List[str]]:
    """
    结算战斗并返回逐步讲解

    Returns:
        (结果, 讲解文本行) 元组
    """
    lines: List[str] = []
    roll = resolve_battle(attacker, defender, rng, narrate=lines.append)
    return roll.result, lines
