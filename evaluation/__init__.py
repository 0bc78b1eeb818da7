"""
Evaluation Layer - 评估框架

Modules:
    evaluator: 评估器和智能体
    arena: 对战竞技场
    metrics: 评估指标
"""
from .evaluator import (
    EvalResult,
    Agent,
    RandomAgent,
    Evaluator,
)
from .arena import (
    MatchResult,
    TournamentResult,
    Arena,
)
from .metrics import (
    BattleOdds,
    estimate_battle_odds,
    RunningStats,
)

__all__ = [
    # evaluator
    "EvalResult",
    "Agent",
    "RandomAgent",
    "Evaluator",
    # arena
    "MatchResult",
    "TournamentResult",
    "Arena",
    # metrics
    "BattleOdds",
    "estimate_battle_odds",
    "RunningStats",
]
