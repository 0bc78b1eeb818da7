"""
对战竞技场

组织两个智能体直接在 GameState 上对战 (蓝方 vs 红方)
"""
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass
from collections import defaultdict
from itertools import permutations
import logging

import numpy as np

from core.cards import Color
from core.config import GameConfig
from core.state import GameState
from env.observation import ObservationBuilder
from env.tetra_env import decode_action, encode_action

from .evaluator import Agent

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """对局结果"""
    agents: Tuple[str, str]  # (blue, red)
    winner: str  # "blue", "red" or "draw"
    score: Dict[str, int]
    length: int
    battles: int
    draws: int  # 平局重掷次数

    @property
    def winner_agent(self) -> Optional[str]:
        if self.winner == "blue":
            return self.agents[0]
        if self.winner == "red":
            return self.agents[1]
        return None


@dataclass
class TournamentResult:
    """锦标赛结果"""
    standings: Dict[str, Dict[str, float]]
    total_games: int
    matches: List[MatchResult]

    def get_ranking(self) -> List[Tuple[str, float]]:
        """获取排名"""
        return sorted(
            [(name, stats.get("win_rate", 0.0)) for name, stats in self.standings.items()],
            key=lambda x: x[1],
            reverse=True,
        )

    def __repr__(self) -> str:
        ranking = self.get_ranking()
        lines = [f"Tournament Results ({self.total_games} games):"]
        for i, (name, win_rate) in enumerate(ranking):
            lines.append(f"  {i+1}. {name}: {win_rate:.2%}")
        return "\n".join(lines)


class Arena:
    """
    对战竞技场

    组织智能体之间的对战
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.rng = np.random.default_rng(seed)
        self._obs_builder = ObservationBuilder(self.config)

    def _play_game(self, blue: Agent, red: Agent) -> MatchResult:
        """单局对战"""
        state = GameState.initial(rng=self.rng, config=self.config)
        agents = {Color.BLUE: blue, Color.RED: red}
        for agent in agents.values():
            agent.reset()

        while not state.is_finished:
            player = state.current_player
            obs = self._obs_builder.build(state, player).to_dict()
            legal_actions = [encode_action(move) for move in state.get_legal_actions()]
            action = agents[player].act(obs, legal_actions)
            move = decode_action(action)
            if not state.is_legal(move):
                raise ValueError(f"Agent {agents[player].name} chose illegal action {action}")
            state.play(move)

        winner = state.winner
        reports = [report for _, _, report in state.history]
        return MatchResult(
            agents=(blue.name, red.name),
            winner=winner.value if winner is not None else "draw",
            score={color.value: count for color, count in state.score().items()},
            length=state.step_count,
            battles=sum(len(report.battles) for report in reports),
            draws=sum(report.draws for report in reports),
        )

    def play_match(
        self,
        blue: Agent,
        red: Agent,
        n_games: int = 1,
    ) -> List[MatchResult]:
        """
        进行对局

        Args:
            blue: 蓝方智能体
            red: 红方智能体
            n_games: 对局数

        Returns:
            对局结果列表
        """
        return [self._play_game(blue, red) for _ in range(n_games)]

    def round_robin(
        self,
        agents: List[Agent],
        games_per_match: int = 10,
    ) -> TournamentResult:
        """
        循环赛

        每对智能体分别以蓝方、红方各对战一次

        Args:
            agents: 智能体列表
            games_per_match: 每场比赛的对局数

        Returns:
            锦标赛结果
        """
        standings = {agent.name: defaultdict(float) for agent in agents}
        all_matches = []

        for i, j in permutations(range(len(agents)), 2):
            results = self.play_match(agents[i], agents[j], games_per_match)
            all_matches.extend(results)

            for result in results:
                for name in result.agents:
                    standings[name]["games"] += 1
                if result.winner_agent is None:
                    for name in result.agents:
                        standings[name]["draws"] += 1
                else:
                    standings[result.winner_agent]["wins"] += 1

        # 计算胜率
        for name, stats in standings.items():
            if stats["games"] > 0:
                stats["win_rate"] = stats["wins"] / stats["games"]
                stats["draw_rate"] = stats["draws"] / stats["games"]

        logger.info("Round robin finished: %d games", len(all_matches))

        return TournamentResult(
            standings={name: dict(stats) for name, stats in standings.items()},
            total_games=len(all_matches),
            matches=all_matches,
        )
