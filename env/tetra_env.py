"""
Tetra Master Gymnasium 环境

遵循标准 Gymnasium API；智能体控制一方，另一方为随机对手
"""
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import logging

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from core.cards import Color
from core.config import BOARD_SIZE, GameConfig
from core.state import GameState, Move

from .observation import CARD_FEATURES, ObservationBuilder
from .reward import RewardCalculator, RewardConfig, RewardType

logger = logging.getLogger(__name__)

CELLS = BOARD_SIZE * BOARD_SIZE

# 对手策略: (状态, 随机源) -> 行动
OpponentPolicy = Callable[[GameState, np.random.Generator], Move]


def random_opponent(state: GameState, rng: np.random.Generator) -> Move:
    """在合法行动中均匀随机选择"""
    legal_actions = state.get_legal_actions()
    return legal_actions[int(rng.integers(len(legal_actions)))]


def encode_action(move: Move) -> int:
    """行动 -> 动作索引: hand_index * 16 + (row - 1) * 4 + (column - 1)"""
    return move.hand_index * CELLS + (move.row - 1) * BOARD_SIZE + (move.column - 1)


def decode_action(index: int) -> Move:
    """动作索引 -> 行动"""
    hand_index, cell = divmod(int(index), CELLS)
    row, column = divmod(cell, BOARD_SIZE)
    return Move(hand_index, row + 1, column + 1)


class TetraMasterEnv(gym.Env):
    """
    Tetra Master Gymnasium 环境

    API:
    - reset() -> observation, info
    - step(action) -> observation, reward, terminated, truncated, info

    智能体每步放置一张卡，随后随机对手立即应手
    """

    metadata = {
        "render_modes": ["human", "ansi"],
        "name": "TetraMaster-v0",
    }

    def __init__(
        self,
        render_mode: Optional[str] = None,
        reward_type: str = "sparse",
        agent_color: str = "blue",
        config: Optional[GameConfig] = None,
        opponent: Optional[OpponentPolicy] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            render_mode: 渲染模式 ("human", "ansi", None)
            reward_type: 奖励类型 ("sparse", "shaped")
            agent_color: 智能体一方 ("blue", "red")
            config: 规则配置
            opponent: 对手策略，None 表示随机
            seed: 随机种子 (首次 reset 未指定种子时使用)
        """
        super().__init__()

        self.render_mode = render_mode
        self.config = config or GameConfig()
        self._seed = seed

        self._agent_color = Color(agent_color)
        self._opponent = opponent or random_opponent

        self._obs_builder = ObservationBuilder(self.config)
        self._reward_calculator = RewardCalculator(
            RewardConfig(reward_type=RewardType(reward_type))
        )

        self._state: Optional[GameState] = None

        self._define_spaces()

    def _define_spaces(self):
        """定义观测和动作空间"""
        hand_size = self.config.hand_size

        self.action_space = spaces.Discrete(hand_size * CELLS)

        self.observation_space = spaces.Dict({
            "board_owner": spaces.Box(-1, 1, shape=(BOARD_SIZE, BOARD_SIZE), dtype=np.float32),
            "blocks": spaces.Box(0, 1, shape=(BOARD_SIZE, BOARD_SIZE), dtype=np.float32),
            "board_cards": spaces.Box(
                0, 1, shape=(BOARD_SIZE, BOARD_SIZE, CARD_FEATURES), dtype=np.float32
            ),
            "hand": spaces.Box(0, 1, shape=(hand_size, CARD_FEATURES), dtype=np.float32),
            "hand_mask": spaces.Box(0, 1, shape=(hand_size,), dtype=np.float32),
            "cards_left": spaces.Box(0, 1, shape=(2,), dtype=np.float32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        重置环境

        Args:
            seed: 随机种子
            options: 额外选项 ("first_player": "blue"/"red")

        Returns:
            (observation, info) 元组
        """
        if seed is None and self._seed is not None:
            seed, self._seed = self._seed, None
        super().reset(seed=seed)

        first_player = None
        if options and options.get("first_player"):
            first_player = Color(options["first_player"])

        self._state = GameState.initial(
            rng=self.np_random,
            config=self.config,
            first_player=first_player,
        )

        # 对手先手时立即应手
        self._play_opponent()

        obs = self._build_observation()
        info = self._build_info()

        if self.render_mode == "human":
            self.render()

        return obs, info

    def step(
        self,
        action: Union[int, Move],
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        执行动作

        Args:
            action: 动作索引或 Move 对象

        Returns:
            (observation, reward, terminated, truncated, info) 元组
        """
        if self._state is None:
            raise RuntimeError("Environment not reset. Call reset() first.")

        move = action if isinstance(action, Move) else decode_action(action)

        if self._state.is_finished or not self._state.is_legal(move):
            # 非法动作：给予惩罚并保持状态
            obs = self._build_observation()
            info = self._build_info()
            info["error"] = "Invalid action"
            return obs, -1.0, self._state.is_finished, False, info

        prev_score = self._state.score()
        first_report = len(self._state.history)
        self._state.play(move)
        self._play_opponent()

        obs = self._build_observation()
        reward = self._reward_calculator.compute(self._state, self._agent_color, prev_score)
        terminated = self._state.is_finished
        info = self._build_info()

        # 本步 (己方与随后对手的行动) 的战斗统计
        reports = [report for _, _, report in self._state.history[first_report:]]
        info["battles"] = sum(len(report.battles) for report in reports)
        info["flips"] = sum(len(report.flips) for report in reports)
        info["rerolls"] = sum(report.draws for report in reports)

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, False, info

    def _play_opponent(self):
        """对手连续行动，直到轮到智能体或对局结束"""
        while (
            not self._state.is_finished
            and self._state.current_player is not self._agent_color
        ):
            move = self._opponent(self._state, self.np_random)
            self._state.play(move)

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return self._obs_builder.build(self._state, self._agent_color).to_dict()

    def _build_info(self) -> Dict[str, Any]:
        """构建 info 字典"""
        score = self._state.score()
        info = {
            "current_player": self._state.current_player.value,
            "step_count": self._state.step_count,
            "score": {color.value: count for color, count in score.items()},
            "legal_action_mask": self.legal_action_mask(),
        }
        if self._state.is_finished:
            winner = self._state.winner
            info["winner"] = winner.value if winner is not None else "draw"
        return info

    def legal_action_mask(self) -> np.ndarray:
        """合法动作掩码"""
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._state is None or self._state.current_player is not self._agent_color:
            return mask
        for move in self._state.get_legal_actions():
            mask[encode_action(move)] = 1
        return mask

    def get_legal_actions(self) -> List[int]:
        """当前合法动作索引"""
        return [int(i) for i in np.flatnonzero(self.legal_action_mask())]

    def sample_action(self) -> int:
        """随机采样一个合法动作"""
        legal_actions = self.get_legal_actions()
        if not legal_actions:
            return 0
        return legal_actions[int(self.np_random.integers(len(legal_actions)))]

    def render(self) -> Optional[str]:
        """渲染环境"""
        if self.render_mode not in ("ansi", "human") or self._state is None:
            return None
        output = self._state.render()
        if self.render_mode == "human":
            print(output)
        return output

    @property
    def agent_color(self) -> Color:
        return self._agent_color

    @property
    def state(self) -> Optional[GameState]:
        """获取当前状态 (用于调试)"""
        return self._state


def make_env(env_id: str = "TetraMaster-v0", **kwargs) -> TetraMasterEnv:
    """
    工厂函数：创建环境

    Args:
        env_id: 环境 ID
        **kwargs: 环境参数

    Returns:
        TetraMasterEnv 实例
    """
    if env_id != "TetraMaster-v0":
        raise ValueError(f"Unknown env id: {env_id}")
    return TetraMasterEnv(**kwargs)
