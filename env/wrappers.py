"""
环境包装器

提供常用的环境增强功能
"""
from typing import Dict, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import Wrapper


class FlattenObservationWrapper(Wrapper):
    """
    将字典观测展平为单一向量

    用于不支持字典观测的算法
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)

        flat_dim = sum(
            int(np.prod(space.shape)) for space in env.observation_space.spaces.values()
        )

        self.observation_space = gym.spaces.Box(
            low=-1.0,
            high=1.0,
            shape=(flat_dim,),
            dtype=np.float32,
        )

    def observation(self, obs: Dict[str, np.ndarray]) -> np.ndarray:
        """展平观测 (按观测空间的键顺序)"""
        return np.concatenate([
            np.asarray(obs[key], dtype=np.float32).flatten()
            for key in self.env.observation_space.spaces
        ])

    def reset(self, **kwargs) -> Tuple[np.ndarray, Dict]:
        obs, info = self.env.reset(**kwargs)
        return self.observation(obs), info

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return self.observation(obs), reward, terminated, truncated, info


class RecordEpisodeStatistics(Wrapper):
    """
    记录回合统计信息

    回合结束时在 info["episode"] 中给出:
    r (总奖励), l (步数), battles / flips / rerolls (整局累计，
    含对手行动), winner, score
    """

    COUNTERS = ("battles", "flips", "rerolls")

    def __init__(self, env: gym.Env):
        super().__init__(env)
        self._reset_counters()

    def _reset_counters(self):
        self._episode_reward = 0.0
        self._episode_length = 0
        self._totals = {key: 0 for key in self.COUNTERS}

    def reset(self, **kwargs) -> Tuple[Dict, Dict]:
        obs, info = self.env.reset(**kwargs)
        self._reset_counters()
        return obs, info

    def step(self, action) -> Tuple[Dict, float, bool, bool, Dict]:
        obs, reward, terminated, truncated, info = self.env.step(action)

        self._episode_reward += reward
        self._episode_length += 1
        for key in self.COUNTERS:
            self._totals[key] += info.get(key, 0)

        if terminated or truncated:
            info["episode"] = {
                "r": self._episode_reward,
                "l": self._episode_length,
                **self._totals,
                "winner": info.get("winner"),
                "score": info.get("score"),
            }

        return obs, reward, terminated, truncated, info


def wrap_env(env: gym.Env, flatten_obs: bool = False) -> gym.Env:
    """
    记录回合统计，并可选展平观测

    Args:
        env: 基础环境
        flatten_obs: 是否展平观测

    Returns:
        包装后的环境
    """
    env = RecordEpisodeStatistics(env)
    if flatten_obs:
        env = FlattenObservationWrapper(env)
    return env
