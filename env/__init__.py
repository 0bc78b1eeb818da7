"""
Environment Layer - Gymnasium 兼容环境

Modules:
    tetra_env: 主环境类
    observation: 观测空间构建
    reward: 奖励函数
    wrappers: 环境包装器
"""
from .tetra_env import (
    TetraMasterEnv,
    make_env,
    random_opponent,
    encode_action,
    decode_action,
)

from .observation import (
    CARD_FEATURES,
    Observation,
    ObservationBuilder,
    card_features,
)

from .reward import (
    RewardType,
    RewardConfig,
    RewardCalculator,
)

from .wrappers import (
    FlattenObservationWrapper,
    RecordEpisodeStatistics,
    wrap_env,
)

__all__ = [
    # env
    "TetraMasterEnv",
    "make_env",
    "random_opponent",
    "encode_action",
    "decode_action",
    # observation
    "CARD_FEATURES",
    "Observation",
    "ObservationBuilder",
    "card_features",
    # reward
    "RewardType",
    "RewardConfig",
    "RewardCalculator",
    # wrappers
    "FlattenObservationWrapper",
    "RecordEpisodeStatistics",
    "wrap_env",
]
