"""数值掷骰测试"""
import numpy as np
import pytest

from core.stats import STAT_RANGES, roll_stat, stat_range


class TestStatRange:

    def test_ranges_are_contiguous(self):
        assert len(STAT_RANGES) == 16
        assert STAT_RANGES[0] == (0, 15)
        assert STAT_RANGES[15] == (240, 255)
        for (_, high), (low, _) in zip(STAT_RANGES, STAT_RANGES[1:]):
            assert low == high + 1

    @pytest.mark.parametrize("level", [-1, 16, 1.5, True])
    def test_invalid_level(self, level):
        with pytest.raises(ValueError):
            stat_range(level)


class TestRollStat:

    def test_requests_inclusive_range(self, scripted_rng):
        rng = scripted_rng([37])
        assert roll_stat(2, rng) == 37
        assert rng.calls == [(32, 47)]

    def test_within_range(self):
        rng = np.random.default_rng(0)
        for level in range(16):
            low, high = stat_range(level)
            for _ in range(50):
                assert low <= roll_stat(level, rng) <= high

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            roll_stat(16, np.random.default_rng(0))
