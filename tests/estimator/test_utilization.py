"""
tests/estimator/test_utilization.py - 피크/오프피크 사용률 모델 테스트
"""

import pytest

from gamecost.estimator.utilization import (
    calculate_instances_needed,
    estimate_monthly_hours,
    estimate_utilization,
    session_multiplier,
)
from gamecost.exceptions import ValidationError


class TestInstancesNeeded:
    @pytest.mark.parametrize(
        "players,expected",
        [(1, 1), (50, 1), (51, 2), (1000, 20), (5000, 100)],
    )
    def test_ceiling_division(self, players, expected):
        """ceil(플레이어 / 50)"""
        assert calculate_instances_needed(players) == expected

    def test_custom_capacity(self):
        assert calculate_instances_needed(100, players_per_instance=30) == 4

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValidationError):
            calculate_instances_needed(100, players_per_instance=0)


class TestSessionMultiplier:
    """세션 길이 배수 테스트"""

    @pytest.mark.parametrize(
        "hours,expected",
        [(0, 1.0), (1, 1.1), (2, 1.2), (5, 1.5), (6, 1.5), (24, 1.5)],
    )
    def test_capped_at_one_and_a_half(self, hours, expected):
        assert session_multiplier(hours) == pytest.approx(expected)

    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            session_multiplier(-1)


class TestMonthlyHours:
    """월간 인스턴스-시간 테스트"""

    def test_documented_example(self):
        """20대, 2시간 세션: peak 4800 + off-peak 1920 = 6720, × 1.2 = 8064"""
        estimate = estimate_utilization(20, 2)

        assert estimate.peak_instance_hours == 4800
        assert estimate.off_peak_instance_hours == pytest.approx(1920)
        assert estimate.base_monthly_hours == pytest.approx(6720)
        assert estimate.session_multiplier == pytest.approx(1.2)
        assert estimate.monthly_hours == pytest.approx(8064)

    def test_zero_instances(self):
        assert estimate_monthly_hours(0, 2) == 0

    def test_linear_in_instances(self):
        assert estimate_monthly_hours(40, 2) == pytest.approx(2 * estimate_monthly_hours(20, 2))

    def test_long_sessions_hit_cap(self):
        assert estimate_monthly_hours(1, 10) == pytest.approx(estimate_monthly_hours(1, 5))
