"""
gamecost/estimator/unit_economics.py - 플레이어당 비용 지표

동시 접속자 수에서 월간 활성 사용자(MAU)를 근사하고, 월 운영비를 MAU로
나눈 플레이어당 비용을 계산한다.
"""

from __future__ import annotations

import math

from gamecost.exceptions import ValidationError

# 동시 접속자 / MAU 비율 (동시 접속률 10%)
DEFAULT_CONCURRENCY_RATIO = 0.1


def estimate_monthly_active_users(concurrent_players: int, concurrency_ratio: float = DEFAULT_CONCURRENCY_RATIO) -> int:
    """MAU = ceil(동시 접속자 / 동시 접속률)"""
    if concurrent_players < 0:
        raise ValidationError("concurrent_players", concurrent_players, ">= 0")
    if not 0 < concurrency_ratio <= 1:
        raise ValidationError("concurrency_ratio", concurrency_ratio, "0 < x <= 1")
    # 부동소수점 오차 보정 후 올림
    return math.ceil(round(concurrent_players / concurrency_ratio, 6))


def calculate_cost_per_player(total_monthly_cost: float, monthly_active_users: int) -> float:
    """플레이어당 월 비용 (MAU가 0 이하이면 0)"""
    if monthly_active_users <= 0:
        return 0.0
    return total_monthly_cost / monthly_active_users
