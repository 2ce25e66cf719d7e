"""
gamecost/estimator/utilization.py - 피크/오프피크 사용률 모델

동시 접속자와 세션 길이를 월간 인스턴스-시간으로 환산한다.

가정:
    - 월 30일, 하루 중 피크 8시간 / 오프피크 16시간
    - 피크에는 필요 인스턴스 전체, 오프피크에는 20%만 유지
    - 세션이 길수록 점유가 안정적이므로 ``1 + 세션시간/10`` 배 (최대 1.5배)

계산식:
    peak_instance_hours     = instances × 8 × 30
    off_peak_instance_hours = (instances × 0.2) × 16 × 30
    monthly_hours           = (peak + off_peak) × min(1 + session/10, 1.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from gamecost.config import Settings
from gamecost.exceptions import ValidationError

DAYS_PER_MONTH = 30
PEAK_HOURS_PER_DAY = 8
OFF_PEAK_HOURS_PER_DAY = 16
BASELINE_INSTANCE_RATIO = 0.2
SESSION_MULTIPLIER_DIVISOR = 10
SESSION_MULTIPLIER_CAP = 1.5

# 인스턴스당 수용 플레이어 수 (보수적 가정, 가격표와 무관한 튜닝 상수)
PLAYERS_PER_INSTANCE = Settings.PLAYERS_PER_INSTANCE


@dataclass(frozen=True)
class UtilizationEstimate:
    """사용률 모델 중간값"""

    instances_needed: int
    peak_instance_hours: float
    off_peak_instance_hours: float
    base_monthly_hours: float
    session_multiplier: float
    monthly_hours: float


def calculate_instances_needed(concurrent_players: int, players_per_instance: int = PLAYERS_PER_INSTANCE) -> int:
    """필요 인스턴스 수 = ceil(동시 접속자 / 인스턴스당 플레이어)"""
    if concurrent_players < 0:
        raise ValidationError("concurrent_players", concurrent_players, ">= 0")
    if players_per_instance < 1:
        raise ValidationError("players_per_instance", players_per_instance, ">= 1")
    return math.ceil(concurrent_players / players_per_instance)


def session_multiplier(session_duration_hours: float) -> float:
    """세션 길이 배수 (1.5배 상한)"""
    if session_duration_hours < 0:
        raise ValidationError("session_duration_hours", session_duration_hours, ">= 0")
    return min(1 + session_duration_hours / SESSION_MULTIPLIER_DIVISOR, SESSION_MULTIPLIER_CAP)


def estimate_utilization(instances_needed: int, session_duration_hours: float) -> UtilizationEstimate:
    """월간 인스턴스-시간 추정 (중간값 포함)"""
    if instances_needed < 0:
        raise ValidationError("instances_needed", instances_needed, ">= 0")

    peak_hours = PEAK_HOURS_PER_DAY * DAYS_PER_MONTH
    off_peak_hours = OFF_PEAK_HOURS_PER_DAY * DAYS_PER_MONTH

    peak_instance_hours = instances_needed * peak_hours
    off_peak_instance_hours = (instances_needed * BASELINE_INSTANCE_RATIO) * off_peak_hours
    base_monthly_hours = peak_instance_hours + off_peak_instance_hours
    multiplier = session_multiplier(session_duration_hours)

    return UtilizationEstimate(
        instances_needed=instances_needed,
        peak_instance_hours=peak_instance_hours,
        off_peak_instance_hours=off_peak_instance_hours,
        base_monthly_hours=base_monthly_hours,
        session_multiplier=multiplier,
        monthly_hours=base_monthly_hours * multiplier,
    )


def estimate_monthly_hours(instances_needed: int, session_duration_hours: float) -> float:
    """월간 인스턴스-시간"""
    return estimate_utilization(instances_needed, session_duration_hours).monthly_hours
