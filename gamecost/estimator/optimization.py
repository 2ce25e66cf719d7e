"""
gamecost/estimator/optimization.py - 비용 최적화 스캔

기준 구성의 비용 내역, 대안 구성, 권고 목록을 묶어 최적화 리포트를 만든다.

점수:
    50 + min(30, 최대 대안 절감률) + min(20, 5 × 높은 우선순위 권고 수), 최대 100

비용 동인 (월 운영비 대비 비율):
    - 컴퓨트 > 60%
    - 데이터 전송 > 20%
    - 플랫폼 서비스 > 15%
    - 해당 없으면 "고르게 분포"

어드바이저가 ``AdvisoryError`` 를 던지면 경고 로그를 남기고 정적 권고로 대체한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from gamecost.advisory import AdvisoryRequest, AdvisoryService, Priority, Recommendation, StaticAdvisoryService
from gamecost.exceptions import AdvisoryError
from gamecost.pricing.constants import DEFAULT_REGION

from .alternatives import propose_alternatives
from .calculator import CostCalculator
from .models import AlternativeConfig, CostBreakdown, TrafficParameters

logger = logging.getLogger(__name__)

BASE_SCORE = 50
MAX_SAVINGS_POINTS = 30
MAX_PRIORITY_POINTS = 20
POINTS_PER_HIGH_PRIORITY = 5
MAX_SCORE = 100

COMPUTE_DRIVER_RATIO = 0.6
DATA_TRANSFER_DRIVER_RATIO = 0.2
PLATFORM_DRIVER_RATIO = 0.15

MAX_INSIGHT_ITEMS = 3

WELL_DISTRIBUTED = "비용이 항목별로 고르게 분포되어 있음"


@dataclass(frozen=True)
class OptimizationInsights:
    cost_drivers: tuple[str, ...] = ()
    quick_wins: tuple[str, ...] = ()
    long_term_optimizations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "cost_drivers": list(self.cost_drivers),
            "quick_wins": list(self.quick_wins),
            "long_term_optimizations": list(self.long_term_optimizations),
        }


@dataclass(frozen=True)
class CostOptimizationReport:
    """최적화 스캔 결과"""

    score: int
    monthly_estimate: float
    breakdown: CostBreakdown
    recommendations: tuple[Recommendation, ...] = ()
    alternatives: tuple[AlternativeConfig, ...] = ()
    insights: OptimizationInsights = field(default_factory=OptimizationInsights)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "monthly_estimate": self.monthly_estimate,
            "breakdown": self.breakdown.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "alternatives": [a.to_dict() for a in self.alternatives],
            "insights": self.insights.to_dict(),
        }


def calculate_optimization_score(
    alternatives: list[AlternativeConfig] | tuple[AlternativeConfig, ...],
    recommendations: list[Recommendation] | tuple[Recommendation, ...],
) -> int:
    max_savings = max((alt.savings_percentage for alt in alternatives), default=0.0)
    high_priority = sum(1 for rec in recommendations if rec.priority is Priority.HIGH)

    score = (
        BASE_SCORE
        + min(MAX_SAVINGS_POINTS, max_savings)
        + min(MAX_PRIORITY_POINTS, high_priority * POINTS_PER_HIGH_PRIORITY)
    )
    return round(min(MAX_SCORE, score))


def identify_cost_drivers(breakdown: CostBreakdown) -> list[str]:
    total = breakdown.total.monthly_operational
    if total <= 0:
        return [WELL_DISTRIBUTED]

    drivers: list[str] = []
    compute_ratio = breakdown.compute.monthly_cost / total
    transfer_ratio = breakdown.data_transfer.monthly_cost / total
    platform_ratio = breakdown.platform_services.total / total

    if compute_ratio > COMPUTE_DRIVER_RATIO:
        drivers.append(f"컴퓨트 비용 비중 {compute_ratio:.0%}")
    if transfer_ratio > DATA_TRANSFER_DRIVER_RATIO:
        drivers.append(f"데이터 전송 비용 비중 {transfer_ratio:.0%}")
    if platform_ratio > PLATFORM_DRIVER_RATIO:
        drivers.append(f"플랫폼 서비스 비용 비중 {platform_ratio:.0%}")

    return drivers or [WELL_DISTRIBUTED]


def _collect_recommendations(advisor: AdvisoryService | None, request: AdvisoryRequest) -> list[Recommendation]:
    fallback = StaticAdvisoryService()
    if advisor is None:
        return fallback.propose(request)
    try:
        return list(advisor.propose(request))
    except AdvisoryError as e:
        logger.warning(f"어드바이저 실패, 정적 권고로 대체: {e}")
        return fallback.propose(request)


def run_cost_optimization_scan(
    calculator: CostCalculator,
    params: TrafficParameters,
    region: str = DEFAULT_REGION,
    advisor: AdvisoryService | None = None,
) -> CostOptimizationReport:
    """비용 최적화 스캔

    Args:
        calculator: 비용 집계기
        params: 기준 트래픽 파라미터
        region: 리전 ID
        advisor: 권고 서비스 (None이면 정적 권고)

    Raises:
        PricingNotFoundError: 기준 구성의 가격이 없는 경우
    """
    breakdown = calculator.calculate_costs(params, region)
    alternatives = propose_alternatives(calculator, params, region)
    recommendations = _collect_recommendations(advisor, AdvisoryRequest(params=params, region=region, breakdown=breakdown))

    insights = OptimizationInsights(
        cost_drivers=tuple(identify_cost_drivers(breakdown)),
        quick_wins=tuple(r.title for r in recommendations if r.priority is Priority.HIGH)[:MAX_INSIGHT_ITEMS],
        long_term_optimizations=tuple(r.title for r in recommendations if r.priority is not Priority.HIGH)[
            :MAX_INSIGHT_ITEMS
        ],
    )
    score = calculate_optimization_score(alternatives, recommendations)

    logger.debug(f"최적화 스캔: {params.instance_type}/{region} score={score}")
    return CostOptimizationReport(
        score=score,
        monthly_estimate=breakdown.total.monthly_operational,
        breakdown=breakdown,
        recommendations=tuple(recommendations),
        alternatives=tuple(alternatives),
        insights=insights,
    )
