"""
gamecost/estimator/alternatives.py - 대안 구성 비교

기준 구성의 월 운영비를 한 번 계산한 뒤, 다음 대체안마다 다시 계산하여
절감률을 구한다 (순서 고정).

    1. ARM(Graviton) 패밀리 전환: x86 패밀리이고, 같은 사이즈의 ARM 대응 타입이
       해당 리전에 있을 때
    2. Spot 플릿 전환: 현재 on_demand일 때
    3. 사이즈 한 단계 축소: 같은 패밀리의 한 티어 작은 타입이 리전에 있을 때

절감률 = max(0, (기준 - 대안) / 기준 × 100). 비용이 늘어나는 대안은 0%.
"""

from __future__ import annotations

import logging

from gamecost.pricing.catalog import smaller_size
from gamecost.pricing.constants import DEFAULT_REGION
from gamecost.pricing.types import is_arm_family

from .calculator import CostCalculator
from .models import AlternativeConfig, AlternativeKind, FleetMode, TrafficParameters

logger = logging.getLogger(__name__)

# x86 패밀리 -> Graviton 대응 패밀리
ARM_EQUIVALENTS: dict[str, str] = {
    "c5": "c6g",
    "c5n": "c6gn",
    "c6i": "c7g",
    "m5": "m6g",
    "m6i": "m7g",
    "r5": "r6g",
    "r6i": "r7g",
    "t3": "t4g",
}

TRADEOFFS: dict[AlternativeKind, tuple[str, ...]] = {
    AlternativeKind.ARM_INSTANCES: (
        "ARM 호환 게임 서버 빌드 필요",
        "아키텍처 호환을 위한 코드 수정이 필요할 수 있음",
        "vCPU당 비용과 에너지 효율이 더 좋음",
    ),
    AlternativeKind.SPOT_FLEET: (
        "2분 전 통지 후 인스턴스가 회수될 수 있음",
        "게임 세션의 정상 종료 처리가 필요",
        "유연하고 장애 허용적인 워크로드에 적합",
        "인스턴스 교체는 플랫폼이 자동으로 처리",
    ),
    AlternativeKind.RIGHT_SIZED: (
        "인스턴스당 컴퓨트 용량 감소",
        "같은 플레이어 수에 더 많은 인스턴스가 필요할 수 있음",
        "현재 인스턴스가 과다 할당된 경우 사용률 개선",
    ),
}


def savings_percentage(baseline_monthly: float, alternative_monthly: float) -> float:
    """절감률 (%). 기준 비용이 0 이하이거나 비용이 늘면 0"""
    if baseline_monthly <= 0:
        return 0.0
    return max(0.0, (baseline_monthly - alternative_monthly) / baseline_monthly * 100)


def arm_equivalent(instance_type: str) -> str | None:
    """x86 인스턴스 타입의 같은 사이즈 ARM 대응 타입 (없으면 ``None``)"""
    family, _, size = instance_type.partition(".")
    if not size or is_arm_family(family):
        return None
    arm_family = ARM_EQUIVALENTS.get(family)
    return f"{arm_family}.{size}" if arm_family else None


def smaller_instance_type(instance_type: str) -> str | None:
    """같은 패밀리의 한 티어 작은 타입 (없으면 ``None``)"""
    family, _, size = instance_type.partition(".")
    smaller = smaller_size(size) if size else None
    return f"{family}.{smaller}" if smaller else None


def _candidates(base_params: TrafficParameters, available: set[str]) -> list[tuple[AlternativeKind, str, str, TrafficParameters]]:
    candidates: list[tuple[AlternativeKind, str, str, TrafficParameters]] = []

    arm_type = arm_equivalent(base_params.instance_type)
    if arm_type and arm_type in available:
        candidates.append(
            (
                AlternativeKind.ARM_INSTANCES,
                "Graviton (ARM) Instances",
                f"ARM 기반 {arm_type} 인스턴스로 전환하여 가격 대비 성능 개선",
                base_params.replace(instance_type=arm_type),
            )
        )
    elif arm_type:
        logger.debug(f"ARM 대응 타입 가격 없음: {arm_type}")

    if base_params.fleet_mode is FleetMode.ON_DEMAND:
        candidates.append(
            (
                AlternativeKind.SPOT_FLEET,
                "Spot Fleet Configuration",
                "Spot 인스턴스로 컴퓨트 비용 절감",
                base_params.replace(fleet_mode=FleetMode.SPOT),
            )
        )

    smaller_type = smaller_instance_type(base_params.instance_type)
    if smaller_type and smaller_type in available:
        candidates.append(
            (
                AlternativeKind.RIGHT_SIZED,
                "Right-sized Instances",
                f"용량이 과다하면 {smaller_type} 로 축소",
                base_params.replace(instance_type=smaller_type),
            )
        )

    return candidates


def propose_alternatives(
    calculator: CostCalculator,
    base_params: TrafficParameters,
    region: str = DEFAULT_REGION,
) -> list[AlternativeConfig]:
    """기준 구성 대비 대안 구성 목록

    Raises:
        PricingNotFoundError: 기준 구성의 가격이 없는 경우
    """
    baseline = calculator.calculate_costs(base_params, region)
    baseline_monthly = baseline.total.monthly_operational
    available = set(calculator.resolver.instance_types(region))

    alternatives: list[AlternativeConfig] = []
    for kind, name, description, params in _candidates(base_params, available):
        alt_monthly = calculator.calculate_costs(params, region).total.monthly_operational
        alternatives.append(
            AlternativeConfig(
                kind=kind,
                name=name,
                description=description,
                params=params,
                monthly_estimate=alt_monthly,
                savings_percentage=savings_percentage(baseline_monthly, alt_monthly),
                tradeoffs=TRADEOFFS[kind],
            )
        )

    logger.debug(f"대안 구성 {len(alternatives)}개: {base_params.instance_type}/{region}")
    return alternatives
