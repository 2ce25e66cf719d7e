"""
gamecost/estimator/scenarios.py - 트래픽 시나리오 비교

고정된 트래픽 프리셋(Low/Medium/High/Peak)마다 동시 접속자와 세션 길이만
바꿔 비용을 계산한다. 인스턴스 타입, 플릿 모드, 스토리지, 전송량, 리전 수는
기준 파라미터에서 그대로 이어받는다.

결과 순서는 프리셋 선언 순서이며, 비용 기준으로 정렬하지 않는다.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from gamecost.exceptions import ValidationError
from gamecost.pricing.constants import DEFAULT_REGION

from .calculator import CostCalculator
from .models import (
    DEFAULT_INSTANCE_TYPE,
    DEFAULT_MONTHLY_DATA_TRANSFER_GB,
    DEFAULT_STORAGE_GB,
    FleetMode,
    ScenarioResult,
    TrafficParameters,
    normalize_keys,
)


@dataclass(frozen=True)
class TrafficPreset:
    label: str
    concurrent_players: int
    session_duration_hours: float


TRAFFIC_PRESETS: tuple[TrafficPreset, ...] = (
    TrafficPreset("Low Traffic", 100, 1),
    TrafficPreset("Medium Traffic", 500, 2),
    TrafficPreset("High Traffic", 2000, 3),
    TrafficPreset("Peak Traffic", 5000, 2),
)

# 프리셋이 덮어쓰지 않는 필드와 기본값
_CARRIED_DEFAULTS: dict[str, Any] = {
    "regions_count": 1,
    "instance_type": DEFAULT_INSTANCE_TYPE,
    "fleet_mode": FleetMode.ON_DEMAND,
    "storage_gb": DEFAULT_STORAGE_GB,
    "monthly_data_transfer_gb": DEFAULT_MONTHLY_DATA_TRANSFER_GB,
    "monthly_matchmaking_requests": 0,
}

BaseParams = Union[TrafficParameters, Mapping[str, Any], None]


def _carried_fields(base_params: BaseParams) -> dict[str, Any]:
    if base_params is None:
        return dict(_CARRIED_DEFAULTS)
    if isinstance(base_params, TrafficParameters):
        source = base_params.to_dict()
    elif isinstance(base_params, Mapping):
        source = normalize_keys(base_params)
    else:
        raise ValidationError("base_params", type(base_params).__name__, "TrafficParameters | dict | None")

    # 명시적으로 None인 값은 미지정으로 취급 (0은 유효한 값으로 유지)
    return {
        name: source[name] if source.get(name) is not None else default for name, default in _CARRIED_DEFAULTS.items()
    }


def generate_scenarios(
    calculator: CostCalculator,
    base_params: BaseParams = None,
    region: str = DEFAULT_REGION,
    presets: tuple[TrafficPreset, ...] = TRAFFIC_PRESETS,
) -> list[ScenarioResult]:
    """프리셋별 비용 계산

    Args:
        calculator: 비용 집계기
        base_params: 기준 파라미터 (일부만 지정 가능)
        region: 리전 ID
        presets: 프리셋 목록 (기본: Low/Medium/High/Peak)

    Returns:
        프리셋 선언 순서의 ScenarioResult 목록

    Raises:
        ValidationError: 기준 파라미터가 불변식을 위반하는 경우
        PricingNotFoundError: 인스턴스/리전 가격이 없는 경우
    """
    carried = _carried_fields(base_params)
    results: list[ScenarioResult] = []

    for preset in presets:
        params = TrafficParameters(
            concurrent_players=preset.concurrent_players,
            session_duration_hours=preset.session_duration_hours,
            **carried,
        )
        results.append(ScenarioResult(label=preset.label, params=params, costs=calculator.calculate_costs(params, region)))

    return results
