"""
gamecost/estimator/models.py - 비용 계산 입력/출력 데이터 모델

입력(TrafficParameters)은 생성 시점에 불변식을 검증하며, 위반 시
``ValidationError`` 로 즉시 거부한다 (값을 보정하지 않음).
출력(CostBreakdown 등)은 매 호출마다 새로 계산되는 파생 데이터다.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any

from gamecost.exceptions import ValidationError

DEFAULT_INSTANCE_TYPE = "c5.large"
DEFAULT_STORAGE_GB = 10.0
DEFAULT_MONTHLY_DATA_TRANSFER_GB = 100.0

# 원본 API의 camelCase 키 -> 필드명
_FIELD_ALIASES: dict[str, str] = {
    "concurrentPlayers": "concurrent_players",
    "sessionDurationHours": "session_duration_hours",
    "regionsCount": "regions_count",
    "instanceType": "instance_type",
    "fleetType": "fleet_mode",
    "fleetMode": "fleet_mode",
    "fleet_type": "fleet_mode",
    "storageGB": "storage_gb",
    "monthlyDataTransferGB": "monthly_data_transfer_gb",
    "monthlyMatchmakingRequests": "monthly_matchmaking_requests",
}


class FleetMode(str, Enum):
    """플릿 요금 모드"""

    SPOT = "spot"
    ON_DEMAND = "on_demand"

    @classmethod
    def parse(cls, value: FleetMode | str) -> FleetMode:
        """문자열을 FleetMode로 변환 (``on-demand`` 표기 허용)

        Raises:
            ValidationError: 알 수 없는 값
        """
        if isinstance(value, FleetMode):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ValidationError("fleet_mode", value, "spot | on_demand")


def _require_int(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(name, value, f"정수 >= {minimum}")
    if value < minimum:
        raise ValidationError(name, value, f">= {minimum}")


def _require_number(name: str, value: Any, minimum: float, inclusive: bool) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(name, value, "유한한 숫자")
    if value < minimum or (not inclusive and value == minimum):
        raise ValidationError(name, value, f"{'>=' if inclusive else '>'} {minimum}")


def normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """camelCase/snake_case 혼용 키를 필드명으로 정규화"""
    return {_FIELD_ALIASES.get(key, key): value for key, value in data.items()}


@dataclass(frozen=True)
class TrafficParameters:
    """트래픽 파라미터 (호출자 입력)

    Attributes:
        concurrent_players: 동시 접속자 수 (>= 1)
        session_duration_hours: 평균 세션 길이 (시간, > 0)
        instance_type: 인스턴스 타입 ID (예: ``"c5.large"``)
        regions_count: 배포 리전 수 (>= 1)
        fleet_mode: ``spot`` 또는 ``on_demand``
        storage_gb: 게임 빌드 스토리지 (GB, >= 0)
        monthly_data_transfer_gb: 월간 데이터 전송량 (GB, >= 0)
        monthly_matchmaking_requests: 월간 매치메이킹 요청 수 (>= 0)
    """

    concurrent_players: int
    session_duration_hours: float
    instance_type: str = DEFAULT_INSTANCE_TYPE
    regions_count: int = 1
    fleet_mode: FleetMode = FleetMode.ON_DEMAND
    storage_gb: float = DEFAULT_STORAGE_GB
    monthly_data_transfer_gb: float = DEFAULT_MONTHLY_DATA_TRANSFER_GB
    monthly_matchmaking_requests: int = 0

    def __post_init__(self) -> None:
        _require_int("concurrent_players", self.concurrent_players, 1)
        _require_number("session_duration_hours", self.session_duration_hours, 0, inclusive=False)
        _require_int("regions_count", self.regions_count, 1)
        _require_number("storage_gb", self.storage_gb, 0, inclusive=True)
        _require_number("monthly_data_transfer_gb", self.monthly_data_transfer_gb, 0, inclusive=True)
        _require_int("monthly_matchmaking_requests", self.monthly_matchmaking_requests, 0)

        if not isinstance(self.instance_type, str) or not self.instance_type.strip():
            raise ValidationError("instance_type", self.instance_type, "비어있지 않은 인스턴스 타입")

        # frozen 데이터클래스이므로 정규화는 object.__setattr__ 사용
        object.__setattr__(self, "fleet_mode", FleetMode.parse(self.fleet_mode))

    @property
    def is_spot(self) -> bool:
        return self.fleet_mode is FleetMode.SPOT

    def replace(self, **changes: Any) -> TrafficParameters:
        """일부 필드를 바꾼 새 파라미터 (다시 검증됨)"""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["fleet_mode"] = self.fleet_mode.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrafficParameters:
        """딕셔너리에서 생성 (camelCase 키 허용, 알 수 없는 키는 거부)

        Raises:
            ValidationError: 필수 필드 누락, 알 수 없는 키, 불변식 위반
        """
        normalized = normalize_keys(data)
        unknown = set(normalized) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValidationError("params", sorted(unknown), "알려진 파라미터 키")
        for required in ("concurrent_players", "session_duration_hours"):
            if required not in normalized:
                raise ValidationError(required, None, "필수 값")
        return cls(**normalized)


# =============================================================================
# 비용 내역
# =============================================================================


@dataclass(frozen=True)
class ComputeCost:
    hourly_rate: float
    instances_needed: int
    monthly_hours: float
    monthly_cost: float


@dataclass(frozen=True)
class StorageCost:
    size_gb: float
    monthly_cost: float


@dataclass(frozen=True)
class DataTransferCost:
    monthly_gb: float
    monthly_cost: float


@dataclass(frozen=True)
class PlatformServicesCost:
    component_costs: Mapping[str, float] = field(default_factory=dict)
    total: float = 0.0


@dataclass(frozen=True)
class CostTotals:
    initial_setup: float
    monthly_operational: float


@dataclass(frozen=True)
class CostBreakdown:
    """항목별 비용 내역

    모든 소계는 개별 조회 가능하다. 부분 결과는 없다: 계산이 실패하면
    예외가 발생하고 이 객체는 만들어지지 않는다.
    """

    compute: ComputeCost
    storage: StorageCost
    data_transfer: DataTransferCost
    platform_services: PlatformServicesCost
    total: CostTotals

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["platform_services"]["component_costs"] = dict(self.platform_services.component_costs)
        return data


@dataclass(frozen=True)
class ScenarioResult:
    """이름 붙은 트래픽 프리셋의 비용 계산 결과"""

    label: str
    params: TrafficParameters
    costs: CostBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "params": self.params.to_dict(), "costs": self.costs.to_dict()}


class AlternativeKind(str, Enum):
    """대안 구성 종류"""

    ARM_INSTANCES = "arm_instances"
    SPOT_FLEET = "spot_fleet"
    RIGHT_SIZED = "right_sized"


@dataclass(frozen=True)
class AlternativeConfig:
    """기준 구성 대비 대안 구성의 월 비용과 절감률

    Attributes:
        kind: 대안 종류
        name: 표시 이름
        description: 설명
        params: 대안 구성 파라미터
        monthly_estimate: 대안 월 운영비
        savings_percentage: 절감률 (%, 음수는 0으로 고정)
        tradeoffs: 종류별 고정 설명 문구
    """

    kind: AlternativeKind
    name: str
    description: str
    params: TrafficParameters
    monthly_estimate: float
    savings_percentage: float
    tradeoffs: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "description": self.description,
            "params": self.params.to_dict(),
            "monthly_estimate": self.monthly_estimate,
            "savings_percentage": self.savings_percentage,
            "tradeoffs": list(self.tradeoffs),
        }
