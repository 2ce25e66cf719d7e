"""
gamecost/pricing/types.py - 가격 참조 데이터 타입

가격 데이터는 문자열 키 딕셔너리 대신 불변 데이터클래스로 표현한다.
필드 오타(예: ``s3Standard`` vs ``storageRate``)가 조용히 기본값으로
대체되는 일을 막기 위해, 모든 조회는 명시적 필드로만 이루어진다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

GIB = 1024**3

# Graviton(ARM) 인스턴스 패밀리 판별용 접미사: c6g, m6g, r6g, c7g, c6gn ...
_ARM_FAMILY_MARKERS = ("g", "gn", "gd")


@dataclass(frozen=True)
class PricingEntry:
    """인스턴스 타입 1개의 가격 정보

    Attributes:
        instance_type: 패밀리+사이즈 ID (예: ``"c5.large"``)
        vcpus: vCPU 수
        memory_bytes: 메모리 (바이트)
        hourly_rate: 시간당 USD (원시 컴퓨트 요금)
        platform_multiplier: 관리형 플랫폼이 원시 요금에 붙이는 배수 (>= 1)
    """

    instance_type: str
    vcpus: int
    memory_bytes: int
    hourly_rate: float
    platform_multiplier: float = 1.0

    def __post_init__(self) -> None:
        if "." not in self.instance_type:
            raise ValueError(f"instance_type 형식 오류 (family.size): {self.instance_type!r}")
        if self.hourly_rate < 0:
            raise ValueError(f"hourly_rate는 음수일 수 없음: {self.hourly_rate}")
        if self.platform_multiplier < 1:
            raise ValueError(f"platform_multiplier는 1 이상이어야 함: {self.platform_multiplier}")

    @property
    def family(self) -> str:
        return self.instance_type.split(".", 1)[0]

    @property
    def size(self) -> str:
        return self.instance_type.split(".", 1)[1]

    @property
    def architecture(self) -> str:
        return "arm64" if is_arm_family(self.family) else "x86_64"

    @property
    def memory_gib(self) -> float:
        return self.memory_bytes / GIB

    @property
    def platform_hourly_rate(self) -> float:
        """플랫폼 배수가 적용된 시간당 요금"""
        return self.hourly_rate * self.platform_multiplier

    def to_dict(self) -> dict[str, Any]:
        return {
            "instance_type": self.instance_type,
            "vcpus": self.vcpus,
            "memory_bytes": self.memory_bytes,
            "hourly_rate": self.hourly_rate,
            "platform_multiplier": self.platform_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PricingEntry:
        return cls(
            instance_type=data["instance_type"],
            vcpus=int(data["vcpus"]),
            memory_bytes=int(data["memory_bytes"]),
            hourly_rate=float(data["hourly_rate"]),
            platform_multiplier=float(data.get("platform_multiplier", 1.0)),
        )


@dataclass(frozen=True)
class DataTransferRate:
    """데이터 전송 GB당 요금 (``internet_out``, ``inter_region``, ``intra_region``)"""

    transfer_type: str
    price_per_gb: float

    def to_dict(self) -> dict[str, Any]:
        return {"transfer_type": self.transfer_type, "price_per_gb": self.price_per_gb}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DataTransferRate:
        return cls(transfer_type=data["transfer_type"], price_per_gb=float(data["price_per_gb"]))


@dataclass(frozen=True)
class StorageRate:
    """스토리지 GB-월 요금 (``build_storage``, ``script_storage``)"""

    storage_type: str
    price_per_gb_month: float

    def to_dict(self) -> dict[str, Any]:
        return {"storage_type": self.storage_type, "price_per_gb_month": self.price_per_gb_month}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StorageRate:
        return cls(storage_type=data["storage_type"], price_per_gb_month=float(data["price_per_gb_month"]))


@dataclass(frozen=True)
class PlatformServiceFees:
    """리전 무관 플랫폼 부가 서비스 요금표

    Attributes:
        matchmaking_per_request: 매치메이킹 요청당 USD
        matchmaking_included_requests: 월 무료 매치메이킹 요청 수
        flexmatch_per_request: 고급 매치메이킹(FlexMatch) 요청당 USD
        queue_placement_per_request: 큐 배치 요청당 USD (무료)
        monitoring_monthly: 모니터링 월 고정 요금
    """

    matchmaking_per_request: float = 0.000001
    matchmaking_included_requests: int = 1_000_000
    flexmatch_per_request: float = 0.000005
    queue_placement_per_request: float = 0.0
    monitoring_monthly: float = 0.0

    def component_costs(self, monthly_matchmaking_requests: int = 0) -> dict[str, float]:
        """월간 요청 수 기준 구성요소별 비용 (고정 순서: matchmaking, monitoring)"""
        billable = max(0, monthly_matchmaking_requests - self.matchmaking_included_requests)
        return {
            "matchmaking": billable * self.matchmaking_per_request,
            "monitoring": self.monitoring_monthly,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "matchmaking_per_request": self.matchmaking_per_request,
            "matchmaking_included_requests": self.matchmaking_included_requests,
            "flexmatch_per_request": self.flexmatch_per_request,
            "queue_placement_per_request": self.queue_placement_per_request,
            "monitoring_monthly": self.monitoring_monthly,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlatformServiceFees:
        return cls(
            matchmaking_per_request=float(data["matchmaking_per_request"]),
            matchmaking_included_requests=int(data["matchmaking_included_requests"]),
            flexmatch_per_request=float(data["flexmatch_per_request"]),
            queue_placement_per_request=float(data["queue_placement_per_request"]),
            monitoring_monthly=float(data["monitoring_monthly"]),
        )


PriceItem = Union[PricingEntry, DataTransferRate, StorageRate, PlatformServiceFees]


@dataclass(frozen=True)
class PriceTableRecord:
    """저장소에 보관되는 가격 테이블 1건 (서비스 타입 + 리전 단위)

    Attributes:
        service_type: ``ec2_instance``, ``data_transfer``, ``storage``, ``platform_services``
        region: 리전 ID 또는 ``"global"``
        items: 가격 항목 튜플 (선언 순서 유지)
        last_updated: 마지막 시드/갱신 시각
    """

    service_type: str
    region: str
    items: tuple[PriceItem, ...]
    last_updated: datetime = field(default_factory=datetime.now)

    def age_days(self, now: datetime | None = None) -> int:
        return ((now or datetime.now()) - self.last_updated).days


def is_arm_family(family: str) -> bool:
    """Graviton(ARM) 패밀리 여부 (예: c6g, m6g, c6gn, c7gd)"""
    if len(family) < 3 or not family[0].isalpha():
        return False
    # 세대 숫자 이후의 접미사로 판별
    digits_end = 1
    while digits_end < len(family) and family[digits_end].isdigit():
        digits_end += 1
    suffix = family[digits_end:]
    return suffix in _ARM_FAMILY_MARKERS
