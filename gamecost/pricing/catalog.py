"""
gamecost/pricing/catalog.py - 정적 가격표 헬퍼

저장소를 거치지 않고 정적 가격표(constants)를 직접 조회하는 보조 함수들.
CLI 목록 출력, 인스턴스 추천, 단건 비용 계산 등에 사용한다.

사용법:
    from gamecost.pricing.catalog import get_supported_regions, recommend_instance_type

    regions = get_supported_regions()
    instance_type = recommend_instance_type(concurrent_players=400)
"""

from __future__ import annotations

import math

from gamecost.exceptions import PricingNotFoundError, ValidationError

from .constants import (
    DATA_TRANSFER_PRICING,
    EC2_INSTANCE_PRICING,
    GLOBAL_REGION,
    HOURS_PER_MONTH_30D,
    SERVICE_DATA_TRANSFER,
    SERVICE_EC2_INSTANCE,
    SERVICE_STORAGE,
    STORAGE_BUILD,
    STORAGE_PRICING,
    TRANSFER_INTERNET_OUT,
)
from .types import PricingEntry

# 인스턴스 사이즈 티어 (작은 것 -> 큰 것)
SIZE_TIERS: tuple[str, ...] = (
    "nano",
    "micro",
    "small",
    "medium",
    "large",
    "xlarge",
    "2xlarge",
    "4xlarge",
    "8xlarge",
    "9xlarge",
    "12xlarge",
    "16xlarge",
    "18xlarge",
    "24xlarge",
    "48xlarge",
)


def get_supported_regions() -> list[str]:
    """인스턴스 가격표가 있는 리전 목록 (선언 순서)"""
    return list(EC2_INSTANCE_PRICING)


def get_region_entries(region: str) -> tuple[PricingEntry, ...]:
    """리전의 인스턴스 가격 항목

    Raises:
        PricingNotFoundError: 지원하지 않는 리전
    """
    if region not in EC2_INSTANCE_PRICING:
        raise PricingNotFoundError(SERVICE_EC2_INSTANCE, region)
    return EC2_INSTANCE_PRICING[region]


def get_available_instance_types(region: str) -> list[str]:
    """리전에서 사용 가능한 인스턴스 타입 목록"""
    return [entry.instance_type for entry in get_region_entries(region)]


def get_instance_pricing(instance_type: str, region: str) -> PricingEntry:
    """정적 가격표에서 인스턴스 가격 항목 조회

    Raises:
        PricingNotFoundError: 리전 또는 인스턴스 타입이 없는 경우
    """
    for entry in get_region_entries(region):
        if entry.instance_type == instance_type:
            return entry
    raise PricingNotFoundError(SERVICE_EC2_INSTANCE, region, key=instance_type)


def calculate_fleet_hourly_cost(instance_type: str, region: str, instance_count: int) -> float:
    """플릿 시간당 비용 (원시 요금 × 플랫폼 배수 × 인스턴스 수)"""
    if instance_count < 0:
        raise ValidationError("instance_count", instance_count, ">= 0")
    entry = get_instance_pricing(instance_type, region)
    return entry.platform_hourly_rate * instance_count


def calculate_monthly_cost(hourly_rate: float) -> float:
    """시간당 요금을 30일 기준 월 비용으로 환산 (× 24 × 30)"""
    return hourly_rate * HOURS_PER_MONTH_30D


def calculate_data_transfer_cost(gb_per_month: float, transfer_type: str = TRANSFER_INTERNET_OUT) -> float:
    """월간 데이터 전송 비용

    Raises:
        PricingNotFoundError: 알 수 없는 전송 타입
    """
    for rate in DATA_TRANSFER_PRICING:
        if rate.transfer_type == transfer_type:
            return gb_per_month * rate.price_per_gb
    raise PricingNotFoundError(SERVICE_DATA_TRANSFER, GLOBAL_REGION, key=transfer_type)


def calculate_storage_cost(build_size_gb: float, storage_type: str = STORAGE_BUILD) -> float:
    """월간 빌드 스토리지 비용"""
    for rate in STORAGE_PRICING:
        if rate.storage_type == storage_type:
            return build_size_gb * rate.price_per_gb_month
    raise PricingNotFoundError(SERVICE_STORAGE, GLOBAL_REGION, key=storage_type)


def recommend_instance_type(
    concurrent_players: int,
    players_per_instance: int = 20,
    memory_intensive: bool = False,
) -> str:
    """게임 요구사항 기반 인스턴스 타입 추천

    메모리 집약형은 m5 패밀리, 그 외에는 가격 대비 성능이 좋은 c6g 패밀리를
    필요 인스턴스 수 구간에 따라 선택한다.
    """
    if concurrent_players < 1:
        raise ValidationError("concurrent_players", concurrent_players, ">= 1")
    if players_per_instance < 1:
        raise ValidationError("players_per_instance", players_per_instance, ">= 1")

    required = math.ceil(concurrent_players / players_per_instance)

    if memory_intensive:
        if required <= 5:
            return "m5.large"
        if required <= 15:
            return "m5.xlarge"
        return "m5.2xlarge"

    if required <= 5:
        return "c6g.large"
    if required <= 15:
        return "c6g.xlarge"
    if required <= 30:
        return "c6g.2xlarge"
    return "c6g.4xlarge"


def smaller_size(size: str) -> str | None:
    """한 티어 작은 사이즈 (가장 작거나 알 수 없으면 ``None``)"""
    if size not in SIZE_TIERS:
        return None
    index = SIZE_TIERS.index(size)
    return SIZE_TIERS[index - 1] if index > 0 else None
