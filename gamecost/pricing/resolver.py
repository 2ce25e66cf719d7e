"""
gamecost/pricing/resolver.py - 인스턴스/리전 가격 조회기

비용 계산기는 전역 저장소에 직접 접근하지 않고, 생성 시 주입받은
``PriceResolver`` 를 통해서만 가격을 조회한다.

조회 규칙:
    - 리전 테이블이 없으면 ``PricingNotFoundError`` (다른 리전으로 대체하지 않음)
    - 리전 테이블에 인스턴스 타입이 없으면 ``PricingNotFoundError``
    - 테이블이 stale이면 ``StaleDataWarning`` 을 발생시키고 조회는 계속 진행
    - 재시도 없음

사용법:
    from gamecost.pricing.resolver import StorePriceResolver

    resolver = StorePriceResolver(store)
    entry = resolver.resolve_price("c5.large", "us-east-1")
"""

from __future__ import annotations

import logging
import warnings
from typing import Protocol, runtime_checkable

from gamecost.exceptions import PricingNotFoundError, StaleDataWarning, ValidationError

from .constants import (
    GLOBAL_REGION,
    SERVICE_DATA_TRANSFER,
    SERVICE_EC2_INSTANCE,
    SERVICE_PLATFORM,
    SERVICE_STORAGE,
    STORAGE_BUILD,
    TRANSFER_INTERNET_OUT,
)
from .store import PricingStore
from .types import DataTransferRate, PlatformServiceFees, PriceItem, PricingEntry, StorageRate

logger = logging.getLogger(__name__)


@runtime_checkable
class PriceResolver(Protocol):
    """비용 계산기가 의존하는 가격 조회 인터페이스"""

    def resolve_price(self, instance_type: str, region: str) -> PricingEntry: ...

    def instance_types(self, region: str) -> list[str]: ...

    def storage_rate(self, storage_type: str = STORAGE_BUILD) -> float: ...

    def egress_rate(self, transfer_type: str = TRANSFER_INTERNET_OUT) -> float: ...

    def platform_fees(self) -> PlatformServiceFees: ...


class StorePriceResolver:
    """``PricingStore`` 기반 PriceResolver 구현

    Args:
        store: 시드된 가격 저장소
        warn_on_stale: stale 테이블 조회 시 ``StaleDataWarning`` 발생 여부
    """

    def __init__(self, store: PricingStore, warn_on_stale: bool = True) -> None:
        self.store = store
        self.warn_on_stale = warn_on_stale

    def _table(self, service_type: str, region: str) -> tuple[PriceItem, ...]:
        record = self.store.get_record(service_type, region)
        if record is None:
            raise PricingNotFoundError(service_type, region)

        if self.warn_on_stale and self.store.is_record_stale(record):
            age_days = record.age_days()
            logger.warning(f"stale 가격 테이블 사용: {service_type}/{region} ({age_days}일 경과)")
            warnings.warn(StaleDataWarning(service_type, region, age_days), stacklevel=3)

        return record.items

    def resolve_price(self, instance_type: str, region: str) -> PricingEntry:
        """인스턴스 타입의 가격 항목 조회

        Raises:
            ValidationError: 리전/인스턴스 타입이 빈 문자열인 경우
            PricingNotFoundError: 리전 또는 인스턴스 타입이 테이블에 없는 경우
        """
        if not region or not region.strip():
            raise ValidationError("region", region, "비어있지 않은 리전 ID")
        if not instance_type or not instance_type.strip():
            raise ValidationError("instance_type", instance_type, "비어있지 않은 인스턴스 타입")

        for entry in self._table(SERVICE_EC2_INSTANCE, region):
            if isinstance(entry, PricingEntry) and entry.instance_type == instance_type:
                logger.debug(f"가격 조회: {instance_type}/{region} = {entry.hourly_rate}")
                return entry

        raise PricingNotFoundError(SERVICE_EC2_INSTANCE, region, key=instance_type)

    def instance_types(self, region: str) -> list[str]:
        """리전에서 가격이 있는 인스턴스 타입 목록 (선언 순서)"""
        return [e.instance_type for e in self._table(SERVICE_EC2_INSTANCE, region) if isinstance(e, PricingEntry)]

    def storage_rate(self, storage_type: str = STORAGE_BUILD) -> float:
        """스토리지 GB-월 요금

        Raises:
            PricingNotFoundError: 스토리지 타입이 테이블에 없는 경우
        """
        for rate in self._table(SERVICE_STORAGE, GLOBAL_REGION):
            if isinstance(rate, StorageRate) and rate.storage_type == storage_type:
                return rate.price_per_gb_month
        raise PricingNotFoundError(SERVICE_STORAGE, GLOBAL_REGION, key=storage_type)

    def egress_rate(self, transfer_type: str = TRANSFER_INTERNET_OUT) -> float:
        """데이터 전송 GB당 요금

        Raises:
            PricingNotFoundError: 전송 타입이 테이블에 없는 경우
        """
        for rate in self._table(SERVICE_DATA_TRANSFER, GLOBAL_REGION):
            if isinstance(rate, DataTransferRate) and rate.transfer_type == transfer_type:
                return rate.price_per_gb
        raise PricingNotFoundError(SERVICE_DATA_TRANSFER, GLOBAL_REGION, key=transfer_type)

    def platform_fees(self) -> PlatformServiceFees:
        """플랫폼 부가 서비스 요금표

        Raises:
            PricingNotFoundError: 요금표가 적재되지 않은 경우
        """
        for fees in self._table(SERVICE_PLATFORM, GLOBAL_REGION):
            if isinstance(fees, PlatformServiceFees):
                return fees
        raise PricingNotFoundError(SERVICE_PLATFORM, GLOBAL_REGION)
