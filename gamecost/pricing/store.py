"""
gamecost/pricing/store.py - 가격 테이블 저장소 (PricingStore)

``(service_type, region)`` 단위의 가격 테이블을 메모리에 보관하고,
선택적으로 ``PriceCache`` 파일 스냅샷에 영속화한다.

동시성:
    - 테이블 전체를 불변 매핑으로 보관하고, 쓰기 시 새 매핑을 만들어 참조를 교체한다
      (swap-on-write). 읽기는 락 없이 현재 참조만 사용하므로, 갱신 중에도
      이전 테이블 또는 새 테이블 중 하나를 온전히 관찰한다.
    - 쓰기끼리는 ``threading.Lock`` 으로 직렬화한다.

사용법:
    from gamecost.pricing.store import PricingStore

    store = PricingStore(stale_after_days=30)
    store.put_table("ec2_instance", "us-east-1", entries)
    entries = store.get_price_table("ec2_instance", "us-east-1")
    if store.is_stale("ec2_instance", "us-east-1"):
        ...
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType

from gamecost.exceptions import PricingNotFoundError

from .cache import PriceCache
from .constants import STALE_AFTER_DAYS
from .types import PriceItem, PriceTableRecord

logger = logging.getLogger(__name__)

TableKey = tuple[str, str]


@dataclass
class StoreMetrics:
    """저장소 조회/갱신 메트릭을 thread-safe하게 수집하는 데이터 클래스.

    Attributes:
        lookups: 테이블 조회 횟수
        misses: 테이블 없음 횟수
        writes: 테이블 저장 횟수
        cache_loads: 파일 캐시에서 적재한 테이블 수
    """

    lookups: int = 0
    misses: int = 0
    writes: int = 0
    cache_loads: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def hit_rate(self) -> float:
        """조회 성공률 (0.0 ~ 1.0). 조회가 없으면 ``0.0``"""
        return (self.lookups - self.misses) / self.lookups if self.lookups > 0 else 0.0

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + amount)

    def to_dict(self) -> dict[str, float | int]:
        return {
            "lookups": self.lookups,
            "misses": self.misses,
            "hit_rate": round(self.hit_rate, 2),
            "writes": self.writes,
            "cache_loads": self.cache_loads,
        }

    def reset(self) -> None:
        with self._lock:
            self.lookups = 0
            self.misses = 0
            self.writes = 0
            self.cache_loads = 0


class PricingStore:
    """가격 테이블 저장소.

    Attributes:
        stale_after_days: 이 일수를 초과한 테이블은 stale로 판정
        cache: 선택적 파일 스냅샷 캐시 (``None`` 이면 메모리 전용)
    """

    def __init__(self, stale_after_days: int = STALE_AFTER_DAYS, cache: PriceCache | None = None) -> None:
        self.stale_after_days = stale_after_days
        self.cache = cache
        self._tables: Mapping[TableKey, PriceTableRecord] = MappingProxyType({})
        self._write_lock = threading.Lock()
        self._metrics = StoreMetrics()

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def get_record(self, service_type: str, region: str) -> PriceTableRecord | None:
        """테이블 레코드 조회 (메모리 -> 파일 캐시 순, 없으면 ``None``)"""
        self._metrics.increment("lookups")
        record = self._tables.get((service_type, region))
        if record is None and self.cache is not None:
            record = self._load_from_cache(service_type, region)
        if record is None:
            self._metrics.increment("misses")
        return record

    def get_price_table(self, service_type: str, region: str) -> tuple[PriceItem, ...]:
        """테이블 항목 조회

        Raises:
            PricingNotFoundError: 테이블이 적재되지 않은 경우
        """
        record = self.get_record(service_type, region)
        if record is None:
            raise PricingNotFoundError(service_type, region)
        return record.items

    def has_table(self, service_type: str, region: str) -> bool:
        return self.get_record(service_type, region) is not None

    def is_stale(self, service_type: str, region: str, now: datetime | None = None) -> bool:
        """테이블이 없거나 ``stale_after_days`` 를 초과했으면 ``True``"""
        record = self.get_record(service_type, region)
        if record is None:
            return True
        return self.is_record_stale(record, now=now)

    def is_record_stale(self, record: PriceTableRecord, now: datetime | None = None) -> bool:
        """이미 조회한 레코드의 stale 여부 (저장소를 다시 조회하지 않음)"""
        return (now or datetime.now()) - record.last_updated > timedelta(days=self.stale_after_days)

    def list_tables(self) -> list[PriceTableRecord]:
        """메모리에 적재된 전체 테이블 (서비스 타입, 리전 순)"""
        snapshot = self._tables
        return [snapshot[key] for key in sorted(snapshot)]

    def regions(self, service_type: str) -> list[str]:
        """해당 서비스 타입의 테이블이 있는 리전 목록 (정렬)"""
        return sorted(region for (svc, region) in self._tables if svc == service_type)

    # ------------------------------------------------------------------
    # 쓰기
    # ------------------------------------------------------------------

    def put_table(
        self,
        service_type: str,
        region: str,
        items: Iterable[PriceItem],
        last_updated: datetime | None = None,
        persist: bool = True,
    ) -> PriceTableRecord:
        """테이블 저장 (기존 테이블은 통째로 교체)

        Args:
            service_type: 서비스 타입
            region: 리전 ID 또는 ``"global"``
            items: 가격 항목
            last_updated: 갱신 시각 (None이면 현재 시각)
            persist: 파일 캐시에도 저장할지 여부
        """
        record = PriceTableRecord(
            service_type=service_type,
            region=region,
            items=tuple(items),
            last_updated=last_updated or datetime.now(),
        )
        self._swap({(service_type, region): record})
        self._metrics.increment("writes")

        if persist and self.cache is not None:
            self.cache.set(record)

        logger.debug(f"테이블 저장: {service_type}/{region} ({len(record.items)} items)")
        return record

    def remove_table(self, service_type: str, region: str) -> bool:
        """테이블 삭제 (파일 캐시 포함). 존재했으면 ``True``"""
        key = (service_type, region)
        with self._write_lock:
            existed = key in self._tables
            if existed:
                updated = dict(self._tables)
                del updated[key]
                self._tables = MappingProxyType(updated)
        if self.cache is not None:
            existed = self.cache.invalidate(service_type, region) or existed
        return existed

    def _swap(self, changes: Mapping[TableKey, PriceTableRecord]) -> None:
        with self._write_lock:
            updated = dict(self._tables)
            updated.update(changes)
            self._tables = MappingProxyType(updated)

    def _load_from_cache(self, service_type: str, region: str) -> PriceTableRecord | None:
        assert self.cache is not None
        cached = self.cache.get(service_type, region)
        if cached is None:
            return None

        # 파일의 cached_at을 그대로 유지해야 staleness가 재시작 후에도 보존된다
        self._swap({(service_type, region): cached.record})
        self._metrics.increment("cache_loads")
        logger.debug(f"캐시에서 적재: {service_type}/{region} (expired={cached.expired})")
        return cached.record

    # ------------------------------------------------------------------
    # 메트릭
    # ------------------------------------------------------------------

    def get_metrics(self) -> dict[str, float | int]:
        return self._metrics.to_dict()

    def reset_metrics(self) -> None:
        self._metrics.reset()
