"""
gamecost/pricing/cache.py - 가격 테이블 로컬 파일 캐시

가격 저장소의 테이블 스냅샷을 JSON 파일로 보관하여, 프로세스 재시작 후에도
마지막 시드 시각(``cached_at``)을 기준으로 staleness를 판정할 수 있게 한다.
캐시는 스냅샷일 뿐이며 비용 계산 결과는 저장하지 않는다.

캐시 경로:
    ``{cache_root}/pricing/{service}_{region}.json``

동시성 보호:
    - 쓰기: ``filelock`` 라이브러리로 멀티 프로세스 환경에서 안전하게 보호
    - 읽기: 락 없이 수행 (stale read 허용)

사용법:
    from gamecost.pricing.cache import PriceCache

    cache = PriceCache(ttl_days=30)
    cache.set(record)
    snapshot = cache.get("ec2_instance", "us-east-1")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from gamecost.config import get_cache_dir, settings

from .constants import SERVICE_DATA_TRANSFER, SERVICE_EC2_INSTANCE, SERVICE_PLATFORM, SERVICE_STORAGE
from .types import DataTransferRate, PlatformServiceFees, PriceItem, PriceTableRecord, PricingEntry, StorageRate

logger = logging.getLogger(__name__)

# 서비스 타입 -> 항목 클래스
_ITEM_TYPES: dict[str, Any] = {
    SERVICE_EC2_INSTANCE: PricingEntry,
    SERVICE_DATA_TRANSFER: DataTransferRate,
    SERVICE_STORAGE: StorageRate,
    SERVICE_PLATFORM: PlatformServiceFees,
}


def _get_pricing_cache_dir() -> Path:
    """pricing 캐시 디렉토리 반환"""
    return get_cache_dir("pricing")


def decode_items(service_type: str, raw_items: list[dict[str, Any]]) -> tuple[PriceItem, ...]:
    """JSON 항목 목록을 서비스 타입에 맞는 데이터클래스로 변환

    Raises:
        KeyError: 알 수 없는 서비스 타입이거나 필수 필드가 없는 경우
    """
    item_cls = _ITEM_TYPES[service_type]
    return tuple(item_cls.from_dict(item) for item in raw_items)


@dataclass(frozen=True)
class CachedTable:
    """캐시에서 읽은 테이블 스냅샷"""

    record: PriceTableRecord
    expired: bool


class PriceCache:
    """가격 테이블 파일 기반 캐시 관리자.

    서비스/리전 조합별로 JSON 파일을 생성하여 테이블 스냅샷을 보관한다.
    ``filelock`` 으로 멀티 프로세스 동시 쓰기를 방지하며,
    읽기는 락 없이 수행한다.

    Attributes:
        ttl_days: 캐시 만료 일수 (가격 갱신 기준일과 동일하게 사용)
        cache_dir: 캐시 파일 저장 디렉토리
    """

    def __init__(self, ttl_days: int = settings.PRICING_STALE_DAYS, lock_timeout: int = settings.FILE_LOCK_TIMEOUT):
        self.ttl_days = ttl_days
        self.lock_timeout = lock_timeout
        self.cache_dir = _get_pricing_cache_dir()

    def _get_cache_path(self, service: str, region: str) -> Path:
        return self.cache_dir / f"{service}_{region}.json"

    def _get_lock_path(self, service: str, region: str) -> Path:
        return self.cache_dir / f"{service}_{region}.json.lock"

    def get(self, service: str, region: str) -> CachedTable | None:
        """캐시된 테이블 스냅샷을 조회한다 (락 없이 읽기).

        만료된 스냅샷도 ``expired=True`` 로 반환한다. staleness 판정과
        갱신은 저장소/시더의 책임이다.

        Args:
            service: 서비스 타입 (예: ``"ec2_instance"``)
            region: 리전 ID 또는 ``"global"``

        Returns:
            ``CachedTable``, 파일이 없거나 손상된 경우 ``None``
        """
        cache_path = self._get_cache_path(service, region)

        if not cache_path.exists():
            return None

        try:
            with open(cache_path, encoding="utf-8") as f:
                data = json.load(f)

            cached_at = datetime.fromisoformat(data["cached_at"])
            items = decode_items(service, data.get("items", []))

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"캐시 읽기 오류 [{service}/{region}]: {e}")
            return None

        expired = datetime.now() - cached_at > timedelta(days=self.ttl_days)
        if expired:
            logger.debug(f"캐시 만료: {service}/{region}")

        record = PriceTableRecord(service_type=service, region=region, items=items, last_updated=cached_at)
        return CachedTable(record=record, expired=expired)

    def set(self, record: PriceTableRecord) -> bool:
        """테이블 스냅샷을 캐시 파일에 저장한다 (파일 락으로 동시 쓰기 방지).

        락 획득이 타임아웃되면 저장을 건너뛴다.

        Returns:
            저장에 성공하면 ``True``
        """
        cache_path = self._get_cache_path(record.service_type, record.region)
        lock_path = self._get_lock_path(record.service_type, record.region)

        data = {
            "cached_at": record.last_updated.isoformat(),
            "service": record.service_type,
            "region": record.region,
            "items": [item.to_dict() for item in record.items],
        }

        try:
            with FileLock(lock_path, timeout=self.lock_timeout):
                with open(cache_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
            logger.debug(f"캐시 저장: {record.service_type}/{record.region} ({len(record.items)} items)")
            return True
        except Timeout:
            logger.warning(f"캐시 저장 타임아웃: {record.service_type}/{record.region} (락 획득 실패)")
        except OSError as e:
            logger.warning(f"캐시 저장 오류: {e}")
        return False

    def invalidate(self, service: str, region: str) -> bool:
        """특정 서비스/리전의 캐시 파일을 삭제한다.

        Returns:
            캐시 파일이 존재하여 삭제한 경우 ``True``
        """
        cache_path = self._get_cache_path(service, region)

        if cache_path.exists():
            cache_path.unlink()
            return True
        return False

    def clear(self) -> int:
        """전체 캐시 파일을 삭제하고 삭제된 파일 수를 반환한다."""
        count = 0
        for f in self.cache_dir.glob("*.json"):
            f.unlink()
            count += 1
        return count

    def get_info(self) -> dict[str, Any]:
        """전체 캐시 상태 정보를 반환한다.

        Returns:
            ``{"cache_dir", "ttl_days", "files": [{name, service, region,
            cached_at, age_days, expired, item_count}, ...]}``
        """
        files: list[dict[str, Any]] = []
        info: dict[str, Any] = {
            "cache_dir": str(self.cache_dir),
            "ttl_days": self.ttl_days,
            "files": files,
        }

        if self.cache_dir.exists():
            for f in sorted(self.cache_dir.glob("*.json")):
                try:
                    with open(f, encoding="utf-8") as fp:
                        data = json.load(fp)
                    cached_at = datetime.fromisoformat(data.get("cached_at", ""))
                    age_days = (datetime.now() - cached_at).days
                    files.append(
                        {
                            "name": f.name,
                            "service": data.get("service"),
                            "region": data.get("region"),
                            "cached_at": data.get("cached_at"),
                            "age_days": age_days,
                            "expired": age_days > self.ttl_days,
                            "item_count": len(data.get("items", [])),
                        }
                    )
                except (json.JSONDecodeError, ValueError) as e:
                    logger.debug("Failed to parse cache file %s: %s", f.name, e)
                    files.append({"name": f.name, "error": True})

        return info
