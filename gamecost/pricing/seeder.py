"""
gamecost/pricing/seeder.py - 가격 테이블 시드 및 갱신

정적 가격표(constants)를 ``PricingStore`` 에 적재하고, 갱신 기준일을 넘긴
테이블을 다시 적재한다. 적재 시각이 곧 staleness 기준 시각이다.

사용법:
    from gamecost.pricing.seeder import PricingSeeder

    report = PricingSeeder(store).initialize()
    print(report.seeded, report.refreshed)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .constants import get_static_tables
from .store import PricingStore, TableKey

logger = logging.getLogger(__name__)

TableSource = Callable[[], dict[TableKey, tuple]]


@dataclass
class SeedReport:
    """시드/갱신 결과

    Attributes:
        seeded: 새로 적재한 테이블 키
        refreshed: stale이어서 다시 적재한 테이블 키
        current: 다시 적재하지 않고 건너뛴 테이블 키
    """

    seeded: list[TableKey] = field(default_factory=list)
    refreshed: list[TableKey] = field(default_factory=list)
    current: list[TableKey] = field(default_factory=list)

    @property
    def changed(self) -> int:
        return len(self.seeded) + len(self.refreshed)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "seeded": [f"{svc}/{region}" for svc, region in self.seeded],
            "refreshed": [f"{svc}/{region}" for svc, region in self.refreshed],
            "current": [f"{svc}/{region}" for svc, region in self.current],
        }


class PricingSeeder:
    """가격 저장소 시더

    Args:
        store: 대상 저장소
        source: ``(service_type, region) -> items`` 매핑을 반환하는 함수
            (기본: 정적 가격표)
    """

    def __init__(self, store: PricingStore, source: TableSource = get_static_tables) -> None:
        self.store = store
        self.source = source

    def seed_all(self, now: datetime | None = None) -> SeedReport:
        """모든 테이블을 무조건 다시 적재한다."""
        report = SeedReport()
        for (service_type, region), items in self.source().items():
            self.store.put_table(service_type, region, items, last_updated=now)
            report.seeded.append((service_type, region))
        logger.info(f"가격 테이블 전체 시드: {len(report.seeded)}개")
        return report

    def initialize(self, now: datetime | None = None) -> SeedReport:
        """없는 테이블은 시드하고, stale 테이블은 갱신한다.

        Returns:
            SeedReport
        """
        report = SeedReport()

        for (service_type, region), items in self.source().items():
            if not self.store.has_table(service_type, region):
                self.store.put_table(service_type, region, items, last_updated=now)
                report.seeded.append((service_type, region))
                logger.info(f"가격 테이블 시드: {service_type}/{region} ({len(items)}개 항목)")
            elif self.store.is_stale(service_type, region, now=now):
                self.store.put_table(service_type, region, items, last_updated=now)
                report.refreshed.append((service_type, region))
                logger.info(f"가격 테이블 갱신 (stale): {service_type}/{region}")
            else:
                report.current.append((service_type, region))

        if report.changed == 0:
            logger.info("모든 가격 테이블이 최신 상태")
        else:
            logger.info(f"가격 테이블 초기화 완료: 시드 {len(report.seeded)}개, 갱신 {len(report.refreshed)}개")

        return report

    def seed_missing(self, now: datetime | None = None) -> SeedReport:
        """없는 테이블만 시드한다. 기존 테이블은 stale이어도 그대로 둔다.

        Returns:
            SeedReport (``refreshed`` 는 항상 비어 있음)
        """
        report = SeedReport()

        for (service_type, region), items in self.source().items():
            if self.store.has_table(service_type, region):
                report.current.append((service_type, region))
                continue
            self.store.put_table(service_type, region, items, last_updated=now)
            report.seeded.append((service_type, region))
            logger.info(f"가격 테이블 시드: {service_type}/{region} ({len(items)}개 항목)")

        return report

    def refresh_stale(self, now: datetime | None = None) -> SeedReport:
        """이미 존재하는 테이블 중 stale인 것만 다시 적재한다."""
        report = SeedReport()

        for (service_type, region), items in self.source().items():
            if not self.store.has_table(service_type, region):
                continue
            if self.store.is_stale(service_type, region, now=now):
                self.store.put_table(service_type, region, items, last_updated=now)
                report.refreshed.append((service_type, region))
                logger.info(f"가격 테이블 갱신 (stale): {service_type}/{region}")
            else:
                report.current.append((service_type, region))

        return report
