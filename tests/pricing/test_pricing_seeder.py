"""
tests/pricing/test_pricing_seeder.py - 가격 테이블 시더 테스트
"""

from datetime import timedelta

from gamecost.pricing.constants import get_static_tables
from gamecost.pricing.seeder import PricingSeeder, SeedReport
from gamecost.pricing.store import PricingStore
from gamecost.pricing.types import StorageRate


class TestInitialize:
    """initialize() 테스트"""

    def test_seeds_empty_store(self, seed_time):
        """빈 저장소는 전체 시드"""
        store = PricingStore()
        report = PricingSeeder(store).initialize(now=seed_time)

        assert len(report.seeded) == len(get_static_tables())
        assert report.refreshed == []
        assert store.get_record("storage", "global").last_updated == seed_time

    def test_second_run_is_noop(self, seed_time):
        """최신 테이블은 건드리지 않음"""
        store = PricingStore()
        seeder = PricingSeeder(store)
        seeder.initialize(now=seed_time)

        report = seeder.initialize(now=seed_time + timedelta(days=1))

        assert report.changed == 0
        assert len(report.current) == len(get_static_tables())
        assert store.get_record("storage", "global").last_updated == seed_time

    def test_refreshes_stale_tables(self, seed_time):
        """30일 초과 테이블은 갱신"""
        store = PricingStore(stale_after_days=30)
        seeder = PricingSeeder(store)
        seeder.initialize(now=seed_time)
        later = seed_time + timedelta(days=31)

        report = seeder.initialize(now=later)

        assert len(report.refreshed) == len(get_static_tables())
        assert store.is_stale("storage", "global", now=later) is False

    def test_custom_source(self, seed_time):
        store = PricingStore()
        source = {("storage", "global"): (StorageRate("build_storage", 0.2),)}

        report = PricingSeeder(store, source=lambda: source).initialize(now=seed_time)

        assert report.seeded == [("storage", "global")]
        assert store.get_price_table("storage", "global")[0].price_per_gb_month == 0.2


class TestRefresh:
    def test_refresh_stale_skips_missing_tables(self):
        """refresh_stale은 없는 테이블을 새로 만들지 않음"""
        store = PricingStore()
        report = PricingSeeder(store).refresh_stale()

        assert report.changed == 0
        assert store.list_tables() == []

    def test_refresh_stale_only_touches_old_tables(self, seed_time):
        store = PricingStore()
        seeder = PricingSeeder(store)
        seeder.initialize(now=seed_time)
        store.put_table("storage", "global", [StorageRate("build_storage", 0.1)], last_updated=seed_time + timedelta(days=40))

        report = seeder.refresh_stale(now=seed_time + timedelta(days=41))

        assert ("storage", "global") in report.current
        assert len(report.refreshed) == len(get_static_tables()) - 1

    def test_seed_missing_leaves_stale_tables(self, seed_time):
        """seed_missing은 없는 테이블만 채우고 stale 테이블은 갱신하지 않음"""
        store = PricingStore(stale_after_days=30)
        old_time = seed_time - timedelta(days=60)
        store.put_table("storage", "global", [StorageRate("build_storage", 0.1)], last_updated=old_time)

        report = PricingSeeder(store).seed_missing(now=seed_time)

        assert report.refreshed == []
        assert report.current == [("storage", "global")]
        assert len(report.seeded) == len(get_static_tables()) - 1
        assert store.get_record("storage", "global").last_updated == old_time
        assert store.is_stale("storage", "global", now=seed_time) is True

    def test_seed_all(self, store):
        report = PricingSeeder(store).seed_all()
        assert len(report.seeded) == len(get_static_tables())


class TestSeedReport:
    def test_to_dict(self):
        report = SeedReport(seeded=[("storage", "global")], refreshed=[], current=[("ec2_instance", "us-east-1")])
        assert report.to_dict() == {
            "seeded": ["storage/global"],
            "refreshed": [],
            "current": ["ec2_instance/us-east-1"],
        }
        assert report.changed == 1
