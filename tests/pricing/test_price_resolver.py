"""
tests/pricing/test_price_resolver.py - 가격 조회기 테스트
"""

import warnings
from datetime import datetime, timedelta

import pytest

from gamecost.exceptions import PricingNotFoundError, StaleDataWarning, ValidationError
from gamecost.pricing.constants import EC2_INSTANCE_PRICING
from gamecost.pricing.resolver import PriceResolver, StorePriceResolver
from gamecost.pricing.seeder import PricingSeeder
from gamecost.pricing.store import PricingStore
from gamecost.pricing.types import PlatformServiceFees


@pytest.fixture
def stale_store():
    """40일 전에 시드된 저장소"""
    store = PricingStore(stale_after_days=30)
    PricingSeeder(store).seed_all(now=datetime.now() - timedelta(days=40))
    return store


class TestResolvePrice:
    """resolve_price() 테스트"""

    def test_known_instance(self, resolver):
        entry = resolver.resolve_price("c5.large", "us-east-1")
        assert entry.hourly_rate == 0.085
        assert entry.vcpus == 2

    def test_region_specific_price(self, resolver):
        assert resolver.resolve_price("c6g.large", "ap-southeast-1").hourly_rate == 0.078

    def test_unknown_region(self, resolver):
        """미지원 리전은 기본 리전으로 대체하지 않고 실패"""
        with pytest.raises(PricingNotFoundError) as exc_info:
            resolver.resolve_price("c5.large", "mars-north-1")

        assert exc_info.value.service_type == "ec2_instance"
        assert exc_info.value.region == "mars-north-1"

    def test_unknown_instance_type(self, resolver):
        with pytest.raises(PricingNotFoundError) as exc_info:
            resolver.resolve_price("c5.9xlarge", "us-east-1")

        assert exc_info.value.key == "c5.9xlarge"

    @pytest.mark.parametrize("region", ["", "   "])
    def test_empty_region(self, resolver, region):
        with pytest.raises(ValidationError):
            resolver.resolve_price("c5.large", region)

    def test_empty_instance_type(self, resolver):
        with pytest.raises(ValidationError):
            resolver.resolve_price("", "us-east-1")


class TestStaleData:
    """stale 테이블 경고 테스트"""

    def test_stale_table_warns_but_resolves(self, stale_store):
        """stale 테이블은 경고 후 계속 사용"""
        resolver = StorePriceResolver(stale_store)

        with pytest.warns(StaleDataWarning) as record:
            entry = resolver.resolve_price("c5.large", "us-east-1")

        assert entry.hourly_rate == 0.085
        warning = record[0].message
        assert warning.region == "us-east-1"
        assert warning.age_days >= 40

    def test_warning_can_be_disabled(self, stale_store):
        resolver = StorePriceResolver(stale_store, warn_on_stale=False)

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert resolver.resolve_price("c5.large", "us-east-1").hourly_rate == 0.085

    def test_single_lookup_per_resolve(self, store, resolver):
        """stale 판정이 테이블을 다시 조회하지 않음"""
        store.reset_metrics()
        resolver.resolve_price("c5.large", "us-east-1")

        assert store.get_metrics()["lookups"] == 1

    def test_stale_check_uses_fetched_record(self, stale_store):
        """조회한 레코드와 stale 판정 대상이 같은 스냅샷"""
        resolver = StorePriceResolver(stale_store)
        stale_store.reset_metrics()

        with pytest.warns(StaleDataWarning):
            resolver.resolve_price("c5.large", "us-east-1")

        assert stale_store.get_metrics()["lookups"] == 1

    def test_fresh_table_does_not_warn(self, resolver):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            resolver.resolve_price("c5.large", "us-east-1")


class TestGlobalRates:
    """리전 무관 요금 조회 테스트"""

    def test_storage_rate(self, resolver):
        assert resolver.storage_rate() == 0.10

    def test_egress_rate(self, resolver):
        assert resolver.egress_rate() == 0.09
        assert resolver.egress_rate("inter_region") == 0.02

    def test_platform_fees(self, resolver):
        assert resolver.platform_fees() == PlatformServiceFees()

    def test_unknown_storage_type(self, resolver):
        with pytest.raises(PricingNotFoundError):
            resolver.storage_rate("glacier")

    def test_missing_global_table(self):
        """스토리지 테이블이 없으면 0원으로 대체하지 않고 실패"""
        store = PricingStore()
        store.put_table("ec2_instance", "us-east-1", EC2_INSTANCE_PRICING["us-east-1"])

        with pytest.raises(PricingNotFoundError):
            StorePriceResolver(store).storage_rate()


class TestResolverProtocol:
    def test_store_resolver_satisfies_protocol(self, resolver):
        assert isinstance(resolver, PriceResolver)

    def test_instance_types_in_declaration_order(self, resolver):
        assert resolver.instance_types("ap-southeast-1") == ["c5.large", "c5.xlarge", "c6g.large", "c6g.xlarge"]
