"""
tests/pricing/test_pricing_catalog.py - 정적 가격표 헬퍼 테스트
"""

import pytest

from gamecost.exceptions import PricingNotFoundError, ValidationError
from gamecost.pricing.catalog import (
    SIZE_TIERS,
    calculate_data_transfer_cost,
    calculate_fleet_hourly_cost,
    calculate_monthly_cost,
    calculate_storage_cost,
    get_available_instance_types,
    get_instance_pricing,
    get_supported_regions,
    recommend_instance_type,
    smaller_size,
)
from gamecost.pricing.constants import EC2_INSTANCE_PRICING, get_static_tables


class TestStaticTables:
    """정적 가격표 테스트"""

    def test_supported_regions(self):
        """지원 리전 (선언 순서)"""
        assert get_supported_regions() == ["us-east-1", "us-west-2", "eu-west-1", "ap-southeast-1"]

    def test_every_region_has_c5_large(self):
        for region in EC2_INSTANCE_PRICING:
            assert "c5.large" in get_available_instance_types(region)

    def test_static_tables_include_global_tables(self):
        """인스턴스 테이블(리전별) + 글로벌 테이블 3종"""
        tables = get_static_tables()
        assert len(tables) == len(EC2_INSTANCE_PRICING) + 3
        assert ("storage", "global") in tables
        assert ("data_transfer", "global") in tables
        assert ("platform_services", "global") in tables

    def test_instance_types_unique_per_region(self):
        for region, entries in EC2_INSTANCE_PRICING.items():
            types = [e.instance_type for e in entries]
            assert len(types) == len(set(types)), region


class TestInstancePricing:
    def test_known_price(self):
        assert get_instance_pricing("c5.large", "us-east-1").hourly_rate == 0.085
        assert get_instance_pricing("c5.large", "eu-west-1").hourly_rate == 0.094

    def test_unknown_region(self):
        """미지원 리전은 us-east-1로 대체하지 않음"""
        with pytest.raises(PricingNotFoundError) as exc_info:
            get_instance_pricing("c5.large", "mars-north-1")
        assert exc_info.value.region == "mars-north-1"

    def test_unknown_instance_type(self):
        with pytest.raises(PricingNotFoundError) as exc_info:
            get_instance_pricing("m5.2xlarge", "ap-southeast-1")
        assert exc_info.value.key == "m5.2xlarge"


class TestCostHelpers:
    """단건 비용 헬퍼 테스트"""

    def test_fleet_hourly_cost_uses_platform_rate(self):
        """플랫폼 배수(1.5) 적용"""
        assert calculate_fleet_hourly_cost("c5.large", "us-east-1", 4) == pytest.approx(0.085 * 1.5 * 4)

    def test_fleet_hourly_cost_rejects_negative_count(self):
        with pytest.raises(ValidationError):
            calculate_fleet_hourly_cost("c5.large", "us-east-1", -1)

    def test_monthly_cost(self):
        """30일 × 24시간"""
        assert calculate_monthly_cost(1.0) == 720

    def test_data_transfer_cost(self):
        assert calculate_data_transfer_cost(100) == pytest.approx(9.0)
        assert calculate_data_transfer_cost(100, "inter_region") == pytest.approx(2.0)

    def test_unknown_transfer_type(self):
        with pytest.raises(PricingNotFoundError):
            calculate_data_transfer_cost(100, "satellite")

    def test_storage_cost(self):
        assert calculate_storage_cost(10) == pytest.approx(1.0)


class TestRecommendInstanceType:
    """인스턴스 추천 테스트"""

    @pytest.mark.parametrize(
        "players,expected",
        [
            (100, "c6g.large"),
            (101, "c6g.xlarge"),
            (300, "c6g.xlarge"),
            (301, "c6g.2xlarge"),
            (600, "c6g.2xlarge"),
            (601, "c6g.4xlarge"),
        ],
    )
    def test_compute_tiers(self, players, expected):
        assert recommend_instance_type(players) == expected

    def test_memory_intensive(self):
        assert recommend_instance_type(100, memory_intensive=True) == "m5.large"
        assert recommend_instance_type(400, memory_intensive=True) == "m5.2xlarge"

    def test_rejects_zero_players(self):
        with pytest.raises(ValidationError):
            recommend_instance_type(0)


class TestSmallerSize:
    def test_one_tier_down(self):
        assert smaller_size("xlarge") == "large"
        assert smaller_size("large") == "medium"

    def test_smallest_and_unknown(self):
        assert smaller_size(SIZE_TIERS[0]) is None
        assert smaller_size("metal") is None
