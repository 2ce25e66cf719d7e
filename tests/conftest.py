"""
tests/conftest.py - pytest 공통 픽스처

정적 가격표로 시드된 메모리 전용 저장소와 비용 집계기를 제공합니다.

Usage:
    def test_something(calculator, baseline_params):
        costs = calculator.calculate_costs(baseline_params, "us-east-1")
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gamecost.estimator import CostCalculator, TrafficParameters  # noqa: E402
from gamecost.pricing import PricingSeeder, PricingStore, StorePriceResolver  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """테스트 환경 설정 (캐시 디렉토리를 임시 경로로 격리)"""
    monkeypatch.setenv("GAMECOST_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.delenv("GAMECOST_REGION", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    yield


# =============================================================================
# 가격 / 계산 픽스처
# =============================================================================


@pytest.fixture
def seed_time():
    """시드 시각 (고정)"""
    return datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def store():
    """정적 가격표로 시드된 메모리 전용 저장소"""
    pricing_store = PricingStore(stale_after_days=30)
    PricingSeeder(pricing_store).initialize()
    return pricing_store


@pytest.fixture
def resolver(store):
    return StorePriceResolver(store)


@pytest.fixture
def calculator(resolver):
    """기본 튜닝 상수(50명/인스턴스, Spot 0.7, 초기비용 $10)의 집계기"""
    return CostCalculator(resolver)


@pytest.fixture
def baseline_params():
    """문서화된 예시 입력: c5.large, 1000명, 2시간 세션"""
    return TrafficParameters(
        concurrent_players=1000,
        session_duration_hours=2,
        instance_type="c5.large",
        regions_count=1,
        fleet_mode="on_demand",
        storage_gb=10,
        monthly_data_transfer_gb=100,
    )
