# gamecost/__init__.py
"""
gamecost - 게임 서버 플릿 비용 추정 엔진

동시 접속자, 세션 길이, 인스턴스 타입, 플릿 모드, 리전 수 등 트래픽 파라미터를
항목별 월간 비용(컴퓨트/스토리지/데이터 전송/플랫폼 서비스)으로 변환합니다.

아키텍처:
    gamecost/
    ├── pricing/        # 가격 테이블 (정적 데이터, 저장소, 시더, 조회기, 캐시)
    ├── estimator/      # 비용 계산 (사용률 모델, 집계, 시나리오, 대안, 최적화 스캔)
    ├── io/             # 리포트 출력 (Excel/CSV/JSON)
    ├── cli/            # Click CLI
    ├── advisory.py     # 외부 어드바이저 인터페이스
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from gamecost import build_calculator
    from gamecost.estimator import TrafficParameters

    calculator = build_calculator()
    params = TrafficParameters(concurrent_players=1000, session_duration_hours=2, instance_type="c5.large")
    costs = calculator.calculate_costs(params, "us-east-1")
    print(costs.total.monthly_operational)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from gamecost.config import Settings
    from gamecost.estimator.calculator import CostCalculator
    from gamecost.pricing.store import PricingStore


def open_store(
    use_cache: bool | None = None,
    refresh_stale: bool = True,
    config: Settings | None = None,
) -> PricingStore:
    """시드된 가격 저장소 생성

    Args:
        use_cache: 파일 스냅샷 캐시 사용 여부 (None이면 ``CACHE_ENABLED``)
        refresh_stale: ``False`` 이면 누락 테이블만 시드하고 stale 테이블은 그대로 둔다
            (staleness 조회/수동 갱신용)
        config: 설정 (None이면 모듈 레벨 ``settings``)

    Returns:
        PricingStore
    """
    from gamecost.config import settings
    from gamecost.pricing.cache import PriceCache
    from gamecost.pricing.seeder import PricingSeeder
    from gamecost.pricing.store import PricingStore

    config = config or settings
    enabled = config.CACHE_ENABLED if use_cache is None else use_cache
    cache = PriceCache(ttl_days=config.PRICING_STALE_DAYS, lock_timeout=config.FILE_LOCK_TIMEOUT) if enabled else None
    store = PricingStore(stale_after_days=config.PRICING_STALE_DAYS, cache=cache)

    seeder = PricingSeeder(store)
    if refresh_stale:
        seeder.initialize()
    else:
        seeder.seed_missing()
    return store


def build_calculator(
    store: PricingStore | None = None,
    use_cache: bool | None = None,
    config: Settings | None = None,
) -> CostCalculator:
    """시드된 가격 저장소 위에 CostCalculator 생성

    Args:
        store: 사용할 가격 저장소 (None이면 ``open_store(use_cache)``)
        use_cache: 파일 스냅샷 캐시 사용 여부 (store가 None일 때만 사용)
        config: 튜닝 상수 (None이면 모듈 레벨 ``settings``)

    Returns:
        StorePriceResolver가 주입된 CostCalculator
    """
    from gamecost.config import settings
    from gamecost.estimator.calculator import CostCalculator
    from gamecost.pricing.resolver import StorePriceResolver

    config = config or settings
    if store is None:
        store = open_store(use_cache, config=config)

    return CostCalculator(
        StorePriceResolver(store),
        players_per_instance=config.PLAYERS_PER_INSTANCE,
        spot_discount=config.SPOT_DISCOUNT,
        setup_overhead_per_instance=config.SETUP_OVERHEAD_PER_INSTANCE,
    )


__all__ = ["__version__", "build_calculator", "open_store"]
