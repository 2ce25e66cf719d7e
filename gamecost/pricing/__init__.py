"""
gamecost/pricing - 가격 참조 데이터 패키지

정적 가격표를 저장소에 시드하고, 비용 계산기가 주입받아 사용할 조회기를 제공한다.
가격 테이블은 30일(기본) 경과 시 stale로 판정되어 재시드된다.

모듈 구성:
    - types: PricingEntry 등 불변 가격 데이터 타입
    - constants: 서비스 타입/리전 상수 및 정적 가격표
    - catalog: 정적 가격표 헬퍼 (지원 리전, 인스턴스 추천, 단건 비용)
    - cache: PriceCache (테이블 스냅샷 JSON 파일 캐시, filelock 동시성 보호)
    - store: PricingStore (swap-on-write 메모리 저장소 + 선택적 파일 캐시)
    - seeder: PricingSeeder (시드/갱신)
    - resolver: PriceResolver 인터페이스와 StorePriceResolver 구현

사용법:
    from gamecost.pricing import PricingStore, PricingSeeder, StorePriceResolver

    store = PricingStore()
    PricingSeeder(store).initialize()
    resolver = StorePriceResolver(store)
    entry = resolver.resolve_price("c5.large", "us-east-1")
"""

from .cache import PriceCache
from .catalog import (
    calculate_data_transfer_cost,
    calculate_fleet_hourly_cost,
    calculate_monthly_cost,
    calculate_storage_cost,
    get_available_instance_types,
    get_instance_pricing,
    get_supported_regions,
    recommend_instance_type,
)
from .constants import (
    DEFAULT_REGION,
    GLOBAL_REGION,
    SERVICE_DATA_TRANSFER,
    SERVICE_EC2_INSTANCE,
    SERVICE_PLATFORM,
    SERVICE_STORAGE,
    STALE_AFTER_DAYS,
)
from .resolver import PriceResolver, StorePriceResolver
from .seeder import PricingSeeder, SeedReport
from .store import PricingStore
from .types import DataTransferRate, PlatformServiceFees, PriceTableRecord, PricingEntry, StorageRate

__all__ = [
    # 타입
    "PricingEntry",
    "DataTransferRate",
    "StorageRate",
    "PlatformServiceFees",
    "PriceTableRecord",
    # 상수
    "DEFAULT_REGION",
    "GLOBAL_REGION",
    "SERVICE_EC2_INSTANCE",
    "SERVICE_DATA_TRANSFER",
    "SERVICE_STORAGE",
    "SERVICE_PLATFORM",
    "STALE_AFTER_DAYS",
    # 저장소 / 시더 / 조회기
    "PriceCache",
    "PricingStore",
    "PricingSeeder",
    "SeedReport",
    "PriceResolver",
    "StorePriceResolver",
    # 정적 가격표 헬퍼
    "get_supported_regions",
    "get_available_instance_types",
    "get_instance_pricing",
    "calculate_fleet_hourly_cost",
    "calculate_monthly_cost",
    "calculate_data_transfer_cost",
    "calculate_storage_cost",
    "recommend_instance_type",
]
