"""
gamecost/pricing/constants.py - 가격 모듈 중앙 상수 및 정적 가격표

시더(seeder)가 가격 저장소에 적재하는 정적 참조 데이터와 공통 상수를 관리한다.
가격은 근사치이며 주기적으로 갱신되어야 한다 (us-east-1 기준 요금).

상수:
    - ``SERVICE_*``: 가격 테이블 서비스 타입
    - ``GLOBAL_REGION``: 리전 무관 테이블의 리전 키 (``"global"``)
    - ``DEFAULT_REGION``: 리전 미지정 시 기본 리전 (조회 실패 시 대체용이 아님)
    - ``STALE_AFTER_DAYS``: 가격 테이블 갱신 기준일 (30일)
    - ``EC2_INSTANCE_PRICING``: 리전별 인스턴스 가격표
    - ``DATA_TRANSFER_PRICING`` / ``STORAGE_PRICING`` / ``PLATFORM_SERVICE_FEES``
"""

from __future__ import annotations

from gamecost.config import Settings

from .types import GIB, DataTransferRate, PlatformServiceFees, PricingEntry, StorageRate

# 가격 테이블 서비스 타입
SERVICE_EC2_INSTANCE = "ec2_instance"
SERVICE_DATA_TRANSFER = "data_transfer"
SERVICE_STORAGE = "storage"
SERVICE_PLATFORM = "platform_services"

GLOBAL_REGION = "global"
DEFAULT_REGION = Settings.DEFAULT_REGION

# 가격 테이블 갱신 기준 (일)
STALE_AFTER_DAYS = Settings.PRICING_STALE_DAYS

# 30일 기준 월간 시간 (720h)
HOURS_PER_MONTH_30D = 24 * 30

# 기본 구성요소 키
STORAGE_BUILD = "build_storage"
STORAGE_SCRIPT = "script_storage"
TRANSFER_INTERNET_OUT = "internet_out"
TRANSFER_INTER_REGION = "inter_region"
TRANSFER_INTRA_REGION = "intra_region"

# GameLift가 EC2 원시 요금에 붙이는 배수
DEFAULT_PLATFORM_MULTIPLIER = 1.5


def _entry(instance_type: str, vcpus: int, memory_gib: int, hourly_rate: float) -> PricingEntry:
    return PricingEntry(
        instance_type=instance_type,
        vcpus=vcpus,
        memory_bytes=memory_gib * GIB,
        hourly_rate=hourly_rate,
        platform_multiplier=DEFAULT_PLATFORM_MULTIPLIER,
    )


# ============================================================================
# 리전별 인스턴스 가격 (게임 서버용 c5 / c6g / m5 패밀리)
# ============================================================================

EC2_INSTANCE_PRICING: dict[str, tuple[PricingEntry, ...]] = {
    "us-east-1": (
        # C5 - Compute Optimized
        _entry("c5.large", 2, 4, 0.085),
        _entry("c5.xlarge", 4, 8, 0.17),
        _entry("c5.2xlarge", 8, 16, 0.34),
        _entry("c5.4xlarge", 16, 32, 0.68),
        # C6g - Graviton2
        _entry("c6g.large", 2, 4, 0.068),
        _entry("c6g.xlarge", 4, 8, 0.136),
        _entry("c6g.2xlarge", 8, 16, 0.272),
        _entry("c6g.4xlarge", 16, 32, 0.544),
        # M5 - General Purpose
        _entry("m5.large", 2, 8, 0.096),
        _entry("m5.xlarge", 4, 16, 0.192),
        _entry("m5.2xlarge", 8, 32, 0.384),
    ),
    "us-west-2": (
        _entry("c5.large", 2, 4, 0.085),
        _entry("c5.xlarge", 4, 8, 0.17),
        _entry("c5.2xlarge", 8, 16, 0.34),
        _entry("c6g.large", 2, 4, 0.068),
        _entry("c6g.xlarge", 4, 8, 0.136),
    ),
    "eu-west-1": (
        _entry("c5.large", 2, 4, 0.094),
        _entry("c5.xlarge", 4, 8, 0.188),
        _entry("c5.2xlarge", 8, 16, 0.376),
        _entry("c6g.large", 2, 4, 0.075),
        _entry("c6g.xlarge", 4, 8, 0.15),
    ),
    "ap-southeast-1": (
        _entry("c5.large", 2, 4, 0.098),
        _entry("c5.xlarge", 4, 8, 0.196),
        _entry("c6g.large", 2, 4, 0.078),
        _entry("c6g.xlarge", 4, 8, 0.156),
    ),
}

# ============================================================================
# 리전 무관 요금
# ============================================================================

# 데이터 전송 (근사치, 월 10TB 이하 구간)
DATA_TRANSFER_PRICING: tuple[DataTransferRate, ...] = (
    DataTransferRate(TRANSFER_INTERNET_OUT, 0.09),
    DataTransferRate(TRANSFER_INTER_REGION, 0.02),
    DataTransferRate(TRANSFER_INTRA_REGION, 0.01),
)

# 게임 빌드/스크립트 스토리지
STORAGE_PRICING: tuple[StorageRate, ...] = (
    StorageRate(STORAGE_BUILD, 0.10),
    StorageRate(STORAGE_SCRIPT, 0.10),
)

# 매치메이킹/모니터링 등 부가 서비스
PLATFORM_SERVICE_FEES = PlatformServiceFees()


def get_static_tables() -> dict[tuple[str, str], tuple]:
    """시더가 적재할 ``(service_type, region) -> items`` 전체 매핑

    Returns:
        인스턴스 테이블(리전별) + 글로벌 테이블 3종. 선언 순서 유지.
    """
    tables: dict[tuple[str, str], tuple] = {
        (SERVICE_EC2_INSTANCE, region): entries for region, entries in EC2_INSTANCE_PRICING.items()
    }
    tables[(SERVICE_DATA_TRANSFER, GLOBAL_REGION)] = DATA_TRANSFER_PRICING
    tables[(SERVICE_STORAGE, GLOBAL_REGION)] = STORAGE_PRICING
    tables[(SERVICE_PLATFORM, GLOBAL_REGION)] = (PLATFORM_SERVICE_FEES,)
    return tables
