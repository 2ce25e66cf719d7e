"""
gamecost/config.py - 중앙 설정 관리

비용 엔진의 튜닝 상수와 실행 환경 설정을 한 곳에서 관리합니다.
``Settings`` 는 불변(frozen) 데이터클래스이며, ``GAMECOST_*`` 환경변수로
일부 값을 덮어쓸 수 있습니다.

환경변수:
    - ``GAMECOST_REGION``: 기본 리전 (없으면 ``AWS_REGION``, 그 다음 ``us-east-1``)
    - ``GAMECOST_PRICING_STALE_DAYS``: 가격 테이블 갱신 기준일 (기본 30)
    - ``GAMECOST_PLAYERS_PER_INSTANCE``: 인스턴스당 플레이어 수 (기본 50)
    - ``GAMECOST_SPOT_DISCOUNT``: Spot 요금 비율 (기본 0.7)
    - ``GAMECOST_SETUP_OVERHEAD``: 인스턴스당 초기 비용 USD (기본 10.0)
    - ``GAMECOST_CACHE_ENABLED``: 가격 스냅샷 파일 캐시 사용 여부 (기본 true)
    - ``GAMECOST_CACHE_DIR``: 캐시 루트 디렉토리 (기본 ``{project_root}/temp``)

Usage:
    from gamecost.config import settings, get_default_region

    region = get_default_region()
    stale_days = settings.PRICING_STALE_DAYS
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gamecost.exceptions import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_int(name: str, default: int) -> int:
    """정수 환경변수 조회

    Raises:
        ConfigError: 정수로 변환할 수 없는 값인 경우
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(name, f"정수가 아닙니다: {raw!r}", cause=e) from e


def get_env_float(name: str, default: float) -> float:
    """실수 환경변수 조회

    Raises:
        ConfigError: 실수로 변환할 수 없는 값인 경우
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(name, f"숫자가 아닙니다: {raw!r}", cause=e) from e


def get_env_bool(name: str, default: bool) -> bool:
    """불리언 환경변수 조회 (1/true/yes/on, 0/false/no/off)"""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(name, f"불리언 값이 아닙니다: {raw!r}")


def get_default_region() -> str:
    """기본 리전 반환 (GAMECOST_REGION -> AWS_REGION -> us-east-1)"""
    return os.environ.get("GAMECOST_REGION") or os.environ.get("AWS_REGION") or "us-east-1"


# =============================================================================
# 경로
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로 (``gamecost/`` 의 상위 디렉토리)"""
    return Path(__file__).resolve().parent.parent


def get_cache_dir(category: str = "") -> Path:
    """캐시 디렉토리 경로 반환 (자동 생성됨)

    Args:
        category: 캐시 카테고리 (예: "pricing"). 빈 문자열이면 캐시 루트

    Example:
        >>> get_cache_dir("pricing")
        PosixPath('/path/to/project/temp/pricing')
    """
    root = Path(os.environ.get("GAMECOST_CACHE_DIR") or get_project_root() / "temp")
    cache_dir = root / category if category else root
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def get_version() -> str:
    """패키지 버전 문자열"""
    from gamecost import __version__

    return __version__


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """엔진 설정 (불변)

    Attributes:
        DEFAULT_REGION: 리전 미지정 시 사용할 리전
        PRICING_STALE_DAYS: 이 일수를 초과한 가격 테이블은 stale
        PLAYERS_PER_INSTANCE: 인스턴스당 수용 플레이어 수 (보수적 가정)
        SPOT_DISCOUNT: Spot 요금 비율 (On-Demand 대비)
        SETUP_OVERHEAD_PER_INSTANCE: 인스턴스당 1회성 프로비저닝 비용 (USD)
        CACHE_ENABLED: 가격 스냅샷 파일 캐시 사용 여부
        FILE_LOCK_TIMEOUT: 캐시 파일 락 타임아웃 (초)
    """

    DEFAULT_REGION: str = "us-east-1"
    PRICING_STALE_DAYS: int = 30
    PLAYERS_PER_INSTANCE: int = 50
    SPOT_DISCOUNT: float = 0.7
    SETUP_OVERHEAD_PER_INSTANCE: float = 10.0
    CACHE_ENABLED: bool = True
    FILE_LOCK_TIMEOUT: int = 10


def load_settings() -> Settings:
    """환경변수를 반영한 Settings 생성

    Raises:
        ConfigError: 환경변수 값이 잘못되었거나 허용 범위를 벗어난 경우
    """
    loaded = Settings(
        DEFAULT_REGION=get_default_region(),
        PRICING_STALE_DAYS=get_env_int("GAMECOST_PRICING_STALE_DAYS", Settings.PRICING_STALE_DAYS),
        PLAYERS_PER_INSTANCE=get_env_int("GAMECOST_PLAYERS_PER_INSTANCE", Settings.PLAYERS_PER_INSTANCE),
        SPOT_DISCOUNT=get_env_float("GAMECOST_SPOT_DISCOUNT", Settings.SPOT_DISCOUNT),
        SETUP_OVERHEAD_PER_INSTANCE=get_env_float("GAMECOST_SETUP_OVERHEAD", Settings.SETUP_OVERHEAD_PER_INSTANCE),
        CACHE_ENABLED=get_env_bool("GAMECOST_CACHE_ENABLED", Settings.CACHE_ENABLED),
        FILE_LOCK_TIMEOUT=get_env_int("GAMECOST_FILE_LOCK_TIMEOUT", Settings.FILE_LOCK_TIMEOUT),
    )

    if loaded.PRICING_STALE_DAYS < 0:
        raise ConfigError("GAMECOST_PRICING_STALE_DAYS", "0 이상이어야 합니다")
    if loaded.PLAYERS_PER_INSTANCE < 1:
        raise ConfigError("GAMECOST_PLAYERS_PER_INSTANCE", "1 이상이어야 합니다")
    if not 0 < loaded.SPOT_DISCOUNT <= 1:
        raise ConfigError("GAMECOST_SPOT_DISCOUNT", "0 초과 1 이하여야 합니다")
    if loaded.SETUP_OVERHEAD_PER_INSTANCE < 0:
        raise ConfigError("GAMECOST_SETUP_OVERHEAD", "0 이상이어야 합니다")

    return loaded


# 모듈 레벨 설정 인스턴스 (import 시점의 환경 기준)
settings = load_settings()
