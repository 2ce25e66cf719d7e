"""
gamecost/exceptions.py - 통합 예외 계층 구조

비용 계산 엔진 전체에서 사용되는 예외/경고 클래스들을 정의합니다.
모든 예외는 호출자에게 동기적으로 전파되며, 엔진 내부에서 재시도하지 않습니다.

예외 계층 구조:
    GameCostError (베이스)
    ├── ValidationError (입력 파라미터 검증 실패)
    ├── PricingNotFoundError (리전/인스턴스 가격 없음)
    ├── ConfigError (설정 관련)
    └── AdvisoryError (외부 어드바이저 호출 실패)

    StaleDataWarning (UserWarning) - 가격 테이블이 오래됨 (계산은 계속 진행)

Usage:
    from gamecost.exceptions import PricingNotFoundError

    try:
        entry = resolver.resolve_price("c5.large", "us-east-1")
    except PricingNotFoundError as e:
        print(e.to_dict())
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class GameCostError(Exception):
    """gamecost 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 입력 검증
# =============================================================================


class ValidationError(GameCostError):
    """입력 검증 오류

    TrafficParameters 불변식 위반(0 이하 플레이어 수, 빈 리전 등)은
    계산 전에 이 예외로 거부됩니다. 값을 보정(clamp)하지 않습니다.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 가격 조회
# =============================================================================


class PricingNotFoundError(GameCostError):
    """가격 정보 없음

    로드된 가격 테이블에 리전 또는 인스턴스 타입이 없는 경우.
    0원 비용으로 대체하지 않고 반드시 이 예외를 발생시킵니다.
    """

    def __init__(
        self,
        service_type: str,
        region: str,
        key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        target = f"{service_type}/{region}"
        if key:
            target = f"{target}/{key}"
        super().__init__(f"가격 정보 없음 [{target}]", cause)
        self.service_type = service_type
        self.region = region
        self.key = key
        self.details.update(
            {
                "service_type": service_type,
                "region": region,
                "key": key,
            }
        )


# =============================================================================
# 설정 / 외부 협력자
# =============================================================================


class ConfigError(GameCostError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class AdvisoryError(GameCostError):
    """외부 어드바이저(LLM 등) 호출 실패"""

    def __init__(
        self,
        advisor: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"어드바이저 오류 [{advisor}]: {message}", cause)
        self.advisor = advisor
        self.details["advisor"] = advisor


# =============================================================================
# 경고
# =============================================================================


class StaleDataWarning(UserWarning):
    """가격 테이블이 갱신 기준일보다 오래된 경우의 경고 (비치명적)"""

    def __init__(self, service_type: str, region: str, age_days: int):
        super().__init__(f"가격 데이터가 오래됨 [{service_type}/{region}]: {age_days}일 경과")
        self.service_type = service_type
        self.region = region
        self.age_days = age_days


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, ValidationError):
        return f"입력값을 확인하세요. {error.message}"

    if isinstance(error, PricingNotFoundError) and error.service_type == "ec2_instance":
        return f"{error.message}. 'gamecost pricing instances -r {error.region}' 으로 지원 목록을 확인하세요."

    if isinstance(error, GameCostError):
        return str(error)

    return str(error)
