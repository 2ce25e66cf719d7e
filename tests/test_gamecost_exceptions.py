"""
tests/test_gamecost_exceptions.py - 예외 계층 테스트
"""

import pytest

from gamecost.exceptions import (
    AdvisoryError,
    ConfigError,
    GameCostError,
    PricingNotFoundError,
    StaleDataWarning,
    ValidationError,
    format_error_for_user,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("field", 1, ">= 2"),
            PricingNotFoundError("ec2_instance", "us-east-1"),
            ConfigError("KEY", "bad"),
            AdvisoryError("llm", "timeout"),
        ],
    )
    def test_all_derive_from_base(self, error):
        assert isinstance(error, GameCostError)

    def test_stale_warning_is_user_warning(self):
        assert issubclass(StaleDataWarning, UserWarning)
        assert not issubclass(StaleDataWarning, GameCostError)


class TestMessages:
    """메시지/딕셔너리 변환 테스트"""

    def test_pricing_not_found_with_key(self):
        error = PricingNotFoundError("ec2_instance", "us-east-1", key="z9.huge")

        assert str(error) == "가격 정보 없음 [ec2_instance/us-east-1/z9.huge]"
        assert error.details == {"service_type": "ec2_instance", "region": "us-east-1", "key": "z9.huge"}

    def test_validation_error_details(self):
        error = ValidationError("concurrent_players", 0, ">= 1")

        assert error.field == "concurrent_players"
        assert error.details["expected"] == ">= 1"

    def test_cause_in_str(self):
        error = ConfigError("KEY", "bad", cause=ValueError("boom"))
        assert str(error).endswith(": boom")
        assert error.to_dict()["cause"] == "boom"

    def test_to_dict(self):
        data = AdvisoryError("llm", "timeout").to_dict()
        assert data["error_type"] == "AdvisoryError"
        assert data["details"] == {"advisor": "llm"}

    def test_stale_warning_fields(self):
        warning = StaleDataWarning("storage", "global", 45)
        assert warning.age_days == 45
        assert "45" in str(warning)


class TestFormatErrorForUser:
    def test_validation_hint(self):
        assert format_error_for_user(ValidationError("x", 1, "2")).startswith("입력값을 확인하세요")

    def test_instance_pricing_hint(self):
        message = format_error_for_user(PricingNotFoundError("ec2_instance", "mars-1"))
        assert "pricing instances -r mars-1" in message

    def test_global_pricing_has_no_hint(self):
        message = format_error_for_user(PricingNotFoundError("storage", "global"))
        assert "pricing instances" not in message

    def test_plain_exception(self):
        assert format_error_for_user(RuntimeError("oops")) == "oops"
