"""
gamecost/advisory.py - 비용 최적화 권고 인터페이스

외부 권고 서비스(예: LLM 기반 분석기)는 ``AdvisoryService`` 프로토콜만
구현하면 된다. 서비스가 없거나 ``AdvisoryError`` 를 던지면 비용 내역에서
결정적으로 산출하는 ``StaticAdvisoryService`` 가 대신 사용된다.

사용법:
    from gamecost.advisory import AdvisoryRequest, StaticAdvisoryService

    advisor = StaticAdvisoryService()
    recommendations = advisor.propose(AdvisoryRequest(params, "us-east-1", breakdown))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gamecost.estimator.models import CostBreakdown, TrafficParameters


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Recommendation:
    """비용 최적화 권고 1건

    Attributes:
        title: 제목
        description: 설명
        priority: 우선순위
        estimated_savings: 예상 월 절감액 (USD)
        implementation: 적용 방법
    """

    title: str
    description: str
    priority: Priority
    estimated_savings: float
    implementation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "estimated_savings": self.estimated_savings,
            "implementation": self.implementation,
        }


@dataclass(frozen=True)
class AdvisoryRequest:
    """권고 서비스 입력"""

    params: TrafficParameters
    region: str
    breakdown: CostBreakdown


@runtime_checkable
class AdvisoryService(Protocol):
    """비용 최적화 권고 서비스

    Raises:
        AdvisoryError: 서비스 호출 실패 (호출 측에서 정적 권고로 대체)
    """

    def propose(self, request: AdvisoryRequest) -> list[Recommendation]: ...


# 정적 권고 절감 비율
NETWORK_COMPRESSION_SAVINGS = 0.5
AUTO_SCALING_SAVINGS = 0.25
SESSION_PACKING_SAVINGS = 0.2


class StaticAdvisoryService:
    """비용 내역 기반 고정 권고"""

    name = "static"

    def propose(self, request: AdvisoryRequest) -> list[Recommendation]:
        breakdown = request.breakdown
        compute_cost = breakdown.compute.monthly_cost
        return [
            Recommendation(
                title="Implement Network Compression",
                description="게임 상태 전송 데이터를 압축하여 송신 비용 절감",
                priority=Priority.HIGH,
                estimated_savings=breakdown.data_transfer.monthly_cost * NETWORK_COMPRESSION_SAVINGS,
                implementation="게임 상태 동기화에 델타 압축 적용",
            ),
            Recommendation(
                title="Optimize Auto-scaling Policies",
                description="실제 플레이어 수요에 맞춰 인스턴스 수를 조정",
                priority=Priority.HIGH,
                estimated_savings=compute_cost * AUTO_SCALING_SAVINGS,
                implementation="플레이어 큐 길이 기반 타깃 트래킹 스케일링 구성",
            ),
            Recommendation(
                title="Optimize Session Packing",
                description="인스턴스당 게임 세션을 더 많이 배치",
                priority=Priority.MEDIUM,
                estimated_savings=compute_cost * SESSION_PACKING_SAVINGS,
                implementation="세션 배치 전략을 튜닝하고 인스턴스당 프로세스 수 증가",
            ),
        ]
