"""
gamecost/estimator/calculator.py - 비용 집계기 (CostCalculator)

트래픽 파라미터를 항목별 비용 내역으로 변환한다. 가격은 생성 시 주입받은
``PriceResolver`` 로만 조회하며, 숨은 상태나 부수 효과가 없다
(같은 입력 + 같은 가격 테이블 = 같은 결과).

계산 순서:
    1. 인스턴스 시간당 요금 조회 (없으면 PricingNotFoundError 전파)
    2. 필요 인스턴스 수 = ceil(동시 접속자 / 50)
    3. 월간 인스턴스-시간 (utilization 모델)
    4. Spot 할인 (spot = 0.7, on_demand = 1.0)
    5. 컴퓨트 = 요금 × 할인 × 시간 × 리전 수
    6. 스토리지 = GB × GB-월 요금 × 리전 수
    7. 데이터 전송 = GB × 송신 요금
    8. 플랫폼 서비스 = 구성요소 합계
    9. 초기 비용 = 인스턴스 수 × 인스턴스당 프로비저닝 비용
    10. 월 운영비 = 5 + 6 + 7 + 8

사용법:
    from gamecost.estimator.calculator import CostCalculator

    calculator = CostCalculator(resolver)
    costs = calculator.calculate_costs(params, "us-east-1")
"""

from __future__ import annotations

import logging

from gamecost.config import Settings
from gamecost.exceptions import ValidationError
from gamecost.pricing.constants import DEFAULT_REGION
from gamecost.pricing.resolver import PriceResolver

from .models import (
    ComputeCost,
    CostBreakdown,
    CostTotals,
    DataTransferCost,
    PlatformServicesCost,
    StorageCost,
    TrafficParameters,
)
from .utilization import PLAYERS_PER_INSTANCE, calculate_instances_needed, estimate_monthly_hours

logger = logging.getLogger(__name__)

# Spot 요금 비율 (실시간 시세가 아닌 고정 근사치)
SPOT_DISCOUNT = Settings.SPOT_DISCOUNT
ON_DEMAND_DISCOUNT = 1.0

# 인스턴스당 1회성 프로비저닝 비용 (USD)
SETUP_OVERHEAD_PER_INSTANCE = Settings.SETUP_OVERHEAD_PER_INSTANCE


class CostCalculator:
    """비용 집계기

    Args:
        resolver: 가격 조회기
        players_per_instance: 인스턴스당 수용 플레이어 수
        spot_discount: Spot 요금 비율
        setup_overhead_per_instance: 인스턴스당 초기 비용
        apply_platform_multiplier: ``True`` 이면 원시 요금 대신
            ``hourly_rate × platform_multiplier`` 를 컴퓨트 요금으로 사용
    """

    def __init__(
        self,
        resolver: PriceResolver,
        players_per_instance: int = PLAYERS_PER_INSTANCE,
        spot_discount: float = SPOT_DISCOUNT,
        setup_overhead_per_instance: float = SETUP_OVERHEAD_PER_INSTANCE,
        apply_platform_multiplier: bool = False,
    ) -> None:
        if players_per_instance < 1:
            raise ValidationError("players_per_instance", players_per_instance, ">= 1")
        if not 0 < spot_discount <= 1:
            raise ValidationError("spot_discount", spot_discount, "0 < x <= 1")

        self.resolver = resolver
        self.players_per_instance = players_per_instance
        self.spot_discount = spot_discount
        self.setup_overhead_per_instance = setup_overhead_per_instance
        self.apply_platform_multiplier = apply_platform_multiplier

    def calculate_costs(self, params: TrafficParameters, region: str = DEFAULT_REGION) -> CostBreakdown:
        """트래픽 파라미터의 항목별 비용 계산

        Args:
            params: 검증된 트래픽 파라미터
            region: 리전 ID

        Returns:
            CostBreakdown

        Raises:
            ValidationError: 리전이 빈 문자열이거나 params 타입이 잘못된 경우
            PricingNotFoundError: 인스턴스/리전 가격이 없는 경우
        """
        if not isinstance(params, TrafficParameters):
            raise ValidationError("params", type(params).__name__, "TrafficParameters")
        if not isinstance(region, str) or not region.strip():
            raise ValidationError("region", region, "비어있지 않은 리전 ID")

        entry = self.resolver.resolve_price(params.instance_type, region)
        instance_hourly_rate = entry.platform_hourly_rate if self.apply_platform_multiplier else entry.hourly_rate

        instances_needed = calculate_instances_needed(params.concurrent_players, self.players_per_instance)
        monthly_hours = estimate_monthly_hours(instances_needed, params.session_duration_hours)

        discount = self.spot_discount if params.is_spot else ON_DEMAND_DISCOUNT
        compute_hourly_rate = instance_hourly_rate * discount
        compute_monthly_cost = compute_hourly_rate * monthly_hours * params.regions_count

        storage_monthly_cost = params.storage_gb * self.resolver.storage_rate() * params.regions_count
        data_transfer_monthly_cost = params.monthly_data_transfer_gb * self.resolver.egress_rate()

        component_costs = self.resolver.platform_fees().component_costs(params.monthly_matchmaking_requests)
        platform_total = sum(component_costs.values())

        initial_setup = instances_needed * self.setup_overhead_per_instance
        monthly_operational = compute_monthly_cost + storage_monthly_cost + data_transfer_monthly_cost + platform_total

        breakdown = CostBreakdown(
            compute=ComputeCost(
                hourly_rate=compute_hourly_rate,
                instances_needed=instances_needed,
                monthly_hours=monthly_hours,
                monthly_cost=compute_monthly_cost,
            ),
            storage=StorageCost(size_gb=params.storage_gb, monthly_cost=storage_monthly_cost),
            data_transfer=DataTransferCost(
                monthly_gb=params.monthly_data_transfer_gb,
                monthly_cost=data_transfer_monthly_cost,
            ),
            platform_services=PlatformServicesCost(component_costs=component_costs, total=platform_total),
            total=CostTotals(initial_setup=initial_setup, monthly_operational=monthly_operational),
        )

        logger.debug(
            f"비용 계산: {params.instance_type}/{region} players={params.concurrent_players} "
            f"fleet={params.fleet_mode.value} monthly={monthly_operational:.2f} setup={initial_setup:.2f}"
        )
        return breakdown
