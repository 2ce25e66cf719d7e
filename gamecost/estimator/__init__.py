"""
gamecost/estimator - 비용 계산

트래픽 파라미터를 월간 비용 내역으로 변환하고, 시나리오/대안/최적화 분석을 제공합니다.

Usage:
    from gamecost import build_calculator
    from gamecost.estimator import TrafficParameters, generate_scenarios

    calculator = build_calculator()
    scenarios = generate_scenarios(calculator, TrafficParameters(1000, 2))
"""

from .alternatives import propose_alternatives
from .calculator import CostCalculator
from .models import (
    AlternativeConfig,
    AlternativeKind,
    ComputeCost,
    CostBreakdown,
    CostTotals,
    DataTransferCost,
    FleetMode,
    PlatformServicesCost,
    ScenarioResult,
    StorageCost,
    TrafficParameters,
)
from .optimization import CostOptimizationReport, OptimizationInsights, run_cost_optimization_scan
from .scenarios import TRAFFIC_PRESETS, TrafficPreset, generate_scenarios
from .unit_economics import calculate_cost_per_player, estimate_monthly_active_users
from .utilization import UtilizationEstimate, estimate_monthly_hours, estimate_utilization

__all__ = [
    # Calculator
    "CostCalculator",
    # Models
    "TrafficParameters",
    "FleetMode",
    "ComputeCost",
    "StorageCost",
    "DataTransferCost",
    "PlatformServicesCost",
    "CostTotals",
    "CostBreakdown",
    "ScenarioResult",
    "AlternativeKind",
    "AlternativeConfig",
    # Utilization
    "UtilizationEstimate",
    "estimate_utilization",
    "estimate_monthly_hours",
    # Scenarios / alternatives
    "TrafficPreset",
    "TRAFFIC_PRESETS",
    "generate_scenarios",
    "propose_alternatives",
    # Unit economics
    "estimate_monthly_active_users",
    "calculate_cost_per_player",
    # Optimization
    "CostOptimizationReport",
    "OptimizationInsights",
    "run_cost_optimization_scan",
]
