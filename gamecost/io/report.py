"""
gamecost/io/report.py - 비용 리포트 테이블 및 파일 출력

계산 결과(비용 내역, 시나리오, 대안, 권고)를 ``ReportTable`` 로 변환한 뒤
OutputConfig에 지정된 형식(Excel/CSV/JSON)으로 저장한다.

Usage:
    from gamecost.io.config import OutputConfig
    from gamecost.io.report import build_scenario_table, export_report

    tables = [build_scenario_table(scenarios)]
    paths = export_report(tables, {"scenarios": [...]}, OutputConfig.from_string("excel"), "scenarios")
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gamecost.config import get_project_root

from . import styles
from .config import OutputConfig
from .excel import ColumnDef, Workbook

if TYPE_CHECKING:
    from gamecost.advisory import Recommendation
    from gamecost.estimator.models import AlternativeConfig, CostBreakdown, ScenarioResult

logger = logging.getLogger(__name__)

FILE_PREFIX = "gamecost"

HIGHLIGHT_FILLS = {
    "success": styles.get_success_fill,
    "warning": styles.get_warning_fill,
}


@dataclass
class ReportTable:
    """출력 형식과 무관한 표 데이터

    Attributes:
        name: 시트/파일 이름
        columns: 컬럼 정의
        rows: 데이터 행
        summary: 요약 행 (없으면 None)
        highlights: 행별 강조 (``"success"`` | ``"warning"`` | None, Excel 전용)
    """

    name: str
    columns: list[ColumnDef]
    rows: list[list[Any]] = field(default_factory=list)
    summary: list[Any] | None = None
    highlights: list[str | None] = field(default_factory=list)

    def highlight_of(self, index: int) -> str | None:
        return self.highlights[index] if index < len(self.highlights) else None

    @property
    def headers(self) -> list[str]:
        return [c.header for c in self.columns]


# =============================================================================
# 테이블 빌더
# =============================================================================


def build_breakdown_table(breakdown: CostBreakdown, name: str = "Breakdown") -> ReportTable:
    """항목별 월 비용"""
    platform = breakdown.platform_services
    rows: list[list[Any]] = [
        ["Compute", breakdown.compute.monthly_cost],
        ["Storage", breakdown.storage.monthly_cost],
        ["Data Transfer", breakdown.data_transfer.monthly_cost],
    ]
    rows.extend([f"Platform: {component}", cost] for component, cost in platform.component_costs.items())

    return ReportTable(
        name=name,
        columns=[ColumnDef(header="항목", width=28), ColumnDef(header="월 비용 (USD)", width=16, style="currency")],
        rows=rows,
        summary=["월 운영비 합계", breakdown.total.monthly_operational],
    )


def build_scenario_table(scenarios: list[ScenarioResult]) -> ReportTable:
    """시나리오별 비용 비교"""
    columns = [
        ColumnDef(header="Scenario", width=18),
        ColumnDef(header="Players", width=10, style="number"),
        ColumnDef(header="Session (h)", width=12, style="decimal"),
        ColumnDef(header="Instances", width=10, style="number"),
        ColumnDef(header="Instance Hours", width=15, style="decimal"),
        ColumnDef(header="Compute", width=14, style="currency"),
        ColumnDef(header="Storage", width=12, style="currency"),
        ColumnDef(header="Data Transfer", width=14, style="currency"),
        ColumnDef(header="Platform", width=12, style="currency"),
        ColumnDef(header="Initial Setup", width=14, style="currency"),
        ColumnDef(header="Monthly Total", width=15, style="currency"),
    ]
    rows = [
        [
            s.label,
            s.params.concurrent_players,
            s.params.session_duration_hours,
            s.costs.compute.instances_needed,
            s.costs.compute.monthly_hours,
            s.costs.compute.monthly_cost,
            s.costs.storage.monthly_cost,
            s.costs.data_transfer.monthly_cost,
            s.costs.platform_services.total,
            s.costs.total.initial_setup,
            s.costs.total.monthly_operational,
        ]
        for s in scenarios
    ]
    return ReportTable(name="Scenarios", columns=columns, rows=rows)


def build_alternative_table(alternatives: list[AlternativeConfig] | tuple[AlternativeConfig, ...]) -> ReportTable:
    """대안 구성 비교"""
    columns = [
        ColumnDef(header="Alternative", width=28),
        ColumnDef(header="Instance Type", width=15),
        ColumnDef(header="Fleet", width=12, style="center"),
        ColumnDef(header="Monthly", width=14, style="currency"),
        ColumnDef(header="Savings (%)", width=12, style="decimal"),
        ColumnDef(header="Tradeoffs", width=60, style="wrap"),
    ]
    rows = [
        [
            alt.name,
            alt.params.instance_type,
            alt.params.fleet_mode.value,
            alt.monthly_estimate,
            alt.savings_percentage,
            "\n".join(alt.tradeoffs),
        ]
        for alt in alternatives
    ]
    # 절감 있음: 초록, 절감 없음: 노랑
    highlights: list[str | None] = ["success" if alt.savings_percentage > 0 else "warning" for alt in alternatives]
    return ReportTable(name="Alternatives", columns=columns, rows=rows, highlights=highlights)


def build_recommendation_table(recommendations: list[Recommendation] | tuple[Recommendation, ...]) -> ReportTable:
    """최적화 권고"""
    columns = [
        ColumnDef(header="Recommendation", width=32),
        ColumnDef(header="Priority", width=10, style="center"),
        ColumnDef(header="Est. Savings", width=14, style="currency"),
        ColumnDef(header="Implementation", width=50, style="wrap"),
    ]
    rows = [[r.title, r.priority.value, r.estimated_savings, r.implementation] for r in recommendations]
    summary = ["합계", "-", sum(r.estimated_savings for r in recommendations), "-"] if rows else None
    return ReportTable(name="Recommendations", columns=columns, rows=rows, summary=summary)


# =============================================================================
# 파일 출력
# =============================================================================


def get_output_dir(config: OutputConfig) -> Path:
    path = Path(config.output_dir) if config.output_dir else get_project_root() / "output"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def write_excel(tables: list[ReportTable], output_dir: str | Path, prefix: str) -> Path:
    """테이블마다 시트 하나로 Excel 저장"""
    wb = Workbook()
    for table in tables:
        sheet = wb.new_sheet(table.name, table.columns)
        for index, row in enumerate(table.rows):
            highlight = table.highlight_of(index)
            sheet.add_row(row, fill=HIGHLIGHT_FILLS[highlight]() if highlight else None)
        if table.summary is not None:
            sheet.add_summary_row(table.summary)
    return wb.save_as(output_dir, prefix)


def write_csv(tables: list[ReportTable], output_dir: str | Path, prefix: str) -> list[Path]:
    """테이블마다 CSV 파일 하나로 저장 (Excel 호환 UTF-8 BOM)"""
    timestamp = _timestamp()
    paths: list[Path] = []
    for table in tables:
        path = Path(output_dir) / f"{prefix}_{table.name.lower()}_{timestamp}.csv"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8-sig", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(table.headers)
            writer.writerows(table.rows)
            if table.summary is not None:
                writer.writerow(table.summary)
        paths.append(path)
    return paths


def write_json(payload: dict[str, Any], output_dir: str | Path, prefix: str) -> Path:
    path = Path(output_dir) / f"{prefix}_{_timestamp()}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2, default=str)
    return path


def export_report(
    tables: list[ReportTable],
    payload: dict[str, Any],
    config: OutputConfig,
    name: str,
) -> list[Path]:
    """OutputConfig의 파일 형식별로 저장

    Args:
        tables: Excel/CSV용 테이블
        payload: JSON용 데이터
        config: 출력 설정
        name: 리포트 이름 (파일명 접두사에 사용)

    Returns:
        저장된 파일 경로 목록 (파일 형식이 없으면 빈 목록)
    """
    if not config.has_file_output():
        return []

    output_dir = get_output_dir(config)
    prefix = f"{FILE_PREFIX}_{name}"
    paths: list[Path] = []

    if config.should_output_excel():
        paths.append(write_excel(tables, output_dir, prefix))
    if config.should_output_csv():
        paths.extend(write_csv(tables, output_dir, prefix))
    if config.should_output_json():
        paths.append(write_json(payload, output_dir, prefix))

    for path in paths:
        logger.info(f"리포트 저장: {path}")
    return paths
