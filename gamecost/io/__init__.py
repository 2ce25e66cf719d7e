"""
gamecost/io - 리포트 출력 (Excel/CSV/JSON)
"""

from .config import FORMAT_CHOICES, OutputConfig, OutputFormat
from .excel import ColumnDef, Sheet, Workbook
from .report import (
    ReportTable,
    build_alternative_table,
    build_breakdown_table,
    build_recommendation_table,
    build_scenario_table,
    export_report,
    write_csv,
    write_excel,
    write_json,
)

__all__ = [
    "FORMAT_CHOICES",
    "OutputConfig",
    "OutputFormat",
    "ColumnDef",
    "Sheet",
    "Workbook",
    "ReportTable",
    "build_breakdown_table",
    "build_scenario_table",
    "build_alternative_table",
    "build_recommendation_table",
    "export_report",
    "write_excel",
    "write_csv",
    "write_json",
]
