"""
tests/export/test_report_export.py - 리포트 출력 (Excel/CSV/JSON) 테스트
"""

import csv
import json
from dataclasses import replace

import pytest
from openpyxl import load_workbook

from gamecost.estimator import generate_scenarios, propose_alternatives
from gamecost.io.config import OutputConfig, OutputFormat
from gamecost.io.excel import ColumnDef, Workbook
from gamecost.io.report import (
    build_alternative_table,
    build_breakdown_table,
    build_scenario_table,
    export_report,
    write_csv,
    write_excel,
    write_json,
)
from gamecost.io.styles import COLOR_HEADER_BG, COLOR_SUCCESS, COLOR_WARNING, NUMBER_FORMAT_CURRENCY


class TestOutputConfig:
    """OutputConfig/OutputFormat 테스트"""

    def test_default_is_console_only(self):
        config = OutputConfig()
        assert config.should_output_console()
        assert not config.has_file_output()

    @pytest.mark.parametrize(
        "format_str,expected",
        [
            ("excel", OutputFormat.EXCEL),
            ("CSV", OutputFormat.CSV),
            ("json", OutputFormat.JSON),
            ("all", OutputFormat.EXCEL | OutputFormat.CSV | OutputFormat.JSON),
            ("unknown", OutputFormat.CONSOLE),
        ],
    )
    def test_from_string(self, format_str, expected):
        assert OutputConfig.from_string(format_str).formats == expected

    def test_all_includes_every_file_format(self):
        config = OutputConfig(formats=OutputFormat.ALL)
        assert config.should_output_excel() and config.should_output_csv() and config.should_output_json()
        assert not config.should_output_console()


class TestTables:
    """테이블 빌더 테스트"""

    def test_breakdown_table(self, calculator, baseline_params):
        table = build_breakdown_table(calculator.calculate_costs(baseline_params))

        labels = [row[0] for row in table.rows]
        assert labels[:3] == ["Compute", "Storage", "Data Transfer"]
        assert "Platform: matchmaking" in labels
        assert table.summary[1] == pytest.approx(695.44)

    def test_scenario_table(self, calculator):
        table = build_scenario_table(generate_scenarios(calculator))

        assert len(table.rows) == 4
        assert table.rows[0][0] == "Low Traffic"
        assert len(table.headers) == len(table.rows[0])

    def test_alternative_table(self, calculator, baseline_params):
        table = build_alternative_table(propose_alternatives(calculator, baseline_params))

        assert [row[1] for row in table.rows] == ["c6g.large", "c5.large"]
        assert table.rows[1][2] == "spot"
        assert table.highlights == ["success", "success"]

    def test_alternative_without_savings_is_warning(self, calculator, baseline_params):
        alternatives = propose_alternatives(calculator, baseline_params)
        no_savings = replace(alternatives[0], savings_percentage=0.0)

        table = build_alternative_table([no_savings, alternatives[1]])
        assert table.highlights == ["warning", "success"]


class TestWorkbook:
    def test_header_style_and_summary(self, tmp_path):
        wb = Workbook()
        sheet = wb.new_sheet("Costs", [ColumnDef(header="항목"), ColumnDef(header="USD", style="currency")])
        sheet.add_row(["Compute", 12.5])
        sheet.add_summary_row(["합계", 12.5])
        path = wb.save(tmp_path / "costs.xlsx")

        ws = load_workbook(path)["Costs"]
        assert ws["A1"].value == "항목"
        assert ws["A1"].fill.start_color.rgb.endswith(COLOR_HEADER_BG)
        assert ws["B2"].number_format == NUMBER_FORMAT_CURRENCY
        assert ws["A3"].font.bold is True
        assert sheet.row_count == 2

    def test_first_sheet_reuses_default(self):
        wb = Workbook()
        wb.new_sheet("A", [ColumnDef(header="x")])
        wb.new_sheet("B", [ColumnDef(header="y")])
        assert wb.sheet_names == ["A", "B"]


class TestWriters:
    """파일 출력 테스트"""

    def test_write_excel(self, calculator, tmp_path):
        table = build_scenario_table(generate_scenarios(calculator))
        path = write_excel([table], tmp_path, "gamecost_scenarios")

        assert path.suffix == ".xlsx"
        ws = load_workbook(path)["Scenarios"]
        assert ws["A2"].value == "Low Traffic"
        assert ws.max_row == 5

    def test_write_excel_highlights_savings(self, calculator, baseline_params, tmp_path):
        """절감 대안은 초록, 절감 없는 대안은 노랑 배경"""
        alternatives = propose_alternatives(calculator, baseline_params)
        table = build_alternative_table([alternatives[0], replace(alternatives[1], savings_percentage=0.0)])
        path = write_excel([table], tmp_path, "gamecost_alternatives")

        ws = load_workbook(path)["Alternatives"]
        assert ws["A2"].fill.start_color.rgb.endswith(COLOR_SUCCESS)
        assert ws["E2"].fill.start_color.rgb.endswith(COLOR_SUCCESS)
        assert ws["A3"].fill.start_color.rgb.endswith(COLOR_WARNING)

    def test_write_excel_without_highlights_has_no_fill(self, calculator, tmp_path):
        table = build_scenario_table(generate_scenarios(calculator))
        path = write_excel([table], tmp_path, "gamecost_scenarios")

        ws = load_workbook(path)["Scenarios"]
        assert ws["A2"].fill.fill_type is None

    def test_write_csv(self, calculator, baseline_params, tmp_path):
        table = build_breakdown_table(calculator.calculate_costs(baseline_params))
        (path,) = write_csv([table], tmp_path, "gamecost_estimate")

        with open(path, encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["항목", "월 비용 (USD)"]
        assert rows[-1][0] == "월 운영비 합계"

    def test_write_json(self, tmp_path):
        path = write_json({"score": 90, "region": "us-east-1"}, tmp_path, "gamecost_scan")
        assert json.loads(path.read_text(encoding="utf-8")) == {"score": 90, "region": "us-east-1"}


class TestExportReport:
    def test_console_only_writes_nothing(self, tmp_path):
        assert export_report([], {}, OutputConfig(output_dir=str(tmp_path)), "estimate") == []
        assert list(tmp_path.iterdir()) == []

    def test_all_formats(self, calculator, tmp_path):
        scenarios = generate_scenarios(calculator)
        config = OutputConfig(formats=OutputFormat.ALL, output_dir=str(tmp_path))

        paths = export_report([build_scenario_table(scenarios)], {"scenarios": []}, config, "scenarios")

        assert sorted(p.suffix for p in paths) == [".csv", ".json", ".xlsx"]
        assert all(p.name.startswith("gamecost_scenarios") for p in paths)
        assert all(p.exists() for p in paths)
