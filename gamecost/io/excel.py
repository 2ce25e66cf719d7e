"""
gamecost/io/excel.py - Excel Workbook 래퍼

openpyxl Workbook 위에 컬럼 정의 기반 시트 작성 헬퍼를 제공한다.

사용 예시:
    from gamecost.io.excel import ColumnDef, Workbook

    wb = Workbook()
    sheet = wb.new_sheet("Scenarios", [
        ColumnDef(header="Scenario", width=18),
        ColumnDef(header="Monthly", width=14, style="currency"),
    ])
    sheet.add_row(["Low Traffic", 123.45])
    sheet.add_summary_row(["합계", 123.45])
    wb.save_as("output", "gamecost_scenarios")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from openpyxl import Workbook as OpenpyxlWorkbook
from openpyxl.styles import PatternFill
from openpyxl.utils import get_column_letter

from . import styles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnDef:
    """시트 컬럼 정의

    Attributes:
        header: 헤더 텍스트
        width: 컬럼 너비
        style: ``data`` | ``center`` | ``wrap`` | ``number`` | ``decimal`` | ``currency`` | ``rate``
    """

    header: str
    width: int = 15
    style: str = "data"


class Sheet:
    """컬럼 정의를 따르는 워크시트"""

    def __init__(self, ws, columns: list[ColumnDef]) -> None:
        self._ws = ws
        self.columns = columns
        self._border = styles.get_thin_border()
        self._write_header()

    @property
    def row_count(self) -> int:
        """데이터 행 수 (헤더 제외)"""
        return self._ws.max_row - 1

    def _write_header(self) -> None:
        font = styles.get_header_font()
        fill = styles.get_header_fill()
        for col_idx, column in enumerate(self.columns, start=1):
            cell = self._ws.cell(row=1, column=col_idx, value=column.header)
            cell.font = font
            cell.fill = fill
            cell.alignment = styles.ALIGN_CENTER
            cell.border = self._border
            self._ws.column_dimensions[get_column_letter(col_idx)].width = column.width
        self._ws.freeze_panes = "A2"

    def add_row(self, values: list[Any], fill: PatternFill | None = None, bold: bool = False) -> int:
        """행 추가

        Returns:
            추가된 행 번호
        """
        row_num = self._ws.max_row + 1
        font = styles.get_summary_font() if bold else styles.get_data_font()

        for col_idx, (column, value) in enumerate(zip(self.columns, values), start=1):
            cell = self._ws.cell(row=row_num, column=col_idx, value=value)
            cell.font = font
            cell.border = self._border
            cell.alignment = styles.alignment_for(column.style)
            number_format = styles.STYLE_NUMBER_FORMATS.get(column.style)
            if number_format and isinstance(value, (int, float)):
                cell.number_format = number_format
            if fill is not None:
                cell.fill = fill

        return row_num

    def add_summary_row(self, values: list[Any]) -> int:
        """요약 행 추가 (굵게, 노란 배경)"""
        return self.add_row(values, fill=styles.get_summary_fill(), bold=True)


class Workbook:
    """시트 단위로 리포트를 작성하는 Workbook"""

    def __init__(self) -> None:
        self._wb = OpenpyxlWorkbook()
        self._has_sheet = False

    def new_sheet(self, name: str, columns: list[ColumnDef]) -> Sheet:
        # openpyxl 기본 시트를 첫 시트로 재사용
        if not self._has_sheet:
            ws = self._wb.active
            ws.title = name
            self._has_sheet = True
        else:
            ws = self._wb.create_sheet(title=name)
        return Sheet(ws, columns)

    @property
    def sheet_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def save(self, filepath: str | Path) -> Path:
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._wb.save(path)
        logger.debug(f"Excel 저장: {path}")
        return path

    def save_as(self, output_dir: str | Path, prefix: str) -> Path:
        """타임스탬프 파일명으로 저장 (``{prefix}_{YYYYMMDD_HHMMSS}.xlsx``)"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return self.save(Path(output_dir) / f"{prefix}_{timestamp}.xlsx")
