"""
gamecost/io/styles.py - Excel 스타일 상수

리포트 시트 전체에서 일관된 색상, 정렬, 숫자 포맷을 사용하기 위한 상수
"""

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# =============================================================================
# 색상 상수 (RGB Hex)
# =============================================================================

COLOR_HEADER_BG = "4472C4"  # 헤더 배경 (파란색)
COLOR_HEADER_FG = "FFFFFF"  # 헤더 글자 (흰색)
COLOR_SUMMARY_BG = "FFF2CC"  # 요약 배경 (연한 노랑)
COLOR_SUCCESS = "C6EFCE"  # 절감 (연한 초록)
COLOR_WARNING = "FFEB9C"  # 주의 (연한 노랑)
COLOR_BORDER = "808080"

FONT_NAME = "맑은 고딕"

# =============================================================================
# 숫자 포맷 상수
# =============================================================================

NUMBER_FORMAT_INTEGER = "#,##0"  # 정수 (1,234)
NUMBER_FORMAT_DECIMAL = "#,##0.00"  # 소수점 2자리 (1,234.56)
NUMBER_FORMAT_CURRENCY = "#,##0.00"  # 금액 (1,234.56)
NUMBER_FORMAT_RATE = "0.0000"  # 시간당 요금 (0.0850)

# ColumnDef.style -> 숫자 포맷
STYLE_NUMBER_FORMATS = {
    "number": NUMBER_FORMAT_INTEGER,
    "decimal": NUMBER_FORMAT_DECIMAL,
    "currency": NUMBER_FORMAT_CURRENCY,
    "rate": NUMBER_FORMAT_RATE,
}

# =============================================================================
# 정렬
# =============================================================================

ALIGN_LEFT = Alignment(horizontal="left", vertical="center", wrap_text=False)
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=False)
ALIGN_RIGHT = Alignment(horizontal="right", vertical="center", wrap_text=False)
ALIGN_WRAP = Alignment(horizontal="left", vertical="center", wrap_text=True)


def alignment_for(style: str) -> Alignment:
    if style in STYLE_NUMBER_FORMATS:
        return ALIGN_RIGHT
    if style == "center":
        return ALIGN_CENTER
    if style == "wrap":
        return ALIGN_WRAP
    return ALIGN_LEFT


# =============================================================================
# 스타일 객체
# =============================================================================


def get_thin_border() -> Border:
    """얇은 테두리 스타일 반환"""
    thin_side = Side(style="thin", color=COLOR_BORDER)
    return Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)


def get_header_font() -> Font:
    return Font(name=FONT_NAME, size=10, bold=True, color=COLOR_HEADER_FG)


def get_data_font() -> Font:
    return Font(name=FONT_NAME, size=10, bold=False)


def get_summary_font() -> Font:
    return Font(name=FONT_NAME, size=10, bold=True)


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def get_header_fill() -> PatternFill:
    return _solid(COLOR_HEADER_BG)


def get_summary_fill() -> PatternFill:
    return _solid(COLOR_SUMMARY_BG)


def get_success_fill() -> PatternFill:
    return _solid(COLOR_SUCCESS)


def get_warning_fill() -> PatternFill:
    return _solid(COLOR_WARNING)
