"""
gamecost/cli/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def configure_logging(verbose: bool = False) -> None:
    """루트 로거 설정 (기본 WARNING, verbose면 DEBUG)

    INFO 로그가 명령 출력에 섞이지 않도록 기본은 WARNING 레벨이다.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=verbose)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)
    logging.captureWarnings(True)


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


def print_success(message: str) -> None:
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def print_header(title: str) -> None:
    """섹션 헤더 출력"""
    console.print()
    console.print(f"[bold underline cyan]{title}[/bold underline cyan]")
    console.print()


def format_usd(amount: float) -> str:
    return f"${amount:,.2f}"


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
    numeric_columns: set[int] | None = None,
) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트 (셀은 문자열로 변환)
        numeric_columns: 오른쪽 정렬할 컬럼 인덱스
    """
    numeric_columns = numeric_columns or set()
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for idx, column in enumerate(columns):
        table.add_column(column, justify="right" if idx in numeric_columns else "left")

    for row in rows:
        table.add_row(*[escape(str(cell)) for cell in row])

    console.print(table)
