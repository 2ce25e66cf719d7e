"""출력 설정 모듈

리포트 출력 형식 및 옵션 설정

Usage:
    from gamecost.io.config import OutputConfig, OutputFormat

    config = OutputConfig(
        formats=OutputFormat.EXCEL | OutputFormat.JSON,
        output_dir="output",
    )

    if config.should_output_excel():
        # Excel 출력
        pass
"""

from dataclasses import dataclass, field
from enum import Flag, auto


class OutputFormat(Flag):
    """출력 형식 플래그

    Flag 타입으로 여러 형식을 조합하여 사용 가능

    Usage:
        fmt = OutputFormat.EXCEL | OutputFormat.CSV

        if OutputFormat.EXCEL in fmt:
            ...
    """

    NONE = 0
    CONSOLE = auto()
    JSON = auto()
    CSV = auto()
    EXCEL = auto()
    ALL = JSON | CSV | EXCEL  # 파일 출력 전체


FORMAT_CHOICES = ("console", "json", "csv", "excel", "all")


@dataclass
class OutputConfig:
    """출력 설정

    Attributes:
        formats: 출력 형식 플래그
        output_dir: 출력 디렉토리 (None이면 ``{project_root}/output``)
    """

    formats: OutputFormat = field(default=OutputFormat.CONSOLE)
    output_dir: str | None = None

    def should_output_console(self) -> bool:
        """Console 출력 여부"""
        return OutputFormat.CONSOLE in self.formats

    def should_output_json(self) -> bool:
        """JSON 출력 여부"""
        return OutputFormat.JSON in self.formats

    def should_output_csv(self) -> bool:
        """CSV 출력 여부"""
        return OutputFormat.CSV in self.formats

    def should_output_excel(self) -> bool:
        """Excel 출력 여부"""
        return OutputFormat.EXCEL in self.formats

    def has_file_output(self) -> bool:
        return bool(self.formats & OutputFormat.ALL)

    @classmethod
    def from_string(cls, format_str: str, output_dir: str | None = None) -> "OutputConfig":
        """문자열에서 OutputConfig 생성

        Args:
            format_str: 형식 문자열 ("console", "json", "csv", "excel", "all")
            output_dir: 출력 디렉토리

        Returns:
            OutputConfig 인스턴스 (알 수 없는 값은 console)
        """
        format_map = {
            "console": OutputFormat.CONSOLE,
            "json": OutputFormat.JSON,
            "csv": OutputFormat.CSV,
            "excel": OutputFormat.EXCEL,
            "all": OutputFormat.ALL,
        }

        formats = format_map.get(format_str.lower(), OutputFormat.CONSOLE)
        return cls(formats=formats, output_dir=output_dir)
