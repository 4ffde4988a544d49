"""
cli/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 로깅 설정을 위한 함수들
"""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

# botocore 노이즈 로그 제한
_NOISY_LOGGERS = (
    "botocore.httpchecksum",
    "botocore.credentials",
    "botocore.loaders",
    "botocore.session",
    "botocore.hooks",
    "urllib3.connectionpool",
)

# 상태 심볼
SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"

_STATE_STYLES = {
    "deployed": "green",
    "undeployed": "dim",
    "unknown": "yellow",
}

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def setup_logging(level: str | int = logging.WARNING) -> None:
    """RichHandler 기반 로깅 설정

    WARNING 레벨 기본값으로 INFO 로그가 명령 출력에 섞이지 않도록 합니다.

    Args:
        level: 로그 레벨 (이름 또는 숫자)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (stderr, 빨간색)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def state_markup(state: str) -> str:
    """배포 상태를 Rich 마크업으로 변환"""
    style = _STATE_STYLES.get(state, "white")
    return f"[{style}]{state}[/{style}]"


def print_key_values(title: str, values: dict[str, Any]) -> None:
    """키/값 테이블 출력"""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")

    for key, value in values.items():
        table.add_row(key, "" if value is None else str(value))

    console.print(table)
