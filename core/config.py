"""
core/config.py - 중앙 설정 관리

배포기 전체에서 사용하는 기본값과 환경변수 헬퍼를 제공합니다.

주요 구성 요소:
- Settings: 불변(frozen) 설정 데이터클래스
- settings: 전역 Settings 인스턴스
- get_default_region / get_default_profile: AWS 환경변수 조회
- get_function_role: Lambda 실행 역할 ARN 조회
- get_version: version.txt 기반 버전 조회

Usage:
    from core.config import settings, get_default_region

    region = get_default_region()  # "ap-northeast-2"
    memory = settings.DEFAULT_FUNCTION_MEMORY_MB  # 128
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """배포기 기본 설정

    Attributes:
        DEFAULT_REGION: 리전 환경변수가 없을 때 사용할 리전
        DEFAULT_FUNCTION_MEMORY_MB: Lambda 최소 메모리 단위 (MB)
        DEFAULT_RUNTIME: 함수 런타임
        DEFAULT_HANDLER: 함수 핸들러
        DEFAULT_TIMEOUT_SECONDS: 함수 실행 타임아웃 (초)
        DEFAULT_STARTING_POSITION: 이벤트 소스 매핑 시작 위치
        API_CONNECT_TIMEOUT: botocore 연결 타임아웃 (초)
        API_READ_TIMEOUT: botocore 읽기 타임아웃 (초)
        API_MAX_ATTEMPTS: botocore 최대 시도 횟수 (1 = 재시도 없음)
        PLATFORM_TYPE: environment_info에 노출할 플랫폼 이름
        LOG_LEVEL: CLI 기본 로그 레벨
    """

    DEFAULT_REGION: str = "ap-northeast-2"
    DEFAULT_FUNCTION_MEMORY_MB: int = 128
    DEFAULT_RUNTIME: str = "java21"
    DEFAULT_HANDLER: str = "org.springframework.cloud.function.adapter.aws.FunctionInvoker::handleRequest"
    DEFAULT_TIMEOUT_SECONDS: int = 3
    DEFAULT_STARTING_POSITION: str = "LATEST"
    API_CONNECT_TIMEOUT: int = 10
    API_READ_TIMEOUT: int = 60
    API_MAX_ATTEMPTS: int = 1
    PLATFORM_TYPE: str = "AWS Lambda"
    LOG_LEVEL: str = "WARNING"


settings = Settings()


# =============================================================================
# 프로젝트 경로
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로 (core/ 의 상위 디렉토리)"""
    return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_version() -> str:
    """버전 문자열 반환

    version.txt를 우선 읽고, 없으면 설치된 패키지 메타데이터를 사용합니다.
    둘 다 없으면 "0.0.0"을 반환합니다.
    """
    version_file = get_project_root() / "version.txt"
    if version_file.exists():
        version = version_file.read_text(encoding="utf-8").strip()
        if version:
            return version

    from importlib.metadata import PackageNotFoundError, version as package_version

    try:
        return package_version("lambda-app-deployer")
    except PackageNotFoundError:
        logger.debug("version.txt 및 패키지 메타데이터 없음, 기본 버전 사용")
        return "0.0.0"


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_default_profile() -> str | None:
    """AWS_PROFILE → AWS_DEFAULT_PROFILE 순서로 프로파일 조회"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_default_region() -> str:
    """AWS_REGION → AWS_DEFAULT_REGION → settings.DEFAULT_REGION 순서로 리전 조회"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


def get_function_role() -> str | None:
    """Lambda 실행 역할 ARN (LAD_FUNCTION_ROLE_ARN)"""
    return os.environ.get("LAD_FUNCTION_ROLE_ARN") or None


def get_log_level() -> str:
    """CLI 로그 레벨 (LAD_LOG_LEVEL, 기본: settings.LOG_LEVEL)"""
    return os.environ.get("LAD_LOG_LEVEL", settings.LOG_LEVEL).upper()

