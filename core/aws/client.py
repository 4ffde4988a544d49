"""
core/aws/client.py - boto3 client 생성 헬퍼

타임아웃/재시도 설정이 적용된 boto3 client를 생성하고,
프로세스 전역에서 재사용하는 Lambda client를 지연 초기화합니다.

주요 구성 요소:
- get_client: botocore Config가 적용된 boto3 client 생성
- get_lambda_client: 전역 Lambda client (최초 호출 시 생성, 이후 재사용)
- reset_lambda_client: 전역 Lambda client 초기화 (테스트, 자격 증명 교체)

Example:
    from core.aws.client import get_lambda_client

    # 기본 설정 (settings 기반, 재시도 없음)
    client = get_lambda_client(region_name="ap-northeast-2")

    # 명시적 세션 주입
    client = get_lambda_client(session=boto3.Session(profile_name="dev"))
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Literal, cast

from core.config import get_default_profile, get_default_region, settings

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_RETRY_MODE: RetryMode = "standard"

# 전역 Lambda client (스레드 간 공유, boto3 client는 스레드 세이프)
_lambda_client: Any | None = None
_lambda_client_lock = threading.Lock()


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = settings.API_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = settings.API_CONNECT_TIMEOUT,
    read_timeout: int = settings.API_READ_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """botocore Config가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (lambda, s3 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최초 호출을 포함한 총 시도 횟수 (기본: 1, 재시도 없음)
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"total_max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # session.client은 문자열 서비스명을 받지만 boto3-stubs는 Literal 타입 요구
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )


def create_session(profile_name: str | None = None, region_name: str | None = None) -> boto3.Session:
    """프로파일/리전을 명시적으로 지정한 boto3 Session 생성

    인자가 None이면 AWS_PROFILE / AWS_REGION 환경변수와 settings 기본값을 사용합니다.
    """
    import boto3

    return boto3.Session(
        profile_name=profile_name or get_default_profile(),
        region_name=region_name or get_default_region(),
    )


def get_lambda_client(
    session: boto3.Session | None = None,
    region_name: str | None = None,
    profile_name: str | None = None,
) -> Any:
    """프로세스 전역 Lambda client 반환

    최초 호출 시 한 번만 생성되며, 이후 호출은 인자와 관계없이
    동일한 client를 반환합니다. 다른 설정이 필요하면 reset_lambda_client() 후 호출하세요.

    Args:
        session: 사용할 boto3 Session (None이면 create_session()으로 생성)
        region_name: 리전
        profile_name: 프로파일 (session이 주어지면 무시)

    Returns:
        boto3 Lambda client
    """
    global _lambda_client

    if _lambda_client is not None:
        return _lambda_client

    with _lambda_client_lock:
        if _lambda_client is None:
            if session is None:
                session = create_session(profile_name=profile_name, region_name=region_name)
            region = region_name or session.region_name or get_default_region()
            _lambda_client = get_client(session, "lambda", region_name=region)
            logger.debug("Lambda client 생성 (region=%s)", region)
        return _lambda_client


def reset_lambda_client() -> None:
    """전역 Lambda client 초기화"""
    global _lambda_client

    with _lambda_client_lock:
        _lambda_client = None
