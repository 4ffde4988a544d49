"""
deployer/factory.py - 배포기 생성

전역 Lambda client와 설정을 묶어 LambdaAppDeployer를 만듭니다.
이미 배포기가 주입된 환경에서는 호출하지 않습니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from core.aws.client import get_lambda_client
from core.config import Settings, settings as default_settings

from .lambda_deployer import LambdaAppDeployer

if TYPE_CHECKING:
    import boto3


def create_deployer(
    settings: Settings | None = None,
    session: boto3.Session | None = None,
    region_name: str | None = None,
    profile_name: str | None = None,
    client: Any | None = None,
    logger: logging.Logger | None = None,
) -> LambdaAppDeployer:
    """LambdaAppDeployer 생성

    Args:
        settings: 배포 기본값 (None이면 전역 settings)
        session: boto3 Session (client 미지정 시 전역 client 생성에 사용)
        region_name: 리전
        profile_name: 프로파일
        client: 직접 주입할 Lambda client (지정 시 전역 client 미사용)
        logger: 배포기 logger

    Returns:
        LambdaAppDeployer
    """
    if client is None:
        client = get_lambda_client(session=session, region_name=region_name, profile_name=profile_name)

    return LambdaAppDeployer(
        client,
        settings=settings or default_settings,
        logger=logger or logging.getLogger("deployer"),
    )
