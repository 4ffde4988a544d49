# core/__init__.py
"""
core - Lambda 배포기 인프라

배포 도메인(deployer)이 공통으로 사용하는 설정, 예외, AWS client를 포함합니다.

아키텍처:
    core/
    ├── aws/            # boto3 client 생성, 전역 Lambda client
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.config import settings, get_default_region
    region = get_default_region()  # "ap-northeast-2"

    from core.exceptions import BackendError, is_not_found
"""

from core import aws, config, exceptions

__all__: list[str] = [
    "aws",
    "config",
    "exceptions",
]
