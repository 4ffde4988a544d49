"""
core/aws - AWS client 헬퍼

Example:
    from core.aws import get_lambda_client

    client = get_lambda_client(region_name="ap-northeast-2")
"""

from .client import create_session, get_client, get_lambda_client, reset_lambda_client

__all__: list[str] = [
    "get_client",
    "create_session",
    "get_lambda_client",
    "reset_lambda_client",
]
