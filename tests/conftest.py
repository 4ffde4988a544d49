"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_lambda_client, make_client_error):
        mock_lambda_client.get_function.side_effect = make_client_error("ResourceNotFoundException")
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

FUNCTION_ARN = "arn:aws:lambda:ap-northeast-2:123456789012:function:etl"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-2")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


@pytest.fixture(autouse=True)
def reset_shared_client():
    """테스트 간 전역 Lambda client 공유 방지"""
    from core.aws.client import reset_lambda_client

    reset_lambda_client()
    yield
    reset_lambda_client()


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


@pytest.fixture
def make_client_error():
    """ClientError 생성 함수"""
    return create_mock_client_error


@pytest.fixture
def function_arn() -> str:
    return FUNCTION_ARN


@pytest.fixture
def get_function_response() -> Dict[str, Any]:
    """get_function 응답 샘플"""
    return {
        "Configuration": {
            "FunctionName": "etl",
            "FunctionArn": FUNCTION_ARN,
            "Runtime": "java21",
            "MemorySize": 512,
            "Description": "etl-batch-etl",
            "CodeSha256": "dGVzdC1zaGEyNTY=",
            "LastModified": "2024-01-15T10:30:00.000+0000",
        },
        "Code": {"RepositoryType": "S3", "Location": "https://example.com/code.zip"},
        "Tags": {"deploymentId": "batch-etl", "source": "", "destination": ""},
    }


@pytest.fixture
def mock_lambda_client(get_function_response):
    """Lambda 클라이언트 모킹

    기본값: create_function 성공, get_function은 함수 존재
    """
    client = MagicMock()
    client.meta.region_name = "ap-northeast-2"

    client.create_function.return_value = {
        "FunctionName": "etl",
        "FunctionArn": FUNCTION_ARN,
        "Version": "1",
    }
    client.get_function.return_value = get_function_response
    client.delete_function.return_value = {}
    client.create_event_source_mapping.return_value = {"UUID": "mapping-uuid-1"}

    paginator = MagicMock()
    paginator.paginate.return_value = [{"EventSourceMappings": []}]
    client.get_paginator.return_value = paginator

    yield client


# =============================================================================
# moto 통합 (선택적)
# =============================================================================

try:
    import moto

    @pytest.fixture
    def aws_credentials():
        """moto 사용 시 AWS 자격 증명 설정"""
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
        os.environ["AWS_DEFAULT_REGION"] = "ap-northeast-2"

    @pytest.fixture
    def moto_aws(aws_credentials):
        """moto mock_aws 컨텍스트"""
        with moto.mock_aws():
            yield

except ImportError:
    # moto가 설치되지 않은 경우 더미 픽스처
    @pytest.fixture
    def moto_aws():
        pytest.skip("moto not installed")
