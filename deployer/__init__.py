"""
deployer - AWS Lambda 앱 배포기

오케스트레이터의 배포 요청을 Lambda 함수로 배포/조회/삭제합니다.

구성:
    deployer/
    ├── types.py            # 배포 요청/상태 타입, 속성 키
    ├── identifiers.py      # 배포 ID, 앱 핸들
    ├── status.py           # get_function 조회 및 상태 변환
    ├── rollback.py         # 배포 단계 롤백
    ├── lambda_deployer.py  # LambdaAppDeployer
    └── factory.py          # create_deployer

Usage:
    from deployer import AppDefinition, AppDeploymentRequest, create_deployer

    deployer = create_deployer(region_name="ap-northeast-2")
    handle = deployer.deploy(
        AppDeploymentRequest(
            definition=AppDefinition("etl"),
            deployment_properties={"s3.bucket": "artifacts", "s3.key": "etl.zip"},
        )
    )
"""

from .factory import create_deployer
from .identifiers import AppHandle, build_deployment_id, decode_handle, encode_handle
from .lambda_deployer import LambdaAppDeployer, get_function_memory, parse_memory
from .rollback import RollbackStack
from .status import FunctionInstanceStatus, LookupOutcome, LookupResult, lookup_function
from .types import (
    GROUP_PROPERTY_KEY,
    AppDefinition,
    AppDeploymentRequest,
    AppStatus,
    DeploymentState,
    FunctionDescriptor,
    RuntimeEnvironmentInfo,
)

__all__: list[str] = [
    # types
    "AppDefinition",
    "AppDeploymentRequest",
    "AppStatus",
    "DeploymentState",
    "FunctionDescriptor",
    "RuntimeEnvironmentInfo",
    "GROUP_PROPERTY_KEY",
    # identifiers
    "AppHandle",
    "build_deployment_id",
    "encode_handle",
    "decode_handle",
    # status
    "LookupOutcome",
    "LookupResult",
    "lookup_function",
    "FunctionInstanceStatus",
    # deployer
    "LambdaAppDeployer",
    "RollbackStack",
    "create_deployer",
    "get_function_memory",
    "parse_memory",
]
