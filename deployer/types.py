"""
deployer/types.py - 배포기 데이터 모델

오케스트레이터와 주고받는 배포 요청/상태 타입과
Lambda get_function 응답의 스냅샷 타입을 정의합니다.

포함 항목:
    - 배포 속성 키 상수 (s3.bucket, s3.key, app.function.memory 등)
    - DeploymentState: 배포 상태 열거형
    - AppDefinition / AppDeploymentRequest: 배포 요청
    - FunctionDescriptor: 함수 설정 스냅샷
    - AppStatus: 앱 상태 (핸들 기준)
    - RuntimeEnvironmentInfo: 런타임 환경 메타데이터
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .status import FunctionInstanceStatus

# =============================================================================
# 배포 속성 키
# =============================================================================

S3_BUCKET_PROPERTY = "s3.bucket"
S3_KEY_PROPERTY = "s3.key"
FUNCTION_MEMORY_PROPERTY = "app.function.memory"
FUNCTION_RUNTIME_PROPERTY = "app.function.runtime"
FUNCTION_HANDLER_PROPERTY = "app.function.handler"
FUNCTION_ROLE_PROPERTY = "app.function.role"
FUNCTION_TIMEOUT_PROPERTY = "app.function.timeout"
EVENT_SOURCE_ARN_PROPERTY = "app.event.source.arn"
EVENT_STARTING_POSITION_PROPERTY = "app.event.starting.position"
GROUP_PROPERTY_KEY = "deployer.group"


class DeploymentState(str, Enum):
    """배포 상태 (조회 결과 기준)"""

    DEPLOYED = "deployed"
    UNDEPLOYED = "undeployed"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AppDefinition:
    """앱 정의

    Attributes:
        name: 앱 이름 (Lambda 함수 이름으로 사용)
        properties: 임의의 키/값 (함수 환경변수로 그대로 전달)
    """

    name: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AppDeploymentRequest:
    """배포 요청

    Attributes:
        definition: 앱 정의
        deployment_properties: 배포 설정 (s3.bucket, s3.key, app.function.memory 등)
        resource: 아티팩트 URI (참고용, 업로드하지 않음)
    """

    definition: AppDefinition
    deployment_properties: dict[str, str] = field(default_factory=dict)
    resource: str | None = None

    @property
    def group_id(self) -> str | None:
        """배포 그룹 ID (없으면 None)"""
        return self.deployment_properties.get(GROUP_PROPERTY_KEY) or None


@dataclass(frozen=True)
class FunctionDescriptor:
    """Lambda 함수 설정 스냅샷 (get_function 응답)

    Attributes:
        function_arn: 함수 ARN (native id)
        function_name: 함수 이름
        memory_size: 메모리 (MB)
        description: 설명
        code_sha256: 코드 다이제스트
        last_modified: 마지막 수정 시각 (API 문자열 그대로)
        tags: 태그
    """

    function_arn: str
    function_name: str
    memory_size: int
    description: str = ""
    code_sha256: str = ""
    last_modified: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> FunctionDescriptor:
        """get_function 응답에서 생성"""
        configuration = response.get("Configuration", {})
        return cls(
            function_arn=configuration.get("FunctionArn", ""),
            function_name=configuration.get("FunctionName", ""),
            memory_size=int(configuration.get("MemorySize", 0)),
            description=configuration.get("Description", ""),
            code_sha256=configuration.get("CodeSha256", ""),
            last_modified=configuration.get("LastModified", ""),
            tags=dict(response.get("Tags") or {}),
        )


@dataclass
class AppStatus:
    """앱 상태

    Attributes:
        id: 조회에 사용한 원본 핸들 문자열
        state: 배포 상태
        instances: native id → 인스턴스 상태
    """

    id: str
    state: DeploymentState
    instances: dict[str, FunctionInstanceStatus] = field(default_factory=dict)

    @property
    def attributes(self) -> dict[str, str]:
        """배포된 인스턴스 속성 (정보가 없으면 빈 딕셔너리)"""
        merged: dict[str, str] = {}
        for instance in self.instances.values():
            if instance.has_descriptor:
                merged.update(instance.attributes())
        return merged

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "state": self.state.value,
            "attributes": self.attributes,
        }


@dataclass(frozen=True)
class RuntimeEnvironmentInfo:
    """배포기 런타임 환경 정보"""

    spi_class: str
    implementation_name: str
    implementation_version: str
    platform_type: str
    platform_api_version: str
    platform_client_version: str
    platform_host_version: str
    platform_specific_info: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "spiClass": self.spi_class,
            "implementationName": self.implementation_name,
            "implementationVersion": self.implementation_version,
            "platformType": self.platform_type,
            "platformApiVersion": self.platform_api_version,
            "platformClientVersion": self.platform_client_version,
            "platformHostVersion": self.platform_host_version,
            "platformSpecificInfo": dict(self.platform_specific_info),
        }
