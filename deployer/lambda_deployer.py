"""
deployer/lambda_deployer.py - AWS Lambda 앱 배포기

오케스트레이터의 배포 요청을 Lambda 함수 생성/수정 호출로 변환하고,
상태 조회와 삭제(undeploy)를 제공합니다.

배포 흐름:
    1. 배포 ID 생성 (그룹 ID + 앱 이름)
    2. 필수 속성 검증 (s3.bucket, s3.key) - 실패 시 백엔드 호출 없음
    3. 메모리 해석 (실패 시 128MB)
    4. create_function (이미 있으면 update 경로)
    5. 이벤트 소스 매핑 (app.event.source.arn 지정 시에만)
    6. 핸들 "<deploymentId>:<functionArn>" 반환

5단계가 실패하면 4단계에서 새로 만든 함수를 삭제한 뒤 DeploymentError를 발생시킵니다.

삭제 흐름:
    상태가 DEPLOYED일 때만 delete_function 호출.
    ResourceNotFoundException은 성공으로 간주하고, 그 외 오류는 BackendError로 전파합니다.

Example:
    from deployer import AppDefinition, AppDeploymentRequest, create_deployer

    deployer = create_deployer()
    request = AppDeploymentRequest(
        definition=AppDefinition("etl", {"LOG_LEVEL": "debug"}),
        deployment_properties={"s3.bucket": "b", "s3.key": "k", "app.function.memory": "512"},
    )
    handle = deployer.deploy(request)
    print(deployer.status(handle).state)
    deployer.undeploy(handle)
"""

from __future__ import annotations

import logging
import platform
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.config import Settings, get_function_role, get_version, settings as default_settings
from core.exceptions import (
    BackendError,
    DeploymentError,
    InvalidMemorySpecificationError,
    MissingArtifactLocationError,
    get_error_code,
    is_not_found,
)

from .identifiers import AppHandle, build_deployment_id, decode_handle
from .rollback import RollbackStack
from .status import FunctionInstanceStatus
from .types import (
    EVENT_SOURCE_ARN_PROPERTY,
    EVENT_STARTING_POSITION_PROPERTY,
    FUNCTION_HANDLER_PROPERTY,
    FUNCTION_MEMORY_PROPERTY,
    FUNCTION_ROLE_PROPERTY,
    FUNCTION_RUNTIME_PROPERTY,
    FUNCTION_TIMEOUT_PROPERTY,
    S3_BUCKET_PROPERTY,
    S3_KEY_PROPERTY,
    AppDeploymentRequest,
    AppStatus,
    DeploymentState,
    RuntimeEnvironmentInfo,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "lambda"

# update_function_configuration이 받는 키
_CONFIGURATION_KEYS = (
    "FunctionName",
    "Role",
    "Handler",
    "Runtime",
    "Description",
    "Timeout",
    "MemorySize",
    "Environment",
)

# StartingPosition이 필요한 스트림 소스
_STREAM_SOURCE_MARKERS = (":kinesis:", ":dynamodb:", ":kafka:")


# =============================================================================
# 속성 해석
# =============================================================================


def parse_memory(value: str | int | None) -> int:
    """메모리 설정 값을 정수(MB)로 변환

    Raises:
        InvalidMemorySpecificationError: None이거나 정수로 해석할 수 없는 경우
    """
    if value is None:
        raise InvalidMemorySpecificationError(value)
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise InvalidMemorySpecificationError(value, cause=e) from e


def get_function_memory(
    value: str | int | None,
    default: int = default_settings.DEFAULT_FUNCTION_MEMORY_MB,
    log: logging.Logger | None = None,
) -> int:
    """함수 메모리(MB) 결정

    정수로 해석할 수 없으면 경고를 남기고 기본값(128MB)을 사용합니다.
    Lambda의 메모리 단위 제약은 검증하지 않습니다 (백엔드 오류로 드러남).
    """
    try:
        return parse_memory(value)
    except InvalidMemorySpecificationError:
        (log or logger).warning("잘못된 함수 메모리 설정: '%s', 기본값 %dMB 사용", value, default)
        return default


def _get_timeout(value: str | None, default: int, log: logging.Logger) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        log.warning("잘못된 함수 타임아웃 설정: '%s', 기본값 %d초 사용", value, default)
        return default


# =============================================================================
# 배포기
# =============================================================================


class LambdaAppDeployer:
    """AWS Lambda 앱 배포기

    Lambda client 하나를 모든 작업에서 공유합니다 (읽기 전용).
    호출 간 상태는 보관하지 않습니다.

    Attributes:
        client: boto3 Lambda client
        settings: 배포 기본값
        logger: 로그 출력 대상
    """

    def __init__(
        self,
        client: Any,
        settings: Settings | None = None,
        logger: logging.Logger | None = None,
        default_role: str | None = None,
    ):
        self.client = client
        self.settings = settings or default_settings
        self.logger = logger or logging.getLogger(__name__)
        self.default_role = default_role or get_function_role()

    # -------------------------------------------------------------------------
    # deploy
    # -------------------------------------------------------------------------

    def deploy(self, request: AppDeploymentRequest) -> str:
        """함수 생성(또는 수정) 후 앱 핸들 반환

        Args:
            request: 배포 요청

        Returns:
            "<deploymentId>:<functionArn>" 형식의 핸들

        Raises:
            MissingArtifactLocationError: s3.bucket 또는 s3.key 누락
            BackendError: create/update 호출 실패
            DeploymentError: 함수 생성 이후 단계 실패 (생성된 함수는 삭제됨)
        """
        app_name = request.definition.name
        deployment_id = build_deployment_id(request.group_id, app_name)
        self.logger.info("앱 배포 시작: %s", deployment_id)

        properties = request.deployment_properties
        code = self._create_function_code_reference(request)
        source_arn = properties.get(EVENT_SOURCE_ARN_PROPERTY) or ""

        params: dict[str, Any] = {
            "FunctionName": app_name,
            "Runtime": properties.get(FUNCTION_RUNTIME_PROPERTY) or self.settings.DEFAULT_RUNTIME,
            "Handler": properties.get(FUNCTION_HANDLER_PROPERTY) or self.settings.DEFAULT_HANDLER,
            "Description": f"{app_name}-{deployment_id}",
            "Timeout": _get_timeout(
                properties.get(FUNCTION_TIMEOUT_PROPERTY), self.settings.DEFAULT_TIMEOUT_SECONDS, self.logger
            ),
            "MemorySize": get_function_memory(
                properties.get(FUNCTION_MEMORY_PROPERTY),
                default=self.settings.DEFAULT_FUNCTION_MEMORY_MB,
                log=self.logger,
            ),
            "Code": code,
            "Environment": self._create_function_environment(request),
            "Publish": True,
            "Tags": self._create_function_tags(deployment_id, source_arn),
        }
        role = properties.get(FUNCTION_ROLE_PROPERTY) or self.default_role
        if role:
            params["Role"] = role

        with RollbackStack(self.logger) as rollback:
            function_arn, created = self._create_or_update_function(params)
            if created:
                rollback.push("delete_function", lambda: self.client.delete_function(FunctionName=function_arn))

            if source_arn:
                self._create_event_source_mapping(
                    deployment_id,
                    function_arn,
                    source_arn,
                    properties.get(EVENT_STARTING_POSITION_PROPERTY),
                )
            else:
                self.logger.debug("이벤트 소스 미지정, 매핑 생략: %s", deployment_id)

            rollback.commit()

        handle = AppHandle(deployment_id, function_arn)
        self.logger.info("앱 배포 완료: %s", handle)
        return str(handle)

    def _create_function_code_reference(self, request: AppDeploymentRequest) -> dict[str, str]:
        properties = request.deployment_properties
        bucket = properties.get(S3_BUCKET_PROPERTY)
        key = properties.get(S3_KEY_PROPERTY)

        missing = [name for name, value in ((S3_BUCKET_PROPERTY, bucket), (S3_KEY_PROPERTY, key)) if not value]
        if missing:
            raise MissingArtifactLocationError(missing)

        return {"S3Bucket": bucket, "S3Key": key}

    def _create_function_environment(self, request: AppDeploymentRequest) -> dict[str, dict[str, str]]:
        return {"Variables": dict(request.definition.properties)}

    def _create_function_tags(self, deployment_id: str, source_arn: str = "") -> dict[str, str]:
        # destination: 출력 스트림 연결 미구현
        return {
            "deploymentId": deployment_id,
            "source": source_arn,
            "destination": "",
        }

    def _create_or_update_function(self, params: dict[str, Any]) -> tuple[str, bool]:
        """create_function 호출, 이미 존재하면 update 경로

        Returns:
            (함수 ARN, 새로 생성했는지 여부)
        """
        try:
            response = self.client.create_function(**params)
        except (ClientError, BotoCoreError) as e:
            if get_error_code(e) != "ResourceConflictException":
                self.logger.error("Lambda 생성 실패: %s", params["FunctionName"], exc_info=True)
                raise BackendError.from_exception(SERVICE_NAME, "create_function", e) from e
            self.logger.info("이미 존재하는 함수, 수정 진행: %s", params["FunctionName"])
            return self._update_function(params), False

        return response["FunctionArn"], True

    def _update_function(self, params: dict[str, Any]) -> str:
        function_name = params["FunctionName"]
        waiter = self.client.get_waiter("function_updated_v2")
        operation = "update_function_configuration"
        try:
            # 진행 중인 수정이 있으면 ResourceConflictException이므로 먼저 대기
            waiter.wait(FunctionName=function_name)
            configuration = {key: params[key] for key in _CONFIGURATION_KEYS if key in params}
            response = self.client.update_function_configuration(**configuration)
            function_arn = response["FunctionArn"]

            operation = "update_function_code"
            waiter.wait(FunctionName=function_name)
            self.client.update_function_code(
                FunctionName=function_name,
                S3Bucket=params["Code"]["S3Bucket"],
                S3Key=params["Code"]["S3Key"],
                Publish=True,
            )

            operation = "tag_resource"
            self.client.tag_resource(Resource=function_arn, Tags=params["Tags"])
        except (ClientError, BotoCoreError) as e:
            self.logger.error("Lambda 수정 실패: %s (%s)", function_name, operation, exc_info=True)
            raise BackendError.from_exception(SERVICE_NAME, operation, e) from e

        return function_arn

    def _create_event_source_mapping(
        self,
        deployment_id: str,
        function_arn: str,
        source_arn: str,
        starting_position: str | None = None,
    ) -> str:
        params: dict[str, Any] = {
            "EventSourceArn": source_arn,
            "FunctionName": function_arn,
            "Enabled": True,
        }
        if starting_position or any(marker in source_arn for marker in _STREAM_SOURCE_MARKERS):
            params["StartingPosition"] = starting_position or self.settings.DEFAULT_STARTING_POSITION

        try:
            response = self.client.create_event_source_mapping(**params)
        except (ClientError, BotoCoreError) as e:
            self.logger.error("이벤트 소스 매핑 실패: %s → %s", source_arn, function_arn, exc_info=True)
            raise DeploymentError(
                deployment_id,
                "create_event_source_mapping",
                cause=BackendError.from_exception(SERVICE_NAME, "create_event_source_mapping", e),
            ) from e

        self.logger.info("이벤트 소스 매핑 생성: %s", response.get("UUID", ""))
        return response.get("UUID", "")

    # -------------------------------------------------------------------------
    # undeploy
    # -------------------------------------------------------------------------

    def undeploy(self, app_id: str) -> None:
        """앱 삭제 (여러 번 호출해도 안전)

        Raises:
            MalformedHandleError: 핸들 형식 오류
            BackendError: delete_function 실패 (ResourceNotFoundException 제외)
        """
        handle = decode_handle(app_id)
        instance = FunctionInstanceStatus.fetch(self.client, handle.native_id, log=self.logger)

        if instance.state != DeploymentState.DEPLOYED:
            self.logger.info("삭제 생략 (상태: %s): %s", instance.state.value, app_id)
            return

        self._delete_event_source_mappings(handle.native_id)
        self._undeploy_function(handle.native_id)

    def _delete_event_source_mappings(self, function_arn: str) -> None:
        """함수에 연결된 이벤트 소스 매핑 삭제 (실패 시 로그만 남김)"""
        try:
            paginator = self.client.get_paginator("list_event_source_mappings")
            for page in paginator.paginate(FunctionName=function_arn):
                for mapping in page.get("EventSourceMappings", []):
                    uuid = mapping.get("UUID")
                    if not uuid:
                        continue
                    try:
                        self.client.delete_event_source_mapping(UUID=uuid)
                        self.logger.info("이벤트 소스 매핑 삭제: %s", uuid)
                    except (ClientError, BotoCoreError) as e:
                        if not is_not_found(e):
                            code = get_error_code(e) or type(e).__name__
                            self.logger.warning("이벤트 소스 매핑 삭제 실패: %s (%s)", uuid, code)
        except (ClientError, BotoCoreError) as e:
            self.logger.warning(
                "이벤트 소스 매핑 조회 실패: %s (%s)", function_arn, get_error_code(e) or type(e).__name__
            )

    def _undeploy_function(self, function_arn: str) -> None:
        try:
            self.client.delete_function(FunctionName=function_arn)
        except (ClientError, BotoCoreError) as e:
            if is_not_found(e):
                self.logger.warning("이미 삭제된 Lambda: %s", function_arn)
                return
            self.logger.error("Lambda 삭제 실패: %s", function_arn, exc_info=True)
            raise BackendError.from_exception(SERVICE_NAME, "delete_function", e) from e

        self.logger.info("Lambda 삭제 완료: %s", function_arn)

    # -------------------------------------------------------------------------
    # status / environment
    # -------------------------------------------------------------------------

    def status(self, app_id: str) -> AppStatus:
        """앱 상태 조회

        Raises:
            MalformedHandleError: 핸들 형식 오류
        """
        handle = decode_handle(app_id)
        instance = FunctionInstanceStatus.fetch(self.client, handle.native_id, log=self.logger)
        return AppStatus(id=app_id, state=instance.state, instances={handle.native_id: instance})

    def environment_info(self) -> RuntimeEnvironmentInfo:
        """런타임 환경 정보 (부수 효과 없음)"""
        import boto3
        import botocore

        region = getattr(getattr(self.client, "meta", None), "region_name", None)

        return RuntimeEnvironmentInfo(
            spi_class="AppDeployer",
            implementation_name=type(self).__name__,
            implementation_version=get_version(),
            platform_type=self.settings.PLATFORM_TYPE,
            platform_api_version=f"{platform.system()} {platform.release()}",
            platform_client_version=f"boto3 version:{boto3.__version__}",
            platform_host_version=f"botocore/{botocore.__version__} Python/{platform.python_version()}",
            platform_specific_info={"region": str(region)} if region else {},
        )
