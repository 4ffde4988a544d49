"""
deployer/status.py - Lambda 함수 상태 조회

get_function 호출 결과를 태그된 결과(LookupResult)로 표현하고,
이를 배포 상태(DeploymentState)와 속성 맵으로 변환합니다.

조회 결과 → 배포 상태:
    FOUND     → DEPLOYED   (함수 정보 있음)
    NOT_FOUND → UNDEPLOYED
    TRANSIENT → UNKNOWN    (스로틀링, 서비스 장애, 기타 API 오류)

lookup_function()은 백엔드 오류를 예외로 던지지 않습니다.
결과를 어떻게 처리할지는 호출하는 쪽에서 결정합니다.

Example:
    status = FunctionInstanceStatus.fetch(client, function_arn)
    if status.state == DeploymentState.DEPLOYED:
        print(status.attributes()["memory"])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import DescriptorUnavailableError, get_error_code, is_not_found

from .types import DeploymentState, FunctionDescriptor

logger = logging.getLogger(__name__)


class LookupOutcome(Enum):
    """get_function 조회 결과 분류"""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"


_STATE_BY_OUTCOME = {
    LookupOutcome.FOUND: DeploymentState.DEPLOYED,
    LookupOutcome.NOT_FOUND: DeploymentState.UNDEPLOYED,
    LookupOutcome.TRANSIENT: DeploymentState.UNKNOWN,
}


@dataclass(frozen=True)
class LookupResult:
    """태그된 조회 결과

    Attributes:
        outcome: 조회 결과 분류
        descriptor: FOUND일 때만 존재
        error: NOT_FOUND / TRANSIENT의 원인 예외
    """

    outcome: LookupOutcome
    descriptor: FunctionDescriptor | None = None
    error: Exception | None = None

    @classmethod
    def found(cls, descriptor: FunctionDescriptor) -> LookupResult:
        return cls(LookupOutcome.FOUND, descriptor=descriptor)

    @classmethod
    def not_found(cls, error: Exception | None = None) -> LookupResult:
        return cls(LookupOutcome.NOT_FOUND, error=error)

    @classmethod
    def transient(cls, error: Exception) -> LookupResult:
        return cls(LookupOutcome.TRANSIENT, error=error)

    @property
    def state(self) -> DeploymentState:
        return _STATE_BY_OUTCOME[self.outcome]


def lookup_function(
    client: Any,
    native_id: str,
    log: logging.Logger | None = None,
) -> LookupResult:
    """get_function 호출 후 결과 분류

    Args:
        client: boto3 Lambda client
        native_id: 함수 ARN (또는 이름)
        log: 사용할 logger (None이면 모듈 logger)

    Returns:
        LookupResult (예외를 던지지 않음)
    """
    log = log or logger

    try:
        response = client.get_function(FunctionName=native_id)
    except ClientError as e:
        if is_not_found(e):
            log.info("Lambda 함수 없음: %s", native_id)
            return LookupResult.not_found(e)
        log.error("Lambda 상태 확인 실패: %s (%s)", native_id, get_error_code(e) or "Unknown", exc_info=True)
        return LookupResult.transient(e)
    except BotoCoreError as e:
        log.error("Lambda 상태 확인 실패: %s (%s)", native_id, type(e).__name__, exc_info=True)
        return LookupResult.transient(e)

    log.debug("Lambda 함수 확인: %s", native_id)
    return LookupResult.found(FunctionDescriptor.from_response(response))


class FunctionInstanceStatus:
    """단일 Lambda 함수의 인스턴스 상태

    인스턴스 하나는 조회 한 번의 결과를 고정된 상태로 보관합니다.
    새 상태가 필요하면 fetch()로 새 인스턴스를 만드세요.
    """

    def __init__(self, native_id: str, result: LookupResult):
        self.native_id = native_id
        self.result = result

    @classmethod
    def fetch(
        cls,
        client: Any,
        native_id: str,
        log: logging.Logger | None = None,
    ) -> FunctionInstanceStatus:
        """get_function 조회 후 인스턴스 생성"""
        return cls(native_id, lookup_function(client, native_id, log=log))

    @property
    def id(self) -> str:
        return self.native_id

    @property
    def state(self) -> DeploymentState:
        return self.result.state

    @property
    def descriptor(self) -> FunctionDescriptor | None:
        return self.result.descriptor

    @property
    def has_descriptor(self) -> bool:
        return self.result.descriptor is not None

    def attributes(self) -> dict[str, str]:
        """함수 정보를 평탄한 문자열 맵으로 변환

        태그는 값만 ','로 연결합니다 (키는 버림).

        Raises:
            DescriptorUnavailableError: 함수 정보가 없는 경우 (DEPLOYED 아님)
        """
        descriptor = self.result.descriptor
        if descriptor is None:
            raise DescriptorUnavailableError(self.native_id, self.state.value)

        return {
            "arn": descriptor.function_arn,
            "name": descriptor.function_name,
            "memory": str(descriptor.memory_size),
            "description": descriptor.description,
            "codeSha256": descriptor.code_sha256,
            "lastModified": descriptor.last_modified,
            "tags": ",".join(str(value) for value in descriptor.tags.values()),
        }

    def __repr__(self) -> str:
        return f"FunctionInstanceStatus(native_id={self.native_id!r}, state={self.state.value!r})"
