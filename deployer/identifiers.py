"""
deployer/identifiers.py - 배포 ID / 앱 핸들

배포 ID는 그룹 ID와 앱 이름으로 구성되며, 앱 핸들은 배포 ID와
Lambda 함수 ARN을 묶은 값입니다.

    build_deployment_id("batch", "etl")  -> "batch-etl"
    str(AppHandle("batch-etl", arn))      -> "batch-etl:arn:aws:lambda:..."

핸들 문자열은 첫 번째 ':' 에서만 분리하므로 ARN 내부의 ':' 는 보존됩니다.
배포 ID 자체에 ':' 가 포함되면 분리 결과가 달라집니다.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.exceptions import MalformedHandleError

HANDLE_SEPARATOR = ":"


def build_deployment_id(group_id: str | None, app_name: str) -> str:
    """그룹 ID와 앱 이름으로 배포 ID 생성

    Args:
        group_id: 배포 그룹 ID (None 또는 빈 문자열이면 무시)
        app_name: 앱 이름

    Returns:
        "{group_id}-{app_name}" 또는 app_name
    """
    if not group_id:
        return app_name
    return f"{group_id}-{app_name}"


@dataclass(frozen=True)
class AppHandle:
    """배포 ID + native id(함수 ARN)

    Attributes:
        deployment_id: 사람이 읽을 수 있는 배포 ID
        native_id: 백엔드가 반환한 함수 ARN
    """

    deployment_id: str
    native_id: str

    def __str__(self) -> str:
        return f"{self.deployment_id}{HANDLE_SEPARATOR}{self.native_id}"

    @classmethod
    def parse(cls, handle: str) -> AppHandle:
        """핸들 문자열 파싱

        Raises:
            MalformedHandleError: 구분자가 없거나 한쪽 세그먼트가 비어 있는 경우
        """
        deployment_id, separator, native_id = handle.partition(HANDLE_SEPARATOR)
        if not separator or not deployment_id or not native_id:
            raise MalformedHandleError(handle)
        return cls(deployment_id=deployment_id, native_id=native_id)


def encode_handle(deployment_id: str, native_id: str) -> str:
    """배포 ID와 native id를 핸들 문자열로 인코딩"""
    return str(AppHandle(deployment_id, native_id))


def decode_handle(handle: str) -> AppHandle:
    """핸들 문자열을 AppHandle로 디코딩"""
    return AppHandle.parse(handle)
