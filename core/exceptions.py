"""
core/exceptions.py - 통합 예외 계층 구조

배포기 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    DeployerError (베이스)
    ├── ValidationError (입력 검증)
    │   ├── MissingArtifactLocationError
    │   └── InvalidMemorySpecificationError
    ├── MalformedHandleError (핸들 디코딩)
    ├── DescriptorUnavailableError (함수 정보 없음)
    ├── DeploymentError (부분 진행 후 배포 실패, 롤백 수행됨)
    └── BackendError (AWS API 호출)
        ├── BackendNotFoundError
        └── BackendTransientError

Usage:
    from core.exceptions import BackendError, is_not_found

    try:
        client.delete_function(FunctionName=arn)
    except ClientError as e:
        if is_not_found(e):
            return
        raise BackendError.from_client_error("lambda", "delete_function", e) from e
"""

from typing import Any, Dict, Iterable, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class DeployerError(Exception):
    """배포기 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 입력 검증 예외
# =============================================================================


class ValidationError(DeployerError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


class MissingArtifactLocationError(ValidationError):
    """함수 코드 위치(s3.bucket / s3.key) 누락

    배포 요청 검증 단계에서 발생하며, 백엔드 호출 전에 즉시 실패합니다.
    """

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(
            field=", ".join(self.missing),
            value=None,
            expected="함수 소스 코드 위치 (s3.bucket, s3.key) 필수",
        )


class InvalidMemorySpecificationError(ValidationError):
    """메모리 설정 값을 정수로 해석할 수 없음

    get_function_memory()에서 로깅 후 기본값으로 대체되므로
    호출자에게 전파되지 않습니다.
    """

    def __init__(self, value: Any, cause: Optional[Exception] = None):
        super().__init__(field="app.function.memory", value=value, expected="정수 (MB)", cause=cause)


# =============================================================================
# 핸들 / 상태 관련 예외
# =============================================================================


class MalformedHandleError(DeployerError):
    """'<deploymentId>:<nativeId>' 형식이 아닌 핸들"""

    def __init__(self, handle: str):
        super().__init__(f"잘못된 앱 핸들 형식: '{handle}' (예상: '<deploymentId>:<nativeId>')")
        self.handle = handle
        self.details["handle"] = handle


class DescriptorUnavailableError(DeployerError):
    """함수 정보가 없는 상태(deployed 아님)에서 속성 조회"""

    def __init__(self, native_id: str, state: str):
        super().__init__(f"함수 정보 없음 [{native_id}]: 현재 상태 '{state}'")
        self.native_id = native_id
        self.state = state
        self.details.update({"native_id": native_id, "state": state})


class DeploymentError(DeployerError):
    """배포 중간 단계 실패

    함수 생성 이후 단계가 실패한 경우 발생하며, 이미 생성된 리소스에 대한
    롤백이 수행된 뒤 전파됩니다.
    """

    def __init__(
        self,
        deployment_id: str,
        step: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"배포 실패 [{deployment_id}] 단계 '{step}'", cause)
        self.deployment_id = deployment_id
        self.step = step
        self.details.update({"deployment_id": deployment_id, "step": step})


# =============================================================================
# AWS API 호출 예외
# =============================================================================


class BackendError(DeployerError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> "BackendError":
        """botocore.exceptions.ClientError로부터 생성

        에러 코드에 따라 BackendNotFoundError / BackendTransientError /
        BackendError 중 적절한 타입을 선택합니다.

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: ClientError 예외

        Returns:
            BackendError (또는 하위 클래스) 인스턴스
        """
        error_code = None
        error_message = None

        if isinstance(getattr(client_error, "response", None), dict):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        error_cls = cls
        if cls is BackendError:
            if is_not_found(client_error):
                error_cls = BackendNotFoundError
            elif is_transient(client_error):
                error_cls = BackendTransientError

        return error_cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )

    @classmethod
    def from_exception(
        cls,
        service: str,
        operation: str,
        error: Exception,
    ) -> "BackendError":
        """ClientError 또는 BotoCoreError로부터 생성

        응답이 없는 botocore 예외(연결 실패, 타임아웃, WaiterError 등)는
        BackendTransientError로 분류하고 예외 클래스 이름을 에러 코드로 사용합니다.
        """
        if isinstance(getattr(error, "response", None), dict):
            return cls.from_client_error(service, operation, error)

        return BackendTransientError(
            service=service,
            operation=operation,
            error_code=type(error).__name__,
            error_message=str(error),
            cause=error,
        )


class BackendNotFoundError(BackendError):
    """대상 리소스가 존재하지 않음 (ResourceNotFoundException 등)"""

    pass


class BackendTransientError(BackendError):
    """스로틀링 또는 서비스 장애 등 일시적 오류"""

    pass


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "NotFoundException",
    "NoSuchEntity",
    "NoSuchBucket",
    "NoSuchKey",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RateExceeded",
}

SERVICE_FAULT_CODES = {
    "ServiceException",
    "ServiceUnavailable",
    "ServiceUnavailableException",
    "InternalFailure",
    "InternalServerError",
    "EC2ThrottledException",
}


def get_error_code(error: Exception) -> str:
    """예외에서 AWS 에러 코드 추출 (없으면 빈 문자열)"""
    if isinstance(error, BackendError):
        return error.error_code or ""

    if isinstance(getattr(error, "response", None), dict):
        return error.response.get("Error", {}).get("Code", "") or ""

    return ""


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        리소스 없음 오류이면 True
    """
    if isinstance(error, BackendNotFoundError):
        return True
    return get_error_code(error) in NOT_FOUND_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return get_error_code(error) in THROTTLING_CODES


def is_transient(error: Exception) -> bool:
    """일시적 오류(스로틀링 또는 서비스 장애)인지 확인"""
    if isinstance(error, BackendTransientError):
        return True
    code = get_error_code(error)
    return code in THROTTLING_CODES or code in SERVICE_FAULT_CODES


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, DeployerError):
        return str(error)

    # boto3 ClientError
    if isinstance(getattr(error, "response", None), dict):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDeniedException": "권한이 없습니다. IAM 정책을 확인하세요.",
            "ExpiredTokenException": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
            "InvalidClientTokenId": "잘못된 자격 증명입니다.",
            "TooManyRequestsException": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
            "ResourceConflictException": "함수가 이미 존재하거나 업데이트 중입니다.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
