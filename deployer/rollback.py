"""
deployer/rollback.py - 배포 단계 보상(롤백) 스택

여러 단계로 구성된 배포에서 각 단계가 성공할 때마다 되돌리기 작업을 등록하고,
이후 단계가 실패하면 등록된 작업을 역순으로 실행합니다.

Example:
    with RollbackStack(logger) as rollback:
        arn = create_function(...)
        rollback.push("delete_function", lambda: client.delete_function(FunctionName=arn))
        create_event_source_mapping(...)  # 실패 시 delete_function 실행
        rollback.commit()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType


class RollbackStack:
    """되돌리기 작업 스택

    with 블록 안에서 예외가 발생하면 등록된 작업을 역순으로 실행한 뒤
    원래 예외를 그대로 전파합니다. 되돌리기 작업 자체의 실패는 로그만 남깁니다.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)
        self._actions: list[tuple[str, Callable[[], object]]] = []

    def push(self, name: str, action: Callable[[], object]) -> None:
        """되돌리기 작업 등록"""
        self._actions.append((name, action))

    def commit(self) -> None:
        """모든 단계 성공 - 등록된 작업 폐기"""
        self._actions.clear()

    def rollback(self) -> list[str]:
        """등록된 작업을 역순으로 실행

        Returns:
            실패한 작업 이름 목록
        """
        failed: list[str] = []
        while self._actions:
            name, action = self._actions.pop()
            try:
                action()
                self.logger.warning("롤백 완료: %s", name)
            except Exception:
                self.logger.error("롤백 실패: %s", name, exc_info=True)
                failed.append(name)
        return failed

    @property
    def pending(self) -> list[str]:
        return [name for name, _ in self._actions]

    def __enter__(self) -> RollbackStack:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()
