"""
tests/deployer/test_rollback.py - RollbackStack 테스트
"""

from unittest.mock import MagicMock

import pytest

from deployer.rollback import RollbackStack


class TestRollbackStack:
    """RollbackStack 테스트"""

    def test_rollback_runs_in_reverse_order(self):
        order = []

        with pytest.raises(RuntimeError):
            with RollbackStack() as rollback:
                rollback.push("first", lambda: order.append("first"))
                rollback.push("second", lambda: order.append("second"))
                raise RuntimeError("step failed")

        assert order == ["second", "first"]

    def test_commit_discards_actions(self):
        action = MagicMock()

        with RollbackStack() as rollback:
            rollback.push("undo", action)
            rollback.commit()

        action.assert_not_called()
        assert rollback.pending == []

    def test_no_exception_no_rollback(self):
        action = MagicMock()

        with RollbackStack() as rollback:
            rollback.push("undo", action)

        action.assert_not_called()
        assert rollback.pending == ["undo"]

    def test_failing_undo_is_logged_and_original_error_kept(self):
        log = MagicMock()
        second = MagicMock()

        with pytest.raises(ValueError, match="original"):
            with RollbackStack(log) as rollback:
                rollback.push("second", second)
                rollback.push("broken", MagicMock(side_effect=RuntimeError("undo failed")))
                raise ValueError("original")

        second.assert_called_once()
        log.error.assert_called_once()

    def test_rollback_returns_failed_names(self):
        rollback = RollbackStack()
        rollback.push("ok", lambda: None)
        rollback.push("broken", MagicMock(side_effect=RuntimeError))

        assert rollback.rollback() == ["broken"]
        assert rollback.pending == []
