"""
tests/core/test_core_config.py - core/config.py 테스트
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from core.config import (
    Settings,
    get_default_profile,
    get_default_region,
    get_function_role,
    get_log_level,
    get_project_root,
    get_version,
    settings,
)


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.DEFAULT_REGION = "us-east-1"

    def test_default_values(self):
        """기본값 확인"""
        assert settings.DEFAULT_REGION == "ap-northeast-2"
        assert settings.DEFAULT_FUNCTION_MEMORY_MB == 128
        assert settings.API_MAX_ATTEMPTS == 1
        assert settings.PLATFORM_TYPE == "AWS Lambda"

    def test_override(self):
        custom = Settings(DEFAULT_RUNTIME="python3.12")
        assert custom.DEFAULT_RUNTIME == "python3.12"
        assert custom.DEFAULT_REGION == settings.DEFAULT_REGION


class TestProjectPaths:
    """프로젝트 경로 함수 테스트"""

    def test_get_project_root(self):
        root = get_project_root()
        assert isinstance(root, Path)
        assert (root / "core").exists()
        assert (root / "deployer").exists()

    def test_get_version(self):
        version = get_version()
        parts = version.split(".")
        assert len(parts) >= 2, "버전은 최소 x.y 형식이어야 함"
        for part in parts:
            assert part.isdigit(), f"버전 파트는 숫자여야 함: {part}"


class TestEnvironmentHelpers:
    """환경변수 헬퍼 함수 테스트"""

    def test_get_default_profile_from_aws_profile(self):
        with patch.dict(os.environ, {"AWS_PROFILE": "test-profile"}, clear=False):
            assert get_default_profile() == "test-profile"

    def test_get_default_profile_from_aws_default_profile(self):
        with patch.dict(os.environ, {"AWS_DEFAULT_PROFILE": "default-profile"}, clear=True):
            assert get_default_profile() == "default-profile"

    def test_get_default_profile_none(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_default_profile() is None

    def test_get_default_region_from_aws_region(self):
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}, clear=False):
            assert get_default_region() == "us-west-2"

    def test_get_default_region_from_aws_default_region(self):
        with patch.dict(os.environ, {"AWS_DEFAULT_REGION": "eu-west-1"}, clear=True):
            assert get_default_region() == "eu-west-1"

    def test_get_default_region_fallback(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_default_region() == settings.DEFAULT_REGION

    def test_get_function_role(self):
        with patch.dict(os.environ, {"LAD_FUNCTION_ROLE_ARN": "arn:aws:iam::1:role/r"}, clear=True):
            assert get_function_role() == "arn:aws:iam::1:role/r"
        with patch.dict(os.environ, {}, clear=True):
            assert get_function_role() is None

    def test_get_log_level(self):
        with patch.dict(os.environ, {"LAD_LOG_LEVEL": "debug"}, clear=True):
            assert get_log_level() == "DEBUG"
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_level() == "WARNING"

