"""
tests/deployer/test_factory.py - create_deployer 테스트
"""

from unittest.mock import MagicMock, patch

from core.config import Settings
from deployer.factory import create_deployer
from deployer.lambda_deployer import LambdaAppDeployer


class TestCreateDeployer:
    """create_deployer 테스트"""

    def test_injected_client(self, mock_lambda_client):
        deployer = create_deployer(client=mock_lambda_client)

        assert isinstance(deployer, LambdaAppDeployer)
        assert deployer.client is mock_lambda_client

    def test_shared_client_is_used(self):
        shared = MagicMock()
        with patch("deployer.factory.get_lambda_client", return_value=shared) as mock_get:
            deployer = create_deployer(region_name="us-east-1", profile_name="dev")

        mock_get.assert_called_once_with(session=None, region_name="us-east-1", profile_name="dev")
        assert deployer.client is shared

    def test_settings_are_passed(self, mock_lambda_client):
        custom = Settings(DEFAULT_FUNCTION_MEMORY_MB=256)

        deployer = create_deployer(settings=custom, client=mock_lambda_client)

        assert deployer.settings.DEFAULT_FUNCTION_MEMORY_MB == 256
