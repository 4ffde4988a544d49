"""
tests/core/aws/test_aws_client.py - core/aws/client.py 테스트
"""

from unittest.mock import MagicMock, patch

from core.aws.client import get_client, get_lambda_client, reset_lambda_client


class TestGetClient:
    """get_client 테스트"""

    def test_config_applied(self):
        session = MagicMock()

        get_client(session, "lambda", region_name="ap-northeast-2")

        kwargs = session.client.call_args.kwargs
        config = kwargs["config"]
        assert kwargs["region_name"] == "ap-northeast-2"
        assert config.retries == {"total_max_attempts": 1, "mode": "standard"}
        assert config.connect_timeout == 10
        assert config.read_timeout == 60

    def test_existing_config_merged(self):
        from botocore.config import Config

        session = MagicMock()

        get_client(session, "lambda", config=Config(read_timeout=5))

        assert session.client.call_args.kwargs["config"].read_timeout == 5

    def test_real_client_does_not_retry(self):
        import boto3

        session = boto3.Session(region_name="ap-northeast-2")

        client = get_client(session, "lambda")

        assert client.meta.config.retries["total_max_attempts"] == 1


class TestLambdaClient:
    """전역 Lambda client 테스트"""

    def test_created_once(self):
        session = MagicMock()
        session.region_name = "ap-northeast-2"

        first = get_lambda_client(session=session)
        second = get_lambda_client(session=session)

        assert first is second
        session.client.assert_called_once()

    def test_reset(self):
        session = MagicMock()
        session.region_name = "ap-northeast-2"

        get_lambda_client(session=session)
        reset_lambda_client()
        get_lambda_client(session=session)

        assert session.client.call_count == 2

    def test_session_created_from_profile(self):
        with patch("core.aws.client.create_session") as mock_create:
            mock_create.return_value.region_name = "us-west-2"

            get_lambda_client(profile_name="dev", region_name="us-west-2")

        mock_create.assert_called_once_with(profile_name="dev", region_name="us-west-2")
        assert mock_create.return_value.client.call_args.kwargs["region_name"] == "us-west-2"
