"""
tests/deployer/test_moto_deployer.py - moto 기반 배포/조회/삭제 통합 테스트

Note: moto가 설치되지 않은 경우 건너뜁니다.
"""

import io
import json
import zipfile

import pytest

from deployer import AppDefinition, AppDeploymentRequest, DeploymentState, create_deployer

REGION = "ap-northeast-2"


def _zip_bytes() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("lambda_function.py", "def lambda_handler(event, context):\n    return event\n")
    return buffer.getvalue()


@pytest.fixture
def lambda_env(moto_aws):
    """S3 아티팩트와 실행 역할이 준비된 moto 환경"""
    import boto3

    s3 = boto3.client("s3", region_name=REGION)
    s3.create_bucket(Bucket="artifacts", CreateBucketConfiguration={"LocationConstraint": REGION})
    s3.put_object(Bucket="artifacts", Key="etl.zip", Body=_zip_bytes())

    iam = boto3.client("iam", region_name=REGION)
    role = iam.create_role(
        RoleName="lambda-role",
        AssumeRolePolicyDocument=json.dumps(
            {
                "Version": "2012-10-17",
                "Statement": [
                    {
                        "Effect": "Allow",
                        "Principal": {"Service": "lambda.amazonaws.com"},
                        "Action": "sts:AssumeRole",
                    }
                ],
            }
        ),
    )

    yield {
        "client": boto3.client("lambda", region_name=REGION),
        "role_arn": role["Role"]["Arn"],
    }


def test_deploy_status_undeploy(lambda_env):
    deployer = create_deployer(client=lambda_env["client"])
    request = AppDeploymentRequest(
        definition=AppDefinition(name="etl", properties={"LOG_LEVEL": "debug"}),
        deployment_properties={
            "deployer.group": "batch",
            "s3.bucket": "artifacts",
            "s3.key": "etl.zip",
            "app.function.memory": "256",
            "app.function.runtime": "python3.12",
            "app.function.handler": "lambda_function.lambda_handler",
            "app.function.role": lambda_env["role_arn"],
        },
    )

    handle = deployer.deploy(request)

    assert handle.startswith("batch-etl:arn:aws:lambda:")

    app_status = deployer.status(handle)
    assert app_status.state == DeploymentState.DEPLOYED
    assert app_status.attributes["name"] == "etl"
    assert app_status.attributes["memory"] == "256"
    assert app_status.attributes["description"] == "etl-batch-etl"

    configuration = lambda_env["client"].get_function(FunctionName="etl")["Configuration"]
    assert configuration["Environment"]["Variables"] == {"LOG_LEVEL": "debug"}

    deployer.undeploy(handle)
    assert deployer.status(handle).state == DeploymentState.UNDEPLOYED

    # 두 번째 호출은 아무 것도 하지 않음
    deployer.undeploy(handle)
