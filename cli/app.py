"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
LambdaAppDeployer의 deploy / status / undeploy / info 작업을 명령어로 제공합니다.

명령어 구조:
    lad --version
    lad deploy NAME --bucket B --key K [--memory M] [--group G] [-e K=V ...]
    lad status HANDLE [--json]
    lad undeploy HANDLE
    lad info [--json]

    예시:
    lad deploy etl --group batch --bucket artifacts --key etl.zip -e LOG_LEVEL=debug
    lad status "batch-etl:arn:aws:lambda:ap-northeast-2:123456789012:function:etl"

전역 옵션:
    -r, --region: 리전 (기본: AWS_REGION → ap-northeast-2)
    -p, --profile: AWS 프로파일
    --debug: DEBUG 로그 출력

Usage:
    $ lad deploy etl --bucket b --key k
    $ python -m cli.app info
"""

from __future__ import annotations

import json
from typing import Any

import click

from cli.console import console, print_error, print_key_values, print_success, setup_logging, state_markup
from core.config import get_log_level, get_version
from core.exceptions import DeployerError, format_error_for_user
from deployer import AppDefinition, AppDeploymentRequest, LambdaAppDeployer, create_deployer
from deployer.types import (
    EVENT_SOURCE_ARN_PROPERTY,
    FUNCTION_HANDLER_PROPERTY,
    FUNCTION_MEMORY_PROPERTY,
    FUNCTION_ROLE_PROPERTY,
    FUNCTION_RUNTIME_PROPERTY,
    GROUP_PROPERTY_KEY,
    S3_BUCKET_PROPERTY,
    S3_KEY_PROPERTY,
)

VERSION = get_version()

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _parse_pairs(values: tuple[str, ...], option_name: str) -> dict[str, str]:
    """'KEY=VALUE' 목록을 딕셔너리로 변환"""
    result: dict[str, str] = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or not key:
            raise click.BadParameter(f"'{item}' (KEY=VALUE 형식이어야 함)", param_hint=option_name)
        result[key] = value
    return result


def _get_deployer(ctx: click.Context) -> LambdaAppDeployer:
    """컨텍스트의 배포기 반환 (없으면 생성)"""
    obj = ctx.ensure_object(dict)
    deployer = obj.get("deployer")
    if deployer is None:
        deployer = create_deployer(region_name=obj.get("region"), profile_name=obj.get("profile"))
        obj["deployer"] = deployer
    return deployer


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2, default=str))


def _fail(error: Exception) -> None:
    print_error(format_error_for_user(error))
    raise SystemExit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(VERSION, "-v", "--version", prog_name="lad")
@click.option("-r", "--region", default=None, help="AWS 리전")
@click.option("-p", "--profile", default=None, help="AWS 프로파일")
@click.option("--debug", is_flag=True, help="DEBUG 로그 출력")
@click.pass_context
def cli(ctx: click.Context, region: str | None, profile: str | None, debug: bool) -> None:
    """LAD - AWS Lambda 앱 배포기"""
    setup_logging("DEBUG" if debug else get_log_level())

    obj = ctx.ensure_object(dict)
    obj.setdefault("region", region)
    obj.setdefault("profile", profile)


@cli.command()
@click.argument("name")
@click.option("--bucket", default=None, help="함수 코드 S3 버킷 (필수)")
@click.option("--key", default=None, help="함수 코드 S3 키 (필수)")
@click.option("--memory", default=None, help="메모리 (MB, 기본 128)")
@click.option("--group", default=None, help="배포 그룹 ID")
@click.option("--role", default=None, help="실행 역할 ARN")
@click.option("--runtime", default=None, help="함수 런타임")
@click.option("--handler", default=None, help="함수 핸들러")
@click.option("--event-source", "event_source", default=None, help="이벤트 소스 ARN (지정 시 매핑 생성)")
@click.option("-e", "--env", "env", multiple=True, help="환경변수 KEY=VALUE (다중 가능)")
@click.option("-P", "--property", "extra", multiple=True, help="추가 배포 속성 KEY=VALUE (다중 가능)")
@click.option("--json", "as_json", is_flag=True, help="JSON 출력")
@click.pass_context
def deploy(
    ctx: click.Context,
    name: str,
    bucket: str | None,
    key: str | None,
    memory: str | None,
    group: str | None,
    role: str | None,
    runtime: str | None,
    handler: str | None,
    event_source: str | None,
    env: tuple[str, ...],
    extra: tuple[str, ...],
    as_json: bool,
) -> None:
    """앱을 Lambda 함수로 배포하고 핸들 출력"""
    properties = _parse_pairs(extra, "--property")
    for prop, value in (
        (S3_BUCKET_PROPERTY, bucket),
        (S3_KEY_PROPERTY, key),
        (FUNCTION_MEMORY_PROPERTY, memory),
        (GROUP_PROPERTY_KEY, group),
        (FUNCTION_ROLE_PROPERTY, role),
        (FUNCTION_RUNTIME_PROPERTY, runtime),
        (FUNCTION_HANDLER_PROPERTY, handler),
        (EVENT_SOURCE_ARN_PROPERTY, event_source),
    ):
        if value is not None:
            properties[prop] = value

    request = AppDeploymentRequest(
        definition=AppDefinition(name=name, properties=_parse_pairs(env, "--env")),
        deployment_properties=properties,
    )

    try:
        handle = _get_deployer(ctx).deploy(request)
    except DeployerError as e:
        _fail(e)
        return

    if as_json:
        _echo_json({"handle": handle})
    else:
        print_success(f"배포 완료: {name}")
        click.echo(handle)


@cli.command()
@click.argument("handle")
@click.option("--json", "as_json", is_flag=True, help="JSON 출력")
@click.pass_context
def status(ctx: click.Context, handle: str, as_json: bool) -> None:
    """앱 상태 조회"""
    try:
        app_status = _get_deployer(ctx).status(handle)
    except DeployerError as e:
        _fail(e)
        return

    if as_json:
        _echo_json(app_status.to_dict())
        return

    console.print(f"상태: {state_markup(app_status.state.value)}")
    if app_status.attributes:
        print_key_values(app_status.id, app_status.attributes)


@cli.command()
@click.argument("handle")
@click.pass_context
def undeploy(ctx: click.Context, handle: str) -> None:
    """앱 삭제 (이미 삭제된 경우 무시)"""
    try:
        _get_deployer(ctx).undeploy(handle)
    except DeployerError as e:
        _fail(e)
        return

    print_success(f"삭제 완료: {handle}")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="JSON 출력")
@click.pass_context
def info(ctx: click.Context, as_json: bool) -> None:
    """배포기 런타임 환경 정보"""
    environment = _get_deployer(ctx).environment_info().to_dict()
    if as_json:
        _echo_json(environment)
    else:
        print_key_values("Runtime Environment", environment)


if __name__ == "__main__":
    cli()
