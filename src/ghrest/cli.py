"""click CLI 엔트리포인트.

ghrest rate-limit / user / issues 등으로 GitHub REST API를 조회합니다.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from itertools import islice
from pathlib import Path
from typing import Any

import click
import orjson

from ghrest.client import GitHubClient
from ghrest.codec import to_jsonable
from ghrest.config import AppConfig, load_config
from ghrest.errors import GitHubError
from ghrest.issues import IssueListByRepoOptions
from ghrest.logging_config import setup_logging
from ghrest.messages import parse_webhook, validate_payload_from_body
from ghrest.orgs_audit_log import GetAuditLogOptions
from ghrest.pagination import scan

logger = logging.getLogger(__name__)


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """--config, --json-log 옵션을 붙인다."""
    func = click.option("--json-log/--no-json-log", default=True, help="JSON 로그 포맷 (기본: 활성)")(func)
    func = click.option(
        "--config",
        "config_path",
        default=None,
        type=click.Path(exists=True, path_type=Path),
        help="설정 파일 경로 (기본: 패키지 루트 config.yaml)",
    )(func)
    return func


def _setup(config_path: Path | None, json_log: bool) -> AppConfig:
    config = load_config(config_path)
    setup_logging(json_format=json_log, level=config.logging.level)
    return config


def _echo_json(value: Any) -> None:
    click.echo(orjson.dumps(to_jsonable(value), option=orjson.OPT_INDENT_2).decode())


def _fail(exc: GitHubError) -> None:
    logger.error("Command failed: %s", exc, extra={"event_code": "CLI_ERROR"})
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="ghrest")
def main() -> None:
    """ghrest - GitHub REST API 조회 도구."""


@main.command("rate-limit")
@_common_options
def rate_limit(config_path: Path | None, json_log: bool) -> None:
    """리소스별 rate limit 상태를 출력합니다."""
    config = _setup(config_path, json_log)
    with GitHubClient(config.github) as client:
        try:
            result = client.rate_limit.get()
        except GitHubError as exc:
            _fail(exc)
            return
    _echo_json(result.data)


@main.command()
@click.argument("login", required=False, default="")
@_common_options
def user(login: str, config_path: Path | None, json_log: bool) -> None:
    """사용자 정보를 출력합니다 (LOGIN 생략 시 인증된 사용자)."""
    config = _setup(config_path, json_log)
    with GitHubClient(config.github) as client:
        try:
            result = client.users.get(login)
        except GitHubError as exc:
            _fail(exc)
            return
    _echo_json(result.data)


@main.command()
@click.argument("owner")
@click.argument("repo")
@click.option("--state", default="open", type=click.Choice(["open", "closed", "all"]), help="이슈 상태")
@click.option("--limit", default=30, type=int, help="최대 출력 개수 (기본: 30)")
@_common_options
def issues(owner: str, repo: str, state: str, limit: int, config_path: Path | None, json_log: bool) -> None:
    """리포지토리 이슈 목록을 JSONL로 출력합니다 (페이지를 따라감)."""
    config = _setup(config_path, json_log)
    opts = IssueListByRepoOptions(state=state, per_page=min(limit, 100))
    with GitHubClient(config.github) as client:
        try:
            for issue in islice(scan(lambda o: client.issues.list_by_repo(owner, repo, o), opts), limit):
                click.echo(issue.to_json().decode())
        except GitHubError as exc:
            _fail(exc)


@main.command("audit-log")
@click.argument("org")
@click.option("--phrase", default=None, help='검색어 (예: "action:repo.create")')
@click.option("--limit", default=100, type=int, help="최대 출력 개수 (기본: 100)")
@_common_options
def audit_log(org: str, phrase: str | None, limit: int, config_path: Path | None, json_log: bool) -> None:
    """조직 audit log를 JSONL로 출력합니다 (after cursor를 따라감)."""
    config = _setup(config_path, json_log)
    opts = GetAuditLogOptions(phrase=phrase, per_page=min(limit, 100))
    with GitHubClient(config.github) as client:
        try:
            for entry in islice(scan(lambda o: client.organizations.audit_log.get(org, o), opts), limit):
                click.echo(entry.to_json().decode())
        except GitHubError as exc:
            _fail(exc)


@main.command("branch-rules")
@click.argument("owner")
@click.argument("repo")
@click.argument("branch")
@_common_options
def branch_rules(owner: str, repo: str, branch: str, config_path: Path | None, json_log: bool) -> None:
    """브랜치에 적용되는 ruleset 규칙을 출력합니다."""
    config = _setup(config_path, json_log)
    with GitHubClient(config.github) as client:
        try:
            result = client.repositories.rulesets.get_rules_for_branch(owner, repo, branch)
        except GitHubError as exc:
            _fail(exc)
            return
    _echo_json([rule.to_payload() for rule in result.data or []])


@main.command("verify-webhook")
@click.option("--event", "event_type", required=True, help="X-GitHub-Event 값 (예: push)")
@click.option(
    "--payload",
    "payload_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="수신한 요청 본문 파일",
)
@click.option("--signature", default="", help="X-Hub-Signature-256 헤더 값")
@click.option("--secret", envvar="GITHUB_WEBHOOK_SECRET", default=None, help="webhook secret")
@click.option("--content-type", default="application/json", help="요청 Content-Type")
@click.option("--json-log/--no-json-log", default=True, help="JSON 로그 포맷 (기본: 활성)")
def verify_webhook(
    event_type: str,
    payload_path: Path,
    signature: str,
    secret: str | None,
    content_type: str,
    json_log: bool,
) -> None:
    """저장된 webhook 요청의 서명을 검증하고 이벤트를 파싱해 출력합니다."""
    setup_logging(json_format=json_log)
    body = payload_path.read_bytes()
    try:
        payload = validate_payload_from_body(content_type, body, signature, secret)
        event = parse_webhook(event_type, payload)
    except GitHubError as exc:
        _fail(exc)
        return
    click.echo(f"[verify-webhook] {event_type}: signature OK", err=True)
    _echo_json(event)
