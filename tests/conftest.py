"""공통 fixture."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import yaml

from ghrest.client import GitHubClient
from ghrest.config import ClientConfig


@pytest.fixture(autouse=True)
def _clean_github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """실행 환경의 GitHub 환경변수가 테스트에 섞이지 않게 한다."""
    for name in ("GITHUB_TOKEN", "GITHUB_API_URL", "GITHUB_UPLOAD_URL", "GITHUB_WEBHOOK_SECRET"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def client() -> Iterator[GitHubClient]:
    gh = GitHubClient(ClientConfig(), token="ghp_test_token")
    yield gh
    gh.close()


@pytest.fixture()
def sample_config_data() -> dict[str, Any]:
    """테스트용 config dict."""
    return {
        "github": {
            "base_url": "https://api.github.com/",
            "upload_url": "https://uploads.github.com/",
            "api_version": "2022-11-28",
            "user_agent": "ghrest-test/1.0",
            "request_timeout_sec": 5,
            "token_env_var": "GITHUB_TOKEN",
        },
        "logging": {"json_format": False, "level": "DEBUG"},
    }


@pytest.fixture()
def tmp_config_file(tmp_path: Path, sample_config_data: dict[str, Any]) -> Path:
    """임시 config.yaml 파일."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(sample_config_data), encoding="utf-8")
    return config_path


@pytest.fixture()
def sample_user() -> dict[str, Any]:
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "type": "User",
        "site_admin": False,
        "name": "The Octocat",
        "public_repos": 8,
        "created_at": "2011-01-25T18:44:36Z",
    }


@pytest.fixture()
def sample_issue(sample_user: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": 1001,
        "number": 7,
        "state": "open",
        "title": "Found a bug",
        "body": "I'm having a problem with this.",
        "user": sample_user,
        "labels": [{"id": 208045946, "name": "bug", "color": "f29513", "default": True}],
        "comments": 0,
        "locked": False,
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-15T11:00:00Z",
    }


@pytest.fixture(autouse=True)
def _reset_ghrest_logger() -> Iterator[None]:
    """setup_logging이 붙인 핸들러를 테스트마다 제거한다."""
    yield
    logger = logging.getLogger("ghrest")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
