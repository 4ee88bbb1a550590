"""YAML 설정 로딩 + Pydantic 모델."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_UPLOAD_URL = "https://uploads.github.com/"


# ── 설정 모델 ──────────────────────────────────────────


class ClientConfig(BaseModel):
    """GitHub API 클라이언트 설정.

    base_url/upload_url은 반드시 '/'로 끝나야 한다 (상대 경로 해석 기준).
    """

    base_url: str = DEFAULT_BASE_URL
    upload_url: str = DEFAULT_UPLOAD_URL
    api_version: str = "2022-11-28"
    user_agent: str = "ghrest/0.1.0"
    request_timeout_sec: float = Field(default=30.0, gt=0)
    token_env_var: str = "GITHUB_TOKEN"

    @classmethod
    def for_enterprise(cls, base_url: str, upload_url: str | None = None, **kwargs: object) -> ClientConfig:
        """GitHub Enterprise Server용 설정을 만든다.

        base_url에 /api/v3/, upload_url에 /api/uploads/ 접미사가 없으면 붙인다.
        upload_url을 생략하면 base_url 호스트를 그대로 쓴다.
        """
        base = _with_suffix(base_url, "/api/v3/")
        upload = _with_suffix(upload_url or base_url, "/api/uploads/")
        return cls(base_url=base, upload_url=upload, **kwargs)


class LoggingConfig(BaseModel):
    json_format: bool = True
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_known(cls, v: str) -> str:
        upper = v.upper()
        if upper not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return upper


class AppConfig(BaseModel):
    """애플리케이션 전체 설정."""

    github: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _with_suffix(url: str, suffix: str) -> str:
    """Enterprise URL 접미사 정규화."""
    if not url.endswith("/"):
        url += "/"
    if url.endswith(suffix):
        return url
    for tail in ("/api/v3/", "/api/uploads/", "/api/"):
        if url.endswith(tail):
            return url[: -len(tail)] + suffix
    return url[:-1] + suffix


# ── 로딩 ───────────────────────────────────────────────


def load_config(path: Path | None = None) -> AppConfig:
    """YAML 설정 파일을 로딩하고 Pydantic 모델로 검증한다.

    환경변수 우선순위: 시스템 환경변수 > .env 파일 > config.yaml 기본값
    """
    config_path = path or _DEFAULT_CONFIG_PATH
    # wheel로 설치하면 기본 config.yaml이 없다: 기본값 + 현재 디렉터리 .env + 환경변수
    use_defaults = path is None and not config_path.exists()

    # .env 파일 로딩: config.yaml과 같은 디렉터리(설정 파일이 없으면 현재 디렉터리)
    dotenv_path = Path.cwd() / ".env" if use_defaults else config_path.parent / ".env"
    load_dotenv(dotenv_path=dotenv_path, override=False)

    if use_defaults:
        logger.debug("No config file at %s, using defaults", config_path)
        raw: dict[str, Any] = {}
    else:
        with open(config_path) as f:
            raw = yaml.safe_load(f)

        if raw is None:
            raise ValueError(f"Empty config file: {config_path}")

    # 환경변수 오버라이드
    if api_url := os.environ.get("GITHUB_API_URL"):
        raw.setdefault("github", {})
        raw["github"]["base_url"] = api_url if api_url.endswith("/") else api_url + "/"

    if upload_url := os.environ.get("GITHUB_UPLOAD_URL"):
        raw.setdefault("github", {})
        raw["github"]["upload_url"] = upload_url if upload_url.endswith("/") else upload_url + "/"

    return AppConfig.model_validate(raw)
