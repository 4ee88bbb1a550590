"""GitHub REST API 동기 클라이언트.

모든 서비스가 공유하는 요청/응답 처리 계층.
- httpx.Client 기반 요청 생성/전송
- 2xx 외 응답을 예외로 변환 (rate limit / secondary rate limit / 202 구분)
- Link 헤더 pagination 값, X-RateLimit-* 헤더 파싱
재시도와 rate limit 대기는 하지 않는다.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlsplit

import httpx
import orjson
from pydantic import ValidationError

from ghrest.actions_secrets import ActionsService
from ghrest.codec import decode_body, encode_body
from ghrest.config import ClientConfig
from ghrest.errors import (
    AbuseRateLimitError,
    AcceptedError,
    ErrorDetail,
    ErrorResponse,
    InvalidArgumentError,
    RateLimitError,
    ResponseDecodeError,
    TransportError,
)
from ghrest.issues import IssuesService
from ghrest.orgs import OrganizationsService
from ghrest.rate_limit import RateLimitService
from ghrest.repos import RepositoriesService
from ghrest.response import ApiResponse
from ghrest.scim import SCIMService
from ghrest.service import RequestTimeout
from ghrest.users import UsersService

logger = logging.getLogger(__name__)


class GitHubClient:
    """GitHub REST API 클라이언트.

    서비스는 속성으로 노출된다 (client.issues, client.repositories.hooks 등).
    토큰은 인자 > config.token_env_var 환경변수 순으로 찾고, 없으면 익명으로 호출한다.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        token: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        token = token if token is not None else os.environ.get(self._config.token_env_var, "")

        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self._config.api_version,
            "User-Agent": self._config.user_agent,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self._config.request_timeout_sec)

        # ── 서비스 ──
        self.actions = ActionsService(self)
        self.issues = IssuesService(self)
        self.organizations = OrganizationsService(self)
        self.rate_limit = RateLimitService(self)
        self.repositories = RepositoriesService(self)
        self.scim = SCIMService(self)
        self.users = UsersService(self)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def upload_url(self) -> str:
        """업로드 엔드포인트(릴리스 asset 등) 기준 URL.

        현재 서비스는 모두 base_url을 쓰며, 업로드 API를 붙일 때 이 값을 사용한다.
        """
        return self._config.upload_url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ── 요청 생성 ────────────────────────────────────────

    def new_request(
        self,
        method: str,
        url: str,
        body: Any = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: RequestTimeout = None,
    ) -> httpx.Request:
        """base_url 기준 상대 경로로 요청을 만든다.

        body가 있으면 JSON으로 인코딩한다. timeout을 주면 이 요청에만 적용된다.

        Raises:
            InvalidArgumentError: base_url이 '/'로 끝나지 않거나 url이 절대 URL인 경우
        """
        if not self.base_url.endswith("/"):
            raise InvalidArgumentError(f"base_url은 '/'로 끝나야 합니다: {self.base_url!r}")
        if urlsplit(url).scheme:
            raise InvalidArgumentError(f"상대 경로만 허용됩니다: {url!r}")

        full_url = httpx.URL(self.base_url).join(url.lstrip("/"))

        merged = dict(self._headers)
        content: bytes | None = None
        if body is not None:
            content = encode_body(body)
            merged["Content-Type"] = "application/json"
        if headers:
            merged.update(headers)

        return self._client.build_request(
            method,
            full_url,
            content=content,
            headers=merged,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

    # ── 요청 실행 ────────────────────────────────────────

    def do(self, request: httpx.Request, result_type: Any = None) -> ApiResponse[Any]:
        """요청을 보내고 응답을 검사한 뒤 본문을 result_type으로 디코딩한다.

        Raises:
            TransportError: 응답을 받지 못함
            ErrorResponse: 2xx가 아닌 응답 (RateLimitError, AbuseRateLimitError 포함)
            AcceptedError: 202 응답
            ResponseDecodeError: 본문 디코딩 실패
        """
        start = time.monotonic()
        try:
            resp = self._client.send(request)
        except httpx.TransportError as exc:
            logger.warning(
                "Transport error: %s %s: %s",
                request.method,
                request.url,
                exc,
                extra={"event_code": "TRANSPORT_ERROR", "method": request.method, "url": str(request.url)},
            )
            raise TransportError(f"{request.method} {request.url}: {exc}", cause=exc) from exc

        duration_ms = round((time.monotonic() - start) * 1000, 1)
        result = ApiResponse.from_httpx(resp)
        logger.debug(
            "%s %s -> %d",
            request.method,
            request.url,
            resp.status_code,
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": resp.status_code,
                "duration_ms": duration_ms,
                "rate_remaining": result.rate.remaining if result.rate else None,
            },
        )

        try:
            check_response(result)
        except ErrorResponse as exc:
            logger.warning(
                "API error: %s",
                exc,
                extra={
                    "event_code": type(exc).__name__.upper(),
                    "method": request.method,
                    "url": str(request.url),
                    "status_code": resp.status_code,
                },
            )
            raise

        if result_type is not None and resp.content:
            try:
                result.data = decode_body(resp.content, result_type)
            except (orjson.JSONDecodeError, ValidationError) as exc:
                raise ResponseDecodeError(
                    f"응답 디코딩 실패 ({request.method} {request.url}): {exc}", response=result
                ) from exc

        return result

    def call(
        self,
        method: str,
        url: str,
        body: Any = None,
        result_type: Any = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: RequestTimeout = None,
    ) -> ApiResponse[Any]:
        """new_request + do. timeout은 new_request로 그대로 넘긴다."""
        return self.do(self.new_request(method, url, body, headers=headers, timeout=timeout), result_type)


# ── 응답 검사 ──────────────────────────────────────────


def check_response(result: ApiResponse[Any]) -> None:
    """2xx(202 제외)면 통과, 아니면 상태에 맞는 예외를 던진다."""
    status = result.status_code
    raw = result.http_response.content if result.http_response is not None else b""

    if status == 202:
        raise AcceptedError(response=result, raw=raw)
    if 200 <= status < 300:
        return

    message, errors, documentation_url = _parse_error_body(raw)
    if not message and result.http_response is not None:
        message = result.http_response.reason_phrase

    kwargs: dict[str, Any] = {
        "response": result,
        "errors": errors,
        "documentation_url": documentation_url,
    }

    if status in (403, 429):
        if result.headers.get("x-ratelimit-remaining") == "0":
            raise RateLimitError(message, **kwargs)
        if documentation_url and (
            "secondary-rate-limits" in documentation_url or documentation_url.endswith("#abuse-rate-limits")
        ):
            raise AbuseRateLimitError(message, retry_after=_retry_after(result), **kwargs)

    raise ErrorResponse(message, **kwargs)


def _parse_error_body(raw: bytes) -> tuple[str, list[ErrorDetail], str | None]:
    """에러 응답 JSON에서 message, errors, documentation_url을 꺼낸다. JSON이 아니면 빈 값."""
    if not raw:
        return "", [], None
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return "", [], None
    if not isinstance(payload, dict):
        return "", [], None

    raw_errors = payload.get("errors")
    errors: list[ErrorDetail] = []
    for item in raw_errors if isinstance(raw_errors, list) else []:
        # 일부 API는 errors를 문자열 배열로 돌려준다
        if isinstance(item, str):
            errors.append(ErrorDetail(message=item))
        elif isinstance(item, dict):
            try:
                errors.append(ErrorDetail.model_validate(item))
            except ValidationError:
                # 타입이 맞지 않는 항목은 문자열로 보존한다
                errors.append(ErrorDetail(message=orjson.dumps(item).decode()))

    documentation_url = payload.get("documentation_url")
    if not isinstance(documentation_url, str):
        documentation_url = None
    return str(payload.get("message") or ""), errors, documentation_url


def _retry_after(result: ApiResponse[Any]) -> float | None:
    """Retry-After 헤더, 없으면 X-RateLimit-Reset까지 남은 초."""
    retry_after = result.headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            return None
    if result.rate is not None and result.rate.reset is not None:
        return max(0.0, (result.rate.reset - datetime.now(tz=UTC)).total_seconds())
    return None
