"""GitHub API 예외 계층.

모든 예외는 GitHubError를 상속한다. 서버 응답을 받은 뒤 발생한 예외는
``response`` 속성에 ApiResponse를 담아 헤더/rate 정보를 호출자에게 넘긴다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from ghrest.response import ApiResponse, Rate


class GitHubError(Exception):
    """ghrest 예외의 공통 부모."""

    def __init__(self, message: str, *, response: ApiResponse[Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response


class InvalidArgumentError(GitHubError, ValueError):
    """요청을 만들기 전 로컬 검증 실패."""


class TransportError(GitHubError):
    """네트워크/타임아웃 등 응답을 받지 못한 실패."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ResponseDecodeError(GitHubError):
    """응답 본문을 대상 타입으로 디코딩하지 못함."""


class ErrorDetail(BaseModel):
    """에러 응답의 ``errors`` 항목.

    code 값: missing, missing_field, invalid, already_exists, custom
    """

    resource: str | None = None
    field: str | None = None
    code: str | None = None
    message: str | None = None

    def __str__(self) -> str:
        text = f"{self.code} error caused by {self.field} field on {self.resource} resource"
        if self.message:
            text += f": {self.message}"
        return text


class ErrorResponse(GitHubError):
    """2xx가 아닌 응답."""

    def __init__(
        self,
        message: str,
        *,
        response: ApiResponse[Any] | None = None,
        errors: list[ErrorDetail] | None = None,
        documentation_url: str | None = None,
    ) -> None:
        super().__init__(message, response=response)
        self.errors = errors or []
        self.documentation_url = documentation_url

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None

    def __str__(self) -> str:
        method = url = ""
        if self.response is not None and self.response.http_response is not None:
            request = self.response.http_response.request
            method, url = request.method, str(request.url)
        text = f"{method} {url}: {self.status_code} {self.message}".strip()
        if self.errors:
            text += " [" + ", ".join(str(e) for e in self.errors) + "]"
        return text


class RateLimitError(ErrorResponse):
    """primary rate limit 초과 (X-RateLimit-Remaining: 0)."""

    @property
    def rate(self) -> Rate | None:
        return self.response.rate if self.response is not None else None

    def __str__(self) -> str:
        base = super().__str__()
        rate = self.rate
        if rate is not None and rate.reset is not None:
            base += f" [rate reset at {rate.reset.isoformat()}]"
        return base


class AbuseRateLimitError(ErrorResponse):
    """secondary rate limit 초과."""

    def __init__(self, message: str, *, retry_after: float | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class AcceptedError(GitHubError):
    """202 Accepted: 서버가 작업을 예약했고 결과는 아직 없다."""

    def __init__(self, *, response: ApiResponse[Any] | None = None, raw: bytes = b"") -> None:
        super().__init__("job scheduled on GitHub side; try again later", response=response)
        self.raw = raw


class WebhookError(GitHubError, ValueError):
    """webhook 서명 검증/payload 파싱 실패."""
