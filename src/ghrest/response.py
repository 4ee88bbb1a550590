"""API 응답 래퍼: rate limit 헤더와 Link 헤더 pagination 정보."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from urllib.parse import parse_qs, urlsplit

import httpx

from ghrest.codec import ApiModel

T = TypeVar("T")

_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="(\w+)"')


class Rate(ApiModel):
    """rate limit 상태."""

    limit: int = 0
    remaining: int = 0
    used: int = 0
    reset: datetime | None = None
    resource: str | None = None


@dataclass
class ApiResponse(Generic[T]):
    """API 호출 결과.

    data는 디코딩된 값 (본문이 없거나 result_type이 없으면 None).
    next_page 등 pagination 값은 Link 헤더에서 추출하며 없으면 0 / "".
    since 기반 목록은 next 링크의 since 값이 next_page와 next_since에 함께 들어간다.
    """

    url: str
    status_code: int
    data: T | None = None
    headers: dict[str, str] = field(default_factory=dict)
    rate: Rate | None = None
    next_page: int = 0
    prev_page: int = 0
    first_page: int = 0
    last_page: int = 0
    next_page_token: str = ""
    next_since: int = 0
    cursor: str = ""
    before: str = ""
    after: str = ""
    http_response: httpx.Response | None = field(default=None, repr=False)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> ApiResponse[Any]:
        result: ApiResponse[Any] = cls(
            url=str(response.request.url),
            status_code=response.status_code,
            headers=dict(response.headers),
            rate=parse_rate(response.headers),
            http_response=response,
        )
        result._populate_page_values(response.headers.get("Link"))
        return result

    def _populate_page_values(self, link_header: str | None) -> None:
        """Link 헤더의 next/prev/first/last 값을 채운다."""
        if not link_header:
            return

        for part in link_header.split(","):
            match = _LINK_RE.search(part)
            if not match:
                continue
            target, rel = match.groups()
            query = parse_qs(urlsplit(target).query)

            page = _first(query, "page")
            since = _first(query, "since")
            before = _first(query, "before")
            after = _first(query, "after")
            cursor = _first(query, "cursor")
            if not (page or before or after or cursor or since):
                continue
            from_since = bool(since) and not page
            if from_since:
                page = since

            if rel == "next":
                if from_since and since.isdigit():
                    self.next_since = int(since)
                if page.isdigit():
                    self.next_page = int(page)
                else:
                    self.next_page_token = page
                self.cursor = cursor
                self.after = after
            elif rel == "prev":
                self.prev_page = int(page) if page.isdigit() else 0
                self.before = before
            elif rel == "first":
                self.first_page = int(page) if page.isdigit() else 0
            elif rel == "last":
                self.last_page = int(page) if page.isdigit() else 0


def _first(query: dict[str, list[str]], key: str) -> str:
    values = query.get(key)
    return values[0] if values else ""


def parse_rate(headers: httpx.Headers | dict[str, str]) -> Rate | None:
    """X-RateLimit-* 헤더를 Rate로 변환한다. 헤더가 없으면 None."""
    lowered = {k.lower(): v for k, v in headers.items()}
    if "x-ratelimit-limit" not in lowered and "x-ratelimit-remaining" not in lowered:
        return None

    def _int(key: str) -> int:
        try:
            return int(lowered.get(key, "0"))
        except ValueError:
            return 0

    reset_epoch = _int("x-ratelimit-reset")
    return Rate(
        limit=_int("x-ratelimit-limit"),
        remaining=_int("x-ratelimit-remaining"),
        used=_int("x-ratelimit-used"),
        reset=datetime.fromtimestamp(reset_epoch, tz=UTC) if reset_epoch else None,
        resource=lowered.get("x-ratelimit-resource"),
    )
