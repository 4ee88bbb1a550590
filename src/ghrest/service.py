"""서비스 공통 부모와 경로 조립 헬퍼."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from ghrest.errors import InvalidArgumentError

if TYPE_CHECKING:
    from ghrest.client import GitHubClient

# 요청 하나에만 적용되는 deadline. None이면 클라이언트 기본값
RequestTimeout = float | httpx.Timeout | None


class Service:
    """리소스 그룹 하나에 대한 API 메서드 묶음."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client


def build_path(template: str, **params: object) -> str:
    """경로 템플릿에 값을 채운다. 빈 값이면 요청 전에 실패한다.

    >>> build_path("repos/{owner}/{repo}", owner="o", repo="r")
    'repos/o/r'
    """
    encoded: dict[str, str] = {}
    for name, value in params.items():
        if value is None or value == "":
            raise InvalidArgumentError(f"경로 파라미터 {name}이(가) 비어 있습니다")
        encoded[name] = quote(str(value), safe="/")
    return template.format(**encoded)
