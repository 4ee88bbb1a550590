"""목록 API 페이지 순회 헬퍼.

fetch(opts)는 페이지 하나를 가져오는 함수다. opts는 첫 호출에서 None, 이후에는
다음 페이지 위치(page, since 또는 after)가 채워진 옵션이다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from ghrest.query import ListCursorOptions, ListOptions, ListSinceOptions, QueryOptions
from ghrest.response import ApiResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetch = Callable[[QueryOptions | None], ApiResponse[list[T]]]


def scan(fetch: Fetch[T], opts: QueryOptions | None = None) -> Iterator[T]:
    """모든 페이지의 항목을 순서대로 yield한다.

    응답의 다음 위치(next_page, next_since 또는 after)를 따라가며 없으면 끝난다.
    """
    pages = 0
    while True:
        result = fetch(opts)
        pages += 1
        yield from result.data or []

        next_opts = _next_options(opts, result)
        if next_opts is None:
            logger.debug("Pagination finished after %d pages", pages)
            return
        opts = next_opts


def scan_and_collect(fetch: Fetch[T], opts: QueryOptions | None = None) -> list[T]:
    """scan 결과를 리스트로 모은다."""
    return list(scan(fetch, opts))


def _next_options(opts: QueryOptions | None, result: ApiResponse[Any]) -> QueryOptions | None:
    if result.next_page:
        update: dict[str, Any] = {"page": result.next_page}
    elif result.next_page_token:
        update = {"page": result.next_page_token}
    elif result.after:
        update = {"after": result.after}
    else:
        return None

    if opts is None:
        if result.next_since:
            return ListSinceOptions(since=result.next_since)
        return ListOptions(**update) if result.next_page else ListCursorOptions(**update)

    fields = type(opts).model_fields
    # since 기반 목록 (GET /users, /organizations)
    if "page" in update and "page" not in fields and "since" in fields:
        update = {"since": update["page"]}
    if not all(key in type(opts).model_fields for key in update):
        return None
    return opts.model_copy(update=update)
