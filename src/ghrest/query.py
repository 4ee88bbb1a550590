"""목록 조회용 query string 옵션 인코딩."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict


class QueryOptions(BaseModel):
    """query 파라미터 옵션의 부모.

    필드 이름(또는 alias)이 그대로 파라미터 키가 된다.
    리스트는 기본적으로 콤마로 합치고, repeated_fields에 있는 필드는 키를 반복한다.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    repeated_fields: ClassVar[frozenset[str]] = frozenset()

    def to_query(self) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None or value == "" or value == []:
                continue
            key = info.alias or name
            if isinstance(value, (list, tuple)):
                formatted = [_format_value(v) for v in value]
                if name in self.repeated_fields:
                    pairs.extend((key, v) for v in formatted)
                else:
                    pairs.append((key, ",".join(formatted)))
            else:
                pairs.append((key, _format_value(value)))
        return pairs


class ListOptions(QueryOptions):
    """offset 기반 pagination 옵션."""

    page: int | None = None
    per_page: int | None = None


class ListSinceOptions(QueryOptions):
    """since 기반 pagination 옵션 (GET /users, /organizations)."""

    since: int | None = None
    per_page: int | None = None


class ListCursorOptions(QueryOptions):
    """cursor 기반 pagination 옵션."""

    page: str | None = None
    per_page: int | None = None
    after: str | None = None
    before: str | None = None
    cursor: str | None = None
    first: int | None = None
    last: int | None = None


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def add_options(url: str, opts: QueryOptions | None) -> str:
    """url에 opts를 query string으로 붙인다.

    기존 query와 병합하고 키 기준 알파벳 순으로 정렬한다 (같은 키는 입력 순서 유지).
    """
    if opts is None:
        return url

    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    pairs.extend(opts.to_query())
    if not pairs:
        return url

    pairs.sort(key=lambda kv: kv[0])
    return urlunsplit(parts._replace(query=urlencode(pairs)))
