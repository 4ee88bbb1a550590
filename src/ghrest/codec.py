"""JSON 코덱.

ApiModel은 호출자가 명시적으로 설정한 필드만 인코딩한다 (exclude_unset).
- 설정하지 않은 필드: 생략
- None으로 설정한 필드: JSON null (값 지우기)
- 0 / False / "" / []: 그대로 출력
"""

from __future__ import annotations

import functools
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, TypeAdapter, model_serializer, model_validator

_EXTRA_FIELD = "additional_fields"


class ApiModel(BaseModel):
    """모든 API 리소스 모델의 부모."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Any:
        """와이어 이름(alias)으로 설정된 필드만 덤프한다."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_payload())


class PassthroughModel(ApiModel):
    """모르는 키를 additional_fields에 보관하는 모델.

    디코딩 시 선언되지 않은 키는 additional_fields로 모이고(없으면 None 유지),
    인코딩 시 다시 최상위로 펼쳐진다. 값이 null인 미지 키도 그대로 보관한다.
    """

    additional_fields: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _collect_additional_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = set()
        for name, info in cls.model_fields.items():
            known.add(name)
            if info.alias:
                known.add(info.alias)
        extra = {k: v for k, v in data.items() if k not in known}
        kept = {k: v for k, v in data.items() if k in known}
        if not extra:
            return kept
        merged = dict(kept.get(_EXTRA_FIELD) or {})
        merged.update(extra)
        kept[_EXTRA_FIELD] = merged
        return kept

    @model_serializer(mode="wrap")
    def _flatten_additional_fields(self, handler: Any) -> Any:
        data = handler(self)
        extra = data.pop(_EXTRA_FIELD, None)
        if extra:
            for key, value in extra.items():
                data.setdefault(key, value)
        return data


# ── 인코딩/디코딩 ──────────────────────────────────────


def to_jsonable(value: Any) -> Any:
    """모델/리스트/딕셔너리를 JSON 직렬화 가능한 값으로 바꾼다."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


def encode_body(body: Any) -> bytes:
    """요청 본문을 JSON 바이트로 인코딩한다."""
    return orjson.dumps(to_jsonable(body))


@functools.cache
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def decode_body(content: bytes | str, result_type: Any) -> Any:
    """JSON 본문을 result_type으로 검증한다.

    Raises:
        orjson.JSONDecodeError: JSON 문법 오류
        pydantic.ValidationError: 타입 불일치, 모르는 규칙 타입 등
    """
    data = orjson.loads(content)
    return _adapter(result_type).validate_python(data)
