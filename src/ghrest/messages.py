"""webhook 수신 처리: 서명 검증과 이벤트 payload 파싱.

GitHub은 payload 원문(JSON이면 본문 전체, form이면 인코딩된 본문 전체)에 대해
HMAC hex digest를 계산해 X-Hub-Signature-256 (또는 X-Hub-Signature) 헤더로 보낸다.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs

import httpx
import orjson
from pydantic import ValidationError

from ghrest.codec import ApiModel, decode_body
from ghrest.errors import WebhookError
from ghrest.event_types import EVENT_TYPES

logger = logging.getLogger(__name__)

SHA1_SIGNATURE_HEADER = "X-Hub-Signature"
SHA256_SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_TYPE_HEADER = "X-GitHub-Event"
DELIVERY_ID_HEADER = "X-GitHub-Delivery"

_HASH_FUNCS = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}


# ── 서명 검증 ──────────────────────────────────────────


def _message_mac(signature: str) -> tuple[bytes, Any]:
    if not signature:
        raise WebhookError("missing signature")
    prefix, sep, digest = signature.partition("=")
    if not sep:
        raise WebhookError(f"error parsing signature {signature!r}")
    hash_func = _HASH_FUNCS.get(prefix)
    if hash_func is None:
        raise WebhookError(f"unknown hash type prefix: {prefix!r}")
    try:
        return bytes.fromhex(digest), hash_func
    except ValueError as exc:
        raise WebhookError(f"error decoding signature {signature!r}: {exc}") from exc


def validate_signature(signature: str, payload: bytes, secret: bytes | str) -> None:
    """``sha256=<hex>`` 형식 서명을 검증한다. 불일치면 WebhookError."""
    expected_mac, hash_func = _message_mac(signature)
    key = secret.encode() if isinstance(secret, str) else secret
    actual_mac = hmac.new(key, payload, hash_func).digest()
    if not hmac.compare_digest(expected_mac, actual_mac):
        raise WebhookError("payload signature check failed")


def validate_payload_from_body(
    content_type: str, body: bytes, signature: str, secret: bytes | str | None
) -> bytes:
    """본문에서 JSON payload를 꺼내고, 서명이나 secret이 있으면 서명을 검증한다.

    Args:
        content_type: application/json 또는 application/x-www-form-urlencoded
        body: 요청 본문 원문 (서명 계산 대상)
        signature: 서명 헤더 값 (없으면 "")
        secret: webhook secret (없으면 None)

    Returns:
        JSON payload 바이트
    """
    if content_type == "application/json":
        payload = body
    elif content_type == "application/x-www-form-urlencoded":
        try:
            form = parse_qs(body.decode("utf-8"), keep_blank_values=True)
        except UnicodeDecodeError as exc:
            raise WebhookError(f"error decoding form-encoded webhook body: {exc}") from exc
        payload = (form.get("payload") or [""])[0].encode("utf-8")
    else:
        raise WebhookError(f"webhook request has unsupported Content-Type {content_type!r}")

    if secret or signature:
        validate_signature(signature, body, secret or b"")
    return payload


def validate_payload(headers: Mapping[str, str], body: bytes, secret: bytes | str | None) -> bytes:
    """요청 헤더에서 Content-Type과 서명을 찾아 validate_payload_from_body를 호출한다.

    SHA-256 서명이 있으면 우선 사용하고, 없으면 SHA-1 서명을 쓴다.
    """
    headers = httpx.Headers(headers)
    signature = headers.get(SHA256_SIGNATURE_HEADER) or headers.get(SHA1_SIGNATURE_HEADER) or ""
    content_type = headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
    return validate_payload_from_body(content_type, body, signature, secret)


def webhook_type(headers: Mapping[str, str]) -> str:
    return httpx.Headers(headers).get(EVENT_TYPE_HEADER, "")


def delivery_id(headers: Mapping[str, str]) -> str:
    return httpx.Headers(headers).get(DELIVERY_ID_HEADER, "")


# ── 이벤트 파싱 ────────────────────────────────────────


def message_types() -> list[str]:
    """지원하는 X-GitHub-Event 값 (정렬)."""
    return sorted(EVENT_TYPES)


def event_for_type(message_type: str) -> ApiModel | None:
    """이벤트 타입에 해당하는 빈 모델 인스턴스. 모르는 타입이면 None."""
    model = EVENT_TYPES.get(message_type)
    return model() if model is not None else None


def parse_webhook(message_type: str, payload: bytes | str) -> ApiModel:
    """X-GitHub-Event 값에 맞는 이벤트 모델로 payload를 디코딩한다."""
    model = EVENT_TYPES.get(message_type)
    if model is None:
        raise WebhookError(f"unknown X-GitHub-Event in message: {message_type}")
    try:
        return decode_body(payload, model)
    except (orjson.JSONDecodeError, ValidationError) as exc:
        logger.warning(
            "Failed to decode %s webhook payload: %s",
            message_type,
            exc,
            extra={"event_code": "WEBHOOK_DECODE_ERROR"},
        )
        raise WebhookError(f"invalid {message_type} payload: {exc}") from exc
