"""webhook 서명 검증 / 이벤트 파싱 테스트."""

from __future__ import annotations

import hashlib
import hmac
from urllib.parse import urlencode

import orjson
import pytest

from ghrest.errors import WebhookError
from ghrest.event_types import IssuesEvent, PingEvent, PushEvent, RepositoryRulesetEvent
from ghrest.messages import (
    delivery_id,
    event_for_type,
    message_types,
    parse_webhook,
    validate_payload,
    validate_payload_from_body,
    validate_signature,
    webhook_type,
)

SECRET = b"It's a Secret to Everybody"
BODY = b'{"zen": "Keep it logically awesome.", "hook_id": 42}'


def _sign(body: bytes, algo: str = "sha256", secret: bytes = SECRET) -> str:
    return f"{algo}=" + hmac.new(secret, body, getattr(hashlib, algo)).hexdigest()


class TestValidateSignature:
    def test_known_vector(self) -> None:
        # GitHub 문서의 예시 값
        validate_signature(
            "sha256=757107ea0eb2509fc211221cce984b8a37570b6d7586c22c46f4379c8b043e17",
            b"Hello, World!",
            SECRET,
        )

    @pytest.mark.parametrize("algo", ["sha1", "sha256", "sha512"])
    def test_supported_algorithms(self, algo: str) -> None:
        validate_signature(_sign(BODY, algo), BODY, SECRET)

    def test_str_secret(self) -> None:
        validate_signature(_sign(BODY), BODY, SECRET.decode())

    def test_mismatch(self) -> None:
        with pytest.raises(WebhookError, match="signature check failed"):
            validate_signature(_sign(BODY, secret=b"other"), BODY, SECRET)

    @pytest.mark.parametrize(
        ("signature", "message"),
        [
            ("", "missing signature"),
            ("abcdef", "error parsing signature"),
            ("md5=abcdef", "unknown hash type prefix"),
            ("sha256=zz-not-hex", "error decoding signature"),
        ],
    )
    def test_malformed(self, signature: str, message: str) -> None:
        with pytest.raises(WebhookError, match=message):
            validate_signature(signature, BODY, SECRET)


class TestValidatePayload:
    def test_json_body(self) -> None:
        assert validate_payload_from_body("application/json", BODY, _sign(BODY), SECRET) == BODY

    def test_form_body_signed_over_raw_body(self) -> None:
        form = urlencode({"payload": BODY.decode()}).encode()
        payload = validate_payload_from_body("application/x-www-form-urlencoded", form, _sign(form), SECRET)
        assert orjson.loads(payload) == orjson.loads(BODY)

    def test_unsupported_content_type(self) -> None:
        with pytest.raises(WebhookError, match="unsupported Content-Type"):
            validate_payload_from_body("text/plain", BODY, "", None)

    def test_form_body_invalid_utf8(self) -> None:
        with pytest.raises(WebhookError, match="error decoding form-encoded webhook body"):
            validate_payload_from_body("application/x-www-form-urlencoded", b"payload=\xff\xfe", "", None)

    def test_no_secret_no_signature_skips_check(self) -> None:
        assert validate_payload_from_body("application/json", BODY, "", None) == BODY

    def test_secret_without_signature_fails(self) -> None:
        with pytest.raises(WebhookError, match="missing signature"):
            validate_payload_from_body("application/json", BODY, "", SECRET)

    def test_headers_prefer_sha256(self) -> None:
        headers = {
            "Content-Type": "application/json; charset=utf-8",
            "X-Hub-Signature": "sha1=0000",
            "X-Hub-Signature-256": _sign(BODY),
        }
        assert validate_payload(headers, BODY, SECRET) == BODY

    def test_headers_fall_back_to_sha1(self) -> None:
        headers = {"content-type": "application/json", "x-hub-signature": _sign(BODY, "sha1")}
        assert validate_payload(headers, BODY, SECRET) == BODY

    def test_header_helpers(self) -> None:
        headers = {"X-GitHub-Event": "push", "X-GitHub-Delivery": "72d3162e-cc78-11e3-81ab-4c9367dc0958"}
        assert webhook_type(headers) == "push"
        assert delivery_id(headers) == "72d3162e-cc78-11e3-81ab-4c9367dc0958"
        assert webhook_type({}) == ""


class TestParseWebhook:
    def test_ping(self) -> None:
        event = parse_webhook("ping", BODY)
        assert isinstance(event, PingEvent)
        assert event.hook_id == 42

    def test_push_epoch_dates_and_repository_alias(self) -> None:
        payload = orjson.dumps(
            {
                "ref": "refs/heads/main",
                "before": "0" * 40,
                "after": "a" * 40,
                "commits": [{"id": "a" * 40, "message": "init", "author": {"name": "mona"}}],
                "repository": {"id": 1, "name": "hello", "created_at": 1700000000, "organization": "octo"},
                "pusher": {"name": "mona", "email": "mona@example.com"},
            }
        )
        event = parse_webhook("push", payload)
        assert isinstance(event, PushEvent)
        assert event.repo.created_at.year == 2023
        assert event.repo.organization == "octo"
        assert event.commits[0].author.name == "mona"

    def test_issues(self) -> None:
        payload = orjson.dumps({"action": "opened", "issue": {"number": 3}, "repository": {"full_name": "o/r"}})
        event = parse_webhook("issues", payload)
        assert isinstance(event, IssuesEvent)
        assert event.repo.full_name == "o/r"

    def test_repository_ruleset(self) -> None:
        payload = orjson.dumps(
            {
                "action": "created",
                "repository_ruleset": {"id": 1, "name": "r", "enforcement": "active", "rules": [{"type": "creation"}]},
            }
        )
        event = parse_webhook("repository_ruleset", payload)
        assert isinstance(event, RepositoryRulesetEvent)
        assert event.repository_ruleset.rules.creation is not None

    def test_unknown_type(self) -> None:
        with pytest.raises(WebhookError, match="unknown X-GitHub-Event in message: fork"):
            parse_webhook("fork", b"{}")

    def test_invalid_payload(self) -> None:
        with pytest.raises(WebhookError, match="invalid push payload"):
            parse_webhook("push", b"not json")

    def test_message_types_sorted(self) -> None:
        types = message_types()
        assert types == sorted(types)
        assert "push" in types

    def test_event_for_type(self) -> None:
        assert isinstance(event_for_type("ping"), PingEvent)
        assert event_for_type("nope") is None
