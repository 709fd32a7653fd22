import hashlib
import hmac
import json

import pytest

from api.connectors.lemonsqueezy.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)


def _sign(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def test_parse_webhook_request_ok() -> None:
    secret = "secret"
    body = json.dumps({"meta": {"event_name": "order_created"}}).encode("utf-8")
    headers = {"x-signature": _sign(body, secret)}

    payload, result = parse_webhook_request(body, headers, secret)

    assert payload == {"meta": {"event_name": "order_created"}}
    assert result.valid is True


def test_parse_webhook_request_invalid_signature() -> None:
    body = json.dumps({"data": {}}).encode("utf-8")
    headers = {"x-signature": "deadbeef"}

    with pytest.raises(InvalidSignatureError, match="signature"):
        parse_webhook_request(body, headers, "secret")


def test_signature_is_checked_before_json() -> None:
    """Corpo inválido com assinatura inválida é erro de assinatura."""
    with pytest.raises(InvalidSignatureError):
        parse_webhook_request(b"{invalid}", {"x-signature": "00"}, "secret")


def test_parse_webhook_request_invalid_json() -> None:
    secret = "secret"
    body = b"{invalid}"
    headers = {"x-signature": _sign(body, secret)}

    with pytest.raises(InvalidJsonError, match="invalid_json"):
        parse_webhook_request(body, headers, secret)


@pytest.mark.parametrize("body", [b"[]", b"42", b'"text"', b"null"])
def test_parse_webhook_request_non_object(body: bytes) -> None:
    with pytest.raises(InvalidJsonError, match="payload_not_object"):
        parse_webhook_request(body, {}, None)


def test_parse_webhook_request_empty_body_is_invalid() -> None:
    with pytest.raises(InvalidJsonError):
        parse_webhook_request(b"", {}, None)


def test_parse_webhook_request_without_secret_ignores_header() -> None:
    payload, result = parse_webhook_request(b"{}", {"x-signature": "whatever"}, None)

    assert payload == {}
    assert result.skipped is True


@pytest.mark.parametrize(
    "body",
    [
        b'{"data": {"id": ' + b"9" * 5000 + b"}}",
        b"[" * 200_000 + b"]" * 200_000,
        b'{"data": "\xff\xfe"}',
    ],
    ids=["integer_over_digit_limit", "deep_nesting", "invalid_utf8"],
)
def test_parse_webhook_request_hostile_json_is_invalid(body: bytes) -> None:
    with pytest.raises(InvalidJsonError, match="invalid_json"):
        parse_webhook_request(body, {}, None)
