"""Testes da assinatura HMAC-SHA256 dos webhooks."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from api.connectors.lemonsqueezy.signature import (
    verify_request_signature,
    verify_webhook_signature,
)

SECRET = "whsec_test"
BODY = b'{"meta":{"event_name":"order_created"},"data":{"id":"1"}}'


def _sign(payload: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def test_valid_signature_is_accepted() -> None:
    assert verify_webhook_signature(BODY, _sign(BODY), SECRET) is True


def test_signature_with_uppercase_hex_is_accepted() -> None:
    assert verify_webhook_signature(BODY, _sign(BODY).upper(), SECRET) is True


@pytest.mark.parametrize("index", [0, len(BODY) // 2, len(BODY) - 1])
def test_single_byte_body_mutation_is_rejected(index: int) -> None:
    signature = _sign(BODY)
    mutated = bytearray(BODY)
    mutated[index] ^= 0x01

    assert verify_webhook_signature(bytes(mutated), signature, SECRET) is False


def test_single_char_signature_mutation_is_rejected() -> None:
    signature = _sign(BODY)
    flipped = "0" if signature[0] != "0" else "1"

    assert verify_webhook_signature(BODY, flipped + signature[1:], SECRET) is False


@pytest.mark.parametrize(
    "signature",
    [
        "",
        "abcd",
        "00" * 31,
        "00" * 33,
        "sha256=" + "00" * 32,
        "zz" * 32,
        "abc",
    ],
)
def test_malformed_signatures_return_false_without_raising(signature: str) -> None:
    assert verify_webhook_signature(BODY, signature, SECRET) is False


def test_missing_signature_or_secret_returns_false() -> None:
    assert verify_webhook_signature(BODY, None, SECRET) is False
    assert verify_webhook_signature(BODY, _sign(BODY), "") is False
    assert verify_webhook_signature(BODY, _sign(BODY), None) is False


def test_wrong_secret_is_rejected() -> None:
    assert verify_webhook_signature(BODY, _sign(BODY, "other"), SECRET) is False


class TestVerifyRequestSignature:
    """Validação a partir dos headers do request."""

    def test_without_secret_verification_is_skipped(self) -> None:
        result = verify_request_signature(BODY, {"x-signature": "garbage"}, None)

        assert result.valid is True
        assert result.skipped is True

    def test_missing_header(self) -> None:
        result = verify_request_signature(BODY, {}, SECRET)

        assert result.valid is False
        assert result.error == "missing_signature"

    def test_header_lookup_is_case_insensitive(self) -> None:
        result = verify_request_signature(BODY, {"X-Signature": _sign(BODY)}, SECRET)

        assert result.valid is True
        assert result.skipped is False

    def test_invalid_header(self) -> None:
        result = verify_request_signature(BODY, {"x-signature": "00" * 32}, SECRET)

        assert result.valid is False
        assert result.error == "invalid_signature"
