"""Validação de assinatura HMAC-SHA256 dos webhooks Lemon Squeezy.

O header `x-signature` carrega o HMAC-SHA256 (hex) do corpo bruto,
calculado com o signing secret do webhook.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-signature"
_DIGEST_SIZE = hashlib.sha256().digest_size


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação.

    skipped=True indica que não há secret configurado (modo sem verificação).
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def verify_webhook_signature(
    raw_body: bytes,
    signature: str | None,
    secret: str | None,
) -> bool:
    """Compara o HMAC do corpo com a assinatura recebida em tempo constante.

    Nunca levanta: secret vazio, assinatura ausente, hex inválido ou
    tamanho diferente do digest resultam em False.
    """
    if not secret or not signature:
        return False

    try:
        received = bytes.fromhex(signature.strip())
    except ValueError:
        return False

    # compare_digest exige entradas de mesmo tamanho
    if len(received) != _DIGEST_SIZE:
        return False

    expected = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return hmac.compare_digest(received, expected)


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def verify_request_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida a assinatura de um request de webhook.

    Sem secret configurado a verificação é pulada e o request é aceito.
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    signature = _get_header(headers, SIGNATURE_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not verify_webhook_signature(raw_body, signature, secret):
        return SignatureResult(valid=False, error="invalid_signature")

    return SignatureResult(valid=True)
