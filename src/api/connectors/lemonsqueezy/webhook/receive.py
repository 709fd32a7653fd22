"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ..signature import SignatureResult, verify_request_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


class PayloadTooLargeError(WebhookRequestError):
    """Corpo do webhook acima do limite configurado."""

    def __init__(self, limit_bytes: int) -> None:
        super().__init__("payload_too_large")
        self.limit_bytes = limit_bytes


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> tuple[dict[str, object], SignatureResult]:
    """Valida assinatura e parseia JSON do webhook.

    A assinatura é verificada sobre os bytes recebidos, antes de qualquer
    parse: JSON re-serializado não é garantidamente idêntico aos bytes recebidos.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: Signing secret do webhook (vazio = sem verificação)

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature_result = verify_request_signature(raw_body, headers, secret)
    if not signature_result.valid:
        reason = signature_result.error or "invalid_signature"
        raise InvalidSignatureError(reason)

    try:
        payload = json.loads(raw_body)
    except (ValueError, RecursionError) as exc:
        # ValueError cobre JSONDecodeError, UTF-8 inválido e inteiros gigantes
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result
