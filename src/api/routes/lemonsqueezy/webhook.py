"""Endpoint de webhook do Lemon Squeezy.

Endpoint:
- POST /webhooks: recebimento de eventos (order_created, subscription_*, ...)

Fluxo (nesta ordem):
1. Limite de tamanho do corpo (413 antes de bufferizar tudo em memória)
2. Assinatura HMAC sobre os bytes brutos (401, nada registrado)
3. Parse JSON (400, nada registrado)
4. Normalização → push no buffer de contexto
5. 200 com o nome do evento ecoado

Sem secret configurado a assinatura não é verificada (modo fraco, logado).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.lemonsqueezy.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    PayloadTooLargeError,
    parse_webhook_request,
)
from api.normalizers.lemonsqueezy import normalize_webhook
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from app.infra.stores import PaymentContextBuffer
    from config.settings import WebhookSettings

logger = logging.getLogger(__name__)

router = APIRouter()

EVENT_NAME_HEADER = "x-event-name"


async def read_limited_body(request: Request, limit_bytes: int) -> bytes:
    """Lê o corpo bruto sem ultrapassar o limite.

    Content-Length acima do limite é rejeitado antes da leitura; corpos
    em streaming são cortados assim que o acumulado passa do limite.

    Raises:
        PayloadTooLargeError: Se o corpo exceder limit_bytes.
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit_bytes:
        raise PayloadTooLargeError(limit_bytes)

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit_bytes:
            raise PayloadTooLargeError(limit_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


def _error_response(message: str, status_code: int) -> Response:
    return JSONResponse(content={"error": message}, status_code=status_code)


@router.post("/webhooks", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de eventos do Lemon Squeezy.

    Returns:
        {"received": true, "event": <x-event-name>} ou Response de erro.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings: WebhookSettings = request.app.state.webhook_settings
        buffer: PaymentContextBuffer = request.app.state.payment_context
        event_name = request.headers.get(EVENT_NAME_HEADER, "")

        try:
            raw_body = await read_limited_body(request, settings.body_limit_bytes)
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=request.headers,
                secret=settings.webhook_secret or None,
            )

        except PayloadTooLargeError as exc:
            logger.warning(
                "webhook_payload_too_large",
                extra={"correlation_id": get_correlation_id(), "limit_bytes": exc.limit_bytes},
            )
            return _error_response("Payload too large", 413)

        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"correlation_id": get_correlation_id(), "error": str(exc)},
            )
            return _error_response("Invalid signature", status.HTTP_401_UNAUTHORIZED)

        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"correlation_id": get_correlation_id(), "error": str(exc)},
            )
            return _error_response("Invalid JSON payload", status.HTTP_400_BAD_REQUEST)

        if signature_result.skipped:
            logger.debug(
                "webhook_signature_skipped",
                extra={"correlation_id": get_correlation_id(), "reason": "secret_not_configured"},
            )

        event = normalize_webhook(payload, event_name=event_name or None)
        buffer.push(event)

        logger.info(
            "webhook_received",
            extra={
                "correlation_id": get_correlation_id(),
                "event_name": event_name,
                "order_id": event.order_id,
                "customer_email": event.customer_email,
                "payload_size": len(raw_body),
            },
        )

        return {"received": True, "event": event_name}

    finally:
        reset_correlation_id(token)
