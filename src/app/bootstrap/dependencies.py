"""Factories de dependências — criação de implementações concretas.

Centraliza a criação do buffer de contexto e a seleção das fontes de
eventos a partir das configurações de ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.sources import FailedPaymentPoller, LogTailWatcher, WebhookListener
from app.infra.stores import PaymentContextBuffer
from config.settings import get_lemonsqueezy_settings

if TYPE_CHECKING:
    from fastapi import FastAPI

    from app.protocols import EventSourceProtocol, OrdersClientProtocol
    from config.settings import LemonSqueezySettings, WebhookSettings

logger = logging.getLogger(__name__)


def create_payment_context_buffer() -> PaymentContextBuffer:
    """Cria o buffer do processo (vazio, nunca persistido)."""
    return PaymentContextBuffer()


def create_orders_client(
    settings: LemonSqueezySettings | None = None,
) -> OrdersClientProtocol | None:
    """Cria o cliente de pedidos, ou None se não houver API key."""
    from api.connectors.lemonsqueezy import create_lemonsqueezy_http_client

    lemonsqueezy = settings or get_lemonsqueezy_settings()
    if not lemonsqueezy.api_key:
        return None
    return create_lemonsqueezy_http_client(lemonsqueezy)


def create_event_sources(
    buffer: PaymentContextBuffer,
    settings: WebhookSettings,
    http_app: FastAPI,
    orders_client: OrdersClientProtocol | None = None,
) -> list[EventSourceProtocol]:
    """Seleciona as fontes de eventos conforme a configuração.

    - ENABLE_RESOURCES != true: nenhuma fonte
    - listener de webhook: sempre (primeiro da lista)
    - poller: POLL_FAILED_PAYMENTS=true e API key disponível
    - log tail (deprecated): WEBHOOK_LOG_PATH definido

    Returns:
        Fontes na ordem em que devem ser iniciadas.
    """
    if not settings.enable_resources:
        logger.info("payment_context_disabled", extra={"component": "bootstrap"})
        return []

    sources: list[EventSourceProtocol] = [
        WebhookListener(http_app, settings.webhook_host, settings.webhook_port),
    ]

    if settings.poll_failed_payments:
        client = orders_client or create_orders_client()
        if client is None:
            logger.warning(
                "failed_payment_poller_disabled",
                extra={"component": "bootstrap", "reason": "missing_api_key"},
            )
        else:
            sources.append(
                FailedPaymentPoller(
                    orders_client=client,
                    buffer=buffer,
                    interval_seconds=settings.poll_interval_seconds,
                )
            )

    if settings.log_path:
        sources.append(
            LogTailWatcher(
                log_path=settings.log_path,
                buffer=buffer,
                check_interval_seconds=settings.log_tail_check_seconds,
            )
        )

    return sources
