"""Entrypoint do serviço de contexto de pagamentos Lemon Squeezy.

Compõe o processo:
- buffer de contexto (único, em memória)
- fontes de eventos selecionadas por configuração (webhook, poller, log tail)
- servidor MCP em stdio com o resource `lemonsqueezy://payment-context`

Uso:
    lemonsqueezy-context
    python -m app.app
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.resources import create_mcp_server
from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import create_event_sources, create_payment_context_buffer
from config.logging import get_logger
from config.settings import get_webhook_settings
from utils.errors import ListenerStartupError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from app.infra.stores import PaymentContextBuffer
    from app.protocols import EventSourceProtocol
    from config.settings import WebhookSettings

logger = get_logger(__name__)


def create_app(buffer: PaymentContextBuffer, settings: WebhookSettings) -> FastAPI:
    """Cria a aplicação HTTP do listener de webhook.

    O buffer e as settings ficam em `app.state` para as rotas.
    """
    fastapi_app = FastAPI(
        title="lemonsqueezy-webhook-listener",
        description="Recebimento de webhooks Lemon Squeezy para o contexto de pagamentos",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    fastapi_app.state.payment_context = buffer
    fastapi_app.state.webhook_settings = settings
    fastapi_app.include_router(create_api_router())
    return fastapi_app


async def start_sources(sources: Sequence[EventSourceProtocol]) -> list[EventSourceProtocol]:
    """Inicia as fontes em ordem; em falha para as já iniciadas e propaga."""
    started: list[EventSourceProtocol] = []
    for source in sources:
        try:
            await source.start()
        except Exception:
            await stop_sources(started)
            raise
        started.append(source)
    return started


async def stop_sources(sources: Sequence[EventSourceProtocol]) -> None:
    """Para as fontes em ordem inversa; falha de uma não impede as demais."""
    for source in reversed(sources):
        try:
            await source.stop()
        except Exception as exc:
            logger.warning(
                "event_source_stop_failed",
                extra={"component": source.name, "error_type": type(exc).__name__},
            )


async def run(
    settings: WebhookSettings | None = None,
    serve: Callable[[PaymentContextBuffer, WebhookSettings], Awaitable[None]] | None = None,
) -> None:
    """Executa o serviço até o transporte do protocolo encerrar.

    Args:
        settings: WebhookSettings; se None, carrega do ambiente.
        serve: Corrotina que atende o protocolo (padrão: MCP em stdio).

    Raises:
        ListenerStartupError: Se o listener de webhook não conseguir bind.
    """
    webhook_settings = settings or get_webhook_settings()
    buffer = create_payment_context_buffer()
    sources = create_event_sources(
        buffer,
        webhook_settings,
        http_app=create_app(buffer, webhook_settings),
    )
    started = await start_sources(sources)
    logger.info(
        "service_started",
        extra={
            "sources": [source.name for source in started],
            "webhook_url": webhook_settings.webhook_url if started else None,
        },
    )
    try:
        await (serve or _serve_mcp_stdio)(buffer, webhook_settings)
    finally:
        await stop_sources(started)
        logger.info("service_stopped")


async def _serve_mcp_stdio(buffer: PaymentContextBuffer, settings: WebhookSettings) -> None:
    mcp = create_mcp_server(buffer, enable_resources=settings.enable_resources)
    await mcp.run_stdio_async()


def main() -> None:
    """Entrypoint do console script."""
    initialize_app()
    validate_runtime_settings()
    try:
        asyncio.run(run())
    except ListenerStartupError as exc:
        logger.critical(
            "webhook_listener_start_failed",
            extra={"host": exc.host, "port": exc.port, "reason": exc.reason},
        )
        sys.exit(str(exc))
    except KeyboardInterrupt:
        logger.info("service_interrupted")


if __name__ == "__main__":
    main()
