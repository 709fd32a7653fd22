"""Configuração centralizada de logging.

Logging estruturado JSON com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Saída em stderr (stdout fica reservado ao transporte stdio do MCP)
- Nível configurável por ambiente

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="lemonsqueezy-mcp-server")

    logger = get_logger(__name__)
    logger.info("webhook_received", extra={"order_id": 42})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "lemonsqueezy-mcp-server"

# Loggers de terceiros muito verbosos em DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id
            do contexto atual (ContextVar de app/observability).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e correlation_id.
    """
    return logging.getLogger(name)


def log_ignored(
    logger: logging.Logger,
    component: str,
    reason: str,
    error_type: str | None = None,
) -> None:
    """Registra uma falha descartada de propósito (sem PII).

    Usado pelas fontes best-effort (poller, log tail): a falha não
    interrompe o processo nem gera evento, mas fica observável.

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "failed_payment_poller").
        reason: Motivo curto (ex: "fetch_failed").
        error_type: Nome da exceção, quando houver.
    """
    extra: dict[str, object] = {
        "ignored": True,
        "component": component,
        "reason": reason,
    }
    if error_type:
        extra["error_type"] = error_type

    logger.debug(
        "Ignored failure in %s: %s",
        component,
        reason,
        extra=extra,
    )
