"""Formatter JSON dos logs do serviço.

Campos presentes em todo record:
- correlation_id
- service
- timestamp (asctime)
- level
- logger (name)
- message

Nunca registrar payload bruto de webhook nem assinatura.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Returns:
        JsonFormatter configurado.

    Exemplo de output:
        {
            "timestamp": "2026-02-02T10:30:00",
            "level": "INFO",
            "logger": "api.routes.lemonsqueezy.webhook",
            "message": "webhook_received",
            "correlation_id": "abc-123",
            "service": "lemonsqueezy-mcp-server",
            "event_name": "order_created"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
