"""Normalizer Lemon Squeezy — webhook, pedido com falha e linha de log."""

from .normalizer import (
    FAILED_ORDER_STATUSES,
    is_failed_order,
    last_non_blank_line,
    normalize_failed_order,
    normalize_log_line,
    normalize_webhook,
)

__all__ = [
    "FAILED_ORDER_STATUSES",
    "is_failed_order",
    "last_non_blank_line",
    "normalize_failed_order",
    "normalize_log_line",
    "normalize_webhook",
]
