"""Normalizers por provedor — conversão de payloads externos para modelos internos.

Estrutura:
- lemonsqueezy/: webhooks, pedidos e linhas de log do Lemon Squeezy
"""

from .lemonsqueezy import (
    normalize_failed_order,
    normalize_log_line,
    normalize_webhook,
)

__all__ = [
    "normalize_failed_order",
    "normalize_log_line",
    "normalize_webhook",
]
