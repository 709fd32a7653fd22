"""Agregador de settings do serviço de contexto de pagamentos.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Lemon Squeezy API
from config.settings.lemonsqueezy import (
    LEMONSQUEEZY_API_BASE_URL,
    LemonSqueezySettings,
    get_lemonsqueezy_settings,
)

# Fontes de eventos (webhook, poller, log tail)
from config.settings.webhook import (
    DEFAULT_BODY_LIMIT_BYTES,
    DEFAULT_WEBHOOK_PORT,
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    # Constants
    "DEFAULT_BODY_LIMIT_BYTES",
    "DEFAULT_SERVICE_NAME",
    "DEFAULT_WEBHOOK_PORT",
    "LEMONSQUEEZY_API_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # Lemon Squeezy
    "LemonSqueezySettings",
    # Webhook
    "WebhookSettings",
    "get_base_settings",
    "get_lemonsqueezy_settings",
    "get_webhook_settings",
]
