"""Settings da API REST do Lemon Squeezy.

Usadas pelo cliente HTTP do poller de pagamentos falhos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

LEMONSQUEEZY_API_BASE_URL: str = "https://api.lemonsqueezy.com/v1"

# Ordem de precedência: chave de produção antes da chave de teste
_API_KEY_ENV_VARS = (
    "LEMONSQUEEZY_API_KEY",
    "LEMON_SQUEEZY_API_KEY",
    "LEMONSQUEEZY_TEST_API_KEY",
    "LEMON_SQUEEZY_TEST_API_KEY",
)


@dataclass(frozen=True)
class LemonSqueezySettings:
    """Configurações da API Lemon Squeezy.

    Attributes:
        api_key: Bearer token da API
        api_base_url: URL base da API (JSON:API)
        store_id: Filtra pedidos por loja (opcional)
        request_timeout_seconds: Timeout por requisição
        max_retries: Tentativas extras em erro transitório (429/5xx/timeout)
        initial_delay_ms: Atraso do primeiro retry
        max_delay_ms: Teto do atraso entre retries
        backoff_multiplier: Multiplicador do backoff exponencial
    """

    api_key: str = ""
    api_base_url: str = LEMONSQUEEZY_API_BASE_URL
    store_id: str = ""
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    backoff_multiplier: float = 2.0

    @property
    def orders_endpoint(self) -> str:
        """URL do recurso de pedidos."""
        return f"{self.api_base_url.rstrip('/')}/orders"

    def validate(self) -> list[str]:
        """Valida configurações mínimas da API.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("LEMONSQUEEZY_API_KEY ou LEMONSQUEEZY_TEST_API_KEY não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("LEMONSQUEEZY_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("RETRY_MAX_ATTEMPTS deve ser >= 0")

        if self.backoff_multiplier < 1:
            errors.append("RETRY_BACKOFF_MULTIPLIER deve ser >= 1")

        return errors


def _resolve_api_key() -> str:
    for name in _API_KEY_ENV_VARS:
        value = os.getenv(name, "")
        if value:
            return value
    return ""


def _load_from_env() -> LemonSqueezySettings:
    """Carrega LemonSqueezySettings a partir de variáveis de ambiente."""
    return LemonSqueezySettings(
        api_key=_resolve_api_key(),
        api_base_url=os.getenv("LEMONSQUEEZY_API_BASE_URL", LEMONSQUEEZY_API_BASE_URL),
        store_id=os.getenv("LEMON_SQUEEZY_STORE_ID", ""),
        request_timeout_seconds=float(
            os.getenv("LEMONSQUEEZY_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("RETRY_MAX_ATTEMPTS", "3")),
        initial_delay_ms=int(os.getenv("RETRY_INITIAL_DELAY_MS", "1000")),
        max_delay_ms=int(os.getenv("RETRY_MAX_DELAY_MS", "30000")),
        backoff_multiplier=float(os.getenv("RETRY_BACKOFF_MULTIPLIER", "2")),
    )


@lru_cache(maxsize=1)
def get_lemonsqueezy_settings() -> LemonSqueezySettings:
    """Retorna instância cacheada de LemonSqueezySettings."""
    return _load_from_env()
