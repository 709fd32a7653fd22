"""Cliente HTTP base para chamadas a APIs externas."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = 3
    initial_delay_seconds: float = 1.0
    backoff_multiplier: float = 2.0
    backoff_max_seconds: float = 30.0


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP simples com retry e backoff exponencial.

    Retry apenas em 429, 5xx, timeout e erro de conexão.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        for attempt in range(self._config.max_retries + 1):
            try:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    response = await client.get(
                        url,
                        params=params,
                        headers=headers,
                        timeout=self._config.timeout_seconds,
                    )
                if response.status_code == 429 or response.status_code >= 500:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                if response.status_code >= 400:
                    raise HttpError("http_client_error", status_code=response.status_code)
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= self._config.max_retries:
                    raise
                await self._backoff_sleep(attempt)
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if attempt >= self._config.max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                await self._backoff_sleep(attempt)
        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def _backoff_sleep(self, attempt: int) -> None:
        backoff = min(
            self._config.initial_delay_seconds * (self._config.backoff_multiplier**attempt),
            self._config.backoff_max_seconds,
        )
        logger.debug("http_backoff", extra={"attempt": attempt + 1, "backoff_seconds": backoff})
        await asyncio.sleep(backoff)
