"""Cliente HTTP da API REST Lemon Squeezy (JSON:API).

Único ponto de IO com a API upstream. Apenas listagem de pedidos é usada
(fonte do poller de pagamentos falhos); demais endpoints ficam fora.

- Retry com backoff exponencial em 429, 5xx e timeout (via HttpClient)
- Logging estruturado sem token nem e-mail de cliente
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    import httpx

    from config.settings import LemonSqueezySettings

logger: logging.Logger = logging.getLogger(__name__)

JSON_API_MEDIA_TYPE = "application/vnd.api+json"


class LemonSqueezyHttpClient(HttpClient):
    """Cliente para o recurso `/orders` da API Lemon Squeezy."""

    def __init__(
        self,
        api_key: str,
        orders_endpoint: str,
        store_id: str = "",
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ValueError(
                "api_key é obrigatório. "
                "Verifique se LEMONSQUEEZY_API_KEY está configurado."
            )
        super().__init__(config, transport=transport)
        self._api_key = api_key
        self._orders_endpoint = orders_endpoint
        self._store_id = store_id

    def _build_headers(self) -> dict[str, str]:
        return {
            "Accept": JSON_API_MEDIA_TYPE,
            "Content-Type": JSON_API_MEDIA_TYPE,
            "Authorization": f"Bearer {self._api_key}",
        }

    async def list_orders(
        self,
        page_number: int = 1,
        page_size: int = 5,
    ) -> list[dict[str, Any]]:
        """Lista pedidos recentes (uma página).

        Returns:
            Recursos de pedido (`data` do documento JSON:API).

        Raises:
            HttpError: Falha de transporte, status de erro ou corpo inválido.
        """
        params: dict[str, Any] = {
            "page[number]": page_number,
            "page[size]": page_size,
        }
        if self._store_id:
            params["filter[store_id]"] = self._store_id

        response = await self.get(
            self._orders_endpoint,
            params=params,
            headers=self._build_headers(),
        )
        return self._parse_orders(response)

    def _parse_orders(self, response: httpx.Response) -> list[dict[str, Any]]:
        try:
            document = response.json()
        except json.JSONDecodeError as exc:
            logger.error("lemonsqueezy_invalid_json", extra={"status_code": response.status_code})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc

        data = document.get("data") if isinstance(document, dict) else None
        if not isinstance(data, list):
            raise HttpError("Documento JSON:API sem lista em data", status_code=response.status_code)

        orders = [item for item in data if isinstance(item, dict)]
        logger.debug(
            "lemonsqueezy_orders_listed",
            extra={"status_code": response.status_code, "count": len(orders)},
        )
        return orders


def create_lemonsqueezy_http_client(
    settings: LemonSqueezySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LemonSqueezyHttpClient:
    """Factory para criar o cliente com config de retry do ambiente.

    Args:
        settings: LemonSqueezySettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx alternativo (testes).
    """
    from config.settings import get_lemonsqueezy_settings

    lemonsqueezy = settings or get_lemonsqueezy_settings()
    config = HttpClientConfig(
        timeout_seconds=lemonsqueezy.request_timeout_seconds,
        max_retries=lemonsqueezy.max_retries,
        initial_delay_seconds=lemonsqueezy.initial_delay_ms / 1000,
        backoff_multiplier=lemonsqueezy.backoff_multiplier,
        backoff_max_seconds=lemonsqueezy.max_delay_ms / 1000,
    )
    return LemonSqueezyHttpClient(
        api_key=lemonsqueezy.api_key,
        orders_endpoint=lemonsqueezy.orders_endpoint,
        store_id=lemonsqueezy.store_id,
        config=config,
        transport=transport,
    )
