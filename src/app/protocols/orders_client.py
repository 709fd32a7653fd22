"""Protocolo do colaborador upstream consultado pelo poller.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class OrdersClientProtocol(Protocol):
    """Contrato mínimo para listar pedidos recentes (somente leitura)."""

    async def list_orders(
        self,
        page_number: int = 1,
        page_size: int = 5,
    ) -> list[dict[str, Any]]: ...
