"""Protocolo das fontes de eventos de pagamento.

Fontes autoritativas: listener de webhook e poller de pagamentos falhos.
Fonte legada (deprecated): log tail. Todas escrevem no mesmo buffer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EventSourceProtocol(Protocol):
    """Contrato mínimo de uma fonte de eventos com ciclo de vida próprio."""

    name: str

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
