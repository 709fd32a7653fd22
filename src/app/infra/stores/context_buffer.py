"""Buffer em memória dos eventos de pagamento mais recentes.

ATENÇÃO: volátil por definição. Criado vazio no start, nunca persistido,
perdido no restart.

Concorrência: webhook, poller e log tail rodam no mesmo event loop.
Nenhum método aqui contém ponto de suspensão (await), então cada chamada
é atômica em relação às outras fontes. `push_if_order_absent` agrupa
check + push numa única chamada para manter o dedupe do poller.
Em runtime multi-thread seria necessário um lock em volta desses métodos.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.payment_event import MAX_CONTEXT_EVENTS

if TYPE_CHECKING:
    from app.domain.payment_event import PaymentEvent


class PaymentContextBuffer:
    """Janela limitada de eventos, mais recente primeiro (índice 0)."""

    def __init__(self, max_events: int = MAX_CONTEXT_EVENTS) -> None:
        if max_events <= 0:
            raise ValueError("max_events deve ser > 0")
        self._max_events = max_events
        self._events: list[PaymentEvent] = []

    @property
    def max_events(self) -> int:
        return self._max_events

    def push(self, event: PaymentEvent) -> None:
        """Insere na frente e descarta o que passar da janela."""
        self._events.insert(0, event)
        del self._events[self._max_events:]

    def push_if_order_absent(self, event: PaymentEvent) -> bool:
        """Insere apenas se nenhum evento da janela tiver o mesmo order_id.

        Returns:
            True se inseriu; False se já havia evento para o pedido.
        """
        if event.order_id is not None and self.find_by_order_id(event.order_id) is not None:
            return False
        self.push(event)
        return True

    def find_by_order_id(self, order_id: int) -> PaymentEvent | None:
        """Busca linear; retorna o primeiro (mais recente) ou None."""
        for event in self._events:
            if event.order_id == order_id:
                return event
        return None

    def snapshot(self) -> list[PaymentEvent]:
        """Cópia da sequência atual; mutá-la não afeta o buffer."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
