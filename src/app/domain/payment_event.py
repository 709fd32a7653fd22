"""Modelos de domínio do contexto de pagamentos.

PaymentEvent é o registro canônico de uma ocorrência de pagamento observada,
independente da fonte (webhook, polling ou log tail).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

MAX_CONTEXT_EVENTS = 10

PaymentEventType = Literal["webhook", "failed_payment"]
IngestOutcome = Literal["recorded", "skipped", "ignored"]


def utc_now_iso() -> str:
    """Instante atual em ISO-8601 (UTC)."""
    return datetime.now(UTC).isoformat()


class PaymentEvent(BaseModel):
    """Evento de pagamento normalizado (imutável após criado)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    timestamp: str = Field(
        default_factory=utc_now_iso,
        description="Instante em que o evento foi registrado localmente.",
    )
    type: PaymentEventType = Field(..., description="Origem lógica do evento.")
    order_id: int | None = Field(default=None, alias="orderId")
    customer_email: str | None = Field(default=None, alias="customerEmail")
    status: str | None = Field(default=None, description="Status em minúsculas.")
    amount: str | None = Field(
        default=None,
        description="Valor formatado para exibição (ex: '$10.00'), não centavos.",
    )
    message: str = Field(..., description="Resumo legível, sempre presente.")

    def to_dict(self) -> dict[str, Any]:
        """Forma serializada (camelCase, sem campos ausentes)."""
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Resultado de um passo de uma fonte de eventos.

    - recorded: evento(s) registrados no buffer (pode ser zero no poller)
    - skipped: nada a registrar (linha irrelevante, sem pedidos)
    - ignored: falha descartada de propósito (leitura, transporte)
    """

    outcome: IngestOutcome
    reason: str | None = None
    events: tuple[PaymentEvent, ...] = ()

    @property
    def recorded_count(self) -> int:
        return len(self.events)

    @classmethod
    def recorded(cls, *events: PaymentEvent) -> IngestResult:
        return cls(outcome="recorded", events=tuple(events))

    @classmethod
    def skipped(cls, reason: str) -> IngestResult:
        return cls(outcome="skipped", reason=reason)

    @classmethod
    def ignored(cls, reason: str) -> IngestResult:
        return cls(outcome="ignored", reason=reason)


__all__ = [
    "MAX_CONTEXT_EVENTS",
    "IngestOutcome",
    "IngestResult",
    "PaymentEvent",
    "PaymentEventType",
    "utc_now_iso",
]
