"""Leitura do contexto de pagamentos (snapshot do buffer).

Superfície somente leitura consumida pelo resource do servidor MCP.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.infra.stores import PaymentContextBuffer

RECENT_ACTIVITY_LIMIT = 5
_FAILED_STATUSES = frozenset({"failed", "refunded"})


def build_payment_context_resource(
    buffer: PaymentContextBuffer,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Monta o documento do resource a partir de um único snapshot.

    Returns:
        {lastUpdated, totalEvents, events, summary: {failedPayments, recentActivity}}
    """
    events = buffer.snapshot()
    last_updated = (now or datetime.now(UTC)).isoformat()

    return {
        "lastUpdated": last_updated,
        "totalEvents": len(events),
        "events": [event.to_dict() for event in events],
        "summary": {
            "failedPayments": sum(1 for event in events if event.status in _FAILED_STATUSES),
            "recentActivity": [event.message for event in events[:RECENT_ACTIVITY_LIMIT]],
        },
    }
