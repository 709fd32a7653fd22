"""Normalização de notificações Lemon Squeezy em PaymentEvent.

Três caminhos de entrada, um por fonte:
- webhook: documento JSON:API recebido em POST /webhooks
- poll: recurso de pedido retornado pela listagem de pedidos
- log tail: última linha não vazia do arquivo de log legado

O timestamp é sempre atribuído localmente, nunca lido do upstream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.payment_event import PaymentEvent

from ._extraction_helpers import (
    as_mapping,
    extract_log_email,
    extract_log_order_id,
    extract_log_status,
    first_truthy,
    humanize_resource_type,
    optional_str,
    parse_leading_int,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

FAILED_ORDER_STATUSES = frozenset({"refunded", "failed", "cancelled"})

# Substrings que tornam uma linha de log relevante (case-sensitive)
_LOG_KEYWORDS = ("order", "subscription", "payment")


def normalize_webhook(
    payload: Mapping[str, Any],
    event_name: str | None = None,
) -> PaymentEvent:
    """Converte o payload de webhook em PaymentEvent.

    Args:
        payload: Documento com `meta.event_name` e `data.{type,id,attributes}`.
        event_name: Nome do evento do header, usado se `meta` não trouxer.
    """
    meta = as_mapping(payload.get("meta"))
    data = as_mapping(payload.get("data"))
    attributes = as_mapping(data.get("attributes"))

    name = optional_str(meta.get("event_name")) or event_name or "unknown_event"
    resource_id = optional_str(data.get("id"))

    # Sem fall-through: se o candidato escolhido não for numérico, fica None
    order_id = parse_leading_int(
        first_truthy(attributes, "order_id", "order_number") or data.get("id")
    )
    customer_email = optional_str(first_truthy(attributes, "user_email", "email"))
    raw_status = optional_str(first_truthy(attributes, "status", "status_formatted"))
    status = raw_status.lower() if raw_status else None
    amount = optional_str(first_truthy(attributes, "total_formatted", "total"))

    message = f"{name}:"
    resource_type = humanize_resource_type(data.get("type"))
    if resource_type:
        message += f" {resource_type}"
    display_id = resource_id if resource_id is not None else order_id
    if display_id is not None:
        message += f" #{display_id}"
    if status:
        message += f" - {status}"
    if amount:
        message += f" - {amount}"
    if customer_email:
        message += f" ({customer_email})"

    return PaymentEvent(
        type="webhook",
        order_id=order_id,
        customer_email=customer_email,
        status=status,
        amount=amount,
        message=message,
    )


def is_failed_order(order: Mapping[str, Any]) -> bool:
    """True para pedidos com status refunded, failed ou cancelled."""
    status = as_mapping(order.get("attributes")).get("status")
    return isinstance(status, str) and status.lower() in FAILED_ORDER_STATUSES


def normalize_failed_order(order: Mapping[str, Any]) -> PaymentEvent:
    """Converte um recurso de pedido com falha em PaymentEvent."""
    attributes = as_mapping(order.get("attributes"))
    raw_id = order.get("id")
    raw_status = optional_str(attributes.get("status"))
    status = raw_status.lower() if raw_status else None
    amount = optional_str(attributes.get("total_formatted"))

    return PaymentEvent(
        type="failed_payment",
        order_id=parse_leading_int(raw_id),
        customer_email=optional_str(attributes.get("user_email")),
        status=status,
        amount=amount,
        message=(
            f"Failed payment: Order #{raw_id} - {status or 'unknown'} - {amount or 'unknown'}"
        ),
    )


def last_non_blank_line(text: str) -> str | None:
    """Última linha com conteúdo além de espaços, ou None."""
    for line in reversed(text.splitlines()):
        if line.strip():
            return line
    return None


def normalize_log_line(line: str) -> PaymentEvent | None:
    """Extrai heuristicamente um evento de uma linha de log.

    Returns:
        PaymentEvent, ou None se a linha não mencionar pedido/assinatura/pagamento.
    """
    if not any(keyword in line for keyword in _LOG_KEYWORDS):
        return None

    return PaymentEvent(
        type="webhook",
        order_id=extract_log_order_id(line),
        customer_email=extract_log_email(line),
        status=extract_log_status(line),
        message=line,
    )
