"""Protocolos e contratos do core da aplicação."""

from .event_source import EventSourceProtocol
from .orders_client import OrdersClientProtocol

__all__ = [
    "EventSourceProtocol",
    "OrdersClientProtocol",
]
