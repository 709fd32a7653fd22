"""Exceções utilitárias compartilhadas."""

from .exceptions import InfrastructureError, ListenerStartupError

__all__ = [
    "InfrastructureError",
    "ListenerStartupError",
]
