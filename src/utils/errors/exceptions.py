"""Exceções compartilhadas de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura."""


class ListenerStartupError(InfrastructureError):
    """Listener de webhook não conseguiu fazer bind na porta configurada.

    Fatal: sem o listener nenhum evento inbound é registrado.
    """

    def __init__(self, host: str, port: int, reason: str) -> None:
        super().__init__(
            f"Não foi possível iniciar o listener de webhook em {host}:{port}: {reason}"
        )
        self.host = host
        self.port = port
        self.reason = reason
