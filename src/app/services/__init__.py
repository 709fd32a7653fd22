"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.payment_context import build_payment_context_resource

__all__ = [
    "build_payment_context_resource",
]
