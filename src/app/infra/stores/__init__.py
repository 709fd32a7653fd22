"""Stores — estado em memória do processo.

Módulos disponíveis:
    - context_buffer: janela dos eventos de pagamento mais recentes
"""

from __future__ import annotations

from app.infra.stores.context_buffer import PaymentContextBuffer

__all__ = ["PaymentContextBuffer"]
