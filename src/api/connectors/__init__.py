"""Connectors por provedor — adapters de borda para APIs externas.

Estrutura:
- lemonsqueezy/: webhooks e API REST do Lemon Squeezy

Cada provedor tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
