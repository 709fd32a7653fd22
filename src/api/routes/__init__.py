"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhooks, health)
- Validação inicial de request (tamanho, assinatura, JSON)
- Delegação para connectors/normalizers
- Respostas HTTP apropriadas

Estrutura:
- routes/lemonsqueezy/: POST /webhooks
- routes/health/: GET /health

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
