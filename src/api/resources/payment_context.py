"""Servidor MCP com o resource de contexto de pagamentos.

Apenas o resource `lemonsqueezy://payment-context` é exposto aqui; tools
ficam fora deste serviço. Transporte stdio (stdout reservado ao protocolo).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from app.services import build_payment_context_resource

if TYPE_CHECKING:
    from app.infra.stores import PaymentContextBuffer

PAYMENT_CONTEXT_URI = "lemonsqueezy://payment-context"
MCP_SERVER_NAME = "lemonsqueezy-mcp-server"


def render_payment_context(buffer: PaymentContextBuffer) -> str:
    """Documento do resource em JSON indentado."""
    return json.dumps(build_payment_context_resource(buffer), indent=2, ensure_ascii=False)


def create_mcp_server(buffer: PaymentContextBuffer, enable_resources: bool = True) -> FastMCP:
    """Cria o servidor MCP ligado ao buffer compartilhado.

    Com enable_resources=False o servidor não anuncia nenhum resource.
    """
    mcp = FastMCP(MCP_SERVER_NAME)
    if not enable_resources:
        return mcp

    @mcp.resource(
        PAYMENT_CONTEXT_URI,
        name="Payment Context",
        description="Eventos de pagamento recentes (webhooks, pagamentos falhos)",
        mime_type="application/json",
    )
    def payment_context() -> str:
        return render_payment_context(buffer)

    return mcp
