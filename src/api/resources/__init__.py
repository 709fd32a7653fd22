"""Resources MCP — superfície de leitura para o cliente do protocolo."""

from api.resources.payment_context import (
    PAYMENT_CONTEXT_URI,
    create_mcp_server,
    render_payment_context,
)

__all__ = [
    "PAYMENT_CONTEXT_URI",
    "create_mcp_server",
    "render_payment_context",
]
