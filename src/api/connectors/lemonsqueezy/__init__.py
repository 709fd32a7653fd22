"""Conector Lemon Squeezy - adapter de borda para webhooks e API REST.

Responsabilidades:
- Webhook (assinatura HMAC, parsing do corpo bruto)
- HTTP client para listagem de pedidos
"""

from .http_client import LemonSqueezyHttpClient, create_lemonsqueezy_http_client
from .signature import SignatureResult, verify_request_signature, verify_webhook_signature

__all__ = [
    "LemonSqueezyHttpClient",
    "SignatureResult",
    "create_lemonsqueezy_http_client",
    "verify_request_signature",
    "verify_webhook_signature",
]
