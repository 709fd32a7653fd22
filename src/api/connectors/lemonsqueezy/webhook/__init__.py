"""Webhook Lemon Squeezy: assinatura e parsing seguro."""

from ..signature import SignatureResult, verify_request_signature, verify_webhook_signature
from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    PayloadTooLargeError,
    WebhookRequestError,
    parse_webhook_request,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "PayloadTooLargeError",
    "SignatureResult",
    "WebhookRequestError",
    "parse_webhook_request",
    "verify_request_signature",
    "verify_webhook_signature",
]
