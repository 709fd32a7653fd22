"""Fontes de eventos de pagamento (implementações de EventSourceProtocol).

- webhook_listener: POST /webhooks (autoritativa)
- failed_payment_poller: reconciliação por polling (autoritativa)
- log_tail_watcher: última linha do log legado (deprecated)
"""

from app.infra.sources.failed_payment_poller import FailedPaymentPoller
from app.infra.sources.log_tail_watcher import LogTailWatcher
from app.infra.sources.webhook_listener import WebhookListener

__all__ = [
    "FailedPaymentPoller",
    "LogTailWatcher",
    "WebhookListener",
]
