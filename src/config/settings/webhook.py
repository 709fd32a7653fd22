"""Settings do contexto de pagamentos (webhook, polling e log tail).

Cada fonte de eventos é habilitada por configuração:
- listener de webhook: sempre que ENABLE_RESOURCES=true
- poller de pagamentos falhos: POLL_FAILED_PAYMENTS=true
- log tail (legado): WEBHOOK_LOG_PATH definido
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_WEBHOOK_PORT = 3000
DEFAULT_BODY_LIMIT_BYTES = 1024 * 1024  # 1MB


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações das fontes de eventos de pagamento.

    Attributes:
        enable_resources: Liga o contexto de pagamentos (resource + fontes)
        webhook_secret: Secret compartilhado para HMAC (vazio = sem verificação)
        webhook_host: Interface onde o listener faz bind
        webhook_port: Porta do listener
        body_limit_bytes: Tamanho máximo aceito para o corpo do webhook
        log_path: Arquivo de log legado observado pelo log tail
        poll_failed_payments: Liga o polling de pedidos com falha
        poll_interval_minutes: Intervalo entre ciclos do poller
        log_tail_check_seconds: Intervalo de checagem de mudanças no log
    """

    enable_resources: bool = False
    webhook_secret: str = ""
    webhook_host: str = "0.0.0.0"
    webhook_port: int = DEFAULT_WEBHOOK_PORT
    body_limit_bytes: int = DEFAULT_BODY_LIMIT_BYTES
    log_path: str = ""
    poll_failed_payments: bool = False
    poll_interval_minutes: int = 5
    log_tail_check_seconds: float = 1.0

    @property
    def poll_interval_seconds(self) -> float:
        """Intervalo do poller em segundos."""
        return float(self.poll_interval_minutes * 60)

    @property
    def verification_enabled(self) -> bool:
        """True quando há secret configurado para validar assinaturas."""
        return bool(self.webhook_secret)

    @property
    def webhook_url(self) -> str:
        """URL local do endpoint de webhook."""
        return f"http://localhost:{self.webhook_port}/webhooks"

    def validate(self) -> list[str]:
        """Valida configurações das fontes de eventos.

        Secret ausente não é erro: apenas desliga a verificação.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not 0 < self.webhook_port < 65536:
            errors.append("WEBHOOK_PORT deve estar entre 1 e 65535")

        if self.body_limit_bytes <= 0:
            errors.append("WEBHOOK_BODY_LIMIT_BYTES deve ser > 0")

        if self.poll_failed_payments and self.poll_interval_minutes <= 0:
            errors.append("POLL_INTERVAL_MINUTES deve ser > 0")

        if self.log_tail_check_seconds <= 0:
            errors.append("LOG_TAIL_CHECK_SECONDS deve ser > 0")

        return errors


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() == "true"


def _load_from_env() -> WebhookSettings:
    """Carrega WebhookSettings a partir de variáveis de ambiente."""
    return WebhookSettings(
        enable_resources=_env_flag("ENABLE_RESOURCES"),
        webhook_secret=os.getenv("LEMONSQUEEZY_WEBHOOK_SECRET", ""),
        webhook_host=os.getenv("WEBHOOK_HOST", "0.0.0.0"),
        webhook_port=int(os.getenv("WEBHOOK_PORT", str(DEFAULT_WEBHOOK_PORT))),
        body_limit_bytes=int(
            os.getenv("WEBHOOK_BODY_LIMIT_BYTES", str(DEFAULT_BODY_LIMIT_BYTES))
        ),
        log_path=os.getenv("WEBHOOK_LOG_PATH", ""),
        poll_failed_payments=_env_flag("POLL_FAILED_PAYMENTS"),
        poll_interval_minutes=int(os.getenv("POLL_INTERVAL_MINUTES", "5")),
        log_tail_check_seconds=float(os.getenv("LOG_TAIL_CHECK_SECONDS", "1.0")),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
