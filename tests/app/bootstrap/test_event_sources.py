"""Testes da seleção de fontes de eventos pela configuração."""

from __future__ import annotations

import pytest

from app.app import create_app
from app.bootstrap import dependencies
from app.bootstrap.dependencies import create_event_sources
from app.infra.sources import FailedPaymentPoller, LogTailWatcher, WebhookListener
from app.infra.stores import PaymentContextBuffer
from config.settings import LemonSqueezySettings, WebhookSettings


class _OrdersClient:
    async def list_orders(self, page_number: int = 1, page_size: int = 5) -> list:
        return []


def _sources(settings: WebhookSettings, orders_client=None) -> list:
    buffer = PaymentContextBuffer()
    return create_event_sources(
        buffer,
        settings,
        http_app=create_app(buffer, settings),
        orders_client=orders_client,
    )


def test_resources_disabled_selects_nothing() -> None:
    settings = WebhookSettings(enable_resources=False, poll_failed_payments=True, log_path="/tmp/x.log")

    assert _sources(settings, _OrdersClient()) == []


def test_listener_is_always_first() -> None:
    sources = _sources(WebhookSettings(enable_resources=True))

    assert len(sources) == 1
    assert isinstance(sources[0], WebhookListener)


def test_all_sources_selected() -> None:
    settings = WebhookSettings(
        enable_resources=True,
        poll_failed_payments=True,
        log_path="/tmp/webhooks.log",
    )

    sources = _sources(settings, _OrdersClient())

    assert [type(source) for source in sources] == [
        WebhookListener,
        FailedPaymentPoller,
        LogTailWatcher,
    ]
    assert [source.name for source in sources] == [
        "webhook_listener",
        "failed_payment_poller",
        "log_tail_watcher",
    ]


def test_poller_without_api_key_is_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "get_lemonsqueezy_settings", lambda: LemonSqueezySettings())

    sources = _sources(WebhookSettings(enable_resources=True, poll_failed_payments=True))

    assert [type(source) for source in sources] == [WebhookListener]


def test_create_orders_client_from_settings() -> None:
    client = dependencies.create_orders_client(LemonSqueezySettings(api_key="key"))

    assert client is not None
    assert dependencies.create_orders_client(LemonSqueezySettings()) is None
