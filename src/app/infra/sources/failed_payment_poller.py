"""Poller de pagamentos falhos (fonte autoritativa de reconciliação).

A cada intervalo busca a primeira página de pedidos recentes e registra no
buffer os pedidos com falha que ainda não estão nele (dedupe por orderId).
Falhas de um ciclo nunca encerram o loop.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from api.normalizers.lemonsqueezy import is_failed_order, normalize_failed_order
from app.domain.payment_event import IngestResult
from config.logging import log_ignored

if TYPE_CHECKING:
    from app.domain.payment_event import PaymentEvent
    from app.infra.stores import PaymentContextBuffer
    from app.protocols import OrdersClientProtocol

logger = logging.getLogger(__name__)

POLL_PAGE_SIZE = 5


class FailedPaymentPoller:
    """Fonte de eventos por polling da listagem de pedidos."""

    name = "failed_payment_poller"

    def __init__(
        self,
        orders_client: OrdersClientProtocol,
        buffer: PaymentContextBuffer,
        interval_seconds: float,
        page_size: int = POLL_PAGE_SIZE,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds deve ser > 0")
        self._orders_client = orders_client
        self._buffer = buffer
        self._interval_seconds = interval_seconds
        self._page_size = page_size
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> IngestResult:
        """Executa um ciclo: busca, filtra, deduplica e registra."""
        try:
            orders = await self._orders_client.list_orders(
                page_number=1,
                page_size=self._page_size,
            )
        except Exception as exc:
            log_ignored(logger, self.name, "fetch_failed", type(exc).__name__)
            return IngestResult.ignored("fetch_failed")

        if not orders:
            return IngestResult.skipped("no_orders")

        added: list[PaymentEvent] = []
        for order in orders:
            if not is_failed_order(order):
                continue
            event = normalize_failed_order(order)
            # check + push sem ponto de suspensão entre eles
            if self._buffer.push_if_order_absent(event):
                added.append(event)

        if added:
            logger.info(
                "failed_payments_recorded",
                extra={
                    "component": self.name,
                    "added": len(added),
                    "order_ids": [event.order_id for event in added],
                },
            )
        return IngestResult.recorded(*added)

    async def run(self) -> None:
        """Loop até stop(): o primeiro ciclo ocorre após um intervalo."""
        while not self._stop_event.is_set():
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self._interval_seconds,
                )
            if self._stop_event.is_set():
                break
            try:
                await self.poll_once()
            except Exception as exc:
                logger.warning(
                    "poll_cycle_failed",
                    extra={"component": self.name, "error_type": type(exc).__name__},
                )

    async def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self.run(), name=self.name)
        logger.info(
            "failed_payment_polling_started",
            extra={"component": self.name, "interval_seconds": self._interval_seconds},
        )

    async def stop(self) -> None:
        self._stop_event.set()
        task, self._task = self._task, None
        if task is None:
            return
        try:
            await asyncio.wait_for(task, timeout=5.0)
        except TimeoutError:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("failed_payment_polling_stopped", extra={"component": self.name})
