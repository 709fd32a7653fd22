"""Log tail (fonte legada, deprecated).

Observa um arquivo de log por polling de (mtime, tamanho). A cada mudança
relê o arquivo inteiro, pega a última linha não vazia e tenta extrair um
evento por regex. Best-effort: nenhuma falha de leitura ou parse sai daqui.

Substituído pelo listener de webhook; mantido para instalações antigas.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from api.normalizers.lemonsqueezy import last_non_blank_line, normalize_log_line
from app.domain.payment_event import IngestResult
from config.logging import log_ignored

if TYPE_CHECKING:
    from app.infra.stores import PaymentContextBuffer

logger = logging.getLogger(__name__)

_FileSignature = tuple[int, int]


class LogTailWatcher:
    """Fonte de eventos a partir da última linha de um arquivo de log."""

    name = "log_tail_watcher"

    def __init__(
        self,
        log_path: str | os.PathLike[str],
        buffer: PaymentContextBuffer,
        check_interval_seconds: float = 1.0,
    ) -> None:
        if check_interval_seconds <= 0:
            raise ValueError("check_interval_seconds deve ser > 0")
        self._path = Path(log_path)
        self._buffer = buffer
        self._check_interval_seconds = check_interval_seconds
        self._last_signature: _FileSignature | None = None
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _read_signature(self) -> _FileSignature | None:
        try:
            stat = self._path.stat()
        except OSError:
            return None
        return stat.st_mtime_ns, stat.st_size

    async def process_change(self) -> IngestResult:
        """Relê o arquivo e registra o evento da última linha, se houver."""
        try:
            content = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
            line = last_non_blank_line(content)
            if line is None:
                return IngestResult.skipped("empty_file")
            event = normalize_log_line(line)
        except Exception as exc:
            log_ignored(logger, self.name, "read_failed", type(exc).__name__)
            return IngestResult.ignored(type(exc).__name__)

        if event is None:
            return IngestResult.skipped("irrelevant_line")

        self._buffer.push(event)
        return IngestResult.recorded(event)

    async def check_for_change(self) -> IngestResult | None:
        """Compara a assinatura do arquivo com a última vista.

        Returns:
            Resultado do processamento, ou None se o arquivo não mudou.
        """
        signature = self._read_signature()
        if signature is None or signature == self._last_signature:
            return None
        self._last_signature = signature
        return await self.process_change()

    async def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                await self.check_for_change()
            except Exception as exc:
                log_ignored(logger, self.name, "check_failed", type(exc).__name__)
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self._check_interval_seconds,
                )

    async def start(self) -> None:
        if self._task is not None and not self._task.done():
            return
        logger.warning(
            "log_tail_deprecated",
            extra={
                "component": self.name,
                "log_path": str(self._path),
                "replacement": "webhook_listener",
            },
        )
        # Conteúdo já existente não gera evento; só mudanças posteriores
        self._last_signature = self._read_signature()
        self._stop_event.clear()
        self._task = asyncio.create_task(self.run(), name=self.name)

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
