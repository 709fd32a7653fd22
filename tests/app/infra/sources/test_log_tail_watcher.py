"""Testes do log tail (fonte legada)."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from app.infra.sources import LogTailWatcher
from app.infra.stores import PaymentContextBuffer


@pytest.mark.asyncio
async def test_process_change_records_last_line(tmp_path: Path) -> None:
    log_file = tmp_path / "webhooks.log"
    log_file.write_text(
        "boot\norder#10 paid a@b.com\norder#11 refunded c@d.com\n\n  \n",
        encoding="utf-8",
    )
    buffer = PaymentContextBuffer()
    watcher = LogTailWatcher(log_file, buffer)

    result = await watcher.process_change()

    assert result.outcome == "recorded"
    event = buffer.snapshot()[0]
    assert event.order_id == 11
    assert event.status == "refunded"
    assert event.customer_email == "c@d.com"
    assert event.message == "order#11 refunded c@d.com"
    assert len(buffer) == 1


@pytest.mark.asyncio
async def test_irrelevant_line_is_skipped(tmp_path: Path) -> None:
    log_file = tmp_path / "webhooks.log"
    log_file.write_text("order#1 paid\nserver listening\n", encoding="utf-8")
    buffer = PaymentContextBuffer()

    result = await LogTailWatcher(log_file, buffer).process_change()

    assert result.outcome == "skipped"
    assert result.reason == "irrelevant_line"
    assert len(buffer) == 0


@pytest.mark.asyncio
async def test_empty_file_is_skipped(tmp_path: Path) -> None:
    log_file = tmp_path / "webhooks.log"
    log_file.write_text("\n\n", encoding="utf-8")

    result = await LogTailWatcher(log_file, PaymentContextBuffer()).process_change()

    assert result.outcome == "skipped"


@pytest.mark.asyncio
async def test_read_failure_is_ignored(tmp_path: Path) -> None:
    buffer = PaymentContextBuffer()
    watcher = LogTailWatcher(tmp_path / "missing.log", buffer)

    result = await watcher.process_change()

    assert result.outcome == "ignored"
    assert result.reason == "FileNotFoundError"
    assert len(buffer) == 0


@pytest.mark.asyncio
async def test_check_for_change_only_processes_new_content(tmp_path: Path) -> None:
    log_file = tmp_path / "webhooks.log"
    log_file.write_text("order#1 paid\n", encoding="utf-8")
    buffer = PaymentContextBuffer()
    watcher = LogTailWatcher(log_file, buffer)

    first = await watcher.check_for_change()
    unchanged = await watcher.check_for_change()
    with log_file.open("a", encoding="utf-8") as handle:
        handle.write("order#2 failed\n")
    second = await watcher.check_for_change()

    assert first is not None and first.outcome == "recorded"
    assert unchanged is None
    assert second is not None and second.outcome == "recorded"
    assert [e.order_id for e in buffer.snapshot()] == [2, 1]


@pytest.mark.asyncio
async def test_watcher_picks_up_appends(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    log_file = tmp_path / "webhooks.log"
    log_file.write_text("order#1 paid\n", encoding="utf-8")
    buffer = PaymentContextBuffer()
    watcher = LogTailWatcher(log_file, buffer, check_interval_seconds=0.01)

    with caplog.at_level(logging.WARNING):
        await watcher.start()
    try:
        await asyncio.sleep(0.05)
        # Conteúdo pré-existente não vira evento
        assert len(buffer) == 0

        with log_file.open("a", encoding="utf-8") as handle:
            handle.write("subscription order#5 expired\n")
        for _ in range(200):
            if len(buffer):
                break
            await asyncio.sleep(0.01)
    finally:
        await watcher.stop()

    assert buffer.snapshot()[0].order_id == 5
    assert any(record.getMessage() == "log_tail_deprecated" for record in caplog.records)


@pytest.mark.asyncio
async def test_watcher_survives_missing_file(tmp_path: Path) -> None:
    watcher = LogTailWatcher(tmp_path / "later.log", PaymentContextBuffer(), check_interval_seconds=0.01)

    await watcher.start()
    await asyncio.sleep(0.05)
    await watcher.stop()
