"""Listener HTTP de webhooks (fonte autoritativa).

Faz o bind do socket antes de servir: falha de bind vira
ListenerStartupError e aborta o start do processo.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import socket
from typing import TYPE_CHECKING

import uvicorn

from utils.errors import ListenerStartupError

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_STARTUP_POLL_SECONDS = 0.05


class WebhookListener:
    """Serve a app FastAPI (POST /webhooks, GET /health) via uvicorn."""

    name = "webhook_listener"

    def __init__(self, app: FastAPI, host: str, port: int) -> None:
        self._app = app
        self._host = host
        self._port = port
        self._socket: socket.socket | None = None
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def bound_port(self) -> int | None:
        """Porta efetiva (útil com port=0)."""
        if self._socket is None:
            return None
        return self._socket.getsockname()[1]

    def _bind_socket(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self._host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self._host, self._port))
            sock.listen()
            sock.setblocking(False)
        except OSError as exc:
            sock.close()
            raise ListenerStartupError(self._host, self._port, exc.strerror or str(exc)) from exc
        return sock

    async def start(self) -> None:
        """Faz bind e começa a servir.

        Raises:
            ListenerStartupError: Porta ocupada, host inválido ou falha no startup.
        """
        if self._task is not None and not self._task.done():
            return

        self._socket = self._bind_socket()
        config = uvicorn.Config(
            self._app,
            log_config=None,
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(
            self._server.serve(sockets=[self._socket]),
            name=self.name,
        )

        while not self._server.started:
            if self._task.done():
                error = self._task.exception() if not self._task.cancelled() else None
                self._close_socket()
                reason = type(error).__name__ if error else "server_exited"
                raise ListenerStartupError(self._host, self._port, reason)
            await asyncio.sleep(_STARTUP_POLL_SECONDS)

        logger.info(
            "webhook_listener_started",
            extra={
                "component": self.name,
                "host": self._host,
                "port": self.bound_port,
            },
        )

    async def stop(self) -> None:
        server, task = self._server, self._task
        self._server = None
        self._task = None
        if server is not None:
            server.should_exit = True
        if task is not None:
            try:
                await asyncio.wait_for(task, timeout=5.0)
            except TimeoutError:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        self._close_socket()
        logger.info("webhook_listener_stopped", extra={"component": self.name})

    def _close_socket(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None
