"""Utility helpers to push refresh requests to a websocket subscriber."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread
from fastapi import WebSocket

logger = logging.getLogger(__name__)

REFRESH_MESSAGE: dict[str, Any] = {"type": "notifications.refresh"}


class WebSocketRefreshPublisher:
    """Refresh listener that forwards every signal to one websocket.

    Instances are plain callables so they can be registered directly on a
    :class:`~compliance_feed.infrastructure.notifications.refresh.RefreshSignal`.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket

    def __call__(self) -> None:
        self._schedule_send(dict(REFRESH_MESSAGE))

    async def send(self, message: dict[str, Any]) -> None:
        try:
            await self._websocket.send_json(message)
        except Exception:  # pragma: no cover - connection dropped mid-send
            logger.debug("Could not deliver refresh message", exc_info=True)

    def _schedule_send(self, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self.send, message)
        else:
            loop.create_task(self.send(message))


__all__ = ["REFRESH_MESSAGE", "WebSocketRefreshPublisher"]
