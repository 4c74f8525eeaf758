"""Refresh signalling helpers for the infrastructure layer."""

from .publisher import REFRESH_MESSAGE, WebSocketRefreshPublisher
from .refresh import RefreshListener, RefreshSignal

__all__ = [
    "REFRESH_MESSAGE",
    "RefreshListener",
    "RefreshSignal",
    "WebSocketRefreshPublisher",
]
