"""Aggregate application use cases."""

from .notifications import DocumentStatusDetector, NotificationFeed, TriggerDispatcher

__all__ = [
    "DocumentStatusDetector",
    "NotificationFeed",
    "TriggerDispatcher",
]
