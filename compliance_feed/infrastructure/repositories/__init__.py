"""Repository implementations for infrastructure layer."""

from .key_value_repository import KeyValueRepository
from .notification_store import (
    DEFAULT_NOTIFICATION_LIMIT,
    NotificationStore,
    bootstrap_flag_key,
    dismissed_key,
    notifications_key,
    serialize_notification,
)

__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "KeyValueRepository",
    "NotificationStore",
    "bootstrap_flag_key",
    "dismissed_key",
    "notifications_key",
    "serialize_notification",
]
