"""Durable, per-identity notification state on top of the key-value store."""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.orm import Session

from compliance_feed.domain.entities import (
    Notification,
    NotificationKind,
    NotificationPriority,
    StoreState,
)
from compliance_feed.utils import parse_iso_datetime

from .key_value_repository import KeyValueRepository

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_LIMIT = 50

_NOTIFICATIONS_PREFIX = "notifications_"
_DISMISSED_PREFIX = "dismissed_notifications_"
_BOOTSTRAP_FLAG_PREFIX = "initial_notifications_generated_"


def notifications_key(identity_key: str) -> str:
    return f"{_NOTIFICATIONS_PREFIX}{identity_key}"


def dismissed_key(identity_key: str) -> str:
    return f"{_DISMISSED_PREFIX}{identity_key}"


def bootstrap_flag_key(identity_key: str) -> str:
    return f"{_BOOTSTRAP_FLAG_PREFIX}{identity_key}"


class NotificationStore:
    """Load and save the three partitions owned by one identity.

    The store never signals listeners; callers do that after a successful
    mutation.
    """

    def __init__(
        self,
        session: Session,
        identity_key: str,
        *,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
    ) -> None:
        self._repository = KeyValueRepository(session)
        self.identity_key = identity_key
        self.limit = limit

    @property
    def keys(self) -> tuple[str, str, str]:
        return (
            notifications_key(self.identity_key),
            dismissed_key(self.identity_key),
            bootstrap_flag_key(self.identity_key),
        )

    def load(self) -> StoreState:
        """Return the persisted state; absent or malformed partitions are empty."""

        notifications_raw, dismissed_raw, flag_raw = (
            self._read_partition(key) for key in self.keys
        )

        notifications: list[Notification] = []
        for item in _as_list(notifications_raw.get("notifications")):
            notification = deserialize_notification(item)
            if notification is None:
                logger.warning(
                    "Skipping malformed notification stored for identity %s",
                    self.identity_key,
                )
                continue
            notifications.append(notification)

        acknowledged_ids = {
            str(item)
            for item in _as_list(dismissed_raw.get("dismissedIds"))
            if isinstance(item, (str, int))
        }

        return StoreState(
            notifications=notifications,
            acknowledged_ids=acknowledged_ids,
            bootstrapped=flag_raw.get("generated") is True,
        )

    def save(self, state: StoreState) -> StoreState:
        """Persist ``state`` after removing acknowledged entries and applying the cap.

        Returns the state exactly as it was written.
        """

        remaining = [
            notification
            for notification in state.notifications
            if notification.id not in state.acknowledged_ids
        ][: self.limit]
        written = StoreState(
            notifications=remaining,
            acknowledged_ids=set(state.acknowledged_ids),
            bootstrapped=state.bootstrapped,
        )

        notifications_entry, dismissed_entry, flag_entry = self.keys
        self._repository.set_many(
            {
                notifications_entry: json.dumps(
                    {"notifications": [serialize_notification(n) for n in remaining]}
                ),
                dismissed_entry: json.dumps(
                    {"dismissedIds": sorted(written.acknowledged_ids)}
                ),
                flag_entry: json.dumps({"generated": written.bootstrapped}),
            }
        )
        return written

    def clear(self) -> None:
        """Remove every partition of this identity."""

        self._repository.delete_many(self.keys)

    def _read_partition(self, key: str) -> dict[str, Any]:
        raw = self._repository.get(key)
        if raw is None:
            return {}
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable notification partition %s", key)
            return {}
        if not isinstance(parsed, dict):
            logger.warning("Discarding notification partition %s with unexpected shape", key)
            return {}
        return parsed


def _as_list(value: object) -> list[Any]:
    return value if isinstance(value, list) else []


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``notification``."""

    return {
        "id": notification.id,
        "timestamp": notification.timestamp.isoformat(),
        "priority": notification.priority.value,
        "kind": notification.kind.value,
        "target_role": notification.target_role,
        "owner_identity": notification.owner_identity,
        "message": notification.message,
        "action": notification.action,
        "context_data": notification.context_data or {},
    }


def deserialize_notification(data: object) -> Notification | None:
    """Rebuild a :class:`Notification` from its stored form, or ``None`` if invalid."""

    if not isinstance(data, dict):
        return None
    timestamp = parse_iso_datetime(data.get("timestamp"))
    notification_id = data.get("id")
    owner_identity = data.get("owner_identity")
    if timestamp is None or not isinstance(notification_id, str) or not owner_identity:
        return None
    try:
        priority = NotificationPriority(data.get("priority"))
        kind = NotificationKind(data.get("kind"))
    except ValueError:
        return None
    context_data = data.get("context_data")
    return Notification(
        id=notification_id,
        timestamp=timestamp,
        priority=priority,
        kind=kind,
        target_role=data.get("target_role"),
        owner_identity=str(owner_identity),
        message=str(data.get("message") or ""),
        action=data.get("action"),
        context_data=context_data if isinstance(context_data, dict) else {},
    )


__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "NotificationStore",
    "bootstrap_flag_key",
    "deserialize_notification",
    "dismissed_key",
    "notifications_key",
    "serialize_notification",
]
