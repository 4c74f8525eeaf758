"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationPriority(str, Enum):
    """Urgency of a notification, used to order the feed."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    NotificationPriority.LOW: 1,
    NotificationPriority.MEDIUM: 2,
    NotificationPriority.HIGH: 3,
}


class NotificationKind(str, Enum):
    """Rendering intent of a notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ALERT = "alert"
    SUGGESTION = "suggestion"


@dataclass(frozen=True)
class Notification:
    """Information message delivered to one identity and role."""

    id: str
    timestamp: datetime
    priority: NotificationPriority
    kind: NotificationKind
    target_role: str | None
    owner_identity: str
    message: str
    action: str | None = None
    context_data: dict[str, Any] = field(default_factory=dict)

    def is_visible_to(self, identity_key: str, role: str | None) -> bool:
        """Return ``True`` when both the owner and the role match."""

        return self.owner_identity == identity_key and self.target_role == role


def build_notification_id(action_kind: str, timestamp: datetime) -> str:
    """Return the identifier derived from the action and its creation instant."""

    return f"{action_kind}_{timestamp.isoformat()}"


__all__ = [
    "Notification",
    "NotificationKind",
    "NotificationPriority",
    "build_notification_id",
]
