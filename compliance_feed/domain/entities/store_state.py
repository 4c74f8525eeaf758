"""Domain entity holding the persisted notification state of one identity."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import Notification


@dataclass
class StoreState:
    """Mutable working copy of the three per-identity partitions."""

    notifications: list[Notification] = field(default_factory=list)
    acknowledged_ids: set[str] = field(default_factory=set)
    bootstrapped: bool = False

    def prepend(self, notification: Notification, *, limit: int) -> None:
        """Insert ``notification`` as the newest entry and apply the cap."""

        self.notifications.insert(0, notification)
        if len(self.notifications) > limit:
            del self.notifications[limit:]

    def unacknowledged(self) -> list[Notification]:
        return [n for n in self.notifications if n.id not in self.acknowledged_ids]


__all__ = ["StoreState"]
