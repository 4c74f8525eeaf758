"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from compliance_feed.domain.entities import (
    Notification,
    NotificationKind,
    NotificationPriority,
)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    timestamp: datetime
    priority: NotificationPriority
    kind: NotificationKind
    target_role: str | None = None
    owner_identity: str
    message: str
    action: str | None = None
    context_data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id,
            timestamp=notification.timestamp,
            priority=notification.priority,
            kind=notification.kind,
            target_role=notification.target_role,
            owner_identity=notification.owner_identity,
            message=notification.message,
            action=notification.action,
            context_data=notification.context_data or {},
        )


class NotificationTriggerRequest(BaseModel):
    """Domain action reported by calling code."""

    action: str = Field(..., min_length=1, description="Action kind, e.g. document_uploaded")
    payload: dict[str, Any] = Field(default_factory=dict)
    target_role: str | None = None


class AcknowledgementResult(BaseModel):
    success: bool = True


__all__ = ["AcknowledgementResult", "NotificationRead", "NotificationTriggerRequest"]
