"""Turn domain triggers into persisted, role-scoped notifications."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from compliance_feed.domain.entities import (
    TRIGGER_TYPES,
    ActionKind,
    BuyerResponseReceived,
    ComplianceScoreChanged,
    DocumentExpiring,
    DocumentRejected,
    DocumentUploaded,
    DocumentVerified,
    EngagementCompleted,
    EngagementOnHold,
    EngagementStatusChanged,
    NewDocumentRequired,
    NewEngagementRequest,
    Notification,
    NotificationKind,
    NotificationPriority,
    SessionContext,
    Trigger,
    VendorResponseReceived,
    build_notification_id,
    trigger_from_payload,
)
from compliance_feed.infrastructure.notifications import RefreshSignal
from compliance_feed.infrastructure.repositories import (
    DEFAULT_NOTIFICATION_LIMIT,
    NotificationStore,
)
from compliance_feed.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


@dataclass(frozen=True)
class NotificationContent:
    """Presentation fields fixed by the action kind."""

    priority: NotificationPriority
    kind: NotificationKind
    message: str
    action: str | None = None
    context_data: dict[str, Any] = field(default_factory=dict)


def _round_percent(value: float) -> int:
    return int(math.floor(float(value) + 0.5))


def _document_uploaded(trigger: DocumentUploaded) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.LOW,
        kind=NotificationKind.SUCCESS,
        message=f'Document "{trigger.document_name}" uploaded successfully!',
        action="Verification in progress...",
    )


def _document_verified(trigger: DocumentVerified) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.LOW,
        kind=NotificationKind.SUCCESS,
        message=f'Document "{trigger.document_name}" verified successfully!',
        action="Your compliance score has been updated.",
    )


def _document_rejected(trigger: DocumentRejected) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.HIGH,
        kind=NotificationKind.ALERT,
        message=f'Document "{trigger.document_name}" was rejected.',
        action="Please review and upload a corrected version.",
    )


def _compliance_score_changed(
    trigger: ComplianceScoreChanged,
) -> NotificationContent | None:
    new_score = float(trigger.new_score)
    previous_score = float(trigger.previous_score)
    delta = new_score - previous_score
    if not math.isfinite(delta):
        return None
    if delta > 0:
        return NotificationContent(
            priority=NotificationPriority.MEDIUM,
            kind=NotificationKind.SUCCESS,
            message=f"Your compliance score improved by {_round_percent(delta)}%!",
            action=f"Current score: {_round_percent(new_score)}%",
        )
    if delta < 0:
        return NotificationContent(
            priority=NotificationPriority.HIGH,
            kind=NotificationKind.WARNING,
            message=f"Your compliance score decreased by {abs(_round_percent(delta))}%.",
            action="Review rejected or missing documents.",
        )
    return None


def _document_expiring(trigger: DocumentExpiring) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.WARNING,
        message=(
            f'Document "{trigger.document_name}" expires in '
            f"{int(trigger.days_until_expiry)} days."
        ),
        action="Please renew this document soon.",
    )


def _new_document_required(trigger: NewDocumentRequired) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.SUGGESTION,
        message=f"New document required: {trigger.document_name}",
        action="Upload this document to improve your compliance score.",
    )


def _new_engagement_request(trigger: NewEngagementRequest) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.HIGH,
        kind=NotificationKind.SUCCESS,
        message=f"New engagement request from {trigger.buyer_name}",
        action=f"Priority: {trigger.priority} | Deal Type: {trigger.deal_type}",
        context_data={
            "engagementId": trigger.engagement_id,
            "buyerId": trigger.buyer_id,
            "type": "engagement_request",
        },
    )


def _engagement_status_changed(
    trigger: EngagementStatusChanged,
) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.INFO,
        message=f"Engagement status changed to {trigger.new_status}",
        action=(
            f"Engagement with {trigger.counterparty_name} is now "
            f"{trigger.new_status.lower()}"
        ),
        context_data={"engagementId": trigger.engagement_id, "type": "status_change"},
    )


def _vendor_response_received(trigger: VendorResponseReceived) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.INFO,
        message=f"Vendor {trigger.vendor_name} has responded to your request",
        action="Click to view the response details",
        context_data={
            "engagementId": trigger.engagement_id,
            "vendorId": trigger.vendor_id,
            "type": "vendor_response",
        },
    )


def _buyer_response_received(trigger: BuyerResponseReceived) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.INFO,
        message=f"Buyer {trigger.buyer_name} has responded to your request",
        action="Click to view the response details",
        context_data={
            "engagementId": trigger.engagement_id,
            "buyerId": trigger.buyer_id,
            "type": "buyer_response",
        },
    )


def _engagement_completed(trigger: EngagementCompleted) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.SUCCESS,
        message=f"Engagement with {trigger.counterparty_name} has been completed",
        action="View engagement history for details",
        context_data={
            "engagementId": trigger.engagement_id,
            "type": "engagement_completed",
        },
    )


def _engagement_on_hold(trigger: EngagementOnHold) -> NotificationContent:
    return NotificationContent(
        priority=NotificationPriority.MEDIUM,
        kind=NotificationKind.WARNING,
        message=f"Engagement with {trigger.counterparty_name} is now on hold",
        action="Review and take action to resume",
        context_data={
            "engagementId": trigger.engagement_id,
            "type": "engagement_on_hold",
        },
    )


_BUILDERS: dict[type, Callable[[Any], NotificationContent | None]] = {
    DocumentUploaded: _document_uploaded,
    DocumentVerified: _document_verified,
    DocumentRejected: _document_rejected,
    ComplianceScoreChanged: _compliance_score_changed,
    DocumentExpiring: _document_expiring,
    NewDocumentRequired: _new_document_required,
    NewEngagementRequest: _new_engagement_request,
    EngagementStatusChanged: _engagement_status_changed,
    VendorResponseReceived: _vendor_response_received,
    BuyerResponseReceived: _buyer_response_received,
    EngagementCompleted: _engagement_completed,
    EngagementOnHold: _engagement_on_hold,
}

_UNHANDLED = {kind for kind, trigger_type in TRIGGER_TYPES.items() if trigger_type not in _BUILDERS}
if _UNHANDLED:  # pragma: no cover - guarded at import time
    raise RuntimeError(
        "No notification builder for: " + ", ".join(sorted(kind.value for kind in _UNHANDLED))
    )


def build_content(trigger: Trigger) -> NotificationContent | None:
    """Return the notification fields for ``trigger``.

    ``None`` means the trigger carries nothing worth telling (a compliance
    score that did not move). Passing an object that is not a trigger is a
    programming error and raises ``TypeError``.
    """

    builder = _BUILDERS.get(type(trigger))
    if builder is None:
        raise TypeError(f"Unsupported trigger type: {type(trigger).__name__}")
    return builder(trigger)


class TriggerDispatcher:
    """Create notifications for the active identity and persist them."""

    def __init__(
        self,
        session_factory: SessionFactory,
        signal: RefreshSignal,
        *,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._session_factory = session_factory
        self._signal = signal
        self._limit = limit
        self._clock = clock

    def dispatch(
        self,
        context: SessionContext,
        trigger: Trigger,
        target_role: str | None = None,
    ) -> Notification | None:
        """Store the notification built from ``trigger`` for the active identity.

        Returns ``None`` without writing anything when ``target_role`` names a
        different role than the active one, or when the trigger yields no
        notification.
        """

        notification = self._build(context, trigger, target_role)
        if notification is None:
            return None
        self._persist(context, notification)
        return notification

    def dispatch_action(
        self,
        context: SessionContext,
        action_kind: str | ActionKind,
        payload: Mapping[str, Any] | None = None,
        target_role: str | None = None,
    ) -> Notification | None:
        """Loosely typed variant of :meth:`dispatch` for untyped callers.

        Unknown action kinds and unusable payloads are a silent no-op.
        """

        trigger = trigger_from_payload(action_kind, payload)
        if trigger is None:
            logger.info("Ignoring unrecognized notification action %r", action_kind)
            return None
        try:
            notification = self._build(context, trigger, target_role)
        except (TypeError, ValueError, AttributeError):
            logger.info("Ignoring %s action with an unusable payload", trigger.kind.value)
            return None
        if notification is None:
            return None
        self._persist(context, notification)
        return notification

    def _build(
        self,
        context: SessionContext,
        trigger: Trigger,
        target_role: str | None,
    ) -> Notification | None:
        active_role = context.role
        if target_role and target_role != active_role:
            logger.debug(
                "Notification for %s role, current role is %s - skipping",
                target_role,
                active_role,
            )
            return None

        content = build_content(trigger)
        if content is None:
            return None

        timestamp = self._clock()
        return Notification(
            id=build_notification_id(trigger.kind.value, timestamp),
            timestamp=timestamp,
            priority=content.priority,
            kind=content.kind,
            target_role=target_role or active_role,
            owner_identity=context.identity_key,
            message=content.message,
            action=content.action,
            context_data=dict(content.context_data),
        )

    def _persist(self, context: SessionContext, notification: Notification) -> None:
        with self._session_factory() as session:
            store = NotificationStore(session, context.identity_key, limit=self._limit)
            state = store.load()
            state.prepend(notification, limit=self._limit)
            store.save(state)
        self._signal.notify()


__all__ = [
    "NotificationContent",
    "SessionFactory",
    "TriggerDispatcher",
    "build_content",
]
