"""Public helpers for producing, detecting and reading notifications."""

from .dispatcher import NotificationContent, TriggerDispatcher, build_content
from .events import (
    notify_buyer_response,
    notify_compliance_score_changed,
    notify_document_rejected,
    notify_document_uploaded,
    notify_document_verified,
    notify_engagement_created,
    notify_engagement_status_changed,
    notify_vendor_response,
)
from .feed import NotificationFeed, bootstrap_triggers, sort_feed
from .status_detector import (
    DocumentStatusDetector,
    PollingState,
    diff_snapshots,
    has_pending_documents,
)

__all__ = [
    "DocumentStatusDetector",
    "NotificationContent",
    "NotificationFeed",
    "PollingState",
    "TriggerDispatcher",
    "bootstrap_triggers",
    "build_content",
    "diff_snapshots",
    "has_pending_documents",
    "notify_buyer_response",
    "notify_compliance_score_changed",
    "notify_document_rejected",
    "notify_document_uploaded",
    "notify_document_verified",
    "notify_engagement_created",
    "notify_engagement_status_changed",
    "notify_vendor_response",
    "sort_feed",
]
