"""Domain entities exposed by the application."""

from .document import (
    NON_TERMINAL_STATUSES,
    VERIFICATION_STATUS_PENDING,
    VERIFICATION_STATUS_PENDING_MANUAL_REVIEW,
    VERIFICATION_STATUS_REJECTED,
    VERIFICATION_STATUS_VERIFIED,
    DocumentStatus,
    StatusTransition,
    UploadedDocument,
    VendorDocument,
    VendorProfile,
    build_snapshot,
)
from .notification import (
    Notification,
    NotificationKind,
    NotificationPriority,
    build_notification_id,
)
from .session import (
    ANONYMOUS_IDENTITY,
    ANONYMOUS_SESSION,
    DOCUMENT_OWNER_ROLES,
    ROLE_BUYER_ADMIN,
    ROLE_SYSTEM_ADMIN,
    ROLE_VENDOR_ADMIN,
    SessionContext,
    resolve_identity_key,
)
from .store_state import StoreState
from .trigger import (
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
    Trigger,
    VendorResponseReceived,
    parse_action_kind,
    trigger_from_payload,
)

__all__ = [
    "ANONYMOUS_IDENTITY",
    "ANONYMOUS_SESSION",
    "ActionKind",
    "BuyerResponseReceived",
    "ComplianceScoreChanged",
    "DOCUMENT_OWNER_ROLES",
    "DocumentExpiring",
    "DocumentRejected",
    "DocumentStatus",
    "DocumentUploaded",
    "DocumentVerified",
    "EngagementCompleted",
    "EngagementOnHold",
    "EngagementStatusChanged",
    "NON_TERMINAL_STATUSES",
    "NewDocumentRequired",
    "NewEngagementRequest",
    "Notification",
    "NotificationKind",
    "NotificationPriority",
    "ROLE_BUYER_ADMIN",
    "ROLE_SYSTEM_ADMIN",
    "ROLE_VENDOR_ADMIN",
    "SessionContext",
    "StatusTransition",
    "StoreState",
    "TRIGGER_TYPES",
    "Trigger",
    "UploadedDocument",
    "VERIFICATION_STATUS_PENDING",
    "VERIFICATION_STATUS_PENDING_MANUAL_REVIEW",
    "VERIFICATION_STATUS_REJECTED",
    "VERIFICATION_STATUS_VERIFIED",
    "VendorDocument",
    "VendorProfile",
    "build_notification_id",
    "build_snapshot",
    "parse_action_kind",
    "resolve_identity_key",
    "trigger_from_payload",
]
