"""Domain actions that can be turned into user notifications.

Each action kind has exactly one trigger class, and ``Trigger`` is the closed
union of them. Calling code builds a trigger when a domain mutation warrants a
notification; the dispatcher decides whether and how it becomes one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Union


class ActionKind(str, Enum):
    """Named domain events understood by the dispatcher."""

    DOCUMENT_UPLOADED = "document_uploaded"
    DOCUMENT_VERIFIED = "document_verified"
    DOCUMENT_REJECTED = "document_rejected"
    COMPLIANCE_SCORE_CHANGED = "compliance_score_changed"
    DOCUMENT_EXPIRING = "document_expiring"
    NEW_DOCUMENT_REQUIRED = "new_document_required"
    NEW_ENGAGEMENT_REQUEST = "new_engagement_request"
    ENGAGEMENT_STATUS_CHANGED = "engagement_status_changed"
    VENDOR_RESPONSE_RECEIVED = "vendor_response_received"
    BUYER_RESPONSE_RECEIVED = "buyer_response_received"
    ENGAGEMENT_COMPLETED = "engagement_completed"
    ENGAGEMENT_ON_HOLD = "engagement_on_hold"


@dataclass(frozen=True)
class DocumentUploaded:
    kind: ClassVar[ActionKind] = ActionKind.DOCUMENT_UPLOADED

    document_name: str


@dataclass(frozen=True)
class DocumentVerified:
    kind: ClassVar[ActionKind] = ActionKind.DOCUMENT_VERIFIED

    document_name: str


@dataclass(frozen=True)
class DocumentRejected:
    kind: ClassVar[ActionKind] = ActionKind.DOCUMENT_REJECTED

    document_name: str


@dataclass(frozen=True)
class ComplianceScoreChanged:
    kind: ClassVar[ActionKind] = ActionKind.COMPLIANCE_SCORE_CHANGED

    new_score: float
    previous_score: float = 0.0

    @property
    def delta(self) -> float:
        return self.new_score - self.previous_score


@dataclass(frozen=True)
class DocumentExpiring:
    kind: ClassVar[ActionKind] = ActionKind.DOCUMENT_EXPIRING

    document_name: str
    days_until_expiry: int


@dataclass(frozen=True)
class NewDocumentRequired:
    kind: ClassVar[ActionKind] = ActionKind.NEW_DOCUMENT_REQUIRED

    document_name: str


@dataclass(frozen=True)
class NewEngagementRequest:
    kind: ClassVar[ActionKind] = ActionKind.NEW_ENGAGEMENT_REQUEST

    engagement_id: str
    buyer_name: str = "Unknown Buyer"
    buyer_id: str | None = None
    priority: str | None = None
    deal_type: str = "N/A"


@dataclass(frozen=True)
class EngagementStatusChanged:
    kind: ClassVar[ActionKind] = ActionKind.ENGAGEMENT_STATUS_CHANGED

    engagement_id: str
    new_status: str
    counterparty_name: str = "Unknown"
    previous_status: str | None = None


@dataclass(frozen=True)
class VendorResponseReceived:
    kind: ClassVar[ActionKind] = ActionKind.VENDOR_RESPONSE_RECEIVED

    engagement_id: str
    vendor_name: str = "Unknown Vendor"
    vendor_id: str | None = None
    response: str | None = None


@dataclass(frozen=True)
class BuyerResponseReceived:
    kind: ClassVar[ActionKind] = ActionKind.BUYER_RESPONSE_RECEIVED

    engagement_id: str
    buyer_name: str = "Unknown Buyer"
    buyer_id: str | None = None
    response: str | None = None


@dataclass(frozen=True)
class EngagementCompleted:
    kind: ClassVar[ActionKind] = ActionKind.ENGAGEMENT_COMPLETED

    engagement_id: str
    counterparty_name: str = "Unknown"


@dataclass(frozen=True)
class EngagementOnHold:
    kind: ClassVar[ActionKind] = ActionKind.ENGAGEMENT_ON_HOLD

    engagement_id: str
    counterparty_name: str = "Unknown"


Trigger = Union[
    DocumentUploaded,
    DocumentVerified,
    DocumentRejected,
    ComplianceScoreChanged,
    DocumentExpiring,
    NewDocumentRequired,
    NewEngagementRequest,
    EngagementStatusChanged,
    VendorResponseReceived,
    BuyerResponseReceived,
    EngagementCompleted,
    EngagementOnHold,
]

TRIGGER_TYPES: dict[ActionKind, type] = {
    trigger_type.kind: trigger_type for trigger_type in Trigger.__args__
}

# Payload keys used by calling code, mapped onto trigger field names.
_PAYLOAD_ALIASES = {
    "documentName": "document_name",
    "newScore": "new_score",
    "previousScore": "previous_score",
    "daysUntilExpiry": "days_until_expiry",
    "engagementId": "engagement_id",
    "buyerName": "buyer_name",
    "buyerId": "buyer_id",
    "dealType": "deal_type",
    "newStatus": "new_status",
    "previousStatus": "previous_status",
    "counterpartyName": "counterparty_name",
    "vendorName": "vendor_name",
    "vendorId": "vendor_id",
}


def parse_action_kind(value: str | ActionKind) -> ActionKind | None:
    """Return the :class:`ActionKind` named by ``value`` or ``None``.

    Both the enum value (``document_uploaded``) and its name
    (``DOCUMENT_UPLOADED``) are accepted.
    """

    if isinstance(value, ActionKind):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ActionKind(value)
    except ValueError:
        pass
    try:
        return ActionKind[value.upper()]
    except KeyError:
        return None


def trigger_from_payload(
    action_kind: str | ActionKind, payload: Mapping[str, Any] | None
) -> Trigger | None:
    """Build a trigger from a loosely typed ``(action_kind, payload)`` pair.

    Returns ``None`` when the action kind is unknown or the payload lacks a
    required field.
    """

    kind = parse_action_kind(action_kind)
    if kind is None:
        return None

    trigger_type = TRIGGER_TYPES[kind]
    normalized = {
        _PAYLOAD_ALIASES.get(key, key): value for key, value in (payload or {}).items()
    }
    accepted = {f.name for f in fields(trigger_type)}
    arguments = {
        name: value
        for name, value in normalized.items()
        if name in accepted and value is not None
    }
    try:
        return trigger_type(**arguments)
    except TypeError:
        return None


__all__ = [
    "ActionKind",
    "BuyerResponseReceived",
    "ComplianceScoreChanged",
    "DocumentExpiring",
    "DocumentRejected",
    "DocumentUploaded",
    "DocumentVerified",
    "EngagementCompleted",
    "EngagementOnHold",
    "EngagementStatusChanged",
    "NewDocumentRequired",
    "NewEngagementRequest",
    "TRIGGER_TYPES",
    "Trigger",
    "VendorResponseReceived",
    "parse_action_kind",
    "trigger_from_payload",
]
