"""Utility helpers to emit notifications for common domain events."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from compliance_feed.domain.entities import (
    ROLE_BUYER_ADMIN,
    ROLE_VENDOR_ADMIN,
    BuyerResponseReceived,
    ComplianceScoreChanged,
    DocumentRejected,
    DocumentUploaded,
    DocumentVerified,
    EngagementCompleted,
    EngagementOnHold,
    EngagementStatusChanged,
    NewEngagementRequest,
    Notification,
    SessionContext,
    VendorResponseReceived,
)

from .dispatcher import TriggerDispatcher

ENGAGEMENT_STATUS_COMPLETED = "COMPLETED"
ENGAGEMENT_STATUS_ON_HOLD = "ON_HOLD"


def notify_document_uploaded(
    dispatcher: TriggerDispatcher, context: SessionContext, *, document_name: str
) -> Notification | None:
    """Tell the vendor that an upload went through."""

    return dispatcher.dispatch(
        context, DocumentUploaded(document_name=document_name), ROLE_VENDOR_ADMIN
    )


def notify_document_verified(
    dispatcher: TriggerDispatcher, context: SessionContext, *, document_name: str
) -> Notification | None:
    return dispatcher.dispatch(
        context, DocumentVerified(document_name=document_name), ROLE_VENDOR_ADMIN
    )


def notify_document_rejected(
    dispatcher: TriggerDispatcher, context: SessionContext, *, document_name: str
) -> Notification | None:
    return dispatcher.dispatch(
        context, DocumentRejected(document_name=document_name), ROLE_VENDOR_ADMIN
    )


def notify_compliance_score_changed(
    dispatcher: TriggerDispatcher,
    context: SessionContext,
    *,
    new_score: float,
    previous_score: float,
) -> Notification | None:
    return dispatcher.dispatch(
        context,
        ComplianceScoreChanged(new_score=new_score, previous_score=previous_score),
        ROLE_VENDOR_ADMIN,
    )


def notify_engagement_created(
    dispatcher: TriggerDispatcher,
    context: SessionContext,
    *,
    engagement: Mapping[str, Any],
) -> Notification | None:
    """Inform the vendor about an incoming engagement request."""

    buyer = engagement.get("buyer") or {}
    return dispatcher.dispatch(
        context,
        NewEngagementRequest(
            engagement_id=str(engagement.get("id")),
            buyer_id=_optional_str(buyer.get("id")),
            buyer_name=buyer.get("name") or "Unknown Buyer",
            priority=engagement.get("priority"),
            deal_type=engagement.get("dealType") or "N/A",
        ),
        ROLE_VENDOR_ADMIN,
    )


def notify_vendor_response(
    dispatcher: TriggerDispatcher,
    context: SessionContext,
    *,
    engagement: Mapping[str, Any],
    response: str | None = None,
) -> Notification | None:
    """Inform the buyer that the vendor answered their request."""

    vendor = engagement.get("vendor") or {}
    return dispatcher.dispatch(
        context,
        VendorResponseReceived(
            engagement_id=str(engagement.get("id")),
            vendor_id=_optional_str(vendor.get("id")),
            vendor_name=vendor.get("companyName") or "Unknown Vendor",
            response=response,
        ),
        ROLE_BUYER_ADMIN,
    )


def notify_buyer_response(
    dispatcher: TriggerDispatcher,
    context: SessionContext,
    *,
    engagement: Mapping[str, Any],
    response: str | None = None,
) -> Notification | None:
    """Inform the vendor that the buyer answered."""

    buyer = engagement.get("buyer") or {}
    return dispatcher.dispatch(
        context,
        BuyerResponseReceived(
            engagement_id=str(engagement.get("id")),
            buyer_id=_optional_str(buyer.get("id")),
            buyer_name=buyer.get("name") or "Unknown Buyer",
            response=response,
        ),
        ROLE_VENDOR_ADMIN,
    )


def notify_engagement_status_changed(
    dispatcher: TriggerDispatcher,
    context: SessionContext,
    *,
    engagement: Mapping[str, Any],
    previous_status: str | None,
    new_status: str,
) -> Notification | None:
    """Notify the current party about an engagement status change.

    Completion and hold get their dedicated notification kinds.
    """

    buyer = engagement.get("buyer") or {}
    vendor = engagement.get("vendor") or {}
    counterparty_name = buyer.get("name") or vendor.get("companyName") or "Unknown"
    engagement_id = str(engagement.get("id"))

    if new_status == ENGAGEMENT_STATUS_COMPLETED:
        trigger = EngagementCompleted(
            engagement_id=engagement_id, counterparty_name=counterparty_name
        )
    elif new_status == ENGAGEMENT_STATUS_ON_HOLD:
        trigger = EngagementOnHold(
            engagement_id=engagement_id, counterparty_name=counterparty_name
        )
    else:
        trigger = EngagementStatusChanged(
            engagement_id=engagement_id,
            new_status=new_status,
            previous_status=previous_status,
            counterparty_name=counterparty_name,
        )
    return dispatcher.dispatch(context, trigger, context.role)


def _optional_str(value: object) -> str | None:
    return str(value) if value is not None else None


__all__ = [
    "ENGAGEMENT_STATUS_COMPLETED",
    "ENGAGEMENT_STATUS_ON_HOLD",
    "notify_buyer_response",
    "notify_compliance_score_changed",
    "notify_document_rejected",
    "notify_document_uploaded",
    "notify_document_verified",
    "notify_engagement_created",
    "notify_engagement_status_changed",
    "notify_vendor_response",
]
