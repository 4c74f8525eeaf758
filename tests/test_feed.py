"""Tests for the ordered notification feed, its acknowledgement and bootstrap."""

from __future__ import annotations

from datetime import timedelta

import pytest

from compliance_feed.application.use_cases.notifications import (
    bootstrap_triggers,
    sort_feed,
)
from compliance_feed.domain.entities import (
    ROLE_SYSTEM_ADMIN,
    ROLE_VENDOR_ADMIN,
    ComplianceScoreChanged,
    DocumentRejected,
    DocumentUploaded,
    DocumentVerified,
    Notification,
    NotificationKind,
    NotificationPriority,
    SessionContext,
    VendorProfile,
)

from tests.conftest import BASE_TIME, vendor_document


def _entry(identifier: str, priority: NotificationPriority, minutes: int) -> Notification:
    return Notification(
        id=identifier,
        timestamp=BASE_TIME + timedelta(minutes=minutes),
        priority=priority,
        kind=NotificationKind.INFO,
        target_role=ROLE_VENDOR_ADMIN,
        owner_identity="v-1",
        message=identifier,
    )


def test_sort_orders_by_priority_then_recency():
    entries = [
        _entry("n1", NotificationPriority.LOW, 0),
        _entry("n2", NotificationPriority.HIGH, -60),
        _entry("n3", NotificationPriority.HIGH, -5),
    ]

    assert [n.id for n in sort_feed(entries)] == ["n3", "n2", "n1"]


def test_bootstrap_triggers_for_a_struggling_vendor():
    documents = [
        vendor_document("A", "W-9", "REJECTED"),
        vendor_document("B", "SOC 2", "PENDING"),
        vendor_document("C", "Insurance", "PENDING_MANUAL_REVIEW"),
    ]

    triggers = bootstrap_triggers(VendorProfile(overall_compliance_score=45), documents)

    assert triggers == [
        ComplianceScoreChanged(new_score=45, previous_score=0),
        DocumentRejected(document_name="1 document(s)"),
        DocumentUploaded(document_name="2 document(s)"),
    ]


def test_bootstrap_triggers_for_a_compliant_vendor():
    triggers = bootstrap_triggers(VendorProfile(overall_compliance_score=90), [])

    assert triggers == [ComplianceScoreChanged(new_score=90, previous_score=0)]


def test_bootstrap_triggers_for_an_average_vendor():
    assert bootstrap_triggers(VendorProfile(overall_compliance_score=70), []) == []


@pytest.mark.anyio
async def test_feed_only_shows_the_caller_entries(feed, dispatcher, vendor, buyer):
    dispatcher.dispatch(vendor, DocumentVerified("W-9"))
    dispatcher.dispatch(buyer, DocumentVerified("Contract"))

    vendor_feed = await feed.compute_feed(vendor)
    buyer_feed = await feed.compute_feed(buyer)

    assert [n.owner_identity for n in vendor_feed] == ["v-1"]
    assert [n.owner_identity for n in buyer_feed] == ["b-1"]


@pytest.mark.anyio
async def test_feed_is_sorted(feed, dispatcher, vendor):
    dispatcher.dispatch(vendor, DocumentUploaded("first"))
    dispatcher.dispatch(vendor, DocumentRejected("second"))
    dispatcher.dispatch(vendor, DocumentUploaded("third"))

    result = await feed.compute_feed(vendor)

    assert [n.message for n in result] == [
        'Document "second" was rejected.',
        'Document "third" uploaded successfully!',
        'Document "first" uploaded successfully!',
    ]


@pytest.mark.anyio
async def test_acknowledge_is_idempotent(feed, dispatcher, vendor, load_state, listener):
    notification = dispatcher.dispatch(vendor, DocumentVerified("W-9"))
    listener.calls = 0

    assert feed.acknowledge(vendor, notification.id) is True
    assert feed.acknowledge(vendor, notification.id) is True

    assert await feed.compute_feed(vendor) == []
    state = load_state(vendor)
    assert state.notifications == []
    assert state.acknowledged_ids == {notification.id}
    assert listener.calls == 2


@pytest.mark.anyio
async def test_acknowledging_an_unknown_id_keeps_the_feed(feed, dispatcher, vendor):
    dispatcher.dispatch(vendor, DocumentVerified("W-9"))

    assert feed.acknowledge(vendor, "missing") is True
    assert len(await feed.compute_feed(vendor)) == 1


@pytest.mark.anyio
async def test_acknowledge_all_empties_the_feed_and_blocks_bootstrap(
    feed, dispatcher, vendor, directory, load_state
):
    directory.profile = VendorProfile(overall_compliance_score=30)
    dispatcher.dispatch(vendor, DocumentVerified("W-9"))
    dispatcher.dispatch(vendor, DocumentRejected("SOC 2"))

    assert feed.acknowledge_all(vendor) is True

    assert await feed.compute_feed(vendor) == []
    state = load_state(vendor)
    assert state.notifications == []
    assert state.acknowledged_ids == set()
    assert state.bootstrapped is True
    assert directory.profile_calls == 0


@pytest.mark.anyio
async def test_bootstrap_runs_once_per_identity(feed, vendor, directory, load_state):
    directory.profile = VendorProfile(overall_compliance_score=40)
    directory.snapshots = [[vendor_document("A", "W-9", "REJECTED")]]

    first = await feed.compute_feed(vendor)
    assert [n.message for n in first] == [
        'Document "1 document(s)" was rejected.',
        "Your compliance score improved by 40%!",
    ]
    assert load_state(vendor).bootstrapped is True

    for notification in first:
        feed.acknowledge(vendor, notification.id)
    assert await feed.compute_feed(vendor) == []
    assert directory.profile_calls == 1


@pytest.mark.anyio
async def test_bootstrap_skips_roles_without_documents(feed, buyer, directory, load_state):
    directory.profile = VendorProfile(overall_compliance_score=10)

    assert await feed.compute_feed(buyer) == []
    assert directory.profile_calls == 0
    assert load_state(buyer).bootstrapped is False


@pytest.mark.anyio
async def test_bootstrap_for_system_admins_only_sets_the_flag(feed, directory, load_state):
    admin = SessionContext(user_id="s-1", role=ROLE_SYSTEM_ADMIN)
    directory.profile = VendorProfile(overall_compliance_score=20)

    result = await feed.compute_feed(admin)

    assert result == []
    assert load_state(admin).bootstrapped is True
    assert directory.profile_calls == 1
    assert load_state(admin).notifications == []


@pytest.mark.anyio
async def test_bootstrap_skips_an_infinite_score(feed, vendor, directory, load_state):
    directory.profile = VendorProfile(overall_compliance_score=float("inf"))

    assert await feed.compute_feed(vendor) == []
    assert load_state(vendor).bootstrapped is True


@pytest.mark.anyio
async def test_failed_bootstrap_is_retried(feed, vendor, directory, load_state):
    directory.profile = VendorProfile(overall_compliance_score=20)
    directory.fail = True

    assert await feed.compute_feed(vendor) == []
    assert load_state(vendor).bootstrapped is False

    directory.fail = False
    assert len(await feed.compute_feed(vendor)) == 1
    assert load_state(vendor).bootstrapped is True


@pytest.mark.anyio
async def test_reset_identity_rearms_bootstrap(feed, vendor, directory, load_state, listener):
    directory.profile = VendorProfile(overall_compliance_score=20)
    await feed.compute_feed(vendor)
    listener.calls = 0

    feed.reset_identity(vendor)

    state = load_state(vendor)
    assert state.notifications == []
    assert state.bootstrapped is False
    assert listener.calls == 0
    assert len(await feed.compute_feed(vendor)) == 1
    assert directory.profile_calls == 2


@pytest.mark.anyio
async def test_manual_refresh_rearms_bootstrap(feed, vendor, directory, load_state, listener):
    feed.acknowledge_all(vendor)
    listener.calls = 0

    feed.request_manual_refresh(vendor)

    assert load_state(vendor).bootstrapped is False
    assert listener.calls == 1


@pytest.mark.anyio
async def test_fire_noc_scenario(feed, dispatcher, vendor, directory):
    """Upload, verify, then read both entries with the most recent first."""

    dispatcher.dispatch(vendor, DocumentUploaded("Fire NOC"), ROLE_VENDOR_ADMIN)
    dispatcher.dispatch(vendor, DocumentVerified("Fire NOC"), ROLE_VENDOR_ADMIN)

    result = await feed.compute_feed(vendor)

    assert [n.message for n in result] == [
        'Document "Fire NOC" verified successfully!',
        'Document "Fire NOC" uploaded successfully!',
    ]
    assert all(n.priority is NotificationPriority.LOW for n in result)


@pytest.mark.anyio
async def test_logout_then_buyer_login_sees_nothing_from_the_vendor(
    feed, dispatcher, vendor, buyer, directory, load_state
):
    directory.profile = VendorProfile(overall_compliance_score=20)
    await feed.compute_feed(vendor)
    dispatcher.dispatch(vendor, DocumentRejected("W-9"))

    feed.reset_identity(vendor)

    assert await feed.compute_feed(buyer) == []
    assert load_state(vendor).notifications == []
