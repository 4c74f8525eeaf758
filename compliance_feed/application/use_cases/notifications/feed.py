"""Read side of the notification engine: the ordered feed and its acknowledgement."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import httpx
from sqlalchemy.orm import Session

from compliance_feed.domain.entities import (
    ROLE_VENDOR_ADMIN,
    VERIFICATION_STATUS_PENDING,
    VERIFICATION_STATUS_PENDING_MANUAL_REVIEW,
    VERIFICATION_STATUS_REJECTED,
    ComplianceScoreChanged,
    DocumentRejected,
    DocumentUploaded,
    Notification,
    SessionContext,
    StoreState,
    Trigger,
    VendorDocument,
    VendorProfile,
)
from compliance_feed.infrastructure.notifications import RefreshSignal
from compliance_feed.infrastructure.repositories import (
    DEFAULT_NOTIFICATION_LIMIT,
    NotificationStore,
)
from compliance_feed.infrastructure.vendor_client import (
    VendorDirectory,
    VendorServiceError,
)

from .dispatcher import SessionFactory, TriggerDispatcher

logger = logging.getLogger(__name__)

LOW_COMPLIANCE_THRESHOLD = 60
HIGH_COMPLIANCE_THRESHOLD = 85

_FETCH_ERRORS = (VendorServiceError, httpx.HTTPError)


def sort_feed(notifications: Iterable[Notification]) -> list[Notification]:
    """Order by priority (high first), then by timestamp (newest first)."""

    return sorted(
        notifications,
        key=lambda notification: (notification.priority.rank, notification.timestamp),
        reverse=True,
    )


def bootstrap_triggers(
    profile: VendorProfile, documents: Sequence[VendorDocument]
) -> list[Trigger]:
    """Return the one-time triggers describing the vendor's current compliance state."""

    score = profile.overall_compliance_score
    triggers: list[Trigger] = []

    if score < LOW_COMPLIANCE_THRESHOLD:
        triggers.append(ComplianceScoreChanged(new_score=score, previous_score=0))

    rejected = [
        document
        for document in documents
        if document.has_upload_with_status(VERIFICATION_STATUS_REJECTED)
    ]
    if rejected:
        triggers.append(DocumentRejected(document_name=f"{len(rejected)} document(s)"))

    pending = [
        document
        for document in documents
        if document.has_upload_with_status(
            VERIFICATION_STATUS_PENDING, VERIFICATION_STATUS_PENDING_MANUAL_REVIEW
        )
    ]
    if pending:
        triggers.append(DocumentUploaded(document_name=f"{len(pending)} document(s)"))

    if score >= HIGH_COMPLIANCE_THRESHOLD:
        triggers.append(ComplianceScoreChanged(new_score=score, previous_score=0))

    return triggers


class NotificationFeed:
    """Compute the visible feed and apply acknowledgements for one session."""

    def __init__(
        self,
        session_factory: SessionFactory,
        signal: RefreshSignal,
        dispatcher: TriggerDispatcher,
        directory: VendorDirectory,
        *,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
    ) -> None:
        self._session_factory = session_factory
        self._signal = signal
        self._dispatcher = dispatcher
        self._directory = directory
        self._limit = limit
        self._bootstrapping: set[str] = set()

    async def compute_feed(self, context: SessionContext) -> list[Notification]:
        """Return the unacknowledged notifications visible to ``context``.

        The first call for a document-owning identity with an empty store also
        synthesizes the compliance notifications once.
        """

        identity = context.identity_key
        state = self._load(context)

        if (
            not state.bootstrapped
            and context.owns_documents()
            and not state.notifications
            and identity not in self._bootstrapping
        ):
            bootstrapped_state = await self._bootstrap(context)
            if bootstrapped_state is not None:
                state = bootstrapped_state

        visible = [
            notification
            for notification in state.unacknowledged()
            if notification.is_visible_to(identity, context.role)
        ]
        return sort_feed(visible)

    def acknowledge(self, context: SessionContext, notification_id: str) -> bool:
        """Mark ``notification_id`` as read, which deletes it from the store."""

        with self._session_factory() as session:
            store = self._store(session, context)
            state = store.load()
            state.acknowledged_ids.add(notification_id)
            store.save(state)
        self._signal.notify()
        return True

    def acknowledge_all(self, context: SessionContext) -> bool:
        """Drop every notification while keeping the bootstrap from running again."""

        with self._session_factory() as session:
            self._store(session, context).save(StoreState(bootstrapped=True))
        self._signal.notify()
        return True

    def reset_identity(self, context: SessionContext) -> None:
        """Forget everything stored for ``context`` so the next login starts fresh."""

        with self._session_factory() as session:
            self._store(session, context).clear()
        logger.info("Notification state reset for %s", context.identity_key)

    def request_manual_refresh(self, context: SessionContext) -> None:
        """Re-arm the bootstrap for the next feed computation and ask for a redraw."""

        with self._session_factory() as session:
            store = self._store(session, context)
            state = store.load()
            state.bootstrapped = False
            store.save(state)
        self._signal.notify()

    async def _bootstrap(self, context: SessionContext) -> StoreState | None:
        identity = context.identity_key
        self._bootstrapping.add(identity)
        try:
            try:
                profile = await self._directory.fetch_vendor_profile(context)
                documents = await self._directory.fetch_vendor_documents(context)
            except _FETCH_ERRORS as exc:
                logger.warning(
                    "Skipping initial notifications for %s: %s", identity, exc
                )
                return None

            for trigger in bootstrap_triggers(profile, documents):
                self._dispatcher.dispatch(context, trigger, ROLE_VENDOR_ADMIN)

            with self._session_factory() as session:
                store = self._store(session, context)
                state = store.load()
                state.bootstrapped = True
                return store.save(state)
        finally:
            self._bootstrapping.discard(identity)

    def _load(self, context: SessionContext) -> StoreState:
        with self._session_factory() as session:
            return self._store(session, context).load()

    def _store(self, session: Session, context: SessionContext) -> NotificationStore:
        return NotificationStore(session, context.identity_key, limit=self._limit)


__all__ = [
    "HIGH_COMPLIANCE_THRESHOLD",
    "LOW_COMPLIANCE_THRESHOLD",
    "NotificationFeed",
    "bootstrap_triggers",
    "sort_feed",
]
