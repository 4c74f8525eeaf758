"""Shared fixtures for the notification engine tests."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

import pytest

from compliance_feed.application.use_cases.notifications import (
    NotificationFeed,
    TriggerDispatcher,
)
from compliance_feed.domain.entities import (
    ROLE_BUYER_ADMIN,
    ROLE_VENDOR_ADMIN,
    SessionContext,
    UploadedDocument,
    VendorDocument,
    VendorProfile,
)
from compliance_feed.infrastructure.database import (
    build_engine,
    build_session_factory,
    initialize_database,
)
from compliance_feed.infrastructure.notifications import RefreshSignal
from compliance_feed.infrastructure.repositories import NotificationStore
from compliance_feed.infrastructure.vendor_client import VendorServiceError

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock advancing one second on every reading."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


class FakeVendorDirectory:
    """In-memory vendor API returning scripted snapshots."""

    def __init__(
        self,
        *,
        score: float = 70.0,
        documents: Iterable[VendorDocument] = (),
    ) -> None:
        self.profile = VendorProfile(overall_compliance_score=score)
        self.snapshots: list[list[VendorDocument]] = [list(documents)]
        self.fail = False
        self.profile_calls = 0
        self.document_calls = 0

    def queue(self, *snapshots: Iterable[VendorDocument]) -> None:
        """Serve ``snapshots`` on the following fetches, repeating the last one."""

        self.snapshots.extend(list(snapshot) for snapshot in snapshots)

    async def fetch_vendor_profile(self, context: SessionContext) -> VendorProfile:
        self.profile_calls += 1
        if self.fail:
            raise VendorServiceError("vendor API unavailable")
        return self.profile

    async def fetch_vendor_documents(self, context: SessionContext) -> list[VendorDocument]:
        self.document_calls += 1
        if self.fail:
            raise VendorServiceError("vendor API unavailable")
        if len(self.snapshots) > 1:
            return self.snapshots.pop(0)
        return list(self.snapshots[0])


class CountingListener:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def vendor_document(document_id: str, name: str, *statuses: str) -> VendorDocument:
    """Build a document whose uploads carry ``statuses`` (most recent first)."""

    uploads = tuple(
        UploadedDocument(
            verification_status=status,
            uploaded_at=BASE_TIME - timedelta(days=index),
        )
        for index, status in enumerate(statuses)
    )
    return VendorDocument(id=document_id, name=name, uploaded_documents=uploads)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    initialize_database(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def signal() -> RefreshSignal:
    return RefreshSignal()


@pytest.fixture
def listener(signal: RefreshSignal) -> CountingListener:
    counting = CountingListener()
    signal.register(counting)
    return counting


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def directory() -> FakeVendorDirectory:
    return FakeVendorDirectory()


@pytest.fixture
def dispatcher(session_factory, signal, clock) -> TriggerDispatcher:
    return TriggerDispatcher(session_factory, signal, clock=clock)


@pytest.fixture
def feed(session_factory, signal, dispatcher, directory) -> NotificationFeed:
    return NotificationFeed(session_factory, signal, dispatcher, directory)


@pytest.fixture
def vendor() -> SessionContext:
    return SessionContext(user_id="v-1", email="vendor@x", role=ROLE_VENDOR_ADMIN)


@pytest.fixture
def buyer() -> SessionContext:
    return SessionContext(user_id="b-1", email="buyer@y", role=ROLE_BUYER_ADMIN)


@pytest.fixture
def load_state(session_factory):
    """Return a helper reading the persisted state of a session."""

    def _load(context: SessionContext):
        with session_factory() as session:
            return NotificationStore(session, context.identity_key).load()

    return _load
