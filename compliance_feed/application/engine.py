"""Facade wiring the notification components together."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any

from compliance_feed.application.use_cases.notifications import (
    DocumentStatusDetector,
    NotificationFeed,
    PollingState,
    TriggerDispatcher,
)
from compliance_feed.application.use_cases.notifications.dispatcher import SessionFactory
from compliance_feed.config import Settings, get_settings
from compliance_feed.domain.entities import (
    ActionKind,
    DocumentStatus,
    Notification,
    SessionContext,
    Trigger,
)
from compliance_feed.infrastructure.notifications import RefreshListener, RefreshSignal
from compliance_feed.infrastructure.vendor_client import VendorApiClient, VendorDirectory
from compliance_feed.utils import now_in_app_timezone


class NotificationEngine:
    """Entry point used by the presentation layer.

    One engine serves one device; the active identity is passed in on every
    call.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        directory: VendorDirectory | None = None,
        signal: RefreshSignal | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        settings = settings or get_settings()
        self.signal = signal or RefreshSignal()
        self.directory = directory or VendorApiClient()
        self.dispatcher = TriggerDispatcher(
            session_factory,
            self.signal,
            limit=settings.notification_limit,
            clock=clock,
        )
        self.detector = DocumentStatusDetector(
            self.directory,
            self.dispatcher,
            interval_seconds=settings.status_poll_interval_seconds,
        )
        self.feed = NotificationFeed(
            session_factory,
            self.signal,
            self.dispatcher,
            self.directory,
            limit=settings.notification_limit,
        )

    async def compute_feed(self, context: SessionContext) -> list[Notification]:
        return await self.feed.compute_feed(context)

    def acknowledge(self, context: SessionContext, notification_id: str) -> bool:
        return self.feed.acknowledge(context, notification_id)

    def acknowledge_all(self, context: SessionContext) -> bool:
        return self.feed.acknowledge_all(context)

    def request_manual_refresh(self, context: SessionContext) -> None:
        self.feed.request_manual_refresh(context)

    def reset_identity(self, context: SessionContext) -> None:
        """Logout: stop polling on behalf of the leaving user and wipe their state."""

        self.detector.stop()
        self.feed.reset_identity(context)

    def register_refresh_listener(self, listener: RefreshListener) -> None:
        self.signal.register(listener)

    def start_polling(
        self,
        context: SessionContext,
        baseline: Sequence[DocumentStatus] | None = None,
    ) -> bool:
        return self.detector.start_polling(context, baseline)

    @property
    def polling_state(self) -> PollingState:
        return self.detector.state

    def dispatch(
        self,
        context: SessionContext,
        trigger: Trigger,
        target_role: str | None = None,
    ) -> Notification | None:
        return self.dispatcher.dispatch(context, trigger, target_role)

    def dispatch_action(
        self,
        context: SessionContext,
        action_kind: str | ActionKind,
        payload: Mapping[str, Any] | None = None,
        target_role: str | None = None,
    ) -> Notification | None:
        return self.dispatcher.dispatch_action(context, action_kind, payload, target_role)


__all__ = ["NotificationEngine"]
