"""Detect remote verification outcomes by polling the vendor documents.

The detector is a two-state machine. ``start_polling`` moves it from IDLE to
POLLING and owns a single asyncio task; every tick compares the freshly
fetched snapshot with the previous one and reports transitions into a
terminal status through the dispatcher. Polling stops on its own once no
document is left pending, or as soon as a fetch fails.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from enum import Enum

import httpx

from compliance_feed.domain.entities import (
    ROLE_VENDOR_ADMIN,
    VERIFICATION_STATUS_REJECTED,
    VERIFICATION_STATUS_VERIFIED,
    DocumentRejected,
    DocumentStatus,
    DocumentVerified,
    SessionContext,
    StatusTransition,
    build_snapshot,
)
from compliance_feed.infrastructure.vendor_client import (
    VendorDirectory,
    VendorServiceError,
)

from .dispatcher import TriggerDispatcher

logger = logging.getLogger(__name__)

_FETCH_ERRORS = (VendorServiceError, httpx.HTTPError)


class PollingState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"


def diff_snapshots(
    previous: Sequence[DocumentStatus], current: Sequence[DocumentStatus]
) -> list[StatusTransition]:
    """Return the status changes of documents present in both snapshots."""

    previous_by_id = {entry.document_id: entry for entry in previous}
    transitions: list[StatusTransition] = []
    for entry in current:
        before = previous_by_id.get(entry.document_id)
        if before is None:
            continue
        if before.verification_status == entry.verification_status:
            continue
        transitions.append(
            StatusTransition(
                document_id=entry.document_id,
                name=entry.name or before.name,
                previous_status=before.verification_status,
                new_status=entry.verification_status,
            )
        )
    return transitions


def has_pending_documents(snapshot: Sequence[DocumentStatus]) -> bool:
    return any(entry.is_pending for entry in snapshot)


class DocumentStatusDetector:
    """Poll the vendor documents while any of them awaits verification."""

    def __init__(
        self,
        directory: VendorDirectory,
        dispatcher: TriggerDispatcher,
        *,
        interval_seconds: float = 5.0,
        target_role: str = ROLE_VENDOR_ADMIN,
    ) -> None:
        self._directory = directory
        self._dispatcher = dispatcher
        self._interval = interval_seconds
        self._target_role = target_role
        self._state = PollingState.IDLE
        self._context: SessionContext | None = None
        self._snapshot: list[DocumentStatus] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> PollingState:
        return self._state

    @property
    def is_polling(self) -> bool:
        return self._state is PollingState.POLLING

    @property
    def snapshot(self) -> list[DocumentStatus] | None:
        return list(self._snapshot) if self._snapshot is not None else None

    def start_polling(
        self,
        context: SessionContext,
        baseline: Sequence[DocumentStatus] | None = None,
    ) -> bool:
        """Enter the polling phase for ``context``.

        Returns ``False`` when a phase is already running; no second loop is
        started in that case. Without ``baseline`` the first snapshot is
        fetched before the first interval elapses.
        """

        if self.is_polling:
            logger.debug("Status polling already active; ignoring start request")
            return False

        self._state = PollingState.POLLING
        self._context = context
        self._snapshot = list(baseline) if baseline is not None else None
        logger.info("Document status polling started for %s", context.identity_key)
        self._task = self._start_loop()
        return True

    async def tick(self) -> list[StatusTransition]:
        """Run one polling iteration and return the detected transitions."""

        context = self._context
        if not self.is_polling or context is None:
            return []

        current = await self._fetch_snapshot(context)
        if current is None or self._context is not context:
            return []

        if self._snapshot is None:
            transitions: list[StatusTransition] = []
        else:
            transitions = diff_snapshots(self._snapshot, current)
            for transition in transitions:
                self._report(context, transition)

        if has_pending_documents(current):
            self._snapshot = current
        else:
            self._enter_idle("no document awaits verification")
        return transitions

    def stop(self) -> None:
        """Leave the polling phase and cancel the background task."""

        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
        if self.is_polling:
            self._enter_idle("stopped")

    async def _run(self) -> None:
        try:
            context = self._context
            if self._snapshot is None and context is not None:
                baseline = await self._fetch_snapshot(context)
                if baseline is None or self._context is not context:
                    return
                self._snapshot = baseline
            while self.is_polling:
                await asyncio.sleep(self._interval)
                await self.tick()
        except Exception:
            logger.exception("Document status polling failed")
            if self._task is asyncio.current_task():
                self._enter_idle("poll failed")
        finally:
            if self._task is asyncio.current_task():
                self._task = None

    def _start_loop(self) -> asyncio.Task[None] | None:
        return asyncio.get_running_loop().create_task(self._run())

    async def _fetch_snapshot(
        self, context: SessionContext
    ) -> list[DocumentStatus] | None:
        try:
            documents = await self._directory.fetch_vendor_documents(context)
        except _FETCH_ERRORS as exc:
            logger.warning("Document status poll failed: %s", exc)
            self._enter_idle("fetch failed")
            return None
        return build_snapshot(documents)

    def _report(self, context: SessionContext, transition: StatusTransition) -> None:
        logger.info(
            "Document %s changed from %s to %s",
            transition.document_id,
            transition.previous_status,
            transition.new_status,
        )
        if transition.new_status == VERIFICATION_STATUS_VERIFIED:
            trigger = DocumentVerified(document_name=transition.name)
        elif transition.new_status == VERIFICATION_STATUS_REJECTED:
            trigger = DocumentRejected(document_name=transition.name)
        else:
            return
        self._dispatcher.dispatch(context, trigger, self._target_role)

    def _enter_idle(self, reason: str) -> None:
        if self._state is PollingState.IDLE:
            return
        self._state = PollingState.IDLE
        self._snapshot = None
        self._context = None
        logger.info("Document status polling stopped: %s", reason)


__all__ = [
    "DocumentStatusDetector",
    "PollingState",
    "diff_snapshots",
    "has_pending_documents",
]
