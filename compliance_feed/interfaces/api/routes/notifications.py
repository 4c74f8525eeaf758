"""Endpoints and websocket handler for the notification feed."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from compliance_feed.application.engine import NotificationEngine
from compliance_feed.domain.entities import SessionContext
from compliance_feed.infrastructure.notifications import WebSocketRefreshPublisher
from compliance_feed.interfaces.api.dependencies import (
    get_engine,
    get_session_context,
    resolve_session_context,
)
from compliance_feed.interfaces.api.schemas import (
    AcknowledgementResult,
    NotificationRead,
    NotificationTriggerRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationRead])
async def list_notifications(
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> list[NotificationRead]:
    """Return the ordered, unacknowledged feed of the caller."""

    notifications = await engine.compute_feed(context)
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.post("/read-all", response_model=AcknowledgementResult)
async def acknowledge_all_notifications(
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> AcknowledgementResult:
    return AcknowledgementResult(success=engine.acknowledge_all(context))


@router.post("/refresh", status_code=202)
async def refresh_notifications(
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> dict[str, str]:
    """Re-run the initial compliance notifications on the next feed read."""

    engine.request_manual_refresh(context)
    return {"status": "scheduled"}


@router.post("/triggers", response_model=NotificationRead | None)
async def trigger_notification(
    request: NotificationTriggerRequest,
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> NotificationRead | None:
    """Report a domain action; returns ``null`` when it yields no notification."""

    notification = engine.dispatch_action(
        context, request.action, request.payload, request.target_role
    )
    if notification is None:
        return None
    return NotificationRead.from_entity(notification)


@router.post("/{notification_id}/read", response_model=AcknowledgementResult)
async def acknowledge_notification(
    notification_id: str,
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> AcknowledgementResult:
    return AcknowledgementResult(success=engine.acknowledge(context, notification_id))


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket that becomes the single refresh listener of the engine."""

    engine: NotificationEngine | None = getattr(
        websocket.app.state, "notification_engine", None
    )
    if engine is None:
        await websocket.close(code=1011)
        return

    try:
        context = resolve_session_context(websocket.query_params.get("token"))
    except HTTPException:
        await websocket.close(code=1008)
        return

    await websocket.accept()
    publisher = WebSocketRefreshPublisher(websocket)
    engine.register_refresh_listener(publisher)
    try:
        feed = await engine.compute_feed(context)
        await websocket.send_json(
            {
                "type": "init",
                "data": [
                    NotificationRead.from_entity(notification).model_dump(mode="json")
                    for notification in feed
                ],
            }
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list):
                    for notification_id in ids:
                        if isinstance(notification_id, str) and notification_id:
                            engine.acknowledge(context, notification_id)
                continue
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for %s", context.identity_key)
    finally:
        engine.signal.unregister(publisher)
