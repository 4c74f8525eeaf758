"""Endpoints controlling the document status polling phase."""

from fastapi import APIRouter, Body, Depends, status

from compliance_feed.application.engine import NotificationEngine
from compliance_feed.domain.entities import SessionContext
from compliance_feed.interfaces.api.dependencies import get_engine, get_session_context
from compliance_feed.interfaces.api.schemas import PollingStartRequest, PollingStatusRead

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post(
    "/status-polling",
    response_model=PollingStatusRead,
    status_code=status.HTTP_202_ACCEPTED,
)
async def start_status_polling(
    request: PollingStartRequest | None = Body(default=None),
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> PollingStatusRead:
    """Enter the polling phase after a document mutation."""

    baseline = None
    if request is not None and request.baseline is not None:
        baseline = [entry.to_entity() for entry in request.baseline]
    started = engine.start_polling(context, baseline)
    return PollingStatusRead(state=engine.polling_state.value, started=started)


@router.get("/status-polling", response_model=PollingStatusRead)
async def get_status_polling(
    engine: NotificationEngine = Depends(get_engine),
) -> PollingStatusRead:
    return PollingStatusRead(state=engine.polling_state.value)
