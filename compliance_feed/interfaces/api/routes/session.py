"""Session lifecycle endpoints relevant to notification state."""

from fastapi import APIRouter, Depends, status

from compliance_feed.application.engine import NotificationEngine
from compliance_feed.domain.entities import SessionContext
from compliance_feed.interfaces.api.dependencies import get_engine, get_session_context

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    engine: NotificationEngine = Depends(get_engine),
    context: SessionContext = Depends(get_session_context),
) -> None:
    """Wipe the caller's notification state so the next login starts fresh."""

    engine.reset_identity(context)
