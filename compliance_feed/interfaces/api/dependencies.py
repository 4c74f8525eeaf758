"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from compliance_feed.application.engine import NotificationEngine
from compliance_feed.domain.entities import ANONYMOUS_SESSION, SessionContext
from compliance_feed.infrastructure.security import decode_session_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def resolve_session_context(token: str | None) -> SessionContext:
    """Return the session described by ``token``; no token means anonymous."""

    if not token:
        return ANONYMOUS_SESSION
    try:
        return decode_session_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_session_context(token: str | None = Depends(oauth2_scheme)) -> SessionContext:
    """Return the identity of the caller for the current request."""

    return resolve_session_context(token)


def get_engine(request: Request) -> NotificationEngine:
    """Return the engine created by the application factory."""

    engine = getattr(request.app.state, "notification_engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification engine is not available",
        )
    return engine
