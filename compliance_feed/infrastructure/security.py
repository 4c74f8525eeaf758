"""Session token helpers."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from compliance_feed.config import get_settings
from compliance_feed.domain.entities import SessionContext

_ALGORITHM = "HS256"


def create_session_token(
    *,
    user_id: str | None = None,
    email: str | None = None,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed token carrying the claims :func:`decode_session_token` reads."""

    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(hours=12))
    claims: dict[str, object] = {"exp": expire}
    if user_id is not None:
        claims["uid"] = str(user_id)
    if email is not None:
        claims["sub"] = email
    if role is not None:
        claims["role"] = role
    return jwt.encode(claims, settings.secret_key, algorithm=_ALGORITHM)


def decode_session_token(token: str) -> SessionContext:
    """Return the session context described by ``token``.

    Raises ``ValueError`` when the token is invalid or expired.
    """

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc

    user_id = payload.get("uid", payload.get("id"))
    return SessionContext(
        user_id=str(user_id) if user_id is not None else None,
        email=payload.get("sub") or payload.get("email"),
        role=payload.get("role"),
        access_token=token,
    )


__all__ = ["create_session_token", "decode_session_token"]
