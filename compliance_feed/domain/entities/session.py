"""Domain entity describing the identity of the active session."""

from __future__ import annotations

from dataclasses import dataclass

ANONYMOUS_IDENTITY = "anonymous"

ROLE_VENDOR_ADMIN = "VENDOR_ADMIN"
ROLE_BUYER_ADMIN = "BUYER_ADMIN"
ROLE_SYSTEM_ADMIN = "SYSTEM_ADMIN"

DOCUMENT_OWNER_ROLES = frozenset({ROLE_VENDOR_ADMIN, ROLE_SYSTEM_ADMIN})


@dataclass(frozen=True)
class SessionContext:
    """Who is logged in on this device.

    The context is handed to every notification operation explicitly, so a
    session switch takes effect on the very next call.
    """

    user_id: str | None = None
    email: str | None = None
    role: str | None = None
    access_token: str | None = None

    @property
    def identity_key(self) -> str:
        """Return the stable key namespacing every persisted partition."""

        return resolve_identity_key(self)

    def owns_documents(self) -> bool:
        """Return ``True`` for roles that upload compliance documents."""

        return self.role in DOCUMENT_OWNER_ROLES


def resolve_identity_key(context: SessionContext | None) -> str:
    """Return the user id, else the email, else ``"anonymous"``."""

    if context is None:
        return ANONYMOUS_IDENTITY
    for candidate in (context.user_id, context.email):
        if candidate is not None and str(candidate).strip():
            return str(candidate).strip()
    return ANONYMOUS_IDENTITY


ANONYMOUS_SESSION = SessionContext()


__all__ = [
    "ANONYMOUS_IDENTITY",
    "ANONYMOUS_SESSION",
    "DOCUMENT_OWNER_ROLES",
    "ROLE_BUYER_ADMIN",
    "ROLE_SYSTEM_ADMIN",
    "ROLE_VENDOR_ADMIN",
    "SessionContext",
    "resolve_identity_key",
]
