from __future__ import annotations

from contextvars import ContextVar
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from src.medinote_mock.api.deps import get_user_service
from src.medinote_mock.config import settings
from src.medinote_mock.domain.models.user import User
from src.medinote_mock.errors import AuthError
from src.medinote_mock.services.users.service import UserService

# Read the raw header so any scheme word ("Bearer", "Token", ...) is accepted;
# only the second space-separated part is inspected.
_authorization_header = APIKeyHeader(name="Authorization", auto_error=False)

# Tokens issued by the demo login flow start with "demo_"; anything that looks
# like a JWT ("eyJ" is base64 for '{"') is accepted as well. Signatures and
# expiry are never checked.
ACCEPTED_TOKEN_PREFIXES = ("demo_", "eyJ")

# Identifier of the caller for the in-flight request, used by the audit log.
_current_subject: ContextVar[Optional[str]] = ContextVar("current_subject", default=None)


def get_current_subject() -> Optional[str]:
    """Return the current subject identifier, if any.

    Set by :func:`get_current_user` on authenticated routes; ``None`` on
    public routes and outside of requests.
    """

    return _current_subject.get()


def extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


async def require_token(authorization: Optional[str] = Security(_authorization_header)) -> str:
    """FastAPI dependency enforcing the mock token format."""

    token = extract_token(authorization)
    if token is None:
        raise AuthError("Access token required")
    if not token.startswith(ACCEPTED_TOKEN_PREFIXES):
        raise AuthError("Invalid token format")
    return token


async def get_current_user(
    token: str = Depends(require_token),
    users: UserService = Depends(get_user_service),
) -> User:
    """Resolve the caller. Every valid token maps to the same demo user."""

    user = users.get_user(settings.demo_user_id)
    if user is None:
        # Store was built without fixtures; synthesize the demo identity.
        user = User(id=settings.demo_user_id, email="demo@example.com", name="Demo User")

    _current_subject.set(f"user:{user.id}")
    return user
