"""FastAPI authentication dependencies."""

from __future__ import annotations

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from crossfire.auth.errors import UnauthorizedError
from crossfire.auth.service import AuthService, SessionContext
from crossfire.db.models import User
from crossfire.dependencies import get_auth_service

_bearer = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> str:
    """Raw token from ``Authorization: Bearer <token>``; 401 when absent."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")
    return credentials.credentials


async def get_session_context(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> SessionContext:
    """Validate the bearer token. Every protected route goes through here."""
    return await auth.validate_session(token)


async def get_current_user(
    context: SessionContext = Depends(get_session_context),
) -> User:
    return context.user
