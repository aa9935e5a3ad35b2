"""Authentication router: all /api/auth/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from crossfire.auth.dependencies import get_bearer_token, get_session_context
from crossfire.auth.schemas import (
    AuthResponse,
    LoginRequest,
    LogoutAllResponse,
    MessageResponse,
    RegisterRequest,
    SessionInfoResponse,
    SessionResponse,
    UserResponse,
)
from crossfire.auth.service import AuthResult, AuthService, SessionContext
from crossfire.db.models import User
from crossfire.dependencies import get_auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _user_response(user: User) -> UserResponse:
    """Build a UserResponse from a User model."""
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        email_verified=user.email_verified,
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=_user_response(result.user),
        token=result.token,
        expires_at=result.session.expires_at,
    )


def _client_info(request: Request) -> tuple[str | None, str | None]:
    """Client IP and User-Agent recorded on new sessions."""
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create an account and return its first session token."""
    ip_address, user_agent = _client_info(request)
    result = await auth.register(
        body.username,
        body.email,
        body.password,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    ip_address, user_agent = _client_info(request)
    result = await auth.login(body.email, body.password, ip_address=ip_address, user_agent=user_agent)
    return _auth_response(result)


@router.get("/session", response_model=SessionInfoResponse)
async def current_session(
    context: SessionContext = Depends(get_session_context),
) -> SessionInfoResponse:
    """The authenticated user and the session behind the bearer token."""
    return SessionInfoResponse(
        user=_user_response(context.user),
        session=SessionResponse.model_validate(context.session),
    )


@router.post("/refresh", response_model=AuthResponse)
async def refresh(
    request: Request,
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Rotate the session. The presented token stops working immediately."""
    ip_address, user_agent = _client_info(request)
    result = await auth.refresh_session(token, ip_address=ip_address, user_agent=user_agent)
    return _auth_response(result)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the presented session. Unknown tokens succeed silently."""
    await auth.logout(token)
    return MessageResponse(message="Logged out")


@router.post("/logout-all", response_model=LogoutAllResponse)
async def logout_all(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> LogoutAllResponse:
    """Revoke every session of the authenticated user."""
    count = await auth.logout_all(token)
    return LogoutAllResponse(message="All sessions revoked", revoked_count=count)
