"""
Authentication business logic.

Handles registration, login, session validation, rotation, revocation and
bans. Sessions are opaque bearer tokens valid for a fixed seven days; they
end either by explicit revocation or by passing their expiry, and never
become active again.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import structlog

from crossfire.auth.errors import (
    InvalidCredentialsError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserBannedError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from crossfire.auth.password import PasswordHasher
    from crossfire.auth.store import AuthStore
    from crossfire.db.models import Session, User

logger = structlog.get_logger()

SESSION_TTL = timedelta(days=7)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of register, login and refresh."""

    user: User
    session: Session
    token: str


@dataclass(frozen=True)
class SessionContext:
    """An authenticated user and the session that proved it."""

    user: User
    session: Session


class AuthService:
    """Orchestrates the auth store and the credential hashing adapter."""

    def __init__(self, store: AuthStore, hasher: PasswordHasher, reveal_register_conflict: bool = False) -> None:
        self._store = store
        self._hasher = hasher
        self._reveal_register_conflict = reveal_register_conflict

    async def _issue_session(
        self,
        user: User,
        ip_address: str | None,
        user_agent: str | None,
    ) -> AuthResult:
        """Generate a token and persist a fresh session for it."""
        token = self._hasher.generate_token()
        expires_at = datetime.now(timezone.utc) + SESSION_TTL
        session = await self._store.create_session(user.id, token, ip_address, user_agent, expires_at)
        return AuthResult(user=user, session=session, token=token)

    # -----------------------------------------------------------------------
    # Registration / login
    # -----------------------------------------------------------------------

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        """
        Create an account and open its first session.

        Raises:
            InvalidCredentialsError: If the email or username is taken (default).
            UserAlreadyExistsError: Instead of the above when the service was
                built with ``reveal_register_conflict=True``.
        """
        password_hash = await asyncio.to_thread(self._hasher.hash_password, password)
        try:
            user = await self._store.create(username, email, password_hash)
        except UserAlreadyExistsError as e:
            logger.info("registration_conflict", field=e.field)
            if self._reveal_register_conflict:
                raise
            raise InvalidCredentialsError from e

        result = await self._issue_session(user, ip_address, user_agent)
        logger.info("user_registered", user_id=user.id, session_id=result.session.id)
        return result

    async def login(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        """
        Authenticate with email + password.

        Unknown email and wrong password raise the same error. The ban check
        runs only after the password matched.

        Raises:
            InvalidCredentialsError: If credentials are invalid.
            UserBannedError: If the account is banned.
        """
        user = await self._store.find_by_email(email)
        if user is None:
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        if not await asyncio.to_thread(self._hasher.verify_password, password, user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentialsError

        if user.ban_in_effect():
            logger.info("login_rejected_banned", user_id=user.id)
            raise UserBannedError(reason=user.ban_reason, until=user.banned_until)

        result = await self._issue_session(user, ip_address, user_agent)
        try:
            user.last_login_at = await self._store.update_last_login(user.id)
        except UserNotFoundError as e:
            # The row was read a moment ago; losing it here is a broken invariant.
            msg = f"user {user.id} vanished during login"
            raise RuntimeError(msg) from e

        logger.info("user_logged_in", user_id=user.id, session_id=result.session.id)
        return result

    # -----------------------------------------------------------------------
    # Sessions
    # -----------------------------------------------------------------------

    async def logout(self, token: str) -> None:
        """Revoke the session behind ``token``. Unknown tokens are a no-op."""
        session = await self._store.find_session_by_token(token)
        if session is None:
            return
        await self._store.revoke_session(session.id)
        logger.info("session_revoked", session_id=session.id, user_id=session.user_id)

    async def validate_session(self, token: str) -> SessionContext:
        """
        Resolve a bearer token to its user and session.

        Raises:
            UnauthorizedError: If the token is unknown, revoked, expired, or
                its owner is missing or banned.
        """
        session = await self._store.find_session_by_token(token)
        if session is None:
            raise UnauthorizedError

        if not session.is_active():
            raise UnauthorizedError

        user = await self._store.find_by_id(session.user_id)
        if user is None or user.ban_in_effect():
            raise UnauthorizedError

        return SessionContext(user=user, session=session)

    async def refresh_session(
        self,
        token: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        """
        Rotate: revoke the presented session and issue a new one.

        Raises:
            UnauthorizedError: If the token is not valid, or a concurrent
                refresh or logout revoked it first.
        """
        context = await self.validate_session(token)
        if not await self._store.revoke_session(context.session.id):
            raise UnauthorizedError
        result = await self._issue_session(context.user, ip_address, user_agent)
        logger.info(
            "session_refreshed",
            user_id=context.user.id,
            old_session_id=context.session.id,
            new_session_id=result.session.id,
        )
        return result

    async def logout_all(self, token: str) -> int:
        """Revoke every session of the token's owner. Returns count revoked."""
        context = await self.validate_session(token)
        count = await self._store.revoke_all_user_sessions(context.user.id)
        logger.info("all_sessions_revoked", user_id=context.user.id, count=count)
        return count

    # -----------------------------------------------------------------------
    # Users
    # -----------------------------------------------------------------------

    async def get_user_by_id(self, user_id: str) -> User:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError
        return user

    async def ban_user(self, user_id: str, reason: str | None = None, until: datetime | None = None) -> User:
        """Ban a user and revoke all of their sessions."""
        user = await self._store.set_ban(user_id, reason, until)
        count = await self._store.revoke_all_user_sessions(user_id)
        logger.info("user_banned", user_id=user_id, until=until.isoformat() if until else None, revoked=count)
        return user

    async def unban_user(self, user_id: str) -> User:
        user = await self._store.clear_ban(user_id)
        logger.info("user_unbanned", user_id=user_id)
        return user
