"""
User and session persistence.

Pure data access: no business rules live here. Each call runs in its own
short-lived ``AsyncSession`` and commits before returning, so entities come
back detached (the session factory uses ``expire_on_commit=False``).
Infrastructure errors are not caught.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from crossfire.auth.errors import UserAlreadyExistsError, UserNotFoundError
from crossfire.auth.password import hash_token
from crossfire.db.models import Session, User

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


def _conflicting_field(exc: IntegrityError) -> str:
    """Best-effort name of the unique column behind an IntegrityError."""
    return "username" if "username" in str(exc.orig).lower() else "email"


class AuthStore:
    """Store for the ``users`` and ``sessions`` tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # -----------------------------------------------------------------------
    # Users
    # -----------------------------------------------------------------------

    async def find_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        async with self._session_factory() as db:
            result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
            return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> User | None:
        async with self._session_factory() as db:
            result = await db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str) -> User | None:
        async with self._session_factory() as db:
            return await db.get(User, user_id)

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises:
            UserAlreadyExistsError: If the email or username is taken. The
                pre-checks name the field; a concurrent insert that slips past
                them is caught by the unique constraints.
        """
        if await self.find_by_email(email) is not None:
            raise UserAlreadyExistsError("email")
        if await self.find_by_username(username) is not None:
            raise UserAlreadyExistsError("username")

        now = datetime.now(timezone.utc)
        user = User(
            username=username,
            email=email.lower().strip(),
            password_hash=password_hash,
            email_verified=False,
            is_active=True,
            is_banned=False,
            created_at=now,
            updated_at=now,
        )
        async with self._session_factory() as db:
            db.add(user)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise UserAlreadyExistsError(_conflicting_field(e)) from e
        return user

    async def update_last_login(self, user_id: str) -> datetime:
        """
        Stamp last_login_at with the current time and return it.

        Raises:
            UserNotFoundError: If no row matched.
        """
        now = datetime.now(timezone.utc)
        async with self._session_factory() as db:
            result = await db.execute(
                update(User).where(User.id == user_id).values(last_login_at=now, updated_at=now)
            )
            await db.commit()
        if result.rowcount == 0:
            raise UserNotFoundError
        return now

    async def set_ban(self, user_id: str, reason: str | None, until: datetime | None) -> User:
        """Mark a user as banned. Raises UserNotFoundError if absent."""
        async with self._session_factory() as db:
            user = await db.get(User, user_id)
            if user is None:
                raise UserNotFoundError
            user.is_banned = True
            user.ban_reason = reason
            user.banned_until = until
            user.updated_at = datetime.now(timezone.utc)
            await db.commit()
            return user

    async def clear_ban(self, user_id: str) -> User:
        """Lift a ban. Raises UserNotFoundError if absent."""
        async with self._session_factory() as db:
            user = await db.get(User, user_id)
            if user is None:
                raise UserNotFoundError
            user.is_banned = False
            user.ban_reason = None
            user.banned_until = None
            user.updated_at = datetime.now(timezone.utc)
            await db.commit()
            return user

    # -----------------------------------------------------------------------
    # Sessions
    # -----------------------------------------------------------------------

    async def create_session(
        self,
        user_id: str,
        token: str,
        ip_address: str | None,
        user_agent: str | None,
        expires_at: datetime,
    ) -> Session:
        """Persist a new session. Only the token hash is stored."""
        session = Session(
            user_id=user_id,
            token_hash=hash_token(token),
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=datetime.now(timezone.utc),
            expires_at=expires_at,
        )
        async with self._session_factory() as db:
            db.add(session)
            await db.commit()
        return session

    async def find_session_by_token(self, token: str) -> Session | None:
        async with self._session_factory() as db:
            result = await db.execute(select(Session).where(Session.token_hash == hash_token(token)))
            return result.scalar_one_or_none()

    async def revoke_session(self, session_id: str) -> bool:
        """Revoke one session. Returns False if it was missing or already revoked."""
        async with self._session_factory() as db:
            result = await db.execute(
                update(Session)
                .where(Session.id == session_id)
                .where(Session.revoked_at.is_(None))
                .values(revoked_at=datetime.now(timezone.utc))
            )
            await db.commit()
        return result.rowcount > 0

    async def revoke_all_user_sessions(self, user_id: str) -> int:
        """Revoke every live session of a user. Returns count revoked."""
        async with self._session_factory() as db:
            result = await db.execute(
                update(Session)
                .where(Session.user_id == user_id)
                .where(Session.revoked_at.is_(None))
                .values(revoked_at=datetime.now(timezone.utc))
            )
            await db.commit()
        return result.rowcount  # type: ignore[return-value]
