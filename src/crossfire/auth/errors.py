"""Authentication domain errors.

Every error carries a stable ``code`` tag. The HTTP layer maps each concrete
type to a status code (see ``crossfire.middleware.error_handler``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


class AuthError(Exception):
    """Base class for authentication failures."""

    code: str = "auth_error"
    message: str = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable body for API responses."""
        return {"detail": self.message, "code": self.code}


class InvalidCredentialsError(AuthError):
    """Unknown email, wrong password, or (by default) a registration conflict."""

    code = "invalid_credentials"
    message = "Invalid email or password"


class UserAlreadyExistsError(AuthError):
    """Email or username is already registered."""

    code = "user_already_exists"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} already registered")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "field": self.field}


class UserNotFoundError(AuthError):
    code = "user_not_found"
    message = "User not found"


class UnauthorizedError(AuthError):
    """Token unknown, revoked, expired, or owned by a banned user."""

    code = "unauthorized"
    message = "Unauthorized"


class UserBannedError(AuthError):
    """Correct credentials for an account that is currently banned."""

    code = "user_banned"
    message = "Account banned"

    def __init__(self, reason: str | None = None, until: datetime | None = None) -> None:
        self.reason = reason
        self.until = until
        super().__init__()

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "reason": self.reason,
            "until": self.until.isoformat() if self.until else None,
        }
