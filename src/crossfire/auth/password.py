"""
Credential hashing adapter: argon2id password hashing and opaque tokens.

Argon2id is the winner of the Password Hashing Competition and is resistant
to both GPU-based and side-channel attacks. Cost parameters are fixed per
process and come from settings.
"""

from __future__ import annotations

import hashlib
import secrets

import argon2

TOKEN_BYTES = 32  # 256 bits of entropy, 64 hex chars


class PasswordStrengthError(ValueError):
    """Raised when a password does not meet strength requirements."""


class PasswordHasher:
    """Wraps argon2id hashing and secure token generation."""

    def __init__(self, time_cost: int = 2, memory_cost: int = 65536, parallelism: int = 1) -> None:
        self._hasher = argon2.PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
            type=argon2.Type.ID,  # argon2id
        )

    def hash_password(self, password: str) -> str:
        """Hash a password using argon2id. Returns the full encoded hash string."""
        return self._hasher.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        """
        Verify a password against its argon2id hash.

        Returns True if the password matches. Never raises on mismatch.
        """
        try:
            return self._hasher.verify(password_hash, password)
        except argon2.exceptions.VerifyMismatchError:
            return False
        except argon2.exceptions.InvalidHashError:
            return False

    def check_needs_rehash(self, password_hash: str) -> bool:
        """Check if the hash was produced with different cost parameters."""
        return self._hasher.check_needs_rehash(password_hash)

    @staticmethod
    def generate_token() -> str:
        """Cryptographically secure opaque token, lowercase hex."""
        return secrets.token_hex(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 digest of a bearer token, as stored in the sessions table."""
    return hashlib.sha256(token.encode()).hexdigest()


def validate_password_strength(password: str) -> None:
    """
    Validate password meets minimum strength requirements.

    Raises PasswordStrengthError if the password is too weak.

    Requirements:
    - Minimum 8 characters
    - Maximum 128 characters (prevent DoS via huge passwords)
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one character that is not a letter or digit
    """
    if not password or not password.strip():
        msg = "Password cannot be empty"
        raise PasswordStrengthError(msg)
    if len(password) < 8:
        msg = "Password must be at least 8 characters"
        raise PasswordStrengthError(msg)
    if len(password) > 128:
        msg = "Password must not exceed 128 characters"
        raise PasswordStrengthError(msg)
    if not any(c.isupper() for c in password):
        msg = "Password must contain at least one uppercase letter"
        raise PasswordStrengthError(msg)
    if not any(c.islower() for c in password):
        msg = "Password must contain at least one lowercase letter"
        raise PasswordStrengthError(msg)
    if not any(c.isdigit() for c in password):
        msg = "Password must contain at least one digit"
        raise PasswordStrengthError(msg)
    if all(c.isalnum() for c in password):
        msg = "Password must contain at least one special character"
        raise PasswordStrengthError(msg)
